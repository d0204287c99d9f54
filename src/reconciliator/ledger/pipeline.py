#!/usr/bin/env python3
"""
Account Reconciliation Pipeline

Fetches one account's transactions and replays them against its expected
balances. Accounts are independent: each call builds its own replay state.
"""

import logging
from typing import Protocol

import click

from ..core.config import AccountConfig
from ..firefly.models import FireflyTransaction
from .replay import ReplayResult, replay
from .resolver import ReconciliationResolver

logger = logging.getLogger(__name__)


class TransactionStore(Protocol):
    """Interface for loading an account's ordered transactions."""

    def fetch_transactions(self, account_id: int) -> list[FireflyTransaction]:
        """Return transactions sorted by date; raise FetchError on failure."""
        ...


def reconcile_account(
    store: TransactionStore,
    account: AccountConfig,
    resolver: ReconciliationResolver,
) -> ReplayResult:
    """
    Reconcile a single account.

    Raises:
        FetchError: If transactions cannot be loaded
        EmptyInputError: If the account has no transactions
        RemoteMutationError: If a correction is rejected
    """
    click.echo(f"Requesting transactions for account: {account.name} ({account.firefly_id})")
    transactions = store.fetch_transactions(account.firefly_id)

    result = replay(account.firefly_id, transactions, account.data, resolver)

    logger.info(
        f"Replayed {len(transactions)} transactions for {account.name}, "
        f"{len(result.corrections)} corrections"
    )
    return result
