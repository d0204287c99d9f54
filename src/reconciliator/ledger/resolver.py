#!/usr/bin/env python3
"""
Reconciliation Resolver

Decides how to bring a month's closing balance to its expected value and
issues the matching Firefly mutation.

Firefly's own "reconciliation" transaction type can only represent a debit,
so corrections are stored as ordinary deposits and withdrawals against a
clearing account. Their descriptions start with ``Reconciliation`` so a later
run can find and re-target them instead of stacking a second correction on
top.

Three outcomes are possible for a month that does not balance:

- No prior correction: create one for the difference.
- Prior correction of the same direction: update its amount in place.
- Prior correction of the opposite direction: Firefly cannot change the type
  of an existing split, so the prior correction is deleted and a new one is
  created. These are two separate requests. If the delete succeeds and the
  create fails, the month is left without any correction until the next run.

A prior correction whose new value is exactly zero is deleted and not
replaced, since Firefly rejects transactions with a zero amount.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Protocol

import click

from ..core.currency import cents_to_dollars_str
from ..firefly.models import (
    RECONCILIATION_PREFIX,
    FireflyTransaction,
    TransactionCreate,
    TransactionType,
    TransactionUpdate,
)

logger = logging.getLogger(__name__)

# Corrections are dated in a fixed UTC+2 offset.
CORRECTION_TIMEZONE = timezone(timedelta(hours=2))


class MutationAdapter(Protocol):
    """Interface for issuing correcting transactions."""

    def create_transaction(self, request: TransactionCreate) -> None:
        """Create a transaction; raise RemoteMutationError on failure."""
        ...

    def update_transaction(self, transaction_id: int, request: TransactionUpdate) -> None:
        """Update a transaction; raise RemoteMutationError on failure."""
        ...

    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction; raise RemoteMutationError on failure."""
        ...


def correction_kind(
    value_cents: int, account_id: int, clearing_account_id: int
) -> tuple[TransactionType, int, int]:
    """
    Map a signed correction value to a transaction type and direction.

    Args:
        value_cents: Amount to add to the account to reach the target
        account_id: Account being reconciled
        clearing_account_id: Counter account for corrections

    Returns:
        Tuple of (transaction type, source account id, destination account id)
    """
    if value_cents < 0:
        return TransactionType.WITHDRAWAL, account_id, clearing_account_id
    return TransactionType.DEPOSIT, clearing_account_id, account_id


def end_of_month(year: int, month: int) -> datetime:
    """Get the last instant (23:59:59.999) of a month in the correction timezone."""
    next_year, next_month = (year + 1, 1) if month == 12 else (year, month + 1)
    first_of_next = datetime(next_year, next_month, 1, 23, 59, 59, 999000, tzinfo=CORRECTION_TIMEZONE)
    return first_of_next - timedelta(days=1)


def correction_description(year: int, month: int) -> str:
    """Get the description for the correction of a month."""
    return f"{RECONCILIATION_PREFIX} {year}-{month:02d}"


class ReconciliationResolver:
    """
    Computes and applies the correction for a month that does not balance.

    All mutations go through the given adapter; its errors propagate
    unchanged and abort the current account.
    """

    def __init__(self, mutations: MutationAdapter, clearing_account_id: int = 1):
        """
        Initialize the resolver.

        Args:
            mutations: Adapter used to create, update and delete transactions
            clearing_account_id: Counter account for all corrections
        """
        self.mutations = mutations
        self.clearing_account_id = clearing_account_id

    def resolve(
        self,
        account_id: int,
        year: int,
        month: int,
        prior: FireflyTransaction | None,
        expected_cents: int,
        running_cents: int,
    ) -> int:
        """
        Correct the closing balance of a month.

        Args:
            account_id: Account being reconciled
            year: Year of the month being closed
            month: Month being closed
            prior: Last correction already present in that month, if any
            expected_cents: Expected closing balance
            running_cents: Closing balance as replayed

        Returns:
            The adjusted closing balance, always equal to ``expected_cents``

        Raises:
            RemoteMutationError: If any mutation is rejected
        """
        diff = expected_cents - running_cents
        adjusted = running_cents + diff

        if prior is not None:
            target = prior.correction_cents + diff
            kind, _, _ = correction_kind(target, account_id, self.clearing_account_id)

            if target != 0 and kind == prior.transaction_type:
                click.echo(
                    f"Updating reconciliation {prior.id} by {cents_to_dollars_str(diff)} "
                    f"to {cents_to_dollars_str(target)}, "
                    f"balance from {cents_to_dollars_str(running_cents)} "
                    f"to {cents_to_dollars_str(expected_cents)}"
                )
                self.mutations.update_transaction(
                    prior.id,
                    TransactionUpdate(
                        transaction_type=prior.transaction_type,
                        journal_id=prior.journal_id,
                        amount_cents=abs(target),
                    ),
                )
                return adjusted

            # Firefly rejects zero amounts and in-place type changes
            click.echo(
                f"Deleting reconciliation {prior.id} of {cents_to_dollars_str(prior.correction_cents)} "
                f"({prior.transaction_type.value}), difference {cents_to_dollars_str(diff)}, "
                f"new correction {cents_to_dollars_str(target)}, "
                f"balance from {cents_to_dollars_str(running_cents)} "
                f"to {cents_to_dollars_str(expected_cents)}"
            )
            self.mutations.delete_transaction(prior.id)

            if target == 0:
                logger.info(f"Correction for {year}-{month:02d} of account {account_id} is now zero")
                return adjusted
            diff = target

        self._create(account_id, year, month, diff, running_cents, expected_cents)
        return adjusted

    def _create(
        self, account_id: int, year: int, month: int, value_cents: int, running_cents: int, expected_cents: int
    ) -> None:
        kind, source_id, destination_id = correction_kind(value_cents, account_id, self.clearing_account_id)

        click.echo(
            f"Creating reconciliation with amount of {cents_to_dollars_str(value_cents)} "
            f"from {cents_to_dollars_str(running_cents)} to {cents_to_dollars_str(expected_cents)}"
        )
        self.mutations.create_transaction(
            TransactionCreate(
                transaction_type=kind,
                description=correction_description(year, month),
                date=end_of_month(year, month),
                amount_cents=abs(value_cents),
                source_id=source_id,
                destination_id=destination_id,
            )
        )
