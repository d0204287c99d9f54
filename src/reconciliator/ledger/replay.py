#!/usr/bin/env python3
"""
Ledger Replay Engine

Walks an account's transactions in date order, keeps a running balance in
cents and closes each month when the first transaction of a later month is
seen. A closed month with a known expected balance is compared against the
running balance and corrected through the resolver when the two differ.

The current month is reported after the last transaction but never checked,
since it may still be in progress. Months without any transaction produce no
report and no check.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Sequence

import click

from ..core.config import BankData, expected_balance
from ..core.currency import cents_to_dollars_str
from ..core.errors import EmptyInputError
from ..firefly.models import FireflyTransaction, TransactionType
from .resolver import ReconciliationResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MonthEndReport:
    """Closing balance of one replayed month."""

    year: int
    month: int
    balance_cents: int
    expected_cents: int | None = None
    adjustment_cents: int = 0
    in_progress: bool = False  # Trailing month, not checked

    @property
    def period(self) -> str:
        """Get the month as YYYY-MM."""
        return f"{self.year}-{self.month:02d}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        return {
            "period": self.period,
            "balance_cents": self.balance_cents,
            "expected_cents": self.expected_cents,
            "adjustment_cents": self.adjustment_cents,
            "in_progress": self.in_progress,
        }


@dataclass
class ReplayResult:
    """Outcome of replaying one account."""

    account_id: int
    final_balance: int
    reports: list[MonthEndReport] = field(default_factory=list)

    @property
    def corrections(self) -> list[MonthEndReport]:
        """Get the reports of months that needed a correction."""
        return [report for report in self.reports if report.adjustment_cents != 0]


@dataclass
class ReplayState:
    """Mutable state of a single account replay."""

    year: int
    month: int
    running_balance: int = 0
    active_reconciliation: FireflyTransaction | None = None


def signed_effect(transaction: FireflyTransaction, account_id: int) -> int:
    """
    Get the effect of a transaction on an account's balance, in cents.

    Transfers that reference neither side of the account have no effect.
    """
    amount = transaction.amount_cents
    kind = transaction.transaction_type

    if kind in (TransactionType.WITHDRAWAL, TransactionType.RECONCILIATION):
        return -amount
    if kind in (TransactionType.DEPOSIT, TransactionType.OPENING_BALANCE):
        return amount

    if transaction.destination_id == account_id:
        return amount
    if transaction.source_id == account_id:
        return -amount

    logger.warning(f"Transfer {transaction.id} does not involve account {account_id}, ignoring it")
    return 0


def replay(
    account_id: int,
    transactions: Sequence[FireflyTransaction],
    expected: BankData,
    resolver: ReconciliationResolver,
) -> ReplayResult:
    """
    Replay an account's history and correct every month that does not balance.

    Args:
        account_id: Firefly account id being replayed
        transactions: Transactions in non-decreasing date order
        expected: Expected closing balances by year and month, in cents
        resolver: Resolver applying corrections for unbalanced months

    Returns:
        ReplayResult with the final balance and one report per month seen

    Raises:
        EmptyInputError: If there are no transactions
        RemoteMutationError: If a correction is rejected
    """
    if not transactions:
        raise EmptyInputError(account_id)

    first_date = transactions[0].date
    state = ReplayState(year=first_date.year, month=first_date.month)
    result = ReplayResult(account_id=account_id, final_balance=0)

    for transaction in transactions:
        if (transaction.date.year, transaction.date.month) != (state.year, state.month):
            result.reports.append(_close_month(account_id, state, expected, resolver))
            state.active_reconciliation = None
            state.year = transaction.date.year
            state.month = transaction.date.month

        state.running_balance += signed_effect(transaction, account_id)

        if transaction.is_reconciliation:
            state.active_reconciliation = transaction

    click.echo(
        f"Current balance {state.year}-{state.month}: "
        f"Balance {cents_to_dollars_str(state.running_balance)}"
    )
    result.reports.append(
        MonthEndReport(
            year=state.year,
            month=state.month,
            balance_cents=state.running_balance,
            in_progress=True,
        )
    )
    result.final_balance = state.running_balance
    return result


def _close_month(
    account_id: int, state: ReplayState, expected: BankData, resolver: ReconciliationResolver
) -> MonthEndReport:
    expected_cents = expected_balance(expected, state.year, state.month)
    adjustment = 0

    if expected_cents is not None and expected_cents != state.running_balance:
        adjusted = resolver.resolve(
            account_id,
            state.year,
            state.month,
            state.active_reconciliation,
            expected_cents,
            state.running_balance,
        )
        adjustment = adjusted - state.running_balance
        state.running_balance = adjusted

    click.echo(
        f"End of month {state.year}-{state.month}: "
        f"Balance {cents_to_dollars_str(state.running_balance)}"
    )
    return MonthEndReport(
        year=state.year,
        month=state.month,
        balance_cents=state.running_balance,
        expected_cents=expected_cents,
        adjustment_cents=adjustment,
    )
