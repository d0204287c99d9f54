"""
Ledger Package

Month-by-month replay of an account's history and the resolver that turns an
unbalanced month into a create, update or delete-and-recreate of its
correcting transaction.
"""

from .pipeline import TransactionStore, reconcile_account
from .replay import MonthEndReport, ReplayResult, ReplayState, replay, signed_effect
from .resolver import (
    CORRECTION_TIMEZONE,
    MutationAdapter,
    ReconciliationResolver,
    correction_description,
    correction_kind,
    end_of_month,
)

__all__ = [
    "CORRECTION_TIMEZONE",
    "MonthEndReport",
    "MutationAdapter",
    "ReconciliationResolver",
    "ReplayResult",
    "ReplayState",
    "TransactionStore",
    "correction_description",
    "correction_kind",
    "end_of_month",
    "reconcile_account",
    "replay",
    "signed_effect",
]
