"""
Firefly III Integration Package

Models for the transaction API, the REST client that reads account
histories and writes corrections, and a dry-run stand-in for the write side.
"""

from .client import FireflyClient
from .dry_run import DryRunMutations
from .models import (
    RECONCILIATION_PREFIX,
    FireflyTransaction,
    TransactionCreate,
    TransactionType,
    TransactionUpdate,
)

__all__ = [
    "RECONCILIATION_PREFIX",
    "DryRunMutations",
    "FireflyClient",
    "FireflyTransaction",
    "TransactionCreate",
    "TransactionType",
    "TransactionUpdate",
]
