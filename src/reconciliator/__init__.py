"""
Firefly Reconciliator

Brings Firefly III account ledgers in line with known end-of-month balances,
such as the closing balances printed on bank statements.

For every configured account the full transaction history is replayed month
by month. Whenever a month's replayed closing balance differs from the
expected one, a correcting deposit or withdrawal is created, or a correction
from an earlier run is adjusted, so that rerunning with the same data changes
nothing.

Domain Packages:
- core: Configuration, currency handling, error types
- firefly: Firefly III API models and client
- ledger: Replay engine and reconciliation resolver
- cli: Command-line interface

Example Usage:
    from reconciliator.core.config import load_config
    from reconciliator.firefly import FireflyClient
    from reconciliator.ledger import ReconciliationResolver, reconcile_account
"""

__version__ = "0.1.0"

from .core.currency import cents_to_dollars_str, float_to_cents, format_cents
from .core.errors import (
    ConfigurationError,
    EmptyInputError,
    FetchError,
    ReconciliatorError,
    RemoteMutationError,
)

__all__ = [
    # Currency
    "cents_to_dollars_str",
    "float_to_cents",
    "format_cents",
    # Errors
    "ConfigurationError",
    "EmptyInputError",
    "FetchError",
    "ReconciliatorError",
    "RemoteMutationError",
]
