"""
Core Utilities Package

Configuration, currency handling and error types shared by the Firefly and
ledger packages.
"""

from .config import (
    AccountConfig,
    BankData,
    Config,
    Environment,
    FireflyConfig,
    default_config_path,
    expected_balance,
    load_config,
    resolve_config_path,
)
from .currency import cents_to_amount_str, cents_to_dollars_str, float_to_cents, format_cents
from .errors import (
    ConfigurationError,
    EmptyInputError,
    FetchError,
    ReconciliatorError,
    RemoteMutationError,
)

__all__ = [
    # Configuration
    "AccountConfig",
    "BankData",
    "Config",
    "Environment",
    "FireflyConfig",
    "default_config_path",
    "expected_balance",
    "load_config",
    "resolve_config_path",
    # Currency utilities
    "cents_to_amount_str",
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
