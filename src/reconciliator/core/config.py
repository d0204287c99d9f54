#!/usr/bin/env python3
"""
Configuration Management for the Firefly Reconciliator

Loads the accounts file (YAML) and applies environment overrides.

The accounts file lists every account to reconcile together with its
historic target data: years containing months of expected end-of-month
balances, in cents.

    token: <personal access token>
    base_url: http://localhost:8081
    accounts:
      - name: Checking
        firefly_id: 3
        data:
          2023:
            1: 512315
            2: 123410
"""

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from .errors import ConfigurationError

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "firefly_reconciliator.yml"

# Year -> month -> expected end-of-month balance in cents.
BankData = dict[int, dict[int, int]]


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass
class FireflyConfig:
    """Firefly III API configuration."""

    api_token: str | None = None
    base_url: str = "http://localhost:8081"
    timeout: int = 30
    page_size: int = 10000
    # Counter account for all correcting transactions
    reconciliation_account_id: int = 1


@dataclass
class AccountConfig:
    """An account to reconcile and its expected balances."""

    name: str
    firefly_id: int
    data: BankData = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AccountConfig":
        """
        Create AccountConfig from an entry of the accounts file.

        Raises:
            ConfigurationError: If a required field is missing or not numeric
        """
        try:
            return cls(
                name=str(data["name"]),
                firefly_id=int(data["firefly_id"]),
                data=_parse_bank_data(data.get("data") or {}),
            )
        except KeyError as e:
            raise ConfigurationError(f"Account entry is missing field {e}") from e
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid account entry {data!r}: {e}") from e


@dataclass
class Config:
    """
    Main configuration class for the reconciliator.

    Built from the accounts file, with environment variables taking
    precedence for connection settings.
    """

    environment: Environment
    config_file: Path
    firefly: FireflyConfig
    accounts: list[AccountConfig]

    # Application settings
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_file(cls, path: str | Path | None = None) -> "Config":
        """
        Create configuration from the accounts file and environment variables.

        Args:
            path: Explicit accounts file path. If None, uses RECONCILIATOR_CONFIG
                  or the user's configuration directory.

        Raises:
            ConfigurationError: If the file cannot be found or parsed
        """
        config_file = resolve_config_path(path)
        logger.info(f"Found config file at: {config_file}")

        try:
            with open(config_file, encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to read config file {config_file}: {e}") from e

        if not isinstance(raw, dict):
            raise ConfigurationError(f"Config file {config_file} must contain a mapping")

        env = Environment(os.getenv("RECONCILIATOR_ENV", "development"))

        try:
            firefly = FireflyConfig(
                api_token=os.getenv("FIREFLY_API_TOKEN") or raw.get("token"),
                base_url=os.getenv("FIREFLY_BASE_URL") or raw.get("base_url") or FireflyConfig.base_url,
                timeout=int(os.getenv("FIREFLY_TIMEOUT") or raw.get("timeout") or FireflyConfig.timeout),
                page_size=int(raw.get("page_size") or FireflyConfig.page_size),
                reconciliation_account_id=int(
                    raw.get("reconciliation_account_id") or FireflyConfig.reconciliation_account_id
                ),
            )
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid connection settings in {config_file}: {e}") from e

        accounts_raw = raw.get("accounts") or []
        if not isinstance(accounts_raw, list):
            raise ConfigurationError("'accounts' must be a list")

        return cls(
            environment=env,
            config_file=config_file,
            firefly=firefly,
            accounts=[AccountConfig.from_dict(entry) for entry in accounts_raw],
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list:
        """Validate configuration and return list of errors."""
        errors = []

        if not self.firefly.api_token:
            errors.append("Firefly API token is required (config 'token' or FIREFLY_API_TOKEN)")

        if self.firefly.timeout <= 0:
            errors.append("Firefly timeout must be positive")
        if self.firefly.page_size <= 0:
            errors.append("Firefly page size must be positive")

        seen_ids: set[int] = set()
        for account in self.accounts:
            if account.firefly_id in seen_ids:
                errors.append(f"Duplicate firefly_id {account.firefly_id} ({account.name})")
            seen_ids.add(account.firefly_id)

            for year, months in account.data.items():
                for month in months:
                    if not 1 <= month <= 12:
                        errors.append(f"{account.name}: invalid month {year}-{month}")

        return errors

    def setup_logging(self, verbosity: int | None = None) -> None:
        """
        Configure logging based on configuration.

        Args:
            verbosity: Count of -v flags. 0 shows errors only, 1 warnings,
                       2 info, 3 and above debug. If None, LOG_LEVEL is used.
        """
        if self.debug:
            level = logging.DEBUG
        elif verbosity is not None:
            level = _verbosity_to_level(verbosity)
        else:
            level = getattr(logging, self.log_level, logging.INFO)

        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")
        logging.getLogger("reconciliator").setLevel(level)

        if self.environment == Environment.PRODUCTION:
            logging.getLogger("httpx").setLevel(logging.WARNING)
            logging.getLogger("httpcore").setLevel(logging.WARNING)

    def get_sensitive_fields(self) -> list:
        """Get list of field names that contain sensitive data."""
        return ["firefly.api_token"]

    def to_dict(self, include_sensitive: bool = False) -> dict[str, Any]:
        """Convert configuration to dictionary, optionally excluding sensitive data."""
        firefly: dict[str, Any] = {}
        for name, value in self.firefly.__dict__.items():
            if not include_sensitive and f"firefly.{name}" in self.get_sensitive_fields():
                firefly[name] = "***REDACTED***"
            else:
                firefly[name] = value

        return {
            "environment": self.environment.value,
            "config_file": str(self.config_file),
            "firefly": firefly,
            "accounts": [
                {
                    "name": account.name,
                    "firefly_id": account.firefly_id,
                    "months": sum(len(months) for months in account.data.values()),
                }
                for account in self.accounts
            ],
            "debug": self.debug,
            "log_level": self.log_level,
        }

    def select_accounts(self, names: tuple[str, ...] | list[str]) -> list[AccountConfig]:
        """
        Return the configured accounts matching the given names.

        An empty selection means all accounts.

        Raises:
            ConfigurationError: If a name is not configured
        """
        if not names:
            return list(self.accounts)

        by_name = {account.name: account for account in self.accounts}
        unknown = [name for name in names if name not in by_name]
        if unknown:
            raise ConfigurationError(f"Unknown account(s): {', '.join(unknown)}")
        return [by_name[name] for name in names]


def expected_balance(data: BankData, year: int, month: int) -> int | None:
    """Return the expected balance in cents for a month, if one is known."""
    return data.get(year, {}).get(month)


def _parse_bank_data(data: dict[Any, Any]) -> BankData:
    """Normalize year/month keys and balances to integers."""
    return {
        int(year): {int(month): int(balance) for month, balance in (months or {}).items()}
        for year, months in data.items()
    }


def _verbosity_to_level(verbosity: int) -> int:
    if verbosity <= 0:
        return logging.ERROR
    if verbosity == 1:
        return logging.WARNING
    if verbosity == 2:
        return logging.INFO
    return logging.DEBUG


def default_config_path() -> Path:
    """Get the default accounts file path in the user's configuration directory."""
    config_home = os.getenv("XDG_CONFIG_HOME")
    base = Path(config_home) if config_home else Path.home() / ".config"
    return base / CONFIG_FILE_NAME


def resolve_config_path(path: str | Path | None = None) -> Path:
    """
    Resolve the accounts file location.

    Raises:
        ConfigurationError: If no file exists at the resolved location
    """
    if path is None:
        path = os.getenv("RECONCILIATOR_CONFIG")

    config_file = Path(path).expanduser() if path else default_config_path()

    if not config_file.is_file():
        raise ConfigurationError(f"Cannot find configuration file at path {config_file}")

    return config_file


def load_config(path: str | Path | None = None) -> Config:
    """
    Load and validate the configuration.

    Raises:
        ConfigurationError: If the file is missing, malformed or invalid
    """
    config = Config.from_file(path)

    errors = config.validate()
    if errors:
        raise ConfigurationError(f"Configuration validation failed: {'; '.join(errors)}")

    return config
