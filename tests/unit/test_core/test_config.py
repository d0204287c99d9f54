#!/usr/bin/env python3
"""
Unit tests for configuration loading and validation.
"""

import logging
from pathlib import Path

import pytest
import yaml

from reconciliator.core.config import (
    AccountConfig,
    Config,
    Environment,
    default_config_path,
    expected_balance,
    load_config,
    resolve_config_path,
)
from reconciliator.core.errors import ConfigurationError


def write_config(path: Path, data: dict) -> Path:
    path.write_text(yaml.safe_dump(data))
    return path


class TestConfigLoading:
    """Test loading the accounts file."""

    def test_loads_accounts_and_connection(self, config_file):
        """Test that accounts, expected balances and connection settings are read."""
        config = load_config(config_file)

        assert config.environment == Environment.TEST
        assert config.config_file == config_file
        assert config.firefly.api_token == "test-token"
        assert config.firefly.base_url == "http://firefly.test"
        assert config.firefly.reconciliation_account_id == 1
        assert config.firefly.timeout == 30
        assert config.firefly.page_size == 10000

        assert [account.name for account in config.accounts] == ["Checking", "Savings"]
        checking = config.accounts[0]
        assert checking.firefly_id == 3
        assert checking.data == {2024: {1: 75000}}
        assert expected_balance(checking.data, 2024, 1) == 75000
        assert expected_balance(checking.data, 2024, 2) is None
        assert expected_balance(checking.data, 2023, 1) is None

    def test_string_keys_are_normalized(self, tmp_path):
        """Test that quoted year/month keys become integers."""
        path = write_config(
            tmp_path / "config.yml",
            {
                "token": "t",
                "accounts": [
                    {"name": "Checking", "firefly_id": "3", "data": {"2023": {"12": "-1050"}}},
                ],
            },
        )

        config = load_config(path)

        assert config.accounts[0].firefly_id == 3
        assert config.accounts[0].data == {2023: {12: -1050}}

    def test_environment_overrides_file(self, config_file, monkeypatch):
        """Test that FIREFLY_* variables take precedence over the file."""
        monkeypatch.setenv("FIREFLY_API_TOKEN", "env-token")
        monkeypatch.setenv("FIREFLY_BASE_URL", "https://firefly.example")
        monkeypatch.setenv("FIREFLY_TIMEOUT", "5")

        config = load_config(config_file)

        assert config.firefly.api_token == "env-token"
        assert config.firefly.base_url == "https://firefly.example"
        assert config.firefly.timeout == 5

    def test_defaults_without_optional_fields(self, tmp_path):
        """Test defaults when only the token and accounts are given."""
        path = write_config(tmp_path / "config.yml", {"token": "t", "accounts": []})

        config = load_config(path)

        assert config.firefly.base_url == "http://localhost:8081"
        assert config.firefly.reconciliation_account_id == 1
        assert config.accounts == []

    def test_missing_file_raises(self, tmp_path):
        """Test that a missing file is a configuration error."""
        with pytest.raises(ConfigurationError, match="Cannot find configuration file"):
            load_config(tmp_path / "missing.yml")

    def test_invalid_yaml_raises(self, tmp_path):
        """Test that malformed YAML is a configuration error."""
        path = tmp_path / "config.yml"
        path.write_text("accounts: [unclosed\n")

        with pytest.raises(ConfigurationError, match="Failed to read config file"):
            load_config(path)

    def test_non_mapping_raises(self, tmp_path):
        """Test that a YAML list at top level is rejected."""
        path = tmp_path / "config.yml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigurationError, match="must contain a mapping"):
            load_config(path)

    def test_account_missing_field_raises(self, tmp_path):
        """Test that an account without firefly_id is rejected."""
        path = write_config(tmp_path / "config.yml", {"token": "t", "accounts": [{"name": "Checking"}]})

        with pytest.raises(ConfigurationError, match="missing field"):
            load_config(path)


class TestConfigPathResolution:
    """Test where the accounts file is looked up."""

    def test_default_path_uses_xdg_config_home(self, tmp_path):
        """Test default location under XDG_CONFIG_HOME (set by conftest)."""
        assert default_config_path() == tmp_path / "xdg" / "firefly_reconciliator.yml"

    def test_default_path_falls_back_to_home(self, monkeypatch, tmp_path):
        """Test fallback to ~/.config without XDG_CONFIG_HOME."""
        monkeypatch.delenv("XDG_CONFIG_HOME")
        monkeypatch.setenv("HOME", str(tmp_path))

        assert default_config_path() == tmp_path / ".config" / "firefly_reconciliator.yml"

    def test_env_variable_path(self, config_file, monkeypatch):
        """Test RECONCILIATOR_CONFIG when no explicit path is given."""
        monkeypatch.setenv("RECONCILIATOR_CONFIG", str(config_file))

        assert resolve_config_path() == config_file

    def test_default_file_is_used(self, tmp_path, sample_config_data):
        """Test that the file in the config directory is found."""
        (tmp_path / "xdg").mkdir()
        path = write_config(tmp_path / "xdg" / "firefly_reconciliator.yml", sample_config_data)

        assert load_config().config_file == path


class TestConfigValidation:
    """Test configuration validation."""

    def test_missing_token(self, tmp_path):
        """Test that a token is required."""
        path = write_config(tmp_path / "config.yml", {"accounts": []})

        with pytest.raises(ConfigurationError, match="token is required"):
            load_config(path)

    def test_invalid_month(self, tmp_path):
        """Test that months outside 1..12 are rejected."""
        path = write_config(
            tmp_path / "config.yml",
            {"token": "t", "accounts": [{"name": "A", "firefly_id": 3, "data": {2024: {13: 100}}}]},
        )

        with pytest.raises(ConfigurationError, match="invalid month 2024-13"):
            load_config(path)

    def test_duplicate_account_ids(self, tmp_path):
        """Test that an account may only be configured once."""
        path = write_config(
            tmp_path / "config.yml",
            {
                "token": "t",
                "accounts": [
                    {"name": "A", "firefly_id": 3},
                    {"name": "B", "firefly_id": 3},
                ],
            },
        )

        with pytest.raises(ConfigurationError, match="Duplicate firefly_id 3"):
            load_config(path)

    def test_validate_returns_all_errors(self, config_file):
        """Test that validate collects errors instead of raising."""
        config = Config.from_file(config_file)
        config.firefly.api_token = None
        config.firefly.timeout = 0

        errors = config.validate()

        assert len(errors) == 2


class TestConfigHelpers:
    """Test redaction, account selection and logging setup."""

    def test_to_dict_redacts_token(self, config_file):
        """Test that the token is hidden unless requested."""
        config = load_config(config_file)

        assert config.to_dict()["firefly"]["api_token"] == "***REDACTED***"
        assert config.to_dict(include_sensitive=True)["firefly"]["api_token"] == "test-token"
        assert config.to_dict()["accounts"][0] == {"name": "Checking", "firefly_id": 3, "months": 1}

    def test_select_accounts(self, config_file):
        """Test selecting accounts by name."""
        config = load_config(config_file)

        assert [a.name for a in config.select_accounts(())] == ["Checking", "Savings"]
        assert [a.name for a in config.select_accounts(("Savings",))] == ["Savings"]

    def test_select_unknown_account(self, config_file):
        """Test that unknown names are reported."""
        config = load_config(config_file)

        with pytest.raises(ConfigurationError, match="Unknown account"):
            config.select_accounts(("Brokerage",))

    @pytest.mark.parametrize(
        "verbosity,level",
        [(0, logging.ERROR), (1, logging.WARNING), (2, logging.INFO), (3, logging.DEBUG), (5, logging.DEBUG)],
    )
    def test_setup_logging_verbosity(self, config_file, verbosity, level):
        """Test that -v counts map to log levels."""
        config = load_config(config_file)

        config.setup_logging(verbosity)

        assert logging.getLogger("reconciliator").level == level

    def test_debug_overrides_verbosity(self, config_file):
        """Test that debug mode always logs everything."""
        config = load_config(config_file)
        config.debug = True

        config.setup_logging(0)

        assert logging.getLogger("reconciliator").level == logging.DEBUG

    def test_account_from_dict_without_data(self):
        """Test that an account without expected balances is valid."""
        account = AccountConfig.from_dict({"name": "Cash", "firefly_id": 9})

        assert account.data == {}
        assert expected_balance(account.data, 2024, 1) is None
