"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

from pathlib import Path

import pytest
import yaml

from tests.fixtures.firefly_data import ACCOUNT_ID, CLEARING_ACCOUNT_ID


@pytest.fixture
def sample_config_data() -> dict:
    """Sample accounts file content."""
    return {
        "token": "test-token",
        "base_url": "http://firefly.test",
        "reconciliation_account_id": CLEARING_ACCOUNT_ID,
        "accounts": [
            {
                "name": "Checking",
                "firefly_id": ACCOUNT_ID,
                "data": {
                    2024: {
                        1: 75000,  # $750.00
                    },
                },
            },
            {
                "name": "Savings",
                "firefly_id": 5,
                "data": {},
            },
        ],
    }


@pytest.fixture
def config_file(tmp_path: Path, sample_config_data: dict) -> Path:
    """Write the sample accounts file and return its path."""
    path = tmp_path / "firefly_reconciliator.yml"
    path.write_text(yaml.safe_dump(sample_config_data))
    return path


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, tmp_path):
    """Set up test environment variables."""
    monkeypatch.setenv("RECONCILIATOR_ENV", "test")

    # Ensure tests never read a real configuration or token
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    for name in [
        "RECONCILIATOR_CONFIG",
        "FIREFLY_API_TOKEN",
        "FIREFLY_BASE_URL",
        "FIREFLY_TIMEOUT",
        "DEBUG",
        "LOG_LEVEL",
    ]:
        monkeypatch.delenv(name, raising=False)


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for complete workflows")
    config.addinivalue_line("markers", "currency: Tests for currency handling and precision")
    config.addinivalue_line("markers", "firefly: Tests for the Firefly API integration")
    config.addinivalue_line("markers", "ledger: Tests for replay and reconciliation")
