"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import tempfile
from decimal import Decimal
from pathlib import Path
from typing import Any

import pytest

from groupledger.core import config as config_module
from groupledger.core.models import UserBalance


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture
def sample_ledger_data() -> dict[str, Any]:
    """Sample three-person trip ledger in two currencies."""
    return {
        "group_id": "trip-2024",
        "members": ["alice", "bob", "carol"],
        "expenses": [
            {
                "id": "e1",
                "paid_by": "alice",
                "amount": "90.00",
                "currency": "USD",
                "split_type": "equal",
                "participants": ["alice", "bob", "carol"],
                "description": "Dinner",
                "date": "2024-08-15",
            },
            {
                "id": "e2",
                "paid_by": "bob",
                "amount": "30.00",
                "currency": "USD",
                "split_type": "exact",
                "participants": ["alice", "bob", "carol"],
                "splits": [
                    {"participant_id": "alice", "amount": "10.00"},
                    {"participant_id": "bob", "amount": "10.00"},
                    {"participant_id": "carol", "amount": "10.00"},
                ],
                "description": "Taxi",
                "date": "2024-08-16",
            },
            {
                "id": "e3",
                "paid_by": "carol",
                "amount": 3000,
                "currency": "JPY",
                "split_type": "equal",
                "participants": ["alice", "carol"],
                "description": "Ramen",
                "date": "2024-08-17",
            },
        ],
        "settlements": [
            {
                "id": "s1",
                "payer_id": "carol",
                "payee_id": "alice",
                "amount": "10.00",
                "currency": "USD",
                "date": "2024-08-18",
            }
        ],
    }


@pytest.fixture
def balance_graph():
    """Build one currency's balance graph from (debtor, creditor, amount) edges."""

    def build(edges: list[tuple[str, str, Any]]) -> dict[str, UserBalance]:
        balances: dict[str, UserBalance] = {}
        for debtor, creditor, amount in edges:
            value = Decimal(str(amount))
            for user_id in (debtor, creditor):
                balances.setdefault(user_id, UserBalance(user_id=user_id))
            owes = balances[debtor].owes
            owes[creditor] = owes.get(creditor, Decimal(0)) + value
            owed_by = balances[creditor].owed_by
            owed_by[debtor] = owed_by.get(debtor, Decimal(0)) + value
        return balances

    return build


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, tmp_path):
    """Set up test environment variables and a fresh configuration."""
    # Ensure tests never write into a real data directory
    monkeypatch.setenv("GROUPLEDGER_ENV", "test")
    monkeypatch.setenv("GROUPLEDGER_DATA_DIR", str(tmp_path / "groupledger_data"))
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    monkeypatch.delenv("GROUPLEDGER_DEFAULT_CURRENCY", raising=False)
    monkeypatch.delenv("GROUPLEDGER_SETTLEMENT_EPSILON", raising=False)
    monkeypatch.delenv("GROUPLEDGER_INCLUDE_ZERO_BALANCES", raising=False)
    monkeypatch.setattr(config_module, "_config", None)


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for complete workflows")
    config.addinivalue_line("markers", "currency: Tests for currency handling and precision")
    config.addinivalue_line("markers", "ledger: Tests for splitting, aggregation and netting")
    config.addinivalue_line("markers", "slow: Tests that take significant time to run")
