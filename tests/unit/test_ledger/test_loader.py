#!/usr/bin/env python3
"""Tests for ledger file loading."""

import json
from decimal import Decimal

import pytest

from groupledger.core.config import get_config
from groupledger.ledger.loader import LEDGER_FILENAME, LedgerFormatError, load_ledger, parse_ledger
from tests.fixtures.synthetic_data import generate_expenses, generate_settlements, save_synthetic_ledger


class TestParseLedger:
    """Test conversion of parsed JSON to models."""

    @pytest.mark.unit
    def test_parse_full_ledger(self, sample_ledger_data):
        """Test a complete ledger object."""
        ledger = parse_ledger(sample_ledger_data)
        assert ledger.group_id == "trip-2024"
        assert ledger.members == ["alice", "bob", "carol"]
        assert [e.id for e in ledger.expenses] == ["e1", "e2", "e3"]
        assert ledger.settlements[0].amount == Decimal("10.00")
        assert ledger.currencies == ["JPY", "USD"]

    @pytest.mark.unit
    def test_group_id_propagated(self, sample_ledger_data):
        """Test records without a group id inherit the ledger's."""
        ledger = parse_ledger(sample_ledger_data)
        assert {e.group_id for e in ledger.expenses} == {"trip-2024"}

    @pytest.mark.unit
    def test_bare_list_is_expenses(self, sample_ledger_data):
        """Test a top-level list is read as expenses."""
        ledger = parse_ledger(sample_ledger_data["expenses"])
        assert len(ledger.expenses) == 3
        assert ledger.settlements == []
        assert ledger.group_id is None

    @pytest.mark.unit
    def test_unknown_currency_rejected(self, sample_ledger_data):
        """Test records in an unknown currency fail to load."""
        sample_ledger_data["expenses"][0]["currency"] = "XXX"
        with pytest.raises(LedgerFormatError, match="Invalid expense #0 \\(e1\\)"):
            parse_ledger(sample_ledger_data)

    @pytest.mark.unit
    def test_missing_field_rejected(self, sample_ledger_data):
        """Test a settlement without payer fails to load."""
        del sample_ledger_data["settlements"][0]["payer_id"]
        with pytest.raises(LedgerFormatError, match="Invalid settlement #0"):
            parse_ledger(sample_ledger_data)

    @pytest.mark.unit
    @pytest.mark.currency
    def test_missing_currency_uses_default(self, sample_ledger_data):
        """Test records without a currency take the default when one is given."""
        del sample_ledger_data["expenses"][0]["currency"]
        with pytest.raises(LedgerFormatError, match="Invalid expense #0"):
            parse_ledger(sample_ledger_data)

        ledger = parse_ledger(sample_ledger_data, default_currency="EUR")
        assert ledger.expenses[0].currency == "EUR"
        assert ledger.expenses[1].currency == "USD"

    @pytest.mark.unit
    @pytest.mark.parametrize("data", ["text", 42, None])
    def test_invalid_structure(self, data):
        """Test non-object ledgers are rejected."""
        with pytest.raises(LedgerFormatError):
            parse_ledger(data)

    @pytest.mark.unit
    def test_non_object_record(self):
        """Test records must be JSON objects."""
        with pytest.raises(LedgerFormatError, match="expense #0 is not an object"):
            parse_ledger({"expenses": ["e1"]})


class TestLoadLedger:
    """Test loading ledgers from disk."""

    @pytest.mark.unit
    def test_load_file(self, temp_dir, sample_ledger_data):
        """Test loading a ledger file path."""
        path = temp_dir / "trip.json"
        path.write_text(json.dumps(sample_ledger_data))
        ledger = load_ledger(path)
        assert ledger.group_id == "trip-2024"
        assert ledger.expenses[2].amount == Decimal("3000")

    @pytest.mark.unit
    def test_load_directory(self, temp_dir, sample_ledger_data):
        """Test a directory resolves to its ledger.json."""
        (temp_dir / LEDGER_FILENAME).write_text(json.dumps(sample_ledger_data))
        assert load_ledger(temp_dir).group_id == "trip-2024"

    @pytest.mark.unit
    def test_load_default_location(self, sample_ledger_data):
        """Test the configured ledger directory is used when no path is given."""
        ledger_dir = get_config().ledger.ledger_dir
        ledger_dir.mkdir(parents=True, exist_ok=True)
        (ledger_dir / LEDGER_FILENAME).write_text(json.dumps(sample_ledger_data))
        assert load_ledger().group_id == "trip-2024"

    @pytest.mark.unit
    @pytest.mark.currency
    def test_configured_default_currency(self, temp_dir, sample_ledger_data, monkeypatch):
        """Test GROUPLEDGER_DEFAULT_CURRENCY fills in missing currencies on load."""
        monkeypatch.setenv("GROUPLEDGER_DEFAULT_CURRENCY", "GBP")
        del sample_ledger_data["settlements"][0]["currency"]
        path = temp_dir / "trip.json"
        path.write_text(json.dumps(sample_ledger_data))

        ledger = load_ledger(path)
        assert ledger.settlements[0].currency == "GBP"
        assert ledger.currencies == ["GBP", "JPY", "USD"]

    @pytest.mark.unit
    def test_missing_file(self, temp_dir):
        """Test a missing ledger raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError, match="Ledger file not found"):
            load_ledger(temp_dir / "missing.json")

    @pytest.mark.unit
    def test_invalid_json(self, temp_dir):
        """Test malformed JSON raises LedgerFormatError."""
        path = temp_dir / "broken.json"
        path.write_text("{not json")
        with pytest.raises(LedgerFormatError, match="not valid JSON"):
            load_ledger(path)

    @pytest.mark.unit
    def test_synthetic_ledger_round_trip(self, temp_dir):
        """Test a saved synthetic ledger loads back to the same records."""
        expenses = generate_expenses(10, currency="BHD")
        settlements = generate_settlements(3, currency="BHD")
        path = save_synthetic_ledger(temp_dir / "synthetic.json", expenses, settlements, members=["alice"])

        ledger = load_ledger(path)
        assert [e.amount for e in ledger.expenses] == [e.amount for e in expenses]
        assert [s.payer_id for s in ledger.settlements] == [s.payer_id for s in settlements]
        assert ledger.group_id == "synthetic-group"
