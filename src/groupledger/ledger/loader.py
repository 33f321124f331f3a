#!/usr/bin/env python3
"""
Ledger File Loader

Loads a group's expenses and settlements from a JSON ledger file.

File format:
    {
      "group_id": "trip-2024",
      "members": ["alice", "bob", "carol"],
      "expenses": [
        {"id": "e1", "paid_by": "alice", "amount": "90.00", "currency": "USD",
         "split_type": "equal", "participants": ["alice", "bob", "carol"]}
      ],
      "settlements": [
        {"id": "s1", "payer_id": "bob", "payee_id": "alice", "amount": "30.00",
         "currency": "USD"}
      ]
    }

A bare list is read as a list of expenses. Amounts may be JSON strings or
numbers; numbers are parsed as Decimal. Records that omit "currency" use
the configured default currency (GROUPLEDGER_DEFAULT_CURRENCY).
"""

import logging
from dataclasses import dataclass, field
from decimal import InvalidOperation
from pathlib import Path
from typing import Any

from ..core.config import get_config
from ..core.currency import get_currency
from ..core.json_utils import read_json
from ..core.models import Expense, Settlement

logger = logging.getLogger(__name__)

LEDGER_FILENAME = "ledger.json"


class LedgerFormatError(ValueError):
    """Raised when a ledger file cannot be parsed into domain models"""

    pass


@dataclass
class Ledger:
    """A group's recorded history."""

    group_id: str | None = None
    members: list[str] = field(default_factory=list)
    expenses: list[Expense] = field(default_factory=list)
    settlements: list[Settlement] = field(default_factory=list)

    @property
    def currencies(self) -> list[str]:
        """Currencies used by any non-deleted record, sorted."""
        records = [*self.expenses, *self.settlements]
        return sorted({r.currency for r in records if not r.is_deleted})

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "group_id": self.group_id,
            "members": list(self.members),
            "expenses": [e.to_dict() for e in self.expenses],
            "settlements": [s.to_dict() for s in self.settlements],
        }


def _parse_records(raw: list[Any], kind: str, parser: Any, default_currency: str | None) -> list:
    records = []
    for index, item in enumerate(raw):
        if not isinstance(item, dict):
            raise LedgerFormatError(f"{kind} #{index} is not an object")
        if default_currency and not item.get("currency"):
            item = {**item, "currency": default_currency}
        try:
            record = parser(item)
            # Unknown currency codes are a data error, not a netting concern
            get_currency(record.currency)
        except (KeyError, ValueError, TypeError, InvalidOperation) as e:
            raise LedgerFormatError(f"Invalid {kind} #{index} ({item.get('id', 'no id')}): {e}") from e
        records.append(record)
    return records


def parse_ledger(data: Any, default_currency: str | None = None) -> Ledger:
    """
    Convert parsed JSON into a Ledger.

    Args:
        data: Object with expenses/settlements lists, or a bare expense list
        default_currency: Currency for records that don't name one. If None,
            such records are invalid

    Returns:
        Ledger of domain models

    Raises:
        LedgerFormatError: If the structure or any record is invalid
    """
    if isinstance(data, list):
        data = {"expenses": data}
    if not isinstance(data, dict):
        raise LedgerFormatError("Ledger must be a JSON object or a list of expenses")

    expenses = _parse_records(data.get("expenses") or [], "expense", Expense.from_dict, default_currency)
    settlements = _parse_records(data.get("settlements") or [], "settlement", Settlement.from_dict, default_currency)

    group_id = data.get("group_id")
    for record in [*expenses, *settlements]:
        if record.group_id is None:
            record.group_id = group_id

    return Ledger(
        group_id=group_id,
        members=[str(m) for m in data.get("members") or []],
        expenses=expenses,
        settlements=settlements,
    )


def load_ledger(path: str | Path | None = None) -> Ledger:
    """
    Load a ledger from a JSON file.

    Records without a currency use config.ledger.default_currency.

    Args:
        path: Ledger file, or a directory containing ledger.json.
              If None, uses config.ledger.ledger_dir/ledger.json

    Returns:
        Ledger of domain models

    Raises:
        FileNotFoundError: If the ledger file does not exist
        LedgerFormatError: If the file content is invalid
    """
    config = get_config()
    if path is None:
        ledger_file = config.ledger.ledger_dir / LEDGER_FILENAME
    else:
        ledger_file = Path(path)
        if ledger_file.is_dir():
            ledger_file = ledger_file / LEDGER_FILENAME

    if not ledger_file.exists():
        raise FileNotFoundError(f"Ledger file not found: {ledger_file}")

    try:
        data = read_json(ledger_file)
    except ValueError as e:
        raise LedgerFormatError(f"Ledger file is not valid JSON: {ledger_file}: {e}") from e

    ledger = parse_ledger(data, default_currency=config.ledger.default_currency)
    logger.info(
        "Loaded %d expenses and %d settlements from %s",
        len(ledger.expenses),
        len(ledger.settlements),
        ledger_file,
    )
    return ledger
