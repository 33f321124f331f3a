#!/usr/bin/env python3
"""
JSON Utilities Module

Centralized JSON reading and writing with consistent formatting. Ledger files
and reports go through these helpers so amounts survive the round trip: JSON
numbers are parsed as Decimal, and Decimal values are written as strings.
"""

import json
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path
from typing import Any


def ledger_default(value: Any) -> Any:
    """
    Serialize non-JSON types found in ledger data.

    Decimal becomes a string so no precision is lost; dates become ISO strings;
    objects with to_dict() are serialized through it.
    """
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if hasattr(value, "to_dict"):
        return value.to_dict()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def read_json(filepath: str | Path) -> Any:
    """
    Read data from a JSON file, parsing non-integer numbers as Decimal.

    Args:
        filepath: Path to the JSON file

    Returns:
        The parsed JSON data
    """
    with open(filepath, encoding="utf-8") as f:
        return json.load(f, parse_float=Decimal)


def write_json_with_defaults(filepath: str | Path, data: Any, default: Any = ledger_default) -> None:
    """
    Write data to a JSON file with a custom default serializer for non-JSON types.

    Args:
        filepath: Path to the JSON file
        data: Data to write to the file
        default: Function to serialize non-JSON types (default: ledger_default)
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False, default=default)
