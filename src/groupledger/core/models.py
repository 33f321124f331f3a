#!/usr/bin/env python3
"""
Core Data Models for the Group Ledger

Data structures shared by split allocation, balance aggregation and debt
simplification. Amounts are Decimal values in the currency's major unit.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from .currency import normalize_currency_code, to_decimal


class SplitType(Enum):
    """How an expense is divided between its participants."""

    EQUAL = "equal"
    EXACT = "exact"
    PERCENTAGE = "percentage"


def _parse_date(value: Any) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def _parse_timestamp(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


def _amount_map(data: dict[str, Any] | None) -> dict[str, Decimal]:
    return {str(user_id): to_decimal(amount) for user_id, amount in (data or {}).items()}


@dataclass(frozen=True)
class Split:
    """
    One participant's exact share of one expense.

    Splits are replaced, never mutated, when an expense is edited.
    """

    participant_id: str
    amount: Decimal
    percentage: Decimal | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {"participant_id": self.participant_id, "amount": str(self.amount)}
        if self.percentage is not None:
            result["percentage"] = str(self.percentage)
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Split":
        """Create Split from dictionary (accepts "user_id"/"userId" as aliases)."""
        participant_id = data.get("participant_id") or data.get("user_id") or data.get("userId")
        if participant_id is None:
            raise KeyError("participant_id")
        percentage = data.get("percentage")
        return cls(
            participant_id=str(participant_id),
            amount=to_decimal(data["amount"]),
            percentage=to_decimal(percentage) if percentage is not None else None,
        )


@dataclass
class Expense:
    """
    A shared expense paid by one user and owed by its participants.

    If splits is empty, the aggregator allocates them from split_type,
    participants and amount.
    """

    id: str
    paid_by: str
    amount: Decimal
    currency: str
    participants: list[str] = field(default_factory=list)
    splits: list[Split] = field(default_factory=list)
    split_type: SplitType = SplitType.EQUAL
    group_id: str | None = None
    description: str = ""
    date: date | None = None
    deleted_at: datetime | None = None

    def __post_init__(self) -> None:
        self.amount = to_decimal(self.amount)
        self.currency = normalize_currency_code(self.currency)
        self.date = _parse_date(self.date)

    @property
    def is_deleted(self) -> bool:
        """Check if this expense has been soft-deleted."""
        return self.deleted_at is not None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "group_id": self.group_id,
            "paid_by": self.paid_by,
            "amount": str(self.amount),
            "currency": self.currency,
            "split_type": self.split_type.value,
            "participants": list(self.participants),
            "splits": [s.to_dict() for s in self.splits],
            "description": self.description,
            "date": self.date.isoformat() if self.date else None,
            "deleted_at": self.deleted_at.isoformat() if self.deleted_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Expense":
        """Create Expense from dictionary."""
        splits = [Split.from_dict(s) for s in data.get("splits") or []]
        participants = [str(p) for p in data.get("participants") or []]
        if not participants and splits:
            participants = [s.participant_id for s in splits]

        return cls(
            id=str(data["id"]),
            group_id=data.get("group_id"),
            paid_by=str(data["paid_by"]),
            amount=to_decimal(data["amount"]),
            currency=data["currency"],
            split_type=SplitType(data.get("split_type", SplitType.EQUAL.value)),
            participants=participants,
            splits=splits,
            description=data.get("description", ""),
            date=_parse_date(data.get("date")),
            deleted_at=_parse_timestamp(data.get("deleted_at")),
        )


@dataclass
class Settlement:
    """A direct payment from payer to payee that reduces what payer owes."""

    id: str
    payer_id: str
    payee_id: str
    amount: Decimal
    currency: str
    group_id: str | None = None
    note: str = ""
    date: date | None = None
    deleted_at: datetime | None = None

    def __post_init__(self) -> None:
        self.amount = to_decimal(self.amount)
        self.currency = normalize_currency_code(self.currency)
        self.date = _parse_date(self.date)

    @property
    def is_deleted(self) -> bool:
        """Check if this settlement has been soft-deleted."""
        return self.deleted_at is not None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "group_id": self.group_id,
            "payer_id": self.payer_id,
            "payee_id": self.payee_id,
            "amount": str(self.amount),
            "currency": self.currency,
            "note": self.note,
            "date": self.date.isoformat() if self.date else None,
            "deleted_at": self.deleted_at.isoformat() if self.deleted_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Settlement":
        """Create Settlement from dictionary."""
        return cls(
            id=str(data["id"]),
            group_id=data.get("group_id"),
            payer_id=str(data["payer_id"]),
            payee_id=str(data["payee_id"]),
            amount=to_decimal(data["amount"]),
            currency=data["currency"],
            note=data.get("note", ""),
            date=_parse_date(data.get("date")),
            deleted_at=_parse_timestamp(data.get("deleted_at")),
        )


@dataclass
class UserBalance:
    """
    One user's pairwise obligations in one currency.

    owes[x] is how much this user owes x; owed_by[x] is how much x owes this
    user. These maps are authoritative. net_balance is a display cache and
    can be stale; use derived_net() for anything that matters.
    """

    user_id: str
    owes: dict[str, Decimal] = field(default_factory=dict)
    owed_by: dict[str, Decimal] = field(default_factory=dict)
    net_balance: Decimal = Decimal(0)

    @property
    def total_owed(self) -> Decimal:
        """Total other users owe this user."""
        return sum(self.owed_by.values(), Decimal(0))

    @property
    def total_owing(self) -> Decimal:
        """Total this user owes other users."""
        return sum(self.owes.values(), Decimal(0))

    def derived_net(self) -> Decimal:
        """Net position recomputed from the pairwise maps."""
        return self.total_owed - self.total_owing

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "user_id": self.user_id,
            "owes": {k: str(v) for k, v in self.owes.items()},
            "owed_by": {k: str(v) for k, v in self.owed_by.items()},
            "net_balance": str(self.net_balance),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UserBalance":
        """Create UserBalance from dictionary."""
        return cls(
            user_id=str(data.get("user_id") or data.get("userId") or data["uid"]),
            owes=_amount_map(data.get("owes")),
            owed_by=_amount_map(data.get("owed_by", data.get("owedBy"))),
            net_balance=to_decimal(data.get("net_balance", data.get("netBalance", 0))),
        )


@dataclass(frozen=True)
class SettlingTransaction:
    """A suggested payment that moves net positions toward zero."""

    from_user: str
    to_user: str
    amount: Decimal
    currency: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "from": self.from_user,
            "to": self.to_user,
            "amount": str(self.amount),
            "currency": self.currency,
        }


@dataclass(frozen=True)
class CurrencySummary:
    """One user's totals in one currency."""

    currency: str
    net_balance: Decimal
    total_owed: Decimal
    total_owing: Decimal

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "currency": self.currency,
            "net_balance": str(self.net_balance),
            "total_owed": str(self.total_owed),
            "total_owing": str(self.total_owing),
        }


# currency -> user_id -> UserBalance
BalancesByCurrency = dict[str, dict[str, UserBalance]]


@dataclass
class GroupBalances:
    """Balances and suggested settlements for every currency in a group."""

    group_id: str | None
    balances_by_currency: BalancesByCurrency
    simplified_debts: list[SettlingTransaction]
    last_updated: datetime = field(default_factory=datetime.now)

    @property
    def currencies(self) -> list[str]:
        """Currencies present in the group, sorted."""
        return sorted(self.balances_by_currency)

    def debts_for(self, currency: str) -> list[SettlingTransaction]:
        """Suggested settlements in one currency."""
        code = normalize_currency_code(currency)
        return [t for t in self.simplified_debts if t.currency == code]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "group_id": self.group_id,
            "balances_by_currency": {
                currency: {user_id: b.to_dict() for user_id, b in sorted(users.items())}
                for currency, users in sorted(self.balances_by_currency.items())
            },
            "simplified_debts": [t.to_dict() for t in self.simplified_debts],
            "last_updated": self.last_updated.isoformat(),
        }
