#!/usr/bin/env python3
"""
Balance Aggregator

Folds a group's expenses and settlements into a pairwise obligation graph per
currency. Each currency is aggregated independently; records never touch
another currency's graph.

Pair Netting:
- Every unordered pair of users carries one signed obligation
- An expense split adds to "participant owes payer"
- A settlement subtracts from "payer owes payee"; overpayment flips the
  direction so the payee now owes the payer the excess
- Obligations smaller than one minor unit are dropped
"""

import logging
from collections import defaultdict
from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from ..core.currency import minor_unit
from ..core.models import (
    BalancesByCurrency,
    CurrencySummary,
    Expense,
    Settlement,
    Split,
    UserBalance,
)
from .split_allocator import allocate_splits, validate_splits

logger = logging.getLogger(__name__)


class PairwiseLedger:
    """
    Signed obligations between pairs of users in one currency.

    Stored once per unordered pair as (low_id, high_id) -> amount, where a
    positive amount means low_id owes high_id.
    """

    def __init__(self, currency: str):
        self.currency = currency
        self.users: set[str] = set()
        self._pairs: dict[tuple[str, str], Decimal] = defaultdict(Decimal)

    def add_user(self, user_id: str) -> None:
        """Register a user so it appears in the output even with no obligations."""
        self.users.add(user_id)

    def add_obligation(self, debtor: str, creditor: str, amount: Decimal) -> None:
        """
        Record that debtor owes creditor amount (negative amounts reduce it).

        Self-obligations have no net effect and are ignored.
        """
        self.users.update((debtor, creditor))
        if debtor == creditor:
            return
        if debtor < creditor:
            self._pairs[(debtor, creditor)] += amount
        else:
            self._pairs[(creditor, debtor)] -= amount

    def obligation(self, debtor: str, creditor: str) -> Decimal:
        """How much debtor currently owes creditor (zero if the debt runs the other way)."""
        if debtor < creditor:
            value = self._pairs.get((debtor, creditor), Decimal(0))
        else:
            value = -self._pairs.get((creditor, debtor), Decimal(0))
        return max(value, Decimal(0))

    def to_balances(self) -> dict[str, UserBalance]:
        """
        Build the owes/owed_by maps for every user.

        Obligations below one minor unit are treated as zero and dropped.
        """
        threshold = minor_unit(self.currency)
        balances = {user_id: UserBalance(user_id=user_id) for user_id in sorted(self.users)}

        for (low, high), value in sorted(self._pairs.items()):
            if abs(value) < threshold:
                if value:
                    logger.debug("Dropping %s residue between %s and %s: %s", self.currency, low, high, value)
                continue

            debtor, creditor = (low, high) if value > 0 else (high, low)
            amount = abs(value)
            balances[debtor].owes[creditor] = amount
            balances[creditor].owed_by[debtor] = amount

        for balance in balances.values():
            balance.net_balance = balance.derived_net()

        return balances


def _chronological(records: Iterable) -> list:
    return sorted(records, key=lambda r: (r.date or date.min, r.id))


def expense_splits(expense: Expense) -> list[Split] | None:
    """
    Resolve the splits an expense contributes to the graph.

    Stored splits are validated against the expense total; when none are
    stored they are allocated from split_type and participants.

    Returns:
        Splits to apply, or None if the stored splits don't reconcile
    """
    if not expense.splits:
        return allocate_splits(expense.split_type, expense.amount, expense.currency, expense.participants)

    error = validate_splits(expense.splits, expense.amount, expense.currency, expense.split_type)
    if error:
        logger.warning("Skipping expense %s: %s", expense.id, error)
        return None
    return expense.splits


def apply_expense(ledger: PairwiseLedger, expense: Expense) -> None:
    """Add every non-payer split as "participant owes payer"."""
    splits = expense_splits(expense)
    if splits is None:
        return

    ledger.add_user(expense.paid_by)
    for split in splits:
        ledger.add_user(split.participant_id)
        if split.participant_id == expense.paid_by:
            continue
        ledger.add_obligation(split.participant_id, expense.paid_by, split.amount)


def apply_settlement(ledger: PairwiseLedger, settlement: Settlement) -> None:
    """Reduce "payer owes payee" by the settlement amount."""
    if settlement.payer_id == settlement.payee_id:
        logger.warning("Ignoring settlement %s: payer and payee are both %s", settlement.id, settlement.payer_id)
        ledger.add_user(settlement.payer_id)
        return

    outstanding = ledger.obligation(settlement.payer_id, settlement.payee_id)
    if settlement.amount > outstanding:
        logger.debug(
            "Settlement %s overpays %s -> %s by %s %s",
            settlement.id,
            settlement.payer_id,
            settlement.payee_id,
            settlement.amount - outstanding,
            settlement.currency,
        )
    ledger.add_obligation(settlement.payer_id, settlement.payee_id, -settlement.amount)


def aggregate_balances(
    expenses: Iterable[Expense],
    settlements: Iterable[Settlement] = (),
    member_ids: Iterable[str] | None = None,
) -> BalancesByCurrency:
    """
    Fold expenses and settlements into per-currency balance graphs.

    Args:
        expenses: Group expenses (soft-deleted ones are ignored)
        settlements: Group settlements (soft-deleted ones are ignored)
        member_ids: Group members to include in every currency even if they
            have no obligations there

    Returns:
        Mapping currency -> user_id -> UserBalance
    """
    ledgers: dict[str, PairwiseLedger] = {}

    def ledger_for(currency: str) -> PairwiseLedger:
        if currency not in ledgers:
            ledgers[currency] = PairwiseLedger(currency)
        return ledgers[currency]

    for record in _chronological([*expenses, *settlements]):
        if record.is_deleted:
            logger.debug("Skipping deleted %s %s", type(record).__name__.lower(), record.id)
            continue
        if isinstance(record, Expense):
            apply_expense(ledger_for(record.currency), record)
        else:
            apply_settlement(ledger_for(record.currency), record)

    members = list(member_ids or [])
    result: BalancesByCurrency = {}
    for currency in sorted(ledgers):
        ledger = ledgers[currency]
        for member_id in members:
            ledger.add_user(member_id)
        result[currency] = ledger.to_balances()

    return result


def summarize_user(balances_by_currency: BalancesByCurrency, user_id: str) -> list[CurrencySummary]:
    """
    Per-currency totals for one user, derived from the pairwise maps.

    Currencies where the user has no obligations are omitted.
    """
    summaries = []
    for currency in sorted(balances_by_currency):
        balance = balances_by_currency[currency].get(user_id)
        if balance is None or (not balance.owes and not balance.owed_by):
            continue
        summaries.append(
            CurrencySummary(
                currency=currency,
                net_balance=balance.derived_net(),
                total_owed=balance.total_owed,
                total_owing=balance.total_owing,
            )
        )
    return summaries
