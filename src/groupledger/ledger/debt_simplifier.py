#!/usr/bin/env python3
"""
Debt Simplification

Reduces one currency's pairwise obligation graph to a short list of settling
transactions using the greedy min-cash-flow heuristic.

Algorithm:
1. Derive each user's net position as sum(owed_by) - sum(owes). The cached
   UserBalance.net_balance is never read; it can be stale.
2. Users with net > epsilon are creditors, net < -epsilon are debtors.
3. Repeatedly match the largest debtor with the largest creditor and settle
   min(deficit, surplus). Ties go to the lowest user id.
4. Drop any transaction below epsilon.

Properties:
- Money is conserved: each creditor receives exactly its surplus and each
  debtor pays exactly its deficit
- At most n - 1 transactions for n non-zero participants, since every match
  exhausts at least one side
- Perfect cycles produce no transactions

This is a heuristic. It does not guarantee the minimum transaction count for
every graph; that problem is NP-hard in general.
"""

import heapq
import logging
from decimal import Decimal

from ..core.currency import normalize_currency_code
from ..core.models import BalancesByCurrency, SettlingTransaction, UserBalance

logger = logging.getLogger(__name__)

# Smallest amount worth settling, in the currency's major unit
SETTLEMENT_EPSILON = Decimal("0.01")


def derive_net_positions(balances: dict[str, UserBalance]) -> dict[str, Decimal]:
    """
    Net position per user from the pairwise maps.

    Positive means the user is owed money, negative means the user owes.

    Args:
        balances: Mapping user_id -> UserBalance for one currency

    Returns:
        Mapping user_id -> net position
    """
    return {user_id: balance.derived_net() for user_id, balance in balances.items()}


def simplify_debts(
    balances: dict[str, UserBalance],
    currency: str,
    epsilon: Decimal = SETTLEMENT_EPSILON,
) -> list[SettlingTransaction]:
    """
    Compute settling transactions for one currency's balance graph.

    Never raises on a malformed graph: self-obligations net to zero and users
    known only through another user's maps simply have no net position.

    Args:
        balances: Mapping user_id -> UserBalance, all in one currency
        currency: ISO code stamped on every transaction
        epsilon: Amounts below this are treated as rounding noise

    Returns:
        Settling transactions, largest debts first
    """
    currency = normalize_currency_code(currency)
    net_positions = derive_net_positions(balances)

    # heapq is a min-heap; negate magnitudes so the largest pops first and
    # equal magnitudes pop in user id order
    creditors: list[tuple[Decimal, str]] = []
    debtors: list[tuple[Decimal, str]] = []
    for user_id, net in net_positions.items():
        if net > epsilon:
            creditors.append((-net, user_id))
        elif net < -epsilon:
            debtors.append((net, user_id))
    heapq.heapify(creditors)
    heapq.heapify(debtors)

    logger.debug(
        "Simplifying %s: %d creditors, %d debtors",
        currency,
        len(creditors),
        len(debtors),
    )

    transactions: list[SettlingTransaction] = []
    while creditors and debtors:
        neg_surplus, creditor_id = heapq.heappop(creditors)
        neg_deficit, debtor_id = heapq.heappop(debtors)
        surplus = -neg_surplus
        deficit = -neg_deficit

        amount = min(deficit, surplus)
        if debtor_id != creditor_id:
            transactions.append(
                SettlingTransaction(from_user=debtor_id, to_user=creditor_id, amount=amount, currency=currency)
            )

        remaining_surplus = surplus - amount
        remaining_deficit = deficit - amount
        if remaining_surplus >= epsilon:
            heapq.heappush(creditors, (-remaining_surplus, creditor_id))
        if remaining_deficit >= epsilon:
            heapq.heappush(debtors, (-remaining_deficit, debtor_id))

    settled = [t for t in transactions if t.amount >= epsilon]
    if len(settled) != len(transactions):
        logger.debug("Discarded %d sub-epsilon %s transactions", len(transactions) - len(settled), currency)
    return settled


def simplify_all_currencies(
    balances_by_currency: BalancesByCurrency,
    epsilon: Decimal = SETTLEMENT_EPSILON,
) -> list[SettlingTransaction]:
    """
    Simplify every currency independently and concatenate the results.

    Currencies are processed in code order so the output is deterministic.
    """
    transactions: list[SettlingTransaction] = []
    for currency in sorted(balances_by_currency):
        transactions.extend(simplify_debts(balances_by_currency[currency], currency, epsilon))
    return transactions
