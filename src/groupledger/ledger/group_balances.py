#!/usr/bin/env python3
"""
Group Balance Report

Chains aggregation and simplification into the view a group screen needs:
every currency's balance graph plus suggested settlements for each.
"""

import logging
from collections.abc import Iterable
from decimal import Decimal

from ..core.models import Expense, GroupBalances, Settlement
from .balance_aggregator import aggregate_balances
from .debt_simplifier import SETTLEMENT_EPSILON, simplify_all_currencies

logger = logging.getLogger(__name__)


def calculate_group_balances(
    group_id: str | None,
    expenses: Iterable[Expense],
    settlements: Iterable[Settlement] = (),
    member_ids: Iterable[str] | None = None,
    epsilon: Decimal = SETTLEMENT_EPSILON,
) -> GroupBalances:
    """
    Recompute a group's balances from its full history.

    Args:
        group_id: Group identifier carried into the report
        expenses: All of the group's expenses
        settlements: All of the group's settlements
        member_ids: Members to list in every currency
        epsilon: Smallest amount worth settling

    Returns:
        GroupBalances with per-currency graphs and simplified debts
    """
    balances_by_currency = aggregate_balances(expenses, settlements, member_ids)
    simplified_debts = simplify_all_currencies(balances_by_currency, epsilon)

    logger.info(
        "Calculated balances for group %s: %d currencies, %d suggested settlements",
        group_id or "<unnamed>",
        len(balances_by_currency),
        len(simplified_debts),
    )

    return GroupBalances(
        group_id=group_id,
        balances_by_currency=balances_by_currency,
        simplified_debts=simplified_debts,
    )
