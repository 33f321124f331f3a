"""
Ledger Netting Package

Turns recorded expenses and settlements into balances and suggested payments.

Pipeline:
- split_allocator: expense total -> exact per-participant splits
- balance_aggregator: expenses + settlements -> per-currency pairwise graph
- debt_simplifier: one currency's graph -> settling transactions
- group_balances: the whole pipeline for one group
- loader: JSON ledger files
"""

from .balance_aggregator import PairwiseLedger, aggregate_balances, summarize_user
from .debt_simplifier import (
    SETTLEMENT_EPSILON,
    derive_net_positions,
    simplify_all_currencies,
    simplify_debts,
)
from .group_balances import calculate_group_balances
from .loader import Ledger, LedgerFormatError, load_ledger, parse_ledger
from .split_allocator import (
    allocate_splits,
    calculate_equal_splits,
    calculate_exact_splits,
    calculate_percentage_splits,
    validate_splits,
)

__all__ = [
    # Split allocation
    "allocate_splits",
    "calculate_equal_splits",
    "calculate_exact_splits",
    "calculate_percentage_splits",
    "validate_splits",
    # Aggregation
    "PairwiseLedger",
    "aggregate_balances",
    "summarize_user",
    # Simplification
    "SETTLEMENT_EPSILON",
    "derive_net_positions",
    "simplify_all_currencies",
    "simplify_debts",
    # Group report
    "calculate_group_balances",
    # Ledger files
    "Ledger",
    "LedgerFormatError",
    "load_ledger",
    "parse_ledger",
]
