"""
Group Ledger - Shared Expense Netting and Settlement

Tracks who owes whom in a group that shares expenses in one or more
currencies, and suggests the payments that settle everyone up.

Key Features:
- Currency-exact expense splitting (equal, exact, percentage)
- Per-currency pairwise balance graphs from expenses and settlements
- Greedy debt simplification to at most n - 1 payments per currency
- JSON ledger files and a command-line interface

Domain Packages:
- core: Currency catalog, Money, data models, configuration
- ledger: Split allocation, balance aggregation, debt simplification
- cli: Command-line interface

Example Usage:
    from groupledger.ledger import calculate_equal_splits, aggregate_balances, simplify_debts
    from groupledger.core.currency import round_to_currency

Version: 0.1.0
"""

__version__ = "0.1.0"
__author__ = "Group Ledger Contributors"

from .core.config import Environment, get_config
from .core.currency import format_amount, get_decimal_digits, round_to_currency
from .core.models import Expense, Settlement, SettlingTransaction, Split, SplitType, UserBalance
from .core.money import Money

__all__ = [
    # Configuration
    "Environment",
    "get_config",
    # Currency
    "Money",
    "format_amount",
    "get_decimal_digits",
    "round_to_currency",
    # Models
    "Expense",
    "Settlement",
    "SettlingTransaction",
    "Split",
    "SplitType",
    "UserBalance",
]
