"""
Core Utilities Package

Shared primitives used by the ledger engine and the CLI.

This package provides:
- Currency catalog and precision-safe rounding
- Money value type in integer minor units
- Data models for expenses, settlements and balances
- Configuration management and JSON helpers
"""

from .config import (
    Config,
    Environment,
    get_config,
    get_data_dir,
    get_output_dir,
    get_settlement_epsilon,
    is_development,
    is_production,
    is_test,
    reload_config,
)
from .currency import (
    Currency,
    UnknownCurrencyError,
    allocate_remainder,
    amount_to_minor_units,
    format_amount,
    get_amount_precision_error,
    get_currency,
    get_decimal_digits,
    is_supported_currency,
    list_currencies,
    minor_unit,
    minor_units_to_amount,
    round_to_currency,
    round_to_precision,
    to_decimal,
    validate_amount_precision,
    validate_sum_equals_total,
)
from .models import (
    BalancesByCurrency,
    CurrencySummary,
    Expense,
    GroupBalances,
    Settlement,
    SettlingTransaction,
    Split,
    SplitType,
    UserBalance,
)
from .money import CurrencyMismatchError, Money

__all__ = [
    "BalancesByCurrency",
    # Configuration
    "Config",
    # Currency
    "Currency",
    "CurrencyMismatchError",
    "CurrencySummary",
    "Environment",
    # Data models
    "Expense",
    "GroupBalances",
    "Money",
    "Settlement",
    "SettlingTransaction",
    "Split",
    "SplitType",
    "UnknownCurrencyError",
    "UserBalance",
    "allocate_remainder",
    "amount_to_minor_units",
    "format_amount",
    "get_amount_precision_error",
    "get_config",
    "get_currency",
    "get_data_dir",
    "get_decimal_digits",
    "get_output_dir",
    "get_settlement_epsilon",
    "is_development",
    "is_production",
    "is_supported_currency",
    "is_test",
    "list_currencies",
    "minor_unit",
    "minor_units_to_amount",
    "reload_config",
    "round_to_currency",
    "round_to_precision",
    "to_decimal",
    "validate_amount_precision",
    "validate_sum_equals_total",
]
