#!/usr/bin/env python3
"""
Split Allocator for Group Expenses.

Divides an expense total between participants so that the shares sum exactly
to the total at the currency's precision. Rounding happens on integer minor
units (via Money), never on binary floats.

Strategies:
- Equal: rounded base share for everyone, residual to the last participant
- Exact: seeded like equal, as a starting point for manual editing
- Percentage: rounded base percentage for everyone, residual percentage and
  residual amount to the last participant
"""

from collections import Counter
from decimal import Decimal

from ..core.currency import (
    AmountLike,
    allocate_remainder,
    get_decimal_digits,
    round_to_precision,
    to_decimal,
    validate_sum_equals_total,
)
from ..core.models import Split, SplitType
from ..core.money import Money

HUNDRED = Decimal(100)

# Fractional digits kept on percentages ("33.33")
PERCENTAGE_DIGITS = 2


def _normalize_total(total_amount: AmountLike, currency: str) -> Decimal | None:
    total = to_decimal(total_amount)
    if total <= 0:
        return None
    return round_to_precision(total, get_decimal_digits(currency))


def calculate_equal_splits(
    total_amount: AmountLike,
    currency: str,
    participant_ids: list[str],
) -> list[Split]:
    """
    Split a total equally, giving the rounding residual to the last participant.

    base = round(total / n) at the currency's precision; the last participant
    gets total - base * (n - 1).

    Args:
        total_amount: Expense total in major units
        currency: ISO currency code
        participant_ids: Participants in display order

    Returns:
        List of Split, empty for no participants or a non-positive total

    Examples:
        calculate_equal_splits(100, "JPY", ["a", "b", "c"])  -> 33, 33, 34
        calculate_equal_splits(100, "USD", ["a", "b", "c"])  -> 33.33, 33.33, 33.34

    Note:
        When the total is smaller than the rounded shares, the last share goes
        negative (0.05 USD across 7 -> six of 0.01 and -0.01). The sum is still
        exact, but validate_splits rejects such a split.
    """
    if not participant_ids:
        return []
    total = _normalize_total(total_amount, currency)
    if total is None:
        return []

    base = Money.from_amount(total / len(participant_ids), currency).to_amount()
    amounts = allocate_remainder([base] * len(participant_ids), total)
    return [Split(participant_id=pid, amount=amount) for pid, amount in zip(participant_ids, amounts)]


def calculate_exact_splits(
    total_amount: AmountLike,
    currency: str,
    participant_ids: list[str],
) -> list[Split]:
    """
    Seed exact (manual) splits with the equal split.

    Editing the seeded amounts afterwards is the caller's concern; only the
    initial sum is guaranteed.
    """
    return calculate_equal_splits(total_amount, currency, participant_ids)


def calculate_percentage_splits(
    total_amount: AmountLike,
    currency: str,
    participant_ids: list[str],
) -> list[Split]:
    """
    Split a total by equal percentages.

    Every participant but the last gets round(100 / n) percent (two decimals)
    and the matching rounded amount. The last participant's percentage is
    100 - base * (n - 1) and its amount is the residual, so percentages sum
    to exactly 100 and amounts to exactly the total.

    In large groups the rounded base percentage can overshoot, leaving the
    last participant a negative percentage and amount (601 participants of
    100 USD -> last is -2.00 at -2.00%). Sums stay exact.

    Args:
        total_amount: Expense total in major units
        currency: ISO currency code
        participant_ids: Participants in display order

    Returns:
        List of Split with percentage set, empty for no participants or a
        non-positive total
    """
    if not participant_ids:
        return []
    total = _normalize_total(total_amount, currency)
    if total is None:
        return []

    count = len(participant_ids)
    base_percentage = round_to_precision(HUNDRED / count, PERCENTAGE_DIGITS)
    last_percentage = HUNDRED - base_percentage * (count - 1)

    base = Money.from_amount(total * base_percentage / HUNDRED, currency).to_amount()
    amounts = allocate_remainder([base] * count, total)
    percentages = [base_percentage] * (count - 1) + [last_percentage]

    return [
        Split(participant_id=pid, amount=amount, percentage=percentage)
        for pid, amount, percentage in zip(participant_ids, amounts, percentages)
    ]


_STRATEGIES = {
    SplitType.EQUAL: calculate_equal_splits,
    SplitType.EXACT: calculate_exact_splits,
    SplitType.PERCENTAGE: calculate_percentage_splits,
}


def allocate_splits(
    split_type: SplitType | str,
    total_amount: AmountLike,
    currency: str,
    participant_ids: list[str],
) -> list[Split]:
    """
    Allocate splits with the strategy for split_type.

    Args:
        split_type: SplitType or its string value ("equal", "exact", "percentage")
        total_amount: Expense total in major units
        currency: ISO currency code
        participant_ids: Participants in display order

    Returns:
        List of Split
    """
    strategy = _STRATEGIES[SplitType(split_type)]
    return strategy(total_amount, currency, participant_ids)


def validate_splits(
    splits: list[Split],
    total_amount: AmountLike,
    currency: str,
    split_type: SplitType | str | None = None,
) -> str | None:
    """
    Check that stored splits reconcile with their expense.

    Args:
        splits: Splits to check
        total_amount: Expense total in major units
        currency: ISO currency code
        split_type: If PERCENTAGE, percentages must also sum to 100

    Returns:
        Error message, or None if the splits are valid
    """
    if not splits:
        return "No splits provided"

    duplicates = [pid for pid, seen in Counter(s.participant_id for s in splits).items() if seen > 1]
    if duplicates:
        return f"Duplicate participants in splits: {', '.join(sorted(duplicates))}"

    negative = [s.participant_id for s in splits if s.amount < 0]
    if negative:
        return f"Split amounts cannot be negative: {', '.join(negative)}"

    if not validate_sum_equals_total([s.amount for s in splits], total_amount):
        split_total = sum((s.amount for s in splits), Decimal(0))
        return f"Split total {split_total} doesn't match expense total {to_decimal(total_amount)} {currency}"

    if split_type is not None and SplitType(split_type) == SplitType.PERCENTAGE:
        percentage_sum = sum((s.percentage or Decimal(0) for s in splits), Decimal(0))
        if percentage_sum != HUNDRED:
            return f"Split percentages sum to {percentage_sum}, expected 100"

    return None
