#!/usr/bin/env python3
"""Tests for split allocation strategies."""

from decimal import Decimal

import pytest

from groupledger.core.models import Split, SplitType
from groupledger.ledger.split_allocator import (
    allocate_splits,
    calculate_equal_splits,
    calculate_exact_splits,
    calculate_percentage_splits,
    validate_splits,
)

MEMBERS = ["alice", "bob", "carol"]


def amounts(splits):
    return [s.amount for s in splits]


class TestEqualSplits:
    """Test equal allocation with residual on the last participant."""

    @pytest.mark.ledger
    def test_zero_decimal_currency(self):
        """Test 100 JPY across three participants."""
        splits = calculate_equal_splits(100, "JPY", MEMBERS)
        assert amounts(splits) == [Decimal("33"), Decimal("33"), Decimal("34")]
        assert [s.participant_id for s in splits] == MEMBERS

    @pytest.mark.ledger
    def test_two_decimal_currency(self):
        """Test 100 USD across three participants."""
        splits = calculate_equal_splits(100, "USD", MEMBERS)
        assert amounts(splits) == [Decimal("33.33"), Decimal("33.33"), Decimal("33.34")]

    @pytest.mark.ledger
    def test_three_decimal_currency(self):
        """Test 10 BHD across three participants."""
        splits = calculate_equal_splits(10, "BHD", MEMBERS)
        assert amounts(splits) == [Decimal("3.333"), Decimal("3.333"), Decimal("3.334")]

    @pytest.mark.ledger
    def test_even_division_has_no_residual(self):
        """Test totals that divide evenly."""
        assert amounts(calculate_equal_splits("90.00", "USD", MEMBERS)) == [Decimal("30.00")] * 3

    @pytest.mark.ledger
    def test_single_participant_gets_total(self):
        """Test one participant receives the whole amount."""
        assert amounts(calculate_equal_splits("45.99", "USD", ["alice"])) == [Decimal("45.99")]

    @pytest.mark.ledger
    @pytest.mark.parametrize("total", ["0.01", "1.00", "99.99", "1234.56", "0.05"])
    @pytest.mark.parametrize("count", [1, 2, 3, 6, 7])
    def test_sum_equals_total(self, total, count):
        """Test shares always reconcile with the total."""
        participants = [f"user_{i}" for i in range(count)]
        splits = calculate_equal_splits(total, "USD", participants)
        assert sum(amounts(splits)) == Decimal(total)

    @pytest.mark.ledger
    def test_tiny_total_gives_negative_last_share(self):
        """Test a total below the rounded shares still sums exactly."""
        splits = calculate_equal_splits("0.05", "USD", [f"user_{i}" for i in range(7)])
        assert amounts(splits) == [Decimal("0.01")] * 6 + [Decimal("-0.01")]
        assert sum(amounts(splits)) == Decimal("0.05")
        assert validate_splits(splits, "0.05", "USD") == "Split amounts cannot be negative: user_6"

    @pytest.mark.ledger
    @pytest.mark.parametrize("total", [0, -10])
    def test_non_positive_total_returns_empty(self, total):
        """Test zero and negative totals produce no splits."""
        assert calculate_equal_splits(total, "USD", MEMBERS) == []

    @pytest.mark.ledger
    def test_no_participants_returns_empty(self):
        """Test an empty participant list produces no splits."""
        assert calculate_equal_splits(100, "USD", []) == []

    @pytest.mark.ledger
    def test_exact_is_seeded_like_equal(self):
        """Test exact splits start from the equal allocation."""
        assert calculate_exact_splits(100, "USD", MEMBERS) == calculate_equal_splits(100, "USD", MEMBERS)


class TestPercentageSplits:
    """Test percentage allocation."""

    @pytest.mark.ledger
    def test_three_way_usd(self):
        """Test percentages and amounts for 100 USD across three."""
        splits = calculate_percentage_splits(100, "USD", MEMBERS)
        assert [s.percentage for s in splits] == [Decimal("33.33"), Decimal("33.33"), Decimal("33.34")]
        assert amounts(splits) == [Decimal("33.33"), Decimal("33.33"), Decimal("33.34")]

    @pytest.mark.ledger
    def test_three_way_jpy(self):
        """Test amounts round to whole yen."""
        splits = calculate_percentage_splits(1000, "JPY", MEMBERS)
        assert amounts(splits) == [Decimal("333"), Decimal("333"), Decimal("334")]

    @pytest.mark.ledger
    @pytest.mark.parametrize("count", [1, 2, 3, 4, 6, 7, 9])
    def test_percentages_sum_to_hundred(self, count):
        """Test percentages and amounts both reconcile."""
        participants = [f"user_{i}" for i in range(count)]
        splits = calculate_percentage_splits("250.00", "EUR", participants)
        assert sum(s.percentage for s in splits) == Decimal(100)
        assert sum(amounts(splits)) == Decimal("250.00")

    @pytest.mark.ledger
    def test_seven_way_last_percentage(self):
        """Test the last participant absorbs the percentage residual."""
        splits = calculate_percentage_splits(100, "USD", [f"u{i}" for i in range(7)])
        assert splits[0].percentage == Decimal("14.29")
        assert splits[-1].percentage == Decimal("14.26")

    @pytest.mark.ledger
    def test_large_group_overshoot_keeps_sums_exact(self):
        """Test rounded percentages can push the last share negative in large groups."""
        splits = calculate_percentage_splits(100, "USD", [f"user_{i}" for i in range(601)])
        assert splits[0].percentage == Decimal("0.17")
        assert splits[-1].percentage == Decimal("-2.00")
        assert splits[-1].amount == Decimal("-2.00")
        assert sum(s.percentage for s in splits) == Decimal(100)
        assert sum(amounts(splits)) == Decimal(100)

    @pytest.mark.ledger
    def test_empty_inputs(self):
        """Test empty participants and non-positive totals."""
        assert calculate_percentage_splits(100, "USD", []) == []
        assert calculate_percentage_splits(0, "USD", MEMBERS) == []


class TestAllocateSplits:
    """Test strategy dispatch."""

    @pytest.mark.ledger
    def test_accepts_enum_and_string(self):
        """Test split_type may be an enum or its value."""
        by_enum = allocate_splits(SplitType.PERCENTAGE, 100, "USD", MEMBERS)
        by_value = allocate_splits("percentage", 100, "USD", MEMBERS)
        assert by_enum == by_value

    @pytest.mark.ledger
    def test_unknown_split_type(self):
        """Test unknown strategies raise ValueError."""
        with pytest.raises(ValueError):
            allocate_splits("shares", 100, "USD", MEMBERS)


class TestValidateSplits:
    """Test reconciliation checks on stored splits."""

    @pytest.mark.ledger
    def test_valid_splits(self):
        """Test matching splits pass."""
        splits = [Split("alice", Decimal("10.00")), Split("bob", Decimal("20.00"))]
        assert validate_splits(splits, "30.00", "USD") is None

    @pytest.mark.ledger
    def test_empty_splits(self):
        """Test missing splits are reported."""
        assert validate_splits([], "30.00", "USD") == "No splits provided"

    @pytest.mark.ledger
    def test_sum_mismatch(self):
        """Test a total mismatch is reported."""
        splits = [Split("alice", Decimal("10.00")), Split("bob", Decimal("19.99"))]
        error = validate_splits(splits, "30.00", "USD")
        assert error is not None
        assert "doesn't match expense total" in error

    @pytest.mark.ledger
    def test_duplicate_participants(self):
        """Test a participant may appear only once."""
        splits = [Split("alice", Decimal("10.00")), Split("alice", Decimal("20.00"))]
        assert validate_splits(splits, "30.00", "USD") == "Duplicate participants in splits: alice"

    @pytest.mark.ledger
    def test_negative_amount(self):
        """Test negative shares are rejected."""
        splits = [Split("alice", Decimal("40.00")), Split("bob", Decimal("-10.00"))]
        assert validate_splits(splits, "30.00", "USD") == "Split amounts cannot be negative: bob"

    @pytest.mark.ledger
    def test_percentage_sum_checked(self):
        """Test percentage splits must total 100 percent."""
        splits = [
            Split("alice", Decimal("15.00"), Decimal("50")),
            Split("bob", Decimal("15.00"), Decimal("40")),
        ]
        assert validate_splits(splits, "30.00", "USD", SplitType.PERCENTAGE) == (
            "Split percentages sum to 90, expected 100"
        )
        assert validate_splits(splits, "30.00", "USD") is None

    @pytest.mark.ledger
    def test_allocated_splits_validate(self):
        """Test every strategy's output passes validation."""
        for split_type in SplitType:
            splits = allocate_splits(split_type, "100.00", "USD", MEMBERS)
            assert validate_splits(splits, "100.00", "USD", split_type) is None
