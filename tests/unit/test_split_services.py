"""Unit tests for expense split computation"""

import random
from decimal import Decimal

import pytest

from splitledger.core.exceptions import ValidationError
from splitledger.schemas.expense import SplitInput, SplitType
from splitledger.services.split_services import compute_splits


def participants(*user_ids, values=None):
    if values is None:
        return [SplitInput(user_id=uid) for uid in user_ids]
    return [SplitInput(user_id=uid, split_value=v) for uid, v in zip(user_ids, values)]


def amounts(shares):
    return [s.share_amount for s in shares]


def test_equal_split_even_division():
    shares = compute_splits(Decimal("60.00"), SplitType.EQUAL, participants(101, 102, 103))

    assert [s.user_id for s in shares] == [101, 102, 103]
    assert amounts(shares) == [Decimal("20.00")] * 3
    assert all(s.split_type == SplitType.EQUAL for s in shares)
    assert all(s.split_value is None for s in shares)


def test_equal_split_remainder_goes_to_first_participant():
    """10.00 over three people: first one absorbs the extra cent"""
    shares = compute_splits(Decimal("10.00"), SplitType.EQUAL, participants(1, 2, 3))

    assert amounts(shares) == [Decimal("3.34"), Decimal("3.33"), Decimal("3.33")]
    assert sum(amounts(shares)) == Decimal("10.00")


def test_equal_split_remainder_follows_input_order():
    shares = compute_splits(Decimal("10.00"), SplitType.EQUAL, participants(3, 1, 2))

    assert shares[0].user_id == 3
    assert shares[0].share_amount == Decimal("3.34")


def test_equal_split_negative_remainder():
    """0.05 / 3 rounds up to 0.02, so the first share is reduced"""
    shares = compute_splits(Decimal("0.05"), SplitType.EQUAL, participants(1, 2, 3))

    assert amounts(shares) == [Decimal("0.01"), Decimal("0.02"), Decimal("0.02")]


def test_equal_split_single_participant():
    shares = compute_splits("12.34", SplitType.EQUAL, participants(7))
    assert amounts(shares) == [Decimal("12.34")]


def test_equal_split_accepts_string_strategy():
    shares = compute_splits(Decimal("9.00"), "EQUAL", participants(1, 2))
    assert amounts(shares) == [Decimal("4.50"), Decimal("4.50")]


def test_equal_split_sums_exactly_for_many_amounts():
    rng = random.Random(42)
    for _ in range(300):
        total = Decimal(rng.randint(1, 1_000_000)) / 100
        n = rng.randint(1, 13)
        shares = compute_splits(total, SplitType.EQUAL, participants(*range(1, n + 1)))
        assert sum(amounts(shares)) == total


def test_exact_split_passes_values_through():
    shares = compute_splits(
        Decimal("50.00"),
        SplitType.EXACT,
        participants(101, 102, values=[Decimal("0.00"), Decimal("50.00")]),
    )

    assert amounts(shares) == [Decimal("0.00"), Decimal("50.00")]
    assert [s.split_value for s in shares] == [Decimal("0.00"), Decimal("50.00")]
    assert all(s.split_type == SplitType.EXACT for s in shares)


def test_exact_split_mismatched_sum_names_discrepancy():
    with pytest.raises(ValidationError) as exc:
        compute_splits(
            Decimal("50.00"),
            SplitType.EXACT,
            participants(1, 2, values=[Decimal("20.00"), Decimal("20.00")]),
        )

    assert "40.00" in exc.value.detail
    assert "50.00" in exc.value.detail
    assert "10.00" in exc.value.detail


def test_exact_split_missing_value():
    splits = [SplitInput(user_id=1, split_value=Decimal("10.00")), SplitInput(user_id=2)]

    with pytest.raises(ValidationError, match="required"):
        compute_splits(Decimal("10.00"), SplitType.EXACT, splits)


def test_exact_split_rejects_sub_cent_values():
    with pytest.raises(ValidationError, match="two decimal places"):
        compute_splits(
            Decimal("10.00"),
            SplitType.EXACT,
            participants(1, 2, values=[Decimal("5.005"), Decimal("4.995")]),
        )


def test_exact_split_rejects_negative_values():
    with pytest.raises(ValidationError, match="negative"):
        compute_splits(
            Decimal("10.00"),
            SplitType.EXACT,
            participants(1, 2, values=[Decimal("15.00"), Decimal("-5.00")]),
        )


def test_empty_participants_rejected():
    with pytest.raises(ValidationError, match="At least one split is required"):
        compute_splits(Decimal("10.00"), SplitType.EQUAL, [])


@pytest.mark.parametrize("amount", [Decimal("0.00"), Decimal("-5.00")])
def test_non_positive_amount_rejected(amount):
    with pytest.raises(ValidationError, match="positive"):
        compute_splits(amount, SplitType.EQUAL, participants(1, 2))


def test_sub_cent_amount_rejected():
    with pytest.raises(ValidationError, match="two decimal places"):
        compute_splits(Decimal("10.005"), SplitType.EQUAL, participants(1, 2))


def test_duplicate_participants_rejected():
    with pytest.raises(ValidationError, match="Duplicate"):
        compute_splits(Decimal("10.00"), SplitType.EQUAL, participants(1, 1))


def test_float_amount_rejected():
    with pytest.raises(ValidationError):
        compute_splits(10.0, SplitType.EQUAL, participants(1, 2))


def test_unknown_split_type_rejected():
    with pytest.raises(ValidationError, match="Unsupported split type"):
        compute_splits(Decimal("10.00"), "PERCENT", participants(1, 2))


def test_oversized_amount_is_a_validation_error():
    with pytest.raises(ValidationError, match="Invalid money value"):
        compute_splits(Decimal("1E+30"), SplitType.EQUAL, participants(1))


def test_oversized_exact_value_is_a_validation_error():
    with pytest.raises(ValidationError, match="Invalid money value"):
        compute_splits(Decimal("10.00"), SplitType.EXACT, participants(1, values=[Decimal("1E+30")]))
