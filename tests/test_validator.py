"""Tests for unit order, uniqueness and sign folding."""

from fractions import Fraction

import pytest

from calinterval.errors import (
    DuplicateUnit,
    EmptyExpression,
    MalformedNumber,
    OutOfOrderUnit,
)
from calinterval.lexer import SignMarker, UnitToken, tokenize
from calinterval.units import UnitKind
from calinterval.validator import START_RANK, FoldState, step, validate


def _day(position: int = 0) -> UnitToken:
    return UnitToken(
        magnitude=Fraction(1), unit=UnitKind.DAY, label="d", position=position
    )


def test_initial_state():
    """Test the fold starts positive, before the first rank, with nothing recorded."""
    state = FoldState()

    assert state.sign == 1
    assert state.highest_rank == START_RANK
    assert state.quantities == ()


def test_sign_marker_flips_sign_only():
    """Test that a sign marker changes the sign and nothing else."""
    flipped = step(FoldState(), SignMarker(position=0))

    assert flipped.sign == -1
    assert flipped.highest_rank == START_RANK
    assert step(flipped, SignMarker(position=1)).sign == 1


def test_unit_token_records_current_sign():
    """Test that a quantity takes the sign in effect when it is read."""
    state = step(FoldState(sign=-1), _day())

    assert state.highest_rank == int(UnitKind.DAY)
    assert len(state.quantities) == 1
    assert state.quantities[0].sign == -1
    assert state.quantities[0].value == -1


def test_step_does_not_mutate():
    """Test that step returns a new state."""
    state = FoldState()
    step(state, _day())

    assert state.quantities == ()


def test_sign_segments():
    """Test that a sign applies until the next sign marker."""
    single = validate(tokenize("1d - 10m 30s"))
    double = validate(tokenize("1d - 10m - 30s"))

    assert [q.sign for q in single] == [1, -1, -1]
    assert [q.sign for q in double] == [1, -1, 1]


def test_leading_sign():
    """Test a sign marker before the first unit."""
    expression = validate(tokenize("-5 weeks 3 days"))

    assert [q.sign for q in expression] == [-1, -1]


def test_out_of_order_units():
    """Test that a larger unit after a smaller one fails."""
    with pytest.raises(OutOfOrderUnit, match="largest to smallest") as info:
        validate(tokenize("1mo 1y"))

    assert info.value.position == 4


def test_out_of_order_fixed_units():
    """Test out-of-order fixed units."""
    with pytest.raises(OutOfOrderUnit) as info:
        validate(tokenize("5 days 3 weeks"))

    assert info.value.position == 7


def test_duplicate_units():
    """Test that a repeated unit fails."""
    with pytest.raises(DuplicateUnit) as info:
        validate(tokenize("5 days 3 days"))

    assert info.value.position == 7


def test_duplicate_units_across_signs():
    """Test that a unit may not repeat even in another sign segment."""
    with pytest.raises(DuplicateUnit):
        validate(tokenize("1d - 1d"))


def test_duplicate_with_different_labels():
    """Test that different labels of one unit still count as a repeat."""
    with pytest.raises(DuplicateUnit):
        validate(tokenize("1h 2hr"))


def test_units_may_be_skipped():
    """Test that any increasing subset of units is allowed."""
    expression = validate(tokenize("1y 2d 3s"))

    assert [q.unit for q in expression] == [
        UnitKind.YEAR,
        UnitKind.DAY,
        UnitKind.SECOND,
    ]


def test_fractional_year():
    """Test that years must be whole."""
    with pytest.raises(MalformedNumber, match="whole numbers"):
        validate(tokenize("0.5y"))


def test_fractional_month():
    """Test that months must be whole."""
    with pytest.raises(MalformedNumber, match="whole numbers"):
        validate(tokenize("1y 1.5mo"))


def test_whole_valued_decimal_year():
    """Test that '1.0y' has no fractional part and is accepted."""
    expression = validate(tokenize("1.0y"))

    assert expression[0].value == 1


def test_empty():
    """Test that empty or blank input fails."""
    with pytest.raises(EmptyExpression):
        validate(tokenize(""))

    with pytest.raises(EmptyExpression):
        validate(tokenize("   "))
