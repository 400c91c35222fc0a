"""Enforce unit order and uniqueness, and fold sign markers into quantities.

The fold is a straight-line state machine over unit ranks. Its whole state
lives in an immutable FoldState that step() threads from item to item, so a
single step can be checked in isolation.
"""

from collections.abc import Iterable
from dataclasses import dataclass, replace
from functools import reduce

from calinterval.errors import (
    DuplicateUnit,
    EmptyExpression,
    MalformedNumber,
    OutOfOrderUnit,
)
from calinterval.lexer import SignMarker, Token, UnitToken
from calinterval.quantity import ParsedExpression, Quantity, Sign, SignedQuantity

# Rank before the first unit (YEAR is rank 0)
START_RANK = -1


@dataclass(frozen=True)
class FoldState:
    """Accumulator for one parse.

    Attributes:
        sign: Multiplier applied to the next quantity
        highest_rank: Rank of the last recorded unit, START_RANK if none
        quantities: Recorded quantities in input order
    """

    sign: Sign = 1
    highest_rank: int = START_RANK
    quantities: ParsedExpression = ()


def step(state: FoldState, item: Token) -> FoldState:
    """Advance the fold by one lexical item."""
    if isinstance(item, SignMarker):
        return replace(state, sign=-state.sign)
    return _record(state, item)


def _record(state: FoldState, token: UnitToken) -> FoldState:
    rank = int(token.unit)
    name = token.unit.name.lower()

    if rank < state.highest_rank:
        previous = state.quantities[-1].unit.name.lower()
        raise OutOfOrderUnit(
            f"Unit {token.label!r} ({name}) at position {token.position} comes "
            f"after {previous}.\n"
            f"Units must go from largest to smallest: "
            f"years, months, weeks, days, hours, minutes, seconds",
            token.position,
        )
    if rank == state.highest_rank:
        raise DuplicateUnit(
            f"Unit {token.label!r} at position {token.position} repeats {name}.\n"
            f"Each unit may appear once; combine them: '5 days' not '2 days 3 days'",
            token.position,
        )
    if token.unit.is_calendar and token.magnitude.denominator != 1:
        raise MalformedNumber(
            f"{name.capitalize()}s must be whole numbers, got a fraction "
            f"at position {token.position}.\n"
            f"Hint: write fractions of months in smaller units, e.g. '1mo 15d'",
            token.position,
        )

    quantity = SignedQuantity(
        quantity=Quantity(unit=token.unit, magnitude=token.magnitude),
        sign=state.sign,
        position=token.position,
    )
    return replace(
        state,
        highest_rank=rank,
        quantities=state.quantities + (quantity,),
    )


def validate(items: Iterable[Token]) -> ParsedExpression:
    """Fold a token stream into a validated, signed expression.

    Raises:
        OutOfOrderUnit: A unit is smaller-ranked than one before it
        DuplicateUnit: A unit appears twice
        MalformedNumber: A year or month amount is fractional
        EmptyExpression: No units at all
    """
    state = reduce(step, items, FoldState())
    if not state.quantities:
        raise EmptyExpression(
            "Interval expression is empty.\n"
            "Example: '2 days 15 hours' or '1y -3mo 10d'"
        )
    return state.quantities
