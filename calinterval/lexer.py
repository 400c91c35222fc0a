"""Split an interval expression into sign markers and unit tokens.

The lexer only knows about characters: it does not check unit order, repeated
units or whether a year is fractional. Those belong to the validator.
"""

import string
from collections.abc import Iterator
from dataclasses import dataclass
from fractions import Fraction
from typing import TypeAlias

from calinterval.errors import (
    InvalidCharacter,
    MalformedNumber,
    NumberOutOfRange,
    UnknownUnitLabel,
)
from calinterval.units import ALIAS_LETTERS, UnitKind, lookup_unit

_WHITESPACE = frozenset(string.whitespace)
_DIGITS = frozenset(string.digits)
_NUMBER_CHARS = _DIGITS | {"."}


@dataclass(frozen=True, kw_only=True)
class SignMarker:
    position: int


@dataclass(frozen=True, kw_only=True)
class UnitToken:
    magnitude: Fraction
    unit: UnitKind
    label: str
    position: int


Token: TypeAlias = SignMarker | UnitToken


def tokenize(text: str) -> Iterator[Token]:
    """Yield the lexical items of ``text`` from left to right.

    Whitespace is skipped anywhere. Each '-' becomes its own SignMarker; every
    other item is a number followed by a unit label.

    Raises:
        InvalidCharacter: A character no item can contain
        MalformedNumber: A literal with several '.' or no digits, or a missing
            number (including after a trailing '-')
        UnknownUnitLabel: Missing or unrecognised unit label
        NumberOutOfRange: A literal with more digits than int() will convert
    """
    size = len(text)
    index = 0
    after_sign = False

    while True:
        index = _skip_whitespace(text, index)
        if index >= size:
            if after_sign:
                raise MalformedNumber(
                    f"Expected a number after '-' at position {index}, "
                    f"but the input ended.\n"
                    f"Example: '1 day - 2 hours'",
                    index,
                )
            return

        if text[index] == "-":
            yield SignMarker(position=index)
            after_sign = True
            index += 1
            continue

        start = index
        index, literal, magnitude = _read_number(text, index)
        index = _skip_whitespace(text, index)
        index, label, unit = _read_unit(text, index, literal)
        yield UnitToken(magnitude=magnitude, unit=unit, label=label, position=start)
        after_sign = False


def _skip_whitespace(text: str, index: int) -> int:
    while index < len(text) and text[index] in _WHITESPACE:
        index += 1
    return index


def _read_number(text: str, start: int) -> tuple[int, str, Fraction]:
    end = start
    while end < len(text) and text[end] in _NUMBER_CHARS:
        end += 1
    literal = text[start:end]

    if not literal:
        char = text[start]
        if char.lower() in ALIAS_LETTERS:
            raise MalformedNumber(
                f"Expected a number at position {start}, found {char!r}.\n"
                f"Every unit needs an amount: '3 days', not 'days'",
                start,
            )
        raise _invalid_character(char, start)

    if literal.count(".") > 1:
        raise MalformedNumber(
            f"Number {literal!r} at position {start} has more than one "
            f"decimal point",
            start,
        )
    if not any(char in _DIGITS for char in literal):
        raise MalformedNumber(
            f"Number {literal!r} at position {start} has no digits.\n"
            f"Fractions need at least one digit: '.5 days' or '0.5 days'",
            start,
        )

    whole, _, fraction = literal.partition(".")
    try:
        magnitude = Fraction(int(whole or "0"))
        if fraction:
            magnitude += Fraction(int(fraction), 10 ** len(fraction))
    except ValueError as exc:
        # int() refuses digit strings past sys.get_int_max_str_digits()
        raise NumberOutOfRange(
            f"Number at position {start} has too many digits ({len(literal)} characters)",
            start,
        ) from exc
    return end, literal, magnitude


def _read_unit(text: str, start: int, literal: str) -> tuple[int, str, UnitKind]:
    end = start
    while end < len(text) and text[end].isascii() and text[end].isalpha():
        end += 1
    label = text[start:end]

    for offset, char in enumerate(label):
        if char.lower() not in ALIAS_LETTERS:
            raise _invalid_character(char, start + offset)

    if not label:
        if start < len(text) and text[start] not in _NUMBER_CHARS | {"-"}:
            raise _invalid_character(text[start], start)
        raise UnknownUnitLabel(
            f"Expected a unit after {literal!r} at position {start}.\n"
            f"Example: '{literal} days' or '{literal}h'",
            start,
        )

    unit = lookup_unit(label)
    if unit is None:
        raise UnknownUnitLabel(
            f"Unknown unit {label!r} at position {start}.\n"
            f"Known units: years (y), months (mo), weeks (w), days (d), "
            f"hours (h, hr), minutes (m, min), seconds (s, sec)",
            start,
        )
    return end, label, unit


def _invalid_character(char: str, position: int) -> InvalidCharacter:
    return InvalidCharacter(
        f"Unexpected character {char!r} at position {position}.\n"
        f"Expressions may only contain numbers, unit names, '-' and spaces",
        position,
    )
