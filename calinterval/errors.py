"""Exceptions raised while parsing an interval expression.

Every failure ends parsing immediately with exactly one of these. They all
derive from ParseError, itself a ValueError, so callers that only care about
"bad input" can catch ValueError.
"""


class ParseError(ValueError):
    """Base class for all interval parsing failures.

    Attributes:
        message: Human-readable description, possibly with a hint
        position: Zero-based character offset in the input, when known
    """

    def __init__(self, message: str, position: int | None = None):
        super().__init__(message)
        self.message: str = message
        self.position: int | None = position


class InvalidCharacter(ParseError):
    """A character outside whitespace, digits, '.', '-' and unit letters."""


class MalformedNumber(ParseError):
    """A bad decimal literal, a missing number, or a fractional year/month."""


class UnknownUnitLabel(ParseError):
    """The letters after a number match no known unit."""


class OutOfOrderUnit(ParseError):
    """A unit appeared after a smaller unit."""


class DuplicateUnit(ParseError):
    """A unit appeared twice."""


class EmptyExpression(ParseError):
    """The input held no quantities."""


class MissingDateContext(ParseError):
    """Years or months need resolving but no date source was given."""


class DateProviderError(ParseError):
    """The date source failed or returned something unusable."""


class DateOutOfRange(ParseError):
    """Stepping by years or months left the representable date range."""


class NumberOutOfRange(ParseError):
    """The resulting span does not fit in a timedelta."""
