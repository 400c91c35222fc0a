"""Parse interval expressions like "2 days 15 hours" or "1y -3mo 10d".

The format is a sequence of ``<number> <unit>`` pairs from largest unit to
smallest, each unit at most once:

    <n> years <n> months <n> weeks <n> days <n> hours <n> minutes <n> seconds

A '-' flips the sign of everything after it, until the next '-'. Years and
months are measured from a reference moment, which is only looked up when
the expression actually moves by a nonzero number of months.
"""

import logging
from collections.abc import Callable
from datetime import date, datetime, timedelta
from fractions import Fraction

from calinterval.aggregate import combine, sum_fixed_units
from calinterval.lexer import tokenize
from calinterval.months import resolve_calendar_delta, total_months
from calinterval.quantity import ParsedExpression
from calinterval.sources import DateSource, FixedDate, LazyDate, Memoized, NoDate, Now
from calinterval.util import DEFAULT_TZ
from calinterval.validator import validate

logger = logging.getLogger(__name__)


def parse_expression(text: str) -> ParsedExpression:
    """Lex and validate ``text`` without resolving anything."""
    return validate(tokenize(text))


def parse_seconds(text: str, source: DateSource | None = None) -> Fraction:
    """Parse ``text`` into exact signed seconds.

    Args:
        text: Interval expression
        source: Reference moment for years and months (default: NoDate)

    Raises:
        ParseError: Any subclass, on the first problem found
    """
    fixed, calendar = _evaluate(text, source)
    return fixed + calendar


def parse_interval(text: str, source: DateSource | None = None) -> timedelta:
    """Parse ``text`` into a timedelta, resolving years and months via ``source``.

    Args:
        text: Interval expression
        source: Reference moment for years and months (default: NoDate)

    Returns:
        The elapsed span, rounded to whole microseconds

    Raises:
        ParseError: Any subclass, on the first problem found
    """
    fixed, calendar = _evaluate(text, source)
    span = combine(fixed, calendar)
    logger.debug("Parsed %r as %s", text, span)
    return span


def _evaluate(text: str, source: DateSource | None) -> tuple[Fraction, Fraction]:
    expression = parse_expression(text)
    if source is None:
        source = NoDate()
    if isinstance(source, NoDate):
        source.reject_calendar_units(expression)
    reference = Memoized(source)
    calendar = resolve_calendar_delta(total_months(expression), reference)
    return sum_fixed_units(expression), calendar


def parse_without_calendar(text: str) -> timedelta:
    """Parse an interval like "15 days 12 hours" with no reference date.

    Weeks, days, hours, minutes and seconds are always fine. Any year or month
    raises MissingDateContext, even "0y" or "1y -12mo".
    """
    return parse_interval(text, NoDate())


def parse_with_date(text: str, moment: datetime | date | int) -> timedelta:
    """Parse an interval like "1 year 15 days", measuring years and months from ``moment``.

    Example:
        >>> parse_with_date("1 month", datetime(2000, 2, 1, tzinfo=timezone.utc))
        datetime.timedelta(days=29)
    """
    return parse_interval(text, FixedDate(moment))


def parse_with_lazy_date(
    text: str, get_date: Callable[[], datetime | date | int]
) -> timedelta:
    """Parse an interval, calling ``get_date`` for the reference moment only if needed.

    ``get_date`` is called at most once, and not at all when the expression
    has no (or cancelling) years and months.
    """
    return parse_interval(text, LazyDate(get_date))


def parse_with_now(text: str, tz: str = DEFAULT_TZ) -> timedelta:
    """Parse an interval, measuring years and months from the current time in ``tz``.

    Example:
        >>> parse_with_now("2 days 15 hours 15 mins")
        datetime.timedelta(days=2, seconds=54900)
    """
    return parse_interval(text, Now(tz))
