"""Resolve years and months into elapsed time against a reference moment.

Month stepping is calendar-correct and clamps to the end of the month, so it
is not symmetric: one month forward from 2000-02-01 is 29 days, one month
back is 31 days. Likewise add_calendar_months(add_calendar_months(t, n), -n)
differs from t whenever clamping happened (Jan 31 + 1 month = Feb 29, and
Feb 29 - 1 month = Jan 29). That is expected, not a bug.
"""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from fractions import Fraction

from dateutil.relativedelta import relativedelta

from calinterval.errors import DateOutOfRange
from calinterval.quantity import ParsedExpression
from calinterval.units import UnitKind
from calinterval.util import MICROSECONDS_PER_SECOND

_MONTHS_PER_UNIT = {UnitKind.YEAR: 12, UnitKind.MONTH: 1}


def add_calendar_months(moment: datetime, months: int) -> datetime:
    """Step ``moment`` by whole months, clamping the day to the month's length.

    The wall-clock time and timezone of ``moment`` are kept. Leap years follow
    the proleptic Gregorian calendar.

    Raises:
        DateOutOfRange: If the result falls outside datetime's year range
    """
    try:
        return moment + relativedelta(months=months)
    except (OverflowError, ValueError) as exc:
        raise DateOutOfRange(
            f"Moving {moment.isoformat()} by {_describe(months)} leaves the "
            f"supported date range (years 1-9999)"
        ) from exc


def total_months(expression: ParsedExpression) -> int:
    """Return signed years * 12 + signed months for an expression."""
    total = sum(
        (
            quantity.value * _MONTHS_PER_UNIT[quantity.unit]
            for quantity in expression
            if quantity.unit.is_calendar
        ),
        Fraction(0),
    )
    return int(total)


def resolve_calendar_delta(months: int, reference: Callable[[], datetime]) -> Fraction:
    """Return the exact seconds that ``months`` spans from the reference moment.

    ``reference`` is only called when ``months`` is nonzero. The span is
    absolute elapsed time: both ends are compared in UTC, so a DST change
    between them is counted.
    """
    if months == 0:
        return Fraction(0)

    base = reference()
    shifted = add_calendar_months(base, months)
    try:
        elapsed = shifted.astimezone(timezone.utc) - base.astimezone(timezone.utc)
    except OverflowError as exc:
        raise DateOutOfRange(
            f"Moving {base.isoformat()} by {_describe(months)} leaves the "
            f"supported date range once converted to UTC"
        ) from exc
    return to_seconds(elapsed)


def to_seconds(delta: timedelta) -> Fraction:
    """Exact seconds in a timedelta."""
    return Fraction(delta // timedelta(microseconds=1), MICROSECONDS_PER_SECOND)


def _describe(months: int) -> str:
    # str() of a huge int can itself fail past sys.get_int_max_str_digits()
    if abs(months) < 10**12:
        return f"{months} months"
    return "that many months"
