"""Sum fixed-length units and combine them with the calendar delta."""

from datetime import timedelta
from fractions import Fraction

from calinterval.errors import NumberOutOfRange
from calinterval.quantity import ParsedExpression
from calinterval.util import MICROSECONDS_PER_SECOND


def sum_fixed_units(expression: ParsedExpression) -> Fraction:
    """Return the exact signed seconds of the weeks/days/hours/minutes/seconds.

    Fractions are kept exact, so '.1s .2s'-style sums never drift. Any
    combination of units is accepted.
    """
    return sum(
        (
            quantity.value * quantity.unit.seconds
            for quantity in expression
            if not quantity.unit.is_calendar
        ),
        Fraction(0),
    )


def combine(fixed: Fraction, calendar: Fraction) -> timedelta:
    """Add the two spans and convert to a timedelta.

    timedelta resolves microseconds; the exact total is rounded half to even.

    Raises:
        NumberOutOfRange: If the total does not fit in a timedelta
    """
    total = fixed + calendar
    microseconds = round(total * MICROSECONDS_PER_SECOND)
    try:
        return timedelta(microseconds=microseconds)
    except OverflowError as exc:
        raise NumberOutOfRange(
            f"Interval is too large.\n"
            f"The largest supported interval is {timedelta.max}"
        ) from exc
