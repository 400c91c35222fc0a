"""Where the reference moment for years and months comes from.

A DateSource is only asked for its moment when an expression actually has a
nonzero year/month delta. Expressions made of fixed units never touch it, so
callers can pass a clock without paying for a clock read.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import date, datetime, time, timezone
from typing import Any
from zoneinfo import ZoneInfo

from typing_extensions import override

from calinterval.errors import DateProviderError, MissingDateContext, ParseError
from calinterval.quantity import ParsedExpression
from calinterval.util import DEFAULT_TZ

logger = logging.getLogger(__name__)


class DateSource(ABC):

    @abstractmethod
    def resolve(self) -> datetime:
        """Return the reference moment as a timezone-aware datetime."""
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class Now(DateSource):
    """The current system time in ``tz``, read when resolved.

    The zone name is only looked up on resolution, so an unknown name
    surfaces as DateProviderError and only for expressions with months.
    """

    def __init__(self, tz: str = DEFAULT_TZ):
        self.tz: str = tz

    @override
    def resolve(self) -> datetime:
        return datetime.now(ZoneInfo(self.tz))

    @override
    def __repr__(self) -> str:
        return f"Now(tz={self.tz!r})"


class FixedDate(DateSource):
    """A caller-supplied moment, checked when resolved."""

    def __init__(self, moment: datetime | date | int):
        self.moment: datetime | date | int = moment

    @override
    def resolve(self) -> datetime:
        return coerce_moment(self.moment)

    @override
    def __repr__(self) -> str:
        return f"FixedDate({self.moment!r})"


class LazyDate(DateSource):
    """A zero-argument callable producing the moment on demand."""

    def __init__(self, get_date: Callable[[], datetime | date | int]):
        if not callable(get_date):
            raise TypeError(
                f"LazyDate requires a zero-argument callable, "
                f"got {type(get_date).__name__!r}.\n"
                f"Hint: for a fixed moment use FixedDate(moment) or "
                f"parse_with_date(text, moment)"
            )
        self.get_date: Callable[[], datetime | date | int] = get_date

    @override
    def resolve(self) -> datetime:
        return coerce_moment(self.get_date())


class NoDate(DateSource):
    """No reference moment at all; years and months cannot be resolved."""

    @override
    def resolve(self) -> datetime:
        raise _missing_date_context()

    def reject_calendar_units(self, expression: ParsedExpression) -> None:
        """Raise MissingDateContext if the expression has any year or month."""
        for quantity in expression:
            if quantity.unit.is_calendar:
                raise _missing_date_context(quantity.position)


def _missing_date_context(position: int | None = None) -> MissingDateContext:
    return MissingDateContext(
        "Years or months need a reference date, but none was given.\n"
        "Fix: use parse_with_now(), parse_with_date() or "
        "parse_with_lazy_date() for expressions with years or months",
        position,
    )


class Memoized:
    """Resolve a DateSource at most once within a single parse call.

    Failures of the underlying source (other than ParseError subclasses such
    as MissingDateContext) are raised as DateProviderError chained to the
    original exception. They are not retried or cached.
    """

    def __init__(self, source: DateSource):
        self.source: DateSource = source
        self.calls: int = 0
        self._moment: datetime | None = None

    def __call__(self) -> datetime:
        if self._moment is None:
            self.calls += 1
            try:
                moment = self.source.resolve()
            except ParseError:
                raise
            except Exception as exc:
                raise DateProviderError(
                    f"Date source {self.source!r} failed: {exc}"
                ) from exc
            logger.debug("Resolved reference moment %s from %r", moment, self.source)
            self._moment = moment
        return self._moment


def coerce_moment(value: Any) -> datetime:
    """Convert a supported moment value into a timezone-aware datetime.

    Accepts:
    - datetime: Must be timezone-aware, passed through
    - date: Midnight UTC of that day
    - int: Unix timestamp in seconds

    Raises:
        TypeError: If value is an unsupported type or a naive datetime
    """
    if isinstance(value, datetime):
        if value.tzinfo is None or value.utcoffset() is None:
            raise TypeError(
                f"Reference moment must be a timezone-aware datetime.\n"
                f"Got naive datetime: {value!r}\n"
                f"Hint: Add timezone info:\n"
                f"  from zoneinfo import ZoneInfo\n"
                f"  dt = datetime(..., tzinfo=ZoneInfo('UTC'))  "
                f"# or 'US/Pacific', etc.\n"
                f"  # Or use timezone.utc for UTC:\n"
                f"  dt = datetime(..., tzinfo=timezone.utc)"
            )
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if isinstance(value, int) and not isinstance(value, bool):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    raise TypeError(
        f"Reference moment must be datetime, date, or int.\n"
        f"Got {type(value).__name__!r}: {value!r}\n"
        f"Examples:\n"
        f"  datetime(2025, 1, 1, tzinfo=timezone.utc)  # timezone-aware datetime\n"
        f"  date(2025, 1, 1)  # midnight UTC\n"
        f"  1735689600  # int (Unix seconds)"
    )
