"""Tests for reference moment sources."""

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfoNotFoundError

import pytest

from calinterval.errors import DateProviderError, MissingDateContext
from calinterval.sources import FixedDate, LazyDate, Memoized, NoDate, Now, coerce_moment


def test_now_is_aware_and_current():
    """Test that Now reads the clock in its timezone."""
    before = datetime.now(timezone.utc)
    moment = Now("UTC").resolve()
    after = datetime.now(timezone.utc)

    assert moment.tzinfo is not None
    assert before <= moment <= after


def test_now_checks_timezone_when_resolved():
    """Test that an invalid zone name fails on resolution, not construction."""
    source = Now("Not/AZone")

    with pytest.raises(DateProviderError) as info:
        Memoized(source)()

    assert isinstance(info.value.__cause__, ZoneInfoNotFoundError)


def test_fixed_date_datetime():
    """Test an aware datetime passes through unchanged."""
    moment = datetime(2000, 2, 1, tzinfo=timezone.utc)

    assert FixedDate(moment).resolve() is moment


def test_fixed_date_from_date_and_timestamp():
    """Test date and Unix timestamp references."""
    assert FixedDate(date(2000, 2, 1)).resolve() == datetime(
        2000, 2, 1, tzinfo=timezone.utc
    )
    assert FixedDate(949363200).resolve() == datetime(2000, 2, 1, tzinfo=timezone.utc)


def test_fixed_date_rejects_naive_datetime():
    """Test that naive datetimes are refused when resolved."""
    source = FixedDate(datetime(2000, 2, 1))

    with pytest.raises(TypeError, match="timezone-aware"):
        source.resolve()

    with pytest.raises(DateProviderError, match="timezone-aware"):
        Memoized(source)()


def test_coerce_rejects_other_types():
    """Test unsupported reference types."""
    with pytest.raises(TypeError, match="datetime, date, or int"):
        coerce_moment("2000-02-01")

    with pytest.raises(TypeError):
        coerce_moment(True)


def test_lazy_date_requires_callable():
    """Test that LazyDate checks its argument."""
    with pytest.raises(TypeError, match="callable"):
        LazyDate(datetime(2000, 2, 1, tzinfo=timezone.utc))  # type: ignore[arg-type]


def test_memoized_resolves_once():
    """Test that the source is consulted once per Memoized wrapper."""
    calls: list[int] = []

    def get_date() -> datetime:
        calls.append(1)
        return datetime(2000, 2, 1, tzinfo=timezone.utc) + timedelta(days=len(calls))

    reference = Memoized(LazyDate(get_date))

    first = reference()
    second = reference()

    assert first == second
    assert len(calls) == 1
    assert reference.calls == 1


def test_memoized_not_called_until_needed():
    """Test that wrapping a source does not resolve it."""
    reference = Memoized(LazyDate(lambda: 1 / 0))

    assert reference.calls == 0


def test_memoized_wraps_provider_failure():
    """Test that a failing provider becomes DateProviderError."""

    def broken() -> datetime:
        raise RuntimeError("clock unavailable")

    with pytest.raises(DateProviderError, match="clock unavailable") as info:
        Memoized(LazyDate(broken))()

    assert isinstance(info.value.__cause__, RuntimeError)


def test_memoized_rejects_naive_provider_result():
    """Test that a provider returning a naive datetime is a provider error."""
    with pytest.raises(DateProviderError, match="timezone-aware"):
        Memoized(LazyDate(lambda: datetime(2000, 2, 1)))()


def test_no_date_is_missing_context():
    """Test that NoDate fails with MissingDateContext, not a provider error."""
    with pytest.raises(MissingDateContext):
        Memoized(NoDate())()
