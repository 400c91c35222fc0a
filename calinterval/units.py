"""Unit kinds and the alias table used to recognise them."""

from enum import IntEnum

from calinterval.util import DAY, HOUR, MINUTE, SECOND, WEEK


class UnitKind(IntEnum):
    """Units in the order they must appear; the value is the unit's rank."""

    YEAR = 0
    MONTH = 1
    WEEK = 2
    DAY = 3
    HOUR = 4
    MINUTE = 5
    SECOND = 6

    @property
    def is_calendar(self) -> bool:
        """True for units whose length depends on the reference moment."""
        return self in (UnitKind.YEAR, UnitKind.MONTH)

    @property
    def seconds(self) -> int:
        if self.is_calendar:
            raise ValueError(
                f"{self.name.lower()} has no fixed length in seconds.\n"
                f"Resolve it against a reference moment with add_calendar_months()."
            )
        return _FIXED_SECONDS[self]


_FIXED_SECONDS: dict[UnitKind, int] = {
    UnitKind.WEEK: WEEK,
    UnitKind.DAY: DAY,
    UnitKind.HOUR: HOUR,
    UnitKind.MINUTE: MINUTE,
    UnitKind.SECOND: SECOND,
}

# Labels are matched whole and lowercased, never by prefix
ALIASES: dict[str, UnitKind] = {
    "year": UnitKind.YEAR,
    "years": UnitKind.YEAR,
    "y": UnitKind.YEAR,
    "month": UnitKind.MONTH,
    "months": UnitKind.MONTH,
    "mo": UnitKind.MONTH,
    "week": UnitKind.WEEK,
    "weeks": UnitKind.WEEK,
    "w": UnitKind.WEEK,
    "day": UnitKind.DAY,
    "days": UnitKind.DAY,
    "d": UnitKind.DAY,
    "hour": UnitKind.HOUR,
    "hours": UnitKind.HOUR,
    "hr": UnitKind.HOUR,
    "hrs": UnitKind.HOUR,
    "h": UnitKind.HOUR,
    "minute": UnitKind.MINUTE,
    "minutes": UnitKind.MINUTE,
    "min": UnitKind.MINUTE,
    "mins": UnitKind.MINUTE,
    "m": UnitKind.MINUTE,
    "second": UnitKind.SECOND,
    "seconds": UnitKind.SECOND,
    "sec": UnitKind.SECOND,
    "secs": UnitKind.SECOND,
    "s": UnitKind.SECOND,
}

ALIAS_LETTERS: frozenset[str] = frozenset("".join(ALIASES))


def lookup_unit(label: str) -> UnitKind | None:
    """Return the unit for a label, ignoring case, or None if unknown."""
    return ALIASES.get(label.lower())
