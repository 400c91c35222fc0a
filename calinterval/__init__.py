from importlib.resources import files

from .core import (
    parse_expression,
    parse_interval,
    parse_seconds,
    parse_with_date,
    parse_with_lazy_date,
    parse_with_now,
    parse_without_calendar,
)
from .errors import (
    DateOutOfRange,
    DateProviderError,
    DuplicateUnit,
    EmptyExpression,
    InvalidCharacter,
    MalformedNumber,
    MissingDateContext,
    NumberOutOfRange,
    OutOfOrderUnit,
    ParseError,
    UnknownUnitLabel,
)
from .months import add_calendar_months
from .quantity import Quantity, SignedQuantity
from .sources import DateSource, FixedDate, LazyDate, NoDate, Now
from .units import UnitKind
from .util import DAY, HOUR, MINUTE, SECOND, WEEK

# Load documentation files for programmatic access by agents and code-aware tools
_docs_path = files(__package__) / "docs"
docs = {
    "readme": (_docs_path / "README.md").read_text(),
}

__all__ = [
    "parse_interval",
    "parse_seconds",
    "parse_expression",
    "parse_with_now",
    "parse_with_date",
    "parse_with_lazy_date",
    "parse_without_calendar",
    "add_calendar_months",
    "UnitKind",
    "Quantity",
    "SignedQuantity",
    "DateSource",
    "Now",
    "FixedDate",
    "LazyDate",
    "NoDate",
    "ParseError",
    "InvalidCharacter",
    "MalformedNumber",
    "UnknownUnitLabel",
    "OutOfOrderUnit",
    "DuplicateUnit",
    "EmptyExpression",
    "MissingDateContext",
    "DateProviderError",
    "DateOutOfRange",
    "NumberOutOfRange",
    "SECOND",
    "MINUTE",
    "HOUR",
    "DAY",
    "WEEK",
    "docs",
]
