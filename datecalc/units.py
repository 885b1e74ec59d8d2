"""Time unit resolution and fixed-ratio duration conversion.

Unit names are free-form and case-insensitive. Unknown names are not an
error: they resolve to milliseconds. Month and year are calendar units with
no fixed length, so they live in a separate enum and must be detected with
calendar_unit() before falling back to resolve_unit().
"""

from enum import Enum

from datecalc.util import (
    DAY,
    HOUR,
    INT64_MAX,
    INT64_MIN,
    MILLISECOND,
    MINUTE,
    SECOND,
)


class TimeUnit(Enum):
    """Fixed-duration unit; the value is the unit's length in milliseconds."""

    MILLISECOND = MILLISECOND
    SECOND = SECOND
    MINUTE = MINUTE
    HOUR = HOUR
    DAY = DAY

    @property
    def millis(self) -> int:
        return self.value


class CalendarUnit(Enum):
    """Calendar-relative unit that needs calendar rollover, never a ratio."""

    MONTH = "month"
    YEAR = "year"


# Mapping from lowercase unit aliases to fixed-duration units
_UNIT_MAP: dict[str, TimeUnit] = {
    "ms": TimeUnit.MILLISECOND,
    "milli": TimeUnit.MILLISECOND,
    "millis": TimeUnit.MILLISECOND,
    "milliseconds": TimeUnit.MILLISECOND,
    "s": TimeUnit.SECOND,
    "second": TimeUnit.SECOND,
    "seconds": TimeUnit.SECOND,
    "m": TimeUnit.MINUTE,
    "minute": TimeUnit.MINUTE,
    "minutes": TimeUnit.MINUTE,
    "h": TimeUnit.HOUR,
    "hour": TimeUnit.HOUR,
    "hours": TimeUnit.HOUR,
    "d": TimeUnit.DAY,
    "day": TimeUnit.DAY,
    "days": TimeUnit.DAY,
}

_CALENDAR_MAP: dict[str, CalendarUnit] = {
    "month": CalendarUnit.MONTH,
    "months": CalendarUnit.MONTH,
    "year": CalendarUnit.YEAR,
    "years": CalendarUnit.YEAR,
}


def resolve_unit(name: str | None) -> TimeUnit:
    """Resolve a unit alias to a TimeUnit.

    None, empty and unrecognized names (including "month" and "year")
    all resolve to TimeUnit.MILLISECOND. This permissiveness is part of
    the contract: callers get a defined result instead of an error.
    """
    if not name:
        return TimeUnit.MILLISECOND
    return _UNIT_MAP.get(name.lower(), TimeUnit.MILLISECOND)


def calendar_unit(name: str | None) -> CalendarUnit | None:
    """Return the CalendarUnit for month/year aliases, None for anything else."""
    if not name:
        return None
    return _CALENDAR_MAP.get(name.lower())


def convert_duration(value: int, source: TimeUnit, target: TimeUnit) -> int:
    """Convert a duration between fixed units.

    Coarsening divides and truncates toward zero. Refining multiplies and
    saturates at the signed 64-bit bounds instead of overflowing.
    """
    if source is target:
        return value
    if source.millis > target.millis:
        ratio = source.millis // target.millis
        if value > INT64_MAX // ratio:
            return INT64_MAX
        if value < -(INT64_MAX // ratio):
            return INT64_MIN
        return value * ratio

    ratio = target.millis // source.millis
    quotient = abs(value) // ratio
    return quotient if value >= 0 else -quotient


def to_millis(value: int, unit: TimeUnit) -> int:
    return convert_duration(value, unit, TimeUnit.MILLISECOND)
