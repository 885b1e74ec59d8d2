"""Host-facing date functions with the host's default arguments.

Each function takes and returns plain values so a procedure layer can
register it directly. Empty-string timezones mean "no override".
"""

from typing import Any

from datecalc.arithmetic import add_to_timestamp
from datecalc.fields import extract_calendar_field, extract_fields
from datecalc.timestamps import (
    Clock,
    convert,
    current_epoch_millis,
    epoch_years_float,
    format_unit_value,
    parse_unit_value,
)
from datecalc.ttl import expire_at, expire_in
from datecalc.util import DEFAULT_FORMAT
from datecalc.zones import system_timezone_id

__all__ = [
    "add",
    "convert",
    "current_timestamp",
    "expire",
    "expire_in",
    "field",
    "fields",
    "format_time",
    "parse_time",
    "system_timezone",
    "to_years",
]


def to_years(value: object, pattern: str = DEFAULT_FORMAT) -> float:
    """to_years(timestamp) or to_years(date[, pattern]): floating point years."""
    return epoch_years_float(value, pattern)


def fields(date: str | None, pattern: str = DEFAULT_FORMAT) -> dict[str, Any]:
    """fields('2012-12-23', 'yyyy-MM-dd'): map of years, months, weekdays, days,
    hours, minutes, seconds and zoneid found in the date."""
    return extract_fields(date, pattern).as_dict()


def field(time: int | None, unit: str = "d", timezone: str = "UTC") -> int | None:
    """field(12345, 'ms|s|m|h|d|month|year', 'TZ'): one calendar field of a timestamp."""
    return extract_calendar_field(time, unit, timezone)


def current_timestamp(clock: Clock | None = None) -> int:
    """Current time in epoch milliseconds."""
    return current_epoch_millis(clock)


def format_time(
    time: int, unit: str = "ms", pattern: str = DEFAULT_FORMAT, timezone: str = ""
) -> str:
    """format_time(12345, 'ms|s|m|h|d', 'yyyy-MM-dd HH:mm:ss zzz', 'TZ')."""
    return format_unit_value(time, unit, pattern, timezone)


def parse_time(
    text: str | None, unit: str = "ms", pattern: str = DEFAULT_FORMAT, timezone: str = ""
) -> int | None:
    """parse_time('2012-12-23', 'ms|s|m|h|d', 'yyyy-MM-dd'): date text in unit."""
    return parse_unit_value(text, unit, pattern, timezone)


def system_timezone() -> str:
    """IANA id of the system default timezone."""
    return system_timezone_id()


def add(time: int, unit: str, add_value: int, add_unit: str) -> int:
    """add(12345, 'ms', -365, 'd'): add a value in add_unit to a timestamp."""
    return add_to_timestamp(time, unit, add_value, add_unit)


def expire(time: int, unit: str = "ms") -> int:
    """Expiry value for an absolute time given in unit."""
    return expire_at(time, unit)
