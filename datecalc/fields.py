"""Decompose date text or an epoch instant into calendar fields."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from datecalc.formats import resolve_strict_format
from datecalc.pattern import ParsedFields
from datecalc.util import DEFAULT_FORMAT, from_epoch_millis
from datecalc.zones import display_name, resolve_timezone

# Probe order is the key order of FieldResult.value
_FIELD_PROBES: tuple[tuple[str, Callable[[ParsedFields], int | None]], ...] = (
    ("years", lambda f: f.year),
    ("months", lambda f: f.month),
    ("weekdays", lambda f: f.weekday),
    ("days", lambda f: f.day),
    ("hours", lambda f: f.hour),
    ("minutes", lambda f: f.minute),
    ("seconds", lambda f: f.second),
)

# Calendar field read from an instant, keyed by lowercase unit alias
_INSTANT_FIELDS: dict[str, Callable[[datetime], int]] = {
    "ms": lambda dt: dt.microsecond // 1000,
    "milli": lambda dt: dt.microsecond // 1000,
    "millis": lambda dt: dt.microsecond // 1000,
    "milliseconds": lambda dt: dt.microsecond // 1000,
    "s": lambda dt: dt.second,
    "second": lambda dt: dt.second,
    "seconds": lambda dt: dt.second,
    "m": lambda dt: dt.minute,
    "minute": lambda dt: dt.minute,
    "minutes": lambda dt: dt.minute,
    "h": lambda dt: dt.hour,
    "hour": lambda dt: dt.hour,
    "hours": lambda dt: dt.hour,
    "d": lambda dt: dt.day,
    "day": lambda dt: dt.day,
    "days": lambda dt: dt.day,
    "month": lambda dt: dt.month,
    "months": lambda dt: dt.month,
    "year": lambda dt: dt.year,
    "years": lambda dt: dt.year,
}


@dataclass
class FieldResult:
    """Fields found in date text.

    `value` holds only the fields the text supports, in probe order. The
    scalar attributes default to 0, so use `value` to tell an absent field
    from a genuine zero.
    """

    value: dict[str, Any] = field(default_factory=dict)
    years: int = 0
    months: int = 0
    days: int = 0
    weekdays: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    zoneid: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return dict(self.value)


def extract_fields(text: str | None, pattern: str | None = DEFAULT_FORMAT) -> FieldResult:
    """Parse text strictly and report the calendar fields it supports.

    Weekdays are ISO numbered (Monday=1, Sunday=7). "zoneid" is present
    only when the text itself names a zone. None or empty text gives an
    empty result.

    Raises:
        MalformedDateError: If text does not match pattern exactly
    """
    result = FieldResult()
    if not text:
        return result

    parsed = resolve_strict_format(pattern).parse(text)
    for key, probe in _FIELD_PROBES:
        value = probe(parsed)
        if value is not None:
            result.value[key] = value
            setattr(result, key, value)

    if parsed.zone is not None:
        # Without a full date the zone is named as of 1970-01-01
        year, month, day = 1970, 1, 1
        if parsed.year is not None and parsed.month is not None and parsed.day is not None:
            year, month, day = parsed.year, parsed.month, parsed.day
        moment = datetime(year, month, day, parsed.hour or 0, parsed.minute or 0)
        result.zoneid = display_name(parsed.zone, moment)
        result.value["zoneid"] = result.zoneid
    return result


def extract_calendar_field(
    epoch_millis: int | None, unit: str | None = "d", timezone: str = "UTC"
) -> int | None:
    """Read one calendar field of an instant as seen in timezone.

    "d" is the day of the month, "ms" the millisecond of the second and so
    on; month and year are supported here. Unrecognized units read the year.

    Raises:
        UnknownTimezoneError: If timezone is unknown
    """
    if epoch_millis is None:
        return None
    moment = from_epoch_millis(epoch_millis, resolve_timezone(timezone))
    read = _INSTANT_FIELDS.get((unit or "").lower(), lambda dt: dt.year)
    return read(moment)
