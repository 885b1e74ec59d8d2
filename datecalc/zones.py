"""Timezone resolution, offset handling and zone display names.

Explicit timezone arguments go through resolve_timezone(), which raises
UnknownTimezoneError. Zone text found inside a date string goes through
parse_zone_text(), which returns None so the caller can report the whole
date as malformed.
"""

import logging
import os
import re
from datetime import datetime, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError, available_timezones

from datecalc.errors import UnknownTimezoneError
from datecalc.util import UTC_ZONE_ID

logger = logging.getLogger(__name__)

# Legacy three-letter zone ids accepted as timezone arguments
SHORT_IDS: dict[str, str] = {
    "ACT": "Australia/Darwin",
    "AET": "Australia/Sydney",
    "AGT": "America/Argentina/Buenos_Aires",
    "ART": "Africa/Cairo",
    "AST": "America/Anchorage",
    "BET": "America/Sao_Paulo",
    "BST": "Asia/Dhaka",
    "CAT": "Africa/Harare",
    "CNT": "America/St_Johns",
    "CST": "America/Chicago",
    "CTT": "Asia/Shanghai",
    "EAT": "Africa/Addis_Ababa",
    "ECT": "Europe/Paris",
    "IET": "America/Indiana/Indianapolis",
    "IST": "Asia/Kolkata",
    "JST": "Asia/Tokyo",
    "MIT": "Pacific/Apia",
    "NET": "Asia/Yerevan",
    "NST": "Pacific/Auckland",
    "PLT": "Asia/Karachi",
    "PNT": "America/Phoenix",
    "PRT": "America/Puerto_Rico",
    "PST": "America/Los_Angeles",
    "SST": "Pacific/Guadalcanal",
    "VST": "Asia/Ho_Chi_Minh",
}

# Short ids that name a fixed offset rather than a region
_SHORT_OFFSETS: dict[str, timedelta] = {
    "EST": timedelta(hours=-5),
    "MST": timedelta(hours=-7),
    "HST": timedelta(hours=-10),
}

# Zone abbreviations that may appear in date text, with the offset each names
_ABBREVIATIONS: dict[str, timedelta] = {
    "EST": timedelta(hours=-5),
    "EDT": timedelta(hours=-4),
    "CST": timedelta(hours=-6),
    "CDT": timedelta(hours=-5),
    "MST": timedelta(hours=-7),
    "MDT": timedelta(hours=-6),
    "PST": timedelta(hours=-8),
    "PDT": timedelta(hours=-7),
    "AKST": timedelta(hours=-9),
    "AKDT": timedelta(hours=-8),
    "HST": timedelta(hours=-10),
    "WET": timedelta(0),
    "WEST": timedelta(hours=1),
    "BST": timedelta(hours=1),
    "CET": timedelta(hours=1),
    "CEST": timedelta(hours=2),
    "EET": timedelta(hours=2),
    "EEST": timedelta(hours=3),
    "SAST": timedelta(hours=2),
    "MSK": timedelta(hours=3),
    "IST": timedelta(hours=5, minutes=30),
    "HKT": timedelta(hours=8),
    "SGT": timedelta(hours=8),
    "JST": timedelta(hours=9),
    "KST": timedelta(hours=9),
    "AEST": timedelta(hours=10),
    "AEDT": timedelta(hours=11),
    "NZST": timedelta(hours=12),
    "NZDT": timedelta(hours=13),
}

_PREFIXED_OFFSET = re.compile(
    r"(?:GMT|UTC|UT)(?:(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?)?"
)
_BARE_OFFSET = re.compile(r"(?P<sign>[+-])(?P<hours>\d{2})(?::?(?P<minutes>\d{2}))?")

_MAX_OFFSET = timedelta(hours=18)

_ETC_TIMEZONE = "/etc/timezone"
_ETC_LOCALTIME = "/etc/localtime"


def fixed_offset(offset: timedelta, name: str | None = None) -> timezone:
    """Fixed-offset zone whose display name defaults to its ISO id."""
    return timezone(offset, name or offset_id(offset))


def offset_id(offset: timedelta) -> str:
    """ISO offset id: "Z" for zero, otherwise "+HH:MM"."""
    if not offset:
        return "Z"
    return format_offset(offset, colon=True)


def format_offset(offset: timedelta, *, colon: bool, minutes: bool = True) -> str:
    """Render an offset as +HH, +HHMM or +HH:MM."""
    total = int(offset.total_seconds()) // 60
    sign = "-" if total < 0 else "+"
    hours, mins = divmod(abs(total), 60)
    if not minutes and mins == 0:
        return f"{sign}{hours:02d}"
    return f"{sign}{hours:02d}{':' if colon else ''}{mins:02d}"


def format_gmt_offset(offset: timedelta, *, full: bool) -> str:
    """Render an offset as GMT, GMT+H[:MM] (short) or GMT+HH:MM (full)."""
    total = int(offset.total_seconds()) // 60
    if total == 0:
        return "GMT"
    sign = "-" if total < 0 else "+"
    hours, mins = divmod(abs(total), 60)
    if full:
        return f"GMT{sign}{hours:02d}:{mins:02d}"
    if mins:
        return f"GMT{sign}{hours}:{mins:02d}"
    return f"GMT{sign}{hours}"


def parse_offset(text: str) -> timezone | None:
    """Parse Z, +HH, +HHMM, +HH:MM and GMT/UTC prefixed offsets.

    Returns None when the text is not an offset or is out of range.
    """
    if text == "Z":
        return fixed_offset(timedelta(0))

    match = _PREFIXED_OFFSET.fullmatch(text)
    prefixed = match is not None
    if match is None:
        match = _BARE_OFFSET.fullmatch(text)
    if match is None:
        return None

    if match["sign"] is None:
        return fixed_offset(timedelta(0), "GMT" if text == "GMT" else UTC_ZONE_ID)

    offset = timedelta(hours=int(match["hours"]), minutes=int(match["minutes"] or 0))
    if match["sign"] == "-":
        offset = -offset
    if abs(offset) > _MAX_OFFSET or int(match["minutes"] or 0) > 59:
        return None
    if prefixed:
        return fixed_offset(offset, format_gmt_offset(offset, full=True))
    return fixed_offset(offset)


def _zone_info(key: str) -> ZoneInfo | None:
    try:
        return ZoneInfo(key)
    except (ZoneInfoNotFoundError, ValueError):
        return None


def resolve_timezone(name: str) -> tzinfo:
    """Resolve an explicit timezone argument.

    Accepts offsets ("GMT+2", "+05:30"), legacy short ids ("PST") and
    IANA names ("Europe/Berlin").

    Raises:
        UnknownTimezoneError: If the name resolves to no zone
    """
    offset = parse_offset(name)
    if offset is not None:
        return offset

    if name in _SHORT_OFFSETS:
        return fixed_offset(_SHORT_OFFSETS[name], name)
    name = SHORT_IDS.get(name, name)

    zone = _zone_info(name)
    if zone is None:
        raise UnknownTimezoneError(name)
    return zone


def parse_zone_text(text: str, *, ignore_case: bool = False) -> tzinfo | None:
    """Resolve zone text found in a date string, or None if unrecognized.

    An abbreviation stands for the fixed offset it names, so "PST" is
    UTC-08:00 even on a July date; only region ids follow DST rules.
    """
    if ignore_case:
        text = _canonical_case(text)
    offset = parse_offset(text)
    if offset is not None:
        return offset
    if text in _ABBREVIATIONS:
        return fixed_offset(_ABBREVIATIONS[text], text)
    return _zone_info(text)


def _canonical_case(text: str) -> str:
    upper = text.upper()
    if parse_offset(upper) is not None or upper in _ABBREVIATIONS:
        return upper
    if _zone_info(text) is not None:
        return text
    keys = {key.lower(): key for key in available_timezones()}
    return keys.get(text.lower(), text)


def display_name(zone: tzinfo, moment: datetime | None = None) -> str:
    """Short, locale-independent display name of a zone.

    With a moment the abbreviation in effect at that instant is used
    ("PST" vs "PDT"); without one a region zone falls back to its id.
    """
    if moment is not None:
        name = moment.replace(tzinfo=zone).tzname()
        if name:
            return name
    if isinstance(zone, ZoneInfo):
        return zone.key
    return zone.tzname(None) or UTC_ZONE_ID


def zone_id(zone: tzinfo) -> str:
    """Stable identifier of a zone: IANA key or offset id."""
    if isinstance(zone, ZoneInfo):
        return zone.key
    return zone.tzname(None) or UTC_ZONE_ID


def system_timezone_id() -> str:
    """Return the IANA id of the process default timezone.

    Consults the TZ environment variable, then /etc/timezone, then the
    /etc/localtime symlink. Falls back to "UTC".
    """
    candidates: list[str] = []
    tz_env = os.environ.get("TZ")
    if tz_env:
        candidates.append(tz_env.lstrip(":"))
    try:
        with open(_ETC_TIMEZONE, encoding="utf-8") as handle:
            candidates.append(handle.readline().strip())
    except OSError:
        pass
    candidates.append(os.path.realpath(_ETC_LOCALTIME))

    for candidate in candidates:
        key = candidate.split("zoneinfo/", 1)[-1]
        if key and _zone_info(key) is not None:
            return key

    logger.debug("No system timezone found in %s, using UTC", candidates)
    return UTC_ZONE_ID


def system_timezone() -> tzinfo:
    """The process default timezone as a tzinfo."""
    return resolve_timezone(system_timezone_id())
