"""Default locale resolution and English month/weekday names.

Only English text is supported. The UK variant is kept as its own table
because its abbreviated September differs ("Sept"), which is exactly the
inconsistency the strict formatter pins away.
"""

import os
from dataclasses import dataclass

ENGLISH = "en"
UK_ENGLISH = "en_GB"

# Environment variables consulted for the default locale, in priority order
_LOCALE_ENV = ("LC_ALL", "LC_TIME", "LANG")


@dataclass(frozen=True)
class NameTable:
    months: tuple[str, ...]
    months_short: tuple[str, ...]
    weekdays: tuple[str, ...]
    weekdays_short: tuple[str, ...]
    am_pm: tuple[str, str] = ("AM", "PM")


_MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
# Monday first, matching ISO weekday numbering
_WEEKDAYS = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)
_MONTHS_SHORT = tuple(m[:3] for m in _MONTHS)
_WEEKDAYS_SHORT = tuple(d[:3] for d in _WEEKDAYS)

_NAME_TABLES: dict[str, NameTable] = {
    ENGLISH: NameTable(_MONTHS, _MONTHS_SHORT, _WEEKDAYS, _WEEKDAYS_SHORT),
    UK_ENGLISH: NameTable(
        _MONTHS,
        _MONTHS_SHORT[:8] + ("Sept",) + _MONTHS_SHORT[9:],
        _WEEKDAYS,
        _WEEKDAYS_SHORT,
        ("am", "pm"),
    ),
}


def default_locale() -> str:
    """Return the process locale tag (e.g. "en_GB") from the environment.

    Encoding and modifier suffixes are dropped; "C", "POSIX" and unset
    environments resolve to generic English.
    """
    for var in _LOCALE_ENV:
        value = os.environ.get(var)
        if value:
            tag = value.split(".", 1)[0].split("@", 1)[0]
            if tag in ("C", "POSIX"):
                return ENGLISH
            return tag
    return ENGLISH


def names_for(locale: str) -> NameTable:
    """Name table for a locale tag; unsupported locales use generic English."""
    return _NAME_TABLES.get(locale, _NAME_TABLES[ENGLISH])
