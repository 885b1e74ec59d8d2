"""Compile date patterns into a formatter and a regular-expression parser.

Patterns use the familiar letter syntax ("yyyy-MM-dd HH:mm:ss"): a run of
the same ASCII letter is one field, text in single quotes is literal and
'' is a literal quote. Everything else is copied through as-is.

Supported letters:
    y u     year ("yy" is 2000-2099 when strict, today -80/+20 years when lenient)
    M L     month (1-2 numeric, 3 short name, 4+ full name)
    d       day of month
    E       weekday name (1-3 short, 4+ full)
    a       AM/PM marker (strict "h"/"K" without it leave the hour open)
    H k K h hour (0-23, 1-24, 0-11, 1-12)
    m s S   minute, second, millisecond
    z       zone name ("UTC", "PST"); "zzzz" renders the zone id
    Z       offset "+HHMM"; "ZZZZ" is "GMT+HH:MM", "ZZZZZ" is "+HH:MM"
    X x     ISO offset ("X" writes "Z" for zero)
    O       localized offset "GMT+H" / "OOOO" "GMT+HH:MM"
    V       zone id ("VV")
"""

import re
from dataclasses import dataclass
from datetime import date, datetime, tzinfo

from datecalc.errors import InvalidPatternError, MalformedDateError
from datecalc.locales import NameTable
from datecalc.zones import (
    display_name,
    format_gmt_offset,
    format_offset,
    offset_id,
    parse_zone_text,
    zone_id,
)

_ZONE_PATTERN = re.compile(r"[XxZzVO]{1,3}")

_NUMERIC_LETTERS = frozenset("yudHkKhmsS")
_SUPPORTED_LETTERS = frozenset("yuMLdEaHkKhmsSzZXxOV")

# Inclusive valid range of each raw numeric value under strict parsing
_STRICT_RANGES: dict[str, tuple[int, int]] = {
    "M": (1, 12),
    "L": (1, 12),
    "d": (1, 31),
    "H": (0, 23),
    "k": (1, 24),
    "K": (0, 11),
    "h": (1, 12),
    "m": (0, 59),
    "s": (0, 59),
}

_ZONE_NAME_RE = r"(?:GMT|UTC|UT)(?:[+-]\d{1,2}(?::?\d{2})?)?|[A-Za-z][A-Za-z0-9_+\-]*(?:/[A-Za-z0-9_+\-]+)*"
_ZONE_REGEX: dict[str, str] = {
    "z": _ZONE_NAME_RE,
    "V": _ZONE_NAME_RE,
    "Z": r"[+-]\d{2}:?\d{2}|Z|GMT(?:[+-]\d{1,2}(?::?\d{2})?)?",
    "X": r"Z|[+-]\d{2}(?::?\d{2})?",
    "x": r"[+-]\d{2}(?::?\d{2})?",
    "O": r"GMT(?:[+-]\d{1,2}(?::\d{2})?)?",
}


def is_zone_pattern(pattern: str) -> bool:
    """True when the whole pattern is one to three zone designator letters.

    This is a narrow heuristic: "z" or "XXX" match, but a pattern that
    merely contains a zone field ("yyyy-MM-dd z") does not, and quoted
    text is not taken into account.
    """
    return _ZONE_PATTERN.fullmatch(pattern) is not None


@dataclass(frozen=True)
class Token:
    """One pattern element: a field (letter + width) or a literal."""

    letter: str | None
    count: int = 0
    text: str = ""

    @property
    def is_numeric(self) -> bool:
        if self.letter in ("M", "L"):
            return self.count <= 2
        return self.letter in _NUMERIC_LETTERS


@dataclass
class ParsedFields:
    """Values read from date text; None means absent from the text."""

    year: int | None = None
    month: int | None = None
    day: int | None = None
    weekday: int | None = None
    hour: int | None = None
    minute: int | None = None
    second: int | None = None
    millisecond: int | None = None
    zone: tzinfo | None = None


def tokenize(pattern: str) -> list[Token]:
    """Split a pattern into field and literal tokens.

    Raises:
        InvalidPatternError: On an unsupported letter or unterminated quote
    """
    tokens: list[Token] = []
    literal: list[str] = []
    i = 0
    while i < len(pattern):
        c = pattern[i]
        if c == "'":
            if pattern.startswith("''", i):
                literal.append("'")
                i += 2
                continue
            close = pattern.find("'", i + 1)
            while close != -1 and pattern.startswith("''", close):
                close = pattern.find("'", close + 2)
            if close == -1:
                raise InvalidPatternError(pattern, "unterminated quote")
            literal.append(pattern[i + 1 : close].replace("''", "'"))
            i = close + 1
        elif c.isascii() and c.isalpha():
            if c not in _SUPPORTED_LETTERS:
                raise InvalidPatternError(pattern, f"illegal pattern character {c!r}")
            count = 1
            while i + count < len(pattern) and pattern[i + count] == c:
                count += 1
            if literal:
                tokens.append(Token(None, text="".join(literal)))
                literal = []
            tokens.append(Token(c, count))
            i += count
        else:
            literal.append(c)
            i += 1
    if literal:
        tokens.append(Token(None, text="".join(literal)))
    return tokens


def _alternation(names: tuple[str, ...]) -> str:
    # Longest first so "September" wins over "Sept" and "Sep"
    return "|".join(re.escape(n) for n in sorted(set(names), key=len, reverse=True))


class DatePattern:
    """A compiled date pattern bound to a name table."""

    def __init__(self, pattern: str, names: NameTable, *, lenient: bool = False):
        self.pattern: str = pattern
        self.names: NameTable = names
        self.tokens: list[Token] = tokenize(pattern)
        self.lenient: bool = lenient
        self._fields: list[tuple[str, Token]] = []
        # Lenient patterns match names in any case and in either length
        self._regex: re.Pattern[str] = re.compile(
            self._build_regex(), re.IGNORECASE if lenient else 0
        )

    def _build_regex(self) -> str:
        parts: list[str] = []
        for i, token in enumerate(self.tokens):
            if token.letter is None:
                parts.append(re.escape(token.text))
                continue
            following = self.tokens[i + 1] if i + 1 < len(self.tokens) else None
            adjacent = following is not None and following.is_numeric
            group = f"f{i}"
            self._fields.append((group, token))
            parts.append(f"(?P<{group}>{self._field_regex(token, adjacent)})")
        return "".join(parts)

    def _field_regex(self, token: Token, adjacent: bool) -> str:
        letter, count = token.letter, token.count
        if token.is_numeric:
            if adjacent:
                return rf"\d{{{count}}}"
            if letter in ("y", "u"):
                return rf"\d{{1,{max(count, 4)}}}"
            if letter == "S":
                return rf"\d{{1,{max(count, 3)}}}"
            return r"\d{1,2}"
        if letter in ("M", "L"):
            if self.lenient:
                return _alternation(self.names.months + self.names.months_short)
            if count == 3:
                return _alternation(self.names.months_short)
            return _alternation(self.names.months)
        if letter == "E":
            if self.lenient:
                return _alternation(self.names.weekdays + self.names.weekdays_short)
            if count <= 3:
                return _alternation(self.names.weekdays_short)
            return _alternation(self.names.weekdays)
        if letter == "a":
            return _alternation(self.names.am_pm)
        return _ZONE_REGEX[letter]

    def format(self, moment: datetime) -> str:
        """Render a timezone-aware datetime with this pattern."""
        return "".join(
            token.text if token.letter is None else self._format_field(token, moment)
            for token in self.tokens
        )

    def _format_field(self, token: Token, moment: datetime) -> str:
        letter, count = token.letter, token.count
        names = self.names
        if letter in ("y", "u"):
            if count == 2:
                return f"{moment.year % 100:02d}"
            return f"{moment.year:0{count}d}"
        if letter in ("M", "L"):
            if count >= 4:
                return names.months[moment.month - 1]
            if count == 3:
                return names.months_short[moment.month - 1]
            return f"{moment.month:0{count}d}"
        if letter == "d":
            return f"{moment.day:0{count}d}"
        if letter == "E":
            if count >= 4:
                return names.weekdays[moment.weekday()]
            return names.weekdays_short[moment.weekday()]
        if letter == "a":
            return names.am_pm[moment.hour // 12]
        if letter == "H":
            return f"{moment.hour:0{count}d}"
        if letter == "k":
            return f"{moment.hour or 24:0{count}d}"
        if letter == "K":
            return f"{moment.hour % 12:0{count}d}"
        if letter == "h":
            return f"{moment.hour % 12 or 12:0{count}d}"
        if letter == "m":
            return f"{moment.minute:0{count}d}"
        if letter == "s":
            return f"{moment.second:0{count}d}"
        if letter == "S":
            return f"{moment.microsecond // 1000:0{count}d}"
        return self._format_zone(token, moment)

    def _format_zone(self, token: Token, moment: datetime) -> str:
        letter, count = token.letter, token.count
        zone = moment.tzinfo
        offset = moment.utcoffset()
        assert zone is not None and offset is not None, "moment must be aware"
        if letter == "z":
            return display_name(zone, moment) if count < 4 else zone_id(zone)
        if letter == "V":
            return zone_id(zone)
        if letter == "Z":
            if count == 4:
                return format_gmt_offset(offset, full=True)
            if count >= 5:
                return offset_id(offset)
            return format_offset(offset, colon=False)
        if letter == "O":
            return format_gmt_offset(offset, full=count >= 4)
        if letter == "X" and not offset:
            return "Z"
        # X and x
        if count == 1:
            return format_offset(offset, colon=False, minutes=False)
        return format_offset(offset, colon=count >= 3)

    def parse(self, text: str) -> ParsedFields:
        """Read field values from text.

        A strict pattern requires the whole text to match and every numeric
        field to be in range. A lenient one only needs a prefix to match and
        values are returned raw for lenient rollover.

        Raises:
            MalformedDateError: If the text does not match the pattern
        """
        strict = not self.lenient
        match = self._regex.fullmatch(text) if strict else self._regex.match(text)
        if match is None:
            raise MalformedDateError(text, self.pattern)

        fields = ParsedFields()
        pm: bool | None = None
        clock_hour: tuple[str, int] | None = None
        for group, token in self._fields:
            raw = match[group]
            letter = token.letter
            value = 0
            if token.is_numeric:
                value = int(raw)
                bounds = _STRICT_RANGES.get(letter or "")
                if strict and bounds and not bounds[0] <= value <= bounds[1]:
                    raise MalformedDateError(
                        text, self.pattern, f"{raw} is out of range for {letter!r}"
                    )
            if letter in ("y", "u"):
                if token.count == 2 and len(raw) == 2:
                    value = self._two_digit_year(value)
                fields.year = value
            elif letter in ("M", "L"):
                fields.month = value if token.is_numeric else self._name_index(
                    raw, self.names.months, self.names.months_short
                )
            elif letter == "d":
                fields.day = value
            elif letter == "E":
                fields.weekday = self._name_index(
                    raw, self.names.weekdays, self.names.weekdays_short
                )
            elif letter == "a":
                pm = raw.lower() == self.names.am_pm[1].lower()
            elif letter == "H":
                fields.hour = value
            elif letter in ("k", "K", "h"):
                clock_hour = (letter, value)
            elif letter == "m":
                fields.minute = value
            elif letter == "s":
                fields.second = value
            elif letter == "S":
                fields.millisecond = value
            else:
                zone = parse_zone_text(raw, ignore_case=self.lenient)
                if zone is None:
                    raise MalformedDateError(text, self.pattern, f"unknown zone {raw!r}")
                fields.zone = zone

        if clock_hour is not None:
            letter, value = clock_hour
            if letter == "k":
                fields.hour = 0 if value == 24 else value
            elif pm is not None or self.lenient:
                # 12 o'clock on the 1-12 clock is hour zero of its half-day
                hour = 0 if letter == "h" and value == 12 else value
                fields.hour = hour + 12 if pm else hour
            # Strict: a half-day hour without AM/PM leaves the hour of day open
        return fields

    def _two_digit_year(self, value: int) -> int:
        """Century for a two-digit year.

        Strict patterns read 2000-2099. Lenient ones pick the year within
        80 years before and 20 years after today.
        """
        if not self.lenient:
            return 2000 + value
        start = date.today().year - 80
        year = start - start % 100 + value
        return year if year >= start else year + 100

    def _name_index(self, raw: str, full: tuple[str, ...], short: tuple[str, ...]) -> int:
        """1-based position of a month or weekday name."""
        wanted = raw.lower()
        for table in (full, short):
            for i, name in enumerate(table):
                if name.lower() == wanted:
                    return i + 1
        raise AssertionError(f"name {raw!r} matched the pattern but not the table")
