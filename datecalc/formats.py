"""Format resolution: bind a pattern to a timezone and a name table.

Two flavors are produced. LegacyDateFormat converts between text and epoch
milliseconds and is tolerant (prefix match, any-case names, lenient field
rollover). StrictDateFormat decomposes text into fields for introspection
and rejects anything that does not match exactly.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime, timezone, tzinfo

from dateutil.relativedelta import relativedelta
from typing_extensions import override

from datecalc.errors import MalformedDateError
from datecalc.locales import ENGLISH, UK_ENGLISH, default_locale, names_for
from datecalc.pattern import DatePattern, ParsedFields, is_zone_pattern
from datecalc.util import (
    DEFAULT_FORMAT,
    from_epoch_millis,
    to_epoch_millis,
)
from datecalc.zones import resolve_timezone, system_timezone

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FormatSpec:
    """Pattern plus optional timezone override, built fresh for every call."""

    pattern: str = DEFAULT_FORMAT
    timezone_override: str | None = None

    @classmethod
    def of(cls, pattern: str | None = None, timezone: str | None = None) -> "FormatSpec":
        """Normalize empty arguments: no pattern means DEFAULT_FORMAT."""
        return cls(pattern or DEFAULT_FORMAT, timezone or None)

    @property
    def zone_in_pattern(self) -> bool:
        return is_zone_pattern(self.pattern)

    def bound_zone(self) -> tzinfo | None:
        """Zone the formatter is bound to, or None to use the zone in the text.

        Raises:
            UnknownTimezoneError: If the override does not name a zone
        """
        if self.timezone_override:
            return resolve_timezone(self.timezone_override)
        if self.zone_in_pattern:
            return None
        return timezone.utc


class DateFormat(ABC):
    """A pattern bound to a zone and a locale's month/weekday names."""

    def __init__(self, spec: FormatSpec, locale: str, *, lenient: bool):
        self.spec: FormatSpec = spec
        self.locale: str = locale
        self.zone: tzinfo | None = spec.bound_zone()
        self.pattern: DatePattern = DatePattern(
            spec.pattern, names_for(locale), lenient=lenient
        )

    @property
    def effective_zone(self) -> tzinfo:
        """Bound zone, or the system default zone for unbound formatters."""
        return self.zone if self.zone is not None else system_timezone()

    def format(self, millis: int) -> str:
        """Render an epoch millisecond value in this format's zone."""
        return self.pattern.format(from_epoch_millis(millis, self.effective_zone))

    @abstractmethod
    def parse(self, text: str) -> object:
        pass


class LegacyDateFormat(DateFormat):
    """Tolerant text <-> epoch-millisecond formatter."""

    def __init__(self, spec: FormatSpec, locale: str):
        super().__init__(spec, locale, lenient=True)

    @override
    def parse(self, text: str) -> int:
        """Parse text to epoch milliseconds.

        Fields missing from the pattern default to 1970-01-01T00:00:00.000
        and out-of-range values roll over (month 13 is January of the next
        year, day 0 is the last day of the previous month). Text carrying
        its own zone wins over the bound zone.

        Raises:
            MalformedDateError: If the text does not match the pattern
        """
        fields = self.pattern.parse(text)
        zone = fields.zone if fields.zone is not None else self.effective_zone
        try:
            naive = datetime(fields.year if fields.year is not None else 1970, 1, 1)
            naive += relativedelta(
                months=(fields.month or 1) - 1,
                days=(fields.day if fields.day is not None else 1) - 1,
                hours=fields.hour or 0,
                minutes=fields.minute or 0,
                seconds=fields.second or 0,
                microseconds=(fields.millisecond or 0) * 1000,
            )
        except (OverflowError, ValueError) as e:
            raise MalformedDateError(
                text, self.spec.pattern, "date is outside years 1-9999"
            ) from e
        return to_epoch_millis(naive.replace(tzinfo=zone))


class StrictDateFormat(DateFormat):
    """Exact-match formatter that resolves text into calendar fields."""

    def __init__(self, spec: FormatSpec, locale: str):
        super().__init__(spec, locale, lenient=False)

    @override
    def parse(self, text: str) -> ParsedFields:
        """Parse text into fields, resolving what the text implies.

        A complete date clamps its day to the month's length and derives the
        weekday; a weekday in the text must agree with the date. An hour with
        no minute or second implies minute 0 and second 0.

        Raises:
            MalformedDateError: If the text does not match or is inconsistent
        """
        fields = self.pattern.parse(text)

        if fields.year is not None and fields.month is not None and fields.day is not None:
            try:
                resolved = date(fields.year, fields.month, 1) + relativedelta(day=fields.day)
            except ValueError as e:
                raise MalformedDateError(
                    text, self.spec.pattern, "date is outside years 1-9999"
                ) from e
            if fields.weekday is not None and fields.weekday != resolved.isoweekday():
                raise MalformedDateError(
                    text, self.spec.pattern, "weekday does not match the date"
                )
            fields.day = resolved.day
            fields.weekday = resolved.isoweekday()

        if fields.hour is not None and not (
            fields.minute is None
            and (fields.second is not None or fields.millisecond is not None)
        ):
            fields.minute = fields.minute or 0
            fields.second = fields.second or 0

        return fields


def resolve_format(pattern: str | None = None, timezone: str | None = None) -> LegacyDateFormat:
    """Build the tolerant formatter used for timestamp conversion.

    Zone policy: an explicit timezone wins; otherwise a pattern made only of
    zone letters leaves the formatter unbound; otherwise it is bound to UTC.

    Raises:
        UnknownTimezoneError: If timezone is given and unknown
    """
    spec = FormatSpec.of(pattern, timezone)
    fmt = LegacyDateFormat(spec, default_locale())
    logger.debug("Resolved format %r bound to %s", spec.pattern, fmt.zone)
    return fmt


def resolve_strict_format(
    pattern: str | None = None, timezone: str | None = None
) -> StrictDateFormat:
    """Build the strict formatter used for field extraction.

    Raises:
        UnknownTimezoneError: If timezone is given and unknown
    """
    spec = FormatSpec.of(pattern, timezone)
    locale = default_locale()
    # Intentional shim: UK English abbreviates month names differently
    # ("Sept"), so field extraction pins generic English instead.
    if locale == UK_ENGLISH:
        logger.debug("Substituting %s names with %s", UK_ENGLISH, ENGLISH)
        locale = ENGLISH
    return StrictDateFormat(spec, locale)
