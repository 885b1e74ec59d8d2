"""Conversion between date text, epoch milliseconds and time units.

Every function builds its formatter on the fly; nothing is cached, so all
of them are safe to call from any thread. The only side effect is the
clock read in current_epoch_millis().
"""

from collections.abc import Callable
from numbers import Real
from time import time_ns

from datecalc.formats import resolve_format
from datecalc.units import TimeUnit, convert_duration, resolve_unit, to_millis
from datecalc.util import AVERAGE_YEAR, DEFAULT_FORMAT

Clock = Callable[[], int]


def system_clock() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return time_ns() // 1_000_000


def current_epoch_millis(clock: Clock | None = None) -> int:
    """Return now in epoch milliseconds, read from clock when one is given."""
    return (clock or system_clock)()


def parse_to_millis(
    text: str | None, pattern: str | None = DEFAULT_FORMAT, timezone: str | None = None
) -> int | None:
    """Parse date text to epoch milliseconds; None text gives None.

    Raises:
        MalformedDateError: If text does not match pattern
        UnknownTimezoneError: If timezone is given and unknown
    """
    if text is None:
        return None
    return resolve_format(pattern, timezone).parse(text)


def format_millis(
    millis: int, pattern: str | None = DEFAULT_FORMAT, timezone: str | None = None
) -> str:
    """Render epoch milliseconds as text.

    This inverts parse_to_millis() only for patterns that keep every field
    of the instant; "yyyy-MM-dd" drops the time of day.
    """
    return resolve_format(pattern, timezone).format(millis)


def parse_unit_value(
    text: str | None,
    to_unit: str | None = "ms",
    pattern: str | None = DEFAULT_FORMAT,
    timezone: str | None = None,
) -> int | None:
    """Parse date text and express the instant in to_unit (truncating)."""
    millis = parse_to_millis(text, pattern, timezone)
    if millis is None:
        return None
    return convert_duration(millis, TimeUnit.MILLISECOND, resolve_unit(to_unit))


def format_unit_value(
    time: int,
    source_unit: str | None = "ms",
    pattern: str | None = DEFAULT_FORMAT,
    timezone: str | None = None,
) -> str:
    """Render a timestamp given in source_unit as text."""
    return format_millis(to_millis(time, resolve_unit(source_unit)), pattern, timezone)


def convert(time: int, from_unit: str | None, to_unit: str | None) -> int:
    """Convert between fixed-duration unit names; unknown names mean ms."""
    return convert_duration(time, resolve_unit(from_unit), resolve_unit(to_unit))


def epoch_years_float(value: object, pattern: str | None = DEFAULT_FORMAT) -> float:
    """Express a timestamp or date text in years of 365 days.

    Numbers are epoch milliseconds and yield years since the epoch. Text is
    parsed with pattern (UTC unless the pattern carries a zone) and yields
    1970 plus the elapsed years. Leap days are ignored on purpose, so the
    result is an approximation.
    """
    if isinstance(value, Real):
        return float(int(value)) / float(AVERAGE_YEAR)
    millis = resolve_format(pattern).parse(str(value))
    return 1970.0 + float(millis) / float(AVERAGE_YEAR)
