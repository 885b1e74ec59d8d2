"""Tests for unit resolution and fixed-ratio conversion."""

import pytest

from datecalc import CalendarUnit, TimeUnit, calendar_unit, resolve_unit
from datecalc.units import convert_duration, to_millis
from datecalc.util import DAY, INT64_MAX, INT64_MIN


@pytest.mark.parametrize(
    "name, expected",
    [
        ("ms", TimeUnit.MILLISECOND),
        ("Millis", TimeUnit.MILLISECOND),
        ("milliseconds", TimeUnit.MILLISECOND),
        ("s", TimeUnit.SECOND),
        ("SECONDS", TimeUnit.SECOND),
        ("m", TimeUnit.MINUTE),
        ("minute", TimeUnit.MINUTE),
        ("h", TimeUnit.HOUR),
        ("Hours", TimeUnit.HOUR),
        ("d", TimeUnit.DAY),
        ("days", TimeUnit.DAY),
    ],
)
def test_resolve_unit_aliases(name, expected):
    assert resolve_unit(name) is expected


@pytest.mark.parametrize("name", [None, "", "bogus-unit", "month", "years", "w"])
def test_resolve_unit_falls_back_to_milliseconds(name):
    """Unknown names are not an error; they mean milliseconds."""
    assert resolve_unit(name) is TimeUnit.MILLISECOND


def test_calendar_unit_detection():
    assert calendar_unit("month") is CalendarUnit.MONTH
    assert calendar_unit("Months") is CalendarUnit.MONTH
    assert calendar_unit("YEAR") is CalendarUnit.YEAR
    assert calendar_unit("years") is CalendarUnit.YEAR
    assert calendar_unit("d") is None
    assert calendar_unit(None) is None


@pytest.mark.parametrize("unit", list(TimeUnit))
def test_convert_identity(unit):
    assert convert_duration(123_456_789, unit, unit) == 123_456_789
    assert convert_duration(-42, unit, unit) == -42


def test_convert_truncates_toward_zero():
    assert convert_duration(1999, TimeUnit.MILLISECOND, TimeUnit.SECOND) == 1
    assert convert_duration(-1999, TimeUnit.MILLISECOND, TimeUnit.SECOND) == -1
    assert convert_duration(-59, TimeUnit.SECOND, TimeUnit.MINUTE) == 0
    assert convert_duration(DAY - 1, TimeUnit.MILLISECOND, TimeUnit.DAY) == 0


@pytest.mark.parametrize("source", list(TimeUnit))
@pytest.mark.parametrize("target", list(TimeUnit))
def test_convert_round_trip_truncates_each_step(source, target):
    for value in (0, 1, -1, 90_061_001, -90_061_001):
        there = convert_duration(value, source, target)
        back = convert_duration(there, target, source)
        if source.millis <= target.millis:
            # Coarsening then refining loses the remainder toward zero
            ratio = target.millis // source.millis
            kept = abs(value) // ratio * ratio
            assert back == (kept if value >= 0 else -kept)
        else:
            assert back == value


def test_convert_saturates_at_int64_bounds():
    assert convert_duration(INT64_MAX, TimeUnit.DAY, TimeUnit.MILLISECOND) == INT64_MAX
    assert convert_duration(-INT64_MAX, TimeUnit.DAY, TimeUnit.MILLISECOND) == INT64_MIN
    assert convert_duration(2, TimeUnit.DAY, TimeUnit.MILLISECOND) == 2 * DAY


def test_to_millis():
    assert to_millis(3, TimeUnit.MINUTE) == 180_000
    assert to_millis(5, TimeUnit.MILLISECOND) == 5
