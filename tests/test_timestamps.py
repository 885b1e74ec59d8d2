"""Tests for text <-> timestamp conversion."""

from datetime import date, datetime, timezone
from time import time

import pytest

from datecalc import (
    MalformedDateError,
    UnknownTimezoneError,
    convert,
    current_epoch_millis,
    epoch_years_float,
    format_millis,
    format_unit_value,
    parse_to_millis,
    parse_unit_value,
)
from datecalc.util import AVERAGE_YEAR, HOUR


def millis(*args: int) -> int:
    return int(datetime(*args, tzinfo=timezone.utc).timestamp()) * 1000


def test_parse_default_pattern_assumes_utc():
    assert parse_to_millis("2012-12-23 10:20:30") == millis(2012, 12, 23, 10, 20, 30)


def test_parse_with_explicit_timezone():
    utc = parse_to_millis("2012-12-23 00:00:00")
    new_york = parse_to_millis("2012-12-23 00:00:00", timezone="America/New_York")
    assert new_york - utc == 5 * HOUR


def test_parse_none_is_none():
    assert parse_to_millis(None) is None
    assert parse_unit_value(None, "s") is None


def test_parse_malformed_text_raises():
    with pytest.raises(MalformedDateError):
        parse_to_millis("not a date")


def test_parse_unknown_timezone_raises():
    with pytest.raises(UnknownTimezoneError):
        parse_to_millis("2012-12-23 00:00:00", timezone="Nowhere/Special")


def test_parse_zone_from_text():
    expected = millis(2015, 1, 2, 1, 4, 5)
    assert parse_to_millis("2015-01-02 03:04:05 EET", "yyyy-MM-dd HH:mm:ss zzz") == expected


def test_format_default_pattern_in_utc():
    assert format_millis(0) == "1970-01-01 00:00:00"
    assert format_millis(millis(2012, 12, 23, 10, 20, 30)) == "2012-12-23 10:20:30"


def test_zone_abbreviation_in_text_is_its_own_offset():
    """PST in July still means UTC-8, not the Pacific daylight offset."""
    t = parse_to_millis("2021-07-15 10:00:00 PST", "yyyy-MM-dd HH:mm:ss z")
    assert t == millis(2021, 7, 15, 18, 0, 0)
    t = parse_to_millis("2021-01-15 10:00:00 PDT", "yyyy-MM-dd HH:mm:ss z")
    assert t == millis(2021, 1, 15, 17, 0, 0)


def test_lenient_zone_text_ignores_case():
    assert parse_to_millis("2021-07-15 10:00:00 utc", "yyyy-MM-dd HH:mm:ss z") == millis(
        2021, 7, 15, 10, 0, 0
    )


def test_default_pattern_is_utc_on_non_utc_host(monkeypatch):
    monkeypatch.setenv("TZ", "America/New_York")
    assert parse_to_millis("2012-12-23 10:20:30") == millis(2012, 12, 23, 10, 20, 30)
    assert format_millis(0) == "1970-01-01 00:00:00"
    assert parse_unit_value("1970-01-02", "d", "yyyy-MM-dd") == 1
    # A zone-only pattern is the one case that follows the host zone
    assert format_millis(0, "zzz") == "EST"


def test_format_in_timezone():
    t = millis(2021, 7, 1, 12, 0, 0)
    text = format_millis(t, "yyyy-MM-dd HH:mm zzz", "America/Los_Angeles")
    assert text == "2021-07-01 05:00 PDT"


def test_format_negative_timestamp():
    assert format_millis(-1, "yyyy-MM-dd HH:mm:ss.SSS") == "1969-12-31 23:59:59.999"


@pytest.mark.parametrize(
    "pattern, tz",
    [
        ("yyyy-MM-dd HH:mm:ss.SSS", ""),
        ("yyyy-MM-dd'T'HH:mm:ss.SSSXXX", ""),
        ("yyyyMMddHHmmssSSS", "Asia/Kolkata"),
        ("EEE, d MMM yyyy HH:mm:ss.SSS Z", "America/New_York"),
        ("yyyy-MM-dd HH:mm:ss.SSS z", "America/Los_Angeles"),
    ],
)
def test_round_trip_preserves_millis(pattern, tz):
    # The last two are 01:30 PDT and 01:30 PST on the 2021-11-07 fall-back night
    for t in (
        0,
        1_356_258_030_123,
        -86_399_999,
        1_625_140_800_001,
        1_636_273_800_000,
        1_636_277_400_000,
    ):
        text = format_unit_value(t, "ms", pattern, tz)
        assert parse_unit_value(text, "ms", pattern, tz) == t


def test_lossy_pattern_drops_time_of_day():
    t = millis(2012, 12, 23, 10, 20, 30)
    text = format_millis(t, "yyyy-MM-dd")
    assert parse_to_millis(text, "yyyy-MM-dd") == millis(2012, 12, 23)


def test_parse_unit_value_truncates():
    days = (date(2012, 12, 23) - date(1970, 1, 1)).days
    assert parse_unit_value("2012-12-23", "d", "yyyy-MM-dd") == days
    assert parse_unit_value("2012-12-23 23:59:59", "days") == days
    assert parse_unit_value("1970-01-01 00:01:59", "m") == 1


def test_format_unit_value_converts_first():
    days = (date(2012, 12, 23) - date(1970, 1, 1)).days
    assert format_unit_value(days, "d", "yyyy-MM-dd") == "2012-12-23"
    assert format_unit_value(90, "s", "HH:mm:ss") == "00:01:30"


def test_convert_unit_names():
    assert convert(1000, "bogus-unit", "s") == 1
    assert convert(1, "d", "h") == 24
    assert convert(-90, "m", "h") == -1
    assert convert(3, "MINUTES", "minutes") == 3


def test_epoch_years_from_number():
    assert epoch_years_float(0) == 0.0
    assert epoch_years_float(AVERAGE_YEAR) == 1.0
    assert epoch_years_float(AVERAGE_YEAR // 2) == 0.5
    assert epoch_years_float(float(AVERAGE_YEAR) + 0.9) == 1.0


def test_epoch_years_from_text_ignores_leap_days():
    assert epoch_years_float("1971-01-01 00:00:00") == 1971.0
    # 1972 is a leap year, so three calendar years are 1096 days
    assert epoch_years_float("1973-01-01", "yyyy-MM-dd") == 1970.0 + 1096 / 365
    assert epoch_years_float("1973-01-01", "yyyy-MM-dd") != 1973.0


def test_current_epoch_millis_uses_injected_clock():
    assert current_epoch_millis(lambda: 1_234) == 1_234


def test_current_epoch_millis_reads_system_clock():
    before = int(time() * 1000)
    now = current_epoch_millis()
    after = int(time() * 1000)
    assert before - 1 <= now <= after + 1
    assert now > 1_600_000_000_000
