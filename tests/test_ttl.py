"""Tests for time-to-live expiry values."""

from datecalc import functions
from datecalc.ttl import TTL_LABEL, TTL_PROPERTY, expire_at, expire_in
from datecalc.util import DAY, MINUTE


def test_host_names():
    assert TTL_LABEL == "TTL"
    assert TTL_PROPERTY == "ttl"


def test_expire_at_converts_to_millis():
    assert expire_at(1_600_000_000, "s") == 1_600_000_000_000
    assert expire_at(42) == 42
    assert expire_at(42, "fortnights") == 42


def test_expire_in_is_relative_to_clock():
    clock = lambda: 1_000_000  # noqa: E731
    assert expire_in(5, "m", clock) == 1_000_000 + 5 * MINUTE
    assert expire_in(2, "days", clock) == 1_000_000 + 2 * DAY
    assert expire_in(0, clock=clock) == 1_000_000


def test_function_surface():
    assert functions.expire(3, "h") == 3 * 60 * MINUTE
    assert functions.expire_in(1, "s", lambda: 0) == 1000
