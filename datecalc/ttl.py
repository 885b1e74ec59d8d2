"""Expiry values for records the host marks with a time-to-live.

The host attaches TTL_LABEL and stores the returned value under
TTL_PROPERTY; this module only computes the epoch-millisecond value.
"""

from datecalc.timestamps import Clock, current_epoch_millis
from datecalc.units import resolve_unit, to_millis

TTL_LABEL = "TTL"
TTL_PROPERTY = "ttl"


def expire_at(time: int, unit: str | None = "ms") -> int:
    """Absolute expiry: time (in unit) as epoch milliseconds."""
    return to_millis(time, resolve_unit(unit))


def expire_in(delta: int, unit: str | None = "ms", clock: Clock | None = None) -> int:
    """Relative expiry: now plus delta (in unit), in epoch milliseconds."""
    return current_epoch_millis(clock) + to_millis(delta, resolve_unit(unit))
