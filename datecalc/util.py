"""Utility constants and helpers for datecalc.

Time unit constants represent durations in milliseconds.
These are used throughout the API for consistent time representation.
"""

from datetime import datetime, timedelta, timezone, tzinfo

from datecalc.errors import DateRangeError

# Time unit constants (all values in milliseconds)
MILLISECOND = 1
SECOND = 1000
MINUTE = 60000
HOUR = 3600000
DAY = 86400000

# Average year used by to_years(); leap days are deliberately ignored
AVERAGE_YEAR = 365 * DAY

DEFAULT_FORMAT = "yyyy-MM-dd HH:mm:ss"
UTC_ZONE_ID = "UTC"

# Bounds of a signed 64-bit timestamp
INT64_MAX = 2**63 - 1
INT64_MIN = -(2**63)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MILLISECOND = timedelta(milliseconds=1)


def to_epoch_millis(moment: datetime) -> int:
    """Milliseconds since the epoch for a timezone-aware datetime (exact)."""
    return (moment - EPOCH) // _ONE_MILLISECOND


def from_epoch_millis(millis: int, zone: tzinfo) -> datetime:
    """Timezone-aware datetime for an epoch millisecond value.

    Raises:
        DateRangeError: If the instant falls outside years 1-9999
    """
    try:
        return (EPOCH + timedelta(milliseconds=millis)).astimezone(zone)
    except (OverflowError, ValueError) as e:
        raise DateRangeError(
            f"Timestamp {millis}ms is outside the supported years 1-9999"
        ) from e
