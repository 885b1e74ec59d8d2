"""Add a quantity in some unit to an epoch-millisecond timestamp.

Days and smaller units have a fixed length and are added as plain
milliseconds. Months and years do not, so they go through a calendar model
that shifts the date and resolves end-of-month overflow.
"""

import logging
from datetime import datetime
from typing import Protocol

from dateutil.relativedelta import relativedelta
from typing_extensions import override

from datecalc.errors import DateRangeError
from datecalc.units import CalendarUnit, calendar_unit, convert_duration, resolve_unit
from datecalc.util import from_epoch_millis, to_epoch_millis
from datecalc.zones import resolve_timezone, system_timezone

logger = logging.getLogger(__name__)


class CalendarModel(Protocol):
    """Month/year shifting with a defined rollover policy."""

    def add_months(self, moment: datetime, months: int) -> datetime: ...

    def add_years(self, moment: datetime, years: int) -> datetime: ...


class GregorianCalendar(CalendarModel):
    """Proleptic Gregorian shifting backed by dateutil's relativedelta.

    The day of month is clamped to the last day of the target month
    (Jan 31 + 1 month = Feb 28, or Feb 29 in a leap year; Feb 29 + 1 year
    = Feb 28). The wall-clock time of day is kept.
    """

    @override
    def add_months(self, moment: datetime, months: int) -> datetime:
        return moment + relativedelta(months=months)

    @override
    def add_years(self, moment: datetime, years: int) -> datetime:
        return moment + relativedelta(years=years)


def add_to_timestamp(
    time: int,
    unit: str | None,
    delta: int,
    delta_unit: str | None,
    *,
    tz: str | None = None,
    calendar: CalendarModel | None = None,
) -> int:
    """Add delta (in delta_unit) to time.

    For month(s)/year(s) the instant is viewed in tz (the system default
    zone when None), shifted with the calendar model and converted back
    to epoch milliseconds.

    Otherwise delta is converted into `unit` and added to `time` directly.
    `time` is treated as milliseconds on the calendar path regardless of
    `unit`, and `unit` only names the unit delta is expressed in on the
    fixed path.

    Raises:
        DateRangeError: If the shifted date leaves years 1-9999
        UnknownTimezoneError: If tz is unknown
    """
    cal_unit = calendar_unit(delta_unit)
    if cal_unit is None:
        return time + convert_duration(delta, resolve_unit(delta_unit), resolve_unit(unit))

    model = calendar or GregorianCalendar()
    zone = resolve_timezone(tz) if tz else system_timezone()
    moment = from_epoch_millis(time, zone)
    logger.debug("Calendar add of %d %s to %s", delta, cal_unit.value, moment)
    try:
        if cal_unit is CalendarUnit.YEAR:
            shifted = model.add_years(moment, delta)
        else:
            shifted = model.add_months(moment, delta)
    except (OverflowError, ValueError) as e:
        raise DateRangeError(
            f"Adding {delta} {cal_unit.value}(s) to {moment.isoformat()} "
            f"leaves the supported years 1-9999"
        ) from e
    return to_epoch_millis(shifted)
