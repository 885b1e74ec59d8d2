from . import functions
from .arithmetic import CalendarModel, GregorianCalendar, add_to_timestamp
from .errors import (
    DateCalcError,
    DateRangeError,
    InvalidPatternError,
    MalformedDateError,
    UnknownTimezoneError,
)
from .fields import FieldResult, extract_calendar_field, extract_fields
from .formats import FormatSpec, resolve_format, resolve_strict_format
from .pattern import is_zone_pattern
from .timestamps import (
    convert,
    current_epoch_millis,
    epoch_years_float,
    format_millis,
    format_unit_value,
    parse_to_millis,
    parse_unit_value,
)
from .units import CalendarUnit, TimeUnit, calendar_unit, resolve_unit
from .util import DEFAULT_FORMAT
from .zones import system_timezone_id

__all__ = [
    "TimeUnit",
    "CalendarUnit",
    "FormatSpec",
    "FieldResult",
    "CalendarModel",
    "GregorianCalendar",
    "resolve_unit",
    "calendar_unit",
    "is_zone_pattern",
    "resolve_format",
    "resolve_strict_format",
    "parse_to_millis",
    "format_millis",
    "parse_unit_value",
    "format_unit_value",
    "convert",
    "epoch_years_float",
    "current_epoch_millis",
    "extract_fields",
    "extract_calendar_field",
    "add_to_timestamp",
    "system_timezone_id",
    "functions",
    "DEFAULT_FORMAT",
    "DateCalcError",
    "MalformedDateError",
    "UnknownTimezoneError",
    "InvalidPatternError",
    "DateRangeError",
]
