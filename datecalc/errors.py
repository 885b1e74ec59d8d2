"""Exception hierarchy for date parsing, formatting and arithmetic."""


class DateCalcError(ValueError):
    """Base exception for datecalc errors."""


class MalformedDateError(DateCalcError):
    """Raised when date text does not match the pattern it is parsed with."""

    def __init__(self, text: str, pattern: str, reason: str = "") -> None:
        self.text: str = text
        self.pattern: str = pattern
        detail = f" ({reason})" if reason else ""
        super().__init__(
            f"Unparseable date: {text!r} does not match pattern {pattern!r}{detail}.\n"
            f"Hint: pass the pattern the text was written with, e.g.\n"
            f"  parse_time('2012-12-23', 'ms', 'yyyy-MM-dd')"
        )


class UnknownTimezoneError(DateCalcError):
    """Raised when an explicit timezone argument cannot be resolved."""

    def __init__(self, timezone: str) -> None:
        self.timezone: str = timezone
        super().__init__(
            f"Unknown timezone: {timezone!r}.\n"
            f"Use an IANA name ('Europe/Berlin'), an offset ('GMT+02:00'),\n"
            f"or a short id such as 'PST' or 'UTC'."
        )


class InvalidPatternError(DateCalcError):
    """Raised when a date pattern cannot be compiled."""

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern: str = pattern
        super().__init__(f"Invalid date pattern {pattern!r}: {reason}")


class DateRangeError(DateCalcError):
    """Raised when a value falls outside the representable years 1-9999."""
