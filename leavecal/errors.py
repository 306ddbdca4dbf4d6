"""Error kinds raised by the calendar and leave accounting core."""


class LeaveCalendarError(ValueError):
    """Base class for all input-validity failures of the core."""


class InvalidDate(LeaveCalendarError):
    """Raised when a (year, month, day) triple is not a real calendar date."""


class InvalidFormat(LeaveCalendarError):
    """Raised when a string is not a strict YYYY-MM-DD date."""


class InvalidBatch(LeaveCalendarError):
    """Raised when a batch identifier is not a 4-digit start year."""


class InvalidSemester(LeaveCalendarError):
    """Raised when a semester number is below 1."""


class InvalidSpan(LeaveCalendarError):
    """Raised when a persisted request row cannot be turned into a LeaveSpan."""
