"""
Calendar primitives: timezone-safe dates, clocks, exception days and the
working-day calendar.
"""

from .clock import Clock, FixedClock, SystemClock, default_clock
from .local_date import Comparison, DateInterval, LocalDate, to_local_date
from .exception_days import EMPTY_EXCEPTIONS, ExceptionDay, ExceptionDaySet
from .working_days import WorkingDayCalendar, calendar_for, count_working_days

__all__ = [
    "Clock",
    "SystemClock",
    "FixedClock",
    "default_clock",
    "LocalDate",
    "Comparison",
    "DateInterval",
    "to_local_date",
    "ExceptionDay",
    "ExceptionDaySet",
    "EMPTY_EXCEPTIONS",
    "WorkingDayCalendar",
    "calendar_for",
    "count_working_days",
]
