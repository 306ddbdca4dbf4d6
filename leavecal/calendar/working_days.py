"""
QuantLib-backed working-day calendar.

The institution works Monday to Saturday: Sunday is the only weekend day and
declared exception days are added as holidays on top of it.
"""

import logging
from functools import lru_cache
from typing import Iterable, Optional, Union

import QuantLib as ql

from leavecal.calendar.exception_days import ExceptionDay, ExceptionDaySet
from leavecal.calendar.local_date import DateInterval, LocalDate
from leavecal.errors import InvalidDate

logger = logging.getLogger(__name__)

MAX_CALENDAR_DATE = LocalDate(2199, 12, 31)

ExceptionsLike = Union[ExceptionDaySet, Iterable[Union[ExceptionDay, LocalDate]], None]


def _to_ql_date(day: LocalDate) -> ql.Date:
    """Convert LocalDate to QuantLib Date."""
    return ql.Date(day.day, day.month, day.year)


def _to_local_date(ql_date: ql.Date) -> LocalDate:
    """Convert QuantLib Date to LocalDate."""
    return LocalDate(ql_date.year(), ql_date.month(), ql_date.dayOfMonth())


class WorkingDayCalendar:
    """Calendar whose business days are the institution's working days."""

    def __init__(self, exceptions: ExceptionsLike = None, name: str = "Institution"):
        self.name = name
        self.exceptions = ExceptionDaySet.coerce(exceptions)

        ql_calendar = ql.BespokeCalendar(name)
        ql_calendar.addWeekend(ql.Sunday)
        for entry in self.exceptions:
            ql_calendar.addHoliday(_to_ql_date(entry.date))
        self._ql_calendar = ql_calendar
        logger.debug("Built %s calendar with %s exception days", name, len(self.exceptions))

    def is_working_day(self, day: LocalDate) -> bool:
        """True unless ``day`` is a Sunday or a declared exception day."""
        return self._ql_calendar.isBusinessDay(_to_ql_date(day))

    def count(self, interval: DateInterval) -> int:
        """Count working days in the closed interval (0 when it is empty)."""
        if interval.is_empty:
            return 0
        return self._ql_calendar.businessDaysBetween(
            _to_ql_date(interval.start), _to_ql_date(interval.end), True, True
        )

    def next_working_day(self, day: LocalDate) -> LocalDate:
        """First working day strictly after ``day``."""
        try:
            return _to_local_date(self._ql_calendar.advance(_to_ql_date(day), 1, ql.Days))
        except RuntimeError as exc:
            raise InvalidDate(f"No working day after {day} before {MAX_CALENDAR_DATE}") from exc

    def __repr__(self) -> str:
        return f"WorkingDayCalendar(name={self.name!r}, exceptions={len(self.exceptions)})"


@lru_cache(maxsize=32)
def _cached_calendar(exceptions: ExceptionDaySet) -> WorkingDayCalendar:
    return WorkingDayCalendar(exceptions)


def calendar_for(exceptions: ExceptionsLike = None) -> WorkingDayCalendar:
    """Shared calendar for an exception-day set (calendars are read-only once built)."""
    return _cached_calendar(ExceptionDaySet.coerce(exceptions))


def count_working_days(interval: DateInterval, exceptions: ExceptionsLike = None,
                       calendar: Optional[WorkingDayCalendar] = None) -> int:
    """
    Count chargeable days in a closed interval.

    Every date d with start <= d <= end counts unless it is a Sunday or an
    exception day. An empty interval (start > end) counts 0.
    """
    if interval.is_empty:
        return 0
    if calendar is None:
        calendar = calendar_for(exceptions)
    return calendar.count(interval)
