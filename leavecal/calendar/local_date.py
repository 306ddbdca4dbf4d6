"""
Timezone-safe calendar date value type.

A LocalDate is a plain (year, month, day) triple in institutional local time.
It never carries a time of day or a UTC offset, and none of its operations go
through a UTC representation, so the same calendar day always compares equal
and serializes to the same string whatever the process timezone is.

Supported dates run from 1901-01-01 through 2199-12-31; anything outside that
range is rejected with InvalidDate when the date is built.
"""

import calendar
import re
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from enum import Enum
from typing import Iterator, Optional, Union

from leavecal.calendar.clock import Clock, default_clock
from leavecal.config import get_settings
from leavecal.errors import InvalidDate, InvalidFormat

ISO_PATTERN = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")

# Same range as the QuantLib calendar engine
MIN_YEAR = 1901
MAX_YEAR = 2199


class Comparison(Enum):
    """Result of comparing two dates."""

    BEFORE = -1
    EQUAL = 0
    AFTER = 1


def _validate_parts(year, month, day) -> None:
    for name, value in (("year", year), ("month", month), ("day", day)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidDate(f"{name} must be an integer, got {value!r}")
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise InvalidDate(f"Year out of range: {year}")
    if not 1 <= month <= 12:
        raise InvalidDate(f"Month out of range: {month}")
    last_day = calendar.monthrange(year, month)[1]
    if not 1 <= day <= last_day:
        raise InvalidDate(f"Day out of range for {year:04d}-{month:02d}: {day}")


@dataclass(frozen=True, order=True)
class LocalDate:
    """Immutable calendar date, totally ordered by (year, month, day)."""

    year: int
    month: int
    day: int

    def __post_init__(self):
        _validate_parts(self.year, self.month, self.day)

    @classmethod
    def from_parts(cls, year: int, month: int, day: int) -> "LocalDate":
        """Build a date, raising InvalidDate for non-existent days (e.g. Feb 30)."""
        return cls(year, month, day)

    @classmethod
    def from_date(cls, value: date) -> "LocalDate":
        """Build from a ``datetime.date`` (a datetime is truncated as-is)."""
        return cls(value.year, value.month, value.day)

    @classmethod
    def parse_iso(cls, text: str) -> "LocalDate":
        """Parse a strict ``YYYY-MM-DD`` string."""
        if not isinstance(text, str):
            raise InvalidFormat(f"Expected a YYYY-MM-DD string, got {type(text).__name__}")
        match = ISO_PATTERN.fullmatch(text)
        if match is None:
            raise InvalidFormat(f"Not a YYYY-MM-DD date: {text!r}")
        year, month, day = (int(part) for part in match.groups())
        try:
            return cls(year, month, day)
        except InvalidDate as exc:
            raise InvalidFormat(f"Not a valid calendar date: {text!r}") from exc

    @classmethod
    def today(cls, clock: Optional[Clock] = None, tz: Optional[tzinfo] = None) -> "LocalDate":
        """Current calendar day in the institutional timezone.

        Aware clock readings are converted into the institutional timezone
        before truncation; naive readings are taken as institutional local time.
        """
        moment = (clock or default_clock()).now()
        if moment.tzinfo is not None:
            moment = moment.astimezone(tz or get_settings().timezone)
        return cls(moment.year, moment.month, moment.day)

    def to_iso(self) -> str:
        """Canonical ``YYYY-MM-DD`` form."""
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)

    def toordinal(self) -> int:
        return self.to_date().toordinal()

    def add_days(self, days: int) -> "LocalDate":
        """Shift by ``days`` calendar days (negative values move backwards)."""
        try:
            shifted = date.fromordinal(self.toordinal() + days)
        except (ValueError, OverflowError) as exc:
            raise InvalidDate(f"{self.to_iso()} shifted by {days} days is out of range") from exc
        return LocalDate.from_date(shifted)

    def day_of_week(self) -> int:
        """Day of week with 0 = Sunday through 6 = Saturday."""
        return self.to_date().isoweekday() % 7

    def is_sunday(self) -> bool:
        return self.day_of_week() == 0

    def days_until(self, other: "LocalDate") -> int:
        """Signed number of calendar days from this date to ``other``."""
        return other.toordinal() - self.toordinal()

    def compare(self, other: "LocalDate") -> Comparison:
        if self < other:
            return Comparison.BEFORE
        if self > other:
            return Comparison.AFTER
        return Comparison.EQUAL

    def __str__(self) -> str:
        return self.to_iso()


DateLike = Union[LocalDate, date, datetime, str]


def to_local_date(value: DateLike, tz: Optional[tzinfo] = None) -> LocalDate:
    """
    Coerce a date-like boundary value into a LocalDate.

    Accepts LocalDate, ``date``, ``datetime`` (including ``pandas.Timestamp``)
    and strict 'YYYY-MM-DD' strings. Aware datetimes are first converted into
    the institutional timezone so the calendar day is the one users experience.
    """
    if isinstance(value, LocalDate):
        return value
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(tz or get_settings().timezone)
        return LocalDate(value.year, value.month, value.day)
    if isinstance(value, date):
        return LocalDate.from_date(value)
    if isinstance(value, str):
        return LocalDate.parse_iso(value)
    raise TypeError(f"Unsupported type for date: {type(value)}")


@dataclass(frozen=True)
class DateInterval:
    """Closed date range [start, end]; start > end is the empty interval."""

    start: LocalDate
    end: LocalDate

    @property
    def is_empty(self) -> bool:
        return self.start > self.end

    @property
    def calendar_days(self) -> int:
        """Number of calendar days covered, inclusive of both ends."""
        if self.is_empty:
            return 0
        return self.start.days_until(self.end) + 1

    def contains(self, day: LocalDate) -> bool:
        return self.start <= day <= self.end

    def overlaps(self, other: "DateInterval") -> bool:
        """True when both intervals share at least one day."""
        if self.is_empty or other.is_empty:
            return False
        return max(self.start, other.start) <= min(self.end, other.end)

    def clip(self, upper: LocalDate) -> "DateInterval":
        """Interval truncated so it ends no later than ``upper``."""
        return DateInterval(self.start, min(self.end, upper))

    def iter_days(self) -> Iterator[LocalDate]:
        current = self.start
        while current <= self.end:
            yield current
            if current == self.end:
                break
            current = current.add_days(1)

    def __str__(self) -> str:
        return f"{self.start.to_iso()}..{self.end.to_iso()}"
