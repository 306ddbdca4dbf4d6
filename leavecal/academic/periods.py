"""
Academic period derivation.

Maps a (batch, semester) pair to the date its accounting period starts.
Odd semesters conventionally run June 1 - December 31 of the academic year
and even semesters January 1 - May 31 of the following calendar year, where
the academic year is ``batch + (semester - 1) // 2``. Administrative
overrides always win over the convention.
"""

import logging
from typing import Dict, Optional, Tuple, Union

from leavecal.academic.batches import BatchLike, BatchRegistry, parse_batch_year
from leavecal.calendar.clock import Clock
from leavecal.calendar.local_date import DateInterval, LocalDate
from leavecal.config import get_settings
from leavecal.data.base import SemesterOverrideStore
from leavecal.errors import InvalidSemester
from leavecal.schema.records import AcademicPeriod, SemesterOverride

logger = logging.getLogger(__name__)

DateParts = Tuple[int, int, int]
OverrideLike = Union[SemesterOverride, LocalDate, None]

ODD_SEMESTER_START = (6, 1)
ODD_SEMESTER_END = (12, 31)
EVEN_SEMESTER_START = (1, 1)
EVEN_SEMESTER_END = (5, 31)


def _parts(day: LocalDate) -> DateParts:
    return (day.year, day.month, day.day)


def validate_semester(semester: int) -> int:
    if isinstance(semester, bool) or not isinstance(semester, int) or semester < 1:
        raise InvalidSemester(f"Semester must be an integer >= 1, got {semester!r}")
    return semester


def academic_year(batch_year: int, semester: int) -> int:
    """Calendar year in which the semester's academic year begins."""
    return batch_year + (validate_semester(semester) - 1) // 2


def conventional_start(batch_year: int, semester: int) -> DateParts:
    year = academic_year(batch_year, semester)
    if semester % 2 == 1:
        return (year,) + ODD_SEMESTER_START
    return (year + 1,) + EVEN_SEMESTER_START


def conventional_end(batch_year: int, semester: int) -> DateParts:
    year = academic_year(batch_year, semester)
    if semester % 2 == 1:
        return (year,) + ODD_SEMESTER_END
    return (year + 1,) + EVEN_SEMESTER_END


def _clamped_start(parts: DateParts, today: LocalDate) -> LocalDate:
    # Compared as tuples so far-future years never need a real date
    if parts > _parts(today):
        logger.debug("Period start %s is after %s; clamping", parts, today)
        return today
    return LocalDate(*parts)


def _override_start(override: OverrideLike) -> Optional[LocalDate]:
    if isinstance(override, SemesterOverride):
        return override.start_date
    return override


def period_start(
    batch: BatchLike,
    semester: int,
    override: OverrideLike = None,
    *,
    today: Optional[LocalDate] = None,
    clock: Optional[Clock] = None,
) -> LocalDate:
    """
    Canonical start date of a (batch, semester) period.

    Args:
        batch: 4-digit start year of the cohort
        semester: Semester number, 1-based
        override: Explicit start date (or override record); returned verbatim
        today: Clamp bound, defaults to today's date from ``clock``
        clock: Clock used when ``today`` is not given

    Raises:
        InvalidBatch: batch is not a 4-digit year
        InvalidSemester: semester is not an integer >= 1
    """
    start = _override_start(override)
    if start is not None:
        return start
    batch_year = parse_batch_year(batch)
    validate_semester(semester)
    if today is None:
        today = LocalDate.today(clock)
    return _clamped_start(conventional_start(batch_year, semester), today)


def period_end(batch: BatchLike, semester: int, override: Optional[SemesterOverride] = None) -> LocalDate:
    """Conventional (or declared) last day of a (batch, semester) period."""
    if override is not None and override.end_date is not None:
        return override.end_date
    return LocalDate(*conventional_end(parse_batch_year(batch), validate_semester(semester)))


def period_range(
    batch: BatchLike,
    semester: int,
    override: Optional[SemesterOverride] = None,
    *,
    today: Optional[LocalDate] = None,
    clock: Optional[Clock] = None,
) -> DateInterval:
    """Start (clamped as in ``period_start``) through end of the period."""
    start = period_start(batch, semester, override, today=today, clock=clock)
    return DateInterval(start, period_end(batch, semester, override))


class AcademicCalendar:
    """
    Period lookups for batches, backed by optional override and batch data.

    Override lookups are cached per (batch, semester); call ``invalidate``
    after the override or batch data changes.
    """

    def __init__(
        self,
        overrides: Optional[SemesterOverrideStore] = None,
        batches: Optional[BatchRegistry] = None,
        clock: Optional[Clock] = None,
        max_semester: Optional[int] = None,
    ):
        self.overrides = overrides
        self.batches = batches
        self.clock = clock
        self.max_semester = max_semester or get_settings().max_semester
        self._override_cache: Dict[Tuple[str, int], Optional[SemesterOverride]] = {}

    def today(self) -> LocalDate:
        return LocalDate.today(self.clock)

    def invalidate(self) -> None:
        self._override_cache.clear()

    def override_for(self, batch: BatchLike, semester: int) -> Optional[SemesterOverride]:
        validate_semester(semester)
        if self.overrides is None:
            return None
        key = (str(batch), semester)
        if key not in self._override_cache:
            self._override_cache[key] = self.overrides.get_override(str(batch), semester)
        return self._override_cache[key]

    def batch_year(self, batch: BatchLike) -> int:
        """Start year of a batch, checked against the registry when one is set."""
        year = parse_batch_year(batch)
        if self.batches is not None:
            return self.batches.require(batch).start_year
        return year

    def period_start(self, batch: BatchLike, semester: int,
                     as_of: Optional[LocalDate] = None) -> LocalDate:
        """Start of the period, clamped to ``as_of`` (default today)."""
        override = self.override_for(batch, semester)
        if override is not None:
            return override.start_date
        batch_year = self.batch_year(batch)
        return _clamped_start(conventional_start(batch_year, semester), as_of or self.today())

    def period_end(self, batch: BatchLike, semester: int) -> LocalDate:
        override = self.override_for(batch, semester)
        if override is not None and override.end_date is not None:
            return override.end_date
        return LocalDate(*conventional_end(self.batch_year(batch), validate_semester(semester)))

    def period(self, batch: BatchLike, semester: int,
               as_of: Optional[LocalDate] = None) -> AcademicPeriod:
        override = self.override_for(batch, semester)
        return AcademicPeriod(
            batch=str(batch),
            semester=semester,
            start_date=self.period_start(batch, semester, as_of),
            end_date=self.period_end(batch, semester),
            is_override=override is not None,
        )

    def period_range(self, batch: BatchLike, semester: int,
                     as_of: Optional[LocalDate] = None) -> DateInterval:
        return DateInterval(self.period_start(batch, semester, as_of), self.period_end(batch, semester))

    def _range_parts(self, batch: BatchLike, semester: int) -> Tuple[DateParts, DateParts]:
        # Unclamped bounds as tuples; far-future batches never build a LocalDate
        override = self.override_for(batch, semester)
        if override is None:
            batch_year = self.batch_year(batch)
            return conventional_start(batch_year, semester), conventional_end(batch_year, semester)
        start = _parts(override.start_date)
        if override.end_date is not None:
            return start, _parts(override.end_date)
        return start, conventional_end(self.batch_year(batch), semester)

    def is_within_period(self, day: LocalDate, batch: BatchLike, semester: int) -> bool:
        """True when ``day`` falls between the period's start and end."""
        start, end = self._range_parts(batch, semester)
        return start <= _parts(day) <= end

    def active_semester(self, batch: BatchLike, as_of: Optional[LocalDate] = None) -> int:
        """
        Semester in progress for a batch on ``as_of``.

        The first semester whose range contains ``as_of`` wins; otherwise the
        semester after the last one already finished, never beyond
        ``max_semester``. Before the batch starts this is semester 1.
        """
        as_of = as_of or self.today()
        day = _parts(as_of)
        active = 1
        for semester in range(1, self.max_semester + 1):
            start, end = self._range_parts(batch, semester)
            if start <= day <= end:
                return semester
            if day > end:
                active = semester + 1
        return min(active, self.max_semester)
