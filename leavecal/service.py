"""
Leave balance service used by the API layer.

Loads one consistent snapshot from a data source and answers the dashboard
questions for a student with a single ``as_of`` date: when the semester
started, how many working days have elapsed since, and how many of them the
student has consumed on leave or OD.
"""

import logging
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Optional

from leavecal.academic.batches import BatchLike, BatchRegistry
from leavecal.academic.periods import AcademicCalendar
from leavecal.calendar.clock import Clock
from leavecal.calendar.local_date import DateInterval, LocalDate
from leavecal.data.base import BaseDataSource
from leavecal.ledger.consumption import LeaveLedger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StudentLeaveSummary:
    """Leave position of a student for the current semester.

    Attributes:
        student_id: Student identifier
        batch: Cohort start year
        semester: Semester the summary is computed for
        as_of: Accounting date used by every figure below
        period_start: Start of the semester (clamped to as_of)
        working_days: Working days from period_start through as_of
        days_consumed: Leave and OD days charged in the same window
        leave_days: Part of days_consumed from leave requests
        od_days: Part of days_consumed from OD requests
    """

    student_id: str
    batch: str
    semester: int
    as_of: LocalDate
    period_start: LocalDate
    working_days: int
    days_consumed: Decimal
    leave_days: Decimal
    od_days: Decimal


class LeaveBalanceService:
    """Ties the academic calendar and the ledger to a data source."""

    def __init__(self, source: BaseDataSource, clock: Optional[Clock] = None,
                 use_batch_registry: bool = False):
        self.source = source
        self.clock = clock
        batches = BatchRegistry.from_store(source) if use_batch_registry else None
        self.calendar = AcademicCalendar(overrides=source, batches=batches, clock=clock)
        self.ledger = LeaveLedger(source.load_exception_days())

    def refresh(self) -> None:
        """Reload exception days and drop cached overrides."""
        self.ledger = LeaveLedger(self.source.load_exception_days())
        self.calendar.invalidate()

    def summary(self, student_id: str, batch: BatchLike, semester: Optional[int] = None,
                as_of: Optional[LocalDate] = None) -> StudentLeaveSummary:
        """
        Leave summary for a student.

        Args:
            student_id: Student identifier
            batch: Student's batch
            semester: Semester to report (default: active semester on as_of)
            as_of: Accounting date (default: today from the service clock)
        """
        as_of = as_of or LocalDate.today(self.clock)
        if semester is None:
            semester = self.calendar.active_semester(batch, as_of)
        start = self.calendar.period_start(batch, semester, as_of)
        window = DateInterval(start, as_of)

        spans = [
            span for span in self.source.load_spans(student_id)
            if span.end >= start
        ]
        # Only the part of each span inside the semester is charged
        clipped = [
            span if span.start >= start else replace(span, start=start)
            for span in spans
        ]
        result = self.ledger.summarize(student_id, clipped, as_of)
        working_days = self.ledger.calendar.count(window)
        logger.debug("Summary for %s: %s of %s working days", student_id, result.days_consumed, working_days)

        return StudentLeaveSummary(
            student_id=str(student_id),
            batch=str(batch),
            semester=semester,
            as_of=as_of,
            period_start=start,
            working_days=working_days,
            days_consumed=result.days_consumed,
            leave_days=result.leave_days,
            od_days=result.od_days,
        )
