"""
Leave-days-consumed accounting.

Only approved spans are charged. A span is charged working day by working
day as it elapses: a span that has not started contributes nothing, an
in-progress span is counted from its start through ``as_of`` and a completed
span over its full range. Half-day spans never contribute more than 0.5.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable, Optional

from leavecal.calendar.local_date import DateInterval, LocalDate
from leavecal.calendar.working_days import ExceptionsLike, WorkingDayCalendar, calendar_for
from leavecal.schema.enums import RequestKind, RequestStatus
from leavecal.schema.records import LeaveLedgerResult, LeaveSpan

logger = logging.getLogger(__name__)

ZERO = Decimal(0)
HALF_DAY = Decimal("0.5")


def charged_interval(span: LeaveSpan, as_of: LocalDate) -> DateInterval:
    """Part of the span elapsed by ``as_of`` (empty for a future span)."""
    return DateInterval(span.start, min(span.end, as_of))


def span_contribution(span: LeaveSpan, as_of: LocalDate,
                      calendar: Optional[WorkingDayCalendar] = None) -> Decimal:
    """Days one span contributes to the ledger as of a date."""
    if span.status is not RequestStatus.APPROVED:
        return ZERO
    if span.start > as_of:
        return ZERO
    calendar = calendar or calendar_for()
    days = Decimal(calendar.count(charged_interval(span, as_of)))
    if span.is_half_day:
        return min(days, HALF_DAY)
    return days


def consumed_days(spans: Iterable[LeaveSpan], as_of: LocalDate,
                  exceptions: ExceptionsLike = None) -> Decimal:
    """
    Total chargeable days consumed by a student's spans as of a date.

    Args:
        spans: The student's leave and OD spans (any status)
        as_of: Accounting date, normally today
        exceptions: Declared non-working days

    Returns:
        Non-negative sum of integer and half-day contributions
    """
    calendar = calendar_for(exceptions)
    total = ZERO
    for span in spans:
        contribution = span_contribution(span, as_of, calendar)
        logger.debug("Span %s %s..%s contributes %s", span.request_id, span.start, span.end, contribution)
        total += contribution
    return total


class LeaveLedger:
    """Ledger over a fixed exception-day snapshot."""

    def __init__(self, exceptions: ExceptionsLike = None):
        self.calendar = calendar_for(exceptions)

    @property
    def exceptions(self):
        return self.calendar.exceptions

    def contribution(self, span: LeaveSpan, as_of: LocalDate) -> Decimal:
        return span_contribution(span, as_of, self.calendar)

    def consumed_days(self, spans: Iterable[LeaveSpan], as_of: LocalDate) -> Decimal:
        return sum((self.contribution(span, as_of) for span in spans), ZERO)

    def summarize(self, student_id: str, spans: Iterable[LeaveSpan],
                  as_of: LocalDate) -> LeaveLedgerResult:
        """Ledger result for one student; spans of other students are ignored."""
        leave_days = ZERO
        od_days = ZERO
        counted = 0
        for span in spans:
            if span.student_id != str(student_id):
                continue
            contribution = self.contribution(span, as_of)
            if contribution == ZERO:
                continue
            counted += 1
            if span.kind is RequestKind.OD:
                od_days += contribution
            else:
                leave_days += contribution
        return LeaveLedgerResult(
            student_id=str(student_id),
            as_of=as_of,
            days_consumed=leave_days + od_days,
            leave_days=leave_days,
            od_days=od_days,
            spans_counted=counted,
        )
