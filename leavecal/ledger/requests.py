"""Checks run against requests at submission and review time."""

import logging
from decimal import Decimal
from typing import Iterable, List, Optional, Union

from leavecal.calendar.local_date import DateInterval, LocalDate
from leavecal.calendar.working_days import ExceptionsLike, calendar_for
from leavecal.errors import InvalidSpan
from leavecal.schema.enums import DurationType, RequestStatus
from leavecal.schema.records import LeaveSpan

logger = logging.getLogger(__name__)

BLOCKING_STATUSES = frozenset({RequestStatus.APPROVED, RequestStatus.PENDING})


def requested_days(start: LocalDate, end: LocalDate,
                   duration_type: DurationType = DurationType.FULL_DAY,
                   exceptions: ExceptionsLike = None) -> Decimal:
    """
    Days a request represents when it is submitted.

    Full-day requests count their working days; a half-day request covers a
    single day and counts 0.5 (0 if that day is not a working day).
    """
    if end < start:
        raise InvalidSpan(f"Request ends before it starts: {start}..{end}")
    days = Decimal(calendar_for(exceptions).count(DateInterval(start, end)))
    if duration_type.is_half_day:
        if start != end:
            raise InvalidSpan(f"Half-day request must cover a single day: {start}..{end}")
        return min(days, Decimal("0.5"))
    return days


def check_total_days(span: LeaveSpan, stored_total: Union[Decimal, float, int, None],
                     exceptions: ExceptionsLike = None) -> bool:
    """
    Compare a stored ``total_days`` value with the recomputed one.

    The stored value is only a cache; a mismatch is logged and reported as
    False so callers can refresh it.
    """
    expected = requested_days(span.start, span.end, span.duration_type, exceptions)
    if stored_total is not None and Decimal(str(stored_total)) == expected:
        return True
    logger.warning(
        "Request %s stores total_days=%s but covers %s days",
        span.request_id, stored_total, expected,
    )
    return False


def find_overlaps(spans: Iterable[LeaveSpan], start: LocalDate, end: LocalDate,
                  student_id: Optional[str] = None) -> List[LeaveSpan]:
    """
    Approved or pending requests (leave or OD) sharing a day with [start, end].

    Adjacent ranges do not overlap; rejected and forwarded requests never block.
    """
    candidate = DateInterval(start, end)
    overlaps = [
        span for span in spans
        if span.status in BLOCKING_STATUSES
        and (student_id is None or span.student_id == str(student_id))
        and span.interval.overlaps(candidate)
    ]
    if overlaps:
        logger.debug("Found %s requests overlapping %s", len(overlaps), candidate)
    return overlaps
