"""
Daily and weekly leave reports.

Reports look only at approved requests and only at days that have already
elapsed by ``as_of``; future days of a request never show up.
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Mapping, Optional, Union

import pandas as pd

from leavecal.calendar.local_date import LocalDate
from leavecal.calendar.working_days import WorkingDayCalendar
from leavecal.ledger.consumption import charged_interval
from leavecal.schema.enums import RequestStatus
from leavecal.schema.records import LeaveSpan

FRAME_COLUMNS = ["date", "student_id", "kind", "request_id"]
UNKNOWN_BATCH = "Unknown"

BatchLookup = Union[Mapping[str, str], Callable[[str], Optional[str]]]


def elapsed_leave_days(spans: Iterable[LeaveSpan], as_of: LocalDate,
                       calendar: Optional[WorkingDayCalendar] = None) -> pd.DataFrame:
    """
    One row per student-day on approved leave, up to and including ``as_of``.

    With a calendar, non-working days are left out. The ``date`` column holds
    ISO strings.
    """
    rows = []
    for span in spans:
        if span.status is not RequestStatus.APPROVED or span.start > as_of:
            continue
        for day in charged_interval(span, as_of).iter_days():
            if calendar is not None and not calendar.is_working_day(day):
                continue
            rows.append({
                "date": day.to_iso(),
                "student_id": span.student_id,
                "kind": span.kind.value,
                "request_id": span.request_id,
            })
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)


def daily_leave_counts(spans: Iterable[LeaveSpan], as_of: LocalDate,
                       calendar: Optional[WorkingDayCalendar] = None) -> Dict[LocalDate, int]:
    """Number of approved requests covering each elapsed date."""
    frame = elapsed_leave_days(spans, as_of, calendar)
    if frame.empty:
        return {}
    counts = frame.groupby("date").size()
    return {LocalDate.parse_iso(day): int(n) for day, n in counts.items()}


def iso_week_label(day: LocalDate) -> str:
    year, week, _ = day.to_date().isocalendar()
    return f"{year}-W{week:02d}"


def _batch_resolver(batch_of: BatchLookup) -> Callable[[str], str]:
    if callable(batch_of):
        return lambda student_id: batch_of(student_id) or UNKNOWN_BATCH
    return lambda student_id: batch_of.get(student_id) or UNKNOWN_BATCH


def weekly_leave_counts(spans: Iterable[LeaveSpan], as_of: LocalDate, batch_of: BatchLookup,
                        calendar: Optional[WorkingDayCalendar] = None) -> Dict[str, Dict[str, int]]:
    """
    Student-days on leave per ISO week and batch.

    Args:
        spans: Spans of any number of students
        as_of: Last day to include
        batch_of: Student id to batch mapping (or callable); unmapped
            students are reported under "Unknown"
        calendar: Optional working-day calendar to skip non-working days

    Returns:
        ``{"2025-W31": {"2024": 3, ...}, ...}`` ordered by week
    """
    frame = elapsed_leave_days(spans, as_of, calendar)
    if frame.empty:
        return {}
    resolve = _batch_resolver(batch_of)
    frame["week"] = frame["date"].map(lambda d: iso_week_label(LocalDate.parse_iso(d)))
    frame["batch"] = frame["student_id"].map(resolve)
    counts = frame.groupby(["week", "batch"]).size()

    result: Dict[str, Dict[str, int]] = {}
    for (week, batch), n in counts.items():
        result.setdefault(week, {})[batch] = int(n)
    return result


def distinct_leave_dates(spans: Iterable[LeaveSpan], as_of: LocalDate,
                         student_id: Optional[str] = None) -> List[LocalDate]:
    """Distinct elapsed dates on approved leave, overlapping requests counted once."""
    if student_id is not None:
        spans = [s for s in spans if s.student_id == str(student_id)]
    frame = elapsed_leave_days(spans, as_of)
    return [LocalDate.parse_iso(d) for d in sorted(frame["date"].unique())]
