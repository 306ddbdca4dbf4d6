"""Normalisation of persisted rows into core records."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional

import pandas as pd

from leavecal.calendar.exception_days import ExceptionDay
from leavecal.calendar.local_date import LocalDate, to_local_date
from leavecal.errors import InvalidSpan, LeaveCalendarError
from leavecal.schema.enums import DurationType, RequestKind, RequestStatus
from leavecal.schema.records import BatchRecord, LeaveSpan, SemesterOverride

logger = logging.getLogger(__name__)


def _missing(value: Any) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _pick(row: Mapping, keys: Iterable[str], default=None):
    for key in keys:
        if key in row and not _missing(row[key]):
            return row[key]
    return default


TRUE_VALUES = frozenset({"true", "t", "yes", "y", "1"})
FALSE_VALUES = frozenset({"false", "f", "no", "n", "0"})


def _flag(value) -> bool:
    """Read a boolean cell; strings such as "false" or "0" are false."""
    if isinstance(value, str):
        text = value.strip().lower()
        if text in TRUE_VALUES:
            return True
        if text in FALSE_VALUES:
            return False
        raise ValueError(f"Unknown boolean value: {value}. Available: {sorted(TRUE_VALUES | FALSE_VALUES)}")
    return bool(value)


def _date(row: Mapping, keys: Iterable[str], label: str) -> LocalDate:
    raw = _pick(row, keys)
    if raw is None:
        raise InvalidSpan(f"Row has no {label}: {dict(row)!r}")
    return to_local_date(raw)


def span_from_row(row: Mapping, kind: Optional[RequestKind] = None) -> LeaveSpan:
    """
    Build a LeaveSpan from a leave_requests/od_requests row.

    A missing or null ``duration_type`` is read as a full day. ``kind`` wins
    over a ``kind`` column when given (rows of od_requests carry no kind).
    """
    try:
        student_id = _pick(row, ("student_id", "studentId"))
        if student_id is None:
            raise InvalidSpan(f"Row has no student_id: {dict(row)!r}")
        start = _date(row, ("start_date", "start", "startDate"), "start date")
        end = _date(row, ("end_date", "end", "endDate"), "end date")
        status = RequestStatus.parse(_pick(row, ("status",), ""))

        raw_duration = _pick(row, ("duration_type", "durationType"))
        if raw_duration is None:
            logger.debug("Row %s has no duration_type; using full_day", _pick(row, ("id",)))
            duration = DurationType.FULL_DAY
        else:
            duration = DurationType.parse(raw_duration)

        if kind is None:
            kind = RequestKind.parse(_pick(row, ("kind", "type"), RequestKind.LEAVE.value))

        request_id = _pick(row, ("id", "request_id"))
        return LeaveSpan(
            student_id=str(student_id),
            start=start,
            end=end,
            status=status,
            duration_type=duration,
            kind=kind,
            request_id=str(request_id) if request_id is not None else None,
        )
    except InvalidSpan:
        raise
    except (LeaveCalendarError, ValueError, TypeError) as exc:
        raise InvalidSpan(f"Cannot normalise request row {dict(row)!r}: {exc}") from exc


def exception_day_from_row(row: Mapping) -> ExceptionDay:
    raw = _pick(row, ("date", "exception_date"))
    if raw is None:
        raise ValueError(f"Exception day row has no date: {dict(row)!r}")
    return ExceptionDay(date=to_local_date(raw), reason=str(_pick(row, ("reason",), "")))


def override_from_row(row: Mapping) -> SemesterOverride:
    batch = _pick(row, ("batch", "batch_id"))
    semester = _pick(row, ("semester",))
    start = _pick(row, ("start_date", "startDate"))
    if batch is None or semester is None or start is None:
        raise ValueError(f"Semester date row needs batch, semester and start_date: {dict(row)!r}")
    end = _pick(row, ("end_date", "endDate"))
    return SemesterOverride(
        batch=str(batch),
        semester=int(semester),
        start_date=to_local_date(start),
        end_date=to_local_date(end) if end is not None else None,
    )


def batch_from_row(row: Mapping, program_years: int = 4) -> BatchRecord:
    start_year = int(_pick(row, ("start_year",), _pick(row, ("id", "batch_id"))))
    end_year = int(_pick(row, ("end_year",), start_year + program_years))
    return BatchRecord(
        batch_id=str(_pick(row, ("id", "batch_id"), start_year)),
        start_year=start_year,
        end_year=end_year,
        name=str(_pick(row, ("name",), f"{start_year}-{end_year}")),
        is_active=_flag(_pick(row, ("is_active", "active"), True)),
    )
