"""Shared fixtures for the leave accounting tests."""

import pytest

from leavecal.calendar.clock import FixedClock
from leavecal.calendar.local_date import LocalDate
from leavecal.config import configure
from leavecal.schema.enums import DurationType, RequestKind, RequestStatus
from leavecal.schema.records import LeaveSpan


@pytest.fixture(autouse=True)
def default_settings(monkeypatch):
    for name in (
        "LEAVECAL_TIMEZONE",
        "LEAVECAL_MAX_SEMESTER",
        "LEAVECAL_PROGRAM_YEARS",
        "LEAVECAL_DATA_DIR",
        "LEAVECAL_DB_PLACEHOLDER",
    ):
        monkeypatch.delenv(name, raising=False)
    configure(None)
    yield
    configure(None)


@pytest.fixture
def clock():
    """Naive clock reading, taken as institutional local time."""
    return FixedClock.at(2025, 7, 30)


@pytest.fixture
def make_span():
    def _make(start, end=None, status=RequestStatus.APPROVED,
              duration=DurationType.FULL_DAY, kind=RequestKind.LEAVE,
              student_id="s1", request_id=None):
        start_date = LocalDate.parse_iso(start)
        end_date = LocalDate.parse_iso(end) if end else start_date
        return LeaveSpan(
            student_id=student_id,
            start=start_date,
            end=end_date,
            status=status,
            duration_type=duration,
            kind=kind,
            request_id=request_id,
        )

    return _make
