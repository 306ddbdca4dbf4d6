from decimal import Decimal

import pytest

from leavecal.calendar.exception_days import ExceptionDay, ExceptionDaySet
from leavecal.calendar.local_date import LocalDate
from leavecal.data.loaders import InMemoryDataSource
from leavecal.errors import InvalidBatch
from leavecal.schema.enums import DurationType, RequestKind, RequestStatus
from leavecal.schema.records import BatchRecord, SemesterOverride
from leavecal.service import LeaveBalanceService


def d(text):
    return LocalDate.parse_iso(text)


@pytest.fixture
def source(make_span):
    return InMemoryDataSource(
        spans=[
            make_span("2025-07-17", "2025-07-18", request_id="before-semester"),
            make_span("2025-07-19", "2025-07-22", request_id="straddles-start"),
            make_span("2025-07-23", "2025-07-24", request_id="inside"),
            make_span("2025-07-29", duration=DurationType.HALF_DAY_FORENOON, kind=RequestKind.OD),
            make_span("2025-07-30", status=RequestStatus.PENDING),
            make_span("2025-08-04", "2025-08-05", request_id="future"),
            make_span("2025-07-21", "2025-07-30", student_id="s2"),
        ],
        exception_days=[ExceptionDay(d("2025-07-25"), "Founders Day")],
        overrides=[SemesterOverride("2024", 3, d("2025-07-21"))],
        batches=[BatchRecord.for_start_year(2024)],
    )


class TestLeaveBalanceService:
    def test_summary(self, source, clock):
        summary = LeaveBalanceService(source, clock=clock).summary("s1", "2024")
        assert summary.semester == 3
        assert summary.as_of == d("2025-07-30")
        assert summary.period_start == d("2025-07-21")
        assert summary.working_days == 8
        assert summary.leave_days == Decimal(4)
        assert summary.od_days == Decimal("0.5")
        assert summary.days_consumed == Decimal("4.5")

    def test_explicit_semester_and_date(self, source):
        service = LeaveBalanceService(source)
        summary = service.summary("s1", "2024", semester=3, as_of=d("2025-07-24"))
        assert summary.working_days == 4
        assert summary.days_consumed == Decimal(4)

    def test_refresh_picks_up_new_exception_days(self, source, clock):
        service = LeaveBalanceService(source, clock=clock)
        source.exception_days = ExceptionDaySet([d("2025-07-25"), d("2025-07-23")])
        assert service.summary("s1", "2024").working_days == 8
        service.refresh()
        summary = service.summary("s1", "2024")
        assert summary.working_days == 7
        assert summary.leave_days == Decimal(3)

    def test_unknown_batch_with_registry(self, source, clock):
        service = LeaveBalanceService(source, clock=clock, use_batch_registry=True)
        assert service.summary("s1", "2024").semester == 3
        with pytest.raises(InvalidBatch):
            service.summary("s1", "2023")
