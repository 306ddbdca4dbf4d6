from decimal import Decimal

import pytest

from leavecal.calendar.local_date import LocalDate
from leavecal.errors import InvalidSpan
from leavecal.ledger.consumption import LeaveLedger, consumed_days, span_contribution
from leavecal.schema.enums import DurationType, RequestKind, RequestStatus
from leavecal.schema.records import LeaveSpan


def d(text):
    return LocalDate.parse_iso(text)


AS_OF = d("2025-07-30")


class TestSpanContribution:
    def test_in_progress_span_counts_through_as_of(self, make_span):
        assert span_contribution(make_span("2025-07-21", "2025-08-05"), AS_OF) == Decimal(9)

    def test_completed_span(self, make_span):
        span = make_span("2025-07-21", "2025-07-25")
        assert span_contribution(span, AS_OF) == Decimal(5)
        assert span_contribution(span, d("2026-01-01")) == Decimal(5)

    def test_span_ending_on_as_of(self, make_span):
        assert span_contribution(make_span("2025-07-28", "2025-07-30"), AS_OF) == Decimal(3)

    @pytest.mark.parametrize("duration", [DurationType.HALF_DAY_FORENOON, DurationType.HALF_DAY_AFTERNOON])
    def test_half_day(self, make_span, duration):
        span = make_span("2025-07-22", duration=duration)
        assert span_contribution(span, AS_OF) == Decimal("0.5")
        assert span_contribution(span, d("2025-07-22")) == Decimal("0.5")

    def test_half_day_on_sunday_counts_zero(self, make_span):
        span = make_span("2025-07-27", duration=DurationType.HALF_DAY_FORENOON)
        assert span_contribution(span, AS_OF) == Decimal(0)

    def test_future_span(self, make_span):
        assert span_contribution(make_span("2025-07-31", "2025-08-02"), AS_OF) == Decimal(0)
        half = make_span("2025-08-01", duration=DurationType.HALF_DAY_AFTERNOON)
        assert span_contribution(half, AS_OF) == Decimal(0)

    @pytest.mark.parametrize("status", [RequestStatus.PENDING, RequestStatus.FORWARDED, RequestStatus.REJECTED])
    def test_non_approved_span(self, make_span, status):
        assert span_contribution(make_span("2025-07-21", "2025-07-25", status=status), AS_OF) == Decimal(0)


class TestConsumedDays:
    def test_sum_of_contributions(self, make_span):
        spans = [
            make_span("2025-07-21", "2025-08-05"),
            make_span("2025-07-14", "2025-07-18"),
            make_span("2025-07-19", duration=DurationType.HALF_DAY_FORENOON),
            make_span("2025-07-29", "2025-07-30", status=RequestStatus.PENDING),
        ]
        total = consumed_days(spans, AS_OF)
        assert total == Decimal("14.5")
        assert isinstance(total, Decimal)

    def test_exception_days_reduce_count(self, make_span):
        spans = [make_span("2025-07-21", "2025-08-05")]
        assert consumed_days(spans, AS_OF, [d("2025-07-25")]) == Decimal(8)

    def test_no_spans(self):
        assert consumed_days([], AS_OF) == Decimal(0)

    def test_spans_at_range_edges(self, make_span):
        spans = [
            make_span("1901-01-01", "1901-01-07"),
            make_span("2199-12-27", "2199-12-31"),
        ]
        assert consumed_days(spans, d("2199-12-31")) == Decimal(10)


class TestLeaveLedger:
    def test_summarize_splits_kinds(self, make_span):
        ledger = LeaveLedger([d("2025-07-25")])
        spans = [
            make_span("2025-07-21", "2025-07-26", request_id="L1"),
            make_span("2025-07-28", duration=DurationType.HALF_DAY_AFTERNOON, kind=RequestKind.OD),
            make_span("2025-07-29", "2025-07-30", kind=RequestKind.OD),
            make_span("2025-07-21", "2025-07-30", student_id="s2"),
            make_span("2025-08-04", "2025-08-05"),
        ]
        result = ledger.summarize("s1", spans, AS_OF)
        assert result.leave_days == Decimal(5)
        assert result.od_days == Decimal("2.5")
        assert result.days_consumed == Decimal("7.5")
        assert result.spans_counted == 3
        assert result.as_of == AS_OF

    def test_consumed_days_matches_function(self, make_span):
        spans = [make_span("2025-07-21", "2025-08-05"), make_span("2025-07-22", duration=DurationType.HALF_DAY_FORENOON)]
        ledger = LeaveLedger([d("2025-07-24")])
        assert ledger.consumed_days(spans, AS_OF) == consumed_days(spans, AS_OF, [d("2025-07-24")])
        assert d("2025-07-24") in ledger.exceptions


class TestLeaveSpan:
    def test_end_before_start_rejected(self):
        with pytest.raises(InvalidSpan):
            LeaveSpan("s1", d("2025-07-22"), d("2025-07-21"), RequestStatus.APPROVED,
                      DurationType.FULL_DAY, RequestKind.LEAVE)

    def test_multi_day_half_day_rejected(self):
        with pytest.raises(InvalidSpan):
            LeaveSpan("s1", d("2025-07-21"), d("2025-07-22"), RequestStatus.APPROVED,
                      DurationType.HALF_DAY_FORENOON, RequestKind.LEAVE)

    def test_untyped_status_rejected(self):
        with pytest.raises(InvalidSpan):
            LeaveSpan("s1", d("2025-07-21"), d("2025-07-21"), "Approved",
                      DurationType.FULL_DAY, RequestKind.LEAVE)
