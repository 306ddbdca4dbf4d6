import sqlite3

import pytest

from leavecal.academic.batches import BatchRegistry, parse_batch_year
from leavecal.academic.periods import AcademicCalendar, period_end, period_range, period_start
from leavecal.calendar.clock import FixedClock
from leavecal.calendar.local_date import LocalDate
from leavecal.config import Settings, configure
from leavecal.data.loaders import InMemoryDataSource, SQLDataSource
from leavecal.errors import InvalidBatch, InvalidSemester
from leavecal.schema.records import BatchRecord, SemesterOverride


def d(text):
    return LocalDate.parse_iso(text)


TODAY = d("2026-10-19")


class TestPeriodStart:
    @pytest.mark.parametrize("batch, semester, expected", [
        ("2024", 1, "2024-06-01"),
        ("2024", 2, "2025-01-01"),
        ("2024", 3, "2025-06-01"),
        ("2024", 4, "2026-01-01"),
        ("2024", 5, "2026-06-01"),
        (2023, 7, "2026-06-01"),
    ])
    def test_conventional_dates(self, batch, semester, expected):
        assert period_start(batch, semester, today=TODAY) == d(expected)

    @pytest.mark.parametrize("batch, semester", [("2024", 6), ("2024", 8), ("9999", 8), ("2030", 1)])
    def test_future_start_clamped_to_today(self, batch, semester):
        assert period_start(batch, semester, today=TODAY) == TODAY

    def test_clamp_reads_clock(self):
        clock = FixedClock.at(2025, 3, 10)
        assert period_start("2024", 3, clock=clock) == d("2025-03-10")

    def test_override_returned_verbatim(self):
        assert period_start("2024", 3, d("2025-07-21"), today=TODAY) == d("2025-07-21")
        assert period_start("2024", 3, d("2030-01-01"), today=TODAY) == d("2030-01-01")
        override = SemesterOverride("2024", 3, d("2025-07-21"))
        assert period_start("2024", 3, override, today=TODAY) == d("2025-07-21")

    @pytest.mark.parametrize("batch", ["24", "02024", "abcd", "0999", "1000", "1900", "2024 ", "", None, True, 2024.0])
    def test_invalid_batch(self, batch):
        with pytest.raises(InvalidBatch):
            period_start(batch, 1, today=TODAY)

    @pytest.mark.parametrize("semester", [0, -1, "3", 2.0, True, None])
    def test_invalid_semester(self, semester):
        with pytest.raises(InvalidSemester):
            period_start("2024", semester, today=TODAY)

    def test_parse_batch_year(self):
        assert parse_batch_year("2024") == 2024
        assert parse_batch_year(2024) == 2024


class TestPeriodEnd:
    def test_conventional_end(self):
        assert period_end("2024", 3) == d("2025-12-31")
        assert period_end("2024", 4) == d("2026-05-31")

    def test_override_end(self):
        override = SemesterOverride("2024", 3, d("2025-07-21"), d("2025-11-29"))
        assert period_end("2024", 3, override) == d("2025-11-29")

    def test_range(self):
        span = period_range("2024", 3, today=TODAY)
        assert (span.start, span.end) == (d("2025-06-01"), d("2025-12-31"))


class TestAcademicCalendar:
    def test_active_semester(self):
        calendar = AcademicCalendar(clock=FixedClock.at(2025, 7, 30))
        assert calendar.active_semester("2024") == 3
        assert calendar.active_semester("2024", d("2025-01-01")) == 2
        assert calendar.active_semester("2024", d("2023-01-01")) == 1
        assert calendar.active_semester("2024", d("2040-01-01")) == 8

    def test_active_semester_respects_configured_maximum(self):
        configure(Settings(max_semester=6))
        calendar = AcademicCalendar()
        assert calendar.active_semester("2024", d("2040-01-01")) == 6

    def test_far_future_batch(self):
        calendar = AcademicCalendar(clock=FixedClock.at(2026, 10, 19))
        assert calendar.active_semester("9999") == 1
        assert calendar.active_semester("2199") == 1
        assert not calendar.is_within_period(d("2026-10-19"), "9999", 8)
        assert calendar.period_start("9999", 8) == TODAY

    @pytest.mark.parametrize("semester", ["x", "3", 0, None])
    def test_invalid_semester_checked_before_store_lookup(self, semester):
        conn = sqlite3.connect(":memory:")
        conn.execute(
            "CREATE TABLE semester_dates (batch TEXT, semester INTEGER, start_date TEXT, end_date TEXT)"
        )
        try:
            calendar = AcademicCalendar(overrides=SQLDataSource(conn, placeholder="?"))
            with pytest.raises(InvalidSemester):
                calendar.period_start("2024", semester, d("2025-07-30"))
            with pytest.raises(InvalidSemester):
                calendar.override_for("2024", semester)
        finally:
            conn.close()

    def test_period_uses_overrides(self):
        source = InMemoryDataSource(overrides=[SemesterOverride("2024", 3, d("2025-07-21"))])
        calendar = AcademicCalendar(overrides=source, clock=FixedClock.at(2025, 7, 30))
        period = calendar.period("2024", 3)
        assert period.start_date == d("2025-07-21")
        assert period.end_date == d("2025-12-31")
        assert period.is_override
        assert not calendar.period("2024", 4).is_override

    def test_period_start_clamps_to_as_of(self):
        calendar = AcademicCalendar(clock=FixedClock.at(2026, 10, 19))
        assert calendar.period_start("2024", 3) == d("2025-06-01")
        assert calendar.period_start("2024", 3, d("2025-05-01")) == d("2025-05-01")

    def test_within_period(self):
        calendar = AcademicCalendar()
        assert calendar.is_within_period(d("2025-07-30"), "2024", 3)
        assert not calendar.is_within_period(d("2026-01-01"), "2024", 3)

    def test_override_cache_invalidation(self):
        source = InMemoryDataSource(overrides=[SemesterOverride("2024", 3, d("2025-07-21"))])
        calendar = AcademicCalendar(overrides=source, clock=FixedClock.at(2026, 10, 19))
        assert calendar.period_start("2024", 3) == d("2025-07-21")

        source.overrides = []
        assert calendar.period_start("2024", 3) == d("2025-07-21")
        calendar.invalidate()
        assert calendar.period_start("2024", 3) == d("2025-06-01")

    def test_registry_rejects_unknown_batch(self):
        registry = BatchRegistry([BatchRecord.for_start_year(2024)])
        calendar = AcademicCalendar(batches=registry, clock=FixedClock.at(2026, 10, 19))
        assert calendar.period_start("2024", 1) == d("2024-06-01")
        with pytest.raises(InvalidBatch, match="Available"):
            calendar.period_start("2023", 1)


class TestBatchRegistry:
    def test_records(self):
        record = BatchRecord.for_start_year(2024)
        assert (record.batch_id, record.end_year, record.name) == ("2024", 2028, "2024-2028")

    def test_lookup(self):
        registry = BatchRegistry([
            BatchRecord.for_start_year(2025),
            BatchRecord.for_start_year(2021, is_active=False),
            BatchRecord.for_start_year(2024),
        ])
        assert len(registry) == 3
        assert "2024" in registry
        assert 2024 in registry
        assert registry.batch_year("2025") == 2025
        assert [r.batch_id for r in registry.active()] == ["2024", "2025"]
        assert registry.get("2019") is None

    def test_duplicates_rejected(self):
        with pytest.raises(ValueError):
            BatchRegistry([BatchRecord.for_start_year(2024), BatchRecord.for_start_year(2024)])
