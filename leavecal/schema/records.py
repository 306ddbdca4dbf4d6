"""
Data records for academic periods, batches and leave spans.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from leavecal.calendar.local_date import DateInterval, LocalDate
from leavecal.errors import InvalidSpan
from leavecal.schema.enums import DurationType, RequestKind, RequestStatus


@dataclass(frozen=True)
class LeaveSpan:
    """A single leave or OD request: its date range, status and duration type.

    All fields are required; stores normalise a missing duration type to
    ``DurationType.FULL_DAY`` before building a span.
    """

    student_id: str
    start: LocalDate
    end: LocalDate
    status: RequestStatus
    duration_type: DurationType
    kind: RequestKind
    request_id: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.status, RequestStatus):
            raise InvalidSpan(f"status must be a RequestStatus, got {self.status!r}")
        if not isinstance(self.duration_type, DurationType):
            raise InvalidSpan(f"duration_type must be a DurationType, got {self.duration_type!r}")
        if not isinstance(self.kind, RequestKind):
            raise InvalidSpan(f"kind must be a RequestKind, got {self.kind!r}")
        if self.end < self.start:
            raise InvalidSpan(f"Request ends before it starts: {self.start}..{self.end}")
        if self.duration_type.is_half_day and self.start != self.end:
            raise InvalidSpan(f"Half-day request must cover a single day: {self.start}..{self.end}")

    @property
    def interval(self) -> DateInterval:
        return DateInterval(self.start, self.end)

    @property
    def is_half_day(self) -> bool:
        return self.duration_type.is_half_day


@dataclass(frozen=True)
class SemesterOverride:
    """Administratively declared dates of a (batch, semester) period."""

    batch: str
    semester: int
    start_date: LocalDate
    end_date: Optional[LocalDate] = None


@dataclass(frozen=True)
class AcademicPeriod:
    """Start (and end) of a batch's semester.

    Attributes:
        batch: 4-digit start year of the cohort
        semester: Semester number (1-based)
        start_date: Canonical start used as the lower bound of accounting
        end_date: Conventional or declared end of the semester
        is_override: True when the dates come from an override record
    """

    batch: str
    semester: int
    start_date: LocalDate
    end_date: Optional[LocalDate] = None
    is_override: bool = False

    @property
    def interval(self) -> Optional[DateInterval]:
        if self.end_date is None:
            return None
        return DateInterval(self.start_date, self.end_date)


@dataclass(frozen=True)
class BatchRecord:
    """Canonical cohort record."""

    batch_id: str
    start_year: int
    end_year: int
    name: str
    is_active: bool = True

    @classmethod
    def for_start_year(cls, start_year: int, program_years: int = 4,
                       is_active: bool = True) -> "BatchRecord":
        end_year = start_year + program_years
        return cls(
            batch_id=str(start_year),
            start_year=start_year,
            end_year=end_year,
            name=f"{start_year}-{end_year}",
            is_active=is_active,
        )


@dataclass(frozen=True)
class LeaveLedgerResult:
    """Days consumed by a student as of a date, split by request kind."""

    student_id: str
    as_of: LocalDate
    days_consumed: Decimal
    leave_days: Decimal = Decimal(0)
    od_days: Decimal = Decimal(0)
    spans_counted: int = 0
