"""Academic Calendar & Leave Accounting.

This package computes leave balances for a student leave/on-duty portal:
working days between dates (Sundays and declared exception days are not
chargeable), semester start dates per batch, and days consumed by approved
leave and OD requests.

Key modules:
- calendar: timezone-safe dates, clocks, exception days, working-day calendar
- academic: batches and semester period dates
- ledger: days consumed, request checks and reports
- data: request, exception-day, override and batch stores
- service: per-student leave summary for the API layer
"""

from .academic import AcademicCalendar, BatchRegistry, period_start
from .calendar import (
    Comparison,
    DateInterval,
    ExceptionDay,
    ExceptionDaySet,
    FixedClock,
    LocalDate,
    SystemClock,
    WorkingDayCalendar,
    count_working_days,
)
from .errors import (
    InvalidBatch,
    InvalidDate,
    InvalidFormat,
    InvalidSemester,
    InvalidSpan,
    LeaveCalendarError,
)
from .ledger import LeaveLedger, consumed_days
from .schema import (
    AcademicPeriod,
    BatchRecord,
    DurationType,
    LeaveLedgerResult,
    LeaveSpan,
    RequestKind,
    RequestStatus,
    SemesterOverride,
)

__version__ = "1.0.0"

__all__ = [
    "__version__",
    # Calendar
    "LocalDate",
    "Comparison",
    "DateInterval",
    "ExceptionDay",
    "ExceptionDaySet",
    "SystemClock",
    "FixedClock",
    "WorkingDayCalendar",
    "count_working_days",
    # Academic
    "AcademicCalendar",
    "BatchRegistry",
    "period_start",
    # Ledger
    "LeaveLedger",
    "consumed_days",
    # Data model
    "LeaveSpan",
    "RequestStatus",
    "DurationType",
    "RequestKind",
    "AcademicPeriod",
    "SemesterOverride",
    "BatchRecord",
    "LeaveLedgerResult",
    # Errors
    "LeaveCalendarError",
    "InvalidDate",
    "InvalidFormat",
    "InvalidBatch",
    "InvalidSemester",
    "InvalidSpan",
]
