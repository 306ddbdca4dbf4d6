"""Academic calendar: batches, semesters and period start dates."""

from .batches import BatchRegistry, parse_batch_year
from .periods import (
    AcademicCalendar,
    academic_year,
    period_end,
    period_range,
    period_start,
    validate_semester,
)

__all__ = [
    "AcademicCalendar",
    "BatchRegistry",
    "parse_batch_year",
    "academic_year",
    "validate_semester",
    "period_start",
    "period_end",
    "period_range",
]
