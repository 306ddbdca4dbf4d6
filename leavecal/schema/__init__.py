"""
Data model for leave accounting.
"""

from .enums import DurationType, RequestKind, RequestStatus
from .records import (
    AcademicPeriod,
    BatchRecord,
    LeaveLedgerResult,
    LeaveSpan,
    SemesterOverride,
)

__all__ = [
    # Enums
    "RequestStatus",
    "DurationType",
    "RequestKind",
    # Records
    "LeaveSpan",
    "SemesterOverride",
    "AcademicPeriod",
    "BatchRecord",
    "LeaveLedgerResult",
]
