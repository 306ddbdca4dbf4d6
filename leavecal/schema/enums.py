"""
Core enumeration types for leave and OD requests.
"""

from enum import Enum


class RequestStatus(Enum):
    """Approval workflow states of a request."""

    PENDING = "Pending"
    APPROVED = "Approved"
    FORWARDED = "Forwarded"
    REJECTED = "Rejected"

    @classmethod
    def parse(cls, value: str) -> "RequestStatus":
        """Case-insensitive lookup by stored value."""
        text = str(value).strip().lower()
        for status in cls:
            if status.value.lower() == text:
                return status
        raise ValueError(f"Unknown request status: {value}. Available: {[s.value for s in cls]}")


class DurationType(Enum):
    """Request duration variants, stored as the persisted column values."""

    FULL_DAY = "full_day"
    HALF_DAY_FORENOON = "half_day_forenoon"
    HALF_DAY_AFTERNOON = "half_day_afternoon"

    @property
    def is_half_day(self) -> bool:
        return self is not DurationType.FULL_DAY

    @classmethod
    def parse(cls, value: str) -> "DurationType":
        text = str(value).strip().lower().replace("-", "_").replace(" ", "_")
        for duration in cls:
            if duration.value == text:
                return duration
        raise ValueError(f"Unknown duration type: {value}. Available: {[d.value for d in cls]}")


class RequestKind(Enum):
    """Ordinary leave or on-duty absence."""

    LEAVE = "leave"
    OD = "od"

    @classmethod
    def parse(cls, value: str) -> "RequestKind":
        text = str(value).strip().lower()
        for kind in cls:
            if kind.value == text:
                return kind
        raise ValueError(f"Unknown request kind: {value}. Available: {[k.value for k in cls]}")
