"""Leave ledger: days consumed, request checks and reports."""

from .consumption import (
    HALF_DAY,
    LeaveLedger,
    charged_interval,
    consumed_days,
    span_contribution,
)
from .reports import (
    daily_leave_counts,
    distinct_leave_dates,
    elapsed_leave_days,
    iso_week_label,
    weekly_leave_counts,
)
from .requests import check_total_days, find_overlaps, requested_days

__all__ = [
    # Consumption
    "LeaveLedger",
    "consumed_days",
    "span_contribution",
    "charged_interval",
    "HALF_DAY",
    # Request checks
    "requested_days",
    "check_total_days",
    "find_overlaps",
    # Reports
    "elapsed_leave_days",
    "daily_leave_counts",
    "weekly_leave_counts",
    "distinct_leave_dates",
    "iso_week_label",
]
