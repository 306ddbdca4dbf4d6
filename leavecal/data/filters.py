"""
Span filtering strategies.

Provides composable filters applied by data sources when loading requests.
"""

from typing import Callable, Iterable, List

from leavecal.calendar.local_date import DateInterval, LocalDate
from leavecal.schema.enums import RequestKind, RequestStatus
from leavecal.schema.records import LeaveSpan

from .base import BaseFilter


class StatusFilter(BaseFilter):
    """
    Keep spans whose status is in an allowed set.
    """

    def __init__(self, statuses: Iterable[RequestStatus]):
        self.statuses = frozenset(statuses)

    @classmethod
    def approved_only(cls) -> "StatusFilter":
        """Create filter keeping only approved requests."""
        return cls({RequestStatus.APPROVED})

    @classmethod
    def blocking(cls) -> "StatusFilter":
        """Create filter keeping requests that block new overlapping requests."""
        return cls({RequestStatus.APPROVED, RequestStatus.PENDING})

    def filter(self, spans: List[LeaveSpan]) -> List[LeaveSpan]:
        return [s for s in spans if s.status in self.statuses]


class KindFilter(BaseFilter):
    """
    Keep spans of the given request kinds.
    """

    def __init__(self, kinds: Iterable[RequestKind]):
        self.kinds = frozenset(kinds)

    def filter(self, spans: List[LeaveSpan]) -> List[LeaveSpan]:
        return [s for s in spans if s.kind in self.kinds]


class DateWindowFilter(BaseFilter):
    """
    Keep spans sharing at least one day with a date window.

    Useful for restricting requests to a semester.
    """

    def __init__(self, start: LocalDate, end: LocalDate):
        """
        Initialize date window filter.

        Args:
            start: First day of the window (inclusive)
            end: Last day of the window (inclusive)
        """
        self.window = DateInterval(start, end)

    def filter(self, spans: List[LeaveSpan]) -> List[LeaveSpan]:
        return [s for s in spans if s.interval.overlaps(self.window)]


class CustomFilter(BaseFilter):
    """
    Filter spans using custom predicate function.
    """

    def __init__(self, predicate: Callable[[LeaveSpan], bool]):
        """
        Initialize custom filter.

        Args:
            predicate: Function that returns True if span should be kept
        """
        self.predicate = predicate

    def filter(self, spans: List[LeaveSpan]) -> List[LeaveSpan]:
        return [s for s in spans if self.predicate(s)]


class CompositeFilter(BaseFilter):
    """
    Combine multiple filters using AND logic.
    """

    def __init__(self, filters: List[BaseFilter]):
        self.filters = list(filters)

    def add_filter(self, filter_instance: BaseFilter) -> None:
        self.filters.append(filter_instance)

    def filter(self, spans: List[LeaveSpan]) -> List[LeaveSpan]:
        """
        Apply all filters in sequence.

        Args:
            spans: Spans to filter

        Returns:
            Spans that pass all filters
        """
        result = spans
        for f in self.filters:
            result = f.filter(result)
        return result
