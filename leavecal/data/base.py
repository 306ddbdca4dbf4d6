"""
Base abstractions for the external stores the core reads from.

Requests, exception days, semester overrides and batches all live outside
this library; these protocols describe the snapshots it needs from them.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Protocol, runtime_checkable

from leavecal.calendar.exception_days import ExceptionDaySet
from leavecal.schema.records import BatchRecord, LeaveSpan, SemesterOverride


@runtime_checkable
class RequestStore(Protocol):
    """Supplies leave/OD requests as normalised LeaveSpans."""

    def load_spans(self, student_id: Optional[str] = None) -> List[LeaveSpan]:
        """
        Load spans, optionally restricted to one student.

        Args:
            student_id: Student whose requests to load (None for all)

        Returns:
            List of LeaveSpan objects
        """
        ...


@runtime_checkable
class ExceptionDayStore(Protocol):
    """Supplies the declared non-working dates."""

    def load_exception_days(self) -> ExceptionDaySet:
        ...


@runtime_checkable
class SemesterOverrideStore(Protocol):
    """Supplies explicit (batch, semester) period dates.

    Absence of an override is the common case and is reported as None.
    """

    def get_override(self, batch: str, semester: int) -> Optional[SemesterOverride]:
        ...


@runtime_checkable
class BatchStore(Protocol):
    """Supplies canonical batch records."""

    def load_batches(self) -> List[BatchRecord]:
        ...


@runtime_checkable
class SpanFilter(Protocol):
    """Composable filtering strategy for spans."""

    def filter(self, spans: List[LeaveSpan]) -> List[LeaveSpan]:
        ...


class BaseDataSource(ABC):
    """
    Abstract base class for data sources.

    A data source serves all four stores; subclasses implement the raw loads
    and inherit the filter pipeline and the override lookup.
    """

    def __init__(self):
        self._filters: List[SpanFilter] = []

    def add_filter(self, filter_instance: SpanFilter) -> None:
        """
        Add a filter to be applied when loading spans.

        Args:
            filter_instance: Filter to add
        """
        self._filters.append(filter_instance)

    def _apply_filters(self, spans: List[LeaveSpan]) -> List[LeaveSpan]:
        result = spans
        for filter_instance in self._filters:
            result = filter_instance.filter(result)
        return result

    def load_spans(self, student_id: Optional[str] = None) -> List[LeaveSpan]:
        """Load spans and apply the registered filters."""
        return self._apply_filters(self._load_spans(student_id))

    def get_override(self, batch: str, semester: int) -> Optional[SemesterOverride]:
        for override in self.load_overrides():
            if override.batch == str(batch) and override.semester == semester:
                return override
        return None

    @abstractmethod
    def _load_spans(self, student_id: Optional[str]) -> List[LeaveSpan]:
        """Load unfiltered spans (to be implemented by subclasses)."""
        pass

    @abstractmethod
    def load_exception_days(self) -> ExceptionDaySet:
        pass

    @abstractmethod
    def load_overrides(self) -> List[SemesterOverride]:
        pass

    @abstractmethod
    def load_batches(self) -> List[BatchRecord]:
        pass


class BaseFilter(ABC):
    """
    Abstract base class for span filters.
    """

    @abstractmethod
    def filter(self, spans: List[LeaveSpan]) -> List[LeaveSpan]:
        """
        Filter spans based on specific criteria.

        Args:
            spans: Spans to filter

        Returns:
            Filtered spans
        """
        pass
