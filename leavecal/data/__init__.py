"""
Data loading module for requests, exception days, semester dates and batches.

Provides abstractions and implementations for reading the portal's stores.
"""

from .base import (
    BaseDataSource,
    BaseFilter,
    BatchStore,
    ExceptionDayStore,
    RequestStore,
    SemesterOverrideStore,
    SpanFilter,
)
from .factory import (
    DataSourceType,
    create_data_source,
    create_ledger_data_source,
)
from .filters import (
    CompositeFilter,
    CustomFilter,
    DateWindowFilter,
    KindFilter,
    StatusFilter,
)
from .loaders import InMemoryDataSource, JSONDataSource, SQLDataSource
from .rows import batch_from_row, exception_day_from_row, override_from_row, span_from_row

__all__ = [
    # Base abstractions
    "RequestStore",
    "ExceptionDayStore",
    "SemesterOverrideStore",
    "BatchStore",
    "SpanFilter",
    "BaseDataSource",
    "BaseFilter",
    # Concrete implementations
    "InMemoryDataSource",
    "JSONDataSource",
    "SQLDataSource",
    # Filters
    "StatusFilter",
    "KindFilter",
    "DateWindowFilter",
    "CompositeFilter",
    "CustomFilter",
    # Row normalisation
    "span_from_row",
    "exception_day_from_row",
    "override_from_row",
    "batch_from_row",
    # Factory
    "create_data_source",
    "create_ledger_data_source",
    "DataSourceType",
]
