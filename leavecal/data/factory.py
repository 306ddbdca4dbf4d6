"""
Factory for creating data sources.

Provides convenient methods for creating and configuring data sources.
"""

from enum import Enum
from pathlib import Path

from leavecal.config import get_settings

from .base import BaseDataSource
from .filters import StatusFilter
from .loaders import InMemoryDataSource, JSONDataSource, SQLDataSource


class DataSourceType(Enum):
    """Supported data source types."""
    MEMORY = "memory"
    JSON = "json"
    SQL = "sql"


def create_data_source(
    source_type: DataSourceType,
    **kwargs
) -> BaseDataSource:
    """
    Create data source with appropriate configuration.

    Args:
        source_type: Type of data source to create
        **kwargs: Configuration parameters specific to source type

    Returns:
        Configured data source

    Examples:
        >>> # JSON source reading LEAVECAL_DATA_DIR
        >>> source = create_data_source(DataSourceType.JSON)

        >>> # SQL source over an existing connection
        >>> source = create_data_source(
        ...     DataSourceType.SQL,
        ...     connection=engine,
        ... )
    """
    if source_type == DataSourceType.MEMORY:
        return InMemoryDataSource(
            spans=kwargs.get("spans", ()),
            exception_days=kwargs.get("exception_days", ()),
            overrides=kwargs.get("overrides", ()),
            batches=kwargs.get("batches", ()),
        )
    elif source_type == DataSourceType.JSON:
        data_directory = kwargs.get("data_directory") or get_settings().data_dir
        if not data_directory:
            raise ValueError("data_directory required for JSON data source")
        return JSONDataSource(data_directory=Path(data_directory))
    elif source_type == DataSourceType.SQL:
        connection = kwargs.get("connection")
        if connection is None:
            raise ValueError("connection required for SQL data source")
        return SQLDataSource(connection, placeholder=kwargs.get("placeholder"))
    else:
        raise ValueError(f"Unsupported data source type: {source_type}")


def create_ledger_data_source(
    source_type: DataSourceType,
    approved_only: bool = True,
    **kwargs
) -> BaseDataSource:
    """
    Create data source configured for leave accounting.

    Args:
        source_type: Type of data source
        approved_only: Whether to drop requests that are not approved
        **kwargs: Additional configuration for data source

    Returns:
        Configured data source
    """
    source = create_data_source(source_type, **kwargs)

    if approved_only:
        source.add_filter(StatusFilter.approved_only())

    return source
