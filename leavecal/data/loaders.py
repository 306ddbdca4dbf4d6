"""
Concrete data source implementations.

Provides in-memory, JSON directory and SQL (via pandas) data sources.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd

from leavecal.calendar.exception_days import ExceptionDay, ExceptionDaySet
from leavecal.config import get_settings
from leavecal.schema.enums import RequestKind
from leavecal.schema.records import BatchRecord, LeaveSpan, SemesterOverride

from .base import BaseDataSource
from .rows import batch_from_row, exception_day_from_row, override_from_row, span_from_row

logger = logging.getLogger(__name__)


class InMemoryDataSource(BaseDataSource):
    """
    Serve snapshots held in memory.

    Useful for tests and for callers that already fetched their rows.
    """

    def __init__(
        self,
        spans: Iterable[LeaveSpan] = (),
        exception_days: Iterable[ExceptionDay] = (),
        overrides: Iterable[SemesterOverride] = (),
        batches: Iterable[BatchRecord] = (),
    ):
        super().__init__()
        self.spans = list(spans)
        self.exception_days = ExceptionDaySet.coerce(exception_days)
        self.overrides = list(overrides)
        self.batches = list(batches)

    def _load_spans(self, student_id: Optional[str]) -> List[LeaveSpan]:
        if student_id is None:
            return list(self.spans)
        return [s for s in self.spans if s.student_id == str(student_id)]

    def load_exception_days(self) -> ExceptionDaySet:
        return self.exception_days

    def load_overrides(self) -> List[SemesterOverride]:
        return list(self.overrides)

    def load_batches(self) -> List[BatchRecord]:
        return list(self.batches)


class JSONDataSource(BaseDataSource):
    """
    Load rows from JSON files in a directory.

    Expected files (each a list of row objects, all optional):
    ``requests.json``, ``exception_days.json``, ``semester_dates.json``
    and ``batches.json``. Request rows carry a ``kind`` of "leave" or "od".
    """

    REQUESTS_FILE = "requests.json"
    EXCEPTION_DAYS_FILE = "exception_days.json"
    SEMESTER_DATES_FILE = "semester_dates.json"
    BATCHES_FILE = "batches.json"

    def __init__(self, data_directory: Path):
        """
        Initialize JSON data source.

        Args:
            data_directory: Directory containing the JSON files
        """
        super().__init__()
        self.data_directory = Path(data_directory)

    def _load_json_file(self, filename: str) -> List[Dict[str, Any]]:
        filepath = self.data_directory / filename
        if not filepath.exists():
            logger.info("No %s in %s; treating as empty", filename, self.data_directory)
            return []
        with open(filepath, "r", encoding="utf-8") as f:
            data = json.load(f)
        if isinstance(data, dict):
            data = data.get("rows", [])
        return data

    def _load_spans(self, student_id: Optional[str]) -> List[LeaveSpan]:
        rows = self._load_json_file(self.REQUESTS_FILE)
        spans = [span_from_row(row) for row in rows]
        if student_id is not None:
            spans = [s for s in spans if s.student_id == str(student_id)]
        logger.info("Loaded %s spans from %s", len(spans), self.data_directory)
        return spans

    def load_exception_days(self) -> ExceptionDaySet:
        rows = self._load_json_file(self.EXCEPTION_DAYS_FILE)
        return ExceptionDaySet(exception_day_from_row(row) for row in rows)

    def load_overrides(self) -> List[SemesterOverride]:
        return [override_from_row(row) for row in self._load_json_file(self.SEMESTER_DATES_FILE)]

    def load_batches(self) -> List[BatchRecord]:
        program_years = get_settings().program_years
        return [batch_from_row(row, program_years) for row in self._load_json_file(self.BATCHES_FILE)]


class SQLDataSource(BaseDataSource):
    """
    Load rows from the portal database with ``pandas.read_sql``.

    Reads the ``leave_requests``, ``od_requests``, ``exception_days``,
    ``semester_dates`` and ``batches`` tables. Works with any connection
    pandas accepts (SQLAlchemy engine/connection or a DB-API connection).
    """

    REQUEST_TABLES = (
        ("leave_requests", RequestKind.LEAVE),
        ("od_requests", RequestKind.OD),
    )

    def __init__(self, connection, placeholder: Optional[str] = None):
        """
        Initialize SQL data source.

        Args:
            connection: Database connection or engine
            placeholder: Parameter placeholder of the driver (defaults to
                LEAVECAL_DB_PLACEHOLDER, "%s" for MySQL/PostgreSQL drivers)
        """
        super().__init__()
        self.connection = connection
        self.placeholder = placeholder or get_settings().db_placeholder

    def _read(self, query: str, params: tuple = ()) -> pd.DataFrame:
        logger.debug("Executing %s with %s", query, params)
        return pd.read_sql(query, self.connection, params=params or None)

    def _load_spans(self, student_id: Optional[str]) -> List[LeaveSpan]:
        spans: List[LeaveSpan] = []
        for table, kind in self.REQUEST_TABLES:
            query = f"SELECT * FROM {table}"
            params: tuple = ()
            if student_id is not None:
                query += f" WHERE student_id = {self.placeholder}"
                params = (str(student_id),)
            df = self._read(query, params)
            spans.extend(span_from_row(row, kind=kind) for row in df.to_dict("records"))
        logger.info("Loaded %s spans from database", len(spans))
        return spans

    def load_exception_days(self) -> ExceptionDaySet:
        df = self._read("SELECT * FROM exception_days ORDER BY date")
        return ExceptionDaySet(exception_day_from_row(row) for row in df.to_dict("records"))

    def load_overrides(self) -> List[SemesterOverride]:
        df = self._read("SELECT * FROM semester_dates")
        return [override_from_row(row) for row in df.to_dict("records")]

    def get_override(self, batch: str, semester: int) -> Optional[SemesterOverride]:
        df = self._read(
            "SELECT * FROM semester_dates "
            f"WHERE batch = {self.placeholder} AND semester = {self.placeholder}",
            (str(batch), int(semester)),
        )
        if df.empty:
            return None
        return override_from_row(df.to_dict("records")[0])

    def load_batches(self) -> List[BatchRecord]:
        df = self._read("SELECT * FROM batches ORDER BY start_year")
        program_years = get_settings().program_years
        return [batch_from_row(row, program_years) for row in df.to_dict("records")]
