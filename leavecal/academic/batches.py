"""Batch identifiers and the batch registry."""

import logging
import re
from typing import Dict, Iterable, List, Optional, Union

from leavecal.calendar.local_date import MIN_YEAR
from leavecal.errors import InvalidBatch
from leavecal.schema.records import BatchRecord

logger = logging.getLogger(__name__)

BATCH_PATTERN = re.compile(r"[1-9][0-9]{3}")

BatchLike = Union[str, int]


def parse_batch_year(batch: BatchLike) -> int:
    """Start year of a batch identifier; raises InvalidBatch unless it is a 4-digit year."""
    if isinstance(batch, bool) or not isinstance(batch, (str, int)):
        raise InvalidBatch(f"Batch must be a 4-digit year, got {batch!r}")
    text = str(batch)
    if BATCH_PATTERN.fullmatch(text) is None:
        raise InvalidBatch(f"Batch must be a 4-digit year, got {batch!r}")
    year = int(text)
    if year < MIN_YEAR:
        raise InvalidBatch(f"Batch {batch!r} starts before {MIN_YEAR}")
    return year


class BatchRegistry:
    """
    Index of canonical batch records.

    When an AcademicCalendar is given a registry, only batches present in it
    are accepted; anything else is an InvalidBatch rather than a guessed year.
    """

    def __init__(self, records: Iterable[BatchRecord] = ()):
        self._records: Dict[str, BatchRecord] = {}
        for record in records:
            if record.batch_id in self._records:
                raise ValueError(f"Duplicate batch: {record.batch_id}")
            self._records[record.batch_id] = record
        logger.debug("Batch registry holds %s batches", len(self._records))

    @classmethod
    def from_store(cls, store) -> "BatchRegistry":
        """Build from anything with ``load_batches()``."""
        return cls(store.load_batches())

    def __contains__(self, batch) -> bool:
        return str(batch) in self._records

    def __len__(self) -> int:
        return len(self._records)

    def get(self, batch: BatchLike) -> Optional[BatchRecord]:
        return self._records.get(str(batch))

    def require(self, batch: BatchLike) -> BatchRecord:
        record = self.get(batch)
        if record is None:
            raise InvalidBatch(f"Unknown batch: {batch}. Available: {sorted(self._records)}")
        return record

    def batch_year(self, batch: BatchLike) -> int:
        return self.require(batch).start_year

    def active(self) -> List[BatchRecord]:
        return sorted((r for r in self._records.values() if r.is_active), key=lambda r: r.start_year)
