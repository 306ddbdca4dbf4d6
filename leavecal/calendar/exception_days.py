"""
Institution-declared non-working days.

Exception days are layered on top of the weekly Sunday rule (holidays,
closures). A set holds at most one entry per date.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Union

from leavecal.calendar.local_date import DateInterval, LocalDate


@dataclass(frozen=True)
class ExceptionDay:
    """A declared non-working date and the reason given for it."""

    date: LocalDate
    reason: str = ""


class ExceptionDaySet:
    """Immutable collection of exception days keyed by date."""

    def __init__(self, days: Iterable[Union[ExceptionDay, LocalDate]] = ()):
        by_date: Dict[LocalDate, ExceptionDay] = {}
        for day in days:
            if isinstance(day, LocalDate):
                day = ExceptionDay(day)
            if day.date in by_date:
                raise ValueError(f"Duplicate exception day: {day.date}")
            by_date[day.date] = day
        self._by_date = dict(sorted(by_date.items()))

    @classmethod
    def coerce(cls, value) -> "ExceptionDaySet":
        """Accept None, an ExceptionDaySet, or any iterable of days/dates."""
        if value is None:
            return EMPTY_EXCEPTIONS
        if isinstance(value, ExceptionDaySet):
            return value
        return cls(value)

    def __contains__(self, item) -> bool:
        if isinstance(item, ExceptionDay):
            item = item.date
        return item in self._by_date

    def __iter__(self) -> Iterator[ExceptionDay]:
        return iter(self._by_date.values())

    def __len__(self) -> int:
        return len(self._by_date)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ExceptionDaySet):
            return NotImplemented
        return self._by_date == other._by_date

    def __hash__(self) -> int:
        return hash(tuple(self._by_date.values()))

    def __repr__(self) -> str:
        return f"ExceptionDaySet({[d.date.to_iso() for d in self]})"

    def dates(self) -> List[LocalDate]:
        return list(self._by_date)

    def reason_for(self, day: LocalDate) -> Optional[str]:
        entry = self._by_date.get(day)
        return entry.reason if entry is not None else None

    def upcoming(self, as_of: LocalDate) -> List[ExceptionDay]:
        """Exception days on or after ``as_of``, ascending."""
        return [d for d in self if d.date >= as_of]

    def within(self, interval: DateInterval) -> "ExceptionDaySet":
        return ExceptionDaySet(d for d in self if interval.contains(d.date))


EMPTY_EXCEPTIONS = ExceptionDaySet()
