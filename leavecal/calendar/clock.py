"""Injectable wall-clock sources."""

from datetime import datetime, timedelta, tzinfo
from typing import Optional, Protocol, runtime_checkable

from leavecal.config import get_settings


@runtime_checkable
class Clock(Protocol):
    """Supplies the current moment."""

    def now(self) -> datetime:
        ...


class SystemClock:
    """Wall clock in the institutional timezone (or an explicit one)."""

    def __init__(self, zone: Optional[tzinfo] = None):
        self._zone = zone

    def now(self) -> datetime:
        return datetime.now(self._zone or get_settings().timezone)


class FixedClock:
    """Clock frozen at a given moment, for tests and batch recomputation.

    Naive moments are read as institutional local time.
    """

    def __init__(self, moment: datetime):
        self._moment = moment

    @classmethod
    def at(cls, year: int, month: int, day: int, hour: int = 12,
           zone: Optional[tzinfo] = None) -> "FixedClock":
        return cls(datetime(year, month, day, hour, tzinfo=zone))

    def now(self) -> datetime:
        return self._moment

    def advance(self, days: int = 0, hours: int = 0) -> None:
        self._moment = self._moment + timedelta(days=days, hours=hours)


_DEFAULT_CLOCK = SystemClock()


def default_clock() -> Clock:
    """Process default clock (system time in the configured timezone)."""
    return _DEFAULT_CLOCK
