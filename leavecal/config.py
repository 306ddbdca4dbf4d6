"""
Runtime configuration for the leave accounting library.

Values are read from environment variables once and cached; the institutional
timezone is the only process-wide setting the date logic depends on.
"""

import logging
import os
from dataclasses import dataclass, field
from datetime import tzinfo
from pathlib import Path
from typing import Optional

from dateutil import tz

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "Asia/Kolkata"
DEFAULT_MAX_SEMESTER = 8
DEFAULT_PROGRAM_YEARS = 4


@dataclass(frozen=True)
class Settings:
    """Library settings.

    Attributes:
        timezone_name: IANA name of the institutional timezone
        max_semester: Highest semester number of a program
        program_years: Default program length used for batch end years
        data_dir: Directory holding the JSON stores (optional)
        db_placeholder: DB-API parameter placeholder used by the SQL stores
    """

    timezone_name: str = DEFAULT_TIMEZONE
    max_semester: int = DEFAULT_MAX_SEMESTER
    program_years: int = DEFAULT_PROGRAM_YEARS
    data_dir: Optional[Path] = None
    db_placeholder: str = "%s"
    _tz: Optional[tzinfo] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self):
        zone = tz.gettz(self.timezone_name)
        if zone is None:
            raise ValueError(f"Unknown timezone: {self.timezone_name}")
        if self.max_semester < 1:
            raise ValueError("max_semester must be positive")
        if self.program_years < 1:
            raise ValueError("program_years must be positive")
        object.__setattr__(self, "_tz", zone)

    @property
    def timezone(self) -> tzinfo:
        """Resolved institutional timezone."""
        return self._tz

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from LEAVECAL_* environment variables."""
        data_dir = os.getenv("LEAVECAL_DATA_DIR")
        return cls(
            timezone_name=os.getenv("LEAVECAL_TIMEZONE", DEFAULT_TIMEZONE),
            max_semester=int(os.getenv("LEAVECAL_MAX_SEMESTER", str(DEFAULT_MAX_SEMESTER))),
            program_years=int(os.getenv("LEAVECAL_PROGRAM_YEARS", str(DEFAULT_PROGRAM_YEARS))),
            data_dir=Path(data_dir) if data_dir else None,
            db_placeholder=os.getenv("LEAVECAL_DB_PLACEHOLDER", "%s"),
        )


_SETTINGS: Optional[Settings] = None


def get_settings() -> Settings:
    """Get process settings, loading them from the environment on first use."""
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
        logger.debug("Loaded settings: %s", _SETTINGS)
    return _SETTINGS


def configure(settings: Optional[Settings]) -> None:
    """Replace process settings (None resets to environment defaults)."""
    global _SETTINGS
    _SETTINGS = settings
