"""
Date window value object.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterator


@dataclass(frozen=True)
class DateWindow:
    """Inclusive calendar date range."""

    start: date
    end: date

    @classmethod
    def single_day(cls, day: date) -> "DateWindow":
        """Build a window covering one calendar day."""
        return cls(start=day, end=day)

    @property
    def is_empty(self) -> bool:
        """A window whose end precedes its start covers no days."""
        return self.end < self.start

    @property
    def day_count(self) -> int:
        """Number of calendar days covered."""
        if self.is_empty:
            return 0
        return (self.end - self.start).days + 1

    def contains(self, day: date) -> bool:
        """Check if a date falls inside the window."""
        return self.start <= day <= self.end

    def days(self) -> Iterator[date]:
        """Iterate every calendar day of the window in order."""
        for offset in range(self.day_count):
            yield self.start + timedelta(days=offset)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"start": self.start.isoformat(), "end": self.end.isoformat()}
