"""
Visit schedule value objects.
"""

from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from typing import Optional, Tuple


@dataclass(frozen=True)
class Visit:
    """One concrete dated occurrence of a service."""

    date: date
    time: Optional[str] = None
    notes: Optional[str] = None
    kinds: Tuple[str, ...] = ("scheduled",)

    def merge(self, later: "Visit") -> "Visit":
        """Collapse a later visit on the same date into this one."""
        kinds = self.kinds + tuple(kind for kind in later.kinds if kind not in self.kinds)
        return replace(
            self,
            time=later.time if later.time is not None else self.time,
            notes=later.notes if later.notes is not None else self.notes,
            kinds=kinds,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "date": self.date.isoformat(),
            "time": self.time,
            "notes": self.notes,
            "kinds": list(self.kinds),
        }


@dataclass(frozen=True)
class VisitSchedule:
    """Expanded visits for a frequency over a window, with their cost."""

    visits: Tuple[Visit, ...] = ()
    per_visit_cost: Decimal = Decimal("0.00")
    total_cost: Decimal = Decimal("0.00")
    summary_text: str = ""
    out_of_window_dates: Tuple[date, ...] = field(default_factory=tuple)

    @property
    def visit_count(self) -> int:
        return len(self.visits)

    @property
    def dates(self) -> list[date]:
        return [visit.date for visit in self.visits]

    @property
    def has_out_of_window_dates(self) -> bool:
        return bool(self.out_of_window_dates)
