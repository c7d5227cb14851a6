"""
Service frequency value objects.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, FrozenSet, Iterable, Optional, Tuple


class Frequency(str, Enum):
    """Recurrence family of a service."""

    ONE_TIME = "one-time"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    CUSTOM = "custom"


class CustomFrequencyType(str, Enum):
    """Flavour of a custom recurrence."""

    DAYS_INTERVAL = "days_interval"
    DAYS_OF_WEEK = "days_of_week"
    SPECIFIC_DATES = "specific_dates"


class Weekday(str, Enum):
    """Day of the week, ordered Monday first like date.weekday()."""

    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @property
    def index(self) -> int:
        """Position matching date.weekday()."""
        return list(Weekday).index(self)

    @property
    def short_name(self) -> str:
        """Three-letter label."""
        return self.value[:3].capitalize()

    @classmethod
    def of(cls, day: date) -> "Weekday":
        """Weekday a calendar date falls on."""
        return list(cls)[day.weekday()]


@dataclass(frozen=True)
class SpecificDate:
    """One explicitly chosen service date."""

    date: date
    time: Optional[str] = None
    notes: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"date": self.date.isoformat(), "time": self.time, "notes": self.notes}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SpecificDate":
        """Build from dictionary."""
        raw = data["date"]
        return cls(
            date=raw if isinstance(raw, date) else date.fromisoformat(raw),
            time=data.get("time"),
            notes=data.get("notes"),
        )


@dataclass(frozen=True)
class FrequencySpec:
    """Abstract recurrence rule before expansion into visits."""

    frequency: Frequency = Frequency.ONE_TIME
    custom_type: Optional[CustomFrequencyType] = None
    interval_days: int = 1
    days_of_week: FrozenSet[Weekday] = field(default_factory=frozenset)
    specific_dates: Tuple[SpecificDate, ...] = ()

    def __post_init__(self):
        """Normalize collection fields so specs compare by value."""
        object.__setattr__(self, "days_of_week", frozenset(self.days_of_week))
        object.__setattr__(self, "specific_dates", tuple(self.specific_dates))

    @classmethod
    def one_time(cls) -> "FrequencySpec":
        return cls(frequency=Frequency.ONE_TIME)

    @classmethod
    def every_n_days(cls, interval_days: int) -> "FrequencySpec":
        return cls(
            frequency=Frequency.CUSTOM,
            custom_type=CustomFrequencyType.DAYS_INTERVAL,
            interval_days=interval_days,
        )

    @classmethod
    def on_weekdays(cls, days: Iterable[Weekday]) -> "FrequencySpec":
        return cls(
            frequency=Frequency.CUSTOM,
            custom_type=CustomFrequencyType.DAYS_OF_WEEK,
            days_of_week=frozenset(days),
        )

    @classmethod
    def on_dates(cls, dates: Iterable[SpecificDate]) -> "FrequencySpec":
        return cls(
            frequency=Frequency.CUSTOM,
            custom_type=CustomFrequencyType.SPECIFIC_DATES,
            specific_dates=tuple(dates),
        )

    @property
    def resolved_custom_type(self) -> Optional[CustomFrequencyType]:
        """Custom flavour in effect; a bare custom frequency means an interval."""
        if self.frequency != Frequency.CUSTOM:
            return None
        return self.custom_type or CustomFrequencyType.DAYS_INTERVAL

    def sorted_weekdays(self) -> list[Weekday]:
        """Selected weekdays in calendar order."""
        return sorted(self.days_of_week, key=lambda day: day.index)

    def incomplete_reason(self) -> Optional[str]:
        """Explain why the frequency cannot be submitted, or None when it can."""
        custom_type = self.resolved_custom_type
        if custom_type == CustomFrequencyType.DAYS_INTERVAL and self.interval_days < 1:
            return "Interval must be at least 1 day"
        if custom_type == CustomFrequencyType.DAYS_OF_WEEK and not self.days_of_week:
            return "Select at least one day of the week"
        if custom_type == CustomFrequencyType.SPECIFIC_DATES and not self.specific_dates:
            return "Add at least one service date"
        return None

    def describe(self) -> str:
        """Human readable label."""
        custom_type = self.resolved_custom_type
        if custom_type is None:
            return {
                Frequency.ONE_TIME: "One-time",
                Frequency.DAILY: "Daily",
                Frequency.WEEKLY: "Weekly",
                Frequency.MONTHLY: "Monthly",
            }[self.frequency]
        if custom_type == CustomFrequencyType.DAYS_INTERVAL:
            if self.interval_days == 1:
                return "Every day"
            return f"Every {self.interval_days} days"
        if custom_type == CustomFrequencyType.DAYS_OF_WEEK:
            if not self.days_of_week:
                return "No weekdays selected"
            return "Every " + ", ".join(day.short_name for day in self.sorted_weekdays())
        count = len(self.specific_dates)
        return f"{count} specific date{'s' if count != 1 else ''}"

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "frequency": self.frequency.value,
            "custom_type": self.custom_type.value if self.custom_type else None,
            "interval_days": self.interval_days,
            "days_of_week": [day.value for day in self.sorted_weekdays()],
            "specific_dates": [entry.to_dict() for entry in self.specific_dates],
        }

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> "FrequencySpec":
        """Build from dictionary."""
        if not data:
            return cls()
        custom_type = data.get("custom_type")
        return cls(
            frequency=Frequency(data.get("frequency", Frequency.ONE_TIME.value)),
            custom_type=CustomFrequencyType(custom_type) if custom_type else None,
            interval_days=int(data.get("interval_days") or 1),
            days_of_week=frozenset(Weekday(day) for day in data.get("days_of_week") or []),
            specific_dates=tuple(
                SpecificDate.from_dict(entry) for entry in data.get("specific_dates") or []
            ),
        )
