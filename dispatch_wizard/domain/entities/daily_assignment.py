"""Daily crew assignment domain entity."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Optional
from uuid import UUID, uuid4


@dataclass
class DailyAssignment:
    """Driver and vehicle booked together for one calendar day."""

    assignment_date: date
    driver_id: str
    vehicle_id: str
    job_id: Optional[UUID] = None
    notes: str = ""
    id: UUID = field(default_factory=uuid4)
    created_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate assignment data."""
        if not self.driver_id or not self.vehicle_id:
            raise ValueError("A daily assignment needs both a driver and a vehicle")
        if not self.created_at:
            self.created_at = datetime.now(timezone.utc)

    def matches(self, driver_id: str, vehicle_id: str) -> bool:
        """Check if the record covers the same driver and vehicle pair."""
        return self.driver_id == driver_id and self.vehicle_id == vehicle_id
