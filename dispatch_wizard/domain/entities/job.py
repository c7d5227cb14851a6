"""Job domain entity."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import List, Optional
from uuid import UUID, uuid4

from dispatch_wizard.domain.entities.job_document import InventoryLineRequest
from dispatch_wizard.domain.value_objects.date_window import DateWindow
from dispatch_wizard.domain.value_objects.job_type import JobType
from dispatch_wizard.domain.value_objects.location_selection import LocationSelection


@dataclass
class Job:
    """Job domain entity."""

    customer_id: str
    job_type: JobType
    scheduled_date: date
    id: UUID = field(default_factory=uuid4)
    job_number: Optional[str] = None
    contact_id: Optional[str] = None
    scheduled_time: Optional[str] = None
    timezone: str = "America/New_York"
    return_date: Optional[date] = None
    status: str = "assigned"
    driver_id: Optional[str] = None
    vehicle_id: Optional[str] = None
    location: Optional[LocationSelection] = None
    items: List[InventoryLineRequest] = field(default_factory=list)
    notes: str = ""
    special_instructions: str = ""
    is_priority: bool = False
    parent_job_id: Optional[UUID] = None
    is_service_job: bool = False
    total_price: Optional[Decimal] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate job data."""
        if not self.customer_id:
            raise ValueError("Job customer is required")
        if not self.scheduled_date:
            raise ValueError("Job scheduled date is required")
        self.job_type = JobType(self.job_type)
        if self.return_date and self.return_date < self.scheduled_date:
            raise ValueError("Job return date cannot precede its scheduled date")

        # Set timestamps if not provided
        if not self.created_at:
            self.created_at = datetime.now(timezone.utc)
        if not self.updated_at:
            self.updated_at = datetime.now(timezone.utc)

    @property
    def reservation_window(self) -> DateWindow:
        """Dates the job's equipment is out."""
        return DateWindow(start=self.scheduled_date, end=self.return_date or self.scheduled_date)

    @property
    def is_derived(self) -> bool:
        """Check if the job was created from another job (e.g. a pickup)."""
        return self.parent_job_id is not None

    def to_dict(self) -> dict:
        """Convert job to a plain dictionary."""
        return {
            "id": str(self.id),
            "job_number": self.job_number,
            "customer_id": self.customer_id,
            "contact_id": self.contact_id,
            "job_type": self.job_type.value,
            "scheduled_date": self.scheduled_date.isoformat(),
            "scheduled_time": self.scheduled_time,
            "timezone": self.timezone,
            "return_date": self.return_date.isoformat() if self.return_date else None,
            "status": self.status,
            "driver_id": self.driver_id,
            "vehicle_id": self.vehicle_id,
            "location": self.location.to_dict() if self.location else None,
            "items": [item.to_dict() for item in self.items],
            "notes": self.notes,
            "special_instructions": self.special_instructions,
            "is_priority": self.is_priority,
            "parent_job_id": str(self.parent_job_id) if self.parent_job_id else None,
            "is_service_job": self.is_service_job,
            "total_price": str(self.total_price) if self.total_price is not None else None,
        }
