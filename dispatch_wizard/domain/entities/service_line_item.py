"""Service line item domain entity."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional
from uuid import UUID, uuid4

from dispatch_wizard.domain.entities.service_item import ServiceItem


@dataclass
class ServiceLineItem:
    """A selected service committed against a job."""

    job_id: UUID
    service_id: str
    service_name: str
    pricing_method: str
    frequency_descriptor: Dict[str, Any]
    visit_dates: List[date]
    unit_rate: Decimal
    computed_total: Decimal
    total: Decimal
    id: UUID = field(default_factory=uuid4)
    created_at: Optional[datetime] = None

    def __post_init__(self):
        if not self.created_at:
            self.created_at = datetime.now(timezone.utc)

    @property
    def visit_count(self) -> int:
        return len(self.visit_dates)

    @property
    def is_overridden(self) -> bool:
        return self.total != self.computed_total

    @classmethod
    def from_service(cls, job_id: UUID, service: ServiceItem) -> "ServiceLineItem":
        """Snapshot a service's schedule and cost for a job."""
        return cls(
            job_id=job_id,
            service_id=service.id,
            service_name=service.name,
            pricing_method=service.pricing_method.value,
            frequency_descriptor=service.frequency_descriptor(),
            visit_dates=[visit.date for visit in service.service_dates],
            unit_rate=service.base_rate,
            computed_total=service.computed_cost,
            total=service.calculated_cost,
        )
