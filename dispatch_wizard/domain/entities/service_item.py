"""Service item domain entity."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, List, Optional

from dispatch_wizard.domain.value_objects.frequency import FrequencySpec
from dispatch_wizard.domain.value_objects.pricing import (
    PriceOverride,
    PricingMethod,
    to_money,
)
from dispatch_wizard.domain.value_objects.visit import Visit, VisitSchedule


@dataclass
class ServiceItem:
    """A catalog service selected for a job, with job-specific overrides.

    ``visit_count``, ``computed_cost``, ``calculated_cost`` and
    ``service_dates`` are derived by :meth:`apply_schedule` and are never
    edited directly.
    """

    id: str
    name: str
    pricing_method: PricingMethod
    per_visit_cost: Decimal = Decimal("0.00")
    per_hour_cost: Decimal = Decimal("0.00")
    flat_rate_cost: Decimal = Decimal("0.00")
    estimated_duration_hours: Decimal = Decimal("1")
    service_code: Optional[str] = None
    description: Optional[str] = None

    frequency: FrequencySpec = field(default_factory=FrequencySpec)
    include_dropoff_service: bool = False
    include_pickup_service: bool = False
    price_override: Optional[PriceOverride] = None

    # Derived
    visit_count: int = 0
    computed_cost: Decimal = Decimal("0.00")
    calculated_cost: Decimal = Decimal("0.00")
    service_dates: List[Visit] = field(default_factory=list)
    out_of_window_dates: List[date] = field(default_factory=list)
    summary_text: str = ""

    def __post_init__(self):
        """Validate service data."""
        if not self.id:
            raise ValueError("Service id is required")
        if not self.name or not self.name.strip():
            raise ValueError("Service name is required")
        self.pricing_method = PricingMethod(self.pricing_method)
        self.per_visit_cost = to_money(self.per_visit_cost)
        self.per_hour_cost = to_money(self.per_hour_cost)
        self.flat_rate_cost = to_money(self.flat_rate_cost)
        self.estimated_duration_hours = Decimal(str(self.estimated_duration_hours or 1))

    @property
    def base_rate(self) -> Decimal:
        """Price of one occurrence (or of the whole job for flat-rate services)."""
        if self.pricing_method == PricingMethod.PER_VISIT:
            return self.per_visit_cost
        if self.pricing_method == PricingMethod.PER_HOUR:
            return to_money(self.per_hour_cost * self.estimated_duration_hours)
        return self.flat_rate_cost

    @property
    def override_delta(self) -> Decimal:
        """Difference between the charged and the computed cost."""
        return to_money(self.calculated_cost - self.computed_cost)

    def apply_schedule(self, schedule: VisitSchedule) -> None:
        """Refresh derived fields from an expanded visit schedule."""
        self.service_dates = list(schedule.visits)
        self.visit_count = schedule.visit_count
        self.out_of_window_dates = list(schedule.out_of_window_dates)
        self.summary_text = schedule.summary_text

        if self.pricing_method.scales_with_visits():
            self.computed_cost = schedule.total_cost
        else:
            self.computed_cost = self.flat_rate_cost if self.visit_count else to_money(0)

        if self.price_override is not None:
            self.calculated_cost = self.price_override.apply(self.visit_count)
        else:
            self.calculated_cost = self.computed_cost

    def frequency_descriptor(self) -> dict:
        """Frequency settings stored alongside a committed line item."""
        return {
            **self.frequency.to_dict(),
            "include_dropoff_service": self.include_dropoff_service,
            "include_pickup_service": self.include_pickup_service,
            "price_override": self.price_override.to_dict() if self.price_override else None,
        }

    @classmethod
    def from_catalog_row(cls, row: dict[str, Any]) -> "ServiceItem":
        """Build a freshly toggled-on service from a catalog row."""
        return cls(
            id=str(row["id"]),
            name=row["name"],
            pricing_method=PricingMethod(row.get("pricing_method") or PricingMethod.PER_VISIT.value),
            per_visit_cost=row.get("per_visit_cost") or 0,
            per_hour_cost=row.get("per_hour_cost") or 0,
            flat_rate_cost=row.get("flat_rate_cost") or 0,
            estimated_duration_hours=row.get("estimated_duration_hours") or 1,
            service_code=row.get("service_code"),
            description=row.get("description"),
        )

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "pricing_method": self.pricing_method.value,
            "per_visit_cost": str(self.per_visit_cost),
            "per_hour_cost": str(self.per_hour_cost),
            "flat_rate_cost": str(self.flat_rate_cost),
            "estimated_duration_hours": str(self.estimated_duration_hours),
            "service_code": self.service_code,
            "description": self.description,
            "frequency": self.frequency.to_dict(),
            "include_dropoff_service": self.include_dropoff_service,
            "include_pickup_service": self.include_pickup_service,
            "price_override": self.price_override.to_dict() if self.price_override else None,
            "visit_count": self.visit_count,
            "computed_cost": str(self.computed_cost),
            "calculated_cost": str(self.calculated_cost),
            "service_dates": [visit.to_dict() for visit in self.service_dates],
            "out_of_window_dates": [day.isoformat() for day in self.out_of_window_dates],
            "summary_text": self.summary_text,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ServiceItem":
        """Build from dictionary; derived fields are recomputed by the caller."""
        return cls(
            id=str(data["id"]),
            name=data["name"],
            pricing_method=PricingMethod(data["pricing_method"]),
            per_visit_cost=data.get("per_visit_cost") or 0,
            per_hour_cost=data.get("per_hour_cost") or 0,
            flat_rate_cost=data.get("flat_rate_cost") or 0,
            estimated_duration_hours=data.get("estimated_duration_hours") or 1,
            service_code=data.get("service_code"),
            description=data.get("description"),
            frequency=FrequencySpec.from_dict(data.get("frequency")),
            include_dropoff_service=bool(data.get("include_dropoff_service", False)),
            include_pickup_service=bool(data.get("include_pickup_service", False)),
            price_override=PriceOverride.from_dict(data.get("price_override")),
        )
