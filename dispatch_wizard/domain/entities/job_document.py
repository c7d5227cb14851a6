"""Job document domain entity.

The job document is the working state of one wizard session: everything
the dispatcher has entered so far, plus the fields derived from it
(return date, service schedules). It is owned by a single session and is
discarded when that session closes, submits or resets.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from typing import Any, List, Optional
from uuid import uuid4
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dispatch_wizard.domain.entities.service_item import ServiceItem
from dispatch_wizard.domain.value_objects.date_window import DateWindow
from dispatch_wizard.domain.value_objects.inventory_strategy import InventoryStrategy
from dispatch_wizard.domain.value_objects.job_type import JobType
from dispatch_wizard.domain.value_objects.location_selection import LocationSelection
from dispatch_wizard.domain.value_objects.pricing import to_money

DEFAULT_TIMEZONE = "America/New_York"
_UTC = timezone.utc


def _parse_date(value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


def _iso(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value else None


def resolve_zone(name: str) -> ZoneInfo:
    """Look up an IANA timezone, raising ValueError for unknown names."""
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown timezone '{name}'") from e


@dataclass
class InventoryLineRequest:
    """Requested inventory for a job line."""

    product_id: str
    quantity: int
    strategy: InventoryStrategy = InventoryStrategy.BULK
    specific_item_ids: Optional[List[str]] = None
    attributes: Optional[dict[str, Any]] = None

    def __post_init__(self):
        """Validate inventory line."""
        if not self.product_id:
            raise ValueError("Product id is required")
        self.strategy = InventoryStrategy(self.strategy)
        if self.specific_item_ids and self.strategy != InventoryStrategy.SPECIFIC:
            raise ValueError("Specific unit ids require the specific strategy")
        if self.specific_item_ids and len(self.specific_item_ids) > self.quantity:
            raise ValueError(
                f"{len(self.specific_item_ids)} units selected for a quantity of {self.quantity}"
            )

    @property
    def is_specific(self) -> bool:
        return self.strategy == InventoryStrategy.SPECIFIC

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "product_id": self.product_id,
            "quantity": self.quantity,
            "strategy": self.strategy.value,
            "specific_item_ids": list(self.specific_item_ids) if self.specific_item_ids else None,
            "attributes": self.attributes,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "InventoryLineRequest":
        """Build from dictionary."""
        return cls(
            product_id=str(data["product_id"]),
            quantity=int(data.get("quantity", 0)),
            strategy=InventoryStrategy(data.get("strategy", InventoryStrategy.BULK.value)),
            specific_item_ids=data.get("specific_item_ids") or None,
            attributes=data.get("attributes"),
        )


@dataclass
class PartialPickup:
    """Interim pickup of part of the delivered inventory."""

    date: Optional[date]
    id: str = field(default_factory=lambda: str(uuid4()))
    time: Optional[str] = None
    notes: str = ""
    is_priority: bool = False
    items: List[InventoryLineRequest] = field(default_factory=list)
    driver_id: Optional[str] = None
    vehicle_id: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "date": _iso(self.date),
            "time": self.time,
            "notes": self.notes,
            "is_priority": self.is_priority,
            "items": [item.to_dict() for item in self.items],
            "driver_id": self.driver_id,
            "vehicle_id": self.vehicle_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PartialPickup":
        """Build from dictionary."""
        return cls(
            id=data.get("id") or str(uuid4()),
            date=_parse_date(data.get("date")),
            time=data.get("time"),
            notes=data.get("notes") or "",
            is_priority=bool(data.get("is_priority", False)),
            items=[InventoryLineRequest.from_dict(item) for item in data.get("items") or []],
            driver_id=data.get("driver_id"),
            vehicle_id=data.get("vehicle_id"),
        )


@dataclass
class PickupPlan:
    """Pickup jobs derived from a delivery."""

    create_pickup_job: bool = False
    pickup_date: Optional[date] = None
    pickup_time: Optional[str] = None
    pickup_notes: str = ""
    pickup_is_priority: bool = False
    pickup_driver_id: Optional[str] = None
    pickup_vehicle_id: Optional[str] = None
    main_pickup_items: List[InventoryLineRequest] = field(default_factory=list)
    create_partial_pickups: bool = False
    partial_pickups: List[PartialPickup] = field(default_factory=list)

    def __post_init__(self):
        """Validate partial pickup toggle."""
        if self.partial_pickups and not self.create_partial_pickups:
            raise ValueError("Partial pickups require create_partial_pickups to be enabled")

    def disable_partial_pickups(self) -> None:
        """Turn partial pickups off, discarding any entered entries."""
        self.create_partial_pickups = False
        self.partial_pickups = []

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "create_pickup_job": self.create_pickup_job,
            "pickup_date": _iso(self.pickup_date),
            "pickup_time": self.pickup_time,
            "pickup_notes": self.pickup_notes,
            "pickup_is_priority": self.pickup_is_priority,
            "pickup_driver_id": self.pickup_driver_id,
            "pickup_vehicle_id": self.pickup_vehicle_id,
            "main_pickup_items": [item.to_dict() for item in self.main_pickup_items],
            "create_partial_pickups": self.create_partial_pickups,
            "partial_pickups": [pickup.to_dict() for pickup in self.partial_pickups],
        }

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> "PickupPlan":
        """Build from dictionary."""
        if not data:
            return cls()
        return cls(
            create_pickup_job=bool(data.get("create_pickup_job", False)),
            pickup_date=_parse_date(data.get("pickup_date")),
            pickup_time=data.get("pickup_time"),
            pickup_notes=data.get("pickup_notes") or "",
            pickup_is_priority=bool(data.get("pickup_is_priority", False)),
            pickup_driver_id=data.get("pickup_driver_id"),
            pickup_vehicle_id=data.get("pickup_vehicle_id"),
            main_pickup_items=[
                InventoryLineRequest.from_dict(item) for item in data.get("main_pickup_items") or []
            ],
            create_partial_pickups=bool(data.get("create_partial_pickups", False)),
            partial_pickups=[
                PartialPickup.from_dict(pickup) for pickup in data.get("partial_pickups") or []
            ],
        )


@dataclass
class CrewAssignment:
    """Driver and vehicle for the primary job."""

    driver_id: Optional[str] = None
    vehicle_id: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        return bool(self.driver_id and self.vehicle_id)

    def to_dict(self) -> dict:
        return {"driver_id": self.driver_id, "vehicle_id": self.vehicle_id}


@dataclass
class JobDocument:
    """In-progress job or quote captured by the wizard."""

    customer_id: Optional[str] = None
    contact_id: Optional[str] = None
    job_type: Optional[JobType] = None

    scheduled_date: Optional[date] = None
    scheduled_time: Optional[str] = None
    timezone: str = DEFAULT_TIMEZONE
    rental_duration_days: Optional[int] = None
    rental_duration_hours: Optional[int] = None
    service_end_date: Optional[date] = None

    pickup_plan: PickupPlan = field(default_factory=PickupPlan)
    location_selection: Optional[LocationSelection] = None
    assignment: CrewAssignment = field(default_factory=CrewAssignment)
    create_daily_assignment: bool = True
    items: List[InventoryLineRequest] = field(default_factory=list)
    services: List[ServiceItem] = field(default_factory=list)

    notes: str = ""
    special_instructions: str = ""
    is_priority: bool = False

    # Derived
    return_date: Optional[date] = field(default=None, init=False)
    return_time: Optional[str] = field(default=None, init=False)

    def __post_init__(self):
        """Validate mutually exclusive durations and derive the return date."""
        if self.job_type is not None:
            self.job_type = JobType(self.job_type)
        self.rental_duration_days = self.rental_duration_days or None
        self.rental_duration_hours = self.rental_duration_hours or None
        if self.rental_duration_days and self.rental_duration_hours:
            raise ValueError("Rental duration days and hours are mutually exclusive")
        resolve_zone(self.timezone)
        self.recompute_return_date()

    def set_rental_duration_days(self, days: Optional[int]) -> None:
        """Bill by the day; clears any hourly duration."""
        self.rental_duration_days = days or None
        if self.rental_duration_days:
            self.rental_duration_hours = None
        self.recompute_return_date()

    def set_rental_duration_hours(self, hours: Optional[int]) -> None:
        """Bill by the hour; clears any daily duration."""
        self.rental_duration_hours = hours or None
        if self.rental_duration_hours:
            self.rental_duration_days = None
        self.recompute_return_date()

    def clear_customer(self) -> None:
        """Restart customer selection."""
        self.customer_id = None
        self.contact_id = None

    def recompute_return_date(self) -> None:
        """Derive the delivery return date from the rental duration.

        Day durations are calendar arithmetic on the scheduled date. Hour
        durations are elapsed time from the scheduled local time (midnight
        when no time is set) in the job's timezone.
        """
        self.return_date = None
        self.return_time = None
        if self.scheduled_date is None or not (self.job_type and self.job_type.has_rental_window()):
            return

        if self.rental_duration_days:
            self.return_date = self.scheduled_date + timedelta(days=self.rental_duration_days)
            self.return_time = self.scheduled_time
        elif self.rental_duration_hours:
            zone = resolve_zone(self.timezone)
            start_time = time.fromisoformat(self.scheduled_time) if self.scheduled_time else time(0, 0)
            start = datetime.combine(self.scheduled_date, start_time, tzinfo=zone)
            end = (start.astimezone(_UTC) + timedelta(hours=self.rental_duration_hours)).astimezone(zone)
            self.return_date = end.date()
            self.return_time = end.strftime("%H:%M")

    @property
    def primary_date(self) -> Optional[date]:
        """Date the primary job is scheduled on."""
        if self.job_type is not None and self.job_type.is_dated_by_pickup():
            return self.pickup_plan.pickup_date
        return self.scheduled_date

    @property
    def primary_time(self) -> Optional[str]:
        if self.job_type is not None and self.job_type.is_dated_by_pickup():
            return self.pickup_plan.pickup_time
        return self.scheduled_time

    @property
    def final_pickup_date(self) -> Optional[date]:
        """Date of the final pickup derived from a delivery."""
        return self.return_date or self.pickup_plan.pickup_date

    @property
    def reservation_window(self) -> Optional[DateWindow]:
        """Window the inventory and crew are needed for."""
        start = self.primary_date
        if start is None:
            return None
        if self.job_type == JobType.DELIVERY and self.final_pickup_date:
            return DateWindow(start=start, end=self.final_pickup_date)
        return DateWindow.single_day(start)

    @property
    def service_window(self) -> Optional[DateWindow]:
        """Window recurring services are expanded over."""
        start = self.primary_date
        if start is None:
            return None
        if self.job_type == JobType.DELIVERY:
            return DateWindow(start=start, end=self.final_pickup_date or start)
        return DateWindow(start=start, end=self.service_end_date or start)

    @property
    def has_services(self) -> bool:
        return bool(self.services)

    @property
    def services_subtotal(self) -> Decimal:
        return to_money(sum((service.calculated_cost for service in self.services), 0))

    def find_service(self, service_id: str) -> Optional[ServiceItem]:
        for service in self.services:
            if service.id == service_id:
                return service
        return None

    def to_dict(self) -> dict:
        """Convert to a JSON-ready dictionary for draft snapshots."""
        return {
            "customer_id": self.customer_id,
            "contact_id": self.contact_id,
            "job_type": self.job_type.value if self.job_type else None,
            "scheduled_date": _iso(self.scheduled_date),
            "scheduled_time": self.scheduled_time,
            "timezone": self.timezone,
            "rental_duration_days": self.rental_duration_days,
            "rental_duration_hours": self.rental_duration_hours,
            "service_end_date": _iso(self.service_end_date),
            "return_date": _iso(self.return_date),
            "return_time": self.return_time,
            "pickup_plan": self.pickup_plan.to_dict(),
            "location_selection": self.location_selection.to_dict() if self.location_selection else None,
            "assignment": self.assignment.to_dict(),
            "create_daily_assignment": self.create_daily_assignment,
            "items": [item.to_dict() for item in self.items],
            "services": [service.to_dict() for service in self.services],
            "notes": self.notes,
            "special_instructions": self.special_instructions,
            "is_priority": self.is_priority,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "JobDocument":
        """Rebuild a document from a snapshot; derived fields are recomputed."""
        job_type = data.get("job_type")
        assignment = data.get("assignment") or {}
        return cls(
            customer_id=data.get("customer_id"),
            contact_id=data.get("contact_id"),
            job_type=JobType(job_type) if job_type else None,
            scheduled_date=_parse_date(data.get("scheduled_date")),
            scheduled_time=data.get("scheduled_time"),
            timezone=data.get("timezone") or DEFAULT_TIMEZONE,
            rental_duration_days=data.get("rental_duration_days"),
            rental_duration_hours=data.get("rental_duration_hours"),
            service_end_date=_parse_date(data.get("service_end_date")),
            pickup_plan=PickupPlan.from_dict(data.get("pickup_plan")),
            location_selection=LocationSelection.from_dict(data.get("location_selection")),
            assignment=CrewAssignment(
                driver_id=assignment.get("driver_id"),
                vehicle_id=assignment.get("vehicle_id"),
            ),
            create_daily_assignment=bool(data.get("create_daily_assignment", True)),
            items=[InventoryLineRequest.from_dict(item) for item in data.get("items") or []],
            services=[ServiceItem.from_dict(service) for service in data.get("services") or []],
            notes=data.get("notes") or "",
            special_instructions=data.get("special_instructions") or "",
            is_priority=bool(data.get("is_priority", False)),
        )
