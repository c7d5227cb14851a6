"""
Availability conflict report value objects.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .availability_status import AvailabilityStatus
from .date_window import DateWindow
from .inventory_strategy import InventoryStrategy


@dataclass(frozen=True)
class ItemAvailability:
    """Availability outcome for one requested inventory line."""

    product_id: str
    strategy: InventoryStrategy
    requested_quantity: int
    status: AvailabilityStatus
    available_quantity: Optional[int] = None
    shortfall: int = 0
    missing_unit_ids: Tuple[str, ...] = ()
    error: Optional[str] = None

    @property
    def is_conflict(self) -> bool:
        return self.status.is_conflict()

    def describe(self) -> str:
        """One-line explanation for the review screen."""
        if self.status == AvailabilityStatus.UNVERIFIED:
            return f"Could not verify availability for product {self.product_id}: {self.error}"
        if self.missing_unit_ids:
            return (
                f"Units not available for product {self.product_id}: "
                + ", ".join(self.missing_unit_ids)
            )
        if self.shortfall:
            return (
                f"Only {self.available_quantity} of {self.requested_quantity} units "
                f"available for product {self.product_id} (short by {self.shortfall})"
            )
        return f"Product {self.product_id} is available"

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "product_id": self.product_id,
            "strategy": self.strategy.value,
            "requested_quantity": self.requested_quantity,
            "status": self.status.value,
            "available_quantity": self.available_quantity,
            "shortfall": self.shortfall,
            "missing_unit_ids": list(self.missing_unit_ids),
            "error": self.error,
        }


@dataclass(frozen=True)
class CrewAvailability:
    """Same-day exclusivity outcome for a driver or vehicle."""

    resource: str
    resource_id: str
    status: AvailabilityStatus
    conflicting_assignment_ids: Tuple[str, ...] = ()
    error: Optional[str] = None

    @property
    def is_conflict(self) -> bool:
        return self.status.is_conflict()

    def describe(self) -> str:
        """One-line explanation for the review screen."""
        if self.status == AvailabilityStatus.UNVERIFIED:
            return f"Could not verify {self.resource} {self.resource_id}: {self.error}"
        if self.is_conflict:
            return f"The {self.resource} is already assigned on this date"
        return f"The {self.resource} is available"

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "resource": self.resource,
            "resource_id": self.resource_id,
            "status": self.status.value,
            "conflicting_assignment_ids": list(self.conflicting_assignment_ids),
            "error": self.error,
        }


@dataclass(frozen=True)
class ConflictReport:
    """Aggregate result of one availability check run."""

    window: Optional[DateWindow] = None
    items: Tuple[ItemAvailability, ...] = ()
    driver: Optional[CrewAvailability] = None
    vehicle: Optional[CrewAvailability] = None

    @property
    def item_conflicts(self) -> List[ItemAvailability]:
        return [item for item in self.items if item.is_conflict]

    @property
    def driver_conflict(self) -> bool:
        return self.driver is not None and self.driver.is_conflict

    @property
    def vehicle_conflict(self) -> bool:
        return self.vehicle is not None and self.vehicle.is_conflict

    @property
    def has_conflicts(self) -> bool:
        return len(self.item_conflicts) > 0 or self.driver_conflict or self.vehicle_conflict

    @property
    def crew_conflict(self) -> bool:
        return self.driver_conflict or self.vehicle_conflict

    def unverified_checks(self) -> List[str]:
        """Names of checks that could not be answered."""
        names = [
            f"product:{item.product_id}"
            for item in self.items
            if item.status == AvailabilityStatus.UNVERIFIED
        ]
        for crew in (self.driver, self.vehicle):
            if crew is not None and crew.status == AvailabilityStatus.UNVERIFIED:
                names.append(f"{crew.resource}:{crew.resource_id}")
        return names

    @property
    def is_fully_verified(self) -> bool:
        return not self.unverified_checks()

    def conflict_messages(self) -> List[str]:
        """Messages for every blocking conflict."""
        messages = [item.describe() for item in self.item_conflicts]
        for crew in (self.driver, self.vehicle):
            if crew is not None and crew.is_conflict:
                messages.append(crew.describe())
        return messages

    def caution_messages(self) -> List[str]:
        """Messages for every check that could not be verified."""
        messages = [
            item.describe()
            for item in self.items
            if item.status == AvailabilityStatus.UNVERIFIED
        ]
        for crew in (self.driver, self.vehicle):
            if crew is not None and crew.status == AvailabilityStatus.UNVERIFIED:
                messages.append(crew.describe())
        return messages

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "window": self.window.to_dict() if self.window else None,
            "items": [item.to_dict() for item in self.items],
            "driver": self.driver.to_dict() if self.driver else None,
            "vehicle": self.vehicle.to_dict() if self.vehicle else None,
            "has_conflicts": self.has_conflicts,
            "unverified_checks": self.unverified_checks(),
        }
