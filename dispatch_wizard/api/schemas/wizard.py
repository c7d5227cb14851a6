"""
Wizard session API schemas.

Request bodies are converted to domain objects here so the application
layer never sees pydantic models.
"""

import datetime as dt
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, model_validator

from dispatch_wizard.domain.entities.job_document import (
    CrewAssignment,
    InventoryLineRequest,
    PartialPickup,
)
from dispatch_wizard.domain.value_objects.frequency import (
    CustomFrequencyType,
    Frequency,
    FrequencySpec,
    SpecificDate,
    Weekday,
)
from dispatch_wizard.domain.value_objects.inventory_strategy import InventoryStrategy
from dispatch_wizard.domain.value_objects.job_type import JobType
from dispatch_wizard.domain.value_objects.location_selection import (
    InlineAddress,
    LocationSelection,
)
from dispatch_wizard.domain.value_objects.pricing import OverrideMethod, PriceOverride
from dispatch_wizard.domain.value_objects.quote_status import DeliveryMethod
from dispatch_wizard.domain.value_objects.wizard_mode import WizardMode


class InventoryLineSchema(BaseModel):
    """Requested inventory line."""

    product_id: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=0)
    strategy: InventoryStrategy = InventoryStrategy.BULK
    specific_item_ids: Optional[List[str]] = None
    attributes: Optional[Dict[str, Any]] = None

    def to_domain(self) -> InventoryLineRequest:
        return InventoryLineRequest(
            product_id=self.product_id,
            quantity=self.quantity,
            strategy=self.strategy,
            specific_item_ids=self.specific_item_ids,
            attributes=self.attributes,
        )


class InlineAddressSchema(BaseModel):
    address: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    save_to_profile: bool = False


class LocationSchema(BaseModel):
    """Saved location id or a new inline address, not both."""

    saved_location_id: Optional[str] = None
    new_address: Optional[InlineAddressSchema] = None

    @model_validator(mode="after")
    def exactly_one_source(self):
        if bool(self.saved_location_id) == (self.new_address is not None):
            raise ValueError("Provide either saved_location_id or new_address")
        return self

    def to_domain(self) -> LocationSelection:
        if self.saved_location_id:
            return LocationSelection.saved(self.saved_location_id)
        return LocationSelection.inline(InlineAddress(**self.new_address.model_dump()))


class AssignmentSchema(BaseModel):
    driver_id: Optional[str] = None
    vehicle_id: Optional[str] = None


class DocumentPatchRequest(BaseModel):
    """Partial update of the wizard document; only sent fields change."""

    customer_id: Optional[str] = None
    contact_id: Optional[str] = None
    job_type: Optional[JobType] = None
    scheduled_date: Optional[dt.date] = None
    scheduled_time: Optional[str] = Field(None, pattern=r"^\d{2}:\d{2}$")
    timezone: Optional[str] = None
    rental_duration_days: Optional[int] = Field(None, ge=0)
    rental_duration_hours: Optional[int] = Field(None, ge=0)
    service_end_date: Optional[dt.date] = None
    location: Optional[LocationSchema] = None
    assignment: Optional[AssignmentSchema] = None
    create_daily_assignment: Optional[bool] = None
    items: Optional[List[InventoryLineSchema]] = None
    notes: Optional[str] = None
    special_instructions: Optional[str] = None
    is_priority: Optional[bool] = None

    def to_fields(self) -> Dict[str, Any]:
        """Domain-level field values for the fields present in the request."""
        fields = self.model_dump(exclude_unset=True)
        if "location" in fields:
            fields.pop("location")
            fields["location_selection"] = self.location.to_domain() if self.location else None
        if "assignment" in fields:
            fields["assignment"] = CrewAssignment(**(fields["assignment"] or {}))
        if "items" in fields:
            fields["items"] = [item.to_domain() for item in self.items or []]
        return fields


class PartialPickupSchema(BaseModel):
    id: Optional[str] = None
    date: Optional[dt.date] = None
    time: Optional[str] = None
    notes: str = ""
    is_priority: bool = False
    items: List[InventoryLineSchema] = Field(default_factory=list)
    driver_id: Optional[str] = None
    vehicle_id: Optional[str] = None

    def to_domain(self) -> PartialPickup:
        values = self.model_dump(exclude={"items", "id"})
        partial = PartialPickup(items=[item.to_domain() for item in self.items], **values)
        if self.id:
            partial.id = self.id
        return partial


class PickupPlanPatchRequest(BaseModel):
    create_pickup_job: Optional[bool] = None
    pickup_date: Optional[dt.date] = None
    pickup_time: Optional[str] = None
    pickup_notes: Optional[str] = None
    pickup_is_priority: Optional[bool] = None
    pickup_driver_id: Optional[str] = None
    pickup_vehicle_id: Optional[str] = None
    main_pickup_items: Optional[List[InventoryLineSchema]] = None
    create_partial_pickups: Optional[bool] = None
    partial_pickups: Optional[List[PartialPickupSchema]] = None

    def to_fields(self) -> Dict[str, Any]:
        fields = self.model_dump(exclude_unset=True)
        if "main_pickup_items" in fields:
            fields["main_pickup_items"] = [item.to_domain() for item in self.main_pickup_items or []]
        if "partial_pickups" in fields:
            fields["partial_pickups"] = [pickup.to_domain() for pickup in self.partial_pickups or []]
        return fields


class SpecificDateSchema(BaseModel):
    date: dt.date
    time: Optional[str] = None
    notes: Optional[str] = None


class FrequencySchema(BaseModel):
    frequency: Frequency = Frequency.ONE_TIME
    custom_type: Optional[CustomFrequencyType] = None
    interval_days: int = 1
    days_of_week: List[Weekday] = Field(default_factory=list)
    specific_dates: List[SpecificDateSchema] = Field(default_factory=list)

    def to_domain(self) -> FrequencySpec:
        return FrequencySpec(
            frequency=self.frequency,
            custom_type=self.custom_type,
            interval_days=self.interval_days,
            days_of_week=frozenset(self.days_of_week),
            specific_dates=tuple(
                SpecificDate(date=entry.date, time=entry.time, notes=entry.notes)
                for entry in self.specific_dates
            ),
        )


class PriceOverrideSchema(BaseModel):
    method: OverrideMethod
    amount: Decimal = Field(..., ge=0)

    def to_domain(self) -> PriceOverride:
        return PriceOverride(method=self.method, amount=self.amount)


class AddServiceRequest(BaseModel):
    service_id: str = Field(..., min_length=1)


class UpdateServiceRequest(BaseModel):
    frequency: Optional[FrequencySchema] = None
    include_dropoff_service: Optional[bool] = None
    include_pickup_service: Optional[bool] = None
    price_override: Optional[PriceOverrideSchema] = None
    clear_price_override: bool = False

    def to_changes(self) -> Dict[str, Any]:
        changes: Dict[str, Any] = {}
        if self.frequency is not None:
            changes["frequency"] = self.frequency.to_domain()
        if self.include_dropoff_service is not None:
            changes["include_dropoff_service"] = self.include_dropoff_service
        if self.include_pickup_service is not None:
            changes["include_pickup_service"] = self.include_pickup_service
        if self.clear_price_override:
            changes["price_override"] = None
        elif self.price_override is not None:
            changes["price_override"] = self.price_override.to_domain()
        return changes


class OpenSessionRequest(BaseModel):
    wizard_mode: WizardMode = WizardMode.JOB


class ModeRequest(BaseModel):
    wizard_mode: WizardMode


class GoToStepRequest(BaseModel):
    step: int = Field(..., ge=1)


class SaveDraftRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    include_step: bool = True


class SendQuoteRequest(BaseModel):
    method: DeliveryMethod


class StepSchema(BaseModel):
    number: int
    kind: str


class SessionResponse(BaseModel):
    """Snapshot of a wizard session."""

    session_id: str
    wizard_mode: WizardMode
    current_step: int
    current_step_kind: str
    highest_step_reached: int
    steps: List[StepSchema]
    errors: Dict[str, str]
    has_conflicts: bool
    availability: Optional[Dict[str, Any]] = None
    data: Dict[str, Any]


class NavigationResponse(BaseModel):
    moved: bool
    session: SessionResponse


class AvailabilityResponse(BaseModel):
    generation: int
    applied: bool
    has_conflicts: bool
    conflicts: List[str]
    cautions: List[str]
    report: Dict[str, Any]


class SendQuoteResponse(BaseModel):
    quote_id: str
    method: DeliveryMethod
    status: str
