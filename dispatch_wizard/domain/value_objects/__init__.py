"""
Domain value objects package.
"""

from .availability_status import AvailabilityStatus
from .conflict_report import ConflictReport, CrewAvailability, ItemAvailability
from .date_window import DateWindow
from .frequency import (
    CustomFrequencyType,
    Frequency,
    FrequencySpec,
    SpecificDate,
    Weekday,
)
from .inventory_strategy import InventoryStrategy
from .job_type import JobType
from .location_selection import InlineAddress, LocationSelection
from .pricing import OverrideMethod, PriceOverride, PricingMethod, to_money
from .quote_status import DeliveryMethod, QuoteStatus
from .wizard_mode import WizardMode
from .visit import Visit, VisitSchedule
from .wizard_step import WizardStep

__all__ = [
    "AvailabilityStatus",
    "ConflictReport",
    "CrewAvailability",
    "ItemAvailability",
    "DateWindow",
    "CustomFrequencyType",
    "Frequency",
    "FrequencySpec",
    "SpecificDate",
    "Weekday",
    "InventoryStrategy",
    "JobType",
    "InlineAddress",
    "LocationSelection",
    "OverrideMethod",
    "PriceOverride",
    "PricingMethod",
    "to_money",
    "DeliveryMethod",
    "QuoteStatus",
    "WizardMode",
    "WizardStep",
    "Visit",
    "VisitSchedule",
]
