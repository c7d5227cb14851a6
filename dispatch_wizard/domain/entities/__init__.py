"""
Domain entities package.
"""

from .daily_assignment import DailyAssignment
from .draft import Draft
from .job import Job
from .job_document import (
    CrewAssignment,
    InventoryLineRequest,
    JobDocument,
    PartialPickup,
    PickupPlan,
)
from .quote import Quote, QuoteItem
from .service_item import ServiceItem
from .service_line_item import ServiceLineItem
from .wizard_session import WizardSession

__all__ = [
    "DailyAssignment",
    "Draft",
    "Job",
    "CrewAssignment",
    "InventoryLineRequest",
    "JobDocument",
    "PartialPickup",
    "PickupPlan",
    "Quote",
    "QuoteItem",
    "ServiceItem",
    "ServiceLineItem",
    "WizardSession",
]
