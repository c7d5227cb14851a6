"""
Domain package.
"""

from .entities import *
from .exceptions import *
from .value_objects import *

__all__ = [
    # Entities
    "DailyAssignment",
    "Draft",
    "Job",
    "JobDocument",
    "Quote",
    "ServiceItem",
    "ServiceLineItem",
    "WizardSession",
    # Exceptions
    "AvailabilityError",
    "CommitError",
    "DraftError",
    "QuoteDeliveryError",
    "ValidationError",
    # Value Objects
    "ConflictReport",
    "DateWindow",
    "FrequencySpec",
    "JobType",
    "WizardMode",
    "WizardStep",
]
