"""
Application interfaces package.
"""

from .queries import AvailabilityQueryInterface, CatalogQueryInterface
from .repositories import (
    CompanySettingsRepositoryInterface,
    DailyAssignmentRepositoryInterface,
    DraftStoreInterface,
    JobLineItemRepositoryInterface,
    JobRepositoryInterface,
    QuoteRepositoryInterface,
)
from .services import QuoteDeliveryInterface

__all__ = [
    "AvailabilityQueryInterface",
    "CatalogQueryInterface",
    "CompanySettingsRepositoryInterface",
    "DailyAssignmentRepositoryInterface",
    "DraftStoreInterface",
    "JobLineItemRepositoryInterface",
    "JobRepositoryInterface",
    "QuoteRepositoryInterface",
    "QuoteDeliveryInterface",
]
