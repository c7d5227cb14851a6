"""
Database repositories package.
"""

from .availability_repository import AvailabilityRepository
from .catalog_repository import CatalogRepository
from .company_settings_repository import CompanySettingsRepository
from .daily_assignment_repository import DailyAssignmentRepository
from .job_repository import JobRepository
from .line_item_repository import JobLineItemRepository
from .quote_repository import QuoteRepository
from .transaction_repository import TransactionService

__all__ = [
    "AvailabilityRepository",
    "CatalogRepository",
    "CompanySettingsRepository",
    "DailyAssignmentRepository",
    "JobRepository",
    "JobLineItemRepository",
    "QuoteRepository",
    "TransactionService",
]
