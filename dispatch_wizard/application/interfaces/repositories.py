"""
Repository interfaces for dependency inversion.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional
from uuid import UUID

from dispatch_wizard.domain.entities.daily_assignment import DailyAssignment
from dispatch_wizard.domain.entities.draft import Draft
from dispatch_wizard.domain.entities.job import Job
from dispatch_wizard.domain.entities.quote import Quote
from dispatch_wizard.domain.entities.service_line_item import ServiceLineItem
from dispatch_wizard.domain.value_objects.quote_status import QuoteStatus


class JobRepositoryInterface(ABC):
    """Job repository interface."""

    @abstractmethod
    async def get_by_id(self, job_id: UUID) -> Optional[Job]:
        """Get job by ID."""
        pass

    @abstractmethod
    async def create(self, job: Job) -> Job:
        """Create a job together with its equipment assignments."""
        pass

    @abstractmethod
    async def find_by_parent(self, parent_job_id: UUID) -> List[Job]:
        """Get the pickup jobs derived from a job."""
        pass


class JobLineItemRepositoryInterface(ABC):
    """Service line item repository interface."""

    @abstractmethod
    async def create(self, line_item: ServiceLineItem) -> ServiceLineItem:
        """Create a service line item."""
        pass

    @abstractmethod
    async def get_by_job_id(self, job_id: UUID) -> List[ServiceLineItem]:
        """Get all service line items of a job."""
        pass


class QuoteRepositoryInterface(ABC):
    """Quote repository interface."""

    @abstractmethod
    async def create(self, quote: Quote) -> Quote:
        """Create a quote with its items."""
        pass

    @abstractmethod
    async def get_by_id(self, quote_id: UUID) -> Optional[Quote]:
        """Get quote by ID."""
        pass

    @abstractmethod
    async def update_status(self, quote_id: UUID, status: QuoteStatus) -> Optional[Quote]:
        """Record the delivery status of a quote."""
        pass


class DailyAssignmentRepositoryInterface(ABC):
    """Daily crew assignment repository interface."""

    @abstractmethod
    async def find_for_date(
        self,
        assignment_date: date,
        driver_id: Optional[str] = None,
        vehicle_id: Optional[str] = None,
    ) -> List[DailyAssignment]:
        """Find assignments on a date booking the driver or the vehicle."""
        pass

    @abstractmethod
    async def create(self, assignment: DailyAssignment) -> DailyAssignment:
        """Create a daily assignment."""
        pass


class CompanySettingsRepositoryInterface(ABC):
    """Company settings repository interface."""

    @abstractmethod
    async def reserve_number(self, counter: str) -> int:
        """Reserve and return the next value of a numbering counter."""
        pass

    @abstractmethod
    async def get_prefix(self, counter: str) -> Optional[str]:
        """Get the company's prefix override for a counter, if any."""
        pass


class DraftStoreInterface(ABC):
    """Named-snapshot persistence of wizard documents."""

    @abstractmethod
    async def save_draft(self, draft: Draft) -> str:
        """Save a draft and return its id."""
        pass

    @abstractmethod
    async def list_drafts(self) -> List[Draft]:
        """List drafts, most recently updated first."""
        pass

    @abstractmethod
    async def get_draft(self, draft_id: str) -> Optional[Draft]:
        """Get draft by ID."""
        pass

    @abstractmethod
    async def delete_draft(self, draft_id: str) -> bool:
        """Delete a draft."""
        pass
