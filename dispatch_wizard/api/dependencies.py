"""
FastAPI dependency injection container.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from dispatch_wizard.api.session_registry import SessionRegistry
from dispatch_wizard.application.services.availability_checker import AvailabilityChecker
from dispatch_wizard.application.services.job_numbering import JobNumberingService
from dispatch_wizard.application.services.quote_builder import QuoteBuilder
from dispatch_wizard.application.services.wizard_state_machine import WizardStateMachine
from dispatch_wizard.application.use_cases.manage_drafts import ManageDraftsUseCase
from dispatch_wizard.application.use_cases.review_availability import (
    ReviewAvailabilityUseCase,
)
from dispatch_wizard.application.use_cases.send_quote import SendQuoteUseCase
from dispatch_wizard.application.use_cases.submit_wizard import CommitOrchestrator
from dispatch_wizard.config.database import get_db_session
from dispatch_wizard.config.logging import get_logger
from dispatch_wizard.infrastructure.database.repositories import (
    AvailabilityRepository,
    CatalogRepository,
    CompanySettingsRepository,
    DailyAssignmentRepository,
    JobLineItemRepository,
    JobRepository,
    QuoteRepository,
    TransactionService,
)
from dispatch_wizard.infrastructure.drafts.redis_draft_store import RedisDraftStore
from dispatch_wizard.infrastructure.external.quote_delivery_client import (
    HttpQuoteDeliveryClient,
)

logger = get_logger(__name__)


# Process-wide singletons
@lru_cache(maxsize=1)
def get_session_registry() -> SessionRegistry:
    """Get the wizard session registry."""
    return SessionRegistry()


@lru_cache(maxsize=1)
def get_draft_store() -> RedisDraftStore:
    """Get the Redis-backed draft store."""
    return RedisDraftStore()


async def get_quote_delivery_client() -> HttpQuoteDeliveryClient:
    """Get quote delivery client instance."""
    return HttpQuoteDeliveryClient()


# Database Dependencies
async def get_transaction_service(
    db: AsyncSession = Depends(get_db_session),
) -> TransactionService:
    """Get transaction service instance."""
    return TransactionService(db)


async def get_catalog_repository(
    db: AsyncSession = Depends(get_db_session),
) -> CatalogRepository:
    """Get catalog repository instance."""
    return CatalogRepository(db)


async def get_daily_assignment_repository(
    db: AsyncSession = Depends(get_db_session),
) -> DailyAssignmentRepository:
    """Get daily assignment repository instance."""
    return DailyAssignmentRepository(db)


async def get_quote_repository(
    db: AsyncSession = Depends(get_db_session),
) -> QuoteRepository:
    """Get quote repository instance."""
    return QuoteRepository(db)


# Service Dependencies
async def get_wizard_machine(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
) -> WizardStateMachine:
    """Resolve the state machine of an open wizard session."""
    machine = registry.get(session_id)
    if machine is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Wizard session {session_id} not found",
        )
    return machine


async def get_review_availability_use_case(
    db: AsyncSession = Depends(get_db_session),
    assignment_repo: DailyAssignmentRepository = Depends(get_daily_assignment_repository),
) -> ReviewAvailabilityUseCase:
    """Get availability review use case."""
    return ReviewAvailabilityUseCase(
        AvailabilityChecker(AvailabilityRepository(db), assignment_repo)
    )


async def get_commit_orchestrator(
    db: AsyncSession = Depends(get_db_session),
    catalog: CatalogRepository = Depends(get_catalog_repository),
    assignment_repo: DailyAssignmentRepository = Depends(get_daily_assignment_repository),
    quote_repo: QuoteRepository = Depends(get_quote_repository),
    transaction_service: TransactionService = Depends(get_transaction_service),
) -> CommitOrchestrator:
    """Get the wizard commit orchestrator."""
    return CommitOrchestrator(
        job_repo=JobRepository(db),
        line_item_repo=JobLineItemRepository(db),
        assignment_repo=assignment_repo,
        quote_repo=quote_repo,
        numbering=JobNumberingService(CompanySettingsRepository(db)),
        quote_builder=QuoteBuilder(catalog),
        transaction_service=transaction_service,
        availability_checker=AvailabilityChecker(AvailabilityRepository(db), assignment_repo),
    )


async def get_manage_drafts_use_case(
    draft_store: RedisDraftStore = Depends(get_draft_store),
) -> ManageDraftsUseCase:
    """Get draft management use case."""
    return ManageDraftsUseCase(draft_store)


async def get_send_quote_use_case(
    quote_repo: QuoteRepository = Depends(get_quote_repository),
    delivery: HttpQuoteDeliveryClient = Depends(get_quote_delivery_client),
    transaction_service: TransactionService = Depends(get_transaction_service),
) -> SendQuoteUseCase:
    """Get send quote use case."""
    return SendQuoteUseCase(quote_repo, delivery, transaction_service)


# Type aliases for cleaner dependency injection
SessionRegistryDep = Annotated[SessionRegistry, Depends(get_session_registry)]
CatalogRepositoryDep = Annotated[CatalogRepository, Depends(get_catalog_repository)]
WizardMachineDep = Annotated[WizardStateMachine, Depends(get_wizard_machine)]
ReviewAvailabilityDep = Annotated[
    ReviewAvailabilityUseCase, Depends(get_review_availability_use_case)
]
CommitOrchestratorDep = Annotated[CommitOrchestrator, Depends(get_commit_orchestrator)]
ManageDraftsDep = Annotated[ManageDraftsUseCase, Depends(get_manage_drafts_use_case)]
SendQuoteDep = Annotated[SendQuoteUseCase, Depends(get_send_quote_use_case)]
