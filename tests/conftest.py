"""
Pytest configuration and fixtures.
"""

from datetime import date
from decimal import Decimal
from typing import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from dispatch_wizard.application.interfaces.queries import (
    AvailabilityQueryInterface,
    CatalogQueryInterface,
)
from dispatch_wizard.application.interfaces.repositories import (
    CompanySettingsRepositoryInterface,
    DailyAssignmentRepositoryInterface,
    DraftStoreInterface,
    JobLineItemRepositoryInterface,
    JobRepositoryInterface,
    QuoteRepositoryInterface,
)
from dispatch_wizard.application.interfaces.services import QuoteDeliveryInterface
from dispatch_wizard.application.services.wizard_state_machine import WizardStateMachine
from dispatch_wizard.domain.entities.job_document import (
    CrewAssignment,
    InventoryLineRequest,
    JobDocument,
)
from dispatch_wizard.domain.entities.service_item import ServiceItem
from dispatch_wizard.domain.entities.wizard_session import WizardSession
from dispatch_wizard.domain.value_objects.job_type import JobType
from dispatch_wizard.domain.value_objects.location_selection import LocationSelection
from dispatch_wizard.domain.value_objects.pricing import PricingMethod
from dispatch_wizard.infrastructure.database.models import Base

# Test database URL
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine():
    """Create test database engine with all tables."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async_session_factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session_factory() as session:
        yield session
        await session.rollback()


# Domain builders


@pytest.fixture
def sample_service():
    """A per-visit service priced at 50.00."""
    return ServiceItem(
        id="svc-clean",
        name="Unit Cleaning",
        pricing_method=PricingMethod.PER_VISIT,
        per_visit_cost=Decimal("50.00"),
    )


@pytest.fixture
def delivery_document():
    """A delivery document that passes every step's validation."""
    return JobDocument(
        customer_id="cust-1",
        job_type=JobType.DELIVERY,
        scheduled_date=date(2025, 3, 1),
        rental_duration_days=3,
        location_selection=LocationSelection.saved("loc-1"),
        assignment=CrewAssignment(driver_id="drv-1", vehicle_id="veh-1"),
        items=[InventoryLineRequest(product_id="prod-1", quantity=2)],
    )


@pytest.fixture
def delivery_machine(delivery_document):
    """State machine around a valid delivery document."""
    machine = WizardStateMachine(WizardSession(data=delivery_document))
    machine.recalculate_services()
    return machine


# Mocked collaborators


@pytest.fixture
def mock_job_repository():
    """Mock job repository that returns what it is given."""
    mock_repo = AsyncMock(spec=JobRepositoryInterface)
    mock_repo.create = AsyncMock(side_effect=lambda job: job)
    mock_repo.get_by_id = AsyncMock()
    mock_repo.find_by_parent = AsyncMock(return_value=[])
    return mock_repo


@pytest.fixture
def mock_line_item_repository():
    mock_repo = AsyncMock(spec=JobLineItemRepositoryInterface)
    mock_repo.create = AsyncMock(side_effect=lambda item: item)
    return mock_repo


@pytest.fixture
def mock_assignment_repository():
    mock_repo = AsyncMock(spec=DailyAssignmentRepositoryInterface)
    mock_repo.find_for_date = AsyncMock(return_value=[])
    mock_repo.create = AsyncMock(side_effect=lambda assignment: assignment)
    return mock_repo


@pytest.fixture
def mock_quote_repository():
    mock_repo = AsyncMock(spec=QuoteRepositoryInterface)
    mock_repo.create = AsyncMock(side_effect=lambda quote: quote)
    mock_repo.get_by_id = AsyncMock(return_value=None)
    mock_repo.update_status = AsyncMock()
    return mock_repo


@pytest.fixture
def mock_company_settings_repository():
    """Counters start at 1 for every numbering sequence."""
    counters = {}

    async def reserve_number(counter):
        counters[counter] = counters.get(counter, 0) + 1
        return counters[counter]

    mock_repo = AsyncMock(spec=CompanySettingsRepositoryInterface)
    mock_repo.reserve_number = AsyncMock(side_effect=reserve_number)
    mock_repo.get_prefix = AsyncMock(return_value=None)
    return mock_repo


@pytest.fixture
def mock_availability_query():
    mock_query = AsyncMock(spec=AvailabilityQueryInterface)
    mock_query.get_available_quantity = AsyncMock(return_value=100)
    mock_query.get_available_unit_ids = AsyncMock(return_value=set())
    return mock_query


@pytest.fixture
def mock_catalog():
    mock_query = AsyncMock(spec=CatalogQueryInterface)
    mock_query.query = AsyncMock(return_value=[])
    return mock_query


@pytest.fixture
def mock_draft_store():
    return AsyncMock(spec=DraftStoreInterface)


@pytest.fixture
def mock_quote_delivery():
    mock_delivery = AsyncMock(spec=QuoteDeliveryInterface)
    mock_delivery.deliver = AsyncMock(return_value=True)
    return mock_delivery


@pytest.fixture
def mock_transaction_service():
    mock_service = AsyncMock()
    mock_service.commit = AsyncMock()
    mock_service.rollback = AsyncMock()
    return mock_service
