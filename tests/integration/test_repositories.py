"""Integration tests for the SQLAlchemy repositories."""

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest
import pytest_asyncio

from dispatch_wizard.application.services.job_numbering import JobNumberingService
from dispatch_wizard.domain.entities.daily_assignment import DailyAssignment
from dispatch_wizard.domain.entities.job import Job
from dispatch_wizard.domain.entities.job_document import InventoryLineRequest
from dispatch_wizard.domain.entities.quote import Quote, QuoteItem
from dispatch_wizard.domain.entities.service_line_item import ServiceLineItem
from dispatch_wizard.domain.exceptions.availability_error import AvailabilityQueryError
from dispatch_wizard.domain.exceptions.validation_error import ValidationError
from dispatch_wizard.domain.value_objects.date_window import DateWindow
from dispatch_wizard.domain.value_objects.inventory_strategy import InventoryStrategy
from dispatch_wizard.domain.value_objects.job_type import JobType
from dispatch_wizard.domain.value_objects.location_selection import (
    InlineAddress,
    LocationSelection,
)
from dispatch_wizard.domain.value_objects.quote_status import QuoteStatus
from dispatch_wizard.infrastructure.database.models.catalog import (
    ProductItemModel,
    ProductModel,
    ServiceCatalogModel,
)
from dispatch_wizard.infrastructure.database.repositories.availability_repository import (
    AvailabilityRepository,
)
from dispatch_wizard.infrastructure.database.repositories.catalog_repository import (
    CatalogRepository,
)
from dispatch_wizard.infrastructure.database.repositories.company_settings_repository import (
    CompanySettingsRepository,
)
from dispatch_wizard.infrastructure.database.repositories.daily_assignment_repository import (
    DailyAssignmentRepository,
)
from dispatch_wizard.infrastructure.database.repositories.job_repository import JobRepository
from dispatch_wizard.infrastructure.database.repositories.line_item_repository import (
    JobLineItemRepository,
)
from dispatch_wizard.infrastructure.database.repositories.quote_repository import QuoteRepository
from dispatch_wizard.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)


def _delivery(items, start=date(2025, 3, 1), end=date(2025, 3, 4), **overrides) -> Job:
    return Job(
        customer_id="cust-1",
        job_type=JobType.DELIVERY,
        scheduled_date=start,
        return_date=end,
        job_number=overrides.pop("job_number", f"DEL-{uuid4().hex[:6]}"),
        items=items,
        **overrides,
    )


@pytest.mark.integration
class TestJobRepository:
    """Job persistence with equipment rows."""

    @pytest.mark.asyncio
    async def test_create_and_reload(self, db_session):
        repo = JobRepository(db_session)
        job = _delivery(
            [
                InventoryLineRequest(product_id="prod-1", quantity=2),
                InventoryLineRequest(
                    product_id="prod-2",
                    quantity=2,
                    strategy=InventoryStrategy.SPECIFIC,
                    specific_item_ids=["u1", "u2"],
                ),
            ],
            location=LocationSelection.inline(InlineAddress(address="1 Main St", latitude=1.0, longitude=2.0)),
            total_price=Decimal("50.00"),
        )

        await repo.create(job)
        await db_session.commit()
        db_session.expunge_all()

        loaded = await repo.get_by_id(job.id)

        assert loaded.job_number == job.job_number
        assert loaded.return_date == date(2025, 3, 4)
        assert loaded.location.new_address.address == "1 Main St"
        assert loaded.total_price == Decimal("50.00")
        bulk, specific = loaded.items
        assert (bulk.product_id, bulk.quantity) == ("prod-1", 2)
        assert specific.specific_item_ids == ["u1", "u2"]
        assert specific.strategy == InventoryStrategy.SPECIFIC

    @pytest.mark.asyncio
    async def test_find_by_parent(self, db_session):
        repo = JobRepository(db_session)
        primary = await repo.create(_delivery([]))
        pickup = Job(
            customer_id="cust-1",
            job_type=JobType.PICKUP,
            scheduled_date=date(2025, 3, 4),
            job_number="PKP-001",
            parent_job_id=primary.id,
            location=LocationSelection.saved("loc-1"),
        )
        await repo.create(pickup)
        await db_session.commit()

        children = await repo.find_by_parent(primary.id)

        assert [child.id for child in children] == [pickup.id]
        assert children[0].location.saved_location_id == "loc-1"

    @pytest.mark.asyncio
    async def test_missing_job(self, db_session):
        assert await JobRepository(db_session).get_by_id(uuid4()) is None


@pytest.mark.integration
class TestAvailabilityRepository:
    """Availability counted from overlapping equipment assignments."""

    @pytest_asyncio.fixture
    async def bulk_product(self, db_session):
        product = ProductModel(id=uuid4(), name="Standard Unit", stock_total=5)
        db_session.add(product)
        await db_session.flush()
        return product

    @pytest.mark.asyncio
    async def test_bulk_quantity_minus_overlapping_reservations(self, db_session, bulk_product):
        product_id = str(bulk_product.id)
        await JobRepository(db_session).create(
            _delivery([InventoryLineRequest(product_id=product_id, quantity=3)])
        )
        repo = AvailabilityRepository(db_session)

        overlapping = await repo.get_available_quantity(
            product_id, DateWindow(date(2025, 3, 4), date(2025, 3, 6))
        )
        after_return = await repo.get_available_quantity(
            product_id, DateWindow(date(2025, 3, 5), date(2025, 3, 6))
        )

        assert overlapping == 2
        assert after_return == 5

    @pytest.mark.asyncio
    async def test_unknown_product_has_no_stock(self, db_session):
        window = DateWindow.single_day(date(2025, 3, 1))
        assert await AvailabilityRepository(db_session).get_available_quantity(str(uuid4()), window) == 0

    @pytest.mark.asyncio
    async def test_malformed_product_id_is_a_query_error(self, db_session):
        window = DateWindow.single_day(date(2025, 3, 1))

        with pytest.raises(AvailabilityQueryError) as exc_info:
            await AvailabilityRepository(db_session).get_available_unit_ids("not-a-uuid", window)

        assert exc_info.value.check == "units of product not-a-uuid"

    @pytest.mark.asyncio
    async def test_tracked_units(self, db_session):
        product = ProductModel(id=uuid4(), name="Luxury Trailer", track_inventory=True)
        units = [
            ProductItemModel(id=uuid4(), product=product, item_code="T-1"),
            ProductItemModel(id=uuid4(), product=product, item_code="T-2"),
            ProductItemModel(id=uuid4(), product=product, item_code="T-3", status="maintenance"),
        ]
        db_session.add(product)
        db_session.add_all(units)
        await db_session.flush()
        booked, free, _ = (str(unit.id) for unit in units)
        await JobRepository(db_session).create(
            _delivery(
                [
                    InventoryLineRequest(
                        product_id=str(product.id),
                        quantity=1,
                        strategy=InventoryStrategy.SPECIFIC,
                        specific_item_ids=[booked],
                    )
                ],
                end=date(2025, 3, 2),
            )
        )
        repo = AvailabilityRepository(db_session)
        window = DateWindow.single_day(date(2025, 3, 2))

        assert await repo.get_available_unit_ids(str(product.id), window) == {free}
        assert await repo.get_available_quantity(str(product.id), window) == 1


@pytest.mark.integration
class TestCompanySettingsRepository:
    """Numbering counters."""

    @pytest.mark.asyncio
    async def test_counters_advance_independently(self, db_session):
        repo = CompanySettingsRepository(db_session)

        assert await repo.reserve_number("delivery") == 1
        assert await repo.reserve_number("delivery") == 2
        assert await repo.reserve_number("quote") == 1
        assert await repo.get_prefix("delivery") is None

    @pytest.mark.asyncio
    async def test_numbering_service_on_real_counters(self, db_session):
        numbering = JobNumberingService(CompanySettingsRepository(db_session))

        assert await numbering.next_job_number(JobType.ON_SITE_SURVEY) == "SURVEY-001"
        assert await numbering.next_quote_number() == "Q0001"

    @pytest.mark.asyncio
    async def test_unknown_counter(self, db_session):
        with pytest.raises(ValueError):
            await CompanySettingsRepository(db_session).reserve_number("invoice")


@pytest.mark.integration
class TestDailyAssignmentRepository:
    """Daily crew assignment lookups."""

    @pytest.mark.asyncio
    async def test_find_by_driver_or_vehicle(self, db_session):
        repo = DailyAssignmentRepository(db_session)
        record = await repo.create(
            DailyAssignment(assignment_date=date(2025, 3, 1), driver_id="drv-1", vehicle_id="veh-1")
        )

        by_driver = await repo.find_for_date(date(2025, 3, 1), driver_id="drv-1")
        by_vehicle = await repo.find_for_date(date(2025, 3, 1), vehicle_id="veh-1")
        other_day = await repo.find_for_date(date(2025, 3, 2), driver_id="drv-1")

        assert [found.id for found in by_driver] == [record.id]
        assert by_vehicle[0].matches("drv-1", "veh-1")
        assert other_day == []
        assert await repo.find_for_date(date(2025, 3, 1)) == []


@pytest.mark.integration
class TestQuoteAndLineItemRepositories:
    """Quote and service line item persistence."""

    @pytest.mark.asyncio
    async def test_quote_round_trip_and_status(self, db_session):
        repo = QuoteRepository(db_session)
        quote = Quote(
            customer_id="cust-1",
            quote_number="Q0001",
            items=[
                QuoteItem(line_item_type="product", name="Unit", quantity=2, unit_price="20"),
                QuoteItem(line_item_type="service", name="Cleaning", quantity=3, unit_price="50"),
            ],
        )
        await repo.create(quote)
        await db_session.commit()

        loaded = await repo.get_by_id(quote.id)
        updated = await repo.update_status(quote.id, QuoteStatus.SENT)

        assert loaded.total_amount == Decimal("190.00")
        assert updated.status == QuoteStatus.SENT
        assert updated.sent_at is not None
        assert await repo.update_status(uuid4(), QuoteStatus.SENT) is None

    @pytest.mark.asyncio
    async def test_line_items_by_job(self, db_session):
        job = await JobRepository(db_session).create(_delivery([]))
        repo = JobLineItemRepository(db_session)
        await repo.create(
            ServiceLineItem(
                job_id=job.id,
                service_id="svc-clean",
                service_name="Unit Cleaning",
                pricing_method="per_visit",
                frequency_descriptor={"frequency": "daily"},
                visit_dates=[date(2025, 3, 1), date(2025, 3, 2)],
                unit_rate=Decimal("50.00"),
                computed_total=Decimal("100.00"),
                total=Decimal("80.00"),
            )
        )

        (line_item,) = await repo.get_by_job_id(job.id)

        assert line_item.visit_count == 2
        assert line_item.is_overridden is True


@pytest.mark.integration
class TestCatalogRepository:
    """Catalog reference data queries."""

    @pytest.mark.asyncio
    async def test_query_service_catalog_by_id(self, db_session):
        service = ServiceCatalogModel(id=uuid4(), name="Unit Cleaning", per_visit_cost=Decimal("50"))
        db_session.add(service)
        await db_session.flush()

        rows = await CatalogRepository(db_session).query("service_catalog", {"id": str(service.id)})

        assert rows[0]["id"] == str(service.id)
        assert rows[0]["name"] == "Unit Cleaning"

    @pytest.mark.asyncio
    async def test_unknown_entity_and_filter(self, db_session):
        repo = CatalogRepository(db_session)
        with pytest.raises(ValidationError):
            await repo.query("invoices")
        with pytest.raises(ValidationError):
            await repo.query("products", {"colour": "red"})


@pytest.mark.integration
class TestTransactionService:
    """Commit counting and rollback of uncommitted writes."""

    @pytest.mark.asyncio
    async def test_commit_persists_and_counts(self, db_session):
        transactions = TransactionService(db_session)
        job = await JobRepository(db_session).create(_delivery([]))

        await transactions.commit()

        assert transactions.commits == 1
        assert await JobRepository(db_session).get_by_id(job.id) is not None

    @pytest.mark.asyncio
    async def test_rollback_discards_pending_writes(self, db_session):
        transactions = TransactionService(db_session)
        job = await JobRepository(db_session).create(_delivery([]))

        await transactions.rollback()

        assert transactions.commits == 0
        assert await JobRepository(db_session).get_by_id(job.id) is None

    @pytest.mark.asyncio
    async def test_rollback_outside_transaction_is_noop(self, db_session):
        transactions = TransactionService(db_session)

        await transactions.rollback()

        assert not db_session.in_transaction()
