"""
Unit tests for the availability checker.
"""

from datetime import date

import pytest

from dispatch_wizard.application.services.availability_checker import AvailabilityChecker
from dispatch_wizard.domain.entities.daily_assignment import DailyAssignment
from dispatch_wizard.domain.entities.job_document import InventoryLineRequest
from dispatch_wizard.domain.exceptions.availability_error import AvailabilityQueryError
from dispatch_wizard.domain.value_objects.availability_status import AvailabilityStatus
from dispatch_wizard.domain.value_objects.date_window import DateWindow
from dispatch_wizard.domain.value_objects.inventory_strategy import InventoryStrategy


class TestAvailabilityChecker:
    """Test cases for AvailabilityChecker."""

    @pytest.fixture
    def checker(self, mock_availability_query, mock_assignment_repository):
        return AvailabilityChecker(mock_availability_query, mock_assignment_repository)

    @pytest.mark.asyncio
    async def test_everything_available(self, checker, delivery_document, mock_availability_query):
        report = await checker.check(delivery_document)

        assert report.has_conflicts is False
        assert report.is_fully_verified is True
        assert report.window == DateWindow(date(2025, 3, 1), date(2025, 3, 4))
        mock_availability_query.get_available_quantity.assert_called_once_with(
            "prod-1", report.window, None
        )

    @pytest.mark.asyncio
    async def test_bulk_shortfall(self, checker, delivery_document, mock_availability_query):
        delivery_document.items = [InventoryLineRequest(product_id="prod-1", quantity=5)]
        mock_availability_query.get_available_quantity.return_value = 3

        report = await checker.check(delivery_document)

        item = report.items[0]
        assert item.status == AvailabilityStatus.CONFLICT
        assert item.shortfall == 2
        assert item.available_quantity == 3
        assert report.conflict_messages() == [
            "Only 3 of 5 units available for product prod-1 (short by 2)"
        ]

    @pytest.mark.asyncio
    async def test_specific_units_missing(self, checker, delivery_document, mock_availability_query):
        delivery_document.items = [
            InventoryLineRequest(
                product_id="prod-1",
                quantity=2,
                strategy=InventoryStrategy.SPECIFIC,
                specific_item_ids=["u1", "u2"],
            )
        ]
        mock_availability_query.get_available_unit_ids.return_value = {"u1", "u3"}

        report = await checker.check(delivery_document)

        assert report.items[0].missing_unit_ids == ("u2",)
        assert report.has_conflicts is True

    @pytest.mark.asyncio
    async def test_specific_strategy_without_ids_needs_free_stock(
        self, checker, delivery_document, mock_availability_query
    ):
        delivery_document.items = [
            InventoryLineRequest(product_id="prod-1", quantity=3, strategy=InventoryStrategy.SPECIFIC)
        ]
        mock_availability_query.get_available_unit_ids.return_value = {"u1"}

        report = await checker.check(delivery_document)

        assert report.items[0].shortfall == 2
        assert report.items[0].status == AvailabilityStatus.CONFLICT

    @pytest.mark.asyncio
    async def test_query_failure_is_unverified_not_available(
        self, checker, delivery_document, mock_availability_query
    ):
        mock_availability_query.get_available_quantity.side_effect = ConnectionError("db down")

        report = await checker.check(delivery_document)

        assert report.items[0].status == AvailabilityStatus.UNVERIFIED
        assert report.has_conflicts is False
        assert report.unverified_checks() == ["product:prod-1"]
        assert report.caution_messages() == [
            "Could not verify availability for product prod-1: db down"
        ]

    @pytest.mark.asyncio
    async def test_query_error_reports_its_reason(
        self, checker, delivery_document, mock_availability_query
    ):
        mock_availability_query.get_available_quantity.side_effect = AvailabilityQueryError(
            "stock of product prod-1", "connection reset"
        )

        report = await checker.check(delivery_document)

        assert report.items[0].error == "connection reset"
        assert report.items[0].status == AvailabilityStatus.UNVERIFIED

    @pytest.mark.asyncio
    async def test_driver_booked_same_day(self, checker, delivery_document, mock_assignment_repository):
        existing = DailyAssignment(
            assignment_date=date(2025, 3, 1), driver_id="drv-1", vehicle_id="veh-7"
        )

        async def find_for_date(day, driver_id=None, vehicle_id=None):
            return [existing] if driver_id == "drv-1" else []

        mock_assignment_repository.find_for_date.side_effect = find_for_date

        report = await checker.check(delivery_document)

        assert report.driver_conflict is True
        assert report.vehicle_conflict is False
        assert report.driver.conflicting_assignment_ids == (str(existing.id),)

    @pytest.mark.asyncio
    async def test_crew_lookup_failure_is_unverified(
        self, checker, delivery_document, mock_assignment_repository
    ):
        mock_assignment_repository.find_for_date.side_effect = RuntimeError("timeout")

        report = await checker.check(delivery_document)

        assert report.driver.status == AvailabilityStatus.UNVERIFIED
        assert report.vehicle.status == AvailabilityStatus.UNVERIFIED
        assert report.items[0].status == AvailabilityStatus.AVAILABLE

    @pytest.mark.asyncio
    async def test_no_crew_selected(self, checker, delivery_document, mock_assignment_repository):
        delivery_document.assignment.driver_id = None
        delivery_document.assignment.vehicle_id = None

        report = await checker.check(delivery_document)

        assert report.driver is None and report.vehicle is None
        mock_assignment_repository.find_for_date.assert_not_called()

    @pytest.mark.asyncio
    async def test_no_date_yields_empty_report(self, checker, mock_availability_query):
        from dispatch_wizard.domain.entities.job_document import JobDocument

        report = await checker.check(JobDocument())

        assert report.items == ()
        mock_availability_query.get_available_quantity.assert_not_called()

    @pytest.mark.asyncio
    async def test_repeated_checks_are_idempotent(self, checker, delivery_document):
        first = await checker.check(delivery_document)
        second = await checker.check(delivery_document)
        assert first == second
