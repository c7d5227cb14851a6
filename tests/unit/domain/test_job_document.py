"""
Unit tests for the job document and related entities.
"""

from datetime import date

import pytest

from dispatch_wizard.domain.entities.draft import Draft
from dispatch_wizard.domain.entities.job import Job
from dispatch_wizard.domain.entities.job_document import (
    InventoryLineRequest,
    JobDocument,
    PartialPickup,
    PickupPlan,
)
from dispatch_wizard.domain.entities.quote import Quote, QuoteItem
from dispatch_wizard.domain.value_objects.date_window import DateWindow
from dispatch_wizard.domain.value_objects.inventory_strategy import InventoryStrategy
from dispatch_wizard.domain.value_objects.job_type import JobType
from dispatch_wizard.domain.value_objects.quote_status import QuoteStatus
from dispatch_wizard.domain.value_objects.wizard_mode import WizardMode


class TestReturnDate:
    """Return date derivation for deliveries."""

    def test_day_duration_adds_calendar_days(self):
        doc = JobDocument(
            job_type=JobType.DELIVERY,
            scheduled_date=date(2025, 3, 1),
            rental_duration_days=3,
        )
        assert doc.return_date == date(2025, 3, 4)

    def test_hour_duration_crossing_midnight(self):
        doc = JobDocument(
            job_type=JobType.DELIVERY,
            scheduled_date=date(2025, 6, 10),
            scheduled_time="20:00",
            rental_duration_hours=6,
        )
        assert doc.return_date == date(2025, 6, 11)
        assert doc.return_time == "02:00"

    def test_hour_duration_is_elapsed_time_across_dst(self):
        # Clocks go forward at 02:00 on 2025-03-09 in New York.
        doc = JobDocument(
            job_type=JobType.DELIVERY,
            scheduled_date=date(2025, 3, 8),
            scheduled_time="22:00",
            timezone="America/New_York",
            rental_duration_hours=5,
        )
        assert doc.return_date == date(2025, 3, 9)
        assert doc.return_time == "04:00"

    def test_non_delivery_has_no_return_date(self):
        doc = JobDocument(
            job_type=JobType.SERVICE,
            scheduled_date=date(2025, 3, 1),
        )
        assert doc.return_date is None

    def test_days_and_hours_are_mutually_exclusive(self):
        with pytest.raises(ValueError):
            JobDocument(
                job_type=JobType.DELIVERY,
                scheduled_date=date(2025, 3, 1),
                rental_duration_days=2,
                rental_duration_hours=4,
            )

    def test_setting_hours_clears_days(self):
        doc = JobDocument(
            job_type=JobType.DELIVERY,
            scheduled_date=date(2025, 3, 1),
            rental_duration_days=2,
        )
        doc.set_rental_duration_hours(4)
        assert doc.rental_duration_days is None
        assert doc.return_date == date(2025, 3, 1)
        assert doc.return_time == "04:00"

    def test_unknown_timezone_rejected(self):
        with pytest.raises(ValueError):
            JobDocument(timezone="Mars/Olympus_Mons")


class TestWindows:
    """Reservation and service windows."""

    def test_delivery_reservation_window_spans_rental(self):
        doc = JobDocument(
            job_type=JobType.DELIVERY,
            scheduled_date=date(2025, 3, 1),
            rental_duration_days=3,
        )
        assert doc.reservation_window == DateWindow(date(2025, 3, 1), date(2025, 3, 4))
        assert doc.service_window == DateWindow(date(2025, 3, 1), date(2025, 3, 4))

    def test_pickup_job_is_dated_by_pickup_date(self):
        doc = JobDocument(
            job_type=JobType.PICKUP,
            scheduled_date=date(2025, 3, 1),
            pickup_plan=PickupPlan(pickup_date=date(2025, 3, 7)),
        )
        assert doc.primary_date == date(2025, 3, 7)
        assert doc.reservation_window == DateWindow.single_day(date(2025, 3, 7))

    def test_service_window_uses_service_end_date(self):
        doc = JobDocument(
            job_type=JobType.SERVICE,
            scheduled_date=date(2025, 3, 3),
            service_end_date=date(2025, 3, 17),
        )
        assert doc.service_window == DateWindow(date(2025, 3, 3), date(2025, 3, 17))

    def test_no_date_no_window(self):
        assert JobDocument(job_type=JobType.DELIVERY).reservation_window is None


class TestInventoryAndPickups:
    """Inventory lines and pickup plans."""

    def test_specific_ids_require_specific_strategy(self):
        with pytest.raises(ValueError):
            InventoryLineRequest(product_id="prod-1", quantity=2, specific_item_ids=["u-1"])

    def test_more_units_than_quantity_rejected(self):
        with pytest.raises(ValueError):
            InventoryLineRequest(
                product_id="prod-1",
                quantity=1,
                strategy=InventoryStrategy.SPECIFIC,
                specific_item_ids=["u-1", "u-2"],
            )

    def test_partial_pickups_require_toggle(self):
        with pytest.raises(ValueError):
            PickupPlan(partial_pickups=[PartialPickup(date=date(2025, 3, 2))])

    def test_disable_partial_pickups_discards_entries(self):
        plan = PickupPlan(
            create_partial_pickups=True,
            partial_pickups=[PartialPickup(date=date(2025, 3, 2))],
        )
        plan.disable_partial_pickups()
        assert plan.create_partial_pickups is False
        assert plan.partial_pickups == []

    def test_clear_customer_clears_contact(self):
        doc = JobDocument(customer_id="cust-1", contact_id="contact-1")
        doc.clear_customer()
        assert doc.customer_id is None
        assert doc.contact_id is None


class TestSnapshot:
    """Document and draft serialization."""

    def test_document_snapshot_restores_derived_fields(self, delivery_document, sample_service):
        delivery_document.services.append(sample_service)
        delivery_document.pickup_plan = PickupPlan(
            create_pickup_job=True,
            create_partial_pickups=True,
            partial_pickups=[PartialPickup(date=date(2025, 3, 2), notes="half")],
        )

        restored = JobDocument.from_dict(delivery_document.to_dict())

        assert restored.return_date == date(2025, 3, 4)
        assert restored.location_selection == delivery_document.location_selection
        assert restored.assignment == delivery_document.assignment
        assert restored.pickup_plan.partial_pickups[0].notes == "half"
        assert restored.find_service("svc-clean") is not None

    def test_draft_requires_name(self):
        with pytest.raises(ValueError):
            Draft(name=" ", job_data={})

    def test_draft_dict_round_trip(self):
        draft = Draft(name="Smith delivery", job_data={"customer_id": "c"}, wizard_mode=WizardMode.QUOTE, current_step=3)
        restored = Draft.from_dict(draft.to_dict())
        assert restored.id == draft.id
        assert restored.wizard_mode == WizardMode.QUOTE
        assert restored.current_step == 3
        assert restored.updated_at == draft.updated_at


class TestJobAndQuote:
    """Job and quote entities."""

    def test_job_return_before_schedule_rejected(self):
        with pytest.raises(ValueError):
            Job(
                customer_id="cust-1",
                job_type=JobType.DELIVERY,
                scheduled_date=date(2025, 3, 4),
                return_date=date(2025, 3, 1),
            )

    def test_job_with_parent_is_derived(self):
        parent = Job(customer_id="cust-1", job_type="delivery", scheduled_date=date(2025, 3, 1))
        child = Job(
            customer_id="cust-1",
            job_type=JobType.PICKUP,
            scheduled_date=date(2025, 3, 4),
            parent_job_id=parent.id,
        )
        assert parent.job_type == JobType.DELIVERY
        assert child.is_derived is True
        assert parent.is_derived is False

    def test_quote_totals(self):
        quote = Quote(
            customer_id="cust-1",
            items=[
                QuoteItem(line_item_type="product", name="Chair", quantity=10, unit_price="2.50"),
                QuoteItem(line_item_type="service", name="Cleaning", quantity=5, unit_price="50"),
            ],
        )
        assert str(quote.subtotal) == "275.00"
        assert quote.total_amount == quote.subtotal

    def test_quote_sent_timestamp(self):
        quote = Quote(customer_id="cust-1")
        quote.mark_status(QuoteStatus.SENT)
        assert quote.sent_at is not None

    def test_unknown_quote_line_type_rejected(self):
        with pytest.raises(ValueError):
            QuoteItem(line_item_type="fee", name="x", quantity=1, unit_price=1)
