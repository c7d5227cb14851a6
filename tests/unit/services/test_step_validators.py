"""
Unit tests for per-step validators.
"""

from datetime import date

from dispatch_wizard.application.services import step_validators
from dispatch_wizard.domain.entities.job_document import (
    InventoryLineRequest,
    JobDocument,
    PartialPickup,
    PickupPlan,
)
from dispatch_wizard.domain.entities.wizard_session import WizardSession
from dispatch_wizard.domain.value_objects.availability_status import AvailabilityStatus
from dispatch_wizard.domain.value_objects.conflict_report import (
    ConflictReport,
    CrewAvailability,
)
from dispatch_wizard.domain.value_objects.frequency import CustomFrequencyType, Frequency, FrequencySpec
from dispatch_wizard.domain.value_objects.inventory_strategy import InventoryStrategy
from dispatch_wizard.domain.value_objects.job_type import JobType
from dispatch_wizard.domain.value_objects.location_selection import (
    InlineAddress,
    LocationSelection,
)
from dispatch_wizard.domain.value_objects.wizard_mode import WizardMode
from dispatch_wizard.domain.value_objects.wizard_step import WizardStep


def _session(**fields) -> WizardSession:
    return WizardSession(data=JobDocument(**fields))


def _driver_conflict_report() -> ConflictReport:
    return ConflictReport(
        driver=CrewAvailability(
            resource="driver",
            resource_id="drv-1",
            status=AvailabilityStatus.CONFLICT,
            conflicting_assignment_ids=("asg-9",),
        )
    )


class TestCustomerAndScheduleValidators:
    """Test customer and schedule step rules."""

    def test_customer_required(self):
        assert "customer_id" in step_validators.validate_customer(_session())
        assert step_validators.validate_customer(_session(customer_id="c1")) == {}

    def test_job_type_required(self):
        errors = step_validators.validate_schedule(_session())
        assert errors == {"job_type": "Please select a job type"}

    def test_delivery_requires_date_and_duration(self):
        errors = step_validators.validate_schedule(_session(job_type=JobType.DELIVERY))
        assert "scheduled_date" in errors
        assert "rental_duration" in errors

    def test_rental_hours_upper_bound(self):
        session = _session(
            job_type=JobType.DELIVERY,
            scheduled_date=date(2025, 3, 1),
            rental_duration_hours=48,
        )
        assert "rental_duration_hours" in step_validators.validate_schedule(session)

    def test_pickup_job_needs_pickup_date(self):
        session = _session(job_type=JobType.PICKUP)
        errors = step_validators.validate_schedule(session)
        assert "pickup_date" in errors
        assert "scheduled_date" not in errors

    def test_service_end_before_start(self):
        session = _session(
            job_type=JobType.SERVICE,
            scheduled_date=date(2025, 3, 10),
            service_end_date=date(2025, 3, 1),
        )
        assert "service_end_date" in step_validators.validate_schedule(session)

    def test_pickup_job_toggle_needs_a_final_date(self):
        session = _session(
            job_type=JobType.DELIVERY,
            scheduled_date=date(2025, 3, 1),
            rental_duration_days=2,
            pickup_plan=PickupPlan(create_pickup_job=True),
        )
        # return date stands in for the final pickup
        assert step_validators.validate_schedule(session) == {}

    def test_partial_pickup_must_fall_strictly_inside_rental(self):
        plan = PickupPlan(
            create_pickup_job=True,
            create_partial_pickups=True,
            partial_pickups=[
                PartialPickup(date=date(2025, 3, 1)),
                PartialPickup(date=date(2025, 3, 2)),
                PartialPickup(date=date(2025, 3, 4)),
                PartialPickup(date=date(2025, 2, 27)),
                PartialPickup(date=None),
            ],
        )
        session = _session(
            job_type=JobType.DELIVERY,
            scheduled_date=date(2025, 3, 1),
            rental_duration_days=3,
            pickup_plan=plan,
        )

        errors = step_validators.validate_schedule(session)

        assert "partial_pickups.0.date" in errors
        assert "partial_pickups.1.date" not in errors
        assert "partial_pickups.2.date" in errors
        assert "partial_pickups.3.date" in errors
        assert "partial_pickups.4.date" in errors


class TestLocationAndCrewValidators:
    """Test location and crew step rules."""

    def test_location_required(self):
        assert "location" in step_validators.validate_location(_session())

    def test_blank_inline_address_is_unresolved(self):
        session = _session(location_selection=LocationSelection.inline(InlineAddress(address="  ")))
        assert "location" in step_validators.validate_location(session)

    def test_crew_is_optional(self):
        assert step_validators.validate_crew(_session()) == {}

    def test_crew_conflict_blocks_job_mode(self):
        session = _session()
        session.availability = _driver_conflict_report()

        errors = step_validators.validate_crew(session)

        assert "assignment" in errors
        assert errors["assignment.driver_id"] == "The driver is already assigned on this date"

    def test_crew_conflict_does_not_block_quote_mode(self):
        session = _session()
        session.wizard_mode = WizardMode.QUOTE
        session.availability = _driver_conflict_report()
        assert step_validators.validate_crew(session) == {}


class TestInventoryAndServiceValidators:
    """Test inventory and service step rules."""

    def test_delivery_needs_items(self):
        session = _session(job_type=JobType.DELIVERY)
        assert "items" in step_validators.validate_inventory(session)

    def test_zero_quantity_rejected(self):
        session = _session(
            job_type=JobType.DELIVERY,
            items=[InventoryLineRequest(product_id="p1", quantity=0)],
        )
        assert "items.0.quantity" in step_validators.validate_inventory(session)

    def test_pickup_items_must_be_delivered_items(self):
        session = _session(
            job_type=JobType.DELIVERY,
            items=[InventoryLineRequest(product_id="p1", quantity=2)],
            pickup_plan=PickupPlan(
                create_pickup_job=True,
                main_pickup_items=[
                    InventoryLineRequest(product_id="p1", quantity=1),
                    InventoryLineRequest(product_id="p2", quantity=1),
                ],
            ),
        )
        errors = step_validators.validate_inventory(session)
        assert list(errors) == ["main_pickup_items.1.product_id"]

    def test_specific_units_within_quantity(self):
        session = _session(
            job_type=JobType.DELIVERY,
            items=[
                InventoryLineRequest(
                    product_id="p1",
                    quantity=2,
                    strategy=InventoryStrategy.SPECIFIC,
                    specific_item_ids=["u1", "u2"],
                )
            ],
        )
        assert step_validators.validate_inventory(session) == {}

    def test_service_job_needs_a_service(self):
        session = _session(job_type=JobType.SERVICE)
        assert "services" in step_validators.validate_services(session)

    def test_incomplete_frequency_reported(self, sample_service):
        sample_service.frequency = FrequencySpec(
            frequency=Frequency.CUSTOM, custom_type=CustomFrequencyType.DAYS_OF_WEEK
        )
        session = _session(job_type=JobType.DELIVERY, services=[sample_service])

        errors = step_validators.validate_services(session)

        assert errors == {"services.svc-clean.frequency": "Select at least one day of the week"}


class TestFinalValidator:
    """Test the review and quote preview gate."""

    def test_conflicts_block_job_submit(self):
        session = _session()
        session.availability = _driver_conflict_report()
        assert "availability" in step_validators.validate_final(session)

    def test_conflicts_allowed_for_quotes(self):
        session = _session()
        session.wizard_mode = WizardMode.QUOTE
        session.availability = _driver_conflict_report()
        assert step_validators.validate_final(session) == {}

    def test_validate_steps_merges_errors(self):
        errors = step_validators.validate_steps(
            _session(), [WizardStep.CUSTOMER, WizardStep.LOCATION]
        )
        assert set(errors) == {"customer_id", "location"}
