"""
Wizard state machine: step navigation, validation and document edits
for one wizard session.
"""

import re
from typing import Any, Dict, List, Optional

from dispatch_wizard.application.services import step_graph
from dispatch_wizard.application.services.service_pricing import ServicePricingService
from dispatch_wizard.application.services.step_validators import (
    VALIDATORS,
    Errors,
    validate_steps,
)
from dispatch_wizard.config.logging import get_logger
from dispatch_wizard.domain.entities.draft import Draft
from dispatch_wizard.domain.entities.job_document import (
    JobDocument,
    PickupPlan,
    resolve_zone,
)
from dispatch_wizard.domain.entities.service_item import ServiceItem
from dispatch_wizard.domain.entities.wizard_session import WizardSession
from dispatch_wizard.domain.exceptions.validation_error import (
    InvalidFormatError,
    MutuallyExclusiveFieldsError,
    ValidationError,
)
from dispatch_wizard.domain.value_objects.conflict_report import ConflictReport
from dispatch_wizard.domain.value_objects.job_type import JobType
from dispatch_wizard.domain.value_objects.wizard_mode import WizardMode
from dispatch_wizard.domain.value_objects.wizard_step import WizardStep

logger = get_logger(__name__)

# Fields whose change makes a previous availability report stale.
AVAILABILITY_FIELDS = {
    "job_type",
    "scheduled_date",
    "rental_duration_days",
    "rental_duration_hours",
    "timezone",
    "assignment",
    "items",
    "pickup_plan",
}

# Fields whose change moves the service window.
SCHEDULE_FIELDS = {
    "job_type",
    "scheduled_date",
    "scheduled_time",
    "timezone",
    "rental_duration_days",
    "rental_duration_hours",
    "service_end_date",
    "pickup_plan",
}

_DERIVED_FIELDS = {"return_date", "return_time"}

_CLOCK_TIME = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class WizardStateMachine:
    """Drives one wizard session through its job-type dependent step path."""

    def __init__(
        self,
        session: Optional[WizardSession] = None,
        pricing: Optional[ServicePricingService] = None,
    ):
        self.session = session or WizardSession()
        self.pricing = pricing or ServicePricingService()

    @classmethod
    def from_draft(
        cls, draft: Draft, pricing: Optional[ServicePricingService] = None
    ) -> "WizardStateMachine":
        """Hydrate a fresh session from a saved draft."""
        session = WizardSession(
            data=JobDocument.from_dict(draft.job_data),
            wizard_mode=draft.wizard_mode,
            draft_id=draft.id,
        )
        machine = cls(session, pricing)
        machine.recalculate_services()

        path = machine.step_numbers
        step = draft.current_step if draft.current_step in path else 1
        session.current_step = step
        session.highest_step_reached = step
        logger.info(
            "Wizard session resumed from draft",
            session_id=str(session.id),
            draft_id=draft.id,
            step=step,
        )
        return machine

    # Step path

    @property
    def document(self) -> JobDocument:
        return self.session.data

    @property
    def steps(self) -> List[tuple]:
        return step_graph.step_for(self.document.job_type, self.session.wizard_mode)

    @property
    def step_numbers(self) -> List[int]:
        return [number for number, _ in self.steps]

    @property
    def current_step(self) -> int:
        return self.session.current_step

    @property
    def current_step_kind(self) -> WizardStep:
        return step_graph.step_kind(
            self.document.job_type, self.session.current_step, self.session.wizard_mode
        )

    @property
    def is_on_final_step(self) -> bool:
        return self.current_step_kind.is_final()

    # Navigation

    def validate_current_step(self) -> Errors:
        """Run the current step's validator and store its errors."""
        errors = VALIDATORS[self.current_step_kind](self.session)
        self.session.errors = errors
        return errors

    def next_step(self) -> bool:
        """Advance when the current step is valid; otherwise keep errors and stay."""
        errors = self.validate_current_step()
        if errors:
            logger.info(
                "Step validation failed",
                session_id=str(self.session.id),
                step=self.current_step,
                fields=sorted(errors),
            )
            return False

        following = step_graph.next_step_number(self.document.job_type, self.current_step)
        if following is None:
            return False

        self.session.current_step = following
        self.session.highest_step_reached = max(self.session.highest_step_reached, following)
        logger.debug("Advanced wizard step", session_id=str(self.session.id), step=following)
        return True

    def previous_step(self) -> bool:
        """Go back one step without re-validating."""
        self.session.errors = {}
        earlier = step_graph.previous_step_number(self.document.job_type, self.current_step)
        if earlier is not None:
            self.session.current_step = earlier
        return True

    def go_to_step(self, step: int) -> bool:
        """Jump to a step already reached on the current path."""
        if step not in self.step_numbers or step > self.session.highest_step_reached:
            logger.debug(
                "Rejected step jump",
                session_id=str(self.session.id),
                step=step,
                highest_step_reached=self.session.highest_step_reached,
            )
            return False
        self.session.errors = {}
        self.session.current_step = step
        return True

    def validate_for_submit(self) -> Errors:
        """Validate every step on the path, as required before committing."""
        kinds = [kind for _, kind in self.steps]
        errors = validate_steps(self.session, kinds)
        self.session.errors = errors
        return errors

    def set_wizard_mode(self, mode: WizardMode) -> None:
        self.session.wizard_mode = WizardMode(mode)
        logger.info("Wizard mode changed", session_id=str(self.session.id), mode=self.session.wizard_mode.value)

    def reset(self) -> None:
        """Return to step 1 with an empty document in the same timezone."""
        self.session.data = JobDocument(timezone=self.document.timezone)
        self.session.current_step = 1
        self.session.highest_step_reached = 1
        self.session.errors = {}
        self._invalidate_availability()
        logger.info("Wizard session reset", session_id=str(self.session.id))

    # Document edits

    def update_data(self, **fields: Any) -> JobDocument:
        """
        Apply field edits to the document and refresh derived values.

        Raises:
            ValidationError: for unknown or derived fields
            MutuallyExclusiveFieldsError: when rental days and hours are both given
            InvalidFormatError: for an unknown job type or timezone, or a malformed
                time; nothing is written in that case
        """
        doc = self.document
        unknown = [
            name for name in fields if name in _DERIVED_FIELDS or not hasattr(doc, name)
        ]
        if unknown:
            raise ValidationError(
                f"Cannot update fields: {', '.join(sorted(unknown))}",
                {name: "Field cannot be edited" for name in unknown},
            )
        if fields.get("rental_duration_days") and fields.get("rental_duration_hours"):
            raise MutuallyExclusiveFieldsError(
                "rental_duration_days", "rental_duration_hours", "rental_duration"
            )
        if "timezone" in fields:
            try:
                resolve_zone(fields["timezone"])
            except ValueError as e:
                raise InvalidFormatError("timezone", "an IANA timezone name") from e
        if fields.get("scheduled_time") and not _CLOCK_TIME.match(fields["scheduled_time"]):
            raise InvalidFormatError("scheduled_time", "HH:MM")
        if fields.get("job_type"):
            try:
                fields["job_type"] = JobType(fields["job_type"])
            except ValueError as e:
                expected = "one of " + ", ".join(job_type.value for job_type in JobType)
                raise InvalidFormatError("job_type", expected) from e

        try:
            for name, value in fields.items():
                if name == "rental_duration_days":
                    doc.set_rental_duration_days(value)
                elif name == "rental_duration_hours":
                    doc.set_rental_duration_hours(value)
                elif name == "job_type":
                    doc.job_type = value or None
                else:
                    setattr(doc, name, value)
                self.session.errors.pop(name, None)
        finally:
            # Derived values follow whatever was written, even on a failed edit.
            doc.recompute_return_date()
            if SCHEDULE_FIELDS.intersection(fields):
                self.recalculate_services()
            if "job_type" in fields:
                self._realign_step()
            if AVAILABILITY_FIELDS.intersection(fields):
                self._invalidate_availability()
        return doc

    def update_pickup_plan(self, **fields: Any) -> PickupPlan:
        """Edit the pickup plan; turning partial pickups off discards them."""
        plan = self.document.pickup_plan
        if fields.get("create_partial_pickups") is False:
            plan.disable_partial_pickups()
            fields.pop("create_partial_pickups")
        try:
            updated = PickupPlan(**{**plan.__dict__, **fields})
        except (TypeError, ValueError) as e:
            raise ValidationError(str(e), {"pickup_plan": str(e)}) from e
        self.update_data(pickup_plan=updated)
        return updated

    def clear_customer(self) -> None:
        self.document.clear_customer()

    # Services

    def add_service(self, service: ServiceItem) -> ServiceItem:
        """Toggle a catalog service on."""
        if self.document.find_service(service.id):
            raise ValidationError(
                f"Service {service.id} is already selected",
                {f"services.{service.id}": "Service already selected"},
            )
        self.document.services.append(service)
        return self.pricing.recalculate(service, self.document.service_window)

    def remove_service(self, service_id: str) -> bool:
        """Toggle a service off."""
        service = self.document.find_service(service_id)
        if service is None:
            return False
        self.document.services.remove(service)
        return True

    def update_service(self, service_id: str, **changes: Any) -> ServiceItem:
        """Edit a selected service's frequency, visit flags or price override."""
        service = self.document.find_service(service_id)
        if service is None:
            raise ValidationError(
                f"Service {service_id} is not selected",
                {f"services.{service_id}": "Service not selected"},
            )
        allowed = {"frequency", "include_dropoff_service", "include_pickup_service", "price_override"}
        unknown = set(changes) - allowed
        if unknown:
            raise ValidationError(
                f"Cannot update service fields: {', '.join(sorted(unknown))}",
                {name: "Field cannot be edited" for name in unknown},
            )
        for name, value in changes.items():
            setattr(service, name, value)
        self.session.errors.pop(f"services.{service_id}.frequency", None)
        return self.pricing.recalculate(service, self.document.service_window)

    def recalculate_services(self) -> None:
        window = self.document.service_window
        for service in self.document.services:
            self.pricing.recalculate(service, window)

    # Availability

    def begin_availability_check(self) -> int:
        """Issue a new check generation; older in-flight results become stale."""
        self.session.availability_generation += 1
        return self.session.availability_generation

    def apply_availability(self, report: ConflictReport, generation: int) -> bool:
        """Store a check result only if it belongs to the latest generation."""
        if generation != self.session.availability_generation:
            logger.info(
                "Discarded superseded availability result",
                session_id=str(self.session.id),
                generation=generation,
                latest_generation=self.session.availability_generation,
            )
            return False
        self.session.availability = report
        return True

    def _invalidate_availability(self) -> None:
        self.session.availability = None
        self.session.availability_generation += 1

    def _realign_step(self) -> None:
        path = self.step_numbers
        if self.session.current_step not in path:
            earlier = [number for number in path if number < self.session.current_step]
            self.session.current_step = earlier[-1] if earlier else 1
        reached = [number for number in path if number <= self.session.highest_step_reached]
        self.session.highest_step_reached = max(reached[-1], self.session.current_step)

    def snapshot(self) -> Dict[str, Any]:
        """Serializable view of the session for drafts and API responses."""
        return {
            "session_id": str(self.session.id),
            "wizard_mode": self.session.wizard_mode.value,
            "current_step": self.session.current_step,
            "current_step_kind": self.current_step_kind.value,
            "highest_step_reached": self.session.highest_step_reached,
            "steps": [{"number": number, "kind": kind.value} for number, kind in self.steps],
            "errors": dict(self.session.errors),
            "has_conflicts": self.session.has_conflicts,
            "availability": self.session.availability.to_dict()
            if self.session.availability
            else None,
            "data": self.document.to_dict(),
        }
