"""Review availability use case."""

from dataclasses import dataclass

from dispatch_wizard.application.services.availability_checker import AvailabilityChecker
from dispatch_wizard.application.services.wizard_state_machine import WizardStateMachine
from dispatch_wizard.config.logging import get_logger
from dispatch_wizard.domain.value_objects.conflict_report import ConflictReport
from dispatch_wizard.infrastructure.monitoring.metrics import record_superseded_availability

logger = get_logger(__name__)


@dataclass
class AvailabilityReviewResult:
    """Result of one availability check run for a session."""

    report: ConflictReport
    generation: int
    applied: bool


class ReviewAvailabilityUseCase:
    """Runs an availability check and applies it if no newer check was issued."""

    def __init__(self, checker: AvailabilityChecker):
        self.checker = checker

    async def execute(self, machine: WizardStateMachine) -> AvailabilityReviewResult:
        generation = machine.begin_availability_check()
        logger.debug(
            "Availability check issued",
            session_id=str(machine.session.id),
            generation=generation,
        )

        report = await self.checker.check(machine.document)

        applied = machine.apply_availability(report, generation)
        if not applied:
            record_superseded_availability()
        return AvailabilityReviewResult(report=report, generation=generation, applied=applied)
