"""Submit wizard use case: the multi-entity commit orchestrator."""

import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from dispatch_wizard.application.interfaces.repositories import (
    DailyAssignmentRepositoryInterface,
    JobLineItemRepositoryInterface,
    JobRepositoryInterface,
    QuoteRepositoryInterface,
)
from dispatch_wizard.application.services.availability_checker import AvailabilityChecker
from dispatch_wizard.application.services.commit_saga import (
    CommitSaga,
    SagaContext,
    SagaStep,
)
from dispatch_wizard.application.services.job_numbering import JobNumberingService
from dispatch_wizard.application.services.quote_builder import QuoteBuilder
from dispatch_wizard.application.services.wizard_state_machine import WizardStateMachine
from dispatch_wizard.config.logging import get_logger
from dispatch_wizard.domain.entities.daily_assignment import DailyAssignment
from dispatch_wizard.domain.entities.job import Job
from dispatch_wizard.domain.entities.job_document import JobDocument, PartialPickup
from dispatch_wizard.domain.entities.service_line_item import ServiceLineItem
from dispatch_wizard.domain.exceptions.commit_error import SubmissionBlockedError
from dispatch_wizard.domain.value_objects.job_type import JobType
from dispatch_wizard.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)
from dispatch_wizard.infrastructure.monitoring.metrics import (
    observe_commit_duration,
    record_commit_step_failure,
    record_job_creation,
    record_submission,
)

logger = get_logger(__name__)

STEP_PRIMARY_JOB = "primary job"
STEP_PICKUP_JOB = "pickup job"
STEP_PARTIAL_PICKUPS = "partial pickup jobs"
STEP_SERVICE_ITEMS = "service line items"
STEP_DAILY_ASSIGNMENT = "daily assignment"
STEP_QUOTE = "quote"


@dataclass
class CreationResult:
    """
    Outcome of a wizard commit.

    There is no atomic multi-entity transaction: when ``failed_step`` is
    set, everything listed in ``committed_ids`` was kept and
    ``rolled_back`` is False.
    """

    success: bool
    jobs_created: int
    committed_ids: Dict[str, List[str]] = field(default_factory=dict)
    completed_steps: List[str] = field(default_factory=list)
    failed_step: Optional[str] = None
    error: Optional[str] = None
    rolled_back: bool = False
    primary_job_id: Optional[str] = None
    quote_id: Optional[str] = None
    skipped_partial_pickups: List[str] = field(default_factory=list)

    @property
    def job_ids(self) -> List[str]:
        return list(self.committed_ids.get("jobs", []))

    @property
    def summary(self) -> str:
        noun = "job" if self.jobs_created == 1 else "jobs"
        parts = [f"{self.jobs_created} {noun} created"]
        if self.quote_id:
            parts.append("quote created")
        if self.skipped_partial_pickups:
            parts.append(f"{len(self.skipped_partial_pickups)} partial pickup(s) skipped")
        if self.failed_step:
            parts.append(f"{self.failed_step} failed")
        return ", ".join(parts)

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "summary": self.summary,
            "jobs_created": self.jobs_created,
            "job_ids": self.job_ids,
            "primary_job_id": self.primary_job_id,
            "quote_id": self.quote_id,
            "committed_ids": self.committed_ids,
            "completed_steps": self.completed_steps,
            "failed_step": self.failed_step,
            "error": self.error,
            "rolled_back": self.rolled_back,
            "skipped_partial_pickups": self.skipped_partial_pickups,
        }


class CommitOrchestrator:
    """Creates every record a validated wizard session describes."""

    def __init__(
        self,
        job_repo: JobRepositoryInterface,
        line_item_repo: JobLineItemRepositoryInterface,
        assignment_repo: DailyAssignmentRepositoryInterface,
        quote_repo: QuoteRepositoryInterface,
        numbering: JobNumberingService,
        quote_builder: QuoteBuilder,
        transaction_service: TransactionService,
        availability_checker: AvailabilityChecker,
    ):
        self.job_repo = job_repo
        self.line_item_repo = line_item_repo
        self.assignment_repo = assignment_repo
        self.quote_repo = quote_repo
        self.numbering = numbering
        self.quote_builder = quote_builder
        self.transaction_service = transaction_service
        self.availability_checker = availability_checker

    async def submit(self, machine: WizardStateMachine) -> CreationResult:
        """
        Validate the whole session and run the ordered commit.

        When the mode creates jobs, availability is checked again against
        the document as it is now, so an edit made after the last check
        cannot slip a conflict through. Unverified checks do not block.

        Raises:
            SubmissionBlockedError: if any step on the path has errors or
                unresolved conflicts
        """
        session = machine.session
        mode = session.wizard_mode
        if mode.creates_jobs():
            await self._refresh_availability(machine)
        errors = machine.validate_for_submit()
        if mode.creates_jobs() and session.availability is None:
            errors["availability"] = "Availability changed during submission, check again"
        if errors:
            record_submission(mode.value, "blocked")
            raise SubmissionBlockedError(errors)

        document = machine.document
        steps = self._plan(document, mode.creates_jobs(), mode.creates_quote())

        logger.info(
            "Starting wizard commit",
            session_id=str(session.id),
            mode=mode.value,
            job_type=document.job_type.value if document.job_type else None,
            steps=[step.name for step in steps],
        )

        context = SagaContext(values={"document": document})
        saga = CommitSaga(
            commit=self.transaction_service.commit,
            rollback=self.transaction_service.rollback,
        )
        started = time.perf_counter()
        outcome = await saga.run(steps, context)
        observe_commit_duration(mode.value, time.perf_counter() - started)

        primary_job = context.values.get("primary_job")
        quote = context.values.get("quote")
        jobs_created = len(outcome.committed_ids.get("jobs", []))
        result = CreationResult(
            success=outcome.succeeded,
            jobs_created=jobs_created,
            committed_ids=outcome.committed_ids,
            completed_steps=outcome.completed_steps,
            failed_step=outcome.failed_step,
            error=outcome.error,
            rolled_back=outcome.rolled_back,
            primary_job_id=str(primary_job.id) if primary_job and jobs_created else None,
            quote_id=str(quote.id) if quote and outcome.committed_ids.get("quotes") else None,
            skipped_partial_pickups=list(context.values.get("skipped_partial_pickups", [])),
        )

        if result.success:
            record_submission(mode.value, "success")
            logger.info(
                "Wizard commit completed",
                session_id=str(session.id),
                jobs_created=jobs_created,
                quote_id=result.quote_id,
                skipped_partial_pickups=result.skipped_partial_pickups,
            )
            machine.reset()
        else:
            record_submission(mode.value, "partial_failure" if jobs_created else "failed")
            record_commit_step_failure(result.failed_step)
            logger.error(
                "Wizard commit failed part way",
                session_id=str(session.id),
                summary=result.summary,
                failed_step=result.failed_step,
                committed_ids=result.committed_ids,
                rolled_back=result.rolled_back,
            )
        return result

    async def _refresh_availability(self, machine: WizardStateMachine) -> None:
        generation = machine.begin_availability_check()
        report = await self.availability_checker.check(machine.document)
        if machine.apply_availability(report, generation):
            logger.debug(
                "Availability rechecked before commit",
                session_id=str(machine.session.id),
                has_conflicts=report.has_conflicts,
                unverified=report.unverified_checks(),
            )

    def _plan(self, document: JobDocument, create_jobs: bool, create_quote: bool) -> List[SagaStep]:
        steps: List[SagaStep] = []
        plan = document.pickup_plan
        has_pickups = bool(document.job_type and document.job_type.supports_pickup_plan())

        if create_jobs:
            steps.append(SagaStep(STEP_PRIMARY_JOB, self._create_primary_job))
            if has_pickups and plan.create_pickup_job:
                steps.append(SagaStep(STEP_PICKUP_JOB, self._create_pickup_job))
            if has_pickups and plan.create_partial_pickups and plan.partial_pickups:
                steps.append(SagaStep(STEP_PARTIAL_PICKUPS, self._create_partial_pickups))
            if document.has_services:
                steps.append(SagaStep(STEP_SERVICE_ITEMS, self._create_service_items))
            if document.create_daily_assignment and document.assignment.is_complete:
                steps.append(SagaStep(STEP_DAILY_ASSIGNMENT, self._create_daily_assignment))
        if create_quote:
            steps.append(SagaStep(STEP_QUOTE, self._create_quote))
        return steps

    async def _create_job(self, context: SagaContext, job: Job) -> Job:
        job.job_number = await self.numbering.next_job_number(job.job_type)
        created = await self.job_repo.create(job)
        context.record("jobs", created.id)
        record_job_creation(created.job_type.value)
        logger.debug(
            "Created job",
            job_id=str(created.id),
            job_number=created.job_number,
            job_type=created.job_type.value,
        )
        return created

    async def _create_primary_job(self, context: SagaContext) -> None:
        doc: JobDocument = context.values["document"]
        job = Job(
            customer_id=doc.customer_id,
            contact_id=doc.contact_id,
            job_type=doc.job_type,
            scheduled_date=doc.primary_date,
            scheduled_time=doc.primary_time,
            timezone=doc.timezone,
            return_date=doc.return_date,
            driver_id=doc.assignment.driver_id,
            vehicle_id=doc.assignment.vehicle_id,
            location=doc.location_selection,
            items=list(doc.items),
            notes=doc.notes,
            special_instructions=doc.special_instructions,
            is_priority=doc.is_priority,
            is_service_job=doc.job_type == JobType.SERVICE,
            total_price=doc.services_subtotal if doc.services else None,
        )
        context.values["primary_job"] = await self._create_job(context, job)

    async def _create_pickup_job(self, context: SagaContext) -> None:
        doc: JobDocument = context.values["document"]
        primary: Job = context.values["primary_job"]
        plan = doc.pickup_plan
        job = Job(
            customer_id=doc.customer_id,
            contact_id=doc.contact_id,
            job_type=JobType.PICKUP,
            scheduled_date=doc.final_pickup_date,
            scheduled_time=doc.return_time or plan.pickup_time,
            timezone=doc.timezone,
            driver_id=plan.pickup_driver_id,
            vehicle_id=plan.pickup_vehicle_id,
            location=doc.location_selection,
            items=list(plan.main_pickup_items or doc.items),
            notes=plan.pickup_notes,
            is_priority=plan.pickup_is_priority,
            parent_job_id=primary.id,
        )
        context.values["pickup_job"] = await self._create_job(context, job)

    async def _create_partial_pickups(self, context: SagaContext) -> None:
        doc: JobDocument = context.values["document"]
        primary: Job = context.values["primary_job"]
        final_pickup = doc.final_pickup_date
        for index, partial in enumerate(doc.pickup_plan.partial_pickups, start=1):
            if not self._within_rental(partial, doc.primary_date, final_pickup):
                logger.warning(
                    "Skipping partial pickup outside the rental window",
                    partial_pickup_id=partial.id,
                    date=partial.date.isoformat() if partial.date else None,
                )
                context.values.setdefault("skipped_partial_pickups", []).append(partial.id)
                continue
            label = partial.notes or f"#{index}"
            job = Job(
                customer_id=doc.customer_id,
                contact_id=doc.contact_id,
                job_type=JobType.PICKUP,
                scheduled_date=partial.date,
                scheduled_time=partial.time,
                timezone=doc.timezone,
                driver_id=partial.driver_id,
                vehicle_id=partial.vehicle_id,
                location=doc.location_selection,
                items=list(partial.items or doc.items),
                notes=f"PARTIAL PICKUP: {label}",
                is_priority=partial.is_priority,
                parent_job_id=primary.id,
            )
            await self._create_job(context, job)

    @staticmethod
    def _within_rental(partial: PartialPickup, start, final_pickup) -> bool:
        if partial.date is None or start is None:
            return False
        if final_pickup is None:
            return partial.date > start
        return start < partial.date < final_pickup

    async def _create_service_items(self, context: SagaContext) -> None:
        doc: JobDocument = context.values["document"]
        primary: Job = context.values["primary_job"]
        for service in doc.services:
            line_item = ServiceLineItem.from_service(primary.id, service)
            created = await self.line_item_repo.create(line_item)
            context.record("service_line_items", created.id)

    async def _create_daily_assignment(self, context: SagaContext) -> None:
        doc: JobDocument = context.values["document"]
        primary: Job = context.values["primary_job"]
        driver_id = doc.assignment.driver_id
        vehicle_id = doc.assignment.vehicle_id

        existing = await self.assignment_repo.find_for_date(
            primary.scheduled_date, driver_id=driver_id, vehicle_id=vehicle_id
        )
        if any(record.matches(driver_id, vehicle_id) for record in existing):
            logger.info(
                "Daily assignment already exists",
                assignment_date=primary.scheduled_date.isoformat(),
                driver_id=driver_id,
                vehicle_id=vehicle_id,
            )
            return

        assignment = DailyAssignment(
            assignment_date=primary.scheduled_date,
            driver_id=driver_id,
            vehicle_id=vehicle_id,
            job_id=primary.id,
            notes=f"Created with job {primary.job_number}",
        )
        created = await self.assignment_repo.create(assignment)
        context.record("daily_assignments", created.id)

    async def _create_quote(self, context: SagaContext) -> None:
        doc: JobDocument = context.values["document"]
        quote = await self.quote_builder.build(doc)
        quote.quote_number = await self.numbering.next_quote_number()
        primary: Optional[Job] = context.values.get("primary_job")
        if primary is not None:
            quote.link_job(primary.id)
        created = await self.quote_repo.create(quote)
        context.values["quote"] = created
        context.record("quotes", created.id)
