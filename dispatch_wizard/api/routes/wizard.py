"""Wizard session API endpoints."""

from contextlib import contextmanager

from fastapi import APIRouter, HTTPException, Response, status

from dispatch_wizard.api.dependencies import (
    CatalogRepositoryDep,
    CommitOrchestratorDep,
    ManageDraftsDep,
    ReviewAvailabilityDep,
    SessionRegistryDep,
    WizardMachineDep,
)
from dispatch_wizard.api.schemas.common import ErrorResponse
from dispatch_wizard.api.schemas.drafts import DraftSummary
from dispatch_wizard.api.schemas.wizard import (
    AddServiceRequest,
    AvailabilityResponse,
    DocumentPatchRequest,
    GoToStepRequest,
    ModeRequest,
    NavigationResponse,
    OpenSessionRequest,
    PickupPlanPatchRequest,
    SaveDraftRequest,
    SessionResponse,
    UpdateServiceRequest,
)
from dispatch_wizard.config.logging import get_logger
from dispatch_wizard.domain.entities.service_item import ServiceItem
from dispatch_wizard.domain.exceptions.commit_error import CommitStepError
from dispatch_wizard.domain.exceptions.validation_error import ValidationError

logger = get_logger(__name__)
router = APIRouter(
    prefix="/wizard/sessions",
    tags=["wizard"],
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)


@contextmanager
def domain_values():
    """Surface value errors raised while building domain objects as validation errors."""
    try:
        yield
    except ValidationError:
        raise
    except ValueError as e:
        raise ValidationError(str(e)) from e


# Session lifecycle


@router.post("/", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def open_session(request: OpenSessionRequest, registry: SessionRegistryDep):
    machine = registry.open(request.wizard_mode)
    return machine.snapshot()


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session(machine: WizardMachineDep):
    return machine.snapshot()


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def close_session(session_id: str, registry: SessionRegistryDep):
    if not registry.discard(session_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Wizard session {session_id} not found",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Document edits


@router.patch("/{session_id}/document", response_model=SessionResponse)
async def update_document(request: DocumentPatchRequest, machine: WizardMachineDep):
    """Edit document fields; derived values and service schedules are refreshed."""
    with domain_values():
        machine.update_data(**request.to_fields())
    return machine.snapshot()


@router.patch("/{session_id}/pickup-plan", response_model=SessionResponse)
async def update_pickup_plan(request: PickupPlanPatchRequest, machine: WizardMachineDep):
    with domain_values():
        machine.update_pickup_plan(**request.to_fields())
    return machine.snapshot()


@router.post("/{session_id}/customer/clear", response_model=SessionResponse)
async def clear_customer(machine: WizardMachineDep):
    """Clear the customer together with the contact and location picked for it."""
    machine.clear_customer()
    return machine.snapshot()


@router.put("/{session_id}/mode", response_model=SessionResponse)
async def set_mode(request: ModeRequest, machine: WizardMachineDep):
    machine.set_wizard_mode(request.wizard_mode)
    return machine.snapshot()


# Services


@router.post(
    "/{session_id}/services",
    response_model=SessionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_service(
    request: AddServiceRequest, machine: WizardMachineDep, catalog: CatalogRepositoryDep
):
    """Toggle a catalog service on for this job."""
    with domain_values():
        rows = await catalog.query("service_catalog", {"id": request.service_id})
    if not rows:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Service {request.service_id} not found",
        )
    with domain_values():
        machine.add_service(ServiceItem.from_catalog_row(rows[0]))
    return machine.snapshot()


@router.patch("/{session_id}/services/{service_id}", response_model=SessionResponse)
async def update_service(
    service_id: str, request: UpdateServiceRequest, machine: WizardMachineDep
):
    with domain_values():
        machine.update_service(service_id, **request.to_changes())
    return machine.snapshot()


@router.delete("/{session_id}/services/{service_id}", response_model=SessionResponse)
async def remove_service(service_id: str, machine: WizardMachineDep):
    if not machine.remove_service(service_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Service {service_id} is not selected",
        )
    return machine.snapshot()


# Navigation


@router.post("/{session_id}/next", response_model=NavigationResponse)
async def next_step(machine: WizardMachineDep):
    """Validate the current step and advance; errors are returned in the session."""
    moved = machine.next_step()
    return NavigationResponse(moved=moved, session=machine.snapshot())


@router.post("/{session_id}/previous", response_model=NavigationResponse)
async def previous_step(machine: WizardMachineDep):
    moved = machine.previous_step()
    return NavigationResponse(moved=moved, session=machine.snapshot())


@router.post("/{session_id}/goto", response_model=NavigationResponse)
async def go_to_step(request: GoToStepRequest, machine: WizardMachineDep):
    moved = machine.go_to_step(request.step)
    return NavigationResponse(moved=moved, session=machine.snapshot())


@router.post("/{session_id}/reset", response_model=SessionResponse)
async def reset_session(machine: WizardMachineDep):
    machine.reset()
    return machine.snapshot()


# Availability and commit


@router.post("/{session_id}/availability", response_model=AvailabilityResponse)
async def check_availability(machine: WizardMachineDep, use_case: ReviewAvailabilityDep):
    """
    Check inventory, driver and vehicle availability for the document.

    A result is only stored on the session if no newer check was started
    while this one ran; ``applied`` tells which.
    """
    result = await use_case.execute(machine)
    report = result.report
    return AvailabilityResponse(
        generation=result.generation,
        applied=result.applied,
        has_conflicts=report.has_conflicts,
        conflicts=report.conflict_messages(),
        cautions=report.caution_messages(),
        report=report.to_dict(),
    )


@router.post("/{session_id}/submit", status_code=status.HTTP_201_CREATED)
async def submit_session(
    session_id: str,
    machine: WizardMachineDep,
    orchestrator: CommitOrchestratorDep,
    registry: SessionRegistryDep,
):
    """
    Commit the session: jobs, pickups, service line items, daily assignment
    and quote, as the mode requires.

    Records are committed one step at a time. When a later step fails the
    earlier records stay and the response lists them.
    """
    result = await orchestrator.submit(machine)
    if not result.success:
        raise CommitStepError(result.failed_step, result.error, result.committed_ids)
    registry.discard(session_id)
    return result.to_dict()


@router.post(
    "/{session_id}/drafts",
    response_model=DraftSummary,
    status_code=status.HTTP_201_CREATED,
)
async def save_draft(request: SaveDraftRequest, machine: WizardMachineDep, use_case: ManageDraftsDep):
    """Save the session as a named draft; later saves overwrite the same draft."""
    draft = await use_case.save(machine, request.name, request.include_step)
    return DraftSummary.from_entity(draft)
