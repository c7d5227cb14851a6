"""Draft API endpoints."""

from fastapi import APIRouter, Response, status

from dispatch_wizard.api.dependencies import ManageDraftsDep, SessionRegistryDep
from dispatch_wizard.api.schemas.common import ErrorResponse
from dispatch_wizard.api.schemas.drafts import DraftListResponse, DraftSummary
from dispatch_wizard.api.schemas.wizard import SessionResponse

router = APIRouter(prefix="/drafts", tags=["drafts"], responses={404: {"model": ErrorResponse}})


@router.get("/", response_model=DraftListResponse)
async def list_drafts(use_case: ManageDraftsDep):
    """List saved drafts, most recently updated first."""
    drafts = await use_case.list()
    return DraftListResponse(
        drafts=[DraftSummary.from_entity(draft) for draft in drafts], total=len(drafts)
    )


@router.delete("/{draft_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_draft(draft_id: str, use_case: ManageDraftsDep):
    await use_case.delete(draft_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{draft_id}/resume",
    response_model=SessionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def resume_draft(draft_id: str, use_case: ManageDraftsDep, registry: SessionRegistryDep):
    """Open a new wizard session hydrated from a draft."""
    machine = await use_case.resume(draft_id)
    registry.add(machine)
    return machine.snapshot()
