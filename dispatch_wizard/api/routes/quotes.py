"""Quote delivery API endpoints."""

from uuid import UUID

from fastapi import APIRouter

from dispatch_wizard.api.dependencies import SendQuoteDep
from dispatch_wizard.api.schemas.common import ErrorResponse
from dispatch_wizard.api.schemas.wizard import SendQuoteRequest, SendQuoteResponse

router = APIRouter(
    prefix="/quotes",
    tags=["quotes"],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)


@router.post("/{quote_id}/send", response_model=SendQuoteResponse)
async def send_quote(quote_id: UUID, request: SendQuoteRequest, use_case: SendQuoteDep):
    """Send a quote by email, SMS or both, or keep it as a draft."""
    result = await use_case.execute(quote_id, request.method)
    return SendQuoteResponse(
        quote_id=result.quote_id, method=result.method, status=result.status.value
    )
