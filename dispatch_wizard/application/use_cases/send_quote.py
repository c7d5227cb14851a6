"""Send quote use case."""

from dataclasses import dataclass
from uuid import UUID

from dispatch_wizard.application.interfaces.repositories import QuoteRepositoryInterface
from dispatch_wizard.application.interfaces.services import QuoteDeliveryInterface
from dispatch_wizard.config.logging import get_logger
from dispatch_wizard.domain.exceptions.quote_error import QuoteDeliveryError, QuoteNotFoundError
from dispatch_wizard.domain.value_objects.quote_status import DeliveryMethod, QuoteStatus
from dispatch_wizard.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)
from dispatch_wizard.infrastructure.monitoring.metrics import record_quote_delivery

logger = get_logger(__name__)


@dataclass
class SendQuoteResult:
    quote_id: str
    method: DeliveryMethod
    status: QuoteStatus


class SendQuoteUseCase:
    """Hands a committed quote to a delivery channel and records its status."""

    def __init__(
        self,
        quote_repo: QuoteRepositoryInterface,
        delivery: QuoteDeliveryInterface,
        transaction_service: TransactionService,
    ):
        self.quote_repo = quote_repo
        self.delivery = delivery
        self.transaction_service = transaction_service

    async def execute(self, quote_id: UUID, method: DeliveryMethod) -> SendQuoteResult:
        """
        Deliver a quote.

        ``save_draft`` never dispatches and leaves the quote in draft.
        A channel that accepts the message yields ``sent``; one that
        queues it yields ``pending``.

        Raises:
            QuoteNotFoundError: if the quote does not exist
            QuoteDeliveryError: if the channel rejected the quote
        """
        method = DeliveryMethod(method)
        quote = await self.quote_repo.get_by_id(quote_id)
        if quote is None:
            raise QuoteNotFoundError(str(quote_id))

        if not method.dispatches():
            record_quote_delivery(method.value, QuoteStatus.DRAFT.value)
            return SendQuoteResult(quote_id=str(quote.id), method=method, status=QuoteStatus.DRAFT)

        try:
            sent_now = await self.delivery.deliver(quote.to_delivery_payload(), method)
        except QuoteDeliveryError:
            record_quote_delivery(method.value, "failed")
            logger.error(
                "Quote delivery failed",
                quote_id=str(quote.id),
                method=method.value,
                exc_info=True,
            )
            raise

        status = QuoteStatus.SENT if sent_now else QuoteStatus.PENDING
        await self.quote_repo.update_status(quote.id, status)
        await self.transaction_service.commit()

        record_quote_delivery(method.value, status.value)
        logger.info(
            "Quote delivered",
            quote_id=str(quote.id),
            quote_number=quote.quote_number,
            method=method.value,
            status=status.value,
        )
        return SendQuoteResult(quote_id=str(quote.id), method=method, status=status)
