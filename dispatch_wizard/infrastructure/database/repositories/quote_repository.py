"""Quote repository implementation."""

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dispatch_wizard.application.interfaces.repositories import QuoteRepositoryInterface
from dispatch_wizard.config.logging import get_logger
from dispatch_wizard.domain.entities.quote import Quote, QuoteItem
from dispatch_wizard.domain.value_objects.quote_status import QuoteStatus
from dispatch_wizard.infrastructure.database.models.base import utcnow
from dispatch_wizard.infrastructure.database.models.quote import QuoteItemModel, QuoteModel

logger = get_logger(__name__)


class QuoteRepository(QuoteRepositoryInterface):
    """Quote repository implementation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, quote: Quote) -> Quote:
        """Create a quote with its items."""
        model = QuoteModel(
            id=quote.id,
            quote_number=quote.quote_number,
            customer_id=quote.customer_id,
            job_id=quote.job_id,
            status=quote.status.value,
            subtotal=quote.subtotal,
            total_amount=quote.total_amount,
            notes=quote.notes,
            sent_at=quote.sent_at,
            created_at=quote.created_at,
            items=[
                QuoteItemModel(
                    line_item_type=item.line_item_type,
                    product_id=item.product_id,
                    service_id=item.service_id,
                    name=item.name,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    line_total=item.line_total,
                    rental_start_date=item.rental_start_date,
                    rental_end_date=item.rental_end_date,
                    service_frequency=item.service_frequency,
                    notes=item.notes,
                )
                for item in quote.items
            ],
        )
        self.db.add(model)
        await self.db.flush()

        logger.debug("Quote persisted", quote_id=str(quote.id), quote_number=quote.quote_number)
        return quote

    async def get_by_id(self, quote_id: UUID) -> Optional[Quote]:
        """Get quote by ID."""
        stmt = select(QuoteModel).where(QuoteModel.id == quote_id)
        result = await self.db.execute(stmt)
        model = result.scalar_one_or_none()
        return self._model_to_entity(model) if model else None

    async def update_status(self, quote_id: UUID, status: QuoteStatus) -> Optional[Quote]:
        """Record the delivery status of a quote."""
        stmt = select(QuoteModel).where(QuoteModel.id == quote_id)
        result = await self.db.execute(stmt)
        model = result.scalar_one_or_none()
        if not model:
            return None

        model.status = status.value
        if status == QuoteStatus.SENT:
            model.sent_at = utcnow()
        await self.db.flush()
        return self._model_to_entity(model)

    def _model_to_entity(self, model: QuoteModel) -> Quote:
        """Convert database model to domain entity."""
        return Quote(
            id=model.id,
            quote_number=model.quote_number,
            customer_id=model.customer_id,
            job_id=model.job_id,
            status=QuoteStatus(model.status),
            notes=model.notes or "",
            sent_at=model.sent_at,
            created_at=model.created_at,
            items=[
                QuoteItem(
                    line_item_type=item.line_item_type,
                    product_id=item.product_id,
                    service_id=item.service_id,
                    name=item.name,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    rental_start_date=item.rental_start_date,
                    rental_end_date=item.rental_end_date,
                    service_frequency=item.service_frequency,
                    notes=item.notes,
                )
                for item in model.items
            ],
        )
