"""
Quote composition from a wizard document.
"""

from typing import Optional

from dispatch_wizard.application.interfaces.queries import CatalogQueryInterface
from dispatch_wizard.config.logging import get_logger
from dispatch_wizard.domain.entities.job_document import JobDocument
from dispatch_wizard.domain.entities.quote import Quote, QuoteItem
from dispatch_wizard.domain.value_objects.pricing import to_money
from dispatch_wizard.domain.value_objects.quote_status import QuoteStatus

logger = get_logger(__name__)


class QuoteBuilder:
    """Builds a priced quote carrying the document's items and services."""

    def __init__(self, catalog: Optional[CatalogQueryInterface] = None):
        self.catalog = catalog

    async def build(self, document: JobDocument) -> Quote:
        window = document.reservation_window
        items = []

        for line in document.items:
            product = await self._product(line.product_id)
            items.append(
                QuoteItem(
                    line_item_type="product",
                    product_id=line.product_id,
                    name=product.get("name") or line.product_id,
                    quantity=line.quantity,
                    unit_price=product.get("default_price") or 0,
                    rental_start_date=window.start if window else None,
                    rental_end_date=window.end if window else None,
                )
            )

        for service in document.services:
            # The line total must equal the charged cost, including overrides.
            visits = max(service.visit_count, 1)
            if service.visit_count and service.calculated_cost % visits == 0:
                quantity, unit_price = visits, service.calculated_cost / visits
            else:
                quantity, unit_price = 1, service.calculated_cost
            items.append(
                QuoteItem(
                    line_item_type="service",
                    service_id=service.id,
                    name=service.name,
                    quantity=quantity,
                    unit_price=to_money(unit_price),
                    service_frequency=service.frequency.describe(),
                    notes=service.summary_text or None,
                )
            )

        quote = Quote(
            customer_id=document.customer_id,
            items=items,
            status=QuoteStatus.DRAFT,
            notes=document.notes,
        )
        logger.debug(
            "Built quote from document",
            customer_id=document.customer_id,
            item_count=len(items),
            total_amount=str(quote.total_amount),
        )
        return quote

    async def _product(self, product_id: str) -> dict:
        if self.catalog is None:
            return {}
        rows = await self.catalog.query("products", {"id": product_id})
        return rows[0] if rows else {}
