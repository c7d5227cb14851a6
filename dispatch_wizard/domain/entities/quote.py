"""Quote domain entities."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import List, Optional
from uuid import UUID, uuid4

from dispatch_wizard.domain.value_objects.pricing import to_money
from dispatch_wizard.domain.value_objects.quote_status import QuoteStatus


@dataclass
class QuoteItem:
    """One priced line of a quote."""

    line_item_type: str
    name: str
    quantity: int
    unit_price: Decimal
    product_id: Optional[str] = None
    service_id: Optional[str] = None
    rental_start_date: Optional[date] = None
    rental_end_date: Optional[date] = None
    service_frequency: Optional[str] = None
    notes: Optional[str] = None

    def __post_init__(self):
        if self.line_item_type not in ("product", "service"):
            raise ValueError(f"Unknown quote line type '{self.line_item_type}'")
        self.unit_price = to_money(self.unit_price)

    @property
    def line_total(self) -> Decimal:
        return to_money(self.unit_price * self.quantity)


@dataclass
class Quote:
    """Priced proposal built from a wizard document."""

    customer_id: str
    items: List[QuoteItem] = field(default_factory=list)
    quote_number: Optional[str] = None
    status: QuoteStatus = QuoteStatus.DRAFT
    job_id: Optional[UUID] = None
    notes: str = ""
    id: UUID = field(default_factory=uuid4)
    sent_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate quote data."""
        if not self.customer_id:
            raise ValueError("Quote customer is required")
        self.status = QuoteStatus(self.status)
        if not self.created_at:
            self.created_at = datetime.now(timezone.utc)

    @property
    def subtotal(self) -> Decimal:
        return to_money(sum((item.line_total for item in self.items), Decimal("0")))

    @property
    def total_amount(self) -> Decimal:
        return self.subtotal

    def link_job(self, job_id: UUID) -> None:
        """Tie the quote to the job created from the same document."""
        self.job_id = job_id

    def mark_status(self, status: QuoteStatus) -> None:
        self.status = status
        if status == QuoteStatus.SENT:
            self.sent_at = datetime.now(timezone.utc)

    def to_delivery_payload(self) -> dict:
        """Payload handed to a quote delivery channel."""
        return {
            "quote_id": str(self.id),
            "quote_number": self.quote_number,
            "customer_id": self.customer_id,
            "job_id": str(self.job_id) if self.job_id else None,
            "subtotal": str(self.subtotal),
            "total_amount": str(self.total_amount),
            "items": [
                {
                    "type": item.line_item_type,
                    "name": item.name,
                    "quantity": item.quantity,
                    "unit_price": str(item.unit_price),
                    "line_total": str(item.line_total),
                    "service_frequency": item.service_frequency,
                }
                for item in self.items
            ],
        }
