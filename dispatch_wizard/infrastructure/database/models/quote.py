"""
Quote SQLAlchemy models.
"""

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import relationship

from .base import BaseModel


class QuoteModel(BaseModel):
    """Quote database model."""

    __tablename__ = "quotes"

    quote_number = Column(String(32), nullable=False, unique=True, index=True)
    customer_id = Column(String(64), nullable=False, index=True)
    job_id = Column(Uuid(as_uuid=True), ForeignKey("jobs.id"), index=True)
    status = Column(String(16), nullable=False, default="draft")
    subtotal = Column(Numeric(10, 2), nullable=False, default=0)
    total_amount = Column(Numeric(10, 2), nullable=False, default=0)
    notes = Column(Text)
    sent_at = Column(DateTime(timezone=True))

    items = relationship(
        "QuoteItemModel",
        back_populates="quote",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class QuoteItemModel(BaseModel):
    """Quote line database model."""

    __tablename__ = "quote_items"

    quote_id = Column(Uuid(as_uuid=True), ForeignKey("quotes.id"), nullable=False, index=True)
    line_item_type = Column(String(16), nullable=False)
    product_id = Column(String(64))
    service_id = Column(String(64))
    name = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    unit_price = Column(Numeric(10, 2), nullable=False)
    line_total = Column(Numeric(10, 2), nullable=False)
    rental_start_date = Column(Date)
    rental_end_date = Column(Date)
    service_frequency = Column(String(255))
    notes = Column(Text)

    quote = relationship("QuoteModel", back_populates="items")
