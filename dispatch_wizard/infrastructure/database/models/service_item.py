"""
Job service line item SQLAlchemy model.
"""

from sqlalchemy import JSON, Column, ForeignKey, Integer, Numeric, String, Uuid
from sqlalchemy.orm import relationship

from .base import BaseModel


class JobServiceItemModel(BaseModel):
    """A selected service committed against a job."""

    __tablename__ = "job_service_items"

    job_id = Column(Uuid(as_uuid=True), ForeignKey("jobs.id"), nullable=False, index=True)
    service_id = Column(String(64), nullable=False, index=True)
    service_name = Column(String(255), nullable=False)
    pricing_method = Column(String(32), nullable=False)
    frequency_descriptor = Column(JSON, nullable=False)
    visit_dates = Column(JSON, nullable=False)
    visit_count = Column(Integer, nullable=False, default=0)
    unit_rate = Column(Numeric(10, 2), nullable=False)
    computed_total = Column(Numeric(10, 2), nullable=False)
    total = Column(Numeric(10, 2), nullable=False)

    job = relationship("JobModel", back_populates="service_items")
