"""
Job and equipment assignment SQLAlchemy models.
"""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import relationship

from .base import BaseModel


class JobModel(BaseModel):
    """Job database model."""

    __tablename__ = "jobs"

    job_number = Column(String(32), nullable=False, unique=True, index=True)
    job_type = Column(String(32), nullable=False, index=True)
    status = Column(String(32), nullable=False, default="assigned", index=True)

    customer_id = Column(String(64), nullable=False, index=True)
    contact_id = Column(String(64))

    scheduled_date = Column(Date, nullable=False, index=True)
    scheduled_time = Column(String(5))
    timezone = Column(String(64), nullable=False)
    return_date = Column(Date)

    driver_id = Column(String(64), index=True)
    vehicle_id = Column(String(64), index=True)

    # Either a saved location reference or an inline address payload
    service_location_id = Column(String(64))
    location_address = Column(JSON)

    notes = Column(Text)
    special_instructions = Column(Text)
    is_priority = Column(Boolean, nullable=False, default=False)
    is_service_job = Column(Boolean, nullable=False, default=False)
    total_price = Column(Numeric(10, 2))

    parent_job_id = Column(Uuid(as_uuid=True), ForeignKey("jobs.id"), index=True)

    # Relationships
    equipment_assignments = relationship(
        "EquipmentAssignmentModel", back_populates="job", cascade="all, delete-orphan"
    )
    service_items = relationship(
        "JobServiceItemModel", back_populates="job", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Job(id={self.id}, job_number={self.job_number}, type={self.job_type})>"


class EquipmentAssignmentModel(BaseModel):
    """Inventory reserved by a job: a bulk quantity or one specific unit."""

    __tablename__ = "equipment_assignments"

    job_id = Column(Uuid(as_uuid=True), ForeignKey("jobs.id"), nullable=False, index=True)
    product_id = Column(String(64), nullable=False, index=True)
    product_item_id = Column(String(64), index=True)
    quantity = Column(Integer, nullable=False, default=1)
    strategy = Column(String(16), nullable=False, default="bulk")
    assigned_date = Column(Date, nullable=False, index=True)
    return_date = Column(Date, index=True)
    status = Column(String(32), nullable=False, default="assigned")
    attributes = Column(JSON)

    job = relationship("JobModel", back_populates="equipment_assignments")
