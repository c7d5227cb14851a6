"""
Daily crew assignment SQLAlchemy model.
"""

from sqlalchemy import Column, Date, ForeignKey, Index, String, Text, Uuid

from .base import BaseModel


class DailyAssignmentModel(BaseModel):
    """Driver and vehicle booked together for a calendar day."""

    __tablename__ = "daily_assignments"
    __table_args__ = (
        Index("ix_daily_assignments_date_driver", "assignment_date", "driver_id"),
        Index("ix_daily_assignments_date_vehicle", "assignment_date", "vehicle_id"),
    )

    assignment_date = Column(Date, nullable=False, index=True)
    driver_id = Column(String(64), nullable=False)
    vehicle_id = Column(String(64), nullable=False)
    job_id = Column(Uuid(as_uuid=True), ForeignKey("jobs.id"))
    notes = Column(Text)
