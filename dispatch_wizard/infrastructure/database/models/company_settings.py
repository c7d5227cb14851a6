"""
Company settings SQLAlchemy model.
"""

from sqlalchemy import Column, Integer, String

from .base import BaseModel


class CompanySettingsModel(BaseModel):
    """Numbering prefixes and counters for jobs and quotes."""

    __tablename__ = "company_settings"

    company_name = Column(String(255))

    delivery_prefix = Column(String(16))
    pickup_prefix = Column(String(16))
    service_prefix = Column(String(16))
    survey_prefix = Column(String(16))
    quote_prefix = Column(String(16))

    next_delivery_number = Column(Integer, nullable=False, default=1)
    next_pickup_number = Column(Integer, nullable=False, default=1)
    next_service_number = Column(Integer, nullable=False, default=1)
    next_survey_number = Column(Integer, nullable=False, default=1)
    next_quote_number = Column(Integer, nullable=False, default=1)
