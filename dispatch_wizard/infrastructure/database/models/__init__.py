"""
Database models package.
"""

from .base import Base, BaseModel
from .catalog import (
    CustomerModel,
    DriverModel,
    ProductItemModel,
    ProductModel,
    ServiceCatalogModel,
    ServiceLocationModel,
    VehicleModel,
)
from .company_settings import CompanySettingsModel
from .daily_assignment import DailyAssignmentModel
from .job import EquipmentAssignmentModel, JobModel
from .quote import QuoteItemModel, QuoteModel
from .service_item import JobServiceItemModel

__all__ = [
    "Base",
    "BaseModel",
    "CompanySettingsModel",
    "CustomerModel",
    "DailyAssignmentModel",
    "DriverModel",
    "EquipmentAssignmentModel",
    "JobModel",
    "JobServiceItemModel",
    "ProductItemModel",
    "ProductModel",
    "QuoteItemModel",
    "QuoteModel",
    "ServiceCatalogModel",
    "ServiceLocationModel",
    "VehicleModel",
]
