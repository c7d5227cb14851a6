"""Catalog query repository implementation."""

from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dispatch_wizard.application.interfaces.queries import CatalogQueryInterface
from dispatch_wizard.domain.exceptions.validation_error import ValidationError
from dispatch_wizard.infrastructure.database.models.catalog import (
    CustomerModel,
    DriverModel,
    ProductItemModel,
    ProductModel,
    ServiceCatalogModel,
    ServiceLocationModel,
    VehicleModel,
)
from dispatch_wizard.infrastructure.database.models.company_settings import (
    CompanySettingsModel,
)

CATALOG_ENTITIES = {
    "customers": CustomerModel,
    "service_locations": ServiceLocationModel,
    "products": ProductModel,
    "product_items": ProductItemModel,
    "service_catalog": ServiceCatalogModel,
    "drivers": DriverModel,
    "vehicles": VehicleModel,
    "company_settings": CompanySettingsModel,
}


class CatalogRepository(CatalogQueryInterface):
    """Read-only access to reference data tables."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def query(
        self, entity: str, filters: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        model_class = CATALOG_ENTITIES.get(entity)
        if model_class is None:
            raise ValidationError(f"Unknown catalog entity '{entity}'", {"entity": entity})

        stmt = select(model_class)
        for column_name, value in (filters or {}).items():
            column = model_class.__table__.columns.get(column_name)
            if column is None:
                raise ValidationError(
                    f"Unknown filter '{column_name}' for {entity}", {"filter": column_name}
                )
            if column.type.python_type is UUID and isinstance(value, str):
                value = UUID(value)
            stmt = stmt.where(column == value)

        result = await self.db.execute(stmt)
        return [self._row(model) for model in result.scalars().all()]

    @staticmethod
    def _row(model) -> Dict[str, Any]:
        row = model.to_dict()
        for key, value in row.items():
            if isinstance(value, UUID):
                row[key] = str(value)
        return row
