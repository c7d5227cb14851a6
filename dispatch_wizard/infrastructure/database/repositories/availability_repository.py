"""SQL implementation of the inventory availability queries."""

from typing import Any, Dict, Optional, Set
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from dispatch_wizard.application.interfaces.queries import AvailabilityQueryInterface
from dispatch_wizard.domain.exceptions.availability_error import AvailabilityQueryError
from dispatch_wizard.domain.value_objects.date_window import DateWindow
from dispatch_wizard.infrastructure.database.models.catalog import (
    ProductItemModel,
    ProductModel,
)
from dispatch_wizard.infrastructure.database.models.job import EquipmentAssignmentModel

ACTIVE_ASSIGNMENT_STATUSES = ("assigned", "delivered", "in_service")
UNAVAILABLE_UNIT_STATUSES = ("maintenance", "retired")


def _matches(attributes: Optional[Dict[str, Any]], wanted: Optional[Dict[str, Any]]) -> bool:
    if not wanted:
        return True
    attributes = attributes or {}
    return all(attributes.get(key) == value for key, value in wanted.items())


class AvailabilityRepository(AvailabilityQueryInterface):
    """Availability computed from products, units and equipment assignments."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _overlapping(self, product_id: str, window: DateWindow):
        """Assignments of the product overlapping the window."""
        return (
            select(EquipmentAssignmentModel)
            .where(EquipmentAssignmentModel.product_id == product_id)
            .where(EquipmentAssignmentModel.status.in_(ACTIVE_ASSIGNMENT_STATUSES))
            .where(EquipmentAssignmentModel.assigned_date <= window.end)
            .where(
                or_(
                    EquipmentAssignmentModel.return_date.is_(None),
                    EquipmentAssignmentModel.return_date >= window.start,
                )
            )
        )

    async def get_available_quantity(
        self,
        product_id: str,
        window: DateWindow,
        attributes: Optional[Dict[str, Any]] = None,
    ) -> int:
        try:
            return await self._available_quantity(product_id, window, attributes)
        except (SQLAlchemyError, ValueError) as e:
            raise AvailabilityQueryError(f"stock of product {product_id}", str(e)) from e

    async def get_available_unit_ids(
        self,
        product_id: str,
        window: DateWindow,
        attributes: Optional[Dict[str, Any]] = None,
    ) -> Set[str]:
        try:
            return await self._available_unit_ids(product_id, window, attributes)
        except (SQLAlchemyError, ValueError) as e:
            raise AvailabilityQueryError(f"units of product {product_id}", str(e)) from e

    async def _available_quantity(
        self, product_id: str, window: DateWindow, attributes: Optional[Dict[str, Any]]
    ) -> int:
        product = await self.db.get(ProductModel, UUID(product_id))
        if product is None:
            return 0

        if product.track_inventory:
            units = await self._usable_units(product_id, attributes)
            total = len(units)
        else:
            total = product.stock_total

        reserved_rows = (await self.db.execute(self._overlapping(product_id, window))).scalars().all()
        reserved = sum(
            row.quantity for row in reserved_rows if _matches(row.attributes, attributes)
        )
        return max(total - reserved, 0)

    async def _available_unit_ids(
        self, product_id: str, window: DateWindow, attributes: Optional[Dict[str, Any]]
    ) -> Set[str]:
        units = await self._usable_units(product_id, attributes)
        booked_stmt = self._overlapping(product_id, window).where(
            EquipmentAssignmentModel.product_item_id.is_not(None)
        )
        booked = {
            row.product_item_id
            for row in (await self.db.execute(booked_stmt)).scalars().all()
        }
        return {unit_id for unit_id in units if unit_id not in booked}

    async def _usable_units(
        self, product_id: str, attributes: Optional[Dict[str, Any]]
    ) -> Set[str]:
        stmt = (
            select(ProductItemModel)
            .where(ProductItemModel.product_id == UUID(product_id))
            .where(ProductItemModel.status.not_in(UNAVAILABLE_UNIT_STATUSES))
        )
        units = (await self.db.execute(stmt)).scalars().all()
        return {str(unit.id) for unit in units if _matches(unit.attributes, attributes)}

