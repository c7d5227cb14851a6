"""
Read-only query interfaces for catalog and availability data.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Set

from dispatch_wizard.domain.value_objects.date_window import DateWindow


class CatalogQueryInterface(ABC):
    """Reference data lookups (customers, locations, products, crew...)."""

    @abstractmethod
    async def query(
        self, entity: str, filters: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        """
        Query rows of a catalog entity.

        Args:
            entity: Catalog entity name (e.g. ``customers``, ``service_catalog``)
            filters: Column equality filters

        Returns:
            Matching rows as dictionaries
        """
        pass


class AvailabilityQueryInterface(ABC):
    """Inventory availability lookups over a date window."""

    @abstractmethod
    async def get_available_quantity(
        self,
        product_id: str,
        window: DateWindow,
        attributes: Optional[Dict[str, Any]] = None,
    ) -> int:
        """Count units of a product not reserved anywhere in the window."""
        pass

    @abstractmethod
    async def get_available_unit_ids(
        self,
        product_id: str,
        window: DateWindow,
        attributes: Optional[Dict[str, Any]] = None,
    ) -> Set[str]:
        """Ids of the product's trackable units free for the whole window."""
        pass
