"""
Inventory reservation strategy value object.
"""

from enum import Enum


class InventoryStrategy(str, Enum):
    """How inventory is reserved for a line."""

    BULK = "bulk"
    SPECIFIC = "specific"
