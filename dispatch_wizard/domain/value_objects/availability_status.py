"""
Availability status value object.
"""

from enum import Enum


class AvailabilityStatus(str, Enum):
    """Outcome of a single availability check."""

    AVAILABLE = "available"
    CONFLICT = "conflict"
    UNVERIFIED = "unverified"

    def is_conflict(self) -> bool:
        """Check if the status blocks submission."""
        return self == self.CONFLICT

    def needs_caution(self) -> bool:
        """Check if the outcome could not be confirmed either way."""
        return self == self.UNVERIFIED
