"""
Location selection value objects.
"""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class InlineAddress:
    """New address typed into the wizard instead of a saved location."""

    address: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    save_to_profile: bool = False

    @property
    def is_blank(self) -> bool:
        """An address with no text cannot be dispatched to."""
        return not self.address or not self.address.strip()

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "address": self.address,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "save_to_profile": self.save_to_profile,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "InlineAddress":
        """Build from dictionary."""
        return cls(
            address=data.get("address") or "",
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
            save_to_profile=bool(data.get("save_to_profile", False)),
        )


@dataclass(frozen=True)
class LocationSelection:
    """Either a saved service location reference or an inline address."""

    saved_location_id: Optional[str] = None
    new_address: Optional[InlineAddress] = None

    def __post_init__(self):
        """Validate that exactly one source is active."""
        if self.saved_location_id and self.new_address is not None:
            raise ValueError("Choose a saved location or a new address, not both")
        if not self.saved_location_id and self.new_address is None:
            raise ValueError("A location selection needs a saved location or an address")

    @classmethod
    def saved(cls, location_id: str) -> "LocationSelection":
        return cls(saved_location_id=location_id)

    @classmethod
    def inline(cls, address: InlineAddress) -> "LocationSelection":
        return cls(new_address=address)

    @property
    def is_resolved(self) -> bool:
        """Check if the selection points at a usable location."""
        if self.saved_location_id:
            return True
        return self.new_address is not None and not self.new_address.is_blank

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "saved_location_id": self.saved_location_id,
            "new_address": self.new_address.to_dict() if self.new_address else None,
        }

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> Optional["LocationSelection"]:
        """Build from dictionary, returning None for empty payloads."""
        if not data:
            return None
        new_address = data.get("new_address")
        return cls(
            saved_location_id=data.get("saved_location_id"),
            new_address=InlineAddress.from_dict(new_address) if new_address else None,
        )
