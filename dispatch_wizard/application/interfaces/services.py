"""
Service interfaces for dependency inversion.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict

from dispatch_wizard.domain.value_objects.quote_status import DeliveryMethod


class QuoteDeliveryInterface(ABC):
    """Interface for quote delivery channels (email / SMS)."""

    @abstractmethod
    async def deliver(self, payload: Dict[str, Any], method: DeliveryMethod) -> bool:
        """
        Dispatch a quote payload.

        Returns:
            True when the channel accepted the message for immediate sending,
            False when it was queued for later delivery.
        """
        pass
