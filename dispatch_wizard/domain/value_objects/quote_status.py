"""
Quote status and delivery method value objects.
"""

from enum import Enum


class QuoteStatus(str, Enum):
    """Delivery status of a quote."""

    DRAFT = "draft"
    SENT = "sent"
    PENDING = "pending"


class DeliveryMethod(str, Enum):
    """Channel used to hand a quote to the customer."""

    EMAIL = "email"
    SMS = "sms"
    BOTH = "both"
    SAVE_DRAFT = "save_draft"

    def dispatches(self) -> bool:
        """Check if the method sends a message at all."""
        return self != self.SAVE_DRAFT
