"""
Wizard step value object.
"""

from enum import Enum


class WizardStep(str, Enum):
    """Kind of screen a wizard step number resolves to."""

    CUSTOMER = "customer"
    SCHEDULE = "schedule"
    LOCATION = "location"
    CREW = "crew"
    INVENTORY = "inventory"
    SERVICES = "services"
    REVIEW = "review"
    QUOTE_PREVIEW = "quote_preview"

    def is_final(self) -> bool:
        """Check if the step is the last one before submit."""
        return self in [self.REVIEW, self.QUOTE_PREVIEW]
