"""
Availability-related domain exceptions.
"""


class AvailabilityError(Exception):
    """Base exception for availability errors."""

    pass


class AvailabilityQueryError(AvailabilityError):
    """Raised when an availability query cannot be answered."""

    def __init__(self, check: str, reason: str):
        self.check = check
        self.reason = reason
        super().__init__(f"Unable to verify {check}: {reason}")
