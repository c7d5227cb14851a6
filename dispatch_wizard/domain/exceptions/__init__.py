"""
Domain exceptions package.
"""

from .availability_error import AvailabilityError, AvailabilityQueryError
from .commit_error import CommitError, CommitStepError, SubmissionBlockedError
from .draft_error import DraftError, DraftNotFoundError
from .quote_error import QuoteDeliveryError, QuoteError, QuoteNotFoundError
from .validation_error import (
    InvalidFormatError,
    MutuallyExclusiveFieldsError,
    RequiredFieldError,
    ValidationError,
)

__all__ = [
    "AvailabilityError",
    "AvailabilityQueryError",
    "CommitError",
    "CommitStepError",
    "SubmissionBlockedError",
    "DraftError",
    "DraftNotFoundError",
    "QuoteError",
    "QuoteDeliveryError",
    "QuoteNotFoundError",
    "InvalidFormatError",
    "MutuallyExclusiveFieldsError",
    "RequiredFieldError",
    "ValidationError",
]
