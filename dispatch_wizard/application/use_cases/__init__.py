"""
Application use cases package.
"""

from .manage_drafts import ManageDraftsUseCase
from .review_availability import AvailabilityReviewResult, ReviewAvailabilityUseCase
from .send_quote import SendQuoteResult, SendQuoteUseCase
from .submit_wizard import CommitOrchestrator, CreationResult

__all__ = [
    "AvailabilityReviewResult",
    "CommitOrchestrator",
    "CreationResult",
    "ManageDraftsUseCase",
    "ReviewAvailabilityUseCase",
    "SendQuoteResult",
    "SendQuoteUseCase",
]
