"""
Wizard mode value object.
"""

from enum import Enum


class WizardMode(str, Enum):
    """What a wizard session produces on submit."""

    JOB = "job"
    QUOTE = "quote"
    JOB_AND_QUOTE = "job_and_quote"

    def creates_jobs(self) -> bool:
        """Check if submitting creates jobs."""
        return self in [self.JOB, self.JOB_AND_QUOTE]

    def creates_quote(self) -> bool:
        """Check if submitting creates a quote."""
        return self in [self.QUOTE, self.JOB_AND_QUOTE]
