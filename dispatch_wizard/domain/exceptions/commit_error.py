"""
Commit-related domain exceptions.
"""

from typing import Dict, List


class CommitError(Exception):
    """Base exception for wizard commit errors."""

    pass


class CommitStepError(CommitError):
    """Raised when one step of a multi-entity commit fails."""

    def __init__(
        self,
        step: str,
        reason: str,
        committed_ids: Dict[str, List[str]] = None,
    ):
        self.step = step
        self.reason = reason
        self.committed_ids = committed_ids or {}
        super().__init__(
            f"Commit step '{step}' failed: {reason}. "
            "Entities created by earlier steps were kept; no rollback was performed"
        )


class SubmissionBlockedError(CommitError):
    """Raised when the session is not in a submittable state."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = errors
        super().__init__(
            "Wizard cannot be submitted: " + "; ".join(sorted(errors.values()))
        )
