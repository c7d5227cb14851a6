"""
Draft-related domain exceptions.
"""


class DraftError(Exception):
    """Base exception for draft persistence errors."""

    pass


class DraftNotFoundError(DraftError):
    """Raised when a draft id does not exist."""

    def __init__(self, draft_id: str):
        self.draft_id = draft_id
        super().__init__(f"Draft '{draft_id}' not found")
