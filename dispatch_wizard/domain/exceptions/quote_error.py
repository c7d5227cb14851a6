"""
Quote domain exceptions.
"""


class QuoteError(Exception):
    """Base exception for quote errors."""

    pass


class QuoteNotFoundError(QuoteError):
    """Raised when a quote id does not exist."""

    def __init__(self, quote_id: str):
        self.quote_id = quote_id
        super().__init__(f"Quote '{quote_id}' not found")


class QuoteDeliveryError(QuoteError):
    """Raised when a quote could not be handed to a delivery channel."""

    def __init__(self, quote_id: str, method: str, reason: str):
        self.quote_id = quote_id
        self.method = method
        self.reason = reason
        super().__init__(f"Quote {quote_id} could not be sent via {method}: {reason}")
