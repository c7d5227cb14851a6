"""
External services package.
"""

from .http_client import HTTPClient
from .quote_delivery_client import HttpQuoteDeliveryClient

__all__ = ["HTTPClient", "HttpQuoteDeliveryClient"]
