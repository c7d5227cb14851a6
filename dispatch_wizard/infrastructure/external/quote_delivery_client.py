"""
HTTP quote delivery channel.
"""

from typing import Any, Dict, Optional

import httpx

from dispatch_wizard.application.interfaces.services import QuoteDeliveryInterface
from dispatch_wizard.config.logging import get_logger
from dispatch_wizard.config.settings import settings
from dispatch_wizard.domain.exceptions.quote_error import QuoteDeliveryError
from dispatch_wizard.domain.value_objects.quote_status import DeliveryMethod
from dispatch_wizard.infrastructure.external.http_client import HTTPClient

logger = get_logger(__name__)


class HttpQuoteDeliveryClient(QuoteDeliveryInterface):
    """
    Posts quote payloads to the send-quote endpoint.

    A 200/201 response means the message went out; 202 means the channel
    accepted it for later delivery.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url or settings.QUOTE_DELIVERY_URL
        self.token = token if token is not None else settings.QUOTE_DELIVERY_TOKEN
        self.timeout = timeout or settings.QUOTE_DELIVERY_TIMEOUT
        self.transport = transport

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def deliver(self, payload: Dict[str, Any], method: DeliveryMethod) -> bool:
        quote_id = str(payload.get("quote_id"))
        body = {**payload, "method": method.value}

        try:
            async with HTTPClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(self.url, data=body, headers=self._headers())
        except httpx.HTTPError as e:
            raise QuoteDeliveryError(quote_id, method.value, str(e) or type(e).__name__) from e

        if response.status_code == 202:
            logger.info("Quote queued for delivery", quote_id=quote_id, method=method.value)
            return False
        if response.is_success:
            return True

        raise QuoteDeliveryError(
            quote_id,
            method.value,
            f"delivery endpoint returned {response.status_code}: {response.text[:200]}",
        )
