"""
HTTP client for the remote order service.
"""

import logging
from typing import List, Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError as PydanticValidationError

from teapot.core.config import settings
from teapot.domain.exceptions import OrderServiceError
from teapot.domain.models import Order
from teapot.interfaces.IOrderGateway import IOrderGateway

logger = logging.getLogger(__name__)


class HttpOrderGateway(IOrderGateway):
    """Talks to the order service: POST /order, GET /orders, DELETE /order/{phone}."""

    def __init__(self, base_url: str, timeout: float = 10.0, client: Optional[httpx.AsyncClient] = None):
        self.base_url = base_url.rstrip("/")
        self.client = client or httpx.AsyncClient(timeout=timeout)

    async def submit_order(self, order: Order) -> Order:
        await self._request("POST", "/order", json=order.to_wire())
        return order

    async def list_orders(self) -> List[Order]:
        response = await self._request("GET", "/orders")
        try:
            data = response.json()
        except ValueError as e:
            raise OrderServiceError("Order service sent an unreadable order list") from e
        if not isinstance(data, list):
            raise OrderServiceError("Order service sent an unexpected order list")

        orders = []
        for raw in data:
            try:
                orders.append(Order.model_validate(raw))
            except PydanticValidationError as e:
                # One broken record should not hide the rest of the feed
                logger.warning(f"Skipping malformed order from service: {e}")
        return orders

    async def remove_order(self, order: Order) -> None:
        phone = quote(order.delivery_info.phone, safe="")
        await self._request("DELETE", f"/order/{phone}")

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        url = f"{self.base_url}{path}"
        try:
            response = await self.client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"❌ Order service answered {e.response.status_code} for {method} {path}")
            raise OrderServiceError(f"Order service refused the request ({e.response.status_code})") from e
        except httpx.HTTPError as e:
            logger.error(f"❌ Order service unreachable for {method} {path}: {e}")
            raise OrderServiceError("Order service is unreachable") from e
        return response


def build_http_gateway() -> HttpOrderGateway:
    return HttpOrderGateway(settings.ORDER_API_URL, timeout=settings.ORDER_API_TIMEOUT)
