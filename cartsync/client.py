"""
HTTP client for the remote cart datastore.

The datastore is an opaque JSON endpoint. The whole cart document is written
with a single ``PUT <base_url>/cart.json``; there is no authentication, no
query string and no retry. Every failure, whether the server answered with a
non-2xx status or the request never completed, is reported as
`SynchronizationFailed`.
"""

import logging
from typing import Optional

import httpx

from .config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from .models import CartState

logger = logging.getLogger(__name__)

CART_PATH = "/cart.json"


class SynchronizationFailed(RuntimeError):
    """Sending the cart to the remote datastore failed."""

    def __init__(self, message: str = "Sending cart data failed", status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class CartClient:
    """
    Writes cart state to the remote datastore.

    Example:
        ```python
        async with CartClient("https://example.firebaseio.com") as client:
            await client.put_cart(store.get_state().cart)
        ```
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url, timeout=timeout, transport=transport
        )

    @property
    def cart_url(self) -> str:
        return f"{self.base_url}{CART_PATH}"

    async def put_cart(self, cart: CartState) -> httpx.Response:
        """Replace the remote cart document with `cart`."""
        try:
            response = await self._client.put(CART_PATH, json=cart.to_dict())
        except (httpx.HTTPError, httpx.InvalidURL, ValueError, TypeError) as exc:
            # ValueError and TypeError come from encoding the body (NaN, infinity)
            logger.debug("PUT %s raised %r", self.cart_url, exc)
            raise SynchronizationFailed() from exc

        if not response.is_success:
            logger.debug("PUT %s answered %d", self.cart_url, response.status_code)
            raise SynchronizationFailed(status_code=response.status_code)
        return response

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "CartClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
