"""
cartsync App - Root Component and Cart Synchronization
======================================================

`CartApp` is the root of the component tree. It reads the store, renders
the notification banner and the page layout, and owns the effect that sends
the cart to the remote datastore whenever the cart changes.

Synchronization
---------------

After `mount()`, every change of the cart slice runs the effect:

1. a pending notification is dispatched right away,
2. a PUT of the current cart is scheduled on the running event loop,
3. once it settles, a success or an error notification is dispatched.

The effect is skipped once, for the cart value present at mount time, so
mounting never sends anything. The skip flag belongs to the instance.

Every synchronization takes a request number. When a request settles after
a newer one was issued, its outcome is dropped: only the newest request
writes the final notification. Older requests are not cancelled.

```python
store = CartStore()
async with CartClient(settings.base_url) as client:
    app = CartApp(store, client)
    app.mount()
    store.dispatch(add_item_to_cart(DUMMY_PRODUCTS[0]))  # notification: pending
    await app.wait_idle()                                 # success or error
    console.print(app)
```
"""

import asyncio
import logging
from typing import Iterable, List, Optional, Set

from rich.console import Group, RenderableType

from .client import CartClient, SynchronizationFailed
from .components import Cart, Component, Layout, Notification, Products
from .models import (
    DUMMY_PRODUCTS,
    ERROR_NOTIFICATION,
    SENDING_NOTIFICATION,
    SUCCESS_NOTIFICATION,
    CartState,
    Product,
)
from .slices import show_notification
from .store import CartStore

logger = logging.getLogger(__name__)


class CartApp(Component):
    def __init__(
        self,
        store: CartStore,
        client: CartClient,
        products: Iterable[Product] = DUMMY_PRODUCTS,
    ):
        super().__init__(products=tuple(products))
        self.store = store
        self.client = client
        self._is_initial = True
        self._mounted = False
        self._request_counter = 0
        self._in_flight: Set[asyncio.Task] = set()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def mount(self) -> "CartApp":
        if self._mounted:
            return self
        self._mounted = True
        cart = self.store.select("cart")
        cart.subscribe(self._on_cart_change)
        self._on_cart_change(cart.value)
        return self

    def unmount(self) -> None:
        if not self._mounted:
            return
        self._mounted = False
        self.store.select("cart").unsubscribe(self._on_cart_change)

    @property
    def in_flight(self) -> int:
        return len(self._in_flight)

    async def wait_idle(self) -> None:
        """Wait until every synchronization started so far has settled."""
        while self._in_flight:
            await asyncio.gather(*list(self._in_flight))

    # ------------------------------------------------------------------
    # Synchronization effect
    # ------------------------------------------------------------------

    def _on_cart_change(self, cart: CartState) -> None:
        if self._is_initial:
            self._is_initial = False
            return

        loop = asyncio.get_running_loop()
        self._request_counter += 1
        request_id = self._request_counter

        self.store.dispatch(show_notification(SENDING_NOTIFICATION))
        task = loop.create_task(self._send_cart_data(cart, request_id))
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)

    async def _send_cart_data(self, cart: CartState, request_id: int) -> None:
        logger.debug(
            "Sending cart #%d (%d items) to %s",
            request_id,
            cart.total_quantity,
            self.client.cart_url,
        )
        try:
            await self.client.put_cart(cart)
        except SynchronizationFailed as exc:
            if self._is_stale(request_id):
                return
            logger.warning("Sending cart #%d failed: %s (status=%s)", request_id, exc, exc.status_code)
            self.store.dispatch(show_notification(ERROR_NOTIFICATION))
            return

        if self._is_stale(request_id):
            return
        logger.info("Sent cart #%d", request_id)
        self.store.dispatch(show_notification(SUCCESS_NOTIFICATION))

    def _is_stale(self, request_id: int) -> bool:
        if request_id != self._request_counter:
            logger.debug(
                "Dropping outcome of cart #%d, superseded by #%d",
                request_id,
                self._request_counter,
            )
            return True
        return False

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def compose(self) -> List[Component]:
        state = self.store.get_state()
        children: List[Component] = []
        if state.ui.notification:
            children.append(Notification.from_value(state.ui.notification))

        layout_children: List[Component] = []
        if state.ui.cart_is_visible:
            layout_children.append(Cart(cart=state.cart))
        layout_children.append(Products(products=self.props["products"]))
        children.append(
            Layout(cart_quantity=state.cart.total_quantity, children=layout_children)
        )
        return children

    def render(self) -> RenderableType:
        return Group(*(child.render() for child in self.compose()))

    def find_product(self, product_id: str) -> Optional[Product]:
        for product in self.props["products"]:
            if product.id == product_id:
                return product
        return None
