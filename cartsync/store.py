"""
cartsync Store - Injected Reactive State Container
==================================================

`CartStore` groups the application's state slices into one container that
is created by the caller and passed to the components that need it, rather
than living as a process-wide singleton.

Each slice value lives in its own `Observable`. Dispatching an action runs
the owning slice's reducer and sets the observable, which notifies the
slice's observers only when the reduced value differs from the previous
one.

Basic Usage
-----------

```python
from cartsync.store import CartStore
from cartsync.slices import add_item_to_cart, toggle_cart

store = CartStore()

unsubscribe = store.subscribe(lambda state: print(state.cart.total_quantity))
store.dispatch(add_item_to_cart(DUMMY_PRODUCTS[0]))  # prints 1

# Watch a single slice
store.select("cart").subscribe(lambda cart: print(cart.to_dict()))

unsubscribe()
```

State Persistence
-----------------

```python
state = store.to_dict()
# {"cart": {"items": [...], ...}, "ui": {"cartIsVisible": False, ...}}
other = CartStore()
other.load_state(state)
```
"""

import logging
import threading
from typing import Any, Callable, Dict, List, Optional

from .models import AppState, CartState, UiState
from .observable import Observable, transaction
from .slices import Action, Slice, UnknownActionError, cart_slice, ui_slice

logger = logging.getLogger(__name__)

Listener = Callable[[AppState], None]


class CartStore:
    """
    State container for the cart application.

    Dispatch is serialized by a re-entrant lock: one reducer runs at a time,
    and a listener may dispatch again while it is being notified.
    """

    def __init__(
        self,
        cart: Optional[CartState] = None,
        ui: Optional[UiState] = None,
    ):
        self._slices: Dict[str, Slice] = {s.name: s for s in (cart_slice, ui_slice)}
        self._observables: Dict[str, Observable] = {
            name: Observable(name, s.initial_state) for name, s in self._slices.items()
        }
        if cart is not None:
            self._observables["cart"].set(cart)
        if ui is not None:
            self._observables["ui"].set(ui)
        self._lock = threading.RLock()
        self._subscription_contexts: Dict[Listener, Dict[str, Any]] = {}

    def get_state(self) -> AppState:
        """Return an immutable snapshot of the current state."""
        return AppState(
            cart=self._observables["cart"].value,
            ui=self._observables["ui"].value,
        )

    def select(self, slice_name: str) -> Observable:
        """Return the observable holding one slice of the state."""
        try:
            return self._observables[slice_name]
        except KeyError:
            raise KeyError(f"Unknown state slice: {slice_name!r}") from None

    def dispatch(self, action: Action) -> Action:
        """Reduce `action` into the slice that owns it."""
        try:
            state_slice = self._slices[action.slice_name]
        except KeyError:
            raise UnknownActionError(action.type) from None

        with self._lock:
            observable = self._observables[state_slice.name]
            new_state = state_slice.reduce(observable.value, action)
            logger.debug("Dispatching %s", action.type)
            observable.set(new_state)
        return action

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Call `listener` with a fresh snapshot after every state change.

        Returns a callable that removes the subscription.
        """

        def store_reaction(_value: Any = None) -> None:
            listener(self.get_state())

        subscriptions: List[Observable] = []
        for observable in self._observables.values():
            observable.add_observer(store_reaction)
            subscriptions.append(observable)

        self._subscription_contexts[listener] = {
            "reaction": store_reaction,
            "subscriptions": subscriptions,
        }
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: Listener) -> None:
        context = self._subscription_contexts.pop(listener, None)
        if context is None:
            return
        for observable in context["subscriptions"]:
            observable.remove_observer(context["reaction"])

    def to_dict(self) -> Dict[str, Any]:
        state = self.get_state()
        return {"cart": state.cart.to_dict(), "ui": state.ui.to_dict()}

    def load_state(self, state_dict: Dict[str, Any]) -> None:
        """Restore both slices from a dictionary produced by `to_dict()`."""
        with self._lock, transaction():
            if "cart" in state_dict:
                self._observables["cart"].set(CartState.from_dict(state_dict["cart"]))
            if "ui" in state_dict:
                self._observables["ui"].set(UiState.from_dict(state_dict["ui"]))

    def __repr__(self) -> str:
        return f"CartStore({self.get_state()!r})"
