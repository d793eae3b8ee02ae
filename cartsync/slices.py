"""
State slices: actions and reducers for the cart store.

A slice owns one named part of the store state. Each reducer is a pure
function ``(state, payload) -> new_state`` registered under a name; the
slice builds action types as ``"<slice>/<reducer>"`` so the store can
route a dispatched action to the slice that handles it.

Example:
    ```python
    action = add_item_to_cart(DUMMY_PRODUCTS[0])
    action.type  # "cart/add_item"
    new_cart = cart_slice.reduce(CartState(), action)
    ```
"""

from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Generic, Mapping, TypeVar

from .models import CartItem, CartState, Notification, Product, UiState

S = TypeVar("S")

Reducer = Callable[[S, Any], S]


class UnknownActionError(KeyError):
    """Raised when an action is dispatched that no slice reducer handles."""


@dataclass(frozen=True)
class Action:
    type: str
    payload: Any = None

    @property
    def slice_name(self) -> str:
        return self.type.partition("/")[0]

    @property
    def reducer_name(self) -> str:
        return self.type.partition("/")[2]


class Slice(Generic[S]):
    """A named state slice with an initial value and its reducers."""

    def __init__(self, name: str, initial_state: S, reducers: Mapping[str, Reducer]):
        self.name = name
        self.initial_state = initial_state
        self._reducers: Dict[str, Reducer] = dict(reducers)

    def action(self, reducer_name: str, payload: Any = None) -> Action:
        if reducer_name not in self._reducers:
            raise UnknownActionError(f"{self.name}/{reducer_name}")
        return Action(type=f"{self.name}/{reducer_name}", payload=payload)

    def reduce(self, state: S, action: Action) -> S:
        try:
            reducer = self._reducers[action.reducer_name]
        except KeyError:
            raise UnknownActionError(action.type) from None
        return reducer(state, action.payload)

    def __repr__(self) -> str:
        return f"Slice({self.name!r}, reducers={sorted(self._reducers)})"


# ============================================================================
# Cart slice
# ============================================================================


def _add_item(state: CartState, product: Product) -> CartState:
    existing = state.find(product.id)
    if existing is None:
        return CartState(items=state.items + (CartItem.from_product(product),))
    return CartState(
        items=tuple(
            item.with_quantity(item.quantity + 1) if item.id == product.id else item
            for item in state.items
        )
    )


def _remove_item(state: CartState, item_id: str) -> CartState:
    existing = state.find(item_id)
    if existing is None:
        return state
    if existing.quantity == 1:
        return CartState(items=tuple(item for item in state.items if item.id != item_id))
    return CartState(
        items=tuple(
            item.with_quantity(item.quantity - 1) if item.id == item_id else item
            for item in state.items
        )
    )


def _replace_cart(state: CartState, cart: CartState) -> CartState:
    return cart


cart_slice: Slice[CartState] = Slice(
    "cart",
    CartState(),
    {
        "add_item": _add_item,
        "remove_item": _remove_item,
        "replace_cart": _replace_cart,
    },
)


# ============================================================================
# UI slice
# ============================================================================


def _toggle(state: UiState, _payload: Any) -> UiState:
    return replace(state, cart_is_visible=not state.cart_is_visible)


def _show_notification(state: UiState, notification: Notification) -> UiState:
    return replace(state, notification=notification)


def _clear_notification(state: UiState, _payload: Any) -> UiState:
    return replace(state, notification=None)


ui_slice: Slice[UiState] = Slice(
    "ui",
    UiState(),
    {
        "toggle": _toggle,
        "show_notification": _show_notification,
        "clear_notification": _clear_notification,
    },
)


# Action creators
def add_item_to_cart(product: Product) -> Action:
    return cart_slice.action("add_item", product)


def remove_item_from_cart(item_id: str) -> Action:
    return cart_slice.action("remove_item", item_id)


def replace_cart(cart: CartState) -> Action:
    return cart_slice.action("replace_cart", cart)


def toggle_cart() -> Action:
    return ui_slice.action("toggle")


def show_notification(notification: Notification) -> Action:
    return ui_slice.action("show_notification", notification)


def clear_notification() -> Action:
    return ui_slice.action("clear_notification")
