"""
cartsync Models
===============

Immutable data structures for the cart application state.

All state values are frozen dataclasses. Reducers never mutate a value in
place; they return a new instance, so a change of the cart is always a
change of the value the store holds, and an unchanged cart compares equal
to the previous one.

The cart's JSON representation (`CartState.to_dict()`) is the document that
is written to the remote datastore.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class Product:
    """A product offered in the shop."""

    id: str
    title: str
    price: float
    description: str = ""


DUMMY_PRODUCTS: Tuple[Product, ...] = (
    Product(
        id="p1",
        title="My First Book",
        price=6.0,
        description="The first book I ever wrote",
    ),
    Product(
        id="p2",
        title="My Second Book",
        price=5.0,
        description="The second book I ever wrote",
    ),
)


@dataclass(frozen=True)
class CartItem:
    """One line of the cart: a product and how many units of it."""

    id: str
    name: str
    price: float
    quantity: int = 1

    @property
    def total_price(self) -> float:
        return self.price * self.quantity

    @classmethod
    def from_product(cls, product: Product) -> "CartItem":
        return cls(id=product.id, name=product.title, price=product.price)

    def with_quantity(self, quantity: int) -> "CartItem":
        return replace(self, quantity=quantity)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "quantity": self.quantity,
            "totalPrice": self.total_price,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CartItem":
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", "")),
            price=float(data["price"]),
            quantity=int(data.get("quantity", 1)),
        )


@dataclass(frozen=True)
class CartState:
    """
    The items currently in the shopping cart.

    Totals are derived from the items and are never stored separately, so
    they cannot drift out of sync with the lines.
    """

    items: Tuple[CartItem, ...] = ()

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def total_amount(self) -> float:
        return sum(item.total_price for item in self.items)

    def find(self, item_id: str) -> Optional[CartItem]:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "items": [item.to_dict() for item in self.items],
            "totalQuantity": self.total_quantity,
            "totalAmount": self.total_amount,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "CartState":
        if not data:
            return cls()
        return cls(items=tuple(CartItem.from_dict(item) for item in data.get("items") or ()))


class NotificationStatus(str, Enum):
    PENDING = "pending"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    """A status message about the most recent synchronization attempt."""

    status: NotificationStatus
    title: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"status": self.status.value, "title": self.title, "message": self.message}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Notification":
        return cls(
            status=NotificationStatus(data["status"]),
            title=str(data["title"]),
            message=str(data["message"]),
        )


SENDING_NOTIFICATION = Notification(
    status=NotificationStatus.PENDING,
    title="Sending...",
    message="Sending cart data",
)
SUCCESS_NOTIFICATION = Notification(
    status=NotificationStatus.SUCCESS,
    title="Success!",
    message="Sent cart data successfully",
)
ERROR_NOTIFICATION = Notification(
    status=NotificationStatus.ERROR,
    title="Error!",
    message="Sent cart data failed",
)


@dataclass(frozen=True)
class UiState:
    cart_is_visible: bool = False
    notification: Optional[Notification] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cartIsVisible": self.cart_is_visible,
            "notification": self.notification.to_dict() if self.notification else None,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "UiState":
        if not data:
            return cls()
        notification = data.get("notification")
        return cls(
            cart_is_visible=bool(data.get("cartIsVisible", False)),
            notification=Notification.from_dict(notification) if notification else None,
        )


@dataclass(frozen=True)
class AppState:
    """Immutable snapshot of the whole store at one point in time."""

    cart: CartState = field(default_factory=CartState)
    ui: UiState = field(default_factory=UiState)
