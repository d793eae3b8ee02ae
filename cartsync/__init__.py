"""
cartsync - Reactive Shopping Cart with Remote Synchronization

A small terminal shopping cart whose state lives in a reactive store and is
written to a remote JSON datastore every time the cart changes.
"""

from .app import CartApp
from .client import CartClient, SynchronizationFailed
from .config import Settings, load_settings
from .models import (
    DUMMY_PRODUCTS,
    ERROR_NOTIFICATION,
    SENDING_NOTIFICATION,
    SUCCESS_NOTIFICATION,
    AppState,
    CartItem,
    CartState,
    Notification,
    NotificationStatus,
    Product,
    UiState,
)
from .observable import Observable, transaction
from .slices import (
    Action,
    Slice,
    UnknownActionError,
    add_item_to_cart,
    clear_notification,
    remove_item_from_cart,
    replace_cart,
    show_notification,
    toggle_cart,
)
from .store import CartStore

__all__ = [
    # Reactive core
    "Observable",
    "transaction",
    # State container
    "CartStore",
    "Action",
    "Slice",
    "UnknownActionError",
    # Action creators
    "add_item_to_cart",
    "remove_item_from_cart",
    "replace_cart",
    "toggle_cart",
    "show_notification",
    "clear_notification",
    # Models
    "AppState",
    "CartItem",
    "CartState",
    "Notification",
    "NotificationStatus",
    "Product",
    "UiState",
    "DUMMY_PRODUCTS",
    "SENDING_NOTIFICATION",
    "SUCCESS_NOTIFICATION",
    "ERROR_NOTIFICATION",
    # Synchronization
    "CartApp",
    "CartClient",
    "SynchronizationFailed",
    # Configuration
    "Settings",
    "load_settings",
]
