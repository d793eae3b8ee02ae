"""
cartsync Observable - Reactive Slice Container
==============================================

This module provides the reactive value that backs every slice of the cart
store. An Observable holds a single value and notifies its observers when a
new, different value is set.

Notifications are delivered breadth-first through a thread-local queue, so
an observer that sets another observable (for example the synchronization
effect writing a notification while the cart is being propagated) never
recurses into a nested notification cycle. Updates made inside a
transaction are delivered once the outermost transaction exits.
"""

import logging
import threading
from collections import deque
from typing import Any, Callable, Generic, Optional, Set, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


class PropagationContext:
    """Manages breadth-first change propagation to prevent stack overflow."""

    _local = threading.local()

    @classmethod
    def _get_state(cls) -> dict:
        if not hasattr(cls._local, "state"):
            cls._local.state = {"is_propagating": False, "pending": deque()}
        return cls._local.state

    @classmethod
    def _enqueue_notification(
        cls, observer: Callable, observable: "Observable", value: Any
    ) -> None:
        cls._get_state()["pending"].append((observer, observable, value))

    @classmethod
    def _process_notifications(cls) -> None:
        state = cls._get_state()
        if state["is_propagating"] or TransactionContext._get_active():
            return

        state["is_propagating"] = True
        try:
            while state["pending"]:
                observer, observable, value = state["pending"].popleft()
                # Observers removed after enqueueing are skipped
                if not observable.has_observer(observer):
                    continue
                observer(value)
        except BaseException:
            # Leftover notifications belong to the failed round
            state["pending"].clear()
            raise
        finally:
            state["is_propagating"] = False


class TransactionContext:
    """Batches observable updates and flushes notifications on commit."""

    _local = threading.local()

    @classmethod
    def _get_active(cls) -> list:
        if not hasattr(cls._local, "active"):
            cls._local.active = []
        return cls._local.active

    def __enter__(self):
        self._get_active().append(self)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        active = self._get_active()
        active.pop()
        if not active:
            PropagationContext._process_notifications()


def transaction() -> TransactionContext:
    """Group several updates so observers run after all of them are applied."""
    return TransactionContext()


class Observable(Generic[T]):
    """
    A reactive value that notifies its observers when it changes.

    Example:
        ```python
        cart = Observable("cart", CartState())
        cart.subscribe(lambda value: print(value.total_quantity))
        cart.set(new_cart)  # prints the new total
        ```
    """

    def __init__(self, key: Optional[str] = None, initial_value: Optional[T] = None):
        self._key = key or "<unnamed>"
        self._value = initial_value
        self._observers: Set[Callable[[T], None]] = set()
        self._lock = threading.RLock()

    @property
    def key(self) -> str:
        return self._key

    @property
    def value(self) -> Optional[T]:
        return self._value

    def set(self, value: Optional[T]) -> "Observable[T]":
        old_value = self._value
        self._value = value
        if old_value != value:
            self._notify_observers(value)
        return self

    def add_observer(self, observer: Callable[[T], None]) -> None:
        with self._lock:
            self._observers.add(observer)

    def remove_observer(self, observer: Callable[[T], None]) -> None:
        with self._lock:
            self._observers.discard(observer)

    def has_observer(self, observer: Callable[[T], None]) -> bool:
        with self._lock:
            return observer in self._observers

    def subscribe(self, func: Callable[[T], None]) -> "Observable[T]":
        self.add_observer(func)
        return self

    def unsubscribe(self, func: Callable[[T], None]) -> None:
        self.remove_observer(func)

    def _notify_observers(self, value: Optional[T]) -> None:
        with self._lock:
            observers_snapshot = tuple(self._observers)

        logger.debug(
            "Observable %s changed, notifying %d observer(s)",
            self._key,
            len(observers_snapshot),
        )
        for observer in observers_snapshot:
            PropagationContext._enqueue_notification(observer, self, value)
        PropagationContext._process_notifications()

    @classmethod
    def _reset_notification_state(cls) -> None:
        PropagationContext._local.__dict__.clear()
        TransactionContext._local.__dict__.clear()

    def __repr__(self) -> str:
        return f"Observable({self._key!r}, {self._value!r})"
