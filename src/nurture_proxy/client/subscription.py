"""Change-handler subscriptions with explicit teardown."""

from typing import Callable, Generic, TypeVar

T = TypeVar("T")


class Subscription:
    """Handle returned by ``subscribe``; ``unsubscribe`` is idempotent."""

    def __init__(self, on_unsubscribe: Callable[[], None]):
        self._on_unsubscribe = on_unsubscribe
        self.active = True

    def unsubscribe(self) -> None:
        if not self.active:
            return
        self.active = False
        self._on_unsubscribe()


class Feed(Generic[T]):
    """Publishes snapshots of a value to registered handlers."""

    def __init__(self):
        self._handlers: dict[int, Callable[[T], None]] = {}
        self._next_id = 0

    def __len__(self) -> int:
        return len(self._handlers)

    def subscribe(self, handler: Callable[[T], None]) -> Subscription:
        handler_id = self._next_id
        self._next_id += 1
        self._handlers[handler_id] = handler
        return Subscription(lambda: self._handlers.pop(handler_id, None))

    def publish(self, snapshot: T) -> None:
        # Copy so handlers may unsubscribe while being notified
        for handler in list(self._handlers.values()):
            handler(snapshot)
