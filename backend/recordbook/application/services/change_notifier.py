"""Change notifier — in-process, synchronous broadcaster for store mutations."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

logger = logging.getLogger(__name__)


class ChangeAction(str, Enum):
    ADDED = "added"
    UPDATED = "updated"
    DELETED = "deleted"


@dataclass(frozen=True)
class RecordChange:
    """What changed in the collection; observers re-read the store for details."""

    action: ChangeAction
    record_ids: tuple[str, ...] = field(default_factory=tuple)


ChangeCallback = Callable[[RecordChange], None]


class ChangeNotifier:
    """Keeps a list of subscriber callbacks and calls each one per change.

    Delivery is synchronous, in subscription order, on the caller's thread.
    A subscriber that raises is disconnected; the others still get the event.
    """

    def __init__(self) -> None:
        self._subscribers: list[ChangeCallback] = []

    def subscribe(self, callback: ChangeCallback) -> Callable[[], None]:
        """Register a callback. Returns a function that unsubscribes it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def broadcast(self, change: RecordChange) -> None:
        """Deliver a change to every subscriber."""
        dead: list[ChangeCallback] = []

        for callback in list(self._subscribers):
            try:
                callback(change)
            except Exception:
                logger.exception("Change subscriber failed — disconnecting")
                dead.append(callback)

        for callback in dead:
            # a callback may have unsubscribed itself before raising
            if callback in self._subscribers:
                self._subscribers.remove(callback)

    def clear(self) -> None:
        """Disconnect all subscribers."""
        self._subscribers.clear()

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)
