"""In-process change notification for live collection views."""

import logging
from collections import defaultdict
from typing import Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Unsubscribe = Callable[[], None]


class ChangeFeed(Generic[T]):
    """Per-user registry of callbacks notified with a fresh snapshot.

    The database calls :meth:`publish` after each committed write. Snapshots
    are loaded lazily, once per publish, and only if somebody is listening.
    """

    def __init__(self, name: str, load_snapshot: Callable[[str], list[T]]):
        """Initialize change feed.

        Args:
            name: Collection name, used in log messages
            load_snapshot: Callable returning the current collection for a user
        """
        self.name = name
        self._load_snapshot = load_snapshot
        self._listeners: dict[str, list[Callable[[list[T]], None]]] = defaultdict(list)

    def subscribe(self, user_id: str, on_change: Callable[[list[T]], None]) -> Unsubscribe:
        """Register a listener and deliver the current snapshot immediately.

        Returns:
            Callable that removes the listener; calling it twice is harmless
        """
        self._listeners[user_id].append(on_change)
        self._deliver(user_id, [on_change], self._load_snapshot(user_id))

        def unsubscribe() -> None:
            listeners = self._listeners.get(user_id)
            if listeners and on_change in listeners:
                listeners.remove(on_change)

        return unsubscribe

    def publish(self, user_id: str) -> None:
        """Notify all listeners of ``user_id`` with the current snapshot."""
        listeners = list(self._listeners.get(user_id, ()))
        if not listeners:
            return
        self._deliver(user_id, listeners, self._load_snapshot(user_id))

    def listener_count(self, user_id: str) -> int:
        """Number of active listeners for a user."""
        return len(self._listeners.get(user_id, ()))

    def _deliver(self, user_id: str, listeners: list[Callable[[list[T]], None]], snapshot: list[T]) -> None:
        for listener in listeners:
            try:
                listener(list(snapshot))
            except Exception:
                # A broken view must not fail the write that triggered it
                logger.exception("%s listener failed for user %s", self.name, user_id)
