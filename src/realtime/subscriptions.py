"""
Mexico - Observer Subscription Management

Keeps the callbacks that observe a game and delivers event payloads to
them. Callbacks run synchronously on the publishing thread.
"""

from __future__ import annotations

import itertools
import logging
import threading
from typing import Callable

from src.realtime.events import EventPayload

logger = logging.getLogger(__name__)


class SnapshotChannel:
    """Fan-out of game events to subscribed callbacks.

    The subscriber table is guarded by a lock and copied before each
    delivery, so callbacks may subscribe or unsubscribe while they are
    being notified. A failing callback is logged and skipped.
    """

    def __init__(self) -> None:
        self._subscribers: dict[int, Callable[[EventPayload], None]] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def subscribe(self, on_event: Callable[[EventPayload], None]) -> Callable[[], None]:
        """Register a callback.

        Args:
            on_event: Callback receiving an EventPayload for each event.

        Returns:
            A function that removes this subscription when called.
        """
        with self._lock:
            token = next(self._ids)
            self._subscribers[token] = on_event
        logger.debug("Subscriber %d added", token)
        return lambda: self.unsubscribe(token)

    def unsubscribe(self, token: int) -> None:
        """Remove a subscription; unknown tokens are ignored."""
        with self._lock:
            removed = self._subscribers.pop(token, None)
        if removed is not None:
            logger.debug("Subscriber %d removed", token)

    def publish(self, payload: EventPayload) -> int:
        """Deliver a payload to every subscriber.

        Returns:
            Number of callbacks that handled the payload without raising.
        """
        with self._lock:
            subscribers = list(self._subscribers.items())

        delivered = 0
        for token, on_event in subscribers:
            try:
                on_event(payload)
                delivered += 1
            except Exception:
                logger.exception("Subscriber %d failed handling %s", token, payload.event.name)
        return delivered

    def unsubscribe_all(self) -> None:
        with self._lock:
            self._subscribers.clear()

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)
