from __future__ import annotations

import queue
import threading
from typing import Callable, Optional

from .model import ChangeEvent

Predicate = Callable[[ChangeEvent], bool]


class Subscription:
    """Ordered stream of change events for one collection (+ optional filter).

    Events are buffered until the consumer polls them; call `unsubscribe()`
    (or leave the `with` block) to stop receiving.
    """

    def __init__(self, feed: "ChangeFeed", collection: str, predicate: Optional[Predicate] = None):
        self._feed = feed
        self._queue: "queue.Queue[ChangeEvent]" = queue.Queue()
        self.collection = collection
        self.predicate = predicate
        self.active = True

    def matches(self, event: ChangeEvent) -> bool:
        if event.collection != self.collection:
            return False
        return self.predicate is None or bool(self.predicate(event))

    def deliver(self, event: ChangeEvent) -> None:
        self._queue.put(event)

    def get(self, timeout: Optional[float] = None) -> Optional[ChangeEvent]:
        """Next event; waits up to `timeout` seconds, or returns at once when None."""
        try:
            return self._queue.get(block=timeout is not None, timeout=timeout)
        except queue.Empty:
            return None

    def drain(self) -> list[ChangeEvent]:
        events = []
        while True:
            event = self.get()
            if event is None:
                return events
            events.append(event)

    def unsubscribe(self) -> None:
        if self.active:
            self._feed.remove(self)
            self.active = False

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc) -> None:
        self.unsubscribe()


class ChangeFeed:
    def __init__(self):
        self._subscriptions: list[Subscription] = []
        self._lock = threading.Lock()

    def subscribe(self, collection: str, *, predicate: Optional[Predicate] = None) -> Subscription:
        sub = Subscription(self, collection, predicate)
        with self._lock:
            self._subscriptions.append(sub)
        return sub

    def remove(self, sub: Subscription) -> None:
        with self._lock:
            if sub in self._subscriptions:
                self._subscriptions.remove(sub)

    def publish(self, event: ChangeEvent) -> None:
        with self._lock:
            targets = list(self._subscriptions)
        for sub in targets:
            if sub.matches(event):
                sub.deliver(event)
