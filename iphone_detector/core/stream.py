"""Replay stream — latest-value cell that pushes updates to subscribers."""

from __future__ import annotations

import logging
from typing import Callable, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Subscription:
    def __init__(self, release: Callable[[], None]):
        self._release: Optional[Callable[[], None]] = release

    @property
    def closed(self) -> bool:
        return self._release is None

    def unsubscribe(self) -> None:
        if self._release is None:
            return
        release, self._release = self._release, None
        release()


class ReplayStream(Generic[T]):
    """Keeps the last published value and replays it to new subscribers."""

    def __init__(self) -> None:
        self._latest: Optional[T] = None
        self._has_value = False
        self._subscribers: list[Callable[[T], None]] = []

    @property
    def latest(self) -> Optional[T]:
        return self._latest

    @property
    def has_value(self) -> bool:
        return self._has_value

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def publish(self, value: T) -> None:
        self._latest = value
        self._has_value = True
        for callback in list(self._subscribers):
            self._deliver(callback, value)

    def subscribe(self, callback: Callable[[T], None]) -> Subscription:
        """Register callback; it receives the latest value immediately if any."""
        self._subscribers.append(callback)

        def release() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        if self._has_value:
            self._deliver(callback, self._latest)
        return Subscription(release)

    def close(self) -> None:
        self._subscribers.clear()

    @staticmethod
    def _deliver(callback: Callable[[T], None], value: T) -> None:
        try:
            callback(value)
        except Exception:
            logger.warning(
                "Subscriber %r failed handling %r", callback, value, exc_info=True,
            )
