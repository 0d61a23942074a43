"""Notifications — short-lived toast messages.

Each notification carries an expiry timestamp.  Expired entries are
dropped lazily whenever the queue is read, so no timer is needed.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from itertools import count

LEVELS = ("info", "success", "warning", "error")


@dataclass(frozen=True)
class Notification:
    """A single toast.

    Attributes:
        id: Monotonic identifier, unique within a queue.
        message: Text shown to the player.
        level: One of ``info``, ``success``, ``warning``, ``error``.
        expires_at: Clock reading after which the toast is gone.
    """

    id: int
    message: str
    level: str
    expires_at: float


@dataclass
class NotificationQueue:
    """Time-scoped queue of toasts.

    Attributes:
        ttl: Seconds each notification stays visible.
        clock: Monotonic time source (injectable for tests).
    """

    ttl: float = 3.0
    clock: Callable[[], float] = time.monotonic
    _items: list[Notification] = field(default_factory=list, init=False, repr=False)
    _ids: count = field(default_factory=count, init=False, repr=False)

    def push(self, message: str, level: str = "info") -> Notification:
        """Add a toast that expires ``ttl`` seconds from now.

        Raises:
            ValueError: If ``level`` is not a known level.
        """
        if level not in LEVELS:
            msg = f"unknown notification level {level!r}"
            raise ValueError(msg)
        note = Notification(
            id=next(self._ids),
            message=message,
            level=level,
            expires_at=self.clock() + self.ttl,
        )
        self._items.append(note)
        return note

    def active(self) -> list[Notification]:
        """Return unexpired toasts, oldest first, sweeping the rest."""
        now = self.clock()
        self._items = [n for n in self._items if n.expires_at > now]
        return list(self._items)

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self.active())
