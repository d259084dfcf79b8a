"""Single-flight notification queue."""

from __future__ import annotations

from collections import deque

from pysmarthelp.models.notification import Notification


class NotificationQueue:
    """FIFO buffer plus one "currently displayed" slot.

    At most one notification is current at any time.  Enqueueing while the
    slot is empty promotes the notification straight into it; ``dismiss()``
    promotes the next waiting notification, if any.  Order is never changed
    and nothing is de-duplicated here.
    """

    def __init__(self) -> None:
        self._current: Notification | None = None
        self._pending: deque[Notification] = deque()

    def enqueue(self, notification: Notification) -> None:
        if self._current is None:
            self._current = notification
        else:
            self._pending.append(notification)

    def current(self) -> Notification | None:
        return self._current

    def dismiss(self) -> Notification | None:
        """Drop the current notification and return the one promoted in its place."""
        self._current = self._pending.popleft() if self._pending else None
        return self._current

    def clear(self) -> None:
        self._current = None
        self._pending.clear()

    @property
    def pending_count(self) -> int:
        """Number of notifications waiting behind the current one."""
        return len(self._pending)

    def __len__(self) -> int:
        return len(self._pending) + (1 if self._current is not None else 0)
