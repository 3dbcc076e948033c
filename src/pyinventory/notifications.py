"""Transient notification center.

Holds at most one visible message.  A new message replaces the previous
one; a message disappears on its own once its TTL has elapsed.  Nothing is
kept after that.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from pyinventory.models.notification import Notification, NotificationLevel

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class NotificationCenter:
    def __init__(
        self,
        *,
        ttl: float = 6.0,
        clock: Callable[[], datetime] = _utcnow,
        on_notify: Callable[[Notification], None] | None = None,
    ) -> None:
        self._ttl = ttl
        self._clock = clock
        self._on_notify = on_notify
        self._current: Notification | None = None

    def push(self, message: str, level: NotificationLevel = NotificationLevel.INFO) -> Notification:
        notification = Notification(message=message, level=level, created_at=self._clock(), ttl=self._ttl)
        self._current = notification
        if self._on_notify is not None:
            try:
                self._on_notify(notification)
            except Exception:
                _logger.debug("on_notify callback failed", exc_info=True)
        return notification

    def success(self, message: str) -> Notification:
        return self.push(message, NotificationLevel.SUCCESS)

    def error(self, message: str) -> Notification:
        return self.push(message, NotificationLevel.ERROR)

    @property
    def current(self) -> Notification | None:
        """The visible notification, or ``None`` once dismissed or expired."""
        notification = self._current
        if notification is None:
            return None
        if notification.is_expired(self._clock()):
            self._current = None
            return None
        return notification

    def dismiss(self) -> None:
        self._current = None
