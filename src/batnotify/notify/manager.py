"""Low-battery notification state machine."""

from __future__ import annotations

import logging
from typing import Any, Final

from batnotify.common.enums import Urgency
from batnotify.errors import NotificationError
from batnotify.notify.protocols import NotificationBackend

logger: Final = logging.getLogger(__name__)


class LowBatteryNotifier:
    """Keeps at most one low-battery notification on screen.

    Two states:
    - Idle: no notification is visible
    - Active: a notification is visible and is updated in place

    The handle created on the first ``notify`` is reused for the lifetime
    of the notifier, so repeated warnings never stack up.
    """

    def __init__(self, backend: NotificationBackend, urgency: Urgency = Urgency.NORMAL) -> None:
        """Initialize with a notification backend.

        Args:
            backend: Service used to create, update, show and close notifications
            urgency: Urgency applied when the notification is created
        """
        self.backend = backend
        self.urgency = urgency
        self._handle: Any | None = None
        self._active = False

    @property
    def active(self) -> bool:
        """Return True while a notification is visible."""
        return self._active

    def notify(self, message: str) -> None:
        """Show ``message``, creating the notification or updating it in place.

        Args:
            message: Notification text
        """
        try:
            if self._handle is None:
                self._handle = self.backend.create(message, self.urgency)
            else:
                self.backend.update(self._handle, message)
            self.backend.show(self._handle)
        except NotificationError as exc:
            logger.warning("%s: %s", exc, exc.original_error)
            return

        if not self._active:
            logger.info("Low battery notification shown: %s", message)
        self._active = True

    def dismiss(self) -> None:
        """Close the notification if one is visible; no-op otherwise."""
        if not self._active:
            return

        # Mark idle first so a failed close is never retried
        self._active = False
        try:
            self.backend.close(self._handle)
        except NotificationError as exc:
            logger.warning("%s: %s", exc, exc.original_error)
            return
        logger.info("Low battery notification closed")

    def release(self) -> None:
        """Dismiss any visible notification and release the backend."""
        self.dismiss()
        self._handle = None
        self.backend.shutdown()
