"""Desktop notifications through libnotify (PyGObject)."""

from __future__ import annotations

import logging
from typing import Any, Final

from batnotify.common.enums import Urgency
from batnotify.constants import APP_NAME
from batnotify.errors import NotificationError

logger: Final = logging.getLogger(__name__)


class LibnotifyBackend:
    """libnotify notification backend.

    Notifications are created with ``EXPIRES_NEVER`` so they stay on screen
    until closed. The ``Notify`` namespace is loaded on first use; tests
    may inject a stand-in module instead.
    """

    def __init__(self, app_name: str = APP_NAME, notify_module: Any | None = None) -> None:
        """Initialize the backend.

        Args:
            app_name: Application name reported to the notification daemon
            notify_module: Optional pre-loaded ``gi.repository.Notify`` namespace
        """
        self.app_name = app_name
        self._notify: Any | None = notify_module
        self._initialized = False

    def _module(self) -> Any:
        if self._notify is None:
            # Import the GObject bindings only when a notification is needed
            try:
                import gi

                gi.require_version("Notify", "0.7")
                from gi.repository import Notify
            except (ImportError, ValueError) as exc:
                raise NotificationError("libnotify bindings are not available", exc) from exc

            self._notify = Notify

        if not self._initialized:
            if not self._notify.init(self.app_name):
                raise NotificationError("Unable to connect to the notification service")
            self._initialized = True
            logger.debug("libnotify initialized as %s", self.app_name)
        return self._notify

    def create(self, summary: str, urgency: Urgency) -> Any:
        """Create a persistent notification with the given urgency."""
        notify = self._module()
        notification = notify.Notification.new(summary, None, None)
        notification.set_app_name(self.app_name)
        notification.set_timeout(notify.EXPIRES_NEVER)
        notification.set_urgency(getattr(notify.Urgency, urgency.name))
        return notification

    def update(self, handle: Any, summary: str) -> None:
        handle.update(summary, None, None)

    def show(self, handle: Any) -> None:
        try:
            handle.show()
        except Exception as exc:  # GLib.Error from the D-Bus call
            raise NotificationError("Failed to show notification", exc) from exc

    def close(self, handle: Any) -> None:
        try:
            handle.close()
        except Exception as exc:
            raise NotificationError("Failed to close notification", exc) from exc

    def shutdown(self) -> None:
        """Uninitialize libnotify if it was initialized."""
        if self._initialized and self._notify is not None:
            self._notify.uninit()
            self._initialized = False
            logger.debug("libnotify uninitialized")
