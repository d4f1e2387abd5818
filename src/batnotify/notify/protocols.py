# src/batnotify/notify/protocols.py
from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from batnotify.common.enums import Urgency
from batnotify.errors import NotificationError


@runtime_checkable
class NotificationBackend(Protocol):
    """Protocol defining the interface for desktop notification services.

    This protocol abstracts the notification daemon so the low-battery
    state machine can be exercised without a session bus. Handles are
    opaque to callers; only the backend that created a handle may use it.
    """

    def create(self, summary: str, urgency: Urgency) -> Any:
        """Create a persistent notification without showing it.

        Args:
            summary: Notification text
            urgency: Urgency hint for the notification daemon

        Returns:
            Backend-specific notification handle
        """
        ...

    def update(self, handle: Any, summary: str) -> None:
        """Replace the text of an existing notification."""
        ...

    def show(self, handle: Any) -> None:
        """Show (or re-show) a notification."""
        ...

    def close(self, handle: Any) -> None:
        """Close a notification."""
        ...

    def shutdown(self) -> None:
        """Release the connection to the notification service."""
        ...


class MockNotificationBackend:
    """Mock implementation of NotificationBackend for testing."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, ...]] = []
        self.visible: dict[int, str] = {}
        self.urgencies: dict[int, Urgency] = {}
        self.shutdown_called = False
        self._next_handle = 0
        self._pending: dict[int, str] = {}

    def create(self, summary: str, urgency: Urgency) -> int:
        """Record the call and hand out a new integer handle."""
        self._next_handle += 1
        handle = self._next_handle
        self.calls.append(("create", summary))
        self.urgencies[handle] = urgency
        self._pending[handle] = summary
        return handle

    def update(self, handle: int, summary: str) -> None:
        self.calls.append(("update", summary))
        self._pending[handle] = summary

    def show(self, handle: int) -> None:
        self.calls.append(("show",))
        self.visible[handle] = self._pending.get(handle, self.visible.get(handle, ""))

    def close(self, handle: int) -> None:
        self.calls.append(("close",))
        self.visible.pop(handle, None)

    def shutdown(self) -> None:
        self.shutdown_called = True

    def count(self, method: str) -> int:
        """Return how many times ``method`` was called."""
        return sum(1 for call in self.calls if call[0] == method)

    def reset_call_history(self) -> None:
        """Reset the call history for testing."""
        self.calls = []


class ErrorSimulatingBackend(MockNotificationBackend):
    """Backend mock that can simulate notification daemon failures."""

    def __init__(self, fail_on_methods: list[str] | None = None) -> None:
        """Initialize with optional methods that should fail.

        Args:
            fail_on_methods: List of method names that should raise exceptions
        """
        super().__init__()
        self.fail_on_methods = fail_on_methods or []

    def create(self, summary: str, urgency: Urgency) -> int:
        """Either create a handle or raise an exception based on configuration."""
        if "create" in self.fail_on_methods:
            raise NotificationError("Simulated notification daemon failure")
        return super().create(summary, urgency)

    def show(self, handle: int) -> None:
        """Either record the call or raise an exception based on configuration."""
        if "show" in self.fail_on_methods:
            raise NotificationError("Simulated notification daemon failure")
        super().show(handle)

    def close(self, handle: int) -> None:
        """Either record the call or raise an exception based on configuration."""
        if "close" in self.fail_on_methods:
            raise NotificationError("Simulated notification daemon failure")
        super().close(handle)
