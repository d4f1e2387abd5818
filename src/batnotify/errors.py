"""Exception classes for battery monitoring.

This module defines a small hierarchy so the CLI can turn any expected
failure into a diagnostic and a non-zero exit code, while low-level
helpers stay free of process-exit calls.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class BatNotifyError(Exception):
    """Base class for all errors raised by batnotify."""


class ConfigurationError(BatNotifyError):
    """Raised when command-line settings fail validation.

    Carries one human-readable line per offending field so the CLI can
    report each of them.
    """

    def __init__(self, message: str, details: Optional[list[str]] = None) -> None:
        """Initialize the exception.

        Args:
            message: Summary of the problem
            details: Optional per-field messages
        """
        super().__init__(message)
        self.message: str = message
        self.details: list[str] = details or []


class DeviceNotFoundError(BatNotifyError):
    """Raised when no battery device can be located, or it has vanished."""

    def __init__(self, search_dir: Path) -> None:
        """Initialize with the directory that was searched.

        Args:
            search_dir: Directory expected to contain the battery entry
        """
        super().__init__(f"No battery device found in {search_dir}")
        self.search_dir = search_dir


class SysfsReadError(BatNotifyError):
    """Raised when a sysfs attribute file is missing or unreadable."""

    def __init__(self, path: Path, original_error: Optional[Exception] = None) -> None:
        """Initialize with read failure details.

        Args:
            path: Attribute file that could not be read
            original_error: The original exception that was caught
        """
        super().__init__(f"Unable to read {path}")
        self.path = path
        self.original_error = original_error


class NotificationError(BatNotifyError):
    """Raised when the desktop notification service rejects a request."""

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        """Initialize with notification failure details.

        Args:
            message: Description of the failure
            original_error: The original exception that was caught
        """
        super().__init__(message)
        self.original_error = original_error
