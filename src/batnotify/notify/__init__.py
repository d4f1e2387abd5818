"""Notify package - desktop notification backends and the low-battery state machine."""

from batnotify.notify.manager import LowBatteryNotifier
from batnotify.notify.protocols import MockNotificationBackend, NotificationBackend

__all__ = ["LowBatteryNotifier", "MockNotificationBackend", "NotificationBackend"]
