"""Low-battery desktop notifier for Linux sysfs batteries."""

__version__ = "0.1.0"
