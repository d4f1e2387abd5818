"""System module for reading battery state from sysfs."""

from batnotify.system.status import BatteryStatus, compute_percentage
from batnotify.system.sysfs import BatteryDevice, read_attribute, read_value

__all__ = [
    "BatteryDevice",
    "BatteryStatus",
    "compute_percentage",
    "read_attribute",
    "read_value",
]
