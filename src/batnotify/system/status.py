from dataclasses import dataclass

from batnotify.constants import MESSAGE_SUFFIX


def compute_percentage(now: float, full: float) -> float:
    """Return ``now / full * 100``, or 0.0 when either reading is not positive."""
    if now > 0.0 and full > 0.0:
        return now / full * 100.0
    return 0.0


@dataclass
class BatteryStatus:
    """Battery state observed during one poll tick.

    ``now`` and ``full`` stay at 0.0 when the device is not discharging,
    since the level files are only read while on battery power. A
    percentage of 0.0 means "unknown" and never triggers a notification.
    """

    discharging: bool
    now: float = 0.0
    full: float = 0.0

    @property
    def percentage(self) -> float:
        """Charge percentage, 0.0 if unknown."""
        return compute_percentage(self.now, self.full)

    def is_low(self, threshold: float) -> bool:
        """Return True if the notification condition holds for ``threshold``."""
        return self.discharging and 0.0 < self.percentage <= threshold

    @property
    def message(self) -> str:
        """Notification text, e.g. ``"12.3% BATTERY LEVEL"``."""
        return f"{self.percentage:.1f}{MESSAGE_SUFFIX}"
