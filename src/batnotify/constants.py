from pathlib import Path

# Directory the kernel uses to enumerate power-supply devices
POWER_SUPPLY_DIR = Path("/sys/class/power_supply")

# Substring identifying a battery entry (BAT0, BAT1, ...)
BATTERY_NAME_MARKER = "BAT"

# Attribute file names inside a battery directory
STATUS_ATTRIBUTE = "status"
DISCHARGING_LABEL = "Discharging"

# (now, full) pairs, tried in order; charge_* is used by some firmware
LEVEL_ATTRIBUTES: tuple[tuple[str, str], ...] = (
    ("energy_now", "energy_full"),
    ("charge_now", "charge_full"),
)

# Poll intervals in seconds
SHORT_INTERVAL: float = 5.0
LONG_INTERVAL: float = 300.0

# Percentage points above the threshold where the long interval kicks in
LONG_INTERVAL_MARGIN: float = 10.0

# Threshold used by -d and when only -u is given
DEFAULT_THRESHOLD: float = 30.0

APP_NAME = "batnotify"
MESSAGE_SUFFIX = "% BATTERY LEVEL"
