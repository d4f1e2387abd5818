"""Sysfs helpers: locating the battery and reading its attribute files."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from batnotify.constants import (
    BATTERY_NAME_MARKER,
    DISCHARGING_LABEL,
    LEVEL_ATTRIBUTES,
    POWER_SUPPLY_DIR,
    STATUS_ATTRIBUTE,
)
from batnotify.errors import DeviceNotFoundError, SysfsReadError

logger: Final = logging.getLogger(__name__)

_LEADING_NUMBER: Final = re.compile(r"\s*[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?")


def read_attribute(path: Path) -> str:
    """Read the full contents of a sysfs attribute file.

    Args:
        path: Attribute file

    Returns:
        Raw file contents, including any trailing newline

    Raises:
        SysfsReadError: If the file is missing or unreadable
    """
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SysfsReadError(path, exc) from exc


def parse_leading_number(text: str) -> float:
    """Parse the leading numeric token of ``text``; 0.0 when there is none."""
    match = _LEADING_NUMBER.match(text)
    if match is None:
        return 0.0
    return float(match.group())


def read_value(path: Path) -> float:
    """Read a numeric sysfs attribute.

    Args:
        path: Attribute file

    Returns:
        Parsed value, or 0.0 if the contents are not numeric

    Raises:
        SysfsReadError: If the file is missing or unreadable
    """
    return parse_leading_number(read_attribute(path))


def is_discharging_label(raw: str) -> bool:
    """Return True if a raw ``status`` value means the battery is discharging."""
    return raw.removesuffix("\n") == DISCHARGING_LABEL


@dataclass(frozen=True)
class BatteryDevice:
    """Resolved battery directory, e.g. ``/sys/class/power_supply/BAT0``."""

    path: Path

    @classmethod
    def locate(cls, power_supply_dir: Path = POWER_SUPPLY_DIR) -> BatteryDevice:
        """Find the first battery entry in the power-supply directory.

        Entries are checked in name order so the choice is stable across runs.

        Args:
            power_supply_dir: Directory listing power-supply devices

        Returns:
            The located BatteryDevice

        Raises:
            DeviceNotFoundError: If no entry name contains the battery marker
        """
        try:
            entries = sorted(os.listdir(power_supply_dir))
        except OSError as exc:
            raise DeviceNotFoundError(power_supply_dir) from exc

        for name in entries:
            if BATTERY_NAME_MARKER in name:
                device = cls(power_supply_dir / name)
                logger.info("Using battery device %s", device.path)
                return device

        raise DeviceNotFoundError(power_supply_dir)

    @property
    def name(self) -> str:
        return self.path.name

    def exists(self) -> bool:
        """Return True while the device directory is still present."""
        return self.path.is_dir()

    def attribute(self, name: str) -> Path:
        return self.path / name

    def read_status(self) -> str:
        """Return the raw ``status`` attribute."""
        return read_attribute(self.attribute(STATUS_ATTRIBUTE))

    def is_discharging(self) -> bool:
        """Return True if the device reports ``Discharging``."""
        return is_discharging_label(self.read_status())

    def read_levels(self) -> tuple[float, float]:
        """Read the current and full energy (or charge) levels.

        Uses the first attribute pair whose ``now`` file exists, so the
        same device always reports in one unit.

        Returns:
            Tuple of (now, full)

        Raises:
            SysfsReadError: If neither attribute pair can be read
        """
        for now_name, full_name in LEVEL_ATTRIBUTES:
            now_path = self.attribute(now_name)
            if now_path.exists():
                return read_value(now_path), read_value(self.attribute(full_name))

        # No known pair present: report the preferred attribute as missing
        return read_value(self.attribute(LEVEL_ATTRIBUTES[0][0])), 0.0
