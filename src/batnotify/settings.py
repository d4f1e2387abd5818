"""Runtime settings assembled from command-line flags."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from batnotify.common.enums import Urgency
from batnotify.constants import (
    DEFAULT_THRESHOLD,
    LONG_INTERVAL,
    POWER_SUPPLY_DIR,
    SHORT_INTERVAL,
)
from batnotify.errors import ConfigurationError


class MonitorSettings(BaseModel):
    """Settings for the battery monitor, fixed for the process lifetime.

    Only ``threshold`` and ``urgency`` are exposed on the command line; the
    remaining fields exist so tests can point the monitor at a fake sysfs
    tree and shorten the poll intervals.
    """

    model_config = ConfigDict(frozen=True)

    threshold: float = Field(
        DEFAULT_THRESHOLD,
        gt=0,
        le=100,
        description="Battery % at or below which the notification is shown",
    )
    urgency: Urgency = Field(Urgency.NORMAL, description="Notification urgency")
    strict: bool = Field(False, description="Treat any sysfs read error as fatal")

    short_interval: float = Field(SHORT_INTERVAL, gt=0, description="Poll interval (seconds)")
    long_interval: float = Field(
        LONG_INTERVAL,
        gt=0,
        description="Poll interval (seconds) when charge is well above the threshold",
    )
    power_supply_dir: Path = Field(POWER_SUPPLY_DIR, description="Power-supply class directory")

    @model_validator(mode="after")
    def check_interval_order(self) -> MonitorSettings:
        if self.long_interval < self.short_interval:
            raise ValueError("long_interval cannot be shorter than short_interval")
        return self

    @classmethod
    def from_cli(
        cls,
        threshold: Optional[float] = None,
        urgency: Optional[str] = None,
        use_defaults: bool = False,
        strict: bool = False,
    ) -> MonitorSettings:
        """Build settings from raw command-line values.

        An explicit ``threshold`` wins over ``use_defaults``. When only an
        urgency is given the default threshold applies.

        Args:
            threshold: Value of ``-p`` (None when omitted)
            urgency: Value of ``-u`` (None when omitted)
            use_defaults: Whether ``-d`` was given
            strict: Whether ``--strict`` was given

        Returns:
            Validated MonitorSettings

        Raises:
            ConfigurationError: If the threshold or urgency is invalid
        """
        data: dict[str, object] = {"strict": strict}
        if threshold is not None:
            data["threshold"] = threshold
        elif use_defaults or urgency is not None:
            data["threshold"] = DEFAULT_THRESHOLD
        if urgency is not None:
            data["urgency"] = urgency

        try:
            return cls.model_validate(data)
        except ValidationError as err:
            details = [f"{'.'.join(str(p) for p in e['loc'])} - {e['msg']}" for e in err.errors()]
            raise ConfigurationError("Invalid settings", details) from err
