from __future__ import annotations

import os
import signal
from collections.abc import Generator
from pathlib import Path

import pytest

from batnotify.notify.manager import LowBatteryNotifier
from batnotify.notify.protocols import MockNotificationBackend
from batnotify.settings import MonitorSettings
from batnotify.system.sysfs import BatteryDevice


class FakeBattery:
    """Writable stand-in for a /sys/class/power_supply/BAT0 directory."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.path.mkdir(parents=True)

    def set(
        self,
        status: str = "Discharging\n",
        now: str | None = "50000000\n",
        full: str | None = "100000000\n",
        prefix: str = "energy",
    ) -> None:
        (self.path / "status").write_text(status)
        if now is not None:
            (self.path / f"{prefix}_now").write_text(now)
        if full is not None:
            (self.path / f"{prefix}_full").write_text(full)


@pytest.fixture
def power_supply(tmp_path: Path) -> Path:
    root = tmp_path / "power_supply"
    (root / "AC").mkdir(parents=True)
    (root / "AC" / "online").write_text("0\n")
    return root


@pytest.fixture
def battery(power_supply: Path) -> FakeBattery:
    fake = FakeBattery(power_supply / "BAT0")
    fake.set()
    return fake


@pytest.fixture
def device(battery: FakeBattery) -> BatteryDevice:
    return BatteryDevice(battery.path)


@pytest.fixture
def backend() -> MockNotificationBackend:
    return MockNotificationBackend()


@pytest.fixture
def notifier(backend: MockNotificationBackend) -> LowBatteryNotifier:
    return LowBatteryNotifier(backend)


@pytest.fixture
def settings(power_supply: Path) -> MonitorSettings:
    return MonitorSettings(
        threshold=30.0,
        short_interval=5.0,
        long_interval=300.0,
        power_supply_dir=power_supply,
    )


@pytest.fixture
def restore_signal_handlers() -> Generator[None, None, None]:
    """Put back the SIGINT/SIGTERM handlers a test installed."""
    saved = {signum: signal.getsignal(signum) for signum in (signal.SIGINT, signal.SIGTERM)}
    yield
    for signum, handler in saved.items():
        signal.signal(signum, handler)


class SignalOnShowBackend(MockNotificationBackend):
    """Sends SIGTERM to this process the first time a notification is shown."""

    def show(self, handle: int) -> None:
        super().show(handle)
        if self.count("show") == 1:
            os.kill(os.getpid(), signal.SIGTERM)


@pytest.fixture
def signalling_backend() -> SignalOnShowBackend:
    return SignalOnShowBackend()
