"""Tests for the batnotify command-line front-end."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from batnotify.cli import app
from batnotify.common.enums import Urgency
from batnotify.errors import DeviceNotFoundError, SysfsReadError
from batnotify.notify.protocols import MockNotificationBackend
from batnotify.scheduler import BatteryMonitor
from batnotify.system.sysfs import BatteryDevice

runner = CliRunner()


@pytest.fixture
def started() -> Generator[dict[str, Any], None, None]:
    """Capture the monitor the CLI builds instead of running the loop."""
    captured: dict[str, Any] = {}

    def fake_run(self: BatteryMonitor) -> None:
        captured["monitor"] = self

    with (
        patch.object(BatteryDevice, "locate", return_value=BatteryDevice(Path("/fake/BAT0"))),
        patch("batnotify.cli.LibnotifyBackend", MagicMock()),
        patch.object(BatteryMonitor, "install_signal_handlers") as handlers,
        patch.object(BatteryMonitor, "run", fake_run),
    ):
        captured["handlers"] = handlers
        yield captured


def test_no_arguments_prints_usage() -> None:
    result = runner.invoke(app, [])
    assert result.exit_code == 0
    assert "Usage" in result.stdout


@pytest.mark.parametrize("flag", ["-h", "--help"])
def test_help_flags(flag: str) -> None:
    result = runner.invoke(app, [flag])
    assert result.exit_code == 0
    assert "Usage" in result.stdout


@pytest.mark.parametrize("value", ["0", "150", "100.5"])
def test_threshold_out_of_range_fails(value: str, started: dict[str, Any]) -> None:
    result = runner.invoke(app, ["-p", value])
    assert result.exit_code == 1
    assert "Usage" in result.stdout
    assert "monitor" not in started


def test_bogus_urgency_fails(started: dict[str, Any]) -> None:
    result = runner.invoke(app, ["-p", "20", "-u", "bogus"])
    assert result.exit_code == 1
    assert "Usage" in result.stdout
    assert "monitor" not in started


def test_valid_threshold_starts_monitor(started: dict[str, Any]) -> None:
    result = runner.invoke(app, ["-p", "25.5"])
    assert result.exit_code == 0
    monitor = started["monitor"]
    assert monitor.settings.threshold == 25.5
    assert monitor.settings.urgency is Urgency.NORMAL
    started["handlers"].assert_called_once_with()


def test_critical_urgency(started: dict[str, Any]) -> None:
    result = runner.invoke(app, ["-p", "20", "-u", "critical"])
    assert result.exit_code == 0
    monitor = started["monitor"]
    assert monitor.settings.urgency is Urgency.CRITICAL
    assert monitor.notifier.urgency is Urgency.CRITICAL


def test_defaults_flag(started: dict[str, Any]) -> None:
    result = runner.invoke(app, ["-d"])
    assert result.exit_code == 0
    assert started["monitor"].settings.threshold == 30.0


def test_urgency_only_uses_default_threshold(started: dict[str, Any]) -> None:
    result = runner.invoke(app, ["-u", "low"])
    assert result.exit_code == 0
    assert started["monitor"].settings.threshold == 30.0
    assert started["monitor"].settings.urgency is Urgency.LOW


def test_strict_flag(started: dict[str, Any]) -> None:
    result = runner.invoke(app, ["-d", "--strict"])
    assert result.exit_code == 0
    assert started["monitor"].settings.strict is True


def test_missing_battery_fails() -> None:
    with patch.object(
        BatteryDevice, "locate", side_effect=DeviceNotFoundError(Path("/sys/class/power_supply"))
    ):
        result = runner.invoke(app, ["-d"])
    assert result.exit_code == 1
    assert "No battery device found" in result.output


def test_fatal_read_error_fails() -> None:
    def failing_run(self: BatteryMonitor) -> None:
        raise SysfsReadError(Path("/fake/BAT0/status"))

    with (
        patch.object(BatteryDevice, "locate", return_value=BatteryDevice(Path("/fake/BAT0"))),
        patch("batnotify.cli.LibnotifyBackend", MagicMock()),
        patch.object(BatteryMonitor, "install_signal_handlers"),
        patch.object(BatteryMonitor, "run", failing_run),
    ):
        result = runner.invoke(app, ["-d", "--strict"])
    assert result.exit_code == 1
    assert "Unable to read /fake/BAT0/status" in result.output


def test_sigterm_closes_notification_and_exits_cleanly(
    battery, signalling_backend: MockNotificationBackend, restore_signal_handlers: None
) -> None:
    battery.set(now="10000000\n")

    with (
        patch.object(BatteryDevice, "locate", return_value=BatteryDevice(battery.path)),
        patch("batnotify.cli.LibnotifyBackend", return_value=signalling_backend),
    ):
        result = runner.invoke(app, ["-p", "20", "-u", "critical"])

    assert result.exit_code == 0
    assert signalling_backend.count("create") == 1
    assert signalling_backend.count("close") == 1
    assert signalling_backend.visible == {}
    assert signalling_backend.urgencies == {1: Urgency.CRITICAL}
