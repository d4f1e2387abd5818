"""Low-battery notifier CLI application.

This module provides the command-line interface: it validates the trigger
threshold and urgency, locates the battery, installs the termination
handlers and runs the poll loop until the process is asked to stop.
"""

from __future__ import annotations

import logging
import sys
from typing import Final, Optional

import typer

from batnotify.errors import BatNotifyError, ConfigurationError
from batnotify.notify.desktop import LibnotifyBackend
from batnotify.notify.manager import LowBatteryNotifier
from batnotify.scheduler import BatteryMonitor
from batnotify.settings import MonitorSettings
from batnotify.system.sysfs import BatteryDevice

# ── CLI setup ────────────────────────────────────────────────────────────────
app = typer.Typer(
    help="Trigger a notification when battery drops below a certain level.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)

logger: Final = logging.getLogger(__name__)  # Will be "batnotify.cli"

EPILOG = """\
Must use at least one of -p, -u or -d.

Examples: batnotify -p 20.0 -u critical | batnotify -p 30.0 -u normal | batnotify -d
"""

PERCENT_OPTION = typer.Option(
    None, "-p", help="Battery percentage (float) that triggers the notification."
)
URGENCY_OPTION = typer.Option(
    None,
    "-u",
    metavar="[low|normal|critical]",
    help="Urgency of the notification. Defaults to normal.",
)
DEFAULTS_OPTION = typer.Option(
    False, "-d", help="Default values: percentage 30.0, urgency normal."
)
STRICT_OPTION = typer.Option(
    False, "--strict", help="Exit on the first unreadable battery attribute."
)
DEBUG_OPTION = typer.Option(False, "--debug", help="Enable debug logging")


def _usage_error(ctx: typer.Context, exc: ConfigurationError) -> typer.Exit:
    typer.echo(ctx.get_help())
    typer.secho(f"{exc.message}:", fg=typer.colors.RED, err=True)
    for line in exc.details:
        typer.secho(f"  • {line}", fg=typer.colors.RED, err=True)
    return typer.Exit(code=1)


@app.command(epilog=EPILOG)
def main(
    ctx: typer.Context,
    percent: Optional[float] = PERCENT_OPTION,
    urgency: Optional[str] = URGENCY_OPTION,
    defaults: bool = DEFAULTS_OPTION,
    strict: bool = STRICT_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Watch the battery and warn when it runs low."""
    if percent is None and urgency is None and not defaults:
        typer.echo(ctx.get_help())
        raise typer.Exit()

    try:
        settings = MonitorSettings.from_cli(percent, urgency, defaults, strict)
    except ConfigurationError as exc:
        raise _usage_error(ctx, exc) from exc

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    try:
        device = BatteryDevice.locate(settings.power_supply_dir)
        notifier = LowBatteryNotifier(LibnotifyBackend(), settings.urgency)
        monitor = BatteryMonitor(device, notifier, settings)
        monitor.install_signal_handlers()
        monitor.run()
    except BatNotifyError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


# ───────────────────────── module entrypoint ────────────────────────────────
if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(0)
