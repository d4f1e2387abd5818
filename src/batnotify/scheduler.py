"""Poll loop for the low-battery notifier."""

from __future__ import annotations

import logging
import select
import signal
import socket
from types import FrameType
from typing import Final, Optional

from batnotify.constants import LONG_INTERVAL, LONG_INTERVAL_MARGIN, SHORT_INTERVAL
from batnotify.errors import DeviceNotFoundError, SysfsReadError
from batnotify.notify.manager import LowBatteryNotifier
from batnotify.settings import MonitorSettings
from batnotify.system.status import BatteryStatus
from batnotify.system.sysfs import BatteryDevice

logger: Final = logging.getLogger(__name__)


def select_interval(
    percentage: float,
    threshold: float,
    short_interval: float = SHORT_INTERVAL,
    long_interval: float = LONG_INTERVAL,
) -> float:
    """Pick the sleep before the next poll.

    Polls slowly while the charge is comfortably above the threshold and
    quickly otherwise, including when the charge is unknown (0).
    """
    if percentage >= threshold + LONG_INTERVAL_MARGIN:
        return long_interval
    return short_interval


class BatteryMonitor:
    """Polls one battery and drives the low-battery notification.

    Each tick:
    - Checks whether the battery is discharging
    - Reads the energy levels only when it is
    - Shows/updates the notification at or below the threshold, and
      dismisses it otherwise
    - Chooses a short or long sleep depending on how close the charge is
      to the threshold

    A stop request (from ``stop()`` or a termination signal) wakes the
    sleep immediately; the loop then closes any visible notification
    itself before returning.
    """

    def __init__(
        self,
        device: BatteryDevice,
        notifier: LowBatteryNotifier,
        settings: MonitorSettings,
    ) -> None:
        self.device = device
        self.notifier = notifier
        self.settings = settings
        self._last_interval: Optional[float] = None

        # Written from the signal handler; only plain assignments and a
        # non-blocking socket send happen there, never a lock acquisition
        self._stop_requested = False
        self._stop_signal: Optional[int] = None
        self._wakeup_reader: Optional[socket.socket] = None
        self._wakeup_writer: Optional[socket.socket] = None

    # ── status ────────────────────────────────────────────────────────────
    def read_status(self) -> BatteryStatus:
        """Read the battery state for one tick.

        Raises:
            SysfsReadError: If an attribute file cannot be read
        """
        if not self.device.is_discharging():
            return BatteryStatus(discharging=False)

        now, full = self.device.read_levels()
        return BatteryStatus(discharging=True, now=now, full=full)

    def _read_status_or_unknown(self) -> BatteryStatus:
        try:
            return self.read_status()
        except SysfsReadError as exc:
            if self.settings.strict:
                raise
            if not self.device.exists():
                raise DeviceNotFoundError(self.device.path.parent) from exc
            logger.warning("%s (%s) → treating status as unknown", exc, exc.original_error)
            return BatteryStatus(discharging=False)

    # ── loop ──────────────────────────────────────────────────────────────
    def tick(self) -> float:
        """Run one poll iteration and return the seconds to sleep."""
        status = self._read_status_or_unknown()
        percentage = status.percentage
        logger.debug(
            "%s: discharging=%s now=%.0f full=%.0f → %.1f%%",
            self.device.name,
            status.discharging,
            status.now,
            status.full,
            percentage,
        )

        if status.is_low(self.settings.threshold):
            self.notifier.notify(status.message)
        else:
            self.notifier.dismiss()

        interval = select_interval(
            percentage,
            self.settings.threshold,
            self.settings.short_interval,
            self.settings.long_interval,
        )
        if interval != self._last_interval:
            logger.info("Battery %.1f%% → polling every %g s", percentage, interval)
            self._last_interval = interval
        return interval

    def run(self) -> None:
        """Poll until a stop is requested, then release the notification.

        Raises:
            SysfsReadError: In strict mode, when an attribute cannot be read
            DeviceNotFoundError: If the battery directory disappears
        """
        logger.info(
            "Monitoring %s (threshold %.1f%%, urgency %s)",
            self.device.path,
            self.settings.threshold,
            self.settings.urgency.value,
        )
        self._wakeup_reader, self._wakeup_writer = socket.socketpair()
        self._wakeup_writer.setblocking(False)
        try:
            while not self._stop_requested:
                interval = self.tick()
                self._sleep(interval)
        finally:
            if self._stop_signal is not None:
                logger.info("Received %s → shutting down", signal.Signals(self._stop_signal).name)
            self.notifier.release()
            self._close_wakeup()
            logger.info("Battery monitor stopped")

    def _sleep(self, interval: float) -> None:
        # Returns early once stop() has written to the wakeup socket
        assert self._wakeup_reader is not None
        select.select([self._wakeup_reader], [], [], interval)

    def _close_wakeup(self) -> None:
        reader, writer = self._wakeup_reader, self._wakeup_writer
        self._wakeup_reader = self._wakeup_writer = None
        for sock in (reader, writer):
            if sock is not None:
                sock.close()

    # ── shutdown ──────────────────────────────────────────────────────────
    def stop(self) -> None:
        """Request the loop to exit and wake it if it is sleeping.

        Safe to call from a signal handler.
        """
        self._stop_requested = True
        writer = self._wakeup_writer
        if writer is None:
            return
        try:
            writer.send(b"\0")
        except OSError:
            # Full buffer means a wakeup is already pending; closed means
            # the loop has finished. The flag alone covers both.
            pass

    @property
    def stopping(self) -> bool:
        return self._stop_requested

    def _handle_signal(self, signum: int, frame: Optional[FrameType]) -> None:
        self._stop_signal = signum
        self.stop()

    def install_signal_handlers(self) -> None:
        """Route SIGINT and SIGTERM to ``stop()``."""
        signal.signal(signal.SIGINT, self._handle_signal)
        signal.signal(signal.SIGTERM, self._handle_signal)
