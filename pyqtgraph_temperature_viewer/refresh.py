from __future__ import annotations

import enum
import logging
import threading
from typing import Optional, Protocol, Sequence, Tuple

from .config import TARGET_HZ, TITLE
from .errors import SettingParseError
from .messages import MessageKind, MessageSource
from .range_controller import RangeController
from .window import WindowManager

logger = logging.getLogger(__name__)


class DisplaySink(Protocol):
    """What the refresh tick draws on."""

    def set_series(self, points: Sequence[Tuple[str, float]]) -> None: ...

    def set_range(self, lower: float, upper: float) -> None: ...

    def set_title(self, title: str) -> None: ...


class Timer(Protocol):
    """Anything that calls tick() repeatedly once started (QTimer fits)."""

    def start(self, msec: int) -> None: ...

    def stop(self) -> None: ...


class RefreshState(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"


def parse_refresh_rate(payload: str) -> str:
    """'rate:500' -> '500'. Raises SettingParseError if there is no numeric second field."""
    fields = payload.split(":")
    if len(fields) < 2:
        raise SettingParseError(payload)
    rate = fields[1].strip()
    try:
        float(rate)
    except ValueError as e:
        raise SettingParseError(payload) from e
    return rate


class RefreshLoop:
    """
    One refresh cycle per tick(), driven by an external timer.

    Each tick: update the title from the latest SETTING message, drain new
    samples into the window, recompute the y range, then honour a pending
    stop(). Ticks are only processed while RUNNING; after the stopping tick
    every further tick is a no-op.
    """

    def __init__(self, source: MessageSource, window: WindowManager, ranges: RangeController,
                 sink: Optional[DisplaySink] = None, timer: Optional[Timer] = None,
                 interval_ms: int = int(1000 / TARGET_HZ)):
        self.source = source
        self.window = window
        self.ranges = ranges
        self.sink = sink
        self.timer = timer
        self.interval_ms = interval_ms
        self.state = RefreshState.IDLE
        self.title = TITLE
        self.ticks = 0
        self._stop = threading.Event()

    def start(self) -> None:
        if self.state is RefreshState.RUNNING:
            return
        self._stop.clear()
        self.state = RefreshState.RUNNING
        if self.timer is not None:
            self.timer.start(self.interval_ms)
        logger.info("Refresh started (%d ms)", self.interval_ms)

    def stop(self) -> None:
        """Request a stop; it takes effect on the next tick."""
        self._stop.set()

    @property
    def stop_requested(self) -> bool:
        return self._stop.is_set()

    def tick(self) -> bool:
        """Run one refresh cycle. Returns True once the loop has stopped."""
        if self.state is RefreshState.STOPPED:
            return True
        if self.state is not RefreshState.RUNNING:
            return False

        self.ticks += 1
        self._update_title()

        if self.window.update(self.ranges.display_size) and self.sink is not None:
            self.sink.set_series(self.window.series())

        bounds = self.ranges.recompute(self.window.average)
        if bounds is not None and self.sink is not None:
            self.sink.set_range(*bounds)

        if self._stop.is_set():
            self.state = RefreshState.STOPPED
            if self.timer is not None:
                self.timer.stop()
            logger.info("Refresh stopped after %d tick(s)", self.ticks)
            return True
        return False

    def _update_title(self) -> None:
        msg = self.source.pop_latest_message(MessageKind.SETTING)
        if msg is None:
            return
        try:
            rate = parse_refresh_rate(msg.payload)
        except SettingParseError as e:
            logger.debug("Skipping title update: %s", e)
            return
        self.title = f"{TITLE} {{ Refresh rate: {rate}ms }}"
        if self.sink is not None:
            self.sink.set_title(self.title)
