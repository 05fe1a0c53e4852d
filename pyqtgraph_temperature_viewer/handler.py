from __future__ import annotations

import logging
from typing import Optional, Tuple

from .config import DEFAULT_BOUNDARY_SHIFT, DEFAULT_DISPLAY_SIZE, TARGET_HZ
from .ingestor import Ingestor
from .messages import MessageSource
from .range_controller import RangeController
from .refresh import DisplaySink, RefreshLoop, RefreshState, Timer
from .sample_queue import SampleQueue
from .window import WindowManager

logger = logging.getLogger(__name__)


class TemperatureHandler:
    """
    Feeds a chart from a message source.

    One ingestion thread drains the source whenever ingest() is called;
    drawing happens in tick(), on whatever thread drives the timer. The two
    only share the SampleQueue.

    Once an ingestion batch fails the handler never ingests again; the chart
    keeps what it has and stays zoomable until stopped. Build a new handler
    to recover.
    """

    def __init__(self, source: MessageSource, sink: Optional[DisplaySink] = None, *,
                 timer: Optional[Timer] = None,
                 display_size: int = DEFAULT_DISPLAY_SIZE,
                 boundary_shift: int = DEFAULT_BOUNDARY_SHIFT,
                 interval_ms: int = int(1000 / TARGET_HZ)):
        self.source = source
        self.samples = SampleQueue()
        self.window = WindowManager(self.samples)
        self.ranges = RangeController(display_size, boundary_shift)
        self.loop = RefreshLoop(source, self.window, self.ranges,
                                sink=sink, timer=timer, interval_ms=interval_ms)
        self.ranges.on_change = self.loop.tick

        self.ingestor = Ingestor(source, self.samples)
        self.ingest_error: Optional[Exception] = None

    # ---------- ingestion context ----------
    def ingest(self) -> bool:
        """
        Wake the ingestion thread (starting it on first use) to drain the
        source. Returns False once ingestion has died or been closed.
        """
        if self.ingestor.failed:
            self.ingest_error = self.ingestor.error
        if self.ingest_error is not None:
            logger.debug("Ingestion is dead (%s); ignoring new batch", self.ingest_error)
            return False
        if self.ingestor.stop_flag.is_set():
            return False

        if self.ingestor.ident is None:
            self.ingestor.start()
        self.ingestor.notify()
        return True

    def join(self, timeout: Optional[float] = None) -> None:
        """Wait for the ingestion thread to end (it only ends on close() or failure)."""
        if self.ingestor.ident is not None:
            self.ingestor.join(timeout)
        if self.ingestor.failed:
            self.ingest_error = self.ingestor.error

    def close(self, timeout: Optional[float] = None) -> None:
        """Drain one last batch and end the ingestion thread."""
        self.ingestor.stop()
        self.join(timeout)

    # ---------- refresh context ----------
    def start(self) -> None:
        self.loop.start()

    def stop(self) -> None:
        self.loop.stop()

    def tick(self) -> bool:
        return self.loop.tick()

    def zoom(self, delta: float) -> None:
        self.ranges.zoom(delta)

    @property
    def state(self) -> RefreshState:
        return self.loop.state

    @property
    def current_range(self) -> Optional[Tuple[int, int]]:
        return self.ranges.current_range()
