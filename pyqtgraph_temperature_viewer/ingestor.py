import logging
import threading
from typing import Optional

from .errors import SourceReadError, TelemetryError
from .messages import MessageKind, MessageSource, RawMessage
from .sample import sample_from_message
from .sample_queue import SampleQueue

logger = logging.getLogger(__name__)


def is_dropped(msg: RawMessage) -> bool:
    """Empty payloads and ERR messages never become samples."""
    return not msg.payload or msg.kind in {MessageKind.ERR}


class Ingestor(threading.Thread):
    """
    Moves pending DATA messages from the source onto the sample queue.

    Started once and kept for the life of its handler. Each notify() wakes it
    to drain one batch (everything the source has right now); a notify that
    lands while a batch is draining is picked up by the next batch.
    stop() drains a final batch and ends the thread.

    A payload that is not a number, or a failing source, ends the thread for
    good; the exception is kept on `error` and logged, never raised elsewhere.
    """

    def __init__(self, source: MessageSource, samples: SampleQueue):
        super().__init__(name="Ingestor", daemon=True)
        self.source = source
        self.samples = samples
        self.ingested = 0
        self.dropped = 0
        self.error: Optional[Exception] = None
        self._wake = threading.Event()
        self.stop_flag = threading.Event()

    def notify(self) -> None:
        self._wake.set()

    def stop(self) -> None:
        self.stop_flag.set()
        self._wake.set()

    def _next(self) -> Optional[RawMessage]:
        try:
            return self.source.pop_next_message(MessageKind.DATA)
        except TelemetryError:
            raise
        except Exception as e:
            raise SourceReadError(f"message source failed: {e}") from e

    def ingest_batch(self) -> None:
        """Drain the source once; raises on a malformed payload or source failure."""
        msg = self._next()
        while msg is not None:
            if is_dropped(msg):
                self.dropped += 1
            else:
                self.samples.append(sample_from_message(msg))
                self.ingested += 1
            msg = self._next()

    def run(self):
        while True:
            self._wake.wait()
            # clear before draining so a notify during the batch is not lost
            self._wake.clear()
            try:
                self.ingest_batch()
            except Exception as e:
                self.error = e
                logger.exception("Ingestion stopped after %d sample(s)", self.ingested)
                return
            if self.stop_flag.is_set():
                break

        logger.debug("Ingested %d sample(s), dropped %d", self.ingested, self.dropped)

    @property
    def failed(self) -> bool:
        return self.error is not None
