import threading
import time

from pyqtgraph_temperature_viewer.messages import MessageBuffer, MessageKind, RawMessage


class RecordingSink:
    """Collects everything the refresh tick draws."""

    def __init__(self):
        self.series = []
        self.ranges = []
        self.titles = []

    def set_series(self, points):
        self.series.append(list(points))

    def set_range(self, lower, upper):
        self.ranges.append((lower, upper))

    def set_title(self, title):
        self.titles.append(title)


class FakeTimer:
    def __init__(self):
        self.interval = None
        self.active = False

    def start(self, msec):
        self.interval = msec
        self.active = True

    def stop(self):
        self.active = False


def data(payload, t="12:00:00.000"):
    return RawMessage(MessageKind.DATA, payload, t)


def setting(payload, t="12:00:00.000"):
    return RawMessage(MessageKind.SETTING, payload, t)


class GatedBuffer(MessageBuffer):
    """Parks the ingestion thread right after it first finds the DATA queue empty."""

    def __init__(self):
        super().__init__()
        self.parked = threading.Event()
        self.release = threading.Event()
        self._gate_once = True

    def pop_next_message(self, kind):
        msg = super().pop_next_message(kind)
        if msg is None and self._gate_once:
            self._gate_once = False
            self.parked.set()
            self.release.wait(5)
        return msg


def wait_for(predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while not predicate():
        if time.monotonic() > deadline:
            return False
        time.sleep(0.01)
    return True
