from __future__ import annotations

import threading
from collections import deque
from typing import Deque, List

from .sample import Sample


class SampleQueue:
    """
    FIFO of samples between the ingestion thread and the refresh tick.

    append() never blocks or rejects: there is no capacity limit, so if
    refresh ticks stop while ingestion continues the queue keeps growing.
    Callers that need bounded memory must throttle the producer themselves.
    """

    def __init__(self):
        self._items: Deque[Sample] = deque()
        self._lock = threading.Lock()

    def append(self, sample: Sample) -> None:
        with self._lock:
            self._items.append(sample)

    def drain_up_to(self, n: int) -> List[Sample]:
        """Remove and return at most `n` samples, oldest first."""
        out: List[Sample] = []
        with self._lock:
            while len(out) < n and self._items:
                out.append(self._items.popleft())
        return out

    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)
