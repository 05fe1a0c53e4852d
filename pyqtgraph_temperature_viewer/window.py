# window.py
import math
from collections import deque
from typing import Deque, List, Optional, Tuple

import numpy as np

from .sample import Sample
from .sample_queue import SampleQueue


class WindowManager:
    """
    The samples currently on the chart, oldest first, at most `display_size` of them.
    Only the refresh tick touches it.
    """
    def __init__(self, samples: SampleQueue):
        self.samples = samples
        self.window: Deque[Sample] = deque()
        self.average: Optional[int] = None

    def update(self, display_size: int) -> bool:
        """
        Drain up to `display_size` queued samples into the window, evict the
        oldest beyond `display_size` and recompute the average.
        Returns False (and touches nothing) when there is nothing to do.
        """
        if self.samples.is_empty():
            if len(self.window) <= display_size:
                return False
            # display_size shrank (zoom) while idle: trim only
        else:
            self.window.extend(self.samples.drain_up_to(display_size))

        excess = len(self.window) - display_size
        for _ in range(max(excess, 0)):
            self.window.popleft()

        self.average = self._truncated_mean()
        return True

    def _truncated_mean(self) -> int:
        """
        Integer average, truncated toward zero. Readings are summed as floats
        and only the quotient is truncated, so [20.5, 21.5] gives 21 (not 20,
        as truncating each reading before summing would).
        """
        vals = self.values()
        return math.trunc(float(vals.sum()) / vals.size)

    def values(self) -> np.ndarray:
        """(n,) float64 values in arrival order."""
        return np.fromiter((s.value for s in self.window), dtype=np.float64, count=len(self.window))

    def labels(self) -> List[str]:
        return [s.timestamp_label for s in self.window]

    def series(self) -> List[Tuple[str, float]]:
        """(timestamp_label, value) pairs in arrival order, as handed to the chart."""
        return [(s.timestamp_label, s.value) for s in self.window]

    def __len__(self) -> int:
        return len(self.window)
