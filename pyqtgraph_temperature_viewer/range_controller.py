from typing import Callable, Optional, Tuple

from .config import (
    DEFAULT_BOUNDARY_SHIFT, DEFAULT_DISPLAY_SIZE, DISPLAY_STEP,
    MAX_DISPLAY, MAX_SHIFT, MIN_DISPLAY, MIN_SHIFT,
)


def _clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, value))


class RangeController:
    """
    Window size and y-axis half-width, stepped together by zoom().

    Scrolling in (delta < 0) shows more samples over a wider band; scrolling
    out shows fewer over a tighter band. Each field clamps on its own.
    `on_change` runs after every zoom so the chart can refresh at once.
    """

    def __init__(self, display_size: int = DEFAULT_DISPLAY_SIZE,
                 boundary_shift: int = DEFAULT_BOUNDARY_SHIFT,
                 on_change: Optional[Callable[[], object]] = None):
        self.display_size = _clamp(int(display_size), MIN_DISPLAY, MAX_DISPLAY)
        self.boundary_shift = _clamp(int(boundary_shift), MIN_SHIFT, MAX_SHIFT)
        self.average: Optional[int] = None
        self.on_change = on_change

    def zoom(self, delta: float) -> None:
        if delta < 0:
            self.display_size = min(self.display_size + DISPLAY_STEP, MAX_DISPLAY)
            self.boundary_shift = min(self.boundary_shift + 1, MAX_SHIFT)
        else:
            self.display_size = max(self.display_size - DISPLAY_STEP, MIN_DISPLAY)
            self.boundary_shift = max(self.boundary_shift - 1, MIN_SHIFT)

        if self.on_change is not None:
            self.on_change()

    def recompute(self, average: Optional[int]) -> Optional[Tuple[int, int]]:
        self.average = average
        return self.current_range()

    def current_range(self) -> Optional[Tuple[int, int]]:
        """(lower, upper) around the latest average, or None before any data."""
        if self.average is None:
            return None
        return self.average - self.boundary_shift, self.average + self.boundary_shift
