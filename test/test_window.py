"""
Tests for the display window: bound, FIFO eviction and the truncated average.
"""
from __future__ import annotations

from pyqtgraph_temperature_viewer.sample import Sample
from pyqtgraph_temperature_viewer.sample_queue import SampleQueue
from pyqtgraph_temperature_viewer.window import WindowManager


def fill(q, values):
    for i, v in enumerate(values):
        q.append(Sample(float(v), f"t{i}"))


class TestWindowUpdate:

    def test_empty_queue_is_noop(self):
        q = SampleQueue()
        wm = WindowManager(q)
        assert wm.update(10) is False
        assert len(wm) == 0
        assert wm.average is None

    def test_drains_at_most_display_size(self):
        q = SampleQueue()
        fill(q, range(15))
        wm = WindowManager(q)

        assert wm.update(10)
        assert len(wm) == 10
        assert len(q) == 5
        assert wm.values().tolist() == [float(v) for v in range(10)]

    def test_fifo_eviction_keeps_newest_in_order(self):
        q = SampleQueue()
        wm = WindowManager(q)
        fill(q, [1, 2, 3])
        wm.update(3)
        fill(q, [4, 5])
        wm.update(3)

        assert wm.values().tolist() == [3.0, 4.0, 5.0]
        assert wm.labels() == ["t2", "t0", "t1"]

    def test_shrunk_display_size_trims_without_new_data(self):
        q = SampleQueue()
        wm = WindowManager(q)
        fill(q, range(20))
        wm.update(20)

        assert wm.update(10) is True
        assert wm.values().tolist() == [float(v) for v in range(10, 20)]
        assert wm.update(10) is False


class TestAverage:

    def test_truncates_toward_zero(self):
        q = SampleQueue()
        wm = WindowManager(q)
        fill(q, [10, 11])
        wm.update(10)
        assert wm.average == 10

    def test_negative_average_truncates_toward_zero(self):
        q = SampleQueue()
        wm = WindowManager(q)
        fill(q, [-10, -11])
        wm.update(10)
        assert wm.average == -10

    def test_recomputed_from_current_window(self):
        q = SampleQueue()
        wm = WindowManager(q)
        fill(q, [100, 100])
        wm.update(2)
        fill(q, [0, 0])
        wm.update(2)
        assert wm.average == 0

    def test_series_pairs(self):
        q = SampleQueue()
        wm = WindowManager(q)
        fill(q, [1.5, 2.5])
        wm.update(10)
        assert wm.series() == [("t0", 1.5), ("t1", 2.5)]

    def test_fractional_readings_summed_before_truncation(self):
        q = SampleQueue()
        wm = WindowManager(q)
        fill(q, [20.5, 21.5])
        wm.update(10)
        assert wm.average == 21
