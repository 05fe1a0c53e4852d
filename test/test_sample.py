"""
Tests for Sample conversion and the sample queue.
"""
from __future__ import annotations

import dataclasses
import threading

import pytest

from pyqtgraph_temperature_viewer.errors import MalformedSampleError
from pyqtgraph_temperature_viewer.sample import Sample, sample_from_message
from pyqtgraph_temperature_viewer.sample_queue import SampleQueue

from helpers import data


class TestSampleFromMessage:

    def test_converts_payload_and_label(self):
        s = sample_from_message(data("21.75", t="10:00:01.250"))
        assert s == Sample(21.75, "10:00:01.250")

    def test_non_numeric_payload_raises(self):
        with pytest.raises(MalformedSampleError) as info:
            sample_from_message(data("21,5"))
        assert info.value.payload == "21,5"
        assert isinstance(info.value.__cause__, ValueError)

    def test_sample_is_immutable(self):
        s = Sample(1.0, "t")
        with pytest.raises(dataclasses.FrozenInstanceError):
            s.value = 2.0


class TestSampleQueue:

    def test_starts_empty(self):
        q = SampleQueue()
        assert q.is_empty()
        assert q.drain_up_to(5) == []

    def test_drain_is_fifo_and_bounded(self):
        q = SampleQueue()
        for v in range(5):
            q.append(Sample(float(v), str(v)))

        first = q.drain_up_to(3)
        assert [s.value for s in first] == [0.0, 1.0, 2.0]
        assert len(q) == 2

        rest = q.drain_up_to(10)
        assert [s.value for s in rest] == [3.0, 4.0]
        assert q.is_empty()

    def test_append_never_rejects(self):
        q = SampleQueue()
        for v in range(10_000):
            q.append(Sample(float(v), ""))
        assert len(q) == 10_000

    def test_concurrent_append_and_drain(self):
        """A draining consumer sees every appended sample once, in order."""
        q = SampleQueue()
        total = 5_000
        done = threading.Event()

        def producer():
            for v in range(total):
                q.append(Sample(float(v), ""))
            done.set()

        t = threading.Thread(target=producer)
        t.start()

        seen = []
        while not (done.is_set() and q.is_empty()):
            seen.extend(s.value for s in q.drain_up_to(64))
        t.join()

        assert seen == [float(v) for v in range(total)]
