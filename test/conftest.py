from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
ROOT_STR = str(ROOT)
if ROOT_STR not in sys.path:
    sys.path.insert(0, ROOT_STR)

from pyqtgraph_temperature_viewer.messages import MessageBuffer  # noqa: E402

from helpers import FakeTimer, RecordingSink  # noqa: E402


@pytest.fixture
def messages():
    return MessageBuffer()


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def timer():
    return FakeTimer()
