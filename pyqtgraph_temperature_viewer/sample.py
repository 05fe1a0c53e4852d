from __future__ import annotations

from dataclasses import dataclass

from .errors import MalformedSampleError
from .messages import RawMessage


@dataclass(frozen=True)
class Sample:
    """One numeric reading and the label of the time it arrived."""

    value: float
    timestamp_label: str


def sample_from_message(msg: RawMessage) -> Sample:
    """Convert a DATA message; raises MalformedSampleError if the payload is not a number."""
    try:
        value = float(msg.payload)
    except ValueError as exc:
        raise MalformedSampleError(msg.payload) from exc
    return Sample(value, msg.time_received)
