from __future__ import annotations

import datetime
import enum
import threading
from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, Optional, Protocol


class MessageKind(enum.Enum):
    DATA = "DATA"
    SETTING = "SETTING"
    ERR = "ERR"


@dataclass(frozen=True)
class RawMessage:
    kind: MessageKind
    payload: str
    time_received: str


class MessageSource(Protocol):
    def pop_next_message(self, kind: MessageKind) -> Optional[RawMessage]: ...

    def pop_latest_message(self, kind: MessageKind) -> Optional[RawMessage]: ...


def time_label(now: Optional[datetime.datetime] = None) -> str:
    """Wall-clock label used as the x value of a sample, e.g. '14:03:27.512'."""
    now = now or datetime.datetime.now()
    return now.strftime("%H:%M:%S.") + f"{now.microsecond // 1000:03d}"


def frame_line(line: str, time_received: str) -> Optional[RawMessage]:
    """
    Turn one device line into a RawMessage.

    Lines look like "<KIND> <payload>" (e.g. "DATA 21.5", "SETTING rate:500").
    A bare number is a DATA message; an unknown kind becomes an ERR message
    carrying the whole line. Blank lines give None.
    """
    line = line.strip()
    if not line:
        return None

    head, _, rest = line.partition(" ")
    try:
        kind = MessageKind(head.upper())
    except ValueError:
        try:
            float(line)
        except ValueError:
            return RawMessage(MessageKind.ERR, line, time_received)
        return RawMessage(MessageKind.DATA, line, time_received)

    return RawMessage(kind, rest.strip(), time_received)


class MessageBuffer:
    """
    Pending messages from the device link, one FIFO per kind.

    Any thread may push; any thread may pop. Each call holds the lock for its
    whole duration so pops never observe a half-finished push.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._pending: Dict[MessageKind, Deque[RawMessage]] = {k: deque() for k in MessageKind}

    def push(self, message: RawMessage) -> None:
        with self._lock:
            self._pending[message.kind].append(message)

    def pop_next_message(self, kind: MessageKind) -> Optional[RawMessage]:
        with self._lock:
            q = self._pending[kind]
            return q.popleft() if q else None

    def pop_latest_message(self, kind: MessageKind) -> Optional[RawMessage]:
        """Return the newest pending message of `kind`, discarding older ones."""
        with self._lock:
            q = self._pending[kind]
            if not q:
                return None
            latest = q[-1]
            q.clear()
            return latest

    def pending(self, kind: MessageKind) -> int:
        with self._lock:
            return len(self._pending[kind])
