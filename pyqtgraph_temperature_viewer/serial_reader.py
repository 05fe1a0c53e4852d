import logging
import time
from typing import Optional

import serial
from PySide6.QtCore import Signal, QThread, QObject

from .config import READ_CHUNK, START_STREAM_BYTE, STOP_STREAM_BYTE
from .messages import MessageBuffer, frame_line, time_label

logger = logging.getLogger(__name__)


class SerialReader(QThread):
    """
    Reads newline-delimited messages from the device and queues them.

    - On connect: sends a single 'start' command (START_STREAM_BYTE) to the device.
    - Each line is framed as "<KIND> <payload>" (see messages.frame_line) and
      pushed onto the MessageBuffer with the time it arrived.
    - Emits `batch` once per read that produced at least one message.
    - On stop/cleanup: sends a single 'stop' command (STOP_STREAM_BYTE).
    """

    batch = Signal(int)
    status = Signal(str)
    connected = Signal()
    disconnected = Signal()

    def __init__(self, port: str, baud: int, messages: MessageBuffer,
                 parent: Optional[QObject] = None):
        super().__init__(parent)
        self.port_name = port
        self.baud = baud
        self.messages = messages
        self._stop = False
        self.ser: Optional[serial.Serial] = None
        self._buf = bytearray()

    def _report(self, text: str, level: int = logging.INFO):
        logger.log(level, text)
        self.status.emit(text)

    # ---------- helpers ----------
    def _send(self, command: bytes):
        if not self.ser:
            return
        try:
            self.ser.write(command)
            self.ser.flush()
        except serial.SerialException as e:
            self._report(f"Serial write error ({command!r}): {e}", logging.WARNING)

    def _frame(self, data: bytes) -> int:
        self._buf.extend(data)
        *lines, remainder = self._buf.split(b"\n")
        self._buf = bytearray(remainder)

        count = 0
        for raw in lines:
            line = raw.replace(b"\r", b"").decode("ascii", errors="replace")
            msg = frame_line(line, time_label())
            if msg is None:
                continue
            self.messages.push(msg)
            count += 1
        return count

    # ---------- thread ----------
    def run(self):
        try:
            self.ser = serial.Serial(self.port_name, self.baud, timeout=0.01)
        except (serial.SerialException, ValueError) as e:
            self._report(f"ERROR opening {self.port_name}: {e}", logging.ERROR)
            return
        self._report(f"Opened {self.port_name} @ {self.baud} baud")
        self.connected.emit()

        self._send(START_STREAM_BYTE)

        while not self._stop:
            try:
                data = self.ser.read(READ_CHUNK)
            except serial.SerialException as e:
                self._report(f"Serial read error: {e}", logging.WARNING)
                self.msleep(50)
                continue

            if not data:
                self.msleep(1)  # avoid busy-wait
                continue

            count = self._frame(data)
            if count:
                self.batch.emit(count)

        # Cleanup
        if self.ser and self.ser.is_open:
            self._send(STOP_STREAM_BYTE)
            time.sleep(0.05)
            self.ser.close()
            self._report("Serial port closed")

        self.disconnected.emit()

    def stop(self):
        """Request the reader thread to stop and (in run) send '0' before closing."""
        self._stop = True
