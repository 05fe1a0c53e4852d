# main_window.py
import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np
from PySide6 import QtWidgets, QtCore

import pyqtgraph as pg
import serial.tools.list_ports

from .config import DEFAULT_BAUD, TARGET_HZ, TITLE, LINE_WIDTH, LINE_COLOR
from .handler import TemperatureHandler
from .messages import MessageBuffer
from .serial_reader import SerialReader

logger = logging.getLogger(__name__)

X_TICKS = 6  # timestamp labels shown along the bottom axis


class TemperatureWindow(QtWidgets.QMainWindow):
    def __init__(self):
        super().__init__()
        self.setWindowTitle("Serial Temperature → PyQtGraph")
        pg.setConfigOptions(antialias=False, useOpenGL=False, background='w')

        central = QtWidgets.QWidget()
        vbox = QtWidgets.QVBoxLayout(central)
        vbox.setContentsMargins(8, 8, 8, 8)
        self.setCentralWidget(central)

        # --- Chart ---
        self.plot = pg.PlotWidget(title=TITLE)
        self.plot.showGrid(x=True, y=True, alpha=0.25)
        self.plot.setLabel("bottom", "Time received")
        self.plot.setLabel("left", "Temperature")
        # scroll is zoom here, not pan/scale
        self.plot.setMouseEnabled(x=False, y=False)
        self.plot.hideButtons()
        self.curve = self.plot.plot(pen=pg.mkPen(color=LINE_COLOR, width=LINE_WIDTH))
        self.plot.viewport().installEventFilter(self)
        vbox.addWidget(self.plot, 1)

        # --- Top control bar ---
        ctrl = QtWidgets.QWidget()
        h = QtWidgets.QHBoxLayout(ctrl)
        h.setContentsMargins(0, 0, 0, 4)

        self.port_combo = QtWidgets.QComboBox()
        self.refresh_btn = QtWidgets.QPushButton("Refresh")
        self.baud_combo = QtWidgets.QComboBox()
        self.connect_btn = QtWidgets.QPushButton("Connect")

        for b in [9600, 19200, 38400, 57600, 115200, 230400, 460800, 921600]:
            self.baud_combo.addItem(str(b))
        self.baud_combo.setCurrentText(str(DEFAULT_BAUD))

        h.addWidget(QtWidgets.QLabel("Port:"))
        h.addWidget(self.port_combo, 2)
        h.addWidget(self.refresh_btn)
        h.addSpacing(12)
        h.addWidget(QtWidgets.QLabel("Baud:"))
        h.addWidget(self.baud_combo)
        h.addSpacing(12)
        h.addWidget(self.connect_btn)
        vbox.insertWidget(0, ctrl)  # top

        self.sb = self.statusBar()

        # --- Runtime state ---
        self.reader: Optional[SerialReader] = None
        self.handler: Optional[TemperatureHandler] = None
        self.connected = False

        # Refresh ticks; started/stopped by the handler's refresh loop
        self.timer = QtCore.QTimer(self)
        self.timer.timeout.connect(self._tick)

        self.refresh_btn.clicked.connect(self.populate_ports)
        self.connect_btn.clicked.connect(self.toggle_connection)

        self.populate_ports()

    # ---------- Controls ----------
    def populate_ports(self):
        current = self.port_combo.currentText()
        self.port_combo.clear()
        ports = list(serial.tools.list_ports.comports())
        for p in ports:
            label = f"{p.device} – {p.description}"
            self.port_combo.addItem(label, userData=p.device)
        if not ports:
            self.port_combo.addItem("(no ports found)", userData=None)
        idx = self.port_combo.findText(current)
        if idx >= 0:
            self.port_combo.setCurrentIndex(idx)
        self.sb.showMessage(f"Found {len(ports)} port(s)")

    def toggle_connection(self):
        if not self.connected:
            device = self.port_combo.currentData()
            if not device:
                self.sb.showMessage("No port selected")
                return
            baud = int(self.baud_combo.currentText())
            self.start_reader(device, baud)
        else:
            self.stop_reader()

    def start_reader(self, device, baud):
        logger.info("Connecting to %s @ %d baud", device, baud)
        # fresh pipeline per session; a dead ingestion only recovers this way
        messages = MessageBuffer()
        self.handler = TemperatureHandler(messages, self, timer=self.timer,
                                          interval_ms=int(1000 / TARGET_HZ))
        self.curve.setData([], [])
        self.plot.setTitle(TITLE)

        self.reader = SerialReader(device, baud, messages)
        self.reader.batch.connect(self._on_batch)
        self.reader.status.connect(self._on_status)
        self.reader.connected.connect(self._on_connected)
        self.reader.disconnected.connect(self._on_disconnected)
        self.reader.start()
        self.handler.start()
        self.connect_btn.setEnabled(False)

    def stop_reader(self):
        if self.reader and self.reader.isRunning():
            self.reader.stop()
            self.reader.wait(1000)
        self.reader = None
        if self.handler:
            self.handler.close(timeout=1.0)
            self.handler.stop()

        self.connected = False
        self.connect_btn.setText("Connect")
        self.connect_btn.setEnabled(True)
        self.enable_controls(True)
        self.sb.showMessage("Disconnected")

    def enable_controls(self, enable: bool):
        self.port_combo.setEnabled(enable)
        self.refresh_btn.setEnabled(enable)
        self.baud_combo.setEnabled(enable)

    # ---------- Reader slots ----------
    def _on_status(self, msg: str):
        self.sb.showMessage(msg, 5000)

    def _on_batch(self, count: int):
        if self.handler is None:
            return
        if not self.handler.ingest() and self.handler.ingest_error is not None:
            logger.warning("Ingestion stopped: %s", self.handler.ingest_error)
            self.sb.showMessage(f"Ingestion stopped: {self.handler.ingest_error}")

    def _on_connected(self):
        self.connected = True
        self.connect_btn.setText("Disconnect")
        self.connect_btn.setEnabled(True)
        self.enable_controls(False)

    def _on_disconnected(self):
        self.connected = False
        self.connect_btn.setText("Connect")
        self.connect_btn.setEnabled(True)
        self.enable_controls(True)

    # ---------- Refresh ----------
    def _tick(self):
        if self.handler is not None:
            self.handler.tick()

    def eventFilter(self, obj, event):
        if event.type() == QtCore.QEvent.Type.Wheel and self.handler is not None:
            self.handler.zoom(event.angleDelta().y())
            return True
        return super().eventFilter(obj, event)

    # ---------- DisplaySink ----------
    def set_series(self, points: Sequence[Tuple[str, float]]):
        labels: List[str] = [p[0] for p in points]
        y = np.fromiter((p[1] for p in points), dtype=np.float64, count=len(points))
        x = np.arange(y.size)
        self.curve.setData(x, y)

        step = max(1, y.size // X_TICKS)
        ticks = [(i, labels[i]) for i in range(0, y.size, step)]
        self.plot.getAxis("bottom").setTicks([ticks])
        if y.size:
            self.plot.setXRange(0, max(y.size - 1, 1), padding=0)

    def set_range(self, lower: float, upper: float):
        self.plot.setYRange(lower, upper, padding=0)

    def set_title(self, title: str):
        self.plot.setTitle(title)

    def closeEvent(self, event):
        if self.reader and self.reader.isRunning():
            self.reader.stop()
            self.reader.wait(1000)
        if self.handler:
            self.handler.close(timeout=1.0)
            self.handler.stop()
        return super().closeEvent(event)
