# ------------------ Chart ------------------
TITLE = "Temperature Samples"

# Samples kept in the display window (zoom steps by DISPLAY_STEP)
MIN_DISPLAY = 10
MAX_DISPLAY = 250
DISPLAY_STEP = 10

# Half-width of the y range around the window average
MIN_SHIFT = 1
MAX_SHIFT = 25

DEFAULT_DISPLAY_SIZE = MAX_DISPLAY // 2
DEFAULT_BOUNDARY_SHIFT = MAX_SHIFT // 2

# ------------------ Device ------------------
DEFAULT_BAUD = 115200
START_STREAM_BYTE = b"1"   # command to start streaming on the device
STOP_STREAM_BYTE = b"0"    # command to stop streaming on the device
READ_CHUNK = 4096

TARGET_HZ = 50             # UI refresh Hz (not serial rate)

# ---------------- Plot Options ----------------
LINE_WIDTH = 2
LINE_COLOR = (214, 39, 40)  # red
