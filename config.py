# config.py
# Global settings for the FIFO visualizer

import os

# === Sample workload (pre-filled in the input form) ===
SAMPLE_AVAILABLE_PAGES = "1 2 3 4 5"
SAMPLE_REFERENCE_STRING = "1 2 3 4 1 2 5 1 2 3 4 5"
DEFAULT_FRAME_COUNT = 3

# === Input bounds ===
MIN_FRAME_COUNT = 1
MAX_FRAME_COUNT = 12

# === Auto-play (steps per second) ===
DEFAULT_SPEED = 1.0
MIN_SPEED = 0.5
MAX_SPEED = 5.0

# === Timeline colours ===
COLOR_EMPTY = "#e5e7eb"     # light grey
COLOR_RESIDENT = "#bfdbfe"  # pale blue
COLOR_CHANGED = "#fca5a5"   # slot written on a fault
COLOR_HIT = "#16a34a"
COLOR_FAULT = "#dc2626"

# === Logging ===
LOG_LEVEL = os.environ.get("FIFO_VISUALIZER_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Event log entries kept on screen
EVENT_LOG_LIMIT = 20
