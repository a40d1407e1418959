"""
Configuration constants for the pathfinding visualizer.

Defaults live here; a handful can be overridden from the environment
(PATHVIZ_ROWS, PATHVIZ_COLS, PATHVIZ_ALGO, PATHVIZ_SPEED, LOG_LEVEL).
"""

import os
from pathlib import Path


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# =============================================================================
# Path Configuration
# =============================================================================

PROJECT_ROOT = Path(__file__).resolve().parents[1]
MAP_DIR = PROJECT_ROOT / "maps"

# =============================================================================
# Grid Configuration
# =============================================================================

DEFAULT_ROWS = _env_int("PATHVIZ_ROWS", 20)
DEFAULT_COLS = _env_int("PATHVIZ_COLS", 50)

# Per-cell probability used by "random walls"
DEFAULT_WALL_PROBABILITY = 0.3

# =============================================================================
# Algorithm Configuration
# =============================================================================

DEFAULT_ALGORITHM = os.environ.get("PATHVIZ_ALGO", "dijkstra").lower()

# =============================================================================
# Playback Configuration
# =============================================================================

# Visited cells per second; path cells take PATH_DELAY_FACTOR times longer
DEFAULT_SPEED = _env_int("PATHVIZ_SPEED", 30)
MIN_SPEED = 1
MAX_SPEED = 120
PATH_DELAY_FACTOR = 2

# How often a paused playback loop re-checks its token (seconds)
PAUSE_POLL_SECONDS = 0.1

# =============================================================================
# Viewer Configuration
# =============================================================================

PANEL_W = 320
GRID_MARGIN = 16
CELL_SIZE_DEFAULT = 22
MIN_CELL_SIZE = 8
FPS = 60
FONT_NAME = None  # default pygame font

# Palettes: (light, dark)
PALETTES = {
    "light": {
        "background": (237, 242, 247),
        "cell": (255, 255, 255),
        "border": (203, 213, 224),
        "wall": (45, 55, 72),
        "visited": (144, 205, 244),
        "frontier": (198, 246, 213),
        "current": (246, 173, 85),
        "path": (246, 224, 94),
        "start": (72, 187, 120),
        "end": (229, 62, 62),
        "card": (255, 255, 255),
        "text": (26, 32, 44),
        "accent": (49, 130, 206),
        "button": (226, 232, 240),
        "button_hover": (203, 213, 224),
        "button_active": (144, 205, 244),
    },
    "dark": {
        "background": (24, 26, 32),
        "cell": (45, 55, 72),
        "border": (26, 32, 44),
        "wall": (160, 174, 192),
        "visited": (43, 108, 176),
        "frontier": (39, 103, 73),
        "current": (221, 107, 32),
        "path": (236, 201, 75),
        "start": (56, 161, 105),
        "end": (197, 48, 48),
        "card": (36, 40, 48),
        "text": (230, 235, 240),
        "accent": (255, 210, 0),
        "button": (46, 50, 60),
        "button_hover": (58, 64, 78),
        "button_active": (58, 86, 160),
    },
}

# =============================================================================
# Logging Configuration
# =============================================================================

# Log level (DEBUG, INFO, WARNING, ERROR)
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
