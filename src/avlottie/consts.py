"""Central module containing constants for path conversion and Lottie output"""

from __future__ import annotations

# Absolute per-axis distance below which a closing vertex coincides with the first one
CLOSE_TOLERANCE: float = 0.001

# Coordinates and tangents are rounded to 4 decimal places
ROUND_SCALE: float = 10000.0

LOTTIE_VERSION: str = "5.5.2"
LOTTIE_DOCUMENT_NAME: str = "SVG to Lottie"

DEFAULT_WIDTH: float = 24
DEFAULT_HEIGHT: float = 24
DEFAULT_STROKE_WIDTH: float = 2
DEFAULT_STROKE_COLOR: tuple = (0, 0, 0, 1)
DEFAULT_FRAME_RATE: float = 24
