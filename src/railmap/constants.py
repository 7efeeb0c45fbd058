"""Named constants for rendering and interaction defaults.

Pixel values are screen-space unless noted otherwise; the renderer divides
them by the current scale where a primitive must keep a constant on-screen
size.
"""

# --- Surface ---

BACKGROUND_STYLE = "#111"
FONT_SIZE: float = 10.0
FONT = "sans-serif"
FONT_COLOR = "#fff"

# --- Connections ---

LINE_WIDTH: float = 8.0  # Stroke width of connection legs

# --- Stations ---

STATION_RADIUS: float = 8.0
STATION_STROKE_WIDTH: float = 2.0
STATION_STROKE = "#ffffff"
STATION_NO_GROUP_FILL = "#fff"
STATION_GROUP_OFFSET: float = 12.0  # Fan step per group along the (+x, -y) diagonal
FAN_WIDTH: float = 15.0  # Backing stroke joining a multi-group fan
FAN_STROKE = "#fff"
LABEL_OFFSET: float = 20.0  # Label distance below the station centre
TEXT_CULL_MARGIN: float = 50.0

# --- Camera ---

MIN_SCALE: float = 0.05
MAX_SCALE: float = 20.0
SCROLL_SENSITIVITY: float = 0.001
PINCH_SENSITIVITY: float = 0.005

# --- Route overlay ---

DIMMED_OPACITY: float = 0.25

# --- Debug overlay ---

DEBUG_STROKE = "#fff"
DEBUG_STROKE_WIDTH: float = 2.0
