# --- Configuration Constants ---
DEFAULT_FPS = 60
DEFAULT_RESOLUTION = (1280, 720)
WINDOW_NAME = "hexpulse"

# Analyser settings (mirror a browser AnalyserNode)
FFT_SIZE = 256  # Snapshot length is FFT_SIZE // 2
SMOOTHING_TIME_CONSTANT = 0.8
MIN_DECIBELS = -100.0
MAX_DECIBELS = -30.0
RING_BUFFER_SECONDS = 1.0
BLOCK_SIZE = 1024

# Grid
GRID_COLS = 9
GRID_ROWS = 7
HEX_RADIUS_SCALE = 1.4
ROW_OFFSET_FACTOR = 1.5
COL_SPACING = 3
ROW_SPACING = 2.6
MARGIN_FACTOR = 2

# Beat heuristic
BEAT_WINDOW = 10  # Number of low bins averaged
BEAT_THRESHOLD = 200  # On the 0-255 scale, strict ">"
BEAT_PULSE = 0.3
BEAT_ALPHA = 1.0
REST_ALPHA = 0.9

# Cell sizing
BASE_RADIUS = 0.6
BREATH_AMPLITUDE = 0.05
BREATH_PERIOD_MS = 300  # sin(time_ms / BREATH_PERIOD_MS)

# Color channels as (offset, range), RGB order
RED_CHANNEL = (100, 155)
GREEN_CHANNEL = (50, 205)
BLUE_CHANNEL = (150, 105)

# Colors (BGR format for OpenCV)
BG_COLOR = (16, 5, 5)  # "#050510"
STATUS_COLOR = (200, 200, 200)

# Glow
GLOW_BLUR = 20  # Pixels, like a canvas shadowBlur

# Gain sliders (value / 100 gives the gain)
GAIN_SLIDER_MAX = 200
GAIN_SLIDER_DEFAULT = 100
