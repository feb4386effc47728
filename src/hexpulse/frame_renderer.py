import logging
import math
import time

import cv2
import numpy as np

from hexpulse.band_mapper import map_bands
from hexpulse.beat_detector import detect_beat
from hexpulse.cell import Cell
from hexpulse.constants import (
    BASE_RADIUS,
    BEAT_ALPHA,
    BEAT_PULSE,
    BG_COLOR,
    BLUE_CHANNEL,
    BREATH_AMPLITUDE,
    BREATH_PERIOD_MS,
    GLOW_BLUR,
    GREEN_CHANNEL,
    GRID_COLS,
    GRID_ROWS,
    RED_CHANNEL,
    REST_ALPHA,
)
from hexpulse.grid_layout import cell_position, hex_radius, iter_cells

logger = logging.getLogger(__name__)


def breath(time_ms):
    """Slow idle pulsing, independent of the audio."""
    return BREATH_AMPLITUDE * math.sin(time_ms / BREATH_PERIOD_MS)


def channel(offset_span, level):
    offset, span = offset_span
    return min(255, offset + math.floor(span * level))


class FrameRenderer:
    """
    Handles the drawing logic using OpenCV.
    Holds no audio state between frames; everything comes from the context.
    """

    def __init__(self, cols=GRID_COLS, rows=GRID_ROWS, bg_color=BG_COLOR, glow_blur=GLOW_BLUR):
        self.cols = cols
        self.rows = rows
        self.bg_color = bg_color
        self.glow_blur = glow_blur

        # Last frame's outcome, for status display and inspection
        self.last_beat = False
        self.last_alpha = REST_ALPHA
        self.last_cells = []

    def _make_cell(self, index, row, col, value, gains, beat, width, height, radius_unit, time_ms):
        bands = map_bands(value / 255, gains)
        x, y = cell_position(row, col, width, height, self.cols, self.rows)

        pulse = BEAT_PULSE if beat else 0
        radius = radius_unit * (BASE_RADIUS + bands.bass + breath(time_ms) + pulse)
        rotation = bands.high * math.pi * 2

        color = (
            channel(RED_CHANNEL, bands.high),
            channel(GREEN_CHANNEL, bands.mid),
            channel(BLUE_CHANNEL, bands.bass),
        )
        return Cell(index, row, col, x, y, radius, rotation, color)

    def compute_cells(self, snapshot, gains, beat, width, height, time_ms):
        """
        Derive every drawable cell for one frame, row-major, stopping once the
        snapshot runs out of samples.
        """
        radius_unit = hex_radius(width, height, self.cols, self.rows)
        cells = []
        for index, row, col in iter_cells(self.cols, self.rows):
            if index >= len(snapshot):
                break
            try:
                cell = self._make_cell(
                    index, row, col, int(snapshot[index]), gains, beat, width, height, radius_unit, time_ms
                )
            except (ArithmeticError, ValueError, TypeError) as e:
                logger.debug(f"[i] Skipping cell {index}: {e}")
                continue
            cells.append(cell)
        return cells

    def _draw_cells(self, frame, cells, alpha):
        # Fills are premultiplied by their anti-aliased coverage
        layer = np.zeros_like(frame)
        coverage = np.zeros(frame.shape[:2], dtype=np.uint8)
        for cell in cells:
            polygon = [cell.vertices()]
            try:
                cv2.fillPoly(layer, polygon, cell.bgr, cv2.LINE_AA)
                cv2.fillPoly(coverage, polygon, 255, cv2.LINE_AA)
            except (cv2.error, ValueError, OverflowError) as e:
                logger.debug(f"[i] Skipping cell {cell.index}: {e}")

        # Neon glow: blurred copy of the fills, laid underneath them
        out = frame
        if self.glow_blur > 0:
            glow = cv2.GaussianBlur(layer, (0, 0), sigmaX=self.glow_blur / 2)
            out = cv2.addWeighted(frame, 1.0, glow, alpha, 0)

        weight = coverage.astype(np.float32)[..., None] / 255 * alpha
        blended = out.astype(np.float32) * (1 - weight) + layer.astype(np.float32) * alpha
        return np.clip(np.rint(blended), 0, 255).astype(np.uint8)

    def render(self, context, width, height, time_ms=None):
        """
        Generates a single frame for the current state of `context`.
        Returns a BGR image of shape (height, width, 3).
        """
        if time_ms is None:
            time_ms = time.time() * 1000

        # 1. Clear
        frame = np.full((height, width, 3), self.bg_color, dtype=np.uint8)

        # 2. Idle
        if not context.is_active:
            self.last_beat = False
            self.last_alpha = REST_ALPHA
            self.last_cells = []
            return frame

        # 3. Get Data
        snapshot = context.read_snapshot()

        # 4. Beat and flash accent
        beat = detect_beat(snapshot)
        alpha = BEAT_ALPHA if beat else REST_ALPHA

        # 5. Cells
        cells = self.compute_cells(snapshot, context.gains, beat, width, height, time_ms)

        self.last_beat = beat
        self.last_alpha = alpha
        self.last_cells = cells

        return self._draw_cells(frame, cells, alpha)
