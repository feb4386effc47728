import logging

import cv2

from hexpulse.band_mapper import GainSettings
from hexpulse.constants import (
    DEFAULT_FPS,
    DEFAULT_RESOLUTION,
    GAIN_SLIDER_MAX,
    STATUS_COLOR,
    WINDOW_NAME,
)

logger = logging.getLogger(__name__)

SLIDERS = ("Bass", "Mids", "Highs")

KEY_QUIT = (ord("q"), 27)
KEY_PLAY_PAUSE = ord(" ")
KEY_MIC = ord("m")
KEY_STOP = ord("s")


class RenderLoop:
    """
    Drives the renderer from an OpenCV window: one frame per `waitKey` tick,
    re-armed until the window closes or `stop()` is called.
    """

    def __init__(self, renderer, context, transport, fps=DEFAULT_FPS, size=DEFAULT_RESOLUTION, window_name=WINDOW_NAME):
        self.renderer = renderer
        self.context = context
        self.transport = transport
        self.delay_ms = max(1, int(1000 / fps))
        self.size = size
        self.window_name = window_name
        self._running = False

    def _open_window(self):
        cv2.namedWindow(self.window_name, cv2.WINDOW_NORMAL)
        cv2.resizeWindow(self.window_name, *self.size)
        gains = self.context.gains
        for name, gain in zip(SLIDERS, (gains.bass, gains.mid, gains.high)):
            position = min(GAIN_SLIDER_MAX, int(round(gain * 100)))
            cv2.createTrackbar(name, self.window_name, position, GAIN_SLIDER_MAX, lambda _: None)

    def _read_gains(self):
        positions = [cv2.getTrackbarPos(name, self.window_name) for name in SLIDERS]
        self.context.gains = GainSettings.from_sliders(*positions)

    def _viewport(self):
        _, _, width, height = cv2.getWindowImageRect(self.window_name)
        if width <= 0 or height <= 0:
            return self.size
        return width, height

    def _window_closed(self):
        return cv2.getWindowProperty(self.window_name, cv2.WND_PROP_VISIBLE) < 1

    def handle_key(self, key):
        if key in KEY_QUIT:
            self.stop()
        elif key == KEY_PLAY_PAUSE:
            self.transport.toggle_play_pause()
        elif key == KEY_MIC:
            self.transport.toggle_microphone()
        elif key == KEY_STOP:
            self.transport.stop()

    def step(self, width, height):
        """Render one frame with the current context and overlay the status."""
        self.transport.poll()
        frame = self.renderer.render(self.context, width, height)
        cv2.putText(frame, self.transport.status, (12, height - 12), cv2.FONT_HERSHEY_SIMPLEX, 0.5, STATUS_COLOR, 1, cv2.LINE_AA)
        return frame

    def run(self):
        logger.info("[+] Keys: SPACE play/pause | M microphone | S stop | Q quit")
        self._open_window()
        self._running = True
        try:
            while self._running:
                self._read_gains()
                width, height = self._viewport()
                cv2.imshow(self.window_name, self.step(width, height))

                key = cv2.waitKey(self.delay_ms) & 0xFF
                self.handle_key(key)
                if self._window_closed():
                    self.stop()
        finally:
            self.transport.stop()
            cv2.destroyWindow(self.window_name)

    def stop(self):
        self._running = False
