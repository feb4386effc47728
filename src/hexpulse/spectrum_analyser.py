import logging

import librosa
import numpy as np

from hexpulse.constants import (
    FFT_SIZE,
    MAX_DECIBELS,
    MIN_DECIBELS,
    SMOOTHING_TIME_CONSTANT,
)
from hexpulse.errors import AudioLoadError

logger = logging.getLogger(__name__)


def load_audio(filepath):
    """
    Decode an audio file to a mono float signal at its original sampling rate.
    """
    logger.info(f"[+] Loading audio: {filepath}...")
    try:
        y, sr = librosa.load(filepath, sr=None, mono=True)
    except Exception as e:
        raise AudioLoadError(f"Error loading audio file: {e}") from e

    duration = librosa.get_duration(y=y, sr=sr)
    logger.info(f"[+] Loaded {duration:.2f}s at {sr} Hz")
    return y, sr


class SpectrumAnalyser:
    """
    Turns the latest window of a sample tap into a byte frequency spectrum.

    Follows the browser AnalyserNode recipe: Blackman window, FFT, temporal
    smoothing of magnitudes, then a dB range mapped onto 0-255.
    """

    def __init__(
        self,
        tap,
        fft_size=FFT_SIZE,
        smoothing_time_constant=SMOOTHING_TIME_CONSTANT,
        min_decibels=MIN_DECIBELS,
        max_decibels=MAX_DECIBELS,
    ):
        if fft_size < 2 or fft_size & (fft_size - 1):
            raise ValueError(f"fft_size must be a power of two, got {fft_size}")
        if max_decibels <= min_decibels:
            raise ValueError("max_decibels must be greater than min_decibels")

        self.tap = tap
        self.fft_size = fft_size
        self.smoothing_time_constant = smoothing_time_constant
        self.min_decibels = min_decibels
        self.max_decibels = max_decibels

        # Periodic Blackman window
        self._window = np.blackman(fft_size + 1)[:-1]
        self._smoothed = np.zeros(self.frequency_bin_count)

    @property
    def frequency_bin_count(self):
        return self.fft_size // 2

    def new_buffer(self):
        """A zeroed snapshot buffer of the right length."""
        return np.zeros(self.frequency_bin_count, dtype=np.uint8)

    def _magnitudes(self):
        samples = self.tap.latest(self.fft_size)
        spectrum = np.fft.rfft(samples * self._window)[: self.frequency_bin_count]
        magnitudes = np.abs(spectrum) / self.fft_size

        tau = self.smoothing_time_constant
        self._smoothed = tau * self._smoothed + (1 - tau) * magnitudes
        return self._smoothed

    def get_byte_frequency_data(self, buffer):
        """Fill `buffer` in place with the current spectrum (0-255)."""
        magnitudes = self._magnitudes()

        with np.errstate(divide="ignore"):
            decibels = 20 * np.log10(magnitudes)

        scale = 255 / (self.max_decibels - self.min_decibels)
        scaled = np.floor(scale * (decibels - self.min_decibels))
        n = min(len(buffer), len(scaled))
        buffer[:n] = np.clip(scaled[:n], 0, 255).astype(np.uint8)
        return buffer

    def reset(self):
        self._smoothed[:] = 0
