import numpy as np

from hexpulse.constants import BEAT_THRESHOLD, BEAT_WINDOW


def bass_average(snapshot, window=BEAT_WINDOW):
    """Mean of the first `window` bins, 0 for an empty snapshot."""
    prefix = np.asarray(snapshot[:window], dtype=np.float64)
    if prefix.size == 0:
        return 0.0
    return float(prefix.mean())


def detect_beat(snapshot, window=BEAT_WINDOW, threshold=BEAT_THRESHOLD):
    """
    Stateless beat test on the low end of the spectrum.

    No smoothing or debounce, so it follows transient peaks frame by frame.
    """
    return bass_average(snapshot, window) > threshold
