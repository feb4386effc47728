import threading

import numpy as np


def _left_pad(samples, n):
    if len(samples) >= n:
        return samples[-n:]
    return np.pad(samples, (n - len(samples), 0))


class RingBufferTap:
    """
    Keeps the most recent mono samples pushed from an audio callback.

    `push` runs on the audio thread, `latest` on the render thread; both only
    hold the lock long enough to copy.
    """

    def __init__(self, capacity):
        self.capacity = int(capacity)
        self._buffer = np.zeros(self.capacity, dtype=np.float32)
        self._write = 0
        self._filled = 0
        self._lock = threading.Lock()

    def push(self, block):
        block = np.asarray(block, dtype=np.float32)
        if block.ndim > 1:
            block = block.mean(axis=1)
        if len(block) >= self.capacity:
            block = block[-self.capacity :]
        n = len(block)
        with self._lock:
            end = self._write + n
            if end <= self.capacity:
                self._buffer[self._write : end] = block
            else:
                split = self.capacity - self._write
                self._buffer[self._write :] = block[:split]
                self._buffer[: n - split] = block[split:]
            self._write = end % self.capacity
            self._filled = min(self.capacity, self._filled + n)

    def latest(self, n):
        """Last `n` samples, oldest first, zero padded while filling up."""
        with self._lock:
            ordered = np.concatenate((self._buffer[self._write :], self._buffer[: self._write]))
            filled = self._filled
        return _left_pad(ordered[self.capacity - filled :], n)

    def clear(self):
        with self._lock:
            self._buffer[:] = 0
            self._write = 0
            self._filled = 0


class ArrayTap:
    """Offline view over a decoded signal with a movable playhead (in samples)."""

    def __init__(self, samples, sample_rate):
        self.samples = np.asarray(samples, dtype=np.float32)
        self.sample_rate = sample_rate
        self.position = 0

    def seek(self, t):
        self.position = min(len(self.samples), max(0, int(t * self.sample_rate)))

    def latest(self, n):
        start = max(0, self.position - n)
        return _left_pad(self.samples[start : self.position], n)
