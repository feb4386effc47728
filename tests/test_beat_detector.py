"""Tests for the stateless low-end beat heuristic."""

import numpy as np

from hexpulse.beat_detector import bass_average, detect_beat


class TestBassAverage:
    def test_only_first_ten_bins_count(self):
        snapshot = np.array([100] * 10 + [255] * 118, dtype=np.uint8)
        assert bass_average(snapshot) == 100.0

    def test_short_snapshot_uses_what_is_there(self):
        assert bass_average(np.array([10, 20], dtype=np.uint8)) == 15.0

    def test_empty_snapshot_is_zero(self):
        assert bass_average(np.array([], dtype=np.uint8)) == 0.0


class TestDetectBeat:
    def test_loud_low_end_is_a_beat(self):
        snapshot = np.full(10, 255, dtype=np.uint8)
        assert detect_beat(snapshot) is True

    def test_threshold_is_strict(self):
        snapshot = np.full(128, 200, dtype=np.uint8)
        assert detect_beat(snapshot) is False

    def test_just_above_threshold(self):
        snapshot = np.array([201] * 10, dtype=np.uint8)
        assert detect_beat(snapshot) is True

    def test_silence_is_not_a_beat(self):
        assert detect_beat(np.zeros(128, dtype=np.uint8)) is False

    def test_uint8_values_do_not_overflow(self):
        # 10 * 255 would wrap in uint8 arithmetic
        snapshot = np.full(10, 255, dtype=np.uint8)
        assert bass_average(snapshot) == 255.0

    def test_deterministic_for_identical_prefixes(self):
        a = np.array([210, 190, 220, 180, 200, 205, 215, 195, 185, 225] + [0] * 118, dtype=np.uint8)
        b = a.copy()
        b[10:] = 255
        assert detect_beat(a) == detect_beat(a) == detect_beat(b)

    def test_no_memory_between_calls(self):
        loud = np.full(128, 255, dtype=np.uint8)
        quiet = np.zeros(128, dtype=np.uint8)
        assert detect_beat(loud) is True
        assert detect_beat(quiet) is False
        assert detect_beat(loud) is True
