"""Tests for the per-band gain mapping."""

import pytest

from hexpulse.band_mapper import GainSettings, map_bands


class TestMapBands:
    def test_same_sample_feeds_every_band(self):
        levels = map_bands(0.5, GainSettings(1.0, 1.0, 1.0))
        assert levels.bass == levels.mid == levels.high == 0.5

    def test_gains_scale_each_band_independently(self):
        levels = map_bands(0.5, GainSettings(bass=2.0, mid=0.5, high=0.0))
        assert levels.bass == pytest.approx(1.0)
        assert levels.mid == pytest.approx(0.25)
        assert levels.high == 0.0

    def test_zero_sample_gives_zero_bands(self):
        levels = map_bands(0.0, GainSettings(2.0, 2.0, 2.0))
        assert (levels.bass, levels.mid, levels.high) == (0.0, 0.0, 0.0)

    @pytest.mark.parametrize("value", [0.0, 0.1, 0.5, 0.9, 1.0])
    @pytest.mark.parametrize("gain", [0.0, 0.5, 1.0, 2.0])
    def test_bounded_by_twice_the_sample(self, value, gain):
        levels = map_bands(value, GainSettings(gain, gain, gain))
        for level in (levels.bass, levels.mid, levels.high):
            assert 0.0 <= level <= value * 2

    def test_monotonic_in_value_and_gain(self):
        low = map_bands(0.2, GainSettings(0.5, 0.5, 0.5))
        louder = map_bands(0.8, GainSettings(0.5, 0.5, 0.5))
        boosted = map_bands(0.8, GainSettings(1.5, 1.5, 1.5))
        assert low.bass <= louder.bass <= boosted.bass
        assert low.high <= louder.high <= boosted.high


class TestGainSettings:
    def test_defaults_are_unity(self):
        gains = GainSettings()
        assert (gains.bass, gains.mid, gains.high) == (1.0, 1.0, 1.0)

    def test_from_sliders_divides_by_hundred(self):
        gains = GainSettings.from_sliders(200, 50, 0)
        assert (gains.bass, gains.mid, gains.high) == (2.0, 0.5, 0.0)
