from hexpulse.constants import GAIN_SLIDER_DEFAULT


class GainSettings:
    """Per-band multipliers, each expected in [0.0, 2.0]."""

    def __init__(self, bass=1.0, mid=1.0, high=1.0):
        self.bass = bass
        self.mid = mid
        self.high = high

    @classmethod
    def from_sliders(cls, bass=GAIN_SLIDER_DEFAULT, mid=GAIN_SLIDER_DEFAULT, high=GAIN_SLIDER_DEFAULT):
        """Build gains from 0..200 slider positions."""
        return cls(bass / 100, mid / 100, high / 100)

    def __repr__(self):
        return f"GainSettings(bass={self.bass}, mid={self.mid}, high={self.high})"


class BandLevels:
    """The three band readings derived from one cell's sample."""

    __slots__ = ("bass", "mid", "high")

    def __init__(self, bass, mid, high):
        self.bass = bass
        self.mid = mid
        self.high = high


def map_bands(value, gains):
    """
    Reinterpret a normalised sample `value` (0-1) as bass, mid and high.

    The mapping is positional: every band reads the same sample, the gains only
    decide how strongly it drives size (bass), green (mid) and rotation (high).
    """
    return BandLevels(value * gains.bass, value * gains.mid, value * gains.high)
