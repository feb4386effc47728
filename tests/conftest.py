import numpy as np
import pytest

from hexpulse.context import SourceKind, VisualiserContext


class FixedAnalyser:
    """Stands in for a SpectrumAnalyser, always reporting the same snapshot."""

    def __init__(self, snapshot):
        self.snapshot = np.asarray(snapshot, dtype=np.uint8)
        self.reads = 0

    @property
    def frequency_bin_count(self):
        return len(self.snapshot)

    def new_buffer(self):
        return np.zeros(self.frequency_bin_count, dtype=np.uint8)

    def get_byte_frequency_data(self, buffer):
        self.reads += 1
        buffer[:] = self.snapshot
        return buffer


@pytest.fixture
def active_context():
    """Build a context with a FixedAnalyser attached."""

    def make(snapshot, gains=None):
        context = VisualiserContext(gains)
        context.attach(FixedAnalyser(snapshot), SourceKind.FILE)
        return context

    return make
