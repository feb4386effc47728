from enum import Enum

from hexpulse.band_mapper import GainSettings


class SourceKind(Enum):
    NONE = "none"
    FILE = "file"
    MIC = "mic"


class VisualiserContext:
    """
    Everything the renderer reads each frame: the analyser (None while idle),
    its snapshot buffer, the gains and what kind of source is attached.
    """

    def __init__(self, gains=None):
        self.analyser = None
        self.buffer = None
        self.gains = gains if gains is not None else GainSettings()
        self.source_kind = SourceKind.NONE

    @property
    def is_active(self):
        return self.analyser is not None

    def attach(self, analyser, source_kind):
        self.analyser = analyser
        self.buffer = analyser.new_buffer()
        self.source_kind = source_kind

    def detach(self):
        self.analyser = None
        self.buffer = None
        self.source_kind = SourceKind.NONE

    def read_snapshot(self):
        """Refresh and return the sample buffer from the attached analyser."""
        return self.analyser.get_byte_frequency_data(self.buffer)
