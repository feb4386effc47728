class HexpulseError(Exception):
    """Base class for errors raised by hexpulse."""


class AudioLoadError(HexpulseError):
    """An audio file could not be read or decoded."""


class MicrophoneUnavailableError(HexpulseError):
    """No input device, or access to it was refused."""


class PlaybackError(HexpulseError):
    """The output device could not be opened for file playback."""
