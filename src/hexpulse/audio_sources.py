import logging

import numpy as np

from hexpulse.constants import BLOCK_SIZE
from hexpulse.errors import MicrophoneUnavailableError, PlaybackError

logger = logging.getLogger(__name__)


def _sounddevice():
    # PortAudio is only needed once a device is opened
    try:
        import sounddevice
    except OSError as e:
        raise PlaybackError(f"PortAudio is not available: {e}") from e
    return sounddevice


class FilePlayback:
    """
    Plays a decoded signal on the default output device and feeds every
    block it plays into `tap`, so the analyser sees what is being heard.
    """

    def __init__(self, samples, sample_rate, tap, block_size=BLOCK_SIZE, device=None):
        self.samples = np.asarray(samples, dtype=np.float32)
        self.sample_rate = sample_rate
        self.tap = tap
        self.block_size = block_size
        self.device = device
        self.position = 0
        self.finished = False
        self._stream = None

    @property
    def is_playing(self):
        return self._stream is not None

    def _callback(self, outdata, frames, time_info, status):
        if status:
            logger.debug(f"[i] Output stream status: {status}")
        chunk = self.samples[self.position : self.position + frames]
        outdata[: len(chunk), 0] = chunk
        outdata[len(chunk) :, 0] = 0
        self.position += len(chunk)
        self.tap.push(outdata[:, 0])
        if self.position >= len(self.samples):
            self.finished = True

    def play(self):
        if self._stream is not None:
            return
        if self.finished:
            self.position = 0
            self.finished = False

        sd = _sounddevice()
        try:
            stream = sd.OutputStream(
                samplerate=self.sample_rate,
                channels=1,
                dtype="float32",
                blocksize=self.block_size,
                device=self.device,
                callback=self._callback,
            )
            stream.start()
        except sd.PortAudioError as e:
            raise PlaybackError(f"Couldn't start audio output: {e}") from e
        self._stream = stream

    def pause(self):
        if self._stream is None:
            return
        self._stream.stop()
        self._stream.close()
        self._stream = None
        # A paused element feeds silence to the analyser
        self.tap.clear()

    def stop(self):
        """Stop and rewind. Safe to call repeatedly."""
        self.pause()
        self.position = 0
        self.finished = False


class MicrophoneInput:
    """Streams the default (or given) input device into `tap`."""

    def __init__(self, sample_rate, tap, block_size=BLOCK_SIZE, device=None):
        self.sample_rate = sample_rate
        self.tap = tap
        self.block_size = block_size
        self.device = device
        self._stream = None

    @property
    def is_active(self):
        return self._stream is not None

    def _callback(self, indata, frames, time_info, status):
        if status:
            logger.debug(f"[i] Input stream status: {status}")
        self.tap.push(indata)

    def start(self):
        if self._stream is not None:
            return
        try:
            sd = _sounddevice()
        except PlaybackError as e:
            raise MicrophoneUnavailableError(str(e)) from e

        try:
            stream = sd.InputStream(
                samplerate=self.sample_rate,
                channels=1,
                dtype="float32",
                blocksize=self.block_size,
                device=self.device,
                callback=self._callback,
            )
            stream.start()
        except (sd.PortAudioError, ValueError) as e:
            raise MicrophoneUnavailableError(f"Microphone access denied or not available: {e}") from e
        self._stream = stream
        logger.info("[+] Microphone stream started")

    def stop(self):
        """Close the input stream. Safe to call repeatedly."""
        if self._stream is None:
            return
        self._stream.stop()
        self._stream.close()
        self._stream = None
        self.tap.clear()
        logger.info("[+] Microphone stream stopped")
