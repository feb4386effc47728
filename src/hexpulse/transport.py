import logging

from hexpulse.audio_sources import FilePlayback, MicrophoneInput
from hexpulse.constants import FFT_SIZE, RING_BUFFER_SECONDS
from hexpulse.context import SourceKind
from hexpulse.errors import AudioLoadError, MicrophoneUnavailableError, PlaybackError
from hexpulse.sample_tap import RingBufferTap
from hexpulse.spectrum_analyser import SpectrumAnalyser, load_audio

logger = logging.getLogger(__name__)

MIC_SAMPLE_RATE = 44100


class Transport:
    """
    File / microphone switching on top of a VisualiserContext.

    The renderer never calls into this; it only sees whether the context has
    an analyser attached. Every transition stops the previous source first.
    """

    def __init__(
        self,
        context,
        fft_size=FFT_SIZE,
        device=None,
        mic_sample_rate=MIC_SAMPLE_RATE,
        loader=load_audio,
        playback_factory=FilePlayback,
        microphone_factory=MicrophoneInput,
    ):
        self.context = context
        self.fft_size = fft_size
        self.device = device
        self.mic_sample_rate = mic_sample_rate
        self.loader = loader
        self.playback_factory = playback_factory
        self.microphone_factory = microphone_factory

        self.playback = None
        self.microphone = None
        self.last_error = None

    @property
    def status(self):
        if self.microphone is not None:
            return "Mic ON"
        if self.playback is not None:
            return "Pause" if self.playback.is_playing else "Play"
        if self.last_error:
            return self.last_error
        return "Idle"

    def _attach(self, tap, source_kind):
        analyser = SpectrumAnalyser(tap, fft_size=self.fft_size)
        self.context.attach(analyser, source_kind)

    def open_file(self, path):
        """Decode `path` and start playing it. Returns False if it could not."""
        self.stop()
        try:
            samples, sample_rate = self.loader(path)
        except AudioLoadError as e:
            logger.error(f"[!] {e}")
            self.last_error = "Could not load file"
            return False

        tap = RingBufferTap(int(sample_rate * RING_BUFFER_SECONDS))
        playback = self.playback_factory(samples, sample_rate, tap, device=self.device)
        try:
            playback.play()
        except PlaybackError as e:
            logger.error(f"[!] {e}")
            self.last_error = "Audio output unavailable"
            return False

        self.playback = playback
        self._attach(tap, SourceKind.FILE)
        logger.info(f"[+] Playing {path}")
        return True

    def toggle_microphone(self):
        """Turn the microphone on, or off if it already is. Returns the new state."""
        if self.microphone is not None:
            self.stop()
            return False

        self.stop()
        tap = RingBufferTap(int(self.mic_sample_rate * RING_BUFFER_SECONDS))
        microphone = self.microphone_factory(self.mic_sample_rate, tap, device=self.device)
        try:
            microphone.start()
        except MicrophoneUnavailableError as e:
            logger.error(f"[!] {e}")
            self.last_error = "Microphone unavailable"
            return False

        self.microphone = microphone
        self._attach(tap, SourceKind.MIC)
        return True

    def toggle_play_pause(self):
        """Pause or resume file playback; does nothing for the microphone."""
        if self.playback is None:
            return
        if self.playback.is_playing:
            self.playback.pause()
            return
        try:
            self.playback.play()
        except PlaybackError as e:
            logger.error(f"[!] {e}")
            self.last_error = "Audio output unavailable"

    def poll(self):
        """Called once per frame; parks the file at its end when it finishes."""
        if self.playback is not None and self.playback.finished and self.playback.is_playing:
            self.playback.pause()
            logger.info("[i] Playback finished")

    def stop(self):
        """Stop whatever is playing and go idle. Safe to call repeatedly."""
        if self.playback is not None:
            self.playback.stop()
            self.playback = None
        if self.microphone is not None:
            self.microphone.stop()
            self.microphone = None
        self.last_error = None
        self.context.detach()
