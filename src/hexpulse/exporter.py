import logging

import cv2
from moviepy import AudioFileClip, VideoClip

from hexpulse.constants import FFT_SIZE
from hexpulse.context import SourceKind, VisualiserContext
from hexpulse.frame_renderer import FrameRenderer
from hexpulse.sample_tap import ArrayTap
from hexpulse.spectrum_analyser import SpectrumAnalyser

logger = logging.getLogger(__name__)


class OfflineFrameSource:
    """
    Renders frame `t` of a decoded file the same way the live window would,
    with the analyser reading the window that ends at `t`.
    """

    def __init__(self, samples, sample_rate, width, height, gains=None, fft_size=FFT_SIZE, renderer=None):
        self.width = width
        self.height = height
        self.tap = ArrayTap(samples, sample_rate)
        self.context = VisualiserContext(gains)
        self.context.attach(SpectrumAnalyser(self.tap, fft_size=fft_size), SourceKind.FILE)
        self.renderer = renderer if renderer is not None else FrameRenderer()

    def make_frame(self, t):
        """
        The callback function for MoviePy.
        Returns an RGB frame for time t (seconds).
        """
        self.tap.seek(t)
        frame = self.renderer.render(self.context, self.width, self.height, time_ms=t * 1000)
        return cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)


def export_video(audio_path, samples, sample_rate, output, width, height, fps, duration, gains=None, fft_size=FFT_SIZE):
    """Write an mp4 of the visualiser for `audio_path` with its audio attached."""
    logger.info(f"[+] Preparing render: {width}x{height} @ {fps}fps")
    logger.info(f"[+] Duration: {duration:.2f} seconds")

    source = OfflineFrameSource(samples, sample_rate, width, height, gains=gains, fft_size=fft_size)
    video_clip = VideoClip(source.make_frame, duration=duration)
    # VideoClip renders a frame up front to learn its size
    source.context.analyser.reset()

    # Ensure audio is cut if we truncated duration
    audio_clip = AudioFileClip(audio_path).subclipped(0, duration)
    video_clip = video_clip.with_audio(audio_clip)

    logger.info("[+] Rendering video... (This may take a while)")
    video_clip.write_videofile(
        output,
        fps=fps,
        codec="libx264",
        audio_codec="aac",
        threads=4,
        preset="medium",
        logger="bar",
    )
    logger.info(f"[+] Done! Saved to {output}")
