"""Tests for offline frame generation used by the video export."""

import numpy as np

from hexpulse import exporter
from hexpulse.band_mapper import GainSettings
from hexpulse.exporter import OfflineFrameSource


class TestOfflineFrameSource:
    def test_frames_are_rgb_at_requested_size(self):
        source = OfflineFrameSource(np.zeros(8000), 8000, 320, 180)
        frame = source.make_frame(0.5)
        assert frame.shape == (180, 320, 3)
        assert frame.dtype == np.uint8

    def test_playhead_follows_time(self):
        source = OfflineFrameSource(np.zeros(8000), 8000, 320, 180)
        source.make_frame(0.25)
        assert source.tap.position == 2000

    def test_every_cell_drawn_for_default_window(self):
        source = OfflineFrameSource(np.zeros(8000), 8000, 320, 180)
        source.make_frame(0.0)
        assert len(source.renderer.last_cells) == 63

    def test_gains_reach_the_context(self):
        gains = GainSettings(2.0, 0.0, 0.5)
        source = OfflineFrameSource(np.zeros(8000), 8000, 320, 180, gains=gains)
        assert source.context.gains is gains

    def test_silence_is_not_a_beat(self):
        source = OfflineFrameSource(np.zeros(8000), 8000, 320, 180)
        source.make_frame(0.5)
        assert source.renderer.last_beat is False

    def test_tone_grows_its_cell(self):
        sr = 8000
        n = np.arange(sr)
        # Bin 4 of a 256-point window
        samples = np.sin(2 * np.pi * 4 * n / 256)
        source = OfflineFrameSource(samples, sr, 320, 180)
        source.make_frame(0.5)
        cells = source.renderer.last_cells
        assert cells[4].radius > cells[40].radius
        assert cells[4].color[2] == 255
        assert cells[40].color == (100, 50, 150)


class RecordingClip:
    """Behaves like VideoClip: renders one frame on construction to size itself."""

    def __init__(self, make_frame, duration):
        self.make_frame = make_frame
        self.duration = duration
        self.size = make_frame(0.5).shape[1::-1]
        self.written = None

    def with_audio(self, audio):
        self.audio = audio
        return self

    def write_videofile(self, output, **kwargs):
        source = self.make_frame.__self__
        self.smoothed_at_start = source.context.analyser._smoothed.copy()
        self.written = output


class RecordingAudio:
    def __init__(self, path):
        self.path = path

    def subclipped(self, start, end):
        self.span = (start, end)
        return self


class TestExportVideo:
    def test_sizing_frame_leaves_no_history(self, monkeypatch):
        clips = []

        def make_clip(make_frame, duration):
            clips.append(RecordingClip(make_frame, duration))
            return clips[-1]

        monkeypatch.setattr(exporter, "VideoClip", make_clip)
        monkeypatch.setattr(exporter, "AudioFileClip", RecordingAudio)

        sr = 8000
        samples = np.sin(2 * np.pi * 4 * np.arange(sr) / 256)
        exporter.export_video("song.wav", samples, sr, "out.mp4", 320, 180, 30, 1.0)

        clip = clips[0]
        assert clip.size == (320, 180)
        assert clip.written == "out.mp4"
        assert clip.audio.span == (0, 1.0)
        assert not clip.smoothed_at_start.any()
