#!/usr/bin/env python3
"""
Hexpulse
========

An audio-reactive honeycomb of glowing hexagons. Each cell follows one bin of
a live frequency spectrum; bass drives size, mids drive green and highs drive
red and rotation. A loud low end flashes the grid and pulses every cell.

Features:
- Live window with Bass / Mids / Highs gain sliders.
- File playback or microphone input.
- Offline export of an audio file to an mp4 with the audio attached.

Usage:
    python -m hexpulse live --file song.wav
    python -m hexpulse live --mic
    python -m hexpulse export song.wav --output result.mp4
    python -m hexpulse -h (for help)

Keys (live):
    SPACE play/pause | M microphone on/off | S stop | Q quit
"""

import argparse
import logging
import os
import sys

from hexpulse.band_mapper import GainSettings
from hexpulse.constants import DEFAULT_FPS, DEFAULT_RESOLUTION, FFT_SIZE
from hexpulse.context import VisualiserContext
from hexpulse.errors import AudioLoadError
from hexpulse.frame_renderer import FrameRenderer
from hexpulse.render_loop import RenderLoop
from hexpulse.spectrum_analyser import load_audio
from hexpulse.transport import Transport

logger = logging.getLogger("hexpulse")


def gain(value):
    value = float(value)
    if not 0.0 <= value <= 2.0:
        raise argparse.ArgumentTypeError(f"gain must be between 0 and 2, got {value}")
    return value


def fft_size(value):
    value = int(value)
    if value < 32 or value & (value - 1):
        raise argparse.ArgumentTypeError(f"fft size must be a power of two >= 32, got {value}")
    return value


def build_parser():
    parser = argparse.ArgumentParser(prog="hexpulse", description="Audio-reactive honeycomb visualiser.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    parser.add_argument("--width", type=int, default=DEFAULT_RESOLUTION[0], help="Frame width")
    parser.add_argument("--height", type=int, default=DEFAULT_RESOLUTION[1], help="Frame height")
    parser.add_argument("--fps", type=int, default=DEFAULT_FPS, help="Frames per second")
    parser.add_argument("--fft-size", type=fft_size, default=FFT_SIZE, help="Analysis window (bins = half)")
    parser.add_argument("--bass", type=gain, default=1.0, help="Bass gain (0-2)")
    parser.add_argument("--mids", type=gain, default=1.0, help="Mids gain (0-2)")
    parser.add_argument("--highs", type=gain, default=1.0, help="Highs gain (0-2)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    live = subparsers.add_parser("live", help="Open the live visualiser window")
    source = live.add_mutually_exclusive_group()
    source.add_argument("--file", "-f", help="Audio file to play on start")
    source.add_argument("--mic", action="store_true", help="Start with the microphone")
    live.add_argument("--device", help="Sound device name or index")

    export = subparsers.add_parser("export", help="Render an audio file to a video")
    export.add_argument("input", help="Path to input audio file (WAV/MP3)")
    export.add_argument("--output", "-o", default="output.mp4", help="Path to output video file")
    export.add_argument("--duration", type=float, help="Limit duration in seconds (optional)")

    return parser


def run_live(args, gains):
    context = VisualiserContext(gains)
    device = int(args.device) if args.device and args.device.isdigit() else args.device
    transport = Transport(context, fft_size=args.fft_size, device=device)

    if args.file:
        if not os.path.exists(args.file):
            sys.exit(f"[!] Input file not found: {args.file}")
        transport.open_file(args.file)
    elif args.mic:
        transport.toggle_microphone()

    loop = RenderLoop(FrameRenderer(), context, transport, fps=args.fps, size=(args.width, args.height))
    loop.run()


def run_export(args, gains):
    if not os.path.exists(args.input):
        sys.exit(f"[!] Input file not found: {args.input}")

    # moviepy is only needed for export
    from hexpulse.exporter import export_video

    try:
        samples, sample_rate = load_audio(args.input)
    except AudioLoadError as e:
        sys.exit(f"[!] {e}")

    duration = len(samples) / sample_rate
    if args.duration and args.duration < duration:
        duration = args.duration
        logger.info(f"[i] Truncating duration to {duration} seconds.")

    export_video(
        args.input,
        samples,
        sample_rate,
        args.output,
        args.width,
        args.height,
        args.fps,
        duration,
        gains=gains,
        fft_size=args.fft_size,
    )


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    gains = GainSettings(args.bass, args.mids, args.highs)
    if args.command == "live":
        run_live(args, gains)
    else:
        run_export(args, gains)


if __name__ == "__main__":
    main()
