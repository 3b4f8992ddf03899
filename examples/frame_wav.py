"""Example: frame one audio file and print per-frame peak frequencies.

Usage
-----
``python examples/frame_wav.py path/to/audio.wav --window-size 2048 --window hann``

Pad every frame to a longer transform length:

``python examples/frame_wav.py path/to/audio.wav --window-size 1024 --num-points 4096``
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from pcmframe import FramingParameters, analyze, open_waveform
from pcmframe.logging_utils import frame_records


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Frame one audio file and print the loudest bin of each frame.",
    )
    parser.add_argument("input_audio", type=Path, help="Path to a WAV/AIFF/FLAC/MP3 file.")
    parser.add_argument("--window-size", type=int, default=4096, help="Samples per frame.")
    parser.add_argument(
        "--num-points",
        type=int,
        default=None,
        help="Total frame length including zero padding.",
    )
    parser.add_argument("--window", type=str, default="hann", help="Window function name.")
    parser.add_argument("--workers", type=int, default=1, help="Transform threads.")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    args = _parse_args(argv)
    waveform = open_waveform(args.input_audio)
    num_points = args.window_size if args.num_points is None else args.num_points
    params = FramingParameters.from_num_points(
        args.window_size,
        num_points,
        window_function=args.window,
        stereo=waveform.is_stereo,
    )
    result = analyze(waveform, params, workers=args.workers)

    meta = result.metadata
    print(
        f"{meta.file_name}: {meta.num_frames} frames, "
        f"{meta.frequency_resolution:.3f} Hz/bin, {meta.window_duration_ms} ms/frame"
    )
    for record in frame_records(result):
        print(
            f"[{record['index']:5d}] {record['start_ms']:10.2f} ms  "
            f"peak {record['peak_hz']:9.2f} Hz"
        )


if __name__ == "__main__":
    main()
