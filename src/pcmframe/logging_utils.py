"""JSON Lines output for per-frame analysis records."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, Mapping

import numpy as np

from .analysis.runner import AnalysisResult, FrameStream


class JsonlLogger:
    """Append JSON-serializable records to a JSON Lines file.

    With ``overwrite=True`` any existing file is truncated on construction.
    """

    def __init__(self, path: str | Path, *, overwrite: bool = False) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if overwrite:
            self.path.write_text("", encoding="utf-8")

    def write(self, record: Mapping[str, Any]) -> None:
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(dict(record), ensure_ascii=False) + "\n")


def frame_records(
    result: AnalysisResult[np.ndarray] | FrameStream[np.ndarray],
) -> Iterable[dict[str, Any]]:
    """Summarize magnitude-spectrum frames as peak bin and peak frequency."""
    params = result.metadata.parameters
    # bins are spaced over the padded length, not the window size
    bin_spacing = (
        result.metadata.frequency_resolution * params.window_size / params.frame_length
    )
    for frame in result.frames:
        bins = np.asarray(frame.bins)
        peak_bin = int(np.argmax(bins)) if bins.size else 0
        yield {
            "index": frame.index,
            "start_ms": round(frame.start_ms, 3),
            "end_ms": round(frame.end_ms, 3),
            "peak_bin": peak_bin,
            "peak_hz": round(peak_bin * bin_spacing, 3),
            "peak_magnitude": float(bins[peak_bin]) if bins.size else 0.0,
        }


def log_frames_jsonl(
    path: str | Path,
    result: AnalysisResult[np.ndarray] | FrameStream[np.ndarray],
) -> int:
    """Replace ``path`` with one summary line per frame; return the count."""
    logger = JsonlLogger(path, overwrite=True)
    count = 0
    for record in frame_records(result):
        logger.write(record)
        count += 1
    return count
