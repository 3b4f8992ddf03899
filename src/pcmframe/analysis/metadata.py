"""Frequency and time resolution implied by a frame geometry."""

from __future__ import annotations

from dataclasses import asdict, dataclass
import math
from typing import Any

from ..audio.source import CanonicalWaveform
from ..framing.parameters import FramingParameters


@dataclass(frozen=True)
class AnalysisMetadata:
    """Labels attached to a framed analysis run.

    Attributes
    ----------
    file_name:
        Name of the decoded source, if known.
    file_duration_ms:
        Frame-count based source duration in milliseconds.
    frequency_resolution:
        Hz covered by one spectral bin (``sample_rate / window_size``).
    window_duration_ms:
        Length of one frame in milliseconds, rounded.
    num_frames:
        Number of frames the extractor yields.
    parameters:
        Framing parameters the run used.
    """

    file_name: str | None
    file_duration_ms: int
    frequency_resolution: float
    window_duration_ms: int
    num_frames: int
    parameters: FramingParameters

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["parameters"]["window_function"] = self.parameters.window_function.value
        return data


def frequency_resolution(sample_rate: int, window_size: int) -> float:
    """Return Hz per bin for ``window_size``-sample frames."""
    return float(sample_rate) / int(window_size)


def window_duration_ms(sample_rate: int, window_size: int) -> int:
    """Return the rounded duration of one ``window_size``-sample frame."""
    sample_length_ms = 1.0 / float(sample_rate) * 1000.0
    return int(math.floor(sample_length_ms * int(window_size) + 0.5))


def compute_metadata(
    waveform: CanonicalWaveform,
    parameters: FramingParameters,
    *,
    num_frames: int | None = None,
) -> AnalysisMetadata:
    """Compute :class:`AnalysisMetadata` for framing ``waveform``."""
    if num_frames is None:
        num_frames = math.ceil(waveform.mono_length / parameters.window_size)
    return AnalysisMetadata(
        file_name=waveform.name,
        file_duration_ms=waveform.duration_ms,
        frequency_resolution=frequency_resolution(
            waveform.sample_rate, parameters.window_size
        ),
        window_duration_ms=window_duration_ms(waveform.sample_rate, parameters.window_size),
        num_frames=int(num_frames),
        parameters=parameters,
    )
