"""Analysis metadata and frame transform runner."""

from .metadata import (
    AnalysisMetadata,
    compute_metadata,
    frequency_resolution,
    window_duration_ms,
)
from .runner import (
    AnalysisResult,
    FramePlan,
    FrameResult,
    FrameStream,
    analyze,
    magnitude_spectrum,
    plan_frames,
    stream_frames,
)

__all__ = [
    "AnalysisMetadata",
    "AnalysisResult",
    "FramePlan",
    "FrameResult",
    "FrameStream",
    "analyze",
    "compute_metadata",
    "frequency_resolution",
    "magnitude_spectrum",
    "plan_frames",
    "stream_frames",
    "window_duration_ms",
]
