"""pcmframe public API."""

from .analysis import (
    AnalysisMetadata,
    AnalysisResult,
    FramePlan,
    FrameResult,
    FrameStream,
    analyze,
    compute_metadata,
    magnitude_spectrum,
    plan_frames,
    stream_frames,
)
from .audio import (
    CanonicalWaveform,
    PcmStream,
    canonicalize,
    decoder_for,
    open_waveform,
)
from .errors import DecodeError, FormatUnsupported, PcmFrameError, PreconditionViolation
from .framing import FramingParameters, SampleWindowExtractor
from .signal import WindowCache, WindowFunction, generate_window

__all__ = [
    "AnalysisMetadata",
    "AnalysisResult",
    "CanonicalWaveform",
    "DecodeError",
    "FormatUnsupported",
    "FramePlan",
    "FrameResult",
    "FrameStream",
    "FramingParameters",
    "PcmFrameError",
    "PcmStream",
    "PreconditionViolation",
    "SampleWindowExtractor",
    "WindowCache",
    "WindowFunction",
    "analyze",
    "canonicalize",
    "compute_metadata",
    "decoder_for",
    "generate_window",
    "magnitude_spectrum",
    "open_waveform",
    "plan_frames",
    "stream_frames",
]
