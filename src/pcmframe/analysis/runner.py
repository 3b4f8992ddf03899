"""Drive an external transform kernel across every frame of a waveform."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
import logging
from typing import Any, Callable, Generic, Iterator, TypeVar

import numpy as np
from scipy import fft as sp_fft

from ..audio.source import CanonicalWaveform
from ..errors import PreconditionViolation
from ..framing.extractor import SampleWindowExtractor
from ..framing.parameters import FramingParameters
from ..signal.windows import WindowCache
from .metadata import AnalysisMetadata, compute_metadata

LOGGER = logging.getLogger(__name__)

TBins = TypeVar("TBins")
TransformKernel = Callable[[np.ndarray], Any]


def magnitude_spectrum(frame: np.ndarray) -> np.ndarray:
    """Return the one-sided magnitude spectrum of ``frame``."""
    return np.abs(sp_fft.rfft(np.asarray(frame, dtype=np.float64)))


@dataclass(frozen=True)
class FramePlan:
    """Extractor and metadata prepared for one analysis run."""

    waveform: CanonicalWaveform
    parameters: FramingParameters
    extractor: SampleWindowExtractor
    metadata: AnalysisMetadata

    @property
    def frame_span_ms(self) -> float:
        """Return the nominal time covered by one frame in milliseconds."""
        return self.parameters.window_size * 1000.0 / self.waveform.sample_rate

    def frame_times_ms(self, index: int) -> tuple[float, float]:
        """Return ``(start_ms, end_ms)`` of frame ``index``."""
        start = index * self.frame_span_ms
        return start, start + self.frame_span_ms


@dataclass(frozen=True)
class FrameResult(Generic[TBins]):
    """Kernel output for one frame, labelled with its time span."""

    index: int
    start_ms: float
    end_ms: float
    bins: TBins


@dataclass(frozen=True)
class AnalysisResult(Generic[TBins]):
    """Metadata plus per-frame kernel outputs in index order."""

    metadata: AnalysisMetadata
    frames: list[FrameResult[TBins]]


def plan_frames(
    waveform: CanonicalWaveform,
    parameters: FramingParameters,
    *,
    cache: WindowCache | None = None,
) -> FramePlan:
    """Prepare the extractor and metadata for framing ``waveform``."""
    if parameters.stereo != waveform.is_stereo:
        raise PreconditionViolation(
            f"Framing parameters stereo={parameters.stereo} do not match "
            f"a {waveform.channels}-channel waveform"
        )
    extractor = SampleWindowExtractor.from_parameters(
        waveform.samples,
        parameters,
        cache=WindowCache() if cache is None else cache,
    )
    metadata = compute_metadata(waveform, parameters, num_frames=extractor.num_frames)
    LOGGER.info(
        "Planned %d frames of %d samples (+%d padding, window=%s) for %s",
        extractor.num_frames,
        parameters.window_size,
        parameters.zero_pad_length,
        parameters.window_function.value,
        waveform.name or "<memory>",
    )
    return FramePlan(
        waveform=waveform,
        parameters=parameters,
        extractor=extractor,
        metadata=metadata,
    )


def analyze(
    waveform: CanonicalWaveform,
    parameters: FramingParameters,
    kernel: TransformKernel = magnitude_spectrum,
    *,
    workers: int = 1,
) -> AnalysisResult[Any]:
    """Extract every frame, apply ``kernel``, and collect labelled results.

    Parameters
    ----------
    waveform:
        Canonical source waveform.
    parameters:
        Frame geometry; ``stereo`` must match ``waveform``.
    kernel:
        Callable mapping one frame to its spectral bins.
    workers:
        Thread count. Values above 1 extract and transform frames in a
        thread pool; results keep index order.
    """
    if int(workers) <= 0:
        raise PreconditionViolation(f"workers must be positive, got {workers}")
    plan = plan_frames(waveform, parameters)

    def run_one(index: int) -> FrameResult[Any]:
        start_ms, end_ms = plan.frame_times_ms(index)
        bins = kernel(plan.extractor.extract_window(index))
        return FrameResult(index=index, start_ms=start_ms, end_ms=end_ms, bins=bins)

    indices = range(plan.extractor.num_frames)
    if int(workers) == 1:
        frames = [run_one(index) for index in indices]
    else:
        with ThreadPoolExecutor(max_workers=int(workers)) as pool:
            frames = list(pool.map(run_one, indices))
    LOGGER.debug("Transformed %d frames with %d worker(s)", len(frames), workers)
    return AnalysisResult(metadata=plan.metadata, frames=frames)


class FrameStream(Generic[TBins]):
    """Lazy counterpart of :class:`AnalysisResult`.

    Metadata is available up front; each frame is extracted and transformed
    only when iteration reaches it. Every iteration starts again at frame 0.
    """

    def __init__(self, plan: FramePlan, kernel: Callable[[np.ndarray], TBins]) -> None:
        self.plan = plan
        self.kernel = kernel

    @property
    def metadata(self) -> AnalysisMetadata:
        return self.plan.metadata

    @property
    def frames(self) -> Iterator[FrameResult[TBins]]:
        return iter(self)

    def __len__(self) -> int:
        return self.plan.extractor.num_frames

    def __iter__(self) -> Iterator[FrameResult[TBins]]:
        for index, frame in enumerate(self.plan.extractor.iter_windows()):
            start_ms, end_ms = self.plan.frame_times_ms(index)
            yield FrameResult(
                index=index,
                start_ms=start_ms,
                end_ms=end_ms,
                bins=self.kernel(frame),
            )


def stream_frames(
    waveform: CanonicalWaveform,
    parameters: FramingParameters,
    kernel: TransformKernel = magnitude_spectrum,
    *,
    cache: WindowCache | None = None,
) -> FrameStream[Any]:
    """Plan ``waveform`` and return a :class:`FrameStream` over its frames."""
    return FrameStream(plan_frames(waveform, parameters, cache=cache), kernel)
