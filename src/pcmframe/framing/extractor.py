"""Extract zero-padded, windowed mono frames from a canonical waveform."""

from __future__ import annotations

import math
from typing import Iterator

import numpy as np

from ..errors import PreconditionViolation
from ..signal.windows import WindowCache, WindowFunction
from .parameters import FramingParameters

FRAME_DTYPE = np.int32


def round_half_away(values: np.ndarray) -> np.ndarray:
    """Round to the nearest integer, ties away from zero."""
    values = np.asarray(values, dtype=np.float64)
    return np.sign(values) * np.floor(np.abs(values) + 0.5)


class SampleWindowExtractor:
    """Cut a full-length waveform into fixed-length analysis frames.

    Frame ``i`` covers samples ``[i * window_size, (i + 1) * window_size)``
    of the mono signal. Stereo input is downmixed by averaging adjacent
    left/right pairs. Every frame has ``window_size + zero_pad_length``
    samples; positions past the available source samples stay zero and
    the window function still spans the full nominal ``window_size``.

    Extraction never mutates the waveform and keeps no per-call state, so
    frames may be requested in any order and from several threads.

    Parameters
    ----------
    wave:
        Full-length integer waveform, interleaved when ``is_stereo``.
    is_stereo:
        Whether ``wave`` holds interleaved left/right samples.
    window_size:
        Samples taken from the waveform per frame, excluding padding.
    window_function:
        Window applied to the first ``window_size`` positions.
    zero_pad_length:
        Zeros appended after the windowed samples.
    cache:
        Coefficient cache shared across an analysis run. A private cache
        is created when omitted.
    """

    def __init__(
        self,
        wave: np.ndarray,
        is_stereo: bool,
        window_size: int,
        window_function: str | WindowFunction = WindowFunction.RECTANGULAR,
        zero_pad_length: int = 0,
        *,
        cache: WindowCache | None = None,
    ) -> None:
        if int(window_size) <= 0:
            raise PreconditionViolation(f"window_size must be positive, got {window_size}")
        if int(zero_pad_length) < 0:
            raise PreconditionViolation(
                f"zero_pad_length must be non-negative, got {zero_pad_length}"
            )
        self.wave = np.asarray(wave).reshape(-1)
        self.is_stereo = bool(is_stereo)
        if self.is_stereo and self.wave.size % 2:
            raise PreconditionViolation(
                f"Stereo waveform must have an even sample count, got {self.wave.size}"
            )
        self.window_size = int(window_size)
        self.window_function = WindowFunction.parse(window_function)
        self.zero_pad_length = int(zero_pad_length)
        self.cache = WindowCache() if cache is None else cache

        mono_length = self.wave.size // (2 if self.is_stereo else 1)
        self.num_frames = math.ceil(mono_length / self.window_size)

    @classmethod
    def from_parameters(
        cls,
        wave: np.ndarray,
        parameters: FramingParameters,
        *,
        cache: WindowCache | None = None,
    ) -> SampleWindowExtractor:
        """Build an extractor from a :class:`FramingParameters` value."""
        return cls(
            wave,
            parameters.stereo,
            parameters.window_size,
            parameters.window_function,
            parameters.zero_pad_length,
            cache=cache,
        )

    @property
    def frame_length(self) -> int:
        return self.window_size + self.zero_pad_length

    def __len__(self) -> int:
        return self.num_frames

    def extract_window(self, i: int) -> np.ndarray:
        """Return frame ``i`` as a fresh integer array."""
        if not 0 <= i < self.num_frames:
            raise PreconditionViolation(
                f"Frame index {i} out of range for {self.num_frames} frames"
            )
        window = np.zeros(self.frame_length, dtype=FRAME_DTYPE)
        is_last = i == self.num_frames - 1

        if self.is_stereo:
            remaining = self.window_size
            if is_last:
                remaining = (self.wave.size % self.window_size) // 2
            if remaining == 0:
                remaining = self.window_size
            start = self.window_size * 2 * i
            pairs = self.wave[start : start + 2 * remaining].astype(np.float64)
            pairs = pairs[: pairs.size - pairs.size % 2]
            mixed = round_half_away((pairs[0::2] + pairs[1::2]) / 2.0)
            window[: mixed.size] = mixed
        else:
            remaining = self.window_size
            if is_last:
                remaining = self.wave.size % self.window_size or self.window_size
            start = self.window_size * i
            window[:remaining] = self.wave[start : start + remaining]

        self._apply_window_function(window)
        return window

    def iter_windows(self) -> Iterator[np.ndarray]:
        """Yield every frame in index order."""
        for i in range(self.num_frames):
            yield self.extract_window(i)

    def _apply_window_function(self, window: np.ndarray) -> None:
        if self.window_function is WindowFunction.RECTANGULAR:
            return
        coefficients = self.cache.get(self.window_size, self.window_function)
        head = window[: self.window_size]
        window[: self.window_size] = round_half_away(head * coefficients)
