"""Canonical 16-bit waveforms built from decoder output."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from pathlib import Path
from typing import Any, Mapping

import numpy as np

from ..errors import DecodeError
from .decoders import DecoderFactory, decoder_for
from .stream import PcmStream

LOGGER = logging.getLogger(__name__)

CANONICAL_BIT_DEPTH = 16
SUPPORTED_CHANNELS = (1, 2)
INT16_MIN = -32768
INT16_MAX = 32767


def widen_to_16bit(samples: np.ndarray, *, signed: bool) -> np.ndarray:
    """Scale 8-bit sample values into the signed 16-bit range."""
    values = np.asarray(samples, dtype=np.int32)
    if not signed:
        values = values - 128
    return (values << 8).astype(np.int16)


def _checked_int16(samples: Any) -> np.ndarray:
    """Copy ``samples`` into a flat int16 array, rejecting lossy casts."""
    values = np.asarray(samples).reshape(-1)
    if values.size == 0:
        return np.zeros(0, dtype=np.int16)
    if not np.issubdtype(values.dtype, np.integer):
        raise DecodeError(f"Samples must be integers, got dtype {values.dtype}")
    low, high = int(values.min()), int(values.max())
    if low < INT16_MIN or high > INT16_MAX:
        raise DecodeError(
            f"Samples span [{low}, {high}], outside the 16-bit range "
            f"[{INT16_MIN}, {INT16_MAX}]"
        )
    return values.astype(np.int16)


@dataclass(frozen=True)
class CanonicalWaveform:
    """Immutable 16-bit integer waveform shared read-only by frame extraction.

    ``samples`` is interleaved when ``channels == 2``.
    """

    samples: np.ndarray
    sample_rate: int
    channels: int
    frame_count: int
    frame_size: int
    frame_rate: float
    name: str | None = None
    bit_depth: int = field(default=CANONICAL_BIT_DEPTH, init=False)

    def __post_init__(self) -> None:
        if self.channels not in SUPPORTED_CHANNELS:
            raise DecodeError(f"Unsupported channel count: {self.channels}")
        if self.sample_rate <= 0:
            raise DecodeError(f"Sample rate must be positive, got {self.sample_rate}")
        data = _checked_int16(self.samples)
        if data.size % self.channels:
            raise DecodeError(
                f"Sample count {data.size} is not a multiple of {self.channels} channels"
            )
        data.setflags(write=False)
        object.__setattr__(self, "samples", data)

    @classmethod
    def from_samples(
        cls,
        samples: Any,
        sample_rate: int,
        channels: int = 1,
        *,
        name: str | None = None,
    ) -> CanonicalWaveform:
        """Build a waveform from an in-memory 16-bit interleaved buffer."""
        data = np.asarray(samples).reshape(-1)
        return cls(
            samples=data,
            sample_rate=int(sample_rate),
            channels=int(channels),
            frame_count=data.size // max(int(channels), 1),
            frame_size=2 * int(channels),
            frame_rate=float(sample_rate),
            name=name,
        )

    @property
    def is_stereo(self) -> bool:
        return self.channels == 2

    @property
    def mono_length(self) -> int:
        """Return the number of samples per channel."""
        return int(self.samples.size // self.channels)

    @property
    def duration_ms(self) -> int:
        """Return the frame-count based duration in milliseconds.

        Computed as ``frame_count / (frame_size * frame_rate) * 1000 *
        channels`` and truncated. The channel multiplier is part of the
        reported value; callers comparing against wall-clock length must
        account for it.
        """
        if self.frame_size <= 0 or self.frame_rate <= 0:
            return 0
        return int(
            self.frame_count / (self.frame_size * self.frame_rate) * 1000 * self.channels
        )


def canonicalize(stream: PcmStream, *, name: str | None = None) -> CanonicalWaveform:
    """Normalize decoder output into a :class:`CanonicalWaveform`."""
    if stream.channels not in SUPPORTED_CHANNELS:
        raise DecodeError(f"Unsupported channel count: {stream.channels}")
    if stream.bit_depth == 8:
        LOGGER.debug(
            "Widening %s-bit samples to 16-bit (signed=%s)",
            stream.bit_depth,
            stream.signed,
        )
        raw = np.asarray(stream.samples)
        low, high = (-128, 127) if stream.signed else (0, 255)
        if raw.size and (
            not np.issubdtype(raw.dtype, np.integer)
            or int(raw.min()) < low
            or int(raw.max()) > high
        ):
            raise DecodeError(
                f"8-bit samples must be integers in [{low}, {high}] (signed={stream.signed})"
            )
        samples = widen_to_16bit(raw, signed=stream.signed)
        frame_size = 2 * stream.channels
    elif stream.bit_depth == CANONICAL_BIT_DEPTH:
        samples = np.asarray(stream.samples)
        frame_size = stream.frame_size
    else:
        raise DecodeError(
            f"Unsupported bit depth: {stream.bit_depth} "
            f"(expected 8 or {CANONICAL_BIT_DEPTH})"
        )
    return CanonicalWaveform(
        samples=samples,
        sample_rate=int(stream.sample_rate),
        channels=int(stream.channels),
        frame_count=int(stream.frame_count),
        frame_size=int(frame_size),
        frame_rate=float(stream.frame_rate),
        name=name,
    )


def open_waveform(
    handle: str | Path,
    *,
    registry: Mapping[str, DecoderFactory] | None = None,
) -> CanonicalWaveform:
    """Decode ``handle`` with the decoder registered for its extension."""
    path = Path(handle)
    decoder = decoder_for(path, registry=registry)
    stream = decoder.decode(path)
    return canonicalize(stream, name=path.name)
