"""Decode strategies producing :class:`PcmStream` and extension dispatch."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
import logging
from pathlib import Path
from typing import Any, Callable, Mapping, TypeAlias

import numpy as np
import soundfile as sf

from ..errors import DecodeError, FormatUnsupported
from .stream import PcmStream

LOGGER = logging.getLogger(__name__)

PCM_SUBTYPES = frozenset({"PCM_U8", "PCM_S8", "PCM_16"})


class AudioDecoder(ABC):
    """Turn an input handle into raw PCM samples plus format metadata."""

    @abstractmethod
    def decode(self, handle: str | Path) -> PcmStream:
        """Decode ``handle`` into a :class:`PcmStream`."""


DecoderFactory: TypeAlias = Callable[[], AudioDecoder]


def _probe(path: Path) -> Any:
    if not path.exists():
        raise FileNotFoundError(f"Audio file not found: {path}")
    try:
        return sf.info(str(path))
    except sf.LibsndfileError as exc:
        raise DecodeError(f"Could not decode {path}: {exc}") from exc


def _read_int16(path: Path) -> np.ndarray:
    try:
        data, _ = sf.read(str(path), dtype="int16", always_2d=True)
    except sf.LibsndfileError as exc:
        raise DecodeError(f"Could not decode {path}: {exc}") from exc
    return data


def _stream_from_int16(data: np.ndarray, sample_rate: int) -> PcmStream:
    frame_count, channels = data.shape
    return PcmStream(
        samples=np.ascontiguousarray(data).reshape(-1),
        sample_rate=int(sample_rate),
        channels=int(channels),
        bit_depth=16,
        frame_count=int(frame_count),
        frame_size=2 * int(channels),
        frame_rate=float(sample_rate),
    )


class PcmContainerDecoder(AudioDecoder):
    """Decode WAV/AIFF/FLAC files holding 8-bit or 16-bit PCM.

    libsndfile scales 8-bit samples into the 16-bit range while reading,
    so the resulting stream is always 16-bit.
    """

    def decode(self, handle: str | Path) -> PcmStream:
        path = Path(handle)
        info = _probe(path)
        if info.subtype not in PCM_SUBTYPES:
            raise DecodeError(
                f"Unsupported PCM subtype {info.subtype!r} in {path.name}; "
                f"expected one of {sorted(PCM_SUBTYPES)}"
            )
        data = _read_int16(path)
        LOGGER.debug(
            "Decoded %s: format=%s subtype=%s sr=%d ch=%d frames=%d",
            path.name,
            info.format,
            info.subtype,
            info.samplerate,
            info.channels,
            info.frames,
        )
        return _stream_from_int16(data, info.samplerate)


class CompressedDecoder(AudioDecoder):
    """Decode compressed files (MP3, Ogg) to 16-bit PCM via libsndfile."""

    def decode(self, handle: str | Path) -> PcmStream:
        path = Path(handle)
        info = _probe(path)
        data = _read_int16(path)
        LOGGER.debug(
            "Decoded %s: format=%s subtype=%s sr=%d ch=%d",
            path.name,
            info.format,
            info.subtype,
            info.samplerate,
            info.channels,
        )
        return _stream_from_int16(data, info.samplerate)


@dataclass(frozen=True)
class RawPcmDecoder(AudioDecoder):
    """Decode a headerless little-endian interleaved PCM buffer.

    Attributes
    ----------
    sample_rate:
        Sampling rate in Hz.
    channels:
        Number of interleaved channels.
    bit_depth:
        8 or 16. 8-bit streams are widened later by canonicalization.
    signed:
        Signedness of 8-bit samples. 16-bit samples are always signed.
    """

    sample_rate: int
    channels: int = 1
    bit_depth: int = 16
    signed: bool = False

    def _dtype(self) -> np.dtype:
        if self.bit_depth == 8:
            return np.dtype(np.int8 if self.signed else np.uint8)
        if self.bit_depth == 16:
            return np.dtype("<i2")
        raise DecodeError(f"Unsupported bit depth for raw PCM: {self.bit_depth}")

    def decode(self, handle: str | Path | bytes) -> PcmStream:
        if isinstance(handle, (bytes, bytearray, memoryview)):
            payload = bytes(handle)
        else:
            path = Path(handle)
            if not path.exists():
                raise FileNotFoundError(f"Audio file not found: {path}")
            payload = path.read_bytes()

        if self.channels <= 0:
            raise DecodeError(f"Unsupported channel count: {self.channels}")
        dtype = self._dtype()
        frame_size = dtype.itemsize * self.channels
        if len(payload) % frame_size:
            raise DecodeError(
                f"Raw PCM payload of {len(payload)} bytes does not hold whole "
                f"{self.channels}-channel {self.bit_depth}-bit frames"
            )
        samples = np.frombuffer(payload, dtype=dtype)
        return PcmStream(
            samples=samples,
            sample_rate=int(self.sample_rate),
            channels=int(self.channels),
            bit_depth=int(self.bit_depth),
            frame_count=len(payload) // frame_size,
            frame_size=frame_size,
            frame_rate=float(self.sample_rate),
            signed=self.bit_depth != 8 or self.signed,
        )


def decoder_registry(
    overrides: Mapping[str, DecoderFactory] | None = None,
) -> dict[str, DecoderFactory]:
    """Return registry mapping lower-case file extensions to decoder factories."""
    registry: dict[str, DecoderFactory] = {
        ".wav": PcmContainerDecoder,
        ".aiff": PcmContainerDecoder,
        ".aif": PcmContainerDecoder,
        ".flac": PcmContainerDecoder,
        ".mp3": CompressedDecoder,
        ".ogg": CompressedDecoder,
    }
    if overrides:
        registry.update({key.lower(): value for key, value in overrides.items()})
    return registry


def decoder_for(
    path: str | Path,
    *,
    registry: Mapping[str, DecoderFactory] | None = None,
) -> AudioDecoder:
    """Select a decoder for ``path`` by its file extension."""
    name = Path(path).name
    suffix = Path(name).suffix.lower()
    if not suffix:
        raise FormatUnsupported(f"Cannot determine audio format of {name!r}")
    if registry is None:
        factories = decoder_registry()
    else:
        factories = {key.lower(): value for key, value in registry.items()}
    try:
        factory = factories[suffix]
    except KeyError as exc:
        available = ", ".join(sorted(factories)) or "<none>"
        raise FormatUnsupported(
            f"Unsupported audio format {suffix!r}. Available: {available}"
        ) from exc
    return factory()
