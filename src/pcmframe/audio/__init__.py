"""Canonical audio sources and decode strategies."""

from .decoders import (
    AudioDecoder,
    CompressedDecoder,
    DecoderFactory,
    PcmContainerDecoder,
    RawPcmDecoder,
    decoder_for,
    decoder_registry,
)
from .source import CanonicalWaveform, canonicalize, open_waveform, widen_to_16bit
from .stream import PcmStream

__all__ = [
    "AudioDecoder",
    "CanonicalWaveform",
    "CompressedDecoder",
    "DecoderFactory",
    "PcmContainerDecoder",
    "PcmStream",
    "RawPcmDecoder",
    "canonicalize",
    "decoder_for",
    "decoder_registry",
    "open_waveform",
    "widen_to_16bit",
]
