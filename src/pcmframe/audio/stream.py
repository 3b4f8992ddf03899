"""Decoder output container."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class PcmStream:
    """Raw PCM samples and format metadata produced by a decoder.

    Attributes
    ----------
    samples:
        Interleaved integer samples with shape ``(frame_count * channels,)``.
    sample_rate:
        Sampling rate in Hz.
    channels:
        Number of interleaved channels.
    bit_depth:
        Bits per sample as delivered by the decoder.
    frame_count:
        Number of sample frames (one sample per channel each).
    frame_size:
        Bytes per sample frame.
    frame_rate:
        Sample frames per second. Equal to ``sample_rate`` for PCM.
    signed:
        Whether 8-bit samples are signed. Ignored for other depths.
    """

    samples: np.ndarray
    sample_rate: int
    channels: int
    bit_depth: int
    frame_count: int
    frame_size: int
    frame_rate: float
    signed: bool = True
