"""Error taxonomy shared by decoding, framing, and analysis."""

from __future__ import annotations


class PcmFrameError(Exception):
    """Base class for all pcmframe errors."""


class DecodeError(PcmFrameError):
    """Raised when input cannot be decoded into a canonical waveform.

    Covers unparsable audio as well as unsupported bit depths or channel
    layouts reported by the decode layer.
    """


class FormatUnsupported(PcmFrameError):
    """Raised when no decoder is registered for a file type."""


class PreconditionViolation(PcmFrameError, ValueError):
    """Raised for invalid framing parameters or out-of-range frame indices."""
