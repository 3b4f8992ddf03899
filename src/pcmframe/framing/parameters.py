"""Framing parameters shared by extraction and metadata computation."""

from __future__ import annotations

from dataclasses import dataclass, replace

from ..errors import PreconditionViolation
from ..signal.windows import WindowFunction


@dataclass(frozen=True)
class FramingParameters:
    """Immutable frame geometry supplied by the caller.

    Attributes
    ----------
    window_size:
        Samples per frame taken from the waveform, excluding padding.
    zero_pad_length:
        Zeros appended after the windowed samples.
    window_function:
        Window applied to the first ``window_size`` positions.
    stereo:
        Whether the source buffer is interleaved stereo.
    """

    window_size: int = 4096
    zero_pad_length: int = 0
    window_function: WindowFunction = WindowFunction.HANN
    stereo: bool = False

    def __post_init__(self) -> None:
        if int(self.window_size) <= 0:
            raise PreconditionViolation(
                f"window_size must be positive, got {self.window_size}"
            )
        if int(self.zero_pad_length) < 0:
            raise PreconditionViolation(
                f"zero_pad_length must be non-negative, got {self.zero_pad_length}"
            )
        object.__setattr__(self, "window_size", int(self.window_size))
        object.__setattr__(self, "zero_pad_length", int(self.zero_pad_length))
        object.__setattr__(
            self, "window_function", WindowFunction.parse(self.window_function)
        )
        object.__setattr__(self, "stereo", bool(self.stereo))

    @classmethod
    def from_num_points(
        cls,
        window_size: int,
        num_points: int,
        window_function: str | WindowFunction = WindowFunction.HANN,
        stereo: bool = False,
    ) -> FramingParameters:
        """Derive zero padding from a total frame length of ``num_points``."""
        if int(num_points) < int(window_size):
            raise PreconditionViolation(
                f"num_points ({num_points}) must be at least window_size ({window_size})"
            )
        return cls(
            window_size=window_size,
            zero_pad_length=int(num_points) - int(window_size),
            window_function=WindowFunction.parse(window_function),
            stereo=stereo,
        )

    @property
    def frame_length(self) -> int:
        """Return the length of every extracted frame."""
        return self.window_size + self.zero_pad_length

    def with_stereo(self, stereo: bool) -> FramingParameters:
        return replace(self, stereo=bool(stereo))
