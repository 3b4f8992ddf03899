"""Frame geometry and sample window extraction."""

from .extractor import SampleWindowExtractor, round_half_away
from .parameters import FramingParameters

__all__ = ["FramingParameters", "SampleWindowExtractor", "round_half_away"]
