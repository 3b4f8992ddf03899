"""Signal processing utilities."""

from .windows import (
    WindowCache,
    WindowFunction,
    available_windows,
    generate_window,
)

__all__ = ["WindowCache", "WindowFunction", "available_windows", "generate_window"]
