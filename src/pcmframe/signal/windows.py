"""Window function coefficients and a per-run coefficient cache."""

from __future__ import annotations

from enum import Enum
from typing import Callable

import numpy as np
from scipy.signal import get_window

from ..errors import PreconditionViolation


class WindowFunction(str, Enum):
    """Supported window function kinds."""

    RECTANGULAR = "rectangular"
    TRIANGULAR = "triangular"
    BARTLETT = "bartlett"
    WELCH = "welch"
    HANN = "hann"
    HAMMING = "hamming"
    BLACKMAN = "blackman"
    FLAT_TOP = "flat_top"

    @classmethod
    def parse(cls, value: str | WindowFunction) -> WindowFunction:
        """Resolve a window function from its name or a common alias."""
        if isinstance(value, WindowFunction):
            return value
        key = str(value).strip().lower().replace("-", "_")
        key = _ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError as exc:
            available = ", ".join(item.value for item in cls)
            raise PreconditionViolation(
                f"Unknown window function: {value!r}. Available: {available}"
            ) from exc


_ALIASES = {
    "hanning": "hann",
    "boxcar": "rectangular",
    "triang": "triangular",
    "flattop": "flat_top",
}


def _welch(length: int) -> np.ndarray:
    if length == 1:
        return np.ones(1, dtype=np.float64)
    half = (length - 1) / 2.0
    n = np.arange(length, dtype=np.float64)
    return 1.0 - ((n - half) / half) ** 2


def _scipy_window(name: str) -> Callable[[int], np.ndarray]:
    def build(length: int) -> np.ndarray:
        return np.asarray(get_window(name, length, fftbins=False), dtype=np.float64)

    return build


WINDOW_BUILDERS: dict[WindowFunction, Callable[[int], np.ndarray]] = {
    WindowFunction.RECTANGULAR: _scipy_window("boxcar"),
    WindowFunction.TRIANGULAR: _scipy_window("triang"),
    WindowFunction.BARTLETT: _scipy_window("bartlett"),
    WindowFunction.WELCH: _welch,
    WindowFunction.HANN: _scipy_window("hann"),
    WindowFunction.HAMMING: _scipy_window("hamming"),
    WindowFunction.BLACKMAN: _scipy_window("blackman"),
    WindowFunction.FLAT_TOP: _scipy_window("flattop"),
}


def generate_window(length: int, kind: str | WindowFunction) -> np.ndarray:
    """Return ``length`` symmetric coefficients for window ``kind``.

    Parameters
    ----------
    length:
        Number of coefficients. Must be positive.
    kind:
        :class:`WindowFunction` member or its name.

    Returns
    -------
    ndarray
        Float64 coefficients, one per sample position.
    """
    if int(length) <= 0:
        raise PreconditionViolation(f"Window length must be positive, got {length}")
    window_kind = WindowFunction.parse(kind)
    return WINDOW_BUILDERS[window_kind](int(length))


def available_windows() -> list[str]:
    """Return names of all supported window functions."""
    return [item.value for item in WindowFunction]


class WindowCache:
    """Memoize window coefficients by ``(length, kind)`` for one analysis run."""

    def __init__(self) -> None:
        self._entries: dict[tuple[int, WindowFunction], np.ndarray] = {}

    def get(self, length: int, kind: str | WindowFunction) -> np.ndarray:
        key = (int(length), WindowFunction.parse(kind))
        coefficients = self._entries.get(key)
        if coefficients is None:
            coefficients = generate_window(*key)
            coefficients.setflags(write=False)
            self._entries[key] = coefficients
        return coefficients

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        self._entries.clear()
