"""Typed OmegaConf configuration for framing runs."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
import importlib
from pathlib import Path
from typing import Any, Iterable

import yaml

from .framing.parameters import FramingParameters

try:
    OmegaConf = importlib.import_module("omegaconf").OmegaConf
except ModuleNotFoundError as exc:  # pragma: no cover
    raise RuntimeError(
        "pcmframe.config requires 'omegaconf'. Install it with `pip install omegaconf`."
    ) from exc


@dataclass
class FramingConfig:
    """Frame geometry options."""

    window_size: int = 4096
    zero_pad_length: int = 0
    num_points: int | None = None
    window_function: str = "hann"


@dataclass
class RuntimeConfig:
    """Execution options."""

    workers: int = 1
    log_level: str = "INFO"


@dataclass
class PcmFrameConfig:
    """Top-level configuration schema."""

    framing: FramingConfig = field(default_factory=FramingConfig)
    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)


def load_config(
    path: str | Path | None = None,
    *,
    overrides: Iterable[str] | None = None,
) -> PcmFrameConfig:
    """Merge schema defaults, an optional YAML file, and dotlist overrides.

    Unknown keys in either source raise an OmegaConf validation error.
    """
    cfg = OmegaConf.structured(PcmFrameConfig)
    if path is not None:
        cfg = OmegaConf.merge(cfg, OmegaConf.load(Path(path)))
    override_list = [item for item in (overrides or []) if item]
    if override_list:
        cfg = OmegaConf.merge(cfg, OmegaConf.from_dotlist(override_list))
    decoded = OmegaConf.to_object(cfg)
    if not isinstance(decoded, PcmFrameConfig):
        raise TypeError("Failed to decode config as PcmFrameConfig")
    return decoded


def config_to_dict(config: PcmFrameConfig) -> dict[str, Any]:
    """Convert :class:`PcmFrameConfig` to a plain dictionary."""
    return asdict(config)


def save_config(path: str | Path, config: PcmFrameConfig) -> None:
    """Write ``config`` to a YAML file."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    with out.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(config_to_dict(config), handle, sort_keys=False)


def framing_parameters(config: FramingConfig, *, stereo: bool) -> FramingParameters:
    """Build :class:`FramingParameters` from ``config``.

    ``num_points`` takes precedence over ``zero_pad_length`` when set.
    """
    if config.num_points is not None:
        return FramingParameters.from_num_points(
            config.window_size,
            config.num_points,
            window_function=config.window_function,
            stereo=stereo,
        )
    return FramingParameters(
        window_size=config.window_size,
        zero_pad_length=config.zero_pad_length,
        window_function=config.window_function,
        stereo=stereo,
    )
