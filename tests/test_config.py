from pathlib import Path

import pytest
from omegaconf.errors import ConfigKeyError, ValidationError

from pcmframe.config import framing_parameters, load_config, save_config
from pcmframe.signal import WindowFunction


def test_load_config_applies_defaults() -> None:
    cfg = load_config()
    assert cfg.framing.window_size == 4096
    assert cfg.framing.zero_pad_length == 0
    assert cfg.framing.num_points is None
    assert cfg.framing.window_function == "hann"
    assert cfg.runtime.workers == 1
    assert cfg.runtime.log_level == "INFO"


def test_load_config_merges_file_and_overrides(tmp_path: Path) -> None:
    path = tmp_path / "framing.yaml"
    path.write_text(
        "framing:\n  window_size: 2048\n  window_function: hamming\nruntime:\n  workers: 2\n",
        encoding="utf-8",
    )

    cfg = load_config(path, overrides=["framing.window_size=512", ""])

    assert cfg.framing.window_size == 512
    assert cfg.framing.window_function == "hamming"
    assert cfg.runtime.workers == 2


def test_load_config_rejects_unknown_key() -> None:
    with pytest.raises(ConfigKeyError, match="hop_size"):
        load_config(overrides=["framing.hop_size=128"])


def test_load_config_rejects_unknown_key_in_file(tmp_path: Path) -> None:
    path = tmp_path / "framing.yaml"
    path.write_text("framing:\n  hop_size: 128\n", encoding="utf-8")
    with pytest.raises(ConfigKeyError, match="hop_size"):
        load_config(path)


def test_load_config_rejects_ill_typed_value() -> None:
    with pytest.raises(ValidationError):
        load_config(overrides=["framing.window_size=abc"])


def test_save_config_round_trips(tmp_path: Path) -> None:
    cfg = load_config(overrides=["framing.num_points=8192", "runtime.log_level=DEBUG"])
    path = tmp_path / "nested" / "saved.yaml"
    save_config(path, cfg)
    assert load_config(path) == cfg


def test_framing_parameters_from_config() -> None:
    cfg = load_config(overrides=["framing.window_size=1024", "framing.zero_pad_length=24"])
    params = framing_parameters(cfg.framing, stereo=True)
    assert params.window_size == 1024
    assert params.zero_pad_length == 24
    assert params.window_function is WindowFunction.HANN
    assert params.stereo is True


def test_num_points_takes_precedence_over_zero_pad_length() -> None:
    cfg = load_config(
        overrides=[
            "framing.window_size=1024",
            "framing.zero_pad_length=24",
            "framing.num_points=2048",
        ]
    )
    params = framing_parameters(cfg.framing, stereo=False)
    assert params.zero_pad_length == 1024
