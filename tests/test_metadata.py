import numpy as np
import pytest

from pcmframe.analysis import compute_metadata, frequency_resolution, window_duration_ms
from pcmframe.audio import CanonicalWaveform
from pcmframe.framing import FramingParameters
from pcmframe.signal import WindowFunction


def test_frequency_resolution_44100_by_1024() -> None:
    assert frequency_resolution(44100, 1024) == pytest.approx(43.06640625)


def test_window_duration_44100_by_1024() -> None:
    assert window_duration_ms(44100, 1024) == 23


def test_window_duration_rounds_half_up() -> None:
    assert window_duration_ms(1000, 3) == 3
    assert window_duration_ms(8000, 20) == 3
    assert window_duration_ms(4000, 1) == 0


def test_smaller_windows_trade_frequency_for_time_resolution() -> None:
    assert frequency_resolution(48000, 512) > frequency_resolution(48000, 4096)
    assert window_duration_ms(48000, 512) < window_duration_ms(48000, 4096)


def test_compute_metadata_labels_run() -> None:
    waveform = CanonicalWaveform.from_samples(
        np.zeros(44100, dtype=np.int16), 44100, name="a.wav"
    )
    params = FramingParameters(window_size=1024, zero_pad_length=1024)

    metadata = compute_metadata(waveform, params)

    assert metadata.file_name == "a.wav"
    assert metadata.file_duration_ms == 500
    assert metadata.frequency_resolution == pytest.approx(43.06640625)
    assert metadata.window_duration_ms == 23
    assert metadata.num_frames == 44
    assert metadata.parameters is params


def test_metadata_to_dict_is_plain_data() -> None:
    waveform = CanonicalWaveform.from_samples(np.zeros(8, dtype=np.int16), 8000)
    params = FramingParameters(window_size=4, window_function=WindowFunction.BLACKMAN)

    data = compute_metadata(waveform, params).to_dict()

    assert data["parameters"] == {
        "window_size": 4,
        "zero_pad_length": 0,
        "window_function": "blackman",
        "stereo": False,
    }
    assert data["num_frames"] == 2
    assert data["file_name"] is None
