import numpy as np
import pytest

from pcmframe.audio import CanonicalWaveform, PcmStream, canonicalize, widen_to_16bit
from pcmframe.errors import DecodeError


def _stream(samples, *, channels=1, bit_depth=16, signed=True, sample_rate=8000):
    data = np.asarray(samples)
    frame_count = data.size // channels
    return PcmStream(
        samples=data,
        sample_rate=sample_rate,
        channels=channels,
        bit_depth=bit_depth,
        frame_count=frame_count,
        frame_size=(bit_depth // 8) * channels,
        frame_rate=float(sample_rate),
        signed=signed,
    )


def test_widen_unsigned_8bit_into_signed_16bit_range() -> None:
    out = widen_to_16bit(np.array([0, 128, 255], dtype=np.uint8), signed=False)
    np.testing.assert_array_equal(out, [-32768, 0, 32512])
    assert out.dtype == np.int16


def test_widen_signed_8bit() -> None:
    out = widen_to_16bit(np.array([-128, 0, 127], dtype=np.int8), signed=True)
    np.testing.assert_array_equal(out, [-32768, 0, 32512])


def test_canonicalize_widens_8bit_and_fixes_frame_size() -> None:
    stream = _stream(np.array([0, 255, 128, 129], dtype=np.uint8), channels=2,
                     bit_depth=8, signed=False)
    waveform = canonicalize(stream, name="tone.raw")
    np.testing.assert_array_equal(waveform.samples, [-32768, 32512, 0, 256])
    assert waveform.bit_depth == 16
    assert waveform.frame_size == 4
    assert waveform.channels == 2
    assert waveform.name == "tone.raw"


def test_canonicalize_passes_16bit_through() -> None:
    samples = np.array([-5, 7, 32767, -32768], dtype=np.int16)
    waveform = canonicalize(_stream(samples))
    np.testing.assert_array_equal(waveform.samples, samples)
    assert waveform.bit_depth == 16


@pytest.mark.parametrize("bit_depth", [4, 24, 32])
def test_canonicalize_rejects_unsupported_bit_depth(bit_depth: int) -> None:
    with pytest.raises(DecodeError, match="Unsupported bit depth"):
        canonicalize(_stream(np.zeros(4, dtype=np.int32), bit_depth=bit_depth))


def test_canonicalize_rejects_more_than_two_channels() -> None:
    with pytest.raises(DecodeError, match="channel count"):
        canonicalize(_stream(np.zeros(6, dtype=np.int16), channels=3))


def test_stereo_waveform_requires_even_sample_count() -> None:
    with pytest.raises(DecodeError, match="multiple of 2 channels"):
        CanonicalWaveform.from_samples(np.zeros(5, dtype=np.int16), 8000, channels=2)


def test_waveform_samples_are_read_only() -> None:
    waveform = CanonicalWaveform.from_samples([1, 2, 3, 4], 8000)
    with pytest.raises(ValueError):
        waveform.samples[0] = 10


def test_waveform_does_not_alias_caller_buffer() -> None:
    source = np.array([1, 2, 3, 4], dtype=np.int16)
    waveform = CanonicalWaveform.from_samples(source, 8000)
    source[0] = 99
    assert waveform.samples[0] == 1


def test_duration_formula_mono() -> None:
    # frame_count / (frame_size * frame_rate) * 1000 * channels
    waveform = CanonicalWaveform.from_samples(np.zeros(44100, dtype=np.int16), 44100)
    assert waveform.frame_size == 2
    assert waveform.duration_ms == 500


def test_duration_formula_keeps_channel_multiplier() -> None:
    waveform = CanonicalWaveform.from_samples(
        np.zeros(2 * 44100, dtype=np.int16), 44100, channels=2
    )
    assert waveform.frame_count == 44100
    assert waveform.frame_size == 4
    # 44100 / (4 * 44100) * 1000 * 2
    assert waveform.duration_ms == 500


def test_duration_truncates_fractional_milliseconds() -> None:
    waveform = CanonicalWaveform.from_samples(np.zeros(1001, dtype=np.int16), 1000)
    # 1001 / 2000 * 1000 = 500.5
    assert waveform.duration_ms == 500


def test_duration_uses_decoder_reported_frame_size_for_16bit() -> None:
    stream = PcmStream(
        samples=np.zeros(8000, dtype=np.int16),
        sample_rate=8000,
        channels=1,
        bit_depth=16,
        frame_count=8000,
        frame_size=4,
        frame_rate=8000.0,
    )
    assert canonicalize(stream).duration_ms == 250


def test_mono_length_counts_samples_per_channel() -> None:
    mono = CanonicalWaveform.from_samples(np.zeros(10, dtype=np.int16), 8000)
    stereo = CanonicalWaveform.from_samples(np.zeros(10, dtype=np.int16), 8000, channels=2)
    assert mono.mono_length == 10
    assert not mono.is_stereo
    assert stereo.mono_length == 5
    assert stereo.is_stereo


def test_canonicalize_rejects_16bit_values_outside_int16_range() -> None:
    samples = np.array([40000, -40000, 12], dtype=np.int32)
    with pytest.raises(DecodeError, match="16-bit range"):
        canonicalize(_stream(samples))


def test_canonicalize_rejects_float_samples() -> None:
    with pytest.raises(DecodeError, match="integers"):
        canonicalize(_stream(np.array([0.0, 1.7, -3.2])))


def test_from_samples_rejects_values_that_would_wrap() -> None:
    with pytest.raises(DecodeError, match="16-bit range"):
        CanonicalWaveform.from_samples([40000], 8000)


def test_from_samples_accepts_wider_int_dtype_within_range() -> None:
    waveform = CanonicalWaveform.from_samples(np.array([-32768, 32767], dtype=np.int64), 8000)
    np.testing.assert_array_equal(waveform.samples, [-32768, 32767])
    assert waveform.samples.dtype == np.int16


@pytest.mark.parametrize(
    ("samples", "signed"),
    [
        (np.array([0, 300], dtype=np.int16), False),
        (np.array([-1, 10], dtype=np.int16), False),
        (np.array([200, 0], dtype=np.int16), True),
        (np.array([0.5, 1.0]), False),
    ],
)
def test_canonicalize_rejects_out_of_range_8bit(samples: np.ndarray, signed: bool) -> None:
    with pytest.raises(DecodeError, match="8-bit samples"):
        canonicalize(_stream(samples, bit_depth=8, signed=signed))
