"""Tests for the windowed FFT adapter and the noise profile estimator."""

import numpy as np
import pytest

from audio_enhancement.exceptions import InvalidConfigurationError
from audio_enhancement.noise_profile import NoiseProfileEstimator
from audio_enhancement.transform import WindowedTransform


@pytest.mark.unit
class TestWindowedTransform:
    """Test cases for WindowedTransform."""

    @pytest.fixture
    def transform(self) -> WindowedTransform:
        return WindowedTransform(1024)

    def test_bin_count(self, transform: WindowedTransform) -> None:
        assert transform.window_size == 1024
        assert transform.bin_count == 513

    def test_rejects_non_power_of_two(self) -> None:
        with pytest.raises(InvalidConfigurationError):
            WindowedTransform(1000)
        with pytest.raises(InvalidConfigurationError):
            WindowedTransform(1024.0)  # type: ignore[arg-type]

    def test_short_frame_is_zero_padded(self, transform: WindowedTransform) -> None:
        frame = np.random.normal(0, 0.1, 700)
        padded = transform.pad(frame)

        assert len(padded) == 1024
        np.testing.assert_array_equal(padded[:700], frame)
        assert np.all(padded[700:] == 0.0)

        expected = np.fft.rfft(np.concatenate([frame, np.zeros(324)]))
        np.testing.assert_allclose(transform.forward(frame), expected, atol=1e-10)

    def test_long_frame_is_truncated(self, transform: WindowedTransform) -> None:
        frame = np.random.normal(0, 0.1, 2000)
        np.testing.assert_array_equal(transform.pad(frame), frame[:1024])

    def test_round_trip(self, transform: WindowedTransform) -> None:
        frame = np.random.normal(0, 0.1, 1024)
        restored = transform.inverse(transform.forward(frame))

        np.testing.assert_allclose(restored, frame, atol=1e-12)

    def test_inverse_truncates_to_length(self, transform: WindowedTransform) -> None:
        frame = np.random.normal(0, 0.1, 300)
        restored = transform.inverse(transform.forward(frame), length=300)

        assert len(restored) == 300
        np.testing.assert_allclose(restored, frame, atol=1e-12)

    def test_inverse_rejects_wrong_bin_count(self, transform: WindowedTransform) -> None:
        with pytest.raises(ValueError):
            transform.inverse(np.zeros(100, dtype=np.complex128))

    def test_power_spectrum(self, transform: WindowedTransform) -> None:
        frame = np.random.normal(0, 0.1, 1024)
        power = transform.power_spectrum(frame)

        assert len(power) == 513
        assert np.all(power >= 0.0)
        np.testing.assert_allclose(power, np.abs(np.fft.rfft(frame)) ** 2, rtol=1e-9)


@pytest.mark.unit
class TestNoiseProfileEstimator:
    """Test cases for NoiseProfileEstimator."""

    @pytest.fixture
    def sample_rate(self) -> int:
        return 16000

    @pytest.fixture
    def estimator(self) -> NoiseProfileEstimator:
        return NoiseProfileEstimator(WindowedTransform(1024))

    def test_silence_gives_zero_profile(
        self, estimator: NoiseProfileEstimator, sample_rate: int
    ) -> None:
        profile = estimator.estimate(np.zeros(sample_rate, dtype=np.float32), sample_rate)

        assert len(profile) == 513
        assert np.all(profile == 0.0)

    def test_noise_sample_is_at_most_one_second(
        self, estimator: NoiseProfileEstimator, sample_rate: int
    ) -> None:
        assert estimator.noise_sample_length(5000, sample_rate) == 5000
        assert estimator.noise_sample_length(48000, sample_rate) == sample_rate
        assert estimator.noise_sample_length(5000, 0) == 0

    def test_only_leading_audio_is_used(
        self, estimator: NoiseProfileEstimator, sample_rate: int
    ) -> None:
        audio = np.concatenate(
            [np.zeros(sample_rate), np.random.normal(0, 0.5, sample_rate)]
        )
        profile = estimator.estimate(audio, sample_rate)

        assert np.all(profile == 0.0)

    def test_short_sample_is_padded(
        self, estimator: NoiseProfileEstimator, sample_rate: int
    ) -> None:
        profile = estimator.estimate(np.full(10, 0.1), sample_rate)

        assert len(profile) == 513
        # DC power of ten samples at 0.1
        assert profile[0] == pytest.approx(1.0)

    def test_tone_peaks_at_its_bin(
        self, estimator: NoiseProfileEstimator, sample_rate: int
    ) -> None:
        t = np.arange(sample_rate) / sample_rate
        hum = 0.2 * np.sin(2 * np.pi * 1000.0 * t)

        profile = estimator.estimate(hum, sample_rate)

        # 1000 Hz * 1024 / 16000 Hz
        assert int(np.argmax(profile)) == 64
