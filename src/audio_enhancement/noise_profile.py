"""Static noise profile estimation from a representative audio sample."""

import numpy as np

from .config import NOISE_PROFILE_MAX_DURATION_SEC
from .logging_utils import get_logger
from .transform import WindowedTransform

logger = get_logger(__name__)


class NoiseProfileEstimator:
    """Derive a reference power spectrum from the start of a buffer.

    At most one second of audio is used. The sample is zero-padded or
    truncated to the transform window and its per-bin power becomes the
    profile consumed by spectral subtraction.
    """

    def __init__(
        self,
        transform: WindowedTransform,
        max_duration: float = NOISE_PROFILE_MAX_DURATION_SEC,
    ) -> None:
        """
        Initialize the estimator.

        Args:
            transform: Transform adapter sized to the analysis window
            max_duration: Longest stretch of audio (seconds) used for the profile
        """
        self.transform = transform
        self.max_duration = max_duration

    def noise_sample_length(self, audio_length: int, sample_rate: int) -> int:
        """Number of leading samples that make up the noise sample."""
        max_samples = int(max(sample_rate, 0) * self.max_duration)
        return min(audio_length, max_samples)

    def estimate(self, audio_data: np.ndarray, sample_rate: int) -> np.ndarray:
        """
        Estimate the noise power spectrum.

        Args:
            audio_data: Audio believed to contain (mostly) background noise
            sample_rate: Audio sample rate in Hz

        Returns:
            Non-negative power spectrum with ``window_size // 2 + 1`` bins
        """
        noise_length = self.noise_sample_length(len(audio_data), sample_rate)
        profile = self.transform.power_spectrum(audio_data[:noise_length])

        logger.debug(
            f"Noise profile estimated from {noise_length} samples "
            f"({self.transform.bin_count} bins, peak power {float(np.max(profile)):.3g})"
        )
        return profile
