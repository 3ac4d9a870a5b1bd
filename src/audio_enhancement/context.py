"""Mutable engine state passed explicitly into the enhancement stages."""

from typing import Optional

import numpy as np

from .chunking import OverlapChunkProcessor
from .models import EnhancementConfig
from .noise_profile import NoiseProfileEstimator
from .performance_monitor import EnhancementPerformanceMonitor
from .transform import WindowedTransform


class EnhancementContext:
    """
    Configuration, transform, noise profile and metrics for one audio stream.

    The owning service holds exactly one context; stage functions borrow it
    for the duration of a call and must not keep references to it.
    """

    def __init__(
        self,
        config: Optional[EnhancementConfig] = None,
        monitor: Optional[EnhancementPerformanceMonitor] = None,
    ) -> None:
        self.monitor = monitor or EnhancementPerformanceMonitor()
        self.noise_profile: Optional[np.ndarray] = None
        self.apply_config(config or EnhancementConfig())

    def apply_config(self, config: EnhancementConfig) -> None:
        """Install a configuration and rebuild the transform sized to its window."""
        self.config = config
        self.transform = WindowedTransform(config.window_size)
        self.noise_estimator = NoiseProfileEstimator(self.transform)

    def chunk_processor(self) -> OverlapChunkProcessor:
        """Overlap-chunk processor for the current window and overlap."""
        return OverlapChunkProcessor(
            self.config.window_size,
            self.config.overlap_size,
            self.config.chunk_reconstruction,
        )

    def estimate_noise_profile(self, audio_data: np.ndarray, sample_rate: int) -> np.ndarray:
        """Replace the noise profile with one estimated from ``audio_data``."""
        self.noise_profile = self.noise_estimator.estimate(audio_data, sample_rate)
        return self.noise_profile

    def ensure_noise_profile(self, audio_data: np.ndarray, sample_rate: int) -> np.ndarray:
        """Return the noise profile, estimating it from ``audio_data`` if absent."""
        if self.noise_profile is None:
            return self.estimate_noise_profile(audio_data, sample_rate)
        return self.noise_profile

    def clear_noise_profile(self) -> None:
        self.noise_profile = None
