"""Abstract interfaces for the enhancement engine."""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterable, AsyncIterator, Iterable, Iterator
from typing import TYPE_CHECKING, List, Optional

import numpy as np

from .models import (
    EnhancementConfig,
    EnhancementResult,
    EnhancementType,
    PerformanceMetrics,
    ProcessingMode,
)

if TYPE_CHECKING:
    from .context import EnhancementContext


class EnhancementStageInterface(ABC):
    """A single ``buffer -> buffer`` step of the enhancement pipeline."""

    #: Stage identity, used for metrics and capability reporting
    enhancement_type: EnhancementType

    #: Result field fed by the RMS change across this stage, if any
    metric_name: Optional[str] = None

    @abstractmethod
    def is_enabled(self, config: EnhancementConfig) -> bool:
        """
        Whether the stage runs under the given configuration.

        Args:
            config: Active enhancement configuration

        Returns:
            True if the stage should be applied
        """
        pass

    @abstractmethod
    def apply(
        self, context: "EnhancementContext", audio_data: np.ndarray, sample_rate: int
    ) -> np.ndarray:
        """
        Process audio with the parameters held by the context configuration.

        Args:
            context: Shared engine state borrowed for this call
            audio_data: Input audio data as numpy array
            sample_rate: Audio sample rate in Hz

        Returns:
            Processed audio data of the same length
        """
        pass

    def measure(self, rms_before: float, rms_after: float) -> float:
        """
        Stage-specific metric derived from the RMS before and after the stage.

        Args:
            rms_before: RMS of the stage input
            rms_after: RMS of the stage output

        Returns:
            Metric value (0.0 for stages without a metric)
        """
        return 0.0


class AudioEnhancementServiceInterface(ABC):
    """Interface for audio enhancement services."""

    @abstractmethod
    def initialize(self) -> None:
        """Make the service ready to process audio with its current configuration."""
        pass

    @abstractmethod
    def dispose(self) -> None:
        """Release resources and drop the noise profile and metrics."""
        pass

    @abstractmethod
    def configure(self, config: EnhancementConfig) -> None:
        """Replace the enhancement configuration."""
        pass

    @property
    @abstractmethod
    def current_config(self) -> EnhancementConfig:
        """Current enhancement configuration."""
        pass

    @abstractmethod
    def process_audio(self, audio_data: np.ndarray, sample_rate: int) -> EnhancementResult:
        """Run every enabled stage over the buffer."""
        pass

    @abstractmethod
    def process_audio_stream(
        self, audio_stream: AsyncIterable[np.ndarray], sample_rate: int
    ) -> AsyncIterator[np.ndarray]:
        """Enhance an asynchronous sequence of frames."""
        pass

    @abstractmethod
    def iter_enhanced_audio(
        self, frames: Iterable[np.ndarray], sample_rate: int
    ) -> Iterator[np.ndarray]:
        """Enhance a synchronous sequence of frames."""
        pass

    @abstractmethod
    def estimate_noise_profile(self, audio_data: np.ndarray, sample_rate: int) -> None:
        """Estimate and store the noise profile from the given audio."""
        pass

    @abstractmethod
    def apply_noise_reduction(
        self, audio_data: np.ndarray, sample_rate: int, strength: float
    ) -> np.ndarray:
        """Apply the RMS noise gate."""
        pass

    @abstractmethod
    def apply_echo_cancellation(
        self, audio_data: np.ndarray, sample_rate: int, strength: float
    ) -> np.ndarray:
        """Apply delayed-subtraction echo cancellation."""
        pass

    @abstractmethod
    def apply_auto_gain_control(
        self, audio_data: np.ndarray, sample_rate: int, threshold: float
    ) -> np.ndarray:
        """Apply windowed automatic gain control."""
        pass

    @abstractmethod
    def apply_spectral_subtraction(
        self, audio_data: np.ndarray, sample_rate: int, alpha: float, beta: float
    ) -> np.ndarray:
        """Apply spectral subtraction against the noise profile."""
        pass

    @abstractmethod
    def apply_frequency_filtering(
        self,
        audio_data: np.ndarray,
        sample_rate: int,
        high_pass_cutoff: float,
        low_pass_cutoff: float,
    ) -> np.ndarray:
        """Apply high-pass and low-pass band limiting."""
        pass

    @abstractmethod
    def get_supported_enhancements(self) -> List[EnhancementType]:
        """Enhancement stages available on this platform."""
        pass

    @abstractmethod
    def is_ready(self) -> bool:
        """Whether the service has been initialized."""
        pass

    @property
    @abstractmethod
    def processing_mode(self) -> ProcessingMode:
        """Current processing mode."""
        pass

    @abstractmethod
    def set_processing_mode(self, mode: ProcessingMode) -> None:
        """Switch processing mode, keeping every other parameter."""
        pass

    @abstractmethod
    def get_performance_metrics(self) -> PerformanceMetrics:
        """Snapshot of the accumulated performance counters."""
        pass

    @abstractmethod
    def reset_to_defaults(self) -> None:
        """Restore default parameters and clear the noise profile."""
        pass
