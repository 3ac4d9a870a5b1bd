"""Data models for audio enhancement."""

import math
from dataclasses import asdict, dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List

import numpy as np

from . import config
from .exceptions import InvalidAudioError, InvalidConfigurationError


class EnhancementType(Enum):
    """Enhancement stages the engine can apply."""

    NOISE_REDUCTION = "noise_reduction"
    ECHO_CANCELLATION = "echo_cancellation"
    AUTO_GAIN_CONTROL = "auto_gain_control"
    SPECTRAL_SUBTRACTION = "spectral_subtraction"
    FREQUENCY_FILTERING = "frequency_filtering"


class ProcessingMode(Enum):
    """Trade-off between latency and enhancement quality."""

    REALTIME = "realtime"  # Short frames, cheap stages
    BALANCED = "balanced"  # Default frames, band limiting
    QUALITY = "quality"  # Long frames, every spectral stage


class ReconstructionMode(Enum):
    """How overlapping chunks are written back into the output buffer."""

    CROSSFADE = "crossfade"  # Weighted blend across the overlap
    OVERWRITE = "overwrite"  # Later chunk replaces the overlap


def is_integer(value: Any) -> bool:
    """True for Python and numpy integers; bools do not count."""
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


def is_power_of_two(value: Any) -> bool:
    """Return True for 1, 2, 4, 8, ..."""
    return is_integer(value) and value > 0 and (value & (value - 1)) == 0


@dataclass(frozen=True)
class EnhancementConfig:
    """Immutable parameter set controlling which stages run and how strongly."""

    enable_noise_reduction: bool = config.DEFAULT_ENABLE_NOISE_REDUCTION
    enable_echo_cancellation: bool = config.DEFAULT_ENABLE_ECHO_CANCELLATION
    enable_auto_gain_control: bool = config.DEFAULT_ENABLE_AUTO_GAIN_CONTROL
    enable_spectral_subtraction: bool = config.DEFAULT_ENABLE_SPECTRAL_SUBTRACTION
    enable_frequency_filtering: bool = config.DEFAULT_ENABLE_FREQUENCY_FILTERING
    processing_mode: ProcessingMode = ProcessingMode.REALTIME
    noise_reduction_strength: float = config.NOISE_REDUCTION_STRENGTH
    echo_cancellation_strength: float = config.ECHO_CANCELLATION_STRENGTH
    gain_control_threshold: float = config.GAIN_CONTROL_THRESHOLD
    spectral_subtraction_alpha: float = config.SPECTRAL_SUBTRACTION_ALPHA
    spectral_subtraction_beta: float = config.SPECTRAL_SUBTRACTION_BETA
    high_pass_cutoff: float = config.HIGH_PASS_CUTOFF_HZ
    low_pass_cutoff: float = config.LOW_PASS_CUTOFF_HZ
    window_size: int = config.DEFAULT_WINDOW_SIZE
    overlap_size: int = config.DEFAULT_OVERLAP_SIZE
    chunk_reconstruction: ReconstructionMode = ReconstructionMode.CROSSFADE

    def __post_init__(self) -> None:
        if not is_power_of_two(self.window_size):
            raise InvalidConfigurationError(
                f"window_size must be a power of two, got {self.window_size}"
            )
        overlap = self.overlap_size
        if not is_integer(overlap) or not 0 <= overlap < self.window_size:
            raise InvalidConfigurationError(
                f"overlap_size must be in [0, {self.window_size}), "
                f"got {self.overlap_size}"
            )
        for name in ("noise_reduction_strength", "echo_cancellation_strength"):
            value = getattr(self, name)
            if not math.isfinite(value) or not 0.0 <= value <= 1.0:
                raise InvalidConfigurationError(f"{name} must be in [0, 1], got {value}")
        for name in (
            "spectral_subtraction_alpha",
            "spectral_subtraction_beta",
            "gain_control_threshold",
            "high_pass_cutoff",
            "low_pass_cutoff",
        ):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                raise InvalidConfigurationError(
                    f"{name} must be a finite value >= 0, got {value}"
                )

    def copy_with(self, **changes: Any) -> "EnhancementConfig":
        """Return a copy with the given fields replaced (re-validated)."""
        return replace(self, **changes)

    @classmethod
    def for_mode(cls, mode: ProcessingMode) -> "EnhancementConfig":
        """Build the preset configuration for a processing mode."""
        if mode is ProcessingMode.QUALITY:
            return cls(
                processing_mode=mode,
                enable_frequency_filtering=True,
                enable_spectral_subtraction=True,
                noise_reduction_strength=config.QUALITY_NOISE_REDUCTION_STRENGTH,
                window_size=config.QUALITY_WINDOW_SIZE,
                overlap_size=config.QUALITY_OVERLAP_SIZE,
            )
        if mode is ProcessingMode.BALANCED:
            return cls(
                processing_mode=mode,
                enable_frequency_filtering=True,
                window_size=config.BALANCED_WINDOW_SIZE,
                overlap_size=config.BALANCED_OVERLAP_SIZE,
            )
        return cls(
            processing_mode=ProcessingMode.REALTIME,
            window_size=config.REALTIME_WINDOW_SIZE,
            overlap_size=config.REALTIME_OVERLAP_SIZE,
        )


@dataclass
class AudioBuffer:
    """Mono float samples together with their sample rate."""

    samples: np.ndarray
    sample_rate: int

    def __post_init__(self) -> None:
        self.samples = as_mono_samples(self.samples)

    def __len__(self) -> int:
        return len(self.samples)

    @property
    def duration(self) -> float:
        """Length of the buffer in seconds."""
        if self.sample_rate <= 0:
            return 0.0
        return len(self.samples) / self.sample_rate

    @property
    def rms(self) -> float:
        """Root-mean-square level of the whole buffer."""
        return calculate_rms(self.samples)


@dataclass
class PerformanceMetrics:
    """Accumulated processing counters."""

    processed_samples: int = 0
    processed_buffers: int = 0
    failed_buffers: int = 0
    total_processing_time_ms: float = 0.0
    average_processing_time_ms: float = 0.0
    noise_reduction_calls: int = 0
    spectral_subtraction_calls: int = 0
    frequency_filtering_calls: int = 0
    echo_cancellation_calls: int = 0
    gain_control_calls: int = 0
    memory_usage_mb: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        """Flatten the counters for reporting."""
        return asdict(self)


@dataclass
class EnhancementResult:
    """Output of one orchestrator call."""

    enhanced_audio_data: np.ndarray
    sample_rate: int
    processing_metrics: PerformanceMetrics
    processing_time: float  # seconds
    noise_reduction_applied: float = 0.0
    gain_adjustment_applied: float = 0.0
    stages_applied: List[str] = field(default_factory=list)

    @property
    def enhanced_buffer(self) -> AudioBuffer:
        return AudioBuffer(self.enhanced_audio_data, self.sample_rate)


def as_mono_samples(audio_data: Any) -> np.ndarray:
    """Coerce input to a one-dimensional float array.

    Float arrays keep their dtype so that untouched audio stays bit-identical;
    integer and bool samples are converted to float32. Anything else
    (strings, objects, complex values) is rejected.
    """
    samples = np.asarray(audio_data)
    if samples.ndim != 1:
        raise InvalidAudioError(
            f"Expected mono (1-D) audio, got array with shape {samples.shape}"
        )
    if samples.dtype.kind in "biu":
        samples = samples.astype(np.float32)
    elif samples.dtype.kind != "f":
        raise InvalidAudioError(
            f"Expected numeric audio samples, got dtype {samples.dtype}"
        )
    return samples


def calculate_rms(audio_data: np.ndarray) -> float:
    """RMS of a sample window; 0.0 for an empty window."""
    if len(audio_data) == 0:
        return 0.0
    return float(np.sqrt(np.mean(np.square(audio_data, dtype=np.float64))))


def relative_change(before: float, after: float) -> float:
    """``(after - before) / before`` with a zero baseline mapped to 0.0."""
    if before <= 0.0:
        return 0.0
    return (after - before) / before
