"""Enhancement stages and their fixed pipeline order."""

from typing import List, Tuple

import numpy as np

from .context import EnhancementContext
from .echo_cancellation import cancel_echo
from .gain_control import apply_gain_control
from .interfaces import EnhancementStageInterface
from .models import EnhancementConfig, EnhancementType, relative_change
from .noise_reduction import reduce_noise
from .spectral_filters import filter_frequencies, subtract_noise_spectrum


def run_frequency_filtering(
    context: EnhancementContext,
    audio_data: np.ndarray,
    sample_rate: int,
    high_pass_cutoff: float,
    low_pass_cutoff: float,
) -> np.ndarray:
    """Band-limit a buffer chunk by chunk."""
    context.monitor.record_stage_call(EnhancementType.FREQUENCY_FILTERING)
    transform = context.transform

    def process_chunk(chunk: np.ndarray, sr: int) -> np.ndarray:
        return filter_frequencies(chunk, sr, transform, high_pass_cutoff, low_pass_cutoff)

    return context.chunk_processor().process(audio_data, sample_rate, process_chunk)


def run_noise_reduction(
    context: EnhancementContext,
    audio_data: np.ndarray,
    sample_rate: int,
    strength: float,
) -> np.ndarray:
    """Gate quiet windows; seeds the noise profile if none exists yet."""
    context.monitor.record_stage_call(EnhancementType.NOISE_REDUCTION)
    context.ensure_noise_profile(audio_data, sample_rate)
    return reduce_noise(audio_data, strength)


def run_spectral_subtraction(
    context: EnhancementContext,
    audio_data: np.ndarray,
    sample_rate: int,
    alpha: float,
    beta: float,
) -> np.ndarray:
    """Subtract the noise profile chunk by chunk."""
    context.monitor.record_stage_call(EnhancementType.SPECTRAL_SUBTRACTION)
    noise_profile = context.ensure_noise_profile(audio_data, sample_rate)
    transform = context.transform

    def process_chunk(chunk: np.ndarray, sr: int) -> np.ndarray:
        return subtract_noise_spectrum(chunk, transform, noise_profile, alpha, beta)

    return context.chunk_processor().process(audio_data, sample_rate, process_chunk)


def run_echo_cancellation(
    context: EnhancementContext,
    audio_data: np.ndarray,
    sample_rate: int,
    strength: float,
) -> np.ndarray:
    context.monitor.record_stage_call(EnhancementType.ECHO_CANCELLATION)
    return cancel_echo(audio_data, sample_rate, strength)


def run_auto_gain_control(
    context: EnhancementContext,
    audio_data: np.ndarray,
    sample_rate: int,
    threshold: float,
) -> np.ndarray:
    context.monitor.record_stage_call(EnhancementType.AUTO_GAIN_CONTROL)
    return apply_gain_control(audio_data, threshold)


class FrequencyFilteringStage(EnhancementStageInterface):
    enhancement_type = EnhancementType.FREQUENCY_FILTERING

    def is_enabled(self, config: EnhancementConfig) -> bool:
        return config.enable_frequency_filtering

    def apply(
        self, context: EnhancementContext, audio_data: np.ndarray, sample_rate: int
    ) -> np.ndarray:
        config = context.config
        return run_frequency_filtering(
            context, audio_data, sample_rate, config.high_pass_cutoff, config.low_pass_cutoff
        )


class NoiseReductionStage(EnhancementStageInterface):
    enhancement_type = EnhancementType.NOISE_REDUCTION
    metric_name = "noise_reduction_applied"

    def is_enabled(self, config: EnhancementConfig) -> bool:
        return config.enable_noise_reduction

    def apply(
        self, context: EnhancementContext, audio_data: np.ndarray, sample_rate: int
    ) -> np.ndarray:
        return run_noise_reduction(
            context, audio_data, sample_rate, context.config.noise_reduction_strength
        )

    def measure(self, rms_before: float, rms_after: float) -> float:
        # Fraction of RMS removed
        if rms_before <= 0.0:
            return 0.0
        return (rms_before - rms_after) / rms_before


class SpectralSubtractionStage(EnhancementStageInterface):
    enhancement_type = EnhancementType.SPECTRAL_SUBTRACTION

    def is_enabled(self, config: EnhancementConfig) -> bool:
        return config.enable_spectral_subtraction

    def apply(
        self, context: EnhancementContext, audio_data: np.ndarray, sample_rate: int
    ) -> np.ndarray:
        config = context.config
        return run_spectral_subtraction(
            context,
            audio_data,
            sample_rate,
            config.spectral_subtraction_alpha,
            config.spectral_subtraction_beta,
        )


class EchoCancellationStage(EnhancementStageInterface):
    enhancement_type = EnhancementType.ECHO_CANCELLATION

    def is_enabled(self, config: EnhancementConfig) -> bool:
        return config.enable_echo_cancellation

    def apply(
        self, context: EnhancementContext, audio_data: np.ndarray, sample_rate: int
    ) -> np.ndarray:
        return run_echo_cancellation(
            context, audio_data, sample_rate, context.config.echo_cancellation_strength
        )


class AutoGainControlStage(EnhancementStageInterface):
    enhancement_type = EnhancementType.AUTO_GAIN_CONTROL
    metric_name = "gain_adjustment_applied"

    def is_enabled(self, config: EnhancementConfig) -> bool:
        return config.enable_auto_gain_control

    def apply(
        self, context: EnhancementContext, audio_data: np.ndarray, sample_rate: int
    ) -> np.ndarray:
        return run_auto_gain_control(
            context, audio_data, sample_rate, context.config.gain_control_threshold
        )

    def measure(self, rms_before: float, rms_after: float) -> float:
        return relative_change(rms_before, rms_after)


# Execution order is fixed; the configuration only switches stages on or off
PIPELINE_STAGES: Tuple[EnhancementStageInterface, ...] = (
    FrequencyFilteringStage(),
    NoiseReductionStage(),
    SpectralSubtractionStage(),
    EchoCancellationStage(),
    AutoGainControlStage(),
)


def enabled_stages(config: EnhancementConfig) -> List[EnhancementStageInterface]:
    """Stages active under ``config``, in pipeline order."""
    return [stage for stage in PIPELINE_STAGES if stage.is_enabled(config)]
