"""Audio enhancement service: stage orchestration, streaming and lifecycle."""

import asyncio
import threading
import time
from collections.abc import AsyncIterable, AsyncIterator, Iterable, Iterator
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Dict, List, Optional

import numpy as np

from .context import EnhancementContext
from .exceptions import (
    EnhancementProcessingError,
    InvalidConfigurationError,
    ServiceNotInitializedError,
)
from .interfaces import AudioEnhancementServiceInterface, EnhancementStageInterface
from .logging_utils import get_logger
from .models import (
    AudioBuffer,
    EnhancementConfig,
    EnhancementResult,
    EnhancementType,
    PerformanceMetrics,
    ProcessingMode,
    as_mono_samples,
    calculate_rms,
)
from .stages import (
    PIPELINE_STAGES,
    enabled_stages,
    run_auto_gain_control,
    run_echo_cancellation,
    run_frequency_filtering,
    run_noise_reduction,
    run_spectral_subtraction,
)

logger = get_logger(__name__)


class AudioEnhancementService(AudioEnhancementServiceInterface):
    """
    Enhancement pipeline for one mono audio stream.

    Runs the enabled stages in the fixed order frequency filtering, noise
    reduction, spectral subtraction, echo cancellation, automatic gain
    control. All mutable state (configuration, noise profile, metrics) lives
    in a single :class:`EnhancementContext` guarded by a re-entrant lock held
    for the whole of each call, so one instance can be shared between
    threads but processes one buffer at a time. Independent streams should
    use independent instances.
    """

    def __init__(self, config: Optional[EnhancementConfig] = None) -> None:
        """
        Create the service.

        Args:
            config: Initial configuration (defaults if None). The service
                still has to be initialized before processing.
        """
        self._context = EnhancementContext(config)
        self._initialized = False
        self._lock = threading.RLock()
        self._executor: Optional[ThreadPoolExecutor] = None

    # Lifecycle

    def initialize(self) -> None:
        with self._lock:
            self._initialized = True
            logger.debug(
                f"Audio enhancement initialized: window={self._context.config.window_size}, "
                f"overlap={self._context.config.overlap_size}, "
                f"mode={self._context.config.processing_mode.value}"
            )

    def dispose(self) -> None:
        with self._lock:
            self._initialized = False
            self._context.clear_noise_profile()
            self._context.monitor.reset_statistics()
            executor, self._executor = self._executor, None

        if executor is not None:
            executor.shutdown(wait=False, cancel_futures=True)
        logger.debug("Audio enhancement disposed")

    def is_ready(self) -> bool:
        return self._initialized

    def _require_initialized(self) -> None:
        if not self._initialized:
            raise ServiceNotInitializedError("AudioEnhancementService not initialized")

    # Configuration

    def configure(self, config: EnhancementConfig) -> None:
        if not isinstance(config, EnhancementConfig):
            raise InvalidConfigurationError(
                f"Expected EnhancementConfig, got {type(config).__name__}"
            )
        with self._lock:
            self._context.apply_config(config)
        logger.debug(f"Audio enhancement reconfigured: {config}")

    @property
    def current_config(self) -> EnhancementConfig:
        return self._context.config

    @property
    def processing_mode(self) -> ProcessingMode:
        return self._context.config.processing_mode

    def set_processing_mode(self, mode: ProcessingMode) -> None:
        with self._lock:
            self.configure(self._context.config.copy_with(processing_mode=mode))

    def reset_to_defaults(self) -> None:
        with self._lock:
            self._context.apply_config(EnhancementConfig())
            self._context.clear_noise_profile()
            self._context.monitor.reset_statistics()
        logger.debug("Audio enhancement reset to defaults")

    def get_supported_enhancements(self) -> List[EnhancementType]:
        return [stage.enhancement_type for stage in PIPELINE_STAGES]

    # Orchestration

    def process_audio(self, audio_data: Any, sample_rate: int) -> EnhancementResult:
        """
        Run every enabled stage over a buffer.

        Args:
            audio_data: Mono samples in [-1.0, 1.0]
            sample_rate: Audio sample rate in Hz

        Returns:
            EnhancementResult with the enhanced samples and metrics

        Raises:
            ServiceNotInitializedError: If initialize() has not been called
            InvalidAudioError: If the input is not one-dimensional
            EnhancementProcessingError: If any stage fails; no partial output
        """
        with self._lock:
            self._require_initialized()
            samples = as_mono_samples(audio_data)
            monitor = self._context.monitor

            if len(samples) == 0:
                return EnhancementResult(
                    enhanced_audio_data=samples.copy(),
                    sample_rate=sample_rate,
                    processing_metrics=monitor.get_metrics(),
                    processing_time=0.0,
                )

            start_time = monitor.record_processing_start()
            processed = samples.copy()
            stage_metrics: Dict[str, float] = {}
            stages_applied: List[str] = []
            stage: Optional[EnhancementStageInterface] = None

            try:
                for stage in enabled_stages(self._context.config):
                    processed = self._run_stage(stage, processed, sample_rate, stage_metrics)
                    stages_applied.append(stage.enhancement_type.value)
            except EnhancementProcessingError:
                monitor.record_processing_failure()
                raise
            except Exception as e:
                monitor.record_processing_failure()
                stage_name = stage.enhancement_type.value if stage else "pipeline"
                logger.error(f"Audio processing failed in {stage_name}: {e}")
                raise EnhancementProcessingError(
                    f"Audio processing failed in {stage_name}: {e}"
                ) from e

            elapsed = monitor.record_processing_end(start_time, len(samples))

            return EnhancementResult(
                enhanced_audio_data=processed,
                sample_rate=sample_rate,
                processing_metrics=monitor.get_metrics(),
                processing_time=elapsed,
                noise_reduction_applied=stage_metrics.get("noise_reduction_applied", 0.0),
                gain_adjustment_applied=stage_metrics.get("gain_adjustment_applied", 0.0),
                stages_applied=stages_applied,
            )

    def _run_stage(
        self,
        stage: EnhancementStageInterface,
        audio_data: np.ndarray,
        sample_rate: int,
        stage_metrics: Dict[str, float],
    ) -> np.ndarray:
        """Apply one stage, checking length and recording its RMS metric."""
        stage_start = time.perf_counter()
        rms_before = calculate_rms(audio_data) if stage.metric_name else 0.0

        processed = stage.apply(self._context, audio_data, sample_rate)

        if len(processed) != len(audio_data):
            raise EnhancementProcessingError(
                f"{stage.enhancement_type.value} changed buffer length "
                f"from {len(audio_data)} to {len(processed)}"
            )
        if stage.metric_name:
            stage_metrics[stage.metric_name] = stage.measure(
                rms_before, calculate_rms(processed)
            )

        logger.trace(  # type: ignore[attr-defined]
            f"{stage.enhancement_type.value}: {len(audio_data)} samples in "
            f"{(time.perf_counter() - stage_start) * 1000:.2f}ms"
        )
        return processed

    def process_buffer(self, buffer: AudioBuffer) -> EnhancementResult:
        """Convenience wrapper around process_audio() for an AudioBuffer."""
        return self.process_audio(buffer.samples, buffer.sample_rate)

    async def process_audio_async(
        self, audio_data: Any, sample_rate: int
    ) -> EnhancementResult:
        """Run process_audio() in a worker thread so the event loop stays free."""
        return await asyncio.to_thread(self.process_audio, audio_data, sample_rate)

    def submit(self, audio_data: Any, sample_rate: int) -> "Future[EnhancementResult]":
        """
        Queue a buffer on the service's worker thread.

        Buffers submitted to the same service are processed in submission
        order. Cancel the returned future to drop a buffer that has not
        started yet.
        """
        with self._lock:
            self._require_initialized()
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=1, thread_name_prefix="audio-enhancement"
                )
            return self._executor.submit(self.process_audio, audio_data, sample_rate)

    # Streaming

    def _enhance_frame_or_passthrough(self, frame: Any, sample_rate: int) -> Any:
        try:
            return self.process_audio(frame, sample_rate).enhanced_audio_data
        except ServiceNotInitializedError:
            raise
        except Exception as e:
            logger.warning(f"Error processing audio stream frame, passing it through: {e}")
            return frame

    async def process_audio_stream(
        self, audio_stream: AsyncIterable[Any], sample_rate: int
    ) -> AsyncIterator[Any]:
        """
        Enhance frames from an async iterable, in arrival order.

        A frame that fails to process is logged and yielded unchanged; the
        stream only ends when the source does.
        """
        self._require_initialized()
        async for frame in audio_stream:
            yield await asyncio.to_thread(
                self._enhance_frame_or_passthrough, frame, sample_rate
            )

    def iter_enhanced_audio(self, frames: Iterable[Any], sample_rate: int) -> Iterator[Any]:
        """Synchronous counterpart of process_audio_stream()."""
        self._require_initialized()
        for frame in frames:
            yield self._enhance_frame_or_passthrough(frame, sample_rate)

    # Noise profile

    def estimate_noise_profile(self, audio_data: Any, sample_rate: int) -> None:
        """
        Refresh the noise baseline, e.g. from a known-quiet segment.

        Only the first second of ``audio_data`` is used.
        """
        with self._lock:
            self._require_initialized()
            self._context.estimate_noise_profile(as_mono_samples(audio_data), sample_rate)

    @property
    def noise_profile(self) -> Optional[np.ndarray]:
        """Copy of the current noise power spectrum, or None if not estimated."""
        profile = self._context.noise_profile
        return None if profile is None else profile.copy()

    # Individual stages

    def apply_noise_reduction(
        self, audio_data: Any, sample_rate: int, strength: float
    ) -> np.ndarray:
        with self._lock:
            self._require_initialized()
            return run_noise_reduction(
                self._context, as_mono_samples(audio_data), sample_rate, strength
            )

    def apply_echo_cancellation(
        self, audio_data: Any, sample_rate: int, strength: float
    ) -> np.ndarray:
        with self._lock:
            self._require_initialized()
            return run_echo_cancellation(
                self._context, as_mono_samples(audio_data), sample_rate, strength
            )

    def apply_auto_gain_control(
        self, audio_data: Any, sample_rate: int, threshold: float
    ) -> np.ndarray:
        with self._lock:
            self._require_initialized()
            return run_auto_gain_control(
                self._context, as_mono_samples(audio_data), sample_rate, threshold
            )

    def apply_spectral_subtraction(
        self, audio_data: Any, sample_rate: int, alpha: float, beta: float
    ) -> np.ndarray:
        with self._lock:
            self._require_initialized()
            return run_spectral_subtraction(
                self._context, as_mono_samples(audio_data), sample_rate, alpha, beta
            )

    def apply_frequency_filtering(
        self,
        audio_data: Any,
        sample_rate: int,
        high_pass_cutoff: float,
        low_pass_cutoff: float,
    ) -> np.ndarray:
        with self._lock:
            self._require_initialized()
            return run_frequency_filtering(
                self._context,
                as_mono_samples(audio_data),
                sample_rate,
                high_pass_cutoff,
                low_pass_cutoff,
            )

    # Metrics

    def get_performance_metrics(self) -> PerformanceMetrics:
        with self._lock:
            return self._context.monitor.get_metrics()

    def get_performance_summary(self) -> Dict[str, float]:
        """Recent latency statistics (average, p95, max, success rate)."""
        with self._lock:
            return self._context.monitor.get_performance_summary()

    def reset_performance_metrics(self) -> None:
        with self._lock:
            self._context.monitor.reset_statistics()
