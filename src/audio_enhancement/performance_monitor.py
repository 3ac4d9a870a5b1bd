"""Performance accounting for the enhancement pipeline."""

import time
from collections import deque
from dataclasses import replace
from typing import Dict

import numpy as np
import psutil

from .config import BYTES_PER_MB, METRICS_LATENCY_HISTORY_SIZE
from .models import EnhancementType, PerformanceMetrics

# Counter field incremented for each stage invocation
_STAGE_COUNTERS = {
    EnhancementType.NOISE_REDUCTION: "noise_reduction_calls",
    EnhancementType.SPECTRAL_SUBTRACTION: "spectral_subtraction_calls",
    EnhancementType.FREQUENCY_FILTERING: "frequency_filtering_calls",
    EnhancementType.ECHO_CANCELLATION: "echo_cancellation_calls",
    EnhancementType.AUTO_GAIN_CONTROL: "gain_control_calls",
}


class EnhancementPerformanceMonitor:
    """
    Performance monitor for the enhancement pipeline.

    Keeps monotonically increasing counters (samples, buffers, per-stage
    invocations, processing time) plus a bounded latency history used for
    percentile reporting. Process memory is sampled with psutil whenever a
    snapshot is taken.
    """

    def __init__(self, history_size: int = METRICS_LATENCY_HISTORY_SIZE) -> None:
        """
        Initialize performance monitor.

        Args:
            history_size: Number of recent per-buffer latencies to keep
        """
        self.process = psutil.Process()
        self.processing_times: deque[float] = deque(maxlen=history_size)
        self._metrics = PerformanceMetrics()

    def record_processing_start(self) -> float:
        """
        Record the start of buffer processing.

        Returns:
            Timestamp for measuring processing duration
        """
        return time.perf_counter()

    def record_processing_end(self, start_time: float, sample_count: int) -> float:
        """
        Record a successfully processed buffer.

        Args:
            start_time: Start timestamp from record_processing_start()
            sample_count: Number of samples in the processed buffer

        Returns:
            Elapsed processing time in seconds
        """
        elapsed = time.perf_counter() - start_time
        elapsed_ms = elapsed * 1000

        metrics = self._metrics
        metrics.processed_samples += sample_count
        metrics.processed_buffers += 1
        metrics.total_processing_time_ms += elapsed_ms
        metrics.average_processing_time_ms = (
            metrics.total_processing_time_ms / metrics.processed_buffers
        )
        self.processing_times.append(elapsed_ms)

        return elapsed

    def record_processing_failure(self) -> None:
        """Count a buffer whose processing was aborted."""
        self._metrics.failed_buffers += 1

    def record_stage_call(self, enhancement_type: EnhancementType) -> None:
        """Count one invocation of an enhancement stage."""
        counter = _STAGE_COUNTERS[enhancement_type]
        setattr(self._metrics, counter, getattr(self._metrics, counter) + 1)

    def _get_memory_usage_mb(self) -> float:
        """Get current resident memory of this process in MB."""
        try:
            return self.process.memory_info().rss / BYTES_PER_MB
        except psutil.Error:
            return 0.0

    def get_metrics(self) -> PerformanceMetrics:
        """Snapshot of the counters; later processing does not mutate it."""
        return replace(self._metrics, memory_usage_mb=self._get_memory_usage_mb())

    def get_performance_summary(self) -> Dict[str, float]:
        """
        Get latency summary over the recent history.

        Returns:
            Dictionary with average/p95/max latency and success rate
        """
        if not self.processing_times:
            return {
                "avg_latency_ms": 0.0,
                "p95_latency_ms": 0.0,
                "max_latency_ms": 0.0,
                "success_rate": 1.0,
            }

        latencies = np.fromiter(self.processing_times, dtype=np.float64)
        attempted = self._metrics.processed_buffers + self._metrics.failed_buffers
        return {
            "avg_latency_ms": float(np.mean(latencies)),
            "p95_latency_ms": float(np.percentile(latencies, 95)),
            "max_latency_ms": float(np.max(latencies)),
            "success_rate": self._metrics.processed_buffers / attempted,
        }

    def reset_statistics(self) -> None:
        """Reset all counters and the latency history."""
        self._metrics = PerformanceMetrics()
        self.processing_times.clear()
