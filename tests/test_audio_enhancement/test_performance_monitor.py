"""Tests for EnhancementPerformanceMonitor."""

import time
from unittest.mock import patch

import psutil
import pytest

from audio_enhancement.models import EnhancementType
from audio_enhancement.performance_monitor import EnhancementPerformanceMonitor


@pytest.mark.unit
class TestEnhancementPerformanceMonitor:
    """Test cases for EnhancementPerformanceMonitor."""

    @pytest.fixture
    def monitor(self) -> EnhancementPerformanceMonitor:
        return EnhancementPerformanceMonitor(history_size=5)

    def test_initial_metrics_are_zero(self, monitor: EnhancementPerformanceMonitor) -> None:
        metrics = monitor.get_metrics()

        assert metrics.processed_samples == 0
        assert metrics.processed_buffers == 0
        assert metrics.failed_buffers == 0
        assert metrics.average_processing_time_ms == 0.0
        assert metrics.memory_usage_mb >= 0.0

    def test_record_processing_end(self, monitor: EnhancementPerformanceMonitor) -> None:
        start = monitor.record_processing_start()
        time.sleep(0.001)
        elapsed = monitor.record_processing_end(start, 1600)

        metrics = monitor.get_metrics()
        assert elapsed > 0.0
        assert metrics.processed_samples == 1600
        assert metrics.processed_buffers == 1
        assert metrics.total_processing_time_ms == pytest.approx(elapsed * 1000)
        assert metrics.average_processing_time_ms == pytest.approx(elapsed * 1000)

    def test_average_is_per_buffer(self, monitor: EnhancementPerformanceMonitor) -> None:
        for _ in range(3):
            monitor.record_processing_end(monitor.record_processing_start(), 100)

        metrics = monitor.get_metrics()
        assert metrics.average_processing_time_ms == pytest.approx(
            metrics.total_processing_time_ms / 3
        )

    def test_stage_counters(self, monitor: EnhancementPerformanceMonitor) -> None:
        for enhancement_type in EnhancementType:
            monitor.record_stage_call(enhancement_type)
        monitor.record_stage_call(EnhancementType.AUTO_GAIN_CONTROL)

        metrics = monitor.get_metrics()
        assert metrics.noise_reduction_calls == 1
        assert metrics.spectral_subtraction_calls == 1
        assert metrics.frequency_filtering_calls == 1
        assert metrics.echo_cancellation_calls == 1
        assert metrics.gain_control_calls == 2

    def test_snapshot_is_detached(self, monitor: EnhancementPerformanceMonitor) -> None:
        snapshot = monitor.get_metrics()
        monitor.record_stage_call(EnhancementType.NOISE_REDUCTION)

        assert snapshot.noise_reduction_calls == 0

    def test_summary_defaults_when_empty(self, monitor: EnhancementPerformanceMonitor) -> None:
        summary = monitor.get_performance_summary()

        assert summary["avg_latency_ms"] == 0.0
        assert summary["success_rate"] == 1.0

    def test_summary_success_rate(self, monitor: EnhancementPerformanceMonitor) -> None:
        monitor.record_processing_end(monitor.record_processing_start(), 10)
        monitor.record_processing_failure()

        summary = monitor.get_performance_summary()
        assert summary["success_rate"] == pytest.approx(0.5)
        assert summary["max_latency_ms"] >= summary["avg_latency_ms"]

    def test_history_is_bounded(self, monitor: EnhancementPerformanceMonitor) -> None:
        for _ in range(20):
            monitor.record_processing_end(monitor.record_processing_start(), 10)

        assert len(monitor.processing_times) == 5
        assert monitor.get_metrics().processed_buffers == 20

    def test_memory_errors_are_reported_as_zero(
        self, monitor: EnhancementPerformanceMonitor
    ) -> None:
        with patch.object(
            monitor.process, "memory_info", side_effect=psutil.AccessDenied()
        ):
            assert monitor.get_metrics().memory_usage_mb == 0.0

    def test_reset_statistics(self, monitor: EnhancementPerformanceMonitor) -> None:
        monitor.record_processing_end(monitor.record_processing_start(), 10)
        monitor.record_stage_call(EnhancementType.ECHO_CANCELLATION)
        monitor.record_processing_failure()

        monitor.reset_statistics()

        metrics = monitor.get_metrics()
        assert metrics.processed_buffers == 0
        assert metrics.failed_buffers == 0
        assert metrics.echo_cancellation_calls == 0
        assert len(monitor.processing_times) == 0
