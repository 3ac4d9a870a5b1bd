"""Audio enhancement engine that cleans mono speech audio before transcription."""

from .chunking import OverlapChunkProcessor
from .context import EnhancementContext
from .exceptions import (
    AudioEnhancementError,
    ChunkProcessingError,
    EnhancementProcessingError,
    InvalidAudioError,
    InvalidConfigurationError,
    ServiceNotInitializedError,
)
from .interfaces import AudioEnhancementServiceInterface, EnhancementStageInterface
from .models import (
    AudioBuffer,
    EnhancementConfig,
    EnhancementResult,
    EnhancementType,
    PerformanceMetrics,
    ProcessingMode,
    ReconstructionMode,
)
from .noise_profile import NoiseProfileEstimator
from .performance_monitor import EnhancementPerformanceMonitor
from .service import AudioEnhancementService
from .stages import PIPELINE_STAGES
from .transform import WindowedTransform

__all__ = [
    "AudioBuffer",
    "EnhancementConfig",
    "EnhancementResult",
    "EnhancementType",
    "PerformanceMetrics",
    "ProcessingMode",
    "ReconstructionMode",
    "AudioEnhancementError",
    "ServiceNotInitializedError",
    "InvalidConfigurationError",
    "InvalidAudioError",
    "EnhancementProcessingError",
    "ChunkProcessingError",
    "AudioEnhancementServiceInterface",
    "EnhancementStageInterface",
    "AudioEnhancementService",
    "EnhancementContext",
    "EnhancementPerformanceMonitor",
    "NoiseProfileEstimator",
    "OverlapChunkProcessor",
    "WindowedTransform",
    "PIPELINE_STAGES",
]
