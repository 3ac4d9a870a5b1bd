"""Custom exceptions for audio enhancement functionality."""


class AudioEnhancementError(Exception):
    """Base exception for audio enhancement errors."""

    pass


class ServiceNotInitializedError(AudioEnhancementError):
    """Exception raised when processing is requested before initialization."""

    pass


class InvalidConfigurationError(AudioEnhancementError, ValueError):
    """Exception raised for enhancement parameters that break an invariant."""

    pass


class InvalidAudioError(AudioEnhancementError, ValueError):
    """Exception raised for audio buffers that cannot be processed."""

    pass


class EnhancementProcessingError(AudioEnhancementError):
    """Exception raised when a processing stage fails."""

    pass


class ChunkProcessingError(EnhancementProcessingError):
    """Exception raised when a chunk transform returns a chunk of the wrong size."""

    pass
