"""Overlap-chunk processing shared by the frequency-domain stages."""

import math
from collections.abc import Callable

import numpy as np

from .config import CROSSFADE_WEIGHT_FLOOR
from .exceptions import ChunkProcessingError, InvalidConfigurationError
from .models import ReconstructionMode

ChunkTransform = Callable[[np.ndarray, int], np.ndarray]


class OverlapChunkProcessor:
    """
    Split a buffer into overlapping windows, transform each, and reassemble.

    Chunks start every ``window_size - overlap_size`` samples. The final
    chunk is zero-padded to the full window and its output is clipped back to
    the buffer length. In CROSSFADE mode every chunk is weighted by a
    strictly positive Hann taper and the sum is normalized by the
    accumulated weight, so an identity transform reproduces the input
    exactly. OVERWRITE mode copies each chunk over the previous one.
    """

    def __init__(
        self,
        window_size: int,
        overlap_size: int,
        reconstruction: ReconstructionMode = ReconstructionMode.CROSSFADE,
    ) -> None:
        if not 0 <= overlap_size < window_size:
            raise InvalidConfigurationError(
                f"overlap_size must be in [0, {window_size}), got {overlap_size}"
            )
        self.window_size = window_size
        self.overlap_size = overlap_size
        self.reconstruction = reconstruction

        # Hann taper without its zero end points
        self._weights = np.hanning(window_size + 2)[1:-1]

    @property
    def hop_size(self) -> int:
        return self.window_size - self.overlap_size

    def chunk_count(self, length: int) -> int:
        """Number of times the chunk transform runs for a buffer of ``length``."""
        if length <= self.window_size:
            return 1
        return math.ceil(length / self.hop_size)

    def process(
        self,
        audio_data: np.ndarray,
        sample_rate: int,
        chunk_transform: ChunkTransform,
    ) -> np.ndarray:
        """
        Apply ``chunk_transform`` across the buffer.

        Args:
            audio_data: Input samples
            sample_rate: Audio sample rate in Hz, passed through to the transform
            chunk_transform: ``(chunk, sample_rate) -> chunk`` of the same length

        Returns:
            Reassembled samples with the same length and dtype as the input

        Raises:
            ChunkProcessingError: If a transformed chunk changes length
        """
        if len(audio_data) <= self.window_size:
            processed = np.asarray(chunk_transform(audio_data, sample_rate))
            self._check_length(processed, len(audio_data), offset=0)
            return processed.astype(audio_data.dtype, copy=False)

        length = len(audio_data)
        result = np.zeros(length, dtype=np.float64)
        weight = np.zeros(length, dtype=np.float64)

        for start in range(0, length, self.hop_size):
            end = min(start + self.window_size, length)
            valid = end - start

            chunk = np.zeros(self.window_size, dtype=audio_data.dtype)
            chunk[:valid] = audio_data[start:end]

            processed = np.asarray(chunk_transform(chunk, sample_rate))
            self._check_length(processed, self.window_size, offset=start)

            if self.reconstruction is ReconstructionMode.OVERWRITE:
                result[start:end] = processed[:valid]
            else:
                taper = self._weights[:valid]
                result[start:end] += taper * processed[:valid]
                weight[start:end] += taper

        if self.reconstruction is ReconstructionMode.CROSSFADE:
            weight[weight < CROSSFADE_WEIGHT_FLOOR] = 1.0
            result /= weight

        return result.astype(audio_data.dtype, copy=False)

    @staticmethod
    def _check_length(processed: np.ndarray, expected: int, offset: int) -> None:
        if processed.ndim != 1 or len(processed) != expected:
            raise ChunkProcessingError(
                f"Chunk at offset {offset} came back with shape {processed.shape}, "
                f"expected ({expected},)"
            )
