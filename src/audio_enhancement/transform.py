"""Windowed real FFT adapter sized to the configured analysis window."""

from typing import Optional

import numpy as np
from scipy import fft

from .exceptions import InvalidConfigurationError
from .models import is_power_of_two


class WindowedTransform:
    """Forward/inverse real FFT of fixed length ``window_size``.

    Frames shorter than the window are zero-padded and longer frames are
    truncated before the forward transform, so every spectrum has exactly
    ``window_size // 2 + 1`` bins.
    """

    def __init__(self, window_size: int) -> None:
        if not is_power_of_two(window_size):
            raise InvalidConfigurationError(
                f"FFT window size must be a power of two, got {window_size}"
            )
        self.window_size = window_size
        self.bin_count = window_size // 2 + 1

    def pad(self, frame: np.ndarray) -> np.ndarray:
        """Zero-pad or truncate a frame to the window size."""
        padded = np.zeros(self.window_size, dtype=np.float64)
        length = min(len(frame), self.window_size)
        padded[:length] = frame[:length]
        return padded

    def forward(self, frame: np.ndarray) -> np.ndarray:
        """Complex spectrum of the (padded) frame."""
        return fft.rfft(self.pad(frame))

    def inverse(self, spectrum: np.ndarray, length: Optional[int] = None) -> np.ndarray:
        """Real time-domain frame, truncated to ``length`` samples if given."""
        if len(spectrum) != self.bin_count:
            raise ValueError(
                f"Spectrum has {len(spectrum)} bins, expected {self.bin_count}"
            )
        frame = fft.irfft(spectrum, n=self.window_size)
        if length is not None:
            frame = frame[:length]
        return frame

    def power_spectrum(self, frame: np.ndarray) -> np.ndarray:
        """Per-bin squared magnitude ``re**2 + im**2``."""
        spectrum = self.forward(frame)
        return spectrum.real**2 + spectrum.imag**2
