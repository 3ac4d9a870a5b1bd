"""Time-domain noise reduction using an RMS noise gate."""

import numpy as np

from .config import NOISE_GATE_WINDOW_SIZE
from .models import calculate_rms


def gate_threshold(audio_data: np.ndarray, strength: float) -> float:
    """RMS level at or below which a gate window is treated as noise."""
    return calculate_rms(audio_data) * (1.0 - strength)


def reduce_noise(
    audio_data: np.ndarray,
    strength: float,
    window_size: int = NOISE_GATE_WINDOW_SIZE,
) -> np.ndarray:
    """
    Attenuate quiet windows relative to the loudness of the whole buffer.

    Windows whose RMS is above ``RMS(buffer) * (1 - strength)`` pass through
    unchanged; the others are scaled by ``1 - strength``.

    Args:
        audio_data: Input audio data as numpy array
        strength: Noise reduction strength (0.0 to 1.0)
        window_size: Gate window length in samples

    Returns:
        Gated audio data with the same length and dtype
    """
    threshold = gate_threshold(audio_data, strength)
    attenuation = 1.0 - strength
    processed = np.empty_like(audio_data)

    for start in range(0, len(audio_data), window_size):
        window = audio_data[start : start + window_size]
        if calculate_rms(window) > threshold:
            processed[start : start + window_size] = window
        else:
            processed[start : start + window_size] = window * attenuation

    return processed
