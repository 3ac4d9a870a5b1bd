"""Windowed automatic gain control."""

import numpy as np

from .config import AGC_BOOST_RATIO, AGC_MAX_BOOST, AGC_WINDOW_SIZE
from .models import calculate_rms


def window_gain(rms: float, threshold: float) -> float:
    """
    Gain for one AGC window.

    Loud windows are pulled down to ``threshold``; windows quieter than
    ``threshold * 0.1`` are boosted toward that level by at most 2x; silent
    windows are left alone.
    """
    if rms > threshold:
        return threshold / rms
    boost_level = threshold * AGC_BOOST_RATIO
    if 0.0 < rms < boost_level:
        return min(AGC_MAX_BOOST, boost_level / rms)
    return 1.0


def apply_gain_control(
    audio_data: np.ndarray,
    threshold: float,
    window_size: int = AGC_WINDOW_SIZE,
) -> np.ndarray:
    """
    Apply automatic gain control to audio data.

    Args:
        audio_data: Input audio data as numpy array
        threshold: Target linear RMS level
        window_size: AGC window length in samples

    Returns:
        Audio data with per-window gain applied
    """
    processed = np.empty_like(audio_data)

    for start in range(0, len(audio_data), window_size):
        window = audio_data[start : start + window_size]
        gain = window_gain(calculate_rms(window), threshold)
        processed[start : start + window_size] = window * gain

    return processed
