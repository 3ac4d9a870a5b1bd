"""Echo attenuation by delayed-signal subtraction."""

import math

import numpy as np

from .config import ECHO_DELAY_SEC, ECHO_SUBTRACTION_SCALE


def echo_delay_samples(sample_rate: int, delay_sec: float = ECHO_DELAY_SEC) -> int:
    """Echo delay in whole samples, rounded half away from zero."""
    return int(math.floor(max(sample_rate, 0) * delay_sec + 0.5))


def cancel_echo(audio_data: np.ndarray, sample_rate: int, strength: float) -> np.ndarray:
    """
    Subtract a scaled copy of the signal delayed by 100ms.

    ``out[i] = in[i] - strength * 0.5 * in[i - delay]`` for ``i >= delay``;
    earlier samples pass through.

    Args:
        audio_data: Input audio data as numpy array
        sample_rate: Audio sample rate in Hz
        strength: Echo cancellation strength (0.0 to 1.0)

    Returns:
        Audio data with the echo estimate removed
    """
    delay = echo_delay_samples(sample_rate)
    processed = audio_data.copy()
    if delay >= len(audio_data):
        return processed

    scale = strength * ECHO_SUBTRACTION_SCALE
    processed[delay:] = audio_data[delay:] - audio_data[: len(audio_data) - delay] * scale
    return processed
