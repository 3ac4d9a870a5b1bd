"""Frequency-domain filters: band limiting and spectral subtraction.

Both filters operate on a single chunk and are driven across longer buffers
by :class:`~audio_enhancement.chunking.OverlapChunkProcessor`.
"""

import numpy as np

from .transform import WindowedTransform


def frequency_filter_gains(
    bin_count: int,
    sample_rate: int,
    high_pass_cutoff: float,
    low_pass_cutoff: float,
) -> np.ndarray:
    """
    Real gain per FFT bin for the combined high-pass/low-pass filter.

    Bin ``i`` sits at ``i * nyquist / bin_count`` Hz. Below the high-pass
    cutoff the gain ramps linearly from 0 at DC; above the low-pass cutoff it
    decays as ``exp(-(f - low) / (nyquist - low))``.

    Args:
        bin_count: Number of real-FFT bins
        sample_rate: Audio sample rate in Hz
        high_pass_cutoff: High-pass cutoff frequency in Hz
        low_pass_cutoff: Low-pass cutoff frequency in Hz

    Returns:
        Gain array of length ``bin_count``
    """
    nyquist = sample_rate / 2.0
    freqs = np.arange(bin_count) * (nyquist / bin_count)
    gains = np.ones(bin_count, dtype=np.float64)

    if high_pass_cutoff > 0:
        below = freqs < high_pass_cutoff
        gains[below] *= freqs[below] / high_pass_cutoff

    if low_pass_cutoff < nyquist:
        above = freqs > low_pass_cutoff
        gains[above] *= np.exp(-(freqs[above] - low_pass_cutoff) / (nyquist - low_pass_cutoff))

    return gains


def filter_frequencies(
    chunk: np.ndarray,
    sample_rate: int,
    transform: WindowedTransform,
    high_pass_cutoff: float,
    low_pass_cutoff: float,
) -> np.ndarray:
    """Apply the band-limiting gains to one chunk, preserving phase."""
    spectrum = transform.forward(chunk)
    gains = frequency_filter_gains(
        len(spectrum), sample_rate, high_pass_cutoff, low_pass_cutoff
    )
    return transform.inverse(spectrum * gains, length=len(chunk))


def subtract_noise_spectrum(
    chunk: np.ndarray,
    transform: WindowedTransform,
    noise_profile: np.ndarray,
    alpha: float,
    beta: float,
) -> np.ndarray:
    """
    Spectral subtraction of a noise power profile from one chunk.

    The noise magnitude ``sqrt(profile)`` is indexed cyclically when the
    profile was estimated with a different window size. Each bin keeps its
    phase and its magnitude never drops below ``beta`` times the original.

    Args:
        chunk: Input samples (at most one window)
        transform: Transform adapter sized to the analysis window
        noise_profile: Noise power spectrum
        alpha: Over-subtraction factor
        beta: Spectral floor factor

    Returns:
        Denoised chunk of the same length
    """
    if len(noise_profile) == 0:
        raise ValueError("Noise profile is empty")

    spectrum = transform.forward(chunk)
    magnitude = np.abs(spectrum)
    phase = np.angle(spectrum)

    bins = np.arange(len(spectrum)) % len(noise_profile)
    noise_magnitude = np.sqrt(noise_profile[bins])

    subtracted = magnitude - alpha * noise_magnitude
    floored = np.maximum(beta * magnitude, subtracted)

    return transform.inverse(floored * np.exp(1j * phase), length=len(chunk))
