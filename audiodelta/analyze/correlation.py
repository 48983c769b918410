"""
audiodelta.analyze.correlation - FFT cross-correlation lag estimate.

Both signals are zero-padded to len(a) + len(b) - 1 so the circular
correlation computed through the real FFT equals the linear one. The peak
of the inverse transform of spectrum(a) * conj(spectrum(b)) gives the lag.

Sign convention: the result is k when b[t] == a[t + k], i.e. a positive
lag means the shared event occurs k samples later in the first signal.
Swapping the arguments negates the lag.
"""

from __future__ import annotations

import numpy as np

from audiodelta.exceptions import (
    ArgumentsInvalidError,
    DataInvalidError,
    NotEnoughMemoryError,
    UnsupportedError,
)
from audiodelta.logging import logger
from audiodelta.models import Signal


def _as_samples(signal: Signal | np.ndarray, name: str) -> np.ndarray:
    samples = signal.samples if isinstance(signal, Signal) else np.asarray(signal, dtype=np.float64)
    if samples.ndim != 1:
        raise DataInvalidError(f"{name} must be one-dimensional, got shape {samples.shape}")
    if samples.shape[0] == 0:
        raise UnsupportedError(f"{name} is empty; cannot plan a transform")
    if not np.all(np.isfinite(samples)):
        raise DataInvalidError(f"{name} contains NaN or infinite samples")
    return samples


def pad_to(samples: np.ndarray, n: int) -> np.ndarray:
    """Copy samples into a zero-filled array of length n."""
    padded = np.zeros(n, dtype=np.float64)
    padded[: samples.shape[0]] = samples
    return padded


def cross_power_spectrum(spectrum1: np.ndarray, spectrum2: np.ndarray) -> np.ndarray:
    """Per-bin spectrum1 * conj(spectrum2)."""
    real = spectrum1.real * spectrum2.real + spectrum1.imag * spectrum2.imag
    imag = -spectrum1.real * spectrum2.imag + spectrum1.imag * spectrum2.real
    return real + 1j * imag


def correlation_sequence(samples1: np.ndarray, samples2: np.ndarray) -> np.ndarray:
    """Unnormalized linear cross-correlation of length len1 + len2 - 1.

    Index m holds sum_t samples1[t + m] * samples2[t]; negative m wrap to
    the end of the sequence.
    """
    n = samples1.shape[0] + samples2.shape[0] - 1
    spectrum1 = np.fft.rfft(pad_to(samples1, n))
    spectrum2 = np.fft.rfft(pad_to(samples2, n))
    return np.fft.irfft(cross_power_spectrum(spectrum1, spectrum2), n)


def peak_to_lag(peak: int, size1: int, n: int) -> int:
    """Turn a peak index of the circular sequence into a signed lag.

    Indices below ``size1`` are non-negative lags; the rest of the sequence
    is the wrapped negative region.
    """
    if peak >= size1:
        return int(peak - n)
    return int(peak)


def cross_correlate(signal1: Signal | np.ndarray, signal2: Signal | np.ndarray) -> int:
    """Estimate the signed sample lag between two mono signals.

    Args:
        signal1: First signal (Signal or 1-D array)
        signal2: Second signal (Signal or 1-D array); lengths may differ

    Returns:
        Lag in samples; see the module docstring for the sign convention

    Raises:
        ArgumentsInvalidError: If two Signals have different sample rates
        UnsupportedError: If either signal is empty
        DataInvalidError: If a signal isn't 1-D or has non-finite samples
        NotEnoughMemoryError: If the padded buffers cannot be allocated
    """
    if isinstance(signal1, Signal) and isinstance(signal2, Signal):
        if signal1.sample_rate != signal2.sample_rate:
            raise ArgumentsInvalidError(
                f"sample rates differ: {signal1.sample_rate} Hz vs {signal2.sample_rate} Hz"
            )

    samples1 = _as_samples(signal1, "signal1")
    samples2 = _as_samples(signal2, "signal2")
    size1 = samples1.shape[0]
    n = size1 + samples2.shape[0] - 1

    try:
        correlation = correlation_sequence(samples1, samples2)
    except MemoryError as e:
        raise NotEnoughMemoryError(f"cannot allocate transform buffers of length {n}") from e
    except ValueError as e:
        raise UnsupportedError(f"cannot compute transform of length {n}: {e}") from e

    # argmax keeps the first of equal maxima.
    peak = int(np.argmax(correlation))
    lag = peak_to_lag(peak, size1, n)
    logger.debug(f"correlation n={n}, peak index {peak}, lag {lag}")
    return lag
