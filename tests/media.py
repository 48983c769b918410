"""
Synthetic audio helpers for tests.
"""

from __future__ import annotations

import wave
from pathlib import Path

import numpy as np


def chirp(n: int, rate: int, f0: float = 200.0, f1: float = 2000.0) -> np.ndarray:
    """Linear frequency sweep; its autocorrelation has a single sharp peak."""
    t = np.arange(n) / rate
    duration = n / rate
    phase = 2 * np.pi * (f0 * t + (f1 - f0) * t**2 / (2 * duration))
    return 0.5 * np.sin(phase)


def delayed(samples: np.ndarray, delay: int) -> np.ndarray:
    """Same length, shifted later by ``delay`` samples with zeros in front."""
    return np.concatenate([np.zeros(delay), samples[: len(samples) - delay]])


def to_int16(samples: np.ndarray) -> np.ndarray:
    return np.clip(np.round(samples * 32767), -32768, 32767).astype(np.int16)


def write_wav(path: Path, channels: list[np.ndarray] | np.ndarray, rate: int) -> Path:
    """Write float samples in [-1, 1] as a 16-bit PCM WAV file.

    Args:
        path: Destination file
        channels: One array (mono) or a list of equal-length arrays
        rate: Sample rate in Hz
    """
    if isinstance(channels, np.ndarray) and channels.ndim == 1:
        channels = [channels]
    interleaved = np.stack([to_int16(c) for c in channels], axis=1)

    with wave.open(str(path), "wb") as f:
        f.setnchannels(len(channels))
        f.setsampwidth(2)
        f.setframerate(rate)
        f.writeframes(interleaved.tobytes())
    return path
