"""
Test configuration and shared fixtures.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import numpy as np
import pytest

from tests.media import chirp, delayed, write_wav


@pytest.fixture
def wav_writer(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing WAV files into the test's temp directory."""

    def _write(name: str, channels: list[np.ndarray] | np.ndarray, rate: int) -> Path:
        return write_wav(tmp_path / name, channels, rate)

    return _write


@pytest.fixture
def sweep_8k() -> np.ndarray:
    """One second of sweep at 8000 Hz."""
    return chirp(8000, 8000)


@pytest.fixture
def mono_wav(wav_writer, sweep_8k: np.ndarray) -> Path:
    """1 s mono 8000 Hz sweep."""
    return wav_writer("mono.wav", sweep_8k, 8000)


@pytest.fixture
def stereo_delayed_wav(wav_writer, sweep_8k: np.ndarray) -> Path:
    """Stereo 8000 Hz file whose first channel trails the second by 400 samples."""
    return wav_writer("stereo.wav", [delayed(sweep_8k, 400), sweep_8k], 8000)


@pytest.fixture
def garbage_file(tmp_path: Path) -> Path:
    """File with a media extension but no decodable content."""
    path = tmp_path / "garbage.wav"
    path.write_bytes(b"this is not an audio file\n" * 64)
    return path


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)
