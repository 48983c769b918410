"""
audiodelta.sync - Delta measurement between two channels or two files.

Negotiates the common sample rate, extracts both signals and correlates
them once.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from audiodelta.analyze.correlation import cross_correlate
from audiodelta.config import DeltaConfig
from audiodelta.extract import extract, probe_sample_rate
from audiodelta.logging import logger
from audiodelta.validation import validate_audio_file


@dataclass(frozen=True)
class DeltaReport:
    """Result of one measurement."""

    delta_samples: int
    sample_rate: int
    delta_ms: int
    first: str
    second: str
    first_channel: int
    second_channel: int

    def lines(self) -> list[str]:
        return [
            f"delta: {self.delta_samples} samples",
            f"sample rate: {self.sample_rate} Hz",
            f"delta time: {self.delta_ms} ms",
        ]


def samples_to_ms(samples: int, sample_rate: int) -> int:
    """Convert a sample count to milliseconds, truncating toward zero."""
    return int(samples * 1000 / sample_rate)


def negotiate_sample_rate(paths: list[Path], override: int | None = None) -> int:
    """Common target rate: the override if given, else the highest native rate."""
    if override is not None:
        return override
    return max(probe_sample_rate(path) for path in paths)


def measure_delta(
    first: Path,
    second: Path | None = None,
    config: DeltaConfig | None = None,
) -> DeltaReport:
    """Measure the lag between two recordings.

    With one file, compares its ``first_channel`` against its
    ``second_channel``. With two files, compares ``first_channel`` of each,
    both resampled to the higher native rate.

    Args:
        first: First media file
        second: Optional second media file
        config: Channel, rate and buffer settings (defaults if None)

    Returns:
        DeltaReport with lag in samples and milliseconds

    Raises:
        AudioDeltaError: Any extraction or correlation failure
    """
    config = config or DeltaConfig()
    first = validate_audio_file(first)

    if second is None:
        second = first
        first_channel, second_channel = config.first_channel, config.second_channel
        rate = negotiate_sample_rate([first], config.sample_rate)
    else:
        second = validate_audio_file(second)
        first_channel = second_channel = config.first_channel
        rate = negotiate_sample_rate([first, second], config.sample_rate)

    logger.debug(f"target sample rate {rate} Hz")

    signal1 = extract(first, first_channel, rate, config.initial_capacity)
    signal2 = extract(second, second_channel, rate, config.initial_capacity)

    lag = cross_correlate(signal1, signal2)

    return DeltaReport(
        delta_samples=lag,
        sample_rate=rate,
        delta_ms=samples_to_ms(lag, rate),
        first=str(first),
        second=str(second),
        first_channel=first_channel,
        second_channel=second_channel,
    )
