"""
audiodelta.validation - Input checks run before any decode work.

Validates input paths, channel selectors and sample rates so failures are
reported with the right error code instead of surfacing from FFmpeg.
"""

from __future__ import annotations

from pathlib import Path

from audiodelta.exceptions import (
    ArgumentsInvalidError,
    CannotOpenFileError,
    ChannelError,
)


def validate_audio_file(path: Path) -> Path:
    """Validate an input file exists and is a regular file.

    Args:
        path: Path to media file

    Returns:
        The path, resolved

    Raises:
        CannotOpenFileError: If file doesn't exist or is not a file
    """
    path = Path(path).expanduser()
    if not path.exists():
        raise CannotOpenFileError("file not found", path=str(path))
    if not path.is_file():
        raise CannotOpenFileError("not a file", path=str(path))
    return path.resolve()


def validate_channel(channel: int, channels: int, path: str | None = None) -> int:
    """Check a channel selector against a stream's channel count.

    Args:
        channel: Zero-based channel index (or Channel member)
        channels: Number of channels in the stream
        path: Source path for the error message

    Returns:
        The channel index as a plain int

    Raises:
        ChannelError: If the index is negative or not below the channel count
    """
    index = int(channel)
    if index < 0 or index >= channels:
        raise ChannelError(index, channels, path=path)
    return index


def validate_sample_rate(rate: int) -> int:
    """Check a target sample rate is a positive integer."""
    if isinstance(rate, bool) or int(rate) != rate or rate <= 0:
        raise ArgumentsInvalidError(f"sample rate must be a positive integer, got {rate!r}")
    return int(rate)


def validate_path_count(paths: list[str]) -> None:
    """The command line takes one file (two channels) or two files."""
    if not 1 <= len(paths) <= 2:
        raise ArgumentsInvalidError(f"expected one or two input files, got {len(paths)}")
