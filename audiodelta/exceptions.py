"""
audiodelta.exceptions - Error taxonomy and exit codes.

All audiodelta exceptions inherit from AudioDeltaError and carry the
ErrorCode the command line reports when they reach it.
"""

from __future__ import annotations

from enum import IntEnum


class ErrorCode(IntEnum):
    """Process exit codes, one per failure kind."""

    SUCCESS = 0
    CANNOT_OPEN_FILE = 1
    NOT_ENOUGH_MEMORY = 2
    DATA_INVALID = 3
    ARGUMENTS_INVALID = 4
    FORMAT_INVALID = 5
    UNSUPPORTED = 20
    UNKNOWN = 255


class AudioDeltaError(Exception):
    """Base exception for all audiodelta errors."""

    code: ErrorCode = ErrorCode.UNKNOWN

    def __init__(self, message: str, path: str | None = None):
        self.message = message
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


class ArgumentsInvalidError(AudioDeltaError):
    """Caller passed unusable arguments."""

    code = ErrorCode.ARGUMENTS_INVALID


class ConfigError(ArgumentsInvalidError):
    """Configuration loading or validation error."""

    pass


class CannotOpenFileError(AudioDeltaError):
    """Input file does not exist or cannot be opened."""

    code = ErrorCode.CANNOT_OPEN_FILE


class FormatInvalidError(AudioDeltaError):
    """Unreadable container, missing audio stream, or decoder that won't open."""

    code = ErrorCode.FORMAT_INVALID


class ChannelError(FormatInvalidError):
    """Requested channel does not exist in the audio stream."""

    def __init__(self, channel: int, channels: int, path: str | None = None):
        self.channel = channel
        self.channels = channels
        super().__init__(
            f"channel {channel} requested but stream has {channels} channel(s)",
            path=path,
        )


class DataInvalidError(AudioDeltaError):
    """Corrupt compressed data or unusable sample values."""

    code = ErrorCode.DATA_INVALID


class NotEnoughMemoryError(AudioDeltaError):
    """An allocation failed."""

    code = ErrorCode.NOT_ENOUGH_MEMORY


class UnsupportedError(AudioDeltaError):
    """Decoder not ready or transform cannot be planned."""

    code = ErrorCode.UNSUPPORTED


class UnknownError(AudioDeltaError):
    """Underlying failure with no more specific mapping."""

    code = ErrorCode.UNKNOWN
