"""
audiodelta.extract.session - Scoped PyAV decode and resample state.

DecodeSession owns an open container and its best audio stream;
ResampleSession owns the converter that turns decoded frames into mono
double samples. Both are context managers and release their state on every
exit path.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

import av
import numpy as np

from audiodelta.exceptions import (
    ArgumentsInvalidError,
    AudioDeltaError,
    CannotOpenFileError,
    DataInvalidError,
    FormatInvalidError,
    NotEnoughMemoryError,
    UnknownError,
    UnsupportedError,
)
from audiodelta.logging import logger

# Double precision, one plane per channel, so a channel is a row of to_ndarray().
CONVERT_FORMAT = "dblp"


def classify_av_error(
    exc: BaseException,
    path: str | None = None,
    invalid_data: type[AudioDeltaError] = DataInvalidError,
) -> AudioDeltaError:
    """Map a PyAV/FFmpeg failure onto the audiodelta error taxonomy.

    Args:
        exc: Exception raised by av or the decode loop
        path: Source path for the message
        invalid_data: Class to use for AVERROR_INVALIDDATA; FormatInvalidError
            while opening a container, DataInvalidError while decoding

    Returns:
        The mapped exception, ready to be raised from ``exc``
    """
    if isinstance(exc, AudioDeltaError):
        return exc

    message = getattr(exc, "strerror", None) or str(exc) or type(exc).__name__

    # av.error classes subclass the matching builtins, so the order matters:
    # InvalidDataError is also a ValueError.
    if isinstance(exc, av.error.InvalidDataError):
        return invalid_data(message, path=path)
    if isinstance(exc, (FileNotFoundError, PermissionError, IsADirectoryError)):
        return CannotOpenFileError(message, path=path)
    if isinstance(exc, MemoryError):
        return NotEnoughMemoryError(message, path=path)
    if isinstance(exc, BlockingIOError):
        return UnsupportedError(f"decoder is not ready: {message}", path=path)
    if isinstance(exc, EOFError):
        return FormatInvalidError(f"unexpected end of file: {message}", path=path)
    if isinstance(exc, ValueError):
        return ArgumentsInvalidError(message, path=path)
    return UnknownError(message, path=path)


class DecodeSession:
    """Open container plus its selected audio stream.

    Usage::

        with DecodeSession(path) as session:
            for frame in session.frames():
                ...
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self.container = None
        self.stream = None

    @property
    def codec_context(self):
        return self.stream.codec_context

    @property
    def sample_rate(self) -> int:
        return int(self.codec_context.sample_rate or self.stream.rate or 0)

    @property
    def channels(self) -> int:
        return len(self.codec_context.layout.channels)

    def open(self) -> DecodeSession:
        """Open the container, pick the best audio stream and open its decoder.

        Raises:
            CannotOpenFileError: If the file is missing
            FormatInvalidError: If the container is unreadable, has no audio
                stream, or its decoder cannot be opened
        """
        try:
            self.container = av.open(str(self.path))
        except av.error.FFmpegError as e:
            raise classify_av_error(e, str(self.path), invalid_data=FormatInvalidError) from e
        except (FileNotFoundError, MemoryError) as e:
            raise classify_av_error(e, str(self.path)) from e

        try:
            self.stream = self.container.streams.best("audio")
            if self.stream is None:
                raise FormatInvalidError("no audio stream found", path=str(self.path))
            if self.stream.codec_context is None:
                raise FormatInvalidError(
                    f"no decoder for codec of stream {self.stream.index}",
                    path=str(self.path),
                )
            self.codec_context.open(strict=False)
            if self.sample_rate <= 0:
                raise FormatInvalidError("audio stream has no sample rate", path=str(self.path))
        except AudioDeltaError:
            self.close()
            raise
        except (av.error.FFmpegError, MemoryError) as e:
            self.close()
            raise classify_av_error(e, str(self.path), invalid_data=FormatInvalidError) from e

        logger.debug(
            f"{self.path.name}: stream {self.stream.index} "
            f"({self.codec_context.name}, {self.sample_rate} Hz, {self.channels} ch)"
        )
        return self

    def close(self) -> None:
        if self.container is not None:
            self.container.close()
        self.container = None
        self.stream = None

    def frames(self) -> Iterator[av.AudioFrame]:
        """Decode every frame of the selected stream, draining the decoder at EOF.

        Packets of other streams are not demuxed. Decode failures are
        mapped with classify_av_error.
        """
        try:
            for packet in self.container.demux(self.stream):
                if packet.stream.index != self.stream.index:
                    continue
                yield from packet.decode()
        except (av.error.FFmpegError, MemoryError) as e:
            raise classify_av_error(e, str(self.path)) from e

    def __enter__(self) -> DecodeSession:
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class ResampleSession:
    """Converter from decoded frames to one channel of double samples.

    The resampler keeps the input channel layout and changes only sample
    format and rate; ``convert`` then returns the single selected channel
    row. The output is that channel's samples, never a mix of channels.
    """

    def __init__(self, channel: int, target_rate: int) -> None:
        self.channel = channel
        self.target_rate = target_rate
        self.resampler = None

    def __enter__(self) -> ResampleSession:
        try:
            self.resampler = av.AudioResampler(format=CONVERT_FORMAT, rate=self.target_rate)
        except (av.error.FFmpegError, MemoryError, ValueError) as e:
            raise classify_av_error(e) from e
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.resampler = None

    def _select(self, frames: list[av.AudioFrame]) -> np.ndarray:
        if not frames:
            return np.empty(0, dtype=np.float64)
        return np.concatenate([frame.to_ndarray()[self.channel] for frame in frames])

    def convert(self, frame: av.AudioFrame) -> np.ndarray:
        """Convert one decoded frame; may return zero samples while buffering."""
        try:
            return self._select(self.resampler.resample(frame))
        except (av.error.FFmpegError, MemoryError) as e:
            raise classify_av_error(e) from e
        except ValueError as e:
            # Raised when a frame's rate, layout or format differs from the first one.
            raise UnsupportedError(f"audio parameters changed mid-stream: {e}") from e

    def flush(self) -> np.ndarray:
        """Drain samples still held by the resampler."""
        try:
            return self._select(self.resampler.resample(None))
        except (av.error.FFmpegError, MemoryError) as e:
            raise classify_av_error(e) from e
        except ValueError as e:
            raise UnsupportedError(f"cannot flush resampler: {e}") from e
