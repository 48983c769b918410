"""
audiodelta.extract.audio - Decode one channel of a media file to a Signal.

Opens the file's best audio stream with PyAV, resamples it to the target
rate as double precision, keeps a single channel and collects the samples
in a growable buffer.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from audiodelta.extract.session import DecodeSession, ResampleSession
from audiodelta.logging import logger
from audiodelta.models import INITIAL_CAPACITY, Channel, SampleBuffer, Signal
from audiodelta.validation import validate_channel, validate_sample_rate


def probe_sample_rate(path: Path) -> int:
    """Read the native sample rate of a file's best audio stream.

    Opens the container and decoder only; no frames are decoded.

    Raises:
        CannotOpenFileError: If the file is missing
        FormatInvalidError: If there is no usable audio stream
    """
    with DecodeSession(path) as session:
        return session.sample_rate


def probe_audio(path: Path) -> dict[str, Any]:
    """Probe a file's best audio stream for metadata.

    Returns:
        Dict with 'stream_index', 'codec', 'format', 'sample_rate',
        'channels', 'layout' and 'duration_seconds' (None when unknown)
    """
    with DecodeSession(path) as session:
        stream = session.stream
        codec_context = session.codec_context

        duration = None
        if stream.duration is not None and stream.time_base is not None:
            duration = float(stream.duration * stream.time_base)
        elif session.container.duration is not None:
            duration = session.container.duration / 1_000_000

        return {
            "stream_index": stream.index,
            "codec": codec_context.name,
            "format": codec_context.format.name if codec_context.format else None,
            "sample_rate": session.sample_rate,
            "channels": session.channels,
            "layout": codec_context.layout.name,
            "duration_seconds": duration,
        }


def extract(
    path: Path,
    channel: Channel | int = Channel.FIRST,
    target_rate: int | None = None,
    initial_capacity: int = INITIAL_CAPACITY,
) -> Signal:
    """Decode one channel of a file's best audio stream into a mono Signal.

    Args:
        path: Media file to read
        channel: Zero-based input channel routed to the output
        target_rate: Output sample rate; the stream's native rate when None
        initial_capacity: Starting size of the sample buffer

    Returns:
        Signal holding every converted sample at ``target_rate``

    Raises:
        CannotOpenFileError: If the file is missing
        FormatInvalidError: If the container or stream is unusable
        ChannelError: If ``channel`` is not below the stream's channel count
        DataInvalidError: If compressed data is corrupt
        NotEnoughMemoryError: If the sample buffer cannot grow

    Nothing is returned on failure; the partial buffer is discarded.
    """
    if target_rate is not None:
        target_rate = validate_sample_rate(target_rate)

    with DecodeSession(path) as session:
        index = validate_channel(channel, session.channels, path=str(path))
        rate = target_rate or session.sample_rate

        logger.debug(
            f"{session.path.name}: channel {index}/{session.channels}, "
            f"{session.sample_rate} Hz -> {rate} Hz"
        )

        buffer = SampleBuffer(initial_capacity)
        with ResampleSession(index, rate) as converter:
            for frame in session.frames():
                buffer.append(converter.convert(frame))
            buffer.append(converter.flush())

    signal = buffer.to_signal(rate)
    logger.debug(
        f"{Path(path).name}: extracted {signal.length} samples "
        f"({signal.duration_seconds:.3f} s, {buffer.grow_count} buffer growths)"
    )
    return signal
