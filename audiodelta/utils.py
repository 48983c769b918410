"""
audiodelta.utils - Shared formatting helpers.
"""

from __future__ import annotations


def format_duration(seconds: float | None) -> str:
    """Format seconds as H:MM:SS.mmm or M:SS.mmm.

    Args:
        seconds: Duration in seconds, or None when unknown

    Returns:
        Formatted string, "-" for None
    """
    if seconds is None:
        return "-"
    millis = int(round(seconds * 1000))
    hours, millis = divmod(millis, 3_600_000)
    minutes, millis = divmod(millis, 60_000)
    secs, millis = divmod(millis, 1000)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}.{millis:03d}"
    return f"{minutes}:{secs:02d}.{millis:03d}"


def format_rate(rate: int | None) -> str:
    """Format a sample rate in Hz, or "-" when unknown."""
    if not rate:
        return "-"
    return f"{rate} Hz"
