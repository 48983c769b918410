"""
audiodelta.extract - Single-channel audio extraction.

Decodes a file's best audio stream, resamples it to a target rate and keeps
one channel as a mono double-precision Signal.
"""

from __future__ import annotations

from audiodelta.extract.audio import extract, probe_audio, probe_sample_rate

__all__ = ["extract", "probe_audio", "probe_sample_rate"]
