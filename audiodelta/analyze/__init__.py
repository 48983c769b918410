"""
audiodelta.analyze - Lag estimation between two signals.

FFT cross-correlation of two mono signals, reduced to the signed sample lag
at the correlation peak.
"""

from __future__ import annotations
