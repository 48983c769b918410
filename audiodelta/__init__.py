"""
audiodelta - Audio offset estimation between two recordings.

Decodes one or two media files to a common sample rate, isolates a single
channel from each, and reports the signed lag at which the two signals
cross-correlate best: extraction → FFT cross-correlation → delta report.
"""

__version__ = "0.1.0"
