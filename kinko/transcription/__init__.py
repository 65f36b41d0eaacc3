"""Transcription layer - Note-level detection from audio.

This layer converts a mono audio signal into discrete note events using
frame-wise autocorrelation and note consolidation.
"""

from .monophonic import MonophonicTranscriber, validate_audio

__all__ = [
    "MonophonicTranscriber",
    "validate_audio",
]
