"""Analysis layer - Low-level signal analysis.

This layer extracts per-frame information from raw audio:
- Frame slicing
- Pitch and amplitude (autocorrelation)
- Tempo (spectral flux onsets, or note intervals)
"""

from .frames import iter_frames, count_frames
from .pitch import PitchAnalyzer
from .tempo import TempoAnalyzer, TempoInfo

__all__ = [
    "iter_frames",
    "count_frames",
    "PitchAnalyzer",
    "TempoAnalyzer",
    "TempoInfo",
]
