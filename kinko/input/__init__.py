"""Input layer - Audio loading."""

from .loader import AudioLoader, AudioBuffer

__all__ = [
    "AudioLoader",
    "AudioBuffer",
]
