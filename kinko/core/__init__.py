"""Core types and constants for Kinko Transcriber."""

from .note import (
    BREATH_MARK,
    DetectedNote,
    FrameEstimate,
    KinkoNote,
    KinkoPhrase,
    KinkoScore,
    Ornament,
    RawFrame,
    Technique,
)
from .notation import NOTATION_TABLE, LOWEST_ENTRY, NotationEntry
from .config import TranscriptionConfig
from .errors import KinkoError, InputError, ConfigurationError
from .constants import (
    PITCH_NAMES,
    PITCH_CLASSES,
    DEFAULT_FRAME_SIZE,
    DEFAULT_HOP_SIZE,
    DEFAULT_TEMPO,
    DEFAULT_KEY,
    INSTRUMENT_RANGES,
)

__all__ = [
    "BREATH_MARK",
    "DetectedNote",
    "FrameEstimate",
    "KinkoNote",
    "KinkoPhrase",
    "KinkoScore",
    "Ornament",
    "RawFrame",
    "Technique",
    "NOTATION_TABLE",
    "LOWEST_ENTRY",
    "NotationEntry",
    "TranscriptionConfig",
    "KinkoError",
    "InputError",
    "ConfigurationError",
    "PITCH_NAMES",
    "PITCH_CLASSES",
    "DEFAULT_FRAME_SIZE",
    "DEFAULT_HOP_SIZE",
    "DEFAULT_TEMPO",
    "DEFAULT_KEY",
    "INSTRUMENT_RANGES",
]
