"""Kinko Transcriber - Shakuhachi audio to Kinko-ryu notation.

Architecture Layers:
    1. core/          - Data types, notation table, configuration, errors
    2. input/         - Audio loading
    3. analysis/      - Low-level signal analysis (frames, pitch, tempo)
    4. transcription/ - Note-level detection (monophonic)
    5. processing/    - Frame-to-note consolidation
    6. inference/     - Musical understanding (key, phrases, ornaments)
    7. notation/      - Quantization onto the Kinko alphabet
    8. output/        - Export (JSON)
"""

__version__ = "0.1.0"

# Core types
from .core import (
    DetectedNote,
    KinkoNote,
    KinkoPhrase,
    KinkoScore,
    NotationEntry,
    NOTATION_TABLE,
    Ornament,
    Technique,
    TranscriptionConfig,
    KinkoError,
    InputError,
    ConfigurationError,
)

# Input layer
from .input import AudioLoader, AudioBuffer

# Analysis layer
from .analysis import PitchAnalyzer, TempoAnalyzer

# Transcription layer
from .transcription import MonophonicTranscriber

# Processing layer
from .processing import NoteConsolidator

# Inference layer
from .inference import KeyDetector, PhraseSegmenter, OrnamentClassifier

# Notation layer
from .notation import NotationMapper

# Output layer
from .output import JSONExporter

# Pipeline
from .pipeline import KinkoTranscriber

__all__ = [
    # Core
    "DetectedNote",
    "KinkoNote",
    "KinkoPhrase",
    "KinkoScore",
    "NotationEntry",
    "NOTATION_TABLE",
    "Ornament",
    "Technique",
    "TranscriptionConfig",
    "KinkoError",
    "InputError",
    "ConfigurationError",
    # Input
    "AudioLoader",
    "AudioBuffer",
    # Analysis
    "PitchAnalyzer",
    "TempoAnalyzer",
    # Transcription
    "MonophonicTranscriber",
    # Processing
    "NoteConsolidator",
    # Inference
    "KeyDetector",
    "PhraseSegmenter",
    "OrnamentClassifier",
    # Notation
    "NotationMapper",
    # Output
    "JSONExporter",
    # Pipeline
    "KinkoTranscriber",
]
