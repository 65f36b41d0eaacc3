"""Inference layer - Musical understanding from notes.

This layer builds higher-level structure from consolidated notes:
- Key detection (pentatonic root)
- Phrase segmentation (breath points)
- Ornament and technique classification

Pipeline: Notes → [Key, Phrases] → Ornaments/Techniques per note
"""

from .key import KeyDetector, KeyInfo
from .phrases import PhraseSegmenter
from .ornaments import (
    OrnamentClassifier,
    OrnamentRule,
    TechniqueRule,
    LongToneRule,
    AccentRule,
    VibratoRule,
    CrescendoRule,
    PitchBendRule,
    InstabilityRule,
    BreathRule,
    GraceRule,
)

__all__ = [
    # Key detection
    "KeyDetector",
    "KeyInfo",
    # Phrases
    "PhraseSegmenter",
    # Ornaments and techniques
    "OrnamentClassifier",
    "OrnamentRule",
    "TechniqueRule",
    "LongToneRule",
    "AccentRule",
    "VibratoRule",
    "CrescendoRule",
    "PitchBendRule",
    "InstabilityRule",
    "BreathRule",
    "GraceRule",
]
