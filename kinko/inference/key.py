"""Key detection - pick the best-fitting traditional pentatonic root.

Each note adds ``duration * confidence`` to its pitch class. Every candidate
root is scored by the histogram weight falling on its five scale degrees;
the highest score wins, with ties going to the earlier candidate.
"""

import numpy as np
from typing import Dict, List, Sequence, Tuple
from dataclasses import dataclass, field

from ..core import DetectedNote, PITCH_CLASSES, DEFAULT_KEY


@dataclass
class KeyInfo:
    """Container for key detection results."""

    root: str  # e.g. "D", "Eb"
    scores: Dict[str, float] = field(default_factory=dict)  # per candidate
    pitch_class_distribution: np.ndarray = field(
        default_factory=lambda: np.zeros(12)
    )

    @property
    def scale(self) -> Tuple[str, ...]:
        return KeyDetector.SCALES[self.root]


class KeyDetector:
    """Detect the key of a shakuhachi piece from its notes."""

    # Candidate roots in tie-break order, with their 5-note scales
    SCALES: Dict[str, Tuple[str, ...]] = {
        "D": ("D", "F", "G", "A", "C"),
        "Eb": ("Eb", "Gb", "Ab", "Bb", "Db"),
        "F": ("F", "Ab", "Bb", "C", "Eb"),
        "G": ("G", "Bb", "C", "D", "F"),
        "A": ("A", "C", "D", "E", "G"),
        "Bb": ("Bb", "Db", "Eb", "F", "Ab"),
    }

    def __init__(self, candidates: Sequence[str] = tuple(SCALES), default_key: str = DEFAULT_KEY):
        """
        Initialize KeyDetector.

        Args:
            candidates: Roots to consider, in tie-break order
            default_key: Returned for empty or silent input
        """
        unknown = [c for c in candidates if c not in self.SCALES]
        if unknown:
            raise ValueError(f"Unknown key candidates: {unknown}")
        self.candidates = list(candidates)
        self.default_key = default_key

    def detect(self, notes: Sequence[DetectedNote]) -> str:
        """Return the best key label."""
        return self.analyze(notes).root

    def analyze(self, notes: Sequence[DetectedNote]) -> KeyInfo:
        """
        Score every candidate key.

        Returns:
            KeyInfo with the winning root and all candidate scores
        """
        histogram = self.pitch_class_histogram(notes)
        scores = {key: self.score(histogram, key) for key in self.candidates}

        best_key = self.default_key
        best_score = 0.0
        for key in self.candidates:
            if scores[key] > best_score:
                best_key, best_score = key, scores[key]

        return KeyInfo(root=best_key, scores=scores, pitch_class_distribution=histogram)

    @staticmethod
    def pitch_class_histogram(notes: Sequence[DetectedNote]) -> np.ndarray:
        """12-element array of duration x confidence weight per pitch class."""
        histogram = np.zeros(12)
        for note in notes:
            if note.frequency <= 0:
                continue
            histogram[note.pitch_class] += note.duration * note.confidence
        return histogram

    @classmethod
    def score(cls, histogram: np.ndarray, key: str) -> float:
        """Total histogram weight on the key's scale degrees."""
        return float(sum(histogram[PITCH_CLASSES[name]] for name in cls.SCALES[key]))

    @classmethod
    def scale_pitch_classes(cls, key: str) -> List[int]:
        return [PITCH_CLASSES[name] for name in cls.SCALES[key]]
