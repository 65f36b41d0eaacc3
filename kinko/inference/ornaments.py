"""Ornament and technique classification.

Each heuristic is a small rule object so that a rule can be replaced (for
example by an envelope-tracking crescendo detector) without touching the
pipeline. Rules look only at a single note and the canonical frequency of
the notation entry it was mapped to.
"""

from abc import ABC, abstractmethod
from typing import FrozenSet, Optional, Sequence, Tuple

from ..core import DetectedNote, Ornament, Technique


class OrnamentRule(ABC):
    """Adds at most one ornament to a note."""

    ornament: Ornament

    @abstractmethod
    def applies(self, note: DetectedNote) -> bool:
        pass


class TechniqueRule(ABC):
    """Tags a note with at most one technique."""

    @abstractmethod
    def detect(self, note: DetectedNote, canonical_hz: float) -> Optional[Technique]:
        pass


# Ornaments


class LongToneRule(OrnamentRule):
    """Sustained tones (nobashi)."""

    ornament = Ornament.LONG_TONE

    def __init__(self, min_duration: float = 2.5):
        self.min_duration = min_duration

    def applies(self, note: DetectedNote) -> bool:
        return note.duration > self.min_duration


class AccentRule(OrnamentRule):
    """Strong attacks."""

    ornament = Ornament.ACCENT

    def __init__(self, min_amplitude: float = 0.85):
        self.min_amplitude = min_amplitude

    def applies(self, note: DetectedNote) -> bool:
        return note.amplitude > self.min_amplitude


class VibratoRule(OrnamentRule):
    """Low pitch confidence on a held note stands in for pitch instability."""

    ornament = Ornament.VIBRATO

    def __init__(self, max_confidence: float = 0.6, min_duration: float = 1.0):
        self.max_confidence = max_confidence
        self.min_duration = min_duration

    def applies(self, note: DetectedNote) -> bool:
        return note.confidence < self.max_confidence and note.duration > self.min_duration


class CrescendoRule(OrnamentRule):
    """Loud, long notes stand in for a dynamic swell (no envelope tracking)."""

    ornament = Ornament.CRESCENDO

    def __init__(self, min_amplitude: float = 0.7, min_duration: float = 1.5):
        self.min_amplitude = min_amplitude
        self.min_duration = min_duration

    def applies(self, note: DetectedNote) -> bool:
        return note.amplitude > self.min_amplitude and note.duration > self.min_duration


# Techniques


class PitchBendRule(TechniqueRule):
    """Meri below the canonical pitch, kari above it."""

    def __init__(self, deviation_threshold: float = 0.03):
        self.deviation_threshold = deviation_threshold

    def detect(self, note: DetectedNote, canonical_hz: float) -> Optional[Technique]:
        if canonical_hz <= 0:
            return None
        deviation = abs(note.frequency - canonical_hz) / canonical_hz
        if deviation <= self.deviation_threshold:
            return None
        return Technique.MERI if note.frequency < canonical_hz else Technique.KARI


class InstabilityRule(TechniqueRule):
    """Low confidence marks an unstable, ornamented note."""

    def __init__(self, max_confidence: float = 0.65):
        self.max_confidence = max_confidence

    def detect(self, note: DetectedNote, canonical_hz: float) -> Optional[Technique]:
        if note.confidence < self.max_confidence:
            return Technique.ORNAMENTAL
        return None


class BreathRule(TechniqueRule):
    """Near-silent events are breath noise or ghost notes."""

    def __init__(self, max_amplitude: float = 0.2):
        self.max_amplitude = max_amplitude

    def detect(self, note: DetectedNote, canonical_hz: float) -> Optional[Technique]:
        if note.amplitude < self.max_amplitude:
            return Technique.BREATH
        return None


class GraceRule(TechniqueRule):
    """Very short notes are grace notes."""

    def __init__(self, max_duration: float = 0.3):
        self.max_duration = max_duration

    def detect(self, note: DetectedNote, canonical_hz: float) -> Optional[Technique]:
        if note.duration < self.max_duration:
            return Technique.GRACE
        return None


def default_ornament_rules() -> Tuple[OrnamentRule, ...]:
    # Order is rendering order
    return (LongToneRule(), AccentRule(), VibratoRule(), CrescendoRule())


def default_technique_rules(
    pitch_deviation_threshold: float = 0.03,
) -> Tuple[TechniqueRule, ...]:
    return (
        PitchBendRule(pitch_deviation_threshold),
        InstabilityRule(),
        BreathRule(),
        GraceRule(),
    )


class OrnamentClassifier:
    """Apply ornament and technique rules to a note."""

    def __init__(
        self,
        ornament_rules: Optional[Sequence[OrnamentRule]] = None,
        technique_rules: Optional[Sequence[TechniqueRule]] = None,
        pitch_deviation_threshold: float = 0.03,
    ):
        """
        Initialize OrnamentClassifier.

        Args:
            ornament_rules: Ornament rules in rendering order (defaults if None)
            technique_rules: Technique rules (defaults if None)
            pitch_deviation_threshold: Relative deviation for the default
                meri/kari rule; ignored when technique_rules is given
        """
        if ornament_rules is None:
            ornament_rules = default_ornament_rules()
        if technique_rules is None:
            technique_rules = default_technique_rules(pitch_deviation_threshold)
        self.ornament_rules = tuple(ornament_rules)
        self.technique_rules = tuple(technique_rules)

    def ornaments(self, note: DetectedNote) -> Tuple[Ornament, ...]:
        return tuple(rule.ornament for rule in self.ornament_rules if rule.applies(note))

    def techniques(self, note: DetectedNote, canonical_hz: float) -> FrozenSet[Technique]:
        found = (rule.detect(note, canonical_hz) for rule in self.technique_rules)
        return frozenset(t for t in found if t is not None)

    def classify(
        self, note: DetectedNote, canonical_hz: float
    ) -> Tuple[Tuple[Ornament, ...], FrozenSet[Technique]]:
        """
        Classify a note.

        Args:
            note: The detected note
            canonical_hz: Frequency of the notation entry the note maps to

        Returns:
            Tuple of (ordered ornaments, technique set)
        """
        return self.ornaments(note), self.techniques(note, canonical_hz)
