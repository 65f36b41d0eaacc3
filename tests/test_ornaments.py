"""Tests for ornament and technique classification."""

from typing import Optional

import pytest

from kinko.core import DetectedNote, Ornament, Technique
from kinko.inference import (
    AccentRule,
    GraceRule,
    InstabilityRule,
    LongToneRule,
    OrnamentClassifier,
    OrnamentRule,
    PitchBendRule,
    TechniqueRule,
)


def note(freq=440.0, amplitude=0.5, duration=0.5, confidence=0.9):
    return DetectedNote(freq, amplitude, 0.0, duration, confidence)


class TestOrnaments:
    """Tests for the default ornament rules."""

    @pytest.fixture
    def classifier(self):
        return OrnamentClassifier()

    def test_plain_note(self, classifier):
        assert classifier.ornaments(note()) == ()

    def test_accent_without_long_tone(self, classifier):
        assert classifier.ornaments(note(amplitude=0.95, duration=0.3)) == (Ornament.ACCENT,)

    def test_long_tone_with_crescendo(self, classifier):
        ornaments = classifier.ornaments(note(amplitude=0.8, duration=3.0))
        assert ornaments == (Ornament.LONG_TONE, Ornament.CRESCENDO)

    def test_rendering_order(self, classifier):
        loud_long = note(amplitude=0.9, duration=3.0, confidence=0.5)
        assert classifier.ornaments(loud_long) == (
            Ornament.LONG_TONE,
            Ornament.ACCENT,
            Ornament.VIBRATO,
            Ornament.CRESCENDO,
        )

    def test_vibrato_needs_held_note(self, classifier):
        assert classifier.ornaments(note(confidence=0.5, duration=0.8)) == ()
        assert classifier.ornaments(note(confidence=0.5, duration=1.2)) == (Ornament.VIBRATO,)

    def test_thresholds_are_strict(self, classifier):
        # Neither long tone (> 2.5 s) nor accent (> 0.85)
        assert classifier.ornaments(note(amplitude=0.85, duration=2.5)) == (Ornament.CRESCENDO,)

    def test_glyphs(self):
        assert Ornament.LONG_TONE.value == "—"
        assert Ornament.ACCENT.value == "＞"


class TestTechniques:
    """Tests for the default technique rules."""

    @pytest.fixture
    def classifier(self):
        return OrnamentClassifier()

    def test_in_tune_note(self, classifier):
        assert classifier.techniques(note(freq=441.0), 440.0) == frozenset()

    def test_meri(self, classifier):
        assert Technique.MERI in classifier.techniques(note(freq=280.0), 293.66)

    def test_kari(self, classifier):
        assert Technique.KARI in classifier.techniques(note(freq=1100.0), 1046.5)

    def test_custom_deviation_threshold(self):
        classifier = OrnamentClassifier(pitch_deviation_threshold=0.01)
        assert classifier.techniques(note(freq=447.0), 440.0) == {Technique.KARI}

    def test_breath_and_grace(self, classifier):
        techniques = classifier.techniques(note(amplitude=0.1, duration=0.1), 440.0)
        assert techniques == {Technique.BREATH, Technique.GRACE}

    def test_ornamental(self, classifier):
        assert classifier.techniques(note(confidence=0.5), 440.0) == {Technique.ORNAMENTAL}

    def test_classify(self, classifier):
        ornaments, techniques = classifier.classify(note(freq=280.0, amplitude=0.95), 293.66)
        assert ornaments == (Ornament.ACCENT,)
        assert techniques == {Technique.MERI}


class TestCustomRules:
    """Rules can be swapped without touching the classifier."""

    def test_no_rules(self):
        classifier = OrnamentClassifier(ornament_rules=(), technique_rules=())
        ornaments, techniques = classifier.classify(note(amplitude=0.95, duration=3.0), 300.0)

        assert ornaments == ()
        assert techniques == frozenset()

    def test_custom_rules(self):
        class QuietRule(OrnamentRule):
            ornament = Ornament.VIBRATO

            def applies(self, note: DetectedNote) -> bool:
                return note.amplitude < 0.3

        class HighRule(TechniqueRule):
            def detect(self, note: DetectedNote, canonical_hz: float) -> Optional[Technique]:
                return Technique.KARI if note.frequency > 1000 else None

        classifier = OrnamentClassifier(
            ornament_rules=(QuietRule(), LongToneRule(min_duration=1.0)),
            technique_rules=(HighRule(),),
        )
        ornaments, techniques = classifier.classify(note(freq=1200.0, amplitude=0.2, duration=1.5), 1046.5)

        assert ornaments == (Ornament.VIBRATO, Ornament.LONG_TONE)
        assert techniques == {Technique.KARI}

    def test_rules_are_abstract(self):
        with pytest.raises(TypeError):
            OrnamentRule()

    def test_rule_thresholds(self):
        assert AccentRule(min_amplitude=0.5).applies(note(amplitude=0.6))
        assert PitchBendRule(0.03).detect(note(freq=440.0), 0.0) is None

    def test_instability_and_grace_thresholds(self):
        assert InstabilityRule(max_confidence=0.8).detect(note(confidence=0.7), 440.0) == Technique.ORNAMENTAL
        assert InstabilityRule().detect(note(confidence=0.65), 440.0) is None
        assert GraceRule(max_duration=0.6).detect(note(duration=0.5), 440.0) == Technique.GRACE
        assert GraceRule().detect(note(duration=0.3), 440.0) is None
