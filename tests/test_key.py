"""Tests for pentatonic key detection."""

import numpy as np
import pytest

from kinko.core import DetectedNote
from kinko.inference import KeyDetector
from kinko.notation import pitch_to_frequency


def notes_for(*names, octave=4, duration=1.0, confidence=1.0):
    return [
        DetectedNote(pitch_to_frequency(name, octave), 0.5, i * duration, duration, confidence)
        for i, name in enumerate(names)
    ]


class TestKeyDetector:
    """Tests for KeyDetector."""

    @pytest.fixture
    def detector(self):
        return KeyDetector()

    def test_empty_defaults_to_d(self, detector):
        assert detector.detect([]) == "D"

    def test_d_scale(self, detector):
        assert detector.detect(notes_for("D", "F", "G", "A", "C")) == "D"

    def test_g_scale(self, detector):
        assert detector.detect(notes_for("G", "Bb", "C", "D", "F")) == "G"

    def test_flat_keys_match(self, detector):
        # Detected notes carry sharp pitch names; flat scales still score
        info = detector.analyze(notes_for("Eb", "Gb", "Ab", "Bb", "Db"))

        assert info.root == "Eb"
        assert info.scores["Eb"] == pytest.approx(5.0)
        assert info.scores["Bb"] == pytest.approx(4.0)

    def test_tie_goes_to_first_candidate(self, detector):
        # A lies in both the D and A scales
        info = detector.analyze(notes_for("A"))
        assert info.scores["D"] == info.scores["A"]
        assert info.root == "D"

    def test_unique_scale_member(self, detector):
        assert detector.detect(notes_for("E")) == "A"

    def test_octave_ignored(self, detector):
        low = detector.detect(notes_for("G", "Bb", "C", octave=4))
        high = detector.detect(notes_for("G", "Bb", "C", octave=5))
        assert low == high

    def test_weighting_by_duration_and_confidence(self, detector):
        notes = [
            DetectedNote(pitch_to_frequency("E", 4), 0.5, 0.0, 4.0, 1.0),
            DetectedNote(pitch_to_frequency("Eb", 4), 0.5, 4.0, 1.0, 0.9),
            DetectedNote(pitch_to_frequency("Bb", 4), 0.5, 5.0, 1.0, 0.9),
        ]
        histogram = KeyDetector.pitch_class_histogram(notes)

        assert histogram[4] == pytest.approx(4.0)
        assert histogram[3] == pytest.approx(0.9)
        assert detector.detect(notes) == "A"

    def test_histogram_shape(self):
        histogram = KeyDetector.pitch_class_histogram(notes_for("D", "D", "A"))
        assert histogram.shape == (12,)
        assert np.count_nonzero(histogram) == 2

    def test_scale_info(self, detector):
        info = detector.analyze(notes_for("D", "F", "A"))
        assert info.scale == ("D", "F", "G", "A", "C")
        assert KeyDetector.scale_pitch_classes("Bb") == [10, 1, 3, 5, 8]

    def test_restricted_candidates(self):
        detector = KeyDetector(candidates=("G", "A"))
        assert detector.detect(notes_for("D", "F", "G", "A", "C")) == "G"

    def test_unknown_candidate(self):
        with pytest.raises(ValueError):
            KeyDetector(candidates=("D", "H"))

    def test_zero_confidence_notes_keep_default(self, detector):
        assert detector.detect(notes_for("E", "B", confidence=0.0)) == "D"
