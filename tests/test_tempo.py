"""Tests for tempo estimation."""

import numpy as np
import pytest

from kinko.analysis import TempoAnalyzer
from kinko.core import ConfigurationError, DetectedNote

from generate_test_audio import SR, RO, generate_sine_wave


def notes_every(interval, count=6):
    return [DetectedNote(RO, 0.5, i * interval, interval * 0.9) for i in range(count)]


def click_train(duration=3.0, hops_between=22, offset=100):
    """Unit impulses at a fixed position relative to the 512-sample hop grid."""
    audio = np.zeros(int(duration * SR), dtype=np.float32)
    audio[offset::hops_between * 512] = 1.0
    return audio


class TestTempoAnalyzer:
    """Tests for TempoAnalyzer."""

    def test_unknown_method(self):
        with pytest.raises(ConfigurationError):
            TempoAnalyzer(method="beat-tracker")

    def test_too_few_notes_default(self):
        info = TempoAnalyzer().analyze(notes_every(0.5, count=3), 1.5)
        assert info.bpm == 100
        assert info.method_used == "default"

    def test_empty_notes_default(self):
        assert TempoAnalyzer().estimate([], 0.0) == 100

    def test_notes_method(self):
        analyzer = TempoAnalyzer(method="notes")
        assert analyzer.estimate(notes_every(0.5), 3.0) == 120
        assert analyzer.estimate(notes_every(0.75), 4.5) == 80

    def test_clamped_high(self):
        assert TempoAnalyzer(method="notes").estimate(notes_every(0.25), 1.5) == 180

    def test_clamped_low(self):
        assert TempoAnalyzer(method="notes").estimate(notes_every(2.0), 12.0) == 60

    def test_implausible_intervals_ignored(self):
        # 5 s gaps are longer than any phrase-internal interval
        assert TempoAnalyzer(method="notes").estimate(notes_every(5.0), 30.0) == 100

    def test_median_interval(self):
        starts = [0.0, 0.5, 1.0, 1.5, 3.5]
        notes = [DetectedNote(RO, 0.5, s, 0.4) for s in starts]
        assert TempoAnalyzer(method="notes").estimate(notes, 4.0) == 120

    def test_onset_method_on_clicks(self):
        analyzer = TempoAnalyzer()
        info = analyzer.analyze(notes_every(0.5), 3.0, click_train(), SR)

        assert info.method_used == "onset"
        assert len(info.onset_times) == 5
        assert np.allclose(np.diff(info.onset_times), 22 * 512 / SR)
        assert info.bpm == 117

    def test_onset_without_audio_falls_back(self):
        info = TempoAnalyzer().analyze(notes_every(0.5), 3.0)
        assert info.method_used == "notes"
        assert info.bpm == 120

    def test_short_audio_falls_back(self):
        audio = generate_sine_wave(RO, 0.05)
        info = TempoAnalyzer().analyze(notes_every(0.5), 3.0, audio, SR)

        assert len(TempoAnalyzer().spectral_flux(audio)) == 0
        assert info.method_used == "notes"
        assert info.bpm == 120

    def test_steady_tone_has_no_onsets(self):
        audio = generate_sine_wave(RO, 2.0)
        info = TempoAnalyzer().analyze(notes_every(0.5), 2.0, audio, SR)

        assert 60 <= info.bpm <= 180

    @pytest.mark.parametrize("interval", [0.05, 0.3, 0.6, 1.2, 3.9])
    def test_always_within_bounds(self, interval):
        bpm = TempoAnalyzer(method="notes").estimate(notes_every(interval), 10.0)
        assert 60 <= bpm <= 180
