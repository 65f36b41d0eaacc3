"""Tests for phrase segmentation."""

import pytest

from kinko.core import DetectedNote
from kinko.inference import PhraseSegmenter

from generate_test_audio import RO, TSU, CHI


def note(freq, start, duration=0.5):
    return DetectedNote(freq, 0.5, start, duration, 0.9)


def contiguous(freqs, duration=0.5):
    return [note(f, i * duration, duration) for i, f in enumerate(freqs)]


class TestPhraseSegmenter:
    """Tests for PhraseSegmenter."""

    @pytest.fixture
    def segmenter(self):
        return PhraseSegmenter()

    def test_empty(self, segmenter):
        assert segmenter.segment([]) == []

    def test_single_note(self, segmenter):
        only = note(RO, 0.0)
        assert segmenter.segment([only]) == [[only]]

    def test_legato_line_is_one_phrase(self, segmenter):
        notes = contiguous([RO, TSU, CHI, TSU, RO])
        assert segmenter.segment(notes) == [notes]

    def test_phrase_cap(self, segmenter):
        notes = contiguous([RO, TSU] * 5)
        phrases = segmenter.segment(notes)

        assert [len(p) for p in phrases] == [8, 2]
        assert [n for p in phrases for n in p] == notes

    def test_long_silence_breaks(self, segmenter):
        notes = [note(RO, 0.0), note(TSU, 0.5), note(CHI, 1.9), note(RO, 2.4)]
        phrases = segmenter.segment(notes)
        assert phrases == [notes[:2], notes[2:]]

    def test_relative_gap_breaks(self, segmenter):
        # 0.15 s exceeds half the 0.2 s average duration
        notes = [note(RO, 0.0, 0.2), note(TSU, 0.2, 0.2), note(CHI, 0.55, 0.2), note(RO, 0.75, 0.2)]
        phrases = segmenter.segment(notes)
        assert phrases == [notes[:2], notes[2:]]

    def test_pitch_jump_breaks(self, segmenter):
        # chi to kan-re is more than half of 440 Hz
        notes = contiguous([RO, TSU, CHI, 783.99, 880.0])
        phrases = segmenter.segment(notes)
        assert [len(p) for p in phrases] == [3, 2]

    def test_jump_relative_to_current_note(self, segmenter):
        # 392 -> 587.33 rises by 195.33 Hz, just under half of 392
        notes = contiguous([392.0, 587.33])
        assert len(segmenter.segment(notes)) == 1

    def test_singleton_merged_into_next(self, segmenter):
        notes = [note(RO, 0.0), note(TSU, 1.4), note(CHI, 1.9)]
        phrases = segmenter.segment(notes)
        assert phrases == [notes]

    def test_singleton_kept_after_long_silence(self, segmenter):
        notes = [note(RO, 0.0), note(TSU, 1.6), note(CHI, 2.1)]
        phrases = segmenter.segment(notes)
        assert phrases == [notes[:1], notes[1:]]

    def test_trailing_singleton_kept(self, segmenter):
        notes = [note(RO, 0.0), note(TSU, 0.5), note(CHI, 2.0)]
        phrases = segmenter.segment(notes)
        assert phrases == [notes[:2], notes[2:]]

    def test_chained_singletons(self, segmenter):
        notes = [note(RO, 0.0), note(TSU, 1.4), note(CHI, 2.8)]
        phrases = segmenter.segment(notes)
        assert phrases == [notes[:2], notes[2:]]

    def test_partition_preserves_order(self, segmenter):
        freqs = [RO, TSU, CHI, 880.0, TSU, RO, CHI, TSU, RO, RO, TSU, CHI]
        notes = [note(f, i * 0.7, 0.4) for i, f in enumerate(freqs)]
        phrases = segmenter.segment(notes)

        assert all(phrases)
        assert [n for p in phrases for n in p] == notes

    def test_custom_cap(self):
        notes = contiguous([RO, TSU] * 3)
        phrases = PhraseSegmenter(max_notes_per_phrase=4).segment(notes)
        assert [len(p) for p in phrases] == [4, 2]

    def test_merge_may_exceed_cap(self, segmenter):
        # Cap splits off the ninth note; 0.9 s later a full phrase follows
        first = contiguous([RO, TSU] * 4 + [RO])
        second = [note(f, 5.4 + i * 0.5) for i, f in enumerate([TSU, RO] * 4)]
        phrases = segmenter.segment(first + second)

        assert [len(p) for p in phrases] == [8, 9]
        assert phrases[1][0] is first[-1]

    def test_consolidate_empty(self, segmenter):
        assert segmenter.consolidate([]) == []
