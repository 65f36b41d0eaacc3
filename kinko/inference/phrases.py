"""Phrase segmentation - group notes into breath-delimited phrases."""

import logging
from typing import List, Sequence

from ..core import DetectedNote

logger = logging.getLogger(__name__)


class PhraseSegmenter:
    """Split a note sequence into phrases.

    A phrase closes after the current note when the next note follows a long
    silence, a silence that is long relative to the surrounding notes, a
    large pitch jump, or when the phrase is full. Single-note phrases that sit
    close to the following phrase are then folded into it, so the length cap
    governs only the initial split and a merged phrase may exceed it.
    """

    def __init__(
        self,
        silence_gap: float = 0.8,
        relative_gap_factor: float = 0.5,
        pitch_jump_ratio: float = 0.5,
        max_notes_per_phrase: int = 8,
        merge_gap: float = 1.0,
    ):
        """
        Initialize PhraseSegmenter.

        Args:
            silence_gap: Gap in seconds that always ends a phrase
            relative_gap_factor: Gap above this times the average duration of
                the current and previous notes ends a phrase
            pitch_jump_ratio: Frequency change above this fraction of the
                current frequency ends a phrase (about an octave up)
            max_notes_per_phrase: Notes per phrase before the initial split
                forces a break; merged single-note phrases
                may push a phrase past it
            merge_gap: Single-note phrases closer than this to the next
                phrase are merged into it
        """
        self.silence_gap = silence_gap
        self.relative_gap_factor = relative_gap_factor
        self.pitch_jump_ratio = pitch_jump_ratio
        self.max_notes_per_phrase = max_notes_per_phrase
        self.merge_gap = merge_gap

    def segment(self, notes: Sequence[DetectedNote]) -> List[List[DetectedNote]]:
        """
        Group notes into phrases.

        Args:
            notes: Notes sorted by start time

        Returns:
            List of phrases (each a non-empty list of notes); empty for no notes
        """
        if not notes:
            return []

        phrases: List[List[DetectedNote]] = []
        current: List[DetectedNote] = []

        for i, note in enumerate(notes):
            current.append(note)
            is_last = i == len(notes) - 1
            previous = notes[i - 1] if i > 0 else note

            if is_last or self.is_boundary(note, notes[i + 1], previous, len(current)):
                phrases.append(current)
                current = []

        consolidated = self.consolidate(phrases)
        logger.debug(
            "Segmented %d notes into %d phrases (%d before merging)",
            len(notes),
            len(consolidated),
            len(phrases),
        )
        return consolidated

    def is_boundary(
        self,
        note: DetectedNote,
        next_note: DetectedNote,
        previous: DetectedNote,
        phrase_length: int,
    ) -> bool:
        """Whether the phrase holding ``note`` should close before ``next_note``."""
        gap = next_note.start_time - note.end_time
        avg_duration = (note.duration + previous.duration) / 2

        return (
            gap > self.silence_gap
            or gap > avg_duration * self.relative_gap_factor
            or abs(next_note.frequency - note.frequency) > note.frequency * self.pitch_jump_ratio
            or phrase_length >= self.max_notes_per_phrase
        )

    def consolidate(
        self, phrases: List[List[DetectedNote]]
    ) -> List[List[DetectedNote]]:
        """Merge single-note phrases into the following phrase when close."""
        pending = [list(p) for p in phrases]
        consolidated: List[List[DetectedNote]] = []

        for i, phrase in enumerate(pending):
            if not phrase:
                continue

            if len(phrase) == 1 and i < len(pending) - 1 and pending[i + 1]:
                following = pending[i + 1]
                gap = following[0].start_time - phrase[-1].end_time
                if gap < self.merge_gap:
                    pending[i + 1] = phrase + following
                    continue

            consolidated.append(phrase)

        if consolidated or not phrases:
            return consolidated
        return [[note for phrase in phrases for note in phrase]]
