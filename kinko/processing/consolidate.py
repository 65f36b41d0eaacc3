"""Note consolidation - merge consecutive compatible frames into notes.

Frames are scanned in time order. A frame extends the open note when its
frequency is within ``frequency_tolerance`` of the note's frequency and it
starts less than ``gap_tolerance`` after the note ends. Closed notes shorter
than ``min_note_duration`` are dropped.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple, Union

from ..core import DetectedNote, FrameEstimate


@dataclass
class ConsolidationStats:
    """Statistics from a consolidation pass."""

    frame_count: int = 0
    note_count: int = 0
    dropped_fragments: int = 0


@dataclass
class _OpenNote:
    frequency: float
    amplitude: float
    start_time: float
    duration: float
    confidence: float

    @property
    def end_time(self) -> float:
        return self.start_time + self.duration

    def extend(self, frame: FrameEstimate) -> None:
        self.duration = frame.start_time + frame.duration - self.start_time
        self.amplitude = max(self.amplitude, frame.amplitude)
        self.confidence = max(self.confidence, frame.confidence)

    def close(self) -> DetectedNote:
        return DetectedNote(
            frequency=self.frequency,
            amplitude=self.amplitude,
            start_time=self.start_time,
            duration=self.duration,
            confidence=self.confidence,
        )


class NoteConsolidator:
    """Turn a per-frame estimate stream into discrete notes."""

    def __init__(
        self,
        frequency_tolerance: float = 10.0,
        gap_tolerance: float = 0.1,
        min_note_duration: float = 0.05,
    ):
        """
        Initialize NoteConsolidator.

        Args:
            frequency_tolerance: Max Hz difference for a frame to extend a note
            gap_tolerance: Max gap in seconds between note end and frame start
            min_note_duration: Minimum note duration in seconds
        """
        self.frequency_tolerance = frequency_tolerance
        self.gap_tolerance = gap_tolerance
        self.min_note_duration = min_note_duration

    def consolidate(
        self,
        frames: Iterable[FrameEstimate],
        return_stats: bool = False,
    ) -> Union[List[DetectedNote], Tuple[List[DetectedNote], ConsolidationStats]]:
        """
        Merge frames into notes.

        Args:
            frames: Per-frame estimates (sorted by start time here)
            return_stats: Whether to return consolidation statistics

        Returns:
            Notes sorted by start time, optionally with statistics
        """
        ordered = sorted(frames, key=lambda f: f.start_time)
        stats = ConsolidationStats(frame_count=len(ordered))
        notes: List[DetectedNote] = []
        current: Optional[_OpenNote] = None

        for frame in ordered:
            if current is None:
                current = self._open(frame)
            elif self._continues(current, frame):
                current.extend(frame)
            else:
                self._emit(current, notes, stats)
                current = self._open(frame)

        if current is not None:
            self._emit(current, notes, stats)

        stats.note_count = len(notes)
        if return_stats:
            return notes, stats
        return notes

    def _continues(self, note: _OpenNote, frame: FrameEstimate) -> bool:
        return (
            abs(frame.frequency - note.frequency) < self.frequency_tolerance
            and frame.start_time - note.end_time < self.gap_tolerance
        )

    def _emit(
        self,
        note: _OpenNote,
        notes: List[DetectedNote],
        stats: ConsolidationStats,
    ) -> None:
        if note.duration >= self.min_note_duration:
            notes.append(note.close())
        else:
            stats.dropped_fragments += 1

    @staticmethod
    def _open(frame: FrameEstimate) -> _OpenNote:
        return _OpenNote(
            frequency=frame.frequency,
            amplitude=frame.amplitude,
            start_time=frame.start_time,
            duration=frame.duration,
            confidence=frame.confidence,
        )
