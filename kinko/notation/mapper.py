"""Map detected frequencies onto the Kinko notation alphabet."""

import math
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from ..core import (
    DetectedNote,
    KinkoNote,
    LOWEST_ENTRY,
    NOTATION_TABLE,
    NotationEntry,
    PITCH_CLASSES,
)
from ..core.errors import ConfigurationError
from ..inference.ornaments import OrnamentClassifier


def hz_distance(frequency: float, canonical_hz: float) -> float:
    """Absolute distance in Hz."""
    return abs(frequency - canonical_hz)


def cents_distance(frequency: float, canonical_hz: float) -> float:
    """Absolute musical interval in cents."""
    return abs(1200.0 * math.log2(frequency / canonical_hz))


COMPARATORS: Dict[str, Callable[[float, float], float]] = {
    "hz": hz_distance,
    "cents": cents_distance,
}


class NotationMapper:
    """Nearest-match quantization onto the 15-entry Kinko table.

    The default ``"hz"`` comparator measures absolute Hz distance, which
    weighs errors in the kan register more heavily than in the lower
    register. ``"cents"`` compares musical intervals instead.
    """

    def __init__(
        self,
        comparator: str = "hz",
        table: Sequence[NotationEntry] = NOTATION_TABLE,
    ):
        """
        Initialize NotationMapper.

        Args:
            comparator: Distance used for matching ('hz' or 'cents')
            table: Notation entries to match against
        """
        if comparator not in COMPARATORS:
            raise ConfigurationError(
                f"Unknown comparator '{comparator}'. Supported: {sorted(COMPARATORS)}"
            )
        if not table:
            raise ConfigurationError("Notation table is empty")
        self.comparator = comparator
        self._distance = COMPARATORS[comparator]
        self.table = tuple(table)

    def closest(self, frequency: float) -> NotationEntry:
        """
        Find the entry nearest to a frequency.

        Every finite positive frequency maps to some entry; ties keep the
        earlier table entry. Non-positive or non-finite input maps to ro.
        """
        if not math.isfinite(frequency) or frequency <= 0:
            return LOWEST_ENTRY

        best = self.table[0]
        best_distance = self._distance(frequency, best.canonical_hz)
        for entry in self.table[1:]:
            distance = self._distance(frequency, entry.canonical_hz)
            if distance < best_distance:
                best, best_distance = entry, distance
        return best

    def to_kinko_note(
        self,
        note: DetectedNote,
        classifier: Optional[OrnamentClassifier] = None,
    ) -> KinkoNote:
        """Quantize a note and attach its ornaments and techniques."""
        entry = self.closest(note.frequency)
        classifier = classifier or OrnamentClassifier()
        ornaments, techniques = classifier.classify(note, entry.canonical_hz)

        return KinkoNote(
            symbol=entry.symbol,
            fingering_id=entry.fingering_id,
            pitch_hz=note.frequency,
            duration=note.duration,
            ornaments=ornaments,
            techniques=techniques,
        )

    def fingering_chart(self) -> List[Dict[str, object]]:
        """Table rows describing every symbol of the alphabet."""
        return [
            {
                "note": entry.western_label,
                "symbol": entry.symbol,
                "fingering": entry.fingering_id,
                "frequency": entry.canonical_hz,
                "description": entry.description,
            }
            for entry in self.table
        ]

    @staticmethod
    def is_playable(frequency: float, instrument_range: Tuple[float, float]) -> bool:
        """Whether a frequency lies inside an instrument's range (inclusive)."""
        low, high = instrument_range
        return low <= frequency <= high


def pitch_to_frequency(pitch: str, octave: int) -> float:
    """Equal-tempered frequency of a Western pitch name, e.g. ('Eb', 4)."""
    if pitch not in PITCH_CLASSES:
        raise ValueError(f"Unknown pitch name: {pitch}")
    midi = (octave + 1) * 12 + PITCH_CLASSES[pitch]
    return DetectedNote.midi_to_freq(midi)


def western_to_notes(
    items: Iterable[Tuple[str, int, float]],
    amplitude: float = 0.7,
    confidence: float = 0.9,
    spacing: float = 0.5,
) -> List[DetectedNote]:
    """
    Turn Western notation into notes the phrase and notation stages accept.

    Args:
        items: (pitch name, octave, duration in seconds) triples
        amplitude: Amplitude assigned to every note
        confidence: Confidence assigned to every note
        spacing: Onset distance between consecutive notes in seconds

    Returns:
        Notes starting at ``index * spacing``
    """
    return [
        DetectedNote(
            frequency=pitch_to_frequency(pitch, octave),
            amplitude=amplitude,
            start_time=index * spacing,
            duration=duration,
            confidence=confidence,
        )
        for index, (pitch, octave, duration) in enumerate(items)
    ]
