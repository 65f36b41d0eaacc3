"""Note and score data classes - the units passed between pipeline stages."""

import math
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, List, Mapping, NamedTuple, Tuple
import numpy as np

from .constants import A4_FREQ, A4_MIDI, PITCH_NAMES
from .errors import InputError

# Glyph a renderer draws at the end of a phrase with has_breath_mark
BREATH_MARK = "、"


class RawFrame(NamedTuple):
    """One analysis window of samples and its offset in seconds."""

    samples: np.ndarray
    start_time: float


@dataclass(frozen=True)
class FrameEstimate:
    """Pitch and loudness estimate for a single analysis frame."""

    frequency: float
    amplitude: float
    start_time: float
    duration: float
    confidence: float


@dataclass(frozen=True)
class DetectedNote:
    """A consolidated pitched event."""

    frequency: float  # Hz
    amplitude: float  # RMS, 0-1
    start_time: float  # seconds
    duration: float  # seconds
    confidence: float = 1.0  # 0-1

    def __post_init__(self):
        if not math.isfinite(self.frequency):
            raise InputError(f"Note frequency must be finite, got {self.frequency}")
        if not self.duration > 0:
            raise InputError(f"Note duration must be positive, got {self.duration}")
        if not self.start_time >= 0:
            raise InputError(f"Note start time must not be negative, got {self.start_time}")

    @property
    def end_time(self) -> float:
        """Note end in seconds."""
        return self.start_time + self.duration

    @property
    def midi(self) -> int:
        """Nearest MIDI pitch."""
        return DetectedNote.freq_to_midi(self.frequency)

    @property
    def pitch_class(self) -> int:
        """Get pitch class (0-11, where 0=C), ignoring octave."""
        return self.midi % 12

    @property
    def pitch_name(self) -> str:
        """Get note name (e.g., 'D4', 'A#4')."""
        midi = self.midi
        return f"{PITCH_NAMES[midi % 12]}{(midi // 12) - 1}"

    @staticmethod
    def freq_to_midi(freq: float) -> int:
        """Convert frequency (Hz) to MIDI pitch."""
        if freq <= 0:
            return 0
        return int(round(A4_MIDI + 12 * np.log2(freq / A4_FREQ)))

    @staticmethod
    def midi_to_freq(midi: int) -> float:
        """Convert MIDI pitch to frequency (Hz)."""
        return A4_FREQ * (2 ** ((midi - A4_MIDI) / 12.0))


class Ornament(str, Enum):
    """Ornament glyphs, rendered next to the note in order."""

    LONG_TONE = "—"
    ACCENT = "＞"
    VIBRATO = "⌒"
    CRESCENDO = "＜"


class Technique(str, Enum):
    """Playing technique tags."""

    MERI = "meri"  # pitch bent down
    KARI = "kari"  # pitch bent up
    ORNAMENTAL = "ornamental"
    BREATH = "breath"
    GRACE = "grace"


@dataclass(frozen=True)
class KinkoNote:
    """A note quantized onto the Kinko alphabet."""

    symbol: str
    fingering_id: str
    pitch_hz: float
    duration: float
    ornaments: Tuple[Ornament, ...] = ()
    techniques: FrozenSet[Technique] = frozenset()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "symbol": self.symbol,
            "fingering": self.fingering_id,
            "pitch": self.pitch_hz,
            "duration": self.duration,
            "ornaments": [o.value for o in self.ornaments],
            "techniques": sorted(t.value for t in self.techniques),
        }


@dataclass(frozen=True)
class KinkoPhrase:
    """A run of notes ending in a breath."""

    notes: Tuple[KinkoNote, ...]
    has_breath_mark: bool = True

    def __len__(self) -> int:
        return len(self.notes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "notes": [n.to_dict() for n in self.notes],
            "breath": self.has_breath_mark,
        }


@dataclass(frozen=True)
class KinkoScore:
    """Root output of a transcription run."""

    title: str
    phrases: Tuple[KinkoPhrase, ...]
    tempo_bpm: int
    key_label: str
    confidence: float = 0.0
    source_metadata: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({})
    )
    is_sentinel: bool = False  # True when nothing was detected

    def __post_init__(self):
        # Freeze caller-supplied metadata
        if not isinstance(self.source_metadata, MappingProxyType):
            object.__setattr__(
                self, "source_metadata", MappingProxyType(dict(self.source_metadata))
            )

    @property
    def notes(self) -> List[KinkoNote]:
        """All notes, flattened across phrases."""
        return [note for phrase in self.phrases for note in phrase.notes]

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready representation with a stable key order."""
        return {
            "title": self.title,
            "tempo": self.tempo_bpm,
            "key": self.key_label,
            "confidence": self.confidence,
            "sentinel": self.is_sentinel,
            "phrases": [p.to_dict() for p in self.phrases],
            "metadata": {k: self.source_metadata[k] for k in sorted(self.source_metadata)},
        }
