"""End-to-end transcription: samples in, KinkoScore out.

Stages run in one synchronous pass:

    frames → pitch/amplitude → notes ─┬─ tempo
                                      ├─ key
                                      └─ phrases → ornaments + notation → score
"""

import logging
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from .analysis import TempoAnalyzer
from .core import (
    DetectedNote,
    KinkoNote,
    KinkoPhrase,
    KinkoScore,
    LOWEST_ENTRY,
    TranscriptionConfig,
)
from .core.errors import InputError
from .inference import KeyDetector, OrnamentClassifier, PhraseSegmenter
from .notation import NotationMapper, western_to_notes
from .transcription import MonophonicTranscriber, validate_audio

logger = logging.getLogger(__name__)


def overall_confidence(notes: Sequence[DetectedNote]) -> float:
    """Score-level confidence from mean note confidence and note count."""
    if not notes:
        return 0.0

    count = len(notes)
    mean_confidence = sum(n.confidence for n in notes) / count
    density = min(count / 50, 1.0)

    if count < 5:
        count_score = count / 5
    elif count > 200:
        count_score = 0.8  # very dense input is often noise
    else:
        count_score = 1.0

    return mean_confidence * 0.6 + density * 0.2 + count_score * 0.2


def sentinel_phrase() -> KinkoPhrase:
    """One ro note lasting one beat, standing for "nothing detected"."""
    note = KinkoNote(
        symbol=LOWEST_ENTRY.symbol,
        fingering_id=LOWEST_ENTRY.fingering_id,
        pitch_hz=LOWEST_ENTRY.canonical_hz,
        duration=1.0,
    )
    return KinkoPhrase(notes=(note,), has_breath_mark=True)


class KinkoTranscriber:
    """Compose the transcription stages into a KinkoScore."""

    def __init__(
        self,
        config: Optional[TranscriptionConfig] = None,
        classifier: Optional[OrnamentClassifier] = None,
    ):
        """
        Initialize KinkoTranscriber.

        Args:
            config: Pipeline settings (defaults if None)
            classifier: Ornament/technique classifier; pass one with custom
                rules to swap heuristics
        """
        self.config = config or TranscriptionConfig()
        cfg = self.config

        self.transcriber = MonophonicTranscriber(cfg)
        self.tempo_analyzer = TempoAnalyzer(method=cfg.tempo_method)
        self.key_detector = KeyDetector()
        self.segmenter = PhraseSegmenter(
            silence_gap=cfg.phrase_silence_gap_seconds,
            max_notes_per_phrase=cfg.max_notes_per_phrase,
            merge_gap=cfg.phrase_merge_gap_seconds,
        )
        self.classifier = classifier or OrnamentClassifier(
            pitch_deviation_threshold=cfg.pitch_deviation_threshold
        )
        self.mapper = NotationMapper(comparator=cfg.notation_comparator)

    def transcribe(
        self,
        samples: np.ndarray,
        sr: int,
        duration: Optional[float] = None,
        title: Optional[str] = None,
        metadata: Optional[Mapping[str, Any]] = None,
        instrument_range: Optional[Tuple[float, float]] = None,
    ) -> KinkoScore:
        """
        Transcribe a mono PCM buffer.

        Args:
            samples: Float samples in [-1, 1]
            sr: Sample rate
            duration: Nominal duration in seconds (len(samples) / sr if None)
            title: Score title (config title if None)
            metadata: Extra keys stored in the score's source metadata
            instrument_range: (min_freq, max_freq) overriding the config

        Returns:
            A KinkoScore; never empty

        Raises:
            InputError: For empty, non-mono or non-finite buffers
            ConfigurationError: For an invalid instrument range
        """
        samples = validate_audio(samples, sr)
        if duration is None:
            duration = len(samples) / sr
        elif duration <= 0:
            raise InputError(f"Duration must be positive, got {duration}")

        notes = self.transcriber.transcribe(samples, sr, instrument_range)
        if self.config.filter_playable_range:
            playable = instrument_range or self.config.instrument_range
            notes = [n for n in notes if self.mapper.is_playable(n.frequency, playable)]

        tempo = self.tempo_analyzer.estimate(notes, duration, samples, sr)

        source_metadata = {
            "sample_rate": sr,
            "duration_seconds": duration,
            "sample_count": len(samples),
            "note_count": len(notes),
        }
        source_metadata.update(metadata or {})

        return self.build_score(notes, tempo, title, source_metadata)

    def transcribe_notes(
        self,
        notes: Sequence[DetectedNote],
        title: Optional[str] = None,
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> KinkoScore:
        """Build a score from notes that were detected elsewhere."""
        notes = sorted(notes, key=lambda n: n.start_time)
        duration = max((n.end_time for n in notes), default=0.0)
        tempo = self.tempo_analyzer.estimate(notes, duration)
        return self.build_score(notes, tempo, title, dict(metadata or {}))

    def from_western(
        self,
        items: Iterable[Tuple[str, int, float]],
        title: Optional[str] = None,
    ) -> KinkoScore:
        """Convert (pitch name, octave, duration) items to Kinko notation."""
        return self.transcribe_notes(western_to_notes(items), title=title)

    def build_score(
        self,
        notes: Sequence[DetectedNote],
        tempo: int,
        title: Optional[str],
        source_metadata: Mapping[str, Any],
    ) -> KinkoScore:
        """Segment, classify and quantize notes into the final score."""
        key = self.key_detector.detect(notes)
        groups = self.segmenter.segment(notes)

        if groups:
            phrases = tuple(self._to_phrase(group) for group in groups)
        else:
            logger.warning("No notes detected; emitting placeholder score")
            phrases = (sentinel_phrase(),)

        logger.debug(
            "Score: %d notes, %d phrases, tempo=%d, key=%s",
            len(notes),
            len(phrases),
            tempo,
            key,
        )
        return KinkoScore(
            title=title or self.config.title,
            phrases=phrases,
            tempo_bpm=tempo,
            key_label=key,
            confidence=overall_confidence(notes),
            source_metadata=source_metadata,
            is_sentinel=not groups,
        )

    def _to_phrase(self, notes: List[DetectedNote]) -> KinkoPhrase:
        kinko_notes = tuple(self.mapper.to_kinko_note(n, self.classifier) for n in notes)
        return KinkoPhrase(notes=kinko_notes, has_breath_mark=True)
