"""Monophonic transcription using autocorrelation pitch tracking."""

import logging
import numpy as np
from typing import List, Optional, Tuple

from ..analysis import PitchAnalyzer
from ..core import DetectedNote, TranscriptionConfig
from ..core.errors import InputError
from ..processing import NoteConsolidator

logger = logging.getLogger(__name__)


def validate_audio(audio: np.ndarray, sr: int) -> np.ndarray:
    """
    Check a sample buffer before analysis.

    Returns:
        The buffer as a 1-D float64 array

    Raises:
        InputError: If the buffer is empty, not mono, non-finite, or the
            sample rate is not positive
    """
    if sr is None or sr <= 0:
        raise InputError(f"Sample rate must be a positive integer, got {sr}")

    try:
        samples = np.asarray(audio, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InputError(f"Samples must be numeric: {e}") from e

    if samples.ndim != 1:
        raise InputError(f"Expected mono (1-D) samples, got shape {samples.shape}")
    if samples.size == 0:
        raise InputError("Sample buffer is empty")
    if not np.all(np.isfinite(samples)):
        raise InputError("Sample buffer contains NaN or infinite values")
    return samples


class MonophonicTranscriber:
    """Transcribes a single melodic line into DetectedNotes."""

    def __init__(self, config: Optional[TranscriptionConfig] = None):
        """
        Initialize MonophonicTranscriber.

        Args:
            config: Frame, pitch and consolidation settings (defaults if None)
        """
        self.config = config or TranscriptionConfig()
        self.consolidator = NoteConsolidator(
            frequency_tolerance=self.config.frequency_tolerance,
            gap_tolerance=self.config.gap_tolerance,
            min_note_duration=self.config.min_note_duration,
        )

    def transcribe(
        self,
        audio: np.ndarray,
        sr: int,
        instrument_range: Optional[Tuple[float, float]] = None,
    ) -> List[DetectedNote]:
        """
        Transcribe monophonic audio to notes.

        Args:
            audio: Audio array (mono, samples in [-1, 1])
            sr: Sample rate
            instrument_range: (min_freq, max_freq) overriding the config

        Returns:
            Notes sorted by start time; empty for silent input
        """
        samples = validate_audio(audio, sr)
        min_freq, max_freq = instrument_range or self.config.instrument_range

        analyzer = PitchAnalyzer(
            sr=sr,
            min_freq=min_freq,
            max_freq=max_freq,
            correlation_threshold=self.config.correlation_threshold,
        )
        estimates = analyzer.analyze(
            samples,
            frame_size=self.config.frame_size,
            hop_size=self.config.hop_size,
            min_amplitude=self.config.min_amplitude_threshold,
            n_workers=self.config.n_workers,
        )

        notes, stats = self.consolidator.consolidate(estimates, return_stats=True)
        logger.debug(
            "Consolidated %d frames into %d notes (%d fragments dropped)",
            stats.frame_count,
            stats.note_count,
            stats.dropped_fragments,
        )
        return notes
