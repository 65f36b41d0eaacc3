"""Tempo estimation from onsets or note start times."""

import logging
import numpy as np
import librosa
from typing import List, Optional, Sequence
from dataclasses import dataclass, field

from ..core import DetectedNote
from ..core.constants import DEFAULT_TEMPO, MAX_TEMPO, MIN_TEMPO
from ..core.errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class TempoInfo:
    """Container for tempo analysis results."""

    bpm: int
    method_used: str  # "onset", "notes" or "default"
    onset_times: np.ndarray = field(default_factory=lambda: np.array([]))


class TempoAnalyzer:
    """Estimate a tempo in BPM, clamped to a slow-music friendly range."""

    METHODS = ("onset", "notes")

    def __init__(
        self,
        method: str = "onset",
        n_fft: int = 1024,
        hop_length: int = 512,
        default_bpm: int = DEFAULT_TEMPO,
        min_bpm: int = MIN_TEMPO,
        max_bpm: int = MAX_TEMPO,
        threshold_std: float = 0.5,
        min_interval: float = 0.1,
        max_interval: float = 4.0,
        min_notes: int = 4,
    ):
        """
        Initialize TempoAnalyzer.

        Args:
            method: 'onset' (spectral flux on audio) or 'notes' (note start deltas)
            n_fft: FFT size for the flux spectrum
            hop_length: Samples between flux frames
            default_bpm: Returned when there is too little rhythmic evidence
            min_bpm: Lower clamp
            max_bpm: Upper clamp
            threshold_std: Onset threshold is mean + threshold_std * std of the flux
            min_interval: Shortest note interval (s) used by the notes method
            max_interval: Longest note interval (s) used by the notes method
            min_notes: Fewer notes than this returns default_bpm
        """
        if method not in self.METHODS:
            raise ConfigurationError(
                f"Unknown tempo method '{method}'. Supported: {self.METHODS}"
            )
        self.method = method
        self.n_fft = n_fft
        self.hop_length = hop_length
        self.default_bpm = default_bpm
        self.min_bpm = min_bpm
        self.max_bpm = max_bpm
        self.threshold_std = threshold_std
        self.min_interval = min_interval
        self.max_interval = max_interval
        self.min_notes = min_notes

    def estimate(
        self,
        notes: Sequence[DetectedNote],
        duration: float = 0.0,
        audio: Optional[np.ndarray] = None,
        sr: Optional[int] = None,
    ) -> int:
        """
        Estimate tempo.

        Args:
            notes: Consolidated notes, sorted by start time
            duration: Total buffer duration in seconds
            audio: Audio array (required for the onset method)
            sr: Sample rate of ``audio``

        Returns:
            Integer BPM within [min_bpm, max_bpm]
        """
        return self.analyze(notes, duration, audio, sr).bpm

    def analyze(
        self,
        notes: Sequence[DetectedNote],
        duration: float = 0.0,
        audio: Optional[np.ndarray] = None,
        sr: Optional[int] = None,
    ) -> TempoInfo:
        """Estimate tempo and report which method produced it."""
        if len(notes) < self.min_notes:
            return TempoInfo(bpm=self.default_bpm, method_used="default")

        if self.method == "onset" and audio is not None and sr:
            onsets = self.detect_onsets(audio, sr)
            bpm = self.bpm_from_onsets(onsets)
            if bpm is not None:
                return TempoInfo(bpm=bpm, method_used="onset", onset_times=onsets)
            logger.debug(
                "Only %d onsets in %.2fs; falling back to note intervals",
                len(onsets),
                duration,
            )

        return TempoInfo(bpm=self.bpm_from_notes(notes), method_used="notes")

    def spectral_flux(self, audio: np.ndarray) -> np.ndarray:
        """
        Sum of positive frame-to-frame magnitude increases.

        Returns:
            Flux per frame transition (length = n_frames - 1)
        """
        if len(audio) < self.n_fft + self.hop_length:
            return np.array([])

        spectrum = np.abs(
            librosa.stft(
                np.asarray(audio, dtype=np.float32),
                n_fft=self.n_fft,
                hop_length=self.hop_length,
                center=False,
            )
        )
        diff = np.diff(spectrum, axis=1)
        return np.sum(np.maximum(diff, 0.0), axis=0)

    def detect_onsets(self, audio: np.ndarray, sr: int) -> np.ndarray:
        """
        Detect onsets as local flux maxima above an adaptive threshold.

        Returns:
            Array of onset times in seconds
        """
        flux = self.spectral_flux(audio)
        if len(flux) < 3:
            return np.array([])

        threshold = np.mean(flux) + self.threshold_std * np.std(flux)
        inner = flux[1:-1]
        peaks = (inner > threshold) & (inner > flux[:-2]) & (inner > flux[2:])
        indices = np.nonzero(peaks)[0] + 1

        # flux[i] compares frame i with frame i + 1
        return (indices + 1) * self.hop_length / float(sr)

    def bpm_from_onsets(self, onset_times: np.ndarray) -> Optional[int]:
        """BPM from the median inter-onset interval, or None with < min_notes onsets."""
        if len(onset_times) < self.min_notes:
            return None
        intervals = np.diff(np.sort(onset_times))
        intervals = intervals[intervals > 0]
        if len(intervals) == 0:
            return None
        return self._to_bpm(float(np.median(intervals)))

    def bpm_from_notes(self, notes: Sequence[DetectedNote]) -> int:
        """BPM from the median start-time delta of plausible note intervals."""
        if len(notes) < self.min_notes:
            return self.default_bpm

        starts = np.array([n.start_time for n in notes])
        intervals = np.diff(starts)
        intervals = intervals[(intervals > self.min_interval) & (intervals < self.max_interval)]
        if len(intervals) == 0:
            return self.default_bpm
        return self._to_bpm(float(np.median(intervals)))

    def _to_bpm(self, interval: float) -> int:
        bpm = int(round(60.0 / interval))
        return max(self.min_bpm, min(self.max_bpm, bpm))
