"""Pitch and amplitude estimation by normalized autocorrelation."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Tuple

import numpy as np

from ..core import FrameEstimate, RawFrame
from ..core.constants import CORE_BAND, DEFAULT_CORRELATION_THRESHOLD
from ..core.errors import ConfigurationError
from .frames import iter_frames

logger = logging.getLogger(__name__)


class PitchAnalyzer:
    """Per-frame fundamental frequency and loudness estimation.

    Scans every candidate period in the instrument's range and keeps the lag
    with the highest autocorrelation, normalized by the energy of the whole
    frame. Longer lags overlap less of the frame and score lower, so a
    multiple of the period never beats the period itself. Cost is
    O(frames x lags x frame_size), which is fine for offline analysis of a
    few minutes of audio.
    """

    def __init__(
        self,
        sr: int = 22050,
        min_freq: float = 80.0,
        max_freq: float = 2000.0,
        correlation_threshold: float = DEFAULT_CORRELATION_THRESHOLD,
        core_band: Tuple[float, float] = CORE_BAND,
    ):
        """
        Initialize PitchAnalyzer.

        Args:
            sr: Sample rate
            min_freq: Lowest frequency to report (longest period)
            max_freq: Highest frequency to report (shortest period)
            correlation_threshold: Best normalized correlation below this means no pitch
            core_band: Frequencies outside this band get a lower confidence
        """
        if sr <= 0:
            raise ConfigurationError(f"Sample rate must be positive, got {sr}")
        if min_freq <= 0 or min_freq >= max_freq:
            raise ConfigurationError(
                f"Invalid frequency range: min_freq={min_freq}, max_freq={max_freq}"
            )
        self.sr = sr
        self.min_freq = min_freq
        self.max_freq = max_freq
        self.correlation_threshold = correlation_threshold
        self.core_band = core_band

    def lag_range(self) -> Tuple[int, int]:
        """Shortest and longest candidate period in samples (inclusive)."""
        min_lag = max(1, int(round(self.sr / self.max_freq)))
        max_lag = int(round(self.sr / self.min_freq))
        return min_lag, max_lag

    def autocorrelate(self, frame: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """
        Normalized autocorrelation over the candidate lags.

        Returns:
            Tuple of (lags, correlations)
        """
        x = np.asarray(frame, dtype=np.float64)
        n = len(x)
        min_lag, max_lag = self.lag_range()
        max_lag = min(max_lag, n - 1)
        if n == 0 or max_lag < min_lag:
            return np.array([], dtype=int), np.array([])

        lags = np.arange(min_lag, max_lag + 1)

        # raw[p] = sum_i x[i] * x[i + p]
        raw = np.correlate(x, x, mode="full")[n - 1:]
        energy = float(np.sum(x * x))
        if energy <= 0:
            return lags, np.zeros(len(lags))
        return lags, raw[lags] / energy

    def estimate(self, frame: np.ndarray) -> Optional[Tuple[float, float]]:
        """
        Estimate the fundamental frequency of one frame.

        Returns:
            Tuple of (frequency in Hz, confidence), or None if no periodicity
            in range reaches the correlation threshold
        """
        lags, corr = self.autocorrelate(frame)
        if len(lags) == 0:
            return None

        # argmax keeps the first, i.e. shortest, of equal lags
        best = int(np.argmax(corr))
        if corr[best] < self.correlation_threshold:
            return None

        frequency = self.sr / float(lags[best])
        amplitude = self.rms(frame)
        return frequency, self.confidence(frame, frequency, amplitude)

    @staticmethod
    def rms(frame: np.ndarray) -> float:
        """Root mean square of a frame."""
        if len(frame) == 0:
            return 0.0
        x = np.asarray(frame, dtype=np.float64)
        return float(np.sqrt(np.mean(x * x)))

    def confidence(self, frame: np.ndarray, frequency: float, amplitude: float) -> float:
        """Blend of signal clarity, loudness and frequency plausibility."""
        peak = float(np.max(np.abs(frame))) if len(frame) else 0.0
        clarity = min(self.rms(frame) / peak, 1.0) if peak > 0 else 0.0
        amplitude_score = min(amplitude * 10.0, 1.0)

        low, high = self.core_band
        frequency_score = 1.0 if low <= frequency <= high else 0.5

        return 0.4 * clarity + 0.4 * amplitude_score + 0.2 * frequency_score

    def analyze_frame(
        self,
        frame: RawFrame,
        hop_duration: float,
        min_amplitude: float = 0.01,
    ) -> Optional[FrameEstimate]:
        """Estimate one frame, discarding it if it is too quiet or unpitched."""
        amplitude = self.rms(frame.samples)
        if amplitude < min_amplitude:
            return None

        result = self.estimate(frame.samples)
        if result is None:
            return None

        frequency, confidence = result
        return FrameEstimate(
            frequency=frequency,
            amplitude=amplitude,
            start_time=frame.start_time,
            duration=hop_duration,
            confidence=confidence,
        )

    def analyze(
        self,
        samples: np.ndarray,
        frame_size: int = 2048,
        hop_size: int = 512,
        min_amplitude: float = 0.01,
        n_workers: int = 1,
    ) -> List[FrameEstimate]:
        """
        Estimate every frame of a buffer.

        Args:
            samples: Mono audio array
            frame_size: Window length in samples
            hop_size: Samples between windows
            min_amplitude: RMS floor below which frames are discarded
            n_workers: Worker threads; results stay in frame order

        Returns:
            Time-ordered list of estimates for pitched, audible frames
        """
        hop_duration = hop_size / self.sr
        frames = iter_frames(samples, self.sr, frame_size, hop_size)

        def run(frame: RawFrame) -> Optional[FrameEstimate]:
            return self.analyze_frame(frame, hop_duration, min_amplitude)

        if n_workers > 1:
            with ThreadPoolExecutor(max_workers=n_workers) as pool:
                results = list(pool.map(run, frames))
        else:
            results = [run(frame) for frame in frames]

        estimates = [r for r in results if r is not None]
        logger.debug(
            "Pitch analysis: %d frames, %d pitched", len(results), len(estimates)
        )
        return estimates
