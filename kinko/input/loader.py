"""Audio loading - the audio source provider for the transcription core."""

import numpy as np
import librosa
import soundfile as sf
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union


@dataclass(frozen=True)
class AudioBuffer:
    """Decoded mono PCM samples in [-1, 1]."""

    samples: np.ndarray
    sr: int

    @property
    def duration(self) -> float:
        return len(self.samples) / self.sr if self.sr else 0.0


class AudioLoader:
    """Handles audio file loading and preprocessing."""

    # Formats libsndfile decodes without external codecs
    SUPPORTED_FORMATS = {".wav", ".flac", ".ogg", ".aiff", ".aif"}

    def __init__(
        self,
        target_sr: Optional[int] = None,
        mono: bool = True,
        normalize: bool = False,
    ):
        """
        Initialize AudioLoader.

        Args:
            target_sr: Resample to this rate (keep native rate if None)
            mono: Convert to mono if True
            normalize: Peak-normalize audio if True
        """
        self.target_sr = target_sr
        self.mono = mono
        self.normalize = normalize

    def load(self, path: Union[str, Path]) -> AudioBuffer:
        """
        Load audio file and preprocess.

        Args:
            path: Path to audio file

        Returns:
            AudioBuffer with samples and sample rate

        Raises:
            ValueError: If file format not supported
            FileNotFoundError: If file doesn't exist
        """
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"Audio file not found: {path}")

        if path.suffix.lower() not in self.SUPPORTED_FORMATS:
            raise ValueError(
                f"Unsupported format: {path.suffix}. "
                f"Supported: {sorted(self.SUPPORTED_FORMATS)}"
            )

        # Load with librosa (handles resampling and mono conversion)
        audio, sr = librosa.load(
            str(path),
            sr=self.target_sr,
            mono=self.mono,
        )

        if self.normalize:
            audio = self._normalize(audio)

        return AudioBuffer(samples=audio, sr=int(sr))

    def info(self, path: Union[str, Path]):
        """Read header information without decoding samples."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Audio file not found: {path}")
        return sf.info(str(path))

    def _normalize(self, audio: np.ndarray) -> np.ndarray:
        """Normalize audio to [-1, 1] range using peak normalization."""
        peak = np.abs(audio).max() if len(audio) else 0.0
        if peak > 0:
            audio = audio / peak
        return audio
