"""Transcription configuration."""

import dataclasses
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple, Union

import yaml

from .constants import (
    DEFAULT_CORRELATION_THRESHOLD,
    DEFAULT_FRAME_SIZE,
    DEFAULT_HOP_SIZE,
    DEFAULT_MAX_FREQ,
    DEFAULT_MIN_AMPLITUDE,
    DEFAULT_MIN_FREQ,
    DEFAULT_TITLE,
    INSTRUMENT_RANGES,
)
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

TEMPO_METHODS = ("onset", "notes")
NOTATION_COMPARATORS = ("hz", "cents")


@dataclass(frozen=True)
class TranscriptionConfig:
    """Configuration for a transcription run.

    Attributes:
        frame_size: Samples per analysis window (default: 2048)
        hop_size: Samples between window starts (default: 512)
        min_freq: Lowest detectable frequency in Hz (default: 80)
        max_freq: Highest detectable frequency in Hz (default: 2000)
        min_amplitude_threshold: Frames with lower RMS are discarded (default: 0.01)
        correlation_threshold: Minimum normalized autocorrelation for a pitch (default: 0.3)
        frequency_tolerance: Max Hz difference to merge frames into a note (default: 10)
        gap_tolerance: Max gap in seconds to merge frames into a note (default: 0.1)
        min_note_duration: Shorter notes are dropped (default: 0.05)
        phrase_silence_gap_seconds: Silence that always ends a phrase (default: 0.8)
        max_notes_per_phrase: Phrase length that forces a break (default: 8)
        phrase_merge_gap_seconds: Single-note phrases closer than this to the
            next phrase are merged into it (default: 1.0)
        pitch_deviation_threshold: Relative deviation from the canonical
            frequency that marks meri/kari (default: 0.03)
        tempo_method: "onset" (spectral flux) or "notes" (note start deltas)
        notation_comparator: "hz" (absolute distance) or "cents"
        filter_playable_range: Drop notes outside [min_freq, max_freq] before
            phrasing (default: False)
        n_workers: Threads used for per-frame pitch estimation (default: 1)
        title: Score title
    """

    frame_size: int = DEFAULT_FRAME_SIZE
    hop_size: int = DEFAULT_HOP_SIZE
    min_freq: float = DEFAULT_MIN_FREQ
    max_freq: float = DEFAULT_MAX_FREQ
    min_amplitude_threshold: float = DEFAULT_MIN_AMPLITUDE
    correlation_threshold: float = DEFAULT_CORRELATION_THRESHOLD
    frequency_tolerance: float = 10.0
    gap_tolerance: float = 0.1
    min_note_duration: float = 0.05
    phrase_silence_gap_seconds: float = 0.8
    max_notes_per_phrase: int = 8
    phrase_merge_gap_seconds: float = 1.0
    pitch_deviation_threshold: float = 0.03
    tempo_method: str = "onset"
    notation_comparator: str = "hz"
    filter_playable_range: bool = False
    n_workers: int = 1
    title: str = DEFAULT_TITLE

    def __post_init__(self):
        self.validate()

    @property
    def instrument_range(self) -> Tuple[float, float]:
        return (self.min_freq, self.max_freq)

    def validate(self) -> None:
        """Raise ConfigurationError if any value is unusable."""
        if self.frame_size <= 0:
            raise ConfigurationError(f"frame_size must be positive, got {self.frame_size}")
        if self.hop_size <= 0:
            raise ConfigurationError(f"hop_size must be positive, got {self.hop_size}")
        if self.hop_size > self.frame_size:
            raise ConfigurationError(
                f"hop_size ({self.hop_size}) must not exceed frame_size ({self.frame_size})"
            )
        if self.min_freq <= 0:
            raise ConfigurationError(f"min_freq must be positive, got {self.min_freq}")
        if self.min_freq >= self.max_freq:
            raise ConfigurationError(
                f"min_freq ({self.min_freq}) must be below max_freq ({self.max_freq})"
            )
        if self.min_amplitude_threshold < 0:
            raise ConfigurationError("min_amplitude_threshold must be non-negative")
        if not 0.0 <= self.correlation_threshold <= 1.0:
            raise ConfigurationError("correlation_threshold must be within [0, 1]")
        for name in (
            "frequency_tolerance",
            "gap_tolerance",
            "phrase_silence_gap_seconds",
            "phrase_merge_gap_seconds",
            "pitch_deviation_threshold",
        ):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"{name} must be positive, got {getattr(self, name)}")
        if self.min_note_duration < 0:
            raise ConfigurationError("min_note_duration must be non-negative")
        if self.max_notes_per_phrase < 1:
            raise ConfigurationError("max_notes_per_phrase must be at least 1")
        if self.tempo_method not in TEMPO_METHODS:
            raise ConfigurationError(
                f"Unknown tempo_method '{self.tempo_method}'. Supported: {TEMPO_METHODS}"
            )
        if self.notation_comparator not in NOTATION_COMPARATORS:
            raise ConfigurationError(
                f"Unknown notation_comparator '{self.notation_comparator}'. "
                f"Supported: {NOTATION_COMPARATORS}"
            )
        if self.n_workers < 1:
            raise ConfigurationError("n_workers must be at least 1")

    def replace(self, **changes: Any) -> "TranscriptionConfig":
        """Return a copy with the given fields changed (validated)."""
        return self.from_dict({**dataclasses.asdict(self), **changes})

    def with_instrument(self, name: str) -> "TranscriptionConfig":
        """Return a copy using the frequency range of a known instrument."""
        if name not in INSTRUMENT_RANGES:
            raise ConfigurationError(
                f"Unknown instrument '{name}'. Known: {sorted(INSTRUMENT_RANGES)}"
            )
        min_freq, max_freq = INSTRUMENT_RANGES[name]
        return self.replace(min_freq=min_freq, max_freq=max_freq)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TranscriptionConfig":
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {sorted(unknown)}")
        try:
            return cls(**data)
        except TypeError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    @classmethod
    def from_yaml(
        cls,
        path: Union[str, Path],
        instrument: Optional[str] = None,
    ) -> "TranscriptionConfig":
        """
        Load configuration from a YAML file.

        The file holds either the fields at top level or under a
        ``transcription:`` section. An ``instrument:`` key (or the
        ``instrument`` argument, which wins) applies a range preset.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ConfigurationError: If the YAML is malformed or has bad values
        """
        path = Path(path).expanduser()
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        try:
            with path.open(encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Could not parse {path}: {e}") from e

        if not isinstance(raw, dict):
            raise ConfigurationError(f"{path}: expected a mapping at top level")
        section = raw.get("transcription", raw)
        if not isinstance(section, dict):
            raise ConfigurationError(f"{path}: 'transcription' must be a mapping")

        section = dict(section)
        preset = section.pop("instrument", None)
        if instrument:
            preset = instrument
        config = cls.from_dict(section)
        if preset:
            config = config.with_instrument(preset)

        logger.debug("Loaded configuration from %s", path)
        return config
