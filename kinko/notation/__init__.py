"""Notation layer - Quantize notes onto the Kinko-ryu alphabet."""

from .mapper import (
    NotationMapper,
    COMPARATORS,
    hz_distance,
    cents_distance,
    pitch_to_frequency,
    western_to_notes,
)

__all__ = [
    "NotationMapper",
    "COMPARATORS",
    "hz_distance",
    "cents_distance",
    "pitch_to_frequency",
    "western_to_notes",
]
