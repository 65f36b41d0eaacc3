"""The fixed Kinko-ryu notation alphabet.

Fifteen entries: the five hon-on fundamentals, their meri (half-hole,
flattened) variants and the kan (upper octave) fundamentals. The table is
configuration data and is never mutated.
"""

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class NotationEntry:
    """One symbol of the Kinko alphabet."""

    western_label: str  # e.g. "D4"
    symbol: str  # katakana / kanji glyph
    fingering_id: str  # e.g. "ro", "ro-meri", "kan-ro"
    canonical_hz: float
    description: str = "Traditional fingering"


NOTATION_TABLE: Tuple[NotationEntry, ...] = (
    # Hon-on
    NotationEntry("D4", "ロ", "ro", 293.66, "All holes closed"),
    NotationEntry("F4", "ツ", "tsu", 349.23, "First hole open"),
    NotationEntry("G4", "レ", "re", 392.00, "First two holes open"),
    NotationEntry("A4", "チ", "chi", 440.00, "First three holes open"),
    NotationEntry("C5", "リ", "ri", 523.25, "First four holes open"),
    # Meri
    NotationEntry("D#4", "ロ◯", "ro-meri", 311.13, "All holes closed, half-blown"),
    NotationEntry("F#4", "ツ◯", "tsu-meri", 369.99),
    NotationEntry("G#4", "レ◯", "re-meri", 415.30),
    NotationEntry("A#4", "チ◯", "chi-meri", 466.16),
    NotationEntry("C#5", "リ◯", "ri-meri", 554.37),
    # Kan
    NotationEntry("D5", "口", "kan-ro", 587.33, "All holes closed, overblown"),
    NotationEntry("F5", "乙", "kan-tsu", 698.46),
    NotationEntry("G5", "工", "kan-re", 783.99),
    NotationEntry("A5", "尺", "kan-chi", 880.00),
    NotationEntry("C6", "上", "kan-ri", 1046.50),
)

# Fundamental ro, used for the "nothing detected" sentinel
LOWEST_ENTRY = NOTATION_TABLE[0]

ENTRIES_BY_FINGERING: Dict[str, NotationEntry] = {
    entry.fingering_id: entry for entry in NOTATION_TABLE
}
