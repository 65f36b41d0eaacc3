"""Processing layer - Frame-to-note post-processing.

This layer turns per-frame pitch estimates into note events:
- Frame merging by frequency and gap tolerance
- Short fragment filtering
"""

from .consolidate import NoteConsolidator, ConsolidationStats

__all__ = [
    "NoteConsolidator",
    "ConsolidationStats",
]
