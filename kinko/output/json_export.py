"""JSON export of Kinko scores."""

import json
from pathlib import Path
from typing import Union

from ..core import KinkoScore


class JSONExporter:
    """Export scores as JSON for renderers and PDF generators."""

    def __init__(self, indent: int = 2, ensure_ascii: bool = False):
        """
        Initialize JSONExporter.

        Args:
            indent: Indentation width
            ensure_ascii: Escape non-ASCII glyphs if True
        """
        self.indent = indent
        self.ensure_ascii = ensure_ascii

    def to_json(self, score: KinkoScore) -> str:
        return json.dumps(
            score.to_dict(),
            indent=self.indent,
            ensure_ascii=self.ensure_ascii,
        )

    def export(self, score: KinkoScore, output_path: Union[str, Path]) -> None:
        """
        Write a score to a JSON file.

        Args:
            score: Score to export
            output_path: Path to output JSON file
        """
        path = Path(output_path)

        # Ensure output directory exists
        path.parent.mkdir(parents=True, exist_ok=True)

        path.write_text(self.to_json(score) + "\n", encoding="utf-8")
