"""Output layer - Export finished scores.

Renderers (canvas, PDF) consume the JSON written here.
"""

from .json_export import JSONExporter

__all__ = [
    "JSONExporter",
]
