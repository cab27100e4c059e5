"""Triangulation writer for saving results as JSON.

This module provides the TriangulationWriter class for writing triangle
index lists next to the polygons they were computed for.
"""

import json
from pathlib import Path
from typing import Any

from earclip import __version__
from earclip.domain import Triangulation
from earclip.exceptions import PolygonSaveError


class TriangulationWriter:
    """Saves triangulation results to a JSON document.

    The document has the shape::

        {"generator": "earclip 0.1.0",
         "polygons": [{"name": ..., "vertex_count": ..., "triangles": [...],
                       "deviation": ...}, ...]}

    Example:
        writer = TriangulationWriter(Path("shapes-triangles.json"))
        writer.write(results)
    """

    def __init__(self, output_path: Path, include_vertices: bool = False) -> None:
        """Initialize the writer.

        Args:
            output_path: Destination file
            include_vertices: Also write the flat vertex array of each polygon
        """
        self._output_path = output_path
        self._include_vertices = include_vertices

    @property
    def output_path(self) -> Path:
        """Destination file of this writer."""
        return self._output_path

    def build_document(self, results: list[Triangulation]) -> dict[str, Any]:
        """Build the JSON-serializable output document."""
        polygons = []
        for result in results:
            entry = result.to_dict()
            if self._include_vertices:
                entry.update(result.polygon.to_dict())
            polygons.append(entry)
        return {"generator": f"earclip {__version__}", "polygons": polygons}

    def write(self, results: list[Triangulation]) -> None:
        """Write results to the output path.

        Raises:
            PolygonSaveError: If the file cannot be written
        """
        document = self.build_document(results)
        try:
            self._output_path.parent.mkdir(parents=True, exist_ok=True)
            with self._output_path.open("w", encoding="utf-8") as handle:
                json.dump(document, handle, indent=2, default=_json_default)
                handle.write("\n")
        except OSError as e:
            raise PolygonSaveError(str(self._output_path), str(e)) from e

    @staticmethod
    def get_output_path(input_path: Path, suffix: str = "-triangles") -> Path:
        """Generate the default output path for an input file.

        Args:
            input_path: Path to the input document
            suffix: Suffix appended to the stem

        Returns:
            Path such as shapes-triangles.json next to shapes.json
        """
        return input_path.with_name(f"{input_path.stem}{suffix}.json")


def _json_default(value: Any) -> Any:
    # Fractions, Decimals and NumPy scalars
    try:
        return float(value)
    except (TypeError, ValueError):
        raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable") from None
