"""Polygon reader for loading JSON polygon documents.

This module provides the PolygonReader class for loading polygon files
and converting them into domain models. Accepted documents:

- A flat polygon object: {"vertices": [...], "holes": [...], "dimensions": 2}
- A list of flat polygon objects, or {"polygons": [...]} wrapping one
- Nested rings of one polygon: [[[x, y], ...], [[x, y], ...]]
- A list of nested-ring polygons
- GeoJSON (Polygon, MultiPolygon, Feature, FeatureCollection, ...)
"""

import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from earclip.domain import Polygon
from earclip.exceptions import PolygonFormatError
from earclip.io.converter import flatten, geojson_to_polygons


class PolygonReader:
    """Loads polygon documents and extracts polygons.

    Example:
        reader = PolygonReader(Path("shapes.json"))
        reader.load()
        for polygon in reader.iter_polygons():
            print(polygon.vertex_count)
    """

    def __init__(self, path: Path) -> None:
        """Initialize the polygon reader.

        Args:
            path: Path to the JSON document
        """
        self._path = path
        self._polygons: list[Polygon] | None = None

    def load(self) -> None:
        """Load and parse the document.

        Raises:
            FileNotFoundError: If the file does not exist
            PolygonFormatError: If the document is not valid JSON or has
                an unrecognized structure
        """
        if not self._path.exists():
            raise FileNotFoundError(f"Polygon file not found: {self._path}")

        try:
            document = json.loads(self._path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise PolygonFormatError(str(self._path), f"invalid JSON: {e.msg}") from e

        try:
            self._polygons = parse_document(document)
        except (KeyError, TypeError, ValueError, IndexError) as e:
            raise PolygonFormatError(str(self._path), str(e)) from e

    @property
    def polygon_count(self) -> int:
        """Return number of polygons in the document.

        Raises:
            RuntimeError: If the document has not been loaded yet
        """
        return len(self._require_loaded())

    def iter_polygons(self) -> Iterator[Polygon]:
        """Iterate over loaded polygons.

        Polygons without a name are labelled by their position.

        Raises:
            RuntimeError: If the document has not been loaded yet
        """
        for k, polygon in enumerate(self._require_loaded()):
            if polygon.name is None:
                polygon.name = f"polygon-{k}"
            yield polygon

    def _require_loaded(self) -> list[Polygon]:
        if self._polygons is None:
            raise RuntimeError("Document not loaded. Call load() first.")
        return self._polygons


def parse_document(document: Any) -> list[Polygon]:
    """Convert a parsed JSON document into polygons.

    Args:
        document: Result of json.load

    Returns:
        List of polygons

    Raises:
        ValueError: If the structure is not recognized
    """
    if isinstance(document, dict):
        if "vertices" in document:
            return [Polygon.from_dict(document)]
        if "polygons" in document:
            return parse_document(document["polygons"])
        if "type" in document:
            return geojson_to_polygons(document)
        raise ValueError("object has neither 'vertices', 'polygons' nor a GeoJSON 'type'")

    if isinstance(document, list):
        if not document:
            return []
        if all(isinstance(item, dict) for item in document):
            polygons: list[Polygon] = []
            for item in document:
                polygons.extend(parse_document(item))
            return polygons

        depth = _nesting_depth(document)
        if depth == 3:
            return [flatten(document)]
        if depth == 4:
            return [flatten(rings) for rings in document]
        raise ValueError(f"unsupported coordinate nesting depth {depth}")

    raise ValueError(f"unsupported document type {type(document).__name__}")


def _nesting_depth(value: Any) -> int:
    depth = 0
    while isinstance(value, list):
        depth += 1
        if not value:
            break
        value = value[0]
    return depth
