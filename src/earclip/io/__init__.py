"""Polygon and glyph I/O layer for earclip.

This module handles reading polygon documents and font glyph outlines
and writing triangulation results.

Key responsibilities:
- Load flat, nested and GeoJSON polygon documents
- Flatten nested rings into the triangulator's flat format
- Extract glyph outlines from TTF/OTF fonts using fonttools
- Write triangle index lists as JSON

Key classes:
- PolygonReader: Load polygon documents
- GlyphOutlineReader: Load fonts and extract glyph polygons
- TriangulationWriter: Save triangulation results
"""

from earclip.io.converter import flatten, geojson_to_polygons, unflatten
from earclip.io.font import GlyphOutlineReader
from earclip.io.reader import PolygonReader
from earclip.io.writer import TriangulationWriter

__all__ = [
    "GlyphOutlineReader",
    "PolygonReader",
    "TriangulationWriter",
    "flatten",
    "geojson_to_polygons",
    "unflatten",
]
