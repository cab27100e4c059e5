"""Glyph outline reader for triangulating font glyphs.

Glyph outlines are drawn through a fontTools pen that flattens quadratic
and cubic Bezier segments into polylines. The resulting closed contours
are grouped into polygons with holes by nesting depth, ready for the
triangulator.
"""

from pathlib import Path
from typing import Any

from fontTools.pens.basePen import BasePen
from fontTools.ttLib import TTFont

from earclip.core._bezier import flatten_cubic, flatten_quadratic
from earclip.domain import Polygon
from earclip.exceptions import GlyphNotFoundError
from earclip.io.converter import contours_to_polygons

Coord = tuple[float, float]


class OutlinePen(BasePen):
    """Pen collecting flattened closed contours of a glyph.

    Components are decomposed through the glyph set passed to the pen.
    """

    def __init__(self, glyph_set: Any, tolerance: float) -> None:
        super().__init__(glyph_set)
        self.tolerance = tolerance
        self.contours: list[list[Coord]] = []
        self._current: list[Coord] = []

    def _moveTo(self, pt: Coord) -> None:
        self._flush()
        self._current = [pt]

    def _lineTo(self, pt: Coord) -> None:
        self._current.append(pt)

    def _curveToOne(self, pt1: Coord, pt2: Coord, pt3: Coord) -> None:
        start = self._getCurrentPoint()
        self._current.extend(flatten_cubic(start, pt1, pt2, pt3, self.tolerance))

    def _qCurveToOne(self, pt1: Coord, pt2: Coord) -> None:
        start = self._getCurrentPoint()
        self._current.extend(flatten_quadratic(start, pt1, pt2, self.tolerance))

    def _closePath(self) -> None:
        self._flush()

    def _endPath(self) -> None:
        self._flush()

    def _flush(self) -> None:
        points = self._current
        self._current = []
        if len(points) > 1 and points[0] == points[-1]:
            points = points[:-1]
        if len(points) >= 3:
            self.contours.append(points)


class GlyphOutlineReader:
    """Loads TTF/OTF fonts and extracts glyph outlines as polygons.

    Example:
        reader = GlyphOutlineReader(Path("font.ttf"))
        reader.load()
        polygons = reader.read_glyph("O", tolerance=1.0)
        reader.close()
    """

    def __init__(self, font_path: Path) -> None:
        """Initialize the glyph outline reader.

        Args:
            font_path: Path to the TTF or OTF font file
        """
        self._font_path = font_path
        self._font: TTFont | None = None

    def load(self) -> None:
        """Load the font file.

        Raises:
            FileNotFoundError: If font file does not exist
            Exception: If font file is invalid or cannot be loaded
        """
        if not self._font_path.exists():
            raise FileNotFoundError(f"Font file not found: {self._font_path}")

        self._font = TTFont(str(self._font_path))

    def close(self) -> None:
        """Release the underlying font."""
        if self._font is not None:
            self._font.close()
            self._font = None

    @property
    def format(self) -> str:
        """Return 'OpenType' for CFF-flavoured fonts, 'TrueType' otherwise."""
        font = self._require_font()
        if "CFF " in font or "CFF2" in font:
            return "OpenType"
        return "TrueType"

    @property
    def units_per_em(self) -> int:
        """Return font's units per em."""
        return self._require_font()["head"].unitsPerEm  # type: ignore[attr-defined]

    @property
    def glyph_count(self) -> int:
        """Return total number of glyphs in the font."""
        return len(self._require_font().getGlyphOrder())

    def glyph_name_for(self, key: str) -> str:
        """Resolve a glyph name or a single character to a glyph name.

        Args:
            key: Glyph name, or one character looked up in the cmap

        Returns:
            Glyph name

        Raises:
            GlyphNotFoundError: If neither lookup succeeds
        """
        font = self._require_font()
        if key in font.getGlyphOrder():
            return key
        if len(key) == 1:
            cmap = font.getBestCmap() or {}
            name = cmap.get(ord(key))
            if name is not None:
                return name
        raise GlyphNotFoundError(key)

    def read_contours(self, key: str, tolerance: float) -> list[list[Coord]]:
        """Draw a glyph and return its flattened closed contours.

        Args:
            key: Glyph name or character
            tolerance: Bezier flattening tolerance in font units
        """
        font = self._require_font()
        name = self.glyph_name_for(key)
        glyph_set = font.getGlyphSet()
        pen = OutlinePen(glyph_set, tolerance)
        glyph_set[name].draw(pen)
        return pen.contours

    def read_glyph(self, key: str, tolerance: float) -> list[Polygon]:
        """Extract a glyph as polygons with holes.

        Args:
            key: Glyph name or character
            tolerance: Bezier flattening tolerance in font units

        Returns:
            One polygon per outer contour, labelled "<glyph>#<contour>"
        """
        name = self.glyph_name_for(key)
        return contours_to_polygons(self.read_contours(name, tolerance), name=name)

    def _require_font(self) -> TTFont:
        if self._font is None:
            raise RuntimeError("Font not loaded. Call load() first.")
        return self._font
