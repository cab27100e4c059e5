"""Unit tests for glyph outline extraction."""

from pathlib import Path

import pytest

from earclip import deviation, tessellate
from earclip.config import GlyphConfig
from earclip.core._bezier import flatten_cubic, flatten_quadratic
from earclip.exceptions import GlyphNotFoundError
from earclip.io import GlyphOutlineReader
from earclip.io.font import OutlinePen


class TestBezierFlattening:
    """Tests for Bezier flattening helpers."""

    def test_flat_quadratic(self) -> None:
        """Test a straight quadratic collapses to its end point."""
        assert flatten_quadratic((0, 0), (5, 0), (10, 0), 0.5) == [(10, 0)]

    def test_quadratic_subdivided(self) -> None:
        """Test a curved quadratic is split and ends at its end point."""
        points = flatten_quadratic((0, 0), (50, 100), (100, 0), 1.0)
        assert len(points) > 4
        assert points[-1] == (100, 0)
        assert all(0 <= y <= 50 for _, y in points)

    def test_cubic_subdivided(self) -> None:
        """Test a cubic gets more points with a finer tolerance."""
        coarse = flatten_cubic((0, 0), (0, 100), (100, 100), (100, 0), 10.0)
        fine = flatten_cubic((0, 0), (0, 100), (100, 100), (100, 0), 0.1)
        assert coarse[-1] == fine[-1] == (100, 0)
        assert len(fine) > len(coarse)


class TestOutlinePen:
    """Tests for OutlinePen."""

    def test_closing_point_dropped(self) -> None:
        """Test an explicit return to the start point is not duplicated."""
        pen = OutlinePen(None, 1.0)
        pen.moveTo((0, 0))
        pen.lineTo((10, 0))
        pen.lineTo((10, 10))
        pen.lineTo((0, 0))
        pen.closePath()
        assert pen.contours == [[(0, 0), (10, 0), (10, 10)]]

    def test_curves_flattened(self) -> None:
        """Test quadratic segments become polylines."""
        pen = OutlinePen(None, 1.0)
        pen.moveTo((0, 0))
        pen.qCurveTo((50, 100), (100, 0))
        pen.closePath()
        contour = pen.contours[0]
        assert contour[0] == (0, 0)
        assert contour[-1] == (100, 0)
        assert len(contour) > 3

    def test_degenerate_contours_skipped(self) -> None:
        """Test contours with fewer than three points are dropped."""
        pen = OutlinePen(None, 1.0)
        pen.moveTo((0, 0))
        pen.lineTo((10, 0))
        pen.closePath()
        assert pen.contours == []


class TestGlyphOutlineReader:
    """Tests for GlyphOutlineReader class."""

    def test_load_nonexistent_file(self) -> None:
        """Test loading a nonexistent file raises FileNotFoundError."""
        reader = GlyphOutlineReader(Path("nonexistent.ttf"))
        with pytest.raises(FileNotFoundError):
            reader.load()

    def test_access_before_load(self) -> None:
        """Test accessing font data before loading raises RuntimeError."""
        reader = GlyphOutlineReader(Path("test.ttf"))
        with pytest.raises(RuntimeError, match="Font not loaded"):
            _ = reader.units_per_em

    def test_font_info(self, glyph_font: Path) -> None:
        """Test basic font properties."""
        reader = GlyphOutlineReader(glyph_font)
        reader.load()
        try:
            assert reader.format == "TrueType"
            assert reader.units_per_em == 1000
            assert reader.glyph_count == 3
        finally:
            reader.close()

    def test_glyph_name_lookup(self, glyph_font: Path) -> None:
        """Test glyphs resolve by name or by mapped character."""
        reader = GlyphOutlineReader(glyph_font)
        reader.load()
        try:
            assert reader.glyph_name_for("O") == "O"
            assert reader.glyph_name_for("s") == "square"
            with pytest.raises(GlyphNotFoundError):
                reader.glyph_name_for("Z")
            with pytest.raises(GlyphNotFoundError):
                reader.glyph_name_for("missing")
        finally:
            reader.close()

    def test_read_glyph_with_counter(self, glyph_font: Path) -> None:
        """Test the counter of an O becomes a hole that triangulates exactly."""
        reader = GlyphOutlineReader(glyph_font)
        reader.load()
        try:
            polygons = reader.read_glyph("O", tolerance=1.0)
        finally:
            reader.close()

        assert len(polygons) == 1
        polygon = polygons[0]
        assert polygon.name == "O#0"
        assert polygon.vertex_count == 8
        assert polygon.hole_indices == [4]

        triangles = tessellate(polygon.vertices, polygon.hole_indices)
        assert len(triangles) // 3 == 8
        assert deviation(polygon.vertices, triangles, polygon.hole_indices) == 0

    def test_read_contours(self, glyph_font: Path) -> None:
        """Test a plain glyph has one four-point contour."""
        reader = GlyphOutlineReader(glyph_font)
        reader.load()
        try:
            contours = reader.read_contours("s", tolerance=1.0)
        finally:
            reader.close()
        assert len(contours) == 1
        assert sorted(contours[0]) == [(100, 0), (100, 400), (500, 0), (500, 400)]

    def test_close_is_idempotent(self, glyph_font: Path) -> None:
        """Test closing twice is harmless."""
        reader = GlyphOutlineReader(glyph_font)
        reader.load()
        reader.close()
        reader.close()
        with pytest.raises(RuntimeError):
            _ = reader.glyph_count


class TestGlyphConfig:
    """Tests for UPM-relative tolerances."""

    def test_scaled_tolerance(self) -> None:
        """Test tolerances scale with units per em."""
        config = GlyphConfig(flatten_tolerance=2.0)
        assert config.get_flatten_tolerance(1000) == 2.0
        assert config.get_flatten_tolerance(2048) == pytest.approx(4.096)
