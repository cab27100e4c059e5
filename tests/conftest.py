"""Shared fixtures: polygon documents and a small TrueType font."""

import json
from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

# Outer ring and counter of a boxy "O"
O_OUTER = [(100, 0), (500, 0), (500, 700), (100, 700)]
O_COUNTER = [(200, 100), (400, 100), (400, 600), (200, 600)]
SQUARE = [(100, 0), (500, 0), (500, 400), (100, 400)]


def _draw_glyph(contours: list[list[tuple[int, int]]]):
    pen = TTGlyphPen(None)
    for points in contours:
        pen.moveTo(points[0])
        for point in points[1:]:
            pen.lineTo(point)
        pen.closePath()
    return pen.glyph()


@pytest.fixture
def glyph_font(tmp_path: Path) -> Path:
    """Build a TrueType font with an "O" (one counter) and a plain square."""
    glyph_order = [".notdef", "O", "square"]
    fb = FontBuilder(1000, isTTF=True)
    fb.setupGlyphOrder(glyph_order)
    fb.setupCharacterMap({ord("O"): "O", ord("s"): "square"})
    fb.setupGlyf(
        {
            ".notdef": _draw_glyph([]),
            "O": _draw_glyph([O_OUTER, O_COUNTER]),
            "square": _draw_glyph([SQUARE]),
        }
    )
    fb.setupHorizontalMetrics({name: (600, 0) for name in glyph_order})
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": "Earclip Test", "styleName": "Regular"})
    fb.setupOS2(sTypoAscender=800, usWinAscent=800, usWinDescent=200)
    fb.setupPost()

    path = tmp_path / "EarclipTest-Regular.ttf"
    fb.save(str(path))
    return path


@pytest.fixture
def polygon_file(tmp_path: Path) -> Path:
    """Write a document with a plain triangle and a square with a hole."""
    document = {
        "polygons": [
            {"name": "triangle", "vertices": [0, 0, 0, 50, 50, 0]},
            {
                "name": "frame",
                "vertices": [0, 0, 100, 0, 100, 100, 0, 100, 20, 20, 80, 20, 80, 80, 20, 80],
                "holes": [4],
            },
        ]
    }
    path = tmp_path / "shapes.json"
    path.write_text(json.dumps(document), encoding="utf-8")
    return path
