"""End-to-end tests of tessellate and deviation on known polygons."""

import math
import sys
from fractions import Fraction
from unittest.mock import Mock

import pytest

from earclip import InvalidInputError, deviation, tessellate
from earclip.config import TriangulationConfig
from earclip.core.geometry import signed_area

TRIANGLE = [0, 0, 0, 50, 50, 0]
QUAD = [10, 0, 0, 50, 60, 60, 70, 10]
L_SHAPE = [0, 0, 10, 0, 10, 5, 5, 5, 5, 15, 0, 15]
FRAME = [0, 0, 100, 0, 100, 100, 0, 100, 20, 20, 80, 20, 80, 80, 20, 80]


def star(n: int, inner: float = 40.0, outer: float = 100.0) -> list[float]:
    """Star-shaped (concave, simple) polygon with n vertices."""
    data = []
    for k in range(n):
        angle = 2 * math.pi * k / n
        radius = outer if k % 2 == 0 else inner
        data.extend([radius * math.cos(angle), radius * math.sin(angle)])
    return data


def zigzag(m: int) -> list[float]:
    """Two interleaved zigzag chains; the ring crosses itself many times."""
    data: list[float] = []
    for k in range(m):
        data.extend([k, (k % 2) * 10])
    for k in range(m):
        data.extend([m - 1 - k + 0.5, (k % 2) * 10 - 5])
    return data


def call_depth() -> int:
    depth = 0
    frame = sys._getframe()
    while frame is not None:
        depth += 1
        frame = frame.f_back
    return depth


def triangle_orientations(data: list, triangles: list[int], dim: int = 2) -> set[int]:
    signs = set()
    for k in range(0, len(triangles), 3):
        coords = []
        for v in triangles[k : k + 3]:
            coords.extend(data[v * dim : v * dim + 2])
        a = signed_area(coords, 0, 6, 2)
        signs.add((a > 0) - (a < 0))
    return signs


class TestLiteralScenarios:
    """Known inputs with exact expected outputs."""

    def test_triangle(self) -> None:
        """Test a single triangle."""
        assert tessellate(TRIANGLE) == [1, 0, 2]

    def test_l_shape(self) -> None:
        """Test a concave L-shape."""
        assert tessellate(L_SHAPE) == [4, 5, 0, 0, 1, 2, 3, 4, 0, 0, 2, 3]

    def test_convex_quad(self) -> None:
        """Test a convex quadrilateral."""
        assert tessellate(QUAD) == [1, 0, 3, 3, 2, 1]

    def test_square_with_hole(self) -> None:
        """Test a square frame."""
        assert tessellate(FRAME, [4]) == [
            3, 0, 4, 5, 4, 0, 3, 4, 7, 5, 0, 1, 2, 3, 7, 6, 5, 1, 2, 7, 6, 6, 1, 2,
        ]

    def test_three_dimensions(self) -> None:
        """Test the third coordinate is carried through and ignored."""
        data = [10, 0, 1, 0, 50, 2, 60, 60, 3, 70, 10, 4]
        assert tessellate(data, dim=3) == [1, 0, 3, 3, 2, 1]

    def test_triangle_with_collinear_midpoints(self) -> None:
        """Test collinear vertices on the edges are still used."""
        data = [0, 0, 0, 25, 0, 50, 25, 25, 50, 0, 25, 0]
        assert tessellate(data) == [1, 0, 5, 5, 4, 3, 3, 2, 1, 1, 5, 3]

    def test_deviation_literals(self) -> None:
        """Test deviation of an exact and a deliberately wrong result."""
        assert deviation(TRIANGLE, [1, 0, 2]) == 0
        assert deviation(QUAD, [3, 2, 1]) == 0.5


class TestProperties:
    """General properties of triangulations."""

    @pytest.mark.parametrize("data", [TRIANGLE, QUAD, L_SHAPE, star(10), star(24)])
    def test_simple_polygon_counts(self, data: list) -> None:
        """Test simple polygons give N - 2 distinct triangles using every vertex."""
        n = len(data) // 2
        triangles = tessellate(data)

        assert len(triangles) == 3 * (n - 2)
        assert all(0 <= i < n for i in triangles)
        assert set(triangles) == set(range(n))
        triples = {tuple(sorted(triangles[k : k + 3])) for k in range(0, len(triangles), 3)}
        assert len(triples) == n - 2

    @pytest.mark.parametrize("data", [TRIANGLE, QUAD, L_SHAPE, star(12)])
    def test_consistent_orientation(self, data: list) -> None:
        """Test every triangle has the same winding whatever the input winding."""
        reversed_data = []
        for k in range(len(data) - 2, -1, -2):
            reversed_data.extend(data[k : k + 2])

        assert triangle_orientations(data, tessellate(data)) == {1}
        assert triangle_orientations(reversed_data, tessellate(reversed_data)) == {1}

    @pytest.mark.parametrize("data", [TRIANGLE, QUAD, L_SHAPE, star(16), star(200)])
    def test_zero_deviation(self, data: list) -> None:
        """Test simple polygons are covered exactly."""
        assert deviation(data, tessellate(data)) < 1e-12

    def test_hole_coverage_and_count(self) -> None:
        """Test a frame is covered exactly with N + 2H - 2 triangles."""
        triangles = tessellate(FRAME, [4])
        assert deviation(FRAME, triangles, [4]) == 0
        assert len(triangles) // 3 == 8 + 2 * 1 - 2

    def test_two_holes(self) -> None:
        """Test a polygon with two holes."""
        data = [
            0, 0, 100, 0, 100, 100, 0, 100,
            10, 20, 30, 20, 30, 40, 10, 40,
            60, 55, 85, 55, 85, 80, 60, 80,
        ]
        triangles = tessellate(data, [4, 8])
        assert deviation(data, triangles, [4, 8]) < 1e-12
        assert len(triangles) // 3 == 12 + 2 * 2 - 2
        assert set(triangles) == set(range(12))

    def test_steiner_point(self) -> None:
        """Test a one-vertex hole becomes an interior vertex."""
        data = [0, 0, 100, 0, 100, 100, 0, 100, 50, 50]
        triangles = tessellate(data, [4])
        assert 4 in triangles
        assert deviation(data, triangles, [4]) == 0


class TestLargePolygons:
    """Polygons above the z-order hashing threshold."""

    def test_hashed_matches_unhashed_coverage(self) -> None:
        """Test hashing changes nothing about coverage or count."""
        data = star(150)
        hashed = tessellate(data)
        plain = tessellate(data, config=TriangulationConfig(hash_threshold=10_000))

        assert len(hashed) == len(plain) == 3 * 148
        assert deviation(data, hashed) < 1e-12
        assert deviation(data, plain) < 1e-12

    def test_large_polygon_with_hole(self) -> None:
        """Test a many-sided ring with a square hole."""
        data = star(120, inner=80.0, outer=100.0) + [-10, -10, 10, -10, 10, 10, -10, 10]
        holes = [120]
        triangles = tessellate(data, holes)
        assert len(triangles) // 3 == 124 + 2 - 2
        assert deviation(data, triangles, holes) < 1e-12

    def test_hash_threshold_zero(self) -> None:
        """Test hashing small polygons gives the same literal results."""
        config = TriangulationConfig(hash_threshold=0)
        assert tessellate(TRIANGLE, config=config) == [1, 0, 2]
        assert deviation(L_SHAPE, tessellate(L_SHAPE, config=config)) == 0


class TestDegenerateInput:
    """Degenerate input degrades silently."""

    @pytest.mark.parametrize("data", [None, [], [0, 0], [0, 0, 1, 1]])
    def test_too_small(self, data) -> None:
        """Test absent or tiny input gives no triangles."""
        assert tessellate(data) == []

    def test_collinear(self) -> None:
        """Test a flat ring gives no triangles."""
        assert tessellate([0, 0, 1, 1, 2, 2]) == []

    def test_duplicate_vertex(self) -> None:
        """Test a repeated vertex does not affect coverage."""
        data = [0, 0, 0, 0, 10, 0, 10, 10, 0, 10]
        triangles = tessellate(data)
        assert len(triangles) == 6
        assert deviation(data, triangles) == 0

    def test_self_intersection(self) -> None:
        """Test a bow-tie still returns valid indices."""
        triangles = tessellate([0, 0, 10, 10, 10, 0, 0, 10])
        assert len(triangles) % 3 == 0
        assert all(0 <= i < 4 for i in triangles)

    def test_dropped_hole(self) -> None:
        """Test a hole outside the outer ring is dropped and logged."""
        logger = Mock()
        data = [0, 0, 10, 0, 10, 10, 0, 10, 2, 20, 4, 20, 4, 22, 2, 22]
        triangles = tessellate(data, [4], logger=logger)
        assert len(triangles) == 6
        assert all(i < 4 for i in triangles)
        logger.debug.assert_any_call("Hole dropped, no bridge found", vertex=4)


class TestNumericTypes:
    """Coordinates of other numeric types."""

    def test_fractions(self) -> None:
        """Test exact rational coordinates."""
        data = [Fraction(v) for v in QUAD]
        triangles = tessellate(data)
        assert triangles == [1, 0, 3, 3, 2, 1]
        assert deviation(data, triangles) == 0

    def test_floats(self) -> None:
        """Test float coordinates give the integer result."""
        assert tessellate([float(v) for v in L_SHAPE]) == [4, 5, 0, 0, 1, 2, 3, 4, 0, 0, 2, 3]

    def test_tuple_input(self) -> None:
        """Test any sequence is accepted."""
        assert tessellate(tuple(TRIANGLE)) == [1, 0, 2]


class TestInvalidInput:
    """Caller precondition violations."""

    @pytest.mark.parametrize("dim", [0, 1, 2.0, True])
    def test_bad_dim(self, dim) -> None:
        """Test dim must be an integer of at least two."""
        with pytest.raises(InvalidInputError, match="dim"):
            tessellate(QUAD, dim=dim)

    def test_length_not_multiple_of_dim(self) -> None:
        """Test a ragged coordinate array."""
        with pytest.raises(InvalidInputError, match="multiple"):
            tessellate([0, 0, 1, 0, 1])

    @pytest.mark.parametrize("holes", [[0], [4], [-1], [5]])
    def test_hole_index_out_of_range(self, holes) -> None:
        """Test hole indices must lie strictly inside the vertex range."""
        with pytest.raises(InvalidInputError, match="out of range"):
            tessellate(QUAD, holes)

    def test_hole_indices_not_ascending(self) -> None:
        """Test hole indices must be strictly ascending."""
        data = FRAME + [40, 40, 60, 40, 60, 60]
        with pytest.raises(InvalidInputError, match="ascending"):
            tessellate(data, [8, 4])
        with pytest.raises(InvalidInputError, match="ascending"):
            tessellate(data, [4, 4])

    def test_hole_index_not_integer(self) -> None:
        """Test fractional hole indices are rejected."""
        with pytest.raises(InvalidInputError, match="integer"):
            tessellate(FRAME, [4.0])

    def test_error_hierarchy(self) -> None:
        """Test invalid input errors carry a reason and derive from the base error."""
        from earclip import EarclipError

        with pytest.raises(EarclipError) as excinfo:
            tessellate([0, 0, 1], dim=2)
        assert "not a multiple" in excinfo.value.reason


class TestDeviation:
    """Edge cases of deviation."""

    def test_none_data(self) -> None:
        """Test absent data is reported as -1."""
        assert deviation(None, []) == -1

    def test_both_areas_zero(self) -> None:
        """Test a flat polygon with no triangles."""
        assert deviation([0, 0, 1, 1, 2, 2], []) == 0

    def test_zero_polygon_area(self) -> None:
        """Test triangles over a zero-area ring give infinity."""
        assert deviation([0, 0, 10, 0, 10, 10, 10, 0], [0, 1, 2]) == math.inf

    def test_missing_triangles(self) -> None:
        """Test an empty triangulation of a real polygon is a full miss."""
        assert deviation(QUAD, []) == 1


class TestDeepSplitting:
    """Self-intersecting rings that need many nested diagonal splits."""

    def test_constant_stack_depth(self) -> None:
        """Test deep splitting runs within a small, fixed call-stack budget."""
        data = zigzag(300)
        limit = sys.getrecursionlimit()
        sys.setrecursionlimit(call_depth() + 60)
        try:
            triangles = tessellate(data)
        finally:
            sys.setrecursionlimit(limit)

        assert triangles
        assert len(triangles) % 3 == 0
        assert all(0 <= i < 600 for i in triangles)

    def test_split_limit_drops_remnant(self) -> None:
        """Test the split depth limit stops splitting with a warning."""
        logger = Mock()
        data = zigzag(300)
        limited = tessellate(data, config=TriangulationConfig(max_split_depth=2), logger=logger)
        full = tessellate(data)

        warnings = [c for c in logger.warning.call_args_list if c.args[0] == "Split depth limit reached, remnant dropped"]
        assert warnings
        assert all(c.kwargs["depth"] == 2 for c in warnings)
        assert len(limited) <= len(full)
