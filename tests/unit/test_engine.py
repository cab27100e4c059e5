"""Unit tests for the ear-clipping engine."""

from unittest.mock import Mock

import pytest

from earclip.config import TriangulationConfig
from earclip.core.engine import ClipPass, EarClipper, is_ear, is_ear_hashed, is_valid_diagonal
from earclip.core.ring import insert_node, iter_ring, linked_list, ring_size
from earclip.core.zorder import ZOrderBounds, index_curve

SQUARE = [0, 0, 10, 0, 10, 10, 0, 10]
L_SHAPE = [0, 0, 10, 0, 10, 5, 5, 5, 5, 15, 0, 15]


def ring_by_vertex(data: list, dim: int = 2) -> dict:
    start = linked_list(data, 0, len(data), dim, True)
    return {n.i // dim: n for n in iter_ring(start)}


class TestClipPass:
    """Tests for ClipPass ordering."""

    def test_escalation_order(self) -> None:
        """Test passes escalate in a fixed order."""
        assert [p.value for p in ClipPass] == [0, 1, 2, 3]
        assert ClipPass(ClipPass.HASHED + 1) is ClipPass.FILTERED
        assert ClipPass(ClipPass.CURED + 1) is ClipPass.SPLIT

    def test_no_pass_after_split(self) -> None:
        """Test there is nothing to escalate to after SPLIT."""
        with pytest.raises(ValueError):
            ClipPass(ClipPass.SPLIT + 1)


class TestIsEar:
    """Tests for is_ear and is_ear_hashed."""

    def test_square_corners_are_ears(self) -> None:
        """Test every corner of a square is an ear."""
        nodes = ring_by_vertex(SQUARE)
        assert all(is_ear(n) for n in nodes.values())

    def test_reflex_vertex(self) -> None:
        """Test the inner corner of an L-shape is not an ear."""
        nodes = ring_by_vertex(L_SHAPE)
        assert not is_ear(nodes[3])

    def test_convex_but_blocked(self) -> None:
        """Test a convex corner whose triangle contains the reflex vertex."""
        nodes = ring_by_vertex(L_SHAPE)
        assert not is_ear(nodes[0])
        assert is_ear(nodes[1])

    def test_hashed_matches_plain(self) -> None:
        """Test the z-order ear test agrees with the plain one."""
        nodes = ring_by_vertex(L_SHAPE)
        bounds = ZOrderBounds.from_data(L_SHAPE, len(L_SHAPE), 2)
        index_curve(nodes[0], bounds)
        for k, n in nodes.items():
            assert is_ear_hashed(n, bounds) == is_ear(n), k


class TestIsValidDiagonal:
    """Tests for is_valid_diagonal."""

    def test_square_diagonal(self) -> None:
        """Test the diagonal of a square is valid."""
        nodes = ring_by_vertex(SQUARE)
        assert is_valid_diagonal(nodes[0], nodes[2])

    def test_edge_is_not_a_diagonal(self) -> None:
        """Test adjacent vertices cannot be joined."""
        nodes = ring_by_vertex(SQUARE)
        assert not is_valid_diagonal(nodes[0], nodes[1])

    def test_diagonal_outside_polygon(self) -> None:
        """Test a chord across the L-shape's notch is rejected."""
        nodes = ring_by_vertex(L_SHAPE)
        assert not is_valid_diagonal(nodes[2], nodes[4])


class TestEarClipper:
    """Tests for EarClipper."""

    def test_clip_square(self) -> None:
        """Test a square yields two triangles covering all vertices."""
        clipper = EarClipper(dim=2)
        triangles = clipper.clip(linked_list(SQUARE, 0, len(SQUARE), 2, True))
        assert len(triangles) == 6
        assert set(triangles) == {0, 1, 2, 3}
        assert triangles is clipper.triangles

    def test_clip_none(self) -> None:
        """Test clipping an absent ring emits nothing."""
        assert EarClipper(dim=2).clip(None) == []

    def test_indices_divided_by_dim(self) -> None:
        """Test emitted indices are vertex numbers, not array offsets."""
        data = [0, 0, 7, 10, 0, 7, 10, 10, 7, 0, 10, 7]
        clipper = EarClipper(dim=3)
        triangles = clipper.clip(linked_list(data, 0, len(data), 3, True))
        assert sorted(set(triangles)) == [0, 1, 2, 3]

    def test_split_depth_limit(self) -> None:
        """Test the remnant is dropped with a warning past the split limit."""
        logger = Mock()
        config = TriangulationConfig(max_split_depth=3)
        clipper = EarClipper(dim=2, config=config, logger=logger)
        start = linked_list(SQUARE, 0, len(SQUARE), 2, True)

        clipper._split_earcut(start, depth=3)

        assert clipper.triangles == []
        logger.warning.assert_called_once()
        assert logger.warning.call_args.kwargs["depth"] == 3

    def test_split_queues_halves(self) -> None:
        """Test a split queues both halves one level deeper instead of recursing."""
        clipper = EarClipper(dim=2)
        start = linked_list(SQUARE, 0, len(SQUARE), 2, True)
        clipper._split_earcut(start, depth=4)

        assert clipper.triangles == []
        assert [depth for _, depth in clipper._pending] == [5, 5]
        assert sorted(ring_size(ring) for ring, _ in clipper._pending) == [3, 3]

    def test_split_below_limit(self) -> None:
        """Test splitting a ring triangulates both halves."""
        clipper = EarClipper(dim=2)
        start = linked_list(SQUARE, 0, len(SQUARE), 2, True)
        clipper._split_earcut(start, depth=0)
        clipper._drain()
        assert len(clipper.triangles) == 6
        assert set(clipper.triangles) == {0, 1, 2, 3}

    def test_stall_logged(self) -> None:
        """Test a self-intersecting ring escalates past the first pass."""
        logger = Mock()
        data = [0, 0, 10, 10, 10, 0, 0, 10]
        clipper = EarClipper(dim=2, logger=logger)
        triangles = clipper.clip(linked_list(data, 0, len(data), 2, True))
        assert len(triangles) % 3 == 0
        assert all(0 <= i < 4 for i in triangles)
        stalls = [c for c in logger.debug.call_args_list if c.args[0] == "Ear search stalled"]
        assert stalls
        assert stalls[0].kwargs["clip_pass"] == "HASHED"


def build_ring(points: list[tuple[int, int]]) -> list:
    """Ring in the given order, vertex k at array offset 2k; returns its nodes."""
    last = None
    nodes = []
    for k, (x, y) in enumerate(points):
        last = insert_node(2 * k, x, y, last)
        nodes.append(last)
    return nodes


class TestCureLocalIntersections:
    """Tests for the CURED pass."""

    # Rectangle whose bottom edge has one swapped vertex pair: edge 0-1
    # crosses edge 2-3.
    TWISTED = [(0, 0), (20, -2), (10, -2), (30, 0), (30, 10), (0, 10)]

    def test_crossing_cut_off(self) -> None:
        """Test a local crossing emits one triangle and drops two vertices."""
        nodes = build_ring(self.TWISTED)
        clipper = EarClipper(dim=2)

        remaining = clipper._cure_local_intersections(nodes[0])

        assert clipper.triangles == [0, 1, 3]
        assert ring_size(remaining) == 4
        assert {n.i // 2 for n in iter_ring(remaining)} == {0, 3, 4, 5}
        for n in iter_ring(remaining):
            assert n.next.prev is n
            assert n.prev.next is n

    def test_no_crossing(self) -> None:
        """Test a simple ring is left alone."""
        nodes = build_ring([(0, 0), (30, 0), (30, 10), (0, 10)])
        clipper = EarClipper(dim=2)

        remaining = clipper._cure_local_intersections(nodes[0])

        assert clipper.triangles == []
        assert ring_size(remaining) == 4
