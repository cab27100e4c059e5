"""Ear-clipping engine.

The engine walks a ring cutting off ears until only a triangle is left.
When a full sweep finds no ear it escalates through a fixed sequence of
passes:

1. HASHED: plain ear clipping (z-order accelerated on large polygons)
2. FILTERED: remove degenerate vertices and retry
3. CURED: cut off small local self-intersections and retry
4. SPLIT: split the ring along a valid diagonal and restart on each half

Triangles are appended to a caller-owned list as vertex indices.
"""

from enum import IntEnum
from typing import Any

from earclip.config import TriangulationConfig
from earclip.core.geometry import (
    area,
    equals,
    intersects,
    intersects_polygon,
    locally_inside,
    middle_inside,
    point_in_triangle,
)
from earclip.core.ring import filter_points, remove_node, split_polygon
from earclip.core.zorder import ZOrderBounds, index_curve, z_order
from earclip.domain import Node
from earclip.utils.logging import NULL_LOGGER


class ClipPass(IntEnum):
    """Escalation stage of the ear-clipping loop."""

    HASHED = 0
    FILTERED = 1
    CURED = 2
    SPLIT = 3


class EarClipper:
    """Triangulates a prepared ring by ear clipping.

    One instance serves one triangulation call: it carries the output
    list, the vertex dimensionality and the optional z-order bounds.

    Example:
        clipper = EarClipper(dim=2)
        clipper.clip(outer_node)
        triangles = clipper.triangles
    """

    def __init__(
        self,
        dim: int,
        bounds: ZOrderBounds | None = None,
        config: TriangulationConfig | None = None,
        logger: Any = None,
    ) -> None:
        """Initialize the clipper.

        Args:
            dim: Number of coordinates per vertex in the source array
            bounds: Z-order hashing bounds, None to use plain ear tests
            config: Kernel configuration
            logger: structlog logger for escalation events
        """
        self.dim = dim
        self.bounds = bounds
        self.config = config or TriangulationConfig()
        self.triangles: list[int] = []
        self._tolerance = self.config.tolerance
        self._logger = logger if logger is not None else NULL_LOGGER
        # Rings still to triangulate, with their split depth
        self._pending: list[tuple[Node, int]] = []

    def clip(self, ear: Node | None) -> list[int]:
        """Triangulate the ring containing ``ear``.

        Returns:
            The accumulated triangle list
        """
        if ear is not None:
            self._pending.append((ear, 0))
        self._drain()
        return self.triangles

    def _drain(self) -> None:
        # Halves of a split are pushed second-first, so rings are finished
        # depth-first in the same order a recursive split would visit them.
        while self._pending:
            ear, depth = self._pending.pop()
            self._earcut_linked(ear, depth)

    def _emit(self, a: Node, b: Node, c: Node) -> None:
        self.triangles.append(a.i // self.dim)
        self.triangles.append(b.i // self.dim)
        self.triangles.append(c.i // self.dim)

    def _earcut_linked(self, ear: Node, depth: int) -> None:
        """Clip one ring, escalating through the passes until it is done."""
        # interlink polygon nodes in z-order
        if self.bounds is not None:
            index_curve(ear, self.bounds)

        pass_ = ClipPass.HASHED
        while True:
            stalled = self._slice_ears(ear)
            if stalled is None:
                return

            next_pass = ClipPass(pass_ + 1)
            self._logger.debug(
                "Ear search stalled",
                clip_pass=pass_.name,
                next_pass=next_pass.name,
                vertex=stalled.i // self.dim,
            )

            if next_pass is ClipPass.FILTERED:
                # try filtering points and slicing again
                ear = filter_points(stalled, None, self._tolerance)
            elif next_pass is ClipPass.CURED:
                # try curing all small self-intersections locally
                ear = self._cure_local_intersections(filter_points(stalled, None, self._tolerance))
            else:
                # as a last resort, split the remaining polygon in two
                self._split_earcut(stalled, depth)
                return
            pass_ = next_pass

    def _slice_ears(self, ear: Node) -> Node | None:
        """Cut ears until a triangle is left or a full sweep finds none.

        Returns:
            None when the ring is used up, else the node the sweep stalled at
        """
        stop = ear

        while ear.prev is not ear.next:
            prev = ear.prev
            next_ = ear.next

            if self._is_ear(ear):
                self._emit(prev, ear, next_)
                remove_node(ear)

                # skipping the next vertex leads to less sliver triangles
                ear = next_.next
                stop = next_.next
                continue

            ear = next_

            if ear is stop:
                return ear

        return None

    def _is_ear(self, ear: Node) -> bool:
        if self.bounds is not None:
            return is_ear_hashed(ear, self.bounds)
        return is_ear(ear)

    def _cure_local_intersections(self, start: Node) -> Node:
        """Cut off triangles at small self-intersections.

        Where the edges a-p and p.next-b cross, the triangle a, p, b is
        emitted and p and p.next are removed.
        """
        p = start
        while True:
            a = p.prev
            b = p.next.next

            if (
                not equals(a, b, self._tolerance)
                and intersects(a, p, p.next, b, self._tolerance)
                and locally_inside(a, b)
                and locally_inside(b, a)
            ):
                self._emit(a, p, b)

                # remove two nodes involved
                remove_node(p)
                remove_node(p.next)

                p = start = b

            p = p.next
            if p is start:
                break

        return filter_points(p, None, self._tolerance)

    def _split_earcut(self, start: Node, depth: int) -> None:
        """Split the ring along a valid diagonal and queue both halves.

        The halves are triangulated by the pending-ring loop, one split level
        deeper, so arbitrarily deep splitting never grows the call stack.
        """
        if depth >= self.config.max_split_depth:
            self._logger.warning(
                "Split depth limit reached, remnant dropped",
                depth=depth,
                vertex=start.i // self.dim,
            )
            return

        a = start
        while True:
            b = a.next.next
            while b is not a.prev:
                if a.i != b.i and is_valid_diagonal(a, b, self._tolerance):
                    c = split_polygon(a, b)

                    # filter collinear points around the cuts
                    a = filter_points(a, a.next, self._tolerance)
                    c = filter_points(c, c.next, self._tolerance)

                    self._pending.append((c, depth + 1))
                    self._pending.append((a, depth + 1))
                    return
                b = b.next
            a = a.next
            if a is start:
                break

        self._logger.debug("No valid diagonal found", vertex=start.i // self.dim)


def is_ear(ear: Node) -> bool:
    """Check whether a ring node is a valid ear.

    The corner must be convex and no other reflex-or-flat vertex of the ring
    may lie inside the candidate triangle.
    """
    a = ear.prev
    b = ear
    c = ear.next

    if area(a, b, c) >= 0:
        return False  # reflex, can't be an ear

    # now make sure we don't have other points inside the potential ear
    p = c.next
    while p is not a:
        if (
            point_in_triangle(a.x, a.y, b.x, b.y, c.x, c.y, p.x, p.y)
            and area(p.prev, p, p.next) >= 0
        ):
            return False
        p = p.next

    return True


def is_ear_hashed(ear: Node, bounds: ZOrderBounds) -> bool:
    """Ear test restricted to nodes inside the z-range of the triangle's bbox."""
    a = ear.prev
    b = ear
    c = ear.next

    if area(a, b, c) >= 0:
        return False  # reflex, can't be an ear

    # triangle bbox
    min_tx = min(a.x, b.x, c.x)
    min_ty = min(a.y, b.y, c.y)
    max_tx = max(a.x, b.x, c.x)
    max_ty = max(a.y, b.y, c.y)

    # z-order range for the current triangle bbox
    min_z = z_order(min_tx, min_ty, bounds.min_x, bounds.min_y, bounds.inv_size)
    max_z = z_order(max_tx, max_ty, bounds.min_x, bounds.min_y, bounds.inv_size)

    def blocks(n: Node) -> bool:
        return (
            n is not a
            and n is not c
            and point_in_triangle(a.x, a.y, b.x, b.y, c.x, c.y, n.x, n.y)
            and area(n.prev, n, n.next) >= 0
        )

    p = ear.prev_z
    n = ear.next_z

    # look for points inside the triangle in both directions
    while p is not None and p.z >= min_z and n is not None and n.z <= max_z:
        if blocks(p):
            return False
        p = p.prev_z

        if blocks(n):
            return False
        n = n.next_z

    # look for remaining points in decreasing z-order
    while p is not None and p.z >= min_z:
        if blocks(p):
            return False
        p = p.prev_z

    # look for remaining points in increasing z-order
    while n is not None and n.z <= max_z:
        if blocks(n):
            return False
        n = n.next_z

    return True


def is_valid_diagonal(a: Node, b: Node, tolerance: float = 0.0) -> bool:
    """Check if a diagonal between two ring nodes is valid.

    It must not follow an existing edge, must not cross the ring, must be
    locally visible from both ends with its midpoint inside the ring, and
    must not create opposite-facing zero-area sectors. A zero-length
    diagonal between two convex corners is accepted as a special case.
    """
    if a.next.i == b.i or a.prev.i == b.i or intersects_polygon(a, b, tolerance):
        return False

    if (
        locally_inside(a, b)
        and locally_inside(b, a)
        and middle_inside(a, b)
        and (area(a.prev, a, b.prev) != 0 or area(a, b.prev, b) != 0)
    ):
        return True

    # special zero-length case
    return (
        equals(a, b, tolerance)
        and area(a.prev, a, a.next) > 0
        and area(b.prev, b, b.next) > 0
    )
