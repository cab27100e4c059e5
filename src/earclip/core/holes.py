"""Hole elimination by bridging holes into the outer ring.

Every hole ring is connected to the outer ring with a pair of coincident
bridge edges, turning a polygon with holes into a single (weakly simple)
ring the ear clipper can consume. Bridges are found with David Eberly's
ray-casting method ("Triangulation by Ear Clipping", 2002).
"""

import math
from collections.abc import Sequence
from typing import Any

from earclip.core.geometry import (
    locally_inside,
    near_equal,
    point_in_triangle,
    sector_contains_sector,
)
from earclip.core.ring import filter_points, get_leftmost, linked_list, split_polygon
from earclip.domain import Node


def eliminate_holes(
    data: Sequence[Any],
    hole_indices: Sequence[int],
    outer_node: Node,
    dim: int,
    tolerance: float = 0.0,
    logger: Any = None,
) -> Node:
    """Link every hole into the outer ring.

    Holes are processed from left to right by their leftmost vertex. The
    sort is stable, so holes whose leftmost x coincide keep their input
    order. A hole for which no bridge exists is left out of the result.

    Args:
        data: Flat coordinate array
        hole_indices: Starting vertex index of each hole
        outer_node: Any node of the outer ring
        dim: Number of coordinates per vertex
        tolerance: Coordinate equality tolerance
        logger: Optional structlog logger for dropped holes

    Returns:
        A node of the merged ring
    """
    queue: list[Node] = []
    count = len(hole_indices)

    for k in range(count):
        start = hole_indices[k] * dim
        end = hole_indices[k + 1] * dim if k < count - 1 else len(data)
        ring = linked_list(data, start, end, dim, False, tolerance)
        if ring is None:
            continue
        if ring is ring.next:
            ring.steiner = True
        queue.append(get_leftmost(ring, tolerance))

    queue.sort(key=lambda node: node.x)

    for hole in queue:
        if not eliminate_hole(hole, outer_node, tolerance) and logger is not None:
            logger.debug("Hole dropped, no bridge found", vertex=hole.i // dim)
        outer_node = filter_points(outer_node, outer_node.next, tolerance)

    return outer_node


def eliminate_hole(hole: Node, outer_node: Node, tolerance: float = 0.0) -> bool:
    """Bridge a single hole into the outer ring.

    Args:
        hole: Leftmost node of the hole ring
        outer_node: Any node of the outer ring
        tolerance: Coordinate equality tolerance

    Returns:
        True if a bridge was found and the hole was spliced in
    """
    bridge = find_hole_bridge(hole, outer_node, tolerance)
    if bridge is None:
        return False

    bridge_reverse = split_polygon(bridge, hole)

    # filter collinear points around the cuts
    filter_points(bridge, bridge.next, tolerance)
    filter_points(bridge_reverse, bridge_reverse.next, tolerance)
    return True


def find_hole_bridge(hole: Node, outer_node: Node, tolerance: float = 0.0) -> Node | None:
    """Find the outer ring vertex to connect a hole's leftmost vertex to.

    A ray is cast from the hole point to the left. The closest outer edge it
    hits gives a provisional target, the endpoint with the lesser x. Outer
    vertices inside the triangle formed by the hole point, the hit point and
    that endpoint are then candidates; the one with the smallest angle to
    the ray wins.

    Args:
        hole: Leftmost node of the hole ring
        outer_node: Any node of the outer ring
        tolerance: Coordinate equality tolerance

    Returns:
        The bridge target on the outer ring, or None if none is visible
    """
    p = outer_node
    hx = hole.x
    hy = hole.y
    qx = -math.inf
    m: Node | None = None

    # find a segment intersected by a ray from the hole's leftmost point to the left
    while True:
        q = p.next
        if p.y >= hy >= q.y and q.y != p.y:
            x = p.x + (hy - p.y) * (q.x - p.x) / (q.y - p.y)
            if hx >= x > qx:
                qx = x
                if near_equal(x, hx, tolerance):
                    if near_equal(hy, p.y, tolerance):
                        return p
                    if near_equal(hy, q.y, tolerance):
                        return q
                m = p if p.x < q.x else q
        p = q
        if p is outer_node:
            break

    if m is None:
        return None

    if near_equal(hx, qx, tolerance):
        # hole touches outer segment; pick leftmost endpoint
        return m

    stop = m
    mx = m.x
    my = m.y
    tan_min = math.inf

    p = m
    while True:
        if (
            hx >= p.x >= mx
            and p.x != hx
            and point_in_triangle(
                hx if hy < my else qx, hy, mx, my, qx if hy < my else hx, hy, p.x, p.y
            )
        ):
            tan = abs(hy - p.y) / (hx - p.x)

            if locally_inside(p, hole) and (
                tan < tan_min
                or (
                    near_equal(tan, tan_min, tolerance)
                    and (
                        p.x > m.x
                        or (near_equal(p.x, m.x, tolerance) and sector_contains_sector(m, p))
                    )
                )
            ):
                m = p
                tan_min = tan

        p = p.next
        if p is stop:
            return m
