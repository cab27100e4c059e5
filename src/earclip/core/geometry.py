"""Geometric predicates for the ear-clipping kernel.

This module provides the pure functions the kernel decides with:
- Signed area of a node triple and of a flat coordinate range
- Point-in-triangle testing
- Segment intersection (general and collinear cases)
- Local visibility of a diagonal at a ring vertex
- Centralized near-equality of coordinates

All functions are generic over the coordinate type: any ordered numeric
type supporting +, -, *, / and abs() works (int, float, Fraction, ...).
Sign conventions follow the ring orientation produced by ``linked_list``:
a convex corner of the outer ring has a negative ``area``.
"""

from collections.abc import Sequence
from typing import Any

from earclip.domain import Node


def near_equal(a: Any, b: Any, tolerance: float = 0.0) -> bool:
    """Compare two coordinates with an absolute tolerance.

    With the default tolerance of zero this is exact equality.

    Args:
        a: First value
        b: Second value
        tolerance: Maximum absolute difference still considered equal

    Returns:
        True if the values are equal within tolerance
    """
    return a == b or abs(a - b) <= tolerance


def equals(p1: Node | None, p2: Node | None, tolerance: float = 0.0) -> bool:
    """Check whether two nodes sit at the same coordinates."""
    if p1 is None or p2 is None:
        return False
    return near_equal(p1.x, p2.x, tolerance) and near_equal(p1.y, p2.y, tolerance)


def area(p: Node, q: Node, r: Node) -> Any:
    """Signed area (doubled) of the triangle p, q, r.

    Negative for a convex turn in the kernel's ring orientation, zero for
    collinear points.
    """
    return (q.y - p.y) * (r.x - q.x) - (q.x - p.x) * (r.y - q.y)


def signed_area(data: Sequence[Any], start: int, end: int, dim: int) -> Any:
    """Signed area (doubled) of a ring stored in a flat coordinate array.

    The ring spans array offsets [start, end) with a stride of ``dim`` and
    is treated as closed.

    Args:
        data: Flat coordinate array
        start: Array offset of the first vertex
        end: Array offset one past the last vertex
        dim: Number of coordinates per vertex

    Returns:
        Sum of (x[prev] - x[cur]) * (y[cur] + y[prev]) over the ring
    """
    total = 0
    j = end - dim
    for i in range(start, end, dim):
        total += (data[j] - data[i]) * (data[i + 1] + data[j + 1])
        j = i
    return total


def point_in_triangle(
    ax: Any, ay: Any, bx: Any, by: Any, cx: Any, cy: Any, px: Any, py: Any
) -> bool:
    """Check if point p lies inside or on the boundary of triangle a, b, c."""
    return (
        (cx - px) * (ay - py) - (ax - px) * (cy - py) >= 0
        and (ax - px) * (by - py) - (bx - px) * (ay - py) >= 0
        and (bx - px) * (cy - py) - (cx - px) * (by - py) >= 0
    )


def sign(num: Any) -> int:
    """Return -1, 0 or 1 according to the sign of num."""
    if num > 0:
        return 1
    if num < 0:
        return -1
    return 0


def on_segment(p: Node, q: Node, r: Node) -> bool:
    """For collinear p, q, r, check if q lies on segment pr."""
    return (
        min(p.x, r.x) <= q.x <= max(p.x, r.x)
        and min(p.y, r.y) <= q.y <= max(p.y, r.y)
    )


def intersects(p1: Node, q1: Node, p2: Node, q2: Node, tolerance: float = 0.0) -> bool:
    """Check if segments p1q1 and p2q2 intersect.

    Touching endpoints and collinear overlaps count as intersections, as do
    two segments sharing both endpoints.
    """
    if (equals(p1, p2, tolerance) and equals(q1, q2, tolerance)) or (
        equals(p1, q2, tolerance) and equals(p2, q1, tolerance)
    ):
        return True

    o1 = sign(area(p1, q1, p2))
    o2 = sign(area(p1, q1, q2))
    o3 = sign(area(p2, q2, p1))
    o4 = sign(area(p2, q2, q1))

    if o1 != o2 and o3 != o4:
        return True

    # Collinear cases: an endpoint of one segment lies on the other
    if o1 == 0 and on_segment(p1, p2, q1):
        return True
    if o2 == 0 and on_segment(p1, q2, q1):
        return True
    if o3 == 0 and on_segment(p2, p1, q2):
        return True
    if o4 == 0 and on_segment(p2, q1, q2):
        return True

    return False


def intersects_polygon(a: Node, b: Node, tolerance: float = 0.0) -> bool:
    """Check if the diagonal ab crosses any ring edge not incident to a or b."""
    p = a
    while True:
        q = p.next
        if (
            p.i != a.i
            and q.i != a.i
            and p.i != b.i
            and q.i != b.i
            and intersects(p, q, a, b, tolerance)
        ):
            return True
        p = q
        if p is a:
            return False


def locally_inside(a: Node, b: Node) -> bool:
    """Check if the diagonal ab starts into the interior angle at a."""
    if area(a.prev, a, a.next) < 0:
        return area(a, b, a.next) >= 0 and area(a, a.prev, b) >= 0
    return area(a, b, a.prev) < 0 or area(a, a.next, b) < 0


def middle_inside(a: Node, b: Node) -> bool:
    """Check if the midpoint of ab lies inside the ring containing a.

    Uses an even-odd ray cast to the right of the midpoint.
    """
    px = (a.x + b.x) / 2
    py = (a.y + b.y) / 2
    inside = False
    p = a
    while True:
        q = p.next
        if (p.y > py) != (q.y > py) and px < (q.x - p.x) * (py - p.y) / (q.y - p.y) + p.x:
            inside = not inside
        p = q
        if p is a:
            return inside


def sector_contains_sector(m: Node, p: Node) -> bool:
    """Check if the sector at m contains the sector at p (same coordinates)."""
    return area(m.prev, m, p.prev) < 0 and area(p.next, m, m.next) < 0
