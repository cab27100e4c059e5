"""Vertex ring construction and mutation.

A ring is a circular doubly linked list of ``Node`` objects built from a
range of a flat coordinate array. Rings have no canonical head: every
function takes an arbitrary entry node and returns one.

Key functions:
- linked_list: Build a ring with a requested winding
- insert_node / remove_node: Splice single nodes in and out
- filter_points: Remove duplicate and collinear vertices
- split_polygon: Cut a ring (or join two rings) along a diagonal
"""

from collections.abc import Iterator, Sequence
from typing import Any

from earclip.core.geometry import area, equals, near_equal, signed_area
from earclip.domain import Node


def linked_list(
    data: Sequence[Any],
    start: int,
    end: int,
    dim: int,
    clockwise: bool,
    tolerance: float = 0.0,
) -> Node | None:
    """Create a ring from array offsets [start, end) with the given winding.

    Vertices are inserted in array order when the range already has the
    requested winding, and in reverse order otherwise. A closing vertex that
    repeats the first one is dropped.

    Args:
        data: Flat coordinate array
        start: Array offset of the first vertex
        end: Array offset one past the last vertex
        dim: Number of coordinates per vertex
        clockwise: True for the outer ring, False for holes
        tolerance: Coordinate equality tolerance

    Returns:
        The last inserted node, or None for an empty range
    """
    last: Node | None = None

    if clockwise == (signed_area(data, start, end, dim) > 0):
        for i in range(start, end, dim):
            last = insert_node(i, data[i], data[i + 1], last)
    else:
        for i in range(end - dim, start - 1, -dim):
            last = insert_node(i, data[i], data[i + 1], last)

    if last is not None and equals(last, last.next, tolerance):
        remove_node(last)
        last = last.next

    return last


def insert_node(i: int, x: Any, y: Any, last: Node | None) -> Node:
    """Create a node and link it after ``last`` (or as a one-node ring)."""
    p = Node(i, x, y)

    if last is None:
        p.prev = p
        p.next = p
    else:
        p.next = last.next
        p.prev = last
        last.next.prev = p
        last.next = p

    return p


def remove_node(p: Node) -> None:
    """Unlink a node from its ring and from the z-order list.

    The removed node keeps its own links so callers can continue walking
    from it.
    """
    p.next.prev = p.prev
    p.prev.next = p.next

    if p.prev_z is not None:
        p.prev_z.next_z = p.next_z
    if p.next_z is not None:
        p.next_z.prev_z = p.prev_z


def filter_points(start: Node | None, end: Node | None = None, tolerance: float = 0.0) -> Node | None:
    """Eliminate coincident and collinear vertices.

    Scans from ``start`` until ``end`` (defaults to ``start``) is reached
    without a removal. After each removal the scan resumes at the removed
    node's predecessor, which also becomes the new end marker. Steiner
    points are never removed, whether duplicated or collinear: the test is
    ``not steiner and (duplicate or collinear)``. The looser grouping
    ``(not steiner and duplicate) or collinear`` would delete a bridged
    one-point hole, whose neighbours are the coincident bridge ends.

    Args:
        start: Node to start scanning from
        end: End marker, defaults to start
        tolerance: Coordinate equality tolerance

    Returns:
        The end marker, or None when start is None
    """
    if start is None:
        return start
    if end is None:
        end = start

    p = start
    while True:
        again = False

        if not p.steiner and (equals(p, p.next, tolerance) or area(p.prev, p, p.next) == 0):
            remove_node(p)
            p = end = p.prev
            if p is p.next:
                break
            again = True
        else:
            p = p.next

        if not again and p is end:
            break

    return end


def split_polygon(a: Node, b: Node) -> Node:
    """Link a to b with a diagonal, duplicating both endpoints.

    If a and b belong to the same ring the ring is split in two; if b belongs
    to a separate ring (a hole) the two rings are merged into one with a
    bridge edge in each direction.

    Args:
        a: First endpoint, keeps the a -> b side
        b: Second endpoint

    Returns:
        The duplicate of b, which lies on the other side of the cut
    """
    a2 = Node(a.i, a.x, a.y)
    b2 = Node(b.i, b.x, b.y)
    an = a.next
    bp = b.prev

    a.next = b
    b.prev = a

    a2.next = an
    an.prev = a2

    b2.next = a2
    a2.prev = b2

    bp.next = b2
    b2.prev = bp

    return b2


def get_leftmost(start: Node, tolerance: float = 0.0) -> Node:
    """Find the leftmost node of a ring, the lowest one on ties."""
    p = start
    leftmost = start
    while True:
        if p.x < leftmost.x or (near_equal(p.x, leftmost.x, tolerance) and p.y < leftmost.y):
            leftmost = p
        p = p.next
        if p is start:
            return leftmost


def iter_ring(start: Node) -> Iterator[Node]:
    """Yield the nodes of a ring once, starting at ``start``."""
    p = start
    while True:
        yield p
        p = p.next
        if p is start:
            return


def ring_size(start: Node | None) -> int:
    """Count the nodes of a ring."""
    if start is None:
        return 0
    return sum(1 for _ in iter_ring(start))
