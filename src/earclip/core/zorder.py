"""Z-order spatial index over a vertex ring.

Each node gets a Morton code computed from its coordinates scaled into a
15-bit integer grid. The nodes are then threaded into a second doubly
linked list (``prev_z``/``next_z``) sorted by that code, which lets the
hashed ear test restrict its search to the z-range of an ear's bounding
box.
"""

from dataclasses import dataclass
from typing import Any

from earclip.domain import Node

# Coordinates are mapped into [0, GRID_MAX] before interleaving
GRID_MAX = 32767


@dataclass(frozen=True, slots=True)
class ZOrderBounds:
    """Bounding box origin and inverse size used to hash coordinates.

    Attributes:
        min_x: Minimum x of the outer ring
        min_y: Minimum y of the outer ring
        inv_size: 1 / max(width, height), or 0 for a zero-size box
    """

    min_x: Any
    min_y: Any
    inv_size: Any

    @classmethod
    def from_data(cls, data: Any, outer_len: int, dim: int) -> "ZOrderBounds":
        """Compute bounds from the outer ring of a flat coordinate array.

        Args:
            data: Flat coordinate array
            outer_len: Array length of the outer ring
            dim: Number of coordinates per vertex

        Returns:
            ZOrderBounds for hashing nodes of this polygon
        """
        min_x = max_x = data[0]
        min_y = max_y = data[1]

        for i in range(dim, outer_len, dim):
            x = data[i]
            y = data[i + 1]
            if x < min_x:
                min_x = x
            if y < min_y:
                min_y = y
            if x > max_x:
                max_x = x
            if y > max_y:
                max_y = y

        size = max(max_x - min_x, max_y - min_y)
        inv_size = 1 / size if size != 0 else 0
        return cls(min_x=min_x, min_y=min_y, inv_size=inv_size)


def z_order(x: Any, y: Any, min_x: Any, min_y: Any, inv_size: Any) -> int:
    """Interleave the bits of the grid coordinates of (x, y).

    Args:
        x: X coordinate
        y: Y coordinate
        min_x: Grid origin x
        min_y: Grid origin y
        inv_size: Inverse of the longer side of the bounding box

    Returns:
        Morton code of the point
    """
    lx = int(float(x - min_x) * GRID_MAX * float(inv_size))
    ly = int(float(y - min_y) * GRID_MAX * float(inv_size))

    lx = (lx | (lx << 8)) & 0x00FF00FF
    lx = (lx | (lx << 4)) & 0x0F0F0F0F
    lx = (lx | (lx << 2)) & 0x33333333
    lx = (lx | (lx << 1)) & 0x55555555

    ly = (ly | (ly << 8)) & 0x00FF00FF
    ly = (ly | (ly << 4)) & 0x0F0F0F0F
    ly = (ly | (ly << 2)) & 0x33333333
    ly = (ly | (ly << 1)) & 0x55555555

    return lx | (ly << 1)


def index_curve(start: Node, bounds: ZOrderBounds) -> None:
    """Hash every node of the ring and link them in z-order.

    Nodes that already carry a hash keep it, so re-indexing the halves of
    a split ring is cheap.

    Args:
        start: Any node of the ring
        bounds: Hashing bounds of the polygon
    """
    p = start
    while True:
        if p.z is None:
            p.z = z_order(p.x, p.y, bounds.min_x, bounds.min_y, bounds.inv_size)
        p.prev_z = p.prev
        p.next_z = p.next
        p = p.next
        if p is start:
            break

    p.prev_z.next_z = None
    p.prev_z = None

    sort_linked(p)


def sort_linked(head: Node | None) -> Node | None:
    """Sort a z-list by hash with a bottom-up linked-list merge sort.

    Simon Tatham's algorithm: merge runs of size 1, 2, 4, ... until a pass
    performs a single merge. Equal keys keep their relative order.

    Args:
        head: First node of a ``next_z``-linked list

    Returns:
        The new head of the sorted list
    """
    in_size = 1

    while True:
        p = head
        head = None
        tail: Node | None = None
        num_merges = 0

        while p is not None:
            num_merges += 1
            q = p
            p_size = 0
            for _ in range(in_size):
                p_size += 1
                q = q.next_z
                if q is None:
                    break

            q_size = in_size

            while p_size > 0 or (q_size > 0 and q is not None):
                if p_size == 0:
                    e = q
                    q = q.next_z
                    q_size -= 1
                elif q_size == 0 or q is None:
                    e = p
                    p = p.next_z
                    p_size -= 1
                elif p.z <= q.z:
                    e = p
                    p = p.next_z
                    p_size -= 1
                else:
                    e = q
                    q = q.next_z
                    q_size -= 1

                if tail is not None:
                    tail.next_z = e
                else:
                    head = e

                e.prev_z = tail
                tail = e

            p = q

        tail.next_z = None
        in_size *= 2

        if num_merges <= 1:
            return head
