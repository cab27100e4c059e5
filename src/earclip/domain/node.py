"""Ring node type for the ear-clipping kernel.

A polygon is processed as a circular doubly linked list of ``Node`` objects.
The same nodes also form a second, independent doubly linked list ordered
by z-order hash, which is only meaningful after the z-order index has been
built for the current clipping pass.
"""

from typing import Any


class Node:
    """A vertex occurrence in a polygon ring.

    Nodes are mutable and identity-compared; two nodes may share the same
    ``i`` and coordinates when a vertex appears twice in a ring after a
    hole bridge or a diagonal split.

    Attributes:
        i: Offset of the vertex in the flat coordinate array
        x: X coordinate
        y: Y coordinate
        z: Z-order hash, None until computed
        steiner: True for a hole reduced to a single point
        prev: Previous node in the ring
        next: Next node in the ring
        prev_z: Previous node in z-order
        next_z: Next node in z-order
    """

    __slots__ = ("i", "x", "y", "z", "steiner", "prev", "next", "prev_z", "next_z")

    def __init__(self, i: int, x: Any, y: Any) -> None:
        self.i = i
        self.x = x
        self.y = y
        self.z: int | None = None
        self.steiner = False
        self.prev: Node | None = None
        self.next: Node | None = None
        self.prev_z: Node | None = None
        self.next_z: Node | None = None

    def __repr__(self) -> str:
        return (
            f"Node(i={self.i}, x={self.x}, y={self.y}, "
            f"prev={_brief(self.prev)}, next={_brief(self.next)})"
        )


def _brief(node: Node | None) -> str:
    if node is None:
        return "None"
    return f"<i={node.i} ({node.x}, {node.y})>"
