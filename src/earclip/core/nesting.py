"""Contour nesting analysis for turning outlines into polygons with holes.

Glyph outlines and other multi-contour shapes arrive as a flat list of
closed contours. This module builds the containment tree of those
contours and groups them into polygons: every contour at even nesting
depth is an outer ring and its direct children are its holes. Contours
at odd depth that contain further contours (the R inside a circled R)
start a new polygon one level down.
"""

from dataclasses import dataclass

Coord = tuple[float, float]


@dataclass
class ContourNode:
    """A node in the contour nesting tree.

    Attributes:
        index: Index of this contour in the input list
        parent: Index of parent contour (None if root)
        children: Indices of child contours
        depth: Nesting depth (0 for top-level)
    """

    index: int
    parent: int | None
    children: list[int]
    depth: int


def contour_area(points: list[Coord]) -> float:
    """Signed area of a closed contour (positive = counter-clockwise)."""
    n = len(points)
    if n < 3:
        return 0.0

    total = 0.0
    for i in range(n):
        j = (i + 1) % n
        total += points[i][0] * points[j][1]
        total -= points[j][0] * points[i][1]

    return total / 2.0


def point_in_contour(point: Coord, contour: list[Coord]) -> bool:
    """Even-odd ray cast of a point against a closed contour."""
    n = len(contour)
    if n < 3:
        return False

    x, y = point
    inside = False
    j = n - 1

    for i in range(n):
        xi, yi = contour[i]
        xj, yj = contour[j]

        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside

        j = i

    return inside


def build_nesting_tree(contours: list[list[Coord]]) -> dict[int, ContourNode]:
    """Build the containment tree of a set of non-crossing contours.

    The parent of a contour is the smallest contour (by absolute area)
    containing its first point. Degenerate contours (fewer than three
    points) are left out of the tree.

    Args:
        contours: Closed contours as point lists

    Returns:
        Mapping of contour index to ContourNode
    """
    areas = {k: abs(contour_area(c)) for k, c in enumerate(contours) if len(c) >= 3}
    parents: dict[int, int | None] = {}

    for k in areas:
        sample = contours[k][0]
        parent: int | None = None
        for other, other_area in areas.items():
            if other == k or other_area <= areas[k]:
                continue
            if point_in_contour(sample, contours[other]) and (
                parent is None or other_area < areas[parent]
            ):
                parent = other
        parents[k] = parent

    tree = {k: ContourNode(index=k, parent=parents[k], children=[], depth=0) for k in areas}
    for k, parent in parents.items():
        if parent is not None:
            tree[parent].children.append(k)

    for node in tree.values():
        depth = 0
        parent = node.parent
        while parent is not None:
            depth += 1
            parent = tree[parent].parent
        node.depth = depth

    return tree


def group_contours(contours: list[list[Coord]]) -> list[tuple[int, list[int]]]:
    """Group contours into (outer, holes) pairs by nesting depth.

    Args:
        contours: Closed contours as point lists

    Returns:
        List of (outer index, hole indices) in input order of the outers
    """
    tree = build_nesting_tree(contours)
    groups = []
    for k in sorted(tree):
        node = tree[k]
        if node.depth % 2 == 0:
            groups.append((k, sorted(node.children)))
    return groups
