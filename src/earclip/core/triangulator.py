"""Public triangulation entry points.

Key functions:
- tessellate: Triangulate a flat coordinate array with optional holes
- deviation: Relative area error of a triangulation, for verification
"""

import math
import numbers
from collections.abc import Sequence
from typing import Any

from earclip.config import TriangulationConfig
from earclip.core.engine import EarClipper
from earclip.core.geometry import signed_area
from earclip.core.holes import eliminate_holes
from earclip.core.ring import linked_list
from earclip.core.zorder import ZOrderBounds
from earclip.exceptions import InvalidInputError


def tessellate(
    data: Sequence[Any] | None,
    hole_indices: Sequence[int] | None = None,
    dim: int = 2,
    config: TriangulationConfig | None = None,
    logger: Any = None,
) -> list[int]:
    """Triangulate a polygon given as a flat coordinate array.

    Args:
        data: Flat coordinates [x0, y0, (z0...), x1, y1, ...]; only the
            first two coordinates of each vertex are used
        hole_indices: Starting vertex index of each hole, ascending; the
            outer ring spans the vertices before the first hole
        dim: Number of coordinates per vertex
        config: Kernel configuration (defaults to TriangulationConfig())
        logger: structlog logger receiving escalation events

    Returns:
        Vertex indices, three per triangle. Empty for absent or fully
        degenerate input.

    Raises:
        InvalidInputError: If dim, the array length or hole indices are
            inconsistent

    Examples:
        >>> tessellate([0, 0, 0, 50, 50, 0])
        [1, 0, 2]
    """
    if data is None or len(data) == 0:
        return []

    validate_input(data, hole_indices, dim)
    config = config or TriangulationConfig()
    tolerance = config.tolerance

    hole_indices = [int(index) for index in hole_indices] if hole_indices is not None else []
    has_holes = len(hole_indices) > 0
    outer_len = hole_indices[0] * dim if has_holes else len(data)

    outer_node = linked_list(data, 0, outer_len, dim, True, tolerance)
    if outer_node is None or outer_node.next is outer_node.prev:
        return []

    if has_holes:
        outer_node = eliminate_holes(data, hole_indices, outer_node, dim, tolerance, logger)

    # if the shape is not too simple, use the z-order curve hash
    bounds = None
    if len(data) > config.hash_threshold * dim:
        bounds = ZOrderBounds.from_data(data, outer_len, dim)

    clipper = EarClipper(dim, bounds=bounds, config=config, logger=logger)
    return clipper.clip(outer_node)


def deviation(
    data: Sequence[Any] | None,
    triangles: Sequence[int],
    hole_indices: Sequence[int] | None = None,
    dim: int = 2,
) -> Any:
    """Relative difference between polygon area and triangulated area.

    Args:
        data: Flat coordinate array used for triangulation
        triangles: Vertex indices, three per triangle
        hole_indices: Starting vertex index of each hole
        dim: Number of coordinates per vertex

    Returns:
        |covered - reference| / reference, 0 when both areas are zero,
        infinity when only the reference area is zero, and -1 when data
        is None
    """
    if data is None:
        return -1

    has_holes = hole_indices is not None and len(hole_indices) > 0
    outer_len = hole_indices[0] * dim if has_holes else len(data)

    polygon_area = abs(signed_area(data, 0, outer_len, dim))
    if has_holes:
        count = len(hole_indices)
        for k in range(count):
            start = hole_indices[k] * dim
            end = hole_indices[k + 1] * dim if k < count - 1 else len(data)
            polygon_area -= abs(signed_area(data, start, end, dim))

    triangles_area = 0
    for k in range(0, len(triangles), 3):
        a = triangles[k] * dim
        b = triangles[k + 1] * dim
        c = triangles[k + 2] * dim
        triangles_area += abs(
            (data[a] - data[c]) * (data[b + 1] - data[a + 1])
            - (data[a] - data[b]) * (data[c + 1] - data[a + 1])
        )

    if polygon_area == 0 and triangles_area == 0:
        return 0
    if polygon_area == 0:
        return math.inf
    return abs((triangles_area - polygon_area) / polygon_area)


def validate_input(data: Sequence[Any], hole_indices: Sequence[int] | None, dim: int) -> None:
    """Check the caller-controlled preconditions of ``tessellate``.

    Raises:
        InvalidInputError: If any precondition is violated
    """
    if isinstance(dim, bool) or not isinstance(dim, numbers.Integral) or dim < 2:
        raise InvalidInputError(f"dim must be an integer >= 2, got {dim!r}")

    if len(data) % dim != 0:
        raise InvalidInputError(
            f"coordinate array length {len(data)} is not a multiple of dim={dim}"
        )

    if hole_indices is None or len(hole_indices) == 0:
        return

    vertex_count = len(data) // dim
    previous = 0
    for index in hole_indices:
        if isinstance(index, bool) or not isinstance(index, numbers.Integral):
            raise InvalidInputError(f"hole index {index!r} is not an integer")
        if not 0 < index < vertex_count:
            raise InvalidInputError(
                f"hole index {index} out of range for {vertex_count} vertices"
            )
        if index <= previous:
            raise InvalidInputError(f"hole indices must be strictly ascending, got {list(hole_indices)}")
        previous = index
