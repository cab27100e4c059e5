"""Core triangulation algorithms for earclip.

This module contains the ear-clipping kernel:

- Geometry predicates (triangle area, point-in-triangle, intersections)
- Vertex ring construction, filtering and splitting
- Z-order spatial index for large polygons
- Hole elimination by bridge edges
- The multi-pass ear-clipping engine

The kernel is single-threaded and keeps no state between calls; every
call to tessellate owns its ring exclusively.

Key functions:
- tessellate: Triangulate a flat coordinate array
- deviation: Relative area error of a triangulation
- group_contours: Group nested contours into outer rings with holes

Key classes:
- EarClipper: Runs the ear-clipping passes over a prepared ring
- ClipPass: Escalation stage of the ear-clipping loop
- PolygonProcessor: Triangulates batches of polygons, optionally in parallel
"""

from earclip.core.engine import ClipPass, EarClipper, is_ear, is_ear_hashed, is_valid_diagonal
from earclip.core.holes import eliminate_holes, find_hole_bridge
from earclip.core.nesting import build_nesting_tree, group_contours
from earclip.core.processor import PolygonProcessor, triangulate_polygon
from earclip.core.ring import filter_points, linked_list, split_polygon
from earclip.core.triangulator import deviation, tessellate, validate_input
from earclip.core.zorder import ZOrderBounds, index_curve, z_order

__all__ = [
    # Engine
    "ClipPass",
    "EarClipper",
    # Batch processing
    "PolygonProcessor",
    # Z-order index
    "ZOrderBounds",
    # Nesting
    "build_nesting_tree",
    # Entry points
    "deviation",
    # Holes
    "eliminate_holes",
    # Ring
    "filter_points",
    "find_hole_bridge",
    "group_contours",
    "index_curve",
    "is_ear",
    "is_ear_hashed",
    "is_valid_diagonal",
    "linked_list",
    "split_polygon",
    "tessellate",
    "triangulate_polygon",
    "validate_input",
    "z_order",
]
