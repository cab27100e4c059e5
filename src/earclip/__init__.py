"""Earclip - Robust ear-clipping polygon triangulation.

Earclip triangulates simple polygons, including polygons with holes,
self-intersections, duplicate or collinear vertices, into a flat list of
triangle vertex indices. Coordinates are read from a flat array with any
number of dimensions per vertex; only the first two are used.

Example:
    >>> from earclip import tessellate
    >>> tessellate([10, 0, 0, 50, 60, 60, 70, 10])
    [1, 0, 3, 3, 2, 1]
"""

from earclip.core.triangulator import deviation, tessellate
from earclip.exceptions import EarclipError, InvalidInputError

__version__ = "0.1.0"

__all__ = [
    "EarclipError",
    "InvalidInputError",
    "__version__",
    "deviation",
    "tessellate",
]
