"""Domain models for earclip.

Key classes:
- Node: A vertex occurrence in a mutable polygon ring
- Polygon: A polygon with holes in flat coordinate form
- Triangulation: Triangle indices produced for a polygon
"""

from earclip.domain.node import Node
from earclip.domain.polygon import Polygon, Triangulation

__all__: list[str] = [
    "Node",
    "Polygon",
    "Triangulation",
]
