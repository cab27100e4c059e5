"""Polygon and triangulation result models.

A ``Polygon`` mirrors the flat input format of the triangulator: one
coordinate array, the starting vertex index of every hole ring and the
number of coordinates per vertex.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Polygon:
    """A polygon with optional holes in flat coordinate form.

    Attributes:
        vertices: Flat coordinate array [x0, y0, (z0...), x1, y1, ...]
        hole_indices: Starting vertex index of each hole ring
        dim: Number of coordinates per vertex
        name: Optional label (feature id, glyph name)
    """

    vertices: list[Any]
    hole_indices: list[int] = field(default_factory=list)
    dim: int = 2
    name: str | None = None

    @property
    def vertex_count(self) -> int:
        """Number of vertices across all rings."""
        return len(self.vertices) // self.dim

    def has_holes(self) -> bool:
        """Check if the polygon has at least one hole ring."""
        return len(self.hole_indices) > 0

    def ring_ranges(self) -> list[tuple[int, int]]:
        """Half-open vertex ranges of the outer ring followed by each hole.

        Returns:
            List of (start, end) pairs in vertex units
        """
        bounds = [0, *self.hole_indices, self.vertex_count]
        return [(bounds[k], bounds[k + 1]) for k in range(len(bounds) - 1)]

    def ring_points(self, ring: int) -> list[tuple[Any, Any]]:
        """Get the (x, y) points of one ring.

        Args:
            ring: 0 for the outer ring, k for the k-th hole

        Returns:
            List of (x, y) tuples
        """
        start, end = self.ring_ranges()[ring]
        d = self.dim
        return [(self.vertices[v * d], self.vertices[v * d + 1]) for v in range(start, end)]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the flat earcut-style dictionary.

        Returns:
            Dictionary with vertices, holes and dimensions fields
        """
        data: dict[str, Any] = {
            "vertices": list(self.vertices),
            "holes": list(self.hole_indices),
            "dimensions": self.dim,
        }
        if self.name is not None:
            data["name"] = self.name
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Polygon":
        """Deserialize from a flat earcut-style dictionary.

        Args:
            data: Dictionary with vertices and optional holes, dimensions, name

        Returns:
            Polygon instance
        """
        return cls(
            vertices=list(data["vertices"]),
            hole_indices=list(data.get("holes") or []),
            dim=int(data.get("dimensions", 2)),
            name=data.get("name"),
        )


@dataclass
class Triangulation:
    """Result of triangulating one polygon.

    Attributes:
        polygon: The triangulated polygon
        triangles: Flat vertex indices, three per triangle
        deviation: Relative area error, None if not computed
    """

    polygon: Polygon
    triangles: list[int]
    deviation: float | None = None

    @property
    def triangle_count(self) -> int:
        """Number of emitted triangles."""
        return len(self.triangles) // 3

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        data: dict[str, Any] = {
            "triangles": list(self.triangles),
            "vertex_count": self.polygon.vertex_count,
        }
        if self.polygon.name is not None:
            data["name"] = self.polygon.name
        if self.deviation is not None:
            data["deviation"] = self.deviation
        return data
