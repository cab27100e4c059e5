"""Converters between nested coordinate formats and domain models.

This module handles the conversion between nested ring representations
(plain nested lists, GeoJSON geometries, glyph contours) and the flat
``Polygon`` form consumed by the triangulator.
"""

from collections.abc import Sequence
from typing import Any

from earclip.core.nesting import group_contours
from earclip.domain import Polygon


def flatten(rings: Sequence[Sequence[Sequence[Any]]], name: str | None = None) -> Polygon:
    """Flatten nested rings into a Polygon.

    The first ring is the outer boundary and the rest are holes. The
    dimensionality is taken from the first point.

    Args:
        rings: [[[x, y, ...], ...], [[x, y, ...], ...], ...]
        name: Optional polygon label

    Returns:
        Polygon with flat vertices and hole indices

    Examples:
        >>> flatten([[[0, 0], [10, 0], [10, 10]], [[2, 2], [4, 2], [4, 4]]]).hole_indices
        [3]
    """
    if not rings or not rings[0]:
        return Polygon(vertices=[], name=name)

    dim = len(rings[0][0])
    vertices: list[Any] = []
    holes: list[int] = []
    hole_index = 0

    for k, ring in enumerate(rings):
        for point in ring:
            vertices.extend(point[d] for d in range(dim))

        if k > 0:
            hole_index += len(rings[k - 1])
            holes.append(hole_index)

    return Polygon(vertices=vertices, hole_indices=holes, dim=dim, name=name)


def unflatten(triangles: Sequence[int]) -> list[tuple[int, int, int]]:
    """Group a flat triangle index list into triples."""
    return [
        (triangles[k], triangles[k + 1], triangles[k + 2])
        for k in range(0, len(triangles) - 2, 3)
    ]


def geojson_to_polygons(obj: dict[str, Any], name: str | None = None) -> list[Polygon]:
    """Convert a GeoJSON object into polygons.

    Supports Polygon, MultiPolygon, GeometryCollection, Feature and
    FeatureCollection. Features without geometry and non-areal geometries
    inside collections are skipped.

    Args:
        obj: Parsed GeoJSON object
        name: Label for the resulting polygons

    Returns:
        List of polygons

    Raises:
        ValueError: If the object is not a supported GeoJSON type
    """
    kind = obj.get("type")

    if kind == "FeatureCollection":
        polygons: list[Polygon] = []
        for k, feature in enumerate(obj.get("features") or []):
            polygons.extend(geojson_to_polygons(feature, name=_feature_name(feature, k)))
        return polygons

    if kind == "Feature":
        geometry = obj.get("geometry")
        if geometry is None:
            return []
        return geojson_to_polygons(geometry, name=name or _feature_name(obj, 0))

    if kind == "GeometryCollection":
        polygons = []
        for geometry in obj.get("geometries") or []:
            if geometry.get("type") in ("Polygon", "MultiPolygon"):
                polygons.extend(geojson_to_polygons(geometry, name=name))
        return polygons

    if kind == "Polygon":
        return [flatten(obj["coordinates"], name=name)]

    if kind == "MultiPolygon":
        coordinates = obj["coordinates"]
        if len(coordinates) == 1:
            return [flatten(coordinates[0], name=name)]
        return [
            flatten(rings, name=f"{name}[{k}]" if name is not None else None)
            for k, rings in enumerate(coordinates)
        ]

    raise ValueError(f"Unsupported GeoJSON type: {kind!r}")


def contours_to_polygons(contours: list[list[tuple[float, float]]], name: str | None = None) -> list[Polygon]:
    """Group closed contours into polygons with holes by nesting depth.

    Args:
        contours: Closed contours as (x, y) point lists
        name: Label prefix for the resulting polygons

    Returns:
        One polygon per outer contour, holes attached
    """
    polygons = []
    for outer, holes in group_contours(contours):
        rings = [contours[outer]] + [contours[h] for h in holes]
        label = f"{name}#{outer}" if name is not None else None
        polygons.append(flatten(rings, name=label))
    return polygons


def _feature_name(feature: dict[str, Any], position: int) -> str:
    properties = feature.get("properties") or {}
    for key in ("name", "id"):
        if properties.get(key) is not None:
            return str(properties[key])
    if feature.get("id") is not None:
        return str(feature["id"])
    return f"feature-{position}"
