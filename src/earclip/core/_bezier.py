"""Internal Bezier curve flattening for glyph outlines.

This is an internal module used by the glyph outline pen.
Not intended for public use.

Curves are subdivided at t=0.5 until the control polygon deviates from
the chord by less than the tolerance. Returned point lists exclude the
start point, so consecutive segments can be appended to a ring directly.
"""

import math

Coord = tuple[float, float]

# Subdivision depth cap; 2**12 segments per curve is far below any tolerance in use
MAX_DEPTH = 12


def _mid(a: Coord, b: Coord) -> Coord:
    return ((a[0] + b[0]) / 2, (a[1] + b[1]) / 2)


def flatten_quadratic(p0: Coord, p1: Coord, p2: Coord, tolerance: float, depth: int = 0) -> list[Coord]:
    """Flatten a quadratic Bezier curve using recursive subdivision.

    Args:
        p0: Start point (on-curve)
        p1: Control point
        p2: End point (on-curve)
        tolerance: Maximum distance from true curve

    Returns:
        Points approximating the curve after p0, ending with p2
    """
    curve_mid = (
        0.25 * p0[0] + 0.5 * p1[0] + 0.25 * p2[0],
        0.25 * p0[1] + 0.5 * p1[1] + 0.25 * p2[1],
    )
    chord_mid = _mid(p0, p2)

    if depth >= MAX_DEPTH or math.hypot(
        curve_mid[0] - chord_mid[0], curve_mid[1] - chord_mid[1]
    ) <= tolerance:
        return [p2]

    left = flatten_quadratic(p0, _mid(p0, p1), curve_mid, tolerance, depth + 1)
    right = flatten_quadratic(curve_mid, _mid(p1, p2), p2, tolerance, depth + 1)
    return left + right


def flatten_cubic(
    p0: Coord, p1: Coord, p2: Coord, p3: Coord, tolerance: float, depth: int = 0
) -> list[Coord]:
    """Flatten a cubic Bezier curve using De Casteljau subdivision.

    Args:
        p0: Start point (on-curve)
        p1: First control point
        p2: Second control point
        p3: End point (on-curve)
        tolerance: Maximum distance from true curve

    Returns:
        Points approximating the curve after p0, ending with p3
    """
    q1 = _mid(p0, p1)
    q2 = _mid(p1, p2)
    q3 = _mid(p2, p3)
    r1 = _mid(q1, q2)
    r2 = _mid(q2, q3)
    mid = _mid(r1, r2)
    chord_mid = _mid(p0, p3)

    if depth >= MAX_DEPTH or math.hypot(mid[0] - chord_mid[0], mid[1] - chord_mid[1]) <= tolerance:
        return [p3]

    left = flatten_cubic(p0, q1, r1, mid, tolerance, depth + 1)
    right = flatten_cubic(mid, r2, q3, p3, tolerance, depth + 1)
    return left + right
