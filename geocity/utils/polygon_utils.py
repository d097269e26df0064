"""
Polygon utilities for GeoCity Scene Generator.

Provides shoelace areas, centroids and ring clean-up used by the
stroker, the normalizer and the mesh generators.
"""

from typing import List, Sequence

from ..models.geometry import Point2D


def polygon_signed_area(ring: Sequence[Point2D]) -> float:
    """
    Compute signed area using shoelace formula.

    Args:
        ring: List of polygon vertices

    Returns:
        Signed area (positive = CCW, negative = CW)
    """
    n = len(ring)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += ring[i].x * ring[j].y
        area -= ring[j].x * ring[i].y

    return area / 2.0


def polygon_area(ring: Sequence[Point2D]) -> float:
    """Compute unsigned area of polygon."""
    return abs(polygon_signed_area(ring))


def ring_centroid(ring: Sequence[Point2D]) -> Point2D:
    """
    Arithmetic mean of the ring vertices.

    This is the vertex average, not the area centroid.
    """
    n = len(ring)
    if n == 0:
        raise ValueError("Cannot compute centroid of an empty ring")

    sx = sum(p.x for p in ring)
    sy = sum(p.y for p in ring)
    return Point2D(sx / n, sy / n)


def clean_ring(ring: Sequence[Point2D]) -> List[Point2D]:
    """
    Drop consecutive duplicate vertices and the closing vertex.

    GeoJSON rings repeat their first vertex at the end; the mesh
    generators expect open rings.
    """
    cleaned: List[Point2D] = []
    for p in ring:
        if cleaned and cleaned[-1] == p:
            continue
        cleaned.append(p)

    while len(cleaned) > 1 and cleaned[0] == cleaned[-1]:
        cleaned.pop()

    return cleaned
