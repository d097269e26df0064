"""
Line stroker for GeoCity Scene Generator.

Turns a line segment into a 4-point ribbon footprint. Two candidate
quads are built by offsetting both endpoints, one along the diagonal
(t, t) and one along the x axis (t, 0); the one with the larger area
wins. This is an approximation, not a perpendicular offset: a segment
running along the diagonal itself collapses the diagonal candidate, and
a horizontal segment collapses the axis candidate.
"""

from typing import List

from ..models.geometry import Point2D
from ..utils.polygon_utils import polygon_area


def diagonal_quad(p0: Point2D, p1: Point2D, thickness: float) -> List[Point2D]:
    """Quad offset along (t, t): [p1+, p1-, p0-, p0+]."""
    t = thickness
    return [
        Point2D(p1.x + t, p1.y + t),
        Point2D(p1.x - t, p1.y - t),
        Point2D(p0.x - t, p0.y - t),
        Point2D(p0.x + t, p0.y + t),
    ]


def axis_quad(p0: Point2D, p1: Point2D, thickness: float) -> List[Point2D]:
    """Quad offset along (t, 0): [p1+, p1-, p0-, p0+]."""
    t = thickness
    return [
        Point2D(p1.x + t, p1.y),
        Point2D(p1.x - t, p1.y),
        Point2D(p0.x - t, p0.y),
        Point2D(p0.x + t, p0.y),
    ]


def quad_area(quad: List[Point2D]) -> float:
    """Unsigned shoelace area of a quad."""
    return polygon_area(quad)


def stroke(p0: Point2D, p1: Point2D, thickness: float) -> List[Point2D]:
    """
    Stroke segment p0 -> p1 into a ribbon footprint.

    Returns the axis-aligned candidate only if its area is strictly
    larger than the diagonal one.

    Args:
        p0: Segment start
        p1: Segment end
        thickness: Offset applied to both endpoints

    Returns:
        List of 4 points
    """
    diagonal = diagonal_quad(p0, p1, thickness)
    axis = axis_quad(p0, p1, thickness)

    if quad_area(axis) > quad_area(diagonal):
        return axis
    return diagonal
