"""
Triangulation utilities for GeoCity Scene Generator.

Provides ear clipping triangulation with support for polygons with
holes. Holes are bridged into the outer ring so that a single ear
clipping pass covers the whole footprint. Triangle indices always refer
to the flattened vertex list (outer ring first, then each hole in
order), so callers can emit positions in ring order and use the
triangles directly.
"""

from typing import List, Sequence, Tuple, Optional

from ..models.geometry import Point2D
from ..errors import GeoCityError
from .polygon_utils import polygon_signed_area

Triangle = Tuple[int, int, int]


class TriangulationError(GeoCityError):
    """Raised when triangulation fails."""
    pass


def triangulate_polygon(ring: Sequence[Point2D]) -> List[Triangle]:
    """
    Triangulate a simple polygon using ear clipping algorithm.

    Either winding is accepted. A polygon with n vertices yields
    exactly n - 2 triangles.

    Args:
        ring: List of polygon vertices (open ring, no closing duplicate)

    Returns:
        List of triangle tuples (i, j, k) as indices into the input ring

    Raises:
        TriangulationError: If triangulation fails
    """
    n = len(ring)
    if n < 3:
        raise TriangulationError("Polygon must have at least 3 vertices")

    if n == 3:
        return [(0, 1, 2)]

    indices = _oriented(ring, list(range(n)), ccw=True)
    return _ear_clip(ring, indices)


def triangulate_with_holes(
    outer: Sequence[Point2D],
    holes: Sequence[Sequence[Point2D]]
) -> Tuple[List[Point2D], List[Triangle]]:
    """
    Triangulate a polygon with holes using bridge-and-earclip method.

    Creates bridges connecting holes to outer ring, then triangulates
    the resulting simple polygon. Bridge vertices are shared, not
    duplicated, so every index stays inside the flattened list.

    Args:
        outer: Outer ring vertices (either winding)
        holes: List of hole rings, each nested inside outer

    Returns:
        (flattened_vertices, triangles) where flattened_vertices is
        outer followed by every hole, and triangles index into it

    Raises:
        TriangulationError: If triangulation fails
    """
    flattened: List[Point2D] = list(outer)

    if not holes:
        return (flattened, triangulate_polygon(flattened))

    if len(outer) < 3:
        raise TriangulationError("Polygon must have at least 3 vertices")

    hole_rings: List[List[int]] = []
    for hole_idx, hole in enumerate(holes):
        if len(hole) < 3:
            raise TriangulationError(f"Hole {hole_idx} must have at least 3 vertices")
        start = len(flattened)
        flattened.extend(hole)
        hole_rings.append(list(range(start, start + len(hole))))

    # Outer CCW, holes CW, so the bridged ring keeps a single orientation
    merged = _oriented(flattened, list(range(len(outer))), ccw=True)
    hole_rings = [_oriented(flattened, ids, ccw=False) for ids in hole_rings]

    # Sort holes by rightmost x-coordinate (descending)
    order = sorted(
        range(len(hole_rings)),
        key=lambda k: max(flattened[i].x for i in hole_rings[k]),
        reverse=True
    )

    for hole_idx in order:
        try:
            merged = _bridge_hole(flattened, merged, hole_rings[hole_idx])
        except TriangulationError as e:
            raise TriangulationError(
                f"Failed to bridge hole {hole_idx}: {e}"
            ) from e

    return (flattened, _ear_clip(flattened, merged))


def _oriented(points: Sequence[Point2D], ids: List[int], ccw: bool) -> List[int]:
    """Return ids ordered so the ring they describe has the wanted winding."""
    area = polygon_signed_area([points[i] for i in ids])
    if (area > 0) != ccw and area != 0:
        return list(reversed(ids))
    return ids


def _ear_clip(points: Sequence[Point2D], indices: List[int]) -> List[Triangle]:
    """
    Clip ears off a CCW index cycle until one triangle is left.

    The cycle may visit the same point index twice (hole bridges).
    """
    indices = list(indices)
    triangles: List[Triangle] = []

    while len(indices) > 3:
        ear_found = False

        for i in range(len(indices)):
            if _is_ear(points, indices, i):
                triangles.append(_corner(indices, i))
                indices.pop(i)
                ear_found = True
                break

        if not ear_found:
            # Fallback: try to find any valid ear (less strict)
            for i in range(len(indices)):
                prev_idx, curr_idx, next_idx = _corner(indices, i)

                if _is_convex_vertex(points[prev_idx], points[curr_idx], points[next_idx]):
                    triangles.append((prev_idx, curr_idx, next_idx))
                    indices.pop(i)
                    ear_found = True
                    break

            if not ear_found:
                raise TriangulationError(
                    f"Failed to find ear in polygon with {len(indices)} remaining vertices"
                )

    # Add final triangle
    if len(indices) == 3:
        triangles.append((indices[0], indices[1], indices[2]))

    return triangles


def _corner(indices: List[int], i: int) -> Triangle:
    n = len(indices)
    return (indices[(i - 1) % n], indices[i], indices[(i + 1) % n])


def _bridge_hole(
    points: Sequence[Point2D],
    merged: List[int],
    hole: List[int]
) -> List[int]:
    """
    Create a bridge connecting a hole to the outer ring.

    Finds the rightmost point of the hole and connects it to a
    visible vertex on the outer ring.

    Args:
        points: Flattened vertex list
        merged: Current outer cycle (indices into points)
        hole: Hole cycle (indices into points, CW)

    Returns:
        Merged cycle with bridge
    """
    # Find rightmost vertex of hole
    hole_right_pos = max(range(len(hole)), key=lambda k: points[hole[k]].x)
    hole_right = points[hole[hole_right_pos]]

    # Find visible vertex on outer ring
    outer_visible_pos = _find_visible_vertex(points, merged, hole_right)

    if outer_visible_pos is None:
        raise TriangulationError(
            f"No visible vertex found on outer ring for hole point at ({hole_right.x}, {hole_right.y})"
        )

    # outer[0..visible] + hole[right..] + hole[0..right] + bridge back + outer[visible+1..]
    rotated = [hole[(hole_right_pos + k) % len(hole)] for k in range(len(hole))]

    return (
        merged[:outer_visible_pos + 1]
        + rotated
        + [hole[hole_right_pos], merged[outer_visible_pos]]
        + merged[outer_visible_pos + 1:]
    )


def _find_visible_vertex(
    points: Sequence[Point2D],
    cycle: List[int],
    point: Point2D
) -> Optional[int]:
    """
    Find a vertex on the outer cycle that is visible from point.

    Uses ray casting to the right (+X direction) to find the closest
    edge. The endpoint of that edge with the larger x is visible unless
    another cycle vertex lies inside the triangle (point, hit, endpoint);
    in that case the vertex at the smallest angle to the ray is taken,
    nearest first on ties. A vertex repeated by an earlier bridge is
    taken at the occurrence whose interior wedge contains point.

    Returns:
        Position in cycle of the visible vertex, or None if not found
    """
    n = len(cycle)
    hit_x = None
    hit_edge = None

    for k in range(n):
        v1 = points[cycle[k]]
        v2 = points[cycle[(k + 1) % n]]

        intersection = _ray_edge_intersection(point, v1, v2)
        if intersection is not None and (hit_x is None or intersection < hit_x):
            hit_x = intersection
            hit_edge = k

    # If no intersection found, find closest vertex
    if hit_edge is None:
        best_pos = None
        best_dist = float('inf')
        for k in range(n):
            dist = points[cycle[k]].distance_to(point)
            if dist < best_dist:
                best_dist = dist
                best_pos = k
        return best_pos

    hit = Point2D(hit_x, point.y)
    endpoint = max(
        (points[cycle[hit_edge]], points[cycle[(hit_edge + 1) % n]]),
        key=lambda v: (v.x, -abs(v.y - point.y))
    )
    max_x = max(hit_x, endpoint.x)

    best_pos = None
    best_key = None
    for k in range(n):
        v = points[cycle[k]]
        if v.x <= point.x or v.x > max_x:
            continue
        if not _point_in_triangle(v, point, hit, endpoint):
            continue

        key = (
            abs(v.y - point.y) / (v.x - point.x),
            v.distance_to(point),
            not _wedge_contains(points, cycle, k, point),
        )
        if best_key is None or key < best_key:
            best_key = key
            best_pos = k

    return best_pos


def _wedge_contains(
    points: Sequence[Point2D],
    cycle: List[int],
    k: int,
    p: Point2D
) -> bool:
    """True if p lies in the interior angle of the CCW cycle at position k."""
    prev_idx, curr_idx, next_idx = _corner(cycle, k)
    curr = points[curr_idx]
    to_next = points[next_idx] - curr
    to_prev = points[prev_idx] - curr
    to_p = p - curr

    if to_next.cross(to_prev) > 0:
        return to_next.cross(to_p) > 0 and to_p.cross(to_prev) > 0
    # reflex corner: p must avoid the outside (convex) sector
    return not (to_prev.cross(to_p) > 0 and to_p.cross(to_next) > 0)


def _ray_edge_intersection(
    ray_origin: Point2D,
    v1: Point2D,
    v2: Point2D
) -> Optional[float]:
    """
    Find intersection of a horizontal +X ray with an edge.

    Returns:
        x-coordinate of the intersection, or None if no intersection
    """
    y = ray_origin.y

    # Check if edge crosses ray's y-level
    if (v1.y <= y < v2.y) or (v2.y <= y < v1.y):
        t = (y - v1.y) / (v2.y - v1.y)
        x = v1.x + t * (v2.x - v1.x)

        if x > ray_origin.x:
            return x

    return None


def _is_ear(points: Sequence[Point2D], indices: List[int], i: int) -> bool:
    """
    Check if the vertex at position i forms an ear.

    An ear is a triangle that:
    1. Has a convex vertex at position i
    2. Contains no other polygon vertex (shared bridge indices excepted)
    """
    prev_idx, curr_idx, next_idx = _corner(indices, i)

    prev_p = points[prev_idx]
    curr_p = points[curr_idx]
    next_p = points[next_idx]

    if not _is_convex_vertex(prev_p, curr_p, next_p):
        return False

    corner = (prev_idx, curr_idx, next_idx)
    for idx in indices:
        if idx in corner:
            continue

        if _point_in_triangle(points[idx], prev_p, curr_p, next_p):
            return False

    return True


def _is_convex_vertex(prev_p: Point2D, curr_p: Point2D, next_p: Point2D) -> bool:
    """
    Check if vertex curr_p is convex (left turn from prev to next).

    For CCW polygon, convex = positive cross product.
    """
    return (curr_p - prev_p).cross(next_p - curr_p) > 0


def _point_in_triangle(
    p: Point2D,
    v0: Point2D,
    v1: Point2D,
    v2: Point2D
) -> bool:
    """
    Check if point is inside triangle or on its boundary.
    """
    def sign(p1: Point2D, p2: Point2D, p3: Point2D) -> float:
        return (p1.x - p3.x) * (p2.y - p3.y) - (p2.x - p3.x) * (p1.y - p3.y)

    d1 = sign(p, v0, v1)
    d2 = sign(p, v1, v2)
    d3 = sign(p, v2, v0)

    has_neg = (d1 < 0) or (d2 < 0) or (d3 < 0)
    has_pos = (d1 > 0) or (d2 > 0) or (d3 > 0)

    return not (has_neg and has_pos)


def validate_triangulation(
    vertices: Sequence[Point2D],
    triangles: List[Triangle],
    expected_area: Optional[float] = None
) -> List[str]:
    """
    Validate triangulation result.

    Args:
        vertices: List of vertices
        triangles: List of triangle index tuples
        expected_area: Expected polygon area (optional)

    Returns:
        List of error messages (empty if valid)
    """
    errors = []

    if not triangles:
        errors.append("No triangles generated")
        return errors

    n = len(vertices)

    for i, (a, b, c) in enumerate(triangles):
        if a < 0 or a >= n or b < 0 or b >= n or c < 0 or c >= n:
            errors.append(f"Triangle {i} has invalid index")

    if errors:
        return errors

    if expected_area is not None:
        total_area = sum(
            abs(_triangle_area(vertices[a], vertices[b], vertices[c]))
            for a, b, c in triangles
        )
        if abs(total_area - expected_area) > expected_area * 0.01:  # 1% tolerance
            errors.append(
                f"Total triangulated area {total_area:.2f} differs from "
                f"expected {expected_area:.2f}"
            )

    return errors


def _triangle_area(v0: Point2D, v1: Point2D, v2: Point2D) -> float:
    """Compute signed area of triangle."""
    return 0.5 * (
        (v1.x - v0.x) * (v2.y - v0.y) -
        (v2.x - v0.x) * (v1.y - v0.y)
    )
