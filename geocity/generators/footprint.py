"""
Footprint cap generator for GeoCity Scene Generator.

Triangulates an outer ring with its holes and lifts it to a constant
height. Used for building caps and for every ground slab.
"""

from typing import List, Sequence, Tuple

from ..models.geometry import Point2D
from ..models.material import Material
from ..models.mesh import MeshData
from ..errors import GeometryError
from ..utils.triangulation import triangulate_with_holes

Position = Tuple[float, float, float]
Triangle = Tuple[int, int, int]


def build_footprint(
    outer_ring: Sequence[Point2D],
    holes: Sequence[Sequence[Point2D]],
    height: float
) -> Tuple[List[Position], List[Triangle]]:
    """
    Triangulate a footprint at a given height.

    Positions are (x, height, y), outer ring first and then each hole
    in order; triangles index into that list.

    Args:
        outer_ring: Outer boundary (open ring)
        holes: Inner rings
        height: Elevation of the cap

    Returns:
        (positions, triangles)

    Raises:
        GeometryError: If the outer ring has fewer than 3 points
        TriangulationError: If no ear can be found
    """
    if len(outer_ring) < 3:
        raise GeometryError(
            f"Outer ring has {len(outer_ring)} points, at least 3 required"
        )

    flattened, triangles = triangulate_with_holes(outer_ring, holes)
    positions = [(p.x, height, p.y) for p in flattened]
    return (positions, triangles)


def generate_cap(
    name: str,
    outer_ring: Sequence[Point2D],
    holes: Sequence[Sequence[Point2D]],
    height: float,
    material: Material
) -> MeshData:
    """Build a named cap mesh from build_footprint."""
    positions, triangles = build_footprint(outer_ring, holes, height)

    mesh = MeshData(name=name, material=material)
    mesh.vertices.extend(positions)
    for a, b, c in triangles:
        mesh.add_triangle(a, b, c)

    return mesh
