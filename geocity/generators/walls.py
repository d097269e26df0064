"""
Wall mesh generator for GeoCity Scene Generator.

Generates one vertical quad per edge of the outer ring, from the
ground (y = 0) up to the building height. Holes get no walls.
"""

from typing import Sequence

from ..models.geometry import Point2D
from ..models.material import Material
from ..models.mesh import MeshData
from ..errors import GeometryError


def generate_walls(
    name: str,
    outer_ring: Sequence[Point2D],
    height: float,
    material: Material
) -> MeshData:
    """
    Generate the wall shell of a building.

    The mesh starts with the outer ring at the top (indices 0..n-1).
    For each edge (prev, i), two ground vertices are appended and the
    quad (prev, i, ground_i, ground_prev) is added, so an n-gon gives
    n quads and 3n vertices.

    Args:
        name: Mesh name
        outer_ring: Outer boundary in the normalized frame
        height: Top of the walls
        material: Wall material

    Returns:
        MeshData with quad faces

    Raises:
        GeometryError: If the outer ring has fewer than 3 points
    """
    n = len(outer_ring)
    if n < 3:
        raise GeometryError(f"Outer ring has {n} points, at least 3 required")

    mesh = MeshData(name=name, material=material)

    for p in outer_ring:
        mesh.add_vertex(p.x, height, p.y)

    for i in range(n):
        prev = (i - 1) % n
        ground_i = mesh.add_vertex(outer_ring[i].x, 0.0, outer_ring[i].y)
        ground_prev = mesh.add_vertex(outer_ring[prev].x, 0.0, outer_ring[prev].y)
        mesh.add_quad(prev, i, ground_i, ground_prev)

    return mesh
