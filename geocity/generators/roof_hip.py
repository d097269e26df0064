"""
Hip roof generator for GeoCity Scene Generator.

Buildings tagged with a pitched roof shape get an umbrella-like roof:
every edge of the outer ring is joined to a single apex above the
vertex centroid. Two meshes are produced:
- the roof base, a cap re-triangulated at eave height
- the roof solid, with two triangles per edge; the second triangle of
  each pair joins the two coincident apex vertices back to the edge
  and has zero area

Only holeless footprints below ROOF_MAX_LEVEL get a roof, and a flat
roof on such a footprint is upgraded to a pitched one.
"""

from typing import Sequence, Tuple

from ..models.element import Element, RoofKind
from ..models.geometry import Point2D
from ..models.material import Material
from ..models.mesh import MeshData
from ..utils.polygon_utils import ring_centroid
from ..config import ROOF_MAX_LEVEL
from .footprint import generate_cap


def effective_roof_kind(element: Element) -> RoofKind:
    """Roof kind after upgrading flat roofs on small holeless buildings."""
    if (element.roof_kind == RoofKind.FLAT
            and not element.has_holes
            and element.level < ROOF_MAX_LEVEL):
        return RoofKind.GABLED
    return element.roof_kind


def should_build_roof(element: Element) -> bool:
    """True if the element gets a pitched roof."""
    return (
        effective_roof_kind(element) == RoofKind.GABLED
        and not element.has_holes
        and element.level < ROOF_MAX_LEVEL
    )


def generate_hip_roof(
    name: str,
    outer_ring: Sequence[Point2D],
    height: float,
    roof_height: float,
    material: Material
) -> Tuple[MeshData, MeshData]:
    """
    Generate roof base and roof solid for a holeless footprint.

    Args:
        name: Building name; meshes are <name>_roof_base and <name>_roof
        outer_ring: Outer boundary in the normalized frame
        height: Eave height
        roof_height: Apex rise above the eaves
        material: Roof material (shared by both meshes)

    Returns:
        (roof_base, roof_solid)
    """
    base = generate_cap(f"{name}_roof_base", outer_ring, [], height, material)

    centroid = ring_centroid(outer_ring)
    apex_y = height + roof_height

    solid = MeshData(name=f"{name}_roof", material=material)
    for p in outer_ring:
        solid.add_vertex(p.x, height, p.y)

    n = len(outer_ring)
    for i in range(n):
        prev = (i - 1) % n
        apex_a = solid.add_vertex(centroid.x, apex_y, centroid.y)
        apex_b = solid.add_vertex(centroid.x, apex_y, centroid.y)
        solid.add_triangle(prev, i, apex_a)
        solid.add_triangle(apex_a, apex_b, prev)

    return (base, solid)
