"""
Tree placement for GeoCity Scene Generator.

Trees are not meshed: each tree element becomes an instance of a
pre-authored model, picked by species.
"""

from ..models.element import Element, TreeKind, TreeInstance
from ..models.geometry import Point3D
from ..errors import GeometryError
from ..config import TREE_MODEL_DIR, TREE_COLORS, STANDARD_TREE_OFFSET


def tree_shape(species: TreeKind) -> str:
    """Relative path of the model for a species."""
    return f"{TREE_MODEL_DIR}/{species.value}.ply"


def place_tree(element: Element) -> TreeInstance:
    """
    Create the instance for a normalized tree element.

    The tree stands on the ground at (x, 0, y). Standard trees are
    nudged by STANDARD_TREE_OFFSET along x and z.

    Raises:
        GeometryError: If the element does not carry exactly one point
    """
    if len(element.normalized_outer_ring) != 1:
        raise GeometryError(
            f"{element.name}: tree needs exactly 1 point, "
            f"got {len(element.normalized_outer_ring)}"
        )

    p = element.normalized_outer_ring[0]
    x, z = p.x, p.y
    if element.tree_kind == TreeKind.STANDARD:
        x += STANDARD_TREE_OFFSET
        z += STANDARD_TREE_OFFSET

    return TreeInstance(
        name=element.name,
        species=element.tree_kind,
        shape=tree_shape(element.tree_kind),
        color=TREE_COLORS[element.tree_kind.value],
        position=Point3D(x, 0.0, z),
    )
