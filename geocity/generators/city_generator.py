"""
City generator for GeoCity Scene Generator.

Orchestrates mesh generation for normalized elements:
1. Attach the camera, floor and sky to the scene sink
2. For each element, in input order:
   - trees become model instances
   - buildings get a cap, a wall shell and, when eligible, a hip roof
   - every other kind becomes a single ground slab
3. Report each element to an optional observer

A TriangulationError skips only the offending element. A GeometryError
(an outer ring too short to build) is fatal and propagates.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple
import logging
import time

from ..models.element import Element, ElementKind, TreeInstance
from ..models.mesh import MeshData
from ..io.scene_sink import Camera, SceneSink
from ..utils.triangulation import TriangulationError
from ..config import FLOOR_NAME, FLOOR_HALF_SIZE
from .footprint import generate_cap
from .walls import generate_walls
from .roof_hip import generate_hip_roof, should_build_roof
from .materials import (
    building_cap_material,
    building_wall_material,
    ground_material,
    roof_material,
    floor_material,
)
from .trees import place_tree

logger = logging.getLogger(__name__)

BuildObserver = Callable[[Element, List[MeshData], List[TreeInstance], float], None]


@dataclass
class BuildStats:
    """
    Observer that accumulates per-element build statistics.

    Pass an instance as the observer of build_city.
    """
    elements: int = 0
    meshes: int = 0
    triangles: int = 0
    quads: int = 0
    trees: int = 0
    roofs: int = 0
    total_time_s: float = 0.0
    meshes_by_kind: Dict[str, int] = field(default_factory=dict)

    def __call__(
        self,
        element: Element,
        meshes: List[MeshData],
        trees: List[TreeInstance],
        elapsed_s: float
    ) -> None:
        self.elements += 1
        self.meshes += len(meshes)
        self.trees += len(trees)
        self.total_time_s += elapsed_s

        for mesh in meshes:
            self.triangles += mesh.triangle_count()
            self.quads += mesh.quad_count()

        # mesh names may carry a sink-assigned suffix
        if meshes and element.kind == ElementKind.BUILDING and should_build_roof(element):
            self.roofs += 1

        if meshes:
            key = element.kind.value
            self.meshes_by_kind[key] = self.meshes_by_kind.get(key, 0) + len(meshes)


def generate_floor() -> MeshData:
    """Square ground quad of half-size FLOOR_HALF_SIZE at y = 0."""
    h = FLOOR_HALF_SIZE
    mesh = MeshData(name=FLOOR_NAME, material=floor_material())
    a = mesh.add_vertex(-h, 0.0, -h)
    b = mesh.add_vertex(h, 0.0, -h)
    c = mesh.add_vertex(h, 0.0, h)
    d = mesh.add_vertex(-h, 0.0, h)
    mesh.add_quad(a, b, c, d)
    return mesh


def generate_building(element: Element) -> List[MeshData]:
    """
    Generate the meshes of one building.

    Returns:
        [cap, walls] or [cap, walls, roof_base, roof_solid]
    """
    outer = element.normalized_outer_ring

    meshes = [
        generate_cap(
            element.name,
            outer,
            element.normalized_holes,
            element.height,
            building_cap_material(element),
        ),
        generate_walls(
            f"{element.name}_1",
            outer,
            element.height,
            building_wall_material(element),
        ),
    ]

    if should_build_roof(element):
        meshes.extend(generate_hip_roof(
            element.name,
            outer,
            element.height,
            element.roof_height,
            roof_material(),
        ))

    return meshes


def generate_element_meshes(
    element: Element
) -> Tuple[List[MeshData], List[TreeInstance]]:
    """
    Dispatch one normalized element to the right generator.

    Returns:
        (meshes, tree_instances); 'other' elements give ([], [])

    Raises:
        GeometryError: If the outer ring is too short
        TriangulationError: If the footprint cannot be triangulated
    """
    if element.kind == ElementKind.OTHER:
        return ([], [])

    if element.kind == ElementKind.TREE:
        return ([], [place_tree(element)])

    if element.kind == ElementKind.BUILDING:
        return (generate_building(element), [])

    cap = generate_cap(
        element.name,
        element.normalized_outer_ring,
        element.normalized_holes,
        element.height,
        ground_material(element.kind),
    )
    return ([cap], [])


def build_city(
    elements: Sequence[Element],
    sink: SceneSink,
    observer: Optional[BuildObserver] = None
) -> List[str]:
    """
    Build every element into the scene sink.

    Args:
        elements: Normalized elements, in output order
        sink: Scene consumer
        observer: Optional callback (element, meshes, trees, elapsed_s)

    Returns:
        Warning messages for skipped elements

    Raises:
        GeometryError: If an element reaches the builder with a short ring
    """
    warnings: List[str] = []

    sink.set_camera(Camera())
    sink.add_mesh(generate_floor())
    sink.add_sky()

    for element in elements:
        if element.kind == ElementKind.OTHER:
            continue

        start = time.perf_counter()
        try:
            meshes, trees = generate_element_meshes(element)
        except TriangulationError as e:
            msg = f"{element.name}: triangulation failed ({e}), skipped"
            logger.warning(msg)
            warnings.append(msg)
            continue
        elapsed = time.perf_counter() - start

        for mesh in meshes:
            sink.add_mesh(mesh)
        for tree in trees:
            sink.add_tree(tree)

        logger.debug(
            f"{element.name}: {element.kind.value}, {len(meshes)} meshes, "
            f"{len(trees)} trees"
        )

        if observer is not None:
            observer(element, meshes, trees, elapsed)

    return warnings
