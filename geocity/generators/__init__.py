"""
Mesh generators for GeoCity Scene Generator.

Contains the footprint cap generator, wall generator, hip roof
generator, material resolution, tree placement and the city generator
that orchestrates them all.
"""

from .footprint import build_footprint, generate_cap
from .walls import generate_walls
from .roof_hip import generate_hip_roof, effective_roof_kind, should_build_roof
from .materials import (
    kind_color,
    ground_material,
    building_cap_material,
    building_wall_material,
    wall_texture_for_level,
    roof_material,
)
from .trees import place_tree, tree_shape
from .city_generator import (
    BuildStats,
    build_city,
    generate_building,
    generate_element_meshes,
    generate_floor,
)

__all__ = [
    'build_footprint',
    'generate_cap',
    'generate_walls',
    'generate_hip_roof',
    'effective_roof_kind',
    'should_build_roof',
    'kind_color',
    'ground_material',
    'building_cap_material',
    'building_wall_material',
    'wall_texture_for_level',
    'roof_material',
    'place_tree',
    'tree_shape',
    'BuildStats',
    'build_city',
    'generate_building',
    'generate_element_meshes',
    'generate_floor',
]
