"""
Data models for GeoCity Scene Generator.
"""

from .geometry import Point2D, Point3D, BBox
from .element import (
    Element,
    ElementKind,
    RoofKind,
    TreeKind,
    BuildingKind,
    TreeInstance,
)
from .material import Material, TextureRef
from .mesh import MeshData

__all__ = [
    'Point2D', 'Point3D', 'BBox',
    'Element', 'ElementKind', 'RoofKind', 'TreeKind', 'BuildingKind',
    'TreeInstance',
    'Material', 'TextureRef',
    'MeshData',
]
