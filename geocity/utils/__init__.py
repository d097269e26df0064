"""
Utility functions for GeoCity Scene Generator.
"""

from .polygon_utils import (
    polygon_signed_area,
    polygon_area,
    ring_centroid,
    clean_ring,
)
from .triangulation import (
    triangulate_polygon,
    triangulate_with_holes,
    validate_triangulation,
    TriangulationError,
)

__all__ = [
    'polygon_signed_area',
    'polygon_area',
    'ring_centroid',
    'clean_ring',
    'triangulate_polygon',
    'triangulate_with_holes',
    'validate_triangulation',
    'TriangulationError',
]
