"""
Processing modules for GeoCity Scene Generator.

Contains attribute classification, feature expansion, line stroking and
coordinate normalization.
"""

from .classifier import (
    classify,
    derive_level,
    element_height,
    roof_height,
    line_thickness,
    resolve_color_name,
    is_numeric,
)
from .features import (
    ExpansionStats,
    expand_features,
    elements_from_feature,
)
from .stroker import stroke, diagonal_quad, axis_quad, quad_area
from .normalizer import compute_scene_bounds, normalize, normalize_point

__all__ = [
    'classify',
    'derive_level',
    'element_height',
    'roof_height',
    'line_thickness',
    'resolve_color_name',
    'is_numeric',
    'ExpansionStats',
    'expand_features',
    'elements_from_feature',
    'stroke',
    'diagonal_quad',
    'axis_quad',
    'quad_area',
    'compute_scene_bounds',
    'normalize',
    'normalize_point',
]
