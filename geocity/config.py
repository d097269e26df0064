"""
Configuration constants for GeoCity Scene Generator.

Contains the tag vocabularies, derived-attribute constants, color
palettes and texture tables used to turn map features into scene
geometry, plus the runtime PipelineConfig.
"""

from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional, Tuple

RGB = Tuple[float, float, float]


# =============================================================================
# FRAME
# =============================================================================

# Side of the normalized square (world units); coordinates land in
# [-FRAME_SIZE/2, +FRAME_SIZE/2]
FRAME_SIZE = 50.0

# =============================================================================
# TAG VOCABULARIES
# =============================================================================

GRASS_VALUES: FrozenSet[str] = frozenset({
    'park', 'pitch', 'garden', 'playground', 'greenfield', 'scrub',
    'heath', 'farmyard', 'grass', 'farmland', 'village_green', 'meadow',
    'orchard', 'vineyard', 'recreation_ground', 'grassland', 'dog_park',
})

PEDESTRIAN_VALUES: FrozenSet[str] = frozenset({
    'footway', 'pedestrian', 'track', 'steps', 'path', 'living_street',
    'pedestrian_area', 'pedestrian_line',
})

# building=* values forced to TALL_BUILDING_LEVEL
TALL_BUILDING_VALUES: FrozenSet[str] = frozenset({
    'apartments', 'residential', 'tower', 'hotel',
})

GABLED_ROOF_SHAPES: FrozenSet[str] = frozenset({'gabled', 'onion', 'pyramid'})
FLAT_ROOF_SHAPES: FrozenSet[str] = frozenset({'flat'})

# genus=* -> tree species name
TREE_GENUS_SPECIES: Dict[str, str] = {
    'Quercus': 'oak',
    'Cupressus': 'cypress',
    'Pinus': 'pine',
}

# type=* values recognised on natural=tree points
TREE_TYPE_SPECIES: FrozenSet[str] = frozenset({'palm', 'pine', 'cypress'})

# =============================================================================
# LEVELS AND HEIGHTS
# =============================================================================

DEFAULT_LEVEL = 1
TALL_BUILDING_LEVEL = 3

# Meters per level when deriving levels from a height tag
LEVEL_HEIGHT_M = "3.2"  # kept as text, parsed with Decimal

# Extruded slab heights by element kind (world units)
WATER_HEIGHT = 0.00015
FOREST_HEIGHT = 0.00015
HIGHWAY_HEIGHT = 0.0005
PEDESTRIAN_HEIGHT = 0.0004
DEFAULT_HEIGHT = 0.0001

# Roof height used when roof:height is present but not numeric
DEFAULT_ROOF_HEIGHT = 0.109

# =============================================================================
# LINE THICKNESS (raw coordinate units, applied before normalization)
# =============================================================================

PEDESTRIAN_THICKNESS = 0.00005
RIVER_THICKNESS = 0.004
WATERWAY_THICKNESS = 0.00005
DEFAULT_THICKNESS = 0.0001
MULTILINE_THICKNESS = 0.0004

# =============================================================================
# ROOF RULES
# =============================================================================

# Buildings at or above this level never receive a pitched roof
ROOF_MAX_LEVEL = 8

# =============================================================================
# COLORS
# =============================================================================

BUILDING_COLOR: RGB = (0.79, 0.74, 0.62)
HIGHWAY_COLOR: RGB = (0.26, 0.26, 0.28)
PEDESTRIAN_COLOR: RGB = (0.45, 0.4, 0.27)
WATER_COLOR: RGB = (0.72, 0.95, 1.0)
SAND_COLOR: RGB = (0.69, 0.58, 0.43)
FOREST_COLOR: RGB = (0.004, 0.25, 0.16)
GRASS_COLOR: RGB = (0.337, 0.49, 0.274)
FALLBACK_COLOR: RGB = (0.725, 0.71, 0.68)

LOW_RISE_COLOR: RGB = (0.538, 0.426, 0.347)
ROOF_COLOR: RGB = (0.351, 0.096, 0.091)
WHITE: RGB = (1.0, 1.0, 1.0)

# building:colour names (lowercase, trimmed)
BUILDING_COLOR_NAMES: Dict[str, RGB] = {
    'yellow': (0.882, 0.741, 0.294),
    'light yellow': (0.922, 0.925, 0.498),
    'brown': (0.808, 0.431, 0.271),
    'light brown': (0.8, 0.749, 0.596),
    'light orange': (0.933, 0.753, 0.416),
}

# Water surface response
WATER_SPECULAR = 1.0
WATER_TRANSMISSION = 0.99
WATER_METALLIC = 0.8
WATER_ROUGHNESS = 0.1

# Asphalt response
HIGHWAY_SPECULAR = 0.7
HIGHWAY_ROUGHNESS = 0.9

# =============================================================================
# LANDMARKS
# =============================================================================

# feature_id of the Colosseum relation
LANDMARK_FEATURE_ID = "relation_1834818"
LANDMARK_COLOR: RGB = (0.725, 0.463, 0.361)
LANDMARK_TEXTURE = "texture_colosseo"

# =============================================================================
# TEXTURES
# =============================================================================

TEXTURE_DIR = "buildings_texture"

# texture name -> file name inside TEXTURE_DIR
TEXTURE_FILES: Dict[str, str] = {
    **{f"texture{i}": f"{i}.jpg" for i in range(1, 9)},
    'texture8_11': '8_11.jpg',
    'texture10_41': '10_41.jpg',
    'texture40_71': '40_71.jpg',
    'texture70_101': '70_101.jpg',
    'texturemore_101': 'more_101.jpg',
    LANDMARK_TEXTURE: 'colosseo.jpg',
}

# =============================================================================
# TREES
# =============================================================================

TREE_MODEL_DIR = "tree_models"

TREE_COLORS: Dict[str, RGB] = {
    'standard': (0.002, 0.187, 0.008),
    'palm': (0.224, 0.5, 0.06),
    'cypress': (0.019, 0.175, 0.039),
    'oak': (0.084, 0.193, 0.005),
    'pine': (0.145, 0.182, 0.036),
}

# Planar nudge applied to standard trees only
STANDARD_TREE_OFFSET = 0.09

# =============================================================================
# SCENE
# =============================================================================

FLOOR_NAME = "floor"
FLOOR_HALF_SIZE = 60.0
FLOOR_COLOR: RGB = FALLBACK_COLOR

# Camera frame as (x axis, y axis, z axis, origin)
CAMERA_FRAME = (
    (-0.028, 0.0, 1.0),
    (0.764, 0.645, 0.022),
    (-0.645, 0.764, -0.018),
    (-13.032, 16.750, -1.409),
)
CAMERA_LENS = 0.035
CAMERA_APERTURE = 0.0
CAMERA_FOCUS = 3.9
CAMERA_FILM = 0.024
CAMERA_ASPECT = 1.0

# =============================================================================
# EXPORT SETTINGS
# =============================================================================

OBJ_VERTEX_PRECISION = 6


# =============================================================================
# RUNTIME CONFIGURATION
# =============================================================================

@dataclass
class PipelineConfig:
    """
    Runtime configuration for the scene generation pipeline.

    This class holds all configurable parameters that can be
    adjusted per-run via CLI arguments or programmatically.
    """

    # Input directory containing *.geojson files
    input_dir: str = "./"

    # Export
    output_dir: str = "./output"
    output_name: str = "city"

    # Normalized frame size (world units)
    frame_size: float = FRAME_SIZE

    # Debug/report
    verbose: bool = False

    # Debug: process only features whose id matches
    debug_feature_id: Optional[str] = None

    def __post_init__(self):
        """Validate configuration values."""
        if self.frame_size <= 0:
            raise ValueError("frame_size must be positive")

        if not self.output_name:
            raise ValueError("output_name must not be empty")


# Default configuration instance
DEFAULT_CONFIG = PipelineConfig()
