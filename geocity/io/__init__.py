"""
Input/Output modules for GeoCity Scene Generator.
"""

from .geojson_reader import (
    GeometryKind,
    RawFeature,
    FeatureReader,
    GeoJSONReader,
    list_geojson_files,
)
from .scene_sink import (
    Camera,
    SceneSink,
    InMemorySceneSink,
)
from .obj_exporter import (
    ExportStats,
    export_scene,
    validate_obj_file,
)

__all__ = [
    # Reading
    'GeometryKind',
    'RawFeature',
    'FeatureReader',
    'GeoJSONReader',
    'list_geojson_files',
    # Scene sink
    'Camera',
    'SceneSink',
    'InMemorySceneSink',
    # OBJ export
    'ExportStats',
    'export_scene',
    'validate_obj_file',
]
