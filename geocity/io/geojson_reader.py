"""
GeoJSON reader for GeoCity Scene Generator.

Reads GeoJSON documents (typically OpenStreetMap exports) and yields
RawFeature records: a geometry kind, the nested coordinate lists and the
free-form property map. Classification happens downstream; this module
only knows about the file format.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterator, List, Union
import json
import logging

logger = logging.getLogger(__name__)


class GeometryKind(Enum):
    """Geometry types understood by the pipeline."""
    POLYGON = "Polygon"
    MULTI_POLYGON = "MultiPolygon"
    LINE_STRING = "LineString"
    MULTI_LINE_STRING = "MultiLineString"
    POINT = "Point"


@dataclass
class RawFeature:
    """
    One map feature as read from the source document.

    Attributes:
        feature_id: Identifier with '/' replaced by '_'
        geometry_kind: Geometry type
        coordinates: Nested coordinate lists as found in the document
        properties: Free-form attribute map
    """
    feature_id: str
    geometry_kind: GeometryKind
    coordinates: Any
    properties: Dict[str, Any] = field(default_factory=dict)


class FeatureReader(ABC):
    """
    Abstract interface for feature-collection readers.

    Implementations yield RawFeature records in document order.
    """

    @abstractmethod
    def read(self) -> Iterator[RawFeature]:
        """
        Yield every supported feature of the collection.

        Returns:
            Iterator of RawFeature in source order
        """
        pass


class GeoJSONReader(FeatureReader):
    """
    FeatureReader for GeoJSON FeatureCollection, Feature and bare
    geometry documents.
    """

    def __init__(self, source: Union[str, Path, Dict[str, Any]]):
        """
        Args:
            source: Path to a .geojson file, or an already parsed document

        Raises:
            FileNotFoundError: If source is a path that does not exist
            TypeError: If source is neither a path nor a dict
        """
        if isinstance(source, (str, Path)):
            path = Path(source)
            if not path.exists():
                raise FileNotFoundError(f"GeoJSON file not found: {path}")
            logger.info(f"Reading GeoJSON file: {path}")
            with open(path, encoding='utf-8') as f:
                source = json.load(f)

        if not isinstance(source, dict):
            raise TypeError(f"Expected dict, str, or Path, got {type(source)}")

        self.document = source

    def read(self) -> Iterator[RawFeature]:
        gtype = self.document.get("type")

        if gtype == "FeatureCollection":
            features = self.document.get("features") or []
        elif gtype == "Feature":
            features = [self.document]
        elif gtype in _GEOMETRY_TYPES:
            features = [{"type": "Feature", "geometry": self.document, "properties": {}}]
        else:
            raise ValueError(f"Unsupported GeoJSON type: {gtype}")

        skipped = 0
        for index, feature in enumerate(features):
            raw = _to_raw_feature(feature, index)
            if raw is None:
                skipped += 1
                continue
            yield raw

        if skipped:
            logger.debug(f"Skipped {skipped} features with missing or unsupported geometry")


_GEOMETRY_TYPES = {kind.value: kind for kind in GeometryKind}


def _to_raw_feature(feature: Dict[str, Any], index: int) -> Union[RawFeature, None]:
    """Convert one GeoJSON feature dict, or None if it cannot be used."""
    geometry = feature.get("geometry")
    if not geometry:
        return None

    kind = _GEOMETRY_TYPES.get(geometry.get("type"))
    if kind is None:
        logger.debug(f"Feature {index}: unsupported geometry {geometry.get('type')}")
        return None

    properties = feature.get("properties") or {}
    return RawFeature(
        feature_id=_feature_id(feature, properties, index),
        geometry_kind=kind,
        coordinates=geometry.get("coordinates") or [],
        properties=properties,
    )


def _feature_id(feature: Dict[str, Any], properties: Dict[str, Any], index: int) -> str:
    """Pick @id, then id, then the feature index; '/' becomes '_'."""
    raw_id = properties.get("@id")
    if raw_id is None:
        raw_id = feature.get("id")
    if raw_id is None:
        raw_id = index
    return str(raw_id).replace('/', '_')


def list_geojson_files(directory: Union[str, Path]) -> List[Path]:
    """
    List the .geojson files of a directory in sorted order.

    Raises:
        FileNotFoundError: If directory does not exist
    """
    path = Path(directory)
    if not path.is_dir():
        raise FileNotFoundError(f"Input directory not found: {path}")
    return sorted(p for p in path.iterdir() if p.suffix == ".geojson")
