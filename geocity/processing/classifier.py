"""
Attribute classifier for GeoCity Scene Generator.

Maps the free-form key/value attributes of a map feature to the closed
Element taxonomy and derives the attributes the mesh builder needs:
levels, extrusion height, roof kind, roof height, line thickness and
override color.

Classification is a pure function of (geometry kind, tags, frame size).
Malformed values never raise; they take the documented default.
"""

from decimal import Decimal, InvalidOperation, ROUND_FLOOR, ROUND_HALF_UP
from typing import Any, Mapping, Optional, Tuple
import logging

from ..models.element import (
    Element,
    ElementKind,
    RoofKind,
    TreeKind,
    BuildingKind,
)
from ..io.geojson_reader import GeometryKind
from ..config import (
    FRAME_SIZE,
    GRASS_VALUES,
    PEDESTRIAN_VALUES,
    TALL_BUILDING_VALUES,
    DEFAULT_LEVEL,
    TALL_BUILDING_LEVEL,
    LEVEL_HEIGHT_M,
    WATER_HEIGHT,
    FOREST_HEIGHT,
    HIGHWAY_HEIGHT,
    PEDESTRIAN_HEIGHT,
    DEFAULT_HEIGHT,
    DEFAULT_ROOF_HEIGHT,
    PEDESTRIAN_THICKNESS,
    RIVER_THICKNESS,
    WATERWAY_THICKNESS,
    DEFAULT_THICKNESS,
    MULTILINE_THICKNESS,
    BUILDING_COLOR_NAMES,
    WHITE,
)

logger = logging.getLogger(__name__)

RGB = Tuple[float, float, float]

_LEVEL_HEIGHT = Decimal(LEVEL_HEIGHT_M)

_POLYGON_KINDS = (GeometryKind.POLYGON, GeometryKind.MULTI_POLYGON)

# Extrusion height per kind; buildings are handled separately
_KIND_HEIGHTS = {
    ElementKind.WATER: WATER_HEIGHT,
    ElementKind.WATERWAY: WATER_HEIGHT,
    ElementKind.FOREST: FOREST_HEIGHT,
    ElementKind.HIGHWAY: HIGHWAY_HEIGHT,
    ElementKind.PEDESTRIAN: PEDESTRIAN_HEIGHT,
}


def classify(
    geometry_kind: GeometryKind,
    tags: Mapping[str, Any],
    frame_size: float = FRAME_SIZE
) -> Element:
    """
    Classify one feature from its geometry kind and tags.

    The returned Element carries no geometry; the feature expander
    fills in name and rings.

    Args:
        geometry_kind: Geometry type of the feature
        tags: Attribute map (values compared as strings)
        frame_size: Side of the normalized frame

    Returns:
        Element with kind and derived attributes set
    """
    tags = {str(k): str(v) for k, v in tags.items() if v is not None}
    element = Element()

    if geometry_kind in _POLYGON_KINDS:
        _classify_polygon(element, tags, frame_size)
    elif geometry_kind == GeometryKind.LINE_STRING:
        _classify_line(element, tags)
    elif geometry_kind == GeometryKind.MULTI_LINE_STRING:
        _classify_multiline(element, tags)
    elif geometry_kind == GeometryKind.POINT:
        _classify_point(element, tags)

    if element.kind == ElementKind.BUILDING:
        element.level = derive_level(tags)

    element.height = element_height(element.kind, element.level, frame_size)
    return element


def _classify_polygon(element: Element, tags: Mapping[str, str], frame_size: float) -> None:
    if 'building' in tags:
        element.kind = ElementKind.BUILDING
        element.roof_kind = RoofKind.from_osm_tag(tags.get('roof:shape'))
        element.roof_height = roof_height(tags.get('roof:height'), frame_size)

        if 'historic' in tags or tags.get('tourism') == 'attraction':
            element.building_kind = BuildingKind.HISTORIC
            if 'building:colour' in tags:
                element.override_color = resolve_color_name(tags['building:colour'])

    elif 'water' in tags:
        element.kind = ElementKind.WATER

    elif 'waterway' in tags:
        element.kind = ElementKind.WATERWAY

    elif 'landuse' in tags:
        landuse = tags['landuse']
        if landuse == 'forest':
            element.kind = ElementKind.FOREST
        elif landuse in GRASS_VALUES:
            element.kind = ElementKind.GRASS

    elif 'natural' in tags:
        natural = tags['natural']
        if natural == 'wood':
            element.kind = ElementKind.FOREST
        elif natural in GRASS_VALUES:
            element.kind = ElementKind.GRASS
        elif natural == 'water':
            element.kind = ElementKind.WATER

    elif 'leisure' in tags:
        if tags['leisure'] in GRASS_VALUES:
            element.kind = ElementKind.GRASS

    elif 'highway' in tags:
        element.kind = _highway_kind(tags['highway'])


def _classify_line(element: Element, tags: Mapping[str, str]) -> None:
    if 'highway' in tags:
        element.kind = _highway_kind(tags['highway'])
    elif 'natural' in tags:
        element.kind = ElementKind.GRASS
    elif 'waterway' in tags:
        element.kind = ElementKind.WATERWAY

    element.thickness = line_thickness(element.kind, tags.get('waterway'))


def _classify_multiline(element: Element, tags: Mapping[str, str]) -> None:
    if 'waterway' in tags:
        element.kind = ElementKind.WATERWAY
        element.thickness = MULTILINE_THICKNESS
    else:
        element.thickness = DEFAULT_THICKNESS


def _classify_point(element: Element, tags: Mapping[str, str]) -> None:
    if tags.get('natural') != 'tree':
        return

    element.kind = ElementKind.TREE

    if 'type' in tags:
        element.tree_kind = TreeKind.from_type_tag(tags['type'])
    elif 'tree' in tags:
        element.tree_kind = TreeKind.STANDARD
    elif 'genus' in tags:
        element.tree_kind = TreeKind.from_genus(tags['genus'])


def _highway_kind(value: str) -> ElementKind:
    if value in PEDESTRIAN_VALUES:
        return ElementKind.PEDESTRIAN
    return ElementKind.HIGHWAY


def is_numeric(value: Optional[str]) -> bool:
    """
    True if value reads as a plain number.

    Values with letters, ';' or ',' are rejected outright (e.g. "3;4",
    "12 m", "2,5").
    """
    return parse_number(value) is not None


def parse_number(value: Optional[str]) -> Optional[Decimal]:
    """Parse a tag value as Decimal, or None if it is not numeric."""
    if value is None:
        return None

    text = str(value).strip()
    if not text or any(c.isalpha() or c in ';,' for c in text):
        return None

    try:
        return Decimal(text)
    except InvalidOperation:
        return None


def derive_level(tags: Mapping[str, str]) -> int:
    """
    Derive the number of levels of a building.

    Rules, later ones overriding earlier ones:
    1. building:levels (or levels) numeric and >= 0: round-half-up + 1
    2. otherwise DEFAULT_LEVEL
    3. no levels tag and a numeric height: floor(height / 3.2),
       building:height taking precedence over height
    4. building in the tall vocabulary: TALL_BUILDING_LEVEL
    """
    level = DEFAULT_LEVEL

    levels_tag = tags.get('building:levels', tags.get('levels'))
    value = parse_number(levels_tag)
    if value is not None and value >= 0:
        level = int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP)) + 1

    if levels_tag is None:
        height = _height_tag(tags)
        if height is not None:
            level = int((height / _LEVEL_HEIGHT).to_integral_value(rounding=ROUND_FLOOR))

    if tags.get('building') in TALL_BUILDING_VALUES:
        level = TALL_BUILDING_LEVEL

    return level


def _height_tag(tags: Mapping[str, str]) -> Optional[Decimal]:
    """Numeric, non-negative building:height or height."""
    for key in ('building:height', 'height'):
        value = parse_number(tags.get(key))
        if value is not None and value >= 0:
            return value
    return None


def element_height(kind: ElementKind, level: int, frame_size: float = FRAME_SIZE) -> float:
    """Extrusion height in world units."""
    if kind == ElementKind.BUILDING and level > 0:
        return (level + frame_size / 20) / 20
    return _KIND_HEIGHTS.get(kind, DEFAULT_HEIGHT)


def roof_height(value: Optional[str], frame_size: float = FRAME_SIZE) -> float:
    """
    Roof rise from the roof:height tag.

    Absent gives 0, non-numeric gives DEFAULT_ROOF_HEIGHT, numeric is
    scaled by the frame size.
    """
    if value is None:
        return 0.0

    number = parse_number(value)
    if number is None:
        logger.debug(f"Non-numeric roof:height {value!r}, using default")
        return DEFAULT_ROOF_HEIGHT

    return float(number) / frame_size


def line_thickness(kind: ElementKind, waterway: Optional[str] = None) -> float:
    """Ribbon half-width for a LineString of the given kind."""
    if kind == ElementKind.PEDESTRIAN:
        return PEDESTRIAN_THICKNESS
    if kind == ElementKind.WATERWAY:
        return RIVER_THICKNESS if waterway == 'river' else WATERWAY_THICKNESS
    return DEFAULT_THICKNESS


def resolve_color_name(name: str) -> RGB:
    """Look up a building:colour name; unknown names give white."""
    return BUILDING_COLOR_NAMES.get(name.strip().lower(), WHITE)
