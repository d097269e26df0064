"""
Feature expander for GeoCity Scene Generator.

Turns RawFeature records into named Elements:
- Polygon / MultiPolygon: one element per polygon part, holes kept
  with their outer ring
- LineString / MultiLineString: one element per segment, stroked into
  a 4-point ribbon footprint
- Point: one element carrying the single point

Features classified as 'other' produce no elements. Rings are cleaned
(closing vertex and consecutive duplicates dropped); an outer ring with
fewer than 3 points drops its element, a short hole is dropped alone.
"""

from dataclasses import dataclass, replace
from typing import Any, Iterable, List, Optional, Sequence
import logging

from ..models.element import Element, ElementKind
from ..models.geometry import Point2D
from ..io.geojson_reader import GeometryKind, RawFeature
from ..utils.polygon_utils import clean_ring
from ..config import FRAME_SIZE
from .classifier import classify
from .stroker import stroke

logger = logging.getLogger(__name__)


@dataclass
class ExpansionStats:
    """Counters collected while expanding features."""
    features: int = 0
    elements: int = 0
    other_features: int = 0
    malformed_features: int = 0
    dropped_rings: int = 0
    dropped_holes: int = 0


def expand_features(
    features: Iterable[RawFeature],
    frame_size: float = FRAME_SIZE,
    stats: Optional[ExpansionStats] = None
) -> List[Element]:
    """
    Expand every feature, preserving input order.

    Args:
        features: Raw features (e.g. from a FeatureReader)
        frame_size: Side of the normalized frame
        stats: Optional counters to update

    Returns:
        Flat list of Elements
    """
    if stats is None:
        stats = ExpansionStats()

    elements: List[Element] = []
    for raw in features:
        elements.extend(elements_from_feature(raw, frame_size, stats))

    logger.info(
        f"Expanded {stats.features} features into {stats.elements} elements "
        f"({stats.other_features} unclassified, {stats.dropped_rings} rings dropped)"
    )
    return elements


def elements_from_feature(
    raw: RawFeature,
    frame_size: float = FRAME_SIZE,
    stats: Optional[ExpansionStats] = None
) -> List[Element]:
    """
    Expand one feature into named Elements.

    Args:
        raw: Feature to expand
        frame_size: Side of the normalized frame
        stats: Optional counters to update

    Returns:
        List of Elements (possibly empty)
    """
    if stats is None:
        stats = ExpansionStats()
    stats.features += 1

    template = classify(raw.geometry_kind, raw.properties, frame_size)
    if template.kind == ElementKind.OTHER:
        stats.other_features += 1
        logger.debug(f"Feature {raw.feature_id}: unclassified, skipped")
        return []

    template.feature_id = raw.feature_id

    try:
        if raw.geometry_kind == GeometryKind.POLYGON:
            elements = _expand_polygons(template, [raw.coordinates], stats)
        elif raw.geometry_kind == GeometryKind.MULTI_POLYGON:
            elements = _expand_polygons(template, raw.coordinates, stats)
        elif raw.geometry_kind == GeometryKind.LINE_STRING:
            elements = _expand_lines(template, [raw.coordinates], "line")
        elif raw.geometry_kind == GeometryKind.MULTI_LINE_STRING:
            elements = _expand_lines(template, raw.coordinates, "multiline")
        else:
            elements = _expand_point(template, raw.coordinates)
    except (TypeError, ValueError, IndexError) as e:
        stats.malformed_features += 1
        logger.warning(f"Feature {raw.feature_id}: malformed coordinates ({e}), skipped")
        return []

    stats.elements += len(elements)
    return elements


def _expand_polygons(
    template: Element,
    polygons: Sequence[Any],
    stats: ExpansionStats
) -> List[Element]:
    elements = []
    fid = template.feature_id

    for part, rings in enumerate(polygons):
        name = f"building_{fid}{part}"
        if not rings:
            continue

        outer = clean_ring(_to_points(rings[0]))
        if len(outer) < 3:
            stats.dropped_rings += 1
            logger.warning(f"{name}: outer ring has {len(outer)} points, dropped")
            continue

        holes = []
        for hole_idx, coords in enumerate(rings[1:]):
            hole = clean_ring(_to_points(coords))
            if len(hole) < 3:
                stats.dropped_holes += 1
                logger.warning(f"{name}: hole {hole_idx} has {len(hole)} points, dropped")
                continue
            holes.append(hole)

        elements.append(replace(template, name=name, outer_ring=outer, holes=holes))

    return elements


def _expand_lines(
    template: Element,
    lines: Sequence[Any],
    prefix: str
) -> List[Element]:
    elements = []
    fid = template.feature_id
    count = 0

    for coords in lines:
        points = _drop_repeats(_to_points(coords))
        for p0, p1 in zip(points, points[1:]):
            quad = stroke(p0, p1, template.thickness)
            elements.append(replace(
                template,
                name=f"{prefix}_{fid}{count}",
                outer_ring=quad,
                holes=[],
            ))
            count += 1

    return elements


def _expand_point(template: Element, coords: Any) -> List[Element]:
    point = _to_point(coords)
    return [replace(template, name=f"point_{template.feature_id}", outer_ring=[point], holes=[])]


def _to_point(coords: Any) -> Point2D:
    return Point2D(float(coords[0]), float(coords[1]))


def _to_points(coords: Sequence[Any]) -> List[Point2D]:
    return [_to_point(c) for c in coords]


def _drop_repeats(points: List[Point2D]) -> List[Point2D]:
    """Drop consecutive duplicates (zero-length segments)."""
    result: List[Point2D] = []
    for p in points:
        if not result or result[-1] != p:
            result.append(p)
    return result
