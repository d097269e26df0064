"""
Coordinate normalizer for GeoCity Scene Generator.

Computes the global scene bounds over every raw ring (outer rings and
holes) and rescales all elements into a square of side frame_size
centred at the origin. The linear min/max map is applied per axis, so
the aspect ratio of the source extent is not preserved.
"""

from dataclasses import replace
from typing import List, Sequence
import logging

from ..models.element import Element, ElementKind
from ..models.geometry import BBox, Point2D
from ..errors import DegenerateBoundsError
from ..config import FRAME_SIZE

logger = logging.getLogger(__name__)


def compute_scene_bounds(elements: Sequence[Element]) -> BBox:
    """
    Bounding box of every raw coordinate of every non-'other' element.

    Raises:
        DegenerateBoundsError: If no element contributes a coordinate
    """
    bounds = None

    for element in elements:
        if element.kind == ElementKind.OTHER:
            continue

        for ring in [element.outer_ring] + list(element.holes):
            for p in ring:
                if bounds is None:
                    bounds = BBox(p.x, p.y, p.x, p.y)
                else:
                    bounds.include(p)

    if bounds is None:
        raise DegenerateBoundsError("No coordinates to compute scene bounds from")

    logger.debug(
        f"Scene bounds: ({bounds.min_x}, {bounds.min_y}) - "
        f"({bounds.max_x}, {bounds.max_y})"
    )
    return bounds


def normalize_point(p: Point2D, bounds: BBox, frame_size: float = FRAME_SIZE) -> Point2D:
    """Map one raw point into the normalized frame."""
    half = frame_size / 2
    return Point2D(
        (p.x - bounds.min_x) / bounds.width * frame_size - half,
        (p.y - bounds.min_y) / bounds.height * frame_size - half,
    )


def normalize(
    elements: Sequence[Element],
    bounds: BBox,
    frame_size: float = FRAME_SIZE
) -> List[Element]:
    """
    Return copies of elements with normalized rings filled in.

    The input elements are not modified; each outer ring stays paired
    with its own holes.

    Raises:
        DegenerateBoundsError: If bounds have zero extent on either axis
    """
    if bounds.is_degenerate():
        raise DegenerateBoundsError(
            f"Scene bounds have zero extent "
            f"(width={bounds.width}, height={bounds.height})"
        )

    result = []
    for element in elements:
        outer = [normalize_point(p, bounds, frame_size) for p in element.outer_ring]
        holes = [
            [normalize_point(p, bounds, frame_size) for p in hole]
            for hole in element.holes
        ]
        result.append(replace(
            element,
            normalized_outer_ring=outer,
            normalized_holes=holes,
        ))

    logger.info(f"Normalized {len(result)} elements into a {frame_size} frame")
    return result
