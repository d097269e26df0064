"""
Element data model for GeoCity Scene Generator.

Provides the Element dataclass (one classified piece of map geometry)
and the closed enums it is built from, plus TreeInstance for placed
tree models.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from .geometry import Point2D, Point3D
from ..config import (
    GABLED_ROOF_SHAPES,
    FLAT_ROOF_SHAPES,
    TREE_GENUS_SPECIES,
    TREE_TYPE_SPECIES,
)


class ElementKind(Enum):
    """Semantic class of a map element."""
    BUILDING = "building"
    HIGHWAY = "highway"
    PEDESTRIAN = "pedestrian"
    WATER = "water"
    WATERWAY = "waterway"
    GRASS = "grass"
    FOREST = "forest"
    SAND = "sand"
    TREE = "tree"
    OTHER = "other"


class RoofKind(Enum):
    """Roof classification (buildings only)."""
    NONE = "none"
    FLAT = "flat"
    GABLED = "gabled"

    @classmethod
    def from_osm_tag(cls, roof_shape: Optional[str]) -> 'RoofKind':
        """
        Determine roof kind from the roof:shape tag.

        Args:
            roof_shape: Value of roof:shape tag (may be None)

        Returns:
            Appropriate RoofKind enum value
        """
        if roof_shape is None:
            return cls.NONE

        if roof_shape in GABLED_ROOF_SHAPES:
            return cls.GABLED
        elif roof_shape in FLAT_ROOF_SHAPES:
            return cls.FLAT
        else:
            return cls.NONE


class TreeKind(Enum):
    """Tree species used to pick a tree model."""
    STANDARD = "standard"
    PALM = "palm"
    OAK = "oak"
    PINE = "pine"
    CYPRESS = "cypress"

    @classmethod
    def from_type_tag(cls, tree_type: str) -> 'TreeKind':
        """Resolve the type=* tag (palm/pine/cypress, else standard)."""
        if tree_type in TREE_TYPE_SPECIES:
            return cls(tree_type)
        return cls.STANDARD

    @classmethod
    def from_genus(cls, genus: str) -> 'TreeKind':
        """Resolve the genus=* tag through the genus table."""
        species = TREE_GENUS_SPECIES.get(genus)
        if species is None:
            return cls.STANDARD
        return cls(species)


class BuildingKind(Enum):
    """Building style."""
    STANDARD = "standard"
    HISTORIC = "historic"


@dataclass
class Element:
    """
    One classified piece of map geometry.

    Attributes:
        name: Stable output name (e.g. building_way_123450)
        feature_id: Source identifier with '/' replaced by '_'
        kind: Semantic class
        roof_kind: Requested roof (buildings only)
        tree_kind: Species (trees only)
        building_kind: Standard or historic (buildings only)
        override_color: RGB resolved from building:colour, or None
        level: Number of levels (buildings), 0 otherwise
        height: Extrusion height in world units
        roof_height: Roof rise above the eaves in world units
        thickness: Ribbon half-width for line features (raw units)
        outer_ring: Raw outer boundary
        holes: Raw inner rings

    Filled in by the normalizer:
        normalized_outer_ring: outer_ring in the normalized frame
        normalized_holes: holes in the normalized frame
    """
    name: str = ""
    feature_id: str = ""
    kind: ElementKind = ElementKind.OTHER
    roof_kind: RoofKind = RoofKind.NONE
    tree_kind: TreeKind = TreeKind.STANDARD
    building_kind: BuildingKind = BuildingKind.STANDARD
    override_color: Optional[Tuple[float, float, float]] = None

    level: int = 0
    height: float = 0.0
    roof_height: float = 0.0
    thickness: float = 0.0

    outer_ring: List[Point2D] = field(default_factory=list)
    holes: List[List[Point2D]] = field(default_factory=list)
    normalized_outer_ring: List[Point2D] = field(default_factory=list)
    normalized_holes: List[List[Point2D]] = field(default_factory=list)

    @property
    def has_holes(self) -> bool:
        """Check if element has any holes."""
        return len(self.holes) > 0

    @property
    def is_historic(self) -> bool:
        return self.building_kind == BuildingKind.HISTORIC


@dataclass
class TreeInstance:
    """
    A placed instance of a pre-authored tree model.

    Attributes:
        name: Output name (point_<id>)
        species: Tree species
        shape: Relative path of the tree model
        color: Foliage tint
        position: Scene position (Y up)
    """
    name: str
    species: TreeKind
    shape: str
    color: Tuple[float, float, float]
    position: Point3D
