"""
Core geometry types for GeoCity Scene Generator.

Provides Point2D, Point3D and BBox used throughout the pipeline for
representing footprints, scene positions and the global scene bounds.
"""

from dataclasses import dataclass
import math


@dataclass(frozen=True, slots=True)
class Point2D:
    """2D point in map or normalized coordinates."""
    x: float
    y: float

    def distance_to(self, other: 'Point2D') -> float:
        """Euclidean distance to another point."""
        dx = self.x - other.x
        dy = self.y - other.y
        return math.sqrt(dx * dx + dy * dy)

    def __sub__(self, other: 'Point2D') -> 'Point2D':
        """Vector subtraction."""
        return Point2D(self.x - other.x, self.y - other.y)

    def __add__(self, other: 'Point2D') -> 'Point2D':
        """Vector addition."""
        return Point2D(self.x + other.x, self.y + other.y)

    def cross(self, other: 'Point2D') -> float:
        """2D cross product (returns scalar z-component)."""
        return self.x * other.y - self.y * other.x


@dataclass(frozen=True, slots=True)
class Point3D:
    """3D point in scene coordinates (Y up)."""
    x: float
    y: float
    z: float

    def as_tuple(self) -> tuple:
        return (self.x, self.y, self.z)


@dataclass(slots=True)
class BBox:
    """Axis-aligned bounding box in 2D."""
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        """Width in X direction."""
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        """Height in Y direction."""
        return self.max_y - self.min_y

    def is_degenerate(self) -> bool:
        """True if the box has zero extent along either axis."""
        return self.width == 0 or self.height == 0

    def include(self, p: Point2D) -> None:
        """Grow the box in place so that it contains p."""
        self.min_x = min(self.min_x, p.x)
        self.min_y = min(self.min_y, p.y)
        self.max_x = max(self.max_x, p.x)
        self.max_y = max(self.max_y, p.y)
