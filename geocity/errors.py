"""
Exception hierarchy for GeoCity Scene Generator.
"""


class GeoCityError(Exception):
    """Base class for errors raised by the pipeline."""
    pass


class GeometryError(GeoCityError):
    """Raised when a ring is too short to build geometry from."""
    pass


class DegenerateBoundsError(GeoCityError):
    """Raised when the scene bounds have zero extent on an axis."""
    pass
