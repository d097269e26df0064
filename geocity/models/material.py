"""
Material data model for GeoCity Scene Generator.

A Material is what the scene sink needs to shade a mesh: a base color,
an optional texture reference and a few scalar surface responses.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

DEFAULT_ROUGHNESS = 1.0


@dataclass(frozen=True)
class TextureRef:
    """Named reference to an image file (path relative to the assets dir)."""
    name: str
    path: str


@dataclass
class Material:
    """
    Surface description for one mesh.

    Attributes:
        color: Base RGB color in [0, 1]
        texture: Optional color texture; when set it replaces color
        specular: Specular weight
        transmission: Transmission weight (1 = fully transmissive)
        metallic: Metallic weight
        roughness: Surface roughness
    """
    color: Tuple[float, float, float] = (1.0, 1.0, 1.0)
    texture: Optional[TextureRef] = None
    specular: float = 0.0
    transmission: float = 0.0
    metallic: float = 0.0
    roughness: float = DEFAULT_ROUGHNESS
