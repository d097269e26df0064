"""
Material resolution for GeoCity Scene Generator.

Maps element kinds to palette colors, and buildings to their cap color
and wall texture bucket.
"""

from typing import Optional

from ..models.element import Element, ElementKind
from ..models.material import Material, TextureRef
from ..config import (
    BUILDING_COLOR,
    HIGHWAY_COLOR,
    PEDESTRIAN_COLOR,
    WATER_COLOR,
    SAND_COLOR,
    FOREST_COLOR,
    GRASS_COLOR,
    FALLBACK_COLOR,
    LOW_RISE_COLOR,
    ROOF_COLOR,
    FLOOR_COLOR,
    WATER_SPECULAR,
    WATER_TRANSMISSION,
    WATER_METALLIC,
    WATER_ROUGHNESS,
    HIGHWAY_SPECULAR,
    HIGHWAY_ROUGHNESS,
    LANDMARK_FEATURE_ID,
    LANDMARK_COLOR,
    LANDMARK_TEXTURE,
    TEXTURE_DIR,
    TEXTURE_FILES,
)

KIND_COLORS = {
    ElementKind.BUILDING: BUILDING_COLOR,
    ElementKind.HIGHWAY: HIGHWAY_COLOR,
    ElementKind.PEDESTRIAN: PEDESTRIAN_COLOR,
    ElementKind.WATER: WATER_COLOR,
    ElementKind.WATERWAY: WATER_COLOR,
    ElementKind.SAND: SAND_COLOR,
    ElementKind.FOREST: FOREST_COLOR,
    ElementKind.GRASS: GRASS_COLOR,
}

LOW_RISE_MAX_LEVEL = 3


def kind_color(kind: ElementKind):
    """Palette color of an element kind (fallback for unlisted kinds)."""
    return KIND_COLORS.get(kind, FALLBACK_COLOR)


def texture_ref(name: str) -> TextureRef:
    """Build a TextureRef for a known texture name."""
    return TextureRef(name=name, path=f"{TEXTURE_DIR}/{TEXTURE_FILES[name]}")


def is_landmark(element: Element) -> bool:
    return element.feature_id == LANDMARK_FEATURE_ID


def ground_material(kind: ElementKind) -> Material:
    """
    Material for a ground slab (and the cap default of any kind).

    Water surfaces are glossy and transmissive; asphalt is rough with
    a moderate specular term.
    """
    color = kind_color(kind)

    if kind in (ElementKind.WATER, ElementKind.WATERWAY):
        return Material(
            color=color,
            specular=WATER_SPECULAR,
            transmission=WATER_TRANSMISSION,
            metallic=WATER_METALLIC,
            roughness=WATER_ROUGHNESS,
        )

    if kind == ElementKind.HIGHWAY:
        return Material(
            color=color,
            specular=HIGHWAY_SPECULAR,
            roughness=HIGHWAY_ROUGHNESS,
        )

    return Material(color=color)


def building_cap_material(element: Element) -> Material:
    """
    Cap color of a building, first match wins:
    landmark, historic with a colour tag, low-rise, kind default.
    """
    if is_landmark(element):
        return Material(color=LANDMARK_COLOR)

    if element.is_historic and element.override_color is not None:
        return Material(color=element.override_color)

    if element.level < LOW_RISE_MAX_LEVEL and not element.is_historic:
        return Material(color=LOW_RISE_COLOR)

    return ground_material(element.kind)


def wall_texture_for_level(level: int) -> Optional[TextureRef]:
    """
    Wall texture bucket for a level count.

    Levels 1-8 have their own texture, higher levels share range
    textures. Levels 0 and 101 have none.
    """
    if 1 <= level <= 8:
        name = f"texture{level}"
    elif 8 < level < 11:
        name = 'texture8_11'
    elif 10 < level < 41:
        name = 'texture10_41'
    elif 40 < level < 71:
        name = 'texture40_71'
    elif 70 < level < 101:
        name = 'texture70_101'
    elif level > 101:
        name = 'texturemore_101'
    else:
        return None

    return texture_ref(name)


def building_wall_material(element: Element) -> Material:
    """
    Wall material of a building.

    The landmark gets its own texture; historic buildings use their
    colour tag (or the default color); everything else gets the
    texture bucket of its level.
    """
    if is_landmark(element):
        return Material(color=BUILDING_COLOR, texture=texture_ref(LANDMARK_TEXTURE))

    if element.is_historic:
        return Material(color=element.override_color or BUILDING_COLOR)

    return Material(color=BUILDING_COLOR, texture=wall_texture_for_level(element.level))


def roof_material() -> Material:
    return Material(color=ROOF_COLOR)


def floor_material() -> Material:
    return Material(color=FLOOR_COLOR)
