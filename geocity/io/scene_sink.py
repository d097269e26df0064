"""
Scene sink interface for GeoCity Scene Generator.

The pipeline never writes a scene format directly: it hands named
meshes, tree instances, the camera and the sky to a SceneSink.
InMemorySceneSink keeps everything in lists so that exporters (and
tests) can read it back.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
import logging

from ..models.element import TreeInstance
from ..models.mesh import MeshData
from ..config import (
    CAMERA_FRAME,
    CAMERA_LENS,
    CAMERA_APERTURE,
    CAMERA_FOCUS,
    CAMERA_FILM,
    CAMERA_ASPECT,
)

logger = logging.getLogger(__name__)

Vec3 = Tuple[float, float, float]


@dataclass
class Camera:
    """
    Pinhole/thin-lens camera.

    Attributes:
        frame: (x axis, y axis, z axis, origin)
        lens: Focal length
        aperture: Lens aperture (0 = pinhole)
        focus: Focus distance
        film: Film width
        aspect: Film aspect ratio
    """
    frame: Tuple[Vec3, Vec3, Vec3, Vec3] = CAMERA_FRAME
    lens: float = CAMERA_LENS
    aperture: float = CAMERA_APERTURE
    focus: float = CAMERA_FOCUS
    film: float = CAMERA_FILM
    aspect: float = CAMERA_ASPECT


class SceneSink(ABC):
    """
    Abstract interface for scene consumers.
    """

    @abstractmethod
    def add_mesh(self, mesh: MeshData) -> None:
        """Add a named solid."""
        pass

    @abstractmethod
    def add_tree(self, instance: TreeInstance) -> None:
        """Add an instance of a pre-authored tree model."""
        pass

    @abstractmethod
    def set_camera(self, camera: Camera) -> None:
        """Set the scene camera."""
        pass

    @abstractmethod
    def add_sky(self) -> None:
        """Add a sky backdrop."""
        pass


@dataclass
class InMemorySceneSink(SceneSink):
    """SceneSink that stores everything it receives, in arrival order."""
    meshes: List[MeshData] = field(default_factory=list)
    trees: List[TreeInstance] = field(default_factory=list)
    camera: Optional[Camera] = None
    has_sky: bool = False
    _names: Dict[str, int] = field(default_factory=dict, repr=False)

    def add_mesh(self, mesh: MeshData) -> None:
        """
        Store a mesh under a unique name.

        A name already in the scene gets a "_dup<k>" suffix and the mesh
        is renamed in place.
        """
        if mesh.name in self._names:
            k = 1
            while f"{mesh.name}_dup{k}" in self._names:
                k += 1
            unique = f"{mesh.name}_dup{k}"
            logger.warning(f"Duplicate mesh name {mesh.name}, renamed to {unique}")
            mesh.name = unique
        self._names[mesh.name] = len(self.meshes)
        self.meshes.append(mesh)

    def add_tree(self, instance: TreeInstance) -> None:
        self.trees.append(instance)

    def set_camera(self, camera: Camera) -> None:
        self.camera = camera

    def add_sky(self) -> None:
        self.has_sky = True

    def get_mesh(self, name: str) -> Optional[MeshData]:
        """Look up a mesh by name."""
        idx = self._names.get(name)
        return None if idx is None else self.meshes[idx]

    def mesh_names(self) -> List[str]:
        return [mesh.name for mesh in self.meshes]
