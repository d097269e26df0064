"""
Mesh data model for GeoCity Scene Generator.

Provides MeshData, the named (positions, faces, material) unit handed
to the scene sink. One classified element may produce several meshes.
"""

from dataclasses import dataclass, field
from typing import List, Tuple, Optional

from .material import Material


@dataclass
class MeshData:
    """
    Generated mesh data for one scene object.

    Faces are triangles or quads and use 0-based indices into vertices.
    Quads are kept as quads (they are not split) so that wall shells
    reach the sink in the shape they were built.

    Attributes:
        name: Unique object name in the scene
        vertices: List of (x, y, z) vertex positions, Y up
        faces: List of face vertex indices (3 or 4 per face, 0-based)
        material: Surface description
    """
    name: str = ""
    vertices: List[Tuple[float, float, float]] = field(default_factory=list)
    faces: List[List[int]] = field(default_factory=list)
    material: Material = field(default_factory=Material)

    def vertex_count(self) -> int:
        """Get number of vertices."""
        return len(self.vertices)

    def face_count(self) -> int:
        """Get number of faces."""
        return len(self.faces)

    def triangle_count(self) -> int:
        """Get number of triangle faces."""
        return sum(1 for face in self.faces if len(face) == 3)

    def quad_count(self) -> int:
        """Get number of quad faces."""
        return sum(1 for face in self.faces if len(face) == 4)

    def add_vertex(self, x: float, y: float, z: float) -> int:
        """
        Add a vertex and return its 0-based index.

        Args:
            x, y, z: Vertex coordinates

        Returns:
            0-based index of the new vertex
        """
        self.vertices.append((x, y, z))
        return len(self.vertices) - 1

    def add_triangle(self, v1: int, v2: int, v3: int) -> None:
        """
        Add a triangle face.

        Args:
            v1, v2, v3: Vertex indices (0-based)
        """
        self.faces.append([v1, v2, v3])

    def add_quad(self, v1: int, v2: int, v3: int, v4: int) -> None:
        """
        Add a quad face (kept as a single face).

        Args:
            v1, v2, v3, v4: Vertex indices (0-based)
        """
        self.faces.append([v1, v2, v3, v4])

    def validate(self) -> List[str]:
        """
        Validate mesh integrity.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        if not self.vertices:
            errors.append("Mesh has no vertices")
            return errors

        max_idx = len(self.vertices) - 1

        for i, face in enumerate(self.faces):
            if len(face) not in (3, 4):
                errors.append(f"Face {i} has {len(face)} vertices (expected 3 or 4)")

            for idx in face:
                if idx < 0 or idx > max_idx:
                    errors.append(
                        f"Face {i} has invalid vertex index {idx} "
                        f"(valid range: 0-{max_idx})"
                    )

        return errors

    def compute_bounds(self) -> Optional[Tuple[Tuple[float, float, float],
                                                 Tuple[float, float, float]]]:
        """
        Compute bounding box of the mesh.

        Returns:
            ((min_x, min_y, min_z), (max_x, max_y, max_z)) or None if empty
        """
        if not self.vertices:
            return None

        xs = [v[0] for v in self.vertices]
        ys = [v[1] for v in self.vertices]
        zs = [v[2] for v in self.vertices]

        return (
            (min(xs), min(ys), min(zs)),
            (max(xs), max(ys), max(zs))
        )

    def __repr__(self) -> str:
        return (
            f"MeshData(name={self.name!r}, vertices={len(self.vertices)}, "
            f"faces={len(self.faces)})"
        )
