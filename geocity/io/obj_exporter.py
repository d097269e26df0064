"""
OBJ scene exporter for GeoCity Scene Generator.

Exports the contents of an InMemorySceneSink to Wavefront OBJ:
- One 'o' object per mesh, with its own material
- Triangles and quads written as they were built
- A sibling .mtl file with colors, texture maps and PBR extensions
- A <stem>_instances.json file with the camera and tree instances,
  which OBJ cannot express
"""

import json
import os
from dataclasses import dataclass
from typing import Dict, List, Optional
import logging

from ..models.material import DEFAULT_ROUGHNESS, Material
from ..config import OBJ_VERTEX_PRECISION
from .scene_sink import InMemorySceneSink

logger = logging.getLogger(__name__)


@dataclass
class ExportStats:
    """Statistics from OBJ export."""
    total_vertices: int = 0
    total_triangles: int = 0
    total_quads: int = 0
    total_objects: int = 0
    total_materials: int = 0
    total_trees: int = 0
    file_size_bytes: int = 0


def export_scene(
    sink: InMemorySceneSink,
    filepath: str,
    comment: Optional[str] = None
) -> ExportStats:
    """
    Export a scene to OBJ + MTL + instance manifest.

    Args:
        sink: Scene to export
        filepath: Output file path (.obj); the .mtl and _instances.json
            files are written next to it
        comment: Optional comment to include in file header

    Returns:
        ExportStats with export statistics
    """
    stats = ExportStats()

    os.makedirs(os.path.dirname(filepath) or '.', exist_ok=True)

    stem, _ = os.path.splitext(filepath)
    mtl_path = stem + ".mtl"
    manifest_path = stem + "_instances.json"

    material_names = _write_mtl(sink, mtl_path)
    stats.total_materials = len(set(material_names.values()))

    precision = OBJ_VERTEX_PRECISION

    with open(filepath, 'w', encoding='utf-8') as f:
        # Header comment
        f.write("# GeoCity Scene Generator OBJ Export\n")
        f.write(f"# Objects: {len(sink.meshes)}\n")

        if comment:
            f.write(f"# {comment}\n")

        f.write(f"mtllib {os.path.basename(mtl_path)}\n")

        vertex_offset = 1  # OBJ indices are 1-based and global

        for mesh in sink.meshes:
            if not mesh.vertices or not mesh.faces:
                continue

            f.write(f"\no {mesh.name}\n")
            f.write(f"usemtl {material_names[mesh.name]}\n")

            for x, y, z in mesh.vertices:
                f.write(f"v {x:.{precision}f} {y:.{precision}f} {z:.{precision}f}\n")

            for face in mesh.faces:
                face_str = " ".join(str(idx + vertex_offset) for idx in face)
                f.write(f"f {face_str}\n")

            vertex_offset += len(mesh.vertices)

            stats.total_vertices += len(mesh.vertices)
            stats.total_triangles += mesh.triangle_count()
            stats.total_quads += mesh.quad_count()
            stats.total_objects += 1

    _write_manifest(sink, manifest_path)
    stats.total_trees = len(sink.trees)

    stats.file_size_bytes = os.path.getsize(filepath)

    logger.info(
        f"Exported OBJ: {stats.total_objects} objects, "
        f"{stats.total_vertices} vertices, {stats.total_triangles} triangles, "
        f"{stats.total_quads} quads, {stats.total_trees} tree instances"
    )

    return stats


def _write_mtl(sink: InMemorySceneSink, mtl_path: str) -> Dict[str, str]:
    """
    Write one material per distinct Material value.

    Returns:
        Mapping of mesh name -> material name
    """
    materials: List[Material] = []
    names: List[str] = []
    assignment: Dict[str, str] = {}

    for mesh in sink.meshes:
        try:
            idx = materials.index(mesh.material)
        except ValueError:
            idx = len(materials)
            materials.append(mesh.material)
            names.append(f"mat_{idx}")
        assignment[mesh.name] = names[idx]

    with open(mtl_path, 'w', encoding='utf-8') as f:
        f.write("# GeoCity Scene Generator MTL Export\n")

        for name, material in zip(names, materials):
            r, g, b = material.color
            f.write(f"\nnewmtl {name}\n")
            f.write(f"Kd {r:.6f} {g:.6f} {b:.6f}\n")

            if material.texture is not None:
                f.write(f"map_Kd {material.texture.path}\n")
            if material.specular:
                s = material.specular
                f.write(f"Ks {s:.6f} {s:.6f} {s:.6f}\n")
            if material.transmission:
                f.write(f"Tr {material.transmission:.6f}\n")
            if material.metallic:
                f.write(f"Pm {material.metallic:.6f}\n")
            if material.roughness != DEFAULT_ROUGHNESS:
                f.write(f"Pr {material.roughness:.6f}\n")

    return assignment


def _write_manifest(sink: InMemorySceneSink, manifest_path: str) -> None:
    """Write camera, sky and tree instances as JSON."""
    camera = sink.camera
    manifest = {
        'camera': None if camera is None else {
            'frame': [list(axis) for axis in camera.frame],
            'lens': camera.lens,
            'aperture': camera.aperture,
            'focus': camera.focus,
            'film': camera.film,
            'aspect': camera.aspect,
        },
        'sky': sink.has_sky,
        'trees': [
            {
                'name': tree.name,
                'species': tree.species.value,
                'shape': tree.shape,
                'color': list(tree.color),
                'position': list(tree.position.as_tuple()),
            }
            for tree in sink.trees
        ],
    }

    with open(manifest_path, 'w', encoding='utf-8') as f:
        json.dump(manifest, f, indent=2)


def validate_obj_file(filepath: str) -> List[str]:
    """
    Validate an OBJ file for common issues.

    Args:
        filepath: Path to OBJ file

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []

    if not os.path.exists(filepath):
        errors.append(f"File not found: {filepath}")
        return errors

    vertex_count = 0
    face_count = 0

    with open(filepath, 'r', encoding='utf-8') as f:
        for line_num, line in enumerate(f, 1):
            line = line.strip()

            if line.startswith('v '):
                vertex_count += 1
                parts = line.split()
                if len(parts) != 4:
                    errors.append(f"Line {line_num}: Invalid vertex format")

            elif line.startswith('f '):
                face_count += 1
                parts = line.split()[1:]

                if len(parts) not in (3, 4):
                    errors.append(f"Line {line_num}: Face has {len(parts)} vertices")

                for part in parts:
                    try:
                        idx = int(part.split('/')[0])
                    except ValueError:
                        errors.append(f"Line {line_num}: Invalid face index '{part}'")
                        continue
                    if idx < 1 or idx > vertex_count:
                        errors.append(
                            f"Line {line_num}: Face index {idx} out of range "
                            f"(1-{vertex_count})"
                        )

    if vertex_count == 0:
        errors.append("No vertices in file")
    if face_count == 0:
        errors.append("No faces in file")

    return errors
