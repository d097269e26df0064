"""End-to-end tests for export and the pipeline driver."""

import json

import pytest

from geocity.config import PipelineConfig
from geocity.io.obj_exporter import export_scene, validate_obj_file
from geocity.io.scene_sink import Camera, InMemorySceneSink
from geocity.generators.materials import texture_ref
from geocity.main import run_pipeline
from geocity.models.element import TreeInstance, TreeKind
from geocity.models.geometry import Point3D
from geocity.models.material import Material
from geocity.models.mesh import MeshData


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _square(x, y, size):
    return [[x, y], [x + size, y], [x + size, y + size], [x, y + size], [x, y]]


def _city_geojson():
    features = [
        {
            "type": "Feature",
            "geometry": {"type": "Polygon", "coordinates": [_square(12.490, 41.890, 0.001)]},
            "properties": {"@id": "way/1", "building": "yes",
                           "building:levels": "2", "roof:shape": "gabled"},
        },
        {
            "type": "Feature",
            "geometry": {"type": "LineString",
                         "coordinates": [[12.488, 41.888], [12.495, 41.888], [12.495, 41.895]]},
            "properties": {"@id": "way/2", "highway": "primary"},
        },
        {
            "type": "Feature",
            "geometry": {"type": "Polygon", "coordinates": [_square(12.492, 41.892, 0.002)]},
            "properties": {"@id": "way/3", "leisure": "park"},
        },
        {
            "type": "Feature",
            "geometry": {"type": "Point", "coordinates": [12.491, 41.893]},
            "properties": {"@id": "node/4", "natural": "tree", "genus": "Pinus"},
        },
        {
            "type": "Feature",
            "geometry": {"type": "Point", "coordinates": [12.491, 41.894]},
            "properties": {"@id": "node/5", "amenity": "bench"},
        },
    ]
    return {"type": "FeatureCollection", "features": features}


def _write_input(directory, doc, name="rome.geojson"):
    directory.mkdir(parents=True, exist_ok=True)
    (directory / name).write_text(json.dumps(doc), encoding="utf-8")


@pytest.fixture
def city_dir(tmp_path):
    input_dir = tmp_path / "input"
    _write_input(input_dir, _city_geojson())
    return input_dir


# ---------------------------------------------------------------------------
# Scene sink
# ---------------------------------------------------------------------------

class TestInMemorySceneSink:
    def test_duplicate_names_get_suffix(self):
        sink = InMemorySceneSink()
        for _ in range(3):
            sink.add_mesh(MeshData(name="building_00"))

        assert sink.mesh_names() == ["building_00", "building_00_dup1", "building_00_dup2"]
        assert sink.get_mesh("building_00_dup2") is sink.meshes[2]


# ---------------------------------------------------------------------------
# OBJ export
# ---------------------------------------------------------------------------

class TestExportScene:
    def _scene(self):
        sink = InMemorySceneSink()
        sink.set_camera(Camera())
        sink.add_sky()

        quad = MeshData(name="quad", material=Material(color=(0.5, 0.5, 0.5)))
        for v in [(0, 0, 0), (1, 0, 0), (1, 0, 1), (0, 0, 1)]:
            quad.add_vertex(*v)
        quad.add_quad(0, 1, 2, 3)

        tri = MeshData(
            name="tri",
            material=Material(texture=texture_ref("texture2"), specular=0.7, roughness=0.9),
        )
        for v in [(0, 1, 0), (1, 1, 0), (0, 1, 1)]:
            tri.add_vertex(*v)
        tri.add_triangle(0, 1, 2)

        sink.add_mesh(quad)
        sink.add_mesh(tri)
        sink.add_tree(TreeInstance(
            name="point_node_1",
            species=TreeKind.OAK,
            shape="tree_models/oak.ply",
            color=(0.1, 0.2, 0.0),
            position=Point3D(1.0, 0.0, 2.0),
        ))
        return sink

    def test_files_and_stats(self, tmp_path):
        obj_path = tmp_path / "out" / "scene.obj"
        stats = export_scene(self._scene(), str(obj_path))

        assert stats.total_objects == 2
        assert stats.total_vertices == 7
        assert stats.total_quads == 1
        assert stats.total_triangles == 1
        assert stats.total_materials == 2
        assert stats.total_trees == 1
        assert (tmp_path / "out" / "scene.mtl").exists()
        assert (tmp_path / "out" / "scene_instances.json").exists()
        assert validate_obj_file(str(obj_path)) == []

    def test_faces_are_global_and_one_based(self, tmp_path):
        obj_path = tmp_path / "scene.obj"
        export_scene(self._scene(), str(obj_path))

        lines = obj_path.read_text(encoding="utf-8").splitlines()
        faces = [line for line in lines if line.startswith("f ")]
        assert faces == ["f 1 2 3 4", "f 5 6 7"]
        assert "o quad" in lines
        assert "mtllib scene.mtl" in lines

    def test_mtl_contents(self, tmp_path):
        export_scene(self._scene(), str(tmp_path / "scene.obj"))
        mtl = (tmp_path / "scene.mtl").read_text(encoding="utf-8")

        assert "map_Kd buildings_texture/2.jpg" in mtl
        assert "Ks 0.700000 0.700000 0.700000" in mtl
        assert "Pr 0.900000" in mtl
        assert "Tr " not in mtl
        # the plain quad material keeps the default roughness
        assert mtl.count("\nPr ") == 1

    def test_manifest(self, tmp_path):
        export_scene(self._scene(), str(tmp_path / "scene.obj"))
        manifest = json.loads((tmp_path / "scene_instances.json").read_text(encoding="utf-8"))

        assert manifest["sky"] is True
        assert manifest["camera"]["lens"] == pytest.approx(0.035)
        assert manifest["trees"][0]["species"] == "oak"
        assert manifest["trees"][0]["position"] == [1.0, 0.0, 2.0]

    def test_validate_detects_bad_index(self, tmp_path):
        path = tmp_path / "bad.obj"
        path.write_text("v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1 2 4\n", encoding="utf-8")
        errors = validate_obj_file(str(path))
        assert len(errors) == 1
        assert "out of range" in errors[0]


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

class TestRunPipeline:
    def test_file_mode(self, city_dir, tmp_path):
        out = tmp_path / "out"
        config = PipelineConfig(input_dir=str(city_dir), output_dir=str(out), output_name="rome")
        result = run_pipeline(config)

        assert result.success, result.report.errors
        assert result.obj_path == str(out / "rome.obj")
        for name in ["rome.obj", "rome.mtl", "rome_instances.json", "rome_report.json"]:
            assert (out / name).exists()
        assert validate_obj_file(result.obj_path) == []

        report = json.loads((out / "rome_report.json").read_text(encoding="utf-8"))
        assert report["success"] is True
        assert report["stats"]["features_read"] == 5
        assert report["stats"]["features_unclassified"] == 1
        assert report["stats"]["trees"] == 1

    def test_scene_names(self, city_dir, tmp_path):
        config = PipelineConfig(input_dir=str(city_dir), output_dir=str(tmp_path / "out"))
        scene = run_pipeline(config, output_mode="memory").scene

        assert scene.mesh_names() == [
            "floor",
            "building_way_10",
            "building_way_10_1",
            "building_way_10_roof_base",
            "building_way_10_roof",
            "line_way_20",
            "line_way_21",
            "building_way_30",
        ]
        [tree] = scene.trees
        assert tree.name == "point_node_4"
        assert tree.species == TreeKind.PINE

    def test_scene_is_normalized(self, city_dir, tmp_path):
        config = PipelineConfig(input_dir=str(city_dir), output_dir=str(tmp_path), frame_size=50.0)
        scene = run_pipeline(config, output_mode="memory").scene

        for mesh in scene.meshes:
            if mesh.name == "floor":
                continue
            (min_x, _, min_z), (max_x, _, max_z) = mesh.compute_bounds()
            assert -25.0 - 1e-6 <= min_x and max_x <= 25.0 + 1e-6
            assert -25.0 - 1e-6 <= min_z and max_z <= 25.0 + 1e-6

    def test_memory_mode_writes_nothing(self, city_dir, tmp_path):
        out = tmp_path / "out"
        config = PipelineConfig(input_dir=str(city_dir), output_dir=str(out))
        result = run_pipeline(config, output_mode="memory")

        assert result.success
        assert result.obj_path is None
        assert not out.exists()

    def test_debug_feature_id(self, city_dir, tmp_path):
        config = PipelineConfig(
            input_dir=str(city_dir),
            output_dir=str(tmp_path),
            debug_feature_id="way_3",
        )
        scene = run_pipeline(config, output_mode="memory").scene
        assert scene.mesh_names() == ["floor", "building_way_30"]

    def test_degenerate_bounds_fail(self, tmp_path):
        doc = {"type": "FeatureCollection", "features": [{
            "type": "Feature",
            "geometry": {"type": "Point", "coordinates": [1, 1]},
            "properties": {"@id": "node/1", "natural": "tree"},
        }]}
        _write_input(tmp_path / "input", doc)

        config = PipelineConfig(input_dir=str(tmp_path / "input"), output_dir=str(tmp_path / "out"))
        result = run_pipeline(config)

        assert not result.success
        assert "zero extent" in result.report.errors[0]
        assert not (tmp_path / "out" / "city.obj").exists()

    def test_features_without_ids_in_two_files(self, tmp_path):
        input_dir = tmp_path / "input"
        for name, x in [("a.geojson", 12.490), ("b.geojson", 12.495)]:
            doc = {"type": "FeatureCollection", "features": [{
                "type": "Feature",
                "geometry": {"type": "Polygon", "coordinates": [_square(x, 41.890, 0.001)]},
                "properties": {"building": "yes"},
            }]}
            _write_input(input_dir, doc, name=name)

        out = tmp_path / "out"
        config = PipelineConfig(input_dir=str(input_dir), output_dir=str(out))
        result = run_pipeline(config)

        assert result.success, result.report.errors
        names = result.scene.mesh_names()
        assert len(names) == len(set(names))
        assert "building_00" in names
        assert "building_00_dup1" in names
        assert validate_obj_file(result.obj_path) == []

    def test_concatenated_names_collide(self, tmp_path):
        def multipolygon(fid, parts, y):
            return {
                "type": "Feature",
                "geometry": {
                    "type": "MultiPolygon",
                    "coordinates": [[_square(12.49 + 0.002 * k, y, 0.001)] for k in range(parts)],
                },
                "properties": {"@id": fid, "building": "yes"},
            }

        doc = {"type": "FeatureCollection", "features": [
            multipolygon("way/1", 12, 41.890),
            multipolygon("way/11", 2, 41.895),
        ]}
        _write_input(tmp_path / "input", doc)

        config = PipelineConfig(input_dir=str(tmp_path / "input"), output_dir=str(tmp_path / "out"))
        result = run_pipeline(config, output_mode="memory")

        assert result.success, result.report.errors
        names = result.scene.mesh_names()
        assert len(names) == len(set(names))
        # part 10 of way/1 and part 0 of way/11 share a name
        assert "building_way_110" in names
        assert "building_way_110_dup1" in names

    def test_only_unclassified_features(self, tmp_path):
        doc = {"type": "FeatureCollection", "features": [{
            "type": "Feature",
            "geometry": {"type": "Point", "coordinates": [12.49, 41.89]},
            "properties": {"@id": "node/1", "amenity": "bench"},
        }]}
        _write_input(tmp_path / "input", doc)

        out = tmp_path / "out"
        config = PipelineConfig(input_dir=str(tmp_path / "input"), output_dir=str(out))
        result = run_pipeline(config)

        assert result.success, result.report.errors
        assert result.scene.mesh_names() == ["floor"]
        assert result.scene.camera is not None
        assert result.scene.has_sky
        assert result.report.scene_bounds == {}
        assert result.report.stats.features_unclassified == 1
        assert validate_obj_file(result.obj_path) == []

    def test_empty_directory_fails(self, tmp_path):
        (tmp_path / "input").mkdir()
        config = PipelineConfig(input_dir=str(tmp_path / "input"), output_dir=str(tmp_path / "out"))
        result = run_pipeline(config)

        assert not result.success
        assert "No .geojson files" in result.report.errors[0]

    def test_invalid_config(self):
        with pytest.raises(ValueError):
            PipelineConfig(frame_size=0)
