"""Tests for GeoJSON reading."""

import json

import pytest

from geocity.io.geojson_reader import GeometryKind, GeoJSONReader, list_geojson_files


def _fc(*features):
    return {"type": "FeatureCollection", "features": list(features)}


def _feat(geometry, **properties):
    return {"type": "Feature", "geometry": geometry, "properties": properties}


POINT = {"type": "Point", "coordinates": [1, 2]}
LINE = {"type": "LineString", "coordinates": [[0, 0], [1, 1]]}


class TestGeoJSONReader:
    def test_feature_collection(self):
        doc = _fc(_feat(POINT, **{"@id": "node/1", "natural": "tree"}), _feat(LINE))
        features = list(GeoJSONReader(doc).read())

        assert len(features) == 2
        assert features[0].geometry_kind == GeometryKind.POINT
        assert features[0].feature_id == "node_1"
        assert features[0].properties["natural"] == "tree"
        assert features[1].geometry_kind == GeometryKind.LINE_STRING

    def test_id_fallbacks(self):
        with_id = dict(_feat(POINT), id="way/5")
        features = list(GeoJSONReader(_fc(with_id, _feat(POINT))).read())
        assert features[0].feature_id == "way_5"
        assert features[1].feature_id == "1"

    def test_single_feature(self):
        [feature] = GeoJSONReader(_feat(LINE, highway="primary")).read()
        assert feature.properties == {"highway": "primary"}

    def test_bare_geometry(self):
        [feature] = GeoJSONReader(POINT).read()
        assert feature.coordinates == [1, 2]
        assert feature.properties == {}

    def test_skips_unusable_geometry(self):
        doc = _fc(
            _feat(None),
            _feat({"type": "GeometryCollection", "geometries": []}),
            _feat(POINT),
        )
        features = list(GeoJSONReader(doc).read())
        assert len(features) == 1
        # index of the usable feature in the collection
        assert features[0].feature_id == "2"

    def test_null_properties(self):
        doc = _fc({"type": "Feature", "geometry": POINT, "properties": None})
        [feature] = GeoJSONReader(doc).read()
        assert feature.properties == {}

    def test_unsupported_document(self):
        with pytest.raises(ValueError, match="Unsupported GeoJSON type"):
            list(GeoJSONReader({"type": "Topology"}).read())

    def test_file_path(self, tmp_path):
        path = tmp_path / "map.geojson"
        path.write_text(json.dumps(_fc(_feat(POINT))), encoding="utf-8")
        assert len(list(GeoJSONReader(path).read())) == 1
        assert len(list(GeoJSONReader(str(path)).read())) == 1

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            GeoJSONReader(tmp_path / "missing.geojson")

    def test_bad_source_type(self):
        with pytest.raises(TypeError):
            GeoJSONReader([1, 2, 3])


class TestListGeojsonFiles:
    def test_sorted_and_filtered(self, tmp_path):
        for name in ["b.geojson", "a.geojson", "notes.txt", "c.json"]:
            (tmp_path / name).write_text("{}", encoding="utf-8")
        assert [p.name for p in list_geojson_files(tmp_path)] == ["a.geojson", "b.geojson"]

    def test_missing_directory(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            list_geojson_files(tmp_path / "nope")
