"""Tests for scene bounds and coordinate normalization."""

import pytest

from geocity.errors import DegenerateBoundsError
from geocity.models.element import Element, ElementKind
from geocity.models.geometry import BBox, Point2D
from geocity.processing.normalizer import compute_scene_bounds, normalize, normalize_point


def _square(x0, y0, x1, y1):
    return [Point2D(x0, y0), Point2D(x1, y0), Point2D(x1, y1), Point2D(x0, y1)]


def _element(ring, kind=ElementKind.BUILDING, holes=None, name="e"):
    return Element(name=name, kind=kind, outer_ring=ring, holes=holes or [])


class TestNormalizePoint:
    @pytest.mark.parametrize("raw, expected", [
        ((50, 50), (0, 0)),
        ((0, 0), (-25, -25)),
        ((100, 100), (25, 25)),
        ((25, 75), (-12.5, 12.5)),
    ])
    def test_frame_50(self, raw, expected):
        bounds = BBox(0, 0, 100, 100)
        p = normalize_point(Point2D(*raw), bounds, 50.0)
        assert p.x == pytest.approx(expected[0])
        assert p.y == pytest.approx(expected[1])

    def test_axes_scale_independently(self):
        bounds = BBox(10, 20, 12, 30)
        p = normalize_point(Point2D(12, 20), bounds, 10.0)
        assert p.x == pytest.approx(5.0)
        assert p.y == pytest.approx(-5.0)


class TestSceneBounds:
    def test_union_of_elements(self):
        elements = [
            _element(_square(0, 0, 1, 1)),
            _element(_square(5, -2, 6, 3), kind=ElementKind.WATER),
        ]
        bounds = compute_scene_bounds(elements)
        assert (bounds.min_x, bounds.min_y, bounds.max_x, bounds.max_y) == (0, -2, 6, 3)

    def test_holes_included(self):
        hole = [Point2D(0.2, 0.2), Point2D(9, 0.2), Point2D(0.2, 0.4)]
        bounds = compute_scene_bounds([_element(_square(0, 0, 1, 1), holes=[hole])])
        assert bounds.max_x == 9

    def test_other_ignored(self):
        elements = [
            _element(_square(0, 0, 1, 1)),
            _element(_square(100, 100, 200, 200), kind=ElementKind.OTHER),
        ]
        bounds = compute_scene_bounds(elements)
        assert bounds.max_x == 1

    def test_empty_raises(self):
        with pytest.raises(DegenerateBoundsError):
            compute_scene_bounds([])


class TestNormalize:
    def test_rings_and_holes_mapped(self):
        hole = _square(40, 40, 60, 60)
        element = _element(_square(0, 0, 100, 100), holes=[hole])
        [result] = normalize([element], BBox(0, 0, 100, 100), 50.0)

        assert result.normalized_outer_ring[0] == Point2D(-25, -25)
        assert result.normalized_outer_ring[2] == Point2D(25, 25)
        assert len(result.normalized_holes) == 1
        assert result.normalized_holes[0][0].x == pytest.approx(-5)
        assert result.normalized_holes[0][2].y == pytest.approx(5)

    def test_input_not_mutated(self):
        element = _element(_square(0, 0, 100, 100))
        [result] = normalize([element], BBox(0, 0, 100, 100), 50.0)

        assert element.normalized_outer_ring == []
        assert result is not element
        assert result.outer_ring == element.outer_ring
        assert result.name == element.name

    def test_order_preserved(self):
        elements = [_element(_square(i, i, i + 1, i + 1), name=f"e{i}") for i in range(5)]
        result = normalize(elements, compute_scene_bounds(elements), 50.0)
        assert [e.name for e in result] == [f"e{i}" for i in range(5)]

    @pytest.mark.parametrize("bounds", [BBox(0, 0, 0, 10), BBox(0, 5, 10, 5)])
    def test_degenerate_bounds(self, bounds):
        with pytest.raises(DegenerateBoundsError):
            normalize([_element(_square(0, 0, 1, 1))], bounds, 50.0)
