"""Tests for line stroking."""

import pytest

from geocity.models.geometry import Point2D
from geocity.processing.stroker import axis_quad, diagonal_quad, quad_area, stroke


class TestCandidates:
    def test_diagonal_quad_order(self):
        quad = diagonal_quad(Point2D(0, 0), Point2D(10, 0), 1.0)
        assert quad == [Point2D(11, 1), Point2D(9, -1), Point2D(-1, -1), Point2D(1, 1)]

    def test_axis_quad_order(self):
        quad = axis_quad(Point2D(0, 0), Point2D(0, 10), 1.0)
        assert quad == [Point2D(1, 10), Point2D(-1, 10), Point2D(-1, 0), Point2D(1, 0)]

    def test_quad_area(self):
        square = [Point2D(0, 0), Point2D(2, 0), Point2D(2, 2), Point2D(0, 2)]
        assert quad_area(square) == pytest.approx(4.0)


class TestStroke:
    def test_horizontal_segment_uses_diagonal(self):
        # The axis candidate collapses onto the segment
        p0, p1 = Point2D(0, 0), Point2D(10, 0)
        quad = stroke(p0, p1, 1.0)
        assert quad == diagonal_quad(p0, p1, 1.0)
        assert quad_area(quad) == pytest.approx(20.0)

    def test_diagonal_segment_uses_axis(self):
        p0, p1 = Point2D(0, 0), Point2D(1, 1)
        quad = stroke(p0, p1, 0.1)
        assert quad == axis_quad(p0, p1, 0.1)
        assert quad_area(quad) == pytest.approx(0.2)

    def test_tie_keeps_diagonal(self):
        p0, p1 = Point2D(0, 0), Point2D(0, 10)
        assert quad_area(axis_quad(p0, p1, 1.0)) == pytest.approx(
            quad_area(diagonal_quad(p0, p1, 1.0)))
        assert stroke(p0, p1, 1.0) == diagonal_quad(p0, p1, 1.0)

    @pytest.mark.parametrize("p1", [
        Point2D(3, 1), Point2D(-2, 5), Point2D(4, -4), Point2D(0.5, 7),
    ])
    def test_returns_larger_candidate(self, p1):
        p0 = Point2D(0, 0)
        quad = stroke(p0, p1, 0.25)
        expected = max(
            quad_area(diagonal_quad(p0, p1, 0.25)),
            quad_area(axis_quad(p0, p1, 0.25)),
        )
        assert len(quad) == 4
        assert quad_area(quad) == pytest.approx(expected)
