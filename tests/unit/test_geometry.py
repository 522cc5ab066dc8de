"""Unit tests for geometric operations and Bezier flattening."""

import math

import pytest

from signcraft.core.geometry import (
    bezier_flatten,
    clean_ring,
    is_outer,
    orient,
    point_in_polygon,
    remove_near_duplicates,
    ring_bounds,
    shoelace_sum,
    signed_area,
    union_bounds,
    vertex_centroid,
)
from signcraft.domain import Point


def _square(size: float = 1.0) -> list[Point]:
    return [Point(0, 0), Point(size, 0), Point(size, size), Point(0, size)]


class TestOrientation:
    """Tests for shoelace sum and signed area."""

    def test_ccw_square_positive_area(self):
        """A counter-clockwise square has positive signed area."""
        assert signed_area(_square()) == 1.0

    def test_cw_square_negative_area(self):
        """A clockwise square has negative signed area."""
        assert signed_area(list(reversed(_square()))) == -1.0

    def test_shoelace_sum_is_minus_twice_area(self):
        """Test the relation between the two formulas."""
        ring = [Point(0, 0), Point(4, 0), Point(4, 3)]
        assert shoelace_sum(ring) == -2 * signed_area(ring)

    def test_opposite_classification(self):
        """The two traversal directions classify oppositely."""
        ring = _square(10)
        assert is_outer(ring) != is_outer(list(reversed(ring)))

    def test_degenerate(self):
        """Fewer than three points have no area."""
        assert signed_area([Point(0, 0), Point(1, 1)]) == 0.0
        assert not is_outer([Point(0, 0), Point(1, 0), Point(2, 0)])


class TestPointInPolygon:
    """Tests for ray casting containment."""

    def test_inside(self):
        """Test a point in the middle."""
        assert point_in_polygon(Point(1, 1), _square(2))

    def test_outside(self):
        """Test a point outside the box."""
        assert not point_in_polygon(Point(3, 3), _square(2))

    def test_concave_notch(self):
        """A point in the notch of an L shape is outside."""
        ell = [Point(0, 0), Point(3, 0), Point(3, 1), Point(1, 1), Point(1, 3), Point(0, 3)]
        assert point_in_polygon(Point(0.5, 2.5), ell)
        assert not point_in_polygon(Point(2, 2), ell)

    def test_too_few_points(self):
        """Two points never contain anything."""
        assert not point_in_polygon(Point(0, 0), [Point(-1, 0), Point(1, 0)])


class TestCleanRing:
    """Tests for near-duplicate removal."""

    def test_removes_consecutive_duplicates(self):
        """Consecutive points within tolerance collapse."""
        ring = [Point(0, 0), Point(0.001, 0), Point(1, 0), Point(1, 1)]
        cleaned, mapping = clean_ring(ring, 0.01)
        assert cleaned == [Point(0, 0), Point(1, 0), Point(1, 1)]
        assert mapping == [0, 0, 1, 2]

    def test_drops_closing_point(self):
        """An explicit closing point maps onto the first point."""
        ring = [*_square(), Point(0, 0)]
        cleaned, mapping = clean_ring(ring, 0.01)
        assert cleaned == _square()
        assert mapping == [0, 1, 2, 3, 0]

    def test_idempotent(self):
        """Cleaning a cleaned ring changes nothing."""
        ring = [Point(0, 0), Point(0.004, 0.004), Point(5, 0), Point(5, 5), Point(0.002, 0)]
        once = remove_near_duplicates(ring, 0.01)
        twice, mapping = clean_ring(once, 0.01)
        assert twice == once
        assert mapping == list(range(len(once)))

    def test_zero_tolerance_keeps_distinct_points(self):
        """Only exact duplicates merge with a zero tolerance."""
        ring = [Point(0, 0), Point(0, 0), Point(1e-9, 0), Point(1, 1)]
        assert remove_near_duplicates(ring, 0.0) == [Point(0, 0), Point(1e-9, 0), Point(1, 1)]


class TestOrient:
    """Tests for ring orientation normalization."""

    def test_orient_ccw(self):
        """A clockwise ring is reversed when counter-clockwise is requested."""
        cw = list(reversed(_square()))
        assert signed_area(orient(cw, counter_clockwise=True)) > 0

    def test_orient_keeps_matching_ring(self):
        """A ring with the requested winding is returned unchanged."""
        ring = _square()
        assert orient(ring, counter_clockwise=True) == ring
        assert signed_area(orient(ring, counter_clockwise=False)) < 0


class TestBounds:
    """Tests for bounding box helpers."""

    def test_ring_bounds(self):
        """Test bounds of points."""
        assert ring_bounds([Point(1, 2), Point(-1, 5), Point(3, 0)]) == (-1, 0, 3, 5)

    def test_ring_bounds_empty(self):
        """Test that empty input raises."""
        with pytest.raises(ValueError):
            ring_bounds([])

    def test_union_bounds(self):
        """Test union of boxes."""
        assert union_bounds([(0, 0, 1, 1), (-2, 0.5, 0.5, 3)]) == (-2, 0, 1, 3)
        assert union_bounds([]) is None

    def test_vertex_centroid(self):
        """Test vertex average."""
        assert vertex_centroid(_square(2)) == Point(1.0, 1.0)
        assert vertex_centroid([]) == Point(0.0, 0.0)


class TestBezierFlatten:
    """Tests for Bezier flattening."""

    def test_line_passthrough(self):
        """Two points are returned as-is."""
        pts = [Point(0, 0), Point(1, 1)]
        assert bezier_flatten(pts) == pts

    def test_straight_quadratic(self):
        """A quadratic with a collinear control point needs no subdivision."""
        pts = [Point(0, 0), Point(1, 0), Point(2, 0)]
        assert bezier_flatten(pts, 0.5) == [Point(0, 0), Point(2, 0)]

    def test_quadratic_subdivides(self):
        """A curved quadratic is split and keeps its endpoints."""
        pts = [Point(0, 0), Point(50, 100), Point(100, 0)]
        result = bezier_flatten(pts, 0.5)
        assert result[0] == Point(0, 0)
        assert result[-1] == Point(100, 0)
        assert len(result) > 5

    def test_quadratic_points_on_curve(self):
        """Every emitted point lies on the curve (x = 100t, y = 100t(1-t)*2)."""
        pts = [Point(0, 0), Point(50, 100), Point(100, 0)]
        for p in bezier_flatten(pts, 0.5):
            t = p.x / 100
            assert math.isclose(p.y, 200 * t * (1 - t), abs_tol=1e-9)

    def test_cubic_midpoint(self):
        """The first split of a symmetric cubic lands on the curve midpoint."""
        pts = [Point(0, 0), Point(0, 100), Point(100, 100), Point(100, 0)]
        result = bezier_flatten(pts, 0.5)
        assert Point(50.0, 75.0) in result
        assert result[0] == Point(0, 0)
        assert result[-1] == Point(100, 0)

    def test_finer_tolerance_more_points(self):
        """A tighter tolerance gives at least as many segments."""
        pts = [Point(0, 0), Point(0, 100), Point(100, 100), Point(100, 0)]
        assert len(bezier_flatten(pts, 0.05)) >= len(bezier_flatten(pts, 5.0))

    def test_invalid_point_count(self):
        """Five control points are rejected."""
        with pytest.raises(ValueError, match="Expected 2-4 points"):
            bezier_flatten([Point(0, 0)] * 5)
