"""Tests for geometric primitives."""

import math

import pytest
from pydantic import ValidationError

from shell_builder.models.geometry import BoundaryPolygon, LineSegment, Point3D


class TestPoint3D:
    def test_create(self):
        p = Point3D(x=1.0, y=2.0, z=3.0)
        assert (p.x, p.y, p.z) == (1.0, 2.0, 3.0)

    def test_z_defaults_to_zero(self):
        assert Point3D(x=1.0, y=2.0).z == 0.0

    def test_of_shorthand(self):
        assert Point3D.of(1, 2, 3) == Point3D(x=1, y=2, z=3)

    def test_arithmetic(self):
        a = Point3D.of(1, 2, 3)
        b = Point3D.of(3, 2, 1)
        assert a + b == Point3D.of(4, 4, 4)
        assert a - b == Point3D.of(-2, 0, 2)
        assert a * 2 == Point3D.of(2, 4, 6)
        assert (a + b) / 2 == Point3D.of(2, 2, 2)

    def test_midpoint(self):
        assert Point3D.of(-4, 0, 0).midpoint(Point3D.of(4, 2, 0)) == Point3D.of(0, 1, 0)

    def test_distance(self):
        assert math.isclose(Point3D.of(0, 0, 0).distance_to(Point3D.of(1, 2, 2)), 3.0)

    def test_equality_tolerance(self):
        assert Point3D.of(1, 2, 3) == Point3D.of(1.0000001, 2.0000001, 3.0)

    def test_hash_equal_points(self):
        assert len({Point3D.of(1, 2, 3), Point3D.of(1, 2, 3)}) == 1

    def test_equal_points_share_hash(self):
        a = Point3D.of(4e-7, 0)
        b = Point3D.of(6e-7, 0)
        assert (a == b) == (hash(a) == hash(b))
        assert len({a, b}) == (1 if a == b else 2)

    def test_snapped_points_deduplicate(self):
        a = Point3D.of(1.0, 2.0, 3.0)
        b = Point3D.of(1.0000001, 2.0000001, 3.0000001)
        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b}) == 1

    def test_immutable(self):
        p = Point3D.of(1, 2, 3)
        with pytest.raises(ValidationError):
            p.x = 5.0


class TestLineSegment:
    def test_length_and_midpoint(self):
        seg = LineSegment(start=Point3D.of(0, 0), end=Point3D.of(6, 0))
        assert seg.length == 6.0
        assert seg.midpoint == Point3D.of(3, 0)

    def test_direction(self):
        seg = LineSegment(start=Point3D.of(2, 2), end=Point3D.of(2, 7))
        assert seg.direction == pytest.approx((0.0, 1.0, 0.0))

    def test_degenerate_rejected(self):
        with pytest.raises(ValidationError):
            LineSegment(start=Point3D.of(1, 1), end=Point3D.of(1, 1))


class TestBoundaryPolygon:
    def _square(self):
        pts = [Point3D.of(0, 0), Point3D.of(4, 0), Point3D.of(4, 4), Point3D.of(0, 4)]
        return BoundaryPolygon(points=pts + [pts[0]])

    def test_closed(self):
        assert self._square().is_closed

    def test_open(self):
        poly = BoundaryPolygon(points=[Point3D.of(0, 0), Point3D.of(4, 0), Point3D.of(4, 4)])
        assert not poly.is_closed

    def test_corners_drop_closing_point(self):
        assert len(self._square().corners) == 4

    def test_edges(self):
        edges = self._square().edges()
        assert len(edges) == 4
        assert edges[0] == (Point3D.of(0, 0), Point3D.of(4, 0))
        assert edges[-1] == (Point3D.of(0, 4), Point3D.of(0, 0))

    def test_area(self):
        assert math.isclose(self._square().area, 16.0)

    def test_perimeter(self):
        assert math.isclose(self._square().perimeter, 16.0)
