"""Tests for point algebra and the gift-wrapping convex hull."""

import math
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from perimeter.services.point import Point  # type: ignore
from perimeter.services.polygon import ConvexPolygon  # type: ignore


def test_point_operators() -> None:
    p = Point(1.0, 2.0)
    q = Point(3.0, -1.0)
    assert p + q == Point(4.0, 1.0)
    assert p - q == Point(-2.0, 3.0)
    assert -p == Point(-1.0, -2.0)
    assert p * 2.0 == Point(2.0, 4.0)
    assert 2.0 * p == Point(2.0, 4.0)
    assert q / 2.0 == Point(1.5, -0.5)
    assert p ^ q == pytest.approx(1.0 * -1.0 - 2.0 * 3.0)
    assert p.dot(q) == pytest.approx(1.0)
    assert abs(Point(3.0, 4.0)) == pytest.approx(5.0)
    assert Point(1.0, 0.0).ortho() == Point(0.0, 1.0)


def test_angle_is_counter_clockwise_in_zero_two_pi() -> None:
    o = Point(0.0, 0.0)
    assert o.angle(Point(1.0, 0.0), Point(0.0, 1.0)) == pytest.approx(math.pi / 2)
    assert o.angle(Point(0.0, 1.0), Point(1.0, 0.0)) == pytest.approx(3 * math.pi / 2)
    # Parallel directions snap to exactly zero.
    assert o.angle(Point(1.0, 1e-12), Point(2.0, 0.0)) == 0.0


def test_areas_distance_and_projection() -> None:
    o = Point(0.0, 0.0)
    assert o.sign_area(Point(1.0, 0.0), Point(0.0, 1.0)) == pytest.approx(0.5)
    assert o.sign_area(Point(0.0, 1.0), Point(1.0, 0.0)) == pytest.approx(-0.5)
    assert o.area(Point(0.0, 1.0), Point(1.0, 0.0)) == pytest.approx(0.5)

    p = Point(2.0, 3.0)
    assert p.dist(Point(0.0, 0.0), Point(1.0, 0.0)) == pytest.approx(3.0)
    assert p.proj(Point(0.0, 0.0), Point(4.0, 0.0)) == pytest.approx(0.5)
    assert p.proj(Point(4.0, 0.0), Point(0.0, 0.0)) == pytest.approx(0.5)


def test_degenerate_segment_fallbacks() -> None:
    p = Point(3.0, 4.0)
    a = Point(0.0, 0.0)
    assert p.proj(a, a) == 0.0
    assert p.dist(a, a) == pytest.approx(5.0)


def _square() -> ConvexPolygon:
    return ConvexPolygon.from_xy([(0, 0), (1, 0), (1, 1), (0, 1)])


def test_hull_of_square_is_clockwise_and_ends_at_start() -> None:
    cp = _square()
    cp.convex_hull()
    coords = [(v.x, v.y) for v in cp]
    assert coords == [(0.0, 0.0), (0.0, 1.0), (1.0, 1.0), (1.0, 0.0)]
    assert cp.area() == pytest.approx(1.0)


def test_hull_drops_interior_collinear_and_duplicate_points() -> None:
    cp = ConvexPolygon.from_xy(
        [(0, 0), (0.5, 0.5), (1, 0), (0.5, 0), (1, 1), (1, 0), (0, 1), (0, 0)]
    )
    cp.convex_hull()
    assert cp.num_vertices() == 4
    assert {(v.x, v.y) for v in cp} == {(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)}


def test_hull_is_idempotent() -> None:
    cp = ConvexPolygon.from_xy([(3, 1), (0, 0), (4, 0), (1, 3), (2, 1)])
    cp.convex_hull()
    first = cp.vertices
    cp.convex_hull()
    assert cp.vertices == first


def test_hull_of_collinear_points_has_two_vertices() -> None:
    cp = ConvexPolygon.from_xy([(0, 0), (1, 0), (2, 0)])
    cp.convex_hull()
    assert cp.num_vertices() == 2
    assert cp.area() == 0.0


def test_small_polygons_are_left_untouched() -> None:
    cp = ConvexPolygon.from_xy([(1, 1), (0, 0)])
    cp.convex_hull()
    assert [(v.x, v.y) for v in cp] == [(1.0, 1.0), (0.0, 0.0)]
    cp.reset()
    assert len(cp) == 0
    cp.add_vertex(Point(2.0, 2.0))
    assert cp.num_vertices() == 1
