"""Tests for canonical-domain perimeter functions and the domain registry."""

import math
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from perimeter.services import domains  # type: ignore
from perimeter.services.domains import (  # type: ignore
    DOMAINS,
    evaluate_ipf,
    evaluate_pf,
    ipf_3d,
    ipf_angle,
    ipf_circle,
    ipf_plane,
    ipf_rectangle,
    ipf_sphere,
    ipf_sphere_3d,
    iopf_circle,
    iopf_rectangle,
    opf_circle,
    opf_rectangle,
    pf_3d,
    pf_angle,
    pf_circle,
    pf_plane,
    pf_rectangle,
    pf_sphere,
    pf_sphere_3d,
)
from perimeter.services.errors import InvalidInputPolicy, OutOfRange  # type: ignore

PI = math.pi


def test_plane_and_angle() -> None:
    assert pf_plane(1.0) == pytest.approx(2.0 * math.sqrt(PI))
    assert ipf_plane(pf_plane(2.5)) == pytest.approx(2.5)
    assert pf_angle(1.0, PI) == pytest.approx(math.sqrt(2.0 * PI))
    # Reflex angles behave like a half-plane.
    assert pf_angle(1.0, 1.5 * PI) == pytest.approx(pf_angle(1.0, PI))
    assert ipf_angle(pf_angle(0.7, PI / 3), PI / 3) == pytest.approx(0.7)


def test_sphere_surface() -> None:
    # Half the sphere is cut off by the equator.
    assert pf_sphere(2.0 * PI) == pytest.approx(2.0 * PI)
    assert pf_sphere(4.0 * PI) == pytest.approx(0.0, abs=1e-7)
    assert ipf_sphere(2.0 * PI) == pytest.approx(2.0 * PI)
    assert ipf_sphere(pf_sphere(1.3, 2.0), 2.0) == pytest.approx(1.3)


def test_circle_values() -> None:
    assert pf_circle(PI / 2.0) == pytest.approx(2.0, rel=1e-6)
    assert pf_circle(PI) == 0.0
    assert pf_circle(0.0) == 0.0
    assert pf_circle(0.0, 0.0) == 0.0
    # Small areas see an almost straight boundary: half-plane behaviour.
    assert pf_circle(1e-6) == pytest.approx(math.sqrt(2.0 * PI * 1e-6), rel=1e-2)
    # Symmetric about half the area.
    assert pf_circle(0.4) == pytest.approx(pf_circle(PI - 0.4))
    # Scaling: pf_a(z) = a * pf_1(z / a^2).
    assert pf_circle(4.0 * 0.3, 2.0) == pytest.approx(2.0 * pf_circle(0.3))


@pytest.mark.parametrize("z", [0.05, 0.4, 1.0, 1.5])
def test_circle_round_trip(z: float) -> None:
    assert ipf_circle(pf_circle(z)) == pytest.approx(z, rel=1e-7)


def test_ipf_circle_end_points() -> None:
    assert ipf_circle(0.0) == 0.0
    assert pf_circle(ipf_circle(1.9)) == pytest.approx(1.9, rel=1e-7)
    assert ipf_circle(1.9) < PI / 2.0


@pytest.mark.parametrize("z", [0.1, 0.5, 1.0, 10.0])
def test_outer_circle_round_trip(z: float) -> None:
    assert iopf_circle(opf_circle(z)) == pytest.approx(z, rel=1e-6)


def test_outer_circle_special_values() -> None:
    assert opf_circle(math.inf) == math.inf
    assert opf_circle(1.0, 0.0) == pytest.approx(pf_plane(1.0))
    assert iopf_circle(math.inf) == math.inf
    assert iopf_circle(2.0, 0.0) == pytest.approx(ipf_plane(2.0))
    # Around a disk a curve always does better than in the open plane.
    assert opf_circle(3.0) < pf_plane(3.0)


def test_rectangle_values() -> None:
    assert pf_rectangle(0.1, 1.0, 1.0) == pytest.approx(math.sqrt(0.1 * PI))
    assert pf_rectangle(0.5, 1.0, 1.0) == pytest.approx(1.0)
    assert pf_rectangle(1.0, 1.0, 1.0) == 0.0
    # Sides are interchangeable.
    assert pf_rectangle(0.5, 2.0, 1.0) == pytest.approx(pf_rectangle(0.5, 1.0, 2.0))
    assert ipf_rectangle(0.5, 1.0, 1.0) == pytest.approx(0.25 / PI)


@pytest.mark.parametrize("z", [0.01, 1.0, 5.0, 40.0])
def test_outer_rectangle_round_trip(z: float) -> None:
    assert iopf_rectangle(opf_rectangle(z, 1.0, 2.0), 1.0, 2.0) == pytest.approx(z, rel=1e-6)


def test_outer_rectangle_degenerate_obstacle() -> None:
    assert opf_rectangle(2.0, 0.0, 0.0) == pytest.approx(pf_plane(2.0))
    assert iopf_rectangle(3.0, 0.0, 0.0) == pytest.approx(ipf_plane(3.0))


def test_space_3d() -> None:
    # A ball of volume 4/3*pi has surface 4*pi.
    assert pf_3d(4.0 * PI / 3.0) == pytest.approx(4.0 * PI)
    assert ipf_3d(4.0 * PI) == pytest.approx(4.0 * PI / 3.0)


def test_ball_3d() -> None:
    assert pf_sphere_3d(2.0 * PI / 3.0) == pytest.approx(PI, rel=1e-6)
    assert pf_sphere_3d(4.0 * PI / 3.0) == 0.0
    assert pf_sphere_3d(0.3) == pytest.approx(pf_sphere_3d(4.0 * PI / 3.0 - 0.3))
    assert ipf_sphere_3d(PI) == pytest.approx(2.0 * PI / 3.0)
    assert ipf_sphere_3d(0.0) == 0.0


def test_ball_3d_is_continuous_up_to_hemisphere() -> None:
    half = 2.0 * PI / 3.0
    zs = [half - d for d in (1e-6, 1e-7, 1e-8, 1e-9, 1e-12, 0.0)]
    values = [pf_sphere_3d(z) for z in zs]
    assert all(b >= a - 1e-12 for a, b in zip(values, values[1:]))
    for value in values:
        assert value == pytest.approx(PI, rel=1e-9)
    assert pf_sphere_3d(half) == pytest.approx(PI, rel=1e-12)
    assert pf_sphere_3d(1.0, 2.0) == pytest.approx(4.0 * pf_sphere_3d(1.0 / 8.0))


@pytest.mark.parametrize("z", [0.2, 0.5, 1.0, 1.5, 2.0])
def test_ball_3d_round_trip(z: float) -> None:
    assert ipf_sphere_3d(pf_sphere_3d(z)) == pytest.approx(z, rel=1e-6)


def test_out_of_range_is_rejected() -> None:
    with pytest.raises(OutOfRange):
        pf_circle(4.0, 1.0, policy=InvalidInputPolicy.RAISE)
    with pytest.raises(OutOfRange):
        ipf_rectangle(1.5, 1.0, 2.0, policy=InvalidInputPolicy.RAISE)
    with pytest.raises(OutOfRange):
        pf_angle(1.0, 2.0 * PI, policy=InvalidInputPolicy.RAISE)
    with pytest.raises(OutOfRange):
        opf_circle(math.inf, math.inf, policy=InvalidInputPolicy.RAISE)
    assert math.isnan(pf_sphere(1.0, 0.0, policy=InvalidInputPolicy.NAN))


def test_registry_lists_every_shape() -> None:
    assert set(DOMAINS) == {
        "plane",
        "angle",
        "sphere",
        "circle",
        "circle_outer",
        "rectangle",
        "rectangle_outer",
        "space_3d",
        "ball_3d",
    }
    assert DOMAINS["rectangle"].parameters == ("a", "b")
    assert DOMAINS["circle"].pf is domains.pf_circle


def test_evaluate_dispatches_by_name() -> None:
    assert evaluate_pf("plane", 1.0) == pytest.approx(pf_plane(1.0))
    assert evaluate_pf("rectangle", 0.5, a=1.0, b=2.0) == pytest.approx(1.0)
    assert evaluate_pf("circle", PI / 2.0) == pytest.approx(2.0, rel=1e-6)
    assert evaluate_ipf("angle", 1.0, theta=PI / 2.0) == pytest.approx(ipf_angle(1.0, PI / 2.0))
    with pytest.raises(KeyError):
        evaluate_pf("torus", 1.0)
    with pytest.raises(TypeError):
        evaluate_pf("angle", 1.0)
