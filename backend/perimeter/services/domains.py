"""
Perimeter functions of canonical domains.

A perimeter function ``pf(z)`` gives the length of the shortest curve
that cuts a part of area (or volume) ``z`` off a domain; the inverse
``ipf(p)`` gives the largest area that a curve of length ``p`` can cut
off.  The "outer" variants (``opf``/``iopf``) describe the complement of
a disk or rectangle: the curve is drawn outside the obstacle and the
obstacle's boundary is free.

Notation: ``z`` is an area, ``p`` a length, ``a`` a radius (or, with
``b``, the sides of a rectangle) and ``theta`` a plane angle.

Closed forms are used where they exist.  The disk, rectangle and ball
cases reduce to transcendental equations in an auxiliary angle, which
are solved with :func:`~perimeter.services.numeric.bisect`.  For the
disk the system is::

    p/a   = +/- (pi - 2*beta) * tan(beta)
    z/a^2 = beta - tan(beta) + (pi/2 - beta) * tan(beta)^2

and for the outer rectangle, with ``d`` either the long side ``b`` or
the diagonal ``sqrt(a^2 + b^2)``::

    2*z = r^2 * (2*pi - beta + sin(beta))   (minus a*b for the diagonal)
    d   = 2*r*sin(beta/2)
    p   = (2*pi - beta) * r

Every function validates its arguments and reacts to bad input
according to the invalid-input policy (see :mod:`.errors`).

The module ends with ``DOMAINS``, a registry of the functions keyed by
shape name, used by the API layer.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple

from .errors import InvalidInputPolicy, is_nan, out_of_range
from .numeric import INF, PI, QNAN, bisect

HALF_PI = PI / 2.0


def _aux_1(beta: float) -> float:
    """``beta - tan(beta) + (pi/2 - beta)*tan(beta)^2`` via its Taylor series.

    The direct formula cancels catastrophically for small ``beta``.
    """
    powers = [0.0, beta]
    for _ in range(2, 22):
        powers.append(powers[-1] * beta)
    b = powers
    num = (
        + b[2] * PI / 2.0
        - b[3] * 4.0 / 3.0
        - b[4] * PI / 6.0
        + b[5] * 8.0 / 15.0
        + b[6] * PI / 45.0
        - b[7] * 8.0 / 105.0
        - b[8] * PI / 630.0
        + b[9] * 16.0 / 2835.0
        + b[10] * PI / 14175.0
        - b[11] * 8.0 / 31185.0
        - b[12] * PI / 467775.0
        + b[13] * 16.0 / 2027025.0
        + b[14] * PI * 2.0 / 42567525.0
        - b[15] * 16.0 / 91216125.0
        - b[16] * PI / 1277025750.0
        + b[17] * 32.0 / 10854718875.0
        + b[18] * PI / 97692469875.0
        - b[19] * 8.0 / 206239658625.0
        - b[20] * PI / 9280784638125.0
        + b[21] * 16.0 / 38979295480125.0
    )
    c = math.cos(beta)
    return num / (c * c)


_AUX_2_DENOMINATORS = (
    2.0,
    -24.0,
    720.0,
    -40320.0,
    3628800.0,
    -479001600.0,
    87178291200.0,
    -20922789888000.0,
    6402373705728000.0,
    -2432902008176640000.0,
)


def _aux_2(beta: float) -> float:
    """``1 - cos(beta)`` via its Taylor series, accurate near 0."""
    b2 = beta * beta
    term = b2
    total = 0.0
    for denom in _AUX_2_DENOMINATORS:
        total += term / denom
        term *= b2
    return total


def _tan(x: float) -> float:
    return math.sin(x) / math.cos(x)


# ---------------------------------------------------------------------------
# Plane, angle, sphere
# ---------------------------------------------------------------------------


def pf_plane(z: float, *, policy: Optional[InvalidInputPolicy] = None) -> float:
    """Perimeter function of the plane.  Domain: ``0 <= z``."""
    name = "pf_plane"
    if is_nan(name, policy, z):
        return QNAN
    if out_of_range(0.0 <= z, name, policy):
        return QNAN
    return 2.0 * math.sqrt(PI) * math.sqrt(z)


def ipf_plane(p: float, *, policy: Optional[InvalidInputPolicy] = None) -> float:
    """Inverse perimeter function of the plane.  Domain: ``0 <= p``."""
    name = "ipf_plane"
    if is_nan(name, policy, p):
        return QNAN
    if out_of_range(0.0 <= p, name, policy):
        return QNAN
    return (p / (4.0 * PI)) * p


def pf_angle(z: float, theta: float, *, policy: Optional[InvalidInputPolicy] = None) -> float:
    """Perimeter function of a plane angle.  Domain: ``0 <= z``, ``0 < theta < 2*pi``."""
    name = "pf_angle"
    if is_nan(name, policy, z, theta):
        return QNAN
    if out_of_range(0.0 <= z, name, policy):
        return QNAN
    if out_of_range(0.0 < theta < 2.0 * PI, name, policy):
        return QNAN
    return math.sqrt(2.0 * min(theta, PI)) * math.sqrt(z)


def ipf_angle(p: float, theta: float, *, policy: Optional[InvalidInputPolicy] = None) -> float:
    """Inverse perimeter function of a plane angle.  Domain: ``0 <= p``, ``0 < theta < 2*pi``."""
    name = "ipf_angle"
    if is_nan(name, policy, p, theta):
        return QNAN
    if out_of_range(0.0 <= p, name, policy):
        return QNAN
    if out_of_range(0.0 < theta < 2.0 * PI, name, policy):
        return QNAN
    return p / (2.0 * min(theta, PI)) * p


def pf_sphere(z: float, a: float = 1.0, *, policy: Optional[InvalidInputPolicy] = None) -> float:
    """Perimeter function of a sphere surface.  Domain: ``0 <= z <= 4*pi*a^2``, ``0 < a``."""
    name = "pf_sphere"
    if is_nan(name, policy, z, a):
        return QNAN
    if out_of_range(0.0 <= z <= 4.0 * PI * a * a and z < INF, name, policy):
        return QNAN
    if out_of_range(0.0 < a, name, policy):
        return QNAN
    return 2.0 * math.sqrt(z) * math.sqrt(max(PI - z / (4.0 * a * a), 0.0))


def ipf_sphere(p: float, a: float = 1.0, *, policy: Optional[InvalidInputPolicy] = None) -> float:
    """Inverse perimeter function of a sphere surface.  Domain: ``0 <= p <= 2*pi*a``, ``0 < a``."""
    name = "ipf_sphere"
    if is_nan(name, policy, p, a):
        return QNAN
    if out_of_range(0.0 <= p <= 2.0 * PI * a and p < INF, name, policy):
        return QNAN
    if out_of_range(0.0 < a, name, policy):
        return QNAN
    tmp = p / (2.0 * PI * a)
    return (2.0 * PI) * (a * (1.0 - math.sqrt(1.0 - tmp * tmp)) * a)


# ---------------------------------------------------------------------------
# Disk
# ---------------------------------------------------------------------------


def pf_circle(z: float, a: float = 1.0, *, policy: Optional[InvalidInputPolicy] = None) -> float:
    """Perimeter function of a disk of radius ``a``.

    Domain: ``0 <= z <= pi*a^2``, ``0 <= a``.  The function is symmetric
    about ``pi*a^2/2`` where it reaches the diameter ``2*a``.
    """
    name = "pf_circle"
    if is_nan(name, policy, z, a):
        return QNAN
    if out_of_range(0.0 <= z <= PI * a * a and z < INF, name, policy):
        return QNAN
    if out_of_range(0.0 <= a, name, policy):
        return QNAN

    if a == 0.0:
        return 0.0

    z_norm = z / a / a
    if z_norm == 0.0:
        # Too small to feel the curvature: half-plane behaviour.
        return math.sqrt(2.0 * PI) * math.sqrt(z)

    z = z_norm
    if z > HALF_PI:
        z = PI - z
    if z == 0.0:
        return 0.0

    if z < HALF_PI - 1.0:
        beta = bisect(lambda b: _aux_1(b) > z, 0.0, HALF_PI)
        result = (PI - 2.0 * beta) * _tan(beta)
    else:
        def too_far(b: float) -> bool:
            t = _tan(b)
            return b - t + t * (HALF_PI - b) * t > z

        beta = bisect(too_far, 0.0, HALF_PI, stop=lambda b: b == HALF_PI)
        c = math.sin(HALF_PI - beta)
        result = 2.0 if c == 0.0 else (PI - 2.0 * beta) * math.sin(beta) / c

    return a * result


def ipf_circle(p: float, a: float = 1.0, *, policy: Optional[InvalidInputPolicy] = None) -> float:
    """Inverse perimeter function of a disk.  Domain: ``0 <= p <= 2*a``, ``0 <= a``."""
    name = "ipf_circle"
    if is_nan(name, policy, p, a):
        return QNAN
    if out_of_range(0.0 <= p <= 2.0 * a and p < INF, name, policy):
        return QNAN
    if out_of_range(0.0 <= a, name, policy):
        return QNAN

    if a == 0.0:
        return 0.0

    p_norm = p / a
    if p_norm == 0.0:
        return (p / (2.0 * PI)) * p

    p = p_norm
    beta = bisect(
        lambda b: (PI - 2.0 * b) * _tan(b) > p,
        0.0,
        HALF_PI,
        stop=lambda b: b == HALF_PI,
    )

    if beta < PI / 4.0:
        result = _aux_1(beta)
    elif beta == HALF_PI:
        result = HALF_PI
    else:
        t = _tan(beta)
        result = beta - t + t * (HALF_PI - beta) * t

    return a * result * a


def opf_circle(z: float, a: float = 1.0, *, policy: Optional[InvalidInputPolicy] = None) -> float:
    """Outer perimeter function of a disk of radius ``a``.

    Domain: ``0 <= z``, ``0 <= a``; ``z`` and ``a`` must not both be infinite.
    """
    name = "opf_circle"
    if is_nan(name, policy, z, a):
        return QNAN
    if out_of_range(z < INF or a < INF, name, policy):
        return QNAN
    if out_of_range(0.0 <= z, name, policy):
        return QNAN
    if out_of_range(0.0 <= a, name, policy):
        return QNAN

    if z == INF:
        return INF
    if a == 0.0:
        return 2.0 * math.sqrt(PI) * math.sqrt(z)

    z_norm = z / a / a
    if z_norm == 0.0:
        return math.sqrt(2.0 * PI) * math.sqrt(z)
    if z_norm == INF:
        return 2.0 * (math.sqrt(PI) * math.sqrt(z) - a)

    z = z_norm
    if z < HALF_PI - 1.0:
        beta = bisect(lambda b: _aux_1(b) < z, -HALF_PI, 0.0)
        result = (2.0 * beta - PI) * _tan(beta)
    else:
        # Substitute beta = alpha - pi/2.
        def too_far(alpha: float) -> bool:
            t = _tan(alpha)
            return -HALF_PI + alpha + 1.0 / t + (PI - alpha) / (t * t) < z

        alpha = bisect(too_far, 0.0, HALF_PI, stop=lambda al: _tan(al) ** 2 == 0.0)
        if _tan(alpha) ** 2 == 0.0:
            return INF
        result = 2.0 * (PI - alpha) * math.cos(alpha) / math.sin(alpha)

    return a * result


def iopf_circle(p: float, a: float = 1.0, *, policy: Optional[InvalidInputPolicy] = None) -> float:
    """Inverse outer perimeter function of a disk.

    Domain: ``0 <= p``, ``0 <= a``; ``p`` and ``a`` must not both be infinite.
    """
    name = "iopf_circle"
    if is_nan(name, policy, p, a):
        return QNAN
    if out_of_range(p < INF or a < INF, name, policy):
        return QNAN
    if out_of_range(0.0 <= p, name, policy):
        return QNAN
    if out_of_range(0.0 <= a, name, policy):
        return QNAN

    if p == INF:
        return INF
    if a == 0.0:
        return (p / (4.0 * PI)) * p

    p_norm = p / a
    if p_norm == 0.0:
        return (p / (2.0 * PI)) * p
    if p_norm == INF:
        tmp = p / 2.0 + a
        return tmp * (1.0 / PI) * tmp

    p = p_norm
    if p < HALF_PI:
        beta = bisect(lambda b: (2.0 * b - PI) * _tan(b) < p, -HALF_PI, 0.0)
        result = _aux_1(beta)
    else:
        alpha = bisect(
            lambda al: 2.0 * (PI - al) / _tan(al) < p,
            0.0,
            HALF_PI,
            stop=lambda al: _tan(al) == 0.0,
        )
        t = _tan(alpha)
        if t == 0.0:
            return INF
        result = -HALF_PI + alpha + 1.0 / t + (PI - alpha) / (t * t)

    return a * result * a


# ---------------------------------------------------------------------------
# Rectangle
# ---------------------------------------------------------------------------


def pf_rectangle(
    z: float,
    a: float = 1.0,
    b: float = 1.0,
    *,
    policy: Optional[InvalidInputPolicy] = None,
) -> float:
    """Perimeter function of an ``a`` by ``b`` rectangle.

    Domain: ``0 <= z <= a*b``, ``0 <= a, b < inf``.  Near either end of
    the range the cut is a quarter circle around a corner; in between it
    is a straight cut across the short side.
    """
    name = "pf_rectangle"
    if is_nan(name, policy, z, a, b):
        return QNAN
    if out_of_range(0.0 <= a < INF, name, policy):
        return QNAN
    if out_of_range(0.0 <= b < INF, name, policy):
        return QNAN
    if out_of_range(0.0 <= z <= a * b and z < INF, name, policy):
        return QNAN

    if a > b:
        a, b = b, a

    half = (a / 2.0) * b
    if z > half:
        z = half - (z - half)

    if z < (a / PI) * a:
        return math.sqrt(PI) * math.sqrt(z)
    return a


def ipf_rectangle(
    p: float,
    a: float = 1.0,
    b: float = 1.0,
    *,
    policy: Optional[InvalidInputPolicy] = None,
) -> float:
    """Inverse perimeter function of a rectangle.  Domain: ``0 <= p <= min(a, b)``."""
    name = "ipf_rectangle"
    if is_nan(name, policy, p, a, b):
        return QNAN
    if out_of_range(0.0 <= a < INF, name, policy):
        return QNAN
    if out_of_range(0.0 <= b < INF, name, policy):
        return QNAN
    if a > b:
        a, b = b, a
    if out_of_range(0.0 <= p <= a, name, policy):
        return QNAN
    return (p / PI) * p


def _arc_area(beta: float, chord: float) -> Tuple[float, float]:
    """Radius and twice-halved area of the arc of angle ``2*pi - beta`` over ``chord``."""
    r = chord / (2.0 * math.sin(beta / 2.0))
    return r, r * (2.0 * PI - beta + math.sin(beta)) * (r / 2.0)


def opf_rectangle(
    z: float,
    a: float = 1.0,
    b: float = 1.0,
    *,
    policy: Optional[InvalidInputPolicy] = None,
) -> float:
    """Outer perimeter function of an ``a`` by ``b`` rectangle.

    Domain: ``0 <= z``, ``0 <= a, b < inf``.  Two candidate arcs are
    compared: one whose chord is the long side and one whose chord is
    the diagonal (which encloses half the rectangle for free).
    """
    name = "opf_rectangle"
    if is_nan(name, policy, z, a, b):
        return QNAN
    if out_of_range(0.0 <= a < INF, name, policy):
        return QNAN
    if out_of_range(0.0 <= b < INF, name, policy):
        return QNAN
    if out_of_range(0.0 <= z, name, policy):
        return QNAN

    if z == INF:
        return INF
    if a > b:
        a, b = b, a
    if b == 0.0:
        return 2.0 * math.sqrt(PI) * math.sqrt(z)
    if z <= PI * (b / 8.0) * b:
        return math.sqrt(2.0 * PI) * math.sqrt(z)

    beta = bisect(lambda be: _arc_area(be, b)[1] < z, 0.0, PI)
    r, _ = _arc_area(beta, b)
    result1 = (2.0 * PI - beta) * r

    diag = math.hypot(a, b)
    half_rect = (a / 2.0) * b
    beta = bisect(lambda be: _arc_area(be, diag)[1] - half_rect < z, 0.0, PI)
    r, _ = _arc_area(beta, diag)
    result2 = (2.0 * PI - beta) * r

    return min(result1, result2)


def iopf_rectangle(
    p: float,
    a: float = 1.0,
    b: float = 1.0,
    *,
    policy: Optional[InvalidInputPolicy] = None,
) -> float:
    """Inverse outer perimeter function of a rectangle.  Domain: ``0 <= p``, ``0 <= a, b < inf``."""
    name = "iopf_rectangle"
    if is_nan(name, policy, p, a, b):
        return QNAN
    if out_of_range(0.0 <= a < INF, name, policy):
        return QNAN
    if out_of_range(0.0 <= b < INF, name, policy):
        return QNAN
    if out_of_range(0.0 <= p, name, policy):
        return QNAN

    if p == INF:
        return INF
    if a > b:
        a, b = b, a
    if b == 0.0:
        return (p / (4.0 * PI)) * p
    if p <= PI * b / 2.0:
        return (p / (2.0 * PI)) * p

    def arc_length(be: float, chord: float) -> float:
        return (2.0 * PI - be) * chord / (2.0 * math.sin(be / 2.0))

    beta = bisect(lambda be: arc_length(be, b) < p, 0.0, PI)
    result1 = _arc_area(beta, b)[1]

    diag = math.hypot(a, b)
    if p <= PI * (diag / 2.0):
        return result1

    beta = bisect(lambda be: arc_length(be, diag) < p, 0.0, PI)
    result2 = _arc_area(beta, diag)[1] - (a / 2.0) * b

    return max(result1, result2)


# ---------------------------------------------------------------------------
# Three dimensions
# ---------------------------------------------------------------------------


def pf_3d(z: float, *, policy: Optional[InvalidInputPolicy] = None) -> float:
    """Perimeter (surface) function of 3D space.  Domain: ``0 <= z``."""
    name = "pf_3d"
    if is_nan(name, policy, z):
        return QNAN
    if out_of_range(0.0 <= z, name, policy):
        return QNAN
    return (6.0 * math.sqrt(PI) * z) ** (2.0 / 3.0)


def ipf_3d(p: float, *, policy: Optional[InvalidInputPolicy] = None) -> float:
    """Inverse perimeter function of 3D space.  Domain: ``0 <= p``."""
    name = "ipf_3d"
    if is_nan(name, policy, p):
        return QNAN
    if out_of_range(0.0 <= p, name, policy):
        return QNAN
    return math.sqrt((p / (36.0 * PI)) * p * p)


def _ball_small_volume(beta: float) -> float:
    """Normalised cut-off volume for the small-cap regime of ``pf_sphere_3d``."""
    s = math.sin(beta)
    if s == 0.0:
        return 2.0 * PI / 3.0
    tmp = _aux_2(beta)
    c = 1.0 - tmp
    ct = c / s
    return PI / 3.0 * ((1.0 - s) * (1.0 - s) * (2.0 + s) + tmp * tmp * (2.0 + c) * ct * ct * ct)


def _ball_large_volume(beta: float) -> float:
    """Normalised cut-off volume for the near-hemisphere regime of ``pf_sphere_3d``."""
    s = math.sin(beta)
    tmp = _aux_2(beta)
    c = 1.0 - tmp
    t = s / c
    return PI * (tmp * tmp * (2.0 + c) + (1.0 - s) * (1.0 - s) * (2.0 + s) * t * t * t) / 3.0


def _pf_ball_normalised(z: float) -> float:
    """``pf_sphere_3d`` for a unit ball and ``0 < z <= 2*pi/3``."""
    if z < HALF_PI - 1.0:
        beta = bisect(lambda b: _ball_small_volume(b) < z, 0.0, HALF_PI)
        s = math.sin(beta)
        if s == 0.0:
            result = 1.0
        else:
            ct = math.cos(beta) / s
            result = _aux_2(beta) * ct * ct
        return 2.0 * PI * result

    beta = bisect(lambda b: _ball_large_volume(b) > z, 0.0, HALF_PI)
    # (1 - s) * tan(beta)^2 == s^2 / (1 + s), which stays exact near pi/2.
    s = math.sin(beta)
    return 2.0 * PI * s * s / (1.0 + s)


def pf_sphere_3d(z: float, a: float = 1.0, *, policy: Optional[InvalidInputPolicy] = None) -> float:
    """Perimeter (surface) function of a solid ball of radius ``a``.

    Domain: ``0 <= z <= (4/3)*pi*a^3``, ``0 <= a``.  The cut surface is a
    spherical cap meeting the ball's boundary at a right angle; two
    parametrisations are used, split near the hemisphere.
    """
    name = "pf_sphere_3d"
    if is_nan(name, policy, z, a):
        return QNAN
    if out_of_range(0.0 <= z <= (4.0 * PI / 3.0) * a * a * a and z < INF, name, policy):
        return QNAN
    if out_of_range(0.0 <= a, name, policy):
        return QNAN

    if a == 0.0:
        return 0.0

    z_norm = z / a / a / a
    if z_norm == 0.0:
        return (3.0 * math.sqrt(2.0 * PI) * z) ** (2.0 / 3.0)

    z = z_norm
    if z > 2.0 * PI / 3.0:
        z = 4.0 * PI / 3.0 - z
    if z == 0.0:
        return 0.0

    return a * _pf_ball_normalised(z) * a


def ipf_sphere_3d(p: float, a: float = 1.0, *, policy: Optional[InvalidInputPolicy] = None) -> float:
    """Inverse perimeter function of a solid ball of radius ``a``.

    Domain: ``0 <= p <= pi*a^2``, ``0 <= a``.  Returns the smaller of
    the two volumes a surface of area ``p`` can cut off, found by
    bisection on ``pf_sphere_3d`` over ``[0, (2/3)*pi*a^3]``.
    """
    name = "ipf_sphere_3d"
    if is_nan(name, policy, p, a):
        return QNAN
    if out_of_range(0.0 <= p <= PI * a * a and p < INF, name, policy):
        return QNAN
    if out_of_range(0.0 <= a, name, policy):
        return QNAN

    if a == 0.0 or p == 0.0:
        return 0.0

    p_norm = p / a / a
    if p_norm >= PI:
        return (2.0 * PI / 3.0) * a * a * a

    def too_far(z: float) -> bool:
        return z > 0.0 and _pf_ball_normalised(z) > p_norm

    z = bisect(too_far, 0.0, 2.0 * PI / 3.0)
    return a * a * a * z


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DomainSpec:
    """A canonical domain: its perimeter function, inverse and shape parameters."""

    name: str
    pf: Callable[..., float]
    ipf: Callable[..., float]
    parameters: Tuple[str, ...] = ()
    description: str = ""
    defaults: Dict[str, float] = field(default_factory=dict)


DOMAINS: Dict[str, DomainSpec] = {
    spec.name: spec
    for spec in (
        DomainSpec("plane", pf_plane, ipf_plane, (), "Infinite plane"),
        DomainSpec("angle", pf_angle, ipf_angle, ("theta",), "Infinite wedge of angle theta"),
        DomainSpec("sphere", pf_sphere, ipf_sphere, ("a",), "Sphere surface of radius a", {"a": 1.0}),
        DomainSpec("circle", pf_circle, ipf_circle, ("a",), "Disk of radius a", {"a": 1.0}),
        DomainSpec(
            "circle_outer", opf_circle, iopf_circle, ("a",),
            "Plane outside a disk of radius a", {"a": 1.0},
        ),
        DomainSpec(
            "rectangle", pf_rectangle, ipf_rectangle, ("a", "b"),
            "Rectangle with sides a and b", {"a": 1.0, "b": 1.0},
        ),
        DomainSpec(
            "rectangle_outer", opf_rectangle, iopf_rectangle, ("a", "b"),
            "Plane outside a rectangle with sides a and b", {"a": 1.0, "b": 1.0},
        ),
        DomainSpec("space_3d", pf_3d, ipf_3d, (), "Infinite 3D space"),
        DomainSpec(
            "ball_3d", pf_sphere_3d, ipf_sphere_3d, ("a",),
            "Solid ball of radius a", {"a": 1.0},
        ),
    )
}


def _shape_args(spec: DomainSpec, params: Dict[str, Optional[float]]) -> list[float]:
    args = []
    for pname in spec.parameters:
        value = params.get(pname)
        if value is None:
            if pname not in spec.defaults:
                raise TypeError(f"{spec.name}: missing parameter '{pname}'")
            value = spec.defaults[pname]
        args.append(float(value))
    return args


def evaluate_pf(
    shape: str,
    z: float,
    *,
    policy: Optional[InvalidInputPolicy] = None,
    **params: Optional[float],
) -> float:
    """Evaluate the perimeter function of the named canonical domain.

    Raises:
        KeyError: if ``shape`` is not registered.
    """
    spec = DOMAINS[shape]
    return spec.pf(z, *_shape_args(spec, params), policy=policy)


def evaluate_ipf(
    shape: str,
    p: float,
    *,
    policy: Optional[InvalidInputPolicy] = None,
    **params: Optional[float],
) -> float:
    """Evaluate the inverse perimeter function of the named canonical domain."""
    spec = DOMAINS[shape]
    return spec.ipf(p, *_shape_args(spec, params), policy=policy)
