"""
Gain functions of the discrete search model.

Each function returns the area by which the residual (not yet cleared)
domain shrinks during one step of a searcher with detection radius
``r`` chasing an evader whose speed is ``w`` times the searcher's:

- ``f(w, r)``: the standard planar case;
- ``g(w, r)``: three-dimensional space;
- ``h(w, r, a)``: the surface of a sphere of radius ``a``.

They are compared against perimeter functions to decide whether a
guaranteed search of a given domain is possible.  Notation follows the
rest of the package: ``w`` is the velocity ratio and ``r`` the radius of
detection.
"""

from __future__ import annotations

import math
from typing import Optional

from .errors import InvalidInputPolicy, is_nan, out_of_range
from .numeric import PI, QNAN

# Coefficients of the even power series used by h() for |r| <= pi/2.
# x(r) = (1 - w^2) + w^2 * sum(_X_SERIES[k] * r^(2k+2))
_X_SERIES = (
    1.0 / 3.0,
    -2.0 / 45.0,
    1.0 / 315.0,
    -2.0 / 14175.0,
    2.0 / 467775.0,
    -4.0 / 42567525.0,
    1.0 / 638512875.0,
    -2.0 / 97692469875.0,
    2.0 / 9280784638125.0,
    -4.0 / 2143861251406875.0,
    2.0 / 147926426347074375.0,
    -4.0 / 48076088562799171875.0,
)

# Factorials (2k+3)! for the y/z series terms.
_ODD_FACTORIALS = (
    6.0,
    120.0,
    5040.0,
    362880.0,
    39916800.0,
    6227020800.0,
    1307674368000.0,
    355687428096000.0,
    121645100408832000.0,
    51090942171709440000.0,
)


def f(w: float, r: float, *, policy: Optional[InvalidInputPolicy] = None) -> float:
    """Planar gain F(w, r).  Domain: ``0 <= w <= 1``, ``0 <= r``."""
    name = "f"
    if is_nan(name, policy, w, r):
        return QNAN
    if out_of_range(0.0 <= w <= 1.0, name, policy):
        return QNAN
    if out_of_range(0.0 <= r, name, policy):
        return QNAN
    return 2.0 * r * (w * (PI - math.acos(w)) + math.sqrt(1.0 - w * w))


def g(w: float, r: float, *, policy: Optional[InvalidInputPolicy] = None) -> float:
    """Three-dimensional gain G(w, r).  Domain: ``0 <= w <= 1``, ``0 <= r``."""
    name = "g"
    if is_nan(name, policy, w, r):
        return QNAN
    if out_of_range(0.0 <= w <= 1.0, name, policy):
        return QNAN
    if out_of_range(0.0 <= r, name, policy):
        return QNAN
    tmp = 1.0 + w
    return PI * r * r * tmp * tmp


def _series_xyz(w: float, r2: float) -> tuple[float, float, float]:
    """Power-series values of x, y, z (see ``h``) for small to moderate r."""
    w2 = w * w
    powers = [r2]
    for _ in range(11):
        powers.append(powers[-1] * r2)

    x = (1.0 - w) * (1.0 + w) + w2 * sum(c * p for c, p in zip(_X_SERIES, powers))

    y = 1.0 - w
    z = 1.0 - w2
    sign = -1.0
    for k, fact in enumerate(_ODD_FACTORIALS):
        odd = 2.0 * k + 3.0
        y += sign * powers[k] * (odd - w) / fact
        z += sign * powers[k] * (odd - w2) / fact
        sign = -sign
    return x, y, z


def h(
    w: float,
    r: float,
    a: float = 1.0,
    *,
    policy: Optional[InvalidInputPolicy] = None,
) -> float:
    """Gain H_a(w, r) on a sphere of radius ``a``.

    Domain: ``0 <= w <= 1``, ``0 <= r <= pi*a``, ``0 < a``.

    Four regimes are used depending on ``r/a`` and ``w``: the closed
    form for large ``r``; a power series in ``r`` (accurate uniformly
    on ``|r| <= pi/2``) when ``r`` is moderate or ``w`` is far from 1;
    a linear blend of the series and the planar gain ``a*f(w, r/a)``
    across ``1e-5 < r <= 2e-5``; and the planar gain alone below that.
    ``h(1, r)`` jumps to ``4/sqrt(3)`` as ``r -> +0``, so that point is
    handled by its own asymptotic expansion, with ``h(1, 0) = 0``.
    """
    name = "h"
    if is_nan(name, policy, w, r, a):
        return QNAN
    if out_of_range(0.0 <= w <= 1.0, name, policy):
        return QNAN
    if out_of_range(0.0 <= r <= PI * a, name, policy):
        return QNAN
    if out_of_range(0.0 < a, name, policy):
        return QNAN

    r /= a
    r_abs = abs(r)

    if w == 1.0 and r_abs <= 1.0e-10:
        # h(1, r) = 4/sqrt(3) + 2*pi*r + O(r^3) for small positive r.
        if r == 0.0:
            return 0.0
        return a * (4.0 / math.sqrt(3.0) + 2.0 * PI * r)

    r_limit_1 = 1.0e-5
    r_limit_2 = 2.0e-5

    if r_abs > PI / 2.0:
        wr_case = 1
    elif r_abs > r_limit_2:
        wr_case = 2
    elif r_abs * r_abs > (1.0 - w) / 100.0:  # 100 is empirical
        wr_case = 2
    elif r_abs > r_limit_1:
        wr_case = 3
    else:
        return a * f(w, r, policy=policy)

    r2 = r * r
    c = math.cos(r)
    s = math.sin(r)
    ws = w * s
    ws_r = w if r == 0.0 else ws / r

    # x = 1 - (w*sin(r)/r)^2, y = cos(r) - w*sin(r)/r, z = cos(r) - w^2*sin(r)/r
    if wr_case == 1:
        x = 1.0 - ws_r * ws_r
        y = c - ws_r
        z = c - ws_r * w
    else:
        x, y, z = _series_xyz(w, r2)

    h1 = 2.0 * ws * (PI - math.acos(min(ws_r, 1.0)))
    h2 = (2.0 * y * z + 2.0 * r2 * x * x) / (math.sqrt(x) * math.sqrt(z * z + r2 * x * x))
    h3 = -2.0 * y * c / math.sqrt(x)

    result = h1 + (h2 + h3) / r

    if wr_case == 3:
        result = (
            result * (r_limit_2 - r_abs) + f(w, r, policy=policy) * (r_abs - r_limit_1)
        ) / (r_limit_2 - r_limit_1)

    return a * result
