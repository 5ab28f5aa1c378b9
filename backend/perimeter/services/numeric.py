"""
Shared numeric helpers for the perimeter function services.

The guaranteed-search formulas are evaluated in plain double precision.
Two conventions are used consistently throughout the package:

* values closer than ``WORKING_PRECISION`` are treated as equal
  (``equal``/``trim``).  The tolerance is absolute and is not scaled to
  the size of the polygon being analysed;
* every root-finding loop is a midpoint bisection that stops as soon as
  the midpoint no longer strictly improves the bound it replaces
  (``bisect``).  This terminates on floating-point exhaustion rather
  than on a user tolerance, so results are accurate to the last bit
  the arithmetic can resolve.
"""

from __future__ import annotations

import math
from typing import Callable, Optional

PI: float = math.pi
INF: float = math.inf
QNAN: float = math.nan

# Absolute tolerance used for equality tests on areas, angles and lengths.
WORKING_PRECISION: float = 1.0e-10


def equal(x: float, y: float) -> bool:
    """Return True if *x* and *y* differ by less than the working precision."""
    return abs(x - y) < WORKING_PRECISION


def trim(x: float) -> float:
    """Snap *x* to exactly 0.0 when it is within the working precision of 0."""
    return 0.0 if equal(x, 0.0) else x


def wrap(index: int, count: int) -> int:
    """Map *index* into ``range(count)`` with wraparound in both directions."""
    return ((index % count) + count) % count


def bisect(
    too_far: Callable[[float], bool],
    left: float,
    right: float,
    stop: Optional[Callable[[float], bool]] = None,
) -> float:
    """Bisect ``[left, right]`` until the midpoint stops moving a bound.

    ``too_far(mid)`` decides which half keeps the root: when it returns
    True the right bound moves to ``mid``, otherwise the left bound does.
    The loop ends when the moved bound would not strictly improve, which
    happens once ``left`` and ``right`` are adjacent doubles.  ``stop`` is
    an optional early exit tested on every midpoint before the
    comparison; it is used where the predicate itself is singular (for
    example at ``pi/2`` for tangent-based equations).

    Returns:
        The last midpoint examined.
    """
    while True:
        mid = (left + right) / 2.0
        if stop is not None and stop(mid):
            return mid
        if too_far(mid):
            if mid >= right:
                return mid
            right = mid
        else:
            if mid <= left:
                return mid
            left = mid
