"""
Perimeter function of a single pair of polygon sides.

For two sides of a convex polygon, the shortest curves that cut off a
given area while ending on those two sides are either straight segments
between parallel sides (constant length) or circular arcs centred where
the sides' supporting lines meet (length ``sqrt(2*theta*(z + zeta))``).
``PartialPF`` is that function restricted to the area interval
``[a, b]`` where such a curve actually fits inside the polygon.

The polygon's perimeter function is the lower envelope of all these
partial functions; the envelope is assembled in
:mod:`.polygon_pf` with the comparison helpers defined here
(``begin``/``end``/``root``).
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, replace
from typing import Iterator, NamedTuple, Optional, Sequence, Tuple

from .numeric import PI, equal, trim, wrap
from .point import Point


class Form(enum.Enum):
    CONSTANT = "constant"
    SQRT = "sqrt"
    NONE = "none"


class Side(NamedTuple):
    """A polygon side from vertex ``p`` to the next vertex ``q`` (clockwise)."""

    p: Point
    q: Point


@dataclass
class EffectivePerimeter:
    """A curve dividing the polygon in two: a segment or a circular arc.

    For arcs, ``center`` is set and the arc runs counter-clockwise from
    ``start`` to ``end``.
    """

    form: Form = Form.NONE
    start: Optional[Point] = None
    end: Optional[Point] = None
    center: Optional[Point] = None

    @property
    def is_arc(self) -> bool:
        return self.form is Form.SQRT


def _cyclic(start: int, stop: int, count: int) -> Iterator[int]:
    """Indices ``start, start+1, ...`` modulo *count*, stopping before *stop*."""
    index = wrap(start, count)
    while index != stop:
        yield index
        index = wrap(index + 1, count)


def fan_area(sides: Sequence[Side], index_1: int, index_2: int) -> float:
    """Area of the sub-polygon ``q[i1], q[i1+1], ..., q[i2-1]``."""
    count = len(sides)
    first = wrap(index_1 + 1, count)
    if first == index_2:
        return 0.0
    apex = sides[first].p
    return sum(
        apex.area(sides[i].p, sides[i].q) for i in _cyclic(first + 1, index_2, count)
    )


def fan_area_from(sides: Sequence[Side], index_1: int, index_2: int, point: Point) -> float:
    """Area of the sub-polygon ``point, q[i1], q[i1+1], ..., q[i2-1]``."""
    count = len(sides)
    return sum(
        point.area(sides[i].p, sides[i].q) for i in _cyclic(index_1 + 1, index_2, count)
    )


@dataclass
class PartialPF:
    """A smooth piece of a perimeter function on ``[a, b]``.

    ``CONSTANT`` pieces have value ``pfa`` (== ``pfb`` == ``zeta``);
    ``SQRT`` pieces have value ``sqrt(2*theta*(z + zeta))``.  ``NONE``
    marks an empty domain and never enters an envelope.
    """

    form: Form = Form.NONE
    a: float = 0.0
    b: float = 0.0
    theta: float = 0.0
    zeta: float = 0.0
    pfa: float = 0.0
    pfb: float = 0.0

    @classmethod
    def constant(cls, a: float, b: float, value: float) -> "PartialPF":
        return cls(Form.CONSTANT, a, b, 0.0, value, value, value)

    @classmethod
    def sqrt_form(cls, a: float, b: float, theta: float, zeta: float) -> "PartialPF":
        piece = cls(Form.SQRT, a, b, theta, zeta)
        piece.pfa = piece.pf(a)
        piece.pfb = piece.pf(b)
        return piece

    def copy(self) -> "PartialPF":
        return replace(self)

    def pf(self, z: float) -> float:
        if self.form is Form.CONSTANT:
            return self.pfa
        return math.sqrt(max(2.0 * self.theta * (z + self.zeta), 0.0))

    def ipf(self, p: float) -> float:
        if self.form is Form.CONSTANT:
            return self.a
        return (p / 2.0) * (p / self.theta) - self.zeta

    def set_left(self, z: float) -> None:
        self.a = z
        self.pfa = self.pf(z)

    def set_right(self, z: float) -> None:
        self.b = z
        self.pfb = self.pf(z)

    def root(self, other: "PartialPF") -> float:
        """Solve ``self.pf(z) == other.pf(z)`` for ``z``."""
        if self.form is Form.CONSTANT:
            if other.form is Form.SQRT:
                return (self.pfa / 2.0) * (self.pfa / other.theta) - other.zeta
            # Two constants never cross; begin() filters this out.
            return max(self.a, other.a)
        if other.form is Form.SQRT:
            if self.theta == other.theta:
                return max(self.a, other.a)
            return (other.theta * other.zeta - self.theta * self.zeta) / (self.theta - other.theta)
        return (other.pfa / 2.0) * (other.pfa / self.theta) - self.zeta

    def begin(self, other: "PartialPF") -> Optional[Tuple[float, float, bool, bool]]:
        """Find where *other* dips below ``self`` on their common domain.

        Returns ``None`` when *other* is nowhere strictly below.  Otherwise
        returns ``(left, right, at_a, at_b)``: *other* is below ``self`` on
        ``[left, right]``, and the flags tell whether ``left == self.a``
        and ``right == self.b``.
        """
        if self.b <= other.a or self.a >= other.b:
            return None
        if equal(self.theta - other.theta, 0.0):
            return None

        possibly_left = self.a >= other.a
        possibly_right = self.b <= other.b

        com_a = max(self.a, other.a)
        com_b = min(self.b, other.b)
        delta_a = trim(self.pf(com_a) - other.pf(com_a))
        delta_b = trim(self.pf(com_b) - other.pf(com_b))

        if delta_a < 0.0:
            if delta_b <= 0.0:
                return None
            left, right = self.root(other), com_b
            if left == right:
                return None
            return left, right, False, possibly_right

        if delta_a == 0.0:
            if delta_b <= 0.0:
                return None
            return com_a, com_b, possibly_left, possibly_right

        if delta_b < 0.0:
            left, right = com_a, self.root(other)
            if left == right:
                return None
            return left, right, possibly_left, False
        return com_a, com_b, possibly_left, possibly_right

    def end(self, other: "PartialPF") -> Tuple[bool, float, bool]:
        """Find where *other* stops being below ``self``.

        Returns ``(found, right, at_a)``.  ``right`` is the supremum of
        the region where *other* is below ``self`` on the common domain.
        ``found`` is False when ``self`` lies entirely above *other* (so it
        is superseded); ``at_a`` tells whether ``right == self.a``.
        """
        if self.a >= other.b:
            return True, other.b, False
        if self.b > other.b and self.pf(other.b) >= other.pfb:
            return True, other.b, False

        possibly_left = self.a >= other.a
        com_a = max(self.a, other.a)
        com_b = min(self.b, other.b)
        pf_com_a = self.pf(com_a)
        pf_com_b = self.pf(com_b)
        other_com_a = other.pf(com_a)
        other_com_b = other.pf(com_b)

        if pf_com_a > other_com_a:
            if pf_com_b >= other_com_b:
                return False, com_b, False
            return True, self.root(other), False
        if pf_com_a == other_com_a:
            if pf_com_b >= other_com_b:
                return False, com_b, False
            return True, com_a, possibly_left
        return True, com_a, possibly_left


def for_sides(
    sides: Sequence[Side],
    area: float,
    index_1: int,
    index_2: int,
    curve: Optional[EffectivePerimeter] = None,
) -> PartialPF:
    """Build the partial perimeter function of sides *index_1* and *index_2*.

    *sides* must run clockwise around a convex polygon of the given
    *area*.  When *curve* is given and the partial function reaches half
    the area, *curve* is filled with the bisecting curve between the
    two sides; otherwise its ``form`` is set to ``NONE``.
    """
    half_area = area / 2.0
    side_1 = sides[index_1]
    side_2 = sides[index_2]
    pq1 = side_1.q - side_1.p
    pq2 = side_2.q - side_2.p
    origin = Point(0.0, 0.0)
    theta = origin.angle(pq1, -pq2)

    if theta == 0.0:
        return _parallel_sides(sides, area, index_1, index_2, side_1, side_2, pq1, pq2, curve)

    denom = origin.sign_area(pq1, pq2)
    if denom == 0.0 or theta == PI:
        return PartialPF()

    r = (pq1 * origin.sign_area(side_2.p, side_2.q) - pq2 * origin.sign_area(side_1.p, side_1.q)) / denom

    p1 = abs(side_1.p - r)
    q1 = abs(side_1.q - r)
    p2 = abs(side_2.p - r)
    q2 = abs(side_2.q - r)
    count = len(sides)
    mirrored = theta > PI

    if not mirrored:
        if p1 <= p2 or q1 >= q2:
            return PartialPF()
        if side_1.q == side_2.p:
            q1 = p2 = 0.0
        r_min = max(q1, p2)
        r_max = min(p1, q2)
        between = _cyclic(index_2 + 1, index_1, count)
    else:
        if p1 >= p2 or q1 <= q2:
            return PartialPF()
        if side_1.p == side_2.q:
            p1 = q2 = 0.0
        r_min = max(p1, q2)
        r_max = min(q1, p2)
        between = _cyclic(index_1 + 1, index_2, count)

    for index in between:
        proj = r.proj(sides[index].p, sides[index].q)
        if 0.0 < proj < 1.0:
            r_max = min(r_max, r.dist(sides[index].p, sides[index].q))

    if r_min >= r_max:
        return PartialPF()

    if not mirrored:
        zeta = r.area(side_1.q, side_2.p) - fan_area(sides, index_1, index_2)
    else:
        theta = 2.0 * PI - theta
        zeta = r.area(side_1.p, side_2.q) - fan_area(sides, index_2, index_1)

    a = r_min * r_min * theta / 2.0 - zeta
    b = r_max * r_max * theta / 2.0 - zeta
    if a > half_area:
        return PartialPF()

    piece = PartialPF(Form.SQRT, a, b, theta, zeta, r_min * theta, r_max * theta)
    if b > half_area:
        piece.set_right(half_area)
    if piece.a == piece.b:
        return PartialPF()

    if curve is not None:
        if piece.b < half_area:
            curve.form = Form.NONE
        else:
            rad = piece.pfb / theta
            curve.form = Form.SQRT
            curve.center = r
            if not mirrored:
                curve.start = r + (side_1.p - r) * (rad / p1)
                curve.end = r + (side_2.q - r) * (rad / q2)
            else:
                curve.start = r + (side_2.p - r) * (rad / p2)
                curve.end = r + (side_1.q - r) * (rad / q1)
    return piece


def _parallel_sides(
    sides: Sequence[Side],
    area: float,
    index_1: int,
    index_2: int,
    side_1: Side,
    side_2: Side,
    pq1: Point,
    pq2: Point,
    curve: Optional[EffectivePerimeter],
) -> PartialPF:
    """Constant-width piece between two antiparallel sides."""
    half_area = area / 2.0
    p2 = side_2.p.proj(side_1.p, side_1.q)
    q2 = side_2.q.proj(side_1.p, side_1.q)
    if p2 <= 0.0 or q2 >= 1.0:
        return PartialPF()

    r = side_1.p + pq1 * p2 if p2 < 1.0 else side_2.p - pq1 * (p2 - 1.0)
    s = side_2.q - pq1 * q2 if q2 < 0.0 else side_1.p + pq1 * q2

    area_r = fan_area_from(sides, index_1, index_2, r)
    area_s = fan_area_from(sides, index_2, index_1, s)
    a = min(area_r, area_s)
    b = min(area - a, half_area)
    if a >= b:
        return PartialPF()

    width = side_1.p.dist(side_2.p, side_2.q)
    piece = PartialPF.constant(a, b, width)

    if curve is not None:
        if b < half_area:
            curve.form = Form.NONE
        else:
            curve.form = Form.CONSTANT
            curve.center = None
            r1 = side_1.p + pq1 * r.proj(side_1.p, side_1.q)
            s1 = side_1.p + pq1 * s.proj(side_1.p, side_1.q)
            rs = s1 - r1
            rsa = abs(rs)
            if width * rsa == 0.0:
                curve.start = curve.end = r
            else:
                # Slide the cut along the strip until it splits the area evenly.
                t = (r1 + s1 + rs * ((area_s - area_r) / (rsa * width))) / 2.0
                curve.start = r1 + rs * t.proj(r1, s1)
                curve.end = side_2.p + pq2 * curve.start.proj(side_2.p, side_2.q)
    return piece
