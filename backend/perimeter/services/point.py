"""
Two-dimensional point/vector algebra used by the polygon services.

``Point`` is an immutable value type.  Besides the usual vector
operators it offers the small set of planar predicates the perimeter
engine is written in terms of: oriented angles, triangle areas, the
distance to a line and the normalised projection onto a segment.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from .numeric import PI, trim


@dataclass(frozen=True)
class Point:
    """A point (or free vector) in the plane."""

    x: float = 0.0
    y: float = 0.0

    def __neg__(self) -> "Point":
        return Point(-self.x, -self.y)

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, k: float) -> "Point":
        return Point(self.x * k, self.y * k)

    __rmul__ = __mul__

    def __truediv__(self, k: float) -> "Point":
        return Point(self.x / k, self.y / k)

    def __xor__(self, other: "Point") -> float:
        """Cross product ``self.x*other.y - self.y*other.x``."""
        return self.x * other.y - self.y * other.x

    def __abs__(self) -> float:
        return math.hypot(self.x, self.y)

    def dot(self, other: "Point") -> float:
        return self.x * other.x + self.y * other.y

    def arg(self) -> float:
        """Polar angle of the vector, in ``(-pi, pi]``."""
        return math.atan2(self.y, self.x)

    def ortho(self) -> "Point":
        """The vector rotated by pi/2 counter-clockwise."""
        return Point(-self.y, self.x)

    def angle(self, p: "Point", q: "Point") -> float:
        """Oriented angle ``(p, self, q)`` in ``[0, 2*pi)``.

        The angle is measured counter-clockwise from ``p - self`` to
        ``q - self``.  Values within the working precision of zero are
        snapped to exactly zero so that parallel directions compare
        equal.
        """
        v1 = p - self
        v2 = q - self
        result = trim(math.atan2(v1 ^ v2, v1.dot(v2)))
        if result < 0.0:
            result += 2.0 * PI
        return result

    def sign_area(self, p: "Point", q: "Point") -> float:
        """Signed area of the triangle ``(self, p, q)``; positive when counter-clockwise."""
        return ((p - self) ^ (q - self)) / 2.0

    def area(self, p: "Point", q: "Point") -> float:
        return abs(self.sign_area(p, q))

    def dist(self, p: "Point", q: "Point") -> float:
        """Distance from ``self`` to the line ``pq``.

        Falls back to the distance to ``p`` when ``p == q``.
        """
        v = q - p
        vabs = abs(v)
        if vabs == 0.0:
            return abs(self - p)
        return abs((v.ortho() / vabs).dot(self - q))

    def proj(self, p: "Point", q: "Point") -> float:
        """Normalised position of the projection of ``self`` onto ``pq``.

        0 at ``p``, 1 at ``q``, linear in between and beyond.  A degenerate
        segment (``p == q``) yields 0.
        """
        v = q - p
        vabs = abs(v)
        if vabs == 0.0:
            return 0.0
        return (v / vabs).dot((self - p) / vabs)
