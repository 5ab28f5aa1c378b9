"""
Perimeter function of a convex polygon.

``ConvexPolygonPF`` is built once from a hulled :class:`ConvexPolygon`
and answers queries about its perimeter function: the length of the
shortest curve that cuts off area ``z`` (``pf``), its inverse
(``ipf``), the maximum (the shortest curve splitting the polygon into
halves) and the piecewise structure of the function.

The function is symmetric about half the area, so only ``[0, area/2]``
is stored.  It is the lower envelope of the partial functions of every
pair of sides (see :mod:`.partial_pf`), assembled by sweeping each pair
into a sorted list of segments.  Work is done lazily: the first query
that needs the envelope or the maximum builds it, and the result is
kept for the lifetime of the object.  ``BuildState`` records what has
been computed.

Instances are not safe to build concurrently; use
:mod:`.pf_cache` (which builds under a lock) when sharing them.
"""

from __future__ import annotations

import enum
import logging
import math
import time
from bisect import bisect_left
from typing import List, NamedTuple, Optional, Tuple

from .errors import InvalidInputPolicy, is_nan, out_of_range
from .numeric import INF, PI, QNAN
from .partial_pf import EffectivePerimeter, Form, PartialPF, Side, for_sides
from .point import Point
from .polygon import ConvexPolygon

logger = logging.getLogger(__name__)


class BuildState(enum.Flag):
    UNBUILT = 0
    PIECEWISE = enum.auto()
    MAXIMUM = enum.auto()
    CURVE = enum.auto()


class SegmentInfo(NamedTuple):
    """One smooth piece of the full perimeter function on ``[start, end]``.

    A piece with ``theta == 0`` is the constant middle segment, whose
    value is ``zeta``; every other piece is ``sqrt(2*theta*(z + zeta))``.
    """

    start: float
    end: float
    theta: float
    zeta: float


def _build_sides(polygon: ConvexPolygon) -> List[Side]:
    vertices = polygon.vertices
    if len(vertices) < 3:
        return []
    sides = []
    for p, q in zip(vertices, vertices[1:] + vertices[:1]):
        if abs(p - q) == 0.0:
            continue
        sides.append(Side(p, q))
    return sides


class ConvexPolygonPF:
    """Perimeter function of a convex polygon.

    ``polygon.convex_hull()`` must have been called first; the polygon is
    only read during construction and later changes to it have no
    effect.  Polygons with fewer than three distinct vertices are
    *degenerate*: their area, maximum and perimeter function are all 0.
    """

    def __init__(self, polygon: ConvexPolygon) -> None:
        self._vertices = polygon.vertices
        self._sides: List[Side] = _build_sides(polygon)
        self._num_vertices = len(self._sides) if len(polygon) > 2 else len(polygon)
        self._area = polygon.area()
        self._half_area = self._area / 2.0

        self._segments: List[PartialPF] = []
        self._bounds: List[float] = []
        self._values: List[float] = []
        self._num_segments = 0
        self._maximum = 0.0
        self._curve = EffectivePerimeter()
        self.state = BuildState.UNBUILT

        if self.degenerate:
            logger.debug(
                "[PerimeterFunction] degenerate polygon with %d vertices; all values are 0",
                self._num_vertices,
            )

    # ------------------------------------------------------------------
    # Polygon info
    # ------------------------------------------------------------------

    @property
    def degenerate(self) -> bool:
        return len(self._sides) < 3

    @property
    def vertices(self) -> Tuple[Point, ...]:
        """The hulled vertices the function was built from (clockwise)."""
        return self._vertices

    @property
    def sides(self) -> Tuple[Side, ...]:
        return tuple(self._sides)

    def num_vertices(self) -> int:
        return self._num_vertices

    def area(self) -> float:
        return self._area

    def half_area(self) -> float:
        return self._half_area

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def __call__(self, z: float, *, policy: Optional[InvalidInputPolicy] = None) -> float:
        return self.pf(z, policy=policy)

    def pf(self, z: float, *, policy: Optional[InvalidInputPolicy] = None) -> float:
        """Perimeter function.  Domain: ``0 <= z <= area()``."""
        name = "ConvexPolygonPF.pf"
        if is_nan(name, policy, z):
            return QNAN
        if out_of_range(0.0 <= z <= self._area and z < INF, name, policy):
            return QNAN

        self._ensure(BuildState.PIECEWISE)
        if z > self._half_area:
            z = self._area - z
        index = min(bisect_left(self._bounds, z), len(self._segments) - 1)
        return self._segments[index].pf(z)

    def ipf(self, p: float, *, policy: Optional[InvalidInputPolicy] = None) -> float:
        """Inverse perimeter function.  Domain: ``0 <= p <= maximum()``.

        Returns the smaller of the two areas a shortest curve of length
        ``p`` cuts off.
        """
        name = "ConvexPolygonPF.ipf"
        if is_nan(name, policy, p):
            return QNAN
        self._ensure(BuildState.PIECEWISE)
        if out_of_range(0.0 <= p <= self._maximum and p < INF, name, policy):
            return QNAN

        index = min(bisect_left(self._values, p), len(self._segments) - 1)
        return self._segments[index].ipf(p)

    def maximum(self) -> float:
        self._ensure(BuildState.MAXIMUM)
        return self._maximum

    def num_segments(self) -> int:
        """Number of smooth segments of the function on ``[0, area()]``.

        Odd when the middle segment is a constant-width cut, even when
        the two halves meet at ``half_area()`` in an arc.
        """
        self._ensure(BuildState.PIECEWISE)
        return self._num_segments

    def a(self, index: int, *, policy: Optional[InvalidInputPolicy] = None) -> float:
        """Breakpoint ``index`` of the function, ``0 <= index <= num_segments()``.

        Segment ``i`` (1-based) spans ``[a(i-1), a(i)]``.
        """
        count = self.num_segments()
        if out_of_range(0 <= index <= count, "ConvexPolygonPF.a", policy):
            return QNAN

        max_index = (count - 1) >> 1
        if index <= max_index:
            return self._segments[index].a
        if index == max_index + 1 and count % 2 == 0:
            return self._half_area
        return self._area - self._segments[count - index].a

    def theta(self, index: int, *, policy: Optional[InvalidInputPolicy] = None) -> float:
        """Angle parameter of segment ``index``, ``1 <= index <= num_segments()``.

        Negative on the mirrored half of the domain.
        """
        count = self.num_segments()
        if out_of_range(1 <= index <= count, "ConvexPolygonPF.theta", policy):
            return QNAN

        index -= 1
        if index <= (count - 1) >> 1:
            return self._segments[index].theta
        return -self._segments[count - index - 1].theta

    def zeta(self, index: int, *, policy: Optional[InvalidInputPolicy] = None) -> float:
        """Offset parameter of segment ``index``, ``1 <= index <= num_segments()``."""
        count = self.num_segments()
        if out_of_range(1 <= index <= count, "ConvexPolygonPF.zeta", policy):
            return QNAN

        index -= 1
        if index <= (count - 1) >> 1:
            return self._segments[index].zeta
        return -self._area - self._segments[count - index - 1].zeta

    def segment_info(self) -> List[SegmentInfo]:
        """All segments of the function over ``[0, area()]``, in order."""
        count = self.num_segments()
        return [
            SegmentInfo(self.a(i - 1), self.a(i), self.theta(i), self.zeta(i))
            for i in range(1, count + 1)
        ]

    def shortest(self) -> Tuple[float, Optional[EffectivePerimeter]]:
        """The shortest curve dividing the polygon into two equal halves.

        Returns ``(length, curve)``.  ``curve`` is ``None`` for a
        degenerate polygon, in which case ``length`` is 0.
        """
        self._ensure(BuildState.MAXIMUM | BuildState.CURVE)
        if self._maximum == 0.0 or self._curve.form is Form.NONE:
            return self._maximum, None
        curve = EffectivePerimeter(
            self._curve.form, self._curve.start, self._curve.end, self._curve.center
        )
        return self._maximum, curve

    def build(self) -> "ConvexPolygonPF":
        """Force every lazy computation; returns ``self``."""
        start = time.perf_counter()
        self._ensure(BuildState.PIECEWISE | BuildState.MAXIMUM | BuildState.CURVE)
        logger.debug(
            "[PerimeterFunction] build complete: %d sides, %d segments, max=%.6g (%.2f ms)",
            len(self._sides),
            self._num_segments,
            self._maximum,
            (time.perf_counter() - start) * 1000.0,
        )
        return self

    # ------------------------------------------------------------------
    # Lazy builds
    # ------------------------------------------------------------------

    def _ensure(self, wanted: BuildState) -> None:
        if (wanted & BuildState.PIECEWISE) and not (self.state & BuildState.PIECEWISE):
            self._find_pf()
        if (wanted & BuildState.CURVE) and not (self.state & BuildState.CURVE):
            self._find_pf_max()
        if (wanted & BuildState.MAXIMUM) and not (self.state & BuildState.MAXIMUM):
            self._find_pf_max()

    def _pairs(self):
        count = len(self._sides)
        for index_1 in range(1, count):
            for index_2 in range(index_1):
                yield index_1, index_2

    def _find_pf(self) -> None:
        """Assemble the lower envelope of all partial functions on ``[0, half_area]``."""
        start = time.perf_counter()

        # Placeholder covering the whole half-domain with a value above
        # any real perimeter; it is the only segment of a degenerate polygon.
        segments = [PartialPF.constant(0.0, self._half_area, math.sqrt(10.0 * PI * self._area))]

        if not self.degenerate:
            for index_1, index_2 in self._pairs():
                piece = for_sides(self._sides, self._area, index_1, index_2)
                if piece.form is Form.NONE:
                    continue
                _insert(segments, piece)

        self._segments = segments
        self._bounds = [seg.b for seg in segments]
        self._values = [seg.pfb for seg in segments]
        # The first build that finds the maximum owns it.
        if not self.state & BuildState.MAXIMUM:
            self._maximum = segments[-1].pfb
        count = len(segments)
        self._num_segments = 2 * count - 1 if segments[-1].form is Form.CONSTANT else 2 * count
        self.state |= BuildState.PIECEWISE | BuildState.MAXIMUM

        logger.debug(
            "[PerimeterFunction] envelope of %d sides -> %d half-domain segments in %.2f ms",
            len(self._sides),
            count,
            (time.perf_counter() - start) * 1000.0,
        )

    def _find_pf_max(self) -> None:
        """Find the maximum and the shortest bisecting curve without the full envelope."""
        if self.degenerate:
            self._maximum = 0.0
            self._curve = EffectivePerimeter()
            self.state |= BuildState.MAXIMUM | BuildState.CURVE
            return

        start = time.perf_counter()
        best = math.sqrt(PI * self._area)
        best_pair: Optional[Tuple[int, int]] = None

        for index_1, index_2 in self._pairs():
            piece = for_sides(self._sides, self._area, index_1, index_2)
            if piece.form is Form.NONE:
                continue
            if piece.b < self._half_area:
                continue
            if piece.pfb < best:
                best = piece.pfb
                best_pair = (index_1, index_2)

        curve = EffectivePerimeter()
        if best_pair is not None:
            for_sides(self._sides, self._area, best_pair[0], best_pair[1], curve)
        else:
            logger.warning(
                "[PerimeterFunction] no side pair reaches half the area; maximum left at %.6g",
                best,
            )

        if not self.state & BuildState.MAXIMUM:
            self._maximum = best
        self._curve = curve
        self.state |= BuildState.MAXIMUM | BuildState.CURVE

        logger.debug(
            "[PerimeterFunction] maximum %.6g between sides %s (%s) in %.2f ms",
            best,
            best_pair,
            curve.form.value,
            (time.perf_counter() - start) * 1000.0,
        )


def _insert(segments: List[PartialPF], piece: PartialPF) -> None:
    """Merge *piece* into the sorted envelope *segments* in place.

    Wherever *piece* is strictly below the current envelope it replaces
    it: existing segments are split at the crossing points, and segments
    lying entirely above *piece* are dropped.
    """
    pos = 0
    while True:
        found = None
        while pos < len(segments):
            found = segments[pos].begin(piece)
            if found is not None:
                break
            pos += 1
        if pos >= len(segments):
            return

        left, right, at_a, at_b = found

        if not at_a:
            # Keep the part of the current segment left of the crossing.
            head = segments[pos]
            tail = head.copy()
            head.set_right(left)
            segments.insert(pos + 1, tail)
            pos += 1

        if not at_b:
            # Piece is below only on [left, right]: splice it in between.
            rest = segments[pos].copy()
            inserted = piece.copy()
            inserted.set_left(left)
            inserted.set_right(right)
            rest.set_left(right)
            segments[pos] = inserted
            segments.insert(pos + 1, rest)
            pos += 2
            continue

        inserted = piece.copy()
        inserted.set_left(left)
        segments[pos] = inserted
        pos += 1

        resume_at_a = False
        while pos < len(segments):
            found_end, right, resume_at_a = segments[pos].end(piece)
            if found_end:
                break
            del segments[pos]

        inserted.set_right(right)
        if pos < len(segments) and not resume_at_a:
            segments[pos].set_left(right)
