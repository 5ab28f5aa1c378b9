"""
Convex polygon container.

A ``ConvexPolygon`` is an ordered list of vertices that callers grow one
vertex at a time and then replace by its convex hull.  Adding vertices
does not check convexity, so large vertex lists (for example read from
a file) can be loaded quickly and hulled once.  ``convex_hull()`` must
be called before the polygon is handed to
:class:`~perimeter.services.polygon_pf.ConvexPolygonPF`; an unhulled
polygon produces meaningless numbers there.

Sample usage::

    cp = ConvexPolygon()
    for x, y in rows:
        cp.add_vertex(Point(x, y))
    cp.convex_hull()
    pf = ConvexPolygonPF(cp)
    print(pf(0.125))
"""

from __future__ import annotations

import logging
import os
from typing import Iterable, Iterator, List, Optional, Tuple

from .point import Point

logger = logging.getLogger(__name__)

# Larger than any angle returned by Point.angle (which is < 2*pi).
_NO_ANGLE = 6.29


class ConvexPolygon:
    """Ordered vertex list with a gift-wrapping convex hull transform."""

    def __init__(self, vertices: Optional[Iterable[Point]] = None) -> None:
        self._vertices: List[Point] = list(vertices) if vertices is not None else []

    @classmethod
    def from_xy(cls, coords: Iterable[Tuple[float, float]]) -> "ConvexPolygon":
        return cls(Point(float(x), float(y)) for x, y in coords)

    def add_vertex(self, vertex: Point) -> None:
        self._vertices.append(vertex)

    def reset(self) -> None:
        self._vertices.clear()

    def num_vertices(self) -> int:
        return len(self._vertices)

    def __len__(self) -> int:
        return len(self._vertices)

    def __iter__(self) -> Iterator[Point]:
        return iter(self._vertices)

    @property
    def vertices(self) -> Tuple[Point, ...]:
        return tuple(self._vertices)

    def area(self) -> float:
        """Area of the polygon, assuming it has already been hulled.

        Computed as a fan of triangles from the first vertex.  Polygons
        with fewer than three vertices have zero area.
        """
        if len(self._vertices) < 3:
            return 0.0
        origin = self._vertices[0]
        last = self._vertices[1]
        total = 0.0
        for vertex in self._vertices[2:]:
            total += origin.area(last, vertex)
            last = vertex
        return total

    def convex_hull(self) -> None:
        """Replace the vertex list by its convex hull (Jarvis march).

        The march starts at the lowest vertex (rightmost among equals)
        and repeatedly picks the vertex that requires the smallest
        counter-clockwise turn from the current edge direction, breaking
        exact ties by the larger distance so that collinear interior
        points are skipped.  It stops when the start vertex is selected
        again.  The hull is stored in clockwise order, ending with the
        start vertex.  Lists with fewer than three vertices are left
        untouched.
        """
        vertices = self._vertices
        if len(vertices) < 3:
            return

        start_index = 0
        start = vertices[0]
        for index, cur in enumerate(vertices[1:], start=1):
            if cur.y < start.y or (cur.y == start.y and cur.x > start.x):
                start = cur
                start_index = index

        used = {start_index}
        hull: List[Point] = [start]
        last_added = start
        # Initial edge direction is +x.
        previous = Point(start.x - 1.0, start.y)

        while True:
            min_ang = _NO_ANGLE
            max_dist = 0.0
            select: Optional[int] = None
            for index, vertex in enumerate(vertices):
                if vertex == last_added:
                    continue
                if index in used and vertex != start:
                    continue
                ang = last_added.angle(last_added * 2.0 - previous, vertex)
                dist = abs(vertex - last_added)
                if ang < min_ang or (ang == min_ang and dist > max_dist):
                    min_ang = ang
                    max_dist = dist
                    select = index

            if select is None or vertices[select] == start:
                break
            hull.append(vertices[select])
            used.add(select)
            previous = last_added
            last_added = vertices[select]

        hull.reverse()
        if os.getenv("PF_DEBUG"):
            logger.debug(
                "[ConvexHull] %d vertices -> %d hull vertices: %s",
                len(vertices),
                len(hull),
                [(p.x, p.y) for p in hull],
            )
        self._vertices = hull
