"""
Simple in-memory cache of built polygon perimeter functions.

Assembling the perimeter function of a polygon is quadratic in the
number of sides, and the API tends to receive the same polygon several
times in a row (once for the summary, then for graphs and point
queries).  Built ``ConvexPolygonPF`` objects are therefore cached,
keyed by the hulled vertex coordinates.

The cache is an ``OrderedDict`` with least-recently-used eviction.
Every object is fully built (``ConvexPolygonPF.build()``) while the lock
is held before it is published, so cached objects are only ever read
afterwards and may be shared between request threads.

Usage::

    from .pf_cache import get_polygon_pf
    pf = get_polygon_pf([(0, 0), (1, 0), (1, 1), (0, 1)])
    print(pf.maximum())
"""

from __future__ import annotations

import logging
import os
from collections import OrderedDict
from threading import RLock
from typing import Iterable, Tuple

from .polygon import ConvexPolygon
from .polygon_pf import ConvexPolygonPF

logger = logging.getLogger(__name__)

CacheKey = Tuple[Tuple[float, float], ...]

# Underlying storage; the key is the tuple of hull vertex coordinates.
_cache: "OrderedDict[CacheKey, ConvexPolygonPF]" = OrderedDict()
_lock = RLock()
# Maximum number of entries retained.  The least recently used entry is
# evicted on insertion once the limit is reached.
MAX_CACHE_ENTRIES: int = int(os.getenv("PF_CACHE_SIZE", "32"))


def hull_of(vertices: Iterable[Tuple[float, float]]) -> ConvexPolygon:
    """Return the convex hull of *vertices* as a ``ConvexPolygon``."""
    polygon = ConvexPolygon.from_xy(vertices)
    polygon.convex_hull()
    return polygon


def _key(polygon: ConvexPolygon) -> CacheKey:
    return tuple((v.x, v.y) for v in polygon)


def get_polygon_pf(vertices: Iterable[Tuple[float, float]]) -> ConvexPolygonPF:
    """Return the fully built perimeter function of the hull of *vertices*."""
    polygon = hull_of(vertices)
    key = _key(polygon)
    with _lock:
        pf = _cache.get(key)
        if pf is not None:
            # Mark as recently used
            _cache.move_to_end(key)
            return pf

        pf = ConvexPolygonPF(polygon).build()
        _cache[key] = pf
        _cache.move_to_end(key)
        if len(_cache) > MAX_CACHE_ENTRIES:
            evicted, _ = _cache.popitem(last=False)
            logger.debug("[PFCache] evicted polygon with %d vertices", len(evicted))
        return pf


def cache_size() -> int:
    with _lock:
        return len(_cache)


def clear_cache() -> None:
    with _lock:
        _cache.clear()
