"""
Sampling of a polygon's perimeter function for plotting.

The front end draws the perimeter function as a polyline together with
its segment breakpoints and, optionally, the horizontal level
``f(w, r)/w`` of the search model: a searcher with detection radius
``r`` and speed ratio ``w`` can clear the polygon when the perimeter
function stays below that level.
"""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from .errors import InvalidInputPolicy
from .gain import f
from .polygon_pf import ConvexPolygonPF

logger = logging.getLogger(__name__)

MAX_GRAPH_SAMPLES: int = int(os.getenv("PF_GRAPH_MAX_SAMPLES", "4096"))


@dataclass
class GraphSample:
    """Sampled perimeter function.

    Attributes:
        z: Sample abscissae (areas), evenly spaced over ``[0, area]``.
        p: Perimeter function values at ``z``.
        breakpoints: ``(a(i), pf(a(i)))`` for every segment boundary.
        maximum: Maximum of the perimeter function.
        gain_level: ``f(w, r)/w`` when a search model was given.
    """

    z: np.ndarray
    p: np.ndarray
    breakpoints: List[Tuple[float, float]] = field(default_factory=list)
    maximum: float = 0.0
    gain_level: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            "z": self.z.tolist(),
            "p": self.p.tolist(),
            "breakpoints": [list(bp) for bp in self.breakpoints],
            "maximum": self.maximum,
            "gain_level": self.gain_level,
        }


def sample_graph(
    pf: ConvexPolygonPF,
    num_samples: int,
    w: Optional[float] = None,
    r: Optional[float] = None,
    *,
    policy: Optional[InvalidInputPolicy] = None,
) -> GraphSample:
    """Evaluate *pf* on an even grid of *num_samples* areas.

    Raises:
        ValueError: if *num_samples* is not in ``[2, MAX_GRAPH_SAMPLES]``.
        OutOfRange: if ``w``/``r`` lie outside the domain of ``f``.
    """
    if not 2 <= num_samples <= MAX_GRAPH_SAMPLES:
        raise ValueError(f"num_samples must be between 2 and {MAX_GRAPH_SAMPLES}")

    t0 = time.perf_counter()
    area = pf.area()
    z = np.clip(np.linspace(0.0, area, num_samples), 0.0, area)
    p = np.fromiter((pf.pf(float(v)) for v in z), dtype=float, count=z.size)

    breakpoints = []
    for i in range(pf.num_segments() + 1):
        a_i = min(max(pf.a(i), 0.0), area)
        breakpoints.append((a_i, pf.pf(a_i)))

    gain_level = None
    if w is not None and r is not None and w > 0.0:
        gain_level = f(w, r, policy=policy) / w

    logger.debug(
        "[Graph] %d samples over area %.6g in %.2f ms",
        num_samples,
        area,
        (time.perf_counter() - t0) * 1000.0,
    )
    return GraphSample(z=z, p=p, breakpoints=breakpoints, maximum=pf.maximum(), gain_level=gain_level)
