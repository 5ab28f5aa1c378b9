"""
API routes for polygon perimeter functions.

Every endpoint takes a list of vertices, hulls it and looks the built
perimeter function up in the in-process cache, so repeated requests for
the same polygon only pay for assembly once.  Arguments outside a
function's domain are reported as HTTP 400.
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional

from fastapi import APIRouter, HTTPException

from .models import (
    CurveOut,
    GraphRequest,
    GraphResponse,
    PerimeterResponse,
    PolygonRequest,
    PolygonValuesRequest,
    SegmentInfoOut,
    ValuesResponse,
    Vertex,
)
from ..services.errors import InvalidInputPolicy, PerimeterError
from ..services.graph import sample_graph
from ..services.pf_cache import get_polygon_pf
from ..services.point import Point
from ..services.polygon_pf import ConvexPolygonPF

logger = logging.getLogger(__name__)

router = APIRouter()

RAISE = InvalidInputPolicy.RAISE


def _polygon_pf(body: PolygonRequest) -> ConvexPolygonPF:
    if not body.vertices:
        raise HTTPException(status_code=400, detail="At least one vertex is required")
    coords = [(v.x, v.y) for v in body.vertices]
    if not all(math.isfinite(c) for xy in coords for c in xy):
        raise HTTPException(status_code=400, detail="Vertex coordinates must be finite")
    return get_polygon_pf(coords)


def _vertex(point: Point) -> Vertex:
    return Vertex(x=point.x, y=point.y)


def _finite(value: float) -> Optional[float]:
    return value if math.isfinite(value) else None


@router.post("/polygons/perimeter", response_model=PerimeterResponse)
async def polygon_perimeter(body: PolygonRequest) -> PerimeterResponse:
    """Hull the polygon and describe its perimeter function.

    The response lists every smooth segment over the full area range
    and the shortest curve that splits the polygon in half.
    """
    pf = _polygon_pf(body)
    segments = [
        SegmentInfoOut(start=s.start, end=s.end, theta=s.theta, zeta=s.zeta)
        for s in pf.segment_info()
    ]
    length, curve = pf.shortest()
    logger.debug(
        "[PolygonsAPI] perimeter summary: %d hull vertices, %d segments, max=%.6g",
        len(pf.vertices),
        len(segments),
        length,
    )
    shortest = None
    if curve is not None:
        shortest = CurveOut(
            length=length,
            isArc=curve.is_arc,
            start=_vertex(curve.start),
            end=_vertex(curve.end),
            center=_vertex(curve.center) if curve.is_arc else None,
        )
    return PerimeterResponse(
        hull=[_vertex(v) for v in pf.vertices],
        degenerate=pf.degenerate,
        area=pf.area(),
        maximum=pf.maximum(),
        numSegments=pf.num_segments(),
        segments=segments,
        shortest=shortest,
    )


@router.post("/polygons/pf", response_model=ValuesResponse)
async def polygon_pf_values(body: PolygonValuesRequest) -> ValuesResponse:
    """Evaluate the perimeter function at each requested area."""
    pf = _polygon_pf(body)
    try:
        values: List[Optional[float]] = [_finite(pf.pf(z, policy=RAISE)) for z in body.values]
    except PerimeterError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return ValuesResponse(values=values)


@router.post("/polygons/ipf", response_model=ValuesResponse)
async def polygon_ipf_values(body: PolygonValuesRequest) -> ValuesResponse:
    """Evaluate the inverse perimeter function at each requested length."""
    pf = _polygon_pf(body)
    try:
        values: List[Optional[float]] = [_finite(pf.ipf(p, policy=RAISE)) for p in body.values]
    except PerimeterError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return ValuesResponse(values=values)


@router.post("/polygons/graph", response_model=GraphResponse)
async def polygon_graph(body: GraphRequest) -> GraphResponse:
    """Sample the perimeter function for plotting."""
    pf = _polygon_pf(body)
    try:
        sample = sample_graph(pf, body.samples, w=body.w, r=body.r, policy=RAISE)
    except ValueError as exc:
        # PerimeterError subclasses are ValueErrors too.
        raise HTTPException(status_code=400, detail=str(exc))
    data = sample.to_dict()
    return GraphResponse(
        z=data["z"],
        p=data["p"],
        breakpoints=data["breakpoints"],
        maximum=data["maximum"],
        gainLevel=data["gain_level"],
    )
