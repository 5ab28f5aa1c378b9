"""
Routes for canonical-domain perimeter functions and gain functions.

These expose the closed-form and numerically inverted functions of
:mod:`perimeter.services.domains` and the search-model gains of
:mod:`perimeter.services.gain` as simple GET endpoints, so the UI can
draw them as comparison baselines next to a polygon's function.
"""

from __future__ import annotations

import math
from typing import Callable, Dict, List, Optional

from fastapi import APIRouter, HTTPException, Query

from .models import DomainInfo, ScalarResponse
from ..services import gain
from ..services.domains import DOMAINS, evaluate_ipf, evaluate_pf
from ..services.errors import InvalidInputPolicy, PerimeterError

router = APIRouter()

GAINS: Dict[str, Callable[..., float]] = {"f": gain.f, "g": gain.g, "h": gain.h}


@router.get("/domains", response_model=List[DomainInfo])
async def list_domains() -> List[DomainInfo]:
    return [
        DomainInfo(name=spec.name, parameters=list(spec.parameters), description=spec.description)
        for spec in DOMAINS.values()
    ]


def _evaluate(
    evaluate: Callable[..., float],
    shape: str,
    value: float,
    a: Optional[float],
    b: Optional[float],
    theta: Optional[float],
) -> ScalarResponse:
    if shape not in DOMAINS:
        raise HTTPException(status_code=404, detail=f"Unknown shape '{shape}'")
    try:
        result = evaluate(
            shape, value, policy=InvalidInputPolicy.RAISE, a=a, b=b, theta=theta
        )
    except (PerimeterError, TypeError) as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return ScalarResponse(name=shape, value=result if math.isfinite(result) else None)


@router.get("/domains/{shape}/pf", response_model=ScalarResponse)
async def domain_pf(
    shape: str,
    value: float = Query(..., description="Area (or volume) cut off"),
    a: Optional[float] = Query(None, description="Radius or first side"),
    b: Optional[float] = Query(None, description="Second side of a rectangle"),
    theta: Optional[float] = Query(None, description="Angle of a wedge"),
) -> ScalarResponse:
    """Evaluate the perimeter function of a canonical domain."""
    return _evaluate(evaluate_pf, shape, value, a, b, theta)


@router.get("/domains/{shape}/ipf", response_model=ScalarResponse)
async def domain_ipf(
    shape: str,
    value: float = Query(..., description="Curve length (or surface area)"),
    a: Optional[float] = Query(None, description="Radius or first side"),
    b: Optional[float] = Query(None, description="Second side of a rectangle"),
    theta: Optional[float] = Query(None, description="Angle of a wedge"),
) -> ScalarResponse:
    """Evaluate the inverse perimeter function of a canonical domain."""
    return _evaluate(evaluate_ipf, shape, value, a, b, theta)


@router.get("/gain/{name}", response_model=ScalarResponse)
async def gain_value(
    name: str,
    w: float = Query(..., description="Speed ratio of evader to searcher"),
    r: float = Query(..., description="Detection radius"),
    a: float = Query(1.0, description="Sphere radius (h only)"),
) -> ScalarResponse:
    """Evaluate one of the gain functions ``f``, ``g`` or ``h``."""
    fn = GAINS.get(name)
    if fn is None:
        raise HTTPException(status_code=404, detail=f"Unknown gain function '{name}'")
    args = (w, r, a) if name == "h" else (w, r)
    try:
        result = fn(*args, policy=InvalidInputPolicy.RAISE)
    except PerimeterError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return ScalarResponse(name=name, value=result if math.isfinite(result) else None)
