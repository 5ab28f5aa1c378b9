"""
Pydantic data models for the perimeter function API.

Request bodies carry polygons as plain vertex lists; the service hulls
them before doing anything else, so callers need not send the vertices
in any particular order.  Numeric results that are not finite (an outer
perimeter function of an infinite area, for instance) are reported as
``null`` because JSON has no representation for them.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class Vertex(BaseModel):
    """A point in the plane."""

    x: float = Field(..., description="x coordinate")
    y: float = Field(..., description="y coordinate")


class PolygonRequest(BaseModel):
    """A polygon given by its vertices in any order."""

    vertices: List[Vertex] = Field(..., description="Polygon vertices; the convex hull is used")


class PolygonValuesRequest(PolygonRequest):
    """A polygon plus a list of arguments to evaluate at."""

    values: List[float] = Field(..., description="Areas (for pf) or lengths (for ipf)")


class GraphRequest(PolygonRequest):
    """Request body for sampling a perimeter function."""

    samples: int = Field(default=256, description="Number of evenly spaced samples (2 or more)")
    w: Optional[float] = Field(
        default=None, description="Speed ratio of the search model (0 < w <= 1)"
    )
    r: Optional[float] = Field(default=None, description="Detection radius of the search model")


class SegmentInfoOut(BaseModel):
    """One smooth piece of the perimeter function."""

    start: float = Field(..., description="Left end of the area interval")
    end: float = Field(..., description="Right end of the area interval")
    theta: float = Field(..., description="Angle parameter; 0 for the constant middle piece")
    zeta: float = Field(..., description="Offset parameter (or the constant value)")


class CurveOut(BaseModel):
    """Shortest curve dividing the polygon into two equal halves."""

    length: float
    isArc: bool = Field(..., description="True for a circular arc, false for a segment")
    start: Vertex
    end: Vertex
    center: Optional[Vertex] = Field(default=None, description="Arc centre (arcs only)")


class PerimeterResponse(BaseModel):
    """Summary of a polygon's perimeter function."""

    hull: List[Vertex] = Field(..., description="Convex hull vertices, clockwise")
    degenerate: bool = Field(..., description="True when the hull has fewer than three sides")
    area: float
    maximum: float
    numSegments: int
    segments: List[SegmentInfoOut]
    shortest: Optional[CurveOut] = None


class ValuesResponse(BaseModel):
    values: List[Optional[float]]


class GraphResponse(BaseModel):
    """Sampled perimeter function for plotting."""

    z: List[float]
    p: List[float]
    breakpoints: List[List[float]]
    maximum: float
    gainLevel: Optional[float] = None


class DomainInfo(BaseModel):
    """A canonical domain available for evaluation."""

    name: str
    parameters: List[str]
    description: str


class ScalarResponse(BaseModel):
    """Result of evaluating a single named function."""

    name: str
    value: Optional[float] = Field(..., description="Function value, null when not finite")
