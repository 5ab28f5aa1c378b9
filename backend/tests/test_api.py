"""
Tests for the perimeter function HTTP API.

These use FastAPI's TestClient to exercise the routers without running
a real server.
"""

import math
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

sys.path.append(str(Path(__file__).resolve().parents[1]))

from perimeter.main import app  # type: ignore
from perimeter.services.pf_cache import clear_cache  # type: ignore

SQUARE = [{"x": 0, "y": 0}, {"x": 1, "y": 0}, {"x": 1, "y": 1}, {"x": 0, "y": 1}]


@pytest.fixture
def client() -> TestClient:
    clear_cache()
    return TestClient(app)


def test_health(client: TestClient) -> None:
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_polygon_perimeter_summary(client: TestClient) -> None:
    resp = client.post("/api/polygons/perimeter", json={"vertices": SQUARE})
    assert resp.status_code == 200
    data = resp.json()
    assert len(data["hull"]) == 4
    assert data["degenerate"] is False
    assert data["area"] == pytest.approx(1.0)
    assert data["maximum"] == pytest.approx(1.0)
    assert data["numSegments"] == 3
    assert len(data["segments"]) == 3
    assert data["segments"][0]["theta"] == pytest.approx(math.pi / 2)
    curve = data["shortest"]
    assert curve["isArc"] is False
    assert curve["length"] == pytest.approx(1.0)
    assert curve["center"] is None
    assert (curve["start"]["x"], curve["start"]["y"]) == pytest.approx((1.0, 0.5))


def test_degenerate_polygon_summary(client: TestClient) -> None:
    resp = client.post(
        "/api/polygons/perimeter", json={"vertices": [{"x": 0, "y": 0}, {"x": 1, "y": 0}]}
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["degenerate"] is True
    assert data["maximum"] == 0.0
    assert data["shortest"] is None


def test_empty_polygon_is_rejected(client: TestClient) -> None:
    resp = client.post("/api/polygons/perimeter", json={"vertices": []})
    assert resp.status_code == 400


def test_polygon_pf_and_ipf(client: TestClient) -> None:
    resp = client.post("/api/polygons/pf", json={"vertices": SQUARE, "values": [0.1, 0.5, 0.9]})
    assert resp.status_code == 200
    values = resp.json()["values"]
    assert values[0] == pytest.approx(math.sqrt(0.1 * math.pi))
    assert values[1] == pytest.approx(1.0)
    assert values[2] == pytest.approx(values[0])

    resp = client.post("/api/polygons/ipf", json={"vertices": SQUARE, "values": [0.5]})
    assert resp.status_code == 200
    assert resp.json()["values"][0] == pytest.approx(0.25 / math.pi)


def test_polygon_values_out_of_range(client: TestClient) -> None:
    resp = client.post("/api/polygons/pf", json={"vertices": SQUARE, "values": [2.0]})
    assert resp.status_code == 400
    assert "out of range" in resp.json()["detail"]
    resp = client.post("/api/polygons/ipf", json={"vertices": SQUARE, "values": [-1.0]})
    assert resp.status_code == 400


def test_polygon_graph(client: TestClient) -> None:
    resp = client.post(
        "/api/polygons/graph", json={"vertices": SQUARE, "samples": 11, "w": 0.5, "r": 0.1}
    )
    assert resp.status_code == 200
    data = resp.json()
    assert len(data["z"]) == 11
    assert len(data["p"]) == 11
    assert data["maximum"] == pytest.approx(1.0)
    assert data["gainLevel"] is not None

    resp = client.post("/api/polygons/graph", json={"vertices": SQUARE, "samples": 1})
    assert resp.status_code == 400
    resp = client.post(
        "/api/polygons/graph", json={"vertices": SQUARE, "samples": 5, "w": 2.0, "r": 0.1}
    )
    assert resp.status_code == 400


def test_list_domains(client: TestClient) -> None:
    resp = client.get("/api/domains")
    assert resp.status_code == 200
    names = {d["name"] for d in resp.json()}
    assert {"plane", "circle", "rectangle", "ball_3d"} <= names


def test_domain_evaluation(client: TestClient) -> None:
    resp = client.get("/api/domains/rectangle/pf", params={"value": 0.5, "a": 1, "b": 1})
    assert resp.status_code == 200
    assert resp.json()["value"] == pytest.approx(1.0)

    resp = client.get("/api/domains/plane/ipf", params={"value": 2.0})
    assert resp.json()["value"] == pytest.approx(1.0 / math.pi)

    resp = client.get("/api/domains/angle/pf", params={"value": 1.0, "theta": math.pi})
    assert resp.json()["value"] == pytest.approx(math.sqrt(2.0 * math.pi))


def test_domain_errors(client: TestClient) -> None:
    assert client.get("/api/domains/torus/pf", params={"value": 1.0}).status_code == 404
    # Missing wedge angle.
    assert client.get("/api/domains/angle/pf", params={"value": 1.0}).status_code == 400
    # Area larger than the disk.
    resp = client.get("/api/domains/circle/pf", params={"value": 10.0, "a": 1.0})
    assert resp.status_code == 400


def test_gain_endpoint(client: TestClient) -> None:
    resp = client.get("/api/gain/f", params={"w": 1.0, "r": 1.0})
    assert resp.status_code == 200
    assert resp.json()["value"] == pytest.approx(2.0 * math.pi)

    resp = client.get("/api/gain/h", params={"w": 0.5, "r": 1e-6, "a": 1.0})
    assert resp.status_code == 200

    assert client.get("/api/gain/k", params={"w": 0.5, "r": 1.0}).status_code == 404
    assert client.get("/api/gain/g", params={"w": 2.0, "r": 1.0}).status_code == 400
