"""Tests for perimeter function sampling and the built-function cache."""

import math
import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from perimeter.services import pf_cache  # type: ignore
from perimeter.services.gain import f  # type: ignore
from perimeter.services.graph import sample_graph  # type: ignore
from perimeter.services.polygon_pf import BuildState  # type: ignore

SQUARE = [(0, 0), (1, 0), (1, 1), (0, 1)]


@pytest.fixture(autouse=True)
def empty_cache():
    pf_cache.clear_cache()
    yield
    pf_cache.clear_cache()


def test_sample_unit_square() -> None:
    pf = pf_cache.get_polygon_pf(SQUARE)
    sample = sample_graph(pf, 5)
    np.testing.assert_allclose(sample.z, [0.0, 0.25, 0.5, 0.75, 1.0])
    assert sample.p[0] == pytest.approx(0.0)
    assert sample.p[1] == pytest.approx(math.sqrt(0.25 * math.pi))
    assert sample.p[2] == pytest.approx(1.0)
    assert sample.p[3] == pytest.approx(sample.p[1])
    assert sample.maximum == pytest.approx(1.0)
    assert sample.gain_level is None
    assert len(sample.breakpoints) == pf.num_segments() + 1
    assert sample.breakpoints[1][0] == pytest.approx(1.0 / math.pi)
    assert sample.breakpoints[1][1] == pytest.approx(1.0)


def test_sample_with_search_model() -> None:
    pf = pf_cache.get_polygon_pf(SQUARE)
    sample = sample_graph(pf, 3, w=0.5, r=0.1)
    assert sample.gain_level == pytest.approx(f(0.5, 0.1) / 0.5)
    # No level for a stationary evader.
    assert sample_graph(pf, 3, w=0.0, r=0.1).gain_level is None

    data = sample.to_dict()
    assert data["z"] == pytest.approx([0.0, 0.5, 1.0])
    assert data["gain_level"] == pytest.approx(sample.gain_level)


def test_sample_degenerate_polygon() -> None:
    pf = pf_cache.get_polygon_pf([(0, 0), (1, 0)])
    sample = sample_graph(pf, 4)
    assert sample.maximum == 0.0
    assert np.all(sample.z == 0.0)
    assert np.all(sample.p == 0.0)
    assert sample.breakpoints == [(0.0, 0.0), (0.0, 0.0)]


def test_sample_count_is_bounded() -> None:
    pf = pf_cache.get_polygon_pf(SQUARE)
    with pytest.raises(ValueError):
        sample_graph(pf, 1)


def test_cache_reuses_hull_regardless_of_vertex_order() -> None:
    first = pf_cache.get_polygon_pf(SQUARE)
    second = pf_cache.get_polygon_pf(list(reversed(SQUARE)) + [(0.5, 0.5)])
    assert first is second
    assert pf_cache.cache_size() == 1
    assert first.state == BuildState.PIECEWISE | BuildState.MAXIMUM | BuildState.CURVE


def test_cache_evicts_least_recently_used(monkeypatch) -> None:
    monkeypatch.setattr(pf_cache, "MAX_CACHE_ENTRIES", 2)
    a = pf_cache.get_polygon_pf(SQUARE)
    pf_cache.get_polygon_pf([(0, 0), (2, 0), (2, 1), (0, 1)])
    # Touch the square so the rectangle becomes the oldest entry.
    assert pf_cache.get_polygon_pf(SQUARE) is a
    pf_cache.get_polygon_pf([(0, 0), (4, 0), (1, 3)])
    assert pf_cache.cache_size() == 2
    assert pf_cache.get_polygon_pf(SQUARE) is a

    pf_cache.clear_cache()
    assert pf_cache.cache_size() == 0
    assert pf_cache.get_polygon_pf(SQUARE) is not a
