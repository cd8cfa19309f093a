"""
Tests for the rotated projection and the limit shape curve.
"""

import math
import sys
from pathlib import Path

import numpy as np
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from src.cgm_sim.geometry import project, scales, triangle_sites, unproject
from src.cgm_sim.limit_shape import limit_curve


def test_scales_fit_triangle_into_view():
    cell_size, base_y = scales(30, 600)
    assert base_y == 600.0
    assert math.isclose(cell_size, 0.95 * 600 / (30 / math.sqrt(2)))

    # apex of the size-m triangle sits 5% below the top edge
    _, y_top = project(30, 0, cell_size, base_y, 400.0)
    assert math.isclose(float(y_top), 0.05 * 600, abs_tol=1e-9)


@pytest.mark.parametrize("m, height", [(0, 600), (10, 0), (10, -5)])
def test_scales_reject_bad_input(m, height):
    with pytest.raises(ValueError):
        scales(m, height)


def test_origin_maps_to_bottom_center():
    x, y = project(0, 0, 12.5, 600.0, 400.0)
    assert (float(x), float(y)) == (400.0, 600.0)


def test_diagonal_is_vertical():
    cell_size, base_y = scales(20, 500)
    x, _ = project(np.arange(20), np.arange(20), cell_size, base_y, 250.0)
    assert np.allclose(x, 250.0)


def test_round_trip_over_full_lattice():
    n = 150
    cell_size, base_y = scales(n - 1, 600)
    ii, jj = np.meshgrid(np.arange(n), np.arange(n), indexing="ij")
    x, y = project(ii, jj, cell_size, base_y, 400.0)
    ri, rj = unproject(x, y, cell_size, base_y, 400.0)

    assert np.allclose(ri, ii, atol=1e-9)
    assert np.allclose(rj, jj, atol=1e-9)
    assert np.array_equal(np.rint(ri).astype(int), ii)
    assert np.array_equal(np.rint(rj).astype(int), jj)


def test_triangle_sites():
    ii, jj = triangle_sites(4)
    assert len(ii) == (4 + 1) * (4 + 2) // 2
    assert np.all(ii + jj <= 4)
    assert (ii[0], jj[0]) == (0, 0)


def test_limit_curve_empty_before_start():
    assert limit_curve(0.0).shape == (0, 2)
    assert limit_curve(-3.0).shape == (0, 2)


def test_limit_curve_traces_limit_shape():
    t = 9.0
    curve = limit_curve(t, sample_count=400)

    assert curve.shape == (401, 2)
    assert tuple(curve[0]) == (0.0, 9.0)
    assert np.allclose(curve[-1], (9.0, 0.0))
    assert np.allclose(np.sqrt(curve[:, 0]) + np.sqrt(curve[:, 1]), math.sqrt(t))
    assert np.all(np.diff(curve[:, 0]) > 0)


def test_limit_curve_rejects_zero_samples():
    with pytest.raises(ValueError):
        limit_curve(1.0, sample_count=0)


def test_limit_curve_empty_before_start_ignores_sample_count():
    assert limit_curve(0.0, sample_count=0).shape == (0, 2)
    assert limit_curve(-1.0, sample_count=-5).shape == (0, 2)
