"""
Tests for frame assembly and the matplotlib renderer.
"""

import sys
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import numpy as np

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from src.cgm_sim.fields import solve_passage_times
from src.cgm_sim.geometry import scales
from src.cgm_sim.render import MatplotlibRenderer, build_frame, dot_radius


def unit_times(n=10):
    return solve_passage_times(np.ones((n, n)))


def test_frame_covers_visible_triangle():
    frame = build_frame(unit_times(), size=5, t=0.0, view_width=800, view_height=600, sample_count=20)

    assert frame.points.shape == (21, 2)
    assert frame.infected.shape == (21,)
    assert frame.curve.shape == (0, 2)
    # only the two zero boundaries are reached at t = 0
    assert frame.infected_count == 2 * 5 + 1


def test_infection_follows_passage_times():
    # with unit weights T[i][j] = i + j - 1 in the interior
    frame = build_frame(unit_times(), size=6, t=3.0, view_width=800, view_height=600, sample_count=20)
    boundary = 2 * 6 + 1
    interior = sum(1 for i in range(1, 7) for j in range(1, 7) if i + j <= 6 and i + j - 1 <= 3)
    assert frame.infected_count == boundary + interior


def test_curve_is_projected_like_sites():
    frame = build_frame(unit_times(), size=8, t=4.0, view_width=800, view_height=600, sample_count=10)
    cell_size, base_y = scales(8, 600)

    assert frame.curve.shape == (11, 2)
    assert frame.cell_size == cell_size
    # endpoints (0, t) and (t, 0) are mirror images around the centre line
    assert np.isclose(frame.curve[0, 0] + frame.curve[-1, 0], 800.0)
    assert np.isclose(frame.curve[0, 1], frame.curve[-1, 1])
    assert np.isclose(frame.curve[0, 1], base_y - 4.0 / np.sqrt(2) * cell_size)


def test_dot_radius_shrinks_with_size():
    assert dot_radius(30) == 5.0
    assert dot_radius(10) == 15.0
    assert dot_radius(149) == 2.0


def test_renderer_draws_and_saves(tmp_path):
    renderer = MatplotlibRenderer(400, 300)
    frame = build_frame(unit_times(), size=6, t=2.5, view_width=400, view_height=300, sample_count=30)

    renderer(frame)
    renderer.draw(frame)

    assert renderer.frames_drawn == 2
    assert len(renderer._infected.get_offsets()) == frame.infected_count

    out = tmp_path / "frame.png"
    renderer.save(str(out))
    assert out.exists()
    renderer.close()
