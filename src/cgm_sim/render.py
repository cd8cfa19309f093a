"""
Frame assembly and matplotlib rendering.

build_frame() turns the session state into view-space geometry; the
renderer only paints what it is given and never touches simulation state.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

import matplotlib.pyplot as plt
import numpy as np

from .geometry import project, scales, triangle_sites
from .limit_shape import DEFAULT_SAMPLE_COUNT, limit_curve

INFECTED_COLOR = "#4a90e2"
HEALTHY_COLOR = "#111111"
CURVE_COLOR = "red"


@dataclass
class Frame:
    points: np.ndarray  # (K, 2) view coordinates, all sites with i + j <= size
    infected: np.ndarray  # (K,) bool
    curve: np.ndarray  # (k, 2) view coordinates of the limit shape
    time: float
    size: int
    cell_size: float

    @property
    def infected_count(self) -> int:
        return int(np.count_nonzero(self.infected))


def build_frame(
    times: np.ndarray,
    size: int,
    t: float,
    view_width: float,
    view_height: float,
    sample_count: int = DEFAULT_SAMPLE_COUNT,
) -> Frame:
    """Project the visible triangle and the limit curve for time t."""
    cell_size, base_y = scales(size, view_height)
    center_x = view_width / 2.0

    ii, jj = triangle_sites(size)
    x, y = project(ii, jj, cell_size, base_y, center_x)
    infected = times[ii, jj] <= t

    uv = limit_curve(t, sample_count)
    cx, cy = project(uv[:, 0], uv[:, 1], cell_size, base_y, center_x)

    return Frame(
        points=np.column_stack((x, y)),
        infected=infected,
        curve=np.column_stack((cx, cy)),
        time=float(t),
        size=int(size),
        cell_size=cell_size,
    )


def dot_radius(size: int) -> float:
    """Infected dot radius in pixels; shrinks as more sites are shown."""
    return max(2.0, 5.0 * (30.0 / size))


class MatplotlibRenderer:
    """
    Paints frames onto a matplotlib axes whose data units are view pixels.

    The y axis is inverted so that (0, 0) is the top-left corner, matching
    the coordinates produced by the projector.
    """

    def __init__(self, view_width: float, view_height: float, fig=None, ax=None) -> None:
        if fig is None or ax is None:
            fig, ax = plt.subplots(figsize=(view_width / 100.0, view_height / 100.0))
        self.fig = fig
        self.ax = ax

        bg_color = "white"
        fig.patch.set_facecolor(bg_color)
        ax.set_facecolor(bg_color)
        ax.set_xlim(0, view_width)
        ax.set_ylim(view_height, 0)
        ax.set_aspect("equal")
        ax.axis("off")

        empty = np.empty((0, 2))
        self._healthy = ax.scatter(empty[:, 0], empty[:, 1], c=HEALTHY_COLOR, linewidths=0)
        self._infected = ax.scatter(empty[:, 0], empty[:, 1], c=INFECTED_COLOR, linewidths=0)
        (self._curve,) = ax.plot([], [], color=CURVE_COLOR, linewidth=2)
        self.frames_drawn = 0

    def draw(self, frame: Frame) -> None:
        radius = dot_radius(frame.size)
        healthy = frame.points[~frame.infected]
        infected = frame.points[frame.infected]

        # scatter sizes are in points^2
        self._healthy.set_offsets(healthy)
        self._healthy.set_sizes(np.full(len(healthy), (2.0 * max(1.0, radius / 3.0)) ** 2))
        self._infected.set_offsets(infected)
        self._infected.set_sizes(np.full(len(infected), (2.0 * radius) ** 2))
        self._curve.set_data(frame.curve[:, 0], frame.curve[:, 1])
        self.ax.set_title(f"t = {frame.time:.1f}   infected = {frame.infected_count}")

        self.fig.canvas.draw_idle()
        self.frames_drawn += 1

    __call__ = draw

    def save(self, output: str, dpi: int = 100) -> None:
        os.makedirs(os.path.dirname(output) if os.path.dirname(output) else ".", exist_ok=True)
        self.fig.savefig(output, dpi=dpi, facecolor=self.fig.get_facecolor())
        print(f"Saved frame to {output}")

    def close(self) -> None:
        plt.close(self.fig)


__all__ = ["Frame", "MatplotlibRenderer", "build_frame", "dot_radius"]
