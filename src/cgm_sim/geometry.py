"""
Rotated view projection for lattice sites and curve samples.

The lattice is turned by 45 degrees so that the growing corner region is
drawn as an expanding diamond standing on the bottom edge of the view:

    Xr = (i - j) / sqrt(2),  Yr = (i + j) / sqrt(2)
    x  = center_x + Xr * cell_size
    y  = base_y   - Yr * cell_size
"""

from __future__ import annotations

import math
from typing import Tuple

import numpy as np

RT2 = math.sqrt(2.0)
FILL_FRACTION = 0.95  # largest extent uses 95% of view height


def scales(m: int, view_height: float) -> Tuple[float, float]:
    """Return (cell_size, base_y) so a size-m triangle fits the view height."""
    if m < 1:
        raise ValueError(f"Display size must be at least 1, got {m}")
    if view_height <= 0:
        raise ValueError(f"View height must be positive, got {view_height}")
    vertical_span = m / RT2
    cell_size = FILL_FRACTION * view_height / vertical_span
    base_y = float(view_height)
    return cell_size, base_y


def project(i, j, cell_size: float, base_y: float, center_x: float):
    """Map lattice (or fractional) coordinates to view coordinates."""
    i = np.asarray(i, dtype=np.float64)
    j = np.asarray(j, dtype=np.float64)
    xr = (i - j) / RT2
    yr = (i + j) / RT2
    return center_x + xr * cell_size, base_y - yr * cell_size


def unproject(x, y, cell_size: float, base_y: float, center_x: float):
    """Inverse of project()."""
    xr = (np.asarray(x, dtype=np.float64) - center_x) / cell_size
    yr = (base_y - np.asarray(y, dtype=np.float64)) / cell_size
    i = (xr + yr) / RT2
    j = (yr - xr) / RT2
    return i, j


def triangle_sites(m: int) -> Tuple[np.ndarray, np.ndarray]:
    """All (i, j) with i + j <= m, row-major."""
    ii, jj = np.meshgrid(np.arange(m + 1), np.arange(m + 1), indexing="ij")
    mask = (ii + jj) <= m
    return ii[mask], jj[mask]


__all__ = ["FILL_FRACTION", "project", "scales", "triangle_sites", "unproject"]
