"""
Random weight field and last-passage time solver.

Every site (i, j) of an N x N lattice carries an i.i.d. Exponential(1)
weight W[i, j]. The passage time T[i, j] is the largest total weight over
up-right paths from the boundary to (i, j), which obeys the max-plus
recurrence

    T[i, 0] = T[0, j] = 0
    T[i, j] = max(T[i-1, j], T[i, j-1]) + W[i, j]     (i, j >= 1)

The whole field is always solved, independent of how much of it is
displayed, so the display window can grow without drawing new weights.
"""

from __future__ import annotations

import time
from typing import Callable, Optional, Tuple

import numpy as np
from numba import njit

from . import utils

DEFAULT_LATTICE_SIZE = 150

UniformSource = Callable[[Tuple[int, int]], np.ndarray]


###############################################################################
# Weights
###############################################################################


def generate_weights(n: int, uniform: Optional[UniformSource] = None) -> np.ndarray:
    """
    Draw an (n, n) field of Exponential(1) weights as -ln(u).

    Args:
        n: Lattice extent.
        uniform: Callable returning uniforms in [0, 1) for a given shape.
            Defaults to the global numpy RNG.

    Zero draws are resampled so no weight is infinite.
    """
    if n < 1:
        raise ValueError(f"Lattice size must be positive, got {n}")
    if uniform is None:
        uniform = np.random.random

    u = np.asarray(uniform((n, n)), dtype=np.float64)
    zeros = u <= 0.0
    while zeros.any():
        u[zeros] = np.asarray(uniform((int(zeros.sum()),)), dtype=np.float64)
        zeros = u <= 0.0
    return -np.log(u)


###############################################################################
# Passage times
###############################################################################


@njit(cache=True)
def _passage_kernel(weights, times):
    n = weights.shape[0]
    for i in range(1, n):
        for j in range(1, n):
            up = times[i - 1, j]
            left = times[i, j - 1]
            times[i, j] = (up if up > left else left) + weights[i, j]


def solve_passage_times(weights: np.ndarray) -> np.ndarray:
    """Solve the last-passage recurrence over the full field (row-major)."""
    weights = np.ascontiguousarray(weights, dtype=np.float64)
    if weights.ndim != 2 or weights.shape[0] != weights.shape[1]:
        raise ValueError(f"Weights must be a square 2D array, got shape {weights.shape}")
    times = np.zeros_like(weights)
    _passage_kernel(weights, times)
    return times


###############################################################################
# Session field pair
###############################################################################


class GrowthField:
    """
    Owns the weight field and its passage times, always replaced as a pair.

    If drawing or solving fails (e.g. MemoryError for a huge lattice) the
    previous pair is left untouched.
    """

    def __init__(
        self,
        n: int = DEFAULT_LATTICE_SIZE,
        uniform: Optional[UniformSource] = None,
        verbose: bool = False,
    ) -> None:
        if n < 2:
            raise ValueError(f"Lattice size must be at least 2, got {n}")
        self.n = int(n)
        self.uniform = uniform
        self.verbose = verbose
        self.generation = 0
        self.weights = None
        self.times = None
        self.regenerate()

    def regenerate(self) -> None:
        t_start = time.perf_counter()
        weights = generate_weights(self.n, self.uniform)
        times = solve_passage_times(weights)
        self.weights, self.times = weights, times
        self.generation += 1
        if self.verbose:
            elapsed = time.perf_counter() - t_start
            print(f"[cgm] Field #{self.generation}: N={self.n}, "
                  f"T_max={times[-1, -1]:.2f}, elapsed={elapsed:.3f}s")

    def to_result(self) -> utils.FieldResult:
        meta = {
            "model": "corner_growth",
            "n": self.n,
            "generation": self.generation,
        }
        return utils.FieldResult(weights=self.weights, times=self.times, meta=meta)


__all__ = [
    "DEFAULT_LATTICE_SIZE",
    "GrowthField",
    "generate_weights",
    "solve_passage_times",
]
