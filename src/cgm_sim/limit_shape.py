from __future__ import annotations

import numpy as np

DEFAULT_SAMPLE_COUNT = 400


def limit_curve(t: float, sample_count: int = DEFAULT_SAMPLE_COUNT) -> np.ndarray:
    """
    Sample the limit shape sqrt(u) + sqrt(v) = sqrt(t) in lattice coordinates.

    Returns a (sample_count + 1, 2) array of (u, v) ordered by increasing u,
    or an empty (0, 2) array when t <= 0.
    """
    if t <= 0:
        return np.empty((0, 2), dtype=np.float64)
    if sample_count < 1:
        raise ValueError(f"sample_count must be at least 1, got {sample_count}")
    u = np.linspace(0.0, t, sample_count + 1)
    v = (np.sqrt(t) - np.sqrt(u)) ** 2
    return np.column_stack((u, v))


__all__ = ["DEFAULT_SAMPLE_COUNT", "limit_curve"]
