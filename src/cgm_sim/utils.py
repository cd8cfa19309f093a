# src/cgm_sim/utils.py
from __future__ import annotations

import json
import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import numpy as np

try:  # Python 3.11+
    import tomllib
except ModuleNotFoundError:  # pragma: no cover
    tomllib = None  # type: ignore


@dataclass
class FieldResult:
    """Weight field, passage-time field and metadata for one session."""

    weights: Optional[np.ndarray] = None
    times: Optional[np.ndarray] = None
    meta: Optional[Dict[str, Any]] = None

    def ensure_meta(self) -> Dict[str, Any]:
        if self.meta is None:
            self.meta = {}
        return self.meta


def set_seed(seed: int = 0) -> None:
    """Set random seed for reproducibility (global numpy RNG)."""
    np.random.seed(seed)


def now_str() -> str:
    return time.strftime("%Y%m%d-%H%M%S")


def save_fields(
    path: str | os.PathLike[str], result: FieldResult, *, overwrite: bool = True
) -> None:
    """Serialize a FieldResult to a compressed .npz file."""
    out_dir = Path(path).parent
    out_dir.mkdir(parents=True, exist_ok=True)
    out: Dict[str, Any] = {}
    if result.weights is not None:
        out["weights"] = np.asarray(result.weights, dtype=np.float64)
    if result.times is not None:
        out["times"] = np.asarray(result.times, dtype=np.float64)
    out["meta"] = dict(result.meta or {})

    if not overwrite and Path(path).exists():
        raise FileExistsError(f"{path} already exists")
    np.savez_compressed(path, **out)


def load_fields(path: str | os.PathLike[str]) -> FieldResult:
    """
    Load a .npz written by save_fields.
    """
    data = np.load(path, allow_pickle=True)
    weights = data["weights"].astype(np.float64) if "weights" in data else None
    times = data["times"].astype(np.float64) if "times" in data else None
    meta: Dict[str, Any] = {}
    if "meta" in data:
        meta_raw = data["meta"]
        try:
            meta = dict(meta_raw.item())
        except (ValueError, TypeError):
            meta = {}
    return FieldResult(weights=weights, times=times, meta=meta)


def load_params(path: str | os.PathLike[str]) -> Dict[str, Any]:
    """
    Load simulation parameters from JSON or TOML.
    """
    path = str(path)
    if not os.path.exists(path):
        raise FileNotFoundError(f"Missing parameter file: {path}")
    with open(path, "rb") as fh:
        data = fh.read()
    suffix = Path(path).suffix.lower()
    if suffix in {".json", ""}:
        return json.loads(data.decode("utf-8"))
    if suffix in {".toml", ".tml"}:
        if tomllib is None:
            raise RuntimeError("tomllib is unavailable; cannot parse TOML files")
        return tomllib.loads(data.decode("utf-8"))
    raise ValueError(f"Unsupported parameter file format: {suffix}")
