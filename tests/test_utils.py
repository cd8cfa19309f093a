import json
import sys
from pathlib import Path

import numpy as np
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from src.cgm_sim import utils
from src.cgm_sim.fields import GrowthField
from src.cgm_sim.timers import ManualScheduler


def test_save_and_load_fields(tmp_path):
    utils.set_seed(11)
    field = GrowthField(16)
    path = tmp_path / "out" / "fields.npz"

    utils.save_fields(path, field.to_result())
    loaded = utils.load_fields(path)

    assert np.array_equal(loaded.weights, field.weights)
    assert np.array_equal(loaded.times, field.times)
    assert loaded.meta["n"] == 16

    with pytest.raises(FileExistsError):
        utils.save_fields(path, field.to_result(), overwrite=False)


def test_load_params_json_and_toml(tmp_path):
    json_path = tmp_path / "params.json"
    json_path.write_text(json.dumps({"size": 25, "interval": 80}))
    toml_path = tmp_path / "params.toml"
    toml_path.write_text("size = 25\ninterval = 80\n")

    assert utils.load_params(json_path) == {"size": 25, "interval": 80}
    if utils.tomllib is not None:
        assert utils.load_params(toml_path) == {"size": 25, "interval": 80}


def test_load_params_errors(tmp_path):
    bad = tmp_path / "params.yaml"
    bad.write_text("size: 3")
    with pytest.raises(ValueError):
        utils.load_params(bad)
    with pytest.raises(FileNotFoundError):
        utils.load_params(tmp_path / "missing.json")


def test_manual_scheduler_fires_in_time_order():
    scheduler = ManualScheduler()
    fired = []
    fast = scheduler.schedule(10, lambda: fired.append("fast"))
    scheduler.schedule(25, lambda: fired.append("slow"))

    assert scheduler.advance(30) == 4
    assert fired == ["fast", "fast", "slow", "fast"]

    fast.cancel()
    fast.cancel()
    scheduler.advance(20)
    assert fired[-1] == "slow"
    assert len(scheduler.live) == 1
