#!/usr/bin/env python3
"""
Corner Growth Simulation Runner

Runs the last-passage percolation animation either in a live matplotlib
window or headless (the whole run is played on a manual clock), and
optionally saves the final frame and the weight/passage-time fields.

Window controls:
  Space : Pause / Resume
  R     : Restart with the current size and speed
  N     : New weights
"""

import argparse
import sys
import time
from pathlib import Path

import matplotlib
import matplotlib.pyplot as plt

# Add project root to path
ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from src.cgm_sim import (
    FigureScheduler,
    InvalidConfiguration,
    ManualScheduler,
    MatplotlibRenderer,
    PlaybackController,
    SimulationConfig,
    utils,
)


def build_config(args) -> SimulationConfig:
    """Merge a parameter file (if any) with command-line overrides."""
    params = utils.load_params(args.config) if args.config else {}
    overrides = {
        "lattice_size": args.lattice,
        "size": args.size,
        "interval": args.speed,
        "seed": args.seed,
        "sample_count": args.samples,
    }
    params.update({k: v for k, v in overrides.items() if v is not None})
    if args.verbose:
        params["verbose"] = True
    return SimulationConfig.from_dict(params)


def run_headless(config: SimulationConfig, renderer: MatplotlibRenderer) -> PlaybackController:
    scheduler = ManualScheduler()
    controller = PlaybackController(config, scheduler=scheduler, render=renderer)
    controller.reset(config.size, config.interval)
    start_time = time.time()
    ticks = scheduler.run_until_idle()
    print(f"Played {ticks} ticks to t={controller.current_time:.1f} "
          f"in {time.time() - start_time:.2f}s")
    return controller


def run_interactive(config: SimulationConfig, renderer: MatplotlibRenderer) -> PlaybackController:
    scheduler = FigureScheduler(renderer.fig)
    controller = PlaybackController(config, scheduler=scheduler, render=renderer)

    def on_key(event):
        if event.key == " ":
            controller.toggle()
        elif event.key == "r":
            controller.reset(controller.size, controller.interval)
        elif event.key == "n":
            controller.regenerate_field()

    renderer.fig.canvas.mpl_connect("key_press_event", on_key)
    controller.reset(config.size, config.interval)
    plt.show()
    return controller


def main():
    parser = argparse.ArgumentParser(
        description="Animate the corner growth model and its limit shape",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--config", type=str, default=None, help="JSON/TOML parameter file")
    parser.add_argument("--lattice", type=int, default=None, help="Lattice extent N (default: 150)")
    parser.add_argument("--size", type=int, default=None, help="Display size m in [1, N-1] (default: 30)")
    parser.add_argument("--speed", type=float, default=None, help="Tick interval in ms (default: 150)")
    parser.add_argument("--samples", type=int, default=None, help="Limit curve samples (default: 400)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--headless", action="store_true", help="Play the run without a window")
    parser.add_argument("--out", type=str, default=None, help="Save the final frame as PNG")
    parser.add_argument("--save-fields", type=str, default=None, help="Save weights/times as .npz")
    parser.add_argument("--verbose", action="store_true", help="Print progress")
    args = parser.parse_args()

    if args.headless:
        matplotlib.use("Agg")

    config = build_config(args)
    renderer = MatplotlibRenderer(config.view_width, config.view_height)

    try:
        if args.headless:
            controller = run_headless(config, renderer)
        else:
            controller = run_interactive(config, renderer)
    except InvalidConfiguration as exc:
        print(f"Error: {exc}")
        renderer.close()
        return 2

    if args.out:
        renderer.save(args.out)
    if args.save_fields:
        result = controller.field.to_result()
        result.ensure_meta().update(
            {"size": controller.size, "seed": config.seed, "created": utils.now_str()}
        )
        utils.save_fields(args.save_fields, result)
        print(f"Fields saved to {args.save_fields}")

    controller.close()
    renderer.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
