"""
Playback controller: the single session object driving the growth animation.

The controller owns the growth field, the display size, the tick interval,
the simulated time and the one armed timer handle. Every transition that
arms a new timer first disarms the old one.

    IDLE --start--> RUNNING --pause--> PAUSED --resume--> RUNNING
    RUNNING --tick (time >= size)--> FINISHED
    any --reset--> RUNNING          any --regenerate_field--> IDLE
"""

from __future__ import annotations

import enum
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, Optional

from . import utils
from .fields import DEFAULT_LATTICE_SIZE, GrowthField
from .limit_shape import DEFAULT_SAMPLE_COUNT
from .render import Frame, build_frame
from .timers import ManualScheduler

TIME_STEP = 0.5  # simulated time per tick, independent of the interval


class InvalidConfiguration(ValueError):
    """Rejected display size or tick interval; prior values are kept."""


class PlaybackState(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    FINISHED = "finished"


@dataclass
class SimulationConfig:
    lattice_size: int = DEFAULT_LATTICE_SIZE
    size: int = 30
    interval: float = 150  # ms between ticks
    sample_count: int = DEFAULT_SAMPLE_COUNT
    view_width: float = 800
    view_height: float = 600
    seed: Optional[int] = None
    verbose: bool = False

    @classmethod
    def from_dict(cls, params: Dict[str, Any]) -> "SimulationConfig":
        known = {k: v for k, v in params.items() if k in cls.__dataclass_fields__}
        return cls(**known)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class PlaybackController:
    """
    Session object exposing start/pause/resume/reset/regenerate_field.

    Args:
        config: SimulationConfig or plain dict. Defaults are used if None.
        scheduler: Anything with schedule(interval_ms, callback) -> handle.
            Defaults to a ManualScheduler.
        render: Callable receiving a Frame on every render request.
        field: Pre-built GrowthField; built from config.lattice_size if None.
    """

    def __init__(
        self,
        config: SimulationConfig | dict | None = None,
        scheduler=None,
        render: Optional[Callable[[Frame], None]] = None,
        field: Optional[GrowthField] = None,
    ) -> None:
        if config is None:
            config = SimulationConfig()
        elif isinstance(config, dict):
            config = SimulationConfig.from_dict(config)
        self.config = config

        if config.seed is not None:
            utils.set_seed(config.seed)
        self.field = field or GrowthField(config.lattice_size, verbose=config.verbose)
        self.scheduler = scheduler if scheduler is not None else ManualScheduler()
        self.render = render

        self.size = 0
        self.interval = 0.0
        self.configure(config.size, config.interval)

        self.current_time = 0.0
        self.state = PlaybackState.IDLE
        self._timer = None
        self._closed = False
        self._request_render()

    # ------------------------------------------------------------------ config
    def configure(self, size: int, interval: float) -> None:
        """Validate and apply display size and tick interval."""
        n = self.field.n
        try:
            size_ok = not isinstance(size, bool) and int(size) == size and 1 <= size <= n - 1
        except (TypeError, ValueError, OverflowError):
            size_ok = False
        if not size_ok:
            raise InvalidConfiguration(f"size must be an integer in [1, {n - 1}], got {size!r}")
        try:
            interval_ok = float(interval) > 0
        except (TypeError, ValueError):
            interval_ok = False
        if not interval_ok:
            raise InvalidConfiguration(f"interval must be positive, got {interval!r}")
        self.size = int(size)
        self.interval = float(interval)

    # ------------------------------------------------------------------ timer
    @property
    def armed(self) -> bool:
        return self._timer is not None and self._timer.active

    def _arm(self) -> None:
        self._disarm()
        self._timer = self.scheduler.schedule(self.interval, self.tick)

    def _disarm(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    # ------------------------------------------------------------------ actions
    def start(self) -> None:
        self._check_open()
        if self.state not in (PlaybackState.IDLE, PlaybackState.PAUSED):
            return
        if self.current_time >= self.size:
            self._disarm()
            self.state = PlaybackState.FINISHED
            return
        self._arm()
        self.state = PlaybackState.RUNNING

    resume = start

    def pause(self) -> None:
        if self.state is not PlaybackState.RUNNING:
            return
        self._disarm()
        self.state = PlaybackState.PAUSED

    def toggle(self) -> None:
        if self.state is PlaybackState.RUNNING:
            self.pause()
        else:
            self.resume()

    def reset(self, size: int, interval: float) -> None:
        self._check_open()
        self.configure(size, interval)
        self._disarm()
        self.current_time = 0.0
        self._request_render()
        self._arm()
        self.state = PlaybackState.RUNNING

    def tick(self) -> None:
        if self.state is not PlaybackState.RUNNING:
            return
        self.current_time += TIME_STEP
        self._request_render()
        if self.current_time >= self.size:
            self._disarm()
            self.state = PlaybackState.FINISHED
            if self.config.verbose:
                print(f"[cgm] Finished at t={self.current_time:.1f} (size={self.size})")

    def regenerate_field(self) -> None:
        self._check_open()
        self.field.regenerate()
        self._disarm()
        self.current_time = 0.0
        self.state = PlaybackState.IDLE
        self._request_render()

    def close(self) -> None:
        self._disarm()
        if not self._closed and self.config.verbose:
            print("[cgm] Session closed")
        self._closed = True

    # ------------------------------------------------------------------ frames
    def frame(self) -> Frame:
        self._check_open()
        return build_frame(
            self.field.times,
            self.size,
            self.current_time,
            self.config.view_width,
            self.config.view_height,
            self.config.sample_count,
        )

    def _request_render(self) -> None:
        if self.render is not None:
            self.render(self.frame())

    def _check_open(self) -> None:
        if self._closed:
            raise RuntimeError("Session has been closed.")


__all__ = [
    "InvalidConfiguration",
    "PlaybackController",
    "PlaybackState",
    "SimulationConfig",
    "TIME_STEP",
]
