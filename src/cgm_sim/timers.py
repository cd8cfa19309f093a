"""
Periodic tick sources for the playback controller.

A scheduler arms a periodic callback and hands back a handle; cancelling
the handle disarms it. Cancelling twice is harmless.

- ManualScheduler: deterministic, advanced explicitly (tests, headless runs).
- FigureScheduler: backed by a matplotlib canvas timer (interactive window).
"""

from __future__ import annotations

from typing import Callable, List


class TimerHandle:
    """A single armed periodic callback."""

    def __init__(self, interval_ms: float, callback: Callable[[], None]) -> None:
        self.interval_ms = float(interval_ms)
        self.callback = callback
        self.active = True

    def cancel(self) -> None:
        self.active = False


class ManualScheduler:
    """Scheduler whose clock only moves when advance() is called."""

    def __init__(self) -> None:
        self.handles: List[TimerHandle] = []
        self.armed_count = 0
        self.now_ms = 0.0
        self._due: dict[int, float] = {}

    def schedule(self, interval_ms: float, callback: Callable[[], None]) -> TimerHandle:
        self._prune()
        handle = TimerHandle(interval_ms, callback)
        self.handles.append(handle)
        self.armed_count += 1
        self._due[id(handle)] = self.now_ms + handle.interval_ms
        return handle

    def _prune(self) -> None:
        for handle in [h for h in self.handles if not h.active]:
            self.handles.remove(handle)
            del self._due[id(handle)]

    @property
    def live(self) -> List[TimerHandle]:
        return [h for h in self.handles if h.active]

    def advance(self, ms: float) -> int:
        """Move the clock forward, firing due callbacks in time order. Returns fire count."""
        target = self.now_ms + ms
        fired = 0
        while True:
            pending = [h for h in self.live if self._due[id(h)] <= target]
            if not pending:
                break
            handle = min(pending, key=lambda h: self._due[id(h)])
            self.now_ms = self._due[id(handle)]
            self._due[id(handle)] += handle.interval_ms
            handle.callback()
            fired += 1
        self._prune()
        self.now_ms = target
        return fired

    def run_until_idle(self, max_fires: int = 1_000_000) -> int:
        """Fire callbacks until no handle is live."""
        fired = 0
        while self.live and fired < max_fires:
            step = min(h.interval_ms for h in self.live)
            fired += self.advance(step)
        return fired


class _FigureTimerHandle(TimerHandle):
    def __init__(self, interval_ms, callback, timer) -> None:
        super().__init__(interval_ms, callback)
        self._timer = timer

    def cancel(self) -> None:
        if self.active:
            self._timer.stop()
        super().cancel()


class FigureScheduler:
    """Scheduler backed by fig.canvas.new_timer()."""

    def __init__(self, fig) -> None:
        self.fig = fig

    def schedule(self, interval_ms: float, callback: Callable[[], None]) -> TimerHandle:
        timer = self.fig.canvas.new_timer(interval=max(1, int(round(interval_ms))))
        timer.add_callback(callback)
        handle = _FigureTimerHandle(interval_ms, callback, timer)
        timer.start()
        return handle


__all__ = ["FigureScheduler", "ManualScheduler", "TimerHandle"]
