"""
Corner Growth Simulation - last-passage percolation on a square lattice

This package provides:
- GrowthField: Exponential(1) weights and their last-passage times
- PlaybackController: the session state machine driving the animation
- MatplotlibRenderer: paints the rotated lattice and the limit shape
"""

from .fields import GrowthField, generate_weights, solve_passage_times
from .geometry import project, scales, unproject
from .limit_shape import limit_curve
from .playback import (
    InvalidConfiguration,
    PlaybackController,
    PlaybackState,
    SimulationConfig,
)
from .render import Frame, MatplotlibRenderer, build_frame
from .timers import FigureScheduler, ManualScheduler
from . import utils

__all__ = [
    # Session
    "PlaybackController",
    "PlaybackState",
    "SimulationConfig",
    "InvalidConfiguration",
    # Fields
    "GrowthField",
    "generate_weights",
    "solve_passage_times",
    # Geometry and limit shape
    "project",
    "unproject",
    "scales",
    "limit_curve",
    # Rendering and timers
    "Frame",
    "build_frame",
    "MatplotlibRenderer",
    "FigureScheduler",
    "ManualScheduler",
    # Utilities
    "utils",
]
