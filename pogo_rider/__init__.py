"""Pogo stick side-scroller package."""

from .config import GameConfig, HazardConfig, PhysicsConfig, RiderConfig
from .input import InputState, KeyboardInput
from .rider import RiderState, normalize_angle
from .session import HudStats, HudThrottle, RunEvent, RunStateMachine, RunStatus, Simulation
from .terrain import SpikeField, Segment, Terrain, TerrainError, default_terrain

__all__ = [
    "GameConfig",
    "PhysicsConfig",
    "RiderConfig",
    "HazardConfig",
    "InputState",
    "KeyboardInput",
    "RiderState",
    "normalize_angle",
    "Simulation",
    "RunStateMachine",
    "RunStatus",
    "RunEvent",
    "HudStats",
    "HudThrottle",
    "Terrain",
    "Segment",
    "SpikeField",
    "TerrainError",
    "default_terrain",
]
