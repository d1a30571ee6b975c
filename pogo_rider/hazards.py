"""Post-integration crash and finish checks."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .config import HazardConfig
from .rider import RiderState
from .terrain import Terrain


class CrashCause(str, Enum):
    SPIKE_HEAD = "spike_head"
    SPIKE_BODY = "spike_body"
    HEAD_IN_GROUND = "head_in_ground"
    BODY_IN_GROUND = "body_in_ground"
    OFF_WORLD = "off_world"


@dataclass(frozen=True)
class Outcome:
    """Result of one detector pass. ``crash`` wins over ``finished``."""

    crash: Optional[CrashCause] = None
    finished: bool = False


def check_spikes(rider: RiderState, terrain: Terrain, config: HazardConfig) -> Optional[CrashCause]:
    head_x, head_y = rider.head_point()
    body_bottom = rider.y + config.spike_body_offset
    for spike in terrain.spikes:
        top = terrain.spike_top(spike)
        head_over = spike.x - config.spike_head_margin < head_x < spike.end_x + config.spike_head_margin
        if head_over and head_y > top + config.spike_tip_tolerance:
            return CrashCause.SPIKE_HEAD
        body_over = spike.x - config.spike_body_margin < rider.x < spike.end_x + config.spike_body_margin
        if body_over and body_bottom > top + config.spike_base_tolerance:
            return CrashCause.SPIKE_BODY
    return None


def check_crash(
    rider: RiderState,
    terrain: Terrain,
    viewport_height: float,
    config: Optional[HazardConfig] = None,
) -> Optional[CrashCause]:
    """Return why the rider crashed this frame, or None if they are fine."""
    cfg = config or HazardConfig()
    cause = check_spikes(rider, terrain, cfg)
    if cause is not None:
        return cause
    head_x, head_y = rider.head_point()
    if head_y + rider.head_radius > terrain.height_at(head_x):
        return CrashCause.HEAD_IN_GROUND
    if rider.y + cfg.ground_body_offset > terrain.height_at(rider.x) + cfg.ground_tolerance:
        return CrashCause.BODY_IN_GROUND
    if rider.y > viewport_height + cfg.fall_margin:
        return CrashCause.OFF_WORLD
    return None


def evaluate(
    rider: RiderState,
    terrain: Terrain,
    viewport_height: float,
    config: Optional[HazardConfig] = None,
) -> Outcome:
    return Outcome(
        crash=check_crash(rider, terrain, viewport_height, config),
        finished=rider.x >= terrain.finish_x,
    )
