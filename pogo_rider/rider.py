"""Mutable physical state of the pogo rider."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Optional

from .config import RiderConfig

TAU = math.pi * 2


def normalize_angle(angle: float) -> float:
    """Wrap ``angle`` into (-pi, pi]."""
    if not math.isfinite(angle):
        raise ValueError(f"Cannot normalise non-finite angle {angle!r}")
    if abs(angle) > 4 * math.pi:
        angle = math.fmod(angle, TAU)
    while angle > math.pi:
        angle -= TAU
    while angle <= -math.pi:
        angle += TAU
    return angle


@dataclass
class RiderState:
    """Position, velocity and orientation of the rider.

    ``angle`` is zero when the pogo leg points straight down. Positive
    angles swing the foot forward (to the right) and the head back.
    """

    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    angle: float = 0.0
    angular_velocity: float = 0.0
    leg_length: float = 160.0
    head_radius: float = 28.0
    head_offset: float = 54.0

    @classmethod
    def spawn(cls, config: Optional[RiderConfig] = None) -> "RiderState":
        cfg = config or RiderConfig()
        return cls(
            x=cfg.start_x,
            y=cfg.start_y,
            leg_length=cfg.leg_length,
            head_radius=cfg.head_radius,
            head_offset=cfg.head_offset,
        )

    def leg_axis(self) -> tuple[float, float]:
        """Unit vector from the body towards the foot."""
        return math.sin(self.angle), math.cos(self.angle)

    def foot_point(self) -> tuple[float, float]:
        sin, cos = self.leg_axis()
        return self.x + sin * self.leg_length, self.y + cos * self.leg_length

    def head_point(self) -> tuple[float, float]:
        sin, cos = self.leg_axis()
        return self.x - sin * self.head_offset, self.y - cos * self.head_offset

    @property
    def speed(self) -> float:
        return math.hypot(self.vx, self.vy)

    def copy(self) -> "RiderState":
        return replace(self)
