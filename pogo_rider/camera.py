"""Side-scrolling chase camera."""

from __future__ import annotations

from typing import Optional

from .config import CameraConfig


def follow_camera(
    camera_x: float,
    rider_x: float,
    viewport_width: float,
    dt: float,
    finish_x: float,
    config: Optional[CameraConfig] = None,
) -> float:
    """Ease ``camera_x`` towards the rider and keep it inside the course."""
    cfg = config or CameraConfig()
    if viewport_width <= 0:
        return camera_x
    target = rider_x - viewport_width * cfg.lead_fraction
    lerp = min(1.0, max(0.0, dt * cfg.follow_rate))
    camera_x += (target - camera_x) * lerp
    limit = max(0.0, finish_x - viewport_width * cfg.finish_view_fraction)
    return min(limit, max(0.0, camera_x))


class Camera:
    """Holds the horizontal scroll offset used by the renderer."""

    def __init__(self, config: CameraConfig, finish_x: float) -> None:
        self.cfg = config
        self.finish_x = finish_x
        self.x = 0.0

    def update(self, dt: float, rider_x: float, viewport_width: float) -> None:
        self.x = follow_camera(self.x, rider_x, viewport_width, dt, self.finish_x, self.cfg)

    def to_screen(self, world_x: float) -> float:
        return world_x - self.x

    def reset(self) -> None:
        self.x = 0.0
