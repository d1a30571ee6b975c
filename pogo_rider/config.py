"""Configuration data structures for the pogo course."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PhysicsConfig:
    """Tunable constants for the spring-leg integrator."""

    gravity: float = 2400.0  # px/s^2, y grows downward
    spring_stiffness: float = 260.0
    spring_damping: float = 32.0
    max_compression: float = 120.0
    foot_friction: float = 22.0
    friction_spin_coupling: float = 0.026  # share of foot friction fed back into spin
    max_friction_gain: float = 1.9  # keeps foot slip from flipping sign and growing on long steps
    control_force: float = 820.0
    control_torque: float = 11.0  # grounded lean authority
    air_torque: float = 3.4  # extra lean authority while airborne
    jump_base_impulse: float = 520.0
    jump_compression_scale: float = 7.8
    jump_horizontal_ratio: float = 0.7
    jump_spin_coupling: float = 0.015
    linear_decay_x: float = 0.998
    linear_decay_y: float = 0.999
    angular_decay: float = 0.992
    max_step: float = 0.25  # largest dt the integrator accepts


@dataclass(frozen=True)
class RiderConfig:
    """Spawn point and fixed body proportions."""

    start_x: float = 120.0
    start_y: float = 420.0
    leg_length: float = 160.0
    head_radius: float = 28.0
    head_offset: float = 54.0


@dataclass(frozen=True)
class HazardConfig:
    """Empirically tuned tolerances used by the crash detector."""

    spike_head_margin: float = 12.0
    spike_tip_tolerance: float = 4.0
    spike_body_margin: float = 14.0
    spike_body_offset: float = 28.0
    spike_base_tolerance: float = 12.0
    ground_body_offset: float = 24.0
    ground_tolerance: float = 6.0
    fall_margin: float = 480.0


@dataclass(frozen=True)
class CameraConfig:
    """Side-scrolling follow camera."""

    lead_fraction: float = 0.35  # rider sits this far from the left edge
    follow_rate: float = 7.0
    finish_view_fraction: float = 0.4


@dataclass(frozen=True)
class HudConfig:
    """Throttling of derived stats pushed to the overlay."""

    broadcast_interval: float = 0.09
    progress_epsilon: float = 0.2
    speed_epsilon: float = 14.0
    speed_display_scale: float = 0.18


@dataclass(frozen=True)
class RenderingConfig:
    """Colours and sizes for the 2D renderer."""

    sky_color: tuple[int, int, int] = (43, 59, 102)
    horizon_color: tuple[int, int, int] = (31, 41, 75)
    backdrop_color: tuple[int, int, int] = (29, 22, 36)
    hill_color: tuple[int, int, int] = (64, 78, 120)
    ground_color: tuple[int, int, int] = (74, 59, 49)
    ground_edge_color: tuple[int, int, int] = (25, 18, 12)
    spike_color: tuple[int, int, int] = (67, 24, 34)
    pole_color: tuple[int, int, int] = (217, 221, 236)
    flag_dark_color: tuple[int, int, int] = (28, 31, 51)
    flag_light_color: tuple[int, int, int] = (244, 247, 255)
    stick_color: tuple[int, int, int] = (243, 194, 91)
    body_color: tuple[int, int, int] = (232, 83, 90)
    head_color: tuple[int, int, int] = (255, 232, 198)
    helmet_color: tuple[int, int, int] = (70, 115, 255)
    crashed_color: tuple[int, int, int] = (90, 94, 109)
    ui_color: tuple[int, int, int] = (236, 240, 255)
    ground_sample_step: int = 16
    flag_pole_height: int = 200


@dataclass(frozen=True)
class GameConfig:
    """High-level configuration of the game."""

    window_size: tuple[int, int] = (1280, 720)
    target_fps: int = 60
    max_frame_dt: float = 0.04
    physics: PhysicsConfig = field(default_factory=PhysicsConfig)
    rider: RiderConfig = field(default_factory=RiderConfig)
    hazards: HazardConfig = field(default_factory=HazardConfig)
    camera: CameraConfig = field(default_factory=CameraConfig)
    hud: HudConfig = field(default_factory=HudConfig)
    render: RenderingConfig = field(default_factory=RenderingConfig)

    def __post_init__(self) -> None:
        if self.target_fps <= 0:
            raise ValueError(f"target_fps must be positive, got {self.target_fps}")
        if not 0.0 < self.max_frame_dt <= self.physics.max_step:
            raise ValueError(
                f"max_frame_dt must be in (0, {self.physics.max_step}], got {self.max_frame_dt}"
            )
