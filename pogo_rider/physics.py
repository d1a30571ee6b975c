"""Spring-leg integrator for the pogo rider."""

from __future__ import annotations

import math
from typing import Optional

from .config import PhysicsConfig
from .input import InputState
from .rider import RiderState, normalize_angle
from .terrain import Terrain


def _clamp(value: float, minimum: float, maximum: float) -> float:
    return min(maximum, max(minimum, value))


def check_step(dt: float, config: PhysicsConfig) -> None:
    if not math.isfinite(dt) or dt < 0.0:
        raise ValueError(f"dt must be a finite, non-negative number of seconds, got {dt!r}")
    if dt > config.max_step:
        raise ValueError(f"dt={dt:.4f}s exceeds the integrator limit of {config.max_step}s; clamp it first")


def step(
    rider: RiderState,
    inputs: InputState,
    dt: float,
    terrain: Terrain,
    config: Optional[PhysicsConfig] = None,
) -> bool:
    """Advance ``rider`` by ``dt`` seconds. Returns True if the foot touched the ground.

    The jump edge in ``inputs`` is consumed whether or not it produced a jump.
    """
    cfg = config or PhysicsConfig()
    check_step(dt, cfg)
    intent = inputs.lean_intent

    rider.vx += cfg.control_force * intent * dt
    rider.angular_velocity += cfg.control_torque * intent * dt

    rider.vy += cfg.gravity * dt
    rider.vx *= cfg.linear_decay_x
    rider.vy *= cfg.linear_decay_y
    rider.angular_velocity *= cfg.angular_decay

    rider.x += rider.vx * dt
    rider.y += rider.vy * dt
    rider.angle = normalize_angle(rider.angle + rider.angular_velocity * dt)

    sin, cos = rider.leg_axis()
    _, foot_y = rider.foot_point()
    ground_y = terrain.height_at(rider.x + sin * rider.leg_length)
    jump = inputs.consume_jump()

    # The leg can only push off the ground while it points down at it.
    if foot_y < ground_y or cos <= 0.0:
        rider.angular_velocity += cfg.air_torque * intent * dt
        return False

    # Pin the foot to the surface by sliding the body back up the leg.
    penetration = foot_y - ground_y
    rider.x -= sin * penetration
    rider.y -= cos * penetration

    # Normal velocity is positive when the body moves away from the foot.
    normal_velocity = -(rider.vx * sin + rider.vy * cos)
    compression = _clamp(penetration, 0.0, cfg.max_compression)
    spring_force = compression * cfg.spring_stiffness - normal_velocity * cfg.spring_damping
    rider.vx -= sin * spring_force * dt
    rider.vy -= cos * spring_force * dt

    tangent_x = cos
    tangent_y = -sin
    tangent_velocity = (
        rider.vx * tangent_x + rider.vy * tangent_y + rider.angular_velocity * rider.leg_length
    )
    friction_force = -tangent_velocity * cfg.foot_friction
    gain = cfg.foot_friction * dt * (1.0 + cfg.friction_spin_coupling * rider.leg_length)
    if gain > cfg.max_friction_gain:
        friction_force *= cfg.max_friction_gain / gain
    rider.vx += tangent_x * friction_force * dt
    rider.vy += tangent_y * friction_force * dt
    rider.angular_velocity += friction_force * dt * cfg.friction_spin_coupling

    if jump:
        impulse = cfg.jump_base_impulse + compression * cfg.jump_compression_scale
        rider.vx -= sin * impulse * cfg.jump_horizontal_ratio
        rider.vy -= cos * impulse
        rider.angular_velocity -= tangent_velocity * cfg.jump_spin_coupling

    return True
