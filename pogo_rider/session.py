"""Run state machine and the per-frame simulation pipeline."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from . import hazards, physics
from .camera import Camera
from .config import GameConfig, HudConfig
from .hazards import CrashCause
from .input import InputState
from .rider import RiderState
from .terrain import Terrain, default_terrain

logger = logging.getLogger(__name__)


class RunStatus(str, Enum):
    INTRO = "intro"
    PLAYING = "playing"
    WON = "won"
    CRASHED = "crashed"


class RunEvent(Enum):
    START = "start"
    WIN = "win"
    CRASH = "crash"


class RunStateMachine:
    """Intro -> Playing -> Won | Crashed, with restart back into Playing.

    Every transition goes through :meth:`dispatch`. Requests that do not
    apply to the current state are ignored and reported as ``False``.
    """

    def __init__(self) -> None:
        self.status = RunStatus.INTRO
        self.start_timestamp: Optional[float] = None
        self.elapsed = 0.0
        self.final_time: Optional[float] = None
        self.best_time: Optional[float] = None
        self.crash_cause: Optional[CrashCause] = None

    @property
    def playing(self) -> bool:
        return self.status is RunStatus.PLAYING

    def dispatch(
        self,
        event: RunEvent,
        timestamp: Optional[float] = None,
        cause: Optional[CrashCause] = None,
    ) -> bool:
        if event is RunEvent.START:
            if self.playing:
                return False
            self.status = RunStatus.PLAYING
            self.start_timestamp = timestamp
            self.elapsed = 0.0
            self.final_time = None
            self.crash_cause = None
            logger.info("Run started")
            return True

        if not self.playing:
            return False

        if event is RunEvent.WIN:
            self.status = RunStatus.WON
            self.final_time = self.elapsed
            if self.best_time is None or self.elapsed < self.best_time:
                self.best_time = self.elapsed
                logger.info("New best time: %.2fs", self.elapsed)
            logger.info("Course cleared in %.2fs", self.elapsed)
            return True

        if event is RunEvent.CRASH:
            self.status = RunStatus.CRASHED
            self.crash_cause = cause
            logger.info(
                "Crashed after %.2fs (%s)",
                self.elapsed,
                cause.value if cause is not None else "unknown",
            )
            return True

        raise ValueError(f"Unknown run event {event!r}")

    def tick(self, timestamp: float) -> None:
        """Refresh the run timer from a wall-clock timestamp in seconds."""
        if not self.playing:
            return
        if self.start_timestamp is None:
            self.start_timestamp = timestamp
        self.elapsed = max(0.0, timestamp - self.start_timestamp)


@dataclass(frozen=True)
class HudStats:
    """Derived scalars for the overlay."""

    status: RunStatus
    elapsed: float
    progress: float
    speed: float
    best_time: Optional[float]
    final_time: Optional[float]


@dataclass(frozen=True)
class RenderSnapshot:
    """Read-only view of everything the renderer needs for one frame."""

    rider: RiderState
    camera_x: float
    status: RunStatus
    on_ground: bool
    viewport: tuple[float, float]
    crash_cause: Optional[CrashCause]


class Simulation:
    """Owns rider, camera, input and run state, and advances them one frame at a time."""

    def __init__(self, config: Optional[GameConfig] = None, terrain: Optional[Terrain] = None) -> None:
        self.config = config or GameConfig()
        self.terrain = terrain or default_terrain()
        self.machine = RunStateMachine()
        self.input = InputState()
        self.rider = RiderState.spawn(self.config.rider)
        self.camera = Camera(self.config.camera, self.terrain.finish_x)
        self.viewport: tuple[float, float] = (0.0, 0.0)
        self.on_ground = False
        self.last_timestamp: Optional[float] = None

    @property
    def status(self) -> RunStatus:
        return self.machine.status

    def set_viewport(self, width: float, height: float) -> None:
        self.viewport = (max(0.0, float(width)), max(0.0, float(height)))

    def start(self, timestamp: Optional[float] = None) -> bool:
        """Begin or restart a run. Ignored while a run is already in progress."""
        if not self.machine.dispatch(RunEvent.START, timestamp):
            return False
        self.rider = RiderState.spawn(self.config.rider)
        self.camera.reset()
        self.input.clear()
        self.on_ground = False
        self.last_timestamp = timestamp
        return True

    def frame(self, timestamp: float) -> None:
        """Run one frame of the pipeline for the clock tick at ``timestamp`` seconds."""
        if self.last_timestamp is None:
            dt = 0.0
        else:
            dt = min(self.config.max_frame_dt, max(0.0, timestamp - self.last_timestamp))
        self.last_timestamp = timestamp

        if self.machine.playing:
            self.machine.tick(timestamp)
            self.advance(dt)

        self.camera.update(dt, self.rider.x, self.viewport[0])
        self.input.jump_pressed = False

    def advance(self, dt: float) -> None:
        """Integrate and run the detector. Does nothing unless a run is in progress."""
        if not self.machine.playing:
            return
        self.on_ground = physics.step(self.rider, self.input, dt, self.terrain, self.config.physics)
        outcome = hazards.evaluate(self.rider, self.terrain, self.viewport[1], self.config.hazards)
        if outcome.crash is not None:
            self.machine.dispatch(RunEvent.CRASH, cause=outcome.crash)
        if outcome.finished:
            self.machine.dispatch(RunEvent.WIN)

    def progress(self) -> float:
        return self.terrain.progress(self.rider.x)

    def hud_stats(self) -> HudStats:
        machine = self.machine
        if machine.status is RunStatus.WON:
            progress, speed = 100.0, 0.0
        elif machine.status is RunStatus.CRASHED:
            progress, speed = self.progress(), 0.0
        else:
            progress, speed = self.progress(), self.rider.speed
        return HudStats(
            status=machine.status,
            elapsed=machine.elapsed,
            progress=progress,
            speed=speed,
            best_time=machine.best_time,
            final_time=machine.final_time,
        )

    def snapshot(self) -> RenderSnapshot:
        return RenderSnapshot(
            rider=self.rider.copy(),
            camera_x=self.camera.x,
            status=self.machine.status,
            on_ground=self.on_ground,
            viewport=self.viewport,
            crash_cause=self.machine.crash_cause,
        )


class HudThrottle:
    """Re-publishes HUD stats at a bounded rate.

    Status changes go out immediately. Otherwise a new value is produced at
    most once per ``broadcast_interval`` and small wobbles in progress or
    speed keep the previously published number.
    """

    def __init__(self, config: Optional[HudConfig] = None) -> None:
        self.cfg = config or HudConfig()
        self.last_broadcast: Optional[float] = None
        self.stats: Optional[HudStats] = None

    def poll(self, timestamp: float, simulation: Simulation) -> Optional[HudStats]:
        current = simulation.hud_stats()
        previous = self.stats
        status_changed = previous is None or previous.status is not current.status
        due = self.last_broadcast is None or timestamp - self.last_broadcast > self.cfg.broadcast_interval
        if not status_changed and not due:
            return None

        if previous is not None and not status_changed:
            if abs(current.progress - previous.progress) <= self.cfg.progress_epsilon:
                current = replace(current, progress=previous.progress)
            if abs(current.speed - previous.speed) <= self.cfg.speed_epsilon:
                current = replace(current, speed=previous.speed)
        self.last_broadcast = timestamp
        self.stats = current
        return current

    def reset(self) -> None:
        self.last_broadcast = None
        self.stats = None


def format_time(seconds: Optional[float]) -> str:
    return "--" if seconds is None else f"{seconds:.2f}s"
