"""pygame front end: window, frame loop and rendering for the pogo course."""

from __future__ import annotations

import logging
import math
from typing import Optional

import pygame
from pygame.math import Vector2

from .config import GameConfig, RenderingConfig
from .input import JUMP_KEYS, KeyboardInput
from .session import HudStats, HudThrottle, RenderSnapshot, RunStatus, Simulation, format_time
from .terrain import SpikeField, Terrain

logger = logging.getLogger(__name__)


class Renderer:
    """Draws a read-only simulation snapshot onto a surface."""

    def __init__(self, surface: pygame.Surface, config: GameConfig, terrain: Terrain) -> None:
        self.surface = surface
        self.cfg: RenderingConfig = config.render
        self.hud_cfg = config.hud
        self.terrain = terrain
        self.font = pygame.font.Font(None, 32)
        self.large_font = pygame.font.Font(None, 64)

    def draw(self, snapshot: RenderSnapshot, hud: Optional[HudStats]) -> None:
        width, height = snapshot.viewport
        if width <= 0 or height <= 0:
            return
        camera_x = snapshot.camera_x
        self._draw_backdrop(camera_x, int(width), int(height))
        self._draw_ground(camera_x, int(width), int(height))
        for spike in self.terrain.spikes:
            screen_x = spike.x - camera_x
            if -spike.width - 80 < screen_x < width + 80:
                self._draw_spikes(spike, camera_x)
        finish_screen_x = self.terrain.finish_x - camera_x
        if -80 < finish_screen_x < width + 120:
            self._draw_finish_flag(finish_screen_x, self.terrain.height_at(self.terrain.finish_x))
        self._draw_rider(snapshot)
        if hud is not None:
            self._draw_hud(hud)
        self._draw_overlay(snapshot.status, hud)

    def _draw_backdrop(self, camera_x: float, width: int, height: int) -> None:
        horizon = int(height * 0.42)
        self.surface.fill(self.cfg.sky_color, pygame.Rect(0, 0, width, horizon))
        self.surface.fill(self.cfg.backdrop_color, pygame.Rect(0, horizon, width, height - horizon))
        # Far hills scroll at a fifth of the camera speed.
        shift = -camera_x * 0.2
        hills = [
            (-width + shift, horizon + 60),
            (-width / 2 + shift, horizon - 50),
            (width * 0.1 + shift, horizon + 40),
            (width * 0.6 + shift, horizon - 30),
            (width * 1.4 + shift, horizon + 60),
            (width * 1.4 + shift, height),
            (-width + shift, height),
        ]
        pygame.draw.polygon(self.surface, self.cfg.hill_color, hills)

    def _draw_ground(self, camera_x: float, width: int, height: int) -> None:
        start = int(math.floor(camera_x)) - 40
        end = camera_x + width + 40
        limit = self.terrain.finish_x + 300
        points = [(start - camera_x, height)]
        x = start
        while x <= end:
            sample_x = min(limit, max(0.0, x))
            points.append((sample_x - camera_x, self.terrain.height_at(sample_x)))
            x += self.cfg.ground_sample_step
        points.append((end - camera_x, height))
        pygame.draw.polygon(self.surface, self.cfg.ground_color, points)
        pygame.draw.lines(self.surface, self.cfg.ground_edge_color, False, points[1:-1], 4)

    def _draw_spikes(self, spike: SpikeField, camera_x: float) -> None:
        base_y = self.terrain.height_at(spike.centre_x)
        count = max(3, int(spike.width // 18))
        cell = spike.width / count
        left = spike.x - camera_x
        for i in range(count):
            base_x = left + i * cell
            triangle = [
                (base_x, base_y - 6),
                (base_x + cell / 2, base_y - spike.height),
                (base_x + cell, base_y - 6),
            ]
            pygame.draw.polygon(self.surface, self.cfg.spike_color, triangle)

    def _draw_finish_flag(self, screen_x: float, ground_y: float) -> None:
        pole = self.cfg.flag_pole_height
        top = ground_y - pole
        pygame.draw.rect(self.surface, self.cfg.pole_color, pygame.Rect(int(screen_x) - 4, int(top), 8, pole))
        cell = 12
        for row in range(0, 80, cell):
            for col in range(0, 60, cell):
                dark = (col // cell) % 2 == (row // cell) % 2
                color = self.cfg.flag_dark_color if dark else self.cfg.flag_light_color
                self.surface.fill(color, pygame.Rect(int(screen_x) + 8 + col, int(top) + 20 + row, cell, cell))

    def _draw_rider(self, snapshot: RenderSnapshot) -> None:
        rider = snapshot.rider
        crashed = snapshot.status is RunStatus.CRASHED
        body = Vector2(rider.x - snapshot.camera_x, rider.y)
        foot_x, foot_y = rider.foot_point()
        head_x, head_y = rider.head_point()
        foot = Vector2(foot_x - snapshot.camera_x, foot_y)
        head = Vector2(head_x - snapshot.camera_x, head_y)

        stick = self.cfg.crashed_color if crashed else self.cfg.stick_color
        torso = self.cfg.crashed_color if crashed else self.cfg.body_color
        pygame.draw.line(self.surface, stick, body, foot, 10)
        pygame.draw.line(self.surface, torso, body, body.lerp(head, 0.6), 24)
        pygame.draw.circle(self.surface, self.cfg.head_color, head, rider.head_radius)
        helmet = self.cfg.crashed_color if crashed else self.cfg.helmet_color
        pygame.draw.circle(self.surface, helmet, head, rider.head_radius, 6)

    def _draw_hud(self, hud: HudStats) -> None:
        shown_time = hud.elapsed if hud.status in (RunStatus.PLAYING, RunStatus.WON) else None
        speed = max(0, round(hud.speed * self.hud_cfg.speed_display_scale))
        lines = [
            f"Time: {format_time(shown_time)}",
            f"Course: {round(hud.progress)}%",
            f"Speed: {speed}",
        ]
        if hud.best_time is not None:
            lines.append(f"Best: {format_time(hud.best_time)}")
        for idx, text in enumerate(lines):
            surf = self.font.render(text, True, self.cfg.ui_color)
            self.surface.blit(surf, (24, 24 + idx * 28))

    def _draw_overlay(self, status: RunStatus, hud: Optional[HudStats]) -> None:
        if status is RunStatus.PLAYING:
            return
        if status is RunStatus.INTRO:
            title = "Pogo Course"
            subtitle = "Lean with A/D or arrows, hop with Space. Press Space to start."
        elif status is RunStatus.WON:
            final = hud.final_time if hud is not None else None
            title = f"Cleared in {format_time(final)}"
            subtitle = "Press Space or R to ride again."
        else:
            title = "Wipeout!"
            subtitle = "Press Space or R to retry."

        width, height = self.surface.get_size()
        overlay = pygame.Surface((width, height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 140))
        self.surface.blit(overlay, (0, 0))
        title_surf = self.large_font.render(title, True, self.cfg.ui_color)
        self.surface.blit(title_surf, title_surf.get_rect(center=(width // 2, height // 2 - 20)))
        sub_surf = self.font.render(subtitle, True, self.cfg.ui_color)
        self.surface.blit(sub_surf, sub_surf.get_rect(center=(width // 2, height // 2 + 28)))


class PogoGame:
    """High-level game orchestration."""

    def __init__(self, config: Optional[GameConfig] = None, terrain: Optional[Terrain] = None) -> None:
        pygame.init()
        pygame.font.init()

        self.config = config or GameConfig()
        self.screen = pygame.display.set_mode(self.config.window_size, pygame.RESIZABLE)
        pygame.display.set_caption("Pogo Course")

        self.clock = pygame.time.Clock()
        self.simulation = Simulation(self.config, terrain)
        self.simulation.set_viewport(*self.screen.get_size())
        self.controls = KeyboardInput(self.simulation.input)
        self.hud = HudThrottle(self.config.hud)
        self.hud_stats: Optional[HudStats] = None
        self.renderer = Renderer(self.screen, self.config, self.simulation.terrain)
        self.running = False
        self.frames = 0

    def now(self) -> float:
        return pygame.time.get_ticks() / 1000.0

    def start_run(self) -> None:
        if self.simulation.start(self.now()):
            self.hud.reset()

    def stop(self) -> None:
        """Stop the loop after the current frame. Safe to call repeatedly."""
        if self.running:
            logger.debug("Frame loop stopping after %d frames", self.frames)
        self.running = False

    def run(self, max_frames: Optional[int] = None) -> None:
        self.running = True
        self.frames = 0
        logger.debug("Frame loop started")
        while self.running:
            self.clock.tick(self.config.target_fps)
            self._handle_events(pygame.event.get())
            if not self.running:
                break

            timestamp = self.now()
            self.simulation.frame(timestamp)
            stats = self.hud.poll(timestamp, self.simulation)
            if stats is not None:
                self.hud_stats = stats

            self.renderer.draw(self.simulation.snapshot(), self.hud_stats)
            pygame.display.flip()

            self.frames += 1
            if max_frames is not None and self.frames >= max_frames:
                self.stop()

    def shutdown(self) -> None:
        self.stop()
        pygame.quit()

    def _handle_events(self, events: list[pygame.event.Event]) -> None:
        for event in events:
            if event.type == pygame.QUIT:
                self.stop()
            elif event.type == pygame.VIDEORESIZE:
                self.simulation.set_viewport(event.w, event.h)
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self.stop()
            elif event.type in (pygame.KEYDOWN, pygame.KEYUP):
                playing = self.simulation.status is RunStatus.PLAYING
                if self.controls.handle_event(event, playing):
                    self.start_run()
                    if event.key in JUMP_KEYS:
                        # The key that started the run is still down.
                        self.controls.state.jump_held = True
