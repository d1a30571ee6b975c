"""Keyboard input for the pogo course."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import pygame

LEAN_LEFT_KEYS = frozenset({pygame.K_LEFT, pygame.K_a})
LEAN_RIGHT_KEYS = frozenset({pygame.K_RIGHT, pygame.K_d})
JUMP_KEYS = frozenset({pygame.K_UP, pygame.K_w, pygame.K_SPACE})
RESTART_KEYS = frozenset({pygame.K_RETURN, pygame.K_KP_ENTER, pygame.K_r})


@dataclass
class InputState:
    """Snapshot of player intent consumed by the integrator."""

    left: bool = False
    right: bool = False
    jump_held: bool = False
    jump_pressed: bool = False  # edge: set on released -> held only

    @property
    def lean_intent(self) -> int:
        """Net lean signal: +1 right, -1 left, 0 for both or neither."""
        return int(self.right) - int(self.left)

    def consume_jump(self) -> bool:
        pressed = self.jump_pressed
        self.jump_pressed = False
        return pressed

    def clear(self) -> None:
        self.left = False
        self.right = False
        self.jump_held = False
        self.jump_pressed = False


class KeyboardInput:
    """Maps key-down/key-up events onto an InputState (arrows/WASD + Space)."""

    def __init__(self, state: Optional[InputState] = None) -> None:
        self.state = state if state is not None else InputState()

    def key_down(self, key: int, playing: bool = True) -> bool:
        """Record a key press. Returns True when the key asks for a (re)start."""
        if key in LEAN_LEFT_KEYS:
            self.state.left = True
        elif key in LEAN_RIGHT_KEYS:
            self.state.right = True
        elif key in JUMP_KEYS:
            # Held keys auto-repeat on some platforms; only the first press is an edge.
            if not self.state.jump_held:
                self.state.jump_pressed = True
            self.state.jump_held = True
            return not playing
        elif key in RESTART_KEYS:
            return True
        return False

    def key_up(self, key: int) -> None:
        if key in LEAN_LEFT_KEYS:
            self.state.left = False
        elif key in LEAN_RIGHT_KEYS:
            self.state.right = False
        elif key in JUMP_KEYS:
            self.state.jump_held = False

    def handle_event(self, event: pygame.event.Event, playing: bool = True) -> bool:
        if event.type == pygame.KEYDOWN:
            return self.key_down(event.key, playing)
        if event.type == pygame.KEYUP:
            self.key_up(event.key)
        return False

    def reset(self) -> None:
        """Forget every held key and pending edge."""
        self.state.clear()
