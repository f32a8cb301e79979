"""
Keyboard input plumbing.

Translates pygame key events into lower-cased key names and writes them
into the engine's key table. Arrow keys use browser-style names
("arrowleft") so bindings read the same on every backend.

Usage:
    handler = InputHandler(event_bus)
    handler.target = engine

    for event in pygame.event.get():
        handler.process_event(event)

    if engine.is_key_pressed("arrowleft"):
        ...
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol

import pygame

from sprite_engine.core.actions import action_for_key
from sprite_engine.core.events import EventBus


class InputEvent(Enum):
    """Input-specific events."""
    KEY_DOWN = "input.key_down"
    KEY_UP = "input.key_up"


class KeyTarget(Protocol):
    def set_input_key(self, key: str, pressed: bool) -> None:
        ...


# pygame key name -> engine key name
KEY_ALIASES: dict[str, str] = {
    "left": "arrowleft",
    "right": "arrowright",
    "up": "arrowup",
    "down": "arrowdown",
    "return": "enter",
    "space": " ",
}


def normalize_key_name(name: str) -> str:
    name = name.lower()
    return KEY_ALIASES.get(name, name)


class InputHandler:
    """
    Forwards key state to a target (normally the Engine).

    The target can be swapped at any time, e.g. when a session restarts
    with a fresh engine.
    """

    def __init__(self, event_bus: EventBus | None = None, target: KeyTarget | None = None):
        self.event_bus = event_bus
        self.target = target

    def process_event(self, event: pygame.event.Event) -> None:
        """Process a pygame event. Non-key events are ignored."""
        if event.type == pygame.KEYDOWN:
            self.set_key(pygame.key.name(event.key), True)
        elif event.type == pygame.KEYUP:
            self.set_key(pygame.key.name(event.key), False)

    def set_key(self, name: str, pressed: bool) -> None:
        """Record a key state change by name."""
        if not name:
            return

        key = normalize_key_name(name)
        if self.target is not None:
            self.target.set_input_key(key, pressed)

        if self.event_bus:
            self.event_bus.publish(
                InputEvent.KEY_DOWN if pressed else InputEvent.KEY_UP,
                key=key,
                action=action_for_key(key),
            )
