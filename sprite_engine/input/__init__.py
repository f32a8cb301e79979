"""Input handling module."""

from sprite_engine.input.handler import InputHandler, InputEvent, normalize_key_name

__all__ = [
    "InputHandler",
    "InputEvent",
    "normalize_key_name",
]
