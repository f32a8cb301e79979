"""
Input action definitions.

Actions abstract key names into semantic actions. Key names are the
lower-cased names stored in the engine's key table ("arrowleft", "a",
"escape", ...).

Usage:
    if engine.any_key_pressed(KEY_BINDINGS[Action.MOVE_LEFT]):
        ...
"""

from enum import Enum, auto


class Action(Enum):
    """Semantic input actions."""

    # Movement
    MOVE_UP = auto()
    MOVE_DOWN = auto()
    MOVE_LEFT = auto()
    MOVE_RIGHT = auto()

    # System
    RESTART = auto()
    QUIT = auto()


KEY_BINDINGS: dict[Action, list[str]] = {
    Action.MOVE_UP: ["arrowup", "w"],
    Action.MOVE_DOWN: ["arrowdown", "s"],
    Action.MOVE_LEFT: ["arrowleft", "a"],
    Action.MOVE_RIGHT: ["arrowright", "d"],
    Action.RESTART: ["r"],
    Action.QUIT: ["escape"],
}


def keys_for(action: Action) -> list[str]:
    """Key names bound to an action (empty if unbound)."""
    return list(KEY_BINDINGS.get(action, []))


def action_for_key(key: str) -> Action | None:
    """First action bound to a key name, or None."""
    key = key.lower()
    for action, keys in KEY_BINDINGS.items():
        if key in keys:
            return action
    return None
