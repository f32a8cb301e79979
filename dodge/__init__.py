"""
Dodge - collect the coins, avoid the enemies.

Exports:
- SessionConfig: Gameplay settings
- GameSession, SessionState, GameEvent: Session state machine
"""

from dodge.config import SessionConfig
from dodge.session import GameSession, SessionState, GameEvent

__all__ = [
    "SessionConfig",
    "GameSession",
    "SessionState",
    "GameEvent",
]
