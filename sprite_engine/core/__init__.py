"""
Core engine module.

Exports:
- Vector2: 2D vector value type
- Entity, PlainEntity, Player, Coin, Enemy: Entity kinds
- EntityKind, RenderShape, Bounds: Entity enums and AABB
- Particle: Visual effect particle
- Engine: Entity/particle container and simulator
- EventBus, Event, EngineEvent: Event system
- Action: Input actions
- Game, GameConfig, GameLoop, FrameClock, FrameScheduler: Frame loop
"""

from sprite_engine.core.vector import Vector2
from sprite_engine.core.entity import (
    Entity, PlainEntity, Player, Coin, Enemy, EntityKind, RenderShape, Bounds,
)
from sprite_engine.core.particle import Particle, GRAVITY
from sprite_engine.core.engine import Engine
from sprite_engine.core.events import EventBus, Event, EngineEvent
from sprite_engine.core.actions import Action, KEY_BINDINGS, keys_for
from sprite_engine.core.game import (
    Game,
    GameConfig,
    GameLoop,
    FrameClock,
    FrameScheduler,
    PygameFrameScheduler,
    clamp_timestep,
    MAX_TIMESTEP,
)

__all__ = [
    # Math
    "Vector2",
    # Entities
    "Entity",
    "PlainEntity",
    "Player",
    "Coin",
    "Enemy",
    "EntityKind",
    "RenderShape",
    "Bounds",
    "Particle",
    "GRAVITY",
    "Engine",
    # Events
    "EventBus",
    "Event",
    "EngineEvent",
    # Input
    "Action",
    "KEY_BINDINGS",
    "keys_for",
    # Loop
    "Game",
    "GameConfig",
    "GameLoop",
    "FrameClock",
    "FrameScheduler",
    "PygameFrameScheduler",
    "clamp_timestep",
    "MAX_TIMESTEP",
]
