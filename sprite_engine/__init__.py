"""
Sprite Engine

A small real-time 2D engine: moving rectangles, AABB collision,
particle bursts, screen shake and a capped-timestep frame loop.

Quick Start:
    from sprite_engine import Engine, Player, Game, GameConfig

    engine = Engine(800, 600)
    player = engine.spawn_entity(Player(384, 300, 32, 32, "#D2B48C"))

    def on_frame(dt: float) -> None:
        engine.update(dt)
        engine.render(game.surface)

    game = Game(GameConfig(title="My Game", width=800, height=600))
    game.input.target = engine
    game.run(on_frame)
"""

__version__ = "0.1.0"

from sprite_engine.core import (
    Vector2,
    Entity,
    PlainEntity,
    Player,
    Coin,
    Enemy,
    EntityKind,
    RenderShape,
    Particle,
    Engine,
    EventBus,
    Event,
    EngineEvent,
    Action,
    Game,
    GameConfig,
    GameLoop,
)

from sprite_engine.input import InputHandler

__all__ = [
    "Vector2",
    "Entity",
    "PlainEntity",
    "Player",
    "Coin",
    "Enemy",
    "EntityKind",
    "RenderShape",
    "Particle",
    "Engine",
    "EventBus",
    "Event",
    "EngineEvent",
    "Action",
    "Game",
    "GameConfig",
    "GameLoop",
    "InputHandler",
]
