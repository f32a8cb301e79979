"""
Entity factories for Dodge.

Every random choice goes through the rng argument so a seeded session
reproduces exactly.
"""

from __future__ import annotations

import logging
import random

from sprite_engine.core.engine import Engine
from sprite_engine.core.entity import Coin, Enemy, Player
from dodge.config import SessionConfig

logger = logging.getLogger(__name__)


def spawn_player(engine: Engine, config: SessionConfig) -> Player:
    """Player centered horizontally, at mid height (kept inside the field)."""
    size = config.player_size
    player = Player(
        engine.width / 2 - size / 2,
        min(engine.height / 2, engine.height - size),
        size,
        size,
        config.player_color,
        speed=config.player_speed,
    )
    return engine.spawn_entity(player)


def spawn_coin(engine: Engine, config: SessionConfig, rng: random.Random) -> Coin:
    """Coin at a uniform random position fully inside the field."""
    size = config.coin_size
    coin = Coin(
        rng.random() * (engine.width - size),
        rng.random() * (engine.height - size),
        size,
        size,
        config.coin_color,
    )
    logger.debug(f"Coin spawned at ({coin.position.x:.0f}, {coin.position.y:.0f})")
    return engine.spawn_entity(coin)


def spawn_enemy(engine: Engine, config: SessionConfig, rng: random.Random) -> Enemy:
    """Enemy at a random position with random speed and diagonal heading."""
    size = config.enemy_size
    x = rng.random() * (engine.width - size)
    y = rng.random() * (engine.height - size)
    enemy = Enemy(
        x,
        y,
        size,
        size,
        config.enemy_color,
        speed=config.enemy_speed_min + rng.random() * config.enemy_speed_range,
        dir_x=1 if rng.random() > 0.5 else -1,
        dir_y=1 if rng.random() > 0.5 else -1,
    )
    logger.debug(f"Enemy spawned at ({x:.0f}, {y:.0f}) speed {enemy.speed:.0f}")
    return engine.spawn_entity(enemy)
