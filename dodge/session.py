"""
Dodge game session - the per-frame state machine.

States:
    PLAYING -> GAME_OVER   (player touched an enemy)
    PLAYING -> WON         (score reached win_score)

Both end states are terminal: the simulation freezes, rendering goes on
with an overlay. reset() starts a fresh session.

Each step(dt) while playing:
    1. Player velocity from held keys
    2. Engine update (physics, particles, shake)
    3. Trail particle (random, cosmetic)
    4. Clamp player into the field
    5. Enemy steering and wall bounce
    6. Coin pickups, scoring, replacement coins
    7. Enemy hits

Usage:
    session = GameSession(SessionConfig(), rng=random.Random(1))
    session.engine.set_input_key("arrowright", True)
    session.frame(dt, surface)
"""

from __future__ import annotations

import logging
import random
from enum import Enum, auto

from sprite_engine.core.actions import Action, keys_for
from sprite_engine.core.engine import Engine
from sprite_engine.core.entity import Coin, Enemy, EntityKind, Player
from sprite_engine.core.events import EventBus
from sprite_engine.core.game import clamp_timestep
from sprite_engine.graphics.surface import RenderSurface
from dodge import hud
from dodge.config import SessionConfig
from dodge.spawner import spawn_coin, spawn_enemy, spawn_player

logger = logging.getLogger(__name__)


class SessionState(Enum):
    PLAYING = auto()
    GAME_OVER = auto()
    WON = auto()


class GameEvent(Enum):
    """Gameplay events published on the session's event bus."""
    SESSION_STARTED = auto()
    COIN_COLLECTED = auto()
    PLAYER_HIT = auto()
    SESSION_WON = auto()
    SESSION_LOST = auto()


class GameSession:
    """
    One round of Dodge.

    Attributes:
        config: Gameplay settings
        rng: Random source shared with the engine
        events: Event bus for GameEvent notifications
        engine: The current session's engine (replaced by reset())
        score: Coins collected this session
        state: Current SessionState
    """

    def __init__(
        self,
        config: SessionConfig | None = None,
        rng: random.Random | None = None,
        event_bus: EventBus | None = None,
    ):
        self.config = config or SessionConfig()
        self.rng = rng or random.Random()
        self.events = event_bus or EventBus()

        self.engine: Engine
        self.player: Player
        self.score = 0
        self.state = SessionState.PLAYING
        self.reset()

    # State

    @property
    def game_over(self) -> bool:
        return self.state == SessionState.GAME_OVER

    @property
    def won(self) -> bool:
        return self.state == SessionState.WON

    @property
    def is_terminal(self) -> bool:
        return self.state != SessionState.PLAYING

    def reset(self) -> None:
        """Start over with a fresh engine, score 0 and new entities."""
        config = self.config
        self.engine = Engine(config.width, config.height, rng=self.rng)
        self.score = 0
        self.state = SessionState.PLAYING

        self.player = spawn_player(self.engine, config)
        for _ in range(config.coin_count):
            spawn_coin(self.engine, config, self.rng)
        for _ in range(config.enemy_count):
            spawn_enemy(self.engine, config, self.rng)

        self._check_player_invariant()
        logger.info(
            f"Session started: {config.coin_count} coins, "
            f"{config.enemy_count} enemies, win at {config.win_score}"
        )
        self.events.publish(GameEvent.SESSION_STARTED, engine=self.engine)

    # Frame

    def frame(self, dt: float, surface: RenderSurface) -> None:
        """Advance one frame and draw it."""
        self.step(dt)
        self.render(surface)

    def step(self, dt: float) -> None:
        """Advance gameplay by dt (clamped). No-op once terminal."""
        if self.is_terminal:
            return

        dt = clamp_timestep(dt, self.config.max_timestep)
        engine = self.engine
        player = self.player

        self._steer_player()
        engine.update(dt)
        self._emit_trail()
        self._clamp_player()

        # Snapshot before any removal this frame
        enemies = engine.query_by_tag(EntityKind.ENEMY)
        for enemy in enemies:
            self._steer_enemy(enemy)

        for coin in engine.query_by_tag(EntityKind.COIN):
            if player.collides_with(coin):
                self._collect(coin)
                if self.won:
                    break

        if self.won:
            return

        for enemy in enemies:
            if player.collides_with(enemy):
                self._hit(enemy)

    def render(self, surface: RenderSurface) -> None:
        """Draw the field, HUD and (when terminal) the overlay."""
        engine = self.engine
        engine.render(surface)
        hud.draw_hud(
            surface,
            self.score,
            self.config.win_score,
            len(engine.query_by_tag(EntityKind.COIN)),
            len(engine.query_by_tag(EntityKind.ENEMY)),
        )
        if self.is_terminal:
            hud.draw_overlay(surface, engine.width, engine.height, won=self.won)

    # Steps

    def _steer_player(self) -> None:
        player = self.player
        vx = self._axis(Action.MOVE_LEFT, Action.MOVE_RIGHT) * player.speed
        vy = self._axis(Action.MOVE_UP, Action.MOVE_DOWN) * player.speed
        player.set_velocity(vx, vy)

    def _axis(self, negative: Action, positive: Action) -> int:
        if self.engine.any_key_pressed(keys_for(negative)):
            return -1
        if self.engine.any_key_pressed(keys_for(positive)):
            return 1
        return 0

    def _emit_trail(self) -> None:
        player = self.player
        if self.rng.random() >= self.config.trail_chance or player.velocity.is_zero:
            return

        spread = self.config.trail_spread
        center = player.center
        self.engine.emit_particle(
            center.x,
            center.y,
            (self.rng.random() - 0.5) * spread,
            (self.rng.random() - 0.5) * spread,
            player.color,
            self.config.trail_life,
        )

    def _clamp_player(self) -> None:
        player = self.player
        engine = self.engine
        x = max(0.0, min(player.position.x, engine.width - player.width))
        y = max(0.0, min(player.position.y, engine.height - player.height))
        player.set_position(x, y)

    def _steer_enemy(self, enemy: Enemy) -> None:
        engine = self.engine
        enemy.set_velocity(enemy.dir_x * enemy.speed, enemy.dir_y * enemy.speed)

        x, y = enemy.position
        if x <= 0 or x + enemy.width >= engine.width:
            enemy.dir_x *= -1
        if y <= 0 or y + enemy.height >= engine.height:
            enemy.dir_y *= -1

    def _collect(self, coin: Coin) -> None:
        config = self.config
        engine = self.engine

        center = coin.center
        engine.spawn_particle_burst(center.x, center.y, coin.color, config.coin_burst)
        engine.trigger_shake(config.coin_shake)
        engine.remove_entity(coin)

        self.score += 1
        logger.debug(f"Coin collected, score {self.score}/{config.win_score}")
        self.events.publish(GameEvent.COIN_COLLECTED, coin=coin, score=self.score)

        if self.score >= config.win_score:
            self.state = SessionState.WON
            logger.info(f"Session won with score {self.score}")
            self.events.publish(GameEvent.SESSION_WON, score=self.score)
        else:
            spawn_coin(engine, config, self.rng)

    def _hit(self, enemy: Enemy) -> None:
        config = self.config
        engine = self.engine

        center = self.player.center
        engine.spawn_particle_burst(center.x, center.y, enemy.color, config.enemy_burst)
        engine.trigger_shake(config.enemy_shake)
        self.events.publish(GameEvent.PLAYER_HIT, enemy=enemy, score=self.score)

        if not self.game_over:
            self.state = SessionState.GAME_OVER
            logger.info(f"Game over with score {self.score}")
            self.events.publish(GameEvent.SESSION_LOST, score=self.score)

    def _check_player_invariant(self) -> None:
        players = [e for e in self.engine.query_by_tag(EntityKind.PLAYER) if e.active]
        assert len(players) == 1, f"Expected exactly one player, found {len(players)}"
