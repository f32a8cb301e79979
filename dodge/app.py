"""
Dodge application - wires a GameSession to a pygame window.

Run: python -m dodge [--seed N] [--win-score N]

Controls:
- Arrow keys / WASD: Move
- R: Play again (after the round ends)
- ESC: Quit
"""

from __future__ import annotations

import argparse
import logging
import random
from typing import Sequence

from sprite_engine.core.actions import Action
from sprite_engine.core.events import Event
from sprite_engine.core.game import Game, GameConfig
from sprite_engine.input.handler import InputEvent
from dodge.config import SessionConfig
from dodge.session import GameSession

logger = logging.getLogger(__name__)


class DodgeApp:
    """Owns the window and the current session."""

    def __init__(
        self,
        config: SessionConfig | None = None,
        seed: int | None = None,
        target_fps: int = 60,
    ):
        self.config = config or SessionConfig()
        self.game = Game(GameConfig(
            title="Dodge",
            width=self.config.width,
            height=self.config.height,
            target_fps=target_fps,
            max_timestep=self.config.max_timestep,
        ))
        self.session = GameSession(
            self.config,
            rng=random.Random(seed),
            event_bus=self.game.event_bus,
        )
        self.game.input.target = self.session.engine
        self.game.event_bus.subscribe(InputEvent.KEY_DOWN, self._on_key_down)

    def run(self) -> None:
        self.game.run(self.frame)

    def frame(self, dt: float) -> None:
        self.session.frame(dt, self.game.surface)

    def restart(self) -> None:
        self.session.reset()
        self.game.input.target = self.session.engine

    def _on_key_down(self, event: Event) -> None:
        action = event.get("action")
        if action == Action.QUIT:
            self.game.quit()
        elif action == Action.RESTART and self.session.is_terminal:
            logger.info("Restarting session")
            self.restart()


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Dodge the enemies, collect the coins.")
    parser.add_argument("--width", type=int, default=800)
    parser.add_argument("--height", type=int, default=600)
    parser.add_argument("--win-score", type=int, default=10)
    parser.add_argument("--seed", type=int, default=None, help="Random seed for a reproducible round")
    parser.add_argument("--fps", type=int, default=60)
    parser.add_argument("--log-level", default="INFO")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper())

    config = SessionConfig(width=args.width, height=args.height, win_score=args.win_score)
    app = DodgeApp(config, seed=args.seed, target_fps=args.fps)

    print("Controls: WASD/Arrows to move, R to play again, ESC to quit")
    app.run()
