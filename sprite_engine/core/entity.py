"""
Entity kinds - positioned, moving, colliding rectangles.

The set of kinds is closed: PlainEntity, Player, Coin and Enemy. Each kind
carries its own cosmetic animation and glow, chosen at construction. The
tag string ("player", "coin", ...) is kept for queries.

Usage:
    enemy = engine.spawn_entity(Enemy(100, 100, 24, 24, "#ff0101", speed=200))
    enemy.dir_x = -1

    if player.collides_with(enemy):
        ...
"""

from __future__ import annotations

import itertools
import math
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from sprite_engine.core.vector import Vector2
from sprite_engine.graphics import shapes
from sprite_engine.graphics.surface import RenderSurface, draw_scope


class EntityKind(Enum):
    """Behavioral role of an entity. Values are the query tags."""
    PLAIN = "sprite"
    PLAYER = "player"
    COIN = "coin"
    ENEMY = "enemy"


class RenderShape(Enum):
    """Draw procedure selector, independent of kind."""
    RECT = "rect"
    STAR = "star"
    RUNE = "rune"
    DOLLAR = "dollar"
    COIN = "coin"


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned rectangle (left, top, right, bottom)."""
    left: float
    top: float
    right: float
    bottom: float

    def overlaps(self, other: Bounds) -> bool:
        """Non-strict overlap: touching edges count."""
        return not (
            self.right < other.left
            or self.left > other.right
            or self.bottom < other.top
            or self.top > other.bottom
        )


class Entity:
    """
    Base entity.

    Physics is explicit Euler with the updated velocity:
        velocity += acceleration * dt
        position += velocity * dt

    Rotation and scale are cosmetic - bounds always use the unrotated,
    unscaled base rectangle.
    """

    kind: ClassVar[EntityKind] = EntityKind.PLAIN
    default_shape: ClassVar[RenderShape] = RenderShape.RECT
    glow_blur: ClassVar[float] = 0.0

    _id_counter = itertools.count(1)

    def __init__(
        self,
        x: float = 0.0,
        y: float = 0.0,
        width: float = 32.0,
        height: float = 32.0,
        color: str = "#ffffff",
        render_shape: RenderShape | None = None,
    ):
        if width <= 0 or height <= 0:
            raise ValueError(f"Entity size must be positive, got {width}x{height}")

        self._id = next(Entity._id_counter)
        self.position = Vector2(x, y)
        self.velocity = Vector2()
        self.acceleration = Vector2()
        self.width = width
        self.height = height
        self.color = color
        self.active = True
        self.render_shape = render_shape or self.default_shape

        # Animation phase
        self.rotation = 0.0
        self.scale = 1.0
        self.time = 0.0

    @property
    def id(self) -> int:
        return self._id

    @property
    def tag(self) -> str:
        """Query tag ("sprite", "player", "coin" or "enemy")."""
        return self.kind.value

    @property
    def center(self) -> Vector2:
        return Vector2(
            self.position.x + self.width / 2,
            self.position.y + self.height / 2,
        )

    def set_position(self, x: float, y: float) -> None:
        self.position = Vector2(x, y)

    def set_velocity(self, vx: float, vy: float) -> None:
        self.velocity = Vector2(vx, vy)

    # Simulation

    def update(self, dt: float) -> None:
        """Integrate one tick, advance time, then run the kind's animation."""
        self.velocity = self.velocity + self.acceleration * dt
        self.position = self.position + self.velocity * dt
        self.time += dt
        self.animate(dt)

    def animate(self, dt: float) -> None:
        """Kind-specific cosmetic motion. Must not touch physics state."""
        pass

    def bounds(self) -> Bounds:
        return Bounds(
            self.position.x,
            self.position.y,
            self.position.x + self.width,
            self.position.y + self.height,
        )

    def collides_with(self, other: Entity) -> bool:
        return self.bounds().overlaps(other.bounds())

    @property
    def glow_color(self) -> str | None:
        """Glow in the entity's own color, for kinds that glow at all."""
        return self.color if self.glow_blur > 0 else None

    # Rendering

    def render(self, surface: RenderSurface) -> None:
        """Draw in a private transform scope rotated/scaled about the center."""
        center = self.center
        with draw_scope(surface):
            surface.translate(center.x, center.y)
            surface.rotate(self.rotation)
            surface.scale(self.scale, self.scale)
            surface.translate(-center.x, -center.y)

            if self.glow_color:
                surface.set_glow(self.glow_color, self.glow_blur)

            self._draw_shape(surface)

    def _draw_shape(self, surface: RenderSurface) -> None:
        x, y = self.position
        center = self.center

        if self.render_shape == RenderShape.STAR:
            shapes.draw_star(surface, center.x, center.y, self.width / 2, self.color)
        elif self.render_shape == RenderShape.RUNE:
            shapes.draw_rune(surface, x, y, self.width, self.height, self.color)
        elif self.render_shape == RenderShape.DOLLAR:
            shapes.draw_dollar(surface, center.x, center.y, self.height, self.color)
        elif self.render_shape == RenderShape.COIN:
            shapes.draw_coin(surface, center.x, center.y, self.width / 2, self.color)
        else:
            shapes.draw_gradient_rect(surface, x, y, self.width, self.height, self.color)

    def __repr__(self) -> str:
        x, y = self.position
        return f"{type(self).__name__}(id={self._id}, pos=({x:.1f}, {y:.1f}))"


class PlainEntity(Entity):
    """Entity with no behavior beyond physics."""


class Player(Entity):
    """The controllable entity."""

    kind = EntityKind.PLAYER
    default_shape = RenderShape.RUNE
    glow_blur = 15.0

    def __init__(self, *args, speed: float = 300.0, **kwargs):
        super().__init__(*args, **kwargs)
        self.speed = speed


class Coin(Entity):
    """Collectible. Pulses and spins."""

    kind = EntityKind.COIN
    default_shape = RenderShape.COIN
    glow_blur = 20.0

    def animate(self, dt: float) -> None:
        self.scale = 1 + math.sin(self.time * 4) * 0.15
        self.rotation += dt * 2


class Enemy(Entity):
    """Bouncing hazard. Spins."""

    kind = EntityKind.ENEMY
    default_shape = RenderShape.STAR

    def __init__(
        self,
        *args,
        speed: float = 150.0,
        dir_x: int = 1,
        dir_y: int = 1,
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self.speed = speed
        self.dir_x = dir_x
        self.dir_y = dir_y

    def animate(self, dt: float) -> None:
        self.rotation += dt * 2
