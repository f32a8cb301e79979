"""
Engine - owns entities, particles, key state and screen shake.

The engine advances physics and effects but knows nothing about game
rules. Game code reads input through is_key_pressed(), assigns
velocities, calls update(dt), resolves collisions using query_by_tag(),
and finally calls render(surface).

Usage:
    engine = Engine(800, 600, rng=random.Random(42))
    player = engine.spawn_entity(Player(384, 300, 32, 32, "#D2B48C"))

    engine.update(dt)
    for coin in engine.query_by_tag("coin"):
        if player.collides_with(coin):
            engine.remove_entity(coin)
            engine.spawn_particle_burst(*coin.center, coin.color, 15)

    engine.render(surface)
"""

from __future__ import annotations

import math
import random
from typing import Sequence

from sprite_engine.core.entity import Entity, EntityKind
from sprite_engine.core.particle import Particle
from sprite_engine.graphics.surface import RenderSurface, draw_scope

SHAKE_DECAY = 30.0  # intensity units per second

BURST_MIN_SPEED = 100.0
BURST_SPEED_RANGE = 100.0
BURST_LIFT = 50.0
BURST_MIN_LIFE = 0.5
BURST_LIFE_RANGE = 0.5

PARTICLE_MIN_SIZE = 2.0
PARTICLE_SIZE_RANGE = 4.0

BACKGROUND_COLOR = "#1a1a2e"
GRID_COLOR = "#6464961a"
GRID_SIZE = 40


class Engine:
    """
    Container and simulator for one game session.

    Attributes:
        width: Playfield width in pixels
        height: Playfield height in pixels
        entities: Live entities in insertion (draw) order
        particles: Live particles in insertion (draw) order
        shake: Current screen shake intensity (>= 0)
        rng: Random source for simulation effects
    """

    def __init__(
        self,
        width: float = 800,
        height: float = 600,
        rng: random.Random | None = None,
        render_rng: random.Random | None = None,
    ):
        self.width = width
        self.height = height
        self.rng = rng or random.Random()
        # Render jitter has its own source so drawing never advances self.rng
        self._render_rng = render_rng or random.Random()

        self.entities: list[Entity] = []
        self.particles: list[Particle] = []
        self.shake = 0.0
        self._keys: dict[str, bool] = {}

    # Entities

    def spawn_entity(self, entity: Entity) -> Entity:
        """Add an entity and return it for further configuration."""
        self.entities.append(entity)
        return entity

    def remove_entity(self, entity: Entity) -> None:
        """Remove the first occurrence of entity. No-op if absent."""
        for i, e in enumerate(self.entities):
            if e is entity:
                del self.entities[i]
                return

    def query_by_tag(self, tag: EntityKind | str) -> list[Entity]:
        """
        Snapshot of entities with the given tag.

        The returned list is independent of the engine's collection, but
        entities in it may have been removed by the time it is used.
        """
        if isinstance(tag, EntityKind):
            tag = tag.value
        return [e for e in self.entities if e.tag == tag]

    def clear(self) -> None:
        """Drop all entities and particles."""
        self.entities = []
        self.particles = []

    # Particles

    def add_particle(self, particle: Particle) -> Particle:
        self.particles.append(particle)
        return particle

    def emit_particle(
        self,
        x: float,
        y: float,
        vx: float,
        vy: float,
        color: str,
        life: float = 1.0,
    ) -> Particle:
        """Create a particle with a randomized size."""
        size = PARTICLE_MIN_SIZE + self.rng.random() * PARTICLE_SIZE_RANGE
        return self.add_particle(Particle(
            x=x, y=y,
            vx=vx, vy=vy,
            color=color,
            life=life,
            max_life=life,
            size=size,
        ))

    def spawn_particle_burst(self, x: float, y: float, color: str, count: int = 10) -> None:
        """
        Emit count particles evenly around a circle, biased upward.

        Speeds are uniform in [100, 200) and lifetimes in [0.5, 1.0).
        """
        for i in range(count):
            angle = math.pi * 2 * i / count
            speed = BURST_MIN_SPEED + self.rng.random() * BURST_SPEED_RANGE
            vx = math.cos(angle) * speed
            vy = math.sin(angle) * speed - BURST_LIFT
            life = BURST_MIN_LIFE + self.rng.random() * BURST_LIFE_RANGE
            self.emit_particle(x, y, vx, vy, color, life)

    # Effects

    def trigger_shake(self, intensity: float = 10.0) -> None:
        """Set shake intensity. Overwrites, never accumulates."""
        self.shake = intensity

    # Input

    def set_input_key(self, key: str, pressed: bool) -> None:
        self._keys[key.lower()] = pressed

    def is_key_pressed(self, key: str) -> bool:
        return self._keys.get(key.lower(), False)

    def any_key_pressed(self, keys: Sequence[str]) -> bool:
        return any(self.is_key_pressed(k) for k in keys)

    # Frame

    def update(self, dt: float) -> None:
        """Integrate entities, age particles, decay shake."""
        for entity in self.entities:
            if entity.active:
                entity.update(dt)

        for particle in self.particles:
            particle.update(dt)
        self.particles = [p for p in self.particles if p.alive]

        if self.shake > 0:
            self.shake = max(0.0, self.shake - dt * SHAKE_DECAY)

    def render(self, surface: RenderSurface) -> None:
        """Draw background, entities, then particles. Does not mutate state."""
        with draw_scope(surface):
            if self.shake > 0:
                dx = (self._render_rng.random() - 0.5) * self.shake
                dy = (self._render_rng.random() - 0.5) * self.shake
                surface.translate(dx, dy)

            surface.fill_rect(0, 0, self.width, self.height, BACKGROUND_COLOR)
            self._render_grid(surface)

            for entity in self.entities:
                if entity.active:
                    entity.render(surface)

            for particle in self.particles:
                particle.render(surface)

    def _render_grid(self, surface: RenderSurface) -> None:
        for x in range(0, int(self.width), GRID_SIZE):
            surface.stroke_line(x, 0, x, self.height, GRID_COLOR)
        for y in range(0, int(self.height), GRID_SIZE):
            surface.stroke_line(0, y, self.width, y, GRID_COLOR)
