"""
Short-lived visual particles.

Particles fall under constant gravity and fade out linearly over their
lifetime. They never take part in collision.
"""

from __future__ import annotations

from dataclasses import dataclass

from sprite_engine.graphics.surface import RenderSurface, draw_scope

GRAVITY = 200.0  # pixels/s^2, +y is down


@dataclass
class Particle:
    """Single particle instance."""
    x: float
    y: float
    vx: float
    vy: float
    color: str
    life: float
    max_life: float
    size: float

    def __post_init__(self) -> None:
        if self.max_life <= 0:
            raise ValueError(f"Particle max_life must be positive, got {self.max_life}")

    @property
    def alive(self) -> bool:
        return self.life > 0

    @property
    def alpha(self) -> float:
        """Opacity, 1.0 at spawn fading linearly to 0."""
        return max(0.0, min(1.0, self.life / self.max_life))

    def update(self, dt: float) -> None:
        # Position uses the velocity from before gravity is applied
        self.x += self.vx * dt
        self.y += self.vy * dt
        self.vy += GRAVITY * dt
        self.life -= dt

    def render(self, surface: RenderSurface) -> None:
        with draw_scope(surface):
            surface.set_alpha(self.alpha)
            surface.fill_circle(self.x, self.y, self.size, self.color)
