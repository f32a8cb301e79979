"""
2D vector value type.

Vectors are immutable - every operation returns a new instance.

Usage:
    pos = Vector2(10, 20)
    vel = Vector2(5, 0)
    pos = pos + vel * dt
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Vector2:
    """Immutable 2D vector."""
    x: float = 0.0
    y: float = 0.0

    def add(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def sub(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def mul(self, scalar: float) -> Vector2:
        return Vector2(self.x * scalar, self.y * scalar)

    def clone(self) -> Vector2:
        return Vector2(self.x, self.y)

    @property
    def is_zero(self) -> bool:
        """True if both components are zero."""
        return self.x == 0 and self.y == 0

    def __add__(self, other: Vector2) -> Vector2:
        return self.add(other)

    def __sub__(self, other: Vector2) -> Vector2:
        return self.sub(other)

    def __mul__(self, scalar: float) -> Vector2:
        return self.mul(scalar)

    __rmul__ = __mul__

    def __iter__(self):
        yield self.x
        yield self.y
