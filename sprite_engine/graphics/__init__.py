"""
Graphics module - render surface abstraction.

Exports:
- RenderSurface, draw_scope: Drawing capability and scoped state
- LinearGradient, RadialGradient: Gradient paints
- parse_color, darken_color, lighten_color: Color helpers
- PygameSurface: pygame backend
"""

from sprite_engine.graphics.surface import (
    RenderSurface,
    draw_scope,
    LinearGradient,
    RadialGradient,
    Paint,
    parse_color,
    darken_color,
    lighten_color,
)
from sprite_engine.graphics.pygame_surface import PygameSurface

__all__ = [
    "RenderSurface",
    "draw_scope",
    "LinearGradient",
    "RadialGradient",
    "Paint",
    "parse_color",
    "darken_color",
    "lighten_color",
    "PygameSurface",
]
