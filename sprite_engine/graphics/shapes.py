"""
Draw procedures for entity render shapes.

All procedures draw in the surface's current transform; callers own the
save/restore scope.
"""

from __future__ import annotations

import math

from sprite_engine.graphics.surface import (
    LinearGradient,
    RadialGradient,
    RenderSurface,
    darken_color,
    lighten_color,
)

STAR_POINTS = 6
STAR_INNER_RATIO = 0.5


def star_points(
    cx: float,
    cy: float,
    outer: float,
    inner_ratio: float = STAR_INNER_RATIO,
    points: int = STAR_POINTS,
) -> list[tuple[float, float]]:
    """
    Boundary of a star with alternating outer/inner radii.

    Returns 2 * points vertices, starting straight up and stepping
    pi / points radians (30 degrees for a 6-pointed star).
    """
    inner = outer * inner_ratio
    result = []
    for i in range(points * 2):
        angle = i * math.pi / points - math.pi / 2
        r = outer if i % 2 == 0 else inner
        result.append((cx + r * math.cos(angle), cy + r * math.sin(angle)))
    return result


def draw_gradient_rect(
    surface: RenderSurface, x: float, y: float, width: float, height: float, color: str
) -> None:
    """Rectangle shaded diagonally from color to a 30% darker tone."""
    gradient = LinearGradient(
        x, y, x + width, y + height,
        stops=((0.0, color), (1.0, darken_color(color, 0.3))),
    )
    surface.fill_rect(x, y, width, height, gradient)


def draw_star(surface: RenderSurface, cx: float, cy: float, radius: float, color: str) -> None:
    """Six-pointed star with a radial shine."""
    gradient = RadialGradient(
        cx, cy, 0.0, cx, cy, radius,
        stops=((0.0, lighten_color(color, 0.4)), (0.5, color), (1.0, darken_color(color, 0.33))),
    )
    surface.fill_polygon(star_points(cx, cy, radius), gradient)


def draw_rune(
    surface: RenderSurface, x: float, y: float, width: float, height: float, color: str
) -> None:
    """Algiz rune: vertical stem with two branches rising from the middle."""
    line_width = max(2.0, width * 0.12)
    mid_x = x + width * 0.5
    mid_y = y + height * 0.5

    surface.stroke_line(mid_x, y + height * 0.10, mid_x, y + height * 0.90, color, line_width)
    surface.stroke_line(mid_x, mid_y, x + width * 0.15, y + height * 0.20, color, line_width)
    surface.stroke_line(mid_x, mid_y, x + width * 0.85, y + height * 0.20, color, line_width)


def draw_coin(surface: RenderSurface, cx: float, cy: float, radius: float, color: str) -> None:
    """Shiny disc: soft halo, radial body, and a white highlight."""
    r, g, b = _rgb_hex(color)
    halo = RadialGradient(
        cx, cy, 0.0, cx, cy, radius * 1.5,
        stops=((0.0, f"#{r}{g}{b}4d"), (1.0, f"#{r}{g}{b}00")),
    )
    surface.fill_circle(cx, cy, radius * 1.5, halo)

    body = RadialGradient(
        cx - radius * 0.3, cy - radius * 0.3, 0.0, cx, cy, radius,
        stops=((0.0, lighten_color(color, 0.55)), (0.5, color), (1.0, darken_color(color, 0.6))),
    )
    surface.fill_circle(cx, cy, radius, body)

    surface.fill_circle(cx - radius * 0.3, cy - radius * 0.3, radius * 0.3, "#ffffff99")


def draw_dollar(surface: RenderSurface, cx: float, cy: float, height: float, color: str) -> None:
    """Bold dollar glyph centered on (cx, cy)."""
    size = int(max(14, height * 0.9))
    surface.draw_text("$", cx, cy, color, size=size, bold=True, align="center")


def _rgb_hex(color: str) -> tuple[str, str, str]:
    hex_color = darken_color(color, 0.0)
    return hex_color[1:3], hex_color[3:5], hex_color[5:7]
