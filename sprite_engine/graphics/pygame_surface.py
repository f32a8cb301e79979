"""
RenderSurface backed by a pygame Surface.

pygame.draw has no transform stack, so this backend keeps one: a 3x3
affine matrix (numpy) per saved state. Shapes are transformed to screen
space before drawing. Rectangles become polygons so rotation works;
circles keep their shape and use the matrix's uniform scale.

Translucency (global alpha, colors with alpha, glows) is drawn on a
per-shape SRCALPHA layer clipped to the shape's bounding box, then
blitted onto the target.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Callable, Sequence

import numpy as np
import pygame

from sprite_engine.graphics.surface import (
    RGBA,
    LinearGradient,
    Paint,
    RadialGradient,
    RenderSurface,
    parse_color,
)

GRADIENT_STEPS = 16
GLOW_ALPHA = 0.35


@dataclass(frozen=True)
class _State:
    matrix: np.ndarray
    alpha: float = 1.0
    glow_color: str | None = None
    glow_blur: float = 0.0
    # Glow is drawn once, behind the first shape after set_glow()
    glow_drawn: bool = False


def translation_matrix(dx: float, dy: float) -> np.ndarray:
    return np.array([
        [1.0, 0.0, dx],
        [0.0, 1.0, dy],
        [0.0, 0.0, 1.0],
    ])


def rotation_matrix(radians: float) -> np.ndarray:
    c = math.cos(radians)
    s = math.sin(radians)
    return np.array([
        [c, -s, 0.0],
        [s, c, 0.0],
        [0.0, 0.0, 1.0],
    ])


def scale_matrix(sx: float, sy: float) -> np.ndarray:
    return np.array([
        [sx, 0.0, 0.0],
        [0.0, sy, 0.0],
        [0.0, 0.0, 1.0],
    ])


class PygameSurface(RenderSurface):
    """
    Canvas-style drawing on a pygame Surface.

    Usage:
        surface = PygameSurface(pygame.display.get_surface())
        engine.render(surface)
        pygame.display.flip()
    """

    def __init__(self, target: pygame.Surface):
        self.target = target
        self._state = _State(matrix=np.identity(3))
        self._stack: list[_State] = []
        self._fonts: dict[tuple[int, bool], pygame.font.Font] = {}

    @property
    def matrix(self) -> np.ndarray:
        """Current local-to-screen transform (copy)."""
        return self._state.matrix.copy()

    @property
    def alpha(self) -> float:
        return self._state.alpha

    @property
    def depth(self) -> int:
        """Number of saved states."""
        return len(self._stack)

    # State stack

    def save(self) -> None:
        self._stack.append(self._state)

    def restore(self) -> None:
        if not self._stack:
            raise RuntimeError("restore() without matching save()")
        self._state = self._stack.pop()

    def translate(self, dx: float, dy: float) -> None:
        self._concat(translation_matrix(dx, dy))

    def rotate(self, radians: float) -> None:
        self._concat(rotation_matrix(radians))

    def scale(self, sx: float, sy: float) -> None:
        self._concat(scale_matrix(sx, sy))

    def set_alpha(self, alpha: float) -> None:
        self._state = replace(self._state, alpha=max(0.0, min(1.0, alpha)))

    def set_glow(self, color: str | None, blur: float = 0.0) -> None:
        self._state = replace(self._state, glow_color=color, glow_blur=blur, glow_drawn=False)

    def _concat(self, m: np.ndarray) -> None:
        self._state = replace(self._state, matrix=self._state.matrix @ m)

    # Coordinate helpers

    def transform_points(self, points: Sequence[tuple[float, float]]) -> list[tuple[float, float]]:
        """Map local points to screen space."""
        if not points:
            return []
        local = np.ones((3, len(points)))
        local[:2, :] = np.array(points, dtype=float).T
        screen = self._state.matrix @ local
        return [(float(x), float(y)) for x, y in zip(screen[0], screen[1])]

    def transform_length(self, length: float) -> float:
        """Scale a length by the transform's uniform scale factor."""
        det = abs(float(np.linalg.det(self._state.matrix[:2, :2])))
        return length * math.sqrt(det)

    # Primitives

    def fill_rect(self, x: float, y: float, width: float, height: float, paint: Paint) -> None:
        if isinstance(paint, LinearGradient):
            self._fill_rect_gradient(x, y, width, height, paint)
            return

        corners = [(x, y), (x + width, y), (x + width, y + height), (x, y + height)]
        self.fill_polygon(corners, paint)

    def fill_circle(self, cx: float, cy: float, radius: float, paint: Paint) -> None:
        (sx, sy), = self.transform_points([(cx, cy)])
        r = self.transform_length(radius)
        if r <= 0:
            return

        self._draw_glow(sx - r, sy - r, sx + r, sy + r)

        if isinstance(paint, RadialGradient):
            # Concentric rings from the outside in, drifting toward the focus
            (fx, fy), = self.transform_points([(paint.x0, paint.y0)])
            for step in range(GRADIENT_STEPS, 0, -1):
                t = step / GRADIENT_STEPS
                ring_x = fx + (sx - fx) * t
                ring_y = fy + (sy - fy) * t
                self._draw_circle(ring_x, ring_y, r * t, paint.color_at(t))
            return

        self._draw_circle(sx, sy, r, self._solid(paint))

    def fill_polygon(self, points: Sequence[tuple[float, float]], paint: Paint) -> None:
        if len(points) < 3:
            return

        screen = self.transform_points(points)
        xs = [p[0] for p in screen]
        ys = [p[1] for p in screen]
        self._draw_glow(min(xs), min(ys), max(xs), max(ys))

        if isinstance(paint, RadialGradient):
            # Nested copies shrinking toward the gradient center
            (gx, gy), = self.transform_points([(paint.x1, paint.y1)])
            for step in range(GRADIENT_STEPS, 0, -1):
                t = step / GRADIENT_STEPS
                scaled = [(gx + (px - gx) * t, gy + (py - gy) * t) for px, py in screen]
                self._draw_polygon(scaled, paint.color_at(t))
            return

        if isinstance(paint, LinearGradient):
            paint = paint.stops[0][1] if paint.stops else "#00000000"

        self._draw_polygon(screen, self._solid(paint))

    def stroke_line(
        self,
        x0: float,
        y0: float,
        x1: float,
        y1: float,
        color: str,
        line_width: float = 1.0,
    ) -> None:
        start, end = self.transform_points([(x0, y0), (x1, y1)])
        width = max(1, int(round(self.transform_length(line_width))))
        rgba = self._solid(color)
        self._draw_glow(
            min(start[0], end[0]), min(start[1], end[1]),
            max(start[0], end[0]), max(start[1], end[1]),
        )

        def draw(target: pygame.Surface, ox: float, oy: float) -> None:
            pygame.draw.line(
                target, rgba,
                (start[0] - ox, start[1] - oy),
                (end[0] - ox, end[1] - oy),
                width,
            )

        pad = width
        self._blend(
            draw,
            min(start[0], end[0]) - pad, min(start[1], end[1]) - pad,
            max(start[0], end[0]) + pad, max(start[1], end[1]) + pad,
            rgba[3],
        )

    def draw_text(
        self,
        text: str,
        x: float,
        y: float,
        color: str,
        size: int = 16,
        bold: bool = False,
        align: str = "left",
    ) -> None:
        font = self._font(size, bold)
        rgba = self._solid(color)
        rendered = font.render(text, True, rgba[:3])
        if rgba[3] < 255:
            rendered.set_alpha(rgba[3])

        (sx, sy), = self.transform_points([(x, y)])
        rect = rendered.get_rect()
        if align == "center":
            rect.center = (int(sx), int(sy))
        else:
            rect.bottomleft = (int(sx), int(sy))
        self.target.blit(rendered, rect)

    # Internals

    def _solid(self, paint: Paint) -> RGBA:
        if isinstance(paint, (LinearGradient, RadialGradient)):
            raise TypeError(f"Gradient not supported here: {type(paint).__name__}")
        if not isinstance(paint, str):
            raise TypeError(f"Unsupported paint: {paint!r}")

        r, g, b, a = parse_color(paint)
        return (r, g, b, int(round(a * self._state.alpha)))

    def _fill_rect_gradient(
        self, x: float, y: float, width: float, height: float, gradient: LinearGradient
    ) -> None:
        # Vertical strips colored by their center's projection on the gradient axis
        corners = self.transform_points(
            [(x, y), (x + width, y), (x + width, y + height), (x, y + height)]
        )
        self._draw_glow(
            min(p[0] for p in corners), min(p[1] for p in corners),
            max(p[0] for p in corners), max(p[1] for p in corners),
        )

        dx = gradient.x1 - gradient.x0
        dy = gradient.y1 - gradient.y0
        length_sq = dx * dx + dy * dy or 1.0

        strip = width / GRADIENT_STEPS
        for i in range(GRADIENT_STEPS):
            sx = x + i * strip
            mid_x = sx + strip / 2
            mid_y = y + height / 2
            t = ((mid_x - gradient.x0) * dx + (mid_y - gradient.y0) * dy) / length_sq
            r, g, b, a = gradient.color_at(t)
            color = f"#{r:02x}{g:02x}{b:02x}{a:02x}"
            self.fill_polygon(
                [(sx, y), (sx + strip, y), (sx + strip, y + height), (sx, y + height)],
                color,
            )

    def _draw_glow(self, left: float, top: float, right: float, bottom: float) -> None:
        state = self._state
        if not state.glow_color or state.glow_blur <= 0 or state.glow_drawn:
            return
        self._state = replace(state, glow_drawn=True)

        r, g, b, a = parse_color(state.glow_color)
        alpha = int(a * GLOW_ALPHA * state.alpha)
        radius = max(right - left, bottom - top) / 2 + state.glow_blur
        self._draw_circle((left + right) / 2, (top + bottom) / 2, radius, (r, g, b, alpha))

    def _draw_circle(self, sx: float, sy: float, r: float, rgba: RGBA) -> None:
        def draw(target: pygame.Surface, ox: float, oy: float) -> None:
            pygame.draw.circle(target, rgba, (sx - ox, sy - oy), r)

        self._blend(draw, sx - r, sy - r, sx + r, sy + r, rgba[3])

    def _draw_polygon(self, screen_points: Sequence[tuple[float, float]], rgba: RGBA) -> None:
        xs = [p[0] for p in screen_points]
        ys = [p[1] for p in screen_points]

        def draw(target: pygame.Surface, ox: float, oy: float) -> None:
            pygame.draw.polygon(target, rgba, [(px - ox, py - oy) for px, py in screen_points])

        self._blend(draw, min(xs), min(ys), max(xs), max(ys), rgba[3])

    def _blend(
        self,
        draw: Callable[[pygame.Surface, float, float], None],
        left: float,
        top: float,
        right: float,
        bottom: float,
        alpha: int,
    ) -> None:
        """Draw opaque shapes directly, translucent ones through a layer."""
        if alpha <= 0:
            return
        if alpha >= 255:
            draw(self.target, 0.0, 0.0)
            return

        ox = math.floor(left)
        oy = math.floor(top)
        w = max(1, math.ceil(right) - ox + 1)
        h = max(1, math.ceil(bottom) - oy + 1)

        layer = pygame.Surface((w, h), pygame.SRCALPHA)
        draw(layer, ox, oy)
        self.target.blit(layer, (ox, oy))

    def _font(self, size: int, bold: bool) -> pygame.font.Font:
        key = (size, bold)
        if key not in self._fonts:
            if not pygame.font.get_init():
                pygame.font.init()
            self._fonts[key] = pygame.font.SysFont(None, size, bold=bold)
        return self._fonts[key]
