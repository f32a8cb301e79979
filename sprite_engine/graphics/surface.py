"""
Abstract render surface.

The engine draws through this interface only, so simulation code never
depends on a concrete rendering API. The pygame implementation lives in
sprite_engine.graphics.pygame_surface.

Drawing state (transform, alpha, glow) is a stack. Always pair save() with
restore(), preferably through draw_scope():

    with draw_scope(surface):
        surface.translate(cx, cy)
        surface.rotate(angle)
        surface.fill_rect(-w / 2, -h / 2, w, h, "#ff0000")
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator, Sequence, Union

RGBA = tuple[int, int, int, int]
ColorStop = tuple[float, str]


@dataclass(frozen=True)
class LinearGradient:
    """Gradient along the line (x0, y0) -> (x1, y1)."""
    x0: float
    y0: float
    x1: float
    y1: float
    stops: tuple[ColorStop, ...] = field(default_factory=tuple)

    def color_at(self, t: float) -> RGBA:
        return interpolate_stops(self.stops, t)


@dataclass(frozen=True)
class RadialGradient:
    """
    Gradient between two circles.

    The inner circle (x0, y0, r0) is offset for highlights; the outer
    circle (x1, y1, r1) bounds the fill.
    """
    x0: float
    y0: float
    r0: float
    x1: float
    y1: float
    r1: float
    stops: tuple[ColorStop, ...] = field(default_factory=tuple)

    def color_at(self, t: float) -> RGBA:
        return interpolate_stops(self.stops, t)


Paint = Union[str, LinearGradient, RadialGradient]


def parse_color(color: str | Sequence[int]) -> RGBA:
    """
    Parse a color into an (r, g, b, a) tuple.

    Accepts "#rgb", "#rrggbb", "#rrggbbaa" and 3/4-tuples.

    Raises:
        ValueError: If the string is not a hex color
    """
    if not isinstance(color, str):
        values = tuple(int(c) for c in color)
        if len(values) == 3:
            return (values[0], values[1], values[2], 255)
        if len(values) == 4:
            return values  # type: ignore[return-value]
        raise ValueError(f"Color tuple must have 3 or 4 values: {color!r}")

    text = color.strip().lstrip('#')
    if len(text) == 3:
        text = ''.join(c * 2 for c in text)
    if len(text) == 6:
        text += 'ff'
    if len(text) != 8:
        raise ValueError(f"Unsupported color: {color!r}")

    try:
        value = int(text, 16)
    except ValueError:
        raise ValueError(f"Unsupported color: {color!r}") from None

    return (
        (value >> 24) & 0xFF,
        (value >> 16) & 0xFF,
        (value >> 8) & 0xFF,
        value & 0xFF,
    )


def to_hex(rgba: RGBA) -> str:
    """Format an RGBA tuple as #rrggbb (or #rrggbbaa if translucent)."""
    r, g, b, a = rgba
    if a == 255:
        return f"#{r:02x}{g:02x}{b:02x}"
    return f"#{r:02x}{g:02x}{b:02x}{a:02x}"


def darken_color(color: str, amount: float) -> str:
    """Scale RGB channels by (1 - amount). Alpha is kept."""
    r, g, b, a = parse_color(color)
    factor = max(0.0, 1.0 - amount)
    return to_hex((int(r * factor), int(g * factor), int(b * factor), a))


def lighten_color(color: str, amount: float) -> str:
    """Move RGB channels toward white by amount. Alpha is kept."""
    r, g, b, a = parse_color(color)
    k = max(0.0, min(1.0, amount))
    return to_hex((int(r + (255 - r) * k), int(g + (255 - g) * k), int(b + (255 - b) * k), a))


def interpolate_stops(stops: Sequence[ColorStop], t: float) -> RGBA:
    """Linear interpolation across sorted (offset, color) stops."""
    if not stops:
        return (0, 0, 0, 0)

    t = max(0.0, min(1.0, t))
    parsed = [(offset, parse_color(color)) for offset, color in stops]

    if t <= parsed[0][0]:
        return parsed[0][1]

    for (o0, c0), (o1, c1) in zip(parsed, parsed[1:]):
        if t <= o1:
            span = o1 - o0
            k = (t - o0) / span if span > 0 else 1.0
            return tuple(  # type: ignore[return-value]
                int(round(a + (b - a) * k)) for a, b in zip(c0, c1)
            )

    return parsed[-1][1]


class RenderSurface(ABC):
    """
    2D drawing capability used by entities, particles and the HUD.

    Coordinates are in pixels, origin top-left, y down. All drawing
    operations are affected by the current transform and alpha.
    """

    # State stack

    @abstractmethod
    def save(self) -> None:
        """Push the current transform, alpha and glow."""

    @abstractmethod
    def restore(self) -> None:
        """Pop the state pushed by the matching save()."""

    @abstractmethod
    def translate(self, dx: float, dy: float) -> None:
        ...

    @abstractmethod
    def rotate(self, radians: float) -> None:
        ...

    @abstractmethod
    def scale(self, sx: float, sy: float) -> None:
        ...

    @abstractmethod
    def set_alpha(self, alpha: float) -> None:
        """Set global opacity (0-1) for subsequent draws."""

    @abstractmethod
    def set_glow(self, color: str | None, blur: float = 0.0) -> None:
        """Set (or clear, with None) the glow drawn behind filled shapes."""

    # Primitives

    @abstractmethod
    def fill_rect(self, x: float, y: float, width: float, height: float, paint: Paint) -> None:
        ...

    @abstractmethod
    def fill_circle(self, cx: float, cy: float, radius: float, paint: Paint) -> None:
        ...

    @abstractmethod
    def fill_polygon(self, points: Sequence[tuple[float, float]], paint: Paint) -> None:
        ...

    @abstractmethod
    def stroke_line(
        self,
        x0: float,
        y0: float,
        x1: float,
        y1: float,
        color: str,
        line_width: float = 1.0,
    ) -> None:
        ...

    @abstractmethod
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
        """
        Draw text.

        Args:
            align: "left" anchors (x, y) at the baseline start,
                   "center" centers the text on (x, y)
        """


@contextmanager
def draw_scope(surface: RenderSurface) -> Iterator[RenderSurface]:
    """Save surface state, and restore it however the block exits."""
    surface.save()
    try:
        yield surface
    finally:
        surface.restore()
