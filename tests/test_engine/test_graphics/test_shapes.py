import math
import pytest
from sprite_engine.graphics import shapes
from sprite_engine.graphics.surface import (
    LinearGradient, RadialGradient, RenderSurface, darken_color, draw_scope, interpolate_stops,
    lighten_color, parse_color,
)


def test_star_has_twelve_alternating_points():
    points = shapes.star_points(50, 50, 10)
    assert len(points) == 12

    radii = [math.hypot(x - 50, y - 50) for x, y in points]
    assert radii[0::2] == pytest.approx([10.0] * 6)
    assert radii[1::2] == pytest.approx([5.0] * 6)


def test_star_starts_at_top_and_steps_thirty_degrees():
    points = shapes.star_points(0, 0, 10)
    assert points[0] == pytest.approx((0.0, -10.0))

    angles = [math.atan2(y, x) for x, y in points]
    for a, b in zip(angles, angles[1:]):
        step = (b - a) % (2 * math.pi)
        assert step == pytest.approx(math.pi / 6)


def test_rune_is_three_strokes(surface):
    shapes.draw_rune(surface, 0, 0, 32, 32, "#D2B48C")
    assert surface.stroke_line.call_count == 3

    stem = surface.stroke_line.call_args_list[0][0]
    assert stem[:4] == pytest.approx((16, 3.2, 16, 28.8))


def test_coin_draws_halo_body_and_highlight(surface):
    shapes.draw_coin(surface, 10, 10, 10, "#00ff00")
    assert surface.fill_circle.call_count == 3

    halo, body, highlight = surface.fill_circle.call_args_list
    assert isinstance(halo[0][3], RadialGradient)
    assert halo[0][2] == pytest.approx(15.0)
    assert isinstance(body[0][3], RadialGradient)
    assert highlight[0][2] == pytest.approx(3.0)


def test_dollar_is_centered_text(surface):
    shapes.draw_dollar(surface, 10, 20, 20, "#ffd700")
    surface.draw_text.assert_called_once()
    args, kwargs = surface.draw_text.call_args
    assert args[:3] == ("$", 10, 20)
    assert kwargs["align"] == "center"
    assert kwargs["size"] == 18


def test_gradient_rect_darkens(surface):
    shapes.draw_gradient_rect(surface, 0, 0, 10, 10, "#ffffff")
    gradient = surface.fill_rect.call_args[0][4]
    assert isinstance(gradient, LinearGradient)
    assert gradient.stops == ((0.0, "#ffffff"), (1.0, "#b2b2b2"))


@pytest.mark.parametrize("text,expected", [
    ("#fff", (255, 255, 255, 255)),
    ("#ff0101", (255, 1, 1, 255)),
    ("#00000080", (0, 0, 0, 128)),
    ((1, 2, 3), (1, 2, 3, 255)),
])
def test_parse_color(text, expected):
    assert parse_color(text) == expected


@pytest.mark.parametrize("bad", ["", "#12", "#zzzzzz", "red"])
def test_parse_color_rejects_garbage(bad):
    with pytest.raises(ValueError):
        parse_color(bad)


def test_darken_keeps_alpha():
    assert darken_color("#ff000080", 0.5) == "#7f000080"


def test_interpolate_stops():
    stops = ((0.0, "#000000"), (1.0, "#ffffff"))
    assert interpolate_stops(stops, 0.0) == (0, 0, 0, 255)
    assert interpolate_stops(stops, 0.5) == (128, 128, 128, 255)
    assert interpolate_stops(stops, 2.0) == (255, 255, 255, 255)
    assert interpolate_stops((), 0.5) == (0, 0, 0, 0)


def test_draw_scope_restores_on_exception(surface):
    with pytest.raises(KeyError):
        with draw_scope(surface):
            raise KeyError("boom")
    surface.save.assert_called_once()
    surface.restore.assert_called_once()


def test_lighten_moves_toward_white():
    assert lighten_color("#ff0101", 0.4) == "#ff6666"
    assert lighten_color("#00ff0080", 1.0) == "#ffffff80"
    assert lighten_color("#123456", 0.0) == "#123456"


def test_star_shine_follows_color(surface):
    shapes.draw_star(surface, 0, 0, 12, "#0000ff")
    gradient = surface.fill_polygon.call_args[0][1]
    assert gradient.stops[0] == (0.0, lighten_color("#0000ff", 0.4))
    assert gradient.stops[1] == (0.5, "#0000ff")


def test_coin_body_shine_follows_color(surface):
    shapes.draw_coin(surface, 0, 0, 10, "#ffd700")
    body = surface.fill_circle.call_args_list[1][0][3]
    assert body.stops[0] == (0.0, lighten_color("#ffd700", 0.55))


def test_render_surface_only_requires_drawing_operations():
    assert RenderSurface.__abstractmethods__ == frozenset({
        "save", "restore", "translate", "rotate", "scale", "set_alpha", "set_glow",
        "fill_rect", "fill_circle", "fill_polygon", "stroke_line", "draw_text",
    })
