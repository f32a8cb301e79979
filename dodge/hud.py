"""
HUD and end-of-session overlay.
"""

from __future__ import annotations

from sprite_engine.graphics.surface import RenderSurface, draw_scope

TEXT_COLOR = "#ffffff"
OVERLAY_COLOR = "#00000080"
LOSE_COLOR = "#ff0101"
WIN_COLOR = "#00ff00"

GAME_OVER_TEXT = "GAME OVER"
WIN_TEXT = "YOU WIN!"
RESTART_HINT = "Press R to play again"


def draw_hud(
    surface: RenderSurface,
    score: int,
    win_score: int,
    coins: int,
    enemies: int,
) -> None:
    with draw_scope(surface):
        surface.draw_text(f"Score: {score}/{win_score}", 20, 30, TEXT_COLOR, size=16, bold=True)
        surface.draw_text(f"Coins: {coins}", 20, 50, TEXT_COLOR, size=12)
        surface.draw_text(f"Enemies: {enemies}", 20, 70, TEXT_COLOR, size=12)


def draw_overlay(surface: RenderSurface, width: float, height: float, won: bool) -> None:
    """Dim the field and show the terminal message."""
    with draw_scope(surface):
        surface.fill_rect(0, 0, width, height, OVERLAY_COLOR)

        message = WIN_TEXT if won else GAME_OVER_TEXT
        color = WIN_COLOR if won else LOSE_COLOR
        surface.draw_text(message, width / 2, height / 2, color, size=48, bold=True, align="center")
        surface.draw_text(RESTART_HINT, width / 2, height / 2 + 40, TEXT_COLOR, size=20, align="center")
