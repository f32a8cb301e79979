"""
Gameplay configuration.

All tunable numbers for a Dodge session live here, validated by pydantic
so a bad value fails at construction instead of mid-game.

Usage:
    config = SessionConfig(win_score=5, enemy_count=6)
    session = GameSession(config)
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from sprite_engine.core.game import MAX_TIMESTEP


class SessionConfig(BaseModel):
    """
    Settings for one Dodge session.

    Attributes:
        width: Playfield width in pixels
        height: Playfield height in pixels
        win_score: Coins needed to win
        coin_count: Coins on the field at session start
        enemy_count: Enemies on the field at session start
        enemy_speed_min: Lowest enemy speed (pixels/second)
        enemy_speed_range: Enemy speed spread above the minimum
        trail_chance: Per-frame probability of a trail particle while moving
        max_timestep: Upper bound for dt in seconds
    """

    model_config = ConfigDict(
        validate_assignment=True,
        extra='forbid',
    )

    width: int = Field(default=800, gt=0)
    height: int = Field(default=600, gt=0)
    win_score: int = Field(default=10, ge=1)

    coin_count: int = Field(default=5, ge=1)
    enemy_count: int = Field(default=3, ge=0)

    player_size: float = Field(default=32.0, gt=0)
    player_speed: float = Field(default=300.0, ge=0)
    player_color: str = "#D2B48C"

    coin_size: float = Field(default=20.0, gt=0)
    coin_color: str = "#00ff00"

    enemy_size: float = Field(default=24.0, gt=0)
    enemy_color: str = "#ff0101"
    enemy_speed_min: float = Field(default=150.0, ge=0)
    enemy_speed_range: float = Field(default=100.0, ge=0)

    trail_chance: float = Field(default=0.5, ge=0, le=1)
    trail_life: float = Field(default=0.3, gt=0)
    trail_spread: float = Field(default=50.0, ge=0)

    coin_burst: int = Field(default=15, ge=0)
    coin_shake: float = Field(default=5.0, ge=0)
    enemy_burst: int = Field(default=20, ge=0)
    enemy_shake: float = Field(default=15.0, ge=0)

    max_timestep: float = Field(default=MAX_TIMESTEP, gt=0)

    @model_validator(mode="after")
    def check_field_fits_sprites(self) -> SessionConfig:
        """Every sprite must fit inside the playfield."""
        largest = max(self.player_size, self.coin_size, self.enemy_size)
        if self.width < largest or self.height < largest:
            raise ValueError(
                f"Playfield {self.width}x{self.height} is smaller than the largest sprite ({largest})"
            )
        return self
