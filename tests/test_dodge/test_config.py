import pytest
from pydantic import ValidationError
from dodge.config import SessionConfig
from sprite_engine.core.game import MAX_TIMESTEP


def test_defaults():
    config = SessionConfig()
    assert (config.width, config.height) == (800, 600)
    assert config.win_score == 10
    assert config.coin_count == 5
    assert config.enemy_count == 3
    assert config.player_speed == 300
    assert config.trail_chance == 0.5
    assert config.max_timestep == MAX_TIMESTEP


def test_rejects_bad_dimensions():
    with pytest.raises(ValidationError):
        SessionConfig(width=-1)
    with pytest.raises(ValidationError):
        SessionConfig(height=0)


def test_rejects_unknown_fields():
    with pytest.raises(ValidationError):
        SessionConfig(gravity=9.8)


def test_validates_assignment():
    config = SessionConfig()
    with pytest.raises(ValidationError):
        config.win_score = 0
    with pytest.raises(ValidationError):
        config.trail_chance = 1.5


def test_overrides():
    config = SessionConfig(win_score=3, enemy_count=0)
    assert config.win_score == 3
    assert config.enemy_count == 0


@pytest.mark.parametrize("size", [
    {"width": 16, "height": 16},
    {"width": 31},
    {"height": 20},
])
def test_rejects_field_smaller_than_sprites(size):
    with pytest.raises(ValidationError, match="largest sprite"):
        SessionConfig(**size)


def test_sprite_size_checked_against_field():
    with pytest.raises(ValidationError):
        SessionConfig(width=100, height=100, enemy_size=120)
    config = SessionConfig()
    with pytest.raises(ValidationError):
        config.width = 10


def test_smallest_field_keeps_entities_inside():
    import random
    from dodge.session import GameSession

    config = SessionConfig(width=32, height=32)
    session = GameSession(config, rng=random.Random(0))
    for entity in session.engine.entities:
        x, y = entity.position
        assert 0 <= x <= config.width - entity.width
        assert 0 <= y <= config.height - entity.height
