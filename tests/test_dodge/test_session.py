import random
import pytest
from sprite_engine.core.entity import Coin, Enemy, EntityKind, Player
from sprite_engine.core.vector import Vector2
from dodge.config import SessionConfig
from dodge.session import GameEvent, GameSession, SessionState


def isolate(session):
    """Remove coins and enemies so a test controls the field."""
    engine = session.engine
    for entity in engine.query_by_tag("coin") + engine.query_by_tag("enemy"):
        engine.remove_entity(entity)


def record(event_bus, *types):
    seen = []
    for event_type in types:
        event_bus.subscribe(event_type, seen.append, weak=False)
    return seen


def test_initial_field(session):
    engine = session.engine
    assert session.state is SessionState.PLAYING
    assert session.score == 0
    assert engine.query_by_tag(EntityKind.PLAYER) == [session.player]
    assert len(engine.query_by_tag("coin")) == 5
    assert len(engine.query_by_tag("enemy")) == 3


def test_entities_start_inside_field(session):
    for entity in session.engine.entities:
        x, y = entity.position
        assert 0 <= x <= 800 - entity.width
        assert 0 <= y <= 600 - entity.height


def test_same_seed_same_field(config):
    a = GameSession(config, rng=random.Random(3))
    b = GameSession(config, rng=random.Random(3))
    assert [e.position for e in a.engine.entities] == [e.position for e in b.engine.entities]


def test_coin_collection(session, event_bus):
    seen = record(event_bus, GameEvent.COIN_COLLECTED)
    isolate(session)
    session.player.set_position(0, 0)
    coin = session.engine.spawn_entity(Coin(10, 10, 20, 20, "#00ff00"))

    session.step(0.0)

    assert session.score == 1
    assert coin not in session.engine.entities
    coins = session.engine.query_by_tag("coin")
    assert len(coins) == 1
    assert coins[0] is not coin
    assert session.state is SessionState.PLAYING
    assert seen[0]["score"] == 1
    assert session.engine.shake == 5
    assert len(session.engine.particles) == 15


def test_winning_collection_spawns_no_replacement(session, event_bus):
    seen = record(event_bus, GameEvent.SESSION_WON)
    isolate(session)
    session.score = 9
    session.player.set_position(0, 0)
    session.engine.spawn_entity(Coin(10, 10, 20, 20))

    session.step(0.0)

    assert session.score == 10
    assert session.won
    assert session.is_terminal
    assert session.engine.query_by_tag("coin") == []
    assert len(seen) == 1


def test_win_stops_coin_scan(session):
    isolate(session)
    session.score = 9
    session.player.set_position(0, 0)
    session.engine.spawn_entity(Coin(0, 0, 20, 20))
    session.engine.spawn_entity(Coin(5, 5, 20, 20))

    session.step(0.0)

    assert session.score == 10
    assert len(session.engine.query_by_tag("coin")) == 1


def test_enemy_contact_ends_session(session, event_bus):
    seen = record(event_bus, GameEvent.PLAYER_HIT, GameEvent.SESSION_LOST)
    isolate(session)
    session.player.set_position(100, 100)
    session.engine.spawn_entity(Enemy(110, 110, 24, 24, "#ff0101", speed=200))

    session.step(0.0)

    assert session.game_over
    assert [e.type for e in seen] == [GameEvent.PLAYER_HIT, GameEvent.SESSION_LOST]
    assert session.engine.shake == 15
    assert len(session.engine.particles) == 20


def test_multiple_enemy_hits_processed(session, event_bus):
    seen = record(event_bus, GameEvent.PLAYER_HIT, GameEvent.SESSION_LOST)
    isolate(session)
    session.player.set_position(100, 100)
    session.engine.spawn_entity(Enemy(100, 100, 24, 24))
    session.engine.spawn_entity(Enemy(110, 100, 24, 24))

    session.step(0.0)

    types = [e.type for e in seen]
    assert types.count(GameEvent.PLAYER_HIT) == 2
    assert types.count(GameEvent.SESSION_LOST) == 1
    assert len(session.engine.particles) == 40


def test_terminal_session_is_frozen(session, surface):
    isolate(session)
    session.player.set_position(100, 100)
    session.engine.spawn_entity(Enemy(100, 100, 24, 24, speed=200))
    session.engine.spawn_entity(Enemy(500, 300, 24, 24, speed=200))
    session.step(0.0)
    assert session.game_over

    session.engine.set_input_key("arrowright", True)
    positions = [e.position for e in session.engine.entities]
    particles = [(p.x, p.y) for p in session.engine.particles]

    for _ in range(5):
        session.frame(0.016, surface)

    assert session.score == 0
    assert [e.position for e in session.engine.entities] == positions
    assert [(p.x, p.y) for p in session.engine.particles] == particles

    texts = [c.args[0] for c in surface.draw_text.call_args_list]
    assert texts.count("GAME OVER") == 5


def test_lag_spike_is_clamped(session):
    isolate(session)
    session.player.set_position(100, 100)
    session.engine.set_input_key("arrowright", True)

    session.step(0.5)

    assert session.player.position.x == pytest.approx(100 + 300 * 0.016)
    assert session.player.position.y == 100


def test_diagonal_is_full_speed(session):
    isolate(session)
    session.engine.set_input_key("a", True)
    session.engine.set_input_key("w", True)
    session.step(0.0)
    assert session.player.velocity == Vector2(-300, -300)


def test_negative_key_wins_on_same_axis(session):
    isolate(session)
    session.engine.set_input_key("arrowleft", True)
    session.engine.set_input_key("arrowright", True)
    session.engine.set_input_key("s", True)
    session.step(0.0)
    assert session.player.velocity == Vector2(-300, 300)


def test_no_keys_means_no_velocity(session):
    isolate(session)
    session.player.set_velocity(50, 50)
    session.step(0.0)
    assert session.player.velocity.is_zero


def test_player_clamped_to_field(session):
    isolate(session)
    session.player.set_position(-50, 1000)
    session.step(0.0)
    assert session.player.position == Vector2(0, 600 - 32)


def test_enemy_bounces_off_walls(session):
    isolate(session)
    enemy = session.engine.spawn_entity(Enemy(0, 600 - 24, 24, 24, speed=200, dir_x=-1, dir_y=1))

    session.step(0.0)

    assert enemy.velocity == Vector2(-200, 200)
    assert (enemy.dir_x, enemy.dir_y) == (1, -1)


def test_enemy_moves_with_its_velocity(session):
    isolate(session)
    session.player.set_position(0, 0)
    enemy = session.engine.spawn_entity(Enemy(400, 300, 24, 24, speed=100, dir_x=1, dir_y=-1))

    session.step(0.0)
    session.step(0.01)

    assert enemy.position.x == pytest.approx(401)
    assert enemy.position.y == pytest.approx(299)


def test_trail_particles():
    always = GameSession(SessionConfig(trail_chance=1.0), rng=random.Random(1))
    isolate(always)
    always.engine.set_input_key("d", True)
    always.step(0.016)
    assert len(always.engine.particles) == 1
    trail = always.engine.particles[0]
    assert trail.life == pytest.approx(0.3)
    assert trail.color == always.player.color

    never = GameSession(SessionConfig(trail_chance=0.0), rng=random.Random(1))
    isolate(never)
    never.engine.set_input_key("d", True)
    never.step(0.016)
    assert never.engine.particles == []


def test_no_trail_when_still():
    session = GameSession(SessionConfig(trail_chance=1.0), rng=random.Random(1))
    isolate(session)
    session.step(0.016)
    assert session.engine.particles == []


def test_reset_reinitialises(session):
    isolate(session)
    session.player.set_position(100, 100)
    session.engine.spawn_entity(Enemy(100, 100, 24, 24))
    session.step(0.0)
    old_engine = session.engine

    session.reset()

    assert session.engine is not old_engine
    assert session.state is SessionState.PLAYING
    assert session.score == 0
    assert session.engine.particles == []
    assert len(session.engine.query_by_tag("player")) == 1
    assert len(session.engine.query_by_tag("coin")) == 5
    assert len(session.engine.query_by_tag("enemy")) == 3


def test_render_playing_has_no_overlay(session, surface):
    session.render(surface)
    texts = [c.args[0] for c in surface.draw_text.call_args_list]
    assert "Score: 0/10" in texts
    assert "Coins: 5" in texts
    assert "Enemies: 3" in texts
    assert "GAME OVER" not in texts
    assert "YOU WIN!" not in texts


def test_render_win_overlay(session, surface):
    session.state = SessionState.WON
    session.render(surface)
    texts = [c.args[0] for c in surface.draw_text.call_args_list]
    assert "YOU WIN!" in texts


def test_second_active_player_breaks_invariant(session):
    extra = session.engine.spawn_entity(Player(10, 10, 32, 32))
    with pytest.raises(AssertionError, match="exactly one player"):
        session._check_player_invariant()

    extra.active = False
    session._check_player_invariant()
