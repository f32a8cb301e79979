import random
from sprite_engine.core.engine import Engine
from sprite_engine.core.entity import Coin, Enemy, Player
from dodge.spawner import spawn_coin, spawn_enemy, spawn_player


def test_player_placement(engine, config):
    player = spawn_player(engine, config)
    assert isinstance(player, Player)
    assert player in engine.entities
    assert player.position.x == 800 / 2 - 32 / 2
    assert player.position.y == 600 / 2
    assert player.speed == 300


def test_coins_inside_field(engine, config, rng):
    for _ in range(50):
        coin = spawn_coin(engine, config, rng)
        assert isinstance(coin, Coin)
        assert 0 <= coin.position.x < 800 - 20
        assert 0 <= coin.position.y < 600 - 20
    assert len(engine.query_by_tag("coin")) == 50


def test_enemy_ranges(engine, config, rng):
    for _ in range(50):
        enemy = spawn_enemy(engine, config, rng)
        assert isinstance(enemy, Enemy)
        assert 0 <= enemy.position.x < 800 - 24
        assert 0 <= enemy.position.y < 600 - 24
        assert 150 <= enemy.speed < 250
        assert enemy.dir_x in (-1, 1)
        assert enemy.dir_y in (-1, 1)


def test_seeded_spawns_repeat(config):
    a = Engine(800, 600)
    b = Engine(800, 600)
    enemy_a = spawn_enemy(a, config, random.Random(7))
    enemy_b = spawn_enemy(b, config, random.Random(7))
    assert enemy_a.position == enemy_b.position
    assert enemy_a.speed == enemy_b.speed
    assert (enemy_a.dir_x, enemy_a.dir_y) == (enemy_b.dir_x, enemy_b.dir_y)
