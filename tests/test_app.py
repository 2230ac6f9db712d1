import math

import pytest

from raycaster.app import Game, main
from raycaster.draw import BLOCK_SIZE, FLOOR, ROOF, W_HEIGHT, W_WIDTH, WALL_NORTH
from raycaster.world import parse_map

ROOM = "11111\n10001\n10201\n10001\n11111\n"
CELL = "111\n121\n111\n"


@pytest.fixture
def game():
    return Game(parse_map(ROOM))


def test_initial_frame_is_drawn(game):
    assert game.image.get_pixel(0, 0) == ROOF
    assert game.image.get_pixel(W_WIDTH - 1, W_HEIGHT - 1) == FLOOR
    assert game.image.get_pixel(W_WIDTH // 2, W_HEIGHT // 2) == WALL_NORTH


def test_initial_state(game):
    assert game.player.x == 2 * BLOCK_SIZE + BLOCK_SIZE // 2
    assert game.player.y == 2 * BLOCK_SIZE + BLOCK_SIZE // 2
    assert game.keys.move is False
    assert game.running is True


def test_tick_without_keys_draws_nothing(game):
    before = bytes(game.image.data)
    assert game.tick() is False
    assert bytes(game.image.data) == before


def test_forward_moves_north(game):
    start_x, start_y = game.player.x, game.player.y
    game.key_down("z")
    assert game.tick() is True
    assert game.player.y < start_y
    assert game.player.x == start_x


def test_backward_moves_south(game):
    start_y = game.player.y
    game.key_down("s")
    game.tick()
    assert game.player.y > start_y


def test_turning_left_lowers_angle(game):
    start = game.player.angle
    game.key_down("left")
    assert game.tick() is True
    assert game.player.angle < start


def test_turning_right_raises_angle(game):
    start = game.player.angle
    game.key_down("right")
    game.tick()
    assert game.player.angle > start


def test_release_stops_updates(game):
    game.key_down("z")
    game.key_up("z")
    assert game.keys.move is False
    start_y = game.player.y
    assert game.tick() is False
    assert game.player.y == start_y


def test_turning_changes_frame(game):
    before = bytes(game.image.data)
    game.key_down("right")
    for _ in range(20):
        game.tick()
    assert bytes(game.image.data) != before
    assert game.image.get_pixel(0, 0) == ROOF


def test_escape_ends_game(game):
    game.key_down("escape")
    assert game.running is False


def test_walls_stop_the_player():
    game = Game(parse_map(CELL))
    game.key_down("z")
    for _ in range(100):
        game.tick()
    assert game.player.y > BLOCK_SIZE
    assert math.isclose(game.player.angle, math.pi / 2, rel_tol=1e-6)


def test_map_without_start_is_rejected():
    with pytest.raises(ValueError):
        Game(parse_map("111\n101\n111\n"))


def test_main_missing_map(tmp_path, capsys):
    assert main([str(tmp_path / "absent.cub")]) == 1
    assert "raycaster:" in capsys.readouterr().err


def test_main_map_without_start(tmp_path, capsys):
    path = tmp_path / "map.cub"
    path.write_text("111\n101\n111\n")
    assert main([str(path)]) == 1
    assert "start cell" in capsys.readouterr().err