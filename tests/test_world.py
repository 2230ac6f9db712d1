import math

import pytest

from raycaster.draw import BLOCK_SIZE, STEP
from raycaster.world import (
    MISS_LENGTH,
    Direction,
    KeyState,
    Player,
    cast_ray,
    load_map,
    move_player,
    parse_map,
    spawn_player,
    will_hit_wall,
)

HALF = BLOCK_SIZE // 2


def _box(size=5):
    return [
        [1 if row in (0, size - 1) or col in (0, size - 1) else 0 for col in range(size)]
        for row in range(size)
    ]


def _player_at(col, row, angle=math.pi / 2):
    return Player(x=col * BLOCK_SIZE + HALF, y=row * BLOCK_SIZE + HALF, angle=angle)


def test_parse_map_digits_per_line():
    assert parse_map("101\n121\n") == [[1, 0, 1], [1, 2, 1]]


def test_load_map_round_trip(tmp_path):
    text = "1111\n1201\n1111\n"
    path = tmp_path / "map.cub"
    path.write_text(text)
    assert load_map(path) == parse_map(text)


def test_spawn_player_at_cell_centre():
    grid = parse_map("1111\n1021\n1111\n")
    player = spawn_player(grid)
    assert player.x == 2 * BLOCK_SIZE + HALF
    assert player.y == BLOCK_SIZE + HALF
    assert player.angle == pytest.approx(math.pi / 2)
    assert player.fov == pytest.approx(math.pi / 3)


def test_spawn_player_without_start_raises():
    with pytest.raises(ValueError):
        spawn_player(_box())


@pytest.mark.parametrize(
    "angle, direction",
    [
        (0.0, Direction.WEST),
        (math.pi / 2, Direction.NORTH),
        (math.pi, Direction.EAST),
        (3 * math.pi / 2, Direction.SOUTH),
    ],
)
def test_cast_ray_hits_box_walls(angle, direction):
    player = _player_at(2, 2)
    hit = cast_ray(_box(), player, angle)
    assert hit.direction == direction
    assert hit.length == pytest.approx(player.x - BLOCK_SIZE, rel=1e-6)
    assert hit.length == pytest.approx(
        math.hypot(hit.hit_x - player.x, hit.hit_y - player.y), rel=1e-9
    )
    assert hit.angle == angle


def test_cast_ray_west_hit_point_on_wall_face():
    player = _player_at(2, 2)
    hit = cast_ray(_box(), player, 0.0)
    assert hit.hit_x == pytest.approx(BLOCK_SIZE)
    assert hit.hit_y == pytest.approx(player.y)


def test_cast_ray_without_walls_misses():
    grid = [[0] * 5 for _ in range(5)]
    hit = cast_ray(grid, _player_at(2, 2), 0.3)
    assert hit.length == MISS_LENGTH
    assert (hit.hit_x, hit.hit_y) == (0.0, 0.0)


def test_will_hit_wall_forward_and_back():
    grid = _box()
    player = Player(x=2 * BLOCK_SIZE + HALF, y=BLOCK_SIZE + 5, angle=math.pi / 2)
    assert will_hit_wall(grid, player, "z") is True
    assert will_hit_wall(grid, player, "s") is False


def test_will_hit_wall_above_map_counts_as_wall():
    player = Player(x=5, y=5, angle=math.pi / 2)
    assert will_hit_wall([[0, 0], [0, 0]], player, "z") is True


def test_will_hit_wall_unknown_key():
    assert will_hit_wall(_box(), _player_at(2, 2), "x") is True


def test_move_forward_and_backward():
    grid = _box()
    player = _player_at(2, 2)
    start_x, start_y = player.x, player.y
    keys = KeyState()
    keys.press("z")
    assert move_player(grid, player, keys) is True
    assert (player.x, player.y) == (start_x, start_y - STEP)
    keys.release("z")
    keys.press("s")
    move_player(grid, player, keys)
    assert (player.x, player.y) == (start_x, start_y)


def test_strafe_left_moves_along_x():
    player = _player_at(2, 2)
    start_x, start_y = player.x, player.y
    keys = KeyState()
    keys.press("q")
    move_player(_box(), player, keys)
    assert (player.x, player.y) == (start_x - STEP, start_y)


def test_move_blocked_by_wall():
    player = Player(x=2 * BLOCK_SIZE + HALF, y=BLOCK_SIZE + 5, angle=math.pi / 2)
    keys = KeyState()
    keys.press("z")
    move_player(_box(), player, keys)
    assert (player.x, player.y) == (2 * BLOCK_SIZE + HALF, BLOCK_SIZE + 5)


def test_no_move_flag_leaves_player():
    player = _player_at(2, 2)
    keys = KeyState(forward=True, move=False)
    assert move_player(_box(), player, keys) is False
    assert player.y == 2 * BLOCK_SIZE + HALF


def test_turn_left_updates_deltas():
    player = _player_at(2, 2)
    start = player.angle
    keys = KeyState()
    keys.press("left")
    move_player(_box(), player, keys)
    assert player.angle == pytest.approx(start - 0.02, abs=1e-6)
    assert player.delta_x == pytest.approx(math.cos(player.angle), abs=1e-6)
    assert player.delta_y == pytest.approx(math.sin(player.angle), abs=1e-6)


def test_turn_left_wraps_below_zero():
    player = _player_at(2, 2, angle=0.01)
    keys = KeyState()
    keys.press("left")
    move_player(_box(), player, keys)
    assert 0 <= player.angle < 2 * math.pi
    assert player.angle == pytest.approx(2 * math.pi - 0.01, abs=1e-5)


def test_turn_right_wraps_above_full_turn():
    player = _player_at(2, 2, angle=2 * math.pi - 0.01)
    keys = KeyState()
    keys.press("right")
    move_player(_box(), player, keys)
    assert 0 <= player.angle <= 2 * math.pi
    assert player.angle == pytest.approx(0.01, abs=1e-5)


def test_key_state_press_release():
    keys = KeyState()
    assert keys.move is True
    keys.press("z")
    assert keys.forward is True
    assert keys.move is True
    keys.release("z")
    assert keys.forward is False
    assert keys.move is False


def test_key_state_unknown_key_recomputes_move():
    keys = KeyState()
    keys.press("x")
    assert keys.move is False
    assert keys.held is False
    keys.press("right")
    keys.press("x")
    assert keys.move is True