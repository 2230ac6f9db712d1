"""Map, player state, ray casting and movement."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path

from .draw import BLOCK_SIZE, STEP

MAP_LENGTH = 25
MAP_ITEM_LENGTH = 23
MAP_FILE = "map.cub"
WALL = 1
SPAWN = 2
FOV = math.pi / 3
TURN_SPEED = 0.02
MISS_LENGTH = MAP_LENGTH * MAP_ITEM_LENGTH * BLOCK_SIZE

_F32 = struct.Struct("f")

# Movement key -> (sign applied to delta_x, sign applied to delta_y) for the
# wall probe.
_PROBES = {"z": (-1, -1), "s": (1, 1), "q": (-1, 1), "d": (1, -1)}

_KEY_FIELDS = {
    "z": "forward",
    "d": "right",
    "s": "backward",
    "q": "left",
    "left": "turn_left",
    "right": "turn_right",
}


def _f32(value):
    """Round to single precision, as the player state is stored."""
    return _F32.unpack(_F32.pack(value))[0]


class Direction(IntEnum):
    """Which face of a wall block a ray struck."""

    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3


@dataclass
class Player:
    """Player position in world units and viewing angle in radians."""

    x: int
    y: int
    angle: float
    fov: float = FOV

    def __post_init__(self):
        self.angle = _f32(self.angle)
        self.fov = _f32(self.fov)

    @property
    def delta_x(self):
        return _f32(math.cos(self.angle))

    @property
    def delta_y(self):
        return _f32(math.sin(self.angle))


@dataclass(frozen=True)
class RayHit:
    """Result of casting one ray."""

    direction: Direction
    length: float
    hit_x: float
    hit_y: float
    angle: float


@dataclass
class KeyState:
    """Keys currently held, and whether the view needs redrawing."""

    forward: bool = False
    right: bool = False
    backward: bool = False
    left: bool = False
    turn_left: bool = False
    turn_right: bool = False
    move: bool = True

    @property
    def held(self):
        return any(
            (self.forward, self.right, self.backward, self.left, self.turn_left, self.turn_right)
        )

    def _set(self, key, down):
        name = _KEY_FIELDS.get(key)
        if name is not None:
            setattr(self, name, down)
        self.move = self.held

    def press(self, key):
        """Record ``key`` ("z", "q", "s", "d", "left", "right") as held."""
        self._set(key, True)

    def release(self, key):
        """Record ``key`` as released."""
        self._set(key, False)


def parse_map(text):
    """Turn map text into rows of cell values, one digit per cell."""
    return [[ord(char) - ord("0") for char in line] for line in text.splitlines() if line]


def load_map(path=MAP_FILE):
    """Read and parse a map file."""
    return parse_map(Path(path).read_text(encoding="latin-1"))


def _cell(grid, row, col):
    if row < 0 or col < 0 or row >= len(grid) or col >= len(grid[row]):
        return None
    return grid[row][col]


def spawn_player(grid):
    """Place a player at the centre of the first spawn cell, facing pi/2."""
    offset = BLOCK_SIZE // 2
    for row_index, row in enumerate(grid):
        for col_index, cell in enumerate(row):
            if cell == SPAWN:
                return Player(
                    x=col_index * BLOCK_SIZE + offset,
                    y=row_index * BLOCK_SIZE + offset,
                    angle=math.pi / 2,
                )
    raise ValueError("map has no player start cell")


def _distance_to(numerator, denominator):
    return math.inf if denominator == 0 else numerator / denominator


def cast_ray(grid, player, angle):
    """Walk the grid from the player along ``angle`` until a wall is struck.

    A ray that leaves the map reports MISS_LENGTH and a hit point of (0, 0).
    """
    ray_x = float(player.x)
    ray_y = float(player.y)
    map_x = math.floor(ray_x / BLOCK_SIZE)
    map_y = math.floor(ray_y / BLOCK_SIZE)
    delta_x = -math.cos(angle)
    delta_y = -math.sin(angle)
    dist_x = _distance_to(1.0, abs(delta_x))
    dist_y = _distance_to(1.0, abs(delta_y))
    step_x = -1 if delta_x < 0 else 1
    step_y = -1 if delta_y < 0 else 1
    if delta_x < 0:
        next_x = _distance_to(ray_x - map_x * BLOCK_SIZE, abs(delta_x))
    else:
        next_x = _distance_to((map_x + 1) * BLOCK_SIZE - ray_x, abs(delta_x))
    if delta_y < 0:
        next_y = _distance_to(ray_y - map_y * BLOCK_SIZE, abs(delta_y))
    else:
        next_y = _distance_to((map_y + 1) * BLOCK_SIZE - ray_y, abs(delta_y))

    while True:
        if next_x < next_y:
            ray_x += next_x * delta_x
            ray_y += next_x * delta_y
            next_y -= next_x
            next_x = dist_x * BLOCK_SIZE
            map_x += step_x
            direction = Direction.WEST if step_x < 0 else Direction.EAST
        else:
            ray_x += next_y * delta_x
            ray_y += next_y * delta_y
            next_x -= next_y
            next_y = dist_y * BLOCK_SIZE
            map_y += step_y
            direction = Direction.NORTH if step_y < 0 else Direction.SOUTH
        cell = _cell(grid, map_y, map_x)
        if cell is None:
            return RayHit(direction, float(MISS_LENGTH), 0.0, 0.0, angle)
        if cell == WALL:
            length = math.hypot(ray_x - player.x, ray_y - player.y)
            return RayHit(direction, length, ray_x, ray_y, angle)


def will_hit_wall(grid, player, key):
    """Tell whether moving with ``key`` would bring the player into a wall.

    Positions left of or above the map, positions outside it and unknown
    keys all count as walls.
    """
    signs = _PROBES.get(key)
    if signs is None:
        return True
    reach = STEP * 1.5
    map_x = int(player.x + signs[0] * player.delta_x * reach)
    map_y = int(player.y + signs[1] * player.delta_y * reach)
    if map_x < 0 or map_y < 0:
        return True
    return _cell(grid, map_y // BLOCK_SIZE, map_x // BLOCK_SIZE) in (WALL, None)


def _step(value):
    return math.ceil(_f32(value * STEP))


def move_player(grid, player, keys):
    """Apply one frame of movement and turning; return whether to redraw."""
    if not keys.move:
        return False
    if keys.forward and not will_hit_wall(grid, player, "z"):
        player.y -= _step(player.delta_y)
        player.x -= _step(player.delta_x)
    if keys.backward and not will_hit_wall(grid, player, "s"):
        player.y += _step(player.delta_y)
        player.x += _step(player.delta_x)
    if keys.left and not will_hit_wall(grid, player, "q"):
        player.y += _step(player.delta_x)
        player.x -= _step(player.delta_y)
    if keys.right and not will_hit_wall(grid, player, "d"):
        player.y -= _step(player.delta_x)
        player.x += _step(player.delta_y)
    if keys.turn_left:
        angle = _f32(player.angle - TURN_SPEED)
        if angle < 0:
            angle = _f32(angle + math.pi * 2)
        player.angle = angle
    if keys.turn_right:
        angle = _f32(player.angle + TURN_SPEED)
        if angle > math.pi * 2:
            angle = _f32(angle - math.pi * 2)
        player.angle = angle
    return True