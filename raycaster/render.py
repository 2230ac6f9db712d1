"""Drawing the 3D view: sky, floor and one wall slice per screen column."""

from __future__ import annotations

import math

from .draw import (
    BLOCK_SIZE,
    FLOOR,
    ROOF,
    W_HEIGHT,
    W_WIDTH,
    WALL_EAST,
    WALL_NORTH,
    WALL_SOUTH,
    WALL_WEST,
    Rect,
    draw_rectangle,
)
from .world import Direction, cast_ray

_WALL_COLORS = {
    Direction.NORTH: WALL_NORTH,
    Direction.EAST: WALL_EAST,
    Direction.SOUTH: WALL_SOUTH,
    Direction.WEST: WALL_WEST,
}


def wall_color(direction):
    """Return the colour used for a wall face seen from ``direction``."""
    return _WALL_COLORS[Direction(direction)]


def draw_background(image):
    """Paint the sky over the whole view, then the floor over its lower half."""
    draw_rectangle(image, Rect(x=0, y=0, width=W_WIDTH, height=W_HEIGHT, bg_color=ROOF))
    top = W_HEIGHT // 2
    draw_rectangle(image, Rect(x=0, y=top, width=W_WIDTH, height=W_HEIGHT - top, bg_color=FLOOR))


def _paint_column(image, x, start_y, end_y, color):
    """Paint column ``x`` from ``start_y`` toward ``end_y``, end excluded.

    Gives the same pixels as a vertical line drawn with ``draw_line``,
    following the image's linear layout, but writes them in one pass.
    """
    if start_y == end_y:
        return
    if end_y > start_y:
        low, high = start_y, end_y - 1
    else:
        low, high = end_y + 1, start_y
    size = image.bits_per_pixel // 8
    stride = image.line_length
    x_offset = x * size
    low = max(low, -(x_offset // stride))
    high = min(high, (len(image.data) - size - x_offset) // stride)
    if low > high:
        return
    count = high - low + 1
    first = low * stride + x_offset
    last = high * stride + x_offset
    for lane, byte in enumerate((color & 0xFFFFFFFF).to_bytes(size, "little")):
        image.data[first + lane : last + lane + 1 : stride] = bytes((byte,)) * count


def draw_wall(image, column, hit, player):
    """Draw the wall slice for one ray, centred on the horizon.

    The ray length is corrected for the angle off the view direction so
    straight walls do not bulge; the slice is at most the view's height.
    """
    distance = hit.length * math.cos(hit.angle - player.angle)
    if distance == 0:
        line_height = float(W_HEIGHT)
    else:
        line_height = min((BLOCK_SIZE * W_HEIGHT) / distance, float(W_HEIGHT))
    start = int(W_HEIGHT / 2.0 - line_height / 2.0)
    end = int(line_height + start)
    _paint_column(image, column, start, end, wall_color(hit.direction))


def draw_3d(image, grid, player):
    """Cast one ray per column across the player's field of view."""
    angle_step = player.fov / W_WIDTH
    start_angle = player.angle - player.fov / 2.0
    for column in range(W_WIDTH + 1):
        hit = cast_ray(grid, player, start_angle + column * angle_step)
        draw_wall(image, column, hit, player)


def render_frame(image, grid, player):
    """Draw a complete frame of the view into ``image``."""
    draw_background(image)
    draw_3d(image, grid, player)