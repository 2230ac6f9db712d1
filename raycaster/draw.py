"""Screen constants and primitive drawing onto an Image."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass

W_HEIGHT = 720
W_WIDTH = 1280
BLOCK_SIZE = 600
STEP = 10

WALL_NORTH = 0x12D012
WALL_SOUTH = 0x0E810E
WALL_EAST = 0x347AEB
WALL_WEST = 0x0341A3
FLOOR = 0x926829
ROOF = 0x20A7DB

_PIXEL = struct.Struct("<I")


@dataclass(frozen=True)
class Line:
    """A segment from (start_x, start_y) to (end_x, end_y)."""

    start_x: int
    start_y: int
    end_x: int
    end_y: int
    color: int


@dataclass(frozen=True)
class Rect:
    """An axis-aligned filled rectangle."""

    x: int
    y: int
    width: int
    height: int
    bg_color: int


def _fill_run(image, x, y, count, color):
    """Write ``count`` consecutive pixels starting at (x, y).

    Pixels follow the image's linear layout, so a run longer than the row
    continues on the next one; pixels outside the buffer are dropped.
    """
    if count <= 0:
        return
    size = image.bits_per_pixel // 8
    start = y * image.line_length + x * size
    stop = start + count * size
    start = max(start, 0)
    stop = min(stop, len(image.data))
    if start < stop:
        image.data[start:stop] = _PIXEL.pack(color & 0xFFFFFFFF) * ((stop - start) // size)


def draw_rectangle(image, rect):
    """Fill ``rect`` with its background colour."""
    for row in range(rect.y, rect.y + rect.height):
        _fill_run(image, rect.x, row, rect.width, rect.bg_color)


def draw_square(image, x, y, size, outline, background):
    """Draw a (size + 1)-pixel square whose top row and left column use ``outline``."""
    for j in range(y, y + size + 1):
        for i in range(x, x + size + 1):
            image.put_pixel(i, j, outline if i == x or j == y else background)


def draw_line(image, line):
    """Draw ``line`` by stepping one unit along it; the end point is not drawn."""
    if line.start_x == line.end_x and line.start_y == line.end_y:
        return
    dx = line.end_x - line.start_x
    dy = line.end_y - line.start_y
    steps = int(math.sqrt(dx * dx + dy * dy))
    dx /= steps
    dy /= steps
    px = float(line.start_x)
    py = float(line.start_y)
    put = image.put_pixel
    for _ in range(steps):
        put(px, py, line.color)
        px += dx
        py += dy


def screen_clean(image):
    """Paint the whole window area black."""
    for row in range(W_HEIGHT + 1):
        _fill_run(image, 0, row, W_WIDTH + 1, 0x000000)