"""In-memory 32-bit pixel buffer and colour conversion helpers."""

from __future__ import annotations

import struct

_PIXEL = struct.Struct("<I")


class Image:
    """A width x height buffer of 32-bit little-endian 0x00RRGGBB pixels."""

    bits_per_pixel = 32
    endian = 0

    def __init__(self, width, height):
        if width <= 0 or height <= 0:
            raise ValueError(f"invalid image size {width}x{height}")
        self.width = width
        self.height = height
        self.line_length = width * (self.bits_per_pixel // 8)
        self.data = bytearray(self.line_length * height)

    def _offset(self, x, y):
        return int(y) * self.line_length + int(x) * (self.bits_per_pixel // 8)

    def put_pixel(self, x, y, color):
        """Store ``color`` at (x, y); writes outside the buffer are dropped.

        Coordinates are truncated toward zero. The position is taken as a
        linear offset, so an x past the end of a row lands on the next row.
        """
        offset = self._offset(x, y)
        if 0 <= offset <= len(self.data) - _PIXEL.size:
            _PIXEL.pack_into(self.data, offset, color & 0xFFFFFFFF)

    def get_pixel(self, x, y):
        """Return the 32-bit value stored at (x, y)."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height}")
        return _PIXEL.unpack_from(self.data, self._offset(x, y))[0]

    def fill(self, color):
        """Set every pixel to ``color``."""
        self.data[:] = _PIXEL.pack(color & 0xFFFFFFFF) * (self.width * self.height)

    def to_rgb_bytes(self):
        """Return the pixels as packed R, G, B bytes, row by row."""
        out = bytearray(self.width * self.height * 3)
        out[0::3] = self.data[2::4]
        out[1::3] = self.data[1::4]
        out[2::3] = self.data[0::4]
        return bytes(out)


def channel_shifts(red_mask, green_mask, blue_mask):
    """Return (shift, bits) for red, green and blue as one flat 6-tuple."""
    shifts = []
    for mask in (red_mask, green_mask, blue_mask):
        if mask <= 0:
            raise ValueError(f"invalid channel mask: {mask:#x}")
        low = (mask & -mask).bit_length() - 1
        mask >>= low
        ones = 0
        while mask & 1:
            mask >>= 1
            ones += 1
        shifts.extend((low, ones))
    return tuple(shifts)


def get_color_value(color, depth, shifts):
    """Convert 0xRRGGBB to a pixel value for a display of ``depth`` bits."""
    if depth >= 24:
        return color
    red = (color >> 8) & 0xFF00
    green = color & 0xFF00
    blue = (color << 8) & 0xFF00
    return (
        ((red >> (16 - shifts[1])) << shifts[0])
        + ((green >> (16 - shifts[3])) << shifts[2])
        + ((blue >> (16 - shifts[5])) << shifts[4])
    )