"""Reading XPM pixmaps into images."""

from __future__ import annotations

import re
from pathlib import Path

from .colors import lookup_color
from .image import Image

TRANSPARENT = 0xFF000000
_NAME_LIMIT = 63

_WORD = re.compile(r"[^ \t]+")
_HEX = re.compile(r"\s*([+-]?)(?:0[xX](?=[0-9a-fA-F]))?([0-9a-fA-F]+)")
_INT = re.compile(r"\s*([+-]?\d+)")
_QUOTED = re.compile(r'"([^"]*)"')


class XpmError(ValueError):
    """Raised when XPM data cannot be parsed."""


def split_words(text):
    """Split ``text`` on runs of spaces and tabs."""
    return _WORD.findall(text)


def _find_unquoted(text, needle):
    quoted = False
    for index, char in enumerate(text):
        if char == '"':
            quoted = not quoted
        if not quoted and text.startswith(needle, index):
            return index
    return -1


def strip_comments(text):
    """Blank out /* */ and // comments lying outside double quotes.

    Comments are replaced by spaces so the text keeps its length.
    """
    for opener, closer in (("/*", "*/"), ("//", "\n")):
        while (start := _find_unquoted(text, opener)) != -1:
            end = text.find(closer, start + len(opener))
            stop = len(text) if end == -1 else end + len(closer)
            text = text[:start] + " " * (stop - start) + text[stop:]
    return text


def _to_int32(value):
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value >= 0x80000000 else value


def text_to_rgb(name, end):
    """Resolve an XPM colour value to 0xRRGGBB.

    ``#hex`` values are read as hexadecimal; otherwise ``name`` (joined with
    ``end`` when given) is looked up in the colour table. Unknown names give 0
    and "None" gives -1.
    """
    if name.startswith("#"):
        match = _HEX.match(name[1:])
        if not match:
            return 0
        value = int(match.group(2), 16)
        return _to_int32(-value if match.group(1) == "-" else value)
    if end is not None:
        name = f"{name} {end}"[:_NAME_LIMIT]
    try:
        return lookup_color(name)
    except KeyError:
        return 0


def _atoi(word):
    match = _INT.match(word)
    return int(match.group(1)) if match else 0


def xpm_to_image(lines):
    """Build an Image from the strings of an XPM: header, colours, rows."""
    rows = iter(lines)

    def next_line():
        try:
            return next(rows)
        except StopIteration:
            raise XpmError("unexpected end of XPM data") from None

    header = split_words(next_line())
    if len(header) < 4:
        raise XpmError("XPM header needs width, height, colours and chars per pixel")
    width, height, ncolors, cpp = (_atoi(word) for word in header[:4])
    if min(width, height, ncolors, cpp) <= 0:
        raise XpmError(f"invalid XPM header: {' '.join(header)!r}")

    # With more than two characters per pixel the first definition of a key
    # wins; otherwise later definitions replace earlier ones.
    first_wins = cpp > 2
    palette: dict[str, int] = {}
    for _ in range(ncolors):
        line = next_line()
        words = split_words(line[cpp:])
        try:
            index = words.index("c") + 1
        except ValueError:
            raise XpmError(f"colour line without 'c' key: {line!r}") from None
        if index >= len(words):
            raise XpmError(f"colour line without value: {line!r}")
        end = words[index + 1] if index + 1 < len(words) else None
        rgb = text_to_rgb(words[index], end)
        key = line[:cpp]
        if first_wins:
            palette.setdefault(key, rgb)
        else:
            palette[key] = rgb

    image = Image(width, height)
    for y in range(height):
        line = next_line()
        for x in range(width):
            color = palette.get(line[cpp * x : cpp * (x + 1)], 0)
            if color == -1:
                color = TRANSPARENT
            image.put_pixel(x, y, color)
    return image


def xpm_file_to_image(path):
    """Read an XPM file and return its Image."""
    text = Path(path).read_bytes().decode("latin-1")
    return xpm_to_image(_QUOTED.findall(strip_comments(text)))