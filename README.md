# raycaster

A small first-person maze walker drawn by ray casting. The map is a grid of
blocks. Each screen column casts one ray through the grid. Walls are shaded by
the side of the block the ray struck (north, south, east or west). The sky and
the floor are filled with flat colours.

The package also has a few helpers that stand on their own:

- `raycaster.colors.lookup_color` resolves X11 colour names such as
  `"dark orange"` or `"gray50"` to `0xRRGGBB` integers, ignoring case.
  `"none"` gives `-1`; unknown names raise `KeyError`.
- `raycaster.xpm` reads XPM pictures (`xpm_file_to_image`, `xpm_to_image`)
  into an in-memory `raycaster.image.Image`. Malformed data raises
  `raycaster.xpm.XpmError`.
- `raycaster.draw` draws rectangles (`draw_rectangle`), squares
  (`draw_square`) and lines (`draw_line`) onto an `Image`.

## Installing

```
pip install .
```

The window is drawn with pygame, which is installed with the package.

## Playing

Put a map file named `map.cub` in the current directory and run:

```
raycaster
```

or name another map file:

```
raycaster path/to/level.cub
```

If the file cannot be read, or the map has no start cell, the command prints
an error and exits with status 1.

A map has one row per line; blank lines are skipped. Each row is made of
digits:

- `0` is open floor
- `1` is a wall
- `2` is where the player starts, in the middle of that cell, looking toward
  the top of the map (the first rows)

Only the first `2` is used. For example:

```
11111
10001
10201
10001
11111
```

Controls:

| Key         | Action            |
|-------------|-------------------|
| `z`         | move forward      |
| `s`         | move backward     |
| `q`         | strafe left       |
| `d`         | strafe right      |
| Left arrow  | turn left         |
| Right arrow | turn right        |
| Escape      | quit              |

Closing the window also quits. A move that would bring the player into a wall
or off the map is refused.

## Using it from Python

```python
from raycaster.world import parse_map, spawn_player, cast_ray
from raycaster.image import Image
from raycaster.render import render_frame

grid = parse_map("11111\n10001\n10201\n10001\n11111\n")
player = spawn_player(grid)
hit = cast_ray(grid, player, player.angle)
print(hit.direction, hit.length)

image = Image(1280, 720)
render_frame(image, grid, player)
rgb = image.to_rgb_bytes()
```

To drive the game one frame at a time without a window, use
`raycaster.app.Game`. Call `key_down` and `key_up` with `"z"`, `"q"`, `"s"`,
`"d"`, `"left"` or `"right"` as keys change, and call `tick` once per frame;
it returns `True` when a new frame was drawn into `game.image`. Passing
`"escape"` to `key_down` sets `game.running` to `False`.
`raycaster.app.run(game)` opens the pygame window for a `Game`.

## What it does not do

Walls are flat colours: there are no textures, sprites, doors or enemies,
and nothing draws a minimap. XPM pictures can be read into images, but the
game does not use them. Rays that leave the map without striking a wall are
drawn as very distant walls.

## Running the tests

```
pip install ".[test]"
pytest
```