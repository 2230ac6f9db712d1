"""The game: state, input handling, the frame loop and the command."""

from __future__ import annotations

import argparse
import sys

from .draw import W_HEIGHT, W_WIDTH
from .image import Image
from .render import render_frame
from .world import MAP_FILE, KeyState, load_map, move_player, spawn_player

TITLE = "Ray casting"
ESCAPE = "escape"
FRAME_RATE = 60


class Game:
    """A running game: map, player, held keys and the frame being shown."""

    def __init__(self, grid):
        self.grid = grid
        self.player = spawn_player(grid)
        self.keys = KeyState()
        self.image = Image(W_WIDTH, W_HEIGHT)
        self.running = True
        self.tick()
        self.keys.move = False

    def key_down(self, key):
        """Handle a key press; "escape" ends the game."""
        if key == ESCAPE:
            self.running = False
            return
        self.keys.press(key)

    def key_up(self, key):
        """Handle a key release."""
        self.keys.release(key)

    def tick(self):
        """Advance one frame; return True when a new frame was drawn."""
        if not move_player(self.grid, self.player, self.keys):
            return False
        render_frame(self.image, self.grid, self.player)
        return True


def run(game):
    """Show ``game`` in a window and feed it keyboard input until it ends."""
    import pygame

    pygame.init()
    try:
        screen = pygame.display.set_mode((game.image.width, game.image.height))
        pygame.display.set_caption(TITLE)
        clock = pygame.time.Clock()
        key_names = {
            pygame.K_z: "z",
            pygame.K_q: "q",
            pygame.K_s: "s",
            pygame.K_d: "d",
            pygame.K_LEFT: "left",
            pygame.K_RIGHT: "right",
            pygame.K_ESCAPE: ESCAPE,
        }
        dirty = True
        while game.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    game.running = False
                elif event.type == pygame.KEYDOWN:
                    name = key_names.get(event.key)
                    if name is not None:
                        game.key_down(name)
                elif event.type == pygame.KEYUP:
                    name = key_names.get(event.key)
                    if name is not None:
                        game.key_up(name)
            if not game.running:
                break
            if game.tick() or dirty:
                frame = pygame.image.frombuffer(
                    game.image.to_rgb_bytes(),
                    (game.image.width, game.image.height),
                    "RGB",
                )
                screen.blit(frame, (0, 0))
                pygame.display.flip()
                dirty = False
            clock.tick(FRAME_RATE)
    finally:
        pygame.quit()


def main(argv=None):
    """Load a map and play it; return the exit status."""
    parser = argparse.ArgumentParser(prog="raycaster", description="Walk around a grid map.")
    parser.add_argument("map", nargs="?", default=MAP_FILE, help="map file (default: %(default)s)")
    args = parser.parse_args(argv)
    try:
        game = Game(load_map(args.map))
    except (OSError, ValueError) as exc:
        print(f"raycaster: {exc}", file=sys.stderr)
        return 1
    run(game)
    return 0