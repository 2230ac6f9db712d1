"""Grid-based ray casting maze walker with XPM reading and X11 colour names."""

__version__ = "0.1.0"
__all__ = ["app", "colors", "draw", "image", "render", "world", "xpm"]