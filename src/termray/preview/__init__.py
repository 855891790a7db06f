"""Preview module for turning render grids into pictures.

This module handles display-side output of a render:

Components:
    shading: Distance-based brightness and Matplotlib preview
    export: PNG export via Pillow

The grid itself only stores colors and distances; brightness is applied
here, the same way a terminal front end dims far-away hits.

Example:
    >>> from termray.preview import grid_to_image, save_png
    >>> image = grid_to_image(grid, falloff=50.0)
    >>> save_png(grid, "output.png", scale=8)
"""

from termray.preview.export import save_png, save_png_from_array, upscale
from termray.preview.shading import (
    DEFAULT_FALLOFF,
    grid_to_image,
    shade_distance,
    show_preview,
)

__all__ = [
    # Shading
    "DEFAULT_FALLOFF",
    "shade_distance",
    "grid_to_image",
    "show_preview",
    # Export
    "save_png",
    "save_png_from_array",
    "upscale",
]
