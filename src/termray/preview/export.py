"""Image export utilities for rendered grids.

Supported formats:
    - PNG (8-bit RGB via Pillow)

Each screen cell becomes a ``scale x scale`` block of pixels so that small
character-sized grids remain legible as images.

Example:
    >>> from termray.preview.export import save_png
    >>> from termray.scene.demo import create_demo_scene
    >>>
    >>> scene = create_demo_scene()
    >>> grid = scene.empty_render()
    >>> scene.render(grid)
    >>> save_png(grid, "demo.png", scale=4)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from termray.preview.shading import DEFAULT_FALLOFF, grid_to_image

if TYPE_CHECKING:
    from termray.scene.cell import RenderGrid


def upscale(image: npt.NDArray[np.uint8], scale: int) -> npt.NDArray[np.uint8]:
    """Repeat every pixel into a ``scale x scale`` block.

    Raises:
        ValueError: If ``scale`` is less than 1.
    """
    if scale < 1:
        raise ValueError(f"scale must be >= 1, got {scale}")
    if scale == 1:
        return image
    return np.repeat(np.repeat(image, scale, axis=0), scale, axis=1)


def save_png(
    grid: RenderGrid,
    filepath: str,
    *,
    falloff: float = DEFAULT_FALLOFF,
    scale: int = 1,
    background: tuple[int, int, int] = (0, 0, 0),
) -> None:
    """Save a shaded render grid as a PNG file.

    Args:
        grid: The render output to save.
        filepath: Output file path (should end in .png).
        falloff: Distance at which hits reach black.
        scale: Pixels per cell along each axis.
        background: Color for cells whose ray hit nothing.
    """
    image = grid_to_image(grid, falloff=falloff, background=background)
    save_png_from_array(image, filepath, scale=scale)


def save_png_from_array(
    image: npt.NDArray[np.uint8],
    filepath: str,
    *,
    scale: int = 1,
) -> None:
    """Save an (H, W, 3) uint8 array as a PNG file.

    Raises:
        ValueError: If the array is not an (H, W, 3) image.
    """
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an (H, W, 3) image, got shape {image.shape}")

    pil_image = PILImage.fromarray(upscale(image.astype(np.uint8), scale))
    pil_image.save(filepath)
