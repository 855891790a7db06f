"""Distance shading and Matplotlib preview for rendered grids.

A render grid only carries the nearest object's color and the distance to
it. For display, each hit is dimmed linearly with distance:

    shaded = color * (falloff - distance) / falloff

clamped to [0, 255], so hits at the ray origin keep their full color and
hits at or beyond ``falloff`` turn black. Empty cells take the background
color.

Example:
    >>> from termray.preview.shading import shade_distance
    >>> from termray.scene.cell import Rgb
    >>> shade_distance(Rgb(200, 100, 0), 25.0)
    (100, 50, 0)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt

from termray.scene.cell import Rgb

if TYPE_CHECKING:
    from termray.scene.cell import RenderGrid


# Distance at which a hit fades to black
DEFAULT_FALLOFF = 50.0


def _check_falloff(falloff: float) -> None:
    if not falloff > 0.0:
        raise ValueError(f"falloff must be positive, got {falloff}")


def shade_distance(
    color: Rgb,
    distance: float,
    falloff: float = DEFAULT_FALLOFF,
) -> tuple[int, int, int]:
    """Dim a hit color by its distance.

    Args:
        color: The object color of the hit.
        distance: Distance from the ray origin to the hit point.
        falloff: Distance at which the color reaches black.

    Returns:
        The shaded ``(r, g, b)`` with every channel clamped to [0, 255].

    Raises:
        ValueError: If ``falloff`` is not positive.
    """
    _check_falloff(falloff)
    factor = (falloff - distance) / falloff
    return tuple(int(np.clip(channel * factor, 0.0, 255.0)) for channel in color)


def grid_to_image(
    grid: RenderGrid,
    falloff: float = DEFAULT_FALLOFF,
    background: tuple[int, int, int] = (0, 0, 0),
) -> npt.NDArray[np.uint8]:
    """Shade a whole grid into an RGB image.

    Args:
        grid: The render output.
        falloff: Distance at which hits reach black.
        background: Color for cells whose ray hit nothing.

    Returns:
        Image array of shape (height, width, 3) with dtype uint8. Row 0 is
        the top screen row.
    """
    _check_falloff(falloff)
    distances = grid.distances()
    colors = grid.colors().astype(np.float64)

    empty = np.isnan(distances)
    factor = (falloff - np.where(empty, 0.0, distances)) / falloff
    shaded = np.clip(colors * factor[..., np.newaxis], 0.0, 255.0)

    image = shaded.astype(np.uint8)
    image[empty] = np.asarray(background, dtype=np.uint8)
    return image


def show_preview(
    grid: RenderGrid,
    *,
    falloff: float = DEFAULT_FALLOFF,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 8),
    block: bool = True,
) -> None:
    """Display a shaded grid as a Matplotlib figure.

    Args:
        grid: The render output to display.
        falloff: Distance at which hits reach black.
        title: Custom title (default shows the hit count).
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until the figure is closed.
    """
    import matplotlib.pyplot as plt

    image = grid_to_image(grid, falloff=falloff)

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(image, interpolation="nearest")
    ax.axis("off")

    if title is None:
        title = f"{grid.width}x{grid.height} - {grid.hit_count()} hits"
    ax.set_title(title)

    plt.tight_layout()
    plt.show(block=block)
