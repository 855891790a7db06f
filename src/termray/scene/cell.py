"""Render output cells and the output grid.

Each screen cell resolves to either ``EMPTY`` (the ray hit nothing) or a
``Hit`` carrying the color of the nearest object and the distance to it.
A ``RenderGrid`` is a fixed ``height x width`` array of cells that the scene
overwrites in place on every render pass; it is consumed by a display
collaborator that maps distance to brightness and color to output.

Example:
    >>> from termray.scene.cell import EMPTY, Hit, RenderGrid, Rgb
    >>> grid = RenderGrid(4, 2)
    >>> grid[1, 0] = Hit(Rgb(255, 0, 0), 3.5)
    >>> grid.hit_count()
    1
    >>> grid[0, 0] is EMPTY
    True
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Union

import numpy as np
import numpy.typing as npt


@dataclass(frozen=True, slots=True)
class Rgb:
    """An opaque 8-bit-per-channel color supplied by the scene builder.

    Raises:
        ValueError: If any channel is not an integer in [0, 255].
    """

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for name in ("r", "g", "b"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise ValueError(f"Color channel {name} must be an int, got {value!r}")
            if not 0 <= value <= 255:
                raise ValueError(f"Color channel {name} must be in [0, 255], got {value}")

    def __iter__(self) -> Iterator[int]:
        return iter((self.r, self.g, self.b))

    def to_tuple(self) -> tuple[int, int, int]:
        return (int(self.r), int(self.g), int(self.b))


@dataclass(frozen=True, slots=True)
class Empty:
    """A cell whose ray hit nothing."""

    def __repr__(self) -> str:
        return "EMPTY"


@dataclass(frozen=True, slots=True)
class Hit:
    """A cell whose ray hit an object.

    Attributes:
        color: The color of the nearest object hit.
        distance: Distance from the ray origin to the hit point.
    """

    color: Rgb
    distance: float


EMPTY = Empty()

Cell = Union[Empty, Hit]


class RenderGrid:
    """A fixed-size 2D array of cells, indexed by ``(x, y)``.

    Rows are stored top to bottom in the same order as the camera's screen
    centers, so ``rows[y][x]`` is the cell for screen cell ``(x, y)``.
    """

    __slots__ = ("_width", "_height", "rows")

    def __init__(self, width: int, height: int) -> None:
        """Create a grid filled with EMPTY cells.

        Raises:
            ValueError: If either dimension is negative.
        """
        if width < 0 or height < 0:
            raise ValueError(f"Grid dimensions must be non-negative, got {width}x{height}")
        self._width = width
        self._height = height
        self.rows: list[list[Cell]] = [[EMPTY] * width for _ in range(height)]

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> tuple[int, int]:
        """``(width, height)``, matching the camera's screen size."""
        return (self._width, self._height)

    def _check(self, cell: tuple[int, int]) -> tuple[int, int]:
        x, y = cell
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"Cell {cell} outside {self._width}x{self._height} grid")
        return x, y

    def __getitem__(self, cell: tuple[int, int]) -> Cell:
        x, y = self._check(cell)
        return self.rows[y][x]

    def __setitem__(self, cell: tuple[int, int], value: Cell) -> None:
        x, y = self._check(cell)
        self.rows[y][x] = value

    def clear(self) -> None:
        for row in self.rows:
            for x in range(self._width):
                row[x] = EMPTY

    def iter_cells(self) -> Iterator[tuple[int, int, Cell]]:
        """Yield ``(x, y, cell)`` in row-major order."""
        for y, row in enumerate(self.rows):
            for x, cell in enumerate(row):
                yield x, y, cell

    def hit_count(self) -> int:
        return sum(1 for row in self.rows for cell in row if isinstance(cell, Hit))

    def distances(self) -> npt.NDArray[np.float64]:
        """Hit distances as a ``(height, width)`` array, NaN where empty."""
        result = np.full((self._height, self._width), np.nan, dtype=np.float64)
        for x, y, cell in self.iter_cells():
            if isinstance(cell, Hit):
                result[y, x] = cell.distance
        return result

    def colors(self) -> npt.NDArray[np.uint8]:
        """Unshaded hit colors as a ``(height, width, 3)`` array, black where empty."""
        result = np.zeros((self._height, self._width, 3), dtype=np.uint8)
        for x, y, cell in self.iter_cells():
            if isinstance(cell, Hit):
                result[y, x] = cell.color.to_tuple()
        return result

    def __repr__(self) -> str:
        return f"RenderGrid(width={self._width}, height={self._height}, hits={self.hit_count()})"
