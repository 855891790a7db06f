"""Screen: a grid of cell centers in a local z=0 plane.

The screen spans ``columns * cell_w`` by ``rows * cell_h`` units. Cell
``(x, y)`` has its center at ``(x*cell_w + cell_w/2, y*cell_h + cell_h/2, 0)``
and the four corners are the extremal points of the plane. Everything is
derived from ``cell_size`` and ``screen_size`` alone.
"""

from __future__ import annotations

from termray.core.transform import Transform
from termray.core.vector import Point


class Screen:
    """A rectangular grid of cell centers in its own local coordinates.

    Attributes:
        cell_size: ``(cell_width, cell_height)`` in world units.
        screen_size: ``(columns, rows)``.
        corners: The four plane corners, counter-clockwise from the origin.
        centers: ``rows x columns`` nested list of cell centers.
    """

    __slots__ = ("cell_size", "screen_size", "corners", "centers")

    def __init__(self, cell_size: tuple[float, float], screen_size: tuple[int, int]) -> None:
        """Build the cell centers and corners.

        Raises:
            ValueError: If a cell dimension is not positive or a cell count
                is not a positive integer.
        """
        cell_w, cell_h = (float(cell_size[0]), float(cell_size[1]))
        columns, rows = screen_size
        if cell_w <= 0.0 or cell_h <= 0.0:
            raise ValueError(f"Cell size must be positive, got {cell_size}")
        if int(columns) != columns or int(rows) != rows or columns <= 0 or rows <= 0:
            raise ValueError(f"Screen size must be positive integers, got {screen_size}")
        columns, rows = int(columns), int(rows)

        self.cell_size = (cell_w, cell_h)
        self.screen_size = (columns, rows)

        width = columns * cell_w
        height = rows * cell_h
        self.corners: tuple[Point, Point, Point, Point] = (
            Point(0.0, 0.0, 0.0),
            Point(width, 0.0, 0.0),
            Point(width, height, 0.0),
            Point(0.0, height, 0.0),
        )
        self.centers: list[list[Point]] = [
            [Point(x * cell_w + cell_w / 2.0, y * cell_h + cell_h / 2.0, 0.0) for x in range(columns)]
            for y in range(rows)
        ]

    @classmethod
    def default(cls) -> Screen:
        """A 64x64 screen of 0.25-unit cells."""
        return cls((0.25, 0.25), (64, 64))

    @property
    def dimensions(self) -> tuple[float, float]:
        """Total ``(width, height)`` of the screen plane."""
        return (self.screen_size[0] * self.cell_size[0], self.screen_size[1] * self.cell_size[1])

    def get_center(self, cell: tuple[int, int]) -> Point | None:
        """Local center of cell ``(x, y)``, or None if out of range."""
        x, y = cell
        columns, rows = self.screen_size
        if 0 <= x < columns and 0 <= y < rows:
            return self.centers[y][x]
        return None

    def apply(self, transform: Transform) -> Screen:
        """Transform corners and centers in place."""
        for corner in self.corners:
            corner.apply(transform)
        for row in self.centers:
            for center in row:
                center.apply(transform)
        return self

    def copy(self) -> Screen:
        clone = Screen.__new__(Screen)
        clone.cell_size = self.cell_size
        clone.screen_size = self.screen_size
        clone.corners = tuple(corner.copy() for corner in self.corners)  # type: ignore[assignment]
        clone.centers = [[center.copy() for center in row] for row in self.centers]
        return clone

    def __repr__(self) -> str:
        return f"Screen(cell_size={self.cell_size}, screen_size={self.screen_size})"
