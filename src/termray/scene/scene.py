"""Scene: objects plus a camera, resolved cell by cell into a RenderGrid.

For every screen cell the scene asks the camera for a primary ray, tests it
against each object's bounding box and then its polygons, and keeps the
globally nearest hit. Intersection is brute force over pixels, objects and
polygons with no acceleration structure beyond per-object boxes.

Example:
    >>> from termray.scene.scene import Scene
    >>> scene = Scene()
    >>> grid = scene.empty_render()
    >>> scene.render(grid)
    >>> grid.hit_count()
    0
"""

from __future__ import annotations

from collections.abc import Iterable

from termray.camera.camera import Camera
from termray.scene.cell import EMPTY, Cell, Hit, RenderGrid
from termray.scene.objects import SceneObject


class Scene:
    """A list of objects viewed through one camera.

    Attributes:
        objects: Objects tested in order; on exactly equal distances the
            earlier object wins.
        camera: The camera producing one ray per screen cell.
    """

    __slots__ = ("objects", "camera")

    def __init__(
        self,
        objects: Iterable[SceneObject] = (),
        camera: Camera | None = None,
    ) -> None:
        self.objects: list[SceneObject] = list(objects)
        self.camera = camera if camera is not None else Camera.default()

    def add_object(self, obj: SceneObject) -> int:
        """Append an object and return its index."""
        self.objects.append(obj)
        return len(self.objects) - 1

    def clear(self) -> None:
        """Remove all objects, keeping the camera."""
        self.objects.clear()

    def test_ray(self, cell: tuple[int, int]) -> Cell:
        """Resolve one screen cell ``(x, y)``.

        Returns:
            EMPTY for an out-of-range cell or a ray that hits nothing,
            otherwise a Hit with the nearest object's color and distance.
        """
        ray = self.camera.get_ray(cell)
        if ray is None:
            return EMPTY

        nearest: Hit | None = None
        for obj in self.objects:
            hit = obj.intersect(ray)
            if hit is not None and (nearest is None or hit.distance < nearest.distance):
                nearest = Hit(obj.color, hit.distance)
        return nearest if nearest is not None else EMPTY

    def render(self, grid: RenderGrid) -> None:
        """Overwrite every cell of ``grid`` in row-major order.

        Raises:
            ValueError: If the grid does not match the camera's screen size.
        """
        columns, rows = self.camera.get_screen_size()
        if grid.size != (columns, rows):
            raise ValueError(
                f"Grid size {grid.size} does not match camera screen size {(columns, rows)}"
            )
        for y in range(rows):
            row = grid.rows[y]
            for x in range(columns):
                row[x] = self.test_ray((x, y))

    def empty_render(self) -> RenderGrid:
        """A fresh grid sized to the camera's current screen."""
        columns, rows = self.camera.get_screen_size()
        return RenderGrid(columns, rows)

    def __repr__(self) -> str:
        return f"Scene(objects={len(self.objects)}, camera={self.camera!r})"
