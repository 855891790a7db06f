"""Renderable objects: a group of polygons with a color and cached bounds.

An object keeps an axis-aligned bounding box equal to the componentwise
min/max over all of its polygons' own bounds. The box is recomputed from
scratch after every geometry mutation and is used to reject rays before any
polygon is tested.

Example:
    >>> from termray.core.vector import Point
    >>> from termray.geometry import Triangle
    >>> from termray.scene.cell import Rgb
    >>> from termray.scene.objects import SceneObject
    >>> obj = SceneObject(
    ...     Rgb(55, 155, 255),
    ...     [Triangle(Point(0, 0, 0), Point(2, 0, 0), Point(0, 2, 0))],
    ... )
    >>> obj.bounds[1].xyz
    (2.0, 2.0, 0.0)
"""

from __future__ import annotations

from collections.abc import Iterable

from termray.core.ray import Ray
from termray.core.transform import Transform
from termray.core.vector import Point, lower_bound, upper_bound
from termray.geometry.polygon import (
    Polygon,
    copy_polygon,
    intersect_polygon,
    polygon_bounds,
    transform_polygon,
)
from termray.geometry.triangle import TriangleHit
from termray.scene.cell import Rgb


class SceneObject:
    """A colored group of polygons.

    Attributes:
        color: The color reported for every hit on this object.
        polygons: The polygons, in world coordinates.
        bounds: Cached ``(min, max)`` corners of the bounding box.
    """

    __slots__ = ("color", "polygons", "bounds")

    def __init__(self, color: Rgb, polygons: Iterable[Polygon] = ()) -> None:
        self.color = color
        self.polygons: list[Polygon] = list(polygons)
        self.bounds: tuple[Point, Point] = (Point.origin(), Point.origin())
        self.recalc_bounds()

    def recalc_bounds(self) -> None:
        """Fold every polygon's bounds into the object's bounding box.

        An object with no polygons gets a zero-sized box at the origin.
        """
        if not self.polygons:
            self.bounds = (Point.origin(), Point.origin())
            return

        low, high = polygon_bounds(self.polygons[0])
        for polygon in self.polygons[1:]:
            poly_low, poly_high = polygon_bounds(polygon)
            low = lower_bound(low, poly_low)
            high = upper_bound(high, poly_high)
        self.bounds = (low, high)

    def add_polygon(self, polygon: Polygon) -> SceneObject:
        self.polygons.append(polygon)
        self.recalc_bounds()
        return self

    def apply(self, transform: Transform) -> SceneObject:
        """Transform every vertex of every polygon, then recompute bounds."""
        for polygon in self.polygons:
            transform_polygon(polygon, transform)
        self.recalc_bounds()
        return self

    def copy(self) -> SceneObject:
        return SceneObject(self.color, [copy_polygon(p) for p in self.polygons])

    def intersect(self, ray: Ray) -> TriangleHit | None:
        """Nearest polygon hit, or None.

        The bounding box is tested first; only rays that pass it are tested
        against the polygons. On equal distances the earlier polygon wins.
        """
        if not ray.collides_box(self.bounds):
            return None

        nearest: TriangleHit | None = None
        for polygon in self.polygons:
            hit = intersect_polygon(polygon, ray)
            if hit is not None and (nearest is None or hit.distance < nearest.distance):
                nearest = hit
        return nearest

    def __len__(self) -> int:
        return len(self.polygons)

    def __repr__(self) -> str:
        return f"SceneObject(color={self.color!r}, polygons={len(self.polygons)})"
