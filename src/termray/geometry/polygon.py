"""Polygon variant set and per-variant dispatch.

``Polygon`` is a closed union of primitive shapes. Today it only holds
``Triangle``; new shapes are added as new union members plus a ``case`` in
each dispatch function below. Dispatch is by exhaustive matching, so an
unknown shape fails loudly instead of being silently skipped.
"""

from __future__ import annotations

from typing import TypeAlias

from termray.core.ray import Ray
from termray.core.transform import Transform
from termray.core.vector import Point
from termray.geometry.triangle import Triangle, TriangleHit, hit_triangle

Polygon: TypeAlias = Triangle


def _unknown(polygon: object) -> TypeError:
    return TypeError(f"Unsupported polygon type: {type(polygon).__name__}")


def polygon_bounds(polygon: Polygon) -> tuple[Point, Point]:
    """Axis-aligned ``(min, max)`` bounds of a polygon."""
    match polygon:
        case Triangle():
            return polygon.bounds()
        case _:
            raise _unknown(polygon)


def transform_polygon(polygon: Polygon, transform: Transform) -> Polygon:
    """Transform a polygon's vertices in place and return it."""
    match polygon:
        case Triangle():
            return polygon.apply(transform)
        case _:
            raise _unknown(polygon)


def intersect_polygon(polygon: Polygon, ray: Ray) -> TriangleHit | None:
    """Intersect a ray with a polygon; None on a miss."""
    match polygon:
        case Triangle():
            return hit_triangle(ray, polygon)
        case _:
            raise _unknown(polygon)


def copy_polygon(polygon: Polygon) -> Polygon:
    match polygon:
        case Triangle():
            return polygon.copy()
        case _:
            raise _unknown(polygon)
