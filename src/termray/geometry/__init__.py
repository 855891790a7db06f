"""Geometry module for polygon primitives and intersection algorithms.

This module provides the polygon shapes objects are built from:

Components:
    triangle: Triangle primitive with Möller–Trumbore ray intersection
    polygon: Closed union of primitive shapes with per-variant dispatch

Ray-polygon intersection follows the pattern:
    hit = intersect_polygon(polygon, ray)  # TriangleHit(point, distance) or None
"""

from .polygon import (
    Polygon,
    copy_polygon,
    intersect_polygon,
    polygon_bounds,
    transform_polygon,
)
from .triangle import EPSILON, Triangle, TriangleHit, hit_triangle

__all__ = [
    "Triangle",
    "TriangleHit",
    "hit_triangle",
    "EPSILON",
    "Polygon",
    "polygon_bounds",
    "transform_polygon",
    "intersect_polygon",
    "copy_polygon",
]
