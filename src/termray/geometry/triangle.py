"""Triangle primitive with Möller–Trumbore ray intersection.

A triangle is three world-space (or local-space) points. Intersection
follows the Möller–Trumbore algorithm with a fixed epsilon of ``1e-7``:

1. Reject rays parallel to the triangle plane (``|a| < eps``).
2. Compute barycentric ``u`` and ``v`` and reject points outside the
   triangle.
3. Accept only forward hits (``t > eps``).

The reported distance is the Euclidean length of ``origin - hit_point``,
recomputed explicitly rather than read off ``t``, so it stays a true
distance even when the ray direction is not unit length.

Example:
    >>> from termray.core.ray import Ray
    >>> from termray.core.vector import Direction, Point
    >>> from termray.geometry.triangle import Triangle, hit_triangle
    >>> tri = Triangle(Point(0, 0, 0), Point(2, 0, 0), Point(0, 2, 0))
    >>> hit = hit_triangle(Ray(Point(0.5, 0.5, -10), Direction(0, 0, 1)), tri)
    >>> round(hit.distance, 6)
    10.0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

from termray.core.ray import Ray
from termray.core.transform import Transform
from termray.core.vector import Point, cross, dot, lower_bound, norm, upper_bound

# Parallel-ray and self-intersection threshold
EPSILON = 1e-7


class TriangleHit(NamedTuple):
    """Result of a successful ray-triangle intersection.

    Attributes:
        point: The world-space intersection point.
        distance: Euclidean distance from the ray origin to ``point``.
    """

    point: Point
    distance: float


@dataclass(slots=True, eq=False)
class Triangle:
    """A triangle given by three vertices.

    Attributes:
        p0: First vertex.
        p1: Second vertex.
        p2: Third vertex.
    """

    p0: Point
    p1: Point
    p2: Point

    @property
    def vertices(self) -> tuple[Point, Point, Point]:
        return (self.p0, self.p1, self.p2)

    def bounds(self) -> tuple[Point, Point]:
        """Componentwise ``(min, max)`` over the three vertices."""
        return (
            lower_bound(self.p0, lower_bound(self.p1, self.p2)),
            upper_bound(self.p0, upper_bound(self.p1, self.p2)),
        )

    def apply(self, transform: Transform) -> Triangle:
        """Transform every vertex in place."""
        self.p0.apply(transform)
        self.p1.apply(transform)
        self.p2.apply(transform)
        return self

    def copy(self) -> Triangle:
        return Triangle(self.p0.copy(), self.p1.copy(), self.p2.copy())

    def intersect(self, ray: Ray) -> TriangleHit | None:
        return hit_triangle(ray, self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Triangle):
            return NotImplemented
        return self.p0 == other.p0 and self.p1 == other.p1 and self.p2 == other.p2

    __hash__ = None  # type: ignore[assignment]


def hit_triangle(ray: Ray, triangle: Triangle) -> TriangleHit | None:
    """Test for ray-triangle intersection.

    Edges and offsets are taken as free vectors so the 4-component ``dot``
    reduces to the ordinary 3D dot product throughout.

    Args:
        ray: The ray to test (direction need not be normalized).
        triangle: The triangle to test against.

    Returns:
        A TriangleHit for a forward hit, or None when the ray misses, runs
        parallel to the triangle plane, or hits behind its origin.
    """
    origin = ray.origin
    direction = ray.direction
    p0 = triangle.p0

    edge1 = (triangle.p1 - p0).as_direction()
    edge2 = (triangle.p2 - p0).as_direction()

    h = cross(edge2, direction)
    a = dot(edge1, h)
    if -EPSILON < a < EPSILON:
        return None

    f = 1.0 / a
    s = (origin - p0).as_direction()
    u = f * dot(s, h)
    if u < 0.0 or u > 1.0:
        return None

    q = cross(edge1, s)
    v = f * dot(direction, q)
    if v < 0.0 or u + v > 1.0:
        return None

    t = f * dot(edge2, q)
    if not t > EPSILON:
        return None

    point = origin + direction * t
    return TriangleHit(point=point, distance=norm(origin - point))
