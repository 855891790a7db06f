"""Ray data structure with precomputed slab-test terms.

A Ray stores its origin and direction together with the reciprocal of each
direction component and a sign bit per axis. Both are derived once at
construction and never change, so the axis-aligned box test reduces to a few
multiplications per axis.

Zero direction components are legal: their reciprocals are IEEE ``+inf`` or
``-inf`` and the box test relies on that. The direction is never normalized.

Example:
    >>> from termray.core.ray import Ray
    >>> from termray.core.vector import Direction, Point
    >>> ray = Ray(Point(-1.0, 0.5, 0.5), Direction(1.0, 0.0, 0.0))
    >>> ray.collides_box((Point(0.0, 0.0, 0.0), Point(1.0, 1.0, 1.0)))
    True
    >>> ray.inv_direction
    (1.0, inf, inf)
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

from termray.core.vector import Direction, HomogeneousVector, Point


class Ray:
    """A ray with an origin point and a (not necessarily unit) direction.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray.
        inv_direction: ``1 / direction`` per axis, IEEE semantics.
        sign: Per-axis ``1`` if the reciprocal is negative, else ``0``.
    """

    __slots__ = ("origin", "direction", "inv_direction", "sign")

    def __init__(self, origin: Point, direction: Direction) -> None:
        self.origin = origin.copy()
        self.direction = direction.copy()
        with np.errstate(divide="ignore"):
            inv = np.divide(1.0, np.asarray(self.direction.xyz, dtype=np.float64))
        self.inv_direction: tuple[float, float, float] = (float(inv[0]), float(inv[1]), float(inv[2]))
        self.sign: tuple[int, int, int] = (
            int(inv[0] < 0.0),
            int(inv[1] < 0.0),
            int(inv[2] < 0.0),
        )

    def at(self, t: float) -> Point:
        """The point ``origin + direction * t``."""
        return self.origin + self.direction * t

    def collides_box(self, bounds: Sequence[HomogeneousVector]) -> bool:
        """Slab test against an axis-aligned box.

        For each axis the ray's entry and exit parameters are computed from
        the near and far slab (picked by the sign bit); the running entry
        maximum and exit minimum must never cross. Boxes lying entirely
        behind the origin are rejected.

        Args:
            bounds: ``(min_corner, max_corner)`` of the box.

        Returns:
            True if the ray (for t >= 0) passes through the box.
        """
        origin = self.origin.xyz
        corners = (bounds[0].xyz, bounds[1].xyz)
        t_enter = -math.inf
        t_exit = math.inf

        for axis in range(3):
            sign = self.sign[axis]
            inv = self.inv_direction[axis]
            t_near = (corners[sign][axis] - origin[axis]) * inv
            t_far = (corners[1 - sign][axis] - origin[axis]) * inv

            # NaN (0 * inf on a slab boundary) compares false and is skipped.
            if t_near > t_enter:
                t_enter = t_near
            if t_far < t_exit:
                t_exit = t_far
            if t_enter > t_exit:
                return False

        return t_exit >= 0.0

    def __repr__(self) -> str:
        return f"Ray(origin={self.origin!r}, direction={self.direction!r})"
