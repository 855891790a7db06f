"""Affine 4x4 transforms for points, directions and other transforms.

A Transform is a 4x4 float64 matrix whose bottom row is fixed to
``[0, 0, 0, 1]``. Every constructor in this module produces such a matrix,
so applying one to a ``Point`` keeps ``w = 1`` and applying one to a
``Direction`` keeps ``w = 0`` (translations do not move directions).

Composition is by left multiplication: applying ``t2`` to ``t1`` leaves
``t1`` holding ``t2 @ t1``, i.e. ``t2`` is evaluated on top of ``t1``.

Example:
    >>> import math
    >>> from termray.core.transform import Transform
    >>> from termray.core.vector import Direction, Point
    >>> t = Transform.translate(Direction(1.0, 0.0, 0.0))
    >>> _ = t.apply(Transform.rotate(math.pi / 2, Direction(0.0, 0.0, 1.0)))
    >>> t.transform(Point(0.0, 0.0, 0.0)).allclose(Point(0.0, 1.0, 0.0))
    True
"""

from __future__ import annotations

import math
from typing import TypeVar

import numpy as np
import numpy.typing as npt

from termray.core.vector import HomogeneousVector

V = TypeVar("V", bound=HomogeneousVector)

_AFFINE_ROW = np.array([0.0, 0.0, 0.0, 1.0])


class Transform:
    """An affine transform stored as a 4x4 matrix.

    Attributes:
        matrix: The 4x4 float64 matrix. Mutated in place by ``apply``.
    """

    __slots__ = ("matrix",)

    def __init__(self, matrix: npt.ArrayLike | None = None) -> None:
        """Wrap a 4x4 matrix, or the identity when no matrix is given.

        Raises:
            ValueError: If the matrix is not 4x4 or its bottom row is not
                ``[0, 0, 0, 1]``.
        """
        if matrix is None:
            self.matrix = np.identity(4, dtype=np.float64)
            return

        data = np.array(matrix, dtype=np.float64)
        if data.shape != (4, 4):
            raise ValueError(f"Transform matrix must be 4x4, got shape {data.shape}")
        if not np.array_equal(data[3], _AFFINE_ROW):
            raise ValueError(f"Transform bottom row must be [0, 0, 0, 1], got {data[3].tolist()}")
        self.matrix = data

    # =========================================================================
    # Constructors
    # =========================================================================

    @classmethod
    def identity(cls) -> Transform:
        return cls()

    @classmethod
    def translate(cls, offset: HomogeneousVector) -> Transform:
        """Translation by the x, y, z components of ``offset``."""
        x, y, z = offset.xyz
        return cls(
            [
                [1.0, 0.0, 0.0, x],
                [0.0, 1.0, 0.0, y],
                [0.0, 0.0, 1.0, z],
                [0.0, 0.0, 0.0, 1.0],
            ]
        )

    @classmethod
    def rotate(cls, angle: float, axis: HomogeneousVector) -> Transform:
        """Rotation by ``angle`` radians about an axis through the origin.

        Builds the Rodrigues rotation matrix. The axis is used as given and
        is not normalized; pass a unit vector for a rigid rotation.

        Args:
            angle: Rotation angle in radians (right-hand rule).
            axis: Rotation axis; only x, y, z are read.
        """
        l, m, n = axis.xyz  # noqa: E741
        ct = math.cos(angle)
        st = math.sin(angle)
        cm = 1.0 - ct
        return cls(
            [
                [l * l * cm + ct, m * l * cm - n * st, n * l * cm + m * st, 0.0],
                [l * m * cm + n * st, m * m * cm + ct, n * m * cm - l * st, 0.0],
                [l * n * cm - m * st, m * n * cm + l * st, n * n * cm + ct, 0.0],
                [0.0, 0.0, 0.0, 1.0],
            ]
        )

    @classmethod
    def pivot(cls, angle: float, axis: HomogeneousVector, center: HomogeneousVector) -> Transform:
        """Rotation by ``angle`` about an axis passing through ``center``.

        Equivalent to translating ``center`` to the origin, rotating, then
        translating back.
        """
        offset = center.as_direction()
        result = cls.translate(-offset)
        result.apply(cls.rotate(angle, axis)).apply(cls.translate(offset))
        return result

    # =========================================================================
    # Composition
    # =========================================================================

    def apply(self, transform: Transform) -> Transform:
        """Compose ``transform`` on top of this one in place (self <- t @ self).

        Returns:
            self, to allow chaining.
        """
        self.matrix = transform.matrix @ self.matrix
        return self

    def compose(self, transform: Transform) -> Transform:
        """Return ``transform @ self`` without mutating either operand."""
        return Transform(transform.matrix @ self.matrix)

    def __matmul__(self, other: Transform) -> Transform:
        if not isinstance(other, Transform):
            return NotImplemented
        return Transform(self.matrix @ other.matrix)

    def transform(self, vector: V) -> V:
        """Return a transformed copy of a point or direction."""
        return vector.copy().apply(self)

    def copy(self) -> Transform:
        return Transform(self.matrix.copy())

    def allclose(self, other: Transform, atol: float = 1e-9) -> bool:
        return bool(np.allclose(self.matrix, other.matrix, rtol=0.0, atol=atol))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Transform):
            return NotImplemented
        return bool(np.array_equal(self.matrix, other.matrix))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        rows = ", ".join(str(row) for row in self.matrix.tolist())
        return f"Transform([{rows}])"

