"""Homogeneous point and direction types for the geometry core.

Points and directions share one 4-component float64 representation that
differs only in the homogeneous tag ``w``:

- ``Point``: an affine position, ``w = 1``. Translations move it.
- ``Direction``: a free vector, ``w = 0``. Translations leave it alone.

Arithmetic (``+ - * /``) is componentwise over ``x, y, z`` only and never
touches ``w``; the result always has the type of the left operand. The tag is
reset only by explicit conversion (``as_point`` / ``as_direction``).

Example:
    >>> from termray.core.vector import Direction, Point, cross, dot
    >>> p = Point(1.0, 2.0, 3.0)
    >>> d = Direction(0.0, 0.0, -1.0)
    >>> (p + d * 2.0).xyz
    (1.0, 2.0, 1.0)
    >>> dot(d, d)
    1.0
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, TypeVar

import numpy as np
import numpy.typing as npt

if TYPE_CHECKING:
    from termray.core.transform import Transform

V = TypeVar("V", bound="HomogeneousVector")

Scalar = float | int


class HomogeneousVector:
    """Base class for 4-component homogeneous vectors.

    Subclasses fix the homogeneous tag through the ``W`` class attribute.
    The underlying array is exposed read-only through ``data``.
    """

    __slots__ = ("_data",)

    W: float = 0.0

    def __init__(self, x: Scalar, y: Scalar, z: Scalar) -> None:
        self._data = np.array([x, y, z, self.W], dtype=np.float64)

    @classmethod
    def from_array(cls: type[V], data: npt.ArrayLike) -> V:
        """Build a vector from 3 or 4 components.

        A 4th component, if present, is discarded in favour of the class tag.

        Raises:
            ValueError: If the input does not hold 3 or 4 components.
        """
        values = np.asarray(data, dtype=np.float64).reshape(-1)
        if values.shape[0] not in (3, 4):
            raise ValueError(f"Expected 3 or 4 components, got {values.shape[0]}")
        return cls(values[0], values[1], values[2])

    @classmethod
    def _wrap(cls: type[V], data: npt.NDArray[np.float64]) -> V:
        obj = cls.__new__(cls)
        obj._data = data
        return obj

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def x(self) -> float:
        return float(self._data[0])

    @property
    def y(self) -> float:
        return float(self._data[1])

    @property
    def z(self) -> float:
        return float(self._data[2])

    @property
    def w(self) -> float:
        return float(self._data[3])

    @property
    def xyz(self) -> tuple[float, float, float]:
        """The three real coordinates as a tuple of floats."""
        return (float(self._data[0]), float(self._data[1]), float(self._data[2]))

    @property
    def data(self) -> npt.NDArray[np.float64]:
        """A read-only view of the 4 homogeneous components."""
        view = self._data.view()
        view.flags.writeable = False
        return view

    def __iter__(self) -> Iterator[float]:
        return iter(self.xyz)

    def __getitem__(self, index: int) -> float:
        if not 0 <= index < 3:
            raise IndexError(f"{type(self).__name__} index out of range: {index}")
        return float(self._data[index])

    def __len__(self) -> int:
        return 3

    def __repr__(self) -> str:
        x, y, z = self.xyz
        return f"{type(self).__name__}({x!r}, {y!r}, {z!r})"

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return bool(np.array_equal(self._data, other._data))  # type: ignore[attr-defined]

    __hash__ = None  # type: ignore[assignment]

    def allclose(self, other: HomogeneousVector, atol: float = 1e-9) -> bool:
        """Compare the 3 real coordinates within an absolute tolerance."""
        return bool(np.allclose(self._data[:3], other._data[:3], rtol=0.0, atol=atol))

    def copy(self: V) -> V:
        return self._wrap(self._data.copy())

    # -------------------------------------------------------------------------
    # Conversion (resets the tag)
    # -------------------------------------------------------------------------

    def as_point(self) -> Point:
        return Point(self._data[0], self._data[1], self._data[2])

    def as_direction(self) -> Direction:
        return Direction(self._data[0], self._data[1], self._data[2])

    # -------------------------------------------------------------------------
    # Arithmetic over x, y, z only
    # -------------------------------------------------------------------------

    def _binary(
        self: V,
        other: HomogeneousVector | Scalar,
        op: Callable[[npt.NDArray[np.float64], npt.NDArray[np.float64] | Scalar], npt.NDArray[np.float64]],
    ) -> V:
        data = self._data.copy()
        if isinstance(other, HomogeneousVector):
            data[:3] = op(data[:3], other._data[:3])
        elif isinstance(other, (int, float, np.floating, np.integer)):
            data[:3] = op(data[:3], float(other))
        else:
            return NotImplemented
        return self._wrap(data)

    def __add__(self: V, other: HomogeneousVector | Scalar) -> V:
        return self._binary(other, np.add)

    def __sub__(self: V, other: HomogeneousVector | Scalar) -> V:
        return self._binary(other, np.subtract)

    def __mul__(self: V, other: HomogeneousVector | Scalar) -> V:
        return self._binary(other, np.multiply)

    def __rmul__(self: V, other: Scalar) -> V:
        return self._binary(other, np.multiply)

    def __truediv__(self: V, other: HomogeneousVector | Scalar) -> V:
        with np.errstate(divide="ignore", invalid="ignore"):
            return self._binary(other, np.divide)

    def __neg__(self: V) -> V:
        data = self._data.copy()
        data[:3] = -data[:3]
        return self._wrap(data)

    # -------------------------------------------------------------------------
    # Transformable protocol
    # -------------------------------------------------------------------------

    def apply(self: V, transform: Transform) -> V:
        """Transform this vector in place by a 4x4 affine matrix.

        Returns:
            self, to allow chaining.
        """
        self._data = transform.matrix @ self._data
        return self


class Point(HomogeneousVector):
    """An affine position (homogeneous tag ``w = 1``)."""

    __slots__ = ()

    W = 1.0

    @classmethod
    def origin(cls) -> Point:
        return cls(0.0, 0.0, 0.0)


class Direction(HomogeneousVector):
    """A free vector (homogeneous tag ``w = 0``)."""

    __slots__ = ()

    W = 0.0


# =============================================================================
# Free functions
# =============================================================================


def cross(a: HomogeneousVector, b: V) -> V:
    """Cross product of the 3 real coordinates.

    The result takes the type (and therefore the tag) of ``b``.
    """
    ax, ay, az = a._data[0], a._data[1], a._data[2]
    bx, by, bz = b._data[0], b._data[1], b._data[2]
    data = b._data.copy()
    data[0] = ay * bz - az * by
    data[1] = az * bx - ax * bz
    data[2] = ax * by - ay * bx
    return b._wrap(data)


def dot(a: HomogeneousVector, b: HomogeneousVector) -> float:
    """Full 4-component dot product, tags included.

    For two directions this is the ordinary 3D dot product; for two points it
    carries an extra ``1 * 1`` from the tags.
    """
    return float(np.dot(a._data, b._data))


def lower_bound(a: HomogeneousVector, b: V) -> V:
    """Componentwise minimum over x, y, z; the result keeps ``b``'s type."""
    data = b._data.copy()
    data[:3] = np.minimum(a._data[:3], data[:3])
    return b._wrap(data)


def upper_bound(a: HomogeneousVector, b: V) -> V:
    """Componentwise maximum over x, y, z; the result keeps ``b``'s type."""
    data = b._data.copy()
    data[:3] = np.maximum(a._data[:3], data[:3])
    return b._wrap(data)


def norm(v: HomogeneousVector) -> float:
    """Euclidean length of the 3 real coordinates."""
    x, y, z = v._data[0], v._data[1], v._data[2]
    return math.sqrt(x * x + y * y + z * z)


def distance(a: HomogeneousVector, b: HomogeneousVector) -> float:
    """Euclidean distance between the 3 real coordinates of ``a`` and ``b``."""
    return norm(a - b)
