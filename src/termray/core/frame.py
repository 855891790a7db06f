"""Coordinate frames and values bound to them.

A frame holds one accumulated ``Transform`` mapping local coordinates into
world coordinates. Geometry bound to a frame is stored in the frame's local
coordinates and realized into world coordinates on demand, so an entity can
be moved or re-oriented without re-baking its local geometry.

Two ownership flavours are provided:

- ``Frame`` / ``SelfRelative``: the frame belongs to exactly one binding.
- ``SharedFrame`` / ``Relative``: several bindings hold handles to the same
  frame and observe every mutation made through any of them.

Frames move in two ways:

- ``apply(t)``: ``t`` is expressed in world (outer) coordinates,
  ``frame <- t @ frame``.
- ``apply_relative(t)``: ``t`` is expressed in the frame's current local
  orientation, ``frame <- frame @ t``. Translating forward this way moves
  along the direction the frame is currently facing.

Example:
    >>> from termray.core.frame import Relative, SharedFrame
    >>> from termray.core.transform import Transform
    >>> from termray.core.vector import Direction, Point
    >>> frame = SharedFrame()
    >>> a = Relative(frame, Point(0.0, 0.0, 0.0))
    >>> b = Relative(frame.clone(), Point(1.0, 0.0, 0.0))
    >>> _ = frame.apply(Transform.translate(Direction(0.0, 5.0, 0.0)))
    >>> a.get_absolute().xyz, b.get_absolute().xyz
    ((0.0, 5.0, 0.0), (1.0, 5.0, 0.0))
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import TYPE_CHECKING, Generic, Protocol, TypeVar

from termray.core.transform import Transform

if TYPE_CHECKING:
    from termray.core.ray import Ray


class Transformable(Protocol):
    """Anything that can be copied and transformed in place."""

    def copy(self): ...

    def apply(self, transform: Transform): ...


T = TypeVar("T", bound=Transformable)
R = TypeVar("R")


class Frame:
    """An exclusively owned coordinate frame.

    The accumulated transform is always the composition of every transform
    applied so far, in application order. A re-entrant lock serializes
    mutation and realization so a frame handed to another thread is never
    observed half-updated.
    """

    __slots__ = ("_transform", "_lock")

    def __init__(self, transform: Transform | None = None) -> None:
        self._transform = transform.copy() if transform is not None else Transform.identity()
        self._lock = threading.RLock()

    @property
    def transform(self) -> Transform:
        """A copy of the accumulated local-to-world transform."""
        with self._lock:
            return self._transform.copy()

    def apply(self, transform: Transform) -> Frame:
        """World-level move: ``frame <- transform @ frame``."""
        with self._lock:
            self._transform.apply(transform)
        return self

    def apply_relative(self, transform: Transform) -> Frame:
        """Frame-local move: ``frame <- frame @ transform``."""
        with self._lock:
            self._transform = transform.compose(self._transform)
        return self

    def apply_to(self, value: T) -> T:
        """Return a copy of ``value`` mapped from local to world coordinates."""
        with self._lock:
            return value.copy().apply(self._transform)

    def reset(self) -> Frame:
        """Return the frame to the identity transform."""
        with self._lock:
            self._transform = Transform.identity()
        return self

    def __repr__(self) -> str:
        return f"Frame({self._transform!r})"


class SharedFrame:
    """A handle to a frame shared by several bindings.

    ``clone()`` duplicates the handle, not the frame: every handle produced
    from the same original sees the same accumulated transform.
    """

    __slots__ = ("_frame",)

    def __init__(self, frame: Frame | None = None) -> None:
        self._frame = frame if frame is not None else Frame()

    @property
    def transform(self) -> Transform:
        return self._frame.transform

    def apply(self, transform: Transform) -> SharedFrame:
        self._frame.apply(transform)
        return self

    def apply_relative(self, transform: Transform) -> SharedFrame:
        self._frame.apply_relative(transform)
        return self

    def apply_to(self, value: T) -> T:
        return self._frame.apply_to(value)

    def reset(self) -> SharedFrame:
        self._frame.reset()
        return self

    def clone(self) -> SharedFrame:
        """A new handle to the same underlying frame."""
        return SharedFrame(self._frame)

    def shares_with(self, other: SharedFrame) -> bool:
        """Whether both handles refer to the same underlying frame."""
        return self._frame is other._frame

    def __repr__(self) -> str:
        return f"SharedFrame({self._frame.transform!r})"


class _Bound(Generic[T]):
    """Common behaviour of a local value paired with a frame."""

    __slots__ = ("_value", "_frame")

    _value: T
    _frame: Frame | SharedFrame

    def get_absolute(self) -> T:
        """The value in world coordinates; re-derived on every call."""
        return self._frame.apply_to(self._value)

    def local(self) -> T:
        """The local value itself, with no transform applied.

        Mutating the returned object changes the local geometry independently
        of the frame.
        """
        return self._value

    def absolute_field(self, fn: Callable[[T], Transformable]) -> Transformable:
        """World-space value of something derived from the local value.

        ``fn`` picks or builds a transformable from the local value; only
        that result is transformed, so the rest of the value is never copied.
        """
        return self._frame.apply_to(fn(self._value))

    def map_with_frame(self, fn: Callable[[T, Frame | SharedFrame], R]) -> R:
        """Call ``fn(local_value, frame)`` without copying the local value."""
        return fn(self._value, self._frame)

    def apply(self, transform: Transform) -> _Bound[T]:
        """Move the frame in world coordinates; the local value is untouched."""
        self._frame.apply(transform)
        return self

    def apply_relative(self, transform: Transform) -> _Bound[T]:
        """Move the frame in its own local orientation."""
        self._frame.apply_relative(transform)
        return self

    def intersect(self, ray: Ray):
        """Intersect the world-space value with a ray."""
        return self.get_absolute().intersect(ray)  # type: ignore[attr-defined]


class SelfRelative(_Bound[T]):
    """A local value with its own private frame."""

    __slots__ = ()

    def __init__(self, value: T) -> None:
        self._value = value
        self._frame = Frame()

    @property
    def frame(self) -> Frame:
        return self._frame  # type: ignore[return-value]

    def __repr__(self) -> str:
        return f"SelfRelative({self._value!r}, {self._frame!r})"


class Relative(_Bound[T]):
    """A local value bound to a shared frame."""

    __slots__ = ()

    def __init__(self, frame: SharedFrame, value: T) -> None:
        self._value = value
        self._frame = frame.clone()

    @property
    def frame(self) -> SharedFrame:
        """A handle to the shared frame this value is bound to."""
        return self._frame.clone()  # type: ignore[union-attr]

    def __repr__(self) -> str:
        return f"Relative({self._value!r}, {self._frame!r})"
