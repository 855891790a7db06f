"""Camera built from an eye point and a screen sharing one frame.

The eye and the screen are both ``Relative`` bindings to the same
``SharedFrame``. Moving the frame (``apply`` / ``apply_relative``) carries
both along and preserves their relative geometry. Moving the eye's own
local coordinates (``camera.eye.local().apply(t)``) bypasses the frame and
changes the eye-to-screen distance, which is how a dolly/zoom is done.

Primary rays start at a world-space cell center and point along the line
from the eye through that center. The direction ``center - eye`` is never
normalized.

Example:
    >>> from termray.camera.camera import Camera
    >>> from termray.core.vector import Point
    >>> camera = Camera((0.25, 0.25), (2, 2), Point(0.25, 0.25, 45.0))
    >>> camera.get_ray((1, 1)).direction.xyz
    (0.125, 0.125, -45.0)
"""

from __future__ import annotations

from termray.camera.screen import Screen
from termray.core.frame import Relative, SharedFrame
from termray.core.ray import Ray
from termray.core.transform import Transform
from termray.core.vector import Point

# Eye distance in front of the default screen plane
DEFAULT_EYE_DISTANCE = 45.0


class Camera:
    """An eye point and a screen bound to one shared frame.

    Attributes:
        eye: The eye position, in the camera frame's local coordinates.
        screen: The screen, in the camera frame's local coordinates.
    """

    __slots__ = ("_frame", "eye", "screen")

    def __init__(
        self,
        cell_size: tuple[float, float],
        screen_size: tuple[int, int],
        eye: Point,
    ) -> None:
        self._frame = SharedFrame()
        self.eye: Relative[Point] = Relative(self._frame, eye.copy())
        self.screen: Relative[Screen] = Relative(self._frame, Screen(cell_size, screen_size))

    @classmethod
    def default(cls) -> Camera:
        """A 64x64 screen of 0.25-unit cells, eye centered 45 units in front."""
        screen = Screen.default()
        width, height = screen.dimensions
        return cls(
            screen.cell_size,
            screen.screen_size,
            Point(width / 2.0, height / 2.0, DEFAULT_EYE_DISTANCE),
        )

    @property
    def frame(self) -> SharedFrame:
        """A handle to the frame shared by the eye and the screen."""
        return self._frame.clone()

    # =========================================================================
    # Movement
    # =========================================================================

    def apply(self, transform: Transform) -> Camera:
        """Move eye and screen together, ``transform`` in world coordinates."""
        self._frame.apply(transform)
        return self

    def apply_relative(self, transform: Transform) -> Camera:
        """Move eye and screen together, ``transform`` in camera coordinates."""
        self._frame.apply_relative(transform)
        return self

    # =========================================================================
    # Queries
    # =========================================================================

    def get_screen_size(self) -> tuple[int, int]:
        """``(columns, rows)`` of the current screen."""
        return self.screen.local().screen_size

    def get_center(self, cell: tuple[int, int]) -> Point | None:
        """World-space center of cell ``(x, y)``, or None if out of range."""

        def realize(screen: Screen, frame: SharedFrame) -> Point | None:
            center = screen.get_center(cell)
            return None if center is None else frame.apply_to(center)

        return self.screen.map_with_frame(realize)

    def get_screen_centers(self) -> list[list[Point]]:
        """World-space centers of every cell, ``rows x columns``."""
        return self.screen.map_with_frame(
            lambda screen, frame: [[frame.apply_to(c) for c in row] for row in screen.centers]
        )

    def get_ray(self, cell: tuple[int, int]) -> Ray | None:
        """Primary ray for cell ``(x, y)``, or None if out of range."""
        center = self.get_center(cell)
        if center is None:
            return None
        return Ray(center, (center - self.eye.get_absolute()).as_direction())

    def get_pivot(self) -> Point:
        """Midpoint between the eye and the center cell; the default orbit pivot."""
        columns, rows = self.get_screen_size()
        center = self.get_center((columns // 2, rows // 2))
        assert center is not None
        return (self.eye.get_absolute() + center) / 2.0

    def __repr__(self) -> str:
        return (
            f"Camera(screen_size={self.get_screen_size()}, "
            f"eye={self.eye.get_absolute()!r})"
        )
