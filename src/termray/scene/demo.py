"""Demo scene: three colored panels spinning about a shared pivot.

The demo consists of:
- A square blue panel at z = -10 facing the camera (two triangles)
- A purple side panel along x = 10 reaching back to z = -20 (two triangles)
- A green slanted triangle joining the back edge to the front panel

Each animation step rotates every object about the vertical axis through
``SPIN_PIVOT``; a full turn takes ``SPIN_STEPS`` steps.

Example:
    >>> from termray.scene.demo import create_demo_scene, spin_step
    >>> scene = create_demo_scene()
    >>> len(scene.objects)
    3
    >>> spin_step(scene)
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from termray.camera.camera import Camera
from termray.core.transform import Transform
from termray.core.vector import Direction, Point
from termray.geometry.triangle import Triangle
from termray.scene.cell import Rgb
from termray.scene.objects import SceneObject
from termray.scene.scene import Scene

# =============================================================================
# Demo Constants
# =============================================================================

PANEL_COLOR = Rgb(55, 155, 255)
SIDE_COLOR = Rgb(155, 55, 155)
SLANT_COLOR = Rgb(155, 255, 55)

SPIN_PIVOT = (15.0, 15.0, -10.0)
SPIN_AXIS = (0.0, 1.0, 0.0)

# One full turn every 240 steps (4 seconds at 60 steps per second)
SPIN_STEPS = 240


@dataclass
class DemoParams:
    """Parameters for the demo scene.

    Attributes:
        panel_color: Color of the front panel.
        side_color: Color of the side panel.
        slant_color: Color of the slanted triangle.
        camera: Camera to view the scene through; None for ``Camera.default()``.
    """

    panel_color: Rgb = PANEL_COLOR
    side_color: Rgb = SIDE_COLOR
    slant_color: Rgb = SLANT_COLOR
    camera: Camera | None = None


def _triangle(*vertices: tuple[float, float, float]) -> Triangle:
    p0, p1, p2 = (Point(*v) for v in vertices)
    return Triangle(p0, p1, p2)


def create_demo_scene(params: DemoParams | None = None) -> Scene:
    """Build the three-object demo scene."""
    if params is None:
        params = DemoParams()

    panel = SceneObject(
        params.panel_color,
        [
            _triangle((10.0, 10.0, -10.0), (10.0, 20.0, -10.0), (20.0, 20.0, -10.0)),
            _triangle((10.0, 10.0, -10.0), (20.0, 10.0, -10.0), (20.0, 20.0, -10.0)),
        ],
    )
    side = SceneObject(
        params.side_color,
        [
            _triangle((10.0, 10.0, -10.0), (10.0, 20.0, -10.0), (10.0, 20.0, -20.0)),
            _triangle((10.0, 10.0, -10.0), (10.0, 10.0, -20.0), (10.0, 20.0, -20.0)),
        ],
    )
    slant = SceneObject(
        params.slant_color,
        [_triangle((10.0, 10.0, -20.0), (20.0, 10.0, -20.0), (20.0, 20.0, -10.0))],
    )
    return Scene([panel, side, slant], params.camera)


def spin_transform(steps: int = SPIN_STEPS) -> Transform:
    """Rotation of ``1 / steps`` of a turn about the spin pivot."""
    return Transform.pivot(2.0 * math.pi / steps, Direction(*SPIN_AXIS), Point(*SPIN_PIVOT))


def spin_step(scene: Scene, steps: int = SPIN_STEPS) -> None:
    """Advance the animation by one step, rotating every object."""
    transform = spin_transform(steps)
    for obj in scene.objects:
        obj.apply(transform)
