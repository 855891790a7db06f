"""Camera actions for an input-handling front end.

Maps high-level actions to camera transforms so that a key-polling front end
only has to translate keys into ``CameraAction`` values:

- Move/strafe: translation in the camera's own orientation
  (``apply_relative``), so "forward" follows the current facing.
- Orbit: rotation about the camera pivot with a world-space axis (``apply``).
- Dolly: moves only the eye's local coordinate, changing the eye-to-screen
  distance while the screen stays put.
"""

from __future__ import annotations

import math
from enum import Enum

from termray.camera.camera import Camera
from termray.core.transform import Transform
from termray.core.vector import Direction

MOVE_STEP = 2.5
ORBIT_STEP = 2.0 * math.pi / 180.0
DOLLY_STEP = 5.0


class CameraAction(Enum):
    """Actions an input collaborator can request."""

    FORWARD = "forward"
    BACKWARD = "backward"
    STRAFE_LEFT = "strafe_left"
    STRAFE_RIGHT = "strafe_right"
    ORBIT_UP = "orbit_up"
    ORBIT_DOWN = "orbit_down"
    ORBIT_LEFT = "orbit_left"
    ORBIT_RIGHT = "orbit_right"
    DOLLY_OUT = "dolly_out"
    DOLLY_IN = "dolly_in"


_MOVES = {
    CameraAction.FORWARD: Direction(0.0, 0.0, -MOVE_STEP),
    CameraAction.BACKWARD: Direction(0.0, 0.0, MOVE_STEP),
    CameraAction.STRAFE_LEFT: Direction(-MOVE_STEP, 0.0, 0.0),
    CameraAction.STRAFE_RIGHT: Direction(MOVE_STEP, 0.0, 0.0),
}

_ORBIT_AXES = {
    CameraAction.ORBIT_UP: Direction(-1.0, 0.0, 0.0),
    CameraAction.ORBIT_DOWN: Direction(1.0, 0.0, 0.0),
    CameraAction.ORBIT_LEFT: Direction(0.0, 1.0, 0.0),
    CameraAction.ORBIT_RIGHT: Direction(0.0, -1.0, 0.0),
}

_DOLLIES = {
    CameraAction.DOLLY_OUT: Direction(0.0, 0.0, DOLLY_STEP),
    CameraAction.DOLLY_IN: Direction(0.0, 0.0, -DOLLY_STEP),
}

# Keyboard layout used by the terminal front end
KEY_BINDINGS: dict[str, CameraAction] = {
    "w": CameraAction.FORWARD,
    "s": CameraAction.BACKWARD,
    "a": CameraAction.STRAFE_LEFT,
    "d": CameraAction.STRAFE_RIGHT,
    "W": CameraAction.ORBIT_UP,
    "S": CameraAction.ORBIT_DOWN,
    "A": CameraAction.ORBIT_LEFT,
    "D": CameraAction.ORBIT_RIGHT,
    "f": CameraAction.DOLLY_OUT,
    "F": CameraAction.DOLLY_IN,
}


def apply_action(camera: Camera, action: CameraAction) -> Camera:
    """Apply one action to the camera and return it."""
    if action in _MOVES:
        camera.apply_relative(Transform.translate(_MOVES[action]))
    elif action in _ORBIT_AXES:
        camera.apply(Transform.pivot(ORBIT_STEP, _ORBIT_AXES[action], camera.get_pivot()))
    elif action in _DOLLIES:
        camera.eye.local().apply(Transform.translate(_DOLLIES[action]))
    else:
        raise ValueError(f"Unknown camera action: {action!r}")
    return camera


def apply_key(camera: Camera, key: str) -> bool:
    """Apply the action bound to ``key``; False if the key is unbound."""
    action = KEY_BINDINGS.get(key)
    if action is None:
        return False
    apply_action(camera, action)
    return True
