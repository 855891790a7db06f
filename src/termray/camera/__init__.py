"""Camera module for screen layout and primary ray generation.

This module provides the camera that turns screen cells into rays:

Components:
    screen: Grid of cell centers in a local z=0 plane
    camera: Eye point and screen bound to one shared frame
    controls: Action mapping for move, orbit and dolly inputs

The camera supports:
    - World-space moves (apply) and camera-relative moves (apply_relative)
    - Dolly/zoom by moving the eye's local coordinate only
    - One un-normalized primary ray per screen cell
"""

from .camera import DEFAULT_EYE_DISTANCE, Camera
from .controls import KEY_BINDINGS, CameraAction, apply_action, apply_key
from .screen import Screen

__all__ = [
    "Camera",
    "DEFAULT_EYE_DISTANCE",
    "Screen",
    "CameraAction",
    "KEY_BINDINGS",
    "apply_action",
    "apply_key",
]
