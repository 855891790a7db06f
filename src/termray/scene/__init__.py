"""Scene module for objects, render output and scene assembly.

This module handles scene representation and per-cell ray resolution:

Components:
    cell: Rgb colors, Empty/Hit cells and the RenderGrid output
    objects: Colored polygon groups with cached bounding boxes
    scene: Objects plus a camera, rendered cell by cell
    config: Plain-data scene description with dict (de)serialization
    demo: Three-panel demo scene and its spin animation

Every render overwrites the whole grid; for each cell the nearest hit over
all objects wins, and on exactly equal distances the earlier object wins.
"""

from .cell import EMPTY, Cell, Empty, Hit, RenderGrid, Rgb
from .config import (
    CameraConfig,
    ObjectConfig,
    SceneConfig,
    build_scene,
    scene_to_config,
)
from .demo import (
    SPIN_PIVOT,
    SPIN_STEPS,
    DemoParams,
    create_demo_scene,
    spin_step,
    spin_transform,
)
from .objects import SceneObject
from .scene import Scene

__all__ = [
    # Cells and output
    "Rgb",
    "Empty",
    "Hit",
    "EMPTY",
    "Cell",
    "RenderGrid",
    # Objects and scene
    "SceneObject",
    "Scene",
    # Configuration
    "CameraConfig",
    "ObjectConfig",
    "SceneConfig",
    "build_scene",
    "scene_to_config",
    # Demo scene
    "DemoParams",
    "SPIN_PIVOT",
    "SPIN_STEPS",
    "create_demo_scene",
    "spin_step",
    "spin_transform",
]
