"""Core geometry module.

This module contains the fundamental building blocks of the engine:

Components:
    vector: Homogeneous Point (w=1) and Direction (w=0) types and helpers
    transform: Affine 4x4 transforms (identity, translate, rotate, pivot)
    frame: Exclusive and shared coordinate frames and values bound to them
    ray: Ray data structure with precomputed slab-test terms
    parallel: Taichi kernel that renders a whole screen at once

Everything except ``parallel`` is plain Python and NumPy and runs without
Taichi being initialized.
"""

from .frame import Frame, Relative, SelfRelative, SharedFrame, Transformable
from .ray import Ray
from .transform import Transform
from .vector import (
    Direction,
    HomogeneousVector,
    Point,
    cross,
    distance,
    dot,
    lower_bound,
    norm,
    upper_bound,
)

# Note: parallel is NOT imported here so that importing the core does not
# require Taichi. Import it directly from termray.core.parallel when needed.

__all__ = [
    "HomogeneousVector",
    "Point",
    "Direction",
    "cross",
    "dot",
    "lower_bound",
    "upper_bound",
    "norm",
    "distance",
    "Transform",
    "Frame",
    "SharedFrame",
    "SelfRelative",
    "Relative",
    "Transformable",
    "Ray",
]
