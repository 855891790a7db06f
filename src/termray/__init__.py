"""CPU-side geometry and ray-intersection engine for character-grid rendering.

This package turns a scene of colored polygon objects into a grid of cells,
one primary ray per cell, each cell holding the nearest hit's color and
distance:
- Homogeneous points, directions and affine transforms
- Shared coordinate frames for moving groups of geometry together
- Slab-tested bounding boxes and Möller–Trumbore triangle intersection
- A camera whose eye and screen move as one rigid body
- A Taichi kernel that renders every cell in parallel

Subpackages:
    core: Vectors, transforms, frames, rays and the parallel renderer
    geometry: Triangle primitive and polygon dispatch
    scene: Objects, cells, render grid, scene assembly and configuration
    camera: Screen layout, camera and control actions
    preview: Distance shading and PNG export
"""

__version__ = "0.1.0"
