"""Taichi renderer that resolves every screen cell in one kernel launch.

``Scene.render`` walks cells one at a time in Python. Cells are independent,
so this module packs the scene into float64 Taichi fields and runs the same
per-cell work in parallel:

1. ``upload(scene)`` flattens every object's world-space triangles into one
   array, recording each object's first triangle, triangle count, bounding
   box and color.
2. ``render_into(grid)`` builds one primary ray per cell on the host with
   NumPy (origin at the world cell center, direction ``center - eye``),
   launches the kernel, and writes a Cell for every result.

The kernel tests each object's box with the slab test and then its
triangles with Möller–Trumbore, keeping a hit only when it is strictly
nearer than the best so far. Objects and triangles are visited in scene
order, so ties go to the earlier object, as in ``Scene.render``.

Requires ``termray.config.init_taichi()`` before construction.

Example:
    >>> from termray.config import init_taichi
    >>> from termray.core.parallel import ParallelRenderer
    >>> from termray.scene.demo import create_demo_scene
    >>> init_taichi()
    >>> scene = create_demo_scene()
    >>> renderer = ParallelRenderer(*scene.camera.get_screen_size())
    >>> renderer.upload(scene)
    >>> grid = scene.empty_render()
    >>> renderer.render_into(grid)
"""

from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from termray.geometry.triangle import EPSILON, Triangle
from termray.scene.cell import EMPTY, Hit, Rgb

if TYPE_CHECKING:
    from termray.camera.camera import Camera
    from termray.scene.cell import RenderGrid
    from termray.scene.scene import Scene

vec3 = tm.vec3

DEFAULT_MAX_TRIANGLES = 4096
DEFAULT_MAX_OBJECTS = 256


# =============================================================================
# Intersection Routines
# =============================================================================


@ti.func
def collides_box(origin: vec3, inv_direction: vec3, low: vec3, high: vec3) -> ti.i32:
    """Slab test of a ray against the box ``[low, high]``.

    Mirrors ``Ray.collides_box``: the near slab is picked by the sign of the
    reciprocal, NaN slab parameters are ignored, and boxes entirely behind
    the origin are rejected.

    Returns:
        1 if the ray passes through the box for some t >= 0, else 0.
    """
    t_enter = -tm.inf
    t_exit = tm.inf
    crossed = 0

    for axis in ti.static(range(3)):
        inv = inv_direction[axis]
        near = low[axis]
        far = high[axis]
        if inv < 0.0:
            near = high[axis]
            far = low[axis]
        t_near = (near - origin[axis]) * inv
        t_far = (far - origin[axis]) * inv

        if t_near > t_enter:
            t_enter = t_near
        if t_far < t_exit:
            t_exit = t_far
        if t_enter > t_exit:
            crossed = 1

    result = 0
    if crossed == 0 and t_exit >= 0.0:
        result = 1
    return result


@ti.func
def hit_triangle(origin: vec3, direction: vec3, p0: vec3, p1: vec3, p2: vec3) -> ti.f64:
    """Möller–Trumbore ray-triangle test.

    Returns:
        The distance from ``origin`` to the hit point, or ``inf`` when the
        ray misses, is parallel to the plane, or hits behind its origin.
    """
    result = tm.inf

    edge1 = p1 - p0
    edge2 = p2 - p0
    h = tm.cross(edge2, direction)
    a = tm.dot(edge1, h)

    if a <= -EPSILON or a >= EPSILON:
        f = 1.0 / a
        s = origin - p0
        u = f * tm.dot(s, h)
        if u >= 0.0 and u <= 1.0:
            q = tm.cross(edge1, s)
            v = f * tm.dot(direction, q)
            if v >= 0.0 and u + v <= 1.0:
                t = f * tm.dot(edge2, q)
                if t > EPSILON:
                    point = origin + direction * t
                    result = tm.length(origin - point)

    return result


# =============================================================================
# Renderer
# =============================================================================


@ti.data_oriented
class ParallelRenderer:
    """Renders a scene into a RenderGrid with a single Taichi kernel.

    Attributes:
        width: Screen columns.
        height: Screen rows.
        max_triangles: Capacity of the triangle fields.
        max_objects: Capacity of the object fields.
    """

    def __init__(
        self,
        width: int,
        height: int,
        max_triangles: int = DEFAULT_MAX_TRIANGLES,
        max_objects: int = DEFAULT_MAX_OBJECTS,
    ) -> None:
        """Allocate fields for the given screen size and capacities.

        Raises:
            ValueError: If a dimension or capacity is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Screen size must be positive, got {width}x{height}")
        if max_triangles <= 0 or max_objects <= 0:
            raise ValueError(
                f"Capacities must be positive, got {max_triangles} triangles, {max_objects} objects"
            )

        self.width = width
        self.height = height
        self.max_triangles = max_triangles
        self.max_objects = max_objects

        # Packed triangles, grouped by object
        self.tri_p0 = ti.Vector.field(3, dtype=ti.f64, shape=max_triangles)
        self.tri_p1 = ti.Vector.field(3, dtype=ti.f64, shape=max_triangles)
        self.tri_p2 = ti.Vector.field(3, dtype=ti.f64, shape=max_triangles)

        # Per-object triangle range and bounding box
        self.obj_start = ti.field(dtype=ti.i32, shape=max_objects)
        self.obj_count = ti.field(dtype=ti.i32, shape=max_objects)
        self.obj_low = ti.Vector.field(3, dtype=ti.f64, shape=max_objects)
        self.obj_high = ti.Vector.field(3, dtype=ti.f64, shape=max_objects)
        self.num_objects = ti.field(dtype=ti.i32, shape=())

        # Primary rays, one per cell, indexed [row, column]
        self.ray_origin = ti.Vector.field(3, dtype=ti.f64, shape=(height, width))
        self.ray_direction = ti.Vector.field(3, dtype=ti.f64, shape=(height, width))
        self.ray_inv_direction = ti.Vector.field(3, dtype=ti.f64, shape=(height, width))

        # Results: nearest distance and the object index (-1 for no hit)
        self.hit_distance = ti.field(dtype=ti.f64, shape=(height, width))
        self.hit_object = ti.field(dtype=ti.i32, shape=(height, width))

        self._colors: list[Rgb] = []
        self._rays_ready = False

    @property
    def object_count(self) -> int:
        return int(self.num_objects[None])

    # =========================================================================
    # Upload
    # =========================================================================

    def upload(self, scene: "Scene") -> None:
        """Copy the scene's current world geometry and camera rays into the fields.

        Must be called again after the scene's objects or camera move.

        Raises:
            RuntimeError: If the scene has more objects or triangles than
                the renderer was allocated for.
            TypeError: If an object holds a polygon other than a Triangle.
            ValueError: If the camera's screen size differs from the renderer's.
        """
        objects = scene.objects
        if len(objects) > self.max_objects:
            raise RuntimeError(f"Maximum number of objects ({self.max_objects}) exceeded")
        total = sum(len(obj.polygons) for obj in objects)
        if total > self.max_triangles:
            raise RuntimeError(f"Maximum number of triangles ({self.max_triangles}) exceeded")

        points = np.zeros((3, self.max_triangles, 3), dtype=np.float64)
        starts = np.zeros(self.max_objects, dtype=np.int32)
        counts = np.zeros(self.max_objects, dtype=np.int32)
        lows = np.zeros((self.max_objects, 3), dtype=np.float64)
        highs = np.zeros((self.max_objects, 3), dtype=np.float64)

        idx = 0
        for i, obj in enumerate(objects):
            starts[i] = idx
            counts[i] = len(obj.polygons)
            lows[i] = obj.bounds[0].xyz
            highs[i] = obj.bounds[1].xyz
            for polygon in obj.polygons:
                if not isinstance(polygon, Triangle):
                    raise TypeError(f"Unsupported polygon type: {type(polygon).__name__}")
                for k, vertex in enumerate(polygon.vertices):
                    points[k, idx] = vertex.xyz
                idx += 1

        self.tri_p0.from_numpy(points[0])
        self.tri_p1.from_numpy(points[1])
        self.tri_p2.from_numpy(points[2])
        self.obj_start.from_numpy(starts)
        self.obj_count.from_numpy(counts)
        self.obj_low.from_numpy(lows)
        self.obj_high.from_numpy(highs)
        self.num_objects[None] = len(objects)
        self._colors = [obj.color for obj in objects]
        self.upload_rays(scene.camera)

    def upload_rays(self, camera: "Camera") -> None:
        """Build and upload one primary ray per screen cell.

        Raises:
            ValueError: If the camera's screen size differs from the renderer's.
        """
        columns, rows = camera.get_screen_size()
        if (columns, rows) != (self.width, self.height):
            raise ValueError(
                f"Camera screen size {(columns, rows)} does not match renderer "
                f"size {(self.width, self.height)}"
            )

        centers = np.array(
            [[center.xyz for center in row] for row in camera.get_screen_centers()],
            dtype=np.float64,
        )
        eye = np.asarray(camera.eye.get_absolute().xyz, dtype=np.float64)
        directions = centers - eye
        with np.errstate(divide="ignore"):
            inv_directions = np.divide(1.0, directions)

        self.ray_origin.from_numpy(centers)
        self.ray_direction.from_numpy(directions)
        self.ray_inv_direction.from_numpy(inv_directions)
        self._rays_ready = True

    # =========================================================================
    # Rendering
    # =========================================================================

    @ti.kernel
    def _trace(self):
        for y, x in ti.ndrange(self.height, self.width):
            origin = self.ray_origin[y, x]
            direction = self.ray_direction[y, x]
            inv_direction = self.ray_inv_direction[y, x]

            nearest = tm.inf
            nearest_object = -1
            for o in range(self.num_objects[None]):
                if collides_box(origin, inv_direction, self.obj_low[o], self.obj_high[o]) == 1:
                    start = self.obj_start[o]
                    for i in range(start, start + self.obj_count[o]):
                        d = hit_triangle(
                            origin, direction, self.tri_p0[i], self.tri_p1[i], self.tri_p2[i]
                        )
                        if d < nearest:
                            nearest = d
                            nearest_object = o

            self.hit_distance[y, x] = nearest
            self.hit_object[y, x] = nearest_object

    def trace(self) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.int32]]:
        """Run the kernel on the uploaded rays and geometry.

        Returns:
            ``(distances, object_indices)``, each of shape (height, width);
            misses have distance ``inf`` and object index -1.
        """
        self._trace()
        return self.hit_distance.to_numpy(), self.hit_object.to_numpy()

    def render_into(self, grid: "RenderGrid", camera: "Camera | None" = None) -> None:
        """Trace every cell and overwrite ``grid`` with the results.

        Args:
            grid: Output grid; must be ``width x height``.
            camera: Camera to shoot rays from. When omitted, the rays from
                the last ``upload`` or ``upload_rays`` call are reused.

        Raises:
            ValueError: If the grid size does not match the renderer.
            RuntimeError: If no camera is given and nothing was uploaded.
        """
        if grid.size != (self.width, self.height):
            raise ValueError(
                f"Grid size {grid.size} does not match renderer size {(self.width, self.height)}"
            )
        if camera is not None:
            self.upload_rays(camera)
        elif not self._rays_ready:
            raise RuntimeError("No rays uploaded; pass a camera or call upload_rays first")

        distances, objects = self.trace()
        for y in range(self.height):
            row = grid.rows[y]
            for x in range(self.width):
                o = int(objects[y, x])
                row[x] = EMPTY if o < 0 else Hit(self._colors[o], float(distances[y, x]))

    def __repr__(self) -> str:
        return (
            f"ParallelRenderer(width={self.width}, height={self.height}, "
            f"objects={self.object_count})"
        )
