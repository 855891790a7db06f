"""Tests for the Taichi parallel renderer.

Tests cover:
- Kernel intersection routines against known answers
- Cell-for-cell agreement with Scene.render
- Capacity and size validation
"""

import math

import numpy as np
import pytest
import taichi as ti


def assert_grids_match(expected, actual):
    from termray.scene.cell import Hit

    assert expected.size == actual.size
    for (x, y, a), (_, _, b) in zip(expected.iter_cells(), actual.iter_cells()):
        assert type(a) is type(b), (x, y)
        if isinstance(a, Hit):
            assert a.color == b.color, (x, y)
            assert abs(a.distance - b.distance) < 1e-9, (x, y)


class TestKernelRoutines:
    """Tests for the @ti.func intersection routines."""

    def test_hit_triangle_distance(self):
        """Test the kernel Möller–Trumbore against the known distance."""
        from termray.core.parallel import hit_triangle, vec3

        result = ti.field(dtype=ti.f64, shape=3)

        @ti.kernel
        def test_kernel():
            p0 = vec3(0.0, 0.0, 0.0)
            p1 = vec3(2.0, 0.0, 0.0)
            p2 = vec3(0.0, 2.0, 0.0)
            result[0] = hit_triangle(vec3(0.5, 0.5, -10.0), vec3(0.0, 0.0, 1.0), p0, p1, p2)
            result[1] = hit_triangle(vec3(5.0, 5.0, -10.0), vec3(0.0, 0.0, 1.0), p0, p1, p2)
            result[2] = hit_triangle(vec3(-1.0, 0.5, 0.0), vec3(1.0, 0.0, 0.0), p0, p1, p2)

        test_kernel()
        assert abs(result[0] - 10.0) < 1e-9
        assert result[1] == math.inf
        assert result[2] == math.inf

    def test_collides_box(self):
        """Test the kernel slab test toward and away from a box."""
        from termray.core.parallel import collides_box, vec3

        result = ti.field(dtype=ti.i32, shape=3)

        @ti.kernel
        def test_kernel():
            low = vec3(0.0, 0.0, 0.0)
            high = vec3(1.0, 1.0, 1.0)
            origin = vec3(-1.0, 0.5, 0.5)
            inf = ti.math.inf
            result[0] = collides_box(origin, vec3(1.0, inf, inf), low, high)
            result[1] = collides_box(origin, vec3(-1.0, inf, inf), low, high)
            # Ray lying on the y = 0 slab boundary
            result[2] = collides_box(vec3(-1.0, 0.0, 0.5), vec3(1.0, inf, inf), low, high)

        test_kernel()
        assert result[0] == 1
        assert result[1] == 0
        assert result[2] == 1


class TestParallelRenderer:
    """Tests for ParallelRenderer."""

    def test_matches_serial_on_stacked_squares(self, small_camera, facing_square):
        """Test agreement with Scene.render, including nearest-object resolution."""
        from termray.core.parallel import ParallelRenderer
        from termray.scene.cell import Rgb
        from termray.scene.scene import Scene

        scene = Scene(
            [
                facing_square(Rgb(0, 0, 255), -20.0, (-20.0, -20.0), (30.0, 30.0)),
                facing_square(Rgb(255, 0, 0), -5.0, (1.0, 1.0), (6.0, 4.0)),
            ],
            small_camera,
        )
        expected = scene.empty_render()
        scene.render(expected)

        renderer = ParallelRenderer(*small_camera.get_screen_size())
        renderer.upload(scene)
        actual = scene.empty_render()
        renderer.render_into(actual)

        assert_grids_match(expected, actual)
        assert expected.hit_count() == expected.width * expected.height

    def test_matches_serial_on_demo(self):
        """Test agreement on the spinning demo scene across several frames."""
        from termray.core.parallel import ParallelRenderer
        from termray.scene.demo import create_demo_scene, spin_step

        scene = create_demo_scene()
        renderer = ParallelRenderer(*scene.camera.get_screen_size())
        for _ in range(3):
            expected = scene.empty_render()
            scene.render(expected)
            renderer.upload(scene)
            actual = scene.empty_render()
            renderer.render_into(actual)
            assert_grids_match(expected, actual)
            for _ in range(20):
                spin_step(scene)

    def test_empty_scene(self, small_camera):
        """Test that a scene with no objects renders EMPTY everywhere."""
        from termray.core.parallel import ParallelRenderer
        from termray.scene.scene import Scene

        scene = Scene(camera=small_camera)
        renderer = ParallelRenderer(*small_camera.get_screen_size())
        renderer.upload(scene)
        grid = scene.empty_render()
        renderer.render_into(grid)
        assert grid.hit_count() == 0

        distances, objects = renderer.trace()
        assert np.all(objects == -1)
        assert np.all(np.isinf(distances))

    def test_camera_override(self, small_camera, facing_square):
        """Test rendering from a moved camera without re-uploading geometry."""
        from termray.core.parallel import ParallelRenderer
        from termray.core.transform import Transform
        from termray.core.vector import Direction
        from termray.scene.cell import Rgb
        from termray.scene.scene import Scene

        scene = Scene([facing_square(Rgb(9, 9, 9), -5.0, (0.0, 0.0), (4.0, 3.0))], small_camera)
        renderer = ParallelRenderer(*small_camera.get_screen_size())
        renderer.upload(scene)

        small_camera.apply(Transform.translate(Direction(2.0, 1.0, 0.0)))
        expected = scene.empty_render()
        scene.render(expected)
        actual = scene.empty_render()
        renderer.render_into(actual, small_camera)
        assert_grids_match(expected, actual)

    def test_object_capacity(self, small_camera, facing_square):
        """Test that too many objects raise RuntimeError."""
        from termray.core.parallel import ParallelRenderer
        from termray.scene.cell import Rgb
        from termray.scene.scene import Scene

        scene = Scene([facing_square(Rgb(1, 1, 1), -float(i + 1)) for i in range(3)], small_camera)
        renderer = ParallelRenderer(8, 6, max_objects=2)
        with pytest.raises(RuntimeError):
            renderer.upload(scene)

    def test_triangle_capacity(self, small_camera, facing_square):
        """Test that too many triangles raise RuntimeError."""
        from termray.core.parallel import ParallelRenderer
        from termray.scene.cell import Rgb
        from termray.scene.scene import Scene

        scene = Scene([facing_square(Rgb(1, 1, 1), -1.0)], small_camera)
        renderer = ParallelRenderer(8, 6, max_triangles=1)
        with pytest.raises(RuntimeError):
            renderer.upload(scene)

    def test_size_mismatch(self, small_camera):
        """Test grid and camera size validation."""
        from termray.camera.camera import Camera
        from termray.core.parallel import ParallelRenderer
        from termray.scene.cell import RenderGrid
        from termray.scene.scene import Scene

        renderer = ParallelRenderer(8, 6)
        renderer.upload(Scene(camera=small_camera))
        with pytest.raises(ValueError):
            renderer.render_into(RenderGrid(6, 8))
        with pytest.raises(ValueError):
            renderer.upload(Scene(camera=Camera.default()))

    def test_render_before_upload(self):
        """Test that rendering with no rays uploaded is an error."""
        from termray.core.parallel import ParallelRenderer
        from termray.scene.cell import RenderGrid

        renderer = ParallelRenderer(2, 2)
        with pytest.raises(RuntimeError):
            renderer.render_into(RenderGrid(2, 2))

    def test_invalid_construction(self):
        """Test that non-positive sizes are rejected."""
        from termray.core.parallel import ParallelRenderer

        with pytest.raises(ValueError):
            ParallelRenderer(0, 4)
        with pytest.raises(ValueError):
            ParallelRenderer(4, 4, max_triangles=0)


class TestInitTaichi:
    """Tests for termray.config."""

    def test_idempotent(self):
        """Test that a second init is a no-op once the session fixture ran."""
        from termray.config import init_taichi, is_initialized

        assert is_initialized()
        assert init_taichi() is False
