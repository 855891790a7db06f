"""Unit tests for the demo scene.

Tests cover:
- Scene contents and colors
- Expected hits and misses from the default camera
- Spin animation about the fixed pivot
"""


class TestDemoScene:
    """Tests for create_demo_scene."""

    def test_objects(self):
        """Test the three objects and their triangle counts."""
        from termray.scene.demo import PANEL_COLOR, SIDE_COLOR, SLANT_COLOR, create_demo_scene

        scene = create_demo_scene()
        assert [obj.color for obj in scene.objects] == [PANEL_COLOR, SIDE_COLOR, SLANT_COLOR]
        assert [len(obj) for obj in scene.objects] == [2, 2, 1]

    def test_bounds(self):
        """Test the precomputed object boxes."""
        from termray.scene.demo import create_demo_scene

        panel, side, slant = create_demo_scene().objects
        assert panel.bounds[0].xyz == (10.0, 10.0, -10.0)
        assert panel.bounds[1].xyz == (20.0, 20.0, -10.0)
        assert side.bounds[0].xyz == (10.0, 10.0, -20.0)
        assert slant.bounds[1].xyz == (20.0, 20.0, -10.0)

    def test_panel_hit(self):
        """Test a corner cell sees the front panel at the expected distance."""
        from termray.core.vector import norm
        from termray.scene.cell import Hit
        from termray.scene.demo import PANEL_COLOR, create_demo_scene

        scene = create_demo_scene()
        cell = scene.test_ray((63, 63))
        assert isinstance(cell, Hit)
        assert cell.color == PANEL_COLOR

        # The ray starts on the z=0 screen and reaches z=-10 at t = 10/45
        ray = scene.camera.get_ray((63, 63))
        assert abs(cell.distance - norm(ray.direction) * 10.0 / 45.0) < 1e-9

    def test_far_corner_misses(self):
        """Test the opposite corner sees nothing."""
        from termray.scene.cell import EMPTY
        from termray.scene.demo import create_demo_scene

        assert create_demo_scene().test_ray((0, 0)) is EMPTY

    def test_render_has_hits_and_misses(self):
        """Test a full default render."""
        from termray.scene.demo import create_demo_scene

        scene = create_demo_scene()
        grid = scene.empty_render()
        scene.render(grid)
        assert 0 < grid.hit_count() < 64 * 64


class TestSpin:
    """Tests for the spin animation."""

    def test_pivot_fixed(self):
        """Test that the spin transform keeps the pivot in place."""
        from termray.core.vector import Point
        from termray.scene.demo import SPIN_PIVOT, spin_transform

        pivot = Point(*SPIN_PIVOT)
        assert spin_transform().transform(pivot).allclose(pivot)

    def test_spin_moves_objects(self):
        """Test that one step moves vertices and refreshes bounds."""
        from termray.scene.demo import create_demo_scene, spin_step

        scene = create_demo_scene()
        before = scene.objects[0].polygons[0].copy()
        spin_step(scene)
        after = scene.objects[0].polygons[0]
        assert not after.p0.allclose(before.p0)
        assert scene.objects[0].bounds[0].z < -10.0

    def test_full_turn_returns_home(self):
        """Test that SPIN_STEPS steps restore the original geometry."""
        from termray.scene.demo import SPIN_STEPS, create_demo_scene, spin_step

        scene = create_demo_scene()
        originals = [[p.copy() for p in obj.polygons] for obj in scene.objects]
        for _ in range(SPIN_STEPS):
            spin_step(scene)

        for obj, polygons in zip(scene.objects, originals):
            for tri, original in zip(obj.polygons, polygons):
                for v, w in zip(tri.vertices, original.vertices):
                    assert v.allclose(w, atol=1e-9)
