"""Unit tests for the screen, camera and camera controls.

Tests cover:
- Screen cell-center layout and validation
- Primary ray generation
- Rigid camera moves preserving ray directions
- Dolly changing the eye-to-screen distance only
- Control actions and key bindings
"""

import math

import pytest


class TestScreen:
    """Tests for the screen grid."""

    def test_centers(self):
        """Test that cell centers sit half a cell in from the corner."""
        from termray.camera.screen import Screen

        screen = Screen((1.0, 0.5), (3, 2))
        assert screen.get_center((0, 0)).xyz == (0.5, 0.25, 0.0)
        assert screen.get_center((2, 1)).xyz == (2.5, 0.75, 0.0)
        assert len(screen.centers) == 2
        assert len(screen.centers[0]) == 3

    def test_corners_and_dimensions(self):
        """Test the plane corners and total size."""
        from termray.camera.screen import Screen

        screen = Screen((0.25, 0.25), (64, 64))
        assert screen.dimensions == (16.0, 16.0)
        assert screen.corners[2].xyz == (16.0, 16.0, 0.0)

    def test_out_of_range_center(self):
        """Test that cells outside the screen have no center."""
        from termray.camera.screen import Screen

        screen = Screen((1.0, 1.0), (2, 2))
        assert screen.get_center((2, 0)) is None
        assert screen.get_center((0, -1)) is None

    @pytest.mark.parametrize(
        "cell_size,screen_size",
        [((0.0, 1.0), (2, 2)), ((1.0, -1.0), (2, 2)), ((1.0, 1.0), (0, 2)), ((1.0, 1.0), (2, 1.5))],
    )
    def test_invalid_sizes(self, cell_size, screen_size):
        """Test that non-positive sizes are rejected."""
        from termray.camera.screen import Screen

        with pytest.raises(ValueError):
            Screen(cell_size, screen_size)

    def test_apply_moves_corners_and_centers(self):
        """Test that transforming a screen moves all of its points."""
        from termray.camera.screen import Screen
        from termray.core.transform import Transform
        from termray.core.vector import Direction

        screen = Screen((1.0, 1.0), (2, 2))
        clone = screen.copy()
        clone.apply(Transform.translate(Direction(0.0, 0.0, -1.0)))
        assert clone.corners[0].z == -1.0
        assert clone.centers[1][1].z == -1.0
        assert screen.centers[1][1].z == 0.0


class TestCamera:
    """Tests for ray generation and camera moves."""

    def test_default_camera(self):
        """Test the default camera layout."""
        from termray.camera.camera import Camera

        camera = Camera.default()
        assert camera.get_screen_size() == (64, 64)
        assert camera.eye.get_absolute().xyz == (8.0, 8.0, 45.0)

    def test_ray_from_center_away_from_eye(self, small_camera):
        """Test that rays start at the cell center and point away from the eye."""
        ray = small_camera.get_ray((4, 3))
        assert ray.origin.xyz == (4.5, 3.5, 0.0)
        assert ray.direction.xyz == (0.5, 0.5, -10.0)
        assert ray.direction.w == 0.0

    def test_out_of_range_ray(self, small_camera):
        """Test that out-of-range cells give no ray."""
        assert small_camera.get_ray((8, 0)) is None

    def test_translation_preserves_directions(self, small_camera):
        """Test that moving the shared frame shifts rays without changing them."""
        from termray.core.transform import Transform
        from termray.core.vector import Direction

        columns, rows = small_camera.get_screen_size()
        cells = [(x, y) for y in range(rows) for x in range(columns)]
        before = {cell: small_camera.get_ray(cell) for cell in cells}

        small_camera.apply(Transform.translate(Direction(3.0, -2.0, 7.0)))

        for cell in cells:
            ray = small_camera.get_ray(cell)
            assert ray.direction == before[cell].direction
            assert ray.origin.xyz == (before[cell].origin + Direction(3.0, -2.0, 7.0)).xyz

    def test_dolly_changes_magnitudes_only(self, small_camera):
        """Test that moving the eye locally keeps centers and stretches rays."""
        from termray.core.transform import Transform
        from termray.core.vector import Direction, norm

        centers = small_camera.get_screen_centers()
        before = small_camera.get_ray((0, 0))

        small_camera.eye.local().apply(Transform.translate(Direction(0.0, 0.0, 5.0)))

        after_centers = small_camera.get_screen_centers()
        for row_before, row_after in zip(centers, after_centers):
            for a, b in zip(row_before, row_after):
                assert a == b
        after = small_camera.get_ray((0, 0))
        assert after.direction.z == -15.0
        assert norm(after.direction) > norm(before.direction)

    def test_apply_relative_follows_orientation(self, small_camera):
        """Test that a relative move goes along the camera's own axes."""
        from termray.core.transform import Transform
        from termray.core.vector import Direction

        small_camera.apply(Transform.rotate(math.pi / 2, Direction(0.0, 1.0, 0.0)))
        eye_before = small_camera.eye.get_absolute()
        small_camera.apply_relative(Transform.translate(Direction(0.0, 0.0, -2.5)))
        moved = small_camera.eye.get_absolute() - eye_before
        assert moved.as_direction().allclose(Direction(-2.5, 0.0, 0.0))

    def test_eye_and_screen_share_frame(self, small_camera):
        """Test that eye and screen are bound to the camera's frame."""
        assert small_camera.eye.frame.shares_with(small_camera.frame)
        assert small_camera.screen.frame.shares_with(small_camera.frame)

    def test_pivot(self, small_camera):
        """Test the pivot is midway between the eye and the center cell."""
        assert small_camera.get_pivot().xyz == (4.25, 3.25, 5.0)


class TestControls:
    """Tests for camera control actions."""

    def test_forward_and_backward_cancel(self, small_camera):
        """Test that forward then backward returns the eye."""
        from termray.camera.controls import CameraAction, apply_action

        start = small_camera.eye.get_absolute()
        apply_action(small_camera, CameraAction.FORWARD)
        assert not small_camera.eye.get_absolute().allclose(start)
        apply_action(small_camera, CameraAction.BACKWARD)
        assert small_camera.eye.get_absolute().allclose(start)

    def test_forward_moves_toward_screen(self, small_camera):
        """Test that forward moves the whole camera along -z."""
        from termray.camera.controls import MOVE_STEP, CameraAction, apply_action

        apply_action(small_camera, CameraAction.FORWARD)
        assert small_camera.eye.get_absolute().xyz == (4.0, 3.0, 10.0 - MOVE_STEP)
        assert small_camera.get_center((0, 0)).xyz == (0.5, 0.5, -MOVE_STEP)

    def test_strafe(self, small_camera):
        """Test strafing moves along x."""
        from termray.camera.controls import MOVE_STEP, CameraAction, apply_action

        apply_action(small_camera, CameraAction.STRAFE_RIGHT)
        assert small_camera.eye.get_absolute().x == 4.0 + MOVE_STEP

    def test_orbit_keeps_pivot(self, small_camera):
        """Test that orbiting rotates about the camera pivot."""
        from termray.camera.controls import CameraAction, apply_action

        pivot = small_camera.get_pivot()
        for action in (CameraAction.ORBIT_LEFT, CameraAction.ORBIT_UP):
            apply_action(small_camera, action)
            assert small_camera.get_pivot().allclose(pivot, atol=1e-9)
        assert not small_camera.eye.get_absolute().allclose(small_camera.eye.local())

    def test_dolly(self, small_camera):
        """Test that dolly moves only the eye's local z."""
        from termray.camera.controls import DOLLY_STEP, CameraAction, apply_action

        center = small_camera.get_center((0, 0))
        apply_action(small_camera, CameraAction.DOLLY_OUT)
        assert small_camera.eye.local().z == 10.0 + DOLLY_STEP
        assert small_camera.get_center((0, 0)) == center
        apply_action(small_camera, CameraAction.DOLLY_IN)
        assert small_camera.eye.local().z == 10.0

    def test_key_bindings(self, small_camera):
        """Test key lookup and unbound keys."""
        from termray.camera.controls import KEY_BINDINGS, CameraAction, apply_key

        assert KEY_BINDINGS["w"] is CameraAction.FORWARD
        assert KEY_BINDINGS["F"] is CameraAction.DOLLY_IN
        assert apply_key(small_camera, "f") is True
        assert apply_key(small_camera, "q") is False
        assert small_camera.eye.local().z == 15.0

    def test_unknown_action(self, small_camera):
        """Test that a non-action value is rejected."""
        from termray.camera.controls import apply_action

        with pytest.raises(ValueError):
            apply_action(small_camera, "jump")
