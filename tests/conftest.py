"""Pytest configuration for termray tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls, which would
    discard fields allocated by earlier tests.
    """
    from termray.config import init_taichi

    init_taichi(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture
def unit_triangle():
    """Triangle (0,0,0), (2,0,0), (0,2,0) in the z=0 plane."""
    from termray.core.vector import Point
    from termray.geometry.triangle import Triangle

    return Triangle(Point(0.0, 0.0, 0.0), Point(2.0, 0.0, 0.0), Point(0.0, 2.0, 0.0))


@pytest.fixture
def small_camera():
    """An 8x6 screen of unit cells with the eye 10 units in front of its center."""
    from termray.camera.camera import Camera
    from termray.core.vector import Point

    return Camera((1.0, 1.0), (8, 6), Point(4.0, 3.0, 10.0))


@pytest.fixture
def facing_square():
    """Factory for a two-triangle square facing the camera at depth ``z``."""
    from termray.core.vector import Point
    from termray.geometry.triangle import Triangle
    from termray.scene.objects import SceneObject

    def make(color, z, low=(0.0, 0.0), high=(8.0, 6.0)):
        x0, y0 = low
        x1, y1 = high
        return SceneObject(
            color,
            [
                Triangle(Point(x0, y0, z), Point(x1, y0, z), Point(x1, y1, z)),
                Triangle(Point(x0, y0, z), Point(x1, y1, z), Point(x0, y1, z)),
            ],
        )

    return make
