"""Plain-data scene description for saving and loading scenes.

A ``SceneConfig`` holds only built-in types (floats, ints, lists, dicts), so
``to_dict()`` output can go straight to ``json.dump``. ``build_scene`` turns
a config into live objects; ``scene_to_config`` captures the current world
geometry of a scene together with its camera's frame.

Example:
    >>> from termray.scene.config import SceneConfig, build_scene, scene_to_config
    >>> from termray.scene.demo import create_demo_scene
    >>> data = scene_to_config(create_demo_scene()).to_dict()
    >>> scene = build_scene(SceneConfig.from_dict(data))
    >>> len(scene.objects)
    3
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from termray.camera.camera import DEFAULT_EYE_DISTANCE, Camera
from termray.camera.screen import Screen
from termray.core.transform import Transform
from termray.core.vector import Point
from termray.geometry.triangle import Triangle
from termray.scene.cell import Rgb
from termray.scene.objects import SceneObject
from termray.scene.scene import Scene

Vec3 = tuple[float, float, float]


def _vec3(value: Any, what: str) -> Vec3:
    try:
        x, y, z = (float(v) for v in value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{what} must be three numbers, got {value!r}") from e
    return (x, y, z)


def _integral(values: tuple[float, ...], what: str, raw: Any) -> tuple[int, ...]:
    if not all(v.is_integer() for v in values):
        raise ValueError(f"{what} must be integers, got {raw!r}")
    return tuple(int(v) for v in values)


def _pair(value: Any, what: str, kind: type) -> tuple[Any, Any]:
    try:
        a, b = (float(v) for v in value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{what} must be two numbers, got {value!r}") from e
    if kind is int:
        return _integral((a, b), what, value)
    return (a, b)


def _mapping(value: Any, what: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ValueError(f"{what} must be a mapping, got {value!r}")
    return value


def _list(value: Any, what: str) -> list[Any] | tuple[Any, ...]:
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"{what} must be a list, got {value!r}")
    return value


@dataclass
class CameraConfig:
    """Camera parameters.

    Attributes:
        cell_size: ``(cell_width, cell_height)`` in world units.
        screen_size: ``(columns, rows)``.
        eye: Eye position in the camera's local coordinates; None places it
            centered ``DEFAULT_EYE_DISTANCE`` units in front of the screen.
        frame: Row-major 4x4 matrix of the camera frame; None for identity.
    """

    cell_size: tuple[float, float] = (0.25, 0.25)
    screen_size: tuple[int, int] = (64, 64)
    eye: Vec3 | None = None
    frame: list[list[float]] | None = None

    def build(self) -> Camera:
        """Create the camera, validating sizes and the frame matrix."""
        if self.eye is None:
            width, height = Screen(self.cell_size, self.screen_size).dimensions
            eye = Point(width / 2.0, height / 2.0, DEFAULT_EYE_DISTANCE)
        else:
            eye = Point(*self.eye)

        camera = Camera(self.cell_size, self.screen_size, eye)
        if self.frame is not None:
            camera.apply(Transform(self.frame))
        return camera

    def to_dict(self) -> dict[str, Any]:
        return {
            "cell_size": list(self.cell_size),
            "screen_size": list(self.screen_size),
            "eye": None if self.eye is None else list(self.eye),
            "frame": self.frame,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CameraConfig:
        """Load camera parameters; missing keys take their defaults.

        Raises:
            ValueError: If ``data`` is not a mapping or a present value has
                the wrong shape.
        """
        data = _mapping(data, "camera")
        config = cls()
        if "cell_size" in data:
            config.cell_size = _pair(data["cell_size"], "cell_size", float)
        if "screen_size" in data:
            config.screen_size = _pair(data["screen_size"], "screen_size", int)
        if data.get("eye") is not None:
            config.eye = _vec3(data["eye"], "eye")
        if data.get("frame") is not None:
            config.frame = Transform(data["frame"]).matrix.tolist()
        return config


@dataclass
class ObjectConfig:
    """One object: a color and a list of triangles, each three vertices."""

    color: tuple[int, int, int]
    triangles: list[tuple[Vec3, Vec3, Vec3]] = field(default_factory=list)

    def build(self) -> SceneObject:
        triangles = [Triangle(*(Point(*v) for v in tri)) for tri in self.triangles]
        return SceneObject(Rgb(*self.color), triangles)

    def to_dict(self) -> dict[str, Any]:
        return {
            "color": list(self.color),
            "triangles": [[list(v) for v in tri] for tri in self.triangles],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ObjectConfig:
        """Load an object description.

        Raises:
            ValueError: If the color is missing or not three integers, or a
                triangle does not have exactly three 3D vertices.
        """
        data = _mapping(data, "object")
        if "color" not in data:
            raise ValueError("Object config is missing 'color'")
        raw = _list(data["color"], "color")
        try:
            channels = tuple(float(c) for c in raw)
        except (TypeError, ValueError) as e:
            raise ValueError(f"color must be three numbers, got {raw!r}") from e
        if len(channels) != 3:
            raise ValueError(f"color must have three channels, got {raw!r}")
        color = _integral(channels, "color", raw)

        triangles = []
        for i, tri in enumerate(_list(data.get("triangles", []), "triangles")):
            tri = _list(tri, f"Triangle {i}")
            if len(tri) != 3:
                raise ValueError(f"Triangle {i} must have three vertices, got {len(tri)}")
            triangles.append(tuple(_vec3(v, f"Triangle {i} vertex") for v in tri))
        return cls(color=color, triangles=triangles)


@dataclass
class SceneConfig:
    """Configuration for a full scene.

    Attributes:
        camera: Camera parameters.
        objects: Object descriptions, in intersection order.
    """

    camera: CameraConfig = field(default_factory=CameraConfig)
    objects: list[ObjectConfig] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Export to a dictionary (for JSON serialization)."""
        return {
            "camera": self.camera.to_dict(),
            "objects": [obj.to_dict() for obj in self.objects],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SceneConfig:
        """Load from a dictionary with optional 'camera' and 'objects' keys.

        Raises:
            ValueError: If any part of ``data`` is malformed.
        """
        data = _mapping(data, "scene")
        objects = _list(data.get("objects", []), "objects")
        return cls(
            camera=CameraConfig.from_dict(data.get("camera", {})),
            objects=[ObjectConfig.from_dict(obj) for obj in objects],
        )


def build_scene(config: SceneConfig) -> Scene:
    """Create a scene from its configuration.

    Raises:
        ValueError: If a color, size or matrix in the config is invalid.
    """
    return Scene([obj.build() for obj in config.objects], config.camera.build())


def scene_to_config(scene: Scene) -> SceneConfig:
    """Capture a scene's current world geometry and camera.

    Only the camera's cell and screen sizes, its eye and its frame are
    recorded; edits made directly to the local screen geometry are not.
    """
    camera = scene.camera
    screen = camera.screen.local()
    camera_config = CameraConfig(
        cell_size=screen.cell_size,
        screen_size=screen.screen_size,
        eye=camera.eye.local().xyz,
        frame=camera.frame.transform.matrix.tolist(),
    )
    objects = [
        ObjectConfig(
            color=obj.color.to_tuple(),
            triangles=[tuple(v.xyz for v in tri.vertices) for tri in obj.polygons],
        )
        for obj in scene.objects
    ]
    return SceneConfig(camera=camera_config, objects=objects)
