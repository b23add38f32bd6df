"""Scene description: render options plus the objects and lights to draw."""

from __future__ import annotations

from dataclasses import dataclass, field

from raylab.objects import Light, SceneObject
from raylab.vector import Vector3f


@dataclass
class Scene:
    """Render settings together with the scene's objects and lights."""

    width: int = 1280
    height: int = 960
    fov: float = 90.0
    background_color: Vector3f = Vector3f(0.235294, 0.67451, 0.843137)
    max_depth: int = 5
    epsilon: float = 0.00001
    _objects: list[SceneObject] = field(default_factory=list, init=False, repr=False)
    _lights: list[Light] = field(default_factory=list, init=False, repr=False)

    def add(self, item: SceneObject | Light) -> None:
        """Add an object or a light to the scene."""
        if isinstance(item, SceneObject):
            self._objects.append(item)
        elif isinstance(item, Light):
            self._lights.append(item)
        else:
            raise TypeError(f"cannot add {type(item).__name__} to a scene")

    def objects(self) -> tuple[SceneObject, ...]:
        """The objects in the order they were added."""
        return tuple(self._objects)

    def lights(self) -> tuple[Light, ...]:
        """The lights in the order they were added."""
        return tuple(self._lights)