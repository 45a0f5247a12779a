"""The world: every shape and light in a scene.

A World is built once and then only read while rendering, so it can be
shared by any number of pixel evaluations without locking.

Example:
    >>> from glint.scene.world import World, default_world
    >>> world = default_world()
    >>> len(world.shapes), len(world.lights)
    (2, 1)
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from glint.core.ray import Ray
from glint.core.transform import scaling
from glint.core.tuples import EPSILON, Tuple, point
from glint.geometry.shape import Intersection, Shape, sphere
from glint.materials.color import BLACK, Color
from glint.materials.material import Material
from glint.scene.lights import Light, PointLight

# Maximum recursion depth for reflection and refraction rays
MAX_DEPTH = 5

# Color returned for rays that hit nothing
BACKGROUND_COLOR = BLACK


@dataclass(frozen=True)
class World:
    """An immutable collection of shapes and lights.

    Attributes:
        shapes: Shapes in the scene, exclusively owned by the world.
        lights: Light sources.
        background: Color of rays that escape the scene.
        max_depth: Recursion depth for reflection and refraction rays.
    """

    shapes: tuple[Shape, ...] = ()
    lights: tuple[Light, ...] = ()
    background: Color = BACKGROUND_COLOR
    max_depth: int = MAX_DEPTH

    def __post_init__(self) -> None:
        object.__setattr__(self, "shapes", tuple(self.shapes))
        object.__setattr__(self, "lights", tuple(self.lights))
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {self.max_depth}")

    def intersect(self, ray: Ray) -> list[Intersection]:
        """Intersect a ray with every shape.

        Returns:
            The intersections ahead of the ray origin (``t > EPSILON``),
            sorted by ascending ``t``.
        """
        intersections = [
            i for shape in self.shapes for i in shape.intersect(ray) if i.t > EPSILON
        ]
        intersections.sort(key=lambda i: i.t)
        return intersections

    def is_shadowed(self, position: Tuple, light_position: Tuple) -> bool:
        """Check whether a shadow-casting shape lies between a point and a light.

        Args:
            position: The point being lit (usually an over_point).
            light_position: The light (or light sample) position.

        Returns:
            True if any shape with ``shadow=True`` is hit strictly between the
            point and the light.
        """
        to_light = light_position - position
        distance = to_light.magnitude()
        if distance < EPSILON:
            return False
        ray = Ray(position, to_light.normalize())
        for shape in self.shapes:
            if not shape.shadow:
                continue
            for intersection in shape.intersect(ray):
                if 0.0 < intersection.t < distance:
                    return True
        return False

    def with_changes(self, **changes: Any) -> World:
        """Return a copy of the world with some fields replaced."""
        return replace(self, **changes)


def default_world() -> World:
    """Two concentric spheres lit by a white point light at (-10, 10, -10).

    The outer unit sphere has color (0.8, 1.0, 0.6), diffuse 0.7 and
    specular 0.2; the inner one is scaled by 0.5 with the default material.
    """
    light = PointLight(point(-10.0, 10.0, -10.0), Color(1.0, 1.0, 1.0))
    outer = sphere(material=Material(color=Color(0.8, 1.0, 0.6), diffuse=0.7, specular=0.2))
    inner = sphere(transform=scaling(0.5, 0.5, 0.5))
    return World(shapes=(outer, inner), lights=(light,))
