"""Shapes with object-to-world transforms and shared intersection logic.

Shapes form a closed set of variants identified by ``ShapeKind``. Each variant
module supplies two object-space functions (``local_intersect_*`` and
``local_normal_*``) and this module wraps them with the algorithm every
variant shares:

    intersect:  world ray -> object space (inverse transform) -> local
                intersect -> intersections tagged with the same ``t``
                (object-space rays are not renormalized, so ``t`` agrees with
                the world ray).
    normal_at:  world point -> object space -> local normal -> multiply by
                the inverse-transpose -> drop w (translation contamination)
                -> normalize.

Shapes compare by identity, which is what the refraction containment stack
needs when the same material is shared between several shapes.

Example:
    >>> from glint.geometry.shape import sphere
    >>> from glint.core.ray import Ray
    >>> from glint.core.tuples import point, vector
    >>> s = sphere()
    >>> [i.t for i in s.intersect(Ray(point(0, 0, -5), vector(0, 0, 1)))]
    [4.0, 6.0]
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import IntEnum

from glint.core.matrix import IDENTITY, Matrix
from glint.core.ray import Ray
from glint.core.tuples import Tuple, vector
from glint.geometry.cube import local_intersect_cube, local_normal_cube
from glint.geometry.plane import local_intersect_plane, local_normal_plane
from glint.geometry.sphere import local_intersect_sphere, local_normal_sphere
from glint.materials.color import Color
from glint.materials.material import DEFAULT_MATERIAL, Material


class ShapeKind(IntEnum):
    """Enumeration of supported shape variants.

    Used to dispatch object-space intersection and normal computation.
    """

    SPHERE = 0
    PLANE = 1
    CUBE = 2

    @classmethod
    def from_name(cls, name: str) -> ShapeKind:
        """Look up a kind by its scene-file name (e.g. ``"sphere"``).

        Raises:
            KeyError: If no variant has that name.
        """
        return cls[name.strip().upper()]


_LOCAL_INTERSECT: dict[ShapeKind, Callable[[Ray], list[float]]] = {
    ShapeKind.SPHERE: local_intersect_sphere,
    ShapeKind.PLANE: local_intersect_plane,
    ShapeKind.CUBE: local_intersect_cube,
}

_LOCAL_NORMAL: dict[ShapeKind, Callable[[Tuple], Tuple]] = {
    ShapeKind.SPHERE: local_normal_sphere,
    ShapeKind.PLANE: local_normal_plane,
    ShapeKind.CUBE: local_normal_cube,
}


@dataclass(frozen=True)
class Intersection:
    """A ray-shape intersection.

    Attributes:
        t: Parameter along the (world) ray.
        shape: The shape that was hit.
    """

    t: float
    shape: Shape


@dataclass(frozen=True, eq=False)
class Shape:
    """A primitive placed in the world.

    Attributes:
        kind: Which variant this shape is.
        transform: Object-to-world transform.
        material: Surface material (possibly shared with other shapes).
        shadow: Whether the shape casts shadows.
        inverse: Cached world-to-object transform.
        inverse_transpose: Cached transform for normals.

    Raises:
        SingularMatrixError: On construction, if ``transform`` is not
            invertible.
    """

    kind: ShapeKind
    transform: Matrix = IDENTITY
    material: Material = DEFAULT_MATERIAL
    shadow: bool = True
    inverse: Matrix = field(init=False, repr=False)
    inverse_transpose: Matrix = field(init=False, repr=False)

    def __post_init__(self) -> None:
        inverse = self.transform.inverse()
        object.__setattr__(self, "inverse", inverse)
        object.__setattr__(self, "inverse_transpose", inverse.transpose())

    def world_to_object(self, world_point: Tuple) -> Tuple:
        return self.inverse @ world_point

    def local_intersect(self, local_ray: Ray) -> list[Intersection]:
        """Intersect a ray already in object space, ascending by ``t``."""
        return [Intersection(t, self) for t in _LOCAL_INTERSECT[self.kind](local_ray)]

    def intersect(self, world_ray: Ray) -> list[Intersection]:
        """Intersect a world-space ray, ascending by ``t``."""
        return self.local_intersect(world_ray.transform(self.inverse))

    def local_normal_at(self, object_point: Tuple) -> Tuple:
        return _LOCAL_NORMAL[self.kind](object_point)

    def normal_at(self, world_point: Tuple) -> Tuple:
        """Unit surface normal in world space."""
        local_normal = self.local_normal_at(self.world_to_object(world_point))
        x, y, z, _ = self.inverse_transpose.data @ local_normal.data
        return vector(x, y, z).normalize()

    def color_at(self, world_point: Tuple) -> Color:
        """Base color of the material (solid or pattern) at a world point."""
        return self.material.color_at_object(self.world_to_object(world_point))


def sphere(
    transform: Matrix = IDENTITY, material: Material = DEFAULT_MATERIAL, shadow: bool = True
) -> Shape:
    return Shape(ShapeKind.SPHERE, transform, material, shadow)


def plane(
    transform: Matrix = IDENTITY, material: Material = DEFAULT_MATERIAL, shadow: bool = True
) -> Shape:
    return Shape(ShapeKind.PLANE, transform, material, shadow)


def cube(
    transform: Matrix = IDENTITY, material: Material = DEFAULT_MATERIAL, shadow: bool = True
) -> Shape:
    return Shape(ShapeKind.CUBE, transform, material, shadow)


def glass_sphere(transform: Matrix = IDENTITY, refractive_index: float = 1.5) -> Shape:
    """A fully transparent sphere, handy for refraction scenes."""
    material = Material(transparency=1.0, refractive_index=refractive_index)
    return Shape(ShapeKind.SPHERE, transform, material)
