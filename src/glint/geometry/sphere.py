"""Unit sphere centered at the object-space origin.

The ray-sphere intersection solves

    |origin + t * direction|^2 = 1

which expands to a*t^2 + b*t + c = 0 with

    a = dot(direction, direction)
    b = 2 * dot(direction, origin - center)
    c = dot(origin - center, origin - center) - 1

A negative discriminant is a miss, a zero discriminant a tangent (one root),
otherwise two roots are returned in ascending order.
"""

from __future__ import annotations

import math

from glint.core.ray import Ray
from glint.core.tuples import Tuple, point, vector

_CENTER = point(0.0, 0.0, 0.0)


def local_intersect_sphere(ray: Ray) -> list[float]:
    """Intersect an object-space ray with the unit sphere.

    Args:
        ray: Ray in the sphere's object space.

    Returns:
        The ``t`` values of the intersections, ascending (0, 1 or 2 of them).
    """
    sphere_to_ray = ray.origin - _CENTER
    a = ray.direction.dot(ray.direction)
    b = 2.0 * ray.direction.dot(sphere_to_ray)
    c = sphere_to_ray.dot(sphere_to_ray) - 1.0

    discriminant = b * b - 4.0 * a * c
    if discriminant < 0.0:
        return []
    if discriminant == 0.0:
        return [-b / (2.0 * a)]

    sqrt_d = math.sqrt(discriminant)
    t0 = (-b - sqrt_d) / (2.0 * a)
    t1 = (-b + sqrt_d) / (2.0 * a)
    return [t0, t1] if t0 <= t1 else [t1, t0]


def local_normal_sphere(object_point: Tuple) -> Tuple:
    """Outward normal: the vector from the center to the surface point."""
    return vector(object_point.x, object_point.y, object_point.z)
