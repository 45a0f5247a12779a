"""Infinite plane: the object-space xz-plane (y = 0)."""

from __future__ import annotations

from glint.core.ray import Ray
from glint.core.tuples import EPSILON, Tuple, vector

_UP = vector(0.0, 1.0, 0.0)


def local_intersect_plane(ray: Ray) -> list[float]:
    """Intersect an object-space ray with the xz-plane.

    A ray parallel to the plane (including one lying in it) never hits.
    """
    if abs(ray.direction.y) < EPSILON:
        return []
    return [-ray.origin.y / ray.direction.y]


def local_normal_plane(object_point: Tuple) -> Tuple:
    return _UP
