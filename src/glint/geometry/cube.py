"""Axis-aligned cube spanning [-1, 1] on every object-space axis.

Intersection uses the slab method: each axis contributes the interval of
``t`` over which the ray lies between the two faces perpendicular to it. The
cube is hit over the intersection of the three intervals (max of the
entries, min of the exits). An empty interval, or one that lies entirely
behind the ray origin, is a miss.
"""

from __future__ import annotations

import math

from glint.core.ray import Ray
from glint.core.tuples import EPSILON, Tuple, vector


def _check_axis(origin: float, direction: float) -> tuple[float, float] | None:
    """Return the (entry, exit) interval for one slab, or None if never inside."""
    tmin_numerator = -1.0 - origin
    tmax_numerator = 1.0 - origin

    if abs(direction) < EPSILON:
        # Parallel to this slab: inside for all t, or never
        if tmin_numerator > 0.0 or tmax_numerator < 0.0:
            return None
        return -math.inf, math.inf

    tmin = tmin_numerator / direction
    tmax = tmax_numerator / direction
    if tmin > tmax:
        tmin, tmax = tmax, tmin
    return tmin, tmax


def local_intersect_cube(ray: Ray) -> list[float]:
    """Intersect an object-space ray with the unit cube.

    Returns:
        ``[t_entry, t_exit]`` or an empty list on a miss.
    """
    tmin, tmax = -math.inf, math.inf
    for origin, direction in zip(ray.origin, ray.direction):
        interval = _check_axis(origin, direction)
        if interval is None:
            return []
        tmin = max(tmin, interval[0])
        tmax = min(tmax, interval[1])

    if tmin > tmax or tmax < 0.0:
        return []
    return [tmin, tmax]


def local_normal_cube(object_point: Tuple) -> Tuple:
    """Normal of the face the point lies on (the axis of largest magnitude)."""
    x, y, z = object_point
    ax, ay, az = abs(x), abs(y), abs(z)
    max_component = max(ax, ay, az)
    if max_component == ax:
        return vector(x, 0.0, 0.0)
    if max_component == ay:
        return vector(0.0, y, 0.0)
    return vector(0.0, 0.0, z)
