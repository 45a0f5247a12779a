"""Geometry module for shape primitives.

Each primitive is defined in its own object space:

    sphere: Unit sphere centered at the origin
    plane: The xz plane (y = 0), normal +y
    cube: Axis-aligned cube spanning [-1, 1] on every axis

``Shape`` wraps a primitive kind with a transform and material and handles
the world/object space conversions shared by all of them.
"""

from .shape import (
    Intersection,
    Shape,
    ShapeKind,
    cube,
    glass_sphere,
    plane,
    sphere,
)

__all__ = [
    "Intersection",
    "Shape",
    "ShapeKind",
    "cube",
    "glass_sphere",
    "plane",
    "sphere",
]
