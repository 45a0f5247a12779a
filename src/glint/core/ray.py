"""Ray data structure.

Example:
    >>> from glint.core.ray import Ray
    >>> from glint.core.tuples import point, vector
    >>> ray = Ray(point(0.0, 0.0, 0.0), vector(0.0, 0.0, -1.0))
    >>> ray.position(5.0)
    point(0, 0, -5)
"""

from __future__ import annotations

from dataclasses import dataclass

from glint.core.matrix import Matrix
from glint.core.tuples import Tuple


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector. Not normalized automatically, since
            object-space rays keep the scale of their transform so that ``t``
            agrees with world space.
    """

    origin: Tuple
    direction: Tuple

    def __post_init__(self) -> None:
        if not self.origin.is_point():
            raise ValueError("Ray origin must be a point")
        if not self.direction.is_vector():
            raise ValueError("Ray direction must be a vector")

    def position(self, t: float) -> Tuple:
        """Compute the point along the ray at parameter ``t``."""
        return self.origin + self.direction * t

    def transform(self, matrix: Matrix) -> Ray:
        """Return this ray with ``matrix`` applied to origin and direction."""
        return Ray(matrix @ self.origin, matrix @ self.direction)
