"""Homogeneous tuples: points (w=1) and vectors (w=0).

A ``Tuple`` wraps a float64 numpy array of four components. Arithmetic keeps
the point/vector tag consistent: point - point is a vector, point + vector is
a point, vector + vector is a vector. Any combination that would produce a w
other than 0 or 1 (point + point, vector - point, negating or scaling a
point) raises ``ValueError`` at construction.

Example:
    >>> from glint.core.tuples import point, vector
    >>> p = point(1.0, 2.0, 3.0)
    >>> v = vector(0.0, 0.0, 1.0)
    >>> (p + v).z
    4.0
"""

from __future__ import annotations

import math

import numpy as np
import numpy.typing as npt

# Tolerance for float comparisons throughout the tracer
EPSILON = 1e-5


class Tuple:
    """A point or vector in homogeneous coordinates.

    Attributes:
        data: The underlying float64 array ``[x, y, z, w]``.
    """

    __slots__ = ("data",)

    def __init__(self, x: float, y: float, z: float, w: float) -> None:
        if not (abs(w) < EPSILON or abs(w - 1.0) < EPSILON):
            raise ValueError(f"Tuple w must be 0 (vector) or 1 (point), got {w}")
        self.data: npt.NDArray[np.float64] = np.array(
            [x, y, z, 0.0 if abs(w) < EPSILON else 1.0], dtype=np.float64
        )

    @classmethod
    def from_array(cls, data: npt.ArrayLike) -> Tuple:
        """Build a tuple from any 4-element array-like."""
        x, y, z, w = np.asarray(data, dtype=np.float64)
        return cls(x, y, z, w)

    @property
    def x(self) -> float:
        return float(self.data[0])

    @property
    def y(self) -> float:
        return float(self.data[1])

    @property
    def z(self) -> float:
        return float(self.data[2])

    @property
    def w(self) -> float:
        return float(self.data[3])

    def is_point(self) -> bool:
        return self.data[3] == 1.0

    def is_vector(self) -> bool:
        return self.data[3] == 0.0

    def __add__(self, other: Tuple) -> Tuple:
        return Tuple.from_array(self.data + other.data)

    def __sub__(self, other: Tuple) -> Tuple:
        return Tuple.from_array(self.data - other.data)

    def __neg__(self) -> Tuple:
        return Tuple.from_array(-self.data)

    def __mul__(self, scalar: float) -> Tuple:
        if self.is_point() and scalar != 1.0:
            raise ValueError("Only vectors can be scaled")
        return Tuple.from_array(self.data * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Tuple:
        return self * (1.0 / scalar)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tuple):
            return NotImplemented
        return bool(np.allclose(self.data, other.data, atol=EPSILON, rtol=0.0))

    def __hash__(self) -> int:
        return hash(tuple(np.round(self.data, 5)))

    def __iter__(self):
        return iter(self.data[:3].tolist())

    def __repr__(self) -> str:
        kind = "point" if self.is_point() else "vector"
        return f"{kind}({self.x:g}, {self.y:g}, {self.z:g})"

    def magnitude(self) -> float:
        return math.sqrt(float(np.dot(self.data, self.data)))

    def normalize(self) -> Tuple:
        """Return the unit vector in the same direction.

        Raises:
            ValueError: If the tuple is a point or has zero length.
        """
        if not self.is_vector():
            raise ValueError("Only vectors can be normalized")
        length = self.magnitude()
        if length < EPSILON * EPSILON:
            raise ValueError("Cannot normalize a zero-length vector")
        return Tuple.from_array(self.data / length)

    def dot(self, other: Tuple) -> float:
        return float(np.dot(self.data, other.data))

    def cross(self, other: Tuple) -> Tuple:
        """Cross product; defined for vectors only."""
        if not (self.is_vector() and other.is_vector()):
            raise ValueError("Cross product is only defined for vectors")
        x, y, z = np.cross(self.data[:3], other.data[:3])
        return vector(x, y, z)

    def reflect(self, normal: Tuple) -> Tuple:
        """Reflect this vector about ``normal``."""
        return self - normal * (2.0 * self.dot(normal))


def point(x: float, y: float, z: float) -> Tuple:
    """Create a point (w=1)."""
    return Tuple(x, y, z, 1.0)


def vector(x: float, y: float, z: float) -> Tuple:
    """Create a vector (w=0)."""
    return Tuple(x, y, z, 0.0)


def equal(a: float, b: float) -> bool:
    """Compare two floats within ``EPSILON``."""
    return abs(a - b) < EPSILON
