"""Transform builders and composition.

A transform sequence ``[A, B, C]`` is applied in order, so ``A`` acts on the
object first and ``C`` last (closest to world space). ``chain`` therefore
returns the net matrix ``C @ B @ A``.

Example:
    >>> from glint.core.transform import chain, scaling, translation
    >>> m = chain(scaling(2.0, 2.0, 2.0), translation(0.0, 1.0, 0.0))
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from glint.core.errors import DegenerateCameraError
from glint.core.matrix import Matrix
from glint.core.tuples import EPSILON, Tuple


def translation(x: float, y: float, z: float) -> Matrix:
    return Matrix(
        [
            [1.0, 0.0, 0.0, x],
            [0.0, 1.0, 0.0, y],
            [0.0, 0.0, 1.0, z],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def scaling(x: float, y: float, z: float) -> Matrix:
    return Matrix(
        [
            [x, 0.0, 0.0, 0.0],
            [0.0, y, 0.0, 0.0],
            [0.0, 0.0, z, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_x(radians: float) -> Matrix:
    c, s = math.cos(radians), math.sin(radians)
    return Matrix(
        [
            [1.0, 0.0, 0.0, 0.0],
            [0.0, c, -s, 0.0],
            [0.0, s, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_y(radians: float) -> Matrix:
    c, s = math.cos(radians), math.sin(radians)
    return Matrix(
        [
            [c, 0.0, s, 0.0],
            [0.0, 1.0, 0.0, 0.0],
            [-s, 0.0, c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_z(radians: float) -> Matrix:
    c, s = math.cos(radians), math.sin(radians)
    return Matrix(
        [
            [c, -s, 0.0, 0.0],
            [s, c, 0.0, 0.0],
            [0.0, 0.0, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def shearing(xy: float, xz: float, yx: float, yz: float, zx: float, zy: float) -> Matrix:
    """Shear matrix; ``xy`` moves x in proportion to y, and so on."""
    return Matrix(
        [
            [1.0, xy, xz, 0.0],
            [yx, 1.0, yz, 0.0],
            [zx, zy, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def chain(*transforms: Matrix | Iterable[Matrix]) -> Matrix:
    """Compose transforms given in application order.

    Accepts either matrices as positional arguments or a single iterable of
    matrices. ``chain(A, B, C)`` returns ``C @ B @ A``; an empty chain is the
    identity.
    """
    if len(transforms) == 1 and not isinstance(transforms[0], Matrix):
        transforms = tuple(transforms[0])
    result = Matrix.identity()
    for transform in transforms:
        result = transform @ result
    return result


def view_transform(from_point: Tuple, to_point: Tuple, up: Tuple) -> Matrix:
    """Build the world-to-camera transform for a look-at camera.

    Args:
        from_point: Eye position.
        to_point: Point the camera looks at.
        up: Approximate up direction.

    Raises:
        DegenerateCameraError: If ``from`` and ``to`` coincide, or ``up`` is
            parallel to the view direction.
    """
    direction = to_point - from_point
    if direction.magnitude() < EPSILON:
        raise DegenerateCameraError("Camera 'from' and 'to' points coincide")
    if up.magnitude() < EPSILON:
        raise DegenerateCameraError("Camera 'up' vector has zero length")
    forward = direction.normalize()
    left = forward.cross(up.normalize())
    if left.magnitude() < EPSILON:
        raise DegenerateCameraError(
            "Camera 'up' vector is parallel to the view direction"
        )
    true_up = left.cross(forward)
    orientation = Matrix(
        [
            [left.x, left.y, left.z, 0.0],
            [true_up.x, true_up.y, true_up.z, 0.0],
            [-forward.x, -forward.y, -forward.z, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )
    return orientation @ translation(-from_point.x, -from_point.y, -from_point.z)
