"""Pinhole camera model for perspective projection ray generation.

The camera sits at the origin of camera space looking down -z at a canvas
one unit away. The canvas spans ``tan(field_of_view / 2)`` on its longer
side; the shorter side is scaled by the aspect ratio. Each pixel's ray goes
through the center of that pixel:

    x_offset = (px + 0.5) * pixel_size
    world_x  = half_width - x_offset     (+x is to the left of the camera)
    world_y  = half_height - y_offset    (pixel row 0 is the top)

The camera-space canvas point and origin are then moved into world space by
the inverse of the camera's view transform.

Example:
    >>> import math
    >>> from glint.camera.pinhole import Camera
    >>> camera = Camera(201, 101, math.pi / 2)
    >>> camera.ray_for_pixel(100, 50).direction
    vector(0, 0, -1)
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from glint.core.matrix import IDENTITY, Matrix
from glint.core.ray import Ray
from glint.core.transform import view_transform
from glint.core.tuples import Tuple, point

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass(frozen=True)
class Camera:
    """A pinhole camera.

    Attributes:
        width: Horizontal size of the image in pixels.
        height: Vertical size of the image in pixels.
        field_of_view: Angle covered by the longer image side, in radians.
        transform: World-to-camera view transform.
        half_width: Half the canvas width at unit distance.
        half_height: Half the canvas height at unit distance.
        pixel_size: Size of one (square) pixel on the canvas.
    """

    width: int
    height: int
    field_of_view: float
    transform: Matrix = IDENTITY
    half_width: float = field(init=False, repr=False)
    half_height: float = field(init=False, repr=False)
    pixel_size: float = field(init=False, repr=False)
    inverse: Matrix = field(init=False, repr=False)
    origin: Tuple = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Camera size must be positive, got {self.width}x{self.height}"
            )
        if not 0.0 < self.field_of_view < math.pi:
            raise ValueError(
                f"Camera field of view must be in (0, pi), got {self.field_of_view}"
            )

        half_view = math.tan(self.field_of_view / 2.0)
        aspect = self.width / self.height
        if aspect >= 1.0:
            half_width, half_height = half_view, half_view / aspect
        else:
            half_width, half_height = half_view * aspect, half_view

        inverse = self.transform.inverse()
        object.__setattr__(self, "half_width", half_width)
        object.__setattr__(self, "half_height", half_height)
        object.__setattr__(self, "pixel_size", half_width * 2.0 / self.width)
        object.__setattr__(self, "inverse", inverse)
        object.__setattr__(self, "origin", inverse @ point(0.0, 0.0, 0.0))

    @classmethod
    def look_at(
        cls,
        width: int,
        height: int,
        field_of_view: float,
        from_point: Tuple,
        to_point: Tuple,
        up: Tuple,
    ) -> Camera:
        """Create a camera placed at ``from_point`` looking at ``to_point``.

        Raises:
            DegenerateCameraError: If ``up`` is parallel to the view direction.
        """
        return cls(width, height, field_of_view, view_transform(from_point, to_point, up))

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    def ray_for_pixel(self, px: float, py: float) -> Ray:
        """Generate the world-space ray through the center of pixel (px, py).

        Args:
            px: Column index, 0 at the left edge.
            py: Row index, 0 at the top edge.

        Returns:
            A ray from the camera origin with a normalized direction.
        """
        x_offset = (px + 0.5) * self.pixel_size
        y_offset = (py + 0.5) * self.pixel_size
        world_x = self.half_width - x_offset
        world_y = self.half_height - y_offset

        pixel = self.inverse @ point(world_x, world_y, -1.0)
        direction = (pixel - self.origin).normalize()
        return Ray(self.origin, direction)
