"""Render target: a Taichi field of linear RGB pixels.

The canvas stores unclamped float colors exactly as the shading engine
produces them. Pixel (x, y) has x growing to the right and y growing
downward, matching the camera's pixel numbering; ``to_numpy`` returns the
conventional ``(height, width, 3)`` image layout with row 0 at the top.

Taichi must be initialised (``ti.init``) before a Canvas is created.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from glint.preview.canvas import Canvas
    >>> from glint.materials.color import Color
    >>> canvas = Canvas(10, 20)
    >>> canvas.write_pixel(2, 3, Color(1.0, 0.0, 0.0))
    >>> canvas.pixel_at(2, 3)
    Color(1, 0, 0)
"""

import numpy as np
import numpy.typing as npt
import taichi as ti

from glint.materials.color import Color


@ti.data_oriented
class Canvas:
    """A width x height grid of RGB colors backed by a Taichi vector field.

    Attributes:
        width: Canvas width in pixels.
        height: Canvas height in pixels.
        pixels: Taichi ``Vector.field(3, f32)`` of shape (width, height).
    """

    def __init__(self, width: int, height: int) -> None:
        """Create a black canvas.

        Raises:
            ValueError: If either dimension is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.pixels: ti.MatrixField = ti.Vector.field(3, dtype=ti.f32, shape=(width, height))

    @ti.kernel
    def _fill(self, red: ti.f32, green: ti.f32, blue: ti.f32):
        for x, y in self.pixels:
            self.pixels[x, y] = ti.Vector([red, green, blue])

    @ti.kernel
    def _write_row(self, y: ti.i32, row: ti.types.ndarray()):
        for x in range(row.shape[0]):
            self.pixels[x, y] = ti.Vector([row[x, 0], row[x, 1], row[x, 2]])

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"Pixel ({x}, {y}) is outside the {self.width}x{self.height} canvas"
            )

    def fill(self, color: Color) -> None:
        """Set every pixel to ``color``."""
        self._fill(color.red, color.green, color.blue)

    def write_pixel(self, x: int, y: int, color: Color) -> None:
        self._check_bounds(x, y)
        self.pixels[x, y] = [color.red, color.green, color.blue]

    def pixel_at(self, x: int, y: int) -> Color:
        self._check_bounds(x, y)
        value = self.pixels[x, y]
        return Color(float(value[0]), float(value[1]), float(value[2]))

    def write_row(self, y: int, row: npt.ArrayLike) -> None:
        """Write one full row of pixels.

        Args:
            y: Row index (0 is the top row).
            row: Array-like of shape (width, 3).

        Raises:
            IndexError: If ``y`` is outside the canvas.
            ValueError: If ``row`` has the wrong shape.
        """
        self._check_bounds(0, y)
        data = np.ascontiguousarray(row, dtype=np.float32)
        if data.shape != (self.width, 3):
            raise ValueError(
                f"Row shape {data.shape} doesn't match expected {(self.width, 3)}"
            )
        self._write_row(y, data)

    def to_numpy(self) -> npt.NDArray[np.float32]:
        """Return the pixels as a (height, width, 3) float32 array, unclamped."""
        return np.ascontiguousarray(np.transpose(self.pixels.to_numpy(), (1, 0, 2)))

    def __repr__(self) -> str:
        return f"Canvas(width={self.width}, height={self.height})"
