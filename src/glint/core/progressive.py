"""Scanline renderer with progress reporting.

This module drives the shading engine over every pixel of a camera and
stores the results in a Canvas. Rows are rendered in batches so callers can:
- Report progress after each batch (callbacks)
- Iterate over progress as a generator (cancellation, UI refresh)
- Render a scene in one call with ``render``

Rendering is a pure function of the camera and world: rendering the same
scene twice produces identical canvases.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from glint.core.progressive import ProgressiveRenderer
    >>> from glint.scene.loader import load_scene
    >>>
    >>> scene = load_scene("scenes/refraction.yml")
    >>> renderer = ProgressiveRenderer(scene.camera, scene.world)
    >>> renderer.render(batch_size=10)
    >>> image = renderer.canvas.to_numpy()
"""

from collections.abc import Callable, Generator

import numpy as np
import numpy.typing as npt

from glint.camera.pinhole import Camera
from glint.core.integrator import color_at
from glint.materials.color import BLACK
from glint.preview.canvas import Canvas
from glint.scene.world import World

# Type alias for progress callback
# Callback receives (rows_done, total_rows)
ProgressCallback = Callable[[int, int], None]


class ProgressiveRenderer:
    """Renders a world through a camera into a canvas, a batch of rows at a time.

    Attributes:
        camera: The camera generating primary rays.
        world: The scene being rendered.
        canvas: Render target with the camera's dimensions.
    """

    def __init__(self, camera: Camera, world: World, canvas: Canvas | None = None) -> None:
        """Initialize the renderer.

        Args:
            camera: Camera generating primary rays.
            world: Scene to render.
            canvas: Optional render target; a new black canvas is created if
                not given.

        Raises:
            ValueError: If the canvas size doesn't match the camera.
        """
        if canvas is None:
            canvas = Canvas(camera.width, camera.height)
        elif (canvas.width, canvas.height) != (camera.width, camera.height):
            raise ValueError(
                f"Canvas size {canvas.width}x{canvas.height} doesn't match "
                f"camera size {camera.width}x{camera.height}"
            )
        self.camera = camera
        self.world = world
        self.canvas = canvas
        self._rows_done = 0

    @property
    def width(self) -> int:
        """Get the image width."""
        return self.camera.width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self.camera.height

    @property
    def rows_done(self) -> int:
        """Number of rows rendered since the last reset."""
        return self._rows_done

    @property
    def is_complete(self) -> bool:
        return self._rows_done >= self.height

    def reset(self) -> None:
        """Start over: clear the canvas and the row counter."""
        self.canvas.fill(BLACK)
        self._rows_done = 0

    def render_row(self, y: int) -> npt.NDArray[np.float64]:
        """Shade every pixel of row ``y`` and write it to the canvas.

        Returns:
            The row as a (width, 3) array of unclamped colors.
        """
        row = np.empty((self.width, 3), dtype=np.float64)
        for x in range(self.width):
            ray = self.camera.ray_for_pixel(x, y)
            row[x] = color_at(self.world, ray).data
        self.canvas.write_row(y, row)
        return row

    def render(
        self,
        batch_size: int = 1,
        callback: ProgressCallback | None = None,
    ) -> Canvas:
        """Render all remaining rows with optional progress callback.

        Can be called again after ``reset`` to re-render from the top.

        Args:
            batch_size: Number of rows to render before each callback.
            callback: Optional callback function called after each batch.
                Receives (rows_done, total_rows).

        Returns:
            The filled canvas.

        Example:
            >>> def progress(done, total):
            ...     print(f"Progress: {done}/{total} rows")
            >>> renderer.render(batch_size=10, callback=progress)
        """
        for rows_done, total_rows in self.render_progressive(batch_size):
            if callback is not None:
                callback(rows_done, total_rows)
        return self.canvas

    def render_progressive(
        self,
        batch_size: int = 1,
    ) -> Generator[tuple[int, int], None, None]:
        """Render rows progressively, yielding progress after each batch.

        This is a generator-based alternative to render() with callbacks;
        stopping iteration early leaves the remaining rows untouched.

        Args:
            batch_size: Number of rows to render before each yield.

        Yields:
            Tuple of (rows_done, total_rows).

        Raises:
            ValueError: If batch_size is not positive.
        """
        if batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {batch_size}")

        while self._rows_done < self.height:
            end = min(self._rows_done + batch_size, self.height)
            for y in range(self._rows_done, end):
                self.render_row(y)
            self._rows_done = end
            yield (self._rows_done, self.height)

    def __repr__(self) -> str:
        """Return a string representation of the renderer state."""
        return (
            f"ProgressiveRenderer(width={self.width}, height={self.height}, "
            f"rows_done={self.rows_done})"
        )


def render(camera: Camera, world: World) -> Canvas:
    """Render ``world`` as seen by ``camera`` into a new canvas.

    Pixel (x, y) of the result holds ``color_at(world, camera.ray_for_pixel(x, y))``.
    """
    return ProgressiveRenderer(camera, world).render(batch_size=camera.height)
