"""GGUI window for looking at a rendered canvas.

Shows a rendered canvas in a window until the window is closed or Escape is
pressed. The window is created lazily, so a preview object can be built and
fed images in headless environments (tests, batch renders) without opening
anything.

Example:
    >>> from glint.preview.interactive import InteractivePreview
    >>> preview = InteractivePreview(canvas.width, canvas.height)
    >>> preview.update_from_canvas(canvas, gamma=2.2)
    >>> preview.run()
"""

import os
import sys
from typing import TYPE_CHECKING, Any

import taichi as ti

if TYPE_CHECKING:
    from glint.preview.canvas import Canvas


# Built on first use, once ti.init has run
_display_kernel: Any = None


def _get_display_kernel() -> Any:
    """Get or create the canvas-to-display kernel.

    The kernel clamps to [0, 1], applies gamma, and flips rows because the
    GGUI canvas has its origin at the bottom-left while glint rows start at
    the top.
    """
    global _display_kernel
    if _display_kernel is None:

        @ti.kernel
        def _kernel(src: ti.template(), dst: ti.template(), inv_gamma: ti.f32):
            height = src.shape[1]
            for i, j in src:
                value = ti.math.clamp(src[i, j], 0.0, 1.0)
                dst[i, height - 1 - j] = value**inv_gamma

        _display_kernel = _kernel
    return _display_kernel


class InteractivePreview:
    """Displays a canvas in a Taichi GGUI window.

    Attributes:
        width: Canvas and window width.
        height: Canvas and window height.
        display_image: Taichi field holding the display-ready image, in GGUI
            (bottom-left origin) orientation.
    """

    def __init__(self, width: int, height: int, *, title: str = "glint preview") -> None:
        """Create the preview; the window itself opens on first use.

        Raises:
            ValueError: If either dimension is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Preview size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self._title = title
        self._window: ti.ui.Window | None = None
        self._canvas: ti.ui.Canvas | None = None
        self.display_image: ti.MatrixField = ti.Vector.field(
            3, dtype=ti.f32, shape=(width, height)
        )

    def _initialize_window(self) -> None:
        if self._window is not None:
            return
        self._window = ti.ui.Window(
            name=self._title,
            res=(self.width, self.height),
            vsync=True,
        )
        self._canvas = self._window.get_canvas()

    @property
    def window(self) -> ti.ui.Window:
        """The GGUI window, opened on first access."""
        self._initialize_window()
        assert self._window is not None
        return self._window

    def update_from_canvas(self, canvas: "Canvas", *, gamma: float = 2.2) -> None:
        """Copy a rendered canvas into the display image.

        Raises:
            ValueError: If the canvas size differs from the preview size, or
                gamma is not positive.
        """
        if (canvas.width, canvas.height) != (self.width, self.height):
            raise ValueError(
                f"Canvas size {canvas.width}x{canvas.height} doesn't match "
                f"preview size {self.width}x{self.height}"
            )
        if gamma <= 0.0:
            raise ValueError(f"Gamma must be positive, got {gamma}")
        _get_display_kernel()(canvas.pixels, self.display_image, 1.0 / gamma)

    def is_running(self) -> bool:
        """Check whether the window is open and Escape has not been pressed."""
        window = self.window
        if window.get_event(ti.ui.PRESS) and window.event.key == ti.ui.ESCAPE:
            window.running = False
        return window.running

    def show_frame(self) -> None:
        """Present the current display image once."""
        self._initialize_window()
        assert self._canvas is not None
        self._canvas.set_image(self.display_image)
        self.window.show()

    def run(self) -> None:
        """Block, showing the display image until the window is closed."""
        self._initialize_window()
        while self.is_running():
            self.show_frame()

    def close(self) -> None:
        if self._window is not None:
            self._window.running = False

    @staticmethod
    def is_display_available() -> bool:
        """Whether a window can be opened here.

        False on headless machines and over SSH without X forwarding.
        """
        if sys.platform == "darwin":
            # An SSH session without X forwarding has no display
            return not (os.environ.get("SSH_CONNECTION") and not os.environ.get("DISPLAY"))
        if sys.platform.startswith("win"):
            return True
        return bool(os.environ.get("DISPLAY") or os.environ.get("WAYLAND_DISPLAY"))
