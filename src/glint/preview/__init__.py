"""Where rendered pixels go: the canvas, image files and a preview window.

Components:
    canvas: Taichi field render target
    export: PNG (Pillow) and PPM image export
    interactive: GGUI window showing a canvas

Colors are stored unclamped on the canvas; tone mapping, gamma and clamping
happen on export or display.

Example:
    >>> from glint.preview import Canvas, save_image
    >>> canvas = Canvas(64, 48)
    >>> save_image(canvas, "output.png", gamma=2.2)

Showing it on screen:
    >>> from glint.preview import InteractivePreview
    >>> preview = InteractivePreview(64, 48)
    >>> preview.update_from_canvas(canvas)
    >>> preview.run()
"""

from glint.preview.canvas import Canvas
from glint.preview.export import (
    PPM_LINE_LIMIT,
    ToneMapMethod,
    canvas_to_ppm,
    compute_rmse,
    image_to_uint8,
    process_image,
    save_image,
    save_png,
    save_ppm,
)
from glint.preview.interactive import InteractivePreview

__all__ = [
    "Canvas",
    "InteractivePreview",
    "PPM_LINE_LIMIT",
    "ToneMapMethod",
    "canvas_to_ppm",
    "compute_rmse",
    "image_to_uint8",
    "process_image",
    "save_image",
    "save_png",
    "save_ppm",
]
