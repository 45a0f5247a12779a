"""Image export for rendered canvases.

Colors leave the renderer unclamped; this module is where they are mapped to
the displayable range. The pipeline is:

    1. Tone mapping (optional: "reinhard" or "exposure")
    2. Gamma correction (1.0 keeps values linear)
    3. Clamp to [0, 1] and scale to 8 bits

Supported formats:
    - PNG (8-bit RGB via Pillow)
    - PPM (plain-text P3, no gamma or tone mapping)

Example:
    >>> from glint.preview.export import save_image
    >>> save_image(canvas, "render.png", gamma=2.2)
    >>> save_image(canvas, "render.ppm")
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Literal

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

if TYPE_CHECKING:
    from glint.preview.canvas import Canvas

# Type alias for tone mapping options
ToneMapMethod = Literal["none", "reinhard", "exposure"]

# Longest line allowed in a PPM file
PPM_LINE_LIMIT = 70


def process_image(
    image: npt.NDArray[np.float32],
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 1.0,
    exposure: float = 1.0,
) -> npt.NDArray[np.float32]:
    """Map a linear HDR image into [0, 1].

    Args:
        image: Linear image array of shape (H, W, 3).
        tone_map: "none", "reinhard" (c / (1 + c)) or "exposure"
            (1 - exp(-c * exposure)).
        gamma: Gamma encoding exponent is ``1 / gamma``.
        exposure: Exposure for the "exposure" tone map.

    Returns:
        Float32 image clamped to [0, 1].

    Raises:
        ValueError: For an unknown tone mapping method or non-positive gamma.
    """
    if gamma <= 0.0:
        raise ValueError(f"Gamma must be positive, got {gamma}")

    result = np.maximum(image.astype(np.float32), 0.0)
    if tone_map == "reinhard":
        result = result / (1.0 + result)
    elif tone_map == "exposure":
        result = 1.0 - np.exp(-result * exposure)
    elif tone_map != "none":
        raise ValueError(f"Unknown tone mapping method: {tone_map}")

    result = np.clip(result, 0.0, 1.0)
    if gamma != 1.0:
        result = np.power(result, 1.0 / gamma)
    return result.astype(np.float32)


def image_to_uint8(
    image: npt.NDArray[np.float32],
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 1.0,
    exposure: float = 1.0,
) -> npt.NDArray[np.uint8]:
    """Convert a linear float image to rounded 8-bit values."""
    processed = process_image(image, tone_map=tone_map, gamma=gamma, exposure=exposure)
    return np.round(processed * 255.0).astype(np.uint8)


def save_png(
    canvas: Canvas,
    filepath: str | Path,
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 2.2,
    exposure: float = 1.0,
) -> None:
    """Save the canvas as an 8-bit RGB PNG."""
    image_uint8 = image_to_uint8(
        canvas.to_numpy(), tone_map=tone_map, gamma=gamma, exposure=exposure
    )
    PILImage.fromarray(image_uint8).save(str(filepath))


def canvas_to_ppm(canvas: Canvas) -> str:
    """Render the canvas as plain-text PPM (P3).

    Components are scaled to 0..255 and clamped; no line exceeds 70
    characters and the text ends with a newline.
    """
    image = image_to_uint8(canvas.to_numpy())
    lines = ["P3", f"{canvas.width} {canvas.height}", "255"]
    for row in image:
        line = ""
        for value in row.ravel():
            token = str(int(value))
            if not line:
                line = token
            elif len(line) + 1 + len(token) > PPM_LINE_LIMIT:
                lines.append(line)
                line = token
            else:
                line = f"{line} {token}"
        lines.append(line)
    return "\n".join(lines) + "\n"


def save_ppm(canvas: Canvas, filepath: str | Path) -> None:
    Path(filepath).write_text(canvas_to_ppm(canvas), encoding="ascii")


def save_image(
    canvas: Canvas,
    filepath: str | Path,
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 2.2,
    exposure: float = 1.0,
) -> Path:
    """Save the canvas, choosing the format from the file suffix.

    ``.ppm`` files are written as plain PPM; anything else goes through
    Pillow as PNG-style 8-bit RGB.

    Returns:
        The path that was written.
    """
    path = Path(filepath)
    if path.suffix.lower() == ".ppm":
        save_ppm(canvas, path)
    else:
        save_png(canvas, path, tone_map=tone_map, gamma=gamma, exposure=exposure)
    return path


def compute_rmse(
    image_a: npt.NDArray[np.floating],
    image_b: npt.NDArray[np.floating],
) -> float:
    """Root mean squared error between two images.

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(f"Image shapes must match: {image_a.shape} vs {image_b.shape}")
    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
