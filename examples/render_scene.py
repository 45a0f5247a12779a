#!/usr/bin/env python3
"""Render a YAML scene file to an image.

Loads a scene, renders it through the scene's camera, and writes the result
as PNG or PPM depending on the output suffix.

Usage:
    python -m examples.render_scene SCENE [options]

Options:
    --output OUTPUT     Output file path (default: SCENE name with .png)
    --width WIDTH       Override the camera width in pixels
    --height HEIGHT     Override the camera height in pixels
    --tone-map METHOD   none, reinhard or exposure (default: none)
    --gamma GAMMA       Gamma for PNG output (default: 2.2)
    --batch-size SIZE   Rows per progress update (default: 8)
    --quiet             Suppress progress output

Example:
    python -m examples.render_scene scenes/refraction.yml --width 160 --height 120
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

import taichi as ti


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a YAML scene file.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("scene", type=Path, help="Scene file (.yml)")
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Output file path (default: scene name with .png)",
    )
    parser.add_argument("--width", type=int, default=None, help="Override camera width")
    parser.add_argument("--height", type=int, default=None, help="Override camera height")
    parser.add_argument(
        "--tone-map",
        choices=["none", "reinhard", "exposure"],
        default="none",
        help="Tone mapping for PNG output (default: none)",
    )
    parser.add_argument(
        "--gamma",
        type=float,
        default=2.2,
        help="Gamma for PNG output (default: 2.2)",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=8,
        help="Rows per progress update (default: 8)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def render_scene(
    scene_path: Path,
    output_path: Path | None = None,
    *,
    width: int | None = None,
    height: int | None = None,
    tone_map: str = "none",
    gamma: float = 2.2,
    batch_size: int = 8,
    quiet: bool = False,
) -> Path:
    """Render ``scene_path`` and save the image.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports so ti.init runs before any field is allocated
    from glint.camera.pinhole import Camera
    from glint.core.progressive import ProgressiveRenderer
    from glint.preview.export import save_image
    from glint.scene.loader import load_scene

    scene = load_scene(scene_path)
    camera = scene.camera
    if width is not None or height is not None:
        camera = Camera(
            width or camera.width,
            height or camera.height,
            camera.field_of_view,
            camera.transform,
        )

    if not quiet:
        print(
            f"Rendering {scene_path} ({camera.width}x{camera.height}, "
            f"{len(scene.world.shapes)} shapes, {len(scene.world.lights)} lights)..."
        )

    renderer = ProgressiveRenderer(camera, scene.world)
    start_time = time.time()

    def progress_callback(done: int, total: int) -> None:
        if not quiet:
            elapsed = time.time() - start_time
            rows_per_sec = done / elapsed if elapsed > 0 else 0
            print(
                f"\r  Progress: {done}/{total} rows "
                f"({done / total * 100:.1f}%) - {rows_per_sec:.1f} rows/s",
                end="",
                flush=True,
            )

    canvas = renderer.render(batch_size=batch_size, callback=progress_callback)
    if not quiet:
        print()

    output_file = output_path or scene_path.with_suffix(".png").name
    saved = save_image(canvas, output_file, tone_map=tone_map, gamma=gamma)

    if not quiet:
        print(f"Saved to: {saved.absolute()}")
        print(f"Total time: {time.time() - start_time:.2f}s")
    return saved


def main() -> int:
    """Main entry point."""
    args = parse_args()

    # Use GPU if available, fall back to CPU
    try:
        ti.init(arch=ti.gpu)
    except Exception:
        ti.init(arch=ti.cpu)

    try:
        render_scene(
            args.scene,
            args.output,
            width=args.width,
            height=args.height,
            tone_map=args.tone_map,
            gamma=args.gamma,
            batch_size=args.batch_size,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
