#!/usr/bin/env python3
"""Render a YAML scene and show it in a preview window.

The window refreshes after every batch of rows so the image fills in from the
top while it renders, then stays open until it is closed or Escape is
pressed.

Usage:
    python -m examples.interactive_scene SCENE [--gamma GAMMA] [--batch-size SIZE]
"""

from __future__ import annotations

import argparse
import platform
import sys
from pathlib import Path

import taichi as ti


def initialize_taichi() -> str:
    """Call ti.init with Metal on macOS, else any GPU, else the CPU.

    Returns:
        A label for the chosen backend.
    """
    if platform.system() == "Darwin":
        try:
            ti.init(arch=ti.metal)
            return "Metal (GPU)"
        except Exception:
            pass

    try:
        ti.init(arch=ti.gpu)
        return "GPU"
    except Exception:
        pass

    ti.init(arch=ti.cpu)
    return "CPU"


def main() -> int:
    """Main entry point for the scene preview.

    Returns:
        0 when the window was shown, 1 when the scene or display was unusable.
    """
    parser = argparse.ArgumentParser(description="Render a scene in a preview window.")
    parser.add_argument("scene", type=Path, help="Scene file (.yml)")
    parser.add_argument("--gamma", type=float, default=2.2, help="Display gamma")
    parser.add_argument("--batch-size", type=int, default=4, help="Rows per refresh")
    args = parser.parse_args()

    backend = initialize_taichi()
    print(f"Backend: {backend}")

    # Canvas fields need ti.init to have run
    from glint.core.errors import GlintError
    from glint.core.progressive import ProgressiveRenderer
    from glint.preview.interactive import InteractivePreview
    from glint.scene.loader import load_scene

    if not InteractivePreview.is_display_available():
        print("Error: no display to open a preview window on.", file=sys.stderr)
        print("Use examples/render_scene.py to render to a file instead.")
        return 1

    try:
        scene = load_scene(args.scene)
    except (GlintError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    camera = scene.camera
    print(f"Rendering {args.scene} ({camera.width}x{camera.height})...")
    renderer = ProgressiveRenderer(camera, scene.world)
    preview = InteractivePreview(camera.width, camera.height, title=f"glint - {args.scene.name}")

    try:
        for _ in renderer.render_progressive(batch_size=args.batch_size):
            preview.update_from_canvas(renderer.canvas, gamma=args.gamma)
            if not preview.is_running():
                print("Preview closed before the render finished.")
                return 0
            preview.show_frame()
        print("Render complete. Close the window or press Escape to exit.")
        preview.run()
    except KeyboardInterrupt:
        print("\nInterrupted.")
    finally:
        preview.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
