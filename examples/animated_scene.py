#!/usr/bin/env python3
"""Interactive animated scene with a bouncing ball.

This script opens a window showing the default scene and animates the red
ball with the bounce model. The image is re-rendered incrementally: each
display refresh shades up to --budget pixels.

Usage:
    python -m examples.animated_scene [options]

Options:
    --width WIDTH       Window width in pixels (default: 720)
    --height HEIGHT     Window height in pixels (default: 720)
    --budget PIXELS     Pixels shaded per refresh (default: full frame)
    --arch ARCH         Taichi backend: cpu, gpu or vulkan (default: cpu)

Controls:
    - Space: make the ball jump
    - P: export the current frame as PNG
    - Escape or close the window to exit
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Ensure the project root is in the Python path for direct execution
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import taichi as ti  # noqa: E402

_ARCHS = {"cpu": ti.cpu, "gpu": ti.gpu, "vulkan": ti.vulkan}


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Animate the default scene in an interactive window.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=720,
        help="Window width in pixels (default: 720)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=720,
        help="Window height in pixels (default: 720)",
    )
    parser.add_argument(
        "--budget",
        type=int,
        default=None,
        help="Pixels shaded per refresh (default: full frame)",
    )
    parser.add_argument(
        "--arch",
        choices=sorted(_ARCHS),
        default="cpu",
        help="Taichi backend (default: cpu)",
    )
    return parser.parse_args()


def main() -> int:
    """Main entry point for the animated scene.

    Returns:
        Exit code (0 for success, non-zero for error).
    """
    args = parse_args()

    # Initialize Taichi first (before importing modules that use ti.kernel)
    ti.init(arch=_ARCHS[args.arch], log_level=ti.WARN)
    print(f"Taichi backend: {args.arch}")

    # Import after Taichi initialization
    from src.tracer.core.frame import FrameLoop
    from src.tracer.preview.interactive import InteractivePreview

    if not InteractivePreview.is_display_available():
        print("Error: No display available. Cannot run interactive preview.")
        print("Use examples/render_scene.py for headless rendering.")
        return 1

    try:
        loop = FrameLoop.with_default_scene(args.width, args.height, budget=args.budget)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    print(f"Creating window ({args.width}x{args.height}, budget {loop.renderer.budget} px)...")
    preview = InteractivePreview(args.width, args.height)

    print("Starting animation...")
    print("  - Space: jump")
    print("  - P: export PNG")
    print("  - Escape or close window to exit")
    print()

    try:
        preview.run_animated(loop)
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
    finally:
        preview.close()
        print(f"Preview window closed after {loop.ticks} ticks.")

    return 0


if __name__ == "__main__":
    sys.exit(main())
