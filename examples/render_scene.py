#!/usr/bin/env python3
"""Render the animated scene headlessly.

This script runs the frame loop without a window: it simulates a number of
ticks at a fixed time step (optionally starting with a jump), rendering
incrementally with the given budget, and saves the final pixel buffer.

Usage:
    python -m examples.render_scene [options]

Options:
    --width WIDTH       Image width in pixels (default: 720)
    --height HEIGHT     Image height in pixels (default: 720)
    --budget PIXELS     Pixels shaded per tick (default: full frame)
    --ticks TICKS       Number of ticks to simulate (default: 1)
    --dt SECONDS        Time step per tick (default: 1/60)
    --jump              Trigger a jump on the first tick
    --output OUTPUT     Output file path (default: scene.png)
    --quiet             Suppress progress output

Example:
    python -m examples.render_scene --ticks 30 --jump --budget 65536
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

# Ensure the project root is in the Python path for direct execution
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import taichi as ti  # noqa: E402


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the animated scene to a PNG file.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=720,
        help="Image width in pixels (default: 720)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=720,
        help="Image height in pixels (default: 720)",
    )
    parser.add_argument(
        "--budget",
        type=int,
        default=None,
        help="Pixels shaded per tick (default: full frame)",
    )
    parser.add_argument(
        "--ticks",
        type=int,
        default=1,
        help="Number of ticks to simulate (default: 1)",
    )
    parser.add_argument(
        "--dt",
        type=float,
        default=1.0 / 60.0,
        help="Time step per tick in seconds (default: 1/60)",
    )
    parser.add_argument(
        "--jump",
        action="store_true",
        help="Trigger a jump on the first tick",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="scene.png",
        help="Output file path (default: scene.png)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def render_scene(
    width: int = 720,
    height: int = 720,
    budget: int | None = None,
    ticks: int = 1,
    dt: float = 1.0 / 60.0,
    jump: bool = False,
    output_path: str = "scene.png",
    quiet: bool = False,
) -> Path:
    """Simulate and render the default scene, then save the buffer.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        budget: Pixels shaded per tick (None for a full frame).
        ticks: Number of ticks to simulate.
        dt: Time step per tick in seconds.
        jump: Whether to trigger a jump on the first tick.
        output_path: Output file path (PNG).
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from src.tracer.core.frame import FrameLoop
    from src.tracer.preview.export import save_png

    if not quiet:
        print(f"Creating default scene ({width}x{height})...")

    loop = FrameLoop.with_default_scene(width, height, budget=budget)

    if not quiet:
        print(f"Simulating {ticks} ticks (dt={dt:.4f}s, budget={loop.renderer.budget} px)...")

    start_time = time.time()

    for i in range(ticks):
        loop.tick(dt, jump=jump and i == 0)
        if not quiet:
            renderer = loop.renderer
            print(
                f"\r  Tick {i + 1}/{ticks} - cursor {renderer.cursor}/{renderer.total_pixels}"
                f", passes {renderer.passes_completed}, ball y={loop.state.position[1]:.3f}",
                end="",
                flush=True,
            )

    if not quiet:
        print()  # Newline after progress

    output_file = Path(output_path)
    save_png(loop.renderer, str(output_file))

    total_time = time.time() - start_time
    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    ti.init(arch=ti.cpu, log_level=ti.WARN)
    if not args.quiet:
        print("Using CPU backend")

    try:
        render_scene(
            width=args.width,
            height=args.height,
            budget=args.budget,
            ticks=args.ticks,
            dt=args.dt,
            jump=args.jump,
            output_path=args.output,
            quiet=args.quiet,
        )
        return 0
    except (ValueError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
