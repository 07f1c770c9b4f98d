"""Matplotlib-based preview display for the pixel buffer.

Features:
    - Conversion of the RGBA u8 buffer to float RGB for display
    - Static preview window showing render progress

Example:
    >>> from src.tracer.preview.display import show_preview
    >>> from src.tracer.core.incremental import IncrementalRenderer
    >>>
    >>> renderer = IncrementalRenderer(256, 256)
    >>> renderer.render_full_frame()
    >>> show_preview(renderer)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt

if TYPE_CHECKING:
    from src.tracer.core.incremental import IncrementalRenderer


def rgba_to_float_rgb(buffer: npt.NDArray[np.uint8]) -> npt.NDArray[np.float32]:
    """Convert an RGBA uint8 buffer to float RGB in [0, 1].

    Args:
        buffer: Array of shape (H, W, 4) with dtype uint8.

    Returns:
        Array of shape (H, W, 3) with dtype float32.
    """
    return (buffer[:, :, :3].astype(np.float32) / 255.0).astype(np.float32)


def show_preview(
    renderer: IncrementalRenderer,
    *,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 8),
    block: bool = True,
) -> None:
    """Display the current pixel buffer as a Matplotlib figure.

    The default title shows how far the current pass has progressed.

    Args:
        renderer: The IncrementalRenderer instance to display.
        title: Custom title (default shows pass progress).
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until figure is closed.
    """
    import matplotlib.pyplot as plt

    display_image = rgba_to_float_rgb(renderer.get_image_numpy())

    fig, ax = plt.subplots(1, 1, figsize=figsize)

    ax.imshow(display_image)
    ax.axis("off")

    if title is None:
        progress = 100.0 * renderer.cursor / renderer.total_pixels
        title_text = f"Render Preview - pass {renderer.passes_completed + 1} ({progress:.0f}%)"
    else:
        title_text = title

    ax.set_title(title_text)

    plt.tight_layout()
    plt.show(block=block)
