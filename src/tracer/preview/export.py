"""Image export utilities for the pixel buffer.

Supported formats:
    - PNG (8-bit RGBA or RGB via Pillow)

Example:
    >>> from src.tracer.preview.export import save_png
    >>> from src.tracer.core.incremental import IncrementalRenderer
    >>>
    >>> renderer = IncrementalRenderer(256, 256)
    >>> renderer.render_full_frame()
    >>> save_png(renderer, "output.png")
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

if TYPE_CHECKING:
    from src.tracer.core.incremental import IncrementalRenderer


def save_png(
    renderer: IncrementalRenderer,
    filepath: str,
    *,
    include_alpha: bool = False,
) -> None:
    """Save the renderer's pixel buffer as a PNG file.

    The buffer is saved as it is, including any stale pixels of an
    unfinished pass.

    Args:
        renderer: The IncrementalRenderer whose buffer to save.
        filepath: Output file path (should end in .png).
        include_alpha: Keep the alpha channel (RGBA) instead of RGB.
    """
    save_png_from_array(renderer.get_image_numpy(), filepath, include_alpha=include_alpha)


def save_png_from_array(
    image: npt.NDArray[np.uint8],
    filepath: str,
    *,
    include_alpha: bool = False,
) -> None:
    """Save an RGBA uint8 array as a PNG file.

    Args:
        image: Array of shape (H, W, 4) with dtype uint8.
        filepath: Output file path (should end in .png).
        include_alpha: Keep the alpha channel (RGBA) instead of RGB.

    Raises:
        ValueError: If the array is not (H, W, 4) uint8.
    """
    if image.ndim != 3 or image.shape[2] != 4 or image.dtype != np.uint8:
        raise ValueError(
            f"Expected an (H, W, 4) uint8 array, got shape {image.shape} dtype {image.dtype}"
        )

    if include_alpha:
        pil_image = PILImage.fromarray(np.ascontiguousarray(image), mode="RGBA")
    else:
        pil_image = PILImage.fromarray(np.ascontiguousarray(image[:, :, :3]), mode="RGB")
    pil_image.save(filepath)


def count_changed_pixels(
    image_a: npt.NDArray[np.uint8],
    image_b: npt.NDArray[np.uint8],
) -> int:
    """Count pixels that differ in any channel between two buffers.

    Args:
        image_a: First buffer.
        image_b: Second buffer (must have same shape as image_a).

    Returns:
        Number of differing pixels.

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(f"Image shapes must match: {image_a.shape} vs {image_b.shape}")

    return int(np.count_nonzero(np.any(image_a != image_b, axis=-1)))
