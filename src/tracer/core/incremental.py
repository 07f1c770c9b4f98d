"""Incremental renderer that spreads a frame over several display ticks.

The renderer keeps a cursor into the raster-order pixel index space. Each
call to ``advance`` shades at most ``budget`` pixels starting at the cursor
and writes them into the pixel buffer in place. When the cursor reaches the
end of the image, the pass is complete: the cursor goes back to 0 and the
tick stops there, so the finished image is presented at least once before
the next pass starts overwriting it.

Between passes the buffer holds a mix of freshly shaded and stale pixels,
which is a valid image to display. With the default budget (one full frame)
every tick re-renders the whole image.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.tracer.core.incremental import IncrementalRenderer
    >>> from src.tracer.scene.default_scene import create_default_scene
    >>>
    >>> scene, ball = create_default_scene()
    >>> renderer = IncrementalRenderer(64, 64, budget=1024)
    >>> renderer.advance()  # shades pixels 0..1023
    1024
    >>> image = renderer.get_image_numpy()
"""

from collections.abc import Generator

import numpy as np
import numpy.typing as npt

from src.tracer.core.color import BLACK, Color
from src.tracer.core.shading import (
    clear_render_target,
    get_pixel_buffer_numpy,
    render_span,
    setup_render_target,
)


class IncrementalRenderer:
    """A budgeted, resumable renderer over a fixed-size pixel buffer.

    The renderer is a small state machine: (cursor, budget) decide which
    pixels the next tick shades. Rendering can stop after any pixel and
    resume on the next tick.

    The pixel buffer itself is the global render target of
    ``core.shading``; this class owns the cursor and the dimensions.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
    """

    def __init__(self, width: int, height: int, budget: int | None = None) -> None:
        """Initialize the renderer and clear the pixel buffer.

        Args:
            width: Image width in pixels (max 2048).
            height: Image height in pixels (max 2048).
            budget: Maximum pixels shaded per tick. Defaults to the full
                frame (width * height).

        Raises:
            ValueError: If dimensions are invalid or the budget is not
                positive.
        """
        setup_render_target(width, height)
        self._width = width
        self._height = height
        self._cursor = 0
        self._passes_completed = 0
        self._budget = self.total_pixels
        if budget is not None:
            self.budget = budget

    @property
    def width(self) -> int:
        """Get the image width."""
        return self._width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self._height

    @property
    def total_pixels(self) -> int:
        """Number of pixels in one full pass."""
        return self._width * self._height

    @property
    def cursor(self) -> int:
        """Raster index of the next pixel to shade."""
        return self._cursor

    @property
    def passes_completed(self) -> int:
        """Number of full passes finished since construction or reset."""
        return self._passes_completed

    @property
    def budget(self) -> int:
        """Maximum number of pixels shaded per tick."""
        return self._budget

    @budget.setter
    def budget(self, value: int) -> None:
        if value < 1:
            raise ValueError(f"Render budget must be at least 1 pixel, got {value}")
        self._budget = value

    def reset(self, color: Color = BLACK) -> None:
        """Clear the pixel buffer and restart from the first pixel."""
        clear_render_target(color)
        self._cursor = 0
        self._passes_completed = 0

    def advance(self, budget: int | None = None) -> int:
        """Run one tick: shade up to ``budget`` pixels from the cursor.

        If the pass completes during this tick, the cursor wraps to 0 and the
        tick ends even when budget is left over.

        Args:
            budget: Pixels to shade this tick. Defaults to ``self.budget``.

        Returns:
            The number of pixels shaded.

        Raises:
            ValueError: If the budget is not positive.
        """
        if budget is None:
            budget = self._budget
        elif budget < 1:
            raise ValueError(f"Render budget must be at least 1 pixel, got {budget}")

        count = min(budget, self.total_pixels - self._cursor)
        render_span(self._cursor, count)
        self._cursor += count

        if self._cursor >= self.total_pixels:
            self._cursor = 0
            self._passes_completed += 1

        return count

    def advance_progressive(
        self,
        num_ticks: int,
        budget: int | None = None,
    ) -> Generator[tuple[int, int], None, None]:
        """Run several ticks, yielding progress after each one.

        Args:
            num_ticks: Number of ticks to run.
            budget: Pixels per tick. Defaults to ``self.budget``.

        Yields:
            Tuple of (cursor, passes_completed) after each tick.

        Example:
            >>> for cursor, passes in renderer.advance_progressive(10, budget=512):
            ...     print(f"cursor={cursor} passes={passes}")
        """
        for _ in range(num_ticks):
            self.advance(budget)
            yield (self._cursor, self._passes_completed)

    def render_full_frame(self) -> None:
        """Finish the current pass in a single tick.

        Starting from cursor 0 this renders one whole frame.
        """
        self.advance(self.total_pixels - self._cursor)

    def get_image_numpy(self) -> npt.NDArray[np.uint8]:
        """Get the pixel buffer as an RGBA array.

        Returns:
            NumPy array of shape (height, width, 4) with dtype uint8.
        """
        return get_pixel_buffer_numpy()

    def get_image_uint8_rgb(self) -> npt.NDArray[np.uint8]:
        """Get the pixel buffer without the alpha channel.

        Returns:
            NumPy array of shape (height, width, 3) with dtype uint8.
        """
        return np.ascontiguousarray(self.get_image_numpy()[:, :, :3])

    def save_image(self, filepath: str) -> None:
        """Save the pixel buffer to a file (format from the extension)."""
        from PIL import Image as PILImage

        pil_image = PILImage.fromarray(self.get_image_numpy(), mode="RGBA")
        pil_image.save(filepath)

    def __repr__(self) -> str:
        """Return a string representation of the renderer state."""
        return (
            f"IncrementalRenderer(width={self.width}, height={self.height}, "
            f"budget={self.budget}, cursor={self.cursor}, "
            f"passes={self.passes_completed})"
        )
