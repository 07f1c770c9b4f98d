"""Interactive preview window using Taichi GGUI.

This module is the host side of the animated renderer: it owns the window,
polls the jump key, measures frame time, drives a FrameLoop once per
display refresh and blits the pixel buffer.

Features:
    - Taichi GGUI window (vsync-paced, one tick per refresh)
    - Space key triggers a jump of the animated ball
    - Frame time measured with time.perf_counter
    - PNG export of the current buffer with the P key

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.tracer.core.frame import FrameLoop
    >>> from src.tracer.preview.interactive import InteractivePreview
    >>>
    >>> loop = FrameLoop.with_default_scene(720, 720)
    >>> preview = InteractivePreview(720, 720)
    >>> preview.run_animated(loop)  # Blocks until the window is closed
"""

from __future__ import annotations

import os
import time
from datetime import datetime
from typing import TYPE_CHECKING

import numpy as np
import taichi as ti

from src.tracer.preview.display import rgba_to_float_rgb

if TYPE_CHECKING:
    import numpy.typing as npt

    from src.tracer.core.frame import FrameLoop


class InteractivePreview:
    """Interactive preview window using Taichi GGUI.

    Attributes:
        width: Window width in pixels.
        height: Window height in pixels.
        window: The Taichi GGUI window instance.
        canvas: The canvas for rendering.
        display_image: Taichi field storing the display image (RGB float).
    """

    def __init__(
        self,
        width: int,
        height: int,
        *,
        title: str = "oscae-raytracer",
    ) -> None:
        """Initialize the interactive preview.

        The window is created lazily on first use, so constructing the
        preview works without a display.

        Args:
            width: Window width in pixels.
            height: Window height in pixels.
            title: Window title.
        """
        self.width = width
        self.height = height
        self._title = title
        self._is_initialized = False

        self._window: ti.ui.Window | None = None
        self._canvas: ti.ui.Canvas | None = None

        # Shape is (width, height) for the canvas, RGB values stored as vec3
        self.display_image: ti.MatrixField = ti.Vector.field(
            3, dtype=ti.f32, shape=(width, height)
        )

        self._pending_keys: set[str] = set()

    def _initialize_window(self) -> None:
        """Initialize the Taichi GGUI window and canvas."""
        if self._is_initialized:
            return

        self._window = ti.ui.Window(
            name=self._title,
            res=(self.width, self.height),
            vsync=True,
        )
        self._canvas = self._window.get_canvas()
        self._is_initialized = True

    @property
    def window(self) -> ti.ui.Window:
        """Get the Taichi GGUI window, initializing if needed."""
        if self._window is None:
            self._initialize_window()
        assert self._window is not None
        return self._window

    @property
    def canvas(self) -> ti.ui.Canvas:
        """Get the canvas for rendering."""
        if self._canvas is None:
            self._initialize_window()
        assert self._canvas is not None
        return self._canvas

    def update_image(self, buffer: npt.NDArray[np.uint8]) -> None:
        """Update the display image from the RGBA pixel buffer.

        Args:
            buffer: Array of shape (height, width, 4) with dtype uint8,
                row 0 at the top.

        Raises:
            ValueError: If buffer shape doesn't match (height, width, 4).
        """
        expected_shape = (self.height, self.width, 4)
        if buffer.shape != expected_shape:
            raise ValueError(
                f"Buffer shape {buffer.shape} doesn't match expected {expected_shape}"
            )

        # The canvas field is indexed (x, y) with y growing upward, so flip the
        # rows and swap the axes.
        image = rgba_to_float_rgb(buffer)
        image_transposed = np.ascontiguousarray(np.transpose(np.flipud(image), (1, 0, 2)))
        self.display_image.from_numpy(image_transposed)

    def is_running(self) -> bool:
        """Check if the window is still open."""
        return self.window.running

    def poll_keys(self) -> set[str]:
        """Collect the keys pressed since the last poll.

        Returns:
            Set of Taichi key names (e.g. ti.ui.SPACE) pressed this tick.
        """
        keys = set(self._pending_keys)
        self._pending_keys.clear()
        for event in self.window.get_events(ti.ui.PRESS):
            keys.add(event.key)
        return keys

    def show_frame(self) -> None:
        """Present the current display image."""
        self.canvas.set_image(self.display_image)
        self.window.show()

    def run_animated(self, loop: FrameLoop, max_dt: float = 0.1) -> None:
        """Run the animated render loop until the window is closed.

        Each refresh:
        1. Measures the time since the previous refresh
        2. Reads the jump key (space) and the export key (P)
        3. Runs one FrameLoop tick (physics, reposition, render advance)
        4. Presents the whole pixel buffer

        Args:
            loop: The frame loop to drive.
            max_dt: Upper bound for a single time step, so a stalled frame
                does not launch the ball through the floor.
        """
        self._initialize_window()

        last_time = time.perf_counter()
        while self.is_running():
            now = time.perf_counter()
            dt = min(now - last_time, max_dt)
            last_time = now

            keys = self.poll_keys()
            if "p" in keys:
                self._export_png(loop)
            if ti.ui.ESCAPE in keys:
                self.close()
                break

            loop.tick(dt, jump=ti.ui.SPACE in keys)

            self.update_image(loop.renderer.get_image_numpy())
            self.show_frame()

    def close(self) -> None:
        """Close the preview window."""
        if self._window is not None:
            self._window.running = False

    def _export_png(self, loop: FrameLoop) -> None:
        """Export the current buffer to a timestamped PNG file."""
        from src.tracer.preview.export import save_png

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = f"raytracer_{timestamp}.png"
        save_png(loop.renderer, filename)
        print(f"Exported: {filename} (tick {loop.ticks})")

    @staticmethod
    def is_display_available() -> bool:
        """Check if a display is available for GUI rendering.

        Returns:
            True if a display is available, False for headless environments.
        """
        display = os.environ.get("DISPLAY")
        wayland = os.environ.get("WAYLAND_DISPLAY")

        if os.name == "nt":
            return True

        if os.uname().sysname == "Darwin":
            ssh_connection = os.environ.get("SSH_CONNECTION")
            if ssh_connection and not display:
                return False
            return True

        return bool(display or wayland)
