"""Preview module for output and visualization.

This module is the host side of the renderer:

Components:
    display: Matplotlib-based static preview
    export: PNG export of the pixel buffer
    interactive: Taichi GGUI window running the animated frame loop

Example:
    >>> from src.tracer.preview import save_png, show_preview
    >>> from src.tracer.core.incremental import IncrementalRenderer
    >>>
    >>> renderer = IncrementalRenderer(256, 256)
    >>> renderer.render_full_frame()
    >>> show_preview(renderer)
    >>> save_png(renderer, "output.png")

For the animated window:
    >>> from src.tracer.core.frame import FrameLoop
    >>> from src.tracer.preview import InteractivePreview
    >>> preview = InteractivePreview(720, 720)
    >>> preview.run_animated(FrameLoop.with_default_scene(720, 720))
"""

from src.tracer.preview.display import rgba_to_float_rgb, show_preview
from src.tracer.preview.export import count_changed_pixels, save_png, save_png_from_array
from src.tracer.preview.interactive import InteractivePreview

__all__ = [
    # Interactive preview
    "InteractivePreview",
    # Display functions
    "show_preview",
    "rgba_to_float_rgb",
    # Export functions
    "save_png",
    "save_png_from_array",
    "count_changed_pixels",
]
