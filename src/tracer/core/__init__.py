"""Core rendering module.

This module contains the fundamental building blocks of the ray caster:

Components:
    ray: Ray data structure and vector utilities
    color: RGBA colors and clamped channel scaling
    shading: Nearest-hit shading with shadow rays, and the pixel buffer
    incremental: Budgeted, resumable renderer over the pixel buffer
    frame: Per-tick loop tying animation to rendering

All per-pixel work runs in Taichi kernels; cursor bookkeeping, animation and
presentation run on the host.
"""

from .color import AMBIENT_FLOOR, BLACK, BLUE, GREEN, PINK, RED, WHITE, Color, darken, validate_color
from .ray import Ray, dot, length, make_ray, normalize, ray_at, vec3

# Note: shading, incremental and frame are NOT imported here to avoid circular imports.
# Import directly from src.tracer.core.shading or src.tracer.core.incremental when needed.

__all__ = [
    "Ray",
    "ray_at",
    "make_ray",
    "vec3",
    "dot",
    "length",
    "normalize",
    "Color",
    "darken",
    "validate_color",
    "AMBIENT_FLOOR",
    "BLACK",
    "WHITE",
    "RED",
    "GREEN",
    "BLUE",
    "PINK",
]
