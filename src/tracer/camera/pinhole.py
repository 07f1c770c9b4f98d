"""Fixed pinhole camera for primary ray generation.

The camera sits at the world origin and looks down +z with a 90 degree
field of view. The image plane is placed at z = width / 2, so one pixel
spans one unit on it and the horizontal half-angle is 45 degrees. The
vertical axis is flipped: pixel rows grow downward, view-space y grows
upward.

For a pixel (x, y) the unnormalized view direction is

    vx = (x - width // 2) + 0.5
    vy = (height // 2 - y) - 0.5
    vz = width / 2

where the 0.5 offsets aim the ray at the pixel center.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.tracer.camera.pinhole import get_ray_direction
    >>> get_ray_direction(360, 360, 720, 720)  # close to (0, 0, 1)
"""

import taichi as ti
import taichi.math as tm

from src.tracer.core.ray import Ray, make_ray, normalize, vec3

# Field of view in degrees (fixed)
FIELD_OF_VIEW = 90.0

# Camera position in world space
CAMERA_ORIGIN = (0.0, 0.0, 0.0)


@ti.func
def ray_from_pixel(x: ti.i32, y: ti.i32, width: ti.i32, height: ti.i32) -> vec3:
    """Compute the normalized primary ray direction for a pixel.

    Args:
        x: Pixel column (0 = left).
        y: Pixel row (0 = top).
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        The unit view-space direction through the pixel center.
    """
    vx = ti.cast(x - width // 2, ti.f32) + 0.5
    vy = ti.cast(height // 2 - y, ti.f32) - 0.5
    vz = ti.cast(width, ti.f32) / 2.0
    return normalize(vec3(vx, vy, vz))


@ti.func
def get_ray(x: ti.i32, y: ti.i32, width: ti.i32, height: ti.i32) -> Ray:
    """Generate the primary ray for a pixel, starting at the camera origin."""
    return make_ray(vec3(0.0, 0.0, 0.0), ray_from_pixel(x, y, width, height))


@ti.kernel
def _ray_direction_kernel(x: ti.i32, y: ti.i32, width: ti.i32, height: ti.i32) -> tm.vec3:
    return ray_from_pixel(x, y, width, height)


def get_ray_direction(x: int, y: int, width: int, height: int) -> tuple[float, float, float]:
    """Get the primary ray direction for a pixel from Python.

    Useful for debugging and for verifying the camera mapping.

    Returns:
        The unit direction as an (x, y, z) tuple.
    """
    d = _ray_direction_kernel(x, y, width, height)
    return (float(d[0]), float(d[1]), float(d[2]))
