"""Shading engine and pixel buffer for the ray caster.

For each primary ray the shader finds the nearest primitive and lights it
with every point light and the directional light. Each light is tested for
visibility with a shadow ray; visible lights contribute a clamped Lambertian
term. The summed intensity scales the primitive's color, with an ambient
floor so unlit surfaces stay visible.

Shading steps for a ray:
    1. Nearest hit over all primitives (background color on a miss).
    2. Point lights: shadow ray toward the light, occluded by any hit closer
       than the light.
    3. Directional light: shadow ray against the light direction, occluded
       by any hit at all.
    4. color = darken(base, max(intensity, AMBIENT_FLOOR))

The module also owns the render target: a row-major RGBA u8 buffer that the
incremental renderer fills a span of pixels at a time.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.tracer.core.shading import render_span, setup_render_target
    >>> from src.tracer.scene.default_scene import create_default_scene
    >>>
    >>> scene, ball = create_default_scene()
    >>> setup_render_target(64, 64)
    >>> render_span(0, 64 * 64)
"""

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from src.tracer.camera.pinhole import ray_from_pixel
from src.tracer.core.color import AMBIENT_FLOOR, BLACK, darken, validate_color
from src.tracer.core.ray import normalize
from src.tracer.scene.intersection import (
    directional_light,
    get_background_color,
    intersect_scene,
    intersect_scene_any,
    num_point_lights,
    point_light_positions,
    primitive_color,
)

# Type aliases
vec3 = tm.vec3
vec4 = tm.vec4

# Shadow-ray origin offset along the light direction to avoid self-intersection
SHADOW_EPSILON = 1e-3

# =============================================================================
# Shading Core
# =============================================================================


@ti.func
def light_intensity(point: vec3, normal: vec3) -> ti.f32:
    """Sum the visible Lambertian light terms at a surface point.

    Args:
        point: The shaded point.
        normal: The unit surface normal at the point.

    Returns:
        The accumulated intensity (before the ambient floor).
    """
    intensity = 0.0

    # Point lights
    for i in range(num_point_lights[None]):
        to_light = point_light_positions[i] - point
        light_direction = normalize(to_light)
        shadow_origin = point + light_direction * SHADOW_EPSILON
        distance_to_light = tm.length(to_light)

        if intersect_scene_any(shadow_origin, light_direction, distance_to_light) == 0:
            intensity += tm.max(tm.dot(normal, light_direction), 0.0)

    # Directional light (infinitely far away: any hit blocks it)
    light_direction = normalize(-directional_light[None])
    shadow_origin = point + light_direction * SHADOW_EPSILON
    if intersect_scene_any(shadow_origin, light_direction, tm.inf) == 0:
        intensity += tm.max(tm.dot(normal, light_direction), 0.0)

    return intensity


@ti.func
def shade(ray_origin: vec3, ray_direction: vec3) -> vec4:
    """Compute the color seen along a primary ray.

    A miss keeps the background color with a zero hit point and normal. The
    light terms then evaluate to zero, so the result is the background
    scaled by the ambient floor.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The unit direction of the ray.

    Returns:
        The RGBA color with integral channel values in [0, 255].
    """
    rec = intersect_scene(ray_origin, ray_direction)

    color = get_background_color()
    if rec.hit == 1:
        color = primitive_color(rec.index)

    intensity = light_intensity(rec.point, rec.normal)
    return darken(color, tm.max(intensity, AMBIENT_FLOOR))


# =============================================================================
# Render Target (Pixel Buffer)
# =============================================================================

# Maximum supported image dimensions (preallocated to avoid kernel recompilation)
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048

# Image dimensions (actual active size)
_image_width = ti.field(dtype=ti.i32, shape=())
_image_height = ti.field(dtype=ti.i32, shape=())

# Row-major RGBA buffer indexed [y, x]
_pixel_buffer = ti.Vector.field(4, dtype=ti.u8, shape=(MAX_IMAGE_HEIGHT, MAX_IMAGE_WIDTH))

# Flag to track if render target is initialized
_render_target_initialized = ti.field(dtype=ti.i32, shape=())


def setup_render_target(width: int, height: int) -> None:
    """Initialize the render target.

    Sets the active image dimensions and clears the buffer to black.

    Args:
        width: Image width in pixels (1 to MAX_IMAGE_WIDTH).
        height: Image height in pixels (1 to MAX_IMAGE_HEIGHT).

    Raises:
        ValueError: If dimensions are not positive or exceed the maximum
            supported size.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image dimensions ({width}x{height}) exceed maximum supported "
            f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
        )

    _image_width[None] = width
    _image_height[None] = height
    _render_target_initialized[None] = 1

    clear_render_target()


def clear_render_target(color: tuple[int, int, int, int] = BLACK) -> None:
    """Fill the whole pixel buffer with a color (black by default)."""
    _fill_buffer(*validate_color(color))


@ti.kernel
def _fill_buffer(r: ti.i32, g: ti.i32, b: ti.i32, a: ti.i32):
    for y, x in _pixel_buffer:
        _pixel_buffer[y, x] = ti.cast(ti.Vector([r, g, b, a]), ti.u8)


def get_image_dimensions() -> tuple[int, int]:
    """Get the current render target dimensions.

    Returns:
        Tuple of (width, height).
    """
    return int(_image_width[None]), int(_image_height[None])


def _check_render_target_initialized() -> None:
    """Check if render target is initialized and raise if not."""
    if _render_target_initialized[None] == 0:
        raise RuntimeError("Render target not set up. Call setup_render_target() first.")


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_span(start: ti.i32, count: ti.i32, width: ti.i32, height: ti.i32):
    """Shade ``count`` pixels in raster order starting at linear index ``start``.

    The loop is serialized so pixels are written strictly in raster order on
    a single thread.
    """
    ti.loop_config(serialize=True)
    for k in range(count):
        index = start + k
        x = index % width
        y = index // width
        direction = ray_from_pixel(x, y, width, height)
        color = shade(vec3(0.0, 0.0, 0.0), direction)
        _pixel_buffer[y, x] = ti.cast(color, ti.u8)


@ti.kernel
def _shade_ray_kernel(
    ox: ti.f32, oy: ti.f32, oz: ti.f32, dx: ti.f32, dy: ti.f32, dz: ti.f32
) -> vec4:
    return shade(vec3(ox, oy, oz), normalize(vec3(dx, dy, dz)))


@ti.kernel
def _render_single_pixel(x: ti.i32, y: ti.i32, width: ti.i32, height: ti.i32) -> vec4:
    return shade(vec3(0.0, 0.0, 0.0), ray_from_pixel(x, y, width, height))


# =============================================================================
# Public Rendering API
# =============================================================================


def render_span(start: int, count: int) -> None:
    """Shade a run of pixels into the buffer in raster order.

    Args:
        start: Linear raster index of the first pixel (y * width + x).
        count: Number of pixels to shade.

    Raises:
        RuntimeError: If render target has not been set up.
        ValueError: If the span does not fit in the image.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    if start < 0 or count < 0 or start + count > width * height:
        raise ValueError(
            f"Span [{start}, {start + count}) outside image of {width * height} pixels"
        )
    if count == 0:
        return

    _render_span(start, count, width, height)


def render_pixel(x: int, y: int) -> tuple[int, int, int, int]:
    """Shade a single pixel without touching the buffer.

    This is a Python-callable function for testing and debugging.

    Returns:
        The (r, g, b, a) color of the pixel.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    color = _render_single_pixel(x, y, width, height)
    return (int(color[0]), int(color[1]), int(color[2]), int(color[3]))


def shade_ray(
    origin: tuple[float, float, float],
    direction: tuple[float, float, float],
) -> tuple[int, int, int, int]:
    """Shade an arbitrary ray against the current scene.

    The direction is normalized before casting.

    Returns:
        The (r, g, b, a) color seen along the ray.
    """
    color = _shade_ray_kernel(
        origin[0], origin[1], origin[2], direction[0], direction[1], direction[2]
    )
    return (int(color[0]), int(color[1]), int(color[2]), int(color[3]))


def get_pixel_buffer_numpy() -> npt.NDArray[np.uint8]:
    """Get the active region of the pixel buffer as a NumPy array.

    Returns:
        Array of shape (height, width, 4) with dtype uint8, row 0 at the top.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    full_buffer = _pixel_buffer.to_numpy()
    return np.ascontiguousarray(full_buffer[:height, :width, :])
