"""8-bit RGBA colors and clamped channel scaling.

Colors are (r, g, b, a) tuples of integers in [0, 255] on the Python side
and ``vec4`` values holding the same integral channel values inside Taichi
kernels. Buffers store them as ``ti.u8``.

Example:
    >>> from src.tracer.core.color import RED, validate_color
    >>> validate_color(RED)
    (230, 41, 55, 255)
"""

import taichi as ti
import taichi.math as tm

# Type alias for 4-channel colors inside kernels
vec4 = tm.vec4

Color = tuple[int, int, int, int]

# Palette follows the raylib defaults
BLACK: Color = (0, 0, 0, 255)
WHITE: Color = (255, 255, 255, 255)
RED: Color = (230, 41, 55, 255)
GREEN: Color = (0, 228, 48, 255)
BLUE: Color = (0, 121, 241, 255)
PINK: Color = (0xE8, 0x3D, 0x84, 0xFF)

# Minimum illumination applied to every shaded surface
AMBIENT_FLOOR = 0.1


def validate_color(color: tuple[int, ...]) -> Color:
    """Check that a color has four integer channels in [0, 255].

    Args:
        color: The (r, g, b, a) tuple to validate.

    Returns:
        The color as a tuple of ints.

    Raises:
        ValueError: If the color does not have four channels or any channel
            is outside [0, 255].
    """
    if len(color) != 4:
        raise ValueError(f"Color must have 4 channels (r, g, b, a), got {len(color)}")
    for channel in color:
        if int(channel) != channel or not 0 <= channel <= 255:
            raise ValueError(f"Color channels must be integers in [0, 255], got {color}")
    return (int(color[0]), int(color[1]), int(color[2]), int(color[3]))


@ti.func
def darken(color: vec4, factor: ti.f32) -> vec4:
    """Scale the RGB channels of a color by a factor.

    Each scaled channel is rounded half-up and clamped to [0, 255]. Alpha is
    carried over untouched.

    Args:
        color: The base color with channels in [0, 255].
        factor: The scale factor (illumination intensity).

    Returns:
        The scaled color with integral channel values.
    """
    result = color
    for c in ti.static(range(3)):
        result[c] = tm.clamp(ti.floor(color[c] * factor + 0.5), 0.0, 255.0)
    return result
