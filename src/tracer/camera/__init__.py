"""Camera module for primary ray generation.

Components:
    pinhole: Fixed pinhole camera at the origin with a 90 degree field of view

Ray generation maps integer pixel coordinates (x right, y down) to unit
view-space directions (x right, y up, z forward).
"""

from .pinhole import (
    CAMERA_ORIGIN,
    FIELD_OF_VIEW,
    get_ray,
    get_ray_direction,
    ray_from_pixel,
)

__all__ = [
    "CAMERA_ORIGIN",
    "FIELD_OF_VIEW",
    "get_ray",
    "get_ray_direction",
    "ray_from_pixel",
]
