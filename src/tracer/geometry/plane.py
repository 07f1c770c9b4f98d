"""Infinite plane primitive with ray-plane intersection.

A plane is defined by any point on it and a unit normal. The ray parameter
of the intersection follows from

    dot(origin + t * direction - point, normal) = 0

    t = dot(point - origin, normal) / dot(direction, normal)

Rays whose direction is (nearly) perpendicular to the normal run parallel to
the plane and miss; this also keeps the division away from zero.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.tracer.geometry.plane import Plane, hit_plane
    >>> # Ground plane through y = -1 facing up
    >>> # plane = Plane(point=vec3(0.0, -1.0, 0.0), normal=vec3(0.0, 1.0, 0.0))
"""

import taichi as ti
import taichi.math as tm

from .sphere import Hit, make_miss

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Below this |dot(direction, normal)| the ray is treated as parallel
PARALLEL_EPSILON = 1e-6


@ti.dataclass
class Plane:
    """An infinite plane.

    Attributes:
        point: Any point on the plane (vec3).
        normal: The unit normal of the plane (vec3).
    """

    point: vec3
    normal: vec3


@ti.func
def intersect_plane(
    ray_origin: vec3,
    ray_direction: vec3,
    point: vec3,
    normal: vec3,
) -> Hit:
    """Test for ray-plane intersection.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction of the ray (need not be normalized).
        point: A point on the plane.
        normal: The unit normal of the plane.

    Returns:
        A Hit at the plane, or a miss if the ray is parallel to the plane or
        the plane lies behind the ray origin.
    """
    denom = tm.dot(normal, ray_direction)

    result = make_miss()

    if ti.abs(denom) > PARALLEL_EPSILON:
        t = tm.dot(point - ray_origin, normal) / denom
        if t >= 0.0:
            result = Hit(hit=1, t=t, point=ray_origin + t * ray_direction)

    return result


@ti.func
def plane_normal(normal: vec3) -> vec3:
    """Surface normal of a plane; the same everywhere on it."""
    return normal


@ti.func
def hit_plane(ray_origin: vec3, ray_direction: vec3, plane: Plane) -> Hit:
    """Intersect a ray with a Plane dataclass."""
    return intersect_plane(ray_origin, ray_direction, plane.point, plane.normal)
