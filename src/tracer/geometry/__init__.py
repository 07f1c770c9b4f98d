"""Geometry module for shape primitives.

This module provides the analytic primitives of the ray caster:

Components:
    sphere: Sphere primitive with ray-sphere intersection
    plane: Infinite plane primitive with ray-plane intersection

All intersection routines are implemented as Taichi functions (@ti.func).
The same routines serve primary rays and shadow rays.

Ray-object intersection follows the pattern:
    hit = intersect_shape(ray_origin, ray_direction, shape parameters...)
    if hit.hit == 1: use hit.t and hit.point
"""

from .plane import PARALLEL_EPSILON, Plane, hit_plane, intersect_plane, plane_normal
from .sphere import Hit, Sphere, hit_sphere, intersect_sphere, make_miss, sphere_normal

__all__ = [
    "Hit",
    "make_miss",
    "Sphere",
    "hit_sphere",
    "intersect_sphere",
    "sphere_normal",
    "Plane",
    "hit_plane",
    "intersect_plane",
    "plane_normal",
    "PARALLEL_EPSILON",
]
