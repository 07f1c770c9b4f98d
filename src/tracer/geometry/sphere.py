"""Sphere primitive with ray-sphere intersection.

The intersection solves the quadratic in t obtained from

    |origin + t * direction - center|^2 = radius^2

and reports the nearest non-negative root. A ray starting inside the sphere
gets the far root, so the camera may sit inside a sphere and still see its
inner surface.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.tracer.geometry.sphere import Hit, intersect_sphere
    >>> # Use intersect_sphere within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere (positive float).
    """

    center: vec3
    radius: ti.f32


@ti.dataclass
class Hit:
    """Result of a ray-primitive intersection test.

    Attributes:
        hit: 1 if the ray meets the surface at a non-negative t, 0 otherwise.
        t: The ray parameter of the intersection. Only valid if hit == 1.
            It is a literal distance when the ray direction is normalized.
        point: The intersection point. Only valid if hit == 1.
    """

    hit: ti.i32
    t: ti.f32
    point: vec3


@ti.func
def make_miss() -> Hit:
    """Create a Hit indicating no intersection."""
    return Hit(hit=0, t=0.0, point=vec3(0.0, 0.0, 0.0))


@ti.func
def intersect_sphere(
    ray_origin: vec3,
    ray_direction: vec3,
    center: vec3,
    radius: ti.f32,
) -> Hit:
    """Test for ray-sphere intersection.

    Expanding the sphere equation gives a*t^2 + b*t + c = 0 with:
        a = dot(direction, direction)
        b = 2 * dot(oc, direction)
        c = dot(oc, oc) - radius^2
        oc = origin - center

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction of the ray (need not be normalized).
        center: The center of the sphere.
        radius: The radius of the sphere.

    Returns:
        A Hit for the smallest non-negative root, or a miss if the
        discriminant is negative or both roots are behind the origin.
    """
    oc = ray_origin - center
    a = tm.dot(ray_direction, ray_direction)
    b = 2.0 * tm.dot(oc, ray_direction)
    c = tm.dot(oc, oc) - radius * radius
    discriminant = b * b - 4.0 * a * c

    result = make_miss()

    if discriminant >= 0.0:
        sqrt_d = ti.sqrt(discriminant)
        t1 = (-b - sqrt_d) / (2.0 * a)
        t2 = (-b + sqrt_d) / (2.0 * a)

        t = -1.0
        if t1 >= 0.0:
            t = t1
        elif t2 >= 0.0:
            # Origin inside the sphere
            t = t2

        if t >= 0.0:
            result = Hit(hit=1, t=t, point=ray_origin + t * ray_direction)

    return result


@ti.func
def sphere_normal(point: vec3, center: vec3, radius: ti.f32) -> vec3:
    """Outward surface normal at a point on the sphere.

    The point is assumed to lie on the surface, so dividing by the radius
    yields a unit vector.
    """
    return (point - center) / radius


@ti.func
def hit_sphere(ray_origin: vec3, ray_direction: vec3, sphere: Sphere) -> Hit:
    """Intersect a ray with a Sphere dataclass."""
    return intersect_sphere(ray_origin, ray_direction, sphere.center, sphere.radius)
