"""Scene storage and scene-level ray intersection.

The scene is a single primitive table in Structure-of-Arrays layout. Each
row is tagged with a PrimitiveKind and holds the union of the per-kind
parameters:

    kind      SPHERE or PLANE
    position  sphere center / point on the plane
    normal    plane normal (unused for spheres)
    radius    sphere radius (unused for planes)
    color     RGBA material color

Keeping spheres and planes in one table preserves insertion order across
kinds, which decides exact-distance ties (the first primitive wins).

The table also holds the lights: a list of point-light positions and a
single directional light, plus the background color used for rays that
miss everything.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.tracer.scene.intersection import add_plane, add_sphere, clear_scene
    >>> clear_scene()
    >>> add_sphere((0.0, 0.0, 5.0), 1.0, color=(230, 41, 55, 255))
    0
    >>> add_plane((0.0, -1.0, 0.0), (0.0, 1.0, 0.0), color=(0, 228, 48, 255))
    1
    >>> # Use intersect_scene within a Taichi kernel
"""

import math
from enum import IntEnum

import taichi as ti
import taichi.math as tm

from src.tracer.core.color import BLACK, validate_color
from src.tracer.geometry.plane import intersect_plane, plane_normal
from src.tracer.geometry.sphere import Hit, intersect_sphere, sphere_normal

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3
vec4 = tm.vec4


class PrimitiveKind(IntEnum):
    """Tag of a row in the primitive table."""

    SPHERE = 0
    PLANE = 1


# Plain ints for comparisons inside Taichi functions
_KIND_SPHERE = int(PrimitiveKind.SPHERE)
_KIND_PLANE = int(PrimitiveKind.PLANE)


@ti.dataclass
class SceneHit:
    """Record of the nearest ray-scene intersection.

    Attributes:
        hit: 1 if any primitive was hit, 0 otherwise.
        t: Ray parameter of the nearest hit. Only valid if hit == 1.
        point: Nearest intersection point (zero vector on a miss).
        normal: Surface normal at the point (zero vector on a miss).
        index: Row of the hit primitive, -1 on a miss.
    """

    hit: ti.i32
    t: ti.f32
    point: vec3
    normal: vec3
    index: ti.i32


# Maximum number of primitives and point lights supported in the scene
MAX_PRIMITIVES = 256
MAX_POINT_LIGHTS = 16

# Primitive storage: Structure of Arrays layout
prim_kinds = ti.field(dtype=ti.i32, shape=MAX_PRIMITIVES)
prim_positions = ti.Vector.field(3, dtype=ti.f32, shape=MAX_PRIMITIVES)
prim_normals = ti.Vector.field(3, dtype=ti.f32, shape=MAX_PRIMITIVES)
prim_radii = ti.field(dtype=ti.f32, shape=MAX_PRIMITIVES)
prim_colors = ti.Vector.field(4, dtype=ti.u8, shape=MAX_PRIMITIVES)
num_primitives = ti.field(dtype=ti.i32, shape=())

# Light storage
point_light_positions = ti.Vector.field(3, dtype=ti.f32, shape=MAX_POINT_LIGHTS)
num_point_lights = ti.field(dtype=ti.i32, shape=())
# Direction the directional light travels (illumination comes from its negation)
directional_light = ti.Vector.field(3, dtype=ti.f32, shape=())

background_color = ti.Vector.field(4, dtype=ti.u8, shape=())


def clear_scene() -> None:
    """Clear all primitives and lights from the scene.

    Resets the counts to zero, turns the directional light off (zero
    direction) and restores a black background. Field rows are not cleared
    but will be overwritten when new primitives are added.
    """
    num_primitives[None] = 0
    num_point_lights[None] = 0
    directional_light[None] = [0.0, 0.0, 0.0]
    background_color[None] = list(BLACK)


def _next_primitive_index() -> int:
    idx = num_primitives[None]
    if idx >= MAX_PRIMITIVES:
        raise RuntimeError(f"Maximum number of primitives ({MAX_PRIMITIVES}) exceeded")
    return idx


def add_sphere(
    center: tuple[float, float, float],
    radius: float,
    color: tuple[int, int, int, int] = BLACK,
) -> int:
    """Add a sphere to the scene.

    Args:
        center: The center point of the sphere.
        radius: The radius of the sphere (must be positive).
        color: The RGBA color of the sphere.

    Returns:
        The index of the added primitive.

    Raises:
        ValueError: If the radius is not positive or the color is invalid.
        RuntimeError: If the maximum number of primitives is exceeded.
    """
    if radius <= 0.0:
        raise ValueError(f"Sphere radius must be positive, got {radius}")
    color = validate_color(color)
    idx = _next_primitive_index()

    prim_kinds[idx] = _KIND_SPHERE
    prim_positions[idx] = [center[0], center[1], center[2]]
    prim_normals[idx] = [0.0, 0.0, 0.0]
    prim_radii[idx] = radius
    prim_colors[idx] = list(color)
    num_primitives[None] = idx + 1
    return idx


def add_plane(
    point: tuple[float, float, float],
    normal: tuple[float, float, float],
    color: tuple[int, int, int, int] = BLACK,
) -> int:
    """Add an infinite plane to the scene.

    The normal is normalized before storage.

    Args:
        point: Any point on the plane.
        normal: The plane normal (any non-zero length).
        color: The RGBA color of the plane.

    Returns:
        The index of the added primitive.

    Raises:
        ValueError: If the normal has zero length or the color is invalid.
        RuntimeError: If the maximum number of primitives is exceeded.
    """
    n_len = math.sqrt(normal[0] ** 2 + normal[1] ** 2 + normal[2] ** 2)
    if n_len < 1e-8:
        raise ValueError(f"Plane normal must be non-zero, got {normal}")
    color = validate_color(color)
    idx = _next_primitive_index()

    prim_kinds[idx] = _KIND_PLANE
    prim_positions[idx] = [point[0], point[1], point[2]]
    prim_normals[idx] = [normal[0] / n_len, normal[1] / n_len, normal[2] / n_len]
    prim_radii[idx] = 0.0
    prim_colors[idx] = list(color)
    num_primitives[None] = idx + 1
    return idx


def _check_primitive_index(index: int) -> None:
    if not 0 <= index < num_primitives[None]:
        raise ValueError(
            f"Primitive index {index} out of range (scene has {num_primitives[None]})"
        )


def set_position(index: int, position: tuple[float, float, float]) -> None:
    """Move a primitive.

    Sets the center of a sphere or the reference point of a plane. This is
    the only mutation applied to geometry once the scene is built.

    Args:
        index: The primitive index returned by add_sphere/add_plane.
        position: The new position.

    Raises:
        ValueError: If the index does not name a primitive.
    """
    _check_primitive_index(index)
    prim_positions[index] = [position[0], position[1], position[2]]


def get_position(index: int) -> tuple[float, float, float]:
    """Get the center (sphere) or reference point (plane) of a primitive."""
    _check_primitive_index(index)
    p = prim_positions[index]
    return (float(p[0]), float(p[1]), float(p[2]))


def get_primitive_kind(index: int) -> PrimitiveKind:
    """Get the kind of a primitive."""
    _check_primitive_index(index)
    return PrimitiveKind(int(prim_kinds[index]))


def get_primitive_count() -> int:
    """Get the number of primitives in the scene."""
    return int(num_primitives[None])


def add_point_light(position: tuple[float, float, float]) -> int:
    """Add a point light to the scene.

    Args:
        position: The light position.

    Returns:
        The index of the added light.

    Raises:
        RuntimeError: If the maximum number of point lights is exceeded.
    """
    idx = num_point_lights[None]
    if idx >= MAX_POINT_LIGHTS:
        raise RuntimeError(f"Maximum number of point lights ({MAX_POINT_LIGHTS}) exceeded")
    point_light_positions[idx] = [position[0], position[1], position[2]]
    num_point_lights[None] = idx + 1
    return idx


def get_point_light_count() -> int:
    """Get the number of point lights in the scene."""
    return int(num_point_lights[None])


def set_directional_light(direction: tuple[float, float, float]) -> None:
    """Set the direction the directional light travels.

    Surfaces are lit from the negated direction. A zero vector disables the
    light (its Lambertian term is always zero).
    """
    directional_light[None] = [direction[0], direction[1], direction[2]]


def get_directional_light() -> tuple[float, float, float]:
    """Get the direction of the directional light."""
    d = directional_light[None]
    return (float(d[0]), float(d[1]), float(d[2]))


def set_background_color(color: tuple[int, int, int, int]) -> None:
    """Set the color used for rays that hit nothing.

    Raises:
        ValueError: If the color is invalid.
    """
    background_color[None] = list(validate_color(color))


# =============================================================================
# Per-primitive dispatch (Taichi functions)
# =============================================================================


@ti.func
def intersect_primitive(index: ti.i32, ray_origin: vec3, ray_direction: vec3) -> Hit:
    """Intersect a ray with the primitive in row ``index``."""
    result = Hit(hit=0, t=0.0, point=vec3(0.0, 0.0, 0.0))
    if prim_kinds[index] == _KIND_SPHERE:
        result = intersect_sphere(
            ray_origin, ray_direction, prim_positions[index], prim_radii[index]
        )
    else:
        result = intersect_plane(
            ray_origin, ray_direction, prim_positions[index], prim_normals[index]
        )
    return result


@ti.func
def primitive_normal(index: ti.i32, point: vec3) -> vec3:
    """Surface normal of primitive ``index`` at ``point``."""
    result = vec3(0.0, 0.0, 0.0)
    if prim_kinds[index] == _KIND_SPHERE:
        result = sphere_normal(point, prim_positions[index], prim_radii[index])
    else:
        result = plane_normal(prim_normals[index])
    return result


@ti.func
def primitive_color(index: ti.i32) -> vec4:
    """Material color of primitive ``index`` as float channels in [0, 255]."""
    return ti.cast(prim_colors[index], ti.f32)


@ti.func
def get_background_color() -> vec4:
    """Background color as float channels in [0, 255]."""
    return ti.cast(background_color[None], ti.f32)


# =============================================================================
# Scene queries (Taichi functions)
# =============================================================================


@ti.func
def _make_miss_record() -> SceneHit:
    """Create a SceneHit indicating no intersection."""
    return SceneHit(
        hit=0,
        t=0.0,
        point=vec3(0.0, 0.0, 0.0),
        normal=vec3(0.0, 0.0, 0.0),
        index=-1,
    )


@ti.func
def intersect_scene(ray_origin: vec3, ray_direction: vec3) -> SceneHit:
    """Find the nearest primitive along a ray.

    Iterates through all primitives in insertion order and keeps the hit
    with the smallest t. The comparison is strict, so on an exact tie the
    earlier primitive wins.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction of the ray.

    Returns:
        A SceneHit for the nearest intersection, or a miss record.
    """
    closest_t = tm.inf
    result = _make_miss_record()

    for i in range(num_primitives[None]):
        rec = intersect_primitive(i, ray_origin, ray_direction)
        if rec.hit == 1 and rec.t < closest_t:
            closest_t = rec.t
            result = SceneHit(
                hit=1,
                t=rec.t,
                point=rec.point,
                normal=primitive_normal(i, rec.point),
                index=i,
            )

    return result


@ti.func
def intersect_scene_any(ray_origin: vec3, ray_direction: vec3, t_max: ti.f32) -> ti.i32:
    """Test if any primitive blocks a ray before ``t_max`` (shadow query).

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction of the ray.
        t_max: Hits at t >= t_max do not count. Pass tm.inf for an
            unbounded query.

    Returns:
        1 if any primitive was hit with t < t_max, 0 otherwise.
    """
    hit_any = 0

    for i in range(num_primitives[None]):
        if hit_any == 0:
            rec = intersect_primitive(i, ray_origin, ray_direction)
            if rec.hit == 1 and rec.t < t_max:
                hit_any = 1

    return hit_any
