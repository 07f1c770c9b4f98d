"""Scene module for scene storage, management and the default scene.

Components:
    intersection: Primitive table, lights, and ray-scene queries
    manager: SceneManager owning primitives and lights
    default_scene: The fixed animated scene used by the examples

Scene data lives in Taichi fields in Structure-of-Arrays layout. Spheres
and planes share one tagged table so that insertion order is preserved
across kinds.
"""

from .default_scene import DefaultSceneParams, create_default_scene
from .intersection import (
    MAX_POINT_LIGHTS,
    MAX_PRIMITIVES,
    PrimitiveKind,
    SceneHit,
    add_plane,
    add_point_light,
    add_sphere,
    clear_scene,
    get_directional_light,
    get_point_light_count,
    get_position,
    get_primitive_count,
    get_primitive_kind,
    intersect_scene,
    intersect_scene_any,
    set_background_color,
    set_directional_light,
    set_position,
)
from .manager import PlaneInfo, SceneManager, SphereInfo

__all__ = [
    # Intersection module
    "SceneHit",
    "PrimitiveKind",
    "add_sphere",
    "add_plane",
    "add_point_light",
    "clear_scene",
    "set_position",
    "get_position",
    "get_primitive_kind",
    "get_primitive_count",
    "get_point_light_count",
    "set_directional_light",
    "get_directional_light",
    "set_background_color",
    "intersect_scene",
    "intersect_scene_any",
    "MAX_PRIMITIVES",
    "MAX_POINT_LIGHTS",
    # Manager module
    "SceneManager",
    "SphereInfo",
    "PlaneInfo",
    # Default scene
    "DefaultSceneParams",
    "create_default_scene",
]
