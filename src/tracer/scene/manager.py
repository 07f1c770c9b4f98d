"""Scene manager coordinating primitives and lights.

The SceneManager is the Python-side owner of the scene. It writes geometry
and lights into the Taichi fields of ``scene.intersection`` and keeps a
parallel record of what was added, so the scene can be inspected without
reading fields back.

All geometry is owned by the scene. The only mutation after construction is
``set_position``, addressed by primitive index; no other code holds a
reference to a primitive.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.tracer.scene.manager import SceneManager
    >>> scene = SceneManager()
    >>> ball = scene.add_sphere((0.0, 0.0, 5.0), 1.0, color=(230, 41, 55, 255))
    >>> scene.add_plane((0.0, -1.0, 0.0), (0.0, 1.0, 0.0), color=(0, 228, 48, 255))
    1
    >>> scene.add_point_light((-2.0, 0.0, 5.0))
    0
    >>> scene.set_directional_light((-2.0, -2.0, 1.0))
    >>> scene.set_position(ball, (0.0, 0.5, 5.0))
"""

from dataclasses import dataclass

from src.tracer.core.color import BLACK, Color
from src.tracer.scene.intersection import (
    MAX_POINT_LIGHTS,
    MAX_PRIMITIVES,
    PrimitiveKind,
    add_plane,
    add_point_light,
    add_sphere,
    clear_scene,
    get_directional_light,
    get_point_light_count,
    get_primitive_count,
    set_background_color,
    set_directional_light,
    set_position,
)


@dataclass
class SphereInfo:
    """Information about a sphere in the scene.

    Attributes:
        index: The row of the sphere in the primitive table.
        center: The center of the sphere.
        radius: The radius of the sphere.
        color: The RGBA color of the sphere.
    """

    index: int
    center: tuple[float, float, float]
    radius: float
    color: Color

    kind = PrimitiveKind.SPHERE


@dataclass
class PlaneInfo:
    """Information about a plane in the scene.

    Attributes:
        index: The row of the plane in the primitive table.
        point: A point on the plane.
        normal: The plane normal as given (stored normalized).
        color: The RGBA color of the plane.
    """

    index: int
    point: tuple[float, float, float]
    normal: tuple[float, float, float]
    color: Color

    kind = PrimitiveKind.PLANE


class SceneManager:
    """Scene container for primitives, point lights and a directional light.

    Attributes:
        primitives: SphereInfo/PlaneInfo records in insertion order.
        point_lights: Point-light positions in insertion order.
    """

    def __init__(self) -> None:
        """Initialize an empty scene."""
        self.primitives: list[SphereInfo | PlaneInfo] = []
        self.point_lights: list[tuple[float, float, float]] = []
        self._background: Color = BLACK
        self.clear()

    def clear(self) -> None:
        """Clear the entire scene (primitives and lights)."""
        clear_scene()
        self.primitives.clear()
        self.point_lights.clear()
        self._background = BLACK

    # =========================================================================
    # Geometry
    # =========================================================================

    def add_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
        color: Color = BLACK,
    ) -> int:
        """Add a sphere to the scene.

        Returns:
            The primitive index of the sphere.

        Raises:
            ValueError: If the radius is not positive or the color is invalid.
            RuntimeError: If the maximum number of primitives is exceeded.
        """
        index = add_sphere(center, radius, color)
        self.primitives.append(
            SphereInfo(index=index, center=tuple(center), radius=radius, color=tuple(color))
        )
        return index

    def add_plane(
        self,
        point: tuple[float, float, float],
        normal: tuple[float, float, float],
        color: Color = BLACK,
    ) -> int:
        """Add an infinite plane to the scene.

        Returns:
            The primitive index of the plane.

        Raises:
            ValueError: If the normal is zero or the color is invalid.
            RuntimeError: If the maximum number of primitives is exceeded.
        """
        index = add_plane(point, normal, color)
        self.primitives.append(
            PlaneInfo(index=index, point=tuple(point), normal=tuple(normal), color=tuple(color))
        )
        return index

    def set_position(self, index: int, position: tuple[float, float, float]) -> None:
        """Move the primitive at ``index`` (sphere center or plane point).

        Raises:
            ValueError: If the index does not name a primitive.
        """
        set_position(index, position)
        info = self.primitives[index]
        if isinstance(info, SphereInfo):
            info.center = tuple(position)
        else:
            info.point = tuple(position)

    def get_primitive_count(self) -> int:
        """Get the number of primitives in the scene."""
        return get_primitive_count()

    # =========================================================================
    # Lights and background
    # =========================================================================

    def add_point_light(self, position: tuple[float, float, float]) -> int:
        """Add a point light.

        Returns:
            The index of the light.

        Raises:
            RuntimeError: If the maximum number of point lights is exceeded.
        """
        index = add_point_light(position)
        self.point_lights.append(tuple(position))
        return index

    def get_point_light_count(self) -> int:
        """Get the number of point lights in the scene."""
        return get_point_light_count()

    def set_directional_light(self, direction: tuple[float, float, float]) -> None:
        """Set the direction the directional light travels."""
        set_directional_light(direction)

    @property
    def directional_light(self) -> tuple[float, float, float]:
        """The direction the directional light travels."""
        return get_directional_light()

    def set_background_color(self, color: Color) -> None:
        """Set the color of rays that hit nothing.

        Raises:
            ValueError: If the color is invalid.
        """
        set_background_color(color)
        self._background = tuple(color)

    @property
    def background_color(self) -> Color:
        """The color of rays that hit nothing."""
        return self._background

    def __repr__(self) -> str:
        """Return a string representation of the scene contents."""
        return (
            f"SceneManager(primitives={len(self.primitives)}/{MAX_PRIMITIVES}, "
            f"point_lights={len(self.point_lights)}/{MAX_POINT_LIGHTS})"
        )
