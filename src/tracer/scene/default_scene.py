"""Default animated scene.

The default scene is a fixed in-memory literal:

- a small red sphere in front of the camera (the animated ball),
- a large blue sphere further back, partly below the ground,
- a pink sphere up and to the left,
- a green ground plane at y = -1,
- one point light to the left of the ball,
- a directional light travelling down, left and away from the camera.

The camera sits at the origin looking down +z, so every object lies in
front of it.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.tracer.scene.default_scene import create_default_scene
    >>> scene, ball = create_default_scene()
    >>> scene.get_primitive_count()
    4
"""

from dataclasses import dataclass, field

from src.tracer.core.color import BLACK, BLUE, GREEN, PINK, RED, Color
from src.tracer.scene.manager import SceneManager

# Starting point of the animated ball
BALL_POSITION = (0.0, 0.0, 5.0)
BALL_RADIUS = 1.0

# Ground plane
GROUND_POINT = (0.0, -1.0, 0.0)
GROUND_NORMAL = (0.0, 1.0, 0.0)


@dataclass
class DefaultSceneParams:
    """Parameters for configuring the default scene.

    Attributes:
        ball_color: Color of the animated ball.
        ground_color: Color of the ground plane.
        point_lights: Positions of the point lights.
        directional_light: Direction the directional light travels.
        background_color: Color for rays that hit nothing.
    """

    ball_color: Color = RED
    ground_color: Color = GREEN
    point_lights: list[tuple[float, float, float]] = field(
        default_factory=lambda: [(-2.0, 0.0, 5.0)]
    )
    directional_light: tuple[float, float, float] = (-2.0, -2.0, 1.0)
    background_color: Color = BLACK


def create_default_scene(
    params: DefaultSceneParams | None = None,
) -> tuple[SceneManager, int]:
    """Create the default animated scene.

    Args:
        params: Optional DefaultSceneParams. If None, uses defaults.

    Returns:
        A tuple of (SceneManager, animated_index) where animated_index is the
        primitive index of the ball the animation moves.
    """
    if params is None:
        params = DefaultSceneParams()

    scene = SceneManager()

    ball = scene.add_sphere(BALL_POSITION, BALL_RADIUS, color=params.ball_color)
    scene.add_sphere((3.0, -1.0, 20.0), 10.0, color=BLUE)
    scene.add_sphere((-4.0, 4.0, 10.0), 3.0, color=PINK)
    scene.add_plane(GROUND_POINT, GROUND_NORMAL, color=params.ground_color)

    for light in params.point_lights:
        scene.add_point_light(light)
    scene.set_directional_light(params.directional_light)
    scene.set_background_color(params.background_color)

    return scene, ball
