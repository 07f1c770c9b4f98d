"""Per-tick frame loop tying animation to incremental rendering.

One tick runs, in order:
    1. the bounce physics step (with the jump input of this tick),
    2. writing the new position into the animated primitive,
    3. advancing the incremental renderer by its budget.

The host then presents the pixel buffer. Everything happens on the calling
thread; the loop itself never sleeps or polls input, it only consumes the
time delta and jump flag handed to ``tick``.

When the render budget is smaller than a frame, a single pass spans several
ticks and can show the animated primitive at different positions in
different rows.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.tracer.core.frame import FrameLoop
    >>> loop = FrameLoop.with_default_scene(64, 64)
    >>> loop.tick(1.0 / 60.0, jump=True)
    >>> image = loop.renderer.get_image_numpy()
"""

from src.tracer.animation.physics import BounceParams, BounceState, step
from src.tracer.core.incremental import IncrementalRenderer
from src.tracer.scene.manager import SceneManager


class FrameLoop:
    """Host-independent animation + render tick.

    Attributes:
        scene: The scene owning the animated primitive.
        renderer: The incremental renderer filling the pixel buffer.
        state: Position and velocity of the animated primitive.
        animated_index: Primitive index moved by the animation.
        params: Bounce model constants.
        ticks: Number of ticks run so far.
    """

    def __init__(
        self,
        scene: SceneManager,
        renderer: IncrementalRenderer,
        state: BounceState,
        animated_index: int = 0,
        params: BounceParams | None = None,
    ) -> None:
        self.scene = scene
        self.renderer = renderer
        self.state = state
        self.animated_index = animated_index
        self.params = params if params is not None else BounceParams()
        self.ticks = 0

    @classmethod
    def with_default_scene(
        cls,
        width: int,
        height: int,
        budget: int | None = None,
    ) -> "FrameLoop":
        """Build a loop over the default scene, starting the ball at rest.

        Args:
            width: Image width in pixels.
            height: Image height in pixels.
            budget: Pixels per tick (defaults to a full frame).
        """
        from src.tracer.scene.default_scene import BALL_POSITION, create_default_scene

        scene, ball = create_default_scene()
        renderer = IncrementalRenderer(width, height, budget=budget)
        return cls(scene, renderer, BounceState.at(BALL_POSITION), animated_index=ball)

    def tick(self, dt: float, jump: bool = False) -> int:
        """Run one frame: physics, reposition, render advance.

        Args:
            dt: Seconds since the previous tick.
            jump: Whether the jump input fired this tick.

        Returns:
            The number of pixels shaded this tick.

        Raises:
            ValueError: If dt is negative.
        """
        step(self.state, dt, jump_pressed=jump, params=self.params)
        self.scene.set_position(self.animated_index, self.state.position_tuple())
        shaded = self.renderer.advance()
        self.ticks += 1
        return shaded
