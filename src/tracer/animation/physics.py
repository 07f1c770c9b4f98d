"""Bouncing-ball physics for the animated primitive.

A vertical projectile with explicit Euler integration:

    position += velocity * dt
    below ground  -> clamp to ground, velocity.y = -velocity.y * damping,
                     and if |velocity.y| < rest_speed, come to rest exactly
                     on the ground
    above ground  -> velocity.y -= gravity * dt

A jump sets velocity.y to the launch speed regardless of the current state.
Exactly on the ground with zero velocity neither branch applies, so the
rest state is a fixed point of ``step``.

Positions and velocities are NumPy float64 arrays; the state is threaded
explicitly through ``step`` rather than kept globally.

Example:
    >>> from src.tracer.animation.physics import BounceState, jump, step
    >>> state = BounceState.at((0.0, 0.0, 5.0))
    >>> jump(state)
    >>> for _ in range(100):
    ...     step(state, 1.0 / 60.0)
"""

from dataclasses import dataclass, field

import numpy as np
import numpy.typing as npt


@dataclass
class BounceParams:
    """Constants of the bounce model.

    Attributes:
        gravity: Downward acceleration in units/s^2.
        damping: Fraction of vertical speed kept after a bounce.
        rest_speed: Post-bounce speeds below this snap the ball to rest.
        jump_speed: Upward speed set by a jump.
        ground: Height of the ground.
    """

    gravity: float = 2.0
    damping: float = 0.8
    rest_speed: float = 1.0
    jump_speed: float = 5.0
    ground: float = 0.0


@dataclass
class BounceState:
    """Position and velocity of the animated primitive.

    Attributes:
        position: Current position (x, y, z).
        velocity: Current velocity (x, y, z).
    """

    position: npt.NDArray[np.float64] = field(default_factory=lambda: np.zeros(3))
    velocity: npt.NDArray[np.float64] = field(default_factory=lambda: np.zeros(3))

    @classmethod
    def at(
        cls,
        position: tuple[float, float, float],
        velocity: tuple[float, float, float] = (0.0, 0.0, 0.0),
    ) -> "BounceState":
        """Create a state from plain tuples."""
        return cls(
            position=np.array(position, dtype=np.float64),
            velocity=np.array(velocity, dtype=np.float64),
        )

    def position_tuple(self) -> tuple[float, float, float]:
        """Position as a plain (x, y, z) tuple for the scene."""
        return (float(self.position[0]), float(self.position[1]), float(self.position[2]))

    @property
    def at_rest(self) -> bool:
        """True when the ball sits still (no vertical motion)."""
        return self.velocity[1] == 0.0


def jump(state: BounceState, params: BounceParams | None = None) -> None:
    """Launch the ball upward at the jump speed."""
    if params is None:
        params = BounceParams()
    state.velocity[1] = params.jump_speed


def step(
    state: BounceState,
    dt: float,
    jump_pressed: bool = False,
    params: BounceParams | None = None,
) -> BounceState:
    """Advance the bounce model by one tick, in place.

    The jump is applied after integration, so it changes the velocity used
    by the next tick.

    Args:
        state: The state to update.
        dt: Elapsed time in seconds (non-negative).
        jump_pressed: Whether a jump was triggered during this tick.
        params: Model constants. Defaults to BounceParams().

    Returns:
        The updated state (the same object).

    Raises:
        ValueError: If dt is negative.
    """
    if dt < 0.0:
        raise ValueError(f"Time step must be non-negative, got {dt}")
    if params is None:
        params = BounceParams()

    state.position += state.velocity * dt

    if state.position[1] < params.ground:
        state.position[1] = params.ground
        state.velocity[1] = -state.velocity[1] * params.damping
        if abs(state.velocity[1]) < params.rest_speed:
            state.velocity[1] = 0.0
            state.position[1] = params.ground
    elif state.position[1] > params.ground:
        state.velocity[1] -= params.gravity * dt

    if jump_pressed:
        jump(state, params)

    return state
