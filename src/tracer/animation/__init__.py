"""Animation module for scene motion.

Components:
    physics: Vertical bounce model (gravity, damped bounce, rest, jump)

The animation is plain Python/NumPy: it runs once per tick on the host and
hands the resulting position to the scene before rendering.
"""

from .physics import BounceParams, BounceState, jump, step

__all__ = [
    "BounceParams",
    "BounceState",
    "jump",
    "step",
]
