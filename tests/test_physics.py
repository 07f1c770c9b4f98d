"""Tests for the bounce physics.

Tests cover:
- Free fall above the ground
- Bounces with damping
- Coming to rest exactly on the ground
- Jumps
- Time step validation
"""

import numpy as np
import pytest

DT = 1.0 / 60.0


class TestBounceState:
    """Tests for the state container."""

    def test_at(self):
        """Test creating a state from tuples."""
        from src.tracer.animation.physics import BounceState

        state = BounceState.at((1.0, 2.0, 3.0))

        assert state.position.dtype == np.float64
        assert state.position_tuple() == (1.0, 2.0, 3.0)
        assert state.at_rest

    def test_default_params(self):
        """Test the model constants."""
        from src.tracer.animation.physics import BounceParams

        params = BounceParams()

        assert params.gravity == 2.0
        assert params.damping == 0.8
        assert params.rest_speed == 1.0
        assert params.jump_speed == 5.0
        assert params.ground == 0.0


class TestStep:
    """Tests for a single integration step."""

    def test_rest_is_a_fixed_point(self):
        """Test that a ball at rest on the ground stays put."""
        from src.tracer.animation.physics import BounceState, step

        state = BounceState.at((0.0, 0.0, 5.0))
        for _ in range(100):
            step(state, DT)

        assert state.position_tuple() == (0.0, 0.0, 5.0)
        assert state.velocity[1] == 0.0

    def test_free_fall_accelerates_downward(self):
        """Test gravity above the ground."""
        from src.tracer.animation.physics import BounceState, step

        state = BounceState.at((0.0, 2.0, 5.0))
        step(state, 0.5)

        # Position moves with the old velocity, then gravity applies
        assert state.position[1] == pytest.approx(2.0)
        assert state.velocity[1] == pytest.approx(-1.0)

        step(state, 0.5)
        assert state.position[1] == pytest.approx(1.5)
        assert state.velocity[1] == pytest.approx(-2.0)

    def test_bounce_reverses_and_damps(self):
        """Test the bounce off the ground."""
        from src.tracer.animation.physics import BounceState, step

        state = BounceState.at((0.0, 0.1, 5.0), velocity=(0.0, -4.0, 0.0))
        step(state, 0.1)

        assert state.position[1] == 0.0
        assert state.velocity[1] == pytest.approx(3.2)

    def test_slow_bounce_comes_to_rest(self):
        """Test that a slow impact snaps to rest on the ground."""
        from src.tracer.animation.physics import BounceState, step

        state = BounceState.at((0.0, 0.01, 5.0), velocity=(0.0, -1.0, 0.0))
        step(state, 0.1)

        assert state.position[1] == 0.0
        assert state.velocity[1] == 0.0
        assert state.at_rest

    def test_dropped_ball_settles(self):
        """Test that a dropped ball ends exactly at rest on the ground."""
        from src.tracer.animation.physics import BounceState, step

        state = BounceState.at((0.0, 3.0, 5.0))
        for _ in range(6000):
            step(state, DT)

        assert state.position[1] == 0.0
        assert state.velocity[1] == 0.0

    def test_never_below_ground(self):
        """Test that the height never goes negative after a step."""
        from src.tracer.animation.physics import BounceState, step

        state = BounceState.at((0.0, 3.0, 5.0))
        for _ in range(2000):
            step(state, DT)
            assert state.position[1] >= 0.0

    def test_negative_dt_raises(self):
        """Test that time cannot run backwards."""
        from src.tracer.animation.physics import BounceState, step

        state = BounceState.at((0.0, 1.0, 5.0))
        with pytest.raises(ValueError, match="non-negative"):
            step(state, -0.1)

    def test_zero_dt_is_noop(self):
        """Test that a zero time step changes nothing above the ground."""
        from src.tracer.animation.physics import BounceState, step

        state = BounceState.at((0.0, 1.0, 5.0), velocity=(0.0, -2.0, 0.0))
        step(state, 0.0)

        assert state.position_tuple() == (0.0, 1.0, 5.0)
        assert state.velocity[1] == -2.0


class TestJump:
    """Tests for the jump input."""

    def test_jump_sets_launch_speed(self):
        """Test that a jump overrides the vertical velocity."""
        from src.tracer.animation.physics import BounceState, jump

        state = BounceState.at((0.0, 1.0, 5.0), velocity=(0.0, -3.0, 0.0))
        jump(state)

        assert state.velocity[1] == 5.0

    def test_jump_applied_after_integration(self):
        """Test that the jump takes effect on the following step."""
        from src.tracer.animation.physics import BounceState, step

        state = BounceState.at((0.0, 0.0, 5.0))
        step(state, DT, jump_pressed=True)

        assert state.position[1] == 0.0
        assert state.velocity[1] == 5.0

        step(state, DT)
        assert state.position[1] == pytest.approx(5.0 * DT)

    def test_jump_speed_stays_bounded(self):
        """Test that bounces never exceed the launch speed by more than one step of gravity."""
        from src.tracer.animation.physics import BounceParams, BounceState, step

        params = BounceParams()
        state = BounceState.at((0.0, 0.0, 5.0))
        step(state, DT, jump_pressed=True)

        for _ in range(3000):
            step(state, DT, params=params)
            assert abs(state.velocity[1]) <= params.jump_speed + params.gravity * DT + 1e-9

        assert state.at_rest
        assert state.position[1] == 0.0

    def test_custom_params(self):
        """Test a custom launch speed."""
        from src.tracer.animation.physics import BounceParams, BounceState, step

        state = BounceState.at((0.0, 0.0, 5.0))
        step(state, DT, jump_pressed=True, params=BounceParams(jump_speed=2.5))

        assert state.velocity[1] == 2.5
