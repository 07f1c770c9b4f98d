"""Unit tests for colors and channel scaling.

Tests cover:
- darken rounding (half-up) and clamping
- Alpha preservation
- Python-side color validation
"""

import pytest
import taichi as ti


def _darken(color, factor):
    """Run darken in a kernel and return the integer channels."""
    from src.tracer.core.color import darken, vec4

    result = ti.Vector.field(4, dtype=ti.f32, shape=())

    @ti.kernel
    def test_kernel(r: ti.f32, g: ti.f32, b: ti.f32, a: ti.f32, f: ti.f32):
        result[None] = darken(vec4(r, g, b, a), f)

    test_kernel(*[float(c) for c in color], factor)
    v = result[None]
    return tuple(int(round(v[c])) for c in range(4))


class TestDarken:
    """Tests for the darken channel scaling."""

    def test_darken_ambient_floor(self):
        """Test scaling by the ambient floor."""
        assert _darken((100, 100, 100, 255), 0.1) == (10, 10, 10, 255)

    def test_darken_rounds_half_up(self):
        """Test that 255 * 0.1 = 25.5 rounds to 26."""
        assert _darken((255, 0, 0, 255), 0.1) == (26, 0, 0, 255)

    def test_darken_identity(self):
        """Test that a factor of one leaves the color unchanged."""
        assert _darken((12, 34, 56, 78), 1.0) == (12, 34, 56, 78)

    def test_darken_clamps_to_255(self):
        """Test that intensities above one saturate at 255."""
        assert _darken((200, 100, 255, 255), 2.0) == (255, 200, 255, 255)

    def test_darken_zero_factor(self):
        """Test that a zero factor gives black with alpha kept."""
        assert _darken((200, 100, 50, 128), 0.0) == (0, 0, 0, 128)

    def test_darken_preserves_alpha(self):
        """Test that alpha is never scaled."""
        assert _darken((100, 100, 100, 7), 0.5)[3] == 7
        assert _darken((100, 100, 100, 7), 3.0)[3] == 7


class TestValidateColor:
    """Tests for validate_color."""

    def test_valid_color(self):
        """Test that a valid color is returned as ints."""
        from src.tracer.core.color import RED, validate_color

        assert validate_color(RED) == (230, 41, 55, 255)
        assert validate_color((0, 0, 0, 0)) == (0, 0, 0, 0)

    def test_wrong_arity(self):
        """Test that colors without four channels are rejected."""
        from src.tracer.core.color import validate_color

        with pytest.raises(ValueError, match="4 channels"):
            validate_color((255, 0, 0))

    def test_out_of_range(self):
        """Test that channels outside [0, 255] are rejected."""
        from src.tracer.core.color import validate_color

        with pytest.raises(ValueError, match=r"\[0, 255\]"):
            validate_color((256, 0, 0, 255))
        with pytest.raises(ValueError, match=r"\[0, 255\]"):
            validate_color((0, -1, 0, 255))

    def test_non_integer_channel(self):
        """Test that fractional channels are rejected."""
        from src.tracer.core.color import validate_color

        with pytest.raises(ValueError):
            validate_color((0.5, 0, 0, 255))
