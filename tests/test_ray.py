"""Unit tests for the Ray dataclass and vector helpers.

Note: Imports are done inside test methods so the conftest.py fixture can
initialize Taichi first.
"""

import math

import taichi as ti


class TestRay:
    """Tests for Ray construction and evaluation."""

    def test_ray_at(self):
        """Test evaluating a point along the ray."""
        from src.tracer.core.ray import make_ray, ray_at, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            ray = make_ray(vec3(1.0, 2.0, 3.0), vec3(0.0, 0.0, 1.0))
            result[None] = ray_at(ray, 4.0)

        test_kernel()
        p = result[None]
        assert abs(p[0] - 1.0) < 1e-6
        assert abs(p[1] - 2.0) < 1e-6
        assert abs(p[2] - 7.0) < 1e-6


class TestNormalize:
    """Tests for the zero-safe normalize helper."""

    def test_normalize_unit_length(self):
        """Test that a non-zero vector becomes unit length."""
        from src.tracer.core.ray import normalize, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = normalize(vec3(3.0, 0.0, 4.0))

        test_kernel()
        v = result[None]
        assert abs(v[0] - 0.6) < 1e-6
        assert abs(v[1]) < 1e-6
        assert abs(v[2] - 0.8) < 1e-6
        assert abs(math.sqrt(v[0] ** 2 + v[1] ** 2 + v[2] ** 2) - 1.0) < 1e-6

    def test_normalize_zero_vector(self):
        """Test that the zero vector stays zero instead of turning into NaN."""
        from src.tracer.core.ray import normalize, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = normalize(vec3(0.0, 0.0, 0.0))

        test_kernel()
        v = result[None]
        for c in range(3):
            assert not math.isnan(v[c])
            assert v[c] == 0.0

    def test_dot_and_length(self):
        """Test the dot product and length helpers."""
        from src.tracer.core.ray import dot, length, vec3

        dot_result = ti.field(dtype=ti.f32, shape=())
        length_result = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            dot_result[None] = dot(vec3(1.0, 2.0, 3.0), vec3(4.0, -5.0, 6.0))
            length_result[None] = length(vec3(2.0, 3.0, 6.0))

        test_kernel()
        assert abs(dot_result[None] - 12.0) < 1e-6
        assert abs(length_result[None] - 7.0) < 1e-6
