"""Tests for the framekit.linalg helpers."""

import jax.numpy as jnp
import pytest

from framekit.attitude_representations import Rz
from framekit.linalg import (
    mat3_copy,
    mat3_identity,
    mat3_product,
    mat3_transform,
    mat3_transpose,
    mat3_transpose_transform,
    vec3_cross,
    vec3_dot,
    vec3_magnitude,
    vec3_magnitude_squared,
    vec3_normalize,
    vec3_scale,
    vec3_zero,
)


class TestMat3:
    def test_identity(self):
        assert jnp.array_equal(mat3_identity(), jnp.eye(3))
        assert mat3_identity().dtype == jnp.float64

    def test_copy_reshapes(self):
        m = mat3_copy(list(range(9)))
        assert m.shape == (3, 3)
        assert float(m[1, 2]) == 5.0

    def test_product(self):
        a = Rz(0.3)
        b = Rz(0.4)
        assert jnp.allclose(mat3_product(a, b), Rz(0.7), atol=1e-15)

    def test_transpose(self):
        m = jnp.arange(9.0).reshape(3, 3)
        assert jnp.array_equal(mat3_transpose(m), m.T)

    def test_transform_and_inverse(self):
        m = Rz(1.1)
        v = jnp.array([1.0, -2.0, 0.5])
        assert jnp.allclose(mat3_transpose_transform(m, mat3_transform(m, v)), v, atol=1e-15)


class TestVec3:
    def test_zero(self):
        assert jnp.array_equal(vec3_zero(), jnp.zeros(3))

    def test_scale(self):
        assert jnp.array_equal(vec3_scale(jnp.array([1.0, 2.0, 3.0]), 2.0), jnp.array([2.0, 4.0, 6.0]))

    def test_cross(self):
        x = jnp.array([1.0, 0.0, 0.0])
        y = jnp.array([0.0, 1.0, 0.0])
        assert jnp.array_equal(vec3_cross(x, y), jnp.array([0.0, 0.0, 1.0]))

    def test_dot(self):
        assert float(vec3_dot(jnp.array([1.0, 2.0, 3.0]), jnp.array([4.0, 5.0, 6.0]))) == 32.0

    def test_magnitude(self):
        v = jnp.array([3.0, 4.0, 12.0])
        assert float(vec3_magnitude(v)) == pytest.approx(13.0)
        assert float(vec3_magnitude_squared(v)) == pytest.approx(169.0)

    def test_normalize(self):
        u = vec3_normalize(jnp.array([0.0, 3.0, 4.0]))
        assert jnp.allclose(u, jnp.array([0.0, 0.6, 0.8]), atol=1e-15)

    def test_normalize_zero_vector_unchanged(self):
        u = vec3_normalize(jnp.zeros(3))
        assert jnp.array_equal(u, jnp.zeros(3))
        assert bool(jnp.all(jnp.isfinite(u)))
