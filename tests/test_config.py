"""Tests for the framekit.config module."""

import jax
import jax.numpy as jnp
import pytest

from framekit.config import (
    get_attitude_epsilon,
    get_dtype,
    get_gimbal_lock_threshold,
    reset_gimbal_lock_threshold,
    set_dtype,
    set_gimbal_lock_threshold,
)


class TestGetSetDtype:
    def test_default_dtype(self):
        assert get_dtype() == jnp.float64

    def test_set_float32(self):
        set_dtype(jnp.float32)
        assert get_dtype() == jnp.float32

    def test_set_float16(self):
        set_dtype(jnp.float16)
        assert get_dtype() == jnp.float16

    def test_set_bfloat16(self):
        set_dtype(jnp.bfloat16)
        assert get_dtype() == jnp.bfloat16

    def test_roundtrip(self):
        for dtype in (jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64):
            set_dtype(dtype)
            assert get_dtype() == dtype

    def test_invalid_dtype_raises(self):
        with pytest.raises(ValueError, match="Unsupported dtype"):
            set_dtype(jnp.int32)

    def test_invalid_dtype_string_raises(self):
        with pytest.raises(ValueError, match="Unsupported dtype"):
            set_dtype("float64")

    def test_float64_enables_x64(self):
        set_dtype(jnp.float64)
        assert jax.config.jax_enable_x64 is True


class TestAttitudeEpsilon:
    def test_float64_tolerance(self):
        assert get_attitude_epsilon() == 1e-12

    def test_float32_tolerance(self):
        set_dtype(jnp.float32)
        assert get_attitude_epsilon() == 1e-6

    def test_float16_tolerance(self):
        set_dtype(jnp.float16)
        assert get_attitude_epsilon() == 1e-3


class TestGimbalLockThreshold:
    def test_default(self):
        assert get_gimbal_lock_threshold() == 1e-13

    def test_set(self):
        set_gimbal_lock_threshold(1e-9)
        assert get_gimbal_lock_threshold() == 1e-9

    def test_reset(self):
        set_gimbal_lock_threshold(1e-6)
        reset_gimbal_lock_threshold()
        assert get_gimbal_lock_threshold() == 1e-13

    @pytest.mark.parametrize("value", [0.0, -1e-13])
    def test_non_positive_raises(self, value):
        with pytest.raises(ValueError, match="must be positive"):
            set_gimbal_lock_threshold(value)

    def test_nan_raises(self):
        with pytest.raises(ValueError):
            set_gimbal_lock_threshold(float("nan"))
