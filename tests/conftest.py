import jax.numpy as jnp
import pytest

from framekit.config import reset_gimbal_lock_threshold, set_dtype


@pytest.fixture(autouse=True)
def _ensure_float64():
    """Set float64 precision and the default gimbal-lock threshold before every test.

    Tests that change either setting (e.g. test_config.py) are isolated from
    the rest of the suite by this reset.
    """
    set_dtype(jnp.float64)
    reset_gimbal_lock_threshold()
    yield
    set_dtype(jnp.float64)
    reset_gimbal_lock_threshold()
