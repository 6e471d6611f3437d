"""Module-wide floating-point precision and attitude configuration.

Provides ``set_dtype`` and ``get_dtype`` to control the float dtype used
throughout framekit.  The default is ``jnp.float64``: reference frames are
exchanged as 8-byte floats and the attitude round trips are only exact to
double precision.  Selecting ``jnp.float64`` enables JAX's 64-bit mode
(``jax_enable_x64``).

Call ``set_dtype`` **before** any JIT compilation, just like JAX's own
``jax.config.update("jax_enable_x64", True)``.  Under JIT, ``get_dtype()``
runs during tracing and its result is baked into the compiled program.

The gimbal-lock threshold used when extracting Euler angles from a
transformation matrix is also held here.  It is only a default: every
extraction routine accepts an explicit ``gimbal_lock_threshold`` argument
that takes precedence.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp

_VALID_DTYPES = (jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64)

_DEFAULT_GIMBAL_LOCK_THRESHOLD = 1e-13

_dtype = jnp.float64
jax.config.update("jax_enable_x64", True)

_gimbal_lock_threshold = _DEFAULT_GIMBAL_LOCK_THRESHOLD


def set_dtype(dtype) -> None:
    """Set the module-wide float dtype for framekit.

    Must be called **before** any ``jax.jit`` compilation.  In eager mode
    the change takes effect immediately.

    If *dtype* is ``jnp.float64``, JAX's 64-bit mode is automatically
    enabled via ``jax.config.update("jax_enable_x64", True)``.

    Args:
        dtype: One of ``jnp.float16``, ``jnp.bfloat16``, ``jnp.float32``,
            or ``jnp.float64``.

    Raises:
        ValueError: If *dtype* is not a supported float type.
    """
    global _dtype
    if dtype not in _VALID_DTYPES:
        raise ValueError(
            f"Unsupported dtype {dtype}. Must be one of: "
            f"jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64"
        )
    if dtype == jnp.float64:
        jax.config.update("jax_enable_x64", True)
    _dtype = dtype


def get_dtype():
    """Return the current module-wide float dtype.

    Returns:
        The active float dtype (default ``jnp.float64``).
    """
    return _dtype


def set_gimbal_lock_threshold(threshold: float) -> None:
    """Set the default gimbal-lock detection threshold.

    When the averaged magnitude of the four off-axis key elements of a
    transformation matrix falls to or below this value, Euler angle
    extraction treats the configuration as locked and fixes the third
    angle to zero.

    Args:
        threshold (float): Positive threshold.

    Raises:
        ValueError: If *threshold* is not strictly positive.
    """
    global _gimbal_lock_threshold
    threshold = float(threshold)
    if not threshold > 0.0:
        raise ValueError(f"Gimbal lock threshold must be positive, got {threshold}")
    _gimbal_lock_threshold = threshold


def get_gimbal_lock_threshold() -> float:
    """Return the default gimbal-lock detection threshold.

    Returns:
        float: Threshold (default ``1e-13``).
    """
    return _gimbal_lock_threshold


def reset_gimbal_lock_threshold() -> None:
    """Restore the gimbal-lock threshold to its default of ``1e-13``."""
    global _gimbal_lock_threshold
    _gimbal_lock_threshold = _DEFAULT_GIMBAL_LOCK_THRESHOLD


def get_attitude_epsilon() -> float:
    """Return the dtype-adaptive tolerance for attitude comparisons.

    The tolerance scales with the precision of the configured float dtype:

    - ``float64``:  1e-12
    - ``float32``:  1e-6
    - ``float16``:  1e-3
    - ``bfloat16``: 1e-3

    Returns:
        float: Absolute tolerance for element-wise comparisons.
    """
    if _dtype == jnp.float64:
        return 1e-12
    if _dtype == jnp.float32:
        return 1e-6
    # float16 and bfloat16
    return 1e-3
