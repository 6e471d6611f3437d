"""Small fixed-size linear algebra helpers.

Thin, JAX-traceable wrappers for the 3x3 matrix and 3-vector operations
used by the attitude and reference-frame code.  Matrices are row-major
``(3, 3)`` arrays and vectors are ``(3,)`` arrays.

Naming follows the operation rather than the storage: ``mat3_transform``
applies a parent-to-body transformation matrix to a vector expressed in
parent axes, and ``mat3_transpose_transform`` applies its inverse.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from framekit.config import get_dtype

# Vectors whose magnitude falls below this are left unnormalized.
_MIN_NORMALIZABLE = 1e-300


def mat3_identity() -> Array:
    """Return the 3x3 identity matrix in the configured dtype."""
    return jnp.eye(3, dtype=get_dtype())


def mat3_copy(m: ArrayLike) -> Array:
    """Return an independent copy of a 3x3 matrix."""
    return jnp.array(m, dtype=get_dtype(), copy=True).reshape(3, 3)


def mat3_product(a: ArrayLike, b: ArrayLike) -> Array:
    """Matrix product ``a @ b`` of two 3x3 matrices."""
    return jnp.asarray(a) @ jnp.asarray(b)


def mat3_transpose(m: ArrayLike) -> Array:
    """Transpose of a 3x3 matrix."""
    return jnp.asarray(m).T


def mat3_transform(m: ArrayLike, v: ArrayLike) -> Array:
    """Transform a vector: ``m @ v``."""
    return jnp.asarray(m) @ jnp.asarray(v)


def mat3_transpose_transform(m: ArrayLike, v: ArrayLike) -> Array:
    """Transform a vector by the transpose: ``m.T @ v``."""
    return jnp.asarray(m).T @ jnp.asarray(v)


def vec3_zero() -> Array:
    """Return the zero 3-vector in the configured dtype."""
    return jnp.zeros(3, dtype=get_dtype())


def vec3_scale(v: ArrayLike, scale: ArrayLike) -> Array:
    """Scale a vector: ``scale * v``."""
    return jnp.asarray(v) * scale


def vec3_cross(a: ArrayLike, b: ArrayLike) -> Array:
    """Cross product ``a x b``."""
    return jnp.cross(jnp.asarray(a), jnp.asarray(b))


def vec3_dot(a: ArrayLike, b: ArrayLike) -> Array:
    """Inner product ``a . b``."""
    return jnp.dot(jnp.asarray(a), jnp.asarray(b))


def vec3_magnitude(v: ArrayLike) -> Array:
    """Euclidean magnitude ``|v|``."""
    return jnp.linalg.norm(jnp.asarray(v))


def vec3_magnitude_squared(v: ArrayLike) -> Array:
    """Squared magnitude ``v . v``."""
    v = jnp.asarray(v)
    return jnp.dot(v, v)


def vec3_normalize(v: ArrayLike) -> Array:
    """Return the unit vector along *v*.

    A zero vector has no direction and is returned unchanged.

    Args:
        v (ArrayLike): Vector of shape ``(3,)``.

    Returns:
        Array: Unit vector, or *v* itself when ``|v|`` is zero.
    """
    v = jnp.asarray(v)
    mag = jnp.linalg.norm(v)
    safe = jnp.where(mag > _MIN_NORMALIZABLE, mag, 1.0)
    return jnp.where(mag > _MIN_NORMALIZABLE, v / safe, v)
