"""Rotating frames aligned with a body's orbital state.

The rotating frame of a secondary body about a primary (for example the
Moon about the Earth-Moon barycenter) has:

- **x** along the body position vector;
- **z** along the orbital angular momentum ``r x v``;
- **y** completing the right-handed triad, ``z x x``.

Its angular velocity is the instantaneous orbital rate ``h / |r|^2``.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp
from jax.typing import ArrayLike

from framekit.attitude_representations import Quaternion
from framekit.config import get_dtype
from framekit.frames.reference_frame import ReferenceFrame
from framekit.linalg import (
    mat3_transform,
    vec3_cross,
    vec3_magnitude_squared,
    vec3_normalize,
    vec3_scale,
)


def rotating_frame_attitude(r: ArrayLike, v: ArrayLike) -> tuple[jax.Array, Quaternion, jax.Array]:
    """Attitude and angular velocity of the rotating frame for a body state.

    The rows of the transformation matrix are the rotating frame axes
    expressed in the parent frame: ``[x_hat; y_hat; z_hat]``.

    A zero position or a state with ``r`` parallel to ``v`` has no defined
    orbital plane; the result then contains zero rows or non-finite rates.

    Args:
        r (ArrayLike): Body position in the parent frame [m].
        v (ArrayLike): Body velocity in the parent frame [m/s].

    Returns:
        tuple: ``(T, q, omega)`` where ``T`` is the parent-to-rotating
            transformation matrix, ``q`` the equivalent left quaternion and
            ``omega`` the angular velocity in rotating axes [rad/s].

    Example:
        >>> import jax.numpy as jnp
        >>> from framekit.frames import rotating_frame_attitude
        >>> T, q, w = rotating_frame_attitude(jnp.array([1.0, 0.0, 0.0]), jnp.array([0.0, 1.0, 0.0]))
        >>> float(w[2])
        1.0
    """
    r = jnp.asarray(r, dtype=get_dtype())
    v = jnp.asarray(v, dtype=get_dtype())

    r_hat = vec3_normalize(r)
    h = vec3_cross(r, v)
    h_hat = vec3_normalize(h)
    y_hat = vec3_normalize(vec3_cross(h_hat, r_hat))

    T = jnp.stack([r_hat, y_hat, h_hat])
    q = Quaternion.from_matrix(T)

    omega_parent = vec3_scale(h, 1.0 / vec3_magnitude_squared(r))
    omega = mat3_transform(T, omega_parent)

    return T, q, omega


def update_rotating_frame(
    body_frame: ReferenceFrame,
    rotating_frame: ReferenceFrame,
    time: float | None = None,
) -> None:
    """Point *rotating_frame* along the orbit of *body_frame*.

    The rotating frame is centred on the parent of *body_frame*, so its
    position and velocity are zeroed.

    Args:
        body_frame (ReferenceFrame): Secondary body state in the common parent.
        rotating_frame (ReferenceFrame): Frame to update in place.
        time (float | None): Time stamp [TJD]; ``None`` copies the body frame's time.
    """
    T, _, omega = rotating_frame_attitude(body_frame.position, body_frame.velocity)

    rotating_frame.position = jnp.zeros(3)
    rotating_frame.velocity = jnp.zeros(3)
    rotating_frame.set_attitude_matrix(T)
    rotating_frame.attitude_rate = omega
    rotating_frame.time = body_frame.time if time is None else float(time)
