"""Reference frame state container.

A ``ReferenceFrame`` holds the translational and rotational state of a frame
relative to its (optional) parent frame:

- ``position`` and ``velocity`` of the frame origin, expressed in the
  parent frame's axes [m, m/s];
- ``attitude``, the left quaternion transforming parent axes into frame
  axes, and ``T_parent_body``, the equivalent transformation matrix;
- ``attitude_rate``, the angular velocity of the frame with respect to
  its parent, expressed in the frame's own axes [rad/s];
- ``time``, the truncated Julian date of the state [days].

The quaternion and the matrix describe the same attitude.  They are only
ever written together through :meth:`ReferenceFrame.set_attitude_quaternion`,
:meth:`ReferenceFrame.set_attitude_matrix` and
:meth:`ReferenceFrame.set_identity_attitude`.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp
from jax.typing import ArrayLike

from framekit.attitude_representations import Quaternion
from framekit.config import get_dtype
from framekit.linalg import mat3_copy, mat3_identity, vec3_zero


def _vec3(v: ArrayLike) -> jax.Array:
    v = jnp.asarray(v, dtype=get_dtype())
    if v.shape != (3,):
        raise ValueError(f"Expected a 3-vector, got shape {v.shape}")
    return v


class ReferenceFrame:
    """State of a reference frame relative to its parent.

    A new frame sits at its parent's origin with identity attitude, zero
    rates and ``time = 0``.

    Args:
        name (str): Unique frame name.
        parent_name (str | None): Name of the parent frame, or ``None`` for a
            root frame.
    """

    def __init__(self, name: str, parent_name: str | None = None) -> None:
        self.name = name
        self.parent_name = parent_name
        self._position = vec3_zero()
        self._velocity = vec3_zero()
        self._attitude = Quaternion.identity()
        self._T_parent_body = mat3_identity()
        self._attitude_rate = vec3_zero()
        self.time = 0.0

    # Translational state

    @property
    def position(self) -> jax.Array:
        """Origin position in parent axes [m]."""
        return self._position

    @position.setter
    def position(self, value: ArrayLike) -> None:
        self._position = _vec3(value)

    @property
    def velocity(self) -> jax.Array:
        """Origin velocity in parent axes [m/s]."""
        return self._velocity

    @velocity.setter
    def velocity(self, value: ArrayLike) -> None:
        self._velocity = _vec3(value)

    # Rotational state

    @property
    def attitude(self) -> Quaternion:
        """Parent-to-frame left quaternion."""
        return self._attitude

    @property
    def T_parent_body(self) -> jax.Array:
        """Parent-to-frame transformation matrix, consistent with :attr:`attitude`."""
        return self._T_parent_body

    @property
    def attitude_rate(self) -> jax.Array:
        """Angular velocity with respect to the parent, in frame axes [rad/s]."""
        return self._attitude_rate

    @attitude_rate.setter
    def attitude_rate(self, value: ArrayLike) -> None:
        self._attitude_rate = _vec3(value)

    def set_attitude_quaternion(self, q: Quaternion) -> None:
        """Set the attitude from a quaternion; the matrix is recomputed.

        Args:
            q (Quaternion): Parent-to-frame left quaternion.
        """
        self._attitude = q
        self._T_parent_body = q.to_matrix()

    def set_attitude_matrix(self, matrix: ArrayLike) -> None:
        """Set the attitude from a transformation matrix; the quaternion is recomputed.

        Args:
            matrix (ArrayLike): Parent-to-frame transformation matrix, shape ``(3, 3)``.
        """
        T = mat3_copy(matrix)
        self._T_parent_body = T
        self._attitude = Quaternion.from_matrix(T)

    def set_identity_attitude(self) -> None:
        """Align the frame axes with the parent axes."""
        self._attitude = Quaternion.identity()
        self._T_parent_body = mat3_identity()

    def copy_attitude_from(self, other: ReferenceFrame) -> None:
        """Take the quaternion, matrix and attitude rate of *other* unchanged."""
        self._attitude = other._attitude
        self._T_parent_body = other._T_parent_body
        self._attitude_rate = other._attitude_rate

    def set_state(
        self,
        position: ArrayLike,
        velocity: ArrayLike,
        time: float | None = None,
    ) -> None:
        """Set the translational state, and optionally the time, in one call."""
        self.position = position
        self.velocity = velocity
        if time is not None:
            self.time = float(time)

    def copy(self) -> ReferenceFrame:
        """Return an independent frame with the same name, parent and state."""
        other = ReferenceFrame(self.name, self.parent_name)
        other._position = self._position
        other._velocity = self._velocity
        other._attitude = self._attitude
        other._T_parent_body = self._T_parent_body
        other._attitude_rate = self._attitude_rate
        other.time = self.time
        return other

    # String representations

    def __str__(self) -> str:
        def _fmt(v: jax.Array) -> str:
            return "[" + ", ".join(f"{float(x):.6f}" for x in v) + "]"

        parent = self.parent_name if self.parent_name is not None else "<None>"
        return (
            f"{self.name}:\n"
            f"   parent frame: {parent}\n"
            f"   position: {_fmt(self._position)}\n"
            f"   velocity: {_fmt(self._velocity)}\n"
            f"   attitude: {self._attitude}\n"
            f"   att rate: {_fmt(self._attitude_rate)}"
        )

    def __repr__(self) -> str:
        return f"ReferenceFrame(name={self.name!r}, parent_name={self.parent_name!r})"
