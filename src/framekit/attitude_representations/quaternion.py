"""Quaternion attitude representation.

Provides the ``Quaternion`` class representing a frame transformation as a
unit *left* quaternion in scalar-first convention ``[s, v1, v2, v3]``.

A left quaternion transforms vector components from a parent frame into the
body frame, so the quaternion of an elementary rotation by ``a`` about axis
``k`` is ``[cos(a/2), -sin(a/2) e_k]``.  Performing ``q1`` and then ``q2``
is ``q2 * q1``, and the transformation matrix of that product equals the
product of the individual transformation matrices.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import jax
import jax.numpy as jnp

from framekit.config import get_attitude_epsilon, get_dtype
from framekit.errors import DegenerateQuaternionError

if TYPE_CHECKING:
    from framekit.attitude_representations.euler_angle import EulerAngles, EulerSequence
    from framekit.attitude_representations.rotation_matrix import RotationMatrix

# Quaternions at or below this norm have no defined direction.
_MIN_NORM = 1e-15


def _normalized(data: jax.Array) -> jax.Array:
    """Scale *data* to unit norm, rejecting (near) zero quaternions.

    The norm check needs a concrete value; under tracing the division is
    applied unchecked.
    """
    n = jnp.linalg.norm(data)
    if not isinstance(n, jax.core.Tracer) and float(n) <= _MIN_NORM:
        raise DegenerateQuaternionError(
            f"Cannot normalize quaternion with norm {float(n):.3e} (must exceed {_MIN_NORM:.0e})"
        )
    return data / n


class Quaternion:
    """Unit left quaternion representing a frame transformation.

    Internal storage is a shape ``(4,)`` array in scalar-first order
    ``[s, v1, v2, v3]``.  The quaternion is normalized on construction.

    This class is registered as a JAX pytree with the data array as
    the sole leaf and no auxiliary data.

    Args:
        s (float): Scalar (real) component.
        v1 (float): First vector (imaginary) component.
        v2 (float): Second vector (imaginary) component.
        v3 (float): Third vector (imaginary) component.

    Raises:
        DegenerateQuaternionError: If the components have (near) zero norm.
    """

    __slots__ = ('_data',)

    def __init__(self, s: float, v1: float, v2: float, v3: float) -> None:
        _float = get_dtype()
        q = jnp.array([_float(s), _float(v1), _float(v2), _float(v3)])
        self._data = _normalized(q)

    @classmethod
    def _from_internal(cls, data: jax.Array) -> Quaternion:
        """Create from a raw JAX array without normalization.

        Used by pytree unflatten and conversion outputs.

        Args:
            data (jax.Array): Array of shape ``(4,)`` in scalar-first order.

        Returns:
            Quaternion: New instance.
        """
        obj = object.__new__(cls)
        obj._data = data
        return obj

    @classmethod
    def identity(cls) -> Quaternion:
        """The identity transformation ``[1, 0, 0, 0]``."""
        return cls._from_internal(jnp.array([1.0, 0.0, 0.0, 0.0], dtype=get_dtype()))

    # Properties

    @property
    def scalar(self) -> jax.Array:
        """Scalar component ``s``."""
        return self._data[0]

    @property
    def vector(self) -> jax.Array:
        """Vector components ``[v1, v2, v3]``."""
        return self._data[1:]

    # Factory methods

    @classmethod
    def from_vector(cls, v: jax.Array, scalar_first: bool = True) -> Quaternion:
        """Create from a 4-element vector.

        Args:
            v (jax.Array): Array-like of shape ``(4,)``.
            scalar_first (bool): If ``True``, ``v = [s, v1, v2, v3]``.
                If ``False``, ``v = [v1, v2, v3, s]``.

        Returns:
            Quaternion: New normalized quaternion.
        """
        if scalar_first:
            return cls(v[0], v[1], v[2], v[3])
        else:
            return cls(v[3], v[0], v[1], v[2])

    def to_vector(self, scalar_first: bool = True) -> jax.Array:
        """Return the quaternion as a 4-element vector.

        Args:
            scalar_first (bool): If ``True``, return ``[s, v1, v2, v3]``.
                If ``False``, return ``[v1, v2, v3, s]``.

        Returns:
            jnp.ndarray: Array of shape ``(4,)``.
        """
        if scalar_first:
            return self._data
        else:
            return jnp.concatenate([self._data[1:], self._data[:1]])

    @classmethod
    def from_matrix(cls, matrix: jax.Array) -> Quaternion:
        """Create from a transformation matrix.

        The result has a non-negative scalar part.

        Args:
            matrix (jax.Array): Parent-to-body transformation matrix of shape ``(3, 3)``.

        Returns:
            Quaternion: Equivalent unit quaternion.
        """
        from framekit.attitude_representations.conversions import rotation_matrix_to_quaternion

        return cls._from_internal(rotation_matrix_to_quaternion(jnp.asarray(matrix, dtype=get_dtype())))

    @classmethod
    def from_rotation_matrix(cls, r: RotationMatrix) -> Quaternion:
        """Create from a ``RotationMatrix``."""
        return cls.from_matrix(r.to_matrix())

    @classmethod
    def from_euler_angles(cls, e: EulerAngles) -> Quaternion:
        """Create from ``EulerAngles``.

        Args:
            e (EulerAngles): Source angles.

        Returns:
            Quaternion: Equivalent quaternion.
        """
        return e.to_quaternion()

    # Methods

    def multiply(self, other: Quaternion) -> Quaternion:
        """Hamilton product ``self * other``.

        The product is not renormalized.  To transform by ``q1`` and then
        by ``q2`` use ``q2.multiply(q1)``.

        Args:
            other (Quaternion): Right operand.

        Returns:
            Quaternion: Product quaternion.
        """
        from framekit.attitude_representations.conversions import quaternion_multiply

        return Quaternion._from_internal(quaternion_multiply(self._data, other._data))

    def normalize(self) -> Quaternion:
        """Return a new unit quaternion.

        Returns:
            Quaternion: Unit quaternion.

        Raises:
            DegenerateQuaternionError: If the norm is at or below ``1e-15``.
        """
        return Quaternion._from_internal(_normalized(self._data))

    def norm(self) -> jax.Array:
        """Return the Euclidean norm.

        Returns:
            jax.Array: Scalar norm.
        """
        return jnp.linalg.norm(self._data)

    def conjugate(self) -> Quaternion:
        """Return the conjugate quaternion ``[s, -v]``.

        For a unit quaternion, the conjugate is the inverse transformation.
        """
        from framekit.attitude_representations.conversions import quaternion_conjugate

        return Quaternion._from_internal(quaternion_conjugate(self._data))

    def inverse(self) -> Quaternion:
        """Return the multiplicative inverse.

        The conjugate divided by the squared norm, which for a unit
        quaternion is the conjugate itself.

        Raises:
            DegenerateQuaternionError: If the norm is at or below ``1e-15``.
        """
        from framekit.attitude_representations.conversions import quaternion_conjugate

        n = _normalized(self._data)
        return Quaternion._from_internal(quaternion_conjugate(n) / jnp.linalg.norm(self._data))

    def rotate_vector(self, v: jax.Array) -> jax.Array:
        """Transform vector components from parent axes to body axes.

        Args:
            v (jax.Array): Vector of shape ``(3,)`` in parent axes.

        Returns:
            jnp.ndarray: The same vector in body axes, ``T v``.
        """
        return self.to_matrix() @ jnp.asarray(v, dtype=get_dtype())

    # Operators

    def __mul__(self, other: Quaternion) -> Quaternion:
        """Hamilton product (quaternion * quaternion)."""
        if not isinstance(other, Quaternion):
            return NotImplemented
        return self.multiply(other)

    def __neg__(self) -> Quaternion:
        return Quaternion._from_internal(-self._data)

    def __getitem__(self, idx: int) -> jax.Array:
        return self._data[idx]

    def __eq__(self, other: object) -> bool:
        """Component-wise comparison within the attitude epsilon.

        ``q`` and ``-q`` describe the same transformation but do not compare
        equal.
        """
        if not isinstance(other, Quaternion):
            return NotImplemented
        eps = get_attitude_epsilon()
        d1 = self._data / jnp.linalg.norm(self._data)
        d2 = other._data / jnp.linalg.norm(other._data)
        return bool(jnp.all(jnp.abs(d1 - d2) < eps))

    def __ne__(self, other: object) -> bool:
        if not isinstance(other, Quaternion):
            return NotImplemented
        return not self.__eq__(other)

    # Conversion methods

    def to_matrix(self) -> jax.Array:
        """Compute the parent-to-body transformation matrix.

        Returns:
            jnp.ndarray: Array of shape ``(3, 3)``.
        """
        from framekit.attitude_representations.conversions import quaternion_to_rotation_matrix

        return quaternion_to_rotation_matrix(self._data)

    def to_rotation_matrix(self) -> RotationMatrix:
        """Convert to ``RotationMatrix``.

        Returns:
            RotationMatrix: Equivalent rotation matrix.
        """
        from framekit.attitude_representations.rotation_matrix import RotationMatrix

        return RotationMatrix._from_internal(self.to_matrix())

    def to_euler_angles(self, sequence: EulerSequence) -> EulerAngles:
        """Convert to ``EulerAngles`` with specified rotation sequence.

        Goes through the transformation matrix.

        Args:
            sequence (EulerSequence): Target rotation sequence.

        Returns:
            EulerAngles: Equivalent angles.
        """
        from framekit.attitude_representations.euler_angle import EulerAngles

        return EulerAngles.from_matrix(sequence, self.to_matrix())

    # String representations

    def __str__(self) -> str:
        return (
            f"Quaternion(s={float(self._data[0]):.6f}, "
            f"v=[{float(self._data[1]):.6f}, "
            f"{float(self._data[2]):.6f}, "
            f"{float(self._data[3]):.6f}])"
        )

    def __repr__(self) -> str:
        return (
            f"Quaternion(s={float(self._data[0])}, "
            f"v1={float(self._data[1])}, "
            f"v2={float(self._data[2])}, "
            f"v3={float(self._data[3])})"
        )


# Register as JAX pytree
jax.tree_util.register_pytree_node(
    Quaternion,
    lambda q: ((q._data,), None),
    lambda _, children: Quaternion._from_internal(children[0]),
)
