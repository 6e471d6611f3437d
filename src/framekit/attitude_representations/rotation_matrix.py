"""Transformation matrix attitude representation.

Provides the ``RotationMatrix`` class holding a 3x3 proper orthogonal
matrix that maps vector components from parent axes to body axes.

Explicit construction validates SO(3) membership (orthonormal rows,
determinant +1).  The ``_from_internal`` classmethod bypasses validation for
pytree unflatten and for the outputs of the conversion kernels, which are
orthonormal by construction.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import jax
import jax.numpy as jnp

from framekit.attitude_representations.rotation_matrices import elementary_rotation
from framekit.config import get_attitude_epsilon, get_dtype

if TYPE_CHECKING:
    from framekit.attitude_representations.euler_angle import EulerAngles, EulerSequence
    from framekit.attitude_representations.quaternion import Quaternion


def is_so3(matrix: jax.Array, tol: float = 1e-6) -> bool:
    """Check if a matrix is in SO(3).

    Tests orthogonality (R^T R ≈ I) and positive determinant.

    Args:
        matrix (jax.Array): Array of shape ``(3, 3)``.
        tol (float): Tolerance on the largest element of ``R^T R - I``.

    Returns:
        bool: ``True`` if the matrix is a proper rotation matrix.
    """
    matrix = jnp.asarray(matrix)
    if matrix.shape != (3, 3):
        return False
    orth_err = jnp.max(jnp.abs(matrix.T @ matrix - jnp.eye(3)))
    det = jnp.linalg.det(matrix)
    return bool(orth_err < tol and det > 0.0)


class RotationMatrix:
    """Parent-to-body transformation matrix.

    This class is registered as a JAX pytree with the matrix as the sole leaf.

    Args:
        matrix (jax.Array): Array-like of shape ``(3, 3)``.

    Raises:
        ValueError: If *matrix* is not a proper rotation matrix.
    """

    __slots__ = ("_data",)

    def __init__(self, matrix: jax.Array) -> None:
        data = jnp.asarray(matrix, dtype=get_dtype())
        if not is_so3(data):
            raise ValueError(
                f"Matrix is not a proper rotation matrix. shape={data.shape}"
                + (f", det={float(jnp.linalg.det(data)):.6f}" if data.shape == (3, 3) else "")
            )
        self._data = data

    @classmethod
    def _from_internal(cls, data: jax.Array) -> RotationMatrix:
        """Create from a raw JAX array without validation."""
        obj = object.__new__(cls)
        obj._data = data
        return obj

    @classmethod
    def identity(cls) -> RotationMatrix:
        """The identity transformation."""
        return cls._from_internal(jnp.eye(3, dtype=get_dtype()))

    @classmethod
    def from_axis(cls, axis: int, angle: float) -> RotationMatrix:
        """Elementary transformation about axis ``0`` (X), ``1`` (Y) or ``2`` (Z).

        Args:
            axis (int): Axis index.
            angle (float): Rotation angle in radians.

        Returns:
            RotationMatrix: Elementary transformation.
        """
        return cls._from_internal(elementary_rotation(axis, angle))

    @classmethod
    def from_quaternion(cls, q: Quaternion) -> RotationMatrix:
        """Create from a left ``Quaternion``."""
        return q.to_rotation_matrix()

    @classmethod
    def from_euler_angles(cls, e: EulerAngles) -> RotationMatrix:
        """Create from ``EulerAngles``."""
        return e.to_rotation_matrix()

    def to_matrix(self) -> jax.Array:
        """Return the underlying 3x3 array."""
        return self._data

    def transpose(self) -> RotationMatrix:
        """The inverse (body-to-parent) transformation."""
        return RotationMatrix._from_internal(self._data.T)

    # Operators

    def __matmul__(self, other: RotationMatrix | jax.Array) -> RotationMatrix | jax.Array:
        """Matrix-matrix composition or matrix-vector transformation.

        ``A @ B`` transforms by ``B`` first and then by ``A``.
        """
        if isinstance(other, RotationMatrix):
            return RotationMatrix._from_internal(self._data @ other._data)
        v = jnp.asarray(other)
        if v.shape == (3,):
            return self._data @ v
        return NotImplemented

    def __getitem__(self, idx: int | tuple[int, int]) -> jax.Array:
        return self._data[idx]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RotationMatrix):
            return NotImplemented
        eps = get_attitude_epsilon()
        return bool(jnp.all(jnp.abs(self._data - other._data) < eps))

    def __ne__(self, other: object) -> bool:
        if not isinstance(other, RotationMatrix):
            return NotImplemented
        return not self.__eq__(other)

    # Conversion methods

    def to_quaternion(self) -> Quaternion:
        """Convert to a left ``Quaternion`` with non-negative scalar part."""
        from framekit.attitude_representations.quaternion import Quaternion

        return Quaternion.from_matrix(self._data)

    def to_euler_angles(self, sequence: EulerSequence) -> EulerAngles:
        """Convert to ``EulerAngles`` for the given sequence."""
        from framekit.attitude_representations.euler_angle import EulerAngles

        return EulerAngles.from_matrix(sequence, self._data)

    # String representations

    def __str__(self) -> str:
        d = self._data
        return (
            f"RotationMatrix(\n"
            f"  [{float(d[0, 0]):10.6f} {float(d[0, 1]):10.6f} {float(d[0, 2]):10.6f}]\n"
            f"  [{float(d[1, 0]):10.6f} {float(d[1, 1]):10.6f} {float(d[1, 2]):10.6f}]\n"
            f"  [{float(d[2, 0]):10.6f} {float(d[2, 1]):10.6f} {float(d[2, 2]):10.6f}])"
        )

    def __repr__(self) -> str:
        return self.__str__()


# Register as JAX pytree
jax.tree_util.register_pytree_node(
    RotationMatrix,
    lambda r: ((r._data,), None),
    lambda _, children: RotationMatrix._from_internal(children[0]),
)
