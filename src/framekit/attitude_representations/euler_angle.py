"""Euler angle attitude representation.

Provides the ``EulerSequence`` enum defining the 12 Euler rotation
sequences, and the ``EulerAngles`` class representing an attitude as three
successive rotations.

The sequences fall into two families.  *Aerodynamics* sequences rotate
about three distinct axes (``XYZ`` is roll-pitch-yaw).  *Astronomical*
sequences repeat the first axis as the third (``ZXZ`` is the classical
node-inclination-argument sequence).  Each sequence carries four pieces of
bookkeeping that let a single extraction algorithm serve all twelve:

- ``indices``: the rotation axes in order (X=0, Y=1, Z=2).
- ``alternate_x`` / ``alternate_z``: the first/last axis for aerodynamics
  sequences, the axis missing from the triplet for astronomical ones.
- ``is_even_permutation``: whether the sequence, with its final axis
  replaced by the axis not named by the first two, is an even permutation
  of XYZ.  ``ZXZ`` becomes ``ZXY``, which is even.
- ``is_aerodynamics_sequence``: ``True`` for three distinct axes.

These are held in a constant table built once at import.
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING, NamedTuple

import jax
import jax.numpy as jnp

from framekit.config import get_attitude_epsilon, get_dtype
from framekit.utils import to_radians

if TYPE_CHECKING:
    from framekit.attitude_representations.quaternion import Quaternion
    from framekit.attitude_representations.rotation_matrix import RotationMatrix


class EulerSequenceInfo(NamedTuple):
    """Lookup-table row describing one Euler sequence."""

    indices: tuple[int, int, int]
    alternate_x: int
    alternate_z: int
    is_even_permutation: bool
    is_aerodynamics_sequence: bool


class EulerSequence(enum.IntEnum):
    """The 12 Euler angle rotation sequences.

    Each member names the axes for three successive rotations.  For
    example, ``XYZ`` means rotate first about X, then about the new Y,
    then about the newest Z.

    Attributes:
        XYZ: X-Y-Z aerodynamics sequence, also known as roll-pitch-yaw (index 0).
        XZY: X-Z-Y aerodynamics sequence (index 1).
        YZX: Y-Z-X aerodynamics sequence (index 2).
        YXZ: Y-X-Z aerodynamics sequence (index 3).
        ZXY: Z-X-Y aerodynamics sequence (index 4).
        ZYX: Z-Y-X aerodynamics sequence, also known as yaw-pitch-roll (index 5).
        XYX: X-Y-X astronomical sequence (index 6).
        XZX: X-Z-X astronomical sequence (index 7).
        YZY: Y-Z-Y astronomical sequence (index 8).
        YXY: Y-X-Y astronomical sequence (index 9).
        ZXZ: Z-X-Z astronomical sequence (index 10).
        ZYZ: Z-Y-Z astronomical sequence (index 11).
    """

    XYZ = 0
    XZY = 1
    YZX = 2
    YXZ = 3
    ZXY = 4
    ZYX = 5
    XYX = 6
    XZX = 7
    YZY = 8
    YXY = 9
    ZXZ = 10
    ZYZ = 11

    @property
    def info(self) -> EulerSequenceInfo:
        """Full lookup-table row for this sequence."""
        return _SEQUENCE_TABLE[self.value]

    @property
    def indices(self) -> tuple[int, int, int]:
        """Rotation axes in the order performed."""
        return _SEQUENCE_TABLE[self.value].indices

    @property
    def alternate_x(self) -> int:
        """First axis (aerodynamics) or omitted axis (astronomical)."""
        return _SEQUENCE_TABLE[self.value].alternate_x

    @property
    def alternate_z(self) -> int:
        """Last axis (aerodynamics) or omitted axis (astronomical)."""
        return _SEQUENCE_TABLE[self.value].alternate_z

    @property
    def is_even_permutation(self) -> bool:
        """Whether the completed three-axis sequence is an even permutation of XYZ."""
        return _SEQUENCE_TABLE[self.value].is_even_permutation

    @property
    def is_aerodynamics_sequence(self) -> bool:
        """``True`` for three distinct axes, ``False`` for a repeated first/last axis."""
        return _SEQUENCE_TABLE[self.value].is_aerodynamics_sequence


#                  indices    alt_x  alt_z  even   aero
_SEQUENCE_TABLE: tuple[EulerSequenceInfo, ...] = (
    EulerSequenceInfo((0, 1, 2), 0, 2, True, True),     # XYZ
    EulerSequenceInfo((0, 2, 1), 0, 1, False, True),    # XZY
    EulerSequenceInfo((1, 2, 0), 1, 0, True, True),     # YZX
    EulerSequenceInfo((1, 0, 2), 1, 2, False, True),    # YXZ
    EulerSequenceInfo((2, 0, 1), 2, 1, True, True),     # ZXY
    EulerSequenceInfo((2, 1, 0), 2, 0, False, True),    # ZYX
    EulerSequenceInfo((0, 1, 0), 2, 2, True, False),    # XYX
    EulerSequenceInfo((0, 2, 0), 1, 1, False, False),   # XZX
    EulerSequenceInfo((1, 2, 1), 0, 0, True, False),    # YZY
    EulerSequenceInfo((1, 0, 1), 2, 2, False, False),   # YXY
    EulerSequenceInfo((2, 0, 2), 1, 1, True, False),    # ZXZ
    EulerSequenceInfo((2, 1, 2), 0, 0, False, False),   # ZYZ
)


class EulerAngles:
    """Attitude represented as three successive rotations about specified axes.

    Internal storage is always in radians.  The ``use_degrees`` parameter on
    the constructor converts degree inputs to radians on construction.

    Instances are mutable: the angles and the sequence label can be replaced
    in place, either directly or by extraction from a transformation matrix
    or quaternion.  Changing the sequence with :meth:`set_sequence` only
    relabels the angles; use :meth:`to_euler_angles` to convert.

    This class is registered as a JAX pytree.  The three angle scalars are
    leaves; the ``sequence`` is auxiliary data.

    Args:
        sequence (EulerSequence): Rotation sequence. Default: ``EulerSequence.XYZ``.
        phi (float): First rotation angle.
        theta (float): Second rotation angle.
        psi (float): Third rotation angle.
        use_degrees (bool): If ``True``, interpret angles as degrees. Default: ``False``.
    """

    __slots__ = ('_sequence', '_phi', '_theta', '_psi')

    def __init__(
        self,
        sequence: EulerSequence = EulerSequence.XYZ,
        phi: float = 0.0,
        theta: float = 0.0,
        psi: float = 0.0,
        use_degrees: bool = False,
    ) -> None:
        _float = get_dtype()
        self._sequence = EulerSequence(sequence)
        self._phi = _float(to_radians(phi, use_degrees))
        self._theta = _float(to_radians(theta, use_degrees))
        self._psi = _float(to_radians(psi, use_degrees))

    @classmethod
    def _from_internal(cls, sequence: EulerSequence, phi: jax.Array, theta: jax.Array, psi: jax.Array) -> EulerAngles:
        """Create from raw JAX arrays without conversion.

        Used by pytree unflatten and conversion outputs.
        """
        obj = object.__new__(cls)
        obj._sequence = EulerSequence(sequence)
        obj._phi = phi
        obj._theta = theta
        obj._psi = psi
        return obj

    # Properties

    @property
    def sequence(self) -> EulerSequence:
        """Rotation sequence."""
        return self._sequence

    @property
    def phi(self) -> jax.Array:
        """First rotation angle in radians."""
        return self._phi

    @property
    def theta(self) -> jax.Array:
        """Second rotation angle in radians."""
        return self._theta

    @property
    def psi(self) -> jax.Array:
        """Third rotation angle in radians."""
        return self._psi

    @property
    def angles(self) -> jax.Array:
        """Angles ``[phi, theta, psi]`` in radians, in rotation order."""
        return jnp.array([self._phi, self._theta, self._psi])

    # Mutators

    def set_sequence(self, sequence: EulerSequence) -> None:
        """Relabel the angles with a different sequence (no conversion)."""
        self._sequence = EulerSequence(sequence)

    def set_angles(self, angles: jax.Array, use_degrees: bool = False) -> None:
        """Replace the three angles.

        Args:
            angles (jax.Array): Array-like of shape ``(3,)`` in rotation order.
            use_degrees (bool): If ``True``, interpret as degrees.
        """
        _float = get_dtype()
        self._phi = _float(to_radians(angles[0], use_degrees))
        self._theta = _float(to_radians(angles[1], use_degrees))
        self._psi = _float(to_radians(angles[2], use_degrees))

    def set_from_matrix(self, matrix: jax.Array, gimbal_lock_threshold: float | None = None) -> None:
        """Extract the angles for the current sequence from a transformation matrix.

        The matrix is assumed to be a proper transformation matrix to within
        numerical accuracy; it is not validated.

        Args:
            matrix (jax.Array): Parent-to-body transformation matrix, shape ``(3, 3)``.
            gimbal_lock_threshold (float | None): Override for the lock
                threshold. ``None`` uses :func:`framekit.config.get_gimbal_lock_threshold`.
        """
        from framekit.attitude_representations.conversions import rotation_matrix_to_euler_angles

        angles = rotation_matrix_to_euler_angles(
            self._sequence, jnp.asarray(matrix, dtype=get_dtype()), gimbal_lock_threshold
        )
        self._phi, self._theta, self._psi = angles[0], angles[1], angles[2]

    def set_from_quaternion(self, q: Quaternion, gimbal_lock_threshold: float | None = None) -> None:
        """Extract the angles for the current sequence from a left quaternion.

        Args:
            q (Quaternion): Source attitude.
            gimbal_lock_threshold (float | None): Override for the lock threshold.
        """
        self.set_from_matrix(q.to_matrix(), gimbal_lock_threshold)

    # Factory methods

    @classmethod
    def from_vector(cls, vec: jax.Array, sequence: EulerSequence, use_degrees: bool = False) -> EulerAngles:
        """Create from a 3-element vector [phi, theta, psi].

        Args:
            vec (jax.Array): Array-like of shape (3,).
            sequence (EulerSequence): Rotation sequence.
            use_degrees (bool): If ``True``, interpret as degrees.

        Returns:
            EulerAngles: New instance.
        """
        return cls(sequence, vec[0], vec[1], vec[2], use_degrees=use_degrees)

    @classmethod
    def from_matrix(
        cls,
        sequence: EulerSequence,
        matrix: jax.Array,
        gimbal_lock_threshold: float | None = None,
    ) -> EulerAngles:
        """Create by extracting angles from a transformation matrix.

        Args:
            sequence (EulerSequence): Target rotation sequence.
            matrix (jax.Array): Parent-to-body transformation matrix.
            gimbal_lock_threshold (float | None): Override for the lock threshold.

        Returns:
            EulerAngles: Extracted angles.
        """
        obj = cls(sequence)
        obj.set_from_matrix(matrix, gimbal_lock_threshold)
        return obj

    @classmethod
    def from_quaternion(
        cls,
        sequence: EulerSequence,
        q: Quaternion,
        gimbal_lock_threshold: float | None = None,
    ) -> EulerAngles:
        """Create by extracting angles from a left quaternion.

        Args:
            sequence (EulerSequence): Target rotation sequence.
            q (Quaternion): Source attitude.
            gimbal_lock_threshold (float | None): Override for the lock threshold.

        Returns:
            EulerAngles: Extracted angles.
        """
        return cls.from_matrix(sequence, q.to_matrix(), gimbal_lock_threshold)

    @classmethod
    def from_rotation_matrix(cls, r: RotationMatrix, sequence: EulerSequence) -> EulerAngles:
        """Create from a ``RotationMatrix``."""
        return cls.from_matrix(sequence, r.to_matrix())

    # Conversion methods

    def to_matrix(self) -> jax.Array:
        """Compute the parent-to-body transformation matrix.

        Returns:
            jnp.ndarray: Array of shape ``(3, 3)``.
        """
        from framekit.attitude_representations.conversions import euler_angles_to_rotation_matrix

        return euler_angles_to_rotation_matrix(self._sequence, self.angles)

    def to_rotation_matrix(self) -> RotationMatrix:
        """Convert to ``RotationMatrix``."""
        from framekit.attitude_representations.rotation_matrix import RotationMatrix

        return RotationMatrix._from_internal(self.to_matrix())

    def to_quaternion(self) -> Quaternion:
        """Convert to a left ``Quaternion``.

        Returns:
            Quaternion: Equivalent quaternion.
        """
        from framekit.attitude_representations.conversions import euler_angles_to_quaternion
        from framekit.attitude_representations.quaternion import Quaternion

        return Quaternion._from_internal(euler_angles_to_quaternion(self._sequence, self.angles))

    def to_euler_angles(self, sequence: EulerSequence) -> EulerAngles:
        """Convert to ``EulerAngles`` in a (possibly different) sequence.

        Args:
            sequence (EulerSequence): Target rotation sequence.

        Returns:
            EulerAngles: Equivalent angles in the target sequence.
        """
        return EulerAngles.from_matrix(sequence, self.to_matrix())

    # Comparison

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EulerAngles):
            return NotImplemented
        eps = get_attitude_epsilon()
        return bool(
            self._sequence == other._sequence
            and jnp.abs(self._phi - other._phi) < eps
            and jnp.abs(self._theta - other._theta) < eps
            and jnp.abs(self._psi - other._psi) < eps
        )

    def __ne__(self, other: object) -> bool:
        if not isinstance(other, EulerAngles):
            return NotImplemented
        return not self.__eq__(other)

    # String representations

    def __str__(self) -> str:
        return (
            f"EulerAngles(sequence={self._sequence.name}, "
            f"phi={float(self._phi):.6f}, "
            f"theta={float(self._theta):.6f}, "
            f"psi={float(self._psi):.6f})"
        )

    def __repr__(self) -> str:
        return (
            f"EulerAngles(sequence={self._sequence.name}, "
            f"phi={float(self._phi)}, "
            f"theta={float(self._theta)}, "
            f"psi={float(self._psi)})"
        )


# Register as JAX pytree: angles are leaves, sequence is auxiliary data
jax.tree_util.register_pytree_node(
    EulerAngles,
    lambda e: ((e._phi, e._theta, e._psi), e._sequence),
    lambda sequence, children: EulerAngles._from_internal(sequence, *children),
)
