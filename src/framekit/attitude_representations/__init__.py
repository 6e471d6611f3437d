"""Attitude representations for frame transformations.

Provides three interconvertible representation types:

- :class:`Quaternion` -- unit left quaternion (scalar-first ``[s, v1, v2, v3]``)
- :class:`RotationMatrix` -- 3x3 parent-to-body transformation matrix (SO(3))
- :class:`EulerAngles` -- three successive rotations in one of 12 sequences

Also re-exports the elementary transformation functions :func:`Rx`,
:func:`Ry`, :func:`Rz` and the :class:`EulerSequence` enum.
"""

from .rotation_matrices import (
    Rx,
    Ry,
    Rz,
    elementary_rotation,
)

from .quaternion import Quaternion
from .rotation_matrix import RotationMatrix, is_so3
from .euler_angle import EulerAngles, EulerSequence, EulerSequenceInfo
from .conversions import (
    euler_angles_to_quaternion,
    euler_angles_to_rotation_matrix,
    quaternion_multiply,
    quaternion_to_rotation_matrix,
    rotation_matrix_to_euler_angles,
    rotation_matrix_to_quaternion,
)

__all__ = [
    # Elementary rotations
    "Rx",
    "Ry",
    "Rz",
    "elementary_rotation",
    # Attitude representations
    "Quaternion",
    "RotationMatrix",
    "is_so3",
    "EulerAngles",
    "EulerSequence",
    "EulerSequenceInfo",
    # Conversion kernels
    "euler_angles_to_quaternion",
    "euler_angles_to_rotation_matrix",
    "quaternion_multiply",
    "quaternion_to_rotation_matrix",
    "rotation_matrix_to_euler_angles",
    "rotation_matrix_to_quaternion",
]
