"""Elementary transformation matrices.

Each matrix transforms vector components from a parent frame into a frame
rotated by ``angle`` about one coordinate axis (a passive rotation).
Composite transforms are built by left-multiplying successive elementary
matrices, so the last rotation performed is leftmost.
"""

import jax.numpy as jnp

from framekit.utils import to_radians


def Rx(angle: float, use_degrees: bool = False) -> jnp.ndarray:
    """Transformation matrix for a rotation about the x-axis.

    Args:
        angle (float): Counter-clockwise angle of rotation as viewed
            looking back along the positive direction of the rotation axis.
        use_degrees (bool): Handle input in degrees. Default: ``False``

    Returns:
        jnp.ndarray: Transformation matrix.

    References:

        1. O. Montenbruck, and E. Gill, *Satellite Orbits: Models, Methods and Applications*, 2012, p.27.
    """
    angle = to_radians(angle, use_degrees)

    c = jnp.cos(angle)
    s = jnp.sin(angle)

    return jnp.array([[1.0,  0.0,  0.0],
                      [0.0,   +c,   +s],
                      [0.0,   -s,   +c]])


def Ry(angle: float, use_degrees: bool = False) -> jnp.ndarray:
    """Transformation matrix for a rotation about the y-axis.

    Args:
        angle (float): Counter-clockwise angle of rotation as viewed
            looking back along the positive direction of the rotation axis.
        use_degrees (bool): Handle input in degrees. Default: ``False``

    Returns:
        jnp.ndarray: Transformation matrix.
    """
    angle = to_radians(angle, use_degrees)

    c = jnp.cos(angle)
    s = jnp.sin(angle)

    return jnp.array([[ +c,  0.0,   -s],
                      [0.0, +1.0,  0.0],
                      [ +s,  0.0,   +c]])


def Rz(angle: float, use_degrees: bool = False) -> jnp.ndarray:
    """Transformation matrix for a rotation about the z-axis.

    Args:
        angle (float): Counter-clockwise angle of rotation as viewed
            looking back along the positive direction of the rotation axis.
        use_degrees (bool): Handle input in degrees. Default: ``False``

    Returns:
        jnp.ndarray: Transformation matrix.
    """
    angle = to_radians(angle, use_degrees)

    c = jnp.cos(angle)
    s = jnp.sin(angle)

    return jnp.array([[ +c,   +s,  0.0],
                      [ -s,   +c,  0.0],
                      [0.0,  0.0,  1.0]])


_ELEMENTARY = (Rx, Ry, Rz)


def elementary_rotation(axis: int, angle: float) -> jnp.ndarray:
    """Transformation matrix for a rotation about axis ``0`` (X), ``1`` (Y) or ``2`` (Z).

    Args:
        axis (int): Axis index. Must be a Python integer (static under JIT).
        angle (float): Rotation angle in radians.

    Returns:
        jnp.ndarray: Transformation matrix.

    Raises:
        ValueError: If *axis* is not 0, 1 or 2.
    """
    if axis not in (0, 1, 2):
        raise ValueError(f"Axis index must be 0, 1 or 2, got {axis!r}")
    return _ELEMENTARY[axis](angle)
