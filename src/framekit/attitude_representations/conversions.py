"""Pure conversion kernels between attitude representations.

All functions operate on raw JAX arrays (no class instances) to avoid
circular imports between class modules.  The classes in ``quaternion.py``,
``rotation_matrix.py`` and ``euler_angle.py`` call these kernels and wrap
the results.

Convention:
    Transformation matrices are row-major ``(3, 3)`` arrays that map
    vector components from parent axes to body axes.

    Quaternions are scalar-first ``[s, v1, v2, v3]`` *left* quaternions:
    the quaternion of an elementary rotation by ``a`` about axis ``k`` is
    ``[cos(a/2), -sin(a/2) e_k]``, and performing ``q1`` then ``q2`` is
    the product ``q2 * q1``.  With this convention the transformation
    matrix of a product is the product of the transformation matrices.

    Euler sequences are ``EulerSequence`` members.  They are static: the
    axis indices and permutation flags select matrix elements at trace
    time, while every value-dependent decision uses ``jnp.where``.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp

from framekit.attitude_representations.euler_angle import EulerSequence
from framekit.attitude_representations.rotation_matrices import elementary_rotation
from framekit.config import get_gimbal_lock_threshold


# ---------------------------------------------------------------------------
# Quaternion algebra
# ---------------------------------------------------------------------------

def quaternion_multiply(q1: jax.Array, q2: jax.Array) -> jax.Array:
    """Hamilton product ``q1 * q2`` of two quaternions.

    The result is **not** renormalized; products of unit quaternions drift
    from unit norm by rounding only, and callers normalize explicitly.

    Args:
        q1 (jax.Array): Left quaternion of shape ``(4,)`` in scalar-first order.
        q2 (jax.Array): Right quaternion of shape ``(4,)`` in scalar-first order.

    Returns:
        jnp.ndarray: Product quaternion of shape ``(4,)``.
    """
    s1, v1 = q1[0], q1[1:]
    s2, v2 = q2[0], q2[1:]

    s = s1 * s2 - jnp.dot(v1, v2)
    v = s1 * v2 + s2 * v1 + jnp.cross(v1, v2)

    return jnp.concatenate([jnp.array([s]), v])


def quaternion_conjugate(q: jax.Array) -> jax.Array:
    """Conjugate ``[s, -v]`` of a quaternion of shape ``(4,)``."""
    return jnp.concatenate([q[:1], -q[1:]])


# ---------------------------------------------------------------------------
# Quaternion <-> Transformation matrix
# ---------------------------------------------------------------------------

def quaternion_to_rotation_matrix(q: jax.Array) -> jax.Array:
    """Convert a unit left quaternion to its transformation matrix.

    Uses the bilinear product form, which is exact for unit quaternions.

    Args:
        q (jax.Array): Quaternion array of shape ``(4,)`` in scalar-first order ``[s, v1, v2, v3]``.

    Returns:
        jnp.ndarray: Parent-to-body transformation matrix of shape ``(3, 3)``.
    """
    qs, q1, q2, q3 = q[0], q[1], q[2], q[3]

    return jnp.array([
        [qs*qs + q1*q1 - q2*q2 - q3*q3,  2.0*q1*q2 - 2.0*qs*q3,          2.0*q1*q3 + 2.0*qs*q2],
        [2.0*q1*q2 + 2.0*qs*q3,           qs*qs - q1*q1 + q2*q2 - q3*q3,  2.0*q2*q3 - 2.0*qs*q1],
        [2.0*q1*q3 - 2.0*qs*q2,           2.0*q2*q3 + 2.0*qs*q1,          qs*qs - q1*q1 - q2*q2 + q3*q3],
    ])


def rotation_matrix_to_quaternion(R: jax.Array) -> jax.Array:
    """Convert a transformation matrix to a unit left quaternion.

    Uses Shepperd's method: of the four candidates ``4 s^2``, ``4 v1^2``,
    ``4 v2^2`` and ``4 v3^2`` formed from the diagonal, the largest is used
    as the divisor, so no branch divides by a small number.  Selection is
    done with ``jax.lax.switch`` on ``argmax``.

    The returned quaternion has a non-negative scalar part.

    Args:
        R (jax.Array): Transformation matrix of shape ``(3, 3)``.

    Returns:
        jnp.ndarray: Quaternion array of shape ``(4,)`` in scalar-first order.
    """
    qvec = jnp.array([
        1.0 + R[0, 0] + R[1, 1] + R[2, 2],
        1.0 + R[0, 0] - R[1, 1] - R[2, 2],
        1.0 - R[0, 0] + R[1, 1] - R[2, 2],
        1.0 - R[0, 0] - R[1, 1] + R[2, 2],
    ])

    ind_max = jnp.argmax(qvec)
    q_max = qvec[ind_max]

    def _case_scalar(_):
        sq = jnp.sqrt(q_max)
        return 0.5 * jnp.array([
            sq,
            (R[2, 1] - R[1, 2]) / sq,
            (R[0, 2] - R[2, 0]) / sq,
            (R[1, 0] - R[0, 1]) / sq,
        ])

    def _case_x(_):
        sq = jnp.sqrt(q_max)
        return 0.5 * jnp.array([
            (R[2, 1] - R[1, 2]) / sq,
            sq,
            (R[0, 1] + R[1, 0]) / sq,
            (R[0, 2] + R[2, 0]) / sq,
        ])

    def _case_y(_):
        sq = jnp.sqrt(q_max)
        return 0.5 * jnp.array([
            (R[0, 2] - R[2, 0]) / sq,
            (R[0, 1] + R[1, 0]) / sq,
            sq,
            (R[1, 2] + R[2, 1]) / sq,
        ])

    def _case_z(_):
        sq = jnp.sqrt(q_max)
        return 0.5 * jnp.array([
            (R[1, 0] - R[0, 1]) / sq,
            (R[0, 2] + R[2, 0]) / sq,
            (R[1, 2] + R[2, 1]) / sq,
            sq,
        ])

    q = jax.lax.switch(ind_max, [_case_scalar, _case_x, _case_y, _case_z], None)
    q = jnp.where(q[0] < 0.0, -q, q)
    return q / jnp.linalg.norm(q)


# ---------------------------------------------------------------------------
# Euler angles -> Transformation matrix / Quaternion
# ---------------------------------------------------------------------------

def euler_angles_to_rotation_matrix(sequence: EulerSequence, angles: jax.Array) -> jax.Array:
    """Compute the transformation matrix for an Euler sequence.

    One elementary matrix is built per rotation and the composite is their
    reverse-order product ``M2 @ M1 @ M0``.

    Args:
        sequence (EulerSequence): Rotation sequence (static).
        angles (jax.Array): ``[phi, theta, psi]`` in radians, in rotation order.

    Returns:
        jnp.ndarray: Parent-to-body transformation matrix of shape ``(3, 3)``.
    """
    seq = EulerSequence(sequence)
    m = [elementary_rotation(axis, angles[ii]) for ii, axis in enumerate(seq.indices)]
    return m[2] @ m[1] @ m[0]


def _elementary_quaternion(axis: int, angle: jax.Array) -> jax.Array:
    half = 0.5 * angle
    vec = -jnp.sin(half) * jnp.eye(3)[axis]
    return jnp.concatenate([jnp.array([jnp.cos(half)]), vec])


def euler_angles_to_quaternion(sequence: EulerSequence, angles: jax.Array) -> jax.Array:
    """Compute the left quaternion for an Euler sequence.

    The three elementary quaternions are composed in reverse order
    ``q2 * q1 * q0`` and the product is normalized.

    Args:
        sequence (EulerSequence): Rotation sequence (static).
        angles (jax.Array): ``[phi, theta, psi]`` in radians, in rotation order.

    Returns:
        jnp.ndarray: Unit quaternion of shape ``(4,)`` in scalar-first order.
    """
    seq = EulerSequence(sequence)
    q = [_elementary_quaternion(axis, angles[ii]) for ii, axis in enumerate(seq.indices)]
    q21 = quaternion_multiply(q[2], q[1])
    quat = quaternion_multiply(q21, q[0])
    return quat / jnp.linalg.norm(quat)


# ---------------------------------------------------------------------------
# Transformation matrix -> Euler angles
# ---------------------------------------------------------------------------

def rotation_matrix_to_euler_angles(
    sequence: EulerSequence,
    R: jax.Array,
    gimbal_lock_threshold: float | None = None,
) -> jax.Array:
    """Extract Euler angles for a sequence from a transformation matrix.

    Five key elements of the matrix carry everything needed.  For an
    ``XYZ`` sequence, ``R[2][0]`` is ``sin(theta)``; ``R[1][0]`` and
    ``R[0][0]`` are ``cos(theta)`` times the sine and cosine of ``psi``;
    ``R[2][1]`` and ``R[2][2]`` are ``cos(theta)`` times the sine and
    cosine of ``phi`` (up to sign).  The sequence table locates the same
    five elements for the other eleven sequences:

    - ``R[i2][i0]`` gives ``theta``;
    - ``R[i1][i0]`` and ``R[alt_x][i0]`` give ``psi``;
    - ``R[i2][i1]`` and ``R[i2][alt_z]`` give ``phi``;
    - ``R[i1][alt_z]`` and ``R[i1][i1]`` give ``phi`` under gimbal lock.

    Under gimbal lock (the ``phi``/``psi`` key elements vanish) only the
    sum or difference of ``phi`` and ``psi`` is observable; ``psi`` is then
    fixed to zero.

    Assumes, to within numerical accuracy, a proper transformation matrix:
    unit rows and columns, orthogonal rows, determinant one, and elements
    outside ``[-1, 1]`` only by rounding.  Nothing is validated.

    Args:
        sequence (EulerSequence): Rotation sequence (static).
        R (jax.Array): Transformation matrix of shape ``(3, 3)``.
        gimbal_lock_threshold (float | None): Lock detection threshold on the
            averaged key-element magnitude. ``None`` uses the configured default.

    Returns:
        jnp.ndarray: Array ``[phi, theta, psi]`` in radians.
    """
    if gimbal_lock_threshold is None:
        gimbal_lock_threshold = get_gimbal_lock_threshold()

    seq = EulerSequence(sequence)
    i0, i1, i2 = seq.indices
    alt_x = seq.alternate_x
    alt_z = seq.alternate_z
    even = seq.is_even_permutation
    aero = seq.is_aerodynamics_sequence

    # sin(theta) for even aero, -sin(theta) for odd aero, cos(theta) for astro
    theta_val = R[i2, i0]

    # Sines and cosines of phi and psi, scaled by a common cos/sin(theta)
    # factor and sometimes negated.
    sin_phi = R[i2, i1]
    cos_phi = R[i2, alt_z]
    sin_psi = R[i1, i0]
    cos_psi = R[alt_x, i0]

    # Two estimates of the complement of theta_val; averaged.
    alt_theta_val1 = jnp.sqrt(sin_phi * sin_phi + cos_phi * cos_phi)
    alt_theta_val2 = jnp.sqrt(sin_psi * sin_psi + cos_psi * cos_psi)
    alt_theta_val = 0.5 * (alt_theta_val1 + alt_theta_val2)

    if aero and not even:
        theta_val = -theta_val

    # Theta.  Where the complement is the smaller value it resolves theta
    # more precisely than theta_val itself.
    alt_theta = jnp.arcsin(jnp.clip(alt_theta_val, -1.0, 1.0))
    if aero:
        theta_from_alt = jnp.where(theta_val < 0.0, -0.5 * jnp.pi + alt_theta, 0.5 * jnp.pi - alt_theta)
        theta_direct = jnp.arcsin(jnp.clip(theta_val, -1.0, 1.0))
    else:
        theta_from_alt = jnp.where(theta_val < 0.0, jnp.pi - alt_theta, alt_theta)
        theta_direct = jnp.arccos(jnp.clip(theta_val, -1.0, 1.0))
    theta = jnp.where(alt_theta_val <= jnp.abs(theta_val), theta_from_alt, theta_direct)

    # Not locked: make the common scale factor positive for all four terms.
    if aero:
        if even:
            sin_phi = -sin_phi
            sin_psi = -sin_psi
    elif even:
        cos_phi = -cos_phi
    else:
        cos_psi = -cos_psi

    phi_free = jnp.arctan2(sin_phi, cos_phi)
    psi_free = jnp.arctan2(sin_psi, cos_psi)

    # Locked: phi absorbs the observable combination, psi is zero.
    lock_sin_phi = R[i1, alt_z]
    lock_cos_phi = R[i1, i1]
    if not even:
        lock_sin_phi = -lock_sin_phi
    phi_locked = jnp.arctan2(lock_sin_phi, lock_cos_phi)

    not_locked = alt_theta_val > gimbal_lock_threshold
    phi = jnp.where(not_locked, phi_free, phi_locked)
    psi = jnp.where(not_locked, psi_free, jnp.zeros_like(psi_free))

    return jnp.array([phi, theta, psi])
