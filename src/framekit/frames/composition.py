"""Composition of reference frame states.

Two operations on frame states:

- :func:`compose_states` chains a child-in-parent state with a
  parent-in-grandparent state, giving the child in the grandparent.
- :func:`relative_state` takes two frames expressed in the same parent
  and gives the state of one relative to the other.

They are inverses: ``compose_states(b, relative_state(a, b))`` reproduces
``a``.  Rates are handled with the transport theorem; angular velocities
are in the axes of the frame they belong to.
"""

from __future__ import annotations

from framekit.frames.reference_frame import ReferenceFrame
from framekit.linalg import (
    mat3_product,
    mat3_transform,
    mat3_transpose,
    mat3_transpose_transform,
    vec3_cross,
)


def compose_states(parent: ReferenceFrame, child: ReferenceFrame) -> ReferenceFrame:
    """Express *child* relative to *parent*'s own parent.

    With ``p``, ``v``, ``T``, ``q`` and ``w`` for position, velocity,
    transformation matrix, quaternion and angular velocity::

        p = p_p + T_p^T p_c
        v = v_p + T_p^T (v_c + w_p x p_c)
        T = T_c T_p
        q = q_c * q_p
        w = w_c + T_c w_p

    Args:
        parent (ReferenceFrame): Parent state relative to the grandparent.
        child (ReferenceFrame): Child state relative to *parent*.

    Returns:
        ReferenceFrame: New frame named after *child*, whose parent is the
            grandparent, stamped with the child's time.
    """
    T_p = parent.T_parent_body
    T_c = child.T_parent_body

    out = ReferenceFrame(child.name, parent.parent_name)
    out.position = parent.position + mat3_transpose_transform(T_p, child.position)
    out.velocity = parent.velocity + mat3_transpose_transform(
        T_p, child.velocity + vec3_cross(parent.attitude_rate, child.position)
    )
    out.set_attitude_quaternion(child.attitude.multiply(parent.attitude).normalize())
    out.attitude_rate = child.attitude_rate + mat3_transform(T_c, parent.attitude_rate)
    out.time = child.time
    return out


def relative_state(frame: ReferenceFrame, reference: ReferenceFrame) -> ReferenceFrame:
    """State of *frame* relative to *reference*, both given in a common parent.

    ::

        p = T_r (p_f - p_r)
        v = T_r (v_f - v_r) - w_r x p
        T = T_f T_r^T
        q = q_f * conj(q_r)
        w = w_f - T w_r

    The common parent is not checked; frames with different parents give a
    meaningless result.

    Args:
        frame (ReferenceFrame): Frame whose state is wanted.
        reference (ReferenceFrame): Frame to express it in.

    Returns:
        ReferenceFrame: New frame named after *frame* with *reference* as
            its parent, stamped with the time of *frame*.
    """
    T_r = reference.T_parent_body
    T_f = frame.T_parent_body

    out = ReferenceFrame(frame.name, reference.name)
    position = mat3_transform(T_r, frame.position - reference.position)
    out.position = position
    out.velocity = mat3_transform(T_r, frame.velocity - reference.velocity) - vec3_cross(
        reference.attitude_rate, position
    )
    out.set_attitude_quaternion(frame.attitude.multiply(reference.attitude.conjugate()).normalize())
    T = mat3_product(T_f, mat3_transpose(T_r))
    out.attitude_rate = frame.attitude_rate - mat3_transform(T, reference.attitude_rate)
    out.time = frame.time
    return out
