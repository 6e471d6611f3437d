"""Reference frames.

This sub-module provides the reference frame state container and the
operations that build and relate frames:

- **Reference frames**: :class:`ReferenceFrame` holds a frame's state
  relative to its parent, with the attitude quaternion and transformation
  matrix kept consistent.
- **Composition**: chaining child-in-parent with parent-in-grandparent
  states, and relative states between sibling frames.
- **Frame tree**: parent-before-child update order and composition of
  states along the tree.
- **Rotating frames**: frames aligned with a body's position and orbital
  angular momentum.
- **Lagrange points**: the L2 distance ratio and the L2 frame.
- **Encoding**: the byte layout of frame attributes.
"""

from .reference_frame import ReferenceFrame
from .composition import compose_states, relative_state
from .tree import FrameTree
from .rotating import rotating_frame_attitude, update_rotating_frame
from .lagrange import (
    LagrangeSolverConfig,
    l2_scale_factor,
    quintic_residual,
    solve_l2_distance_ratio,
    update_l2_frame,
)
from .encoding import (
    decode_frame,
    decode_unicode_string,
    encode_frame,
    encode_unicode_string,
)

__all__ = [
    # State container
    "ReferenceFrame",
    # Composition
    "compose_states",
    "relative_state",
    "FrameTree",
    # Rotating frames
    "rotating_frame_attitude",
    "update_rotating_frame",
    # Lagrange points
    "LagrangeSolverConfig",
    "l2_scale_factor",
    "quintic_residual",
    "solve_l2_distance_ratio",
    "update_l2_frame",
    # Encoding
    "encode_frame",
    "decode_frame",
    "encode_unicode_string",
    "decode_unicode_string",
]
