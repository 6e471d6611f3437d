"""
framekit is an attitude and reference-frame kinematics library implemented in JAX.
"""

from .constants import (
    KM2M,
    MJD_TJD_OFFSET,
    OMEGA_EARTH,
    MOON_EARTH_MASS_RATIO,
)

from .attitude_representations import (
    Rx,
    Ry,
    Rz,
    EulerAngles,
    EulerSequence,
    Quaternion,
    RotationMatrix,
)

from .config import (
    set_dtype,
    get_dtype,
    set_gimbal_lock_threshold,
    get_gimbal_lock_threshold,
)

from .errors import (
    DegenerateQuaternionError,
    FrameTreeError,
    NumericalDivergenceError,
)

from .frames import (
    ReferenceFrame,
    FrameTree,
    compose_states,
    relative_state,
    rotating_frame_attitude,
    update_rotating_frame,
    LagrangeSolverConfig,
    solve_l2_distance_ratio,
    l2_scale_factor,
    update_l2_frame,
    encode_frame,
    decode_frame,
)

from .environment import (
    EphemerisBody,
    EphemerisSource,
    EarthMoonSystem,
    Environment,
)

__all__ = [
    # Constants
    "KM2M",
    "MJD_TJD_OFFSET",
    "OMEGA_EARTH",
    "MOON_EARTH_MASS_RATIO",
    # Attitude Representations
    "Rx",
    "Ry",
    "Rz",
    "EulerAngles",
    "EulerSequence",
    "Quaternion",
    "RotationMatrix",
    # Config
    "set_dtype",
    "get_dtype",
    "set_gimbal_lock_threshold",
    "get_gimbal_lock_threshold",
    # Errors
    "DegenerateQuaternionError",
    "FrameTreeError",
    "NumericalDivergenceError",
    # Frames
    "ReferenceFrame",
    "FrameTree",
    "compose_states",
    "relative_state",
    "rotating_frame_attitude",
    "update_rotating_frame",
    "LagrangeSolverConfig",
    "solve_l2_distance_ratio",
    "l2_scale_factor",
    "update_l2_frame",
    "encode_frame",
    "decode_frame",
    # Environment
    "EphemerisBody",
    "EphemerisSource",
    "EarthMoonSystem",
    "Environment",
]
