"""Ephemeris source interface.

The environment models do not read ephemeris files themselves.  They query
an object implementing :class:`EphemerisSource`, which can wrap any
planetary ephemeris (a JPL DE file reader, an analytic model, or a test
fixture).

Units follow the usual ephemeris conventions: body states are solar system
barycentric positions and velocities in km and km/s; the lunar libration
"state" holds the Z-X-Z Euler angles of the Moon's principal axes in rad
and their rates in rad/s.  Conversion to the frame conventions (metres,
parent-relative states, truncated Julian dates) happens here.
"""

from __future__ import annotations

import enum
from typing import Protocol, runtime_checkable

import jax
import jax.numpy as jnp
from jax.typing import ArrayLike

from framekit.config import get_dtype
from framekit.constants import KM2M, MJD_TJD_OFFSET
from framekit.frames.reference_frame import ReferenceFrame


class EphemerisBody(enum.Enum):
    """Ephemeris quantities used by the environment models."""

    SOLAR_SYSTEM_BARYCENTER = "solar_system_barycenter"
    SUN = "sun"
    EARTH_MOON_BARYCENTER = "earth_moon_barycenter"
    EARTH = "earth"
    MOON = "moon"
    MARS = "mars"
    MOON_LIBRATION = "moon_libration"


@runtime_checkable
class EphemerisSource(Protocol):
    """Provider of body states and Earth orientation at a given epoch."""

    def state(self, body: EphemerisBody, mjd_tt: float) -> ArrayLike:
        """Six-element state of *body* at *mjd_tt* (MJD, TT scale).

        For bodies, ``[x, y, z, vx, vy, vz]`` in km and km/s, relative to the
        solar system barycenter.  For ``MOON_LIBRATION``,
        ``[phi, theta, psi, phi_dot, theta_dot, psi_dot]`` in rad and rad/s.
        """
        ...

    def earth_orientation(self, mjd_tt: float) -> ArrayLike:
        """Transformation matrix from Earth-centred inertial to Earth-fixed axes, shape ``(3, 3)``."""
        ...


def tjd_from_mjd(mjd_tt: float) -> float:
    """Truncated Julian date (frame time stamp) for a Modified Julian Date."""
    return float(mjd_tt) - MJD_TJD_OFFSET


def state_from_ephemeris(
    source: EphemerisSource,
    body: EphemerisBody,
    mjd_tt: float,
    parent: ReferenceFrame | None = None,
) -> tuple[jax.Array, jax.Array]:
    """Body position and velocity in metres, relative to a parent frame.

    Args:
        source (EphemerisSource): Ephemeris to query.
        body (EphemerisBody): Body of interest.
        mjd_tt (float): Epoch as MJD in TT.
        parent (ReferenceFrame | None): Parent frame whose barycentric state
            is subtracted; ``None`` leaves the state barycentric.

    Returns:
        tuple: ``(position, velocity)`` in m and m/s.

    Raises:
        ValueError: If the source returns something other than six elements.
    """
    state = jnp.asarray(source.state(body, mjd_tt), dtype=get_dtype())
    if state.shape != (6,):
        raise ValueError(f"Ephemeris state for {body.name} must have shape (6,), got {state.shape}")

    position = state[:3] * KM2M
    velocity = state[3:] * KM2M
    if parent is not None:
        position = position - parent.position
        velocity = velocity - parent.velocity
    return position, velocity
