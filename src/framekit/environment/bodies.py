"""Planetary body environment models.

Each body owns two frames:

- ``<Name>CentricInertial``: centred on the body, axes aligned with its
  parent (ultimately the solar system barycentric inertial axes);
- ``<Name>CentricFixed``: centred on the body, rotating with it.

A plain :class:`Planet` only tracks its centre; the fixed frame keeps the
inertial axes.  :class:`Earth` and :class:`Moon` add their body-fixed
attitude: the Earth from the ephemeris source's Earth orientation, the
Moon from the lunar libration angles.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax.typing import ArrayLike

from framekit.attitude_representations import EulerAngles, EulerSequence
from framekit.constants import OMEGA_EARTH
from framekit.environment.ephemeris import (
    EphemerisBody,
    EphemerisSource,
    state_from_ephemeris,
    tjd_from_mjd,
)
from framekit.frames.reference_frame import ReferenceFrame

SOLAR_SYSTEM_BARYCENTRIC_INERTIAL = "SolarSystemBarycentricInertial"


def set_inertial_state(frame: ReferenceFrame, position: ArrayLike, velocity: ArrayLike, time: float) -> None:
    """Write a translational state into an inertial frame: identity attitude, zero rate."""
    frame.set_state(position, velocity, time)
    frame.set_identity_attitude()
    frame.attitude_rate = jnp.zeros(3)


def set_fixed_attitude(frame: ReferenceFrame, matrix: ArrayLike, rate: ArrayLike, time: float) -> None:
    """Write a body-fixed attitude into a frame centred on its parent."""
    frame.set_state(jnp.zeros(3), jnp.zeros(3), time)
    frame.set_attitude_matrix(matrix)
    frame.attitude_rate = rate


class Planet:
    """A body with a centric inertial frame and a body-fixed frame.

    Args:
        name (str): Body name; frame names are derived from it.
        body (EphemerisBody): Ephemeris identifier.
        parent (ReferenceFrame | None): Frame the inertial frame hangs from.
            Its state is subtracted from the ephemeris state on update.
    """

    def __init__(self, name: str, body: EphemerisBody, parent: ReferenceFrame | None = None) -> None:
        self.name = name
        self.body = body
        self.parent = parent
        parent_name = parent.name if parent is not None else None
        self.inertial = ReferenceFrame(f"{name}CentricInertial", parent_name)
        self.fixed = ReferenceFrame(f"{name}CentricFixed", self.inertial.name)

    @property
    def frames(self) -> tuple[ReferenceFrame, ...]:
        """Frames owned by this body, parents first."""
        return (self.inertial, self.fixed)

    def update(self, source: EphemerisSource, mjd_tt: float) -> None:
        """Move the body to its ephemeris state at *mjd_tt*."""
        time = tjd_from_mjd(mjd_tt)
        position, velocity = state_from_ephemeris(source, self.body, mjd_tt, self.parent)
        set_inertial_state(self.inertial, position, velocity, time)
        self.update_fixed(source, mjd_tt)

    def update_fixed(self, source: EphemerisSource, mjd_tt: float) -> None:
        """Update the body-fixed frame.  A generic planet only advances its time."""
        self.fixed.time = tjd_from_mjd(mjd_tt)


class Earth(Planet):
    """The Earth, rotating at :data:`~framekit.constants.OMEGA_EARTH` about its z-axis."""

    def __init__(self, parent: ReferenceFrame | None = None) -> None:
        super().__init__("Earth", EphemerisBody.EARTH, parent)

    def update_fixed(self, source: EphemerisSource, mjd_tt: float) -> None:
        set_fixed_attitude(
            self.fixed,
            source.earth_orientation(mjd_tt),
            jnp.array([0.0, 0.0, OMEGA_EARTH]),
            tjd_from_mjd(mjd_tt),
        )


def lunar_libration_attitude(libration: ArrayLike):
    """Moon-fixed attitude and body rate from the Z-X-Z libration state.

    Args:
        libration (ArrayLike): ``[phi, theta, psi, phi_dot, theta_dot, psi_dot]``
            in rad and rad/s.

    Returns:
        tuple: ``(T, omega)``, the inertial-to-Moon-fixed transformation
            matrix and the angular velocity in Moon-fixed axes [rad/s].
    """
    lib = jnp.asarray(libration)
    phi, theta, psi = lib[0], lib[1], lib[2]
    phi_dot, theta_dot, psi_dot = lib[3], lib[4], lib[5]

    T = EulerAngles(EulerSequence.ZXZ, phi, theta, psi).to_matrix()

    sin_theta = jnp.sin(theta)
    omega = jnp.array([
        phi_dot * sin_theta * jnp.sin(psi) + theta_dot * jnp.cos(psi),
        phi_dot * sin_theta * jnp.cos(psi) - theta_dot * jnp.sin(psi),
        phi_dot * jnp.cos(theta) + psi_dot,
    ])
    return T, omega


class Moon(Planet):
    """The Moon, oriented by the lunar libration angles."""

    def __init__(self, parent: ReferenceFrame | None = None) -> None:
        super().__init__("Moon", EphemerisBody.MOON, parent)

    def update_fixed(self, source: EphemerisSource, mjd_tt: float) -> None:
        T, omega = lunar_libration_attitude(source.state(EphemerisBody.MOON_LIBRATION, mjd_tt))
        set_fixed_attitude(self.fixed, T, omega, tjd_from_mjd(mjd_tt))


class SolarSystemBarycenter:
    """Root inertial frame of the solar system, with the Sun hanging from it."""

    def __init__(self) -> None:
        self.name = SOLAR_SYSTEM_BARYCENTRIC_INERTIAL
        self.inertial = ReferenceFrame(SOLAR_SYSTEM_BARYCENTRIC_INERTIAL)
        self.sun = Planet("Sun", EphemerisBody.SUN, self.inertial)

    @property
    def frames(self) -> tuple[ReferenceFrame, ...]:
        """Frames owned by the barycenter and the Sun, parents first."""
        return (self.inertial, *self.sun.frames)

    def update(self, source: EphemerisSource, mjd_tt: float) -> None:
        position, velocity = state_from_ephemeris(source, EphemerisBody.SOLAR_SYSTEM_BARYCENTER, mjd_tt)
        set_inertial_state(self.inertial, position, velocity, tjd_from_mjd(mjd_tt))
        self.sun.update(source, mjd_tt)
