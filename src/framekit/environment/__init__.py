"""Environment models.

Celestial reference frames driven from an injected ephemeris source:

- **Ephemeris interface**: :class:`EphemerisSource` protocol and the
  conversion of ephemeris states to parent-relative frame states.
- **Bodies**: the solar system barycenter with the Sun, generic planets,
  the Earth and the Moon with their body-fixed frames.
- **Earth-Moon system**: barycentric inertial and rotating frames and the
  L2 frame.
- **Environment**: all of the above, registered in a frame tree.
"""

from .ephemeris import (
    EphemerisBody,
    EphemerisSource,
    state_from_ephemeris,
    tjd_from_mjd,
)
from .bodies import (
    SOLAR_SYSTEM_BARYCENTRIC_INERTIAL,
    Earth,
    Moon,
    Planet,
    SolarSystemBarycenter,
    lunar_libration_attitude,
)
from .earth_moon import (
    EARTH_MOON_BARYCENTRIC_INERTIAL,
    EARTH_MOON_BARYCENTRIC_ROTATING,
    EARTH_MOON_L2_ROTATING,
    EarthMoonSystem,
)
from .environment import Environment

__all__ = [
    # Ephemeris interface
    "EphemerisBody",
    "EphemerisSource",
    "state_from_ephemeris",
    "tjd_from_mjd",
    # Bodies
    "SOLAR_SYSTEM_BARYCENTRIC_INERTIAL",
    "Planet",
    "Earth",
    "Moon",
    "SolarSystemBarycenter",
    "lunar_libration_attitude",
    # Earth-Moon system
    "EARTH_MOON_BARYCENTRIC_INERTIAL",
    "EARTH_MOON_BARYCENTRIC_ROTATING",
    "EARTH_MOON_L2_ROTATING",
    "EarthMoonSystem",
    # Aggregate
    "Environment",
]
