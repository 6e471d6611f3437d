"""
The `constants` module defines the unit, time and physical constants used by the reference-frame models.
"""

# Unit Constants
"""
Constant to convert kilometers to meters. Ephemeris sources report position
in *km* and velocity in *km/s*; frames carry SI units. Units: *m/km*
"""
KM2M = 1000.0

# Time Constants

"""
Offset between Modified Julian Date and Truncated Julian Date. Frame time
stamps are TJD, i.e. ``MJD(TT) - MJD_TJD_OFFSET``. Units: *days*
"""
MJD_TJD_OFFSET = 40000.0

# Earth Constants
"""
Earth axial rotation rate. [rad/s]

References:

1. D. Vallado, *Fundamentals of Astrodynamics and Applications (4th Ed.)*, p. 222, 2010
"""
OMEGA_EARTH = 7.292115146706979e-5  # [rad/s] Taken from Vallado 4th Ed page 222

# Moon Constants
"""
Ratio of the mass of the Moon to the mass of the Earth. [dimensionless]

References:

1. D. McCarthy, *IERS Conventions (1996)*, IERS Technical Note 21, 1996.
"""
MOON_EARTH_MASS_RATIO = 0.012300034  # IERS 1996 value
