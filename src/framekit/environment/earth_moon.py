"""Earth-Moon system environment model.

Maintains the frames of the two-body Earth-Moon system:

- ``EarthMoonBarycentricInertial``: centred on the Earth-Moon barycenter,
  inertial axes;
- ``EarthMoonBarycentricRotating``: centred on the barycenter, x toward
  the Moon, z along the Moon's orbital angular momentum;
- the Earth and Moon centric inertial and fixed frames;
- ``EarthMoonL2Rotating``: centred on the L2 Lagrange point, with the axes
  and rate of the barycentric rotating frame.

Frames are updated in dependency order: barycenter, Earth, Moon, rotating
frame (from the Moon's barycentric state), then L2.
"""

from __future__ import annotations

import logging

from framekit.constants import MOON_EARTH_MASS_RATIO
from framekit.environment.bodies import Earth, Moon, set_inertial_state
from framekit.environment.ephemeris import (
    EphemerisBody,
    EphemerisSource,
    state_from_ephemeris,
    tjd_from_mjd,
)
from framekit.frames.lagrange import (
    LagrangeSolverConfig,
    l2_scale_factor,
    solve_l2_distance_ratio,
    update_l2_frame,
)
from framekit.frames.reference_frame import ReferenceFrame
from framekit.frames.rotating import update_rotating_frame

logger = logging.getLogger(__name__)

EARTH_MOON_BARYCENTRIC_INERTIAL = "EarthMoonBarycentricInertial"
EARTH_MOON_BARYCENTRIC_ROTATING = "EarthMoonBarycentricRotating"
EARTH_MOON_L2_ROTATING = "EarthMoonL2Rotating"


class EarthMoonSystem:
    """Frames of the Earth-Moon system and its L2 point.

    :meth:`initialize` (or :meth:`solve_l2`) must be called once before
    :meth:`update`; it solves for the L2 distance ratio, which depends only
    on the mass ratio.

    Args:
        parent (ReferenceFrame | None): Frame the barycentric inertial frame
            hangs from, normally the solar system barycentric frame.
        mass_ratio (float): Moon-to-Earth mass ratio.
        solver_config (LagrangeSolverConfig | None): L2 solver settings.
    """

    def __init__(
        self,
        parent: ReferenceFrame | None = None,
        mass_ratio: float = MOON_EARTH_MASS_RATIO,
        solver_config: LagrangeSolverConfig | None = None,
    ) -> None:
        self.parent = parent
        self.mass_ratio = mass_ratio
        self.solver_config = solver_config

        parent_name = parent.name if parent is not None else None
        self.barycenter_inertial = ReferenceFrame(EARTH_MOON_BARYCENTRIC_INERTIAL, parent_name)
        self.barycenter_rotating = ReferenceFrame(EARTH_MOON_BARYCENTRIC_ROTATING, EARTH_MOON_BARYCENTRIC_INERTIAL)
        self.earth = Earth(self.barycenter_inertial)
        self.moon = Moon(self.barycenter_inertial)
        self.l2_frame = ReferenceFrame(EARTH_MOON_L2_ROTATING, EARTH_MOON_BARYCENTRIC_INERTIAL)

        self.l2_distance_ratio: float | None = None
        self.l2_scale_factor: float | None = None

    @property
    def initialized(self) -> bool:
        return self.l2_scale_factor is not None

    @property
    def frames(self) -> tuple[ReferenceFrame, ...]:
        """Frames of the system, parents first."""
        return (
            self.barycenter_inertial,
            self.barycenter_rotating,
            *self.earth.frames,
            *self.moon.frames,
            self.l2_frame,
        )

    def solve_l2(self) -> None:
        """Solve for the L2 distance ratio and scale factor.

        Raises:
            NumericalDivergenceError: If the L2 solve does not converge.
        """
        self.l2_distance_ratio = solve_l2_distance_ratio(self.mass_ratio, self.solver_config)
        self.l2_scale_factor = l2_scale_factor(self.mass_ratio, self.l2_distance_ratio)
        logger.debug(
            "Earth-Moon L2 distance ratio %.12f, scale factor %.12f",
            self.l2_distance_ratio,
            self.l2_scale_factor,
        )

    def initialize(self, source: EphemerisSource, mjd_tt: float) -> None:
        """Solve for the L2 point and bring every frame to *mjd_tt*."""
        self.solve_l2()
        self.update(source, mjd_tt)

    def update(self, source: EphemerisSource, mjd_tt: float) -> None:
        """Bring every frame of the system to *mjd_tt*.

        Raises:
            RuntimeError: If the L2 point has not been solved.
        """
        if not self.initialized:
            raise RuntimeError("EarthMoonSystem.update called before initialize")

        time = tjd_from_mjd(mjd_tt)

        position, velocity = state_from_ephemeris(
            source, EphemerisBody.EARTH_MOON_BARYCENTER, mjd_tt, self.parent
        )
        set_inertial_state(self.barycenter_inertial, position, velocity, time)

        self.earth.update(source, mjd_tt)
        self.moon.update(source, mjd_tt)

        update_rotating_frame(self.moon.inertial, self.barycenter_rotating, time)
        update_l2_frame(self.moon.inertial, self.barycenter_rotating, self.l2_frame, self.l2_scale_factor, time)
