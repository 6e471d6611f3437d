"""Environment aggregate: every celestial frame driven from one ephemeris.

The :class:`Environment` owns the solar system barycenter (with the Sun),
the Earth-Moon system and Mars, and registers all their frames in a
:class:`~framekit.frames.FrameTree` so callers can look frames up by name
or express one frame in another.
"""

from __future__ import annotations

import logging

from framekit.environment.bodies import Planet, SolarSystemBarycenter
from framekit.environment.earth_moon import EarthMoonSystem
from framekit.environment.ephemeris import EphemerisBody, EphemerisSource, tjd_from_mjd
from framekit.frames.lagrange import LagrangeSolverConfig
from framekit.frames.reference_frame import ReferenceFrame
from framekit.frames.tree import FrameTree

logger = logging.getLogger(__name__)


class Environment:
    """Solar system, Earth-Moon system and Mars frames.

    Args:
        source (EphemerisSource): Ephemeris used for every update.
        solver_config (LagrangeSolverConfig | None): Settings for the
            Earth-Moon L2 solve.

    Examples:
        ```python
        env = Environment(source)
        env.initialize(mjd_tt=57124.83333333349)
        env.update(mjd_tt=57124.84)
        moon_in_earth = env.tree.state_relative_to("MoonCentricInertial", "EarthCentricInertial")
        ```
    """

    def __init__(self, source: EphemerisSource, solver_config: LagrangeSolverConfig | None = None) -> None:
        self.source = source
        self.solar_system_barycenter = SolarSystemBarycenter()
        self.earth_moon_system = EarthMoonSystem(self.solar_system_barycenter.inertial, solver_config=solver_config)
        self.mars = Planet("Mars", EphemerisBody.MARS, self.solar_system_barycenter.inertial)

        self.tree = FrameTree()
        self._models = {}
        for model in (self.solar_system_barycenter, self.earth_moon_system, self.mars):
            for frame in model.frames:
                self.tree.add(frame)
                self._models[frame.name] = model

        self.time: float | None = None

    @property
    def frames(self) -> tuple[ReferenceFrame, ...]:
        """All frames, parents before children."""
        return (
            *self.solar_system_barycenter.frames,
            *self.earth_moon_system.frames,
            *self.mars.frames,
        )

    def frame(self, name: str) -> ReferenceFrame:
        """Look up a frame by name.

        Raises:
            FrameTreeError: If no frame has that name.
        """
        return self.tree.get(name)

    def initialize(self, mjd_tt: float) -> None:
        """Solve the Earth-Moon L2 point and bring every frame to *mjd_tt*."""
        self.earth_moon_system.solve_l2()
        self.update(mjd_tt)
        logger.debug("Environment initialized at TJD %.9f with %d frames", self.time, len(self.tree))

    def update(self, mjd_tt: float) -> None:
        """Bring every frame to *mjd_tt*.

        Models are updated in the frame tree's update order, each the first
        time one of its frames comes up, so every parent frame is current
        before its children are computed.

        Raises:
            RuntimeError: If called before :meth:`initialize`.
        """
        updated = set()
        for name in self.tree.update_order():
            model = self._models[name]
            if model in updated:
                continue
            model.update(self.source, mjd_tt)
            updated.add(model)
        self.time = tjd_from_mjd(mjd_tt)
        logger.debug("Environment updated to TJD %.9f", self.time)

    def __str__(self) -> str:
        header = f"Frame timestamp: {self.solar_system_barycenter.inertial.time}"
        return "\n\n".join([header, *(str(self.tree.get(name)) for name in self.tree.update_order())])
