"""Collinear L2 Lagrange point of a two-body system.

For a primary and secondary with mass ratio ``alpha = m2 / m1``, the
distance of L2 beyond the secondary, as a fraction ``x`` of the
primary-secondary separation, is the real root of the quintic

    (1 + a) x^5 + (3 + 2a) x^4 + (3 + a) x^3 - a x^2 - 2a x - a = 0

which is found by Newton-Raphson iteration from ``x = 0.2``.

Measured from the system barycenter, the L2 point then lies along the
secondary's barycentric position at ``1 + x (1 + alpha)`` times its
distance.  The same factor scales the velocity, so the L2 frame co-rotates
with the secondary.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import jax
import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from framekit.config import get_dtype
from framekit.errors import NumericalDivergenceError
from framekit.frames.reference_frame import ReferenceFrame

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LagrangeSolverConfig:
    """Settings for the Newton-Raphson L2 solve.

    Args:
        initial_guess: Starting distance ratio.
        tolerance: Iteration stops once ``|dx|`` is at or below this.
        max_iterations: Iteration cap; reaching it without meeting the
            tolerance is a divergence.
    """

    initial_guess: float = 0.2
    tolerance: float = 1e-15
    max_iterations: int = 100

    def __post_init__(self) -> None:
        if not self.tolerance > 0.0:
            raise ValueError(f"tolerance must be positive, got {self.tolerance}")
        if self.max_iterations < 1:
            raise ValueError(f"max_iterations must be at least 1, got {self.max_iterations}")


def _quintic_coefficients(alpha: ArrayLike) -> Array:
    """Coefficients of the L2 quintic, highest power first."""
    a = jnp.asarray(alpha, dtype=get_dtype())
    return jnp.array([1.0 + a, 3.0 + 2.0 * a, 3.0 + a, -a, -2.0 * a, -a])


def quintic_residual(alpha: ArrayLike, x: ArrayLike) -> Array:
    """Value of the L2 quintic at *x*; zero at the L2 distance ratio.

    Args:
        alpha: Secondary-to-primary mass ratio.
        x: Candidate distance ratio.

    Returns:
        jax.Array: Polynomial residual.
    """
    return jnp.polyval(_quintic_coefficients(alpha), jnp.asarray(x, dtype=get_dtype()))


def solve_l2_distance_ratio(alpha: float, config: LagrangeSolverConfig | None = None) -> float:
    """Solve for the L2 distance ratio by Newton-Raphson.

    The iteration runs inside ``jax.lax.while_loop``; convergence is checked
    on the concrete result, so this function is not itself traceable.

    Args:
        alpha: Secondary-to-primary mass ratio, e.g.
            :data:`~framekit.constants.MOON_EARTH_MASS_RATIO`.
        config: Solver settings. Default: ``LagrangeSolverConfig()``.

    Returns:
        float: Distance of L2 beyond the secondary as a fraction of the
            primary-secondary separation.

    Raises:
        NumericalDivergenceError: If the iterate becomes non-finite (for
            example on a vanishing derivative) or the iteration cap is
            reached before ``|dx|`` falls to the tolerance.

    Example:
        >>> from framekit.constants import MOON_EARTH_MASS_RATIO
        >>> from framekit.frames import solve_l2_distance_ratio
        >>> x = solve_l2_distance_ratio(MOON_EARTH_MASS_RATIO)
        >>> 0.16 < x < 0.17
        True
    """
    if config is None:
        config = LagrangeSolverConfig()

    _float = get_dtype()
    coeffs = _quintic_coefficients(alpha)
    dcoeffs = jnp.polyder(coeffs)
    tol = _float(config.tolerance)

    def cond(state):
        x, dx, i = state
        return (jnp.abs(dx) > tol) & (i < config.max_iterations) & jnp.isfinite(x)

    def body(state):
        x, _, i = state
        dx = -jnp.polyval(coeffs, x) / jnp.polyval(dcoeffs, x)
        return (x + dx, dx, i + 1)

    # dx starts at 1 to force the first iteration
    init_state = (_float(config.initial_guess), _float(1.0), jnp.int32(0))
    x, dx, iterations = jax.lax.while_loop(cond, body, init_state)

    x = float(x)
    dx = float(dx)
    iterations = int(iterations)

    if not (math.isfinite(x) and math.isfinite(dx)):
        raise NumericalDivergenceError(
            f"L2 solve for alpha={alpha} left the finite range after {iterations} iterations"
        )
    if abs(dx) > config.tolerance:
        raise NumericalDivergenceError(
            f"L2 solve for alpha={alpha} did not converge in {config.max_iterations} "
            f"iterations (last step {dx:.3e})"
        )

    logger.debug("L2 distance ratio %.15f for alpha=%s after %d iterations", x, alpha, iterations)
    return x


def l2_scale_factor(alpha: float, x: float) -> float:
    """Factor scaling the secondary's barycentric state to the L2 point: ``1 + x (1 + alpha)``."""
    return 1.0 + x * (1.0 + alpha)


def update_l2_frame(
    secondary: ReferenceFrame,
    rotating: ReferenceFrame,
    l2_frame: ReferenceFrame,
    scale_factor: float,
    time: float | None = None,
) -> None:
    """Place *l2_frame* at the L2 point and align it with the rotating frame.

    *secondary* and *l2_frame* must share the barycentric inertial frame as
    parent; *rotating* is the barycentric rotating frame.

    Args:
        secondary (ReferenceFrame): Secondary body state about the barycenter.
        rotating (ReferenceFrame): Barycentric rotating frame.
        l2_frame (ReferenceFrame): Frame to update in place.
        scale_factor (float): Output of :func:`l2_scale_factor`.
        time (float | None): Time stamp [TJD]; ``None`` copies the rotating frame's time.
    """
    l2_frame.position = secondary.position * scale_factor
    l2_frame.velocity = secondary.velocity * scale_factor
    l2_frame.copy_attitude_from(rotating)
    l2_frame.time = rotating.time if time is None else float(time)
