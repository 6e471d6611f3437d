"""Tests for the collinear L2 point solver and L2 frame."""

import dataclasses

import jax.numpy as jnp
import pytest

from framekit.constants import MOON_EARTH_MASS_RATIO
from framekit.errors import NumericalDivergenceError
from framekit.frames import (
    LagrangeSolverConfig,
    ReferenceFrame,
    l2_scale_factor,
    quintic_residual,
    solve_l2_distance_ratio,
    update_l2_frame,
    update_rotating_frame,
)


class TestLagrangeSolverConfig:
    def test_defaults(self):
        cfg = LagrangeSolverConfig()
        assert cfg.initial_guess == 0.2
        assert cfg.tolerance == 1e-15
        assert cfg.max_iterations == 100

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            LagrangeSolverConfig().tolerance = 1.0

    @pytest.mark.parametrize("tolerance", [0.0, -1e-12, float("nan")])
    def test_bad_tolerance(self, tolerance):
        with pytest.raises(ValueError, match="tolerance"):
            LagrangeSolverConfig(tolerance=tolerance)

    def test_bad_max_iterations(self):
        with pytest.raises(ValueError, match="max_iterations"):
            LagrangeSolverConfig(max_iterations=0)


class TestSolveL2DistanceRatio:
    def test_earth_moon(self):
        x = solve_l2_distance_ratio(MOON_EARTH_MASS_RATIO)
        assert 0.15 < x < 0.18
        assert x == pytest.approx(0.1678, abs=5e-4)

    def test_residual_small(self):
        x = solve_l2_distance_ratio(MOON_EARTH_MASS_RATIO)
        assert abs(float(quintic_residual(MOON_EARTH_MASS_RATIO, x))) < 1e-12

    def test_returns_float(self):
        assert isinstance(solve_l2_distance_ratio(MOON_EARTH_MASS_RATIO), float)

    def test_sun_earth(self):
        # Sun-Earth L2 sits about 0.01 AU beyond the Earth
        x = solve_l2_distance_ratio(3.0035e-6)
        assert 0.009 < x < 0.011
        assert abs(float(quintic_residual(3.0035e-6, x))) < 1e-12

    def test_iteration_cap_raises(self):
        with pytest.raises(NumericalDivergenceError, match="did not converge"):
            solve_l2_distance_ratio(MOON_EARTH_MASS_RATIO, LagrangeSolverConfig(max_iterations=1))

    def test_loose_tolerance_converges_early(self):
        x = solve_l2_distance_ratio(MOON_EARTH_MASS_RATIO, LagrangeSolverConfig(tolerance=1e-3))
        assert x == pytest.approx(0.1678, abs=1e-2)

    def test_divergence_is_runtime_error(self):
        with pytest.raises(RuntimeError):
            solve_l2_distance_ratio(MOON_EARTH_MASS_RATIO, LagrangeSolverConfig(max_iterations=1))


class TestL2Frame:
    def test_scale_factor(self):
        x = solve_l2_distance_ratio(MOON_EARTH_MASS_RATIO)
        k = l2_scale_factor(MOON_EARTH_MASS_RATIO, x)
        assert k > 1.0
        assert k == pytest.approx(1.0 + x * (1.0 + MOON_EARTH_MASS_RATIO))

    def test_update_l2_frame(self):
        moon = ReferenceFrame("MoonCentricInertial", "EarthMoonBarycentricInertial")
        moon.set_state([3.8e8, 0.0, 0.0], [0.0, 1.0e3, 0.0], time=100.0)
        rotating = ReferenceFrame("EarthMoonBarycentricRotating", "EarthMoonBarycentricInertial")
        update_rotating_frame(moon, rotating)
        l2 = ReferenceFrame("EarthMoonL2Rotating", "EarthMoonBarycentricInertial")

        update_l2_frame(moon, rotating, l2, 1.17)

        assert jnp.allclose(l2.position, jnp.array([3.8e8 * 1.17, 0.0, 0.0]))
        assert jnp.allclose(l2.velocity, jnp.array([0.0, 1.17e3, 0.0]))
        assert jnp.array_equal(l2.T_parent_body, rotating.T_parent_body)
        assert jnp.array_equal(l2.attitude.to_vector(), rotating.attitude.to_vector())
        assert jnp.array_equal(l2.attitude_rate, rotating.attitude_rate)
        assert l2.time == 100.0

    def test_update_l2_frame_explicit_time(self):
        moon = ReferenceFrame("M")
        moon.set_state([1.0, 0.0, 0.0], [0.0, 1.0, 0.0])
        rotating = ReferenceFrame("R")
        l2 = ReferenceFrame("L2")
        update_l2_frame(moon, rotating, l2, 2.0, time=5.0)
        assert l2.time == 5.0
