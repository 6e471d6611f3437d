"""Tests for orbit-aligned rotating frames."""

import jax
import jax.numpy as jnp
import pytest

from framekit.frames import ReferenceFrame, rotating_frame_attitude, update_rotating_frame

ATOL = 1e-12

# Moon-like barycentric state [m, m/s]
_R_MOON = jnp.array([-3.1e8, 2.2e8, 3.3e7])
_V_MOON = jnp.array([-550.0, -740.0, 60.0])


class TestRotatingFrameAttitude:
    def test_circular_equatorial(self):
        T, q, w = rotating_frame_attitude(jnp.array([2.0, 0.0, 0.0]), jnp.array([0.0, 3.0, 0.0]))
        assert jnp.allclose(T, jnp.eye(3), atol=ATOL)
        assert jnp.allclose(q.to_vector(), jnp.array([1.0, 0.0, 0.0, 0.0]), atol=ATOL)
        assert jnp.allclose(w, jnp.array([0.0, 0.0, 1.5]), atol=ATOL)

    def test_orthonormal(self):
        T, _, _ = rotating_frame_attitude(_R_MOON, _V_MOON)
        assert jnp.allclose(T @ T.T, jnp.eye(3), atol=ATOL)
        assert float(jnp.linalg.det(T)) == pytest.approx(1.0, abs=ATOL)

    def test_x_along_position(self):
        T, _, _ = rotating_frame_attitude(_R_MOON, _V_MOON)
        r_rot = T @ _R_MOON
        assert float(r_rot[0]) == pytest.approx(float(jnp.linalg.norm(_R_MOON)), rel=1e-12)
        assert abs(float(r_rot[1])) < 1e-4
        assert abs(float(r_rot[2])) < 1e-4

    def test_velocity_in_xy_plane(self):
        T, _, _ = rotating_frame_attitude(_R_MOON, _V_MOON)
        v_rot = T @ _V_MOON
        assert abs(float(v_rot[2])) < 1e-9
        assert float(v_rot[1]) > 0.0

    def test_rate_along_z(self):
        _, _, w = rotating_frame_attitude(_R_MOON, _V_MOON)
        h = jnp.cross(_R_MOON, _V_MOON)
        expected = float(jnp.linalg.norm(h) / jnp.dot(_R_MOON, _R_MOON))
        assert abs(float(w[0])) < 1e-18
        assert abs(float(w[1])) < 1e-18
        assert float(w[2]) == pytest.approx(expected, rel=1e-12)

    def test_quaternion_matches_matrix(self):
        T, q, _ = rotating_frame_attitude(_R_MOON, _V_MOON)
        assert jnp.allclose(q.to_matrix(), T, atol=ATOL)

    def test_retrograde_flips_z(self):
        T, _, w = rotating_frame_attitude(jnp.array([1.0, 0.0, 0.0]), jnp.array([0.0, -1.0, 0.0]))
        assert jnp.allclose(T[2], jnp.array([0.0, 0.0, -1.0]), atol=ATOL)
        assert float(w[2]) > 0.0

    def test_matrix_is_jittable(self):
        f = jax.jit(lambda r, v: rotating_frame_attitude(r, v)[0])
        T = f(_R_MOON, _V_MOON)
        assert jnp.allclose(T @ T.T, jnp.eye(3), atol=ATOL)


class TestUpdateRotatingFrame:
    def test_update(self):
        body = ReferenceFrame("MoonCentricInertial", "EarthMoonBarycentricInertial")
        body.set_state(_R_MOON, _V_MOON, time=16000.5)
        rot = ReferenceFrame("EarthMoonBarycentricRotating", "EarthMoonBarycentricInertial")
        rot.position = [1.0, 2.0, 3.0]

        update_rotating_frame(body, rot)

        T, _, w = rotating_frame_attitude(_R_MOON, _V_MOON)
        assert jnp.array_equal(rot.position, jnp.zeros(3))
        assert jnp.array_equal(rot.velocity, jnp.zeros(3))
        assert jnp.allclose(rot.T_parent_body, T, atol=ATOL)
        assert jnp.allclose(rot.attitude.to_matrix(), T, atol=ATOL)
        assert jnp.allclose(rot.attitude_rate, w, atol=ATOL)
        assert rot.time == 16000.5

    def test_explicit_time(self):
        body = ReferenceFrame("B")
        body.set_state([1.0, 0.0, 0.0], [0.0, 1.0, 0.0], time=1.0)
        rot = ReferenceFrame("R")
        update_rotating_frame(body, rot, time=2.0)
        assert rot.time == 2.0
