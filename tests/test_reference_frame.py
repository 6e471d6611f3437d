"""Tests for the ReferenceFrame state container."""

import jax.numpy as jnp
import pytest

from framekit.attitude_representations import EulerAngles, EulerSequence, Quaternion, Rx, Rz
from framekit.frames import ReferenceFrame

ATOL = 1e-12


class TestConstruction:
    def test_defaults(self):
        f = ReferenceFrame("Body", "Inertial")
        assert f.name == "Body"
        assert f.parent_name == "Inertial"
        assert jnp.array_equal(f.position, jnp.zeros(3))
        assert jnp.array_equal(f.velocity, jnp.zeros(3))
        assert jnp.array_equal(f.attitude_rate, jnp.zeros(3))
        assert jnp.array_equal(f.T_parent_body, jnp.eye(3))
        assert f.attitude == Quaternion.identity()
        assert f.time == 0.0

    def test_root_has_no_parent(self):
        assert ReferenceFrame("Root").parent_name is None

    def test_float64(self):
        assert ReferenceFrame("A").position.dtype == jnp.float64


class TestTranslationalState:
    def test_setters(self):
        f = ReferenceFrame("A")
        f.position = [1.0, 2.0, 3.0]
        f.velocity = jnp.array([-1.0, 0.5, 0.0])
        assert jnp.array_equal(f.position, jnp.array([1.0, 2.0, 3.0]))
        assert jnp.array_equal(f.velocity, jnp.array([-1.0, 0.5, 0.0]))

    def test_wrong_shape_raises(self):
        f = ReferenceFrame("A")
        with pytest.raises(ValueError, match="3-vector"):
            f.position = jnp.zeros(6)
        with pytest.raises(ValueError):
            f.attitude_rate = [1.0, 2.0]

    def test_set_state(self):
        f = ReferenceFrame("A")
        f.set_state([1.0, 0.0, 0.0], [0.0, 1.0, 0.0], time=15000.25)
        assert float(f.position[0]) == 1.0
        assert float(f.velocity[1]) == 1.0
        assert f.time == 15000.25

    def test_set_state_keeps_time(self):
        f = ReferenceFrame("A")
        f.time = 3.0
        f.set_state(jnp.zeros(3), jnp.zeros(3))
        assert f.time == 3.0


class TestAttitude:
    def test_quaternion_updates_matrix(self):
        f = ReferenceFrame("A")
        q = EulerAngles(EulerSequence.ZYX, 0.3, -0.2, 0.9).to_quaternion()
        f.set_attitude_quaternion(q)
        assert f.attitude == q
        assert jnp.allclose(f.T_parent_body, q.to_matrix(), atol=ATOL)

    def test_matrix_updates_quaternion(self):
        f = ReferenceFrame("A")
        T = Rx(0.4) @ Rz(-1.3)
        f.set_attitude_matrix(T)
        assert jnp.allclose(f.T_parent_body, T, atol=ATOL)
        assert jnp.allclose(f.attitude.to_matrix(), T, atol=ATOL)
        assert float(f.attitude.scalar) >= 0.0

    def test_identity_attitude(self):
        f = ReferenceFrame("A")
        f.set_attitude_matrix(Rz(1.0))
        f.set_identity_attitude()
        assert jnp.array_equal(f.T_parent_body, jnp.eye(3))
        assert f.attitude == Quaternion.identity()

    def test_attitude_is_read_only(self):
        f = ReferenceFrame("A")
        with pytest.raises(AttributeError):
            f.attitude = Quaternion.identity()
        with pytest.raises(AttributeError):
            f.T_parent_body = jnp.eye(3)

    def test_copy_attitude_from(self):
        src = ReferenceFrame("A")
        src.set_attitude_matrix(Rz(0.2))
        src.attitude_rate = [0.0, 0.0, 1e-3]
        dst = ReferenceFrame("B")
        dst.copy_attitude_from(src)
        assert jnp.array_equal(dst.T_parent_body, src.T_parent_body)
        assert jnp.array_equal(dst.attitude.to_vector(), src.attitude.to_vector())
        assert jnp.array_equal(dst.attitude_rate, src.attitude_rate)


class TestCopy:
    def test_copy_is_independent(self):
        f = ReferenceFrame("A", "P")
        f.set_state([1.0, 2.0, 3.0], [4.0, 5.0, 6.0], time=7.0)
        f.set_attitude_matrix(Rx(0.5))
        g = f.copy()
        g.position = jnp.zeros(3)
        g.set_identity_attitude()
        assert g.name == "A" and g.parent_name == "P" and g.time == 7.0
        assert jnp.array_equal(f.position, jnp.array([1.0, 2.0, 3.0]))
        assert jnp.allclose(f.T_parent_body, Rx(0.5), atol=ATOL)


class TestStringRepresentation:
    def test_str(self):
        f = ReferenceFrame("Body", "Inertial")
        f.position = [1.0, 2.0, 3.0]
        lines = str(f).splitlines()
        assert lines[0] == "Body:"
        assert lines[1] == "   parent frame: Inertial"
        assert lines[2] == "   position: [1.000000, 2.000000, 3.000000]"
        assert lines[4].startswith("   attitude: Quaternion(s=1.000000")
        assert lines[5] == "   att rate: [0.000000, 0.000000, 0.000000]"

    def test_str_root(self):
        assert "parent frame: <None>" in str(ReferenceFrame("Root"))

    def test_repr(self):
        assert repr(ReferenceFrame("A")) == "ReferenceFrame(name='A', parent_name=None)"
