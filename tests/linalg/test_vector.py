from math import pi, sqrt

import numpy as np
import pytest

from dotmath.linalg import Vector2, Vector3, Vector4

from .utils import vector_equals


eps = 0.0001


# VECTOR2
def test_vector2_basics():
    v = Vector2(3, 4)
    assert v.magnitude == 5
    assert v.magnitude_squared == 25
    assert v.dot(Vector2(1, 2)) == 11
    assert v.cross(Vector2(1, 2)) == 2
    assert v.distance(Vector2(0, 0)) == 5
    assert v.plus(Vector2(1, 1)) == Vector2(4, 5)
    assert v.minus(Vector2(1, 1)) == Vector2(2, 3)
    assert v.negated() == Vector2(-3, -4)
    assert v.perpendicular() == Vector2(-4, 3)
    assert v.component_times(Vector2(2, 3)) == Vector2(6, 12)
    assert v.average(Vector2(5, 6)) == Vector2(4, 5)
    assert v.to_vector3() == Vector3(3, 4, 0)


def test_vector2_normalize():
    v = Vector2(3, 4)
    assert v.normalized() == Vector2(0.6, 0.8)
    assert v == Vector2(3, 4)
    assert v.normalize() is v
    assert v == Vector2(0.6, 0.8)
    assert abs(Vector2(3, 4).with_magnitude(10).magnitude - 10) < eps

    with pytest.raises(ValueError):
        Vector2().normalized()


def test_vector2_angles():
    assert abs(Vector2(0, 2).angle - pi / 2) < eps
    assert abs(Vector2(1, 0).angle_between(Vector2(0, 3)) - pi / 2) < eps
    assert vector_equals(Vector2(1, 0).rotated(pi / 2), Vector2(0, 1))
    assert vector_equals(Vector2.from_polar(2, pi / 2), Vector2(0, 2))


def test_vector2_mutators():
    v = Vector2(1, 2)
    assert v.add(Vector2(1, 1)) is v
    assert v == Vector2(2, 3)
    v.subtract(Vector2(2, 2)).multiply_scalar(3)
    assert v == Vector2(0, 3)
    v.negate()
    assert v == Vector2(0, -3)
    v.set_xy(5, 6)
    assert (v.x, v.y) == (5, 6)


def test_vector2_constants_are_frozen():
    with pytest.raises(TypeError, match=r"Cannot modify immutable Vector2 \(add\)"):
        Vector2.ZERO.add(Vector2(1, 1))
    with pytest.raises(TypeError):
        Vector2.X_UNIT.x = 2
    assert Vector2.ZERO == Vector2(0, 0)
    assert Vector2.Y_UNIT.copy().set_xy(3, 3) == Vector2(3, 3)


def test_vector2_equality():
    assert Vector2(1, 2) == Vector2(1, 2)
    assert Vector2(1, 2) != Vector2(1, 2.001)
    assert Vector2(1, 2).equals_epsilon(Vector2(1, 2.00001), eps)
    assert Vector2(1, 2) != (1, 2)
    assert not Vector2(float("inf"), 0).is_finite()


# VECTOR3
def test_vector3_basics():
    v = Vector3(1, 2, 2)
    assert v.magnitude == 3
    assert v.dot(Vector3(1, 1, 1)) == 5
    assert Vector3.X_UNIT.cross(Vector3.Y_UNIT) == Vector3.Z_UNIT
    assert Vector3.Y_UNIT.cross(Vector3.X_UNIT) == Vector3(0, 0, -1)
    assert v.plus(Vector3(1, 1, 1)) == Vector3(2, 3, 3)
    assert v.minus(Vector3(1, 1, 1)) == Vector3(0, 1, 1)
    assert v.times_scalar(2) == Vector3(2, 4, 4)
    assert v.divided_scalar(2) == Vector3(0.5, 1, 1)
    assert v.distance(Vector3(1, 2, 0)) == 2
    assert v.blend(Vector3(3, 2, 2), 0.5) == Vector3(2, 2, 2)
    assert v.to_vector2() == Vector2(1, 2)
    assert v.to_vector4() == Vector4(1, 2, 2, 1)
    assert abs(Vector3.X_UNIT.angle_between(Vector3(0, 0, 5)) - pi / 2) < eps


def test_vector3_normalize():
    v = Vector3(0, 3, 4)
    assert v.normalized() == Vector3(0, 0.6, 0.8)
    v.normalize()
    assert v == Vector3(0, 0.6, 0.8)

    with pytest.raises(ValueError):
        Vector3().normalize()


def test_vector3_slerp():
    start = Vector3.X_UNIT
    end = Vector3.Y_UNIT
    assert Vector3.slerp(start, end, 0) == start
    assert vector_equals(Vector3.slerp(start, end, 1), end)
    half = Vector3.slerp(start, end, 0.5)
    assert vector_equals(half, Vector3(sqrt(0.5), sqrt(0.5), 0))
    assert abs(half.magnitude - 1) < eps

    with pytest.raises(ValueError):
        Vector3.slerp(start, start.negated(), 0.5)


def test_vector3_constants_are_frozen():
    for v in (Vector3.ZERO, Vector3.X_UNIT, Vector3.Y_UNIT, Vector3.Z_UNIT):
        assert v.is_immutable()
        with pytest.raises(TypeError):
            v.set_xyz(1, 2, 3)
        with pytest.raises(TypeError):
            v.normalize()
    assert not Vector3.Z_UNIT.copy().is_immutable()


def test_vector3_numpy_and_state():
    v = Vector3(1, 2, 3)
    assert np.array_equal(np.asarray(v), [1, 2, 3])
    assert Vector3.from_numpy(v.to_numpy()) == v
    assert Vector3.from_state_object(v.to_state_object()) == v
    assert v.to_numpy(np.float32).dtype == np.float32


# VECTOR4
def test_vector4():
    v = Vector4(1, 2, 3, 4)
    assert v.magnitude_squared == 30
    assert v.dot(Vector4(1, 1, 1, 1)) == 10
    assert v.plus(Vector4(1, 1, 1, 1)) == Vector4(2, 3, 4, 5)
    assert v.minus(Vector4(1, 1, 1, 1)) == Vector4(0, 1, 2, 3)
    assert v.negated() == Vector4(-1, -2, -3, -4)
    assert v.to_vector3() == Vector3(1, 2, 3)
    assert Vector4.from_vector3(Vector3(1, 2, 3)) == Vector4(1, 2, 3, 1)
    assert Vector4.from_vector3(Vector3(1, 2, 3), 0).w == 0
    assert abs(v.normalized().magnitude - 1) < eps
    assert Vector4.from_state_object(v.to_state_object()) == v
    assert Vector4.from_numpy(v.to_numpy()) == v

    with pytest.raises(ValueError):
        Vector4.ZERO.normalized()
    with pytest.raises(TypeError):
        Vector4.ZERO.set_xyzw(1, 1, 1, 1)
