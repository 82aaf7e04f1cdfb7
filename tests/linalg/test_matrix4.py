from math import pi, sqrt

import numpy as np
import pylinalg as la
import pytest

from dotmath import MatrixType
from dotmath.linalg import Matrix4, Vector3, Vector4

from .utils import matrix_equals, vector_equals


eps = 0.0001


def random_matrix():
    return Matrix4.from_numpy(np.random.uniform(-1, 1, (4, 4)))


# INSTANCING
def test_instancing():
    a = Matrix4()
    assert a.get_determinant() == 1
    assert a.type == MatrixType.IDENTITY

    b = Matrix4(0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15)
    assert b.entries == [0, 4, 8, 12, 1, 5, 9, 13, 2, 6, 10, 14, 3, 7, 11, 15]
    assert b.m03() == 3
    assert b.m30() == 12
    assert b.type == MatrixType.OTHER

    assert not matrix_equals(a, b)

    with pytest.raises(ValueError):
        Matrix4(1, 2, 3)


def test_column_major():
    b = Matrix4(*range(16))
    c = Matrix4().column_major(*b.entries)
    assert c == b

    with pytest.raises(ValueError):
        Matrix4().column_major(1, 2)


def test_set_entry_infers_type():
    m = Matrix4.scaling(2)
    m.set_entry(3, 2, 1)
    assert m.m32() == 1
    assert m.type == MatrixType.OTHER
    m.set_entry(3, 2, 0)
    assert m.type == MatrixType.AFFINE


# PYLINALG LAYOUT
def test_to_numpy_matches_pylinalg():
    m = Matrix4.translation(1, 2, 3)
    expected = la.mat_compose((1, 2, 3), (0, 0, 0, 1), (1, 1, 1))
    assert np.allclose(m.to_numpy(), expected)
    assert np.allclose(np.asarray(m), expected)

    n = Matrix4.from_numpy(expected)
    assert matrix_equals(n, m)
    assert n.type == MatrixType.AFFINE

    with pytest.raises(ValueError):
        Matrix4.from_numpy(np.eye(3))


def test_vec_transform_matches_pylinalg():
    m = Matrix4.translation(1, 2, 3).times_matrix(
        Matrix4.rotation_axis_angle(Vector3(0, 1, 0), 0.6)
    )
    v = Vector3(4, -5, 6)
    expected = la.vec_transform(v.to_numpy(), m.to_numpy())
    assert np.allclose(m.times_vector3(v).to_numpy(), expected)


# ARITHMETIC
def test_determinant():
    m = random_matrix()
    assert abs(m.get_determinant() - np.linalg.det(m.to_numpy())) < eps
    assert Matrix4.scaling(2, 3, 4).determinant == 24


def test_times_matrix():
    a = random_matrix()
    b = random_matrix()
    product = a.times_matrix(b)
    assert product.type == MatrixType.OTHER
    assert np.allclose(product.to_numpy(), a.to_numpy() @ b.to_numpy())


def test_plus_minus_negate():
    a = random_matrix()
    b = random_matrix()
    assert np.allclose(a.plus(b).to_numpy(), a.to_numpy() + b.to_numpy())
    assert np.allclose(a.minus(b).to_numpy(), a.to_numpy() - b.to_numpy())
    assert np.allclose(a.negated().to_numpy(), -a.to_numpy())


def test_times_vector():
    m = Matrix4.translation(1, 2, 3)
    v = Vector3(4, 5, 6)
    assert m.times_vector3(v) == Vector3(5, 7, 9)
    assert m.times_relative_vector3(v) == v
    assert m.times_vector4(Vector4(4, 5, 6, 0)) == Vector4(4, 5, 6, 0)
    assert m.times_vector4(Vector4(4, 5, 6, 1)) == Vector4(5, 7, 9, 1)
    # The argument is left alone
    assert v == Vector3(4, 5, 6)


def test_times_relative_vector3():
    m = Matrix4.translation(1, 2, 3).times_matrix(
        Matrix4.rotation_axis_angle(Vector3(1, 0, 0), 0.4)
    )
    v = Vector3(1, -2, 3)
    expected = m.times_vector3(v).minus(m.times_vector3(Vector3()))
    assert vector_equals(m.times_relative_vector3(v), expected)

    a = random_matrix()
    expected = a.to_numpy() @ np.array([1, -2, 3, 0])
    assert np.allclose(a.times_relative_vector3(v).to_numpy(), expected[:3])


def test_times_transpose_vector():
    a = random_matrix()
    v = Vector3(1, -2, 3)
    expected = a.to_numpy().T @ np.array([1, -2, 3, 1])
    assert np.allclose(a.times_transpose_vector3(v).to_numpy(), expected[:3])
    assert np.allclose(
        a.times_transpose_vector4(Vector4(1, -2, 3, 1)).to_numpy(), expected
    )


# TYPE TAGS
def test_translation_shortcut():
    m = Matrix4.translation(1, 2, 3).times_matrix(Matrix4.translation(4, 5, 6))
    assert m.type == MatrixType.TRANSLATION
    assert m == Matrix4.translation(5, 7, 9)
    assert m.get_translation() == Vector3(5, 7, 9)


def test_scaling_shortcut():
    m = Matrix4.scaling(1, 2, 3).times_matrix(Matrix4.scaling(4, 5, 6))
    assert m.type == MatrixType.SCALING
    assert m == Matrix4.scaling(4, 10, 18)

    # A diagonal with a homogeneous entry other than 1
    a = Matrix4(2, 0, 0, 0, 0, 3, 0, 0, 0, 0, 4, 0, 0, 0, 0, 5, type=MatrixType.SCALING)
    m = a.times_matrix(Matrix4.scaling(2, 2, 2))
    assert m.type == MatrixType.SCALING
    assert np.allclose(m.to_numpy(), np.diag([4, 6, 8, 5]))

    t = Matrix4.translation(1, 2, 3)
    assert np.allclose(a.times_matrix(t).to_numpy(), a.to_numpy() @ t.to_numpy())
    assert np.allclose(t.times_matrix(a).to_numpy(), t.to_numpy() @ a.to_numpy())


def test_get_translation():
    m = Matrix4.translation_from_vector(Vector3(1, 2, 3))
    assert m.get_translation() == Vector3(1, 2, 3)
    assert Matrix4.rotation_z(0.5).times_matrix(m).get_translation() != Vector3(1, 2, 3)
    # The name belongs to the factory
    assert not isinstance(Matrix4.translation, property)
    assert m.translation(4, 5, 6) == Matrix4.translation(4, 5, 6)


def test_affine_product():
    t = Matrix4.translation(1, 2, 3)
    r = Matrix4.rotation_z(0.5)
    m = t.times_matrix(r)
    assert m.type == MatrixType.AFFINE
    assert np.allclose(m.to_numpy(), t.to_numpy() @ r.to_numpy())


def test_identity_short_circuit():
    m = Matrix4.scaling(2)
    assert Matrix4().times_matrix(m) is m
    assert m.times_matrix(Matrix4.IDENTITY) is m


# INVERSION
def test_invert_identity():
    m = Matrix4()
    assert m.inverted() is m


def test_invert_translation():
    m = Matrix4.translation(1, -2, 3).inverted()
    assert m.type == MatrixType.TRANSLATION
    assert m == Matrix4.translation(-1, 2, -3)


def test_invert_scaling():
    m = Matrix4.scaling(2, 4, 8).inverted()
    assert m.type == MatrixType.SCALING
    assert m == Matrix4.scaling(0.5, 0.25, 0.125)

    with pytest.raises(ValueError, match="determinant is zero"):
        Matrix4.scaling(1, 0, 1).invert()


def test_invert_affine():
    m = Matrix4.translation(1, 2, 3).times_matrix(
        Matrix4.rotation_axis_angle(Vector3(0, 0.6, 0.8), 1.2)
    )
    inverse = m.inverted()
    assert inverse.type == MatrixType.AFFINE
    assert (inverse.m30(), inverse.m31(), inverse.m32(), inverse.m33()) == (0, 0, 0, 1)
    assert np.allclose(inverse.to_numpy(), la.mat_inverse(m.to_numpy()))


def test_invert_other():
    m = random_matrix()
    inverse = m.inverted()
    assert np.allclose(inverse.to_numpy(), la.mat_inverse(m.to_numpy()))
    assert matrix_equals(m.times_matrix(inverse), Matrix4())


def test_invert_singular():
    m = Matrix4(1, 2, 3, 4, 2, 4, 6, 8, 0, 0, 1, 0, 0, 0, 0, 1)
    with pytest.raises(ValueError):
        m.inverted()


def test_transpose():
    m = random_matrix()
    assert np.allclose(m.transposed().to_numpy(), m.to_numpy().T)
    assert Matrix4.scaling(2).transposed().type == MatrixType.SCALING
    assert Matrix4.translation(1, 2, 3).transposed().type == MatrixType.OTHER


# ROTATIONS
def test_rotation_axis_angle_matches_pylinalg():
    axis = Vector3(1, 2, 3).normalized()
    m = Matrix4.rotation_axis_angle(axis, 0.7)
    assert m.type == MatrixType.AFFINE
    expected = la.mat_from_quat(la.quat_from_axis_angle(axis.to_numpy(), 0.7))
    assert np.allclose(m.to_numpy(), expected)


def test_axis_rotations():
    for axis, func in [
        (Vector3.X_UNIT, Matrix4.rotation_x),
        (Vector3.Y_UNIT, Matrix4.rotation_y),
        (Vector3.Z_UNIT, Matrix4.rotation_z),
    ]:
        assert matrix_equals(func(0.3), Matrix4.rotation_axis_angle(axis, 0.3))
        assert func(0.3).type == MatrixType.AFFINE

    m = Matrix4.rotation_x(pi / 2)
    assert m.times_vector3(Vector3(0, 1, 0)) == Vector3(0, 0, 1)


# QUERIES
def test_get_scale_vector():
    s = Matrix4.scaling(2, 3, 4).get_scale_vector()
    assert vector_equals(s, Vector3(sqrt(5), sqrt(10), sqrt(17)))


def test_is_queries():
    assert Matrix4.translation(1, 2, 3).is_affine()
    assert not Matrix4(*range(16)).is_affine()
    assert Matrix4().is_fast_identity()
    assert Matrix4(*Matrix4.IDENTITY._rows()).is_identity()
    assert not Matrix4(1, 0, 0, float("inf"), 0, 1, 0, 0, 0, 0, 1, 0, 0, 0, 0, 1).is_finite()


def test_glu_perspective():
    m = Matrix4.glu_perspective(pi / 4, 2, 0.1, 100)
    assert m.type == MatrixType.OTHER
    assert m.m32() == -1
    assert m.m33() == 0
    assert abs(m.m11() - 1) < eps
    assert abs(m.m00() - 0.5) < eps


def test_css_transform():
    css = Matrix4.translation(1, 2, 3).css_transform
    assert css.startswith("matrix3d(1.00000000000000000000,0.0")
    assert css.count(",") == 15
    assert "e" not in Matrix4.scaling(1e-20).get_css_transform().replace("matrix3d", "")


# IMMUTABLE CONSTANTS
def test_frozen_identity():
    with pytest.raises(TypeError, match=r"Cannot modify immutable Matrix4 \(set_to_scale\)"):
        Matrix4.IDENTITY.set_to_scale(2)
    with pytest.raises(TypeError):
        Matrix4.IDENTITY.multiply_matrix(Matrix4.scaling(2))
    assert Matrix4.IDENTITY.is_identity()


def test_state_object():
    m = Matrix4.translation(1, 2, 3)
    n = Matrix4.from_state_object(m.to_state_object())
    assert n == m
    assert n.type == MatrixType.TRANSLATION

    with pytest.raises(ValueError):
        Matrix4.from_state_object({"entries": [1], "type": "OTHER"})


def test_set_to_affine():
    m = Matrix4.affine(1, 0, 0, 5, 0, 1, 0, 6, 0, 0, 1, 7)
    assert m.type == MatrixType.AFFINE
    assert m.get_translation() == Vector3(5, 6, 7)

    with pytest.raises(ValueError):
        Matrix4.affine(1, 2, 3)


def test_array_interop():
    m = Matrix4(*range(16))
    out = m.copy_to_array(np.zeros(16))
    assert list(out) == m.entries
    assert Matrix4().set_array(out) == m
