from math import atan2, isfinite, sqrt

import numpy as np

from ..utils.enums import MatrixType
from .utils import MACHINE_EPSILON, Freezable, cos_sin, mutator
from .vector2 import Vector2
from .vector3 import Vector3


__all__ = ["Matrix3"]


_IDENTITY_ENTRIES = (1, 0, 0, 0, 1, 0, 0, 0, 1)


class Matrix3(Freezable):
    """A 3x3 matrix, usable as a homogeneous 2D transform or a 3D linear map.

    Entries are stored in column-major order. The ``type`` tag tells which
    shortcuts are valid for this matrix, see
    :class:`dotmath.utils.enums.MatrixType`. Every change of the entries goes
    through :meth:`row_major`, which infers ``AFFINE`` or ``OTHER`` unless a
    type is given explicitly.

    Parameters
    ----------
    *values : float
        Either nothing (the identity) or all nine entries in row-major order.
    type : MatrixType
        The type of the given entries. Inferred when omitted.
    """

    __slots__ = ("entries", "type", "_frozen")

    def __init__(self, *values, type: MatrixType = None) -> None:
        self.entries = list(_IDENTITY_ENTRIES)
        self.type = MatrixType.IDENTITY
        if values:
            if len(values) != 9:
                raise ValueError(f"Matrix3 needs 9 entries, got {len(values)}")
            self.row_major(*values, type=type)
        elif type is not None:
            self.type = type

    def __repr__(self) -> str:
        values = ", ".join(str(v) for v in self._rows())
        return f"Matrix3({values}, type={self.type.name})"

    def __str__(self) -> str:
        rows = self._rows()
        return "\n".join(" ".join(str(v) for v in rows[i : i + 3]) for i in (0, 3, 6))

    def __eq__(self, other):
        if not isinstance(other, Matrix3):
            return NotImplemented
        return self.equals(other)

    __hash__ = None

    def __array__(self, dtype=None, copy=None):
        return self.to_numpy(dtype)

    def _rows(self):
        e = self.entries
        return (e[0], e[3], e[6], e[1], e[4], e[7], e[2], e[5], e[8])

    def make_immutable(self) -> "Matrix3":
        object.__setattr__(self, "entries", tuple(self.entries))
        return super().make_immutable()

    # %% Entries

    def m00(self) -> float:
        return self.entries[0]

    def m01(self) -> float:
        return self.entries[3]

    def m02(self) -> float:
        return self.entries[6]

    def m10(self) -> float:
        return self.entries[1]

    def m11(self) -> float:
        return self.entries[4]

    def m12(self) -> float:
        return self.entries[7]

    def m20(self) -> float:
        return self.entries[2]

    def m21(self) -> float:
        return self.entries[5]

    def m22(self) -> float:
        return self.entries[8]

    # %% Queries

    def is_identity(self) -> bool:
        return self.type == MatrixType.IDENTITY or self.equals(Matrix3.IDENTITY)

    def is_fast_identity(self) -> bool:
        """True guarantees the identity, False is inconclusive."""
        return self.type == MatrixType.IDENTITY

    def is_translation(self) -> bool:
        """Whether this matrix has no shear, rotation or scaling."""
        if self.type == MatrixType.TRANSLATION:
            return True
        m00, m01, _, m10, m11, _, m20, m21, m22 = self._rows()
        return m00 == 1 and m11 == 1 and m22 == 1 and m01 == 0 and m10 == 0 and m20 == 0 and m21 == 0

    def is_affine(self) -> bool:
        if self.type == MatrixType.AFFINE:
            return True
        return self.m20() == 0 and self.m21() == 0 and self.m22() == 1

    def is_aligned(self) -> bool:
        """Whether this is an affine matrix built only from per-axis scaling and translation."""
        return self.is_affine() and self.m01() == 0 and self.m10() == 0

    def is_axis_aligned(self) -> bool:
        """Like ``is_aligned``, but the axes may also be swapped."""
        return self.is_affine() and (
            (self.m01() == 0 and self.m10() == 0) or (self.m00() == 0 and self.m11() == 0)
        )

    def is_finite(self) -> bool:
        return all(isfinite(v) for v in self.entries)

    def get_determinant(self) -> float:
        m00, m01, m02, m10, m11, m12, m20, m21, m22 = self._rows()
        return (
            m00 * m11 * m22
            + m01 * m12 * m20
            + m02 * m10 * m21
            - m02 * m11 * m20
            - m01 * m10 * m22
            - m00 * m12 * m21
        )

    determinant = property(get_determinant)

    def get_translation(self) -> Vector2:
        return Vector2(self.m02(), self.m12())

    def get_scale_vector(self) -> Vector2:
        """The magnitudes of the transformed unit x and y deltas."""
        return Vector2(
            sqrt(self.m00() * self.m00() + self.m10() * self.m10()),
            sqrt(self.m01() * self.m01() + self.m11() * self.m11()),
        )

    scale_vector = property(get_scale_vector)

    def get_rotation(self) -> float:
        """The 2D rotation angle of this matrix, in radians between -pi and pi."""
        return atan2(self.m10(), self.m00())

    rotation = property(get_rotation)

    def to_matrix4(self):
        """Get an identity-padded 4x4 copy of this matrix."""
        from .matrix4 import Matrix4

        m00, m01, m02, m10, m11, m12, m20, m21, m22 = self._rows()
        return Matrix4(
            m00, m01, m02, 0,
            m10, m11, m12, 0,
            m20, m21, m22, 0,
            0, 0, 0, 1,
        )

    def to_affine_matrix4(self):
        """Get a 4x4 matrix that applies the 2D affine part of this matrix in the xy plane."""
        from .matrix4 import Matrix4

        m00, m01, m02, m10, m11, m12 = self._rows()[:6]
        return Matrix4(
            m00, m01, 0, m02,
            m10, m11, 0, m12,
            0, 0, 1, 0,
            0, 0, 0, 1,
        )

    def get_css_transform(self) -> str:
        """The CSS ``matrix(...)`` form of the affine part, without exponent notation."""
        e = self.entries
        return f"matrix({e[0]:.20f},{e[1]:.20f},{e[3]:.20f},{e[4]:.20f},{e[6]:.20f},{e[7]:.20f})"

    css_transform = property(get_css_transform)

    def get_svg_transform(self) -> str:
        """The SVG transform attribute for this matrix, simplified based on its type."""
        e = self.entries
        if self.type == MatrixType.IDENTITY:
            return ""
        elif self.type == MatrixType.TRANSLATION:
            return f"translate({e[6]:.20f},{e[7]:.20f})"
        elif self.type == MatrixType.SCALING:
            if e[0] == e[4]:
                return f"scale({e[0]:.20f})"
            return f"scale({e[0]:.20f},{e[4]:.20f})"
        return f"matrix({e[0]:.20f},{e[1]:.20f},{e[3]:.20f},{e[4]:.20f},{e[6]:.20f},{e[7]:.20f})"

    svg_transform = property(get_svg_transform)

    def equals(self, matrix: "Matrix3") -> bool:
        return all(a == b for a, b in zip(self.entries, matrix.entries))

    def equals_epsilon(
        self, matrix: "Matrix3", epsilon: float = MACHINE_EPSILON
    ) -> bool:
        return all(abs(a - b) <= epsilon for a, b in zip(self.entries, matrix.entries))

    # %% Immutable operations

    def copy(self) -> "Matrix3":
        return Matrix3(*self._rows(), type=self.type)

    def plus(self, matrix: "Matrix3") -> "Matrix3":
        return self.copy().add(matrix)

    def minus(self, matrix: "Matrix3") -> "Matrix3":
        return self.copy().subtract(matrix)

    def transposed(self) -> "Matrix3":
        return self.copy().transpose()

    def negated(self) -> "Matrix3":
        return self.copy().negate()

    def inverted(self) -> "Matrix3":
        """Get the inverse of this matrix.

        The identity returns itself. Raises ValueError when the determinant
        is zero.
        """
        if self.type == MatrixType.IDENTITY:
            return self
        return self.copy().invert()

    def times_matrix(self, matrix: "Matrix3") -> "Matrix3":
        """Get the product ``self * matrix``.

        If either operand is the identity, the other operand itself is
        returned (not a copy).
        """
        if self.type == MatrixType.IDENTITY or matrix.type == MatrixType.IDENTITY:
            return matrix if self.type == MatrixType.IDENTITY else self
        return self.copy().multiply_matrix(matrix)

    def times_vector2(self, v: Vector2) -> Vector2:
        """Homogeneous multiplication with (x, y, 1)."""
        return self.multiply_vector2(v.copy())

    def times_vector3(self, v: Vector3) -> Vector3:
        return self.multiply_vector3(v.copy())

    def times_transpose_vector2(self, v: Vector2) -> Vector2:
        """Multiply the transpose of the upper-left 2x2 part with the vector."""
        return self.multiply_transpose_vector2(v.copy())

    def times_transpose_vector3(self, v: Vector3) -> Vector3:
        x = self.m00() * v.x + self.m10() * v.y + self.m20() * v.z
        y = self.m01() * v.x + self.m11() * v.y + self.m21() * v.z
        z = self.m02() * v.x + self.m12() * v.y + self.m22() * v.z
        return Vector3(x, y, z)

    def times_relative_vector2(self, v: Vector2) -> Vector2:
        """Homogeneous multiplication with (x, y, 0), i.e. without translation."""
        return self.multiply_relative_vector2(v.copy())

    # %% Mutable operations

    @mutator
    def row_major(
        self,
        v00: float,
        v01: float,
        v02: float,
        v10: float,
        v11: float,
        v12: float,
        v20: float,
        v21: float,
        v22: float,
        type: MatrixType = None,
    ) -> "Matrix3":
        """Set all entries, in row-major order.

        Every other mutator ends up here. Without an explicit type, the
        matrix is tagged AFFINE when the bottom row is [0, 0, 1] and OTHER
        otherwise.
        """
        self.entries[:] = (v00, v10, v20, v01, v11, v21, v02, v12, v22)
        if type is None:
            if v20 == 0 and v21 == 0 and v22 == 1:
                type = MatrixType.AFFINE
            else:
                type = MatrixType.OTHER
        self.type = type
        return self

    @mutator
    def column_major(
        self,
        v00: float,
        v10: float,
        v20: float,
        v01: float,
        v11: float,
        v21: float,
        v02: float,
        v12: float,
        v22: float,
        type: MatrixType = None,
    ) -> "Matrix3":
        return self.row_major(v00, v01, v02, v10, v11, v12, v20, v21, v22, type)

    @mutator
    def set(self, matrix: "Matrix3") -> "Matrix3":
        return self.row_major(*matrix._rows(), type=matrix.type)

    @mutator
    def set_array(self, array) -> "Matrix3":
        """Set from nine column-major values, e.g. a flat list or numpy array."""
        a = [float(v) for v in np.asarray(array).ravel()[:9]]
        return self.column_major(*a)

    @mutator
    def set_entry(self, row: int, col: int, value: float) -> "Matrix3":
        """Set a single entry. The type is inferred again afterwards."""
        rows = list(self._rows())
        rows[row * 3 + col] = value
        return self.row_major(*rows)

    def set00(self, value: float) -> "Matrix3":
        return self.set_entry(0, 0, value)

    def set01(self, value: float) -> "Matrix3":
        return self.set_entry(0, 1, value)

    def set02(self, value: float) -> "Matrix3":
        return self.set_entry(0, 2, value)

    def set10(self, value: float) -> "Matrix3":
        return self.set_entry(1, 0, value)

    def set11(self, value: float) -> "Matrix3":
        return self.set_entry(1, 1, value)

    def set12(self, value: float) -> "Matrix3":
        return self.set_entry(1, 2, value)

    def set20(self, value: float) -> "Matrix3":
        return self.set_entry(2, 0, value)

    def set21(self, value: float) -> "Matrix3":
        return self.set_entry(2, 1, value)

    def set22(self, value: float) -> "Matrix3":
        return self.set_entry(2, 2, value)

    @mutator
    def add(self, matrix: "Matrix3") -> "Matrix3":
        return self.row_major(*(a + b for a, b in zip(self._rows(), matrix._rows())))

    @mutator
    def subtract(self, matrix: "Matrix3") -> "Matrix3":
        return self.row_major(*(a - b for a, b in zip(self._rows(), matrix._rows())))

    @mutator
    def transpose(self) -> "Matrix3":
        m00, m01, m02, m10, m11, m12, m20, m21, m22 = self._rows()
        keep = self.type in (MatrixType.IDENTITY, MatrixType.SCALING)
        return self.row_major(
            m00, m10, m20,
            m01, m11, m21,
            m02, m12, m22,
            type=self.type if keep else None,
        )

    @mutator
    def negate(self) -> "Matrix3":
        return self.row_major(*(-v for v in self._rows()))

    @mutator
    def invert(self) -> "Matrix3":
        m00, m01, m02, m10, m11, m12, m20, m21, m22 = self._rows()

        if self.type == MatrixType.IDENTITY:
            return self
        elif self.type == MatrixType.TRANSLATION:
            return self.row_major(
                1, 0, -m02,
                0, 1, -m12,
                0, 0, 1,
                type=MatrixType.TRANSLATION,
            )
        elif self.type == MatrixType.SCALING:
            if m00 == 0 or m11 == 0 or m22 == 0:
                raise ValueError("matrix determinant is zero, cannot invert")
            return self.row_major(
                1 / m00, 0, 0,
                0, 1 / m11, 0,
                0, 0, 1 / m22,
                type=MatrixType.SCALING,
            )
        elif self.type in (MatrixType.AFFINE, MatrixType.OTHER):
            det = self.get_determinant()
            if det == 0:
                raise ValueError("matrix determinant is zero, cannot invert")

            t00 = m11 * m22 - m12 * m21
            t01 = m02 * m21 - m01 * m22
            t02 = m01 * m12 - m02 * m11
            t10 = m12 * m20 - m10 * m22
            t11 = m00 * m22 - m02 * m20
            t12 = m02 * m10 - m00 * m12

            if self.type == MatrixType.AFFINE:
                return self.row_major(
                    t00 / det, t01 / det, t02 / det,
                    t10 / det, t11 / det, t12 / det,
                    0, 0, 1,
                    type=MatrixType.AFFINE,
                )

            t20 = m10 * m21 - m11 * m20
            t21 = m01 * m20 - m00 * m21
            t22 = m00 * m11 - m01 * m10
            return self.row_major(
                t00 / det, t01 / det, t02 / det,
                t10 / det, t11 / det, t12 / det,
                t20 / det, t21 / det, t22 / det,
                type=MatrixType.OTHER,
            )
        else:
            raise ValueError(f"Matrix3.invert with unknown type: {self.type!r}")

    @mutator
    def multiply_matrix(self, matrix: "Matrix3") -> "Matrix3":
        """Set this matrix to ``self * matrix``."""
        # M * I == M
        if matrix.type == MatrixType.IDENTITY:
            return self
        # I * M == M
        if self.type == MatrixType.IDENTITY:
            return self.set(matrix)

        a00, a01, a02, a10, a11, a12, a20, a21, a22 = self._rows()
        b00, b01, b02, b10, b11, b12, b20, b21, b22 = matrix._rows()

        if self.type == matrix.type:
            if self.type == MatrixType.TRANSLATION:
                return self.row_major(
                    1, 0, a02 + b02,
                    0, 1, a12 + b12,
                    0, 0, 1,
                    type=MatrixType.TRANSLATION,
                )
            elif self.type == MatrixType.SCALING:
                return self.row_major(
                    a00 * b00, 0, 0,
                    0, a11 * b11, 0,
                    0, 0, a22 * b22,
                    type=MatrixType.SCALING,
                )

        # A SCALING tag allows a homogeneous entry other than 1
        if (
            self.type != MatrixType.OTHER
            and matrix.type != MatrixType.OTHER
            and a22 == 1
            and b22 == 1
        ):
            # Both are affine, so is the product
            return self.row_major(
                a00 * b00 + a01 * b10,
                a00 * b01 + a01 * b11,
                a00 * b02 + a01 * b12 + a02,
                a10 * b00 + a11 * b10,
                a10 * b01 + a11 * b11,
                a10 * b02 + a11 * b12 + a12,
                0, 0, 1,
                type=MatrixType.AFFINE,
            )

        return self.row_major(
            a00 * b00 + a01 * b10 + a02 * b20,
            a00 * b01 + a01 * b11 + a02 * b21,
            a00 * b02 + a01 * b12 + a02 * b22,
            a10 * b00 + a11 * b10 + a12 * b20,
            a10 * b01 + a11 * b11 + a12 * b21,
            a10 * b02 + a11 * b12 + a12 * b22,
            a20 * b00 + a21 * b10 + a22 * b20,
            a20 * b01 + a21 * b11 + a22 * b21,
            a20 * b02 + a21 * b12 + a22 * b22,
            type=MatrixType.OTHER,
        )

    @mutator
    def prepend_translation(self, x: float, y: float) -> "Matrix3":
        """Set this matrix to ``translation(x, y) * self``."""
        rows = list(self._rows())
        if self.type == MatrixType.OTHER:
            for i in range(3):
                rows[i] += x * rows[6 + i]
                rows[3 + i] += y * rows[6 + i]
        else:
            rows[2] += x
            rows[5] += y
        if self.type in (MatrixType.IDENTITY, MatrixType.TRANSLATION):
            type = MatrixType.TRANSLATION
        elif self.type == MatrixType.OTHER:
            type = MatrixType.OTHER
        else:
            type = MatrixType.AFFINE
        return self.row_major(*rows, type=type)

    @mutator
    def set_to_identity(self) -> "Matrix3":
        return self.row_major(*_IDENTITY_ENTRIES, type=MatrixType.IDENTITY)

    @mutator
    def set_to_translation(self, x: float, y: float) -> "Matrix3":
        return self.row_major(
            1, 0, x,
            0, 1, y,
            0, 0, 1,
            type=MatrixType.TRANSLATION,
        )

    @mutator
    def set_to_scale(self, x: float, y: float = None) -> "Matrix3":
        y = x if y is None else y
        return self.row_major(
            x, 0, 0,
            0, y, 0,
            0, 0, 1,
            type=MatrixType.SCALING,
        )

    @mutator
    def set_to_affine(
        self, m00: float, m01: float, m02: float, m10: float, m11: float, m12: float
    ) -> "Matrix3":
        return self.row_major(m00, m01, m02, m10, m11, m12, 0, 0, 1, type=MatrixType.AFFINE)

    @mutator
    def set_to_rotation_axis_angle(self, axis: Vector3, angle: float) -> "Matrix3":
        """Set to a rotation of angle radians around a unit axis (Rodrigues)."""
        c, s = cos_sin(angle)
        C = 1 - c
        x, y, z = axis.x, axis.y, axis.z
        return self.row_major(
            x * x * C + c, x * y * C - z * s, x * z * C + y * s,
            y * x * C + z * s, y * y * C + c, y * z * C - x * s,
            z * x * C - y * s, z * y * C + x * s, z * z * C + c,
            type=MatrixType.OTHER,
        )

    @mutator
    def set_to_rotation_x(self, angle: float) -> "Matrix3":
        c, s = cos_sin(angle)
        return self.row_major(
            1, 0, 0,
            0, c, -s,
            0, s, c,
            type=MatrixType.OTHER,
        )

    @mutator
    def set_to_rotation_y(self, angle: float) -> "Matrix3":
        c, s = cos_sin(angle)
        return self.row_major(
            c, 0, s,
            0, 1, 0,
            -s, 0, c,
            type=MatrixType.OTHER,
        )

    @mutator
    def set_to_rotation_z(self, angle: float) -> "Matrix3":
        c, s = cos_sin(angle)
        return self.row_major(
            c, -s, 0,
            s, c, 0,
            0, 0, 1,
            type=MatrixType.AFFINE,
        )

    @mutator
    def set_to_translation_rotation(self, x: float, y: float, angle: float) -> "Matrix3":
        """Set to a rotation followed by a translation."""
        c, s = cos_sin(angle)
        return self.row_major(
            c, -s, x,
            s, c, y,
            0, 0, 1,
            type=MatrixType.AFFINE,
        )

    @mutator
    def set_to_translation_rotation_point(
        self, translation: Vector2, angle: float
    ) -> "Matrix3":
        return self.set_to_translation_rotation(translation.x, translation.y, angle)

    @mutator
    def set_to_svg_matrix(self, svg_matrix) -> "Matrix3":
        """Set from any object with the SVGMatrix attributes ``a`` to ``f``."""
        m = svg_matrix
        return self.row_major(m.a, m.c, m.e, m.b, m.d, m.f, 0, 0, 1, type=MatrixType.AFFINE)

    @mutator
    def set_rotation_a_to_b(self, a: Vector3, b: Vector3) -> "Matrix3":
        """Set to the shortest rotation that maps unit vector a onto unit vector b.

        Uses the method by Moller and Hughes, "Efficiently Building a Matrix
        to Rotate One Vector to Another" (1999). Nearly parallel and
        antiparallel inputs are handled with two reflections through an
        auxiliary axis.
        """
        epsilon = 0.0001

        v = a.cross(b)
        e = a.dot(b)
        f = -e if e < 0 else e

        if f > 1.0 - epsilon:
            # Use the coordinate axis least aligned with a
            ax = abs(a.x)
            ay = abs(a.y)
            az = abs(a.z)
            if ax < ay:
                x = Vector3.X_UNIT if ax < az else Vector3.Z_UNIT
            else:
                x = Vector3.Y_UNIT if ay < az else Vector3.Z_UNIT

            u = x.minus(a)
            v = x.minus(b)

            c1 = 2.0 / u.dot(u)
            c2 = 2.0 / v.dot(v)
            c3 = c1 * c2 * u.dot(v)

            return self.row_major(
                -c1 * u.x * u.x - c2 * v.x * v.x + c3 * v.x * u.x + 1,
                -c1 * u.x * u.y - c2 * v.x * v.y + c3 * v.x * u.y,
                -c1 * u.x * u.z - c2 * v.x * v.z + c3 * v.x * u.z,
                -c1 * u.y * u.x - c2 * v.y * v.x + c3 * v.y * u.x,
                -c1 * u.y * u.y - c2 * v.y * v.y + c3 * v.y * u.y + 1,
                -c1 * u.y * u.z - c2 * v.y * v.z + c3 * v.y * u.z,
                -c1 * u.z * u.x - c2 * v.z * v.x + c3 * v.z * u.x,
                -c1 * u.z * u.y - c2 * v.z * v.y + c3 * v.z * u.y,
                -c1 * u.z * u.z - c2 * v.z * v.z + c3 * v.z * u.z + 1,
            )

        h = 1.0 / (1.0 + e)
        hvx = h * v.x
        hvz = h * v.z
        hvxy = hvx * v.y
        hvxz = hvx * v.z
        hvyz = hvz * v.y

        return self.row_major(
            e + hvx * v.x, hvxy - v.z, hvxz + v.y,
            hvxy + v.z, e + h * v.y * v.y, hvyz - v.x,
            hvxz - v.y, hvyz + v.x, e + hvz * v.z,
        )

    # %% Operations that change the vector argument

    def multiply_vector2(self, v: Vector2) -> Vector2:
        m00, m01, m02, m10, m11, m12 = self._rows()[:6]
        return v.set_xy(m00 * v.x + m01 * v.y + m02, m10 * v.x + m11 * v.y + m12)

    def multiply_vector3(self, v: Vector3) -> Vector3:
        m00, m01, m02, m10, m11, m12, m20, m21, m22 = self._rows()
        return v.set_xyz(
            m00 * v.x + m01 * v.y + m02 * v.z,
            m10 * v.x + m11 * v.y + m12 * v.z,
            m20 * v.x + m21 * v.y + m22 * v.z,
        )

    def multiply_transpose_vector2(self, v: Vector2) -> Vector2:
        return v.set_xy(
            self.m00() * v.x + self.m10() * v.y, self.m01() * v.x + self.m11() * v.y
        )

    def multiply_relative_vector2(self, v: Vector2) -> Vector2:
        return v.set_xy(
            self.m00() * v.x + self.m01() * v.y, self.m10() * v.x + self.m11() * v.y
        )

    # %% Conversion

    def copy_to_array(self, array):
        """Write the entries in column-major order into ``array`` and return it."""
        array[:9] = self.entries
        return array

    def to_numpy(self, dtype=None):
        """Get a row-major (3, 3) numpy array."""
        return np.array(self._rows(), dtype=dtype or np.float64).reshape(3, 3)

    def to_state_object(self):
        return {"entries": list(self.entries), "type": self.type.name}

    @classmethod
    def from_numpy(cls, array, type: MatrixType = None) -> "Matrix3":
        array = np.asarray(array, dtype=np.float64)
        if array.shape != (3, 3):
            raise ValueError(f"Expected an array of shape (3, 3), got {array.shape}")
        return cls(*(float(v) for v in array.ravel()), type=type)

    @classmethod
    def from_state_object(cls, state) -> "Matrix3":
        entries = state["entries"]
        if len(entries) != 9:
            raise ValueError("Matrix3 state needs 9 entries")
        matrix = cls()
        matrix.column_major(*entries, type=MatrixType.from_name(state["type"]))
        return matrix

    # %% Factories

    @classmethod
    def identity(cls) -> "Matrix3":
        return cls()

    @classmethod
    def translation(cls, x: float, y: float) -> "Matrix3":
        return cls().set_to_translation(x, y)

    @classmethod
    def translation_from_vector(cls, v) -> "Matrix3":
        return cls.translation(v.x, v.y)

    @classmethod
    def scaling(cls, x: float, y: float = None) -> "Matrix3":
        return cls().set_to_scale(x, y)

    @classmethod
    def affine(
        cls, m00: float, m01: float, m02: float, m10: float, m11: float, m12: float
    ) -> "Matrix3":
        return cls().set_to_affine(m00, m01, m02, m10, m11, m12)

    @classmethod
    def rotation_axis_angle(cls, axis: Vector3, angle: float) -> "Matrix3":
        return cls().set_to_rotation_axis_angle(axis, angle)

    @classmethod
    def rotation_x(cls, angle: float) -> "Matrix3":
        return cls().set_to_rotation_x(angle)

    @classmethod
    def rotation_y(cls, angle: float) -> "Matrix3":
        return cls().set_to_rotation_y(angle)

    @classmethod
    def rotation_z(cls, angle: float) -> "Matrix3":
        return cls().set_to_rotation_z(angle)

    @classmethod
    def rotation2(cls, angle: float) -> "Matrix3":
        """The standard 2D rotation matrix."""
        return cls().set_to_rotation_z(angle)

    @classmethod
    def translation_rotation(cls, x: float, y: float, angle: float) -> "Matrix3":
        return cls().set_to_translation_rotation(x, y, angle)

    @classmethod
    def rotation_around(cls, angle: float, x: float, y: float) -> "Matrix3":
        """A 2D rotation around the point (x, y)."""
        return (
            cls.translation(x, y)
            .times_matrix(cls.rotation2(angle))
            .times_matrix(cls.translation(-x, -y))
        )

    @classmethod
    def rotation_around_point(cls, angle: float, point: Vector2) -> "Matrix3":
        return cls.rotation_around(angle, point.x, point.y)

    @classmethod
    def from_svg_matrix(cls, svg_matrix) -> "Matrix3":
        return cls().set_to_svg_matrix(svg_matrix)

    @classmethod
    def rotate_a_to_b(cls, a: Vector3, b: Vector3) -> "Matrix3":
        return cls().set_rotation_a_to_b(a, b)

    @classmethod
    def translation_times_matrix(cls, x: float, y: float, matrix: "Matrix3") -> "Matrix3":
        """Get ``translation(x, y) * matrix`` without building the translation."""
        return matrix.copy().prepend_translation(x, y)


Matrix3.IDENTITY = Matrix3().make_immutable()
Matrix3.X_REFLECTION = Matrix3(
    -1, 0, 0,
    0, 1, 0,
    0, 0, 1,
    type=MatrixType.AFFINE,
).make_immutable()
Matrix3.Y_REFLECTION = Matrix3(
    1, 0, 0,
    0, -1, 0,
    0, 0, 1,
    type=MatrixType.AFFINE,
).make_immutable()
