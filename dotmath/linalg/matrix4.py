from math import cos, isfinite, sin, sqrt

import numpy as np

from ..utils.enums import MatrixType
from .utils import MACHINE_EPSILON, Freezable, cos_sin, mutator
from .vector3 import Vector3
from .vector4 import Vector4


__all__ = ["Matrix4"]


_IDENTITY_ENTRIES = (1, 0, 0, 0, 0, 1, 0, 0, 0, 0, 1, 0, 0, 0, 0, 1)


class Matrix4(Freezable):
    """A 4x4 matrix, used as a homogeneous 3D transform.

    Entries are stored in column-major order, with a ``type`` tag like
    :class:`Matrix3`. For a 4x4 matrix ``AFFINE`` means that the bottom row
    is exactly [0, 0, 0, 1].

    Parameters
    ----------
    *values : float
        Either nothing (the identity) or all sixteen entries in row-major order.
    type : MatrixType
        The type of the given entries. Inferred when omitted.
    """

    __slots__ = ("entries", "type", "_frozen")

    def __init__(self, *values, type: MatrixType = None) -> None:
        self.entries = list(_IDENTITY_ENTRIES)
        self.type = MatrixType.IDENTITY
        if values:
            if len(values) != 16:
                raise ValueError(f"Matrix4 needs 16 entries, got {len(values)}")
            self.row_major(*values, type=type)
        elif type is not None:
            self.type = type

    def __repr__(self) -> str:
        values = ", ".join(str(v) for v in self._rows())
        return f"Matrix4({values}, type={self.type.name})"

    def __str__(self) -> str:
        rows = self._rows()
        return "\n".join(
            " ".join(str(v) for v in rows[i : i + 4]) for i in (0, 4, 8, 12)
        )

    def __eq__(self, other):
        if not isinstance(other, Matrix4):
            return NotImplemented
        return self.equals(other)

    __hash__ = None

    def __array__(self, dtype=None, copy=None):
        return self.to_numpy(dtype)

    def _rows(self):
        e = self.entries
        return (
            e[0], e[4], e[8], e[12],
            e[1], e[5], e[9], e[13],
            e[2], e[6], e[10], e[14],
            e[3], e[7], e[11], e[15],
        )

    def make_immutable(self) -> "Matrix4":
        object.__setattr__(self, "entries", tuple(self.entries))
        return super().make_immutable()

    # %% Entries

    def m00(self) -> float:
        return self.entries[0]

    def m01(self) -> float:
        return self.entries[4]

    def m02(self) -> float:
        return self.entries[8]

    def m03(self) -> float:
        return self.entries[12]

    def m10(self) -> float:
        return self.entries[1]

    def m11(self) -> float:
        return self.entries[5]

    def m12(self) -> float:
        return self.entries[9]

    def m13(self) -> float:
        return self.entries[13]

    def m20(self) -> float:
        return self.entries[2]

    def m21(self) -> float:
        return self.entries[6]

    def m22(self) -> float:
        return self.entries[10]

    def m23(self) -> float:
        return self.entries[14]

    def m30(self) -> float:
        return self.entries[3]

    def m31(self) -> float:
        return self.entries[7]

    def m32(self) -> float:
        return self.entries[11]

    def m33(self) -> float:
        return self.entries[15]

    # %% Queries

    def is_identity(self) -> bool:
        return self.type == MatrixType.IDENTITY or self.equals(Matrix4.IDENTITY)

    def is_fast_identity(self) -> bool:
        return self.type == MatrixType.IDENTITY

    def is_affine(self) -> bool:
        if self.type == MatrixType.AFFINE:
            return True
        return self.m30() == 0 and self.m31() == 0 and self.m32() == 0 and self.m33() == 1

    def is_finite(self) -> bool:
        return all(isfinite(v) for v in self.entries)

    def _minors(self):
        """The 2x2 minors of the top two and the bottom two rows."""
        m00, m01, m02, m03, m10, m11, m12, m13, m20, m21, m22, m23, m30, m31, m32, m33 = self._rows()
        s = (
            m00 * m11 - m10 * m01,
            m00 * m12 - m10 * m02,
            m00 * m13 - m10 * m03,
            m01 * m12 - m11 * m02,
            m01 * m13 - m11 * m03,
            m02 * m13 - m12 * m03,
        )
        c = (
            m20 * m31 - m30 * m21,
            m20 * m32 - m30 * m22,
            m20 * m33 - m30 * m23,
            m21 * m32 - m31 * m22,
            m21 * m33 - m31 * m23,
            m22 * m33 - m32 * m23,
        )
        return s, c

    def get_determinant(self) -> float:
        s, c = self._minors()
        return (
            s[0] * c[5]
            - s[1] * c[4]
            + s[2] * c[3]
            + s[3] * c[2]
            - s[4] * c[1]
            + s[5] * c[0]
        )

    determinant = property(get_determinant)

    def get_translation(self) -> Vector3:
        return Vector3(self.m03(), self.m13(), self.m23())

    def get_scale_vector(self) -> Vector3:
        """The magnitudes of ``M * (e_i + e_w)`` for each axis i.

        For a matrix without translation this is the length of each
        transformed basis vector.
        """
        m00, m01, m02, m03, m10, m11, m12, m13, m20, m21, m22, m23, m30, m31, m32, m33 = self._rows()
        m0003 = m00 + m03
        m1013 = m10 + m13
        m2023 = m20 + m23
        m3033 = m30 + m33
        m0103 = m01 + m03
        m1113 = m11 + m13
        m2123 = m21 + m23
        m3133 = m31 + m33
        m0203 = m02 + m03
        m1213 = m12 + m13
        m2223 = m22 + m23
        m3233 = m32 + m33
        return Vector3(
            sqrt(m0003 * m0003 + m1013 * m1013 + m2023 * m2023 + m3033 * m3033),
            sqrt(m0103 * m0103 + m1113 * m1113 + m2123 * m2123 + m3133 * m3133),
            sqrt(m0203 * m0203 + m1213 * m1213 + m2223 * m2223 + m3233 * m3233),
        )

    scale_vector = property(get_scale_vector)

    def get_css_transform(self) -> str:
        """The CSS ``matrix3d(...)`` form, without exponent notation."""
        return "matrix3d(" + ",".join(f"{v:.20f}" for v in self.entries) + ")"

    css_transform = property(get_css_transform)

    def equals(self, matrix: "Matrix4") -> bool:
        return all(a == b for a, b in zip(self.entries, matrix.entries))

    def equals_epsilon(
        self, matrix: "Matrix4", epsilon: float = MACHINE_EPSILON
    ) -> bool:
        return all(abs(a - b) <= epsilon for a, b in zip(self.entries, matrix.entries))

    # %% Immutable operations

    def copy(self) -> "Matrix4":
        return Matrix4(*self._rows(), type=self.type)

    def plus(self, matrix: "Matrix4") -> "Matrix4":
        return self.copy().add(matrix)

    def minus(self, matrix: "Matrix4") -> "Matrix4":
        return self.copy().subtract(matrix)

    def transposed(self) -> "Matrix4":
        return self.copy().transpose()

    def negated(self) -> "Matrix4":
        return self.copy().negate()

    def inverted(self) -> "Matrix4":
        if self.type == MatrixType.IDENTITY:
            return self
        return self.copy().invert()

    def times_matrix(self, matrix: "Matrix4") -> "Matrix4":
        """Get the product ``self * matrix``, which may be one of the operands."""
        if self.type == MatrixType.IDENTITY or matrix.type == MatrixType.IDENTITY:
            return matrix if self.type == MatrixType.IDENTITY else self
        return self.copy().multiply_matrix(matrix)

    def times_vector4(self, v: Vector4) -> Vector4:
        return self.multiply_vector4(v.copy())

    def times_vector3(self, v: Vector3) -> Vector3:
        """Multiply with (x, y, z, 1) and drop w (no perspective divide)."""
        return self.multiply_vector3(v.copy())

    def times_transpose_vector4(self, v: Vector4) -> Vector4:
        m00, m01, m02, m03, m10, m11, m12, m13, m20, m21, m22, m23, m30, m31, m32, m33 = self._rows()
        return Vector4(
            m00 * v.x + m10 * v.y + m20 * v.z + m30 * v.w,
            m01 * v.x + m11 * v.y + m21 * v.z + m31 * v.w,
            m02 * v.x + m12 * v.y + m22 * v.z + m32 * v.w,
            m03 * v.x + m13 * v.y + m23 * v.z + m33 * v.w,
        )

    def times_transpose_vector3(self, v: Vector3) -> Vector3:
        return self.times_transpose_vector4(Vector4.from_vector3(v)).to_vector3()

    def times_relative_vector3(self, v: Vector3) -> Vector3:
        """Multiply with (x, y, z, 0), i.e. without translation."""
        m00, m01, m02, _, m10, m11, m12, _, m20, m21, m22 = self._rows()[:11]
        return Vector3(
            m00 * v.x + m01 * v.y + m02 * v.z,
            m10 * v.x + m11 * v.y + m12 * v.z,
            m20 * v.x + m21 * v.y + m22 * v.z,
        )

    # %% Mutable operations

    @mutator
    def row_major(
        self,
        v00: float,
        v01: float,
        v02: float,
        v03: float,
        v10: float,
        v11: float,
        v12: float,
        v13: float,
        v20: float,
        v21: float,
        v22: float,
        v23: float,
        v30: float,
        v31: float,
        v32: float,
        v33: float,
        type: MatrixType = None,
    ) -> "Matrix4":
        """Set all entries, in row-major order.

        Without an explicit type, the matrix is tagged AFFINE when the
        bottom row is [0, 0, 0, 1] and OTHER otherwise.
        """
        self.entries[:] = (
            v00, v10, v20, v30,
            v01, v11, v21, v31,
            v02, v12, v22, v32,
            v03, v13, v23, v33,
        )
        if type is None:
            if v30 == 0 and v31 == 0 and v32 == 0 and v33 == 1:
                type = MatrixType.AFFINE
            else:
                type = MatrixType.OTHER
        self.type = type
        return self

    @mutator
    def column_major(self, *values, type: MatrixType = None) -> "Matrix4":
        """Set all sixteen entries, in column-major order."""
        if len(values) != 16:
            raise ValueError(f"Matrix4 needs 16 entries, got {len(values)}")
        rows = [values[col * 4 + row] for row in range(4) for col in range(4)]
        return self.row_major(*rows, type=type)

    @mutator
    def set(self, matrix: "Matrix4") -> "Matrix4":
        return self.row_major(*matrix._rows(), type=matrix.type)

    @mutator
    def set_array(self, array) -> "Matrix4":
        """Set from sixteen column-major values, e.g. a flat list or numpy array."""
        return self.column_major(*(float(v) for v in np.asarray(array).ravel()[:16]))

    @mutator
    def set_entry(self, row: int, col: int, value: float) -> "Matrix4":
        """Set a single entry. The type is inferred again afterwards."""
        rows = list(self._rows())
        rows[row * 4 + col] = value
        return self.row_major(*rows)

    @mutator
    def add(self, matrix: "Matrix4") -> "Matrix4":
        return self.row_major(*(a + b for a, b in zip(self._rows(), matrix._rows())))

    @mutator
    def subtract(self, matrix: "Matrix4") -> "Matrix4":
        return self.row_major(*(a - b for a, b in zip(self._rows(), matrix._rows())))

    @mutator
    def transpose(self) -> "Matrix4":
        rows = self._rows()
        keep = self.type in (MatrixType.IDENTITY, MatrixType.SCALING)
        return self.row_major(
            *(rows[col * 4 + row] for row in range(4) for col in range(4)),
            type=self.type if keep else None,
        )

    @mutator
    def negate(self) -> "Matrix4":
        return self.row_major(*(-v for v in self._rows()))

    @mutator
    def invert(self) -> "Matrix4":
        m00, m01, m02, m03, m10, m11, m12, m13, m20, m21, m22, m23, m30, m31, m32, m33 = self._rows()

        if self.type == MatrixType.IDENTITY:
            return self
        elif self.type == MatrixType.TRANSLATION:
            return self.row_major(
                1, 0, 0, -m03,
                0, 1, 0, -m13,
                0, 0, 1, -m23,
                0, 0, 0, 1,
                type=MatrixType.TRANSLATION,
            )
        elif self.type == MatrixType.SCALING:
            if m00 == 0 or m11 == 0 or m22 == 0 or m33 == 0:
                raise ValueError("matrix determinant is zero, cannot invert")
            return self.row_major(
                1 / m00, 0, 0, 0,
                0, 1 / m11, 0, 0,
                0, 0, 1 / m22, 0,
                0, 0, 0, 1 / m33,
                type=MatrixType.SCALING,
            )
        elif self.type in (MatrixType.AFFINE, MatrixType.OTHER):
            s, c = self._minors()
            det = (
                s[0] * c[5]
                - s[1] * c[4]
                + s[2] * c[3]
                + s[3] * c[2]
                - s[4] * c[1]
                + s[5] * c[0]
            )
            if det == 0:
                raise ValueError("matrix determinant is zero, cannot invert")
            det_inv = 1 / det

            t00 = (m11 * c[5] - m12 * c[4] + m13 * c[3]) * det_inv
            t01 = (-m01 * c[5] + m02 * c[4] - m03 * c[3]) * det_inv
            t02 = (m31 * s[5] - m32 * s[4] + m33 * s[3]) * det_inv
            t03 = (-m21 * s[5] + m22 * s[4] - m23 * s[3]) * det_inv
            t10 = (-m10 * c[5] + m12 * c[2] - m13 * c[1]) * det_inv
            t11 = (m00 * c[5] - m02 * c[2] + m03 * c[1]) * det_inv
            t12 = (-m30 * s[5] + m32 * s[2] - m33 * s[1]) * det_inv
            t13 = (m20 * s[5] - m22 * s[2] + m23 * s[1]) * det_inv
            t20 = (m10 * c[4] - m11 * c[2] + m13 * c[0]) * det_inv
            t21 = (-m00 * c[4] + m01 * c[2] - m03 * c[0]) * det_inv
            t22 = (m30 * s[4] - m31 * s[2] + m33 * s[0]) * det_inv
            t23 = (-m20 * s[4] + m21 * s[2] - m23 * s[0]) * det_inv

            if self.type == MatrixType.AFFINE:
                return self.row_major(
                    t00, t01, t02, t03,
                    t10, t11, t12, t13,
                    t20, t21, t22, t23,
                    0, 0, 0, 1,
                    type=MatrixType.AFFINE,
                )

            t30 = (-m10 * c[3] + m11 * c[1] - m12 * c[0]) * det_inv
            t31 = (m00 * c[3] - m01 * c[1] + m02 * c[0]) * det_inv
            t32 = (-m30 * s[3] + m31 * s[1] - m32 * s[0]) * det_inv
            t33 = (m20 * s[3] - m21 * s[1] + m22 * s[0]) * det_inv
            return self.row_major(
                t00, t01, t02, t03,
                t10, t11, t12, t13,
                t20, t21, t22, t23,
                t30, t31, t32, t33,
            )
        else:
            raise ValueError(f"Matrix4.invert with unknown type: {self.type!r}")

    @mutator
    def multiply_matrix(self, matrix: "Matrix4") -> "Matrix4":
        """Set this matrix to ``self * matrix``."""
        # M * I == M
        if matrix.type == MatrixType.IDENTITY:
            return self
        # I * M == M
        if self.type == MatrixType.IDENTITY:
            return self.set(matrix)

        a = self._rows()
        b = matrix._rows()

        if self.type == matrix.type:
            if self.type == MatrixType.TRANSLATION:
                return self.row_major(
                    1, 0, 0, a[3] + b[3],
                    0, 1, 0, a[7] + b[7],
                    0, 0, 1, a[11] + b[11],
                    0, 0, 0, 1,
                    type=MatrixType.TRANSLATION,
                )
            elif self.type == MatrixType.SCALING:
                return self.row_major(
                    a[0] * b[0], 0, 0, 0,
                    0, a[5] * b[5], 0, 0,
                    0, 0, a[10] * b[10], 0,
                    0, 0, 0, a[15] * b[15],
                    type=MatrixType.SCALING,
                )

        # A SCALING tag allows a homogeneous entry other than 1
        if (
            self.type != MatrixType.OTHER
            and matrix.type != MatrixType.OTHER
            and a[15] == 1
            and b[15] == 1
        ):
            # Both are affine, so is the product
            rows = []
            for r in range(3):
                a0, a1, a2, a3 = a[r * 4 : r * 4 + 4]
                rows.append(a0 * b[0] + a1 * b[4] + a2 * b[8])
                rows.append(a0 * b[1] + a1 * b[5] + a2 * b[9])
                rows.append(a0 * b[2] + a1 * b[6] + a2 * b[10])
                rows.append(a0 * b[3] + a1 * b[7] + a2 * b[11] + a3)
            return self.row_major(*rows, 0, 0, 0, 1, type=MatrixType.AFFINE)

        rows = []
        for r in range(4):
            a0, a1, a2, a3 = a[r * 4 : r * 4 + 4]
            for col in range(4):
                rows.append(
                    a0 * b[col] + a1 * b[4 + col] + a2 * b[8 + col] + a3 * b[12 + col]
                )
        return self.row_major(*rows, type=MatrixType.OTHER)

    @mutator
    def set_to_identity(self) -> "Matrix4":
        return self.row_major(*_IDENTITY_ENTRIES, type=MatrixType.IDENTITY)

    @mutator
    def set_to_translation(self, x: float, y: float, z: float) -> "Matrix4":
        return self.row_major(
            1, 0, 0, x,
            0, 1, 0, y,
            0, 0, 1, z,
            0, 0, 0, 1,
            type=MatrixType.TRANSLATION,
        )

    @mutator
    def set_to_scale(self, x: float, y: float = None, z: float = None) -> "Matrix4":
        y = x if y is None else y
        z = x if z is None else z
        return self.row_major(
            x, 0, 0, 0,
            0, y, 0, 0,
            0, 0, z, 0,
            0, 0, 0, 1,
            type=MatrixType.SCALING,
        )

    @mutator
    def set_to_affine(self, *values) -> "Matrix4":
        """Set the top three rows (twelve values, row-major), the bottom row becomes [0, 0, 0, 1]."""
        if len(values) != 12:
            raise ValueError(f"Matrix4.set_to_affine needs 12 entries, got {len(values)}")
        return self.row_major(*values, 0, 0, 0, 1, type=MatrixType.AFFINE)

    @mutator
    def set_to_rotation_axis_angle(self, axis: Vector3, angle: float) -> "Matrix4":
        """Set to a rotation of angle radians around a unit axis (Rodrigues)."""
        c, s = cos_sin(angle)
        C = 1 - c
        x, y, z = axis.x, axis.y, axis.z
        return self.row_major(
            x * x * C + c, x * y * C - z * s, x * z * C + y * s, 0,
            y * x * C + z * s, y * y * C + c, y * z * C - x * s, 0,
            z * x * C - y * s, z * y * C + x * s, z * z * C + c, 0,
            0, 0, 0, 1,
            type=MatrixType.AFFINE,
        )

    @mutator
    def set_to_rotation_x(self, angle: float) -> "Matrix4":
        c, s = cos_sin(angle)
        return self.row_major(
            1, 0, 0, 0,
            0, c, -s, 0,
            0, s, c, 0,
            0, 0, 0, 1,
            type=MatrixType.AFFINE,
        )

    @mutator
    def set_to_rotation_y(self, angle: float) -> "Matrix4":
        c, s = cos_sin(angle)
        return self.row_major(
            c, 0, s, 0,
            0, 1, 0, 0,
            -s, 0, c, 0,
            0, 0, 0, 1,
            type=MatrixType.AFFINE,
        )

    @mutator
    def set_to_rotation_z(self, angle: float) -> "Matrix4":
        c, s = cos_sin(angle)
        return self.row_major(
            c, -s, 0, 0,
            s, c, 0, 0,
            0, 0, 1, 0,
            0, 0, 0, 1,
            type=MatrixType.AFFINE,
        )

    # %% Operations that change the vector argument

    def multiply_vector4(self, v: Vector4) -> Vector4:
        m00, m01, m02, m03, m10, m11, m12, m13, m20, m21, m22, m23, m30, m31, m32, m33 = self._rows()
        return v.set_xyzw(
            m00 * v.x + m01 * v.y + m02 * v.z + m03 * v.w,
            m10 * v.x + m11 * v.y + m12 * v.z + m13 * v.w,
            m20 * v.x + m21 * v.y + m22 * v.z + m23 * v.w,
            m30 * v.x + m31 * v.y + m32 * v.z + m33 * v.w,
        )

    def multiply_vector3(self, v: Vector3) -> Vector3:
        m00, m01, m02, m03, m10, m11, m12, m13, m20, m21, m22, m23 = self._rows()[:12]
        return v.set_xyz(
            m00 * v.x + m01 * v.y + m02 * v.z + m03,
            m10 * v.x + m11 * v.y + m12 * v.z + m13,
            m20 * v.x + m21 * v.y + m22 * v.z + m23,
        )

    # %% Conversion

    def copy_to_array(self, array):
        """Write the entries in column-major order into ``array`` and return it."""
        array[:16] = self.entries
        return array

    def to_numpy(self, dtype=None):
        """Get a row-major (4, 4) numpy array, the layout pylinalg uses."""
        return np.array(self._rows(), dtype=dtype or np.float64).reshape(4, 4)

    def to_state_object(self):
        return {"entries": list(self.entries), "type": self.type.name}

    @classmethod
    def from_numpy(cls, array, type: MatrixType = None) -> "Matrix4":
        array = np.asarray(array, dtype=np.float64)
        if array.shape != (4, 4):
            raise ValueError(f"Expected an array of shape (4, 4), got {array.shape}")
        return cls(*(float(v) for v in array.ravel()), type=type)

    @classmethod
    def from_state_object(cls, state) -> "Matrix4":
        entries = state["entries"]
        if len(entries) != 16:
            raise ValueError("Matrix4 state needs 16 entries")
        matrix = cls()
        matrix.column_major(*entries, type=MatrixType.from_name(state["type"]))
        return matrix

    # %% Factories

    @classmethod
    def identity(cls) -> "Matrix4":
        return cls()

    @classmethod
    def translation(cls, x: float, y: float, z: float) -> "Matrix4":
        return cls().set_to_translation(x, y, z)

    @classmethod
    def translation_from_vector(cls, v) -> "Matrix4":
        return cls.translation(v.x, v.y, v.z)

    @classmethod
    def scaling(cls, x: float, y: float = None, z: float = None) -> "Matrix4":
        return cls().set_to_scale(x, y, z)

    @classmethod
    def affine(cls, *values) -> "Matrix4":
        return cls().set_to_affine(*values)

    @classmethod
    def rotation_axis_angle(cls, axis: Vector3, angle: float) -> "Matrix4":
        return cls().set_to_rotation_axis_angle(axis, angle)

    @classmethod
    def rotation_x(cls, angle: float) -> "Matrix4":
        return cls().set_to_rotation_x(angle)

    @classmethod
    def rotation_y(cls, angle: float) -> "Matrix4":
        return cls().set_to_rotation_y(angle)

    @classmethod
    def rotation_z(cls, angle: float) -> "Matrix4":
        return cls().set_to_rotation_z(angle)

    @classmethod
    def glu_perspective(
        cls, fov_y: float, aspect: float, z_near: float, z_far: float
    ) -> "Matrix4":
        """The perspective projection matrix as produced by ``gluPerspective``.

        Parameters
        ----------
        fov_y : float
            The angle passed to the cotangent, in radians.
        aspect : float
            Width divided by height.
        z_near : float
            Distance to the near clipping plane.
        z_far : float
            Distance to the far clipping plane.
        """
        cotangent = cos(fov_y) / sin(fov_y)
        return cls(
            cotangent / aspect, 0, 0, 0,
            0, cotangent, 0, 0,
            0, 0, (z_far + z_near) / (z_near - z_far), (2 * z_far * z_near) / (z_near - z_far),
            0, 0, -1, 0,
        )


Matrix4.IDENTITY = Matrix4().make_immutable()
