from math import acos, cos, isfinite, sin, sqrt

import numpy as np

from ..utils import logger
from .matrix3 import Matrix3
from .utils import MACHINE_EPSILON, Freezable, mutator
from .vector3 import Vector3


__all__ = ["Quaternion"]


class Quaternion(Freezable):
    """A quaternion, mostly used as a rotation (a versor).

    (x, y, z) is the vector part and w the scalar part, the same layout that
    pylinalg uses. Apart from ``set_xyzw``, all operations return new
    quaternions.
    """

    __slots__ = ("x", "y", "z", "w", "_frozen")

    def __init__(self, x: float = 0, y: float = 0, z: float = 0, w: float = 1) -> None:
        self.set_xyzw(x, y, z, w)

    def __repr__(self) -> str:
        return f"Quaternion({self.x}, {self.y}, {self.z}, {self.w})"

    def __eq__(self, other):
        if not isinstance(other, Quaternion):
            return NotImplemented
        return self.equals(other)

    __hash__ = None

    def __array__(self, dtype=None, copy=None):
        return self.to_numpy(dtype)

    @mutator
    def set_xyzw(self, x: float, y: float, z: float, w: float) -> "Quaternion":
        self.x = x
        self.y = y
        self.z = z
        self.w = w
        return self

    def equals(self, q: "Quaternion") -> bool:
        return self.x == q.x and self.y == q.y and self.z == q.z and self.w == q.w

    def equals_epsilon(self, q: "Quaternion", epsilon: float = MACHINE_EPSILON) -> bool:
        return (
            abs(self.x - q.x) <= epsilon
            and abs(self.y - q.y) <= epsilon
            and abs(self.z - q.z) <= epsilon
            and abs(self.w - q.w) <= epsilon
        )

    def is_finite(self) -> bool:
        return all(isfinite(c) for c in (self.x, self.y, self.z, self.w))

    def copy(self) -> "Quaternion":
        return Quaternion(self.x, self.y, self.z, self.w)

    def plus(self, q: "Quaternion") -> "Quaternion":
        return Quaternion(self.x + q.x, self.y + q.y, self.z + q.z, self.w + q.w)

    def times_scalar(self, s: float) -> "Quaternion":
        return Quaternion(self.x * s, self.y * s, self.z * s, self.w * s)

    def times_quaternion(self, q: "Quaternion") -> "Quaternion":
        """The Hamilton product ``self * q``.

        The terms are ordered as in jMonkeyEngine, which stores the scalar
        part last. Rotating by the result rotates by ``q`` first and then by
        ``self``.
        """
        return Quaternion(
            self.x * q.w - self.z * q.y + self.y * q.z + self.w * q.x,
            -self.x * q.z + self.y * q.w + self.z * q.x + self.w * q.y,
            self.x * q.y - self.y * q.x + self.z * q.w + self.w * q.z,
            -self.x * q.x - self.y * q.y - self.z * q.z + self.w * q.w,
        )

    def times_vector3(self, v: Vector3) -> Vector3:
        """Rotate a vector by this (unit) quaternion."""
        if v.magnitude == 0:
            return Vector3()

        x, y, z, w = self.x, self.y, self.z, self.w
        return Vector3(
            w * w * v.x
            + 2 * y * w * v.z
            - 2 * z * w * v.y
            + x * x * v.x
            + 2 * y * x * v.y
            + 2 * z * x * v.z
            - z * z * v.x
            - y * y * v.x,
            2 * x * y * v.x
            + y * y * v.y
            + 2 * z * y * v.z
            + 2 * w * z * v.x
            - z * z * v.y
            + w * w * v.y
            - 2 * x * w * v.z
            - x * x * v.y,
            2 * x * z * v.x
            + 2 * y * z * v.y
            + z * z * v.z
            - 2 * w * y * v.x
            - y * y * v.z
            + 2 * w * x * v.y
            - x * x * v.z
            + w * w * v.z,
        )

    @property
    def magnitude(self) -> float:
        return sqrt(self.magnitude_squared)

    @property
    def magnitude_squared(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z + self.w * self.w

    def dot(self, q: "Quaternion") -> float:
        return self.x * q.x + self.y * q.y + self.z * q.z + self.w * q.w

    def normalized(self) -> "Quaternion":
        magnitude = self.magnitude
        if magnitude == 0:
            raise ValueError("Cannot normalize a zero-magnitude quaternion")
        return self.times_scalar(1 / magnitude)

    def negated(self) -> "Quaternion":
        return Quaternion(-self.x, -self.y, -self.z, -self.w)

    def conjugated(self) -> "Quaternion":
        return Quaternion(-self.x, -self.y, -self.z, self.w)

    def to_rotation_matrix(self) -> Matrix3:
        """Convert to a rotation matrix.

        The quaternion does not need to be normalized, the result is scaled
        by ``2 / |q|^2``. A zero quaternion gives the identity matrix.
        """
        norm = self.magnitude_squared
        if norm == 1:
            flip = 2
        elif norm > 0:
            flip = 2 / norm
        else:
            logger.warning("Converting a zero quaternion to a rotation matrix.")
            flip = 0

        xx = self.x * self.x * flip
        xy = self.x * self.y * flip
        xz = self.x * self.z * flip
        xw = self.w * self.x * flip
        yy = self.y * self.y * flip
        yz = self.y * self.z * flip
        yw = self.w * self.y * flip
        zz = self.z * self.z * flip
        zw = self.w * self.z * flip

        return Matrix3().column_major(
            1 - (yy + zz),
            xy + zw,
            xz - yw,
            xy - zw,
            1 - (xx + zz),
            yz + xw,
            xz + yw,
            yz - xw,
            1 - (xx + yy),
        )

    def to_numpy(self, dtype=None):
        """Get an (x, y, z, w) array, as used by pylinalg."""
        return np.array([self.x, self.y, self.z, self.w], dtype=dtype or np.float64)

    def to_state_object(self):
        return {"x": self.x, "y": self.y, "z": self.z, "w": self.w}

    @classmethod
    def from_numpy(cls, array) -> "Quaternion":
        x, y, z, w = np.asarray(array, dtype=np.float64).ravel()
        return cls(float(x), float(y), float(z), float(w))

    @classmethod
    def from_state_object(cls, state) -> "Quaternion":
        return cls(state["x"], state["y"], state["z"], state["w"])

    @classmethod
    def from_axis_angle(cls, axis: Vector3, angle: float) -> "Quaternion":
        """A rotation of angle radians around a unit axis."""
        half_angle = angle / 2
        s = sin(half_angle)
        return cls(axis.x * s, axis.y * s, axis.z * s, cos(half_angle))

    @classmethod
    def from_euler_angles(cls, yaw: float, roll: float, pitch: float) -> "Quaternion":
        sin_pitch = sin(pitch * 0.5)
        cos_pitch = cos(pitch * 0.5)
        sin_roll = sin(roll * 0.5)
        cos_roll = cos(roll * 0.5)
        sin_yaw = sin(yaw * 0.5)
        cos_yaw = cos(yaw * 0.5)

        a = cos_roll * cos_pitch
        b = sin_roll * sin_pitch
        c = cos_roll * sin_pitch
        d = sin_roll * cos_pitch

        return cls(
            a * sin_yaw + b * cos_yaw,
            d * cos_yaw + c * sin_yaw,
            c * cos_yaw - d * sin_yaw,
            a * cos_yaw - b * sin_yaw,
        )

    @classmethod
    def from_rotation_matrix(cls, matrix: Matrix3) -> "Quaternion":
        """Convert a rotation matrix to a unit quaternion.

        Uses the trace when it is non-negative, otherwise the largest
        diagonal entry, to avoid dividing by a small number.
        """
        v00 = matrix.m00()
        v01 = matrix.m01()
        v02 = matrix.m02()
        v10 = matrix.m10()
        v11 = matrix.m11()
        v12 = matrix.m12()
        v20 = matrix.m20()
        v21 = matrix.m21()
        v22 = matrix.m22()

        trace = v00 + v11 + v22

        if trace >= 0:
            sqt = sqrt(trace + 1)
            return cls(
                (v21 - v12) * 0.5 / sqt,
                (v02 - v20) * 0.5 / sqt,
                (v10 - v01) * 0.5 / sqt,
                0.5 * sqt,
            )
        elif v00 > v11 and v00 > v22:
            sqt = sqrt(1 + v00 - v11 - v22)
            return cls(
                sqt * 0.5,
                (v10 + v01) * 0.5 / sqt,
                (v02 + v20) * 0.5 / sqt,
                (v21 - v12) * 0.5 / sqt,
            )
        elif v11 > v22:
            sqt = sqrt(1 + v11 - v00 - v22)
            return cls(
                (v10 + v01) * 0.5 / sqt,
                sqt * 0.5,
                (v21 + v12) * 0.5 / sqt,
                (v02 - v20) * 0.5 / sqt,
            )
        else:
            sqt = sqrt(1 + v22 - v00 - v11)
            return cls(
                (v02 + v20) * 0.5 / sqt,
                (v21 + v12) * 0.5 / sqt,
                sqt * 0.5,
                (v10 - v01) * 0.5 / sqt,
            )

    @classmethod
    def get_rotation_quaternion(cls, a: Vector3, b: Vector3) -> "Quaternion":
        """The shortest rotation that maps unit vector a onto unit vector b."""
        return cls.from_rotation_matrix(Matrix3.rotate_a_to_b(a, b))

    @staticmethod
    def slerp(a: "Quaternion", b: "Quaternion", t: float) -> "Quaternion":
        """Spherical linear interpolation along the shortest arc.

        Identical inputs return ``a`` itself. Nearly equal inputs are blended
        linearly.
        """
        if a.equals(b):
            return a

        dot = a.dot(b)
        if dot < 0:
            b = b.negated()
            dot = -dot

        ratio_a = 1 - t
        ratio_b = t

        if (1 - dot) > 0.1:
            theta = acos(dot)
            inv_sin_theta = 1 / sin(theta)
            ratio_a = sin((1 - t) * theta) * inv_sin_theta
            ratio_b = sin(t * theta) * inv_sin_theta

        return Quaternion(
            ratio_a * a.x + ratio_b * b.x,
            ratio_a * a.y + ratio_b * b.y,
            ratio_a * a.z + ratio_b * b.z,
            ratio_a * a.w + ratio_b * b.w,
        )


Quaternion.IDENTITY = Quaternion().make_immutable()
