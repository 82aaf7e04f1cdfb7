from math import acos, cos, isfinite, sin, sqrt

import numpy as np

from .utils import MACHINE_EPSILON, Freezable, clamp, mutator
from .vector2 import Vector2


__all__ = ["Vector3"]


class Vector3(Freezable):
    """A 3D vector with x, y and z components."""

    __slots__ = ("x", "y", "z", "_frozen")

    def __init__(self, x: float = 0, y: float = 0, z: float = 0) -> None:
        self.x = x
        self.y = y
        self.z = z

    def __repr__(self) -> str:
        return f"Vector3({self.x}, {self.y}, {self.z})"

    def __eq__(self, other):
        if not isinstance(other, Vector3):
            return NotImplemented
        return self.equals(other)

    __hash__ = None

    def __array__(self, dtype=None, copy=None):
        return self.to_numpy(dtype)

    @property
    def magnitude(self) -> float:
        return sqrt(self.magnitude_squared)

    @property
    def magnitude_squared(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def distance(self, v: "Vector3") -> float:
        return sqrt(self.distance_squared(v))

    def distance_squared(self, v: "Vector3") -> float:
        dx = self.x - v.x
        dy = self.y - v.y
        dz = self.z - v.z
        return dx * dx + dy * dy + dz * dz

    def dot(self, v: "Vector3") -> float:
        return self.x * v.x + self.y * v.y + self.z * v.z

    def cross(self, v: "Vector3") -> "Vector3":
        return Vector3(
            self.y * v.z - self.z * v.y,
            self.z * v.x - self.x * v.z,
            self.x * v.y - self.y * v.x,
        )

    def angle_between(self, v: "Vector3") -> float:
        return acos(clamp(self.normalized().dot(v.normalized()), -1, 1))

    def equals(self, v: "Vector3") -> bool:
        return self.x == v.x and self.y == v.y and self.z == v.z

    def equals_epsilon(self, v: "Vector3", epsilon: float = MACHINE_EPSILON) -> bool:
        return (
            abs(self.x - v.x) <= epsilon
            and abs(self.y - v.y) <= epsilon
            and abs(self.z - v.z) <= epsilon
        )

    def is_finite(self) -> bool:
        return isfinite(self.x) and isfinite(self.y) and isfinite(self.z)

    def copy(self) -> "Vector3":
        return Vector3(self.x, self.y, self.z)

    def normalized(self) -> "Vector3":
        mag = self.magnitude
        if mag == 0:
            raise ValueError("Cannot normalize a zero-magnitude vector")
        return Vector3(self.x / mag, self.y / mag, self.z / mag)

    def with_magnitude(self, magnitude: float) -> "Vector3":
        return self.normalized().times_scalar(magnitude)

    def times_scalar(self, scalar: float) -> "Vector3":
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    def component_times(self, v: "Vector3") -> "Vector3":
        return Vector3(self.x * v.x, self.y * v.y, self.z * v.z)

    def plus(self, v: "Vector3") -> "Vector3":
        return Vector3(self.x + v.x, self.y + v.y, self.z + v.z)

    def minus(self, v: "Vector3") -> "Vector3":
        return Vector3(self.x - v.x, self.y - v.y, self.z - v.z)

    def divided_scalar(self, scalar: float) -> "Vector3":
        return Vector3(self.x / scalar, self.y / scalar, self.z / scalar)

    def negated(self) -> "Vector3":
        return Vector3(-self.x, -self.y, -self.z)

    def blend(self, v: "Vector3", ratio: float) -> "Vector3":
        return self.plus(v.minus(self).times_scalar(ratio))

    def average(self, v: "Vector3") -> "Vector3":
        return self.blend(v, 0.5)

    def to_vector2(self) -> Vector2:
        return Vector2(self.x, self.y)

    def to_vector4(self, w: float = 1):
        from .vector4 import Vector4

        return Vector4(self.x, self.y, self.z, w)

    @mutator
    def set_xyz(self, x: float, y: float, z: float) -> "Vector3":
        self.x = x
        self.y = y
        self.z = z
        return self

    @mutator
    def set(self, v: "Vector3") -> "Vector3":
        return self.set_xyz(v.x, v.y, v.z)

    @mutator
    def add(self, v: "Vector3") -> "Vector3":
        return self.set_xyz(self.x + v.x, self.y + v.y, self.z + v.z)

    @mutator
    def subtract(self, v: "Vector3") -> "Vector3":
        return self.set_xyz(self.x - v.x, self.y - v.y, self.z - v.z)

    @mutator
    def multiply_scalar(self, scalar: float) -> "Vector3":
        return self.set_xyz(self.x * scalar, self.y * scalar, self.z * scalar)

    @mutator
    def negate(self) -> "Vector3":
        return self.set_xyz(-self.x, -self.y, -self.z)

    @mutator
    def normalize(self) -> "Vector3":
        return self.set(self.normalized())

    def to_numpy(self, dtype=None):
        return np.array([self.x, self.y, self.z], dtype=dtype or np.float64)

    def to_state_object(self):
        return {"x": self.x, "y": self.y, "z": self.z}

    @classmethod
    def from_numpy(cls, array):
        x, y, z = np.asarray(array, dtype=np.float64).ravel()
        return cls(float(x), float(y), float(z))

    @classmethod
    def from_state_object(cls, state):
        return cls(state["x"], state["y"], state["z"])

    @staticmethod
    def slerp(start: "Vector3", end: "Vector3", ratio: float) -> "Vector3":
        """Spherical linear interpolation between two unit vectors."""
        dot = clamp(start.dot(end), -1, 1)
        theta = acos(dot) * ratio
        if theta == 0:
            return start.copy()
        relative = end.minus(start.times_scalar(dot))
        if relative.magnitude == 0:
            # Antiparallel inputs have no unique great circle
            raise ValueError("Cannot slerp between opposite vectors")
        relative = relative.normalized()
        return start.times_scalar(cos(theta)).plus(relative.times_scalar(sin(theta)))


Vector3.ZERO = Vector3(0, 0, 0).make_immutable()
Vector3.X_UNIT = Vector3(1, 0, 0).make_immutable()
Vector3.Y_UNIT = Vector3(0, 1, 0).make_immutable()
Vector3.Z_UNIT = Vector3(0, 0, 1).make_immutable()
