from math import isfinite, sqrt

import numpy as np

from .utils import MACHINE_EPSILON, Freezable, mutator
from .vector3 import Vector3


__all__ = ["Vector4"]


class Vector4(Freezable):
    """A 4D (homogeneous) vector."""

    __slots__ = ("x", "y", "z", "w", "_frozen")

    def __init__(self, x: float = 0, y: float = 0, z: float = 0, w: float = 0) -> None:
        self.x = x
        self.y = y
        self.z = z
        self.w = w

    def __repr__(self) -> str:
        return f"Vector4({self.x}, {self.y}, {self.z}, {self.w})"

    def __eq__(self, other):
        if not isinstance(other, Vector4):
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
        return self.dot(self)

    def dot(self, v: "Vector4") -> float:
        return self.x * v.x + self.y * v.y + self.z * v.z + self.w * v.w

    def equals(self, v: "Vector4") -> bool:
        return self.x == v.x and self.y == v.y and self.z == v.z and self.w == v.w

    def equals_epsilon(self, v: "Vector4", epsilon: float = MACHINE_EPSILON) -> bool:
        return (
            abs(self.x - v.x) <= epsilon
            and abs(self.y - v.y) <= epsilon
            and abs(self.z - v.z) <= epsilon
            and abs(self.w - v.w) <= epsilon
        )

    def is_finite(self) -> bool:
        return all(isfinite(c) for c in (self.x, self.y, self.z, self.w))

    def copy(self) -> "Vector4":
        return Vector4(self.x, self.y, self.z, self.w)

    def normalized(self) -> "Vector4":
        mag = self.magnitude
        if mag == 0:
            raise ValueError("Cannot normalize a zero-magnitude vector")
        return self.times_scalar(1 / mag)

    def times_scalar(self, scalar: float) -> "Vector4":
        return Vector4(self.x * scalar, self.y * scalar, self.z * scalar, self.w * scalar)

    def plus(self, v: "Vector4") -> "Vector4":
        return Vector4(self.x + v.x, self.y + v.y, self.z + v.z, self.w + v.w)

    def minus(self, v: "Vector4") -> "Vector4":
        return Vector4(self.x - v.x, self.y - v.y, self.z - v.z, self.w - v.w)

    def negated(self) -> "Vector4":
        return Vector4(-self.x, -self.y, -self.z, -self.w)

    def to_vector3(self) -> Vector3:
        """Drop the w component (no perspective divide)."""
        return Vector3(self.x, self.y, self.z)

    @mutator
    def set_xyzw(self, x: float, y: float, z: float, w: float) -> "Vector4":
        self.x = x
        self.y = y
        self.z = z
        self.w = w
        return self

    @mutator
    def set(self, v: "Vector4") -> "Vector4":
        return self.set_xyzw(v.x, v.y, v.z, v.w)

    @mutator
    def add(self, v: "Vector4") -> "Vector4":
        return self.set_xyzw(self.x + v.x, self.y + v.y, self.z + v.z, self.w + v.w)

    @mutator
    def multiply_scalar(self, scalar: float) -> "Vector4":
        return self.set_xyzw(
            self.x * scalar, self.y * scalar, self.z * scalar, self.w * scalar
        )

    def to_numpy(self, dtype=None):
        return np.array([self.x, self.y, self.z, self.w], dtype=dtype or np.float64)

    def to_state_object(self):
        return {"x": self.x, "y": self.y, "z": self.z, "w": self.w}

    @classmethod
    def from_numpy(cls, array):
        x, y, z, w = np.asarray(array, dtype=np.float64).ravel()
        return cls(float(x), float(y), float(z), float(w))

    @classmethod
    def from_state_object(cls, state):
        return cls(state["x"], state["y"], state["z"], state["w"])

    @classmethod
    def from_vector3(cls, v: Vector3, w: float = 1) -> "Vector4":
        return cls(v.x, v.y, v.z, w)


Vector4.ZERO = Vector4(0, 0, 0, 0).make_immutable()
