from math import acos, atan2, cos, isfinite, sin, sqrt

import numpy as np

from .utils import MACHINE_EPSILON, Freezable, clamp, mutator


__all__ = ["Vector2"]


class Vector2(Freezable):
    """A 2D vector with x and y components.

    Methods with a past-tense or noun name (``normalized``, ``plus``) return
    a new vector, imperative ones (``normalize``, ``add``) change this
    vector in place and return it.
    """

    __slots__ = ("x", "y", "_frozen")

    def __init__(self, x: float = 0, y: float = 0) -> None:
        self.x = x
        self.y = y

    def __repr__(self) -> str:
        return f"Vector2({self.x}, {self.y})"

    def __eq__(self, other):
        if not isinstance(other, Vector2):
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
        return self.x * self.x + self.y * self.y

    @property
    def angle(self) -> float:
        """The angle of this vector relative to the positive x axis, in radians."""
        return atan2(self.y, self.x)

    def distance(self, v: "Vector2") -> float:
        return sqrt(self.distance_squared(v))

    def distance_squared(self, v: "Vector2") -> float:
        dx = self.x - v.x
        dy = self.y - v.y
        return dx * dx + dy * dy

    def dot(self, v: "Vector2") -> float:
        return self.x * v.x + self.y * v.y

    def cross(self, v: "Vector2") -> float:
        """The z component of the 3D cross product of both vectors."""
        return self.x * v.y - self.y * v.x

    def angle_between(self, v: "Vector2") -> float:
        this_magnitude = self.magnitude
        v_magnitude = v.magnitude
        return acos(clamp(self.dot(v) / (this_magnitude * v_magnitude), -1, 1))

    def equals(self, v: "Vector2") -> bool:
        return self.x == v.x and self.y == v.y

    def equals_epsilon(self, v: "Vector2", epsilon: float = MACHINE_EPSILON) -> bool:
        return max(abs(self.x - v.x), abs(self.y - v.y)) <= epsilon

    def is_finite(self) -> bool:
        return isfinite(self.x) and isfinite(self.y)

    def copy(self) -> "Vector2":
        return Vector2(self.x, self.y)

    def normalized(self) -> "Vector2":
        mag = self.magnitude
        if mag == 0:
            raise ValueError("Cannot normalize a zero-magnitude vector")
        return Vector2(self.x / mag, self.y / mag)

    def with_magnitude(self, magnitude: float) -> "Vector2":
        return self.normalized().times_scalar(magnitude)

    def times_scalar(self, scalar: float) -> "Vector2":
        return Vector2(self.x * scalar, self.y * scalar)

    def component_times(self, v: "Vector2") -> "Vector2":
        return Vector2(self.x * v.x, self.y * v.y)

    def plus(self, v: "Vector2") -> "Vector2":
        return Vector2(self.x + v.x, self.y + v.y)

    def minus(self, v: "Vector2") -> "Vector2":
        return Vector2(self.x - v.x, self.y - v.y)

    def divided_scalar(self, scalar: float) -> "Vector2":
        return Vector2(self.x / scalar, self.y / scalar)

    def negated(self) -> "Vector2":
        return Vector2(-self.x, -self.y)

    def perpendicular(self) -> "Vector2":
        """This vector rotated by a quarter turn counter-clockwise."""
        return Vector2(-self.y, self.x)

    def rotated(self, angle: float) -> "Vector2":
        c = cos(angle)
        s = sin(angle)
        return Vector2(c * self.x - s * self.y, s * self.x + c * self.y)

    def blend(self, v: "Vector2", ratio: float) -> "Vector2":
        return Vector2(self.x + (v.x - self.x) * ratio, self.y + (v.y - self.y) * ratio)

    def average(self, v: "Vector2") -> "Vector2":
        return self.blend(v, 0.5)

    def to_vector3(self):
        from .vector3 import Vector3

        return Vector3(self.x, self.y, 0)

    @mutator
    def set_xy(self, x: float, y: float) -> "Vector2":
        self.x = x
        self.y = y
        return self

    @mutator
    def set(self, v: "Vector2") -> "Vector2":
        return self.set_xy(v.x, v.y)

    @mutator
    def add(self, v: "Vector2") -> "Vector2":
        return self.set_xy(self.x + v.x, self.y + v.y)

    @mutator
    def subtract(self, v: "Vector2") -> "Vector2":
        return self.set_xy(self.x - v.x, self.y - v.y)

    @mutator
    def multiply_scalar(self, scalar: float) -> "Vector2":
        return self.set_xy(self.x * scalar, self.y * scalar)

    @mutator
    def negate(self) -> "Vector2":
        return self.set_xy(-self.x, -self.y)

    @mutator
    def normalize(self) -> "Vector2":
        return self.set(self.normalized())

    @mutator
    def rotate(self, angle: float) -> "Vector2":
        return self.set(self.rotated(angle))

    def to_numpy(self, dtype=None):
        return np.array([self.x, self.y], dtype=dtype or np.float64)

    def to_state_object(self):
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_numpy(cls, array):
        x, y = np.asarray(array, dtype=np.float64).ravel()
        return cls(float(x), float(y))

    @classmethod
    def from_state_object(cls, state):
        return cls(state["x"], state["y"])

    @classmethod
    def from_polar(cls, magnitude: float, angle: float) -> "Vector2":
        return cls(magnitude * cos(angle), magnitude * sin(angle))


Vector2.ZERO = Vector2(0, 0).make_immutable()
Vector2.X_UNIT = Vector2(1, 0).make_immutable()
Vector2.Y_UNIT = Vector2(0, 1).make_immutable()
