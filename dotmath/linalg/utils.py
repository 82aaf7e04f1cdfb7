import functools
from math import cos, sin

import numpy as np


__all__ = ["MACHINE_EPSILON", "clamp", "cos_sin", "transform"]


MACHINE_EPSILON = (
    7.0 / 3 - 4.0 / 3 - 1
)  # the difference between 1 and the smallest floating point number greater than 1

# Cosine and sine values smaller than this are considered zero
TRIG_SNAP = 1e-15


def clamp(x: float, left: float, right: float) -> float:
    return max(left, min(right, x))


def cos_sin(angle: float):
    """Get (cos, sin) of an angle, snapping near-zero values to exactly zero.

    This makes quarter turns produce exact matrices.
    """
    c = cos(angle)
    s = sin(angle)
    if abs(c) < TRIG_SNAP:
        c = 0.0
    if abs(s) < TRIG_SNAP:
        s = 0.0
    return c, s


def transform(vectors, matrix, directions=False):
    """Applies an affine transform to an array of vectors, entry-wise.

    The matrix is a row-major numpy array with one more row and column than
    the vectors have components. If directions is True the translation
    components of the transform are ignored.
    """
    vectors = np.asarray(vectors, dtype=np.float64)
    shape = np.array(vectors.shape)
    shape[-1] += 1
    vectors_h = np.empty(shape, dtype=vectors.dtype)
    vectors_h[..., :-1] = vectors
    vectors_h[..., -1] = 0 if directions else 1
    matrix = np.asarray(matrix, dtype=vectors_h.dtype)
    return np.dot(vectors_h, matrix.T)[..., :-1]


class Freezable:
    """Mixin for value types that can be made immutable.

    Once ``make_immutable()`` has been called, attribute assignment and every
    method wrapped with ``mutator`` raise a TypeError.
    """

    __slots__ = ()

    def __setattr__(self, name, value):
        if self.is_immutable():
            raise TypeError(f"Cannot modify immutable {type(self).__name__} ({name})")
        object.__setattr__(self, name, value)

    def is_immutable(self) -> bool:
        return getattr(self, "_frozen", False)

    def make_immutable(self):
        object.__setattr__(self, "_frozen", True)
        return self


def mutator(method):
    """Decorate a method that changes its instance in place."""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        if self.is_immutable():
            raise TypeError(
                f"Cannot modify immutable {type(self).__name__} ({method.__name__})"
            )
        return method(self, *args, **kwargs)

    return wrapper
