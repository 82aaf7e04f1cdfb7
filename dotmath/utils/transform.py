from __future__ import annotations

from collections import defaultdict

import numpy as np
import pylinalg as la

from . import assert_type, logger
from .enums import MatrixType
from ..linalg import Matrix3, Matrix4, Ray2, Ray3, Vector2, Vector3
from ..linalg.utils import transform


class TransformEvent:
    """Event emitted by a transform when its matrix changes.

    Parameters
    ----------
    type : str
        The name of the event, always ``"change"``.
    target : Transform3 | Transform4
        The transform that changed.
    matrix : Matrix3 | Matrix4
        The new primary matrix of the target. Treat it as read-only.

    """

    __slots__ = ("type", "target", "matrix")

    def __init__(self, type: str, target, matrix) -> None:
        self.type = type
        self.target = target
        self.matrix = matrix

    def __repr__(self) -> str:
        return f"<TransformEvent '{self.type}' from {self.target!r}>"


class TransformBase:
    """Base class for the transform wrappers.

    A transform owns a primary matrix and three derived matrices: the
    inverse, the transpose and the inverse-transpose. Each derived matrix has
    a validity flag. Every change of the primary matrix clears all flags and
    emits a ``"change"`` event. A derived matrix is only (re)computed when it
    is requested while its flag is cleared.

    Parameters
    ----------
    matrix : Matrix3 | Matrix4
        The initial matrix, copied into the transform. Defaults to the
        identity.

    Notes
    -----
    The getters return the owned matrices themselves, so that repeated calls
    return the identical object. Callers must not modify them; use
    ``set_matrix``, ``prepend`` or ``append`` instead, or call
    ``invalidate()`` after changing the primary matrix in place.

    """

    __slots__ = (
        "_matrix",
        "_inverse",
        "_transposed",
        "_inverse_transposed",
        "_valid",
        "_event_handlers",
    )

    _matrix_class = None

    def __init__(self, matrix=None) -> None:
        cls = self._matrix_class
        self._matrix = cls()
        self._inverse = cls()
        self._transposed = cls()
        self._inverse_transposed = cls()
        self._valid = set()
        self._event_handlers = defaultdict(set)
        if matrix is not None:
            self.set_matrix(matrix)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self._matrix.type.name} at {hex(id(self))}>"

    def _check_matrix(self, matrix):
        assert_type("matrix", matrix, self._matrix_class)
        if not matrix.is_finite():
            raise ValueError(f"Transform matrix must be finite, got:\n{matrix}")

    def _changed(self):
        self._valid.clear()
        event = TransformEvent("change", self, self._matrix)
        for callback in list(self._event_handlers["change"]):
            callback(event)

    # %% Changing the matrix

    def set_matrix(self, matrix) -> None:
        """Copy the given matrix into this transform."""
        self._check_matrix(matrix)
        self._matrix.set(matrix)
        self._changed()

    def prepend(self, matrix) -> None:
        """Set the matrix to ``matrix * self.matrix``.

        The given transform is applied after the current one.
        """
        self._check_matrix(matrix)
        self._matrix.set(matrix.times_matrix(self._matrix))
        self._changed()

    def append(self, matrix) -> None:
        """Set the matrix to ``self.matrix * matrix``.

        The given transform is applied before the current one.
        """
        self._check_matrix(matrix)
        self._matrix.multiply_matrix(matrix)
        self._changed()

    def prepend_transform(self, transform: TransformBase) -> None:
        self.prepend(transform.get_matrix())

    def append_transform(self, transform: TransformBase) -> None:
        self.append(transform.get_matrix())

    def invalidate(self) -> None:
        """Signal that the primary matrix was changed in place."""
        self._changed()

    # %% Matrices

    def get_matrix(self):
        return self._matrix

    def get_inverse(self):
        if "inverse" not in self._valid:
            logger.debug("Computing inverse of %r", self)
            self._inverse.set(self._matrix).invert()
            self._valid.add("inverse")
        return self._inverse

    def get_matrix_transposed(self):
        if "transposed" not in self._valid:
            self._transposed.set(self._matrix).transpose()
            self._valid.add("transposed")
        return self._transposed

    def get_inverse_transposed(self):
        if "inverse_transposed" not in self._valid:
            self._inverse_transposed.set(self.get_inverse()).transpose()
            self._valid.add("inverse_transposed")
        return self._inverse_transposed

    @property
    def matrix(self):
        """The primary matrix (read-only)."""
        return self.get_matrix()

    @property
    def inverse(self):
        """The inverse of the primary matrix (read-only)."""
        return self.get_inverse()

    @property
    def matrix_transposed(self):
        """The transpose of the primary matrix (read-only)."""
        return self.get_matrix_transposed()

    @property
    def inverse_transposed(self):
        """The transpose of the inverse, used to transform normals (read-only)."""
        return self.get_inverse_transposed()

    def is_identity(self) -> bool:
        return self._matrix.type == MatrixType.IDENTITY

    def is_finite(self) -> bool:
        return self._matrix.is_finite()

    def copy(self):
        """Get a new transform with a copy of the matrix (without event handlers)."""
        return self.__class__(self._matrix)

    # %% Events

    def add_event_handler(self, *args):
        """Register an event handler.

        Arguments:
            callback (callable): The event handler. Must accept a
                single event argument.
            *types (list of strings): A list of event types. Transforms emit
                ``"change"`` events.

        Can also be used as a decorator.

        Example:

        .. code-block:: py

            def my_handler(event):
                print(event.matrix)

            transform.add_event_handler(my_handler, "change")

        Decorator usage example:

        .. code-block:: py

            @transform.add_event_handler("change")
            def my_handler(event):
                print(event.matrix)
        """

        decorating = not callable(args[0])
        callback = None if decorating else args[0]
        types = args if decorating else args[1:]

        if not types:
            raise ValueError("No types registered for callback")
        if not all(isinstance(t, str) for t in types):
            raise TypeError("All types must be string.")

        def decorator(_callback):
            for type in types:
                self._event_handlers[type].add(_callback)
            return _callback

        if decorating:
            return decorator
        return decorator(callback)

    def remove_event_handler(self, callback, *types):
        """Unregister an event handler.

        Arguments:
            callback (callable): The event handler.
            *types (list of strings): A list of event types.
        """
        for type in types:
            self._event_handlers[type].remove(callback)


class Transform3(TransformBase):
    """A 2D homogeneous transform backed by a :class:`Matrix3`."""

    __slots__ = ()

    _matrix_class = Matrix3

    def prepend_translation(self, x: float, y: float) -> None:
        """Apply a translation after the current transform."""
        if not (np.isfinite(x) and np.isfinite(y)):
            raise ValueError(f"Translation must be finite, got ({x}, {y})")
        self._matrix.prepend_translation(x, y)
        self._changed()

    # %% Forward

    def transform_position2(self, v: Vector2) -> Vector2:
        return self._matrix.times_vector2(v)

    def transform_delta2(self, v: Vector2) -> Vector2:
        """Transform a difference of positions, ignoring the translation."""
        return self._matrix.times_relative_vector2(v)

    def transform_normal2(self, v: Vector2) -> Vector2:
        """Transform a normal, such that it stays perpendicular to transformed deltas."""
        return self.get_inverse_transposed().times_relative_vector2(v)

    def transform_x(self, x: float) -> float:
        """Transform an x coordinate, for transforms that don't mix the axes."""
        matrix = self._matrix
        if matrix.m01():
            raise ValueError("Transforming an x value with a rotation or shear is ill-defined")
        return matrix.m00() * x + matrix.m02()

    def transform_y(self, y: float) -> float:
        """Transform a y coordinate, for transforms that don't mix the axes."""
        matrix = self._matrix
        if matrix.m10():
            raise ValueError("Transforming a y value with a rotation or shear is ill-defined")
        return matrix.m11() * y + matrix.m12()

    def transform_delta_x(self, x: float) -> float:
        return self.transform_delta2(Vector2(x, 0)).x

    def transform_delta_y(self, y: float) -> float:
        return self.transform_delta2(Vector2(0, y)).y

    def transform_ray2(self, ray: Ray2) -> Ray2:
        """Transform a ray; the direction of the result is normalized."""
        return Ray2(
            self.transform_position2(ray.position),
            self.transform_delta2(ray.direction).normalized(),
        )

    # %% Inverse

    def inverse_position2(self, v: Vector2) -> Vector2:
        return self.get_inverse().times_vector2(v)

    def inverse_delta2(self, v: Vector2) -> Vector2:
        return self.inverse_position2(v).minus(self.inverse_position2(Vector2.ZERO))

    def inverse_normal2(self, v: Vector2) -> Vector2:
        return self._matrix.times_transpose_vector2(v)

    def inverse_x(self, x: float) -> float:
        inverse = self.get_inverse()
        if inverse.m01():
            raise ValueError("Inverting an x value with a rotation or shear is ill-defined")
        return inverse.m00() * x + inverse.m02()

    def inverse_y(self, y: float) -> float:
        inverse = self.get_inverse()
        if inverse.m10():
            raise ValueError("Inverting a y value with a rotation or shear is ill-defined")
        return inverse.m11() * y + inverse.m12()

    def inverse_delta_x(self, x: float) -> float:
        return self.inverse_delta2(Vector2(x, 0)).x

    def inverse_delta_y(self, y: float) -> float:
        return self.inverse_delta2(Vector2(0, y)).y

    def inverse_ray2(self, ray: Ray2) -> Ray2:
        return Ray2(
            self.inverse_position2(ray.position),
            self.inverse_delta2(ray.direction).normalized(),
        )


class Transform4(TransformBase):
    """A 3D homogeneous transform backed by a :class:`Matrix4`."""

    __slots__ = ()

    _matrix_class = Matrix4

    # %% Forward

    def transform_position3(self, v: Vector3) -> Vector3:
        return self._matrix.times_vector3(v)

    def transform_delta3(self, v: Vector3) -> Vector3:
        """Transform a difference of positions, ignoring the translation."""
        return self._matrix.times_relative_vector3(v)

    def transform_normal3(self, v: Vector3) -> Vector3:
        """Transform a normal, such that it stays perpendicular to transformed deltas."""
        return self.get_inverse_transposed().times_relative_vector3(v)

    def transform_delta_x(self, x: float) -> float:
        return self.transform_delta3(Vector3(x, 0, 0)).x

    def transform_delta_y(self, y: float) -> float:
        return self.transform_delta3(Vector3(0, y, 0)).y

    def transform_delta_z(self, z: float) -> float:
        return self.transform_delta3(Vector3(0, 0, z)).z

    def transform_ray(self, ray: Ray3) -> Ray3:
        """Transform a ray via two of its points.

        The direction of the result is not normalized, so distances along
        the ray map to distances along the transformed ray.
        """
        position = self.transform_position3(ray.position)
        return Ray3(
            position,
            self.transform_position3(ray.position.plus(ray.direction)).minus(position),
        )

    def transform_positions(self, positions) -> np.ndarray:
        """Transform an array of positions with shape (..., 3).

        Unlike ``transform_position3`` this divides by the resulting w, so
        projections are applied as well.
        """
        return la.vec_transform(np.asarray(positions, dtype=float), self._matrix.to_numpy())

    def transform_deltas(self, deltas) -> np.ndarray:
        """Transform an array of deltas with shape (..., 3), ignoring translation."""
        return transform(deltas, self._matrix.to_numpy(), directions=True)

    # %% Inverse

    def inverse_position3(self, v: Vector3) -> Vector3:
        return self.get_inverse().times_vector3(v)

    def inverse_delta3(self, v: Vector3) -> Vector3:
        return self.inverse_position3(v).minus(self.inverse_position3(Vector3.ZERO))

    def inverse_normal3(self, v: Vector3) -> Vector3:
        return self._matrix.times_transpose_vector3(v)

    def inverse_delta_x(self, x: float) -> float:
        return self.inverse_delta3(Vector3(x, 0, 0)).x

    def inverse_delta_y(self, y: float) -> float:
        return self.inverse_delta3(Vector3(0, y, 0)).y

    def inverse_delta_z(self, z: float) -> float:
        return self.inverse_delta3(Vector3(0, 0, z)).z

    def inverse_ray(self, ray: Ray3) -> Ray3:
        position = self.inverse_position3(ray.position)
        return Ray3(
            position,
            self.inverse_position3(ray.position.plus(ray.direction)).minus(position),
        )

    def inverse_positions(self, positions) -> np.ndarray:
        return la.vec_transform(
            np.asarray(positions, dtype=float), self.get_inverse().to_numpy()
        )
