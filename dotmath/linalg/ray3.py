from .vector3 import Vector3


__all__ = ["Ray3"]


class Ray3:
    """A 3D half-line from ``position`` along ``direction``.

    The direction is usually a unit vector, so that distances along the ray
    are euclidean distances, but this is not enforced: a ray passed through
    a scaling transform keeps its parametrization.
    """

    __slots__ = ("position", "direction")

    def __init__(self, position: Vector3, direction: Vector3) -> None:
        self.position = position
        self.direction = direction

    def __repr__(self) -> str:
        return f"Ray3({self.position!r}, {self.direction!r})"

    def __str__(self) -> str:
        return f"{self.position} => {self.direction}"

    def shifted(self, distance: float) -> "Ray3":
        """Get a ray with the same direction, starting ``distance`` further along."""
        return Ray3(self.point_at_distance(distance), self.direction)

    def point_at_distance(self, distance: float) -> Vector3:
        return self.position.plus(self.direction.times_scalar(distance))

    def distance_to_plane(self, plane) -> float:
        """The (signed) distance along the ray at which it hits the plane.

        The result is infinite or NaN when the ray is parallel to the plane.
        """
        denominator = self.direction.dot(plane.normal)
        numerator = plane.distance - self.position.dot(plane.normal)
        if denominator == 0:
            return float("nan") if numerator == 0 else float("inf")
        return numerator / denominator
