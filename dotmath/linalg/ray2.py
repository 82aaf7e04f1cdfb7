from .vector2 import Vector2


__all__ = ["Ray2"]


class Ray2:
    """A 2D half-line from ``position`` along ``direction``.

    The direction is usually a unit vector, so that distances along the ray
    are euclidean distances, but this is not enforced.
    """

    __slots__ = ("position", "direction")

    def __init__(self, position: Vector2, direction: Vector2) -> None:
        self.position = position
        self.direction = direction

    def __repr__(self) -> str:
        return f"Ray2({self.position!r}, {self.direction!r})"

    def __str__(self) -> str:
        return f"{self.position} => {self.direction}"

    def shifted(self, distance: float) -> "Ray2":
        """Get a ray with the same direction, starting ``distance`` further along."""
        return Ray2(self.point_at_distance(distance), self.direction)

    def point_at_distance(self, distance: float) -> Vector2:
        return self.position.plus(self.direction.times_scalar(distance))
